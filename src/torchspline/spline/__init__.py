"""Parametric interpolation curves for PyTorch tensors.

Every family is built from control points of shape (n, d) and answers the
same queries over its parameter domain ``[0, max_t]``.

Spline Families
---------------
uniform_cubic_b_spline
    Uniform cubic B-spline (approximating, C2).
uniform_cr_spline
    Uniform Catmull-Rom spline (interpolating, C1).
generic_b_spline
    B-spline of arbitrary degree evaluated with de Boor's algorithm.
cubic_hermite_spline
    Catmull-Rom style Hermite spline with alpha parametrization, open or
    looping (C1).
quintic_hermite_spline
    Hermite spline matching tangents and accelerations (C2).
natural_spline
    Interpolating cubic spline from a tridiagonal solve (C2) with natural,
    not-a-knot or periodic boundary.

Queries
-------
spline_position
    Position at parameter values.
spline_tangent
    Position and first derivative.
spline_curvature
    Position, first and second derivative.
spline_wiggle
    Position and first three derivatives.
spline_t
    Knot value of a control point.
spline_max_t
    End of the parameter domain.
spline_original_points
    Control points the spline was built from.
spline_segment_for_t
    Segment index for parameter values.

Arc Length
----------
spline_arc_length
    Arc length between two parameter values.
spline_total_length
    Arc length of the whole curve.
spline_segment_lengths
    Arc length of each segment.
spline_solve_length
    Parameter reached after travelling a given arc length.
spline_closest_t
    Parameter of the curve point nearest to a query point.

Exceptions
----------
SplineError
    Base exception for spline operations.
ExtrapolationError
    Query point outside spline domain.
KnotError
    Too few or coincident control points.
DegreeError
    Invalid degree for the given control points.
SplineWarning
    Construction fell back to a simpler boundary condition.
"""

from ._analysis import (
    integrate_speed,
    spline_arc_length,
    spline_closest_t,
    spline_segment_lengths,
    spline_solve_length,
    spline_total_length,
)
from ._basis_matrix import (
    UniformCRSpline,
    UniformCubicBSpline,
    uniform_cr_spline,
    uniform_cubic_b_spline,
)
from ._cubic_hermite_spline import CubicHermiteSpline, cubic_hermite_spline
from ._degree_error import DegreeError
from ._extrapolation_error import ExtrapolationError
from ._generic_b_spline import GenericBSpline, generic_b_spline
from ._knot_error import KnotError
from ._knots import compute_knots
from ._natural_spline import NaturalSpline, natural_spline
from ._quintic_hermite_spline import QuinticHermiteSpline, quintic_hermite_spline
from ._solve_tridiagonal import solve_cyclic_tridiagonal, solve_tridiagonal
from ._spline import (
    Spline,
    SplineCurvature,
    SplineTangent,
    SplineWiggle,
    spline_curvature,
    spline_max_t,
    spline_original_points,
    spline_position,
    spline_segment_for_t,
    spline_t,
    spline_tangent,
    spline_wiggle,
)
from ._spline_error import SplineError, SplineWarning

__all__ = [
    # Families
    "CubicHermiteSpline",
    "GenericBSpline",
    "NaturalSpline",
    "QuinticHermiteSpline",
    "Spline",
    "UniformCRSpline",
    "UniformCubicBSpline",
    "cubic_hermite_spline",
    "generic_b_spline",
    "natural_spline",
    "quintic_hermite_spline",
    "uniform_cr_spline",
    "uniform_cubic_b_spline",
    # Queries
    "SplineCurvature",
    "SplineTangent",
    "SplineWiggle",
    "spline_curvature",
    "spline_max_t",
    "spline_original_points",
    "spline_position",
    "spline_segment_for_t",
    "spline_t",
    "spline_tangent",
    "spline_wiggle",
    # Arc length
    "integrate_speed",
    "spline_arc_length",
    "spline_closest_t",
    "spline_segment_lengths",
    "spline_solve_length",
    "spline_total_length",
    # Utilities
    "compute_knots",
    "solve_cyclic_tridiagonal",
    "solve_tridiagonal",
    # Exceptions
    "DegreeError",
    "ExtrapolationError",
    "KnotError",
    "SplineError",
    "SplineWarning",
]
