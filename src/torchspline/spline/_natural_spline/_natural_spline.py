"""Natural (globally C2) cubic spline through control points."""

import torch
from tensordict.tensorclass import tensorclass
from torch import Tensor

from .._knots import compute_knots
from .._validation import validate_extrapolate, validate_points
from ._natural_spline_fit import (
    natural_spline_coefficients,
    open_second_derivatives,
    periodic_second_derivatives,
    second_difference,
)

BOUNDARY_CONDITIONS = ("natural", "not_a_knot", "periodic")


@tensorclass
class NaturalSpline:
    """Interpolating cubic spline with continuous second derivative.

    Attributes
    ----------
    points : Tensor
        Control points, shape (n, d).
    knots : Tensor
        Knot of each control point, shape (n,).
    segment_knots : Tensor
        Segment boundaries spanning ``[0, max_t]``. For the periodic
        boundary the last value closes the loop back to ``points[0]``.
    coefficients : Tensor
        Power-basis coefficients per segment, shape (n_segments, 4, d).
    alpha : float
        Knot parameterization exponent (0 uniform, 0.5 centripetal,
        1 chordal).
    boundary : str
        Boundary condition type: "natural", "not_a_knot", "periodic".
    include_endpoints : bool
        Whether the first and last points are interpolated.
    extrapolate : str
        Extrapolation mode: "error", "clamp", "extrapolate",
        "periodic" (periodic boundary only).
    """

    points: Tensor
    knots: Tensor
    segment_knots: Tensor
    coefficients: Tensor
    alpha: float
    boundary: str
    include_endpoints: bool
    extrapolate: str


def natural_spline(
    points: Tensor,
    include_endpoints: bool = True,
    alpha: float = 0.0,
    boundary: str = "natural",
    extrapolate: str | None = None,
) -> NaturalSpline:
    """Create a natural spline through control points.

    The second derivatives at the points are found once by solving a
    tridiagonal system (cyclic for the periodic boundary) for every
    coordinate axis at the same time.

    Parameters
    ----------
    points : Tensor
        Control points, shape (n, d).
    include_endpoints : bool, optional
        If True (default), the curve runs from the first to the last point.
        If False, it runs from ``points[1]`` to ``points[-2]`` and the outer
        points fix the end second derivatives of the "natural" boundary.
    alpha : float, optional
        Knot parameterization exponent. Default is 0.0 (uniform).
    boundary : str, optional
        Boundary condition type. One of:

        - ``"natural"``: Zero second derivative at endpoints (default).
        - ``"not_a_knot"``: Third derivative continuity at second and
          second-to-last knots.
        - ``"periodic"``: Closed curve through every point.

    extrapolate : str, optional
        How to handle out-of-domain queries. Defaults to ``"extrapolate"``,
        or ``"periodic"`` for the periodic boundary.

    Returns
    -------
    NaturalSpline

    Raises
    ------
    KnotError
        If there are too few points (2 open, 4 without endpoints,
        3 periodic), or consecutive points coincide while alpha > 0.
    ValueError
        For an unknown boundary, or a periodic boundary without endpoints.

    Warns
    -----
    SplineWarning
        If "not_a_knot" is requested with fewer than 4 interpolated points.
    """
    if boundary not in BOUNDARY_CONDITIONS:
        raise ValueError(f"Unknown boundary condition: {boundary}")

    loop = boundary == "periodic"
    if extrapolate is None:
        extrapolate = "periodic" if loop else "extrapolate"
    extrapolate = validate_extrapolate(extrapolate, loop)

    if loop:
        if not include_endpoints:
            raise ValueError(
                "Periodic boundary interpolates every point; "
                "include_endpoints must be True"
            )
        points = validate_points(points, 3, "Periodic natural spline")

        segment_knots = compute_knots(points, alpha, loop=True)
        m = periodic_second_derivatives(points, segment_knots)

        coefficients = natural_spline_coefficients(
            torch.cat([points, points[:1]], dim=0),
            segment_knots,
            torch.cat([m, m[:1]], dim=0),
        )
        knots = segment_knots[:-1]
    elif include_endpoints:
        points = validate_points(points, 2, "Natural spline")

        knots = compute_knots(points, alpha)
        segment_knots = knots

        m = open_second_derivatives(points, knots, boundary)
        coefficients = natural_spline_coefficients(points, knots, m)
    else:
        points = validate_points(points, 4, "Natural spline without endpoints")

        knots = compute_knots(points, alpha, padding=1)
        segment_knots = knots[1:-1]

        # Only read by the natural boundary, including the not_a_knot fallback
        end_curvature = (
            second_difference(points[:3], knots[:3]),
            second_difference(points[-3:], knots[-3:]),
        )

        m = open_second_derivatives(
            points[1:-1], segment_knots, boundary, end_curvature
        )
        coefficients = natural_spline_coefficients(
            points[1:-1], segment_knots, m
        )

    return NaturalSpline(
        points=points,
        knots=knots,
        segment_knots=segment_knots,
        coefficients=coefficients,
        alpha=alpha,
        boundary=boundary,
        include_endpoints=include_endpoints,
        extrapolate=extrapolate,
        batch_size=[],
    )
