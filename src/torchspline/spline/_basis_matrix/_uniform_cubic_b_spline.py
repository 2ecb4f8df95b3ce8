"""Uniform cubic B-spline built from a fixed basis matrix."""

import torch
from tensordict.tensorclass import tensorclass
from torch import Tensor

from .._piecewise_polynomial import basis_matrix_coefficients
from .._validation import validate_extrapolate, validate_points

_B_SPLINE_MATRIX = [
    [1.0, 4.0, 1.0, 0.0],
    [-3.0, 0.0, 3.0, 0.0],
    [3.0, -6.0, 3.0, 0.0],
    [-1.0, 3.0, -3.0, 1.0],
]


@tensorclass
class UniformCubicBSpline:
    """Uniform cubic B-spline.

    Approximates (does not pass through) its control points. Segment ``i``
    blends ``points[i:i+4]`` and spans ``[i, i+1]``.

    Attributes
    ----------
    points : Tensor
        Control points, shape (n, d) where n >= 4.
    knots : Tensor
        Knot of each control point, ``knots[i] = i - 1``, shape (n,).
    segment_knots : Tensor
        Segment boundaries ``0, 1, ..., n - 3``, shape (n - 2,).
    coefficients : Tensor
        Power-basis coefficients per segment, shape (n - 3, 4, d).
    extrapolate : str
        How to handle out-of-domain queries: "error", "clamp", "extrapolate".

    Notes
    -----
    The curve is C2 continuous everywhere.
    """

    points: Tensor
    knots: Tensor
    segment_knots: Tensor
    coefficients: Tensor
    extrapolate: str


def uniform_cubic_b_spline(
    points: Tensor,
    extrapolate: str = "extrapolate",
) -> UniformCubicBSpline:
    """Create a uniform cubic B-spline from control points.

    Parameters
    ----------
    points : Tensor
        Control points, shape (n, d) where n >= 4.
    extrapolate : str, optional
        How to handle out-of-domain queries. One of:

        - ``"error"``: Raise ExtrapolationError.
        - ``"clamp"``: Clamp to boundary values.
        - ``"extrapolate"``: Extend the boundary segments (default).

    Returns
    -------
    UniformCubicBSpline

    Raises
    ------
    KnotError
        If fewer than 4 control points are given.

    Examples
    --------
    >>> points = torch.tensor([[0., 0.], [1., 1.], [2., 0.], [3., 1.]])
    >>> spline = uniform_cubic_b_spline(points)
    >>> spline_position(spline, 0.5)
    """
    points = validate_points(points, 4, "Uniform cubic B-spline")
    extrapolate = validate_extrapolate(extrapolate)

    n = points.shape[0]
    matrix = torch.tensor(_B_SPLINE_MATRIX, dtype=points.dtype, device=points.device) / 6

    knots = torch.arange(n, dtype=points.dtype, device=points.device) - 1

    return UniformCubicBSpline(
        points=points,
        knots=knots,
        segment_knots=knots[1:-1],
        coefficients=basis_matrix_coefficients(points, matrix),
        extrapolate=extrapolate,
        batch_size=[],
    )
