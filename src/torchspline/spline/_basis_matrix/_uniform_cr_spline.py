"""Uniform Catmull-Rom spline built from a fixed basis matrix."""

import torch
from tensordict.tensorclass import tensorclass
from torch import Tensor

from .._piecewise_polynomial import basis_matrix_coefficients
from .._validation import validate_extrapolate, validate_points

_CATMULL_ROM_MATRIX = [
    [0.0, 2.0, 0.0, 0.0],
    [-1.0, 0.0, 1.0, 0.0],
    [2.0, -5.0, 4.0, -1.0],
    [-1.0, 3.0, -3.0, 1.0],
]


@tensorclass
class UniformCRSpline:
    """Uniform Catmull-Rom spline.

    Passes through ``points[1:-1]``; the first and last points only shape
    the end tangents.

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
    The curve is only C1 continuous: curvature jumps at interior knots.
    """

    points: Tensor
    knots: Tensor
    segment_knots: Tensor
    coefficients: Tensor
    extrapolate: str


def uniform_cr_spline(
    points: Tensor,
    extrapolate: str = "extrapolate",
) -> UniformCRSpline:
    """Create a uniform Catmull-Rom spline from control points.

    Parameters
    ----------
    points : Tensor
        Control points, shape (n, d) where n >= 4.
        The spline passes through points[1:-1].
    extrapolate : str, optional
        How to handle out-of-domain queries: "error", "clamp" or
        "extrapolate" (default).

    Returns
    -------
    UniformCRSpline

    Raises
    ------
    KnotError
        If fewer than 4 control points are given.
    """
    points = validate_points(points, 4, "Uniform Catmull-Rom spline")
    extrapolate = validate_extrapolate(extrapolate)

    n = points.shape[0]
    matrix = torch.tensor(_CATMULL_ROM_MATRIX, dtype=points.dtype, device=points.device) / 2

    knots = torch.arange(n, dtype=points.dtype, device=points.device) - 1

    return UniformCRSpline(
        points=points,
        knots=knots,
        segment_knots=knots[1:-1],
        coefficients=basis_matrix_coefficients(points, matrix),
        extrapolate=extrapolate,
        batch_size=[],
    )
