"""Arbitrary-degree uniform B-spline."""

import torch
from tensordict.tensorclass import tensorclass
from torch import Tensor

from .._degree_error import DegreeError
from .._validation import validate_extrapolate, validate_points


@tensorclass
class GenericBSpline:
    """Uniform B-spline of arbitrary degree.

    Attributes
    ----------
    points : Tensor
        Control points, shape (n, d) where n >= degree + 1.
    knots : Tensor
        Parameter associated with each control point,
        ``knots[i] = i - (degree - 1) / 2``, shape (n,).
    segment_knots : Tensor
        Segment boundaries ``0, 1, ..., n - degree``, shape (n - degree + 1,).
    knot_vector : Tensor
        Full uniform knot vector ``u_j = j - degree``, shape (n + degree + 1,).
    degree : int
        Polynomial degree (stored as metadata, not tensor)
    extrapolate : str
        How to handle out-of-domain queries: "error", "clamp", "extrapolate".

    Notes
    -----
    With simple knots the curve is C(degree - 1) continuous, so degree 3 and
    above give continuous curvature. Degree 3 reproduces
    ``UniformCubicBSpline``.
    """

    points: Tensor
    knots: Tensor
    segment_knots: Tensor
    knot_vector: Tensor
    degree: int
    extrapolate: str


def generic_b_spline(
    points: Tensor,
    degree: int = 3,
    extrapolate: str = "extrapolate",
) -> GenericBSpline:
    """Create a uniform B-spline of the given degree.

    Parameters
    ----------
    points : Tensor
        Control points, shape (n, d) where n >= degree + 1.
    degree : int, optional
        Spline degree. Default is 3 (cubic).
    extrapolate : str, optional
        How to handle out-of-domain queries: "error", "clamp" or
        "extrapolate" (default).

    Returns
    -------
    GenericBSpline

    Raises
    ------
    DegreeError
        If degree < 1 or there are fewer than degree + 1 control points.

    Examples
    --------
    >>> points = torch.randn(8, 3)
    >>> spline = generic_b_spline(points, degree=5)
    >>> spline_max_t(spline)
    tensor(3.)
    """
    points = validate_points(points, 1, "Generic B-spline")
    extrapolate = validate_extrapolate(extrapolate)

    n = points.shape[0]

    if degree < 1:
        raise DegreeError(f"Degree must be at least 1, got {degree}")
    if n < degree + 1:
        raise DegreeError(
            f"Degree {degree} B-spline requires at least {degree + 1} "
            f"control points, got {n}"
        )

    knot_vector = (
        torch.arange(n + degree + 1, dtype=points.dtype, device=points.device)
        - degree
    )
    knots = torch.arange(n, dtype=points.dtype, device=points.device) - (
        degree - 1
    ) / 2

    return GenericBSpline(
        points=points,
        knots=knots,
        segment_knots=knot_vector[degree : n + 1],
        knot_vector=knot_vector,
        degree=degree,
        extrapolate=extrapolate,
        batch_size=[],
    )
