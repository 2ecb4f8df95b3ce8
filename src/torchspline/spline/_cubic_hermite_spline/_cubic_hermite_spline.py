"""Cubic Hermite spline with Catmull-Rom tangents on alpha knots."""

import torch
from tensordict.tensorclass import tensorclass
from torch import Tensor

from .._hermite_basis import cubic_hermite_coefficients, three_point_derivative
from .._knots import compute_knots
from .._validation import validate_extrapolate, validate_points


@tensorclass
class CubicHermiteSpline:
    """Cubic Hermite spline through control points.

    Tangents at the control points are estimated from their neighbours with
    the non-uniform Catmull-Rom formula, using knots spaced by chord length
    raised to ``alpha``.

    Attributes
    ----------
    points : Tensor
        Control points, shape (n, d).
    knots : Tensor
        Knot of each control point, shape (n,). For open curves
        ``knots[1] == 0`` and ``knots[0] < 0``; for loops ``knots[0] == 0``.
    segment_knots : Tensor
        Segment boundaries spanning ``[0, max_t]``. Open: ``knots[1:-1]``.
        Loop: ``n + 1`` values, the last one closing back to ``points[0]``.
    coefficients : Tensor
        Power-basis coefficients per segment, shape (n_segments, 4, d).
    alpha : float
        Parameterization type:
        - 0.0: Uniform (standard Catmull-Rom)
        - 0.5: Centripetal (avoids cusps and self-intersections)
        - 1.0: Chordal (proportional to distance between points)
    loop : bool
        Whether the curve closes back on its first point.
    extrapolate : str
        How to handle out-of-domain queries: "error", "clamp",
        "extrapolate", "periodic" (loops only).

    Notes
    -----
    Positions and tangents are continuous across segments but curvature is
    not: the curve is only C1.
    """

    points: Tensor
    knots: Tensor
    segment_knots: Tensor
    coefficients: Tensor
    alpha: float
    loop: bool
    extrapolate: str


def cubic_hermite_spline(
    points: Tensor,
    alpha: float = 0.0,
    loop: bool = False,
    extrapolate: str | None = None,
) -> CubicHermiteSpline:
    """Create a cubic Hermite (Catmull-Rom style) spline.

    Parameters
    ----------
    points : Tensor
        Control points, shape (n, d). Open curves need n >= 4 and pass
        through points[1:-1]; loops need n >= 3 and pass through every
        point.
    alpha : float, optional
        Knot parameterization exponent. Default is 0.0 (uniform).
    loop : bool, optional
        If True, build a closed curve. Default is False.
    extrapolate : str, optional
        How to handle out-of-domain queries. Defaults to ``"extrapolate"``
        for open curves and ``"periodic"`` for loops.

    Returns
    -------
    CubicHermiteSpline

    Raises
    ------
    KnotError
        If there are too few points, or consecutive points coincide while
        alpha > 0.

    Examples
    --------
    >>> points = torch.tensor([
    ...     [0., 0.], [1., 1.], [2., 0.], [3., 1.], [4., 0.]
    ... ])
    >>> spline = cubic_hermite_spline(points, alpha=0.5)
    >>> spline_tangent(spline, 0.25).tangent
    """
    if extrapolate is None:
        extrapolate = "periodic" if loop else "extrapolate"
    extrapolate = validate_extrapolate(extrapolate, loop)

    if loop:
        points = validate_points(points, 3, "Looping cubic Hermite spline")
        n = points.shape[0]

        segment_knots = compute_knots(points, alpha, loop=True)

        # Wrap one neighbour around each end so every point has two
        wrapped_points = torch.cat([points[-1:], points, points[:1]], dim=0)
        wrapped_knots = torch.cat(
            [segment_knots[n - 1 : n] - segment_knots[n], segment_knots]
        )
        tangents = three_point_derivative(wrapped_points, wrapped_knots)

        coefficients = cubic_hermite_coefficients(
            points,
            torch.roll(points, -1, dims=0),
            tangents,
            torch.roll(tangents, -1, dims=0),
            segment_knots[1:] - segment_knots[:-1],
        )
        knots = segment_knots[:-1]
    else:
        points = validate_points(points, 4, "Cubic Hermite spline")

        knots = compute_knots(points, alpha, padding=1)
        segment_knots = knots[1:-1]

        # Tangents at points 1..n-2
        tangents = three_point_derivative(points, knots)

        coefficients = cubic_hermite_coefficients(
            points[1:-2],
            points[2:-1],
            tangents[:-1],
            tangents[1:],
            segment_knots[1:] - segment_knots[:-1],
        )

    return CubicHermiteSpline(
        points=points,
        knots=knots,
        segment_knots=segment_knots,
        coefficients=coefficients,
        alpha=alpha,
        loop=loop,
        extrapolate=extrapolate,
        batch_size=[],
    )
