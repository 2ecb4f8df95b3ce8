"""Quintic Hermite spline with estimated tangents and accelerations."""

from tensordict.tensorclass import tensorclass
from torch import Tensor

from .._hermite_basis import quintic_hermite_coefficients, three_point_derivative
from .._knots import compute_knots
from .._validation import validate_extrapolate, validate_points


@tensorclass
class QuinticHermiteSpline:
    """Quintic Hermite spline through control points.

    Tangents are estimated at ``points[1:-1]`` and accelerations at
    ``points[2:-2]`` from neighbouring samples, so two padding points are
    consumed at each end.

    Attributes
    ----------
    points : Tensor
        Control points, shape (n, d) where n >= 6.
    knots : Tensor
        Knot of each control point, ``knots[2] == 0``, shape (n,).
    segment_knots : Tensor
        Segment boundaries ``knots[2:-2]``, shape (n - 4,).
    coefficients : Tensor
        Power-basis coefficients per segment, shape (n - 5, 6, d).
    alpha : float
        Knot parameterization exponent (0 uniform, 0.5 centripetal,
        1 chordal).
    extrapolate : str
        How to handle out-of-domain queries: "error", "clamp", "extrapolate".

    Notes
    -----
    Position, tangent and acceleration are shared at every interior knot,
    so the curve is C2 continuous.
    """

    points: Tensor
    knots: Tensor
    segment_knots: Tensor
    coefficients: Tensor
    alpha: float
    extrapolate: str


def quintic_hermite_spline(
    points: Tensor,
    alpha: float = 0.0,
    extrapolate: str = "extrapolate",
) -> QuinticHermiteSpline:
    """Create a quintic Hermite spline.

    Parameters
    ----------
    points : Tensor
        Control points, shape (n, d) where n >= 6.
        The spline passes through points[2:-2].
    alpha : float, optional
        Knot parameterization exponent. Default is 0.0 (uniform).
    extrapolate : str, optional
        How to handle out-of-domain queries: "error", "clamp" or
        "extrapolate" (default).

    Returns
    -------
    QuinticHermiteSpline

    Raises
    ------
    KnotError
        If fewer than 6 points are given, or consecutive points coincide
        while alpha > 0.
    """
    points = validate_points(points, 6, "Quintic Hermite spline")
    extrapolate = validate_extrapolate(extrapolate)

    knots = compute_knots(points, alpha, padding=2)
    segment_knots = knots[2:-2]

    # Tangents at points 1..n-2, accelerations at points 2..n-3
    tangents = three_point_derivative(points, knots)
    accelerations = three_point_derivative(tangents, knots[1:-1])
    tangents = tangents[1:-1]

    coefficients = quintic_hermite_coefficients(
        points[2:-3],
        points[3:-2],
        tangents[:-1],
        tangents[1:],
        accelerations[:-1],
        accelerations[1:],
        segment_knots[1:] - segment_knots[:-1],
    )

    return QuinticHermiteSpline(
        points=points,
        knots=knots,
        segment_knots=segment_knots,
        coefficients=coefficients,
        alpha=alpha,
        extrapolate=extrapolate,
        batch_size=[],
    )
