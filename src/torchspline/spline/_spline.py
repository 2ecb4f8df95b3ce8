"""Query operations shared by every spline family."""

from typing import NamedTuple, Union

import torch
from torch import Tensor

from ._basis_matrix import UniformCRSpline, UniformCubicBSpline
from ._cubic_hermite_spline import CubicHermiteSpline
from ._extrapolation_error import ExtrapolationError
from ._generic_b_spline import GenericBSpline, generic_b_spline_evaluate
from ._natural_spline import NaturalSpline
from ._piecewise_polynomial import find_segment, piecewise_polynomial_evaluate
from ._quintic_hermite_spline import QuinticHermiteSpline

Spline = Union[
    UniformCubicBSpline,
    UniformCRSpline,
    GenericBSpline,
    CubicHermiteSpline,
    QuinticHermiteSpline,
    NaturalSpline,
]


class SplineTangent(NamedTuple):
    """Position and first derivative, each shape (*query_shape, d)."""

    position: Tensor
    tangent: Tensor


class SplineCurvature(NamedTuple):
    """Position with first and second derivatives."""

    position: Tensor
    tangent: Tensor
    curvature: Tensor


class SplineWiggle(NamedTuple):
    """Position with first, second and third derivatives."""

    position: Tensor
    tangent: Tensor
    curvature: Tensor
    wiggle: Tensor


def _polynomial_evaluate(spline: Spline, t: Tensor, order: int) -> list[Tensor]:
    return piecewise_polynomial_evaluate(
        spline.segment_knots, spline.coefficients, t, order
    )


_EVALUATORS = {
    UniformCubicBSpline: _polynomial_evaluate,
    UniformCRSpline: _polynomial_evaluate,
    CubicHermiteSpline: _polynomial_evaluate,
    QuinticHermiteSpline: _polynomial_evaluate,
    NaturalSpline: _polynomial_evaluate,
    GenericBSpline: generic_b_spline_evaluate,
}


def _evaluate(spline: Spline, t, order: int) -> list[Tensor]:
    """Apply the spline's domain policy to t and evaluate up to ``order``."""
    try:
        evaluator = _EVALUATORS[type(spline)]
    except KeyError:
        raise TypeError(
            f"Unsupported spline type: {type(spline).__name__}"
        ) from None

    points = spline.points
    t = torch.as_tensor(t, dtype=points.dtype, device=points.device)

    query_shape = t.shape
    t_flat = t.reshape(-1)

    segment_knots = spline.segment_knots
    t_min = segment_knots[0]
    t_max = segment_knots[-1]

    extrapolate = spline.extrapolate
    if extrapolate == "error":
        if torch.any(t_flat < t_min) or torch.any(t_flat > t_max):
            raise ExtrapolationError(
                f"Parameter values outside [{t_min.item()}, {t_max.item()}]. "
                "Use extrapolate='clamp' or 'extrapolate'."
            )
    elif extrapolate == "clamp":
        t_flat = torch.clamp(t_flat, t_min, t_max)
    elif extrapolate == "periodic":
        outside = (t_flat < t_min) | (t_flat > t_max)
        wrapped = t_min + torch.remainder(t_flat - t_min, t_max - t_min)
        t_flat = torch.where(outside, wrapped, t_flat)

    results = evaluator(spline, t_flat, order)

    return [r.reshape(*query_shape, points.shape[-1]) for r in results]


def spline_position(spline: Spline, t) -> Tensor:
    """
    Evaluate the position of a spline.

    Parameters
    ----------
    spline : Spline
        Any spline family.
    t : float or Tensor
        Parameter values, shape (*query_shape). Valid range is
        ``[0, spline_max_t(spline)]``; values outside are handled by the
        spline's ``extrapolate`` mode.

    Returns
    -------
    Tensor
        Positions, shape (*query_shape, d).

    Raises
    ------
    ExtrapolationError
        If any parameter is outside the domain and
        ``spline.extrapolate == 'error'``.
    """
    return _evaluate(spline, t, 0)[0]


def spline_tangent(spline: Spline, t) -> SplineTangent:
    """Evaluate position and first derivative. See ``spline_position``."""
    return SplineTangent(*_evaluate(spline, t, 1))


def spline_curvature(spline: Spline, t) -> SplineCurvature:
    """Evaluate position, first and second derivative. See ``spline_position``."""
    return SplineCurvature(*_evaluate(spline, t, 2))


def spline_wiggle(spline: Spline, t) -> SplineWiggle:
    """
    Evaluate position and the first three derivatives.

    All derivatives are analytic derivatives of the segment polynomials (or
    of the de Boor recursion), never finite differences.
    """
    return SplineWiggle(*_evaluate(spline, t, 3))


def spline_t(spline: Spline, index: int) -> Tensor:
    """Knot value of control point ``index`` (negative for padding points)."""
    return spline.knots[index].clone()


def spline_max_t(spline: Spline) -> Tensor:
    """Upper end of the parameter domain ``[0, max_t]``."""
    return spline.segment_knots[-1].clone()


def spline_original_points(spline: Spline) -> Tensor:
    """Control points the spline was built from, padding points included."""
    return spline.points.clone()


def spline_segment_for_t(spline: Spline, t) -> Tensor:
    """
    Index of the segment containing each parameter value.

    Uses binary search over the segment knots. Values at or beyond the last
    knot map to the last segment, values before 0 to the first one.
    """
    segment_knots = spline.segment_knots
    t = torch.as_tensor(t, dtype=segment_knots.dtype, device=segment_knots.device)
    return find_segment(segment_knots, t.reshape(-1)).reshape(t.shape)
