"""Spline arc length computation."""

from __future__ import annotations

import functools

import torch
from torch import Tensor

from ...quadrature import GaussLegendre
from .._spline import Spline, spline_max_t, spline_tangent


@functools.lru_cache(maxsize=None)
def _rule(order: int) -> GaussLegendre:
    return GaussLegendre(order)


def _speed(spline: Spline, t: Tensor) -> Tensor:
    """Length of the tangent vector, shape of ``t``."""
    return torch.linalg.vector_norm(spline_tangent(spline, t).tangent, dim=-1)


def integrate_speed(
    spline: Spline,
    a: Tensor,
    b: Tensor,
    order: int = 16,
) -> Tensor:
    """
    Integrate the tangent length over [a, b] without splitting at knots.

    ``a`` and ``b`` are broadcast against each other, so many intervals
    can be integrated in one call. Each interval should lie within a single
    segment for the quadrature to be accurate.
    """
    return _rule(order).integrate(lambda t: _speed(spline, t), a, b)


def spline_arc_length(
    spline: Spline,
    a,
    b,
    *,
    order: int = 16,
) -> Tensor:
    """
    Compute the arc length of a spline between two parameter values.

    The arc length is:
    L = ∫_a^b |dP/dt| dt

    Parameters
    ----------
    spline : Spline
        Any spline family.
    a : float or Tensor
        Start of the parameter interval (scalar).
    b : float or Tensor
        End of the parameter interval (scalar).
    order : int
        Number of Gauss-Legendre points per integrated piece.

    Returns
    -------
    length : Tensor
        Arc length, a 0-d tensor. Negative if ``a > b``.

    Notes
    -----
    The interval is split at every segment knot between ``a`` and ``b`` so
    each quadrature call sees one smooth polynomial piece. All pieces are
    integrated in one batched call.
    """
    segment_knots = spline.segment_knots
    a = torch.as_tensor(a, dtype=segment_knots.dtype, device=segment_knots.device)
    b = torch.as_tensor(b, dtype=segment_knots.dtype, device=segment_knots.device)

    if a.dim() != 0 or b.dim() != 0:
        raise ValueError("spline_arc_length expects scalar bounds")

    if a > b:
        return -spline_arc_length(spline, b, a, order=order)

    inner = segment_knots[(segment_knots > a) & (segment_knots < b)]
    bounds = torch.cat([a.reshape(1), inner, b.reshape(1)])

    return integrate_speed(spline, bounds[:-1], bounds[1:], order).sum()


def spline_total_length(spline: Spline, *, order: int = 16) -> Tensor:
    """Arc length over the whole domain, ``spline_arc_length(spline, 0, max_t)``."""
    return spline_arc_length(spline, 0.0, spline_max_t(spline), order=order)


def spline_segment_lengths(spline: Spline, *, order: int = 16) -> Tensor:
    """
    Arc length of every segment.

    Returns
    -------
    Tensor
        Shape (n_segments,). Sums to ``spline_total_length`` up to rounding.
    """
    segment_knots = spline.segment_knots
    return integrate_speed(spline, segment_knots[:-1], segment_knots[1:], order)
