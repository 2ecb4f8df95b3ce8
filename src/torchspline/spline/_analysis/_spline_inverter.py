"""Map arc lengths and positions back to spline parameters."""

from __future__ import annotations

import torch
from torch import Tensor

from ...root_finding import bracketed_newton
from .._cubic_hermite_spline import CubicHermiteSpline
from .._natural_spline import NaturalSpline
from .._spline import (
    Spline,
    spline_curvature,
    spline_max_t,
    spline_position,
    spline_tangent,
)
from ._spline_arc_length import _speed, integrate_speed


def _is_loop(spline: Spline) -> bool:
    if isinstance(spline, CubicHermiteSpline):
        return bool(spline.loop)
    if isinstance(spline, NaturalSpline):
        return spline.boundary == "periodic"
    return False


def spline_solve_length(
    spline: Spline,
    a,
    length,
    *,
    order: int = 16,
    maxiter: int = 50,
) -> tuple[Tensor, Tensor]:
    """
    Find the parameter ``b`` at which the arc length from ``a`` equals ``length``.

    Parameters
    ----------
    spline : Spline
        Any spline family.
    a : float or Tensor
        Start parameter (scalar), within ``[0, max_t]``.
    length : float or Tensor
        Target arc lengths, any shape.
    order : int
        Gauss-Legendre points per segment.
    maxiter : int
        Iteration cap for the root finder.

    Returns
    -------
    tuple[Tensor, Tensor]
        - **t** -- Parameters with the shape of ``length``.
        - **converged** -- Boolean tensor. Lengths longer than the remaining
          curve give ``t = max_t`` with ``converged=False``.

    Notes
    -----
    The interval ``[a, max_t]`` is split at segment knots and the length of
    every piece is integrated once. The cumulative lengths locate the piece
    containing each target, and Newton iteration (with the tangent length as
    derivative) refines the parameter inside that piece.
    """
    segment_knots = spline.segment_knots
    dtype = segment_knots.dtype
    device = segment_knots.device

    a = torch.as_tensor(a, dtype=dtype, device=device)
    length = torch.as_tensor(length, dtype=dtype, device=device)
    max_t = spline_max_t(spline)

    if a.dim() != 0:
        raise ValueError("spline_solve_length expects a scalar start parameter")

    shape = length.shape
    target = length.reshape(-1)

    if a >= max_t:
        t = torch.full_like(target, max_t.item())
        converged = target <= 0
        return t.reshape(shape), converged.reshape(shape)

    inner = segment_knots[(segment_knots > a) & (segment_knots < max_t)]
    bounds = torch.cat([a.reshape(1), inner, max_t.reshape(1)])
    piece_lengths = integrate_speed(spline, bounds[:-1], bounds[1:], order)
    cumulative = torch.cat(
        [torch.zeros(1, dtype=dtype, device=device), torch.cumsum(piece_lengths, 0)]
    )
    total = cumulative[-1]

    n_pieces = piece_lengths.shape[0]
    piece = torch.searchsorted(cumulative, target.contiguous(), right=True) - 1
    piece = torch.clamp(piece, 0, n_pieces - 1)

    lo = bounds[piece]
    hi = bounds[piece + 1]
    remainder = target - cumulative[piece]

    # Linear guess inside the piece
    piece_length = piece_lengths[piece]
    fraction = torch.where(
        piece_length > 0,
        remainder / torch.where(piece_length > 0, piece_length, 1.0),
        torch.zeros_like(remainder),
    )
    x0 = lo + torch.clamp(fraction, 0.0, 1.0) * (hi - lo)

    def f(t: Tensor) -> Tensor:
        return integrate_speed(spline, lo, t, order) - remainder

    def df(t: Tensor) -> Tensor:
        return _speed(spline, t)

    t, converged = bracketed_newton(f, x0, lo, hi, df=df, maxiter=maxiter)

    before = target <= 0
    beyond = target > total

    t = torch.where(before, a, t)
    t = torch.where(beyond, max_t, t)
    converged = (converged | before) & ~beyond

    return t.reshape(shape), converged.reshape(shape)


def spline_closest_t(
    spline: Spline,
    point: Tensor,
    *,
    samples_per_segment: int = 16,
    maxiter: int = 50,
) -> tuple[Tensor, Tensor]:
    """
    Find the parameter of the curve point nearest to each query point.

    Parameters
    ----------
    spline : Spline
        Any spline family.
    point : Tensor
        Query points, shape (*query_shape, d).
    samples_per_segment : int
        Sampling resolution used to bracket the answer.
    maxiter : int
        Iteration cap for the root finder.

    Returns
    -------
    tuple[Tensor, Tensor]
        - **t** -- Parameters, shape (*query_shape).
        - **converged** -- Boolean tensor, shape (*query_shape).

    Notes
    -----
    The nearest sample gives the bracket ``[t_{k-1}, t_{k+1}]`` around it.
    Inside the bracket the stationarity condition

        g(t) = P'(t) . (P(t) - q) = 0

    is solved with bracketed Newton, using
    ``g'(t) = P''(t) . (P(t) - q) + |P'(t)|^2``. If ``g`` does not change
    sign over the bracket the nearer bracket end is returned, which covers
    queries whose closest point is an end of the curve.

    On looping splines the bracket around the first or last sample extends
    across the seam, and the result is folded back into ``[0, max_t)``.
    """
    segment_knots = spline.segment_knots
    dtype = segment_knots.dtype
    device = segment_knots.device

    point = torch.as_tensor(point, dtype=dtype, device=device)
    d = spline.points.shape[-1]
    if point.shape[-1] != d:
        raise ValueError(
            f"point must have trailing dimension {d}, got {point.shape[-1]}"
        )

    query_shape = point.shape[:-1]
    q = point.reshape(-1, d)

    u = torch.linspace(
        0.0, 1.0, samples_per_segment + 1, dtype=dtype, device=device
    )[:-1]
    h = segment_knots[1:] - segment_knots[:-1]
    samples = (segment_knots[:-1, None] + u[None, :] * h[:, None]).reshape(-1)

    loop = _is_loop(spline)
    max_t = segment_knots[-1]
    if loop:
        # Parameters outside [0, max_t) are folded back onto the loop
        def wrap(t: Tensor) -> Tensor:
            return torch.remainder(t, max_t)

    else:
        samples = torch.cat([samples, segment_knots[-1:]])

        def wrap(t: Tensor) -> Tensor:
            return t

    sample_positions = spline_position(spline, samples)
    nearest = torch.argmin(torch.cdist(q, sample_positions), dim=-1)

    count = samples.shape[0]
    x0 = samples[nearest]
    if loop:
        # Neighbours across the seam are shifted by one period
        before = nearest - 1
        after = nearest + 1
        lo = samples[before % count] - torch.where(before < 0, max_t, 0.0)
        hi = samples[after % count] + torch.where(after >= count, max_t, 0.0)
    else:
        lo = samples[torch.clamp(nearest - 1, 0, count - 1)]
        hi = samples[torch.clamp(nearest + 1, 0, count - 1)]

    def g(t: Tensor) -> Tensor:
        position, tangent = spline_tangent(spline, wrap(t))
        return torch.sum(tangent * (position - q), dim=-1)

    def dg(t: Tensor) -> Tensor:
        position, tangent, curvature = spline_curvature(spline, wrap(t))
        return torch.sum(curvature * (position - q), dim=-1) + torch.sum(
            tangent * tangent, dim=-1
        )

    t, converged = bracketed_newton(g, x0, lo, hi, df=dg, maxiter=maxiter)

    # Without a sign change the minimum sits on a bracket end
    g_lo = g(lo)
    g_hi = g(hi)
    no_root = torch.sign(g_lo) * torch.sign(g_hi) > 0

    dist_lo = torch.linalg.vector_norm(
        spline_position(spline, wrap(lo)) - q, dim=-1
    )
    dist_hi = torch.linalg.vector_norm(
        spline_position(spline, wrap(hi)) - q, dim=-1
    )
    end = torch.where(dist_lo <= dist_hi, lo, hi)

    t = wrap(torch.where(no_root, end, t))
    converged = converged | no_root

    return t.reshape(query_shape), converged.reshape(query_shape)
