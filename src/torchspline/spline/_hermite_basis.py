"""Derivative estimation and Hermite segment coefficients."""

import torch
from torch import Tensor


def three_point_derivative(values: Tensor, knots: Tensor) -> Tensor:
    """
    Estimate derivatives at interior samples of a non-uniform sequence.

    For sample ``i`` with neighbours ``i - 1`` and ``i + 1``:

        v_i = (V_i - V_{i-1}) / (t_i - t_{i-1})
              - (V_{i+1} - V_{i-1}) / (t_{i+1} - t_{i-1})
              + (V_{i+1} - V_i) / (t_{i+1} - t_i)

    which is the derivative of the quadratic through the three samples. On
    uniform knots it reduces to the Catmull-Rom tangent
    ``(V_{i+1} - V_{i-1}) / 2``.

    Parameters
    ----------
    values : Tensor
        Samples, shape (n, d).
    knots : Tensor
        Sample parameters, shape (n,). Strictly increasing.

    Returns
    -------
    Tensor
        Derivative estimates at samples ``1..n-2``, shape (n - 2, d).
    """
    prev_v, curr_v, next_v = values[:-2], values[1:-1], values[2:]
    prev_t, curr_t, next_t = (
        knots[:-2].unsqueeze(-1),
        knots[1:-1].unsqueeze(-1),
        knots[2:].unsqueeze(-1),
    )

    return (
        (curr_v - prev_v) / (curr_t - prev_t)
        - (next_v - prev_v) / (next_t - prev_t)
        + (next_v - curr_v) / (next_t - curr_t)
    )


def cubic_hermite_coefficients(
    p0: Tensor,
    p1: Tensor,
    m0: Tensor,
    m1: Tensor,
    h: Tensor,
) -> Tensor:
    """
    Power-basis coefficients of cubic Hermite segments.

    Parameters
    ----------
    p0, p1 : Tensor
        Segment end positions, shape (n_segments, d).
    m0, m1 : Tensor
        Segment end tangents, shape (n_segments, d).
    h : Tensor
        Segment lengths in parameter space, shape (n_segments,).

    Returns
    -------
    Tensor
        Coefficients of ``(t - t_0) ** j``, shape (n_segments, 4, d).
    """
    h = h.unsqueeze(-1)
    delta = (p1 - p0) / h

    c = (3 * delta - 2 * m0 - m1) / h
    d = (m0 + m1 - 2 * delta) / (h * h)

    return torch.stack([p0, m0, c, d], dim=1)


def quintic_hermite_coefficients(
    p0: Tensor,
    p1: Tensor,
    m0: Tensor,
    m1: Tensor,
    a0: Tensor,
    a1: Tensor,
    h: Tensor,
) -> Tensor:
    """
    Power-basis coefficients of quintic Hermite segments.

    Each segment matches position, tangent and acceleration at both ends.

    Parameters
    ----------
    p0, p1 : Tensor
        Segment end positions, shape (n_segments, d).
    m0, m1 : Tensor
        Segment end tangents, shape (n_segments, d).
    a0, a1 : Tensor
        Segment end accelerations, shape (n_segments, d).
    h : Tensor
        Segment lengths in parameter space, shape (n_segments,).

    Returns
    -------
    Tensor
        Coefficients of ``(t - t_0) ** j``, shape (n_segments, 6, d).
    """
    h = h.unsqueeze(-1)
    h2 = h * h
    dp = p1 - p0

    c3 = (20 * dp - (8 * m1 + 12 * m0) * h - (3 * a0 - a1) * h2) / (2 * h2 * h)
    c4 = (-30 * dp + (14 * m1 + 16 * m0) * h + (3 * a0 - 2 * a1) * h2) / (
        2 * h2 * h2
    )
    c5 = (12 * dp - 6 * (m1 + m0) * h - (a0 - a1) * h2) / (2 * h2 * h2 * h)

    return torch.stack([p0, m0, a0 / 2, c3, c4, c5], dim=1)
