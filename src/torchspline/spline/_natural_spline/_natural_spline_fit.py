import warnings
from typing import Optional, Tuple

import torch
from torch import Tensor

from .._solve_tridiagonal import solve_cyclic_tridiagonal, solve_tridiagonal
from .._spline_error import SplineWarning


def second_difference(values: Tensor, knots: Tensor) -> Tensor:
    """Second derivative of the parabola through three samples, shape (d,)."""
    slope_left = (values[1] - values[0]) / (knots[1] - knots[0])
    slope_right = (values[2] - values[1]) / (knots[2] - knots[1])
    return 2 * (slope_right - slope_left) / (knots[2] - knots[0])


def open_second_derivatives(
    values: Tensor,
    knots: Tensor,
    boundary: str,
    end_curvature: Optional[Tuple[Tensor, Tensor]] = None,
) -> Tensor:
    """
    Solve for the second derivatives of an open interpolating cubic spline.

    Parameters
    ----------
    values : Tensor
        Interpolated points, shape (k, d).
    knots : Tensor
        Their knots, shape (k,). Strictly increasing.
    boundary : str
        "natural" or "not_a_knot".
    end_curvature : tuple of Tensor, optional
        Second derivatives imposed at the first and last point for the
        "natural" boundary, and by "not_a_knot" when it falls back to it.
        Default is zero at both ends.

    Returns
    -------
    Tensor
        Second derivatives m at every interpolated point, shape (k, d).

    Notes
    -----
    Interior rows enforce matching second derivatives across each knot:

        h[i-1]*m[i-1] + 2*(h[i-1]+h[i])*m[i] + h[i]*m[i+1] = 6*(delta[i] - delta[i-1])

    Not-a-knot eliminates ``m[0]`` and ``m[k-1]`` through third-derivative
    continuity at the second and second-to-last knot, which keeps the
    system tridiagonal.
    """
    k = values.shape[0]

    if boundary == "not_a_knot" and k < 4:
        warnings.warn(
            f"not_a_knot boundary needs at least 4 interpolated points, got {k}; "
            "falling back to natural boundary",
            SplineWarning,
            stacklevel=3,
        )
        boundary = "natural"

    h = (knots[1:] - knots[:-1]).unsqueeze(-1)  # (k-1, 1)
    delta = (values[1:] - values[:-1]) / h  # (k-1, d)

    if boundary == "natural":
        if end_curvature is None:
            m_start = torch.zeros_like(values[0])
            m_end = torch.zeros_like(values[0])
        else:
            m_start, m_end = end_curvature

        if k == 2:
            return torch.stack([m_start, m_end], dim=0)

        rhs = 6 * (delta[1:] - delta[:-1])  # (k-2, d)
        # Known end values move to the right-hand side
        rhs = torch.cat(
            [
                (rhs[0] - h[0] * m_start).unsqueeze(0),
                rhs[1:],
            ]
        )
        rhs = torch.cat(
            [
                rhs[:-1],
                (rhs[-1] - h[-1] * m_end).unsqueeze(0),
            ]
        )

        h = h.squeeze(-1)
        diag = 2 * (h[:-1] + h[1:])
        off_diag = h[1:-1]

        m_interior = solve_tridiagonal(diag, off_diag, off_diag, rhs.T).T

        return torch.cat(
            [m_start.unsqueeze(0), m_interior, m_end.unsqueeze(0)], dim=0
        )

    # not_a_knot
    rhs = 6 * (delta[1:] - delta[:-1])  # (k-2, d)

    h = h.squeeze(-1)
    h0, h1 = h[0], h[1]
    hb, ha = h[-2], h[-1]

    diag = 2 * (h[:-1] + h[1:])
    diag = torch.cat(
        [
            ((h0 + h1) * (h0 + 2 * h1) / h1).unsqueeze(0),
            diag[1:-1],
            ((hb + ha) * (2 * hb + ha) / hb).unsqueeze(0),
        ]
    )
    upper = torch.cat([((h1 * h1 - h0 * h0) / h1).unsqueeze(0), h[2:-1]])
    lower = torch.cat([h[1:-2], ((hb * hb - ha * ha) / hb).unsqueeze(0)])

    m_interior = solve_tridiagonal(diag, upper, lower, rhs.T).T

    m_start = ((h0 + h1) * m_interior[0] - h0 * m_interior[1]) / h1
    m_end = ((hb + ha) * m_interior[-1] - ha * m_interior[-2]) / hb

    return torch.cat(
        [m_start.unsqueeze(0), m_interior, m_end.unsqueeze(0)], dim=0
    )


def periodic_second_derivatives(values: Tensor, knots: Tensor) -> Tensor:
    """
    Solve for the second derivatives of a closed interpolating cubic spline.

    Parameters
    ----------
    values : Tensor
        Points of the loop, shape (n, d). The curve closes from
        ``values[-1]`` back to ``values[0]``.
    knots : Tensor
        Segment boundaries including the closing knot, shape (n + 1,).

    Returns
    -------
    Tensor
        Second derivatives at each point, shape (n, d).
    """
    h = knots[1:] - knots[:-1]  # (n,)
    closed = torch.cat([values, values[:1]], dim=0)
    delta = (closed[1:] - closed[:-1]) / h.unsqueeze(-1)  # (n, d)

    diag = 2 * (torch.roll(h, 1) + h)
    rhs = 6 * (delta - torch.roll(delta, 1, dims=0))

    # Row i couples m[i-1] (weight h[i-1]) and m[i+1] (weight h[i])
    return solve_cyclic_tridiagonal(diag, h, h, rhs.T).T


def natural_spline_coefficients(
    values: Tensor,
    knots: Tensor,
    m: Tensor,
) -> Tensor:
    """
    Power-basis coefficients of each segment from second derivatives.

    p_i(t) = a_i + b_i*(t-x_i) + c_i*(t-x_i)^2 + d_i*(t-x_i)^3 where:
      a_i = y_i
      b_i = delta_i - h_i * (2*m_i + m_{i+1}) / 6
      c_i = m_i / 2
      d_i = (m_{i+1} - m_i) / (6 * h_i)

    Parameters
    ----------
    values : Tensor
        Segment end points, shape (n_segments + 1, d).
    knots : Tensor
        Segment boundaries, shape (n_segments + 1,).
    m : Tensor
        Second derivatives at the boundaries, shape (n_segments + 1, d).

    Returns
    -------
    Tensor
        Coefficients, shape (n_segments, 4, d).
    """
    h = (knots[1:] - knots[:-1]).unsqueeze(-1)
    delta = (values[1:] - values[:-1]) / h

    a = values[:-1]
    b = delta - h * (2 * m[:-1] + m[1:]) / 6
    c = m[:-1] / 2
    d = (m[1:] - m[:-1]) / (6 * h)

    return torch.stack([a, b, c, d], dim=1)
