"""Knot parametrization from control point spacing."""

import torch
from torch import Tensor

from ._knot_error import KnotError


def compute_knots(
    points: Tensor,
    alpha: float,
    padding: int = 0,
    *,
    loop: bool = False,
) -> Tensor:
    """
    Compute one knot value per control point from chord lengths.

    Consecutive knots are spaced by ``|P[i+1] - P[i]| ** alpha``:

    - ``alpha = 0.0``: uniform spacing
    - ``alpha = 0.5``: centripetal spacing
    - ``alpha = 1.0``: chordal spacing

    Parameters
    ----------
    points : Tensor
        Control points, shape (n, d).
    alpha : float
        Parametrization exponent.
    padding : int
        Index of the control point placed at ``T = 0``. Points before it
        receive negative knots.
    loop : bool
        If True, the chord from the last point back to the first is
        included and the returned tensor has ``n + 1`` entries, the last
        one being the knot at which the curve closes.

    Returns
    -------
    knots : Tensor
        Strictly increasing knots, shape (n,) or (n + 1,) if ``loop``.

    Raises
    ------
    KnotError
        If two consecutive points coincide while ``alpha > 0``.
    """
    if loop:
        points = torch.cat([points, points[:1]], dim=0)

    n = points.shape[0]

    if alpha == 0.0:
        intervals = torch.ones(n - 1, dtype=points.dtype, device=points.device)
    else:
        distances = torch.linalg.vector_norm(points[1:] - points[:-1], dim=-1)
        if torch.any(distances == 0):
            index = int(torch.nonzero(distances == 0)[0])
            raise KnotError(
                f"Control points {index} and {(index + 1) % (n - int(loop))} "
                "coincide; knot spacing would be zero"
            )
        intervals = distances.pow(alpha)

    knots = torch.cat(
        [
            torch.zeros(1, dtype=points.dtype, device=points.device),
            torch.cumsum(intervals, dim=0),
        ]
    )

    return knots - knots[padding]
