from __future__ import annotations

from typing import TYPE_CHECKING

import torch
from torch import Tensor

from .._piecewise_polynomial import find_segment

if TYPE_CHECKING:
    from ._generic_b_spline import GenericBSpline


def _de_boor(
    knot_vector: Tensor,
    control_points: Tensor,
    degree: int,
    span: Tensor,
    t: Tensor,
) -> Tensor:
    """Run the de Boor recursion for every query in its knot span."""
    offsets = torch.arange(degree + 1, device=span.device)
    d = control_points[span.unsqueeze(-1) - degree + offsets]  # (q, degree + 1, dim)
    d = list(d.unbind(dim=1))

    t = t.unsqueeze(-1)

    for r in range(1, degree + 1):
        for j in range(degree, r - 1, -1):
            left = knot_vector[span + j - degree].unsqueeze(-1)
            right = knot_vector[span + j + 1 - r].unsqueeze(-1)
            alpha = (t - left) / (right - left)
            d[j] = (1 - alpha) * d[j - 1] + alpha * d[j]

    return d[degree]


def _derivative_control_points(
    knot_vector: Tensor,
    control_points: Tensor,
    degree: int,
) -> Tensor:
    """Control points of the derivative: p (c_{i+1} - c_i) / (u_{i+p+1} - u_{i+1})."""
    i = torch.arange(control_points.shape[0] - 1, device=control_points.device)
    denom = knot_vector[i + degree + 1] - knot_vector[i + 1]
    return degree * (control_points[1:] - control_points[:-1]) / denom.unsqueeze(-1)


def generic_b_spline_evaluate(
    spline: GenericBSpline,
    t: Tensor,
    order: int = 0,
) -> list[Tensor]:
    """
    Evaluate a B-spline and its derivatives with the de Boor algorithm.

    Parameters
    ----------
    spline : GenericBSpline
        B-spline with knot vector and control points
    t : Tensor
        Flat parameter values, shape (n_query,)
    order : int
        Highest derivative order to return.

    Returns
    -------
    list[Tensor]
        ``order + 1`` tensors of shape (n_query, d).

    Notes
    -----
    Differentiating a degree-p B-spline gives a degree-(p-1) B-spline on the
    knot vector with its first and last knot removed, with control points
    ``d_i = p (c_{i+1} - c_i) / (u_{i+p+1} - u_{i+1})``. Each derivative
    order reruns the recursion one degree lower; orders above the degree
    are identically zero.
    """
    degree = spline.degree
    knot_vector = spline.knot_vector
    control_points = spline.points

    # Knot span index into the full knot vector
    span = find_segment(spline.segment_knots, t) + degree

    results = []
    for k in range(order + 1):
        if k > degree:
            results.append(torch.zeros_like(results[0]))
            continue

        level_knots = knot_vector[k : knot_vector.shape[0] - k]
        results.append(
            _de_boor(level_knots, control_points, degree - k, span - k, t)
        )

        if k < degree:
            control_points = _derivative_control_points(
                level_knots, control_points, degree - k
            )

    return results
