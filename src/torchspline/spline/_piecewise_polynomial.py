"""Segment lookup and power-basis evaluation shared by polynomial families."""

import math

import torch
from torch import Tensor


def find_segment(segment_knots: Tensor, t: Tensor) -> Tensor:
    """
    Locate the segment containing each parameter value.

    Parameters
    ----------
    segment_knots : Tensor
        Strictly increasing segment boundaries, shape (n_segments + 1,).
    t : Tensor
        Parameter values, any shape.

    Returns
    -------
    Tensor
        Segment indices i with ``segment_knots[i] <= t < segment_knots[i+1]``,
        clamped to ``[0, n_segments - 1]`` so that the last knot and
        out-of-domain values map onto the boundary segments.
    """
    n_segments = segment_knots.shape[0] - 1
    segment_idx = torch.searchsorted(segment_knots, t.contiguous(), right=True) - 1
    return torch.clamp(segment_idx, 0, n_segments - 1)


def piecewise_polynomial_evaluate(
    segment_knots: Tensor,
    coefficients: Tensor,
    t: Tensor,
    order: int,
) -> list[Tensor]:
    """
    Evaluate a piecewise polynomial and its derivatives.

    Segment i is ``sum_j c[i, j] * (t - segment_knots[i]) ** j``.

    Parameters
    ----------
    segment_knots : Tensor
        Segment boundaries, shape (n_segments + 1,).
    coefficients : Tensor
        Power-basis coefficients, shape (n_segments, degree + 1, d).
    t : Tensor
        Flat parameter values, shape (n_query,).
    order : int
        Highest derivative order to return.

    Returns
    -------
    list[Tensor]
        ``order + 1`` tensors of shape (n_query, d): the value followed by
        each derivative.
    """
    segment_idx = find_segment(segment_knots, t)

    dx = (t - segment_knots[segment_idx]).unsqueeze(-1)  # (n_query, 1)
    c = coefficients[segment_idx]  # (n_query, degree + 1, d)
    n_coeffs = c.shape[1]

    results = []
    for derivative in range(order + 1):
        # Horner's method on the differentiated coefficients
        value = torch.zeros_like(c[:, 0])
        for j in range(n_coeffs - 1, derivative - 1, -1):
            value = value * dx + math.perm(j, derivative) * c[:, j]
        results.append(value)

    return results


def basis_matrix_coefficients(points: Tensor, matrix: Tensor) -> Tensor:
    """
    Apply a 4x4 basis matrix to every window of four consecutive points.

    Parameters
    ----------
    points : Tensor
        Control points, shape (n, d) with n >= 4.
    matrix : Tensor
        Basis matrix M, shape (4, 4), mapping ``[1, u, u^2, u^3] M P``.

    Returns
    -------
    Tensor
        Power-basis coefficients in the unit-length local parameter,
        shape (n - 3, 4, d).
    """
    # windows: (n - 3, 4, d)
    windows = points.unfold(0, 4, 1).transpose(1, 2)
    return torch.einsum("kj,sjd->skd", matrix, windows)
