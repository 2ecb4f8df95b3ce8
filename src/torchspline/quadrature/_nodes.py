"""Reference Gauss-Legendre nodes and weights."""

from typing import Optional, Tuple

import torch
from torch import Tensor


def _legendre_jacobi_matrix(n: int) -> Tensor:
    # Three-term recurrence of the Legendre polynomials, symmetrized
    k = torch.arange(1, n, dtype=torch.float64)
    beta = k * torch.rsqrt(4.0 * k * k - 1.0)
    return torch.diag_embed(beta, offset=1) + torch.diag_embed(beta, offset=-1)


def gauss_legendre_nodes_weights(
    n: int,
    dtype: torch.dtype = torch.float64,
    device: Optional[torch.device] = None,
) -> Tuple[Tensor, Tensor]:
    """
    Gauss-Legendre nodes and weights on the reference interval [-1, 1].

    The nodes are the eigenvalues of the Legendre Jacobi matrix and each
    weight is twice the squared first component of the matching unit
    eigenvector (Golub & Welsch, 1969). The eigenproblem is solved in
    float64 regardless of ``dtype``.

    Parameters
    ----------
    n : int
        Number of nodes, at least 1.
    dtype : torch.dtype
        Output dtype.
    device : torch.device, optional
        Output device.

    Returns
    -------
    nodes, weights : Tensor
        Shape (n,). Nodes are ascending.

    Raises
    ------
    ValueError
        If ``n < 1``.
    """
    if n < 1:
        raise ValueError(f"n must be at least 1, got {n}")

    if n == 1:
        nodes = torch.zeros(1, dtype=torch.float64)
        weights = torch.full((1,), 2.0, dtype=torch.float64)
    else:
        # eigh returns ascending eigenvalues
        nodes, vectors = torch.linalg.eigh(_legendre_jacobi_matrix(n))
        weights = 2.0 * vectors[0].square()

    return (
        nodes.to(dtype=dtype, device=device),
        weights.to(dtype=dtype, device=device),
    )
