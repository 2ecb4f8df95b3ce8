import torch
from torch import Tensor


def solve_tridiagonal(
    diag: Tensor,
    upper: Tensor,
    lower: Tensor,
    rhs: Tensor,
) -> Tensor:
    """
    Solve a tridiagonal system with the Thomas algorithm.

    Row ``i`` of the matrix reads ``lower[i-1] * x[i-1] + diag[i] * x[i] +
    upper[i] * x[i+1]``, with the out-of-range terms dropped in the first
    and last rows.

    Parameters
    ----------
    diag : Tensor
        Main diagonal, shape (n,).
    upper : Tensor
        Superdiagonal, shape (n-1,).
    lower : Tensor
        Subdiagonal, shape (n-1,).
    rhs : Tensor
        Right-hand sides, shape (*batch, n). Each coordinate axis of a set
        of control points is one batch entry.

    Returns
    -------
    Tensor
        Shape (*batch, n).

    Notes
    -----
    No pivoting is done. The systems built for natural splines are strictly
    diagonally dominant. Intermediate rows are kept in Python lists rather
    than written in place so that autograd sees every step.
    """
    n = diag.shape[0]

    if n == 1:
        return rhs / diag[0]

    rows = rhs.movedim(-1, 0)

    # Eliminate the subdiagonal: row i becomes x[i] + ratio[i] * x[i+1] = y[i]
    ratio = [upper[0] / diag[0]]
    y = [rows[0] / diag[0]]
    for i in range(1, n):
        pivot = diag[i] - lower[i - 1] * ratio[-1]
        y.append((rows[i] - lower[i - 1] * y[-1]) / pivot)
        if i < n - 1:
            ratio.append(upper[i] / pivot)

    solution = [y[-1]]
    for i in reversed(range(n - 1)):
        solution.append(y[i] - ratio[i] * solution[-1])
    solution.reverse()

    return torch.stack(solution, dim=-1)


def solve_cyclic_tridiagonal(
    diag: Tensor,
    upper: Tensor,
    lower: Tensor,
    rhs: Tensor,
) -> Tensor:
    """
    Solve a cyclic tridiagonal system Ax = b.

    The matrix A has the form:
        [d0    u0   0   ...   0    ln-1]
        [l0    d1  u1   ...   0     0  ]
        [        ...                   ]
        [un-1   0   0   ... ln-2  dn-1 ]

    so row ``i`` couples ``x[i-1]``, ``x[i]`` and ``x[i+1]`` with indices
    taken modulo ``n``.

    Parameters
    ----------
    diag : Tensor
        Main diagonal, shape (n,), n >= 3.
    upper : Tensor
        Upper diagonal including the bottom-left corner ``u[n-1]``, shape (n,).
    lower : Tensor
        Lower diagonal including the top-right corner ``l[n-1]``, shape (n,).
    rhs : Tensor
        Right-hand side, shape (*batch, n)

    Returns
    -------
    Tensor
        Solution x, shape (*batch, n)

    Notes
    -----
    The corners are removed with the Sherman-Morrison formula, which needs
    two solves of the open system with ``solve_tridiagonal``.

    References
    ----------
    .. [1] Press, W.H. et al. "Numerical Recipes", 3rd ed., section 2.7.2.
    """
    n = diag.shape[0]

    if n < 3:
        raise ValueError(f"Cyclic tridiagonal system needs n >= 3, got {n}")

    top_right = lower[n - 1]
    bottom_left = upper[n - 1]

    gamma = -diag[0]

    modified_diag = torch.cat(
        [
            (diag[0] - gamma).unsqueeze(0),
            diag[1:-1],
            (diag[n - 1] - bottom_left * top_right / gamma).unsqueeze(0),
        ]
    )

    u = torch.zeros(n, dtype=diag.dtype, device=diag.device)
    u[0] = gamma
    u[n - 1] = bottom_left

    x = solve_tridiagonal(modified_diag, upper[:-1], lower[:-1], rhs)
    z = solve_tridiagonal(modified_diag, upper[:-1], lower[:-1], u)

    # v = [1, 0, ..., 0, top_right / gamma]
    factor = (x[..., 0] + top_right * x[..., n - 1] / gamma) / (
        1 + z[0] + top_right * z[n - 1] / gamma
    )

    return x - factor.unsqueeze(-1) * z
