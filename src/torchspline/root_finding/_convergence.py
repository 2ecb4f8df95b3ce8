"""Stopping criteria shared by the parameter solvers."""

import torch
from torch import Tensor

# (xtol, rtol, ftol) per floating dtype
_TOLERANCES = {
    torch.float16: (1e-3, 1e-2, 1e-3),
    torch.bfloat16: (1e-3, 1e-2, 1e-3),
    torch.float32: (1e-6, 1e-5, 1e-6),
}

_FLOAT64_TOLERANCES = (1e-12, 1e-9, 1e-12)


def default_tolerances(dtype: torch.dtype) -> dict[str, float]:
    """Tolerances keyed ``xtol``, ``rtol`` and ``ftol`` for ``dtype``.

    Half precision types share the loosest set. Anything not listed,
    including float64, gets the tightest.
    """
    xtol, rtol, ftol = _TOLERANCES.get(dtype, _FLOAT64_TOLERANCES)
    return {"xtol": xtol, "rtol": rtol, "ftol": ftol}


def check_convergence(
    x_old: Tensor,
    x_new: Tensor,
    f_new: Tensor,
    xtol: float,
    rtol: float,
    ftol: float,
) -> Tensor:
    """Elementwise stopping mask.

    A parameter is done once its last step satisfies
    ``|x_new - x_old| < xtol + rtol * |x_old|`` or its residual satisfies
    ``|f_new| < ftol``.
    """
    step = (x_new - x_old).abs()
    small_step = step < xtol + rtol * x_old.abs()
    small_residual = f_new.abs() < ftol
    return torch.logical_or(small_step, small_residual)
