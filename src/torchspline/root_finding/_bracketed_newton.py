"""Newton-Raphson root finding safeguarded by a bisection bracket."""

from typing import Callable, Union

import torch
from torch import Tensor

from ._convergence import check_convergence, default_tolerances
from ._exceptions import BracketError


def bracketed_newton(
    f: Callable[[Tensor], Tensor],
    x0: Tensor,
    lower: Union[float, Tensor],
    upper: Union[float, Tensor],
    *,
    df: Callable[[Tensor], Tensor],
    xtol: float | None = None,
    rtol: float | None = None,
    ftol: float | None = None,
    maxiter: int = 50,
) -> tuple[Tensor, Tensor]:
    """
    Find roots of f(x) = 0 inside [lower, upper] using safeguarded Newton.

    Each iteration takes the Newton step ``x - f(x) / f'(x)``. The bracket
    is shrunk around the sign change of ``f`` after every evaluation, and
    whenever the Newton step leaves the bracket (or is not finite) a
    bisection step is taken instead.

    Parameters
    ----------
    f : Callable[[Tensor], Tensor]
        Elementwise function. Called with tensors shaped like ``x0``.
    x0 : Tensor
        Initial guess. Clamped into the bracket.
    lower, upper : float or Tensor
        Bracket bounds, broadcastable to ``x0``. ``f(lower)`` and
        ``f(upper)`` should have opposite signs.
    df : Callable[[Tensor], Tensor]
        Elementwise derivative of ``f``.
    xtol, rtol, ftol : float, optional
        Convergence tolerances, see ``check_convergence``. Default:
        dtype-aware values from ``default_tolerances``.
    maxiter : int, default=50
        Maximum iterations. Non-converged elements will have converged=False.

    Returns
    -------
    tuple[Tensor, Tensor]
        - **root** -- Roots with the same shape as ``x0``. For
          non-converged elements, this is the last iterate.
        - **converged** -- Boolean tensor marking converged elements.

    Raises
    ------
    BracketError
        If any ``lower`` exceeds the matching ``upper``.

    Examples
    --------
    >>> f = lambda x: x**2 - 2
    >>> df = lambda x: 2 * x
    >>> root, converged = bracketed_newton(
    ...     f, torch.tensor([1.0]), 0.0, 2.0, df=df
    ... )
    >>> float(root)  # doctest: +ELLIPSIS
    1.414...
    """
    x0 = torch.as_tensor(x0)
    if not x0.is_floating_point():
        x0 = x0.to(torch.get_default_dtype())

    dtype = x0.dtype
    x, lo, hi = torch.broadcast_tensors(
        x0,
        torch.as_tensor(lower, dtype=dtype, device=x0.device),
        torch.as_tensor(upper, dtype=dtype, device=x0.device),
    )

    if torch.any(lo > hi):
        raise BracketError("Bracket lower bound exceeds upper bound")

    tol = default_tolerances(dtype)
    xtol = tol["xtol"] if xtol is None else xtol
    rtol = tol["rtol"] if rtol is None else rtol
    ftol = tol["ftol"] if ftol is None else ftol

    # Smallest usable slope magnitude
    tiny = 10 * torch.finfo(dtype).eps

    x = x.clamp(lo, hi)
    f_lo = f(lo)
    fx = f(x)
    done = torch.zeros_like(x, dtype=torch.bool)

    for _ in range(maxiter):
        slope = df(x)

        # Move whichever end shares the sign of f(x)
        left = torch.sign(fx) == torch.sign(f_lo)
        lo = torch.where(left, x, lo)
        f_lo = torch.where(left, fx, f_lo)
        hi = torch.where(left, hi, x)

        slope = torch.where(
            slope.abs() < tiny,
            torch.full_like(slope, tiny).copysign(slope),
            slope,
        )

        step = x - fx / slope
        bisect = ~torch.isfinite(step) | (step < lo) | (step > hi)
        x_next = torch.where(bisect, 0.5 * (lo + hi), step)
        f_next = f(x_next)

        stop = check_convergence(x, x_next, f_next, xtol, rtol, ftol)

        # Finished entries keep the iterate they stopped on
        x = torch.where(done, x, x_next)
        fx = torch.where(done, fx, f_next)
        done = done | stop

        if done.all():
            break

    return x, done
