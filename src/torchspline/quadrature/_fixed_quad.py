"""One-shot Gauss-Legendre integration."""

from typing import Callable, Union

from torch import Tensor

from torchspline.quadrature._rules import GaussLegendre


def fixed_quad(
    f: Callable[[Tensor], Tensor],
    a: Union[float, Tensor],
    b: Union[float, Tensor],
    n: int = 5,
) -> Tensor:
    """
    Integrate ``f`` over ``[a, b]`` with an ``n``-point Gauss-Legendre rule.

    Equivalent to ``GaussLegendre(n).integrate(f, a, b)``. Keep a
    ``GaussLegendre`` instance around instead when integrating repeatedly
    with the same order.

    Parameters
    ----------
    f : callable
        Receives nodes of shape (*batch, n). Returns (*batch, n) or
        (*batch, n, *value_shape).
    a, b : float or Tensor
        Bounds, broadcast against each other.
    n : int
        Number of nodes. Default is 5, exact for polynomials up to degree 9.

    Returns
    -------
    Tensor
        Shape (*batch, *value_shape).

    Examples
    --------
    >>> fixed_quad(lambda t: torch.sqrt(1 + 4 * t**2), 0.0, 1.0, n=32)
    """
    return GaussLegendre(n).integrate(f, a, b)
