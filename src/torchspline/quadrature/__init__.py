"""
Gauss-Legendre quadrature for curve integrals.

One-shot integration:
    fixed_quad

Reusable rule with cached nodes:
    GaussLegendre

Reference nodes and weights on [-1, 1]:
    gauss_legendre_nodes_weights
"""

from torchspline.quadrature._fixed_quad import fixed_quad
from torchspline.quadrature._nodes import gauss_legendre_nodes_weights
from torchspline.quadrature._rules import GaussLegendre

__all__ = [
    "fixed_quad",
    "GaussLegendre",
    "gauss_legendre_nodes_weights",
]
