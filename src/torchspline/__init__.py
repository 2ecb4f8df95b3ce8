"""torchspline: parametric spline curves, arc length and inversion for PyTorch."""

from . import (
    quadrature,
    root_finding,
    spline,
)

__all__ = [
    "quadrature",
    "root_finding",
    "spline",
]

__version__ = "0.1.0"
