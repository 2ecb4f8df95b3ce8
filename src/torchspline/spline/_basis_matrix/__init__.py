from ._uniform_cr_spline import UniformCRSpline, uniform_cr_spline
from ._uniform_cubic_b_spline import UniformCubicBSpline, uniform_cubic_b_spline

__all__ = [
    "UniformCRSpline",
    "UniformCubicBSpline",
    "uniform_cr_spline",
    "uniform_cubic_b_spline",
]
