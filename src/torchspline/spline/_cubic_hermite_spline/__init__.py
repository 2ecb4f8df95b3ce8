from ._cubic_hermite_spline import CubicHermiteSpline, cubic_hermite_spline

__all__ = [
    "CubicHermiteSpline",
    "cubic_hermite_spline",
]
