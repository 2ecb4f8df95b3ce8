from ._natural_spline import NaturalSpline, natural_spline

__all__ = [
    "NaturalSpline",
    "natural_spline",
]
