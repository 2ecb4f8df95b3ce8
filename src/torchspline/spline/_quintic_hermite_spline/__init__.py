from ._quintic_hermite_spline import QuinticHermiteSpline, quintic_hermite_spline

__all__ = [
    "QuinticHermiteSpline",
    "quintic_hermite_spline",
]
