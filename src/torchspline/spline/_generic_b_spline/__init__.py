from ._generic_b_spline import GenericBSpline, generic_b_spline
from ._generic_b_spline_evaluate import generic_b_spline_evaluate

__all__ = [
    "GenericBSpline",
    "generic_b_spline",
    "generic_b_spline_evaluate",
]
