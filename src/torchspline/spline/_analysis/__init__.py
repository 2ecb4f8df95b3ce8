from ._spline_arc_length import (
    integrate_speed,
    spline_arc_length,
    spline_segment_lengths,
    spline_total_length,
)
from ._spline_inverter import spline_closest_t, spline_solve_length

__all__ = [
    "integrate_speed",
    "spline_arc_length",
    "spline_closest_t",
    "spline_segment_lengths",
    "spline_solve_length",
    "spline_total_length",
]
