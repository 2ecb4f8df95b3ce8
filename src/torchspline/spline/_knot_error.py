from ._spline_error import SplineError


class KnotError(SplineError):
    """Raised for invalid knots (too few points, coincident consecutive points)."""

    pass
