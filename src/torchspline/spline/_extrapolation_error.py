from ._spline_error import SplineError


class ExtrapolationError(SplineError):
    """Raised when query parameter is outside [0, max_t] with extrapolate='error'."""

    pass
