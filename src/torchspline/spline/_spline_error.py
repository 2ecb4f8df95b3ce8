class SplineError(Exception):
    """Base exception for spline construction and evaluation errors."""

    pass


class SplineWarning(UserWarning):
    """Warning for spline construction fallbacks (e.g., boundary downgrades)."""

    pass
