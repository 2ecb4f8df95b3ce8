"""Errors raised by the parameter solvers."""


class RootFindingError(Exception):
    """Base class for solver failures."""

    pass


class BracketError(RootFindingError):
    """A bracket with lower > upper."""

    pass
