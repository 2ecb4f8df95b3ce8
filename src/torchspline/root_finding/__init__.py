from ._bracketed_newton import bracketed_newton
from ._convergence import check_convergence, default_tolerances
from ._exceptions import BracketError, RootFindingError

__all__ = [
    "bracketed_newton",
    "check_convergence",
    "default_tolerances",
    "BracketError",
    "RootFindingError",
]
