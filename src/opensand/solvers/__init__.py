"""Solution containers and the in-memory primal solver."""

from .variables import SolutionVariables, PrimalVariables, DesignVariables
from .tape import RegistrationTape
from .primal import ArrayPrimalSolver

__all__ = [
    "SolutionVariables", "PrimalVariables", "DesignVariables",
    "RegistrationTape", "ArrayPrimalSolver"
]
