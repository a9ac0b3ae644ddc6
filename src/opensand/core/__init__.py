"""Core configuration, state and collaborator interfaces."""

from .config import (
    OneShotConfig, ConstraintConfig, ConstraintType, ParameterBounds, ReductionKind
)
from .state import OptimizationState
from .base import AdjointCapableSolver, DifferentiationTape

__all__ = [
    "OneShotConfig", "ConstraintConfig", "ConstraintType", "ParameterBounds",
    "ReductionKind", "OptimizationState", "AdjointCapableSolver", "DifferentiationTape"
]
