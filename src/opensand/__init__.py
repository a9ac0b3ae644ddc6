"""
OpenSAND - One-shot optimization control for PDE-constrained design.

Advances primal state, adjoint state and design variables together in a
single coupled iteration, driven by an augmented Lagrangian merit function
whose penalty weights adapt to the observed convergence.
"""

import logging

__version__ = "1.0.0"

from opensand.core import (
    OneShotConfig, ConstraintConfig, ConstraintType, ParameterBounds,
    OptimizationState, AdjointCapableSolver, DifferentiationTape
)
from opensand.parallel import ReductionStrategy, SerialReduction, MPIReduction, create_reduction
from opensand.solvers import ArrayPrimalSolver, RegistrationTape, DesignVariables
from opensand.mesh import MeshGeometry, BoundaryMarker
from opensand.oneshot import OneShotSolver, SnapshotSlot, AugmentedTerm

__all__ = [
    "OneShotConfig", "ConstraintConfig", "ConstraintType", "ParameterBounds",
    "OptimizationState", "AdjointCapableSolver", "DifferentiationTape",
    "ReductionStrategy", "SerialReduction", "MPIReduction", "create_reduction",
    "ArrayPrimalSolver", "RegistrationTape", "DesignVariables",
    "MeshGeometry", "BoundaryMarker",
    "OneShotSolver", "SnapshotSlot", "AugmentedTerm"
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
