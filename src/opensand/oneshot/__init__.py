"""
One-Shot Optimization Control

Components of the simultaneous-analysis-and-design iteration:
- State snapshots and increments
- Mesh coordinate snapshots and steps
- Adjoint seeding and extraction
- Adaptive rho/theta/alpha/beta/gamma estimation
- Augmented Lagrangian merit evaluation
- Constraint-gradient direction bookkeeping
- Sensitivity storage and export
"""

from .state_store import StateStore, SnapshotSlot
from .mesh_stepper import MeshStepper
from .adjoint_bridge import AdjointBridge
from .parameters import ParameterEstimator
from .lagrangian import LagrangianEvaluator
from .constraints import ConstraintDerivativeTracker
from .sensitivity import SensitivityManager, AugmentedTerm
from .solver import OneShotSolver

__all__ = [
    'StateStore', 'SnapshotSlot', 'MeshStepper', 'AdjointBridge',
    'ParameterEstimator', 'LagrangianEvaluator', 'ConstraintDerivativeTracker',
    'SensitivityManager', 'AugmentedTerm', 'OneShotSolver'
]
