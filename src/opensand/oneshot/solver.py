"""
One-shot (SAND) optimization control.

``OneShotSolver`` composes the snapshot, seeding, estimation, merit and
constraint components around an adjoint-capable primal solver and a mesh.
An outer optimization loop drives it phase by phase:

    record    set_recording(), bridge.push_adjoint_seed() / push_zero_seed()
    solve     external primal + adjoint evaluation
    extract   bridge.pull_adjoint_output()
    estimate  parameters.estimate_rho_theta(), estimate_alpha_beta(), ...
    evaluate  lagrangian.evaluate()
    accept    external line search
    snapshot  states.snapshot_store(), mesh_stepper.snapshot_old(), ...

Example:
    ```python
    from opensand import OneShotConfig, OneShotSolver, ArrayPrimalSolver, MeshGeometry

    config = OneShotConfig.from_file("oneshot.yaml")
    solver = OneShotSolver(ArrayPrimalSolver(n_point, n_var), MeshGeometry(coords), config)
    solver.set_recording()
    ```
"""

from typing import Optional
import logging

from ..core.base import AdjointCapableSolver
from ..core.config import OneShotConfig
from ..core.state import OptimizationState
from ..mesh.geometry import MeshGeometry
from ..parallel.reduction import ReductionStrategy, create_reduction
from ..solvers.variables import DesignVariables
from .adjoint_bridge import AdjointBridge
from .constraints import ConstraintDerivativeTracker
from .lagrangian import LagrangianEvaluator
from .mesh_stepper import MeshStepper
from .parameters import ParameterEstimator
from .sensitivity import AugmentedTerm, SensitivityManager
from .state_store import StateStore

logger = logging.getLogger(__name__)


class OneShotSolver:
    """Optimization-control instance of one process."""

    def __init__(self,
                 primal: AdjointCapableSolver,
                 mesh: MeshGeometry,
                 config: OneShotConfig,
                 reduction: Optional[ReductionStrategy] = None):
        """
        Initialize the one-shot solver.

        Args:
            primal: Adjoint-capable primal solver
            mesh: Mesh geometry of this partition
            config: One-shot configuration
            reduction: Global-sum strategy (default: from ``config.reduction``)
        """
        if primal.n_point != mesh.n_point:
            raise ValueError(
                f"Primal solver has {primal.n_point} points, mesh has {mesh.n_point}"
            )
        if primal.n_point_domain != mesh.n_point_domain:
            raise ValueError(
                f"Primal solver owns {primal.n_point_domain} points, "
                f"mesh owns {mesh.n_point_domain}"
            )

        self.primal = primal
        self.mesh = mesh
        self.config = config
        self.reduction = reduction or create_reduction(config.reduction)

        self.design = DesignVariables(
            primal.n_point, primal.n_var, mesh.n_dim,
            n_point_domain=primal.n_point_domain,
            n_terms=len(AugmentedTerm)
        )
        self.state = OptimizationState.from_config(config)

        self.states = StateStore(primal.nodes, self.design, config)
        self.mesh_stepper = MeshStepper(mesh)
        self.bridge = AdjointBridge(primal, self.design)
        self.parameters = ParameterEstimator(
            primal.nodes, self.design, self.state, config, self.reduction
        )
        self.lagrangian = LagrangianEvaluator(
            primal.nodes, self.design, self.state, self.reduction
        )
        self.constraints = ConstraintDerivativeTracker(
            self.design, config.n_constr, self.reduction
        )
        self.sensitivity = SensitivityManager(self.design, mesh, config)

        mesh.initialize_sensitivity()

        logger.info(f"Initialized one-shot solver: {primal.n_point} points "
                    f"({primal.n_point_domain} owned), {primal.n_var} variables, "
                    f"{config.n_constr} constraints")

    def set_recording(self) -> None:
        """Prepare the primal solver and tape for the next recording pass."""
        self.bridge.prepare_recording()
