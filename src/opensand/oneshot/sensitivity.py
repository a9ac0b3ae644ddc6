"""
Geometric sensitivity bookkeeping for the one-shot method.

The raw sensitivity extracted after each recording is kept either as the
shifted-Lagrangian sensitivity or as the sensitivity of one augmented
Lagrangian term, combined into finite-difference sensitivities, and finally
exported to the mesh.
"""

from enum import IntEnum
import logging
from typing import Optional

from ..core.config import OneShotConfig
from ..mesh.geometry import MeshGeometry
from ..solvers.variables import DesignVariables

logger = logging.getLogger(__name__)


class AugmentedTerm(IntEnum):
    """Terms of the augmented Lagrangian with their own sensitivity slot."""
    ALPHA = 0
    BETA = 1
    GAMMA = 2


class SensitivityManager:
    """Moves sensitivities between the design state and the mesh."""

    def __init__(self, design: DesignVariables, mesh: MeshGeometry,
                 config: Optional[OneShotConfig] = None):
        if design.sensitivity.shape != mesh.sensitivity.shape:
            raise ValueError(
                f"Design sensitivity {design.sensitivity.shape} does not match "
                f"mesh sensitivity {mesh.sensitivity.shape}"
            )
        self.design = design
        self.mesh = mesh
        self.config = config or OneShotConfig()

    def store_shifted_lagrangian(self) -> None:
        self.design.sensitivity_shifted[:] = self.design.sensitivity

    def store_augmented_lagrangian(self, term: AugmentedTerm) -> None:
        self.design.sensitivity_augmented[AugmentedTerm(term)] = self.design.sensitivity

    def apply_finite_difference(self, fd_step: Optional[float] = None) -> None:
        """sensitivity <- (sensitivity - shifted) / fd_step, by default the configured step."""
        if fd_step is None:
            fd_step = self.config.fd_step
        if fd_step == 0.0:
            raise ValueError("Finite-difference step must be non-zero")
        self.design.sensitivity[:] = (
            (self.design.sensitivity - self.design.sensitivity_shifted) * (1.0 / fd_step)
        )

    def export_augmented_lagrangian(self, term: AugmentedTerm) -> None:
        """Write one augmented-Lagrangian term's sensitivity to the mesh."""
        self.mesh.set_sensitivity(self.design.sensitivity_augmented[AugmentedTerm(term)])

    def export_gradient(self) -> None:
        """Write the shifted-Lagrangian sensitivity to the mesh."""
        self.mesh.set_sensitivity(self.design.sensitivity_shifted)
        logger.info("Exported shifted-Lagrangian gradient to mesh sensitivity")
