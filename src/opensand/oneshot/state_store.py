"""
Snapshot management of the primal and design states.

Every operation acts on both states at once and visits every point,
halo copies included. No reductions take place here.
"""

from enum import Enum
import logging
from typing import Optional

from ..core.config import OneShotConfig
from ..solvers.variables import SolutionVariables

logger = logging.getLogger(__name__)


class SnapshotSlot(Enum):
    """Reference snapshots a delta can be taken against."""
    STORE = "store"
    SAVE = "save"


class StateStore:
    """Store/Save/Delta bookkeeping for the coupled primal-design iteration."""

    def __init__(self, primal: SolutionVariables, design: SolutionVariables,
                 config: Optional[OneShotConfig] = None):
        if primal.solution.shape != design.solution.shape:
            raise ValueError(
                f"Primal state {primal.solution.shape} and design state "
                f"{design.solution.shape} must have the same shape"
            )
        self.primal = primal
        self.design = design
        self.config = config or OneShotConfig()

    def _states(self):
        return (self.primal, self.design)

    def snapshot_store(self) -> None:
        """Store <- current."""
        for nodes in self._states():
            nodes.solution_store[:] = nodes.solution

    def snapshot_save(self) -> None:
        """Save <- current."""
        for nodes in self._states():
            nodes.solution_save[:] = nodes.solution

    def snapshot_old_store(self) -> None:
        """OldStore <- Store, keeping the previously accepted baseline."""
        for nodes in self._states():
            nodes.solution_old_store[:] = nodes.solution_store

    def load_from_store(self) -> None:
        """Current <- Store."""
        for nodes in self._states():
            nodes.solution[:] = nodes.solution_store

    def load_from_save(self) -> None:
        """Current <- Save."""
        for nodes in self._states():
            nodes.solution[:] = nodes.solution_save

    def compute_delta(self, reference: SnapshotSlot = SnapshotSlot.STORE) -> None:
        """Delta <- current - reference."""
        reference = SnapshotSlot(reference)
        for nodes in self._states():
            if reference == SnapshotSlot.STORE:
                ref = nodes.solution_store
            else:
                ref = nodes.solution_save
            nodes.solution_delta[:] = nodes.solution - ref

    def commit_delta_to_history(self) -> None:
        """DeltaStore <- Delta."""
        for nodes in self._states():
            nodes.solution_delta_store[:] = nodes.solution_delta

    def interpolate(self, step_size: float) -> None:
        """Current <- (1 - step_size) * Store + step_size * Save.

        Both end points are reproduced exactly for step sizes 0 and 1.
        """
        for nodes in self._states():
            nodes.solution[:] = ((1.0 - step_size) * nodes.solution_store
                                 + step_size * nodes.solution_save)

    def update_state_variable(self, fd_step: Optional[float] = None) -> None:
        """
        Move the primal state along the design increment.

        Sets the primal current solution to ``Store + fd_step * Delta_design``,
        the perturbed point of a finite-difference sensitivity evaluation.
        ``fd_step`` defaults to the configured ``fd_step``. The design state
        is left untouched.
        """
        if fd_step is None:
            fd_step = self.config.fd_step
        self.primal.solution[:] = (self.primal.solution_store
                                   + fd_step * self.design.solution_delta)
        logger.debug(f"Primal state moved along design delta with step {fd_step:.3e}")
