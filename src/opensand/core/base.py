"""Abstract collaborator interfaces consumed by the one-shot core.

The one-shot control layer never owns the primal solver, the mesh or the
differentiation engine. It drives them through the narrow interfaces
defined here.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Iterable
import numpy as np

if TYPE_CHECKING:
    from ..solvers.variables import SolutionVariables

# Tape keys of the arrays the one-shot core resets between recordings
PRIMAL_SOLUTION = "primal.solution"
PRIMAL_SOLUTION_STORE = "primal.solution_store"
PRIMAL_SOLUTION_SAVE = "primal.solution_save"
MESH_COORDS = "mesh.coords"
MESH_COORDS_OLD = "mesh.coords_old"


class DifferentiationTape(ABC):
    """Registration bookkeeping of the algorithmic-differentiation engine.

    Inputs are identified by a key such as ``"primal.solution"`` or
    ``"mesh.coords"``; a key stands for every scalar of the named array.
    """

    @abstractmethod
    def register_input(self, key: str) -> None:
        """Register every scalar of the named array as a tape input."""
        pass

    @abstractmethod
    def reset_input(self, key: str) -> None:
        """Clear the input registration of the named array."""
        pass

    @abstractmethod
    def is_registered(self, key: str) -> bool:
        """Whether the named array is currently a registered input."""
        pass

    def reset_inputs(self, keys: Iterable[str]) -> None:
        for key in keys:
            self.reset_input(key)


class AdjointCapableSolver(ABC):
    """Primal (flow) solver capable of adjoint seeding and extraction.

    Implementations expose per-point solution slots through ``nodes``, a
    sparse system matrix that can be cleared, and the adjoint input/output
    buffers of the differentiation engine.
    """

    @property
    @abstractmethod
    def nodes(self) -> 'SolutionVariables':
        """Per-point solution slots of the primal state."""
        pass

    @property
    @abstractmethod
    def tape(self) -> DifferentiationTape:
        """Differentiation tape the solver records on."""
        pass

    @property
    def n_point(self) -> int:
        """Number of points including halo copies."""
        return self.nodes.n_point

    @property
    def n_point_domain(self) -> int:
        """Number of locally owned points."""
        return self.nodes.n_point_domain

    @property
    def n_var(self) -> int:
        """Number of state variables per point."""
        return self.nodes.n_var

    @abstractmethod
    def clear_jacobian(self) -> None:
        """Set every entry of the system matrix to zero."""
        pass

    @abstractmethod
    def register_variables(self, reset: bool = False) -> None:
        """Register the solver's variables as inputs of the next recording.

        Args:
            reset: Discard the indices of a previous registration first
        """
        pass

    @abstractmethod
    def set_adjoint_input(self, values: np.ndarray) -> None:
        """Seed the adjoint of the solution, shape (n_point, n_var)."""
        pass

    @abstractmethod
    def get_adjoint_output(self) -> np.ndarray:
        """Computed adjoint of the solution, shape (n_point, n_var)."""
        pass
