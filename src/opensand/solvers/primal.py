"""
In-memory primal solver.

``ArrayPrimalSolver`` implements the ``AdjointCapableSolver`` interface on
top of numpy solution slots and a ``scipy.sparse`` system matrix. It does
not discretize any PDE: the state, the adjoint output and the matrix entries
are written by the caller. It serves single-process studies of the one-shot
control loop and the test suite.
"""

from typing import Optional
import logging

import numpy as np
import scipy.sparse as sp

from ..core.base import AdjointCapableSolver, DifferentiationTape, PRIMAL_SOLUTION
from .tape import RegistrationTape
from .variables import PrimalVariables

logger = logging.getLogger(__name__)


class ArrayPrimalSolver(AdjointCapableSolver):
    """Primal solver backed by plain arrays."""

    def __init__(self,
                 n_point: int,
                 n_var: int,
                 n_point_domain: Optional[int] = None,
                 jacobian: Optional[sp.spmatrix] = None,
                 tape: Optional[DifferentiationTape] = None):
        """
        Initialize the solver.

        Args:
            n_point: Number of points including halo copies
            n_var: Number of state variables per point
            n_point_domain: Number of locally owned points (default: all)
            jacobian: System matrix of size (n_point*n_var)^2; defaults to a
                block-diagonal pattern
            tape: Differentiation tape (default: RegistrationTape)
        """
        self._nodes = PrimalVariables(n_point, n_var, n_point_domain)
        self._tape = tape or RegistrationTape()

        n_dof = n_point * n_var
        if jacobian is None:
            jacobian = sp.block_diag([np.ones((n_var, n_var))] * n_point, format='csr')
        if jacobian.shape != (n_dof, n_dof):
            raise ValueError(
                f"Jacobian shape {jacobian.shape} does not match {n_dof} unknowns"
            )
        self.jacobian = sp.csr_matrix(jacobian, dtype=float)

        logger.info(f"Initialized array primal solver: {n_point} points, {n_var} variables")

    @property
    def nodes(self) -> PrimalVariables:
        return self._nodes

    @property
    def tape(self) -> DifferentiationTape:
        return self._tape

    def clear_jacobian(self) -> None:
        """Zero the matrix values, keeping the sparsity pattern."""
        self.jacobian.data[:] = 0.0

    def register_variables(self, reset: bool = False) -> None:
        if reset:
            self._tape.reset_input(PRIMAL_SOLUTION)
        self._tape.register_input(PRIMAL_SOLUTION)

    def set_adjoint_input(self, values: np.ndarray) -> None:
        self._nodes.adjoint_input[:] = values

    def get_adjoint_output(self) -> np.ndarray:
        return self._nodes.adjoint_output.copy()
