"""
Solution Variable Data Structures

Per-point solution snapshot slots for the primal and design (adjoint)
states of a one-shot optimization.
"""

import numpy as np
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class SolutionVariables:
    """
    Per-point solution slots of one state.

    Every slot is an ``(n_point, n_var)`` array. Rows ``[0, n_point_domain)``
    belong to this process; the remaining rows are halo copies of points
    owned by neighbouring processes.
    """

    def __init__(self,
                 n_point: int,
                 n_var: int,
                 n_point_domain: Optional[int] = None):
        """
        Initialize solution variables.

        Args:
            n_point: Number of points including halo copies
            n_var: Number of variables per point
            n_point_domain: Number of locally owned points (default: all)
        """
        if n_point_domain is None:
            n_point_domain = n_point
        if not 0 <= n_point_domain <= n_point:
            raise ValueError(
                f"n_point_domain must lie in [0, {n_point}], got {n_point_domain}"
            )
        if n_var < 1:
            raise ValueError("At least one variable per point is required")

        self.n_point = n_point
        self.n_var = n_var
        self.n_point_domain = n_point_domain

        shape = (n_point, n_var)
        self.solution = np.zeros(shape)
        self.solution_store = np.zeros(shape)
        self.solution_save = np.zeros(shape)
        self.solution_old_store = np.zeros(shape)
        self.solution_delta = np.zeros(shape)
        self.solution_delta_store = np.zeros(shape)

    @property
    def owned(self) -> slice:
        """Row slice of the locally owned points."""
        return slice(0, self.n_point_domain)

    def set_solution(self, values: np.ndarray) -> None:
        """Overwrite the current solution in place."""
        self.solution[:] = values


class PrimalVariables(SolutionVariables):
    """Primal solution slots plus the adjoint seed and result buffers."""

    def __init__(self,
                 n_point: int,
                 n_var: int,
                 n_point_domain: Optional[int] = None):
        super().__init__(n_point, n_var, n_point_domain)
        self.adjoint_input = np.zeros((n_point, n_var))
        self.adjoint_output = np.zeros((n_point, n_var))


class DesignVariables(SolutionVariables):
    """
    Design/adjoint solution slots plus geometric sensitivity buffers.

    ``sensitivity`` receives the raw geometric sensitivity of the latest
    extraction; ``sensitivity_shifted`` keeps the shifted-Lagrangian
    sensitivity and ``sensitivity_augmented`` one sensitivity per
    augmented-Lagrangian term.
    """

    def __init__(self,
                 n_point: int,
                 n_var: int,
                 n_dim: int,
                 n_point_domain: Optional[int] = None,
                 n_terms: int = 3):
        super().__init__(n_point, n_var, n_point_domain)
        self.n_dim = n_dim
        self.n_terms = n_terms

        self.sensitivity = np.zeros((n_point, n_dim))
        self.sensitivity_shifted = np.zeros((n_point, n_dim))
        self.sensitivity_augmented = np.zeros((n_terms, n_point, n_dim))

        logger.debug(f"Initialized design variables: {n_point} points, "
                     f"{n_var} variables, {n_dim} dimensions")
