"""
Constraint-gradient direction bookkeeping.

For every constraint, the design state at the time of recording is kept as
that constraint's gradient direction. Pairwise inner products of the stored
directions feed the projection of the multiplier update.
"""

import logging

import numpy as np

from ..parallel.reduction import ReductionStrategy
from ..solvers.variables import SolutionVariables

logger = logging.getLogger(__name__)


class ConstraintDerivativeTracker:
    """Owns the constraint directions [n_constr, n_point_domain, n_var]."""

    def __init__(self,
                 design: SolutionVariables,
                 n_constr: int,
                 reduction: ReductionStrategy):
        self.design = design
        self.reduction = reduction
        self.directions = np.zeros((n_constr, design.n_point_domain, design.n_var))

        logger.debug(f"Allocated constraint directions of shape {self.directions.shape}")

    @property
    def n_constr(self) -> int:
        return self.directions.shape[0]

    def _check_index(self, i_constr: int) -> None:
        if not 0 <= i_constr < self.n_constr:
            raise IndexError(
                f"Constraint index {i_constr} out of range for {self.n_constr} constraints"
            )

    def record_direction(self, i_constr: int) -> None:
        """Store the current design state as the direction of a constraint."""
        self._check_index(i_constr)
        self.directions[i_constr] = self.design.solution[self.design.owned]

    def inner_product(self, i_constr: int, j_constr: int) -> float:
        """Global inner product of two stored directions."""
        self._check_index(i_constr)
        self._check_index(j_constr)
        my_product = float(np.sum(self.directions[i_constr] * self.directions[j_constr]))
        return self.reduction.sum(my_product)

    def gram_matrix(self) -> np.ndarray:
        """
        All pairwise inner products of the stored directions.

        Products are reduced one by one for i <= j in row-major order, so
        every rank issues the same sequence of reductions.

        Returns:
            Symmetric matrix [n_constr, n_constr]
        """
        gram = np.zeros((self.n_constr, self.n_constr))
        for i_constr in range(self.n_constr):
            for j_constr in range(i_constr, self.n_constr):
                product = self.inner_product(i_constr, j_constr)
                gram[i_constr, j_constr] = product
                gram[j_constr, i_constr] = product
        return gram
