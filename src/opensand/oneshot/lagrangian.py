"""Augmented Lagrangian merit function of the one-shot iteration."""

import logging

import numpy as np

from ..core.state import OptimizationState
from ..parallel.reduction import ReductionStrategy
from ..solvers.variables import SolutionVariables

logger = logging.getLogger(__name__)


class LagrangianEvaluator:
    """
    Evaluates the augmented Lagrangian merit value

        L = alpha/2 |dy|^2 + beta/2 |dbar|^2 + dy . bar_store

    over the owned points, where dy and dbar are the primal and design
    increments and bar_store is the stored design state.
    """

    def __init__(self,
                 primal: SolutionVariables,
                 design: SolutionVariables,
                 state: OptimizationState,
                 reduction: ReductionStrategy):
        self.primal = primal
        self.design = design
        self.state = state
        self.reduction = reduction

    def evaluate(self) -> float:
        """Merit value of the current increments.

        Each of the three terms is reduced globally on its own, in the order
        primal penalty, design penalty, coupling.
        """
        owned = self.primal.owned
        dp = self.primal.solution_delta[owned]
        dd = self.design.solution_delta[owned]
        design_store = self.design.solution_store[owned]

        term_primal = self.reduction.sum(float(np.sum(dp * dp)) * (self.state.alpha / 2.0))
        term_design = self.reduction.sum(float(np.sum(dd * dd)) * (self.state.beta / 2.0))
        term_cross = self.reduction.sum(float(np.sum(dp * design_store)))

        lagrangian = term_primal + term_design + term_cross
        logger.debug(f"Augmented Lagrangian = {lagrangian:.10e} "
                     f"(primal {term_primal:.3e}, design {term_design:.3e}, "
                     f"coupling {term_cross:.3e})")
        return lagrangian
