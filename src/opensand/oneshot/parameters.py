"""
Adaptive estimation of the one-shot control parameters.

rho (contraction rate of the primal iteration) and theta (coupling between
primal and design increments) are estimated from the current and previous
solution increments. The augmented-Lagrangian penalty weights alpha and beta
follow from rho and theta, the multiplier scale gamma from the norm of the
constraint merit. Every estimate is clamped to fixed bounds; clamping is
silent.

Only the plain formulas are active. Rate-limited updates (bounding the
change relative to the previous value) and an asymmetric gamma for
inequality constraints near activation are extension points of
``estimate_gamma`` and are not applied.
"""

from typing import Optional, Sequence, Tuple
import logging

import numpy as np

from ..core.config import OneShotConfig
from ..core.state import OptimizationState
from ..parallel.reduction import ReductionStrategy
from ..solvers.variables import SolutionVariables

logger = logging.getLogger(__name__)


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp a scalar to [lower, upper]."""
    return max(min(value, upper), lower)


class ParameterEstimator:
    """Estimates rho, theta, alpha, beta and gamma."""

    def __init__(self,
                 primal: SolutionVariables,
                 design: SolutionVariables,
                 state: OptimizationState,
                 config: OneShotConfig,
                 reduction: ReductionStrategy):
        self.primal = primal
        self.design = design
        self.state = state
        self.config = config
        self.reduction = reduction

    def _delta_norms(self) -> Tuple[float, float, float]:
        """Globally reduced increment norms over the owned points."""
        owned = self.primal.owned
        dp = self.primal.solution_delta[owned]
        dp_old = self.primal.solution_delta_store[owned]
        dd = self.design.solution_delta[owned]
        dd_old = self.design.solution_delta_store[owned]

        my_norm_delta = float(np.sum(dp_old * dp_old))
        my_norm_delta_new = float(np.sum(dp * dp))
        my_helper = float(np.sum(dp_old * dd - dd_old * dp))

        norm_delta = self.reduction.sum(my_norm_delta)
        norm_delta_new = self.reduction.sum(my_norm_delta_new)
        helper = self.reduction.sum(my_helper)
        return norm_delta, norm_delta_new, helper

    def estimate_rho_theta(self) -> Tuple[float, float]:
        """
        Estimate the contraction rate rho and the coupling ratio theta.

        rho = min(|dy| / |dy_old|, 1 - margin) and
        theta = min(max(sqrt(|h| / |dy_old|^2), theta_min), 1), where h is the
        antisymmetric cross product of primal and design increments.

        A reference norm at or below ``config.denominator_floor`` yields the
        nearest bound instead of a non-finite ratio: rho is 0 if the new
        increment vanishes too and ``1 - margin`` otherwise; theta is
        ``theta_min`` if the cross product vanishes and 1 otherwise.

        Returns:
            Tuple of (rho, theta)
        """
        bounds = self.config.bounds
        floor = self.config.denominator_floor
        norm_delta, norm_delta_new, helper = self._delta_norms()

        if norm_delta <= floor:
            rho = 0.0 if norm_delta_new <= floor else bounds.rho_max
            theta = bounds.theta_min if abs(helper) <= floor else 1.0
            logger.warning(f"Reference increment norm {norm_delta:.3e} vanishes; "
                           f"rho and theta set to bounds ({rho:.3e}, {theta:.3e})")
        else:
            rho = min(np.sqrt(norm_delta_new) / np.sqrt(norm_delta), bounds.rho_max)
            theta = clamp(np.sqrt(abs(helper) / norm_delta), bounds.theta_min, 1.0)

        self.state.rho = float(rho)
        self.state.theta = float(theta)
        self.state.rho_old = self.state.rho
        self.state.theta_old = self.state.theta

        logger.debug(f"Estimated rho = {self.state.rho:.6e}, theta = {self.state.theta:.6e}")
        return self.state.rho, self.state.theta

    def estimate_alpha_beta(self) -> Tuple[float, float]:
        """
        Penalty weights from rho and theta.

        alpha = 2 theta / (1 - rho)^2 and beta = 2 / theta, both clamped to
        the penalty bounds and recorded in the state and the configuration.

        Returns:
            Tuple of (alpha, beta)
        """
        bounds = self.config.bounds
        rho, theta = self.state.rho, self.state.theta

        alpha = 2.0 * theta / ((1.0 - rho) * (1.0 - rho))
        beta = 2.0 / theta

        alpha = clamp(alpha, bounds.penalty_min, bounds.penalty_max)
        beta = clamp(beta, bounds.penalty_min, bounds.penalty_max)

        self.state.alpha = alpha
        self.state.beta = beta
        self.config.set_penalty_weights(alpha, beta)

        logger.debug(f"Estimated alpha = {alpha:.6e}, beta = {beta:.6e}")
        return alpha, beta

    def estimate_gamma(self,
                       bcheck_norm: float,
                       constraint_values: Optional[Sequence[float]] = None,
                       lambdas: Optional[Sequence[float]] = None) -> np.ndarray:
        """
        Multiplier scale for every constraint.

        gamma = 1.01 / bcheck_norm, clamped to the penalty bounds. A zero
        ``bcheck_norm`` gives the upper bound, the limit of the clamped
        formula. A negative one clamps to the lower bound.

        Args:
            bcheck_norm: Norm of the constraint-merit check matrix
            constraint_values: Current constraint values, reserved for
                constraint-type aware scaling
            lambdas: Current multipliers, reserved for constraint-type aware
                scaling

        Returns:
            Array of gamma values [n_constr]
        """
        bounds = self.config.bounds

        if bcheck_norm != 0.0:
            gamma = clamp(1.01 / bcheck_norm, bounds.penalty_min, bounds.penalty_max)
        else:
            gamma = bounds.penalty_max

        for i_constr in range(self.state.n_constr):
            self.state.gamma[i_constr] = gamma
            self.config.set_gamma(gamma, i_constr)

        logger.debug(f"Estimated gamma = {gamma:.6e} for {self.state.n_constr} constraints")
        return self.state.gamma.copy()
