"""Process-wide control parameters of a one-shot optimization run."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict

import numpy as np

from .config import OneShotConfig

logger = logging.getLogger(__name__)


@dataclass
class OptimizationState:
    """
    Adaptive control parameters shared by the one-shot components.

    Initialized once per run from the configuration, updated by the
    parameter estimator (rho, theta, alpha, beta, gamma) and by the external
    multiplier update (lambdas), and read by the Lagrangian evaluator.
    """

    rho: float = 0.0
    rho_old: float = 1.0
    theta: float = 1.0
    theta_old: float = 1.0
    alpha: float = 1.0
    beta: float = 1.0

    # Per-constraint arrays [n_constr]
    gamma: np.ndarray = field(default_factory=lambda: np.array([]))
    lambdas: np.ndarray = field(default_factory=lambda: np.array([]))

    @classmethod
    def from_config(cls, config: OneShotConfig) -> 'OptimizationState':
        """Create the initial state for a run."""
        state = cls(
            alpha=float(config.alpha),
            beta=float(config.beta),
            gamma=np.array(config.gamma, dtype=float),
            lambdas=np.zeros(config.n_constr)
        )
        logger.debug(f"Initialized optimization state for {config.n_constr} constraints")
        return state

    @property
    def n_constr(self) -> int:
        return self.lambdas.shape[0]

    def set_multipliers(self, values: np.ndarray) -> None:
        """Overwrite the constraint multipliers (external multiplier update)."""
        values = np.asarray(values, dtype=float)
        if values.shape != self.lambdas.shape:
            raise ValueError(
                f"Expected multipliers of shape {self.lambdas.shape}, got {values.shape}"
            )
        self.lambdas[:] = values

    def to_dict(self) -> Dict[str, Any]:
        return {
            'rho': self.rho,
            'theta': self.theta,
            'alpha': self.alpha,
            'beta': self.beta,
            'gamma': self.gamma.tolist(),
            'lambdas': self.lambdas.tolist()
        }
