"""Configuration management for one-shot optimization runs."""

import json
import logging
from pathlib import Path
from typing import Dict, List, Any, Optional, Union
from dataclasses import dataclass, field
from enum import Enum

import numpy as np
import yaml

logger = logging.getLogger(__name__)


class ConstraintType(Enum):
    """Kinds of design constraints."""
    EQUALITY = "equality"
    LESS_EQUAL = "less_equal"
    GREATER_EQUAL = "greater_equal"


class ReductionKind(Enum):
    """Available global-sum strategies."""
    SERIAL = "serial"
    MPI = "mpi"


@dataclass
class ConstraintConfig:
    """Configuration for a single design constraint."""
    name: str
    kind: ConstraintType = ConstraintType.EQUALITY
    value: float = 0.0

    def __post_init__(self) -> None:
        if isinstance(self.kind, str):
            self.kind = ConstraintType(self.kind)
        self.value = float(self.value)


@dataclass
class ParameterBounds:
    """Clamping bounds applied to the estimated control parameters.

    Attributes:
        penalty_min: Lower bound for alpha, beta and gamma
        penalty_max: Upper bound for alpha, beta and gamma
        rho_margin: rho is capped at ``1 - rho_margin``
        theta_min: Lower bound for theta (upper bound is 1)
    """
    penalty_min: float = 1.0e-9
    penalty_max: float = 1.0e9
    rho_margin: float = 1.0e-9
    theta_min: float = 1.0e-9

    def __post_init__(self) -> None:
        # YAML 1.1 reads exponents without a dot (1e-9) as strings
        self.penalty_min = float(self.penalty_min)
        self.penalty_max = float(self.penalty_max)
        self.rho_margin = float(self.rho_margin)
        self.theta_min = float(self.theta_min)

        if not 0.0 < self.penalty_min < self.penalty_max:
            raise ValueError("Penalty bounds must satisfy 0 < penalty_min < penalty_max")
        if not 0.0 < self.rho_margin < 1.0:
            raise ValueError("rho_margin must lie in (0, 1)")
        if not 0.0 < self.theta_min <= 1.0:
            raise ValueError("theta_min must lie in (0, 1]")

    @property
    def rho_max(self) -> float:
        return 1.0 - self.rho_margin


@dataclass
class OneShotConfig:
    """Main configuration for a one-shot optimization run.

    Attributes:
        constraints: Design constraints, one multiplier and gamma each
        alpha: Initial penalty weight on the primal residual
        beta: Initial penalty weight on the adjoint residual
        gamma: Initial multiplier scale per constraint. A single value is
            broadcast to every constraint.
        fd_step: Default step size for finite-difference sensitivities
        bounds: Clamping bounds for the estimated parameters
        denominator_floor: Reference delta norms at or below this value are
            treated as zero when estimating rho and theta
        reduction: Global-sum strategy, ``"serial"`` or ``"mpi"``
    """
    constraints: List[ConstraintConfig] = field(default_factory=list)
    alpha: float = 1.0
    beta: float = 1.0
    gamma: Union[float, List[float]] = 1.0
    fd_step: float = 1.0e-3
    bounds: ParameterBounds = field(default_factory=ParameterBounds)
    denominator_floor: float = float(np.finfo(float).tiny)
    reduction: ReductionKind = ReductionKind.SERIAL

    def __post_init__(self) -> None:
        """Validate the configuration after initialization."""
        if isinstance(self.reduction, str):
            self.reduction = ReductionKind(self.reduction)
        self.alpha = float(self.alpha)
        self.beta = float(self.beta)
        self.fd_step = float(self.fd_step)
        self.denominator_floor = float(self.denominator_floor)

        if np.isscalar(self.gamma):
            self.gamma = [float(self.gamma)] * self.n_constr
        else:
            self.gamma = [float(g) for g in self.gamma]
        if len(self.gamma) != self.n_constr:
            raise ValueError(
                f"Expected {self.n_constr} gamma values, got {len(self.gamma)}"
            )

        if self.fd_step == 0.0:
            raise ValueError("fd_step must be non-zero")
        if self.denominator_floor < 0.0:
            raise ValueError("denominator_floor must be non-negative")

    @property
    def n_constr(self) -> int:
        """Number of configured constraints."""
        return len(self.constraints)

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> 'OneShotConfig':
        """Load configuration from YAML or JSON file."""
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'r') as f:
            if config_path.suffix.lower() in ['.yaml', '.yml']:
                data = yaml.safe_load(f) or {}
            elif config_path.suffix.lower() == '.json':
                data = json.load(f)
            else:
                raise ValueError(f"Unsupported config file format: {config_path.suffix}")

        logger.info(f"Loaded one-shot configuration from {config_path}")
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'OneShotConfig':
        """Create configuration from dictionary."""
        config_data = dict(data)

        constraints = []
        for constr_data in data.get('constraints', []):
            constraints.append(ConstraintConfig(**constr_data))
        config_data['constraints'] = constraints

        config_data['bounds'] = ParameterBounds(**data.get('bounds', {}))

        return cls(**config_data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'constraints': [
                {
                    'name': constr.name,
                    'kind': constr.kind.value,
                    'value': constr.value
                }
                for constr in self.constraints
            ],
            'alpha': self.alpha,
            'beta': self.beta,
            'gamma': list(self.gamma),
            'fd_step': self.fd_step,
            'bounds': {
                'penalty_min': self.bounds.penalty_min,
                'penalty_max': self.bounds.penalty_max,
                'rho_margin': self.bounds.rho_margin,
                'theta_min': self.bounds.theta_min
            },
            'denominator_floor': self.denominator_floor,
            'reduction': self.reduction.value
        }

    def save(self, config_path: Union[str, Path]) -> None:
        """Save configuration to file."""
        config_path = Path(config_path)

        with open(config_path, 'w') as f:
            if config_path.suffix.lower() in ['.yaml', '.yml']:
                yaml.dump(self.to_dict(), f, default_flow_style=False)
            elif config_path.suffix.lower() == '.json':
                json.dump(self.to_dict(), f, indent=2)
            else:
                raise ValueError(f"Unsupported config file format: {config_path.suffix}")

    def set_penalty_weights(self, alpha: float, beta: float) -> None:
        """Record the adapted penalty weights."""
        self.alpha = float(alpha)
        self.beta = float(beta)

    def set_gamma(self, gamma: float, constr_index: Optional[int] = None) -> None:
        """Record an adapted multiplier scale for one or all constraints."""
        if constr_index is None:
            self.gamma = [float(gamma)] * self.n_constr
        else:
            self.gamma[constr_index] = float(gamma)
