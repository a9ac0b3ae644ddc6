"""Shared builders for the OpenSAND test suite."""

import os
import sys
from typing import List, Optional

import numpy as np

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))

from opensand.core.config import ConstraintConfig, OneShotConfig
from opensand.mesh.geometry import BoundaryMarker, MeshGeometry
from opensand.oneshot.solver import OneShotSolver
from opensand.parallel.reduction import ReductionStrategy, SerialReduction
from opensand.solvers.primal import ArrayPrimalSolver


class CountingReduction(SerialReduction):
    """Serial reduction that records every contribution it receives."""

    def __init__(self):
        self.calls: List[float] = []

    def sum(self, local_value: float) -> float:
        self.calls.append(float(local_value))
        return super().sum(local_value)


class ReplicatedReduction(ReductionStrategy):
    """Behaves like ``n_ranks`` processes holding identical data."""

    def __init__(self, n_ranks: int):
        self.n_ranks = n_ranks

    @property
    def size(self) -> int:
        return self.n_ranks

    def sum(self, local_value: float) -> float:
        return float(local_value) * self.n_ranks


def make_config(n_constr: int = 2, **kwargs) -> OneShotConfig:
    constraints = [ConstraintConfig(name=f"constraint_{i}") for i in range(n_constr)]
    return OneShotConfig(constraints=constraints, **kwargs)


def make_mesh(n_point: int = 4, n_dim: int = 2,
              n_point_domain: Optional[int] = None) -> MeshGeometry:
    coords = np.arange(n_point * n_dim, dtype=float).reshape(n_point, n_dim)
    n_vertex = min(2, n_point)
    normals = np.zeros((n_vertex, n_dim))
    normals[np.arange(n_vertex), 1 - np.arange(n_vertex) % 2] = 1.0
    wall = BoundaryMarker(name="wall", vertex_nodes=np.arange(n_vertex), normals=normals)
    return MeshGeometry(coords, markers=[wall], n_point_domain=n_point_domain)


def make_solver(n_point: int = 4,
                n_var: int = 2,
                n_dim: int = 2,
                n_point_domain: Optional[int] = None,
                n_constr: int = 2,
                reduction: Optional[ReductionStrategy] = None,
                **config_kwargs) -> OneShotSolver:
    primal = ArrayPrimalSolver(n_point, n_var, n_point_domain)
    mesh = make_mesh(n_point, n_dim, n_point_domain)
    config = make_config(n_constr, **config_kwargs)
    return OneShotSolver(primal, mesh, config, reduction=reduction or SerialReduction())


def fill_random(solver: OneShotSolver, seed: int = 0) -> np.random.Generator:
    """Fill every solution slot of both states with random values."""
    rng = np.random.default_rng(seed)
    for nodes in (solver.primal.nodes, solver.design):
        for name in ("solution", "solution_store", "solution_save",
                     "solution_delta", "solution_delta_store"):
            getattr(nodes, name)[:] = rng.normal(size=nodes.solution.shape)
    return rng
