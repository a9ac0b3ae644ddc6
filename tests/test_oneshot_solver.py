#!/usr/bin/env python
"""
End-to-end tests of the one-shot control loop on the array primal solver.
"""

import unittest

import numpy as np
import pytest

from tests.helpers import CountingReduction, make_config, make_mesh, make_solver
from opensand.oneshot.solver import OneShotSolver
from opensand.oneshot.state_store import SnapshotSlot
from opensand.solvers.primal import ArrayPrimalSolver


class TestOneShotSolver(unittest.TestCase):

    def test_size_mismatch(self):
        with self.assertRaises(ValueError):
            OneShotSolver(ArrayPrimalSolver(4, 2), make_mesh(5), make_config())
        with self.assertRaises(ValueError):
            OneShotSolver(ArrayPrimalSolver(4, 2, n_point_domain=3), make_mesh(4), make_config())

    def test_default_reduction_from_config(self):
        solver = OneShotSolver(ArrayPrimalSolver(4, 2), make_mesh(4), make_config())
        self.assertEqual(solver.reduction.sum(3.0), 3.0)

    def test_contracting_fixed_point_iteration(self):
        """Drive a linear contraction y <- 0.5 y through the coupled loop."""
        reduction = CountingReduction()
        solver = make_solver(n_point=3, n_var=2, n_constr=1, reduction=reduction)
        primal = solver.primal.nodes

        primal.solution[:] = 1.0
        solver.design.solution[:] = 0.1
        solver.states.snapshot_store()
        solver.mesh_stepper.snapshot_old()

        rhos = []
        for iteration in range(4):
            solver.set_recording()
            solver.bridge.push_adjoint_seed()

            # External primal/adjoint evaluation
            primal.solution[:] = 0.5 * primal.solution_store
            primal.adjoint_output[:] = 0.5 * solver.design.solution_store

            solver.bridge.pull_adjoint_output()
            solver.states.compute_delta(SnapshotSlot.STORE)
            if iteration > 0:
                rho, theta = solver.parameters.estimate_rho_theta()
                rhos.append(rho)
                alpha, beta = solver.parameters.estimate_alpha_beta()
                self.assertTrue(np.isfinite(solver.lagrangian.evaluate()))

            solver.states.commit_delta_to_history()
            solver.states.snapshot_store()
            solver.constraints.record_direction(0)

        self.assertEqual(rhos, pytest.approx([0.5, 0.5, 0.5]))
        self.assertEqual(solver.state.rho, pytest.approx(0.5))
        self.assertEqual(solver.state.alpha, pytest.approx(2.0 * solver.state.theta / 0.25))
        self.assertEqual(len(reduction.calls), 3 * 6)

        design_norm = solver.constraints.inner_product(0, 0)
        self.assertEqual(design_norm, pytest.approx(np.sum(solver.design.solution ** 2)))

    def test_line_search_trial_and_reject(self):
        solver = make_solver(n_point=4, n_var=2)
        primal = solver.primal.nodes
        mesh = solver.mesh

        primal.solution[:] = 2.0
        solver.states.snapshot_store()
        solver.mesh_stepper.snapshot_old()
        baseline_coords = mesh.coords_old.copy()

        # Full trial step
        primal.solution[:] = 4.0
        solver.states.snapshot_save()
        mesh.coords[:] = 0.1
        solver.mesh_stepper.step_to(1.0)
        np.testing.assert_allclose(mesh.coords, baseline_coords + 0.1)

        # Halve the step
        solver.states.interpolate(0.5)
        np.testing.assert_allclose(primal.solution, 3.0)

        # Reject
        solver.states.load_from_store()
        solver.mesh_stepper.restore_old()
        np.testing.assert_array_equal(primal.solution, 2.0)
        np.testing.assert_array_equal(mesh.coords, baseline_coords)


if __name__ == "__main__":
    unittest.main()
