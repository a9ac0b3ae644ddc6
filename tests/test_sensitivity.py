#!/usr/bin/env python
"""
Test suite for sensitivity storage and export.
"""

import unittest

import numpy as np
from numpy.testing import assert_array_equal, assert_allclose

from tests.helpers import make_solver
from opensand.oneshot.sensitivity import AugmentedTerm


class TestSensitivityManager(unittest.TestCase):

    def setUp(self):
        self.solver = make_solver(n_point=4, n_var=2, n_dim=2)
        self.manager = self.solver.sensitivity
        self.design = self.solver.design
        self.mesh = self.solver.mesh

    def test_mesh_sensitivity_initialized(self):
        assert_array_equal(self.mesh.sensitivity, np.zeros((4, 2)))

    def test_finite_difference_sensitivity(self):
        self.design.sensitivity[:] = 1.0
        self.manager.store_shifted_lagrangian()

        self.design.sensitivity[:] = 1.5
        self.manager.apply_finite_difference(0.5)
        assert_allclose(self.design.sensitivity, np.full((4, 2), 1.0))

    def test_zero_step_rejected(self):
        with self.assertRaises(ValueError):
            self.manager.apply_finite_difference(0.0)

    def test_finite_difference_defaults_to_configured_step(self):
        solver = make_solver(n_point=4, n_var=2, n_dim=2, fd_step=0.25)
        design = solver.design
        design.sensitivity[:] = 2.0
        solver.sensitivity.store_shifted_lagrangian()

        design.sensitivity[:] = 3.0
        solver.sensitivity.apply_finite_difference()
        assert_allclose(design.sensitivity, np.full((4, 2), 4.0))

    def test_augmented_terms_are_kept_apart(self):
        for term in AugmentedTerm:
            self.design.sensitivity[:] = float(term) + 1.0
            self.manager.store_augmented_lagrangian(term)

        self.manager.export_augmented_lagrangian(AugmentedTerm.BETA)
        assert_array_equal(self.mesh.sensitivity, np.full((4, 2), 2.0))

        self.manager.export_augmented_lagrangian(AugmentedTerm.GAMMA)
        assert_array_equal(self.mesh.sensitivity, np.full((4, 2), 3.0))

    def test_export_gradient(self):
        self.design.sensitivity[:] = np.arange(8.0).reshape(4, 2)
        self.manager.store_shifted_lagrangian()
        self.design.sensitivity[:] = 0.0

        self.manager.export_gradient()
        assert_array_equal(self.mesh.sensitivity, np.arange(8.0).reshape(4, 2))


if __name__ == "__main__":
    unittest.main()
