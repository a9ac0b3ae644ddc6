"""
Adjoint seeding and extraction between the primal solver and design state.
"""

import numpy as np
import logging

from ..core.base import (
    AdjointCapableSolver, MESH_COORDS, MESH_COORDS_OLD,
    PRIMAL_SOLUTION, PRIMAL_SOLUTION_SAVE, PRIMAL_SOLUTION_STORE
)
from ..solvers.variables import SolutionVariables

logger = logging.getLogger(__name__)

RECORDING_INPUTS = (
    PRIMAL_SOLUTION,
    PRIMAL_SOLUTION_STORE,
    PRIMAL_SOLUTION_SAVE,
    MESH_COORDS,
    MESH_COORDS_OLD,
)


class AdjointBridge:
    """
    Moves one-shot directions into the adjoint engine and results back out.

    The bridge owns no point data: it writes the primal solver's adjoint
    input, reads its adjoint output, and updates the design state.
    """

    def __init__(self,
                 primal: AdjointCapableSolver,
                 design: SolutionVariables):
        self.primal = primal
        self.design = design

    def reset_differentiation_inputs(self) -> None:
        """Clear input registration of the primal slots and mesh coordinates.

        Must run before every recording so inputs do not accumulate across
        iterations.
        """
        self.primal.tape.reset_inputs(RECORDING_INPUTS)

    def prepare_recording(self) -> None:
        """Reset inputs, clear the system matrix and re-register variables.

        The solution is not reset to the initial state between recordings.
        """
        self.reset_differentiation_inputs()
        self.primal.clear_jacobian()
        self.primal.register_variables(reset=True)
        logger.debug("Prepared one-shot recording")

    def push_adjoint_seed(self) -> None:
        """Seed the primal adjoint input with the design increment."""
        self.primal.set_adjoint_input(self.design.solution_delta)

    def push_zero_seed(self) -> None:
        """Seed the primal adjoint input with zeros."""
        zero_solution = np.zeros((self.primal.n_point, self.primal.n_var))
        self.primal.set_adjoint_input(zero_solution)

    def pull_adjoint_output(self) -> None:
        """Store the computed adjoint as the current design solution."""
        self.design.set_solution(self.primal.get_adjoint_output())
