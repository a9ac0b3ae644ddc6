"""Reference differentiation tape that tracks input registration."""

from typing import Dict, List
import logging

from ..core.base import DifferentiationTape

logger = logging.getLogger(__name__)


class RegistrationTape(DifferentiationTape):
    """
    Differentiation tape keeping only the registration state of its inputs.

    Stands in for the recording engine of a real AD tool where only the
    input bookkeeping matters, e.g. single-process studies and tests.
    """

    def __init__(self):
        self._registered: Dict[str, bool] = {}
        self.reset_count = 0

    def register_input(self, key: str) -> None:
        self._registered[key] = True

    def reset_input(self, key: str) -> None:
        self._registered[key] = False
        self.reset_count += 1

    def is_registered(self, key: str) -> bool:
        return self._registered.get(key, False)

    @property
    def registered_inputs(self) -> List[str]:
        """Keys of the currently registered inputs."""
        return sorted(key for key, active in self._registered.items() if active)
