"""
Global-sum reduction strategies.

Every scalar reduction in the one-shot core goes through a single
``ReductionStrategy.sum`` call. The strategy is chosen once at startup:
``SerialReduction`` for single-process runs and ``MPIReduction`` for
domain-decomposed runs. Reductions are blocking collectives; every rank must
issue the same reductions in the same order.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Union
import logging

from ..core.config import ReductionKind

logger = logging.getLogger(__name__)


class ReductionStrategy(ABC):
    """Sum a scalar across all participating processes."""

    @property
    def rank(self) -> int:
        return 0

    @property
    def size(self) -> int:
        return 1

    @abstractmethod
    def sum(self, local_value: float) -> float:
        """
        Global sum of a process-local scalar.

        Args:
            local_value: Contribution of this process

        Returns:
            Sum of the contributions of every process
        """
        pass


class SerialReduction(ReductionStrategy):
    """Single-process reduction: the local value is the global value."""

    def sum(self, local_value: float) -> float:
        return float(local_value)


class MPIReduction(ReductionStrategy):
    """
    Collective reduction over an MPI communicator.

    Uses ``allreduce`` with ``MPI.SUM`` on the given communicator
    (``MPI.COMM_WORLD`` by default).
    """

    def __init__(self, comm: Optional[Any] = None):
        """Initialize MPI reduction.

        Args:
            comm: mpi4py communicator, defaults to ``MPI.COMM_WORLD``
        """
        from mpi4py import MPI

        self._op = MPI.SUM
        self.comm = comm if comm is not None else MPI.COMM_WORLD
        self._rank = self.comm.Get_rank()
        self._size = self.comm.Get_size()

        logger.info(f"MPI reduction on rank {self._rank} of {self._size}")

    @property
    def rank(self) -> int:
        return self._rank

    @property
    def size(self) -> int:
        return self._size

    def sum(self, local_value: float) -> float:
        return float(self.comm.allreduce(float(local_value), op=self._op))


def create_reduction(kind: Union[str, ReductionKind] = ReductionKind.SERIAL,
                     comm: Optional[Any] = None) -> ReductionStrategy:
    """
    Factory function to create a reduction strategy.

    Args:
        kind: ``"serial"`` or ``"mpi"``
        comm: Optional mpi4py communicator for the MPI strategy

    Returns:
        Configured ReductionStrategy instance
    """
    kind = ReductionKind(kind)

    if kind == ReductionKind.MPI:
        return MPIReduction(comm)
    return SerialReduction()
