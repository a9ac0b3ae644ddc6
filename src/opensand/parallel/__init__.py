"""Distributed reduction strategies."""

from .reduction import ReductionStrategy, SerialReduction, MPIReduction, create_reduction

__all__ = ["ReductionStrategy", "SerialReduction", "MPIReduction", "create_reduction"]
