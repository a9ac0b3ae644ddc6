"""Mesh coordinate snapshots and step realization."""

import logging

from ..mesh.geometry import MeshGeometry

logger = logging.getLogger(__name__)


class MeshStepper:
    """Snapshot and trial-step handling of mesh coordinates."""

    def __init__(self, mesh: MeshGeometry):
        self.mesh = mesh

    def snapshot_old(self) -> None:
        """Copy coordinates and boundary normals into their old slots."""
        self.mesh.coords_old[:] = self.mesh.coords
        for marker in self.mesh.markers.values():
            marker.normals_old[:] = marker.normals

    def restore_old(self) -> None:
        """Restore coordinates from the old slot.

        Boundary normals are not restored.
        """
        self.mesh.coords[:] = self.mesh.coords_old

    def step_to(self, step_size: float) -> None:
        """
        Realize a step from the old coordinates.

        The current coordinates are read as the step direction:
        ``coords = coords_old + step_size * coords``.

        Args:
            step_size: Scale of the direction; not bounded
        """
        direction = self.mesh.coords.copy()
        self.mesh.coords[:] = self.mesh.coords_old + step_size * direction
        logger.debug(f"Mesh stepped with step size {step_size:.3e}")
