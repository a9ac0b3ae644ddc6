"""
Mesh geometry consumed by the one-shot core.

Holds point coordinates with their baseline ("old") copy, boundary markers
with vertex normals, and the per-point sensitivity field that receives the
final gradient.
"""

import numpy as np
from typing import Dict, Iterable, Optional
from dataclasses import dataclass, field
import logging

logger = logging.getLogger(__name__)


@dataclass
class BoundaryMarker:
    """Boundary marker with per-vertex normals."""
    name: str
    vertex_nodes: np.ndarray  # Point index of each boundary vertex
    normals: np.ndarray  # [n_vertex, n_dim]
    normals_old: np.ndarray = field(default_factory=lambda: np.array([]))

    def __post_init__(self):
        self.vertex_nodes = np.asarray(self.vertex_nodes, dtype=int)
        self.normals = np.array(self.normals, dtype=float)
        if self.normals.shape[0] != self.vertex_nodes.shape[0]:
            raise ValueError(
                f"Marker '{self.name}': {self.vertex_nodes.shape[0]} vertices but "
                f"{self.normals.shape[0]} normals"
            )
        self.normals_old = np.array(self.normals_old, dtype=float)
        if self.normals_old.size == 0:
            self.normals_old = self.normals.copy()
        elif self.normals_old.shape != self.normals.shape:
            raise ValueError(
                f"Marker '{self.name}': old normals {self.normals_old.shape} do not "
                f"match normals {self.normals.shape}"
            )

    @property
    def n_vertex(self) -> int:
        return self.vertex_nodes.shape[0]


class MeshGeometry:
    """Point coordinates, boundary markers and sensitivities of one partition."""

    def __init__(self,
                 coords: np.ndarray,
                 markers: Optional[Iterable[BoundaryMarker]] = None,
                 n_point_domain: Optional[int] = None):
        """
        Initialize mesh geometry.

        Args:
            coords: Point coordinates [n_point, n_dim]; halo points last
            markers: Boundary markers
            n_point_domain: Number of locally owned points (default: all)
        """
        self.coords = np.array(coords, dtype=float)
        if self.coords.ndim != 2:
            raise ValueError("Coordinates must be a 2D array [n_point, n_dim]")

        self.coords_old = self.coords.copy()
        self.n_point_domain = self.n_point if n_point_domain is None else n_point_domain
        if not 0 <= self.n_point_domain <= self.n_point:
            raise ValueError(
                f"n_point_domain must lie in [0, {self.n_point}], got {self.n_point_domain}"
            )

        self.markers: Dict[str, BoundaryMarker] = {}
        for marker in markers or []:
            self.add_marker(marker)

        self.sensitivity = np.zeros_like(self.coords)

        logger.info(f"Initialized mesh geometry: {self.n_point} points, "
                    f"{self.n_dim}D, {len(self.markers)} markers")

    @property
    def n_point(self) -> int:
        return self.coords.shape[0]

    @property
    def n_dim(self) -> int:
        return self.coords.shape[1]

    def add_marker(self, marker: BoundaryMarker) -> None:
        """Add a boundary marker."""
        if marker.n_vertex > 0:
            if marker.vertex_nodes.max() >= self.n_point or marker.vertex_nodes.min() < 0:
                raise ValueError(f"Marker '{marker.name}' references unknown points")
            if marker.normals.shape[1] != self.n_dim:
                raise ValueError(f"Marker '{marker.name}' normals are not {self.n_dim}D")
        self.markers[marker.name] = marker

    def initialize_sensitivity(self) -> None:
        """Reset the sensitivity field to zero."""
        self.sensitivity.fill(0.0)

    def set_sensitivity(self, values: np.ndarray) -> None:
        """Overwrite the sensitivity field [n_point, n_dim]."""
        self.sensitivity[:] = values
