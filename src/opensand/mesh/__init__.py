"""Mesh geometry collaborator."""

from .geometry import MeshGeometry, BoundaryMarker

__all__ = ["MeshGeometry", "BoundaryMarker"]
