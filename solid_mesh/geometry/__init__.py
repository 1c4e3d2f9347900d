"""Mesh data model, vector helpers and mesh statistics."""

from solid_mesh.geometry.mesh import IndexFormat, Mesh
from solid_mesh.geometry.mesh_stats import (
    BoundingBox,
    MeshStatistics,
    calculate_bounding_box,
    calculate_mesh_statistics,
    calculate_surface_area,
    calculate_volume,
)
from solid_mesh.geometry.vector_ops import cross, normalize

__all__ = [
    "IndexFormat",
    "Mesh",
    "BoundingBox",
    "MeshStatistics",
    "calculate_bounding_box",
    "calculate_mesh_statistics",
    "calculate_surface_area",
    "calculate_volume",
    "cross",
    "normalize",
]
