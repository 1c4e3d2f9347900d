"""
Mesh statistics.

Provides:
- Axis-aligned bounding box
- Surface area and signed enclosed volume
- MeshStatistics summary used by the CLI
"""

import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from solid_mesh.geometry.mesh import Mesh

logger = logging.getLogger(__name__)


@dataclass
class BoundingBox:
    """Axis-aligned bounding box.

    Attributes:
        min_point: Minimum corner (x_min, y_min, z_min)
        max_point: Maximum corner (x_max, y_max, z_max)
    """
    min_point: NDArray[np.float64]
    max_point: NDArray[np.float64]

    @property
    def dimensions(self) -> NDArray[np.float64]:
        """Box extents along x, y, z."""
        return self.max_point - self.min_point

    @property
    def center(self) -> NDArray[np.float64]:
        return (self.min_point + self.max_point) / 2


@dataclass
class MeshStatistics:
    """Summary numbers for a generated mesh."""
    n_vertices: int
    n_triangles: int
    bbox: BoundingBox
    surface_area: float
    volume: float

    def summary(self) -> str:
        """Human-readable multi-line summary."""
        dims = self.bbox.dimensions
        c = self.bbox.center
        return "\n".join([
            f"Vertices: {self.n_vertices}",
            f"Triangles: {self.n_triangles}",
            f"Size: {dims[0]:.4g} x {dims[1]:.4g} x {dims[2]:.4g}",
            f"Center: {c[0]:.4g}, {c[1]:.4g}, {c[2]:.4g}",
            f"Surface area: {self.surface_area:.6g}",
            f"Volume: {self.volume:.6g}",
        ])


def calculate_bounding_box(vertices: NDArray[np.float64]) -> BoundingBox:
    """Calculate axis-aligned bounding box for an (N, 3) vertex array."""
    if len(vertices) == 0:
        return BoundingBox(min_point=np.zeros(3), max_point=np.zeros(3))

    return BoundingBox(
        min_point=np.min(vertices, axis=0),
        max_point=np.max(vertices, axis=0),
    )


def calculate_face_areas(
    vertices: NDArray[np.float64],
    faces: NDArray[np.int64],
) -> NDArray[np.float64]:
    """Area of each triangle: 0.5 * |(v1 - v0) x (v2 - v0)|.

    Args:
        vertices: Nx3 array of vertices
        faces: Mx3 array of face indices

    Returns:
        Array of M face areas
    """
    if len(faces) == 0:
        return np.array([], dtype=np.float64)

    v0 = vertices[faces[:, 0]]
    v1 = vertices[faces[:, 1]]
    v2 = vertices[faces[:, 2]]
    return 0.5 * np.linalg.norm(np.cross(v1 - v0, v2 - v0), axis=1)


def calculate_surface_area(vertices: NDArray[np.float64], faces: NDArray[np.int64]) -> float:
    return float(np.sum(calculate_face_areas(vertices, faces)))


def calculate_volume(vertices: NDArray[np.float64], faces: NDArray[np.int64]) -> float:
    """Signed enclosed volume via the divergence theorem.

    Positive for a closed mesh whose triangles wind counter-clockwise when
    seen from outside; negative when the winding is inverted.

    Formula: V = (1/6) * sum(v0 . (v1 x v2))
    """
    if len(faces) == 0:
        return 0.0

    v0 = vertices[faces[:, 0]]
    v1 = vertices[faces[:, 1]]
    v2 = vertices[faces[:, 2]]
    return float(np.sum(np.sum(v0 * np.cross(v1, v2), axis=1)) / 6.0)


def calculate_mesh_statistics(mesh: Mesh) -> MeshStatistics:
    """Compute bounding box, area and volume for a Mesh."""
    vertices = mesh.vertices
    faces = mesh.faces

    stats = MeshStatistics(
        n_vertices=mesh.vertex_count,
        n_triangles=mesh.triangle_count,
        bbox=calculate_bounding_box(vertices),
        surface_area=calculate_surface_area(vertices, faces),
        volume=calculate_volume(vertices, faces),
    )
    logger.debug(
        "Mesh statistics: %d vertices, %d triangles, area=%.4g, volume=%.4g",
        stats.n_vertices, stats.n_triangles, stats.surface_area, stats.volume,
    )
    return stats
