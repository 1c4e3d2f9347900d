"""
STL export of generated meshes via numpy-stl.

STL stores only triangle corner positions and a facet normal, so colors,
per-vertex normals and texture coordinates are dropped. Facet normals are
recomputed by numpy-stl from the triangle winding.
"""

import logging
from pathlib import Path
from typing import Optional, Union

import numpy as np
from stl import mesh as stl_mesh
from stl import Mode

from solid_mesh.errors import SolidMeshError
from solid_mesh.geometry.mesh import Mesh
from solid_mesh.geometry.mesh_stats import calculate_face_areas

logger = logging.getLogger(__name__)

DEGENERATE_AREA = 1e-12


class STLExportError(SolidMeshError):
    """Mesh could not be written as STL."""


def to_stl_mesh(mesh: Mesh, drop_degenerate: bool = True, name: str = "") -> stl_mesh.Mesh:
    """Convert a Mesh into a numpy-stl Mesh.

    Args:
        mesh: Source mesh
        drop_degenerate: Skip zero-area triangles, such as the sphere's
            pole triangles
        name: Solid name stored in the file header

    Returns:
        numpy-stl Mesh with one facet per kept triangle
    """
    vertices = mesh.vertices
    faces = mesh.faces

    if drop_degenerate and len(faces):
        faces = faces[calculate_face_areas(vertices, faces) > DEGENERATE_AREA]

    data = np.zeros(len(faces), dtype=stl_mesh.Mesh.dtype)
    result = stl_mesh.Mesh(data, name=name)
    if len(faces):
        result.vectors[:] = vertices[faces]
        result.update_normals()
    return result


def save_stl(
    mesh: Mesh,
    path: Union[str, Path],
    binary: bool = True,
    name: Optional[str] = None,
) -> Path:
    """Write mesh to an STL file.

    Args:
        mesh: Mesh to export
        path: Output file path
        binary: Binary STL when True, ASCII otherwise
        name: Solid name stored in the file header

    Returns:
        Path of the written file

    Raises:
        STLExportError: the file could not be written
    """
    path = Path(path)
    solid = to_stl_mesh(mesh, name=name or "")
    mode = Mode.BINARY if binary else Mode.ASCII
    try:
        solid.save(str(path), mode=mode)
    except OSError as exc:
        raise STLExportError(f"Could not write STL file {str(path)!r}: {exc}") from exc

    logger.info(
        "STL written: %s (%d facets, %s)",
        path, len(solid.vectors), "binary" if binary else "ascii",
    )
    return path
