"""
Mesh validation.

Layout problems (array lengths, index bounds, index capacity) are rejected
when a Mesh is constructed. This module checks the geometry a renderer
relies on:

- Closed surface (no boundary edges once coincident positions are welded)
- Manifold edges (no edge shared by more than 2 triangles)
- Degenerate triangles (zero area, e.g. sphere poles)
- Unit-length normals
- Winding: signed volume of a closed surface

Degenerate faces and boundary edges are warnings; non-manifold edges and
non-unit normals are errors.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Tuple

import numpy as np
from numpy.typing import NDArray

from solid_mesh.geometry.mesh import Mesh
from solid_mesh.geometry.mesh_stats import calculate_face_areas, calculate_volume

logger = logging.getLogger(__name__)

DEFAULT_WELD_TOLERANCE = 1e-5
DEFAULT_NORMAL_TOLERANCE = 1e-5


class ValidationSeverity(Enum):
    """Severity level of validation issues."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class ValidationIssue:
    """A single validation issue found in the mesh."""
    code: str
    severity: ValidationSeverity
    message: str
    count: int = 1
    details: List[int] = field(default_factory=list)  # face/vertex indices

    def __str__(self) -> str:
        if self.count > 1:
            return f"[{self.severity.value.upper()}] {self.code}: {self.message} ({self.count} occurrences)"
        return f"[{self.severity.value.upper()}] {self.code}: {self.message}"


@dataclass
class ValidationReport:
    """Complete validation report for a mesh."""
    is_valid: bool
    is_manifold: bool
    is_closed: bool
    has_degenerate_faces: bool
    has_unit_normals: bool

    n_vertices: int
    n_faces: int
    n_boundary_edges: int
    n_degenerate_faces: int
    n_non_manifold_edges: int
    n_bad_normals: int
    signed_volume: float

    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.WARNING]

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.ERROR]

    def summary(self) -> str:
        """Generate human-readable summary."""
        lines = [
            "Mesh Validation Report",
            "=" * 40,
            f"Vertices: {self.n_vertices}",
            f"Faces: {self.n_faces}",
            "",
            f"Manifold: {'Yes' if self.is_manifold else 'No'}",
            f"Closed: {'Yes' if self.is_closed else 'No'}",
            f"Unit normals: {'Yes' if self.has_unit_normals else 'No'}",
            f"Degenerate faces: {self.n_degenerate_faces}",
            f"Non-manifold edges: {self.n_non_manifold_edges}",
            f"Boundary edges: {self.n_boundary_edges}",
            f"Signed volume: {self.signed_volume:.6g}",
        ]

        if self.issues:
            lines.append("")
            lines.append("Issues:")
            for issue in self.issues:
                lines.append(f"  - {issue}")

        lines.append("")
        lines.append(f"Overall: {'VALID' if self.is_valid else 'INVALID'}")

        return "\n".join(lines)


def weld_vertices(vertices: NDArray[np.float64], tolerance: float = DEFAULT_WELD_TOLERANCE) -> NDArray[np.int64]:
    """Map every vertex to a representative index shared by coincident positions.

    Generated meshes duplicate positions on seams and cap rims to carry
    different normals/UVs; welding recovers the surface connectivity.

    Returns:
        Array of shape (N,) with the welded id of each vertex
    """
    if len(vertices) == 0:
        return np.zeros(0, dtype=np.int64)
    keys = np.round(vertices / tolerance).astype(np.int64)
    _, inverse = np.unique(keys, axis=0, return_inverse=True)
    return inverse.reshape(-1).astype(np.int64)


def _build_edge_map(faces: NDArray[np.int64]) -> Dict[Tuple[int, int], List[int]]:
    """Map each undirected edge (sorted vertex pair) to the faces using it."""
    edge_to_faces: Dict[Tuple[int, int], List[int]] = defaultdict(list)

    for fi, face in enumerate(faces):
        for i in range(3):
            v1, v2 = int(face[i]), int(face[(i + 1) % 3])
            edge = (min(v1, v2), max(v1, v2))
            edge_to_faces[edge].append(fi)

    return edge_to_faces


def validate_mesh(
    mesh: Mesh,
    degenerate_area_threshold: float = 1e-10,
    normal_tolerance: float = DEFAULT_NORMAL_TOLERANCE,
    weld_tolerance: float = DEFAULT_WELD_TOLERANCE,
) -> ValidationReport:
    """Validate mesh geometry.

    Args:
        mesh: Mesh to check
        degenerate_area_threshold: Minimum area to consider non-degenerate
        normal_tolerance: Allowed deviation of |normal| from 1
        weld_tolerance: Distance below which positions count as the same point

    Returns:
        ValidationReport with all findings
    """
    vertices = mesh.vertices
    faces = mesh.faces
    n_vertices = len(vertices)
    n_faces = len(faces)
    issues: List[ValidationIssue] = []

    logger.debug("Validating mesh: %d vertices, %d faces", n_vertices, n_faces)

    # Degenerate faces
    areas = calculate_face_areas(vertices, faces)
    degenerate_mask = areas < degenerate_area_threshold
    n_degenerate = int(degenerate_mask.sum())

    if n_degenerate:
        issues.append(ValidationIssue(
            code="DEGENERATE_FACES",
            severity=ValidationSeverity.WARNING,
            message=f"Mesh has {n_degenerate} degenerate faces (zero area)",
            count=n_degenerate,
            details=np.where(degenerate_mask)[0][:10].tolist(),
        ))
        logger.debug("Mesh has %d degenerate faces", n_degenerate)

    # Connectivity on welded positions, ignoring collapsed triangles
    welded = weld_vertices(vertices, weld_tolerance)[faces]
    keep = (
        (welded[:, 0] != welded[:, 1]) &
        (welded[:, 1] != welded[:, 2]) &
        (welded[:, 0] != welded[:, 2])
    )
    edge_to_faces = _build_edge_map(welded[keep])

    n_boundary = sum(1 for fl in edge_to_faces.values() if len(fl) == 1)
    n_non_manifold = sum(1 for fl in edge_to_faces.values() if len(fl) > 2)
    is_closed = n_boundary == 0 and n_faces > 0
    is_manifold = n_non_manifold == 0

    if n_boundary:
        issues.append(ValidationIssue(
            code="BOUNDARY_EDGES",
            severity=ValidationSeverity.WARNING,
            message=f"Mesh has {n_boundary} boundary edges (not closed)",
            count=n_boundary,
        ))
        logger.warning("Mesh has %d boundary edges", n_boundary)

    if n_non_manifold:
        issues.append(ValidationIssue(
            code="NON_MANIFOLD_EDGES",
            severity=ValidationSeverity.ERROR,
            message=f"Mesh has {n_non_manifold} non-manifold edges (>2 faces)",
            count=n_non_manifold,
        ))
        logger.error("Mesh has %d non-manifold edges", n_non_manifold)

    # Normals
    lengths = np.linalg.norm(mesh.normal_vectors, axis=1)
    bad_normals = np.where(np.abs(lengths - 1.0) > normal_tolerance)[0]
    if len(bad_normals):
        issues.append(ValidationIssue(
            code="NON_UNIT_NORMALS",
            severity=ValidationSeverity.ERROR,
            message=f"{len(bad_normals)} normals are not unit length",
            count=len(bad_normals),
            details=bad_normals[:10].tolist(),
        ))
        logger.error("Mesh has %d non-unit normals", len(bad_normals))

    # Winding
    volume = calculate_volume(vertices, faces)
    if is_closed and volume < 0:
        issues.append(ValidationIssue(
            code="INVERTED_WINDING",
            severity=ValidationSeverity.WARNING,
            message="Triangles wind clockwise seen from outside (negative volume)",
        ))
        logger.warning("Mesh winding is inverted (volume=%.4g)", volume)

    is_valid = not any(i.severity == ValidationSeverity.ERROR for i in issues)

    report = ValidationReport(
        is_valid=is_valid,
        is_manifold=is_manifold,
        is_closed=is_closed,
        has_degenerate_faces=n_degenerate > 0,
        has_unit_normals=len(bad_normals) == 0,
        n_vertices=n_vertices,
        n_faces=n_faces,
        n_boundary_edges=n_boundary,
        n_degenerate_faces=n_degenerate,
        n_non_manifold_edges=n_non_manifold,
        n_bad_normals=len(bad_normals),
        signed_volume=volume,
        issues=issues,
    )

    logger.info("Validation complete: %s", "VALID" if is_valid else "INVALID")
    return report
