"""Mesh validation and STL export."""

from solid_mesh.io.stl_export import STLExportError, save_stl, to_stl_mesh
from solid_mesh.io.validator import (
    ValidationIssue,
    ValidationReport,
    ValidationSeverity,
    validate_mesh,
    weld_vertices,
)

__all__ = [
    "STLExportError",
    "save_stl",
    "to_stl_mesh",
    "ValidationIssue",
    "ValidationReport",
    "ValidationSeverity",
    "validate_mesh",
    "weld_vertices",
]
