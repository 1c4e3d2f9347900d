"""
solid_mesh: procedural meshes for basic solids and 4x4 transform math.

Meshes are produced by solid_mesh.primitives, placed with
solid_mesh.transform and handed to an external renderer.
"""

from solid_mesh.logging_config import (
    setup_logging,
    get_logger,
    configure_default_logging,
    log_timing,
    timed,
)
from solid_mesh.errors import (
    SolidMeshError,
    PrimitiveParameterError,
    IndexCapacityError,
    MeshLayoutError,
    CubeDataError,
    ProjectionError,
)
from solid_mesh.geometry import IndexFormat, Mesh

__version__ = "0.1.0"

__all__ = [
    "setup_logging",
    "get_logger",
    "configure_default_logging",
    "log_timing",
    "timed",
    "SolidMeshError",
    "PrimitiveParameterError",
    "IndexCapacityError",
    "MeshLayoutError",
    "CubeDataError",
    "ProjectionError",
    "IndexFormat",
    "Mesh",
]
