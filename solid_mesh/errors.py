"""
Exception types raised by solid_mesh.

Singular matrices are not exceptions: matrix inversion returns None.
"""

from typing import Optional


class SolidMeshError(Exception):
    """Base class for all solid_mesh errors."""


class PrimitiveParameterError(SolidMeshError, ValueError):
    """A primitive generator received an invalid parameter."""

    def __init__(self, parameter: str, value: object, requirement: str):
        self.parameter = parameter
        self.value = value
        self.requirement = requirement
        super().__init__(f"Invalid {parameter}={value!r}: {requirement}")


class IndexCapacityError(SolidMeshError):
    """Generated vertex count does not fit the chosen index type."""

    def __init__(self, vertex_count: int, capacity: int, index_format: Optional[str] = None):
        self.vertex_count = vertex_count
        self.capacity = capacity
        self.index_format = index_format
        suffix = f" ({index_format})" if index_format else ""
        super().__init__(
            f"Mesh needs {vertex_count} vertices but the index type{suffix} "
            f"addresses at most {capacity}"
        )


class MeshLayoutError(SolidMeshError, ValueError):
    """Mesh arrays violate the parallel-array / index-bounds contract."""


class CubeDataError(SolidMeshError):
    """Cube constant data could not be read or parsed."""


class ProjectionError(SolidMeshError, ValueError):
    """Projection parameters would produce an infinite or undefined matrix."""
