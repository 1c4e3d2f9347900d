"""
Mesh data model.

A Mesh is a bundle of parallel flat attribute arrays plus a triangle index
array, ready to be handed to a rendering layer as-is:

- positions:  float32, 3 per vertex
- colors:     float32, 3 per vertex
- normals:    float32, 3 per vertex
- tex_coords: float32, 2 per vertex (optional)
- indices:    uint16 or uint32, 3 per triangle, CCW seen from outside

Layout invariants are checked on construction, so every Mesh instance in
circulation satisfies them.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Union

import numpy as np
from numpy.typing import NDArray

from solid_mesh.errors import IndexCapacityError, MeshLayoutError

logger = logging.getLogger(__name__)

ArrayLike = Union[Sequence[float], NDArray]


class IndexFormat(Enum):
    """Unsigned integer type used for the index buffer."""
    UINT16 = "uint16"
    UINT32 = "uint32"

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(self.value)

    @property
    def capacity(self) -> int:
        """Number of distinct vertices the index type can address."""
        return int(np.iinfo(self.dtype).max) + 1

    def check_capacity(self, vertex_count: int) -> None:
        """Raise IndexCapacityError if vertex_count cannot be indexed."""
        if vertex_count > self.capacity:
            logger.warning(
                "Vertex count %d exceeds %s capacity %d",
                vertex_count, self.value, self.capacity,
            )
            raise IndexCapacityError(vertex_count, self.capacity, self.value)


def _flat(values: ArrayLike, dtype: np.dtype, name: str) -> np.ndarray:
    arr = np.array(values, dtype=dtype)
    if arr.ndim != 1:
        arr = arr.reshape(-1)
    if np.issubdtype(arr.dtype, np.floating) and not np.all(np.isfinite(arr)):
        raise MeshLayoutError(f"{name} contains NaN or infinite values")
    return arr


@dataclass
class Mesh:
    """Renderable triangle mesh with per-vertex attributes.

    Attributes:
        positions: Flat float32 array, x/y/z per vertex
        colors: Flat float32 array, r/g/b per vertex
        normals: Flat float32 array, x/y/z per vertex
        indices: Flat unsigned index array, 3 per triangle
        tex_coords: Flat float32 array, u/v per vertex, or None
        index_format: Index type; indices are stored with its dtype
    """
    positions: NDArray[np.float32]
    colors: NDArray[np.float32]
    normals: NDArray[np.float32]
    indices: NDArray[np.unsignedinteger]
    tex_coords: Optional[NDArray[np.float32]] = None
    index_format: IndexFormat = IndexFormat.UINT16

    def __post_init__(self):
        """Coerce arrays to their dtypes and validate the layout."""
        try:
            self.index_format = IndexFormat(self.index_format)
        except ValueError:
            raise MeshLayoutError(f"unknown index_format {self.index_format!r}") from None
        self.positions = _flat(self.positions, np.float32, "positions")
        self.colors = _flat(self.colors, np.float32, "colors")
        self.normals = _flat(self.normals, np.float32, "normals")
        if self.tex_coords is not None:
            self.tex_coords = _flat(self.tex_coords, np.float32, "tex_coords")

        raw_indices = np.array(self.indices).reshape(-1)
        if raw_indices.size and not np.issubdtype(raw_indices.dtype, np.integer):
            if not np.all(np.equal(np.mod(raw_indices, 1), 0)):
                raise MeshLayoutError("indices must be whole numbers")
        if raw_indices.size and int(raw_indices.min()) < 0:
            raise MeshLayoutError("indices must be non-negative")
        self._validate_layout(raw_indices)
        self.indices = raw_indices.astype(self.index_format.dtype)

    def _validate_layout(self, raw_indices: np.ndarray) -> None:
        if self.positions.size % 3:
            raise MeshLayoutError(
                f"positions length {self.positions.size} is not a multiple of 3"
            )
        n = self.positions.size // 3

        if self.colors.size != n * 3:
            raise MeshLayoutError(
                f"colors describe {self.colors.size / 3:g} vertices, positions describe {n}"
            )
        if self.normals.size != n * 3:
            raise MeshLayoutError(
                f"normals describe {self.normals.size / 3:g} vertices, positions describe {n}"
            )
        if self.tex_coords is not None and self.tex_coords.size != n * 2:
            raise MeshLayoutError(
                f"tex_coords describe {self.tex_coords.size / 2:g} vertices, positions describe {n}"
            )
        if raw_indices.size % 3:
            raise MeshLayoutError(
                f"index count {raw_indices.size} is not a multiple of 3"
            )

        self.index_format.check_capacity(n)

        if raw_indices.size and int(raw_indices.max()) >= n:
            raise MeshLayoutError(
                f"index {int(raw_indices.max())} out of range for {n} vertices"
            )

    @property
    def vertex_count(self) -> int:
        return self.positions.size // 3

    @property
    def index_count(self) -> int:
        return int(self.indices.size)

    @property
    def triangle_count(self) -> int:
        return self.index_count // 3

    @property
    def has_tex_coords(self) -> bool:
        return self.tex_coords is not None

    @property
    def vertices(self) -> NDArray[np.float64]:
        """Positions as an (N, 3) float64 array (copy)."""
        return self.positions.reshape(-1, 3).astype(np.float64)

    @property
    def faces(self) -> NDArray[np.int64]:
        """Triangles as an (M, 3) int64 array (copy)."""
        return self.indices.reshape(-1, 3).astype(np.int64)

    @property
    def normal_vectors(self) -> NDArray[np.float64]:
        """Normals as an (N, 3) float64 array (copy)."""
        return self.normals.reshape(-1, 3).astype(np.float64)

    def copy(self) -> 'Mesh':
        """Deep copy; the copy shares no buffers with this mesh."""
        return Mesh(
            positions=self.positions.copy(),
            colors=self.colors.copy(),
            normals=self.normals.copy(),
            indices=self.indices.copy(),
            tex_coords=None if self.tex_coords is None else self.tex_coords.copy(),
            index_format=self.index_format,
        )

    def to_dict(self) -> dict:
        """Convert to plain lists for serialization."""
        data = {
            'positions': self.positions.tolist(),
            'colors': self.colors.tolist(),
            'normals': self.normals.tolist(),
            'indices': self.indices.tolist(),
            'index_format': self.index_format.value,
        }
        if self.tex_coords is not None:
            data['tex_coords'] = self.tex_coords.tolist()
        return data
