"""
Injected cube resource.

The cube is not generated: its positions, colors, normals and indices are
pre-baked constants supplied by the caller (in code or as a JSON file).
They are checked against the same Mesh contract as generated primitives
before use.

Expected JSON layout:
{
    "positions": [x, y, z, ...],
    "colors":    [r, g, b, ...],
    "normals":   [x, y, z, ...],
    "indices":   [i0, i1, i2, ...]
}
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Sequence, Union

from solid_mesh.errors import CubeDataError
from solid_mesh.geometry.mesh import IndexFormat, Mesh

logger = logging.getLogger(__name__)

CUBE_KEYS = ("positions", "colors", "normals", "indices")


@dataclass(frozen=True)
class CubeData:
    """The four constant arrays describing a cube mesh."""
    positions: Sequence[float]
    colors: Sequence[float]
    normals: Sequence[float]
    indices: Sequence[int]

    def to_mesh(self, index_format: IndexFormat = IndexFormat.UINT16) -> Mesh:
        """Validate the constants and wrap them in a new Mesh.

        Raises:
            MeshLayoutError: arrays disagree on vertex count or an index is
                out of range
            IndexCapacityError: too many vertices for index_format
        """
        mesh = Mesh(
            positions=self.positions,
            colors=self.colors,
            normals=self.normals,
            indices=self.indices,
            index_format=index_format,
        )
        logger.debug(
            "Cube data accepted: %d vertices, %d triangles",
            mesh.vertex_count, mesh.triangle_count,
        )
        return mesh

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CubeData':
        """Build from a mapping with the four cube keys.

        Raises:
            CubeDataError: a key is missing or is not a list of numbers
        """
        missing = [key for key in CUBE_KEYS if key not in data]
        if missing:
            raise CubeDataError(f"Cube data is missing keys: {', '.join(missing)}")

        arrays = {}
        for key in CUBE_KEYS:
            values = data[key]
            if not isinstance(values, list) or not all(
                isinstance(v, (int, float)) and not isinstance(v, bool) for v in values
            ):
                raise CubeDataError(f"Cube data '{key}' must be a flat list of numbers")
            arrays[key] = tuple(values)

        return cls(**arrays)


def load_cube_data(path: Union[str, Path]) -> CubeData:
    """Read cube constants from a JSON file.

    Args:
        path: Path to the JSON file

    Returns:
        CubeData (not yet validated against the Mesh contract)

    Raises:
        CubeDataError: file missing, unreadable, not JSON or malformed
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        raise CubeDataError(f"Cube data file not found: {str(path)!r}")
    except json.JSONDecodeError as exc:
        raise CubeDataError(f"Cube data file {str(path)!r} is not valid JSON: {exc}") from exc
    except OSError as exc:
        raise CubeDataError(f"Could not read cube data file {str(path)!r}: {exc}") from exc

    if not isinstance(data, dict):
        raise CubeDataError(f"Cube data file {str(path)!r} must contain a JSON object")

    logger.info("Cube data loaded from %s", path)
    return CubeData.from_dict(data)
