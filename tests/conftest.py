"""
Pytest configuration and fixtures for solid_mesh.

Provides:
- Injected cube constants (in memory and as a JSON file)
- Small generated meshes
- Common assertion helpers
"""

import json
import logging
from pathlib import Path

import numpy as np
import pytest

from solid_mesh.geometry.mesh import Mesh
from solid_mesh.logging_config import PACKAGE_LOGGER
from solid_mesh.primitives.cube import CubeData

PROJECT_ROOT = Path(__file__).parent.parent


# ============================================================================
# Cube constants (2x2x2, 4 vertices per face, CCW from outside)
# ============================================================================

CUBE_POSITIONS = [
    # Front
    -1.0, -1.0, 1.0,   1.0, -1.0, 1.0,   1.0, 1.0, 1.0,   -1.0, 1.0, 1.0,
    # Back
    -1.0, -1.0, -1.0,  -1.0, 1.0, -1.0,  1.0, 1.0, -1.0,  1.0, -1.0, -1.0,
    # Top
    -1.0, 1.0, -1.0,   -1.0, 1.0, 1.0,   1.0, 1.0, 1.0,   1.0, 1.0, -1.0,
    # Bottom
    -1.0, -1.0, -1.0,  1.0, -1.0, -1.0,  1.0, -1.0, 1.0,  -1.0, -1.0, 1.0,
    # Right
    1.0, -1.0, -1.0,   1.0, 1.0, -1.0,   1.0, 1.0, 1.0,   1.0, -1.0, 1.0,
    # Left
    -1.0, -1.0, -1.0,  -1.0, -1.0, 1.0,  -1.0, 1.0, 1.0,  -1.0, 1.0, -1.0,
]

CUBE_NORMALS = (
    [0.0, 0.0, 1.0] * 4 +
    [0.0, 0.0, -1.0] * 4 +
    [0.0, 1.0, 0.0] * 4 +
    [0.0, -1.0, 0.0] * 4 +
    [1.0, 0.0, 0.0] * 4 +
    [-1.0, 0.0, 0.0] * 4
)

CUBE_COLORS = [1.0, 1.0, 1.0] * 24

CUBE_INDICES = [
    b + offset
    for b in range(0, 24, 4)
    for offset in (0, 1, 2, 0, 2, 3)
]


@pytest.fixture
def cube_data() -> CubeData:
    """The injected cube constants."""
    return CubeData(
        positions=tuple(CUBE_POSITIONS),
        colors=tuple(CUBE_COLORS),
        normals=tuple(CUBE_NORMALS),
        indices=tuple(CUBE_INDICES),
    )


@pytest.fixture
def cube_json_path(tmp_path: Path) -> Path:
    """Cube constants written to a JSON file."""
    path = tmp_path / "cube.json"
    path.write_text(json.dumps({
        "positions": CUBE_POSITIONS,
        "colors": CUBE_COLORS,
        "normals": CUBE_NORMALS,
        "indices": CUBE_INDICES,
    }), encoding="utf-8")
    return path


@pytest.fixture
def triangle_mesh() -> Mesh:
    """Single CCW triangle in the XY plane facing +Z."""
    return Mesh(
        positions=[0, 0, 0, 1, 0, 0, 0, 1, 0],
        colors=[1, 1, 1] * 3,
        normals=[0, 0, 1] * 3,
        indices=[0, 1, 2],
    )


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo setup_logging() so records reach pytest's capture handlers."""
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(12345)


# ============================================================================
# Assertion Helpers
# ============================================================================

def assert_mesh_contract(mesh: Mesh) -> None:
    """Assert the parallel-array and index-bound invariants."""
    n = mesh.vertex_count
    assert mesh.positions.dtype == np.float32
    assert mesh.colors.dtype == np.float32
    assert mesh.normals.dtype == np.float32
    assert mesh.positions.size == n * 3
    assert mesh.colors.size == n * 3
    assert mesh.normals.size == n * 3
    if mesh.tex_coords is not None:
        assert mesh.tex_coords.dtype == np.float32
        assert mesh.tex_coords.size == n * 2
    assert mesh.indices.size % 3 == 0
    assert np.all(mesh.indices < n)
    assert not np.any(np.isnan(mesh.positions))


def assert_unit_normals(mesh: Mesh, tol: float = 1e-5) -> None:
    lengths = np.linalg.norm(mesh.normal_vectors, axis=1)
    assert np.allclose(lengths, 1.0, atol=tol), f"max deviation {np.max(np.abs(lengths - 1))}"
