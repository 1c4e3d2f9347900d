"""
Camera projection matrices (column-major, OpenGL clip conventions).

Both builders map the view volume to the [-1, 1] clip cube; perspective
puts -z into w so the divide happens after projection.
"""

import logging
import math

import numpy as np

from solid_mesh.errors import ProjectionError
from solid_mesh.transform.matrix import Matrix4

logger = logging.getLogger(__name__)


def _require_finite(**values: float) -> None:
    for name, value in values.items():
        if not math.isfinite(value):
            logger.warning("Non-finite projection parameter: %s=%r", name, value)
            raise ProjectionError(f"{name} must be finite, got {value!r}")


def _require_distinct(name_a: str, a: float, name_b: str, b: float) -> None:
    if a == b:
        logger.warning("Degenerate projection: %s == %s == %r", name_a, name_b, a)
        raise ProjectionError(f"{name_a} and {name_b} must differ (both {a!r})")


def perspective(fov: float, aspect: float, near: float, far: float) -> Matrix4:
    """Symmetric frustum projection.

    Args:
        fov: Vertical field of view in radians, in (0, pi)
        aspect: Viewport width / height, non-zero
        near: Near plane distance
        far: Far plane distance

    Returns:
        Column-major 4x4 matrix; view depth -near maps to clip z = -1 and
        -far to +1 after the perspective divide

    Raises:
        ProjectionError: a non-finite parameter, fov out of range, aspect == 0
            or near == far
    """
    _require_finite(fov=fov, aspect=aspect, near=near, far=far)
    if not 0 < fov < math.pi:
        raise ProjectionError(f"fov must be in (0, pi) radians, got {fov!r}")
    if aspect == 0:
        raise ProjectionError("aspect must be non-zero")
    _require_distinct("near", near, "far", far)

    f = 1.0 / math.tan(fov / 2)
    nf = 1.0 / (near - far)
    return np.array([
        f / aspect, 0, 0, 0,
        0, f, 0, 0,
        0, 0, (far + near) * nf, -1,
        0, 0, 2 * far * near * nf, 0,
    ], dtype=np.float32)


def ortho(
    left: float,
    right: float,
    bottom: float,
    top: float,
    near: float,
    far: float,
) -> Matrix4:
    """Orthographic projection of the box [left, right] x [bottom, top] x [-near, -far].

    Raises:
        ProjectionError: a non-finite bound, left == right, bottom == top or
            near == far
    """
    _require_finite(left=left, right=right, bottom=bottom, top=top, near=near, far=far)
    _require_distinct("left", left, "right", right)
    _require_distinct("bottom", bottom, "top", top)
    _require_distinct("near", near, "far", far)

    lr = 1.0 / (left - right)
    bt = 1.0 / (bottom - top)
    nf = 1.0 / (near - far)
    return np.array([
        -2 * lr, 0, 0, 0,
        0, -2 * bt, 0, 0,
        0, 0, 2 * nf, 0,
        (left + right) * lr, (top + bottom) * bt, (far + near) * nf, 1,
    ], dtype=np.float32)
