"""Model transforms and camera projections on column-major 4x4 matrices."""

from solid_mesh.transform.matrix import (
    Matrix4,
    apply,
    identity,
    inverse,
    inverse_transpose,
    multiply,
    normal_matrix,
    rotate_x,
    rotate_y,
    rotate_z,
    scale,
    transform_point,
    translate,
    transpose,
)
from solid_mesh.transform.projection import ortho, perspective

__all__ = [
    "Matrix4",
    "apply",
    "identity",
    "inverse",
    "inverse_transpose",
    "multiply",
    "normal_matrix",
    "rotate_x",
    "rotate_y",
    "rotate_z",
    "scale",
    "transform_point",
    "translate",
    "transpose",
    "ortho",
    "perspective",
]
