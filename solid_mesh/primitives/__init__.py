"""Procedural sphere/cylinder/cone generators and the injected cube."""

from solid_mesh.primitives.cube import CubeData, load_cube_data
from solid_mesh.primitives.generators import (
    WHITE,
    generate_cone,
    generate_cylinder,
    generate_sphere,
)
from solid_mesh.primitives.kinds import (
    ConeParams,
    CubeParams,
    CylinderParams,
    PrimitiveKind,
    PrimitiveParams,
    SphereParams,
    build_primitive,
    default_primitive_params,
    default_primitives,
)

__all__ = [
    "CubeData",
    "load_cube_data",
    "WHITE",
    "generate_cone",
    "generate_cylinder",
    "generate_sphere",
    "ConeParams",
    "CubeParams",
    "CylinderParams",
    "PrimitiveKind",
    "PrimitiveParams",
    "SphereParams",
    "build_primitive",
    "default_primitive_params",
    "default_primitives",
]
