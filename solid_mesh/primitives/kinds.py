"""
Primitive kinds as a closed set of parameter records.

Each record carries exactly the parameters its generator needs;
build_primitive() maps a record to a Mesh.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Sequence, TYPE_CHECKING, Union

from solid_mesh.geometry.mesh import IndexFormat, Mesh
from solid_mesh.primitives.cube import CubeData
from solid_mesh.primitives.generators import (
    WHITE,
    generate_cone,
    generate_cylinder,
    generate_sphere,
)

if TYPE_CHECKING:
    from solid_mesh.project_config import ProjectConfig

logger = logging.getLogger(__name__)


class PrimitiveKind(Enum):
    """Supported solids."""
    CUBE = "cube"
    SPHERE = "sphere"
    CYLINDER = "cylinder"
    CONE = "cone"


@dataclass(frozen=True)
class SphereParams:
    lat_bands: int = 20
    long_bands: int = 20
    radius: float = 1.0

    @property
    def kind(self) -> PrimitiveKind:
        return PrimitiveKind.SPHERE


@dataclass(frozen=True)
class CylinderParams:
    slices: int = 24
    radius: float = 1.0
    height: float = 1.0

    @property
    def kind(self) -> PrimitiveKind:
        return PrimitiveKind.CYLINDER


@dataclass(frozen=True)
class ConeParams:
    slices: int = 24
    radius: float = 1.0
    height: float = 1.0

    @property
    def kind(self) -> PrimitiveKind:
        return PrimitiveKind.CONE


@dataclass(frozen=True)
class CubeParams:
    data: CubeData

    @property
    def kind(self) -> PrimitiveKind:
        return PrimitiveKind.CUBE


PrimitiveParams = Union[SphereParams, CylinderParams, ConeParams, CubeParams]


def build_primitive(
    params: PrimitiveParams,
    color: Sequence[float] = WHITE,
    index_format: IndexFormat = IndexFormat.UINT16,
) -> Mesh:
    """Generate the mesh described by params.

    The cube ignores color: its colors come with the injected data.

    Raises:
        PrimitiveParameterError: invalid generator parameters
        IndexCapacityError: too many vertices for index_format
        MeshLayoutError: injected cube data violates the Mesh contract
        TypeError: params is not one of the primitive records
    """
    if isinstance(params, SphereParams):
        return generate_sphere(
            params.lat_bands, params.long_bands, params.radius,
            color=color, index_format=index_format,
        )
    if isinstance(params, CylinderParams):
        return generate_cylinder(
            params.slices, params.radius, params.height,
            color=color, index_format=index_format,
        )
    if isinstance(params, ConeParams):
        return generate_cone(
            params.slices, params.radius, params.height,
            color=color, index_format=index_format,
        )
    if isinstance(params, CubeParams):
        return params.data.to_mesh(index_format=index_format)
    raise TypeError(f"Unsupported primitive parameters: {type(params).__name__}")


def default_primitive_params(
    cube: Optional[CubeData] = None,
    config: Optional['ProjectConfig'] = None,
) -> Dict[PrimitiveKind, PrimitiveParams]:
    """Parameters for the standard primitive set.

    Sphere(20, 20, 1.0), Cylinder(24, 1.0, 1.0) and Cone(24, 1.0, 1.0)
    unless config overrides them. The cube is included only when its data
    is supplied.
    """
    params: Dict[PrimitiveKind, PrimitiveParams] = {}
    if cube is not None:
        params[PrimitiveKind.CUBE] = CubeParams(cube)

    if config is None:
        params[PrimitiveKind.SPHERE] = SphereParams()
        params[PrimitiveKind.CYLINDER] = CylinderParams()
        params[PrimitiveKind.CONE] = ConeParams()
    else:
        params[PrimitiveKind.SPHERE] = SphereParams(
            config.sphere.lat_bands, config.sphere.long_bands, config.sphere.radius,
        )
        params[PrimitiveKind.CYLINDER] = CylinderParams(
            config.cylinder.slices, config.cylinder.radius, config.cylinder.height,
        )
        params[PrimitiveKind.CONE] = ConeParams(
            config.cone.slices, config.cone.radius, config.cone.height,
        )
    return params


def default_primitives(
    cube: Optional[CubeData] = None,
    config: Optional['ProjectConfig'] = None,
) -> Dict[PrimitiveKind, Mesh]:
    """Build every mesh of the standard primitive set.

    Color and index format come from config.mesh when config is given.
    """
    color = WHITE
    index_format = IndexFormat.UINT16
    if config is not None:
        color = tuple(config.mesh.color)
        index_format = config.mesh.index_format_enum

    meshes = {
        kind: build_primitive(p, color=color, index_format=index_format)
        for kind, p in default_primitive_params(cube, config).items()
    }
    logger.info("Built %d default primitives", len(meshes))
    return meshes
