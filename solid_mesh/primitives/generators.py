"""
Procedural mesh generators for sphere, cylinder and cone.

Every generator validates its parameters and the index capacity before
allocating anything, then returns a complete Mesh. Cylinder and cone
triangles wind counter-clockwise when seen from outside the solid; the
sphere keeps its fixed grid index pattern, which winds clockwise.

Vertex layouts:
- sphere:   (lat_bands + 1) x (long_bands + 1) grid, row-major by latitude
- cylinder: [top center, bottom center] + per ring step
            [cap top, cap bottom, side top, side bottom]
- cone:     [tip, base center] + per ring step [side, base cap]

Seam vertices (i == slices, long == long_bands) duplicate the first ring
so texture coordinates can reach u = 1.0.
"""

import logging
import math
from numbers import Integral, Real
from typing import Sequence, Tuple

import numpy as np

from solid_mesh.errors import PrimitiveParameterError
from solid_mesh.geometry.mesh import IndexFormat, Mesh
from solid_mesh.geometry.vector_ops import normalize
from solid_mesh.logging_config import log_timing

logger = logging.getLogger(__name__)

WHITE: Tuple[float, float, float] = (1.0, 1.0, 1.0)

TWO_PI = 2.0 * math.pi


# ---------------------------------------------------------------------------
# Parameter validation
# ---------------------------------------------------------------------------

def _reject(parameter: str, value: object, requirement: str) -> None:
    logger.warning("Rejected %s=%r: %s", parameter, value, requirement)
    raise PrimitiveParameterError(parameter, value, requirement)


def _check_count(parameter: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, Integral):
        _reject(parameter, value, "must be an integer")
    if value < 1:
        _reject(parameter, value, "must be >= 1")
    return int(value)


def _check_positive(parameter: str, value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        _reject(parameter, value, "must be a real number")
    if not math.isfinite(value) or value <= 0:
        _reject(parameter, value, "must be a finite number > 0")
    return float(value)


def _check_nonzero(parameter: str, value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        _reject(parameter, value, "must be a real number")
    if not math.isfinite(value) or value == 0:
        _reject(parameter, value, "must be a finite, non-zero number")
    return float(value)


def _check_color(color: Sequence[float]) -> Tuple[float, float, float]:
    try:
        rgb = tuple(float(c) for c in color)
    except (TypeError, ValueError):
        _reject("color", color, "must be three numbers")
    if len(rgb) != 3 or not all(math.isfinite(c) for c in rgb):
        _reject("color", color, "must be three finite numbers")
    return rgb  # type: ignore[return-value]


def _check_index_format(value: object) -> IndexFormat:
    try:
        return IndexFormat(value)
    except ValueError:
        allowed = ", ".join(f.value for f in IndexFormat)
        _reject("index_format", value, f"must be one of: {allowed}")


def sphere_vertex_count(lat_bands: int, long_bands: int) -> int:
    return (lat_bands + 1) * (long_bands + 1)


def cylinder_vertex_count(slices: int) -> int:
    return 2 + 4 * (slices + 1)


def cone_vertex_count(slices: int) -> int:
    return 2 + 2 * (slices + 1)


# ---------------------------------------------------------------------------
# Generators
# ---------------------------------------------------------------------------

def generate_sphere(
    lat_bands: int,
    long_bands: int,
    radius: float,
    color: Sequence[float] = WHITE,
    index_format: IndexFormat = IndexFormat.UINT16,
) -> Mesh:
    """Build a UV sphere centered at the origin.

    theta sweeps [0, pi] over latitude bands (north pole first), phi sweeps
    [0, 2pi] over longitude bands. Position is
    radius * (cos(phi) sin(theta), cos(theta), sin(phi) sin(theta)) and the
    normal is the normalized position. Triangles touching the poles have
    zero area; they are kept so the index pattern stays regular.

    Each grid cell yields (first, second, first + 1) and
    (second, second + 1, first + 1), where first = lat*(long_bands+1) + lon
    and second = first + long_bands + 1. With phi running from +X toward +Z
    this order winds clockwise when seen from outside (negative signed
    volume).

    Args:
        lat_bands: Number of latitude bands (>= 1)
        long_bands: Number of longitude bands (>= 1)
        radius: Sphere radius (> 0)
        color: Uniform vertex color
        index_format: Index type; its capacity bounds the vertex count

    Returns:
        Mesh with (lat_bands+1)*(long_bands+1) vertices and
        lat_bands*long_bands*6 indices

    Raises:
        PrimitiveParameterError: invalid count, radius or color
        IndexCapacityError: too many vertices for index_format
    """
    lat_bands = _check_count("lat_bands", lat_bands)
    long_bands = _check_count("long_bands", long_bands)
    radius = _check_positive("radius", radius)
    rgb = _check_color(color)
    index_format = _check_index_format(index_format)
    n_vertices = sphere_vertex_count(lat_bands, long_bands)
    index_format.check_capacity(n_vertices)

    with log_timing(logger, "generate_sphere", lat_bands=lat_bands,
                    long_bands=long_bands, radius=radius) as info:
        positions = np.empty((n_vertices, 3), dtype=np.float64)
        normals = np.empty((n_vertices, 3), dtype=np.float64)

        v = 0
        for lat in range(lat_bands + 1):
            theta = lat * math.pi / lat_bands
            sin_theta = math.sin(theta)
            cos_theta = math.cos(theta)

            for lon in range(long_bands + 1):
                phi = lon * TWO_PI / long_bands
                x = radius * math.cos(phi) * sin_theta
                y = radius * cos_theta
                z = radius * math.sin(phi) * sin_theta

                positions[v] = (x, y, z)
                normals[v] = normalize((x, y, z))
                v += 1

        indices = []
        for lat in range(lat_bands):
            for lon in range(long_bands):
                first = lat * (long_bands + 1) + lon
                second = first + long_bands + 1

                indices.extend((first, second, first + 1))
                indices.extend((second, second + 1, first + 1))

        mesh = Mesh(
            positions=positions,
            colors=np.tile(rgb, n_vertices),
            normals=normals,
            indices=indices,
            index_format=index_format,
        )
        info["vertex_count"] = mesh.vertex_count
        info["index_count"] = mesh.index_count

    return mesh


def generate_cylinder(
    slices: int,
    radius: float,
    height: float,
    color: Sequence[float] = WHITE,
    index_format: IndexFormat = IndexFormat.UINT16,
) -> Mesh:
    """Build a capped cylinder centered at the origin, axis along +Y.

    Rim positions are emitted twice per ring step, once for the caps (flat
    +Y / -Y normals, disc-mapped UVs) and once for the side (radial normals,
    wrapped UVs), so each surface gets its own shading attributes.

    Args:
        slices: Number of segments around the axis (>= 1)
        radius: Cylinder radius (> 0)
        height: Cylinder height (non-zero)
        color: Uniform vertex color
        index_format: Index type; its capacity bounds the vertex count

    Returns:
        Mesh with 2 + 4*(slices+1) vertices, 4*slices triangles and
        texture coordinates

    Raises:
        PrimitiveParameterError: invalid slices, radius, height or color
        IndexCapacityError: too many vertices for index_format
    """
    slices = _check_count("slices", slices)
    radius = _check_positive("radius", radius)
    height = _check_nonzero("height", height)
    rgb = _check_color(color)
    index_format = _check_index_format(index_format)
    n_vertices = cylinder_vertex_count(slices)
    index_format.check_capacity(n_vertices)

    half_height = height / 2
    top_center, bottom_center, base = 0, 1, 2

    with log_timing(logger, "generate_cylinder", slices=slices,
                    radius=radius, height=height) as info:
        positions = [(0.0, half_height, 0.0), (0.0, -half_height, 0.0)]
        normals = [(0.0, 1.0, 0.0), (0.0, -1.0, 0.0)]
        tex_coords = [(0.5, 0.5), (0.5, 0.5)]

        for i in range(slices + 1):
            theta = i * TWO_PI / slices
            cos_t = math.cos(theta)
            sin_t = math.sin(theta)
            x = radius * cos_t
            z = radius * sin_t
            u = i / slices
            cap_uv = (cos_t * 0.5 + 0.5, sin_t * 0.5 + 0.5)
            side_normal = (cos_t, 0.0, sin_t)

            positions.extend([
                (x, half_height, z),
                (x, -half_height, z),
                (x, half_height, z),
                (x, -half_height, z),
            ])
            normals.extend([(0.0, 1.0, 0.0), (0.0, -1.0, 0.0), side_normal, side_normal])
            tex_coords.extend([cap_uv, cap_uv, (u, 1.0), (u, 0.0)])

        indices = []
        for i in range(slices):
            cap_top1 = base + i * 4
            cap_bottom1 = cap_top1 + 1
            top1 = cap_top1 + 2
            bottom1 = cap_top1 + 3
            cap_top2 = base + (i + 1) * 4
            cap_bottom2 = cap_top2 + 1
            top2 = cap_top2 + 2
            bottom2 = cap_top2 + 3

            indices.extend((top1, top2, bottom1))
            indices.extend((bottom1, top2, bottom2))
            indices.extend((top_center, cap_top2, cap_top1))
            indices.extend((bottom_center, cap_bottom1, cap_bottom2))

        mesh = Mesh(
            positions=positions,
            colors=np.tile(rgb, n_vertices),
            normals=normals,
            indices=indices,
            tex_coords=tex_coords,
            index_format=index_format,
        )
        info["vertex_count"] = mesh.vertex_count
        info["index_count"] = mesh.index_count

    return mesh


def generate_cone(
    slices: int,
    radius: float,
    height: float,
    color: Sequence[float] = WHITE,
    index_format: IndexFormat = IndexFormat.UINT16,
) -> Mesh:
    """Build a capped cone centered at the origin, tip on +Y.

    Side normals are normalize(cos(theta), radius / height, sin(theta)),
    which tilts them by the cone's half-angle. The side is a fan around the
    single tip vertex.

    Args:
        slices: Number of segments around the axis (>= 1)
        radius: Base radius (> 0)
        height: Cone height (non-zero)
        color: Uniform vertex color
        index_format: Index type; its capacity bounds the vertex count

    Returns:
        Mesh with 2 + 2*(slices+1) vertices, 2*slices triangles and
        texture coordinates

    Raises:
        PrimitiveParameterError: invalid slices, radius, height or color
        IndexCapacityError: too many vertices for index_format
    """
    slices = _check_count("slices", slices)
    radius = _check_positive("radius", radius)
    height = _check_nonzero("height", height)
    rgb = _check_color(color)
    index_format = _check_index_format(index_format)
    n_vertices = cone_vertex_count(slices)
    index_format.check_capacity(n_vertices)

    half_height = height / 2
    slope = radius / height
    tip, base_center, base = 0, 1, 2

    with log_timing(logger, "generate_cone", slices=slices,
                    radius=radius, height=height) as info:
        positions = [(0.0, half_height, 0.0), (0.0, -half_height, 0.0)]
        normals = [(0.0, 1.0, 0.0), (0.0, -1.0, 0.0)]
        tex_coords = [(0.5, 1.0), (0.5, 0.5)]

        for i in range(slices + 1):
            theta = i * TWO_PI / slices
            cos_t = math.cos(theta)
            sin_t = math.sin(theta)
            rim = (radius * cos_t, -half_height, radius * sin_t)

            positions.append(rim)
            normals.append(tuple(normalize((cos_t, slope, sin_t))))
            tex_coords.append((i / slices, 0.0))

            positions.append(rim)
            normals.append((0.0, -1.0, 0.0))
            tex_coords.append((cos_t * 0.5 + 0.5, sin_t * 0.5 + 0.5))

        indices = []
        for i in range(slices):
            side1 = base + i * 2
            side2 = base + (i + 1) * 2
            indices.extend((tip, side2, side1))
            indices.extend((base_center, side1 + 1, side2 + 1))

        mesh = Mesh(
            positions=positions,
            colors=np.tile(rgb, n_vertices),
            normals=normals,
            indices=indices,
            tex_coords=tex_coords,
            index_format=index_format,
        )
        info["vertex_count"] = mesh.vertex_count
        info["index_count"] = mesh.index_count

    return mesh
