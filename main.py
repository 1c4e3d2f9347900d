"""
Entry point: generate a primitive mesh, report on it and optionally export STL.

Usage:
    python main.py {sphere,cylinder,cone,cube} [options]

Examples:
    python main.py sphere --lat 32 --long 32 --radius 2 --validate
    python main.py cylinder --slices 48 --height 3 --stl cylinder.stl
    python main.py cube --cube-data cube.json --stl cube.stl --ascii
    python main.py cone --config project.solidmesh.json --json-log cone.log.json
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from solid_mesh.errors import SolidMeshError
from solid_mesh.geometry.mesh import Mesh
from solid_mesh.geometry.mesh_stats import calculate_mesh_statistics
from solid_mesh.io.stl_export import save_stl
from solid_mesh.io.validator import validate_mesh
from solid_mesh.logging_config import setup_logging
from solid_mesh.primitives.cube import load_cube_data
from solid_mesh.primitives.kinds import (
    ConeParams,
    CubeParams,
    CylinderParams,
    PrimitiveKind,
    PrimitiveParams,
    SphereParams,
    build_primitive,
)
from solid_mesh.project_config import ProjectConfig, load_config

logger = logging.getLogger("solid_mesh.cli")


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

def resolve_params(args: argparse.Namespace, config: ProjectConfig) -> PrimitiveParams:
    """Combine CLI overrides with configured defaults.

    Raises:
        CubeDataError: cube requested without readable cube data
    """
    kind = PrimitiveKind(args.kind)

    if kind is PrimitiveKind.SPHERE:
        return SphereParams(
            lat_bands=args.lat if args.lat is not None else config.sphere.lat_bands,
            long_bands=args.long if args.long is not None else config.sphere.long_bands,
            radius=args.radius if args.radius is not None else config.sphere.radius,
        )
    if kind is PrimitiveKind.CYLINDER:
        return CylinderParams(
            slices=args.slices if args.slices is not None else config.cylinder.slices,
            radius=args.radius if args.radius is not None else config.cylinder.radius,
            height=args.height if args.height is not None else config.cylinder.height,
        )
    if kind is PrimitiveKind.CONE:
        return ConeParams(
            slices=args.slices if args.slices is not None else config.cone.slices,
            radius=args.radius if args.radius is not None else config.cone.radius,
            height=args.height if args.height is not None else config.cone.height,
        )

    if not args.cube_data:
        raise SolidMeshError("The cube is not generated; pass its constants with --cube-data")
    return CubeParams(load_cube_data(args.cube_data))


def run_pipeline(
    params: PrimitiveParams,
    config: ProjectConfig,
    stl_path: Optional[str] = None,
    binary: Optional[bool] = None,
    validate: bool = False,
) -> Mesh:
    """Build the mesh, print its statistics and optionally validate/export it.

    Args:
        params: Primitive to build
        config: Project configuration (mesh options, output settings)
        stl_path: Write an STL file here when given
        binary: Override config.output.binary_stl
        validate: Print a validation report

    Returns:
        The generated Mesh
    """
    logger.info("Building %s", params.kind.value)
    mesh = build_primitive(
        params,
        color=tuple(config.mesh.color),
        index_format=config.mesh.index_format_enum,
    )

    stats = calculate_mesh_statistics(mesh)
    print(f"Primitive: {params.kind.value}")
    print(f"Indices: {mesh.index_count} ({mesh.index_format.value})")
    print(stats.summary())

    if validate:
        report = validate_mesh(mesh)
        print()
        print(report.summary())

    if stl_path:
        out = Path(stl_path)
        if not out.is_absolute() and config.output.output_dir:
            out = Path(config.output.output_dir) / out
            out.parent.mkdir(parents=True, exist_ok=True)
        use_binary = config.output.binary_stl if binary is None else binary
        save_stl(mesh, out, binary=use_binary, name=params.kind.value)
        print(f"STL: {out}")

    return mesh


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Generate a primitive mesh (sphere, cylinder, cone or injected cube).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "kind",
        choices=[k.value for k in PrimitiveKind],
        help="Primitive to build.",
    )
    parser.add_argument("--lat", type=int, default=None, help="Sphere latitude bands.")
    parser.add_argument("--long", type=int, default=None, help="Sphere longitude bands.")
    parser.add_argument("--slices", type=int, default=None, help="Cylinder/cone segments.")
    parser.add_argument("--radius", type=float, default=None, help="Radius.")
    parser.add_argument("--height", type=float, default=None, help="Cylinder/cone height.")
    parser.add_argument(
        "--cube-data",
        default=None,
        dest="cube_data",
        help="JSON file with cube positions/colors/normals/indices.",
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to a .solidmesh.json configuration file.",
    )
    parser.add_argument("--stl", default=None, help="Write the mesh to this STL file.")
    parser.add_argument(
        "--ascii",
        action="store_true",
        help="Write ASCII STL instead of binary.",
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Print a mesh validation report.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging.")
    parser.add_argument(
        "--json-log",
        default=None,
        dest="json_log",
        help="Also write JSON-lines logs to this file.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)

    setup_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        json_file=args.json_log,
    )

    try:
        config = load_config(explicit_config=args.config)
        params = resolve_params(args, config)
        run_pipeline(
            params,
            config,
            stl_path=args.stl,
            binary=False if args.ascii else None,
            validate=args.validate,
        )
    except (SolidMeshError, ValueError) as exc:
        logger.critical("%s", exc)
        return 1
    except Exception as exc:
        logger.critical("Unexpected error: %s", exc, exc_info=True)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
