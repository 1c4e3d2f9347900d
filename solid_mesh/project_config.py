"""
JSON-based project configuration for solid_mesh.

Holds the default primitive parameters, mesh options and output settings
used by the CLI and by default_primitives().

Configuration search order (first found wins):
1. Explicit config file path
2. ./.solidmesh.json in the current directory
3. ~/.solidmesh.json in the user's home directory

Example .solidmesh.json:
{
    "sphere": {"lat_bands": 32, "long_bands": 32, "radius": 1.0},
    "cylinder": {"slices": 48, "radius": 0.5, "height": 2.0},
    "cone": {"slices": 48, "radius": 0.5, "height": 1.0},
    "mesh": {"index_format": "uint32", "color": [1.0, 0.5, 0.0]},
    "output": {"binary_stl": true, "output_dir": "out"}
}
"""

import json
import logging
from dataclasses import dataclass, field, asdict, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from solid_mesh.geometry.mesh import IndexFormat

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".solidmesh.json"


@dataclass
class SphereConfig:
    """Default sphere subdivision and size."""
    lat_bands: int = 20
    long_bands: int = 20
    radius: float = 1.0


@dataclass
class CylinderConfig:
    """Default cylinder subdivision and size."""
    slices: int = 24
    radius: float = 1.0
    height: float = 1.0


@dataclass
class ConeConfig:
    """Default cone subdivision and size."""
    slices: int = 24
    radius: float = 1.0
    height: float = 1.0


@dataclass
class MeshConfig:
    """Options shared by all generated meshes."""
    index_format: str = "uint16"
    color: List[float] = field(default_factory=lambda: [1.0, 1.0, 1.0])

    @property
    def index_format_enum(self) -> IndexFormat:
        """index_format as an IndexFormat.

        Raises:
            ValueError: unknown index format name
        """
        try:
            return IndexFormat(self.index_format.lower())
        except ValueError:
            allowed = ", ".join(f.value for f in IndexFormat)
            raise ValueError(
                f"Unknown index_format {self.index_format!r} (expected one of: {allowed})"
            ) from None


@dataclass
class OutputConfig:
    """Output file configuration."""
    binary_stl: bool = True
    output_dir: str = ""


_SECTIONS = ("sphere", "cylinder", "cone", "mesh", "output")


@dataclass
class ProjectConfig:
    """Complete project configuration."""
    sphere: SphereConfig = field(default_factory=SphereConfig)
    cylinder: CylinderConfig = field(default_factory=CylinderConfig)
    cone: ConeConfig = field(default_factory=ConeConfig)
    mesh: MeshConfig = field(default_factory=MeshConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def save(self, path: Union[str, Path]) -> None:
        """Save configuration to a JSON file."""
        path = Path(path)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(self.to_json())
        logger.info("Configuration saved to %s", path)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProjectConfig':
        """Create configuration from a dictionary.

        Unknown sections and keys are ignored; keys starting with "_" are
        treated as comments.
        """
        config = cls()

        for section in _SECTIONS:
            values = data.get(section)
            if not isinstance(values, dict):
                continue
            target = getattr(config, section)
            known = {f.name for f in fields(target)}
            for key, value in values.items():
                if key in known:
                    setattr(target, key, value)
                elif not key.startswith("_"):
                    logger.warning("Ignoring unknown config key %s.%s", section, key)

        return config

    @classmethod
    def from_json(cls, json_str: str) -> 'ProjectConfig':
        return cls.from_dict(json.loads(json_str))

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'ProjectConfig':
        """Load configuration from a JSON file.

        Raises:
            FileNotFoundError: If file doesn't exist
            json.JSONDecodeError: If file is not valid JSON
        """
        path = Path(path)
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        logger.info("Configuration loaded from %s", path)
        return cls.from_dict(data)


def find_config_file(explicit_config: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """Find a configuration file using the search hierarchy.

    Args:
        explicit_config: Explicitly specified config path

    Returns:
        Path to config file if found, None otherwise
    """
    if explicit_config:
        explicit = Path(explicit_config)
        if explicit.exists():
            return explicit
        logger.warning("Explicit config not found: %s", explicit)

    cwd_config = Path.cwd() / CONFIG_FILENAME
    if cwd_config.exists():
        return cwd_config

    home_config = Path.home() / CONFIG_FILENAME
    if home_config.exists():
        return home_config

    return None


def load_config(explicit_config: Optional[Union[str, Path]] = None) -> ProjectConfig:
    """Load configuration, falling back to defaults when none is usable."""
    config_path = find_config_file(explicit_config)

    if config_path:
        try:
            return ProjectConfig.load(config_path)
        except (json.JSONDecodeError, OSError) as e:
            logger.error("Failed to load config %s: %s", config_path, e)

    return ProjectConfig()


def merge_configs(base: ProjectConfig, override: ProjectConfig) -> ProjectConfig:
    """Merge two configurations; override wins wherever it differs from the defaults."""
    merged = ProjectConfig.from_dict(base.to_dict())
    defaults = ProjectConfig()

    for section in _SECTIONS:
        default_section = asdict(getattr(defaults, section))
        for key, value in asdict(getattr(override, section)).items():
            if value != default_section[key]:
                setattr(getattr(merged, section), key, value)

    return merged


def create_sample_config(path: Union[str, Path] = CONFIG_FILENAME) -> None:
    """Write a commented sample configuration file."""
    sample = {
        "_comment": "solid_mesh primitive generator configuration",
        "_version": "1.0",
        "sphere": {
            "_comment": "Latitude/longitude subdivision and radius",
            **asdict(SphereConfig()),
        },
        "cylinder": {
            "_comment": "Segments around the axis, radius and height",
            **asdict(CylinderConfig()),
        },
        "cone": {
            "_comment": "Segments around the axis, base radius and height",
            **asdict(ConeConfig()),
        },
        "mesh": {
            "_comment": "index_format: uint16 (max 65536 vertices) or uint32",
            **asdict(MeshConfig()),
        },
        "output": {
            "_comment": "STL export settings",
            **asdict(OutputConfig()),
        },
    }

    path = Path(path)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(sample, f, indent=2, ensure_ascii=False)

    logger.info("Sample configuration created: %s", path)
