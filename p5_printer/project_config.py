"""
JSON-based project configuration for p5_printer.

Configuration hierarchy (later overrides earlier):
1. Built-in defaults (the dataclasses below)
2. User config (~/.p5printer.json)
3. Project config (./.p5printer.json or next to the scene file)
4. CLI arguments

Example .p5printer.json:
{
    "canvas": {
        "width": 800,
        "height": 600,
        "line_scale": 40.0,
        "render_scale": 20.0
    },
    "features": {
        "draw_grid": true,
        "draw_origin": true,
        "camera_look_at": [0.0, -200.0, 100.0]
    },
    "styles": {
        "geometry": {"stroke_color": "black", "fill_color": null, "stroke_weight": 2.0},
        "line": {"stroke_color": [0, 0, 255]}
    },
    "output": {
        "output_path": "sketch.js"
    }
}
"""

import json
import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from p5_printer.printing.styles import Style, Styles

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".p5printer.json"


@dataclass
class CanvasConfig:
    """Canvas size and scales."""
    width: int = 800
    height: int = 600
    line_scale: float = 2.0
    render_scale: float = 1.0
    indent_width: int = 2


@dataclass
class FeaturesConfig:
    """Optional sketch features."""
    draw_grid: bool = False  # 2D only
    draw_origin: bool = True
    draw_normals: bool = False
    draw_tangents: bool = False
    debug_mode: bool = False  # 3D only: debugMode(GRID)
    camera_look_at: Optional[List[float]] = None  # 3D only: [x, y, z]
    source_comments: bool = True


def _style_dict(style: Style) -> Dict[str, Any]:
    return style.to_dict()


@dataclass
class StylesConfig:
    """Default style per geometry kind, in JSON form."""
    line: Dict[str, Any] = field(default_factory=lambda: _style_dict(Styles().line))
    normal_line: Dict[str, Any] = field(default_factory=lambda: _style_dict(Styles().normal_line))
    tangent_line: Dict[str, Any] = field(default_factory=lambda: _style_dict(Styles().tangent_line))
    geometry: Dict[str, Any] = field(default_factory=lambda: _style_dict(Styles().geometry))

    def to_styles(self) -> Styles:
        """Build Styles; keys missing from a section keep the built-in default.

        Raises:
            ValueError: if a color cannot be parsed
        """
        defaults = Styles()
        return Styles(
            line=Style.from_dict(self.line, base=defaults.line),
            normal_line=Style.from_dict(self.normal_line, base=defaults.normal_line),
            tangent_line=Style.from_dict(self.tangent_line, base=defaults.tangent_line),
            geometry=Style.from_dict(self.geometry, base=defaults.geometry),
        )


@dataclass
class OutputConfig:
    """Output configuration."""
    output_path: str = ""  # empty = stdout
    clear_buffer: bool = True


_SECTIONS = ('canvas', 'features', 'styles', 'output')


@dataclass
class ProjectConfig:
    """Complete project configuration."""
    canvas: CanvasConfig = field(default_factory=CanvasConfig)
    features: FeaturesConfig = field(default_factory=FeaturesConfig)
    styles: StylesConfig = field(default_factory=StylesConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def save(self, path: Union[str, Path]) -> None:
        path = Path(path)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(self.to_json())
        logger.info("Configuration saved to %s", path)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProjectConfig':
        """Create configuration from a dictionary.

        Unknown sections and keys are ignored. Style sections are merged key
        by key over the defaults.
        """
        config = cls()

        for section_name in _SECTIONS:
            section_data = data.get(section_name)
            if not isinstance(section_data, dict):
                continue
            section = getattr(config, section_name)
            for key, value in section_data.items():
                if not hasattr(section, key):
                    logger.debug("Ignoring unknown config key %s.%s", section_name, key)
                    continue
                if section_name == 'styles' and isinstance(value, dict):
                    value = {**getattr(section, key), **value}
                setattr(section, key, value)

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


def find_config_file(
    scene_path: Optional[Union[str, Path]] = None,
    explicit_config: Optional[Union[str, Path]] = None,
) -> Optional[Path]:
    """Find a configuration file.

    Search order:
    1. Explicit config path (if provided)
    2. .p5printer.json in the scene file's directory
    3. .p5printer.json in the current working directory
    4. ~/.p5printer.json
    """
    if explicit_config:
        explicit = Path(explicit_config)
        if explicit.exists():
            return explicit
        logger.warning("Explicit config not found: %s", explicit)

    candidates = []
    if scene_path:
        candidates.append(Path(scene_path).parent / CONFIG_FILENAME)
    candidates.append(Path.cwd() / CONFIG_FILENAME)
    candidates.append(Path.home() / CONFIG_FILENAME)

    for candidate in candidates:
        if candidate.exists():
            return candidate

    return None


def load_config(
    scene_path: Optional[Union[str, Path]] = None,
    explicit_config: Optional[Union[str, Path]] = None,
) -> ProjectConfig:
    """Load configuration, falling back to defaults when none is usable."""
    config_path = find_config_file(scene_path, explicit_config)

    if config_path:
        try:
            return ProjectConfig.load(config_path)
        except (json.JSONDecodeError, OSError) as e:
            logger.error("Failed to load config %s: %s", config_path, e)

    return ProjectConfig()


def merge_configs(base: ProjectConfig, override: ProjectConfig) -> ProjectConfig:
    """Merge two configurations; values of `override` that differ from the defaults win."""
    merged = ProjectConfig.from_dict(base.to_dict())
    defaults = ProjectConfig()

    for section_name in _SECTIONS:
        override_section = getattr(override, section_name)
        default_section = getattr(defaults, section_name)
        merged_section = getattr(merged, section_name)
        for f in fields(override_section):
            value = getattr(override_section, f.name)
            if value != getattr(default_section, f.name):
                setattr(merged_section, f.name, value)

    return merged


def create_sample_config(path: Union[str, Path] = CONFIG_FILENAME) -> None:
    """Write a documented sample configuration file."""
    sample = {
        "_comment": "p5.js sketch printer configuration",
        "_version": "1.0",
        "canvas": {
            "_comment": "Canvas size in pixels and line/render scales",
            **asdict(CanvasConfig()),
        },
        "features": {
            "_comment": "Grid is 2D only; camera_look_at and debug_mode are 3D only",
            **asdict(FeaturesConfig()),
        },
        "styles": {
            "_comment": "Colors: [r, g, b], [r, g, b, a], a color name, or null",
            **asdict(StylesConfig()),
        },
        "output": {
            "_comment": "Empty output_path prints to stdout",
            **asdict(OutputConfig()),
        },
    }

    path = Path(path)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(sample, f, indent=2, ensure_ascii=False)

    logger.info("Sample configuration created: %s", path)
