"""
Loading of JSON scene files for the command line.

A scene lists geometry to draw:

    {
        "points":   [[5, 10], {"at": [1, 2, 3], "style": {"stroke_color": "red"}}],
        "lines":    [[[-3, -1], [10, 5]], {"start": [0, 0], "end": [1, 1]}],
        "normals":  [[[0, 0], [0, 1]], {"at": [0, 0], "direction": [1, 0]}],
        "tangents": [[[0, 0], [0, 1]]]
    }

Coordinates with two components are 2D, with three components 3D.
Per-item styles are merged over the printer's default style for that kind.
"""

import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from p5_printer.geometry.vectors import Vector2, Vector3
from p5_printer.printing.styles import Style

logger = logging.getLogger(__name__)

Coordinate = Union[Vector2, Vector3]


class SceneLoadError(Exception):
    """Scene file is missing, unreadable or malformed."""


@dataclass
class SceneItem:
    """One drawable entry of a scene."""
    kind: str  # "point", "line", "normal" or "tangent"
    a: Coordinate
    b: Optional[Coordinate] = None
    style: Optional[Dict[str, Any]] = None
    index: int = 0  # 1-based position within its section


@dataclass
class Scene:
    """Parsed scene file."""
    source: str = "<scene>"
    points: List[SceneItem] = field(default_factory=list)
    lines: List[SceneItem] = field(default_factory=list)
    normals: List[SceneItem] = field(default_factory=list)
    tangents: List[SceneItem] = field(default_factory=list)

    @property
    def is_3d(self) -> bool:
        items = self.points + self.lines + self.normals + self.tangents
        return any(isinstance(item.a, Vector3) for item in items)

    def __len__(self) -> int:
        return len(self.points) + len(self.lines) + len(self.normals) + len(self.tangents)

    def apply(self, printer) -> None:
        """Add every item to `printer`: points, lines, normals, then tangents.

        Source comments name the scene file and the item's position.
        """
        name = Path(self.source).name
        styling = printer.styling

        for item in self.points:
            printer.add_point(item.a, _style(item, styling.geometry),
                              file=name, line=item.index)
        for item in self.lines:
            printer.add_line(item.a, item.b, _style(item, styling.line),
                             file=name, line=item.index)
        for item in self.normals:
            printer.add_normal(item.a, item.b, _style(item, styling.normal_line),
                               file=name, line=item.index)
        for item in self.tangents:
            printer.add_tangent(item.a, item.b, _style(item, styling.tangent_line),
                                file=name, line=item.index)

        logger.debug("Applied scene %s", name, extra={"items": len(self)})


def _style(item: SceneItem, default: Style) -> Optional[Style]:
    if item.style is None:
        return None
    return Style.from_dict(item.style, base=default)


def _coordinate(value: Any, where: str) -> Coordinate:
    if not isinstance(value, (list, tuple)) or len(value) not in (2, 3):
        raise SceneLoadError(f"{where}: expected [x, y] or [x, y, z], got {value!r}")
    try:
        components = [float(v) for v in value]
    except (TypeError, ValueError):
        raise SceneLoadError(f"{where}: coordinates must be numbers, got {value!r}") from None
    if not all(math.isfinite(c) for c in components):
        raise SceneLoadError(f"{where}: coordinates must be finite, got {value!r}")
    if len(components) == 2:
        return Vector2(*components)
    return Vector3(*components)


def _item_style(entry: Dict[str, Any], where: str) -> Optional[Dict[str, Any]]:
    style = entry.get('style')
    if style is None:
        return None
    if not isinstance(style, dict):
        raise SceneLoadError(f"{where}: style must be an object, got {style!r}")
    try:
        Style.from_dict(style)
    except (TypeError, ValueError) as exc:
        raise SceneLoadError(f"{where}: invalid style: {exc}") from exc
    return style


def _parse_pair(kind: str, entry: Any, where: str, keys: Sequence[str]) -> SceneItem:
    first_key, second_key = keys
    if isinstance(entry, dict):
        if first_key not in entry or second_key not in entry:
            raise SceneLoadError(f"{where}: expected keys {first_key!r} and {second_key!r}")
        a = _coordinate(entry[first_key], f"{where}.{first_key}")
        b = _coordinate(entry[second_key], f"{where}.{second_key}")
        style = _item_style(entry, where)
    elif isinstance(entry, (list, tuple)) and len(entry) == 2:
        a = _coordinate(entry[0], f"{where}[0]")
        b = _coordinate(entry[1], f"{where}[1]")
        style = None
    else:
        raise SceneLoadError(f"{where}: expected a pair of coordinates, got {entry!r}")

    if type(a) is not type(b):
        raise SceneLoadError(f"{where}: cannot mix 2D and 3D coordinates")
    if kind == 'tangent' and isinstance(a, Vector3):
        raise SceneLoadError(f"{where}: tangents are 2D only")
    return SceneItem(kind=kind, a=a, b=b, style=style)


def _parse_point(entry: Any, where: str) -> SceneItem:
    if isinstance(entry, dict):
        if 'at' not in entry:
            raise SceneLoadError(f"{where}: expected key 'at'")
        return SceneItem(kind='point', a=_coordinate(entry['at'], f"{where}.at"),
                         style=_item_style(entry, where))
    return SceneItem(kind='point', a=_coordinate(entry, where))


def parse_scene(data: Any, source: str = "<scene>") -> Scene:
    """Build a Scene from decoded JSON.

    Raises:
        SceneLoadError: if the structure is invalid
    """
    if not isinstance(data, dict):
        raise SceneLoadError(f"{source}: top level must be an object")

    sections = {
        'points': _parse_point,
        'lines': lambda e, w: _parse_pair('line', e, w, ('start', 'end')),
        'normals': lambda e, w: _parse_pair('normal', e, w, ('at', 'direction')),
        'tangents': lambda e, w: _parse_pair('tangent', e, w, ('at', 'direction')),
    }

    scene = Scene(source=source)
    for name, parse in sections.items():
        entries = data.get(name, [])
        if not isinstance(entries, list):
            raise SceneLoadError(f"{source}: '{name}' must be a list")
        items = getattr(scene, name)
        for i, entry in enumerate(entries, start=1):
            item = parse(entry, f"{name}[{i - 1}]")
            item.index = i
            items.append(item)

    return scene


def load_scene(filepath: Union[str, Path]) -> Scene:
    """Read and parse a JSON scene file.

    Raises:
        SceneLoadError: if the file is missing, is not valid JSON or is malformed
    """
    path = Path(filepath)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        raise SceneLoadError(f"Scene file not found: {str(path)!r}") from None
    except json.JSONDecodeError as exc:
        raise SceneLoadError(f"Scene file {str(path)!r} is not valid JSON: {exc}") from exc
    except OSError as exc:
        raise SceneLoadError(f"Could not read scene file {str(path)!r}: {exc}") from exc

    scene = parse_scene(data, source=str(path))
    logger.info("Loaded scene %s: %d points, %d lines, %d normals, %d tangents",
                path.name, len(scene.points), len(scene.lines),
                len(scene.normals), len(scene.tangents))
    return scene
