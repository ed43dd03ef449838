"""
Colors and draw styles for sketch geometry.

A Style bundles the stroke color, fill color and stroke weight applied
before a geometry command. A missing (None) color means "no stroke" or
"no fill". Styles holds the default style per geometry kind.

JSON form (used by project configuration and scene files):
    color: [r, g, b], [r, g, b, a], a palette name ("black", "red", ...) or null
    style: {"stroke_color": <color>, "fill_color": <color>, "stroke_weight": 2.0}
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Sequence, Union

ColorValue = Union[None, str, Sequence[int], 'Color']


@dataclass(frozen=True)
class Color:
    """RGBA color with integer components in [0, 255]."""
    red: int
    green: int
    blue: int
    alpha: int = 255

    def __post_init__(self):
        for name in ('red', 'green', 'blue', 'alpha'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Color.{name} must be an integer, got {value!r}")
            if not 0 <= value <= 255:
                raise ValueError(f"Color.{name} must be in [0, 255], got {value}")

    @property
    def translucent(self) -> 'Color':
        """Copy of this color with alpha 100."""
        return replace(self, alpha=100)

    @property
    def opaque(self) -> 'Color':
        """Copy of this color with alpha 255."""
        return replace(self, alpha=255)

    def to_list(self) -> list:
        if self.alpha == 255:
            return [self.red, self.green, self.blue]
        return [self.red, self.green, self.blue, self.alpha]

    @classmethod
    def from_value(cls, value: ColorValue) -> Optional['Color']:
        """Parse a color from its JSON form.

        Raises:
            ValueError: unknown palette name or malformed component list
        """
        if value is None or isinstance(value, Color):
            return value
        if isinstance(value, str):
            try:
                return PALETTE[value.lower()]
            except KeyError:
                raise ValueError(f"Unknown color name: {value!r}") from None
        components = list(value)
        if len(components) not in (3, 4):
            raise ValueError(f"Color needs 3 or 4 components, got {components!r}")
        return cls(*components)


BLACK = Color(0, 0, 0)
GREY = Color(127, 127, 127)
WHITE = Color(255, 255, 255)

# Primary colors
RED = Color(255, 0, 0)
GREEN = Color(0, 255, 0)
BLUE = Color(0, 0, 255)

# Secondary colors
YELLOW = Color(255, 255, 0)
CYAN = Color(0, 255, 255)
PURPLE = Color(255, 0, 255)

PALETTE: Dict[str, Color] = {
    'black': BLACK,
    'grey': GREY,
    'gray': GREY,
    'white': WHITE,
    'red': RED,
    'green': GREEN,
    'blue': BLUE,
    'yellow': YELLOW,
    'cyan': CYAN,
    'purple': PURPLE,
}


@dataclass(frozen=True)
class Style:
    """Stroke/fill/weight applied to a draw operation."""
    stroke_color: Optional[Color] = BLACK
    fill_color: Optional[Color] = None
    stroke_weight: float = 1.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'stroke_color': self.stroke_color.to_list() if self.stroke_color else None,
            'fill_color': self.fill_color.to_list() if self.fill_color else None,
            'stroke_weight': self.stroke_weight,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base: Optional['Style'] = None) -> 'Style':
        """Build a style from its JSON form.

        Keys missing from `data` are taken from `base` (or the default style).
        """
        style = base or cls()
        if 'stroke_color' in data:
            style = replace(style, stroke_color=Color.from_value(data['stroke_color']))
        if 'fill_color' in data:
            style = replace(style, fill_color=Color.from_value(data['fill_color']))
        if 'stroke_weight' in data:
            style = replace(style, stroke_weight=float(data['stroke_weight']))
        return style


DEFAULT_STYLE = Style()


@dataclass
class Styles:
    """Default style per geometry kind."""
    line: Style = field(default_factory=lambda: Style(stroke_color=BLACK, stroke_weight=2.0))
    normal_line: Style = field(
        default_factory=lambda: Style(stroke_color=RED.translucent, stroke_weight=2.0)
    )
    tangent_line: Style = field(
        default_factory=lambda: Style(stroke_color=PURPLE.translucent, stroke_weight=2.0)
    )
    geometry: Style = field(default_factory=lambda: Style(stroke_color=BLACK, stroke_weight=2.0))

    def for_kind(self, kind: str) -> Style:
        """Look up a style by geometry kind name (e.g. 'line', 'geometry')."""
        if kind not in ('line', 'normal_line', 'tangent_line', 'geometry'):
            raise KeyError(f"Unknown geometry kind: {kind!r}")
        return getattr(self, kind)
