"""Text emission: formatting, line buffer, draw-state tracking and styles."""

from p5_printer.printing.draw_state import DrawStateTracker
from p5_printer.printing.line_buffer import LineBuffer
from p5_printer.printing.styles import (
    BLACK,
    BLUE,
    CYAN,
    DEFAULT_STYLE,
    GREEN,
    GREY,
    PURPLE,
    RED,
    WHITE,
    YELLOW,
    Color,
    Style,
    Styles,
)

__all__ = [
    "DrawStateTracker",
    "LineBuffer",
    "Color",
    "Style",
    "Styles",
    "DEFAULT_STYLE",
    "BLACK",
    "BLUE",
    "CYAN",
    "GREEN",
    "GREY",
    "PURPLE",
    "RED",
    "WHITE",
    "YELLOW",
]
