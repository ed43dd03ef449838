"""
Elision of redundant stroke/fill/weight commands.

The tracker remembers the text of the last stroke color, fill color and
stroke weight command it emitted and drops a new command whose text is
identical. Comparison is purely textual: ``strokeWeight(2 / lineScale)``
and ``strokeWeight(2.0 / lineScale)`` are different commands.
"""

import logging
from typing import Callable, Optional, Union

from p5_printer.printing.formatting import (
    fill_color_call,
    stroke_color_call,
    stroke_weight_call,
)
from p5_printer.printing.styles import Color, Style

logger = logging.getLogger(__name__)

# Initial state; differs from every command text and from the "none" state.
_NEVER_EMITTED = ""


class DrawStateTracker:
    """Tracks the last emitted draw-state commands of one sketch.

    Args:
        emit: callable receiving each command line that is not elided
    """

    def __init__(self, emit: Callable[[str], None]):
        self._emit = emit
        self.last_stroke_color: Optional[str] = _NEVER_EMITTED
        self.last_fill_color: Optional[str] = _NEVER_EMITTED
        self.last_stroke_weight: Optional[str] = _NEVER_EMITTED

    def reset(self) -> None:
        """Forget everything emitted so far; the next command of each kind is emitted."""
        self.last_stroke_color = _NEVER_EMITTED
        self.last_fill_color = _NEVER_EMITTED
        self.last_stroke_weight = _NEVER_EMITTED

    def set_stroke_color(self, color: Optional[Color]) -> bool:
        """Emit ``stroke(...)``/``noStroke()`` unless identical to the last one.

        Returns:
            True if a line was emitted
        """
        line = stroke_color_call(color)
        if line == self.last_stroke_color:
            logger.debug("Elided repeated stroke color", extra={"command": line})
            return False
        self.last_stroke_color = line
        self._emit(line)
        return True

    def set_fill_color(self, color: Optional[Color]) -> bool:
        line = fill_color_call(color)
        if line == self.last_fill_color:
            logger.debug("Elided repeated fill color", extra={"command": line})
            return False
        self.last_fill_color = line
        self._emit(line)
        return True

    def set_stroke_weight(self, value: Union[str, float]) -> bool:
        """Emit ``strokeWeight(<value> / lineScale)`` unless identical to the last one.

        `value` is used verbatim when it is a string.
        """
        line = stroke_weight_call(value)
        if line == self.last_stroke_weight:
            logger.debug("Elided repeated stroke weight", extra={"command": line})
            return False
        self.last_stroke_weight = line
        self._emit(line)
        return True

    def apply_style(self, style: Optional[Style]) -> None:
        """Re-establish stroke color, fill color and stroke weight, in that order."""
        if style is None:
            return
        self.set_stroke_color(style.stroke_color)
        self.set_fill_color(style.fill_color)
        self.set_stroke_weight(style.stroke_weight)

    def explicit_no_stroke(self) -> bool:
        """Emit ``noStroke()`` unless the stroke is already explicitly off."""
        if self.last_stroke_color is None:
            return False
        self.last_stroke_color = None
        self._emit("noStroke()")
        return True

    def explicit_no_fill(self) -> bool:
        """Emit ``noFill()`` unless the fill is already explicitly off."""
        if self.last_fill_color is None:
            return False
        self.last_fill_color = None
        self._emit("noFill()")
        return True
