"""
Indentation-aware text buffer for generated sketch source.

Usage:
    buf = LineBuffer()
    with buf.block("function setup() {"):
        buf.print_line("createCanvas(800, 600)")
    text = buf.flush(clear=True)
"""

from contextlib import contextmanager
from typing import Iterable, Iterator, List


def _leading_whitespace(line: str) -> int:
    return len(line) - len(line.lstrip())


class LineBuffer:
    """Append-only line buffer with a current indentation level."""

    def __init__(self, indent_width: int = 2):
        if indent_width < 0:
            raise ValueError(f"indent_width must be non-negative, got {indent_width}")
        self.indent_width = indent_width
        self.level = 0
        self._text: List[str] = []

    @property
    def text(self) -> str:
        return "".join(self._text)

    def indent_string(self) -> str:
        return " " * (self.indent_width * self.level)

    # ------------------------------------------------------------------
    # Emission
    # ------------------------------------------------------------------

    def print_line(self, line: str = "") -> None:
        """Append one line at the current indentation.

        Empty lines get the indentation too.
        """
        self._text.append(f"{self.indent_string()}{line}\n")

    def print_lines(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.print_line(line)

    def print_multiline(self, block: str) -> None:
        """Re-indent a block of source text at the current position.

        Indentation is inferred relative to the previous non-blank line:
        deeper by any amount means one level in, shallower means one level
        out. Blank lines are kept and leave the level unchanged. The level
        in effect before the call is restored afterwards.
        """
        lines = block.split("\n")
        saved_level = self.level

        last_spaces = _leading_whitespace(lines[0]) if lines else 0
        try:
            for raw in lines:
                line = raw.strip()
                if not line:
                    self.print_line()
                    continue

                spaces = _leading_whitespace(raw)
                if spaces > last_spaces:
                    self.indent()
                elif spaces < last_spaces:
                    self.deindent()
                last_spaces = spaces

                self.print_line(line)
        finally:
            self.level = saved_level

    # ------------------------------------------------------------------
    # Indentation
    # ------------------------------------------------------------------

    def indent(self) -> None:
        self.level += 1

    def deindent(self) -> None:
        """Decrease the level by one.

        Going below zero is a caller error; it fails the assertion, or is
        clamped to zero when assertions are disabled.
        """
        assert self.level > 0, "deindent() called at indentation level 0"
        self.level = max(self.level - 1, 0)

    @contextmanager
    def indented(self) -> Iterator['LineBuffer']:
        """Indent everything printed inside the ``with`` body by one level."""
        self.indent()
        try:
            yield self
        finally:
            self.deindent()

    @contextmanager
    def block(self, opening: str) -> Iterator['LineBuffer']:
        """Print `opening`, an indented body, then a closing brace.

        `opening` must carry its own ``{``.
        """
        self.print_line(opening)
        with self.indented():
            yield self
        self.print_line("}")

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def flush(self, clear: bool = True) -> str:
        """Return the buffer with surrounding whitespace trimmed.

        Unless `clear` is set, the buffer is replaced by the trimmed text.
        """
        text = self.text.strip()
        self._text = [] if clear or not text else [text]
        return text

    def clear(self) -> None:
        self._text = []
        self.level = 0
