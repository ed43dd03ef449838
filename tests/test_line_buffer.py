"""
Unit tests for p5_printer.printing.line_buffer.

Tests:
- Line emission and indentation
- Re-indentation of multi-line blocks
- Flushing and clearing
"""

import pytest

from p5_printer.printing.line_buffer import LineBuffer


class TestPrintLine:
    """Tests for single-line emission."""

    def test_indentation(self):
        """Lines are prefixed with level * indent_width spaces."""
        buf = LineBuffer(indent_width=2)
        buf.print_line("a")
        buf.indent()
        buf.print_line("b")
        buf.indent()
        buf.print_line("c")
        assert buf.text == "a\n  b\n    c\n"

    def test_empty_line_indented(self):
        """Blank lines carry the current indentation."""
        buf = LineBuffer()
        buf.indent()
        buf.print_line("")
        buf.print_line()
        assert buf.text == "  \n  \n"

    def test_custom_width(self):
        """Indent width is configurable."""
        buf = LineBuffer(indent_width=4)
        buf.indent()
        buf.print_lines(["x", "y"])
        assert buf.text == "    x\n    y\n"

    def test_negative_width_rejected(self):
        """indent_width must not be negative."""
        with pytest.raises(ValueError):
            LineBuffer(indent_width=-1)


class TestIndentation:
    """Tests for indentation level management."""

    def test_deindent_below_zero(self):
        """Deindenting at level 0 is an assertion failure."""
        buf = LineBuffer()
        with pytest.raises(AssertionError):
            buf.deindent()

    def test_block(self):
        """block() prints the opening line, an indented body and a closing brace."""
        buf = LineBuffer()
        with buf.block("function setup() {"):
            buf.print_line("createCanvas(800, 600)")
        assert buf.text == "function setup() {\n  createCanvas(800, 600)\n}\n"
        assert buf.level == 0

    def test_nested_blocks_balance(self):
        """Nested blocks return the level to where it started."""
        buf = LineBuffer()
        buf.indent()
        with buf.block("function f() {"):
            with buf.block("if (a) {"):
                assert buf.level == 3
                buf.print_line("b()")
            assert buf.level == 2
        assert buf.level == 1
        assert buf.text == "  function f() {\n    if (a) {\n      b()\n    }\n  }\n"

    def test_indented_restores_level_on_error(self):
        """The level is restored when the body raises."""
        buf = LineBuffer()
        with pytest.raises(RuntimeError):
            with buf.indented():
                raise RuntimeError("boom")
        assert buf.level == 0


class TestPrintMultiline:
    """Tests for print_multiline re-indentation."""

    def test_reindents_to_buffer_width(self):
        """Four-space authored indentation becomes one level."""
        buf = LineBuffer(indent_width=2)
        buf.print_multiline("function f() {\n    if (a) {\n        b()\n    }\n}")
        assert buf.text == "function f() {\n  if (a) {\n    b()\n  }\n}\n"

    def test_relative_to_current_level(self):
        """Blocks start at the buffer's current level."""
        buf = LineBuffer()
        buf.indent()
        buf.print_multiline("if (x) {\n    y()\n}")
        assert buf.text == "  if (x) {\n    y()\n  }\n"
        assert buf.level == 1

    def test_blank_lines_kept(self):
        """Blank lines inside a block are kept at the current indentation."""
        buf = LineBuffer()
        buf.print_multiline("f() {\n    a()\n\n    b()\n}")
        assert buf.text == "f() {\n  a()\n  \n  b()\n}\n"

    def test_any_deeper_indent_is_one_level(self):
        """Indentation steps of any size count as one level."""
        buf = LineBuffer()
        buf.print_multiline("a {\n b {\n         c\n }\n}")
        assert buf.text == "a {\n  b {\n    c\n  }\n}\n"

    def test_level_restored(self):
        """A block that does not close its braces leaves the level unchanged."""
        buf = LineBuffer()
        buf.print_multiline("a {\n    b")
        assert buf.level == 0
        buf.print_line("c")
        assert buf.text.endswith("\nc\n")


class TestFlush:
    """Tests for flush and clear."""

    def test_flush_trims_and_clears(self):
        """Surrounding whitespace is removed and the buffer emptied."""
        buf = LineBuffer()
        buf.print_line("")
        buf.print_line("a")
        buf.print_line("")
        assert buf.flush() == "a"
        assert buf.text == ""

    def test_flush_without_clear(self):
        """The buffer is replaced by the trimmed text."""
        buf = LineBuffer()
        buf.print_line("a")
        buf.print_line("")
        assert buf.flush(clear=False) == "a"
        assert buf.text == "a"
        buf.print_line("b")
        assert buf.flush() == "ab"

    def test_flush_empty(self):
        """An empty buffer flushes to an empty string."""
        buf = LineBuffer()
        assert buf.flush(clear=False) == ""
        assert buf.text == ""

    def test_clear_resets_level(self):
        """clear() drops the text and the indentation level."""
        buf = LineBuffer()
        buf.indent()
        buf.print_line("x")
        buf.clear()
        assert buf.text == ""
        assert buf.level == 0
