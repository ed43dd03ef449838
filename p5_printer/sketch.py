"""
p5.js sketch printer.

Turns 2D/3D points and lines into draw calls and assembles them, together
with the fixed helper functions, into a complete sketch:

    var lineScale = ...
    var renderScale = ...

    function setup() { ... }

    function draw() {
      ...
      <accumulated draw calls>
      ...
    }
    <helper functions enabled by flags>

Usage:
    from p5_printer.sketch import SketchPrinter
    from p5_printer.geometry import Vector2, Vector2i

    printer = SketchPrinter(size=Vector2i(800, 600), line_scale=40.0, render_scale=20.0)
    printer.draw_grid = True
    printer.add_point(Vector2(5, 10))
    printer.add_line(Vector2(-3, -1), Vector2(10, 5))
    printer.print_all()
"""

import logging
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional, TextIO, Tuple, Union

from p5_printer.geometry.vectors import Vector2, Vector2i, Vector3
from p5_printer.logging_config import log_timing
from p5_printer.printing import boilerplate
from p5_printer.printing.draw_state import DrawStateTracker
from p5_printer.printing.formatting import (
    fill_color_call,
    format_scalar,
    sphere_string,
    stroke_color_call,
    stroke_weight_call,
    vec2_string,
    vec3_string,
    vec3_string_p_coordinates,
)
from p5_printer.printing.line_buffer import LineBuffer
from p5_printer.printing.styles import BLACK, Color, Style, Styles

logger = logging.getLogger(__name__)

Point = Union[Vector2, Vector3]
Hook = Callable[['SketchPrinter'], None]


def _caller_location(depth: int = 2) -> Tuple[str, int]:
    """File name and line number of the frame `depth` levels up the stack."""
    frame = sys._getframe(depth)
    return frame.f_code.co_filename, frame.f_lineno


@dataclass
class SketchHooks:
    """Optional callbacks that add custom text at fixed points of a sketch.

    Each hook receives the printer and typically calls ``print_line``.
    """
    pre_file: Optional[Hook] = None
    custom_header: Optional[Hook] = None
    post_setup: Optional[Hook] = None
    pre_draw: Optional[Hook] = None
    post_draw: Optional[Hook] = None

    def run(self, name: str, printer: 'SketchPrinter') -> None:
        hook = getattr(self, name)
        if hook is not None:
            hook(printer)


class SketchPrinter:
    """Accumulates geometry and prints it as a p5.js sketch.

    Args:
        size: canvas size in pixels
        line_scale: divisor for stroke weights, keeps lines thin in zoomed scenes
        render_scale: zoom applied to the sketch contents (centered on screen)
        styling: default style per geometry kind
        hooks: custom text callbacks
        indent_width: spaces per indentation level
        output: stream written by print_buffer() (sys.stdout when None)
    """

    def __init__(
        self,
        size: Optional[Vector2i] = None,
        line_scale: float = 2.0,
        render_scale: float = 1.0,
        styling: Optional[Styles] = None,
        hooks: Optional[SketchHooks] = None,
        indent_width: int = 2,
        output: Optional[TextIO] = None,
    ):
        self.size = size if size is not None else Vector2i(800, 600)
        self.line_scale = line_scale
        self.render_scale = render_scale
        self.styling = styling if styling is not None else Styles()
        self.hooks = hooks if hooks is not None else SketchHooks()
        self.output = output

        # Camera look-at, 3D only
        self.camera_look_at = Vector3.zero()
        self.print_draw_normal = False
        self.print_draw_tangent = False
        # Set whenever 3D geometry is added
        self.is_3d = False
        # Emit debugMode(GRID) in setup(), 3D only
        self.start_debug_mode = False
        self.draw_origin = True
        # 2D only
        self.draw_grid = False
        self.source_comments = True

        self._buffer = LineBuffer(indent_width=indent_width)
        self._draws = []
        self._state = DrawStateTracker(self.add_draw_line)

    @classmethod
    def from_config(cls, config, hooks: Optional[SketchHooks] = None,
                    output: Optional[TextIO] = None) -> 'SketchPrinter':
        """Build a printer from a ProjectConfig."""
        canvas = config.canvas
        features = config.features
        printer = cls(
            size=Vector2i(canvas.width, canvas.height),
            line_scale=canvas.line_scale,
            render_scale=canvas.render_scale,
            styling=config.styles.to_styles(),
            hooks=hooks,
            indent_width=canvas.indent_width,
            output=output,
        )
        printer.draw_grid = features.draw_grid
        printer.draw_origin = features.draw_origin
        printer.print_draw_normal = features.draw_normals
        printer.print_draw_tangent = features.draw_tangents
        printer.start_debug_mode = features.debug_mode
        printer.source_comments = features.source_comments
        if features.camera_look_at is not None:
            printer.camera_look_at = Vector3(*features.camera_look_at)
        return printer

    @property
    def buffer(self) -> str:
        """Sketch text printed so far."""
        return self._buffer.text

    @property
    def draws(self) -> Tuple[str, ...]:
        """Draw call lines accumulated for ``function draw()``."""
        return tuple(self._draws)

    @property
    def draw_state(self) -> DrawStateTracker:
        return self._state

    def vertex_radius(self) -> float:
        """Radius of points drawn by add_point(), before render scaling."""
        return 4.0

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def add_point(self, point: Point, style: Optional[Style] = None, *,
                  file: Optional[str] = None, line: Optional[int] = None) -> None:
        """Add a 2D circle or 3D sphere marker at `point`."""
        file, line = self._resolve_location(file, line)
        if isinstance(point, Vector3):
            self.add_point_3d(point, style, file=file, line=line)
        elif isinstance(point, Vector2):
            self.add_point_2d(point, style, file=file, line=line)
        else:
            raise TypeError(f"Expected Vector2 or Vector3, got {type(point).__name__}")

    def add_point_2d(self, point: Vector2, style: Optional[Style] = None, *,
                     file: Optional[str] = None, line: Optional[int] = None) -> None:
        file, line = self._resolve_location(file, line)
        radius = format_scalar(self.vertex_radius())

        self.add_file_and_line_comment(file, line)
        self.add_style_set(style or self.styling.geometry)
        self.add_draw_line(f"circle({vec2_string(point)}, {radius} / renderScale)")

    def add_point_3d(self, point: Vector3, style: Optional[Style] = None, *,
                     file: Optional[str] = None, line: Optional[int] = None) -> None:
        file, line = self._resolve_location(file, line)
        radius = format_scalar(self.vertex_radius())

        self.is_3d = True

        self.add_file_and_line_comment(file, line)
        self.add_style_set(style or self.styling.geometry)
        self.add_draw_line(sphere_string(point, f"{radius} / renderScale"))

    def add_line(self, start: Point, end: Point, style: Optional[Style] = None, *,
                 file: Optional[str] = None, line: Optional[int] = None) -> None:
        """Add a line segment; both ends must have the same dimensionality.

        Raises:
            TypeError: if the endpoints mix Vector2 and Vector3
        """
        file, line = self._resolve_location(file, line)
        if isinstance(start, Vector2) and isinstance(end, Vector2):
            self.add_line_2d(start, end, style, file=file, line=line)
        elif isinstance(start, Vector3) and isinstance(end, Vector3):
            self.add_line_3d(start, end, style, file=file, line=line)
        else:
            raise TypeError(
                "Line endpoints must both be Vector2 or both be Vector3, got "
                f"{type(start).__name__} and {type(end).__name__}"
            )

    def add_line_2d(self, start: Vector2, end: Vector2, style: Optional[Style] = None, *,
                    file: Optional[str] = None, line: Optional[int] = None) -> None:
        file, line = self._resolve_location(file, line)

        self.add_file_and_line_comment(file, line)
        self.add_style_set(style or self.styling.line)
        self.add_draw_line(f"line({vec2_string(start)}, {vec2_string(end)})")
        self.add_draw_line("")

    def add_line_3d(self, start: Vector3, end: Vector3, style: Optional[Style] = None, *,
                    file: Optional[str] = None, line: Optional[int] = None) -> None:
        file, line = self._resolve_location(file, line)

        self.is_3d = True

        self.add_file_and_line_comment(file, line)
        self.add_style_set(style or self.styling.line)
        self.add_draw_line(f"line({vec3_string(start)}, {vec3_string(end)})")
        self.add_draw_line("")

    def add_normal(self, point: Point, normal: Point, style: Optional[Style] = None, *,
                   file: Optional[str] = None, line: Optional[int] = None) -> None:
        """Draw `normal` as a short segment starting at `point` (drawNormal helper)."""
        file, line = self._resolve_location(file, line)
        if isinstance(point, Vector2) and isinstance(normal, Vector2):
            args = f"{vec2_string(point)}, {vec2_string(normal)}"
        elif isinstance(point, Vector3) and isinstance(normal, Vector3):
            self.is_3d = True
            args = f"{vec3_string(point)}, {vec3_string(normal)}"
        else:
            raise TypeError(
                "Normal origin and direction must both be Vector2 or both be Vector3, got "
                f"{type(point).__name__} and {type(normal).__name__}"
            )

        self.print_draw_normal = True

        self.add_file_and_line_comment(file, line)
        self.add_style_set(style or self.styling.normal_line)
        self.add_draw_line(f"drawNormal({args})")

    def add_tangent(self, point: Vector2, normal: Vector2, style: Optional[Style] = None, *,
                    file: Optional[str] = None, line: Optional[int] = None) -> None:
        """Draw the tangent perpendicular to `normal` through `point` (drawTangent helper)."""
        file, line = self._resolve_location(file, line)
        if not (isinstance(point, Vector2) and isinstance(normal, Vector2)):
            raise TypeError("Tangents are 2D only: point and normal must be Vector2")

        self.print_draw_tangent = True

        self.add_file_and_line_comment(file, line)
        self.add_style_set(style or self.styling.tangent_line)
        self.add_draw_line(f"drawTangent({vec2_string(point)}, {vec2_string(normal)})")

    # ------------------------------------------------------------------
    # Draw calls
    # ------------------------------------------------------------------

    def add_draw_line(self, line: str) -> None:
        self._draws.append(line)

    def add_draw_lines(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.add_draw_line(line)

    def add_no_stroke(self) -> None:
        self._state.explicit_no_stroke()

    def add_no_fill(self) -> None:
        self._state.explicit_no_fill()

    def add_stroke_color_set(self, color: Optional[Color]) -> None:
        self._state.set_stroke_color(color)

    def add_fill_color_set(self, color: Optional[Color]) -> None:
        self._state.set_fill_color(color)

    def add_stroke_weight_set(self, value: Union[str, float]) -> None:
        self._state.set_stroke_weight(value)

    def add_style_set(self, style: Optional[Style]) -> None:
        self._state.apply_style(style)

    def add_file_and_line_comment(self, file: Optional[str], line: Optional[int]) -> None:
        if not self.source_comments or file is None:
            return
        name = Path(file).name
        self.add_draw_line(f"// {name}" if line is None else f"// {name}:{line}")

    def _resolve_location(self, file: Optional[str], line: Optional[int]) -> Tuple[Optional[str], Optional[int]]:
        # _caller_location -> this method -> add_* method -> caller of add_*
        if file is not None or not self.source_comments:
            return file, line
        return _caller_location(3)

    # ------------------------------------------------------------------
    # Printing
    # ------------------------------------------------------------------

    def print_buffer(self, clear_buffer: bool = True) -> str:
        """Write the trimmed buffer to the output stream.

        Returns:
            The text that was written (without the final newline)
        """
        text = self._buffer.flush(clear=clear_buffer)
        stream = self.output if self.output is not None else sys.stdout
        stream.write(f"{text}\n")
        return text

    def print_all(self, clear_buffer_after: bool = True) -> str:
        """Print the whole sketch: header, setup(), draw() and enabled helpers.

        The buffer is written out with print_buffer() at the end.
        """
        with log_timing(logger, "Printing sketch", draws=len(self._draws), is_3d=self.is_3d):
            self.hooks.run('pre_file', self)

            self.print_line(f"var lineScale = {format_scalar(self.line_scale)}")
            self.print_line(f"var renderScale = {format_scalar(self.render_scale)}")
            if self.is_3d:
                self.print_line("var isSpaceBarPressed = false")

            self.hooks.run('custom_header', self)

            self.print_line("")
            self.print_setup()
            self.print_line("")
            self.print_draw()

            if not self.is_3d:
                self.print_draw_mouse_location_2d()

            if self.is_3d:
                self.print_line("")
                self.print_key_pressed()

            if self.draw_grid and not self.is_3d:
                self.print_line("")
                self.print_draw_grid_2d()

            if self.draw_origin:
                self.print_line("")
                if self.is_3d:
                    self.print_draw_origin_3d()
                else:
                    self.print_draw_origin_2d()

            if self.print_draw_normal:
                self.print_line("")
                self.print_draw_normal_2d()

            if self.print_draw_normal and self.is_3d:
                self.print_line("")
                self.print_draw_normal_3d()

            if self.print_draw_tangent:
                self.print_line("")
                self.print_draw_tangent_2d()

            if self.is_3d:
                self.print_line("")
                self.print_draw_sphere()

        return self.print_buffer(clear_buffer=clear_buffer_after)

    def print_setup(self) -> None:
        with self._buffer.block("function setup() {"):
            if self.is_3d:
                self.print_line(f"createCanvas({vec2_string(self.size)}, WEBGL)")
                self.print_line(
                    "perspective(PI / 3, 1, 0.3, 8000) "
                    "// Corrects default zNear plane being too far for unit measurements"
                )
                if self.camera_look_at != Vector3.zero():
                    self.print_line(f"camera({vec3_string_p_coordinates(self.camera_look_at)})")
            else:
                self.print_line(f"createCanvas({vec2_string(self.size)})")

            self.print_line("ellipseMode(RADIUS)")
            self.print_line("rectMode(CORNERS)")

            if self.is_3d and self.start_debug_mode:
                self.print_line("debugMode(GRID)")

            self.hooks.run('post_setup', self)

    def print_draw(self) -> None:
        with self._buffer.block("function draw() {"):
            self.hooks.run('pre_draw', self)

            self.print_line("background(240)")
            self.print_line("")
            if self.is_3d:
                self.print_line("orbitControl(3, 3, 0.3)")
                self.print_line("scale(lineScale)")
                self.print_line("// Correct Y to grow away from the origin, and Z to grow up")
                self.print_line("rotateX(PI / 2)")
                self.print_line("scale(1, -1, 1)")
            else:
                self.print_line("translate(width / 2, height / 2)")
            self.print_line("")
            self.print_line("strokeWeight(3 / lineScale)")

            if self.draw_origin and self.is_3d:
                self.print_line("drawOrigin3D()")

            if self.is_3d:
                self.print_lines(self.boilerplate_3d_space_bar(1.0))

            self.print_line("scale(renderScale)")

            if self.draw_grid and not self.is_3d:
                self.print_line("")
                self.print_line("drawGrid()")
            if self.draw_origin and not self.is_3d:
                self.print_line("drawOrigin2D()")

            self.print_line("")

            for draw in self._draws:
                self.print_line(draw)

            if not self.is_3d:
                self.print_line("drawMouseLocation2D()")

            # Reset draw state
            self.print_line(stroke_color_call(BLACK))
            self.print_line(fill_color_call(None))
            self.print_line(stroke_weight_call(1.0))

            self.hooks.run('post_draw', self)

    def boilerplate_3d_space_bar(self, line_weight: float) -> list:
        return boilerplate.space_bar_toggle(line_weight)

    def print_key_pressed(self) -> None:
        self.print_multiline(boilerplate.KEY_PRESSED)

    def print_draw_mouse_location_2d(self) -> None:
        self.print_multiline(boilerplate.DRAW_MOUSE_LOCATION_2D)

    def print_draw_grid_2d(self) -> None:
        self.print_multiline(boilerplate.DRAW_GRID_2D)

    def print_draw_origin_2d(self) -> None:
        self.print_multiline(boilerplate.draw_origin_2d())

    def print_draw_origin_3d(self) -> None:
        self.print_multiline(boilerplate.draw_origin_3d())

    def print_draw_normal_2d(self) -> None:
        self.print_multiline(boilerplate.DRAW_NORMAL_2D)

    def print_draw_normal_3d(self) -> None:
        self.print_multiline(boilerplate.DRAW_NORMAL_3D)

    def print_draw_tangent_2d(self) -> None:
        self.print_multiline(boilerplate.DRAW_TANGENT_2D)

    def print_draw_sphere(self) -> None:
        self.print_multiline(boilerplate.DRAW_SPHERE)

    # ------------------------------------------------------------------
    # Buffer primitives
    # ------------------------------------------------------------------

    def print_line(self, line: str) -> None:
        self._buffer.print_line(line)

    def print_lines(self, lines: Iterable[str]) -> None:
        self._buffer.print_lines(lines)

    def print_multiline(self, block: str) -> None:
        self._buffer.print_multiline(block)

    def indented_block(self, opening: str):
        """Context manager printing `opening`, an indented body and ``}``."""
        return self._buffer.block(opening)

    def indented(self):
        return self._buffer.indented()

    def indent(self) -> None:
        self._buffer.indent()

    def deindent(self) -> None:
        self._buffer.deindent()


@contextmanager
def printing_sketch(size: Optional[Vector2i] = None, line_scale: float = 2.0,
                    **kwargs) -> Iterator[SketchPrinter]:
    """Yield a 500x500 printer and print the full sketch when the block ends."""
    printer = SketchPrinter(
        size=size if size is not None else Vector2i(500, 500),
        line_scale=line_scale,
        **kwargs,
    )
    yield printer
    printer.print_all()
