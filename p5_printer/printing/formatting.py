"""
Literal formatting of numbers, vectors, matrices and colors for p5.js sketches.

All functions are pure. Floats use Python's shortest round-tripping ``repr``,
so ``5`` formats as ``5.0`` and ``2.5`` as ``2.5``, matching the numeric
literal style of the generated sketches.
"""

from typing import Any, List, Optional, Union

from p5_printer.geometry.matrix import Matrix3x3
from p5_printer.geometry.vectors import Vector2, Vector2i, Vector3
from p5_printer.printing.styles import Color


def format_scalar(value: float) -> str:
    """Default decimal form of a float (always carries a fractional part)."""
    return repr(float(value))


def _component(value: Union[int, float]) -> str:
    if isinstance(value, int):
        return str(value)
    return format_scalar(value)


def comma_separated(*values: Any) -> str:
    return ", ".join(_component(v) if isinstance(v, (int, float)) else str(v) for v in values)


# ---------------------------------------------------------------------------
# Vectors
# ---------------------------------------------------------------------------

def vec2_string(vec: Union[Vector2, Vector2i]) -> str:
    """``"x, y"``; integer vectors keep integer literals."""
    return comma_separated(vec.x, vec.y)


def vec3_string(vec: Vector3) -> str:
    """``"x, y, z"``."""
    return comma_separated(vec.x, vec.y, vec.z)


def vec3_string_p_coordinates(vec: Vector3) -> str:
    """``"x, -z, -y"`` for camera coordinates.

    In p5.js positive Y points down and positive Z points towards the screen.
    """
    return comma_separated(vec.x, -vec.z, -vec.y)


def vec3_pvector_string(vec: Vector3) -> str:
    return f"createVector({vec3_string(vec)})"


def sphere_string(center: Vector3, radius: str) -> str:
    """Call to the ``drawSphere`` helper with a radius expression."""
    return f"drawSphere({vec3_string(center)}, {radius})"


def apply_matrix_3d_lines(matrix: Matrix3x3) -> List[str]:
    """``applyMatrix`` call for a 3x3 transform, one matrix column per line."""
    return [
        f"applyMatrix({comma_separated(matrix[0, 0], matrix[1, 0], matrix[2, 0])}, 0,",
        f"            {comma_separated(matrix[0, 1], matrix[1, 1], matrix[2, 1])}, 0,",
        f"            {comma_separated(matrix[0, 2], matrix[1, 2], matrix[2, 2])}, 0,",
        "            0.0, 0.0, 0.0, 1.0)",
    ]


# ---------------------------------------------------------------------------
# Draw-state commands
# ---------------------------------------------------------------------------

def color_params(color: Color) -> str:
    """Arguments of a stroke()/fill() call.

    Grays collapse to a single argument; alpha is omitted when opaque.
    """
    if color.red == color.green == color.blue:
        params = str(color.red)
    else:
        params = comma_separated(color.red, color.green, color.blue)

    if color.alpha == 255:
        return params
    return comma_separated(params, color.alpha)


def stroke_color_call(color: Optional[Color]) -> str:
    if color is None:
        return "noStroke()"
    return f"stroke({color_params(color)})"


def fill_color_call(color: Optional[Color]) -> str:
    if color is None:
        return "noFill()"
    return f"fill({color_params(color)})"


def stroke_weight_call(value: Union[str, float]) -> str:
    """``strokeWeight(<value> / lineScale)``; numbers go through format_scalar."""
    if not isinstance(value, str):
        value = format_scalar(value)
    return f"strokeWeight({value} / lineScale)"
