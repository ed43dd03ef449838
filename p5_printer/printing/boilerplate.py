"""
Fixed p5.js helper functions emitted into sketches.

Blocks are authored with one extra level of indentation per nested line;
LineBuffer.print_multiline re-indents them to the output's indent width.
"""

from typing import List

from p5_printer.geometry.vectors import Vector3
from p5_printer.printing.formatting import format_scalar, vec3_string

ORIGIN_2D_LENGTH = 25.0
ORIGIN_3D_LENGTH = 100.0

KEY_PRESSED = """\
function keyPressed() {
    if (keyCode === 32) {
        isSpaceBarPressed = !isSpaceBarPressed
    }
}"""

DRAW_MOUSE_LOCATION_2D = """\
function drawMouseLocation2D() {
    resetMatrix()
    fill(0)
    noStroke()

    const mx = (mouseX - width / 2) / renderScale
    const my = (mouseY - height / 2) / renderScale

    text(`Mouse location: (${mx}, ${my})`, 10, 10 + textAscent())
}"""

DRAW_GRID_2D = """\
function drawGrid() {
    strokeWeight(1 / lineScale)

    let lengthX = width / 2 / renderScale
    let lengthY = height / 2 / renderScale
    let sep = (20) / renderScale

    stroke(0, 0, 0, 50)

    line(0, -lengthY, 0, lengthY)
    line(-lengthX, 0, lengthX, 0)
    for (let x = -lengthX; x < lengthX; x += sep) {
        line(x, -lengthY, x, lengthY)
    }
    for (let y = -lengthY; y < lengthY; y += sep) {
        line(-lengthX, y, lengthX, y)
    }
}"""

DRAW_NORMAL_2D = """\
function drawNormal(x, y, nx, ny) {
    const s = 15.0 / renderScale

    const x2 = x + nx * s
    const y2 = y + ny * s

    line(x, y, x2, y2)
}"""

DRAW_NORMAL_3D = """\
function drawNormal(x, y, z, nx, ny, nz) {
    const s = 10.0 / renderScale

    const x2 = x + nx * s
    const y2 = y + ny * s
    const z2 = z + nz * s

    strokeWeight(5 / lineScale)
    stroke(255, 0, 0, 200)
    line(x, y, z, x2, y2, z2)
}"""

DRAW_TANGENT_2D = """\
function drawTangent(x, y, nx, ny) {
    const s = 5.0 / renderScale

    const x1 = x - ny * s
    const y1 = y + nx * s

    const x2 = x + ny * s
    const y2 = y - nx * s

    line(x1, y1, x2, y2)
}"""

DRAW_SPHERE = """\
function drawSphere(x, y, z, radius) {
    push()
    translate(x, y, z)
    sphere(radius)
    pop()
}"""


def draw_origin_2d(length: float = ORIGIN_2D_LENGTH) -> str:
    size = format_scalar(length)
    return f"""\
function drawOrigin2D() {{
    strokeWeight(1 / lineScale)
    // X axis
    stroke(255, 0, 0)
    line(0.0, 0.0, {size} / renderScale, 0.0)
    // Y axis
    stroke(0, 255, 0)
    line(0.0, 0.0, 0.0, {size} / renderScale)
}}"""


def draw_origin_3d(length: float = ORIGIN_3D_LENGTH) -> str:
    origin = vec3_string(Vector3.zero())
    vx = vec3_string(Vector3.unit_x().scale(length))
    vy = vec3_string(Vector3.unit_y().scale(length))
    vz = vec3_string(Vector3.unit_z().scale(length))
    return f"""\
function drawOrigin3D() {{
    // X axis
    stroke(255, 0, 0, 50)
    line({origin}, {vx})
    // Y axis
    stroke(0, 255, 0, 50)
    line({origin}, {vy})
    // Z axis
    stroke(0, 0, 255, 50)
    line({origin}, {vz})
}}"""


def space_bar_toggle(line_weight: float) -> List[str]:
    """Lines of the 3D space-bar wireframe/solid toggle inside ``draw()``.

    Nested lines carry a single space of their own and are printed as-is
    at the current level.
    """
    weight = format_scalar(1 / line_weight)
    return [
        "if (isSpaceBarPressed) {",
        " noFill()",
        " noLights()",
        " stroke(0, 0, 0, 20)",
        f" strokeWeight({weight} / lineScale)",
        "} else {",
        " noStroke()",
        " fill(255, 255, 255, 255)",
        " lights()",
        "}",
    ]
