"""
p5_printer: generator of p5.js sketches from 2D/3D geometry.

Command-line usage goes through main.py; library usage through SketchPrinter.
"""

from p5_printer.geometry import Matrix3x3, Vector2, Vector2i, Vector3
from p5_printer.logging_config import (
    LogContext,
    configure_default_logging,
    get_logger,
    log_timing,
    setup_logging,
    timed,
)
from p5_printer.printing.styles import Color, Style, Styles
from p5_printer.sketch import SketchHooks, SketchPrinter, printing_sketch

__all__ = [
    "Matrix3x3",
    "Vector2",
    "Vector2i",
    "Vector3",
    "Color",
    "Style",
    "Styles",
    "SketchHooks",
    "SketchPrinter",
    "printing_sketch",
    "setup_logging",
    "get_logger",
    "configure_default_logging",
    "log_timing",
    "timed",
    "LogContext",
]
