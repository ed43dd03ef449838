"""Geometry value types: vectors and 3x3 matrices."""

from p5_printer.geometry.matrix import Matrix3x3
from p5_printer.geometry.vectors import Vector2, Vector2i, Vector3

__all__ = [
    "Matrix3x3",
    "Vector2",
    "Vector2i",
    "Vector3",
]
