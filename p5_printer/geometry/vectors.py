"""
Immutable vector value types used to describe sketch geometry.

Contains:
- Vector2: 2D point/direction with float components
- Vector2i: 2D integer size (canvas dimensions in pixels)
- Vector3: 3D point/direction with float components

Arithmetic is exposed through named methods (add, subtract, scale, ...)
rather than operators. Components are always plain Python numbers so that
they format with the interpreter's default ``repr``.
"""

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class Vector2:
    """2D vector with float components."""
    x: float
    y: float

    def __post_init__(self):
        object.__setattr__(self, 'x', float(self.x))
        object.__setattr__(self, 'y', float(self.y))

    @classmethod
    def zero(cls) -> 'Vector2':
        return cls(0.0, 0.0)

    def add(self, other: 'Vector2') -> 'Vector2':
        return Vector2(self.x + other.x, self.y + other.y)

    def subtract(self, other: 'Vector2') -> 'Vector2':
        return Vector2(self.x - other.x, self.y - other.y)

    def multiply(self, other: 'Vector2') -> 'Vector2':
        """Component-wise product."""
        return Vector2(self.x * other.x, self.y * other.y)

    def scale(self, factor: float) -> 'Vector2':
        return Vector2(self.x * factor, self.y * factor)

    def divide(self, divisor: float) -> 'Vector2':
        return Vector2(self.x / divisor, self.y / divisor)

    def negate(self) -> 'Vector2':
        return Vector2(-self.x, -self.y)

    def dot(self, other: 'Vector2') -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: 'Vector2') -> float:
        """Z component of the 3D cross product of the two vectors."""
        return self.x * other.y - self.y * other.x

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> 'Vector2':
        """Unit vector along this one; the zero vector is returned unchanged."""
        length = self.length()
        if length == 0.0:
            return self
        return self.divide(length)

    def to_array(self) -> NDArray[np.float64]:
        return np.array([self.x, self.y], dtype=np.float64)


@dataclass(frozen=True)
class Vector2i:
    """2D vector with integer components (pixel sizes)."""
    x: int
    y: int

    def __post_init__(self):
        object.__setattr__(self, 'x', int(self.x))
        object.__setattr__(self, 'y', int(self.y))

    @classmethod
    def zero(cls) -> 'Vector2i':
        return cls(0, 0)

    def add(self, other: 'Vector2i') -> 'Vector2i':
        return Vector2i(self.x + other.x, self.y + other.y)

    def subtract(self, other: 'Vector2i') -> 'Vector2i':
        return Vector2i(self.x - other.x, self.y - other.y)

    def multiply(self, other: 'Vector2i') -> 'Vector2i':
        return Vector2i(self.x * other.x, self.y * other.y)

    def scale(self, factor: int) -> 'Vector2i':
        return Vector2i(self.x * factor, self.y * factor)

    def negate(self) -> 'Vector2i':
        return Vector2i(-self.x, -self.y)

    def dot(self, other: 'Vector2i') -> int:
        return self.x * other.x + self.y * other.y


@dataclass(frozen=True)
class Vector3:
    """3D vector with float components."""
    x: float
    y: float
    z: float

    def __post_init__(self):
        object.__setattr__(self, 'x', float(self.x))
        object.__setattr__(self, 'y', float(self.y))
        object.__setattr__(self, 'z', float(self.z))

    @classmethod
    def zero(cls) -> 'Vector3':
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def unit_x(cls) -> 'Vector3':
        return cls(1.0, 0.0, 0.0)

    @classmethod
    def unit_y(cls) -> 'Vector3':
        return cls(0.0, 1.0, 0.0)

    @classmethod
    def unit_z(cls) -> 'Vector3':
        return cls(0.0, 0.0, 1.0)

    @classmethod
    def from_array(cls, values) -> 'Vector3':
        x, y, z = (float(v) for v in values)
        return cls(x, y, z)

    def add(self, other: 'Vector3') -> 'Vector3':
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def subtract(self, other: 'Vector3') -> 'Vector3':
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def multiply(self, other: 'Vector3') -> 'Vector3':
        """Component-wise product."""
        return Vector3(self.x * other.x, self.y * other.y, self.z * other.z)

    def scale(self, factor: float) -> 'Vector3':
        return Vector3(self.x * factor, self.y * factor, self.z * factor)

    def divide(self, divisor: float) -> 'Vector3':
        return Vector3(self.x / divisor, self.y / divisor, self.z / divisor)

    def negate(self) -> 'Vector3':
        return Vector3(-self.x, -self.y, -self.z)

    def dot(self, other: 'Vector3') -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: 'Vector3') -> 'Vector3':
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def normalized(self) -> 'Vector3':
        """Unit vector along this one; the zero vector is returned unchanged."""
        length = self.length()
        if length == 0.0:
            return self
        return self.divide(length)

    def to_array(self) -> NDArray[np.float64]:
        return np.array([self.x, self.y, self.z], dtype=np.float64)
