"""
3x3 matrix value type backed by a numpy array.

Provides:
- Matrix3x3 with row/column access and coefficient lookup ``m[row, column]``
- determinant, transposition, inversion and matrix products
- 2D scale/rotation/translation and skew-symmetric cross product factories

Coefficient lookups return plain floats so that they can be emitted into a
sketch with the default float formatting.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from p5_printer.geometry.vectors import Vector2, Vector3

logger = logging.getLogger(__name__)

Row = Tuple[float, float, float]


@dataclass(frozen=True, eq=False)
class Matrix3x3:
    """Immutable 3x3 matrix stored as three rows.

    Attributes:
        m: read-only float64 array of shape (3, 3), indexed [row, column]
    """
    m: NDArray[np.float64]

    def __post_init__(self):
        matrix = np.array(self.m, dtype=np.float64)
        if matrix.shape != (3, 3):
            raise ValueError(f"Matrix3x3 requires a 3x3 array, got shape {matrix.shape}")
        matrix.setflags(write=False)
        object.__setattr__(self, 'm', matrix)

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def identity(cls) -> 'Matrix3x3':
        return cls(np.eye(3))

    @classmethod
    def from_rows(cls, r0: Row, r1: Row, r2: Row) -> 'Matrix3x3':
        return cls(np.array([r0, r1, r2]))

    @classmethod
    def from_row_vectors(cls, r0: Vector3, r1: Vector3, r2: Vector3) -> 'Matrix3x3':
        return cls(np.array([r0.to_array(), r1.to_array(), r2.to_array()]))

    @classmethod
    def repeating(cls, scalar: float) -> 'Matrix3x3':
        return cls(np.full((3, 3), scalar))

    @classmethod
    def diagonal(cls, a: float, b: Optional[float] = None, c: Optional[float] = None) -> 'Matrix3x3':
        """Matrix with (a, b, c) on the diagonal; b and c default to a."""
        b = a if b is None else b
        c = a if c is None else c
        return cls(np.diag([a, b, c]))

    @classmethod
    def make_2d_scale(cls, x: float, y: float) -> 'Matrix3x3':
        return cls.from_rows((x, 0, 0), (0, y, 0), (0, 0, 1))

    @classmethod
    def make_2d_scale_vector(cls, vec: Vector2) -> 'Matrix3x3':
        return cls.make_2d_scale(vec.x, vec.y)

    @classmethod
    def make_2d_rotation(cls, angle_rad: float) -> 'Matrix3x3':
        """Rotation around the Z axis by `angle_rad` radians."""
        c = math.cos(angle_rad)
        s = math.sin(angle_rad)
        return cls.from_rows((c, s, 0), (-s, c, 0), (0, 0, 1))

    @classmethod
    def make_2d_translation(cls, x: float, y: float) -> 'Matrix3x3':
        return cls.from_rows((1, 0, x), (0, 1, y), (0, 0, 1))

    @classmethod
    def make_2d_translation_vector(cls, vec: Vector2) -> 'Matrix3x3':
        return cls.make_2d_translation(vec.x, vec.y)

    @classmethod
    def make_3d_skew_symmetric_cross_product(cls, vector: Vector3) -> 'Matrix3x3':
        """Matrix `K` for which ``K.transform(b) == vector.cross(b)``."""
        x, y, z = vector.x, vector.y, vector.z
        return cls.from_rows((0, -z, y), (z, 0, -x), (-y, x, 0))

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def __getitem__(self, index: Tuple[int, int]) -> float:
        row, column = index
        if not (0 <= row <= 2 and 0 <= column <= 2):
            raise IndexError(
                f"Rows/columns for Matrix3x3 run from [0, 0] to [2, 2], got [{row}, {column}]"
            )
        return float(self.m[row, column])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix3x3):
            return NotImplemented
        return bool(np.array_equal(self.m, other.m))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Matrix3x3(rows={self.rows()})"

    def rows(self) -> Tuple[Row, Row, Row]:
        return tuple(tuple(float(v) for v in row) for row in self.m)  # type: ignore[return-value]

    def row(self, index: int) -> Vector3:
        return Vector3.from_array(self.m[index])

    def column(self, index: int) -> Vector3:
        return Vector3.from_array(self.m[:, index])

    # ------------------------------------------------------------------
    # Linear algebra
    # ------------------------------------------------------------------

    @property
    def trace(self) -> float:
        return float(np.trace(self.m))

    def determinant(self) -> float:
        return float(np.linalg.det(self.m))

    def transposed(self) -> 'Matrix3x3':
        return Matrix3x3(self.m.T)

    def inverted(self) -> Optional['Matrix3x3']:
        """Inverse of this matrix, or None when it is singular."""
        if self.determinant() == 0.0:
            return None
        try:
            return Matrix3x3(np.linalg.inv(self.m))
        except np.linalg.LinAlgError:
            logger.debug("Matrix is numerically singular: %s", self)
            return None

    def add(self, other: 'Matrix3x3') -> 'Matrix3x3':
        return Matrix3x3(self.m + other.m)

    def subtract(self, other: 'Matrix3x3') -> 'Matrix3x3':
        return Matrix3x3(self.m - other.m)

    def negate(self) -> 'Matrix3x3':
        return Matrix3x3(-self.m)

    def scale(self, scalar: float) -> 'Matrix3x3':
        return Matrix3x3(self.m * scalar)

    def divide(self, scalar: float) -> 'Matrix3x3':
        return Matrix3x3(self.m / scalar)

    def multiply(self, other: 'Matrix3x3') -> 'Matrix3x3':
        """Matrix product ``self @ other``."""
        return Matrix3x3(self.m @ other.m)

    def transform(self, vector: Vector3) -> Vector3:
        """Apply this matrix to a column vector."""
        return Vector3.from_array(self.m @ vector.to_array())

