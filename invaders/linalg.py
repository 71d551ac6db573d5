"""Small vector and 4x4 matrix helpers used for sprite placement."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple, Union

Vec2 = Tuple[float, float]
Vec3 = Tuple[float, float, float]

_Z_NEAR = -0.1
_Z_FAR = 1.0


@dataclass(frozen=True)
class Mat4:
    """A 4x4 matrix stored in column-major order, as uploaded to a shader.

    Element (row, col) lives at flat index ``col * 4 + row``.
    """

    values: Tuple[float, ...]

    def __post_init__(self) -> None:
        values = tuple(float(v) for v in self.values)
        if len(values) != 16:
            raise ValueError(f"a Mat4 needs 16 values, got {len(values)}")
        object.__setattr__(self, "values", values)

    @classmethod
    def _from_function(cls, element) -> "Mat4":
        return cls(tuple(element(row, col) for col in range(4) for row in range(4)))

    def __getitem__(self, index: Union[int, Tuple[int, int]]) -> float:
        """Return a flat column-major element, or the element at (row, col)."""
        if isinstance(index, tuple):
            row, col = index
            if not (0 <= row < 4 and 0 <= col < 4):
                raise IndexError(f"matrix index out of range: {index}")
            return self.values[col * 4 + row]
        return self.values[index]

    def __matmul__(self, other: "Mat4") -> "Mat4":
        if not isinstance(other, Mat4):
            return NotImplemented
        return Mat4._from_function(
            lambda r, c: sum(self[r, k] * other[k, c] for k in range(4))
        )

    def __iter__(self) -> Iterator[float]:
        return iter(self.values)


def identity() -> Mat4:
    """The 4x4 identity matrix."""
    return Mat4._from_function(lambda r, c: 1.0 if r == c else 0.0)


def translation(pos: Sequence[float]) -> Mat4:
    """A matrix translating by the three components of ``pos``."""
    x, y, z = pos

    def element(row: int, col: int) -> float:
        if col == 3 and row < 3:
            return float((x, y, z)[row])
        return 1.0 if row == col else 0.0

    return Mat4._from_function(element)


def orthographic(width: float, height: float) -> Mat4:
    """Orthographic projection of the box [0, width] x [0, height] x [-0.1, 1]."""
    left, right = 0.0, float(width)
    bottom, top = 0.0, float(height)
    if right == left or top == bottom:
        raise ValueError("width and height must be non-zero")
    inv_x = 1.0 / (right - left)
    inv_y = 1.0 / (top - bottom)
    inv_z = 1.0 / (_Z_FAR - _Z_NEAR)
    entries = {
        (0, 0): 2.0 * inv_x,
        (1, 1): 2.0 * inv_y,
        (2, 2): -2.0 * inv_z,
        (0, 3): -(right + left) * inv_x,
        (1, 3): -(top + bottom) * inv_y,
        (2, 3): -(_Z_FAR + _Z_NEAR) * inv_z,
        (3, 3): 1.0,
    }
    return Mat4._from_function(lambda r, c: entries.get((r, c), 0.0))


def subtract(a: Sequence[float], b: Sequence[float]) -> Vec3:
    """Component-wise ``a - b`` of two 3-vectors."""
    ax, ay, az = a
    bx, by, bz = b
    return (ax - bx, ay - by, az - bz)


def cross(a: Sequence[float], b: Sequence[float]) -> Vec3:
    """Cross product ``a x b`` of two 3-vectors."""
    ax, ay, az = a
    bx, by, bz = b
    return (ay * bz - az * by, az * bx - ax * bz, ax * by - ay * bx)


def normalize(v: Sequence[float]) -> Vec3:
    """Scale a 3-vector to unit length."""
    x, y, z = v
    length = math.sqrt(x * x + y * y + z * z)
    if length == 0.0:
        raise ValueError("cannot normalize a zero-length vector")
    inv = 1.0 / length
    return (x * inv, y * inv, z * inv)


def format_vec2(coord: Sequence[float]) -> str:
    """Render a 2-vector as ``vec2: x, y`` with two decimals."""
    x, y = coord
    return f"vec2: {x:.2f}, {y:.2f}"