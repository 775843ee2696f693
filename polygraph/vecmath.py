"""Small vector types and a totally ordered, hashable 3D vector key."""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import total_ordering
from typing import ClassVar, Iterator


@dataclass(frozen=True)
class Vec2:
    """A two-component vector."""

    x: float = 0.0
    y: float = 0.0

    ZERO: ClassVar[Vec2]
    ONE: ClassVar[Vec2]

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float | Vec2) -> Vec2:
        if isinstance(factor, Vec2):
            return Vec2(self.x * factor.x, self.y * factor.y)
        return Vec2(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> Vec2:
        return Vec2(self.x / divisor, self.y / divisor)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y


Vec2.ZERO = Vec2(0.0, 0.0)
Vec2.ONE = Vec2(1.0, 1.0)


@dataclass(frozen=True)
class Vec3:
    """A three-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    ZERO: ClassVar[Vec3]
    ONE: ClassVar[Vec3]
    X: ClassVar[Vec3]
    Y: ClassVar[Vec3]
    Z: ClassVar[Vec3]

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, factor: float | Vec3) -> Vec3:
        if isinstance(factor, Vec3):
            return Vec3(self.x * factor.x, self.y * factor.y, self.z * factor.z)
        return Vec3(self.x * factor, self.y * factor, self.z * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> Vec3:
        return Vec3(self.x / divisor, self.y / divisor, self.z / divisor)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def to_ord(self) -> Vec3Ord:
        """Return a hashable, totally ordered key for this vector."""
        return Vec3Ord((self.x, self.y, self.z))


Vec3.ZERO = Vec3(0.0, 0.0, 0.0)
Vec3.ONE = Vec3(1.0, 1.0, 1.0)
Vec3.X = Vec3(1.0, 0.0, 0.0)
Vec3.Y = Vec3(0.0, 1.0, 0.0)
Vec3.Z = Vec3(0.0, 0.0, 1.0)


def _float_key(value: float) -> tuple[int, float, float]:
    # NaN sorts above everything and equals itself; -0.0 sorts below 0.0.
    if math.isnan(value):
        return (1, 0.0, 0.0)
    return (0, value, math.copysign(1.0, value))


@total_ordering
@dataclass(frozen=True, eq=False)
class Vec3Ord:
    """A vector whose components compare with a total order, usable as a key."""

    values: tuple[float, float, float]

    def _key(self) -> tuple[tuple[int, float, float], ...]:
        return tuple(_float_key(v) for v in self.values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vec3Ord):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Vec3Ord):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def to_vec(self) -> Vec3:
        """Return the plain vector this key was made from."""
        x, y, z = self.values
        return Vec3(x, y, z)