"""
vector.py
---------

Immutable 2D vector used for every point of the scene graph.

Coordinates follow a y-up frame: positive rotation angles turn
counter-clockwise.
"""

from __future__ import annotations

__all__ = ["Vector2", "V2", "Vdir"]

import math
from dataclasses import dataclass
from typing import Callable, Iterator


@dataclass(frozen=True)
class Vector2:
    """2D vector value. No method mutates its receiver."""

    __slots__ = ("x", "y")

    x: float
    y: float

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------
    def add(self, v: Vector2) -> Vector2:
        return Vector2(self.x + v.x, self.y + v.y)

    def sub(self, v: Vector2) -> Vector2:
        return Vector2(self.x - v.x, self.y - v.y)

    def scale(self, s: float) -> Vector2:
        return Vector2(self.x * s, self.y * s)

    def mul(self, v: Vector2) -> Vector2:
        """Componentwise product."""
        return Vector2(self.x * v.x, self.y * v.y)

    def rotate(self, angle: float) -> Vector2:
        """Rotate around (0, 0) by `angle` radians."""
        c, s = math.cos(angle), math.sin(angle)
        return Vector2(self.x * c - self.y * s, self.x * s + self.y * c)

    def dot(self, v: Vector2) -> float:
        return self.x * v.x + self.y * v.y

    def cross(self, v: Vector2) -> float:
        """z component of the 3D cross product."""
        return self.x * v.y - self.y * v.x

    def equals(self, v: Vector2) -> bool:
        return self.x == v.x and self.y == v.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def length_sq(self) -> float:
        return self.x * self.x + self.y * self.y

    def angle(self) -> float:
        """Polar angle in radians, in (-pi, pi]."""
        return math.atan2(self.y, self.x)

    def normalize(self) -> Vector2:
        """Unit vector with the same direction.

        The zero vector yields NaN components instead of raising.
        """
        length = self.length()
        if length == 0:
            return Vector2(math.nan, math.nan)
        return Vector2(self.x / length, self.y / length)

    def copy(self) -> Vector2:
        return Vector2(self.x, self.y)

    def apply(self, f: Callable[[Vector2], Vector2]) -> Vector2:
        return f(self.copy())

    # -------------------------------------------------------------------------
    # Operators
    # -------------------------------------------------------------------------
    def __add__(self, v: Vector2) -> Vector2:
        return self.add(v)

    def __sub__(self, v: Vector2) -> Vector2:
        return self.sub(v)

    def __mul__(self, s: float) -> Vector2:
        return self.scale(s)

    __rmul__ = __mul__

    def __neg__(self) -> Vector2:
        return Vector2(-self.x, -self.y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __repr__(self) -> str:
        return f"V2({self.x!r}, {self.y!r})"


def V2(x: float, y: float) -> Vector2:
    """Shorthand constructor for Vector2."""
    return Vector2(float(x), float(y))


def Vdir(angle: float) -> Vector2:
    """Unit vector pointing at `angle` radians."""
    return Vector2(math.cos(angle), math.sin(angle))
