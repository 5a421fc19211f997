"""
transform.py
------------

Transform Builder: pure constructors of point-mapping functions.

Every constructor assembles a Matplotlib ``Affine2D`` and wraps it as a
``Vector2 -> Vector2`` callable. These are the only primitive spatial
operations; each Diagram-level transform is a single call into this set.

Core API:

    translate(v)                    p -> p + v
    rotate(angle, pivot)            counter-clockwise rotation about pivot
    scale(factor, origin)           independent x/y scaling about origin
    reflect_over_point(q)           180 deg rotation about q
    reflect_over_line(p1, p2)       mirror across the line through p1 and p2
    skew_x(angle, y_base)           x += tan(angle) * (y - y_base)
    skew_y(angle, x_base)           y += tan(angle) * (x - x_base)
"""

from __future__ import annotations

__all__ = [
    "PointMap", "affine_map", "translate", "rotate", "scale",
    "reflect_over_point", "reflect_over_line", "skew_x", "skew_y",
]

from typing import Callable, TypeAlias

import numpy as np
from matplotlib.transforms import Affine2D

from .vector import Vector2

PointMap: TypeAlias = Callable[[Vector2], Vector2]


def affine_map(trans: Affine2D) -> PointMap:
    """Wrap an ``Affine2D`` as a point function."""
    if not isinstance(trans, Affine2D):
        raise TypeError(f"Expected a Matplotlib Affine2D, got {type(trans).__name__}.")
    matrix = trans.get_matrix().copy()

    def f(p: Vector2) -> Vector2:
        x = matrix[0, 0] * p.x + matrix[0, 1] * p.y + matrix[0, 2]
        y = matrix[1, 0] * p.x + matrix[1, 1] * p.y + matrix[1, 2]
        return Vector2(float(x), float(y))

    return f


def translate(v: Vector2) -> PointMap:
    return affine_map(Affine2D().translate(v.x, v.y))


def rotate(angle: float, pivot: Vector2) -> PointMap:
    """Rotate by `angle` radians (counter-clockwise) around `pivot`."""
    return affine_map(Affine2D().rotate_around(pivot.x, pivot.y, angle))


def scale(factor: Vector2, origin: Vector2) -> PointMap:
    trans: Affine2D = (
        Affine2D()
        .translate(-origin.x, -origin.y)
        .scale(factor.x, factor.y)
        .translate(origin.x, origin.y)
    )
    return affine_map(trans)


def reflect_over_point(q: Vector2) -> PointMap:
    # Exact point reflection: p -> 2q - p (rotate_around(pi) leaves 1e-16 residue)
    return affine_map(Affine2D().scale(-1.0, -1.0).translate(2 * q.x, 2 * q.y))


def reflect_over_line(p1: Vector2, p2: Vector2) -> PointMap:
    """Householder reflection across the line through `p1` and `p2`.

    Raises:
        ValueError: If `p1` and `p2` coincide.
    """
    direction = p2.sub(p1)
    if direction.length_sq() == 0:
        raise ValueError(f"Reflection line needs two distinct points, got {p1} twice.")
    n = Vector2(-direction.y, direction.x).normalize()
    householder = np.eye(3)
    householder[:2, :2] -= 2.0 * np.outer([n.x, n.y], [n.x, n.y])
    to_line = Affine2D().translate(-p1.x, -p1.y).get_matrix()
    trans: Affine2D = Affine2D(householder @ to_line).translate(p1.x, p1.y)
    return affine_map(trans)


def skew_x(angle: float, y_base: float) -> PointMap:
    """Shear along x, proportional to the distance from the line y = y_base."""
    trans: Affine2D = (
        Affine2D()
        .translate(0.0, -y_base)
        .skew(angle, 0.0)
        .translate(0.0, y_base)
    )
    return affine_map(trans)


def skew_y(angle: float, x_base: float) -> PointMap:
    """Shear along y, proportional to the distance from the line x = x_base."""
    trans: Affine2D = (
        Affine2D()
        .translate(-x_base, 0.0)
        .skew(0.0, angle)
        .translate(x_base, 0.0)
    )
    return affine_map(trans)
