"""
path.py
-------

Ordered sequence of points (a polyline) with arc-length parametrization.

A Path is owned by exactly one Polygon, Curve or Image node. Like the nodes
themselves, a Path is copy-on-write unless flagged mutable: `add_points`
and `transform` return a new Path for an immutable receiver and rewrite the
receiver in place otherwise.
"""

from __future__ import annotations

__all__ = ["Path"]

from typing import Iterable, Optional

import numpy as np
from numpy.typing import NDArray

from .errors import ParameterRangeError
from .transform import PointMap
from .vector import Vector2


class Path:
    """Polyline of Vector2 points."""

    __slots__ = ("points", "mutable")

    def __init__(self, points: Iterable[Vector2], mutable: bool = False) -> None:
        points = list(points)
        if not points:
            raise ValueError("Path requires at least one point.")
        for p in points:
            if not isinstance(p, Vector2):
                raise TypeError(f"Path points must be Vector2, got {type(p).__name__}.")
        self.points: list[Vector2] = points
        self.mutable = mutable

    def __repr__(self) -> str:
        return f"Path({self.points!r}, mutable={self.mutable})"

    # -------------------------------------------------------------------------
    # Copy-on-write
    # -------------------------------------------------------------------------
    def copy(self) -> Path:
        return Path([p.copy() for p in self.points], mutable=self.mutable)

    def copy_if_not_mutable(self) -> Path:
        return self if self.mutable else self.copy()

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------
    def as_array(self, closed: bool = False) -> NDArray[np.float64]:
        """(N, 2) array of the points; `closed` repeats the first point at the end."""
        verts = np.array([(p.x, p.y) for p in self.points], dtype=float)
        if closed:
            verts = np.vstack([verts, verts[:1]])
        return verts

    def segment_lengths(self, closed: bool = False) -> NDArray[np.float64]:
        verts = self.as_array(closed)
        if len(verts) < 2:
            return np.zeros(0)
        return np.hypot(*np.diff(verts, axis=0).T)

    def length(self, closed: bool = False) -> float:
        """Sum of the distances between consecutive points."""
        return float(self.segment_lengths(closed).sum())

    def parametric_point(
            self,
            t             : float,
            closed        : bool          = False,
            segment_index : Optional[int] = None,
        ) -> Vector2:
        """Point at parameter `t` along the path.

        Args:
            t:
                Without `segment_index`, a fraction in [0, 1] of the total arc
                length. With `segment_index`, the position inside that single
                segment; values outside [0, 1] extrapolate linearly.
            closed:
                Treat the path as closed (implicit edge from the last point back
                to the first).
            segment_index:
                Index of the segment to sample directly.

        Returns:
            Vector2: The interpolated (or extrapolated) point.

        Raises:
            ParameterRangeError: `t` outside [0, 1] without `segment_index`, or
                `segment_index` outside the segments of the path.
        """
        verts = self.as_array(closed)

        if segment_index is not None:
            n_segments = len(verts) - 1
            if not 0 <= segment_index < n_segments:
                raise ParameterRangeError(
                    f"segment_index must be in [0, {n_segments}), got {segment_index}."
                )
            p1, p2 = verts[segment_index], verts[segment_index + 1]
            x, y = p2 if t == 1 else p1 + (p2 - p1) * t
            return Vector2(float(x), float(y))

        if not 0 <= t <= 1:
            raise ParameterRangeError(f"t must be in [0, 1], got {t}.")

        seg_lengths = self.segment_lengths(closed)
        total = seg_lengths.sum()
        if total == 0:
            return self.points[0].copy()

        cumulative_t = np.cumsum(seg_lengths) / total
        cumulative_t[-1] = 1.0
        i = int(np.searchsorted(cumulative_t, t, side="left"))
        if seg_lengths[i] == 0:
            x, y = verts[i]
            return Vector2(float(x), float(y))
        prev_t = cumulative_t[i - 1] if i > 0 else 0.0
        local_t = (t - prev_t) / (cumulative_t[i] - prev_t)
        return self.parametric_point(float(local_t), closed, i)

    # -------------------------------------------------------------------------
    # Copy-on-write updates
    # -------------------------------------------------------------------------
    def add_points(self, points: Iterable[Vector2]) -> Path:
        newp = self.copy_if_not_mutable()
        newp.points.extend(p.copy() for p in points)
        return newp

    def transform(self, f: PointMap) -> Path:
        """Apply `f` to every point."""
        newp = self.copy_if_not_mutable()
        newp.points = [f(p) for p in newp.points]
        return newp
