"""
modifier.py
-----------

Path modifiers: factories of ``Diagram -> Diagram`` functions meant for
`Diagram.apply` and `Diagram.apply_recursive`.

    d = polygon(points).apply(subdivide(4))
    group = group.apply_recursive(resample(50))

Modifiers only touch polygon and curve nodes; every other variant passes
through unchanged. They honor the mutability protocol of the node they get.
"""

from __future__ import annotations

__all__ = ["resample", "subdivide", "slicepath"]

from typing import Callable

import numpy as np

from .diagram import Diagram, DiagramType
from .utils import linspace, linspace_exc
from .vector import V2

ModifierFunc = Callable[[Diagram], Diagram]


def resample(n: int) -> ModifierFunc:
    """Replace the path with `n` points evenly spaced by arc length."""
    if n < 1:
        raise ValueError(f"n must be positive, got {n}.")

    def func(d: Diagram) -> Diagram:
        if d.type is DiagramType.POLYGON:
            ts = linspace_exc(0, 1, n)
        elif d.type is DiagramType.CURVE:
            ts = linspace(0, 1, n)
        else:
            return d
        return d.update_path([d.parametric_point(t) for t in ts])

    return func


def subdivide(n: int = 10) -> ModifierFunc:
    """Split every segment (closing edge included for polygons) into `n` pieces."""
    if n < 1:
        raise ValueError(f"n must be positive, got {n}.")

    def func(d: Diagram) -> Diagram:
        if d.type not in (DiagramType.POLYGON, DiagramType.CURVE):
            return d
        closed = d.type is DiagramType.POLYGON
        verts = d.path.as_array(closed)
        steps = np.arange(n, dtype=float) / n
        starts, deltas = verts[:-1], np.diff(verts, axis=0)
        pieces = (starts[:, None, :] + deltas[:, None, :] * steps[None, :, None]).reshape(-1, 2)
        if not closed:
            pieces = np.vstack([pieces, verts[-1:]])
        return d.update_path([V2(x, y) for x, y in pieces])

    return func


def slicepath(t_start: float, t_end: float, n: int = 10) -> ModifierFunc:
    """Turn the node into a curve of `n` points sampled from `t_start` to `t_end`."""
    if n < 2:
        raise ValueError(f"n must be at least 2, got {n}.")

    def func(d: Diagram) -> Diagram:
        if d.type not in (DiagramType.POLYGON, DiagramType.CURVE):
            return d
        points = [d.parametric_point(t) for t in linspace(t_start, t_end, n)]
        return d.update_path(points).to_curve()

    return func
