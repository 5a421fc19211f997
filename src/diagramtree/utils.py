"""
utils.py
--------

Numeric helpers shared by the modifiers and by callers building point lists.
"""

from __future__ import annotations

__all__ = ["to_radian", "to_degree", "linspace", "linspace_exc", "range_inc"]

import math
from typing import Union

import numpy as np

numeric = Union[int, float]


def to_radian(angle: numeric) -> float:
    return math.radians(angle)


def to_degree(angle: numeric) -> float:
    return math.degrees(angle)


def linspace(start: numeric, end: numeric, n: int = 100) -> list[float]:
    """`n` evenly spaced values over [start, end]."""
    if n < 1:
        raise ValueError(f"n must be positive, got {n}.")
    return np.linspace(start, end, n).tolist()


def linspace_exc(start: numeric, end: numeric, n: int = 100) -> list[float]:
    """`n` evenly spaced values over [start, end)."""
    if n < 1:
        raise ValueError(f"n must be positive, got {n}.")
    return np.linspace(start, end, n, endpoint=False).tolist()


def range_inc(start: numeric, end: numeric, step: numeric = 1) -> list[float]:
    """Values from `start` to `end` inclusive, `step` apart."""
    if step == 0:
        raise ValueError("step must be non-zero.")
    count = math.floor((end - start) / step + 1e-9) + 1
    return (start + step * np.arange(max(count, 0))).tolist()
