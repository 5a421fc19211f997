"""
-------
conftest.py
-------
Shared pytest fixtures for diagram tests.
"""

import pytest

from diagramtree import V2, curve, polygon, text, diagram_combine


# -----------------------------------------------------------------------------
# Leaf fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def square():
    """Side-2 square centered at (0, 0)."""
    return polygon([V2(-1, -1), V2(1, -1), V2(1, 1), V2(-1, 1)])


@pytest.fixture
def corner_curve():
    """Open L-shaped curve of length 20 whose midpoint is the corner."""
    return curve([V2(0, 0), V2(10, 0), V2(10, 10)])


@pytest.fixture
def label():
    return text("hello").translate(V2(3, 4))


# -----------------------------------------------------------------------------
# Tree fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def nested_group(square, corner_curve, label):
    """Group(square, Group(curve, label)) - three leaves, two levels."""
    inner = diagram_combine(corner_curve, label)
    return diagram_combine(square, inner)
