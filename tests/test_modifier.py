"""
test_modifier.py
----------------
Unit tests for modifier.py
"""

import numpy as np
import pytest

from diagramtree import DiagramType, V2, curve, diagram_combine, text
from diagramtree.modifier import resample, slicepath, subdivide


def coords(d):
    return d.path.as_array()


# ---------------------------------------------------------------------------
# 1. resample
# ---------------------------------------------------------------------------

def test_resample_curve_keeps_endpoints():
    d = curve([V2(0, 0), V2(12, 0)]).apply(resample(4))
    assert np.allclose(coords(d), [[0, 0], [4, 0], [8, 0], [12, 0]])


def test_resample_polygon_excludes_closing_point(square):
    d = square.apply(resample(4))
    assert d.type is DiagramType.POLYGON
    assert np.allclose(coords(d), [[-1, -1], [1, -1], [1, 1], [-1, 1]])


def test_resample_recursive_skips_text(nested_group):
    d = nested_group.apply_recursive(resample(3))
    assert len(d.children[0].path.points) == 3
    assert len(d.children[1].children[0].path.points) == 3
    assert d.children[1].children[1].textdata["text"] == "hello"


# ---------------------------------------------------------------------------
# 2. subdivide
# ---------------------------------------------------------------------------

def test_subdivide_curve(corner_curve):
    d = corner_curve.apply(subdivide(2))
    assert np.allclose(coords(d), [[0, 0], [5, 0], [10, 0], [10, 5], [10, 10]])
    assert d.path_length() == pytest.approx(20)


def test_subdivide_polygon_includes_closing_edge(square):
    d = square.apply(subdivide(2))
    assert len(d.path.points) == 8
    assert np.allclose(coords(d)[-1], [-1, 0])
    assert d.path_length() == pytest.approx(8)


def test_subdivide_mutable_in_place(corner_curve):
    d = corner_curve.mut()
    assert d.apply(subdivide(5)) is d
    assert len(d.path.points) == 11


# ---------------------------------------------------------------------------
# 3. slicepath
# ---------------------------------------------------------------------------

def test_slicepath_middle_of_curve(corner_curve):
    d = corner_curve.apply(slicepath(0.25, 0.75, 3))
    assert np.allclose(coords(d), [[5, 0], [10, 0], [10, 5]])


def test_slicepath_turns_polygon_into_curve(square):
    d = square.apply(slicepath(0, 0.5, 3))
    assert d.type is DiagramType.CURVE
    assert np.allclose(coords(d), [[-1, -1], [1, -1], [1, 1]])


def test_modifiers_pass_other_variants_through():
    label = text("x")
    for modifier in (resample(5), subdivide(), slicepath(0, 1)):
        assert modifier(label) is label
    group = diagram_combine(label)
    assert resample(5)(group) is group


@pytest.mark.parametrize("build", [
    lambda: resample(0),
    lambda: subdivide(0),
    lambda: slicepath(0, 1, 1),
])
def test_invalid_counts(build):
    with pytest.raises(ValueError):
        build()
