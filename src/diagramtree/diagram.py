"""
diagram.py
----------

Diagram node: the immutable-by-default scene graph.

A Diagram is a tagged variant (see DiagramType):

    POLYGON         closed Path
    CURVE           open Path
    IMAGE           Path holding the four image corners + image data
    TEXT            single text string, positioned at `origin`
    MULTILINE_TEXT  sequence of styled TextRuns
    DIAGRAM         group of child nodes

Mutability protocol:
    Every structural operation starts with a copy-resolve step
    (`copy_if_not_mutable`). An immutable node (the default) is deep copied
    first, so the caller's node is never touched. A node opted in via `mut()`
    is rewritten in place and the same reference is returned, which avoids the
    copying cost in per-frame update loops. `mut_parent_only()` flags a single
    level, leaving children copy-on-write.

Recursive operations are folds over the tree (`_rewrite`): resolve the node,
rewrite it, then recurse into its children. Style, text and geometry setters
are all expressed through `apply_recursive` / `transform`.

Core API:

    polygon(points), curve(points), line(start, end), empty(v)
    text(str), textvar(str), image(src, width, height)
    multiline(spans), multiline_bb(markup, linespace)
    diagram_combine(*diagrams)
"""

from __future__ import annotations

__all__ = [
    "DiagramType", "Diagram", "ANCHORS", "TEXTVAR_TAG",
    "polygon", "curve", "line", "empty", "text", "textvar", "image",
    "multiline", "multiline_bb", "diagram_combine",
]

import logging
from enum import Enum
from typing import Any, Callable, Iterable, Optional, Sequence, Union

import numpy as np
from matplotlib import colors

from . import transform as tf
from .config import (
    DEFAULT_CONFIG, DEFAULT_DIAGRAM_STYLE, DEFAULT_TEXT_DIAGRAM_STYLE,
    DEFAULT_TEXTDATA, LOGGER_NAME,
)
from .errors import AnchorError, ParameterRangeError, VariantError
from .markup import TextRun, parse_markup
from .path import Path
from .vector import V2, Vector2

ColorLike = Union[str, Sequence[float]]
TagsLike = Union[str, Iterable[str]]
DiagramFunc = Callable[["Diagram"], "Diagram"]


class DiagramType(str, Enum):
    POLYGON = "polygon"
    CURVE = "curve"
    TEXT = "text"
    IMAGE = "image"
    DIAGRAM = "diagram"
    MULTILINE_TEXT = "multilinetext"


PATH_TYPES = frozenset({DiagramType.POLYGON, DiagramType.CURVE, DiagramType.IMAGE})
TEXT_TYPES = frozenset({DiagramType.TEXT, DiagramType.MULTILINE_TEXT})
SHAPE_TYPES = frozenset({DiagramType.POLYGON, DiagramType.CURVE})

TEXTVAR_TAG = "textvar"

_VERTICAL = ("top", "center", "bottom")
_HORIZONTAL = ("left", "center", "right")
ANCHORS = tuple(f"{v}-{h}" for v in _VERTICAL for h in _HORIZONTAL)

_TEXT_ANCHOR = {"left": "start", "center": "middle", "right": "end"}
_TEXT_DY = {"top": "0.75em", "center": "0.25em", "bottom": "-0.25em"}


# =============================================================================
# Helpers
# =============================================================================
def _fmt(value: float) -> str:
    """SVG attribute text for a number ("2" rather than "2.0")."""
    value = float(value)
    return str(int(value)) if value.is_integer() else repr(value)


def _color_value(color: ColorLike) -> str:
    if isinstance(color, str):
        return color
    if isinstance(color, (tuple, list)):
        return colors.to_hex(color, keep_alpha=len(color) == 4)
    raise TypeError(f"Unsupported color type: {type(color).__name__}")


def _as_tag_set(tags: TagsLike) -> set[str]:
    if isinstance(tags, str):
        return {tags}
    return set(tags)


def _split_anchor(anchor: str) -> tuple[str, str]:
    if not isinstance(anchor, str):
        raise AnchorError(f"Anchor must be a string, got {type(anchor).__name__}.")
    vertical, _, horizontal = anchor.partition("-")
    if vertical not in _VERTICAL or horizontal not in _HORIZONTAL:
        raise AnchorError(f"Unknown anchor {anchor!r}; expected one of {', '.join(ANCHORS)}.")
    return vertical, horizontal


def _pick(lo: float, hi: float, where: str) -> float:
    if where in ("left", "bottom"):
        return lo
    if where in ("right", "top"):
        return hi
    return (lo + hi) / 2


# =============================================================================
# Diagram node
# =============================================================================
class Diagram:
    """Node of the scene tree.

    Nodes are built by the factory functions of this module; read the public
    fields freely (the renderer does), but change them only through the
    methods, which honor the mutability protocol.
    """

    __slots__ = (
        "type", "path", "children", "origin", "style", "textdata",
        "multilinedata", "imgdata", "mutable", "tags",
    )

    def __init__(
            self,
            type_         : DiagramType,
            *,
            path          : Optional[Path]              = None,
            children      : Optional[list[Diagram]]     = None,
            origin        : Optional[Vector2]           = None,
            textdata      : Optional[dict[str, Any]]    = None,
            imgdata       : Optional[dict[str, Any]]    = None,
            multilinedata : Optional[dict[str, Any]]    = None,
            tags          : Optional[TagsLike]          = None,
        ) -> None:
        type_ = DiagramType(type_)
        if (path is not None) != (type_ in PATH_TYPES):
            raise VariantError(f"A {type_.value} node {'needs' if path is None else 'cannot have'} a path.")
        if children and type_ is not DiagramType.DIAGRAM:
            raise VariantError(f"Only group nodes have children, not {type_.value}.")
        if textdata and type_ not in TEXT_TYPES:
            raise VariantError(f"Text data is only valid for text nodes, not {type_.value}.")
        if multilinedata and type_ is not DiagramType.MULTILINE_TEXT:
            raise VariantError(f"Multiline data is only valid for multiline text, not {type_.value}.")
        if imgdata and type_ is not DiagramType.IMAGE:
            raise VariantError(f"Image data is only valid for image nodes, not {type_.value}.")
        for child in children or ():
            if not isinstance(child, Diagram):
                raise TypeError(f"Children must be Diagram, got {type(child).__name__}.")

        self.type = type_
        self.path = path
        self.children: list[Diagram] = list(children or [])
        self.style: dict[str, Any] = {}
        self.textdata: dict[str, Any] = dict(textdata or {})
        self.multilinedata: dict[str, Any] = dict(multilinedata or {})
        self.imgdata: dict[str, Any] = dict(imgdata or {})
        self.mutable = False
        self.tags: set[str] = _as_tag_set(tags) if tags else set()

        if origin is not None:
            self.origin = origin
        elif path is not None:
            self.origin = self.get_anchor("center-center")
        elif self.children:
            self.origin = self.children[0].origin.copy()
        else:
            self.origin = V2(0, 0)

    def __repr__(self) -> str:
        return (f"Diagram({self.type.value}, origin={self.origin!r}, "
                f"children={len(self.children)}, mutable={self.mutable})")

    # -------------------------------------------------------------------------
    # Mutability protocol
    # -------------------------------------------------------------------------
    def mut(self) -> Diagram:
        """Flag the whole subtree mutable (in place) and return this node."""
        self.mutable = True
        if self.path is not None:
            self.path.mutable = True
        for child in self.children:
            child.mut()
        return self

    def mut_parent_only(self) -> Diagram:
        """Flag only this node (and its own path) mutable."""
        self.mutable = True
        if self.path is not None:
            self.path.mutable = True
        return self

    def immut(self) -> Diagram:
        """Immutable deep copy of the subtree."""
        newd = self.copy()
        newd._set_mutable_recursive(False)
        return newd

    def _set_mutable_recursive(self, mutable: bool) -> None:
        self.mutable = mutable
        if self.path is not None:
            self.path.mutable = mutable
        for child in self.children:
            child._set_mutable_recursive(mutable)

    def copy(self) -> Diagram:
        """Recursive clone; every field is duplicated, flags included."""
        newd = Diagram.__new__(Diagram)
        newd.type = self.type
        newd.path = self.path.copy() if self.path is not None else None
        newd.children = [child.copy() for child in self.children]
        newd.origin = self.origin.copy()
        newd.style = dict(self.style)
        newd.textdata = dict(self.textdata)
        newd.multilinedata = dict(self.multilinedata)
        newd.imgdata = dict(self.imgdata)
        newd.mutable = self.mutable
        newd.tags = set(self.tags)
        return newd

    def copy_if_not_mutable(self) -> Diagram:
        return self if self.mutable else self.copy()

    def _rewrite(self, func: DiagramFunc, owned: bool = False) -> Diagram:
        """Pre-order fold: resolve, rewrite with `func`, recurse into children.

        `owned` marks nodes that are part of a fresh copy made by this fold,
        so they are rewritten in place instead of being copied again.
        """
        node = self if (owned or self.mutable) else self.copy()
        fresh = owned or node is not self
        result = func(node)
        if result is node:
            children_owned = fresh
        else:
            resolved = result.copy_if_not_mutable()
            children_owned = resolved is not result
            result = resolved
        result.children = [child._rewrite(func, children_owned) for child in result.children]
        return result

    # -------------------------------------------------------------------------
    # Tags
    # -------------------------------------------------------------------------
    def append_tags(self, tags: TagsLike) -> Diagram:
        newd = self.copy_if_not_mutable()
        newd.tags |= _as_tag_set(tags)
        return newd

    def remove_tags(self, tags: TagsLike) -> Diagram:
        newd = self.copy_if_not_mutable()
        newd.tags -= _as_tag_set(tags)
        return newd

    def reset_tags(self) -> Diagram:
        newd = self.copy_if_not_mutable()
        newd.tags = set()
        return newd

    def contain_tag(self, tag: str) -> bool:
        return tag in self.tags

    def contain_all_tags(self, tags: TagsLike) -> bool:
        return _as_tag_set(tags) <= self.tags

    # -------------------------------------------------------------------------
    # Generic application
    # -------------------------------------------------------------------------
    def apply(self, func: DiagramFunc) -> Diagram:
        """Run `func` once on the copy-resolved node (not recursive)."""
        return func(self.copy_if_not_mutable())

    def apply_recursive(self, func: DiagramFunc) -> Diagram:
        """Run `func` on this node, then on every descendant."""
        return self._rewrite(func)

    def apply_to_tagged_recursive(self, tags: TagsLike, func: DiagramFunc) -> Diagram:
        """Like `apply_recursive`, but `func` only fires on nodes carrying all `tags`."""
        tags = _as_tag_set(tags)
        return self._rewrite(lambda d: func(d) if d.contain_all_tags(tags) else d)

    # -------------------------------------------------------------------------
    # Structure
    # -------------------------------------------------------------------------
    def combine(self, *diagrams: Diagram) -> Diagram:
        return diagram_combine(self, *diagrams)

    def _collect_leaves(self) -> list[Diagram]:
        if self.type is not DiagramType.DIAGRAM:
            return [self]
        return [leaf for child in self.children for leaf in child._collect_leaves()]

    def flatten(self) -> Diagram:
        """Group with every leaf of the tree as a direct child, in document order."""
        newd = self.copy_if_not_mutable()
        if newd.type is DiagramType.DIAGRAM:
            newd.children = newd._collect_leaves()
            logging.getLogger(LOGGER_NAME).debug(f"Flattened group into {len(newd.children)} leaves.")
        return newd

    def _retype(self, source: DiagramType, target: DiagramType) -> Diagram:
        def f(d: Diagram) -> Diagram:
            if d.type is source:
                d.type = target
            return d
        return self._rewrite(f)

    def to_curve(self) -> Diagram:
        return self._retype(DiagramType.POLYGON, DiagramType.CURVE)

    def to_polygon(self) -> Diagram:
        return self._retype(DiagramType.CURVE, DiagramType.POLYGON)

    def add_points(self, points: Iterable[Vector2]) -> Diagram:
        """Append points to the path; a group appends to its last child.

        Raises:
            VariantError: For text, image and empty group nodes.
        """
        if self.type is DiagramType.DIAGRAM:
            if not self.children:
                raise VariantError("Cannot add points to an empty group.")
            newd = self.copy_if_not_mutable()
            newd.children[-1] = newd.children[-1].add_points(points)
            return newd
        if self.type not in SHAPE_TYPES:
            raise VariantError(f"Cannot add points to a {self.type.value} node.")
        newd = self.copy_if_not_mutable()
        newd.path = newd.path.add_points(points)
        return newd

    def update_path(self, points: Iterable[Vector2]) -> Diagram:
        """Replace the path points of a polygon, curve or image node."""
        if self.path is None:
            raise VariantError(f"A {self.type.value} node has no path.")
        newd = self.copy_if_not_mutable()
        newd.path = Path(points, mutable=newd.path.mutable)
        return newd

    # -------------------------------------------------------------------------
    # Style
    # -------------------------------------------------------------------------
    def _update_style(self, name: str, value: Any,
                      excluded: frozenset = frozenset()) -> Diagram:
        def f(d: Diagram) -> Diagram:
            if d.type is not DiagramType.DIAGRAM and d.type not in excluded:
                d.style[name] = value
            return d
        return self._rewrite(f)

    def clone_style_from(self, diagram: Diagram) -> Diagram:
        def f(d: Diagram) -> Diagram:
            if d.type is not DiagramType.DIAGRAM:
                d.style = dict(diagram.style)
            return d
        return self._rewrite(f)

    def fill(self, color: ColorLike) -> Diagram:
        return self._update_style("fill", _color_value(color), frozenset({DiagramType.TEXT}))

    def stroke(self, color: ColorLike) -> Diagram:
        return self._update_style("stroke", _color_value(color), frozenset({DiagramType.TEXT}))

    def opacity(self, opacity: float) -> Diagram:
        return self._update_style("opacity", _fmt(opacity))

    def strokewidth(self, width: float) -> Diagram:
        return self._update_style("stroke-width", _fmt(width), frozenset({DiagramType.TEXT}))

    def strokelinecap(self, linecap: str) -> Diagram:
        return self._update_style("stroke-linecap", linecap, frozenset({DiagramType.TEXT}))

    def strokelinejoin(self, linejoin: str) -> Diagram:
        return self._update_style("stroke-linejoin", linejoin, frozenset({DiagramType.TEXT}))

    def strokedasharray(self, dasharray: Sequence[float]) -> Diagram:
        value = ",".join(_fmt(v) for v in dasharray)
        return self._update_style("stroke-dasharray", value, frozenset({DiagramType.TEXT}))

    def vectoreffect(self, vectoreffect: str) -> Diagram:
        return self._update_style("vector-effect", vectoreffect, frozenset({DiagramType.TEXT}))

    def textfill(self, color: ColorLike) -> Diagram:
        return self._update_style("fill", _color_value(color), SHAPE_TYPES)

    def textstroke(self, color: ColorLike) -> Diagram:
        return self._update_style("stroke", _color_value(color), SHAPE_TYPES)

    def textstrokewidth(self, width: float) -> Diagram:
        return self._update_style("stroke-width", _fmt(width), SHAPE_TYPES)

    def resolved_style(self) -> dict[str, Any]:
        """Own style layered over the defaults of the node's variant."""
        base = DEFAULT_TEXT_DIAGRAM_STYLE if self.type in TEXT_TYPES else DEFAULT_DIAGRAM_STYLE
        return {**base, **self.style}

    # -------------------------------------------------------------------------
    # Text data
    # -------------------------------------------------------------------------
    def _update_textdata(self, name: str, value: Any) -> Diagram:
        def f(d: Diagram) -> Diagram:
            if d.type in TEXT_TYPES:
                d.textdata[name] = value
            return d
        return self._rewrite(f)

    def fontfamily(self, fontfamily: str) -> Diagram:
        return self._update_textdata("font-family", fontfamily)

    def fontstyle(self, fontstyle: str) -> Diagram:
        return self._update_textdata("font-style", fontstyle)

    def fontsize(self, fontsize: float) -> Diagram:
        return self._update_textdata("font-size", _fmt(fontsize))

    def fontweight(self, fontweight: Union[str, int]) -> Diagram:
        return self._update_textdata("font-weight", str(fontweight))

    def fontscale(self, fontscale: Union[float, str]) -> Diagram:
        return self._update_textdata("font-scale", fontscale if fontscale == "auto" else _fmt(fontscale))

    def textanchor(self, textanchor: str) -> Diagram:
        return self._update_textdata("text-anchor", textanchor)

    def textdy(self, dy: str) -> Diagram:
        return self._update_textdata("dy", dy)

    def textangle(self, angle: float) -> Diagram:
        return self._update_textdata("angle", _fmt(angle))

    def scaletext(self, scale: float) -> Diagram:
        """Scale font sizes (text) and scale factors (multiline text) by `scale`."""
        def f(d: Diagram) -> Diagram:
            if d.type is DiagramType.TEXT:
                fontsize = float(d.textdata.get("font-size", DEFAULT_TEXTDATA["font-size"]))
                d.textdata["font-size"] = _fmt(fontsize * scale)
            elif d.type is DiagramType.MULTILINE_TEXT:
                d.multilinedata["scale-factor"] = d.multilinedata.get("scale-factor", 1.0) * scale
            return d
        return self._rewrite(f)

    def _set_textvar(self, enabled: bool) -> Diagram:
        def f(d: Diagram) -> Diagram:
            if d.type is DiagramType.TEXT:
                if enabled:
                    d.tags.add(TEXTVAR_TAG)
                else:
                    d.tags.discard(TEXTVAR_TAG)
            elif d.type is DiagramType.MULTILINE_TEXT:
                d.multilinedata["content"] = tuple(
                    run.with_style({"textvar": enabled}) for run in d.multilinedata.get("content", ())
                )
            return d
        return self._rewrite(f)

    def text_tovar(self) -> Diagram:
        """Render text as a math variable."""
        return self._set_textvar(True)

    def text_totext(self) -> Diagram:
        return self._set_textvar(False)

    # -------------------------------------------------------------------------
    # Geometry queries
    # -------------------------------------------------------------------------
    def bounding_box(self) -> tuple[Vector2, Vector2]:
        """Return (min_corner, max_corner).

        Text variants have the degenerate box (origin, origin): their extent
        depends on font metrics known only at render time.
        """
        if self.type is DiagramType.DIAGRAM:
            if not self.children:
                return self.origin.copy(), self.origin.copy()
            corners = np.array([
                [(lo.x, lo.y), (hi.x, hi.y)]
                for lo, hi in (child.bounding_box() for child in self.children)
            ])
            (xmin, ymin), (xmax, ymax) = corners[:, 0].min(axis=0), corners[:, 1].max(axis=0)
        elif self.path is not None:
            verts = self.path.as_array()
            (xmin, ymin), (xmax, ymax) = verts.min(axis=0), verts.max(axis=0)
        else:
            return self.origin.copy(), self.origin.copy()
        return V2(xmin, ymin), V2(xmax, ymax)

    def get_anchor(self, anchor: str) -> Vector2:
        """Position of a named anchor, e.g. 'top-left' or 'center-center'.

        The frame is y-up: 'top' is the maximum y of the bounding box.

        Raises:
            AnchorError: If `anchor` is not one of ANCHORS.
        """
        vertical, horizontal = _split_anchor(anchor)
        lo, hi = self.bounding_box()
        return V2(_pick(lo.x, hi.x, horizontal), _pick(lo.y, hi.y, vertical))

    def move_origin(self, pos: Union[str, Vector2]) -> Diagram:
        """Relocate the origin to an anchor or point; geometry does not move."""
        origin = self.get_anchor(pos) if isinstance(pos, str) else pos.copy()
        newd = self.copy_if_not_mutable()
        newd.origin = origin
        return newd

    def move_origin_text(self, anchor: str) -> Diagram:
        """Align text nodes so that their origin sits at `anchor` of the rendered text."""
        vertical, horizontal = _split_anchor(anchor)

        def f(d: Diagram) -> Diagram:
            if d.type in TEXT_TYPES:
                d.textdata["text-anchor"] = _TEXT_ANCHOR[horizontal]
                d.textdata["dy"] = _TEXT_DY[vertical]
            return d
        return self._rewrite(f)

    def path_length(self) -> float:
        """Arc length: open for curves, closed for polygons, summed over groups.

        Raises:
            VariantError: For text and image nodes.
        """
        if self.type is DiagramType.DIAGRAM:
            return sum(child.path_length() for child in self.children)
        if self.type is DiagramType.CURVE:
            return self.path.length()
        if self.type is DiagramType.POLYGON:
            return self.path.length(closed=True)
        raise VariantError(f"path_length is undefined for a {self.type.value} node.")

    def parametric_point(self, t: float, segment_index: Optional[int] = None) -> Vector2:
        """Point at arc-length fraction `t` (see Path.parametric_point).

        A group concatenates its children: each child owns a window of [0, 1]
        proportional to its path length, and `t` is rescaled into it.

        Raises:
            ParameterRangeError: For `t` or `segment_index` out of range.
            VariantError: For text and image nodes, for an empty group, or when
                `segment_index` is given to a group.
        """
        if self.type is DiagramType.POLYGON:
            return self.path.parametric_point(t, True, segment_index)
        if self.type is DiagramType.CURVE:
            return self.path.parametric_point(t, False, segment_index)
        if self.type is not DiagramType.DIAGRAM:
            raise VariantError(f"parametric_point is undefined for a {self.type.value} node.")

        if segment_index is not None:
            raise VariantError("segment_index is only defined for polygon and curve nodes.")
        if not self.children:
            raise VariantError("parametric_point is undefined for an empty group.")
        if not 0 <= t <= 1:
            raise ParameterRangeError(f"t must be in [0, 1], got {t}.")

        lengths = np.array([child.path_length() for child in self.children], dtype=float)
        total = lengths.sum()
        if total == 0:
            return self.children[0].parametric_point(t)

        cumulative_t = np.cumsum(lengths) / total
        cumulative_t[-1] = 1.0
        i = int(np.searchsorted(cumulative_t, t, side="left"))
        prev_t = cumulative_t[i - 1] if i > 0 else 0.0
        width = cumulative_t[i] - prev_t
        local_t = (t - prev_t) / width if width > 0 else 0.0
        return self.children[i].parametric_point(float(min(max(local_t, 0.0), 1.0)))

    # -------------------------------------------------------------------------
    # Transforms
    # -------------------------------------------------------------------------
    def transform(self, f: tf.PointMap) -> Diagram:
        """Map every path point and every origin of the subtree through `f`."""
        def g(d: Diagram) -> Diagram:
            if d.path is not None:
                d.path = d.path.transform(f)
            d.origin = f(d.origin)
            return d
        return self._rewrite(g)

    def translate(self, v: Vector2) -> Diagram:
        return self.transform(tf.translate(v))

    def position(self, v: Optional[Vector2] = None) -> Diagram:
        """Translate so that the origin lands on `v` (default (0, 0))."""
        v = V2(0, 0) if v is None else v
        return self.translate(v.sub(self.origin))

    def rotate(self, angle: float, pivot: Optional[Vector2] = None) -> Diagram:
        """Rotate by `angle` radians around `pivot` (default: the origin)."""
        pivot = self.origin if pivot is None else pivot
        return self.transform(tf.rotate(angle, pivot))

    def scale(self, scale: Union[Vector2, float], origin: Optional[Vector2] = None) -> Diagram:
        if not isinstance(scale, Vector2):
            scale = V2(scale, scale)
        origin = self.origin if origin is None else origin
        return self.transform(tf.scale(scale, origin))

    def skew_x(self, angle: float, base: Optional[Vector2] = None) -> Diagram:
        base = self.origin if base is None else base
        return self.transform(tf.skew_x(angle, base.y))

    def skew_y(self, angle: float, base: Optional[Vector2] = None) -> Diagram:
        base = self.origin if base is None else base
        return self.transform(tf.skew_y(angle, base.x))

    def reflect_over_point(self, p: Vector2) -> Diagram:
        return self.transform(tf.reflect_over_point(p))

    def reflect_over_line(self, p1: Vector2, p2: Vector2) -> Diagram:
        return self.transform(tf.reflect_over_line(p1, p2))

    def reflect(self, p1: Optional[Vector2] = None, p2: Optional[Vector2] = None) -> Diagram:
        """No argument: over the origin. One point: over it. Two points: over their line."""
        if p1 is None and p2 is None:
            return self.reflect_over_point(self.origin)
        if p2 is None:
            return self.reflect_over_point(p1)
        if p1 is None:
            return self.reflect_over_point(p2)
        return self.reflect_over_line(p1, p2)

    def vflip(self, a: Optional[float] = None) -> Diagram:
        """Mirror over the horizontal line y = a (default: through the origin)."""
        a = self.origin.y if a is None else a
        return self.reflect_over_line(V2(0, a), V2(1, a))

    def hflip(self, a: Optional[float] = None) -> Diagram:
        """Mirror over the vertical line x = a (default: through the origin)."""
        a = self.origin.x if a is None else a
        return self.reflect_over_line(V2(a, 0), V2(a, 1))

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------
    def equals_structurally(self, other: Diagram) -> bool:
        """True if both subtrees hold equal values in every field."""
        if not isinstance(other, Diagram):
            return False
        if (self.path is None) != (other.path is None):
            return False
        if self.path is not None and (self.path.points != other.path.points
                                      or self.path.mutable != other.path.mutable):
            return False
        return (
            self.type is other.type
            and self.origin == other.origin
            and self.style == other.style
            and self.textdata == other.textdata
            and self.multilinedata == other.multilinedata
            and self.imgdata == other.imgdata
            and self.mutable == other.mutable
            and self.tags == other.tags
            and len(self.children) == len(other.children)
            and all(a.equals_structurally(b) for a, b in zip(self.children, other.children))
        )


# =============================================================================
# Factories
# =============================================================================
def diagram_combine(*diagrams: Diagram) -> Diagram:
    """Group `diagrams` (in order) into one node.

    The group is mutable only if every input is; mutable inputs are adopted as
    they are, immutable ones are copied. The group's origin is the origin of
    the first input. No input gives `empty()`.
    """
    if not diagrams:
        return empty()
    all_mutable = all(d.mutable for d in diagrams)
    children = [d.copy_if_not_mutable() for d in diagrams]
    newd = Diagram(DiagramType.DIAGRAM, children=children, origin=diagrams[0].origin.copy())
    newd.mutable = all_mutable
    logging.getLogger(LOGGER_NAME).debug(
        f"Combined {len(children)} diagrams (mutable={all_mutable})."
    )
    return newd


def polygon(points: Sequence[Vector2]) -> Diagram:
    """Closed shape through `points` (at least three)."""
    points = list(points)
    if len(points) < 3:
        raise ValueError(f"A polygon needs at least 3 points, got {len(points)}.")
    return Diagram(DiagramType.POLYGON, path=Path(points))


def curve(points: Sequence[Vector2]) -> Diagram:
    return Diagram(DiagramType.CURVE, path=Path(points))


def line(start: Vector2, end: Vector2) -> Diagram:
    return curve([start, end])


def empty(v: Optional[Vector2] = None) -> Diagram:
    """A curve holding the single point `v` (default (0, 0))."""
    return curve([V2(0, 0) if v is None else v])


def text(s: str) -> Diagram:
    return Diagram(DiagramType.TEXT, textdata={"text": s})


def textvar(s: str) -> Diagram:
    return text(s).text_tovar()


def image(src: str, width: float, height: float) -> Diagram:
    """Image of `width` x `height` centered at (0, 0)."""
    w, h = width / 2, height / 2
    corners = [V2(-w, -h), V2(w, -h), V2(w, h), V2(-w, h)]
    return Diagram(DiagramType.IMAGE, path=Path(corners), imgdata={"src": src})


def multiline(spans: Iterable[Union[TextRun, Sequence[Any]]]) -> Diagram:
    """Multiline text from runs or ``(text,)`` / ``(text, style)`` tuples."""
    content = []
    for span in spans:
        if isinstance(span, TextRun):
            content.append(span)
        elif isinstance(span, str):
            content.append(TextRun(span))
        else:
            content.append(TextRun(*span))
    multilinedata = {
        "content": tuple(content),
        "scale-factor": DEFAULT_CONFIG.text_scale_factor,
    }
    return Diagram(DiagramType.MULTILINE_TEXT, multilinedata=multilinedata)


def multiline_bb(source: str, linespace: Optional[str] = None) -> Diagram:
    """Multiline text from inline markup (see markup.parse_markup).

    If the markup is malformed, the raw source becomes a single unstyled run.
    """
    linespace = DEFAULT_CONFIG.linespace if linespace is None else linespace
    result = parse_markup(source, linespace)
    if not result.ok:
        logging.getLogger(LOGGER_NAME).debug("Falling back to unstyled multiline text.")
        return multiline([TextRun(source)])
    return multiline(result.runs)
