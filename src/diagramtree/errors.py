"""
errors.py
---------

Typed errors of the diagram core.

Contract violations (bad parameters, unknown anchors, operations a node
variant does not support) are raised. Markup failures are returned as
values inside a ParseResult instead.
"""

from __future__ import annotations

__all__ = [
    "DiagramError", "ParameterRangeError", "AnchorError", "VariantError",
    "MarkupError",
]


class DiagramError(Exception):
    """Base error of the diagram core."""


class ParameterRangeError(DiagramError, ValueError):
    """Parametric `t` or `segment_index` outside its valid range."""


class AnchorError(DiagramError, ValueError):
    """Unknown anchor identifier."""


class VariantError(DiagramError, TypeError):
    """Operation not defined for the node variant."""


class MarkupError(DiagramError):
    """Malformed inline markup.

    Attributes:
        position: Character offset in the source where parsing stopped.
    """

    def __init__(self, message: str, position: int) -> None:
        super().__init__(f"{message} (at offset {position})")
        self.message = message
        self.position = position
