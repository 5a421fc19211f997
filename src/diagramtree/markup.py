"""
markup.py
---------

Inline markup parser turning bracket-tagged strings into styled text runs.

    "plain [b]bold[/b] [color=red]red [i]italic[/i][/color][br]next line"

The pipeline has two stages:
 1. `tokenize` scans for ``[...]`` delimiters and yields TEXT, OPEN_TAG,
    CLOSE_TAG and a final EOF token.
 2. `parse_markup` runs a tag stack over the tokens. Every TEXT token becomes
    a TextRun whose style is the fold of all active tags, bottom to top.

Supported tags:

    [b]              font-weight: bold
    [i]              font-style: italic
    [color=VALUE]    fill
    [size=VALUE]     font-size
    [font=VALUE]     font-family
    [dx=VALUE]       dx
    [dy=VALUE]       dy
    [var]            textvar (render as math variable)
    [tag=VALUE]      tag
    [br]             line break run, never pushed on the stack

Other tag names are stacked (they must still be balanced) but add no style.
A valued tag written without its value (``[color]``) is malformed.

Run style keys use the renderer's TextData attribute names:

    weight       -> font-weight
    slant        -> font-style
    is-variable  -> textvar

Malformed input is not raised: the result carries a MarkupError and no runs,
so a caller never renders partially styled text.
"""

from __future__ import annotations

__all__ = [
    "TokenType", "Token", "TextRun", "ParseResult", "tokenize", "parse_markup",
]

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional

from .config import LOGGER_NAME
from .errors import MarkupError

LINE_BREAK_TAG = "br"

_TAG_STYLES = {
    "b"     : lambda value: {"font-weight": "bold"},
    "i"     : lambda value: {"font-style": "italic"},
    "color" : lambda value: {"fill": value},
    "size"  : lambda value: {"font-size": value},
    "font"  : lambda value: {"font-family": value},
    "dx"    : lambda value: {"dx": value},
    "dy"    : lambda value: {"dy": value},
    "var"   : lambda value: {"textvar": True},
    "tag"   : lambda value: {"tag": value},
}
_VALUED_TAGS = frozenset({"color", "size", "font", "dx", "dy", "tag"})


class TokenType(Enum):
    TEXT = auto()
    OPEN_TAG = auto()
    CLOSE_TAG = auto()
    EOF = auto()


@dataclass(frozen=True)
class Token:
    type: TokenType
    position: int
    text: str = ""
    name: str = ""
    value: Optional[str] = None


@dataclass(frozen=True)
class TextRun:
    """A piece of text with the style of the tags active around it."""
    text: str
    style: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "style", MappingProxyType(dict(self.style)))

    def __hash__(self) -> int:
        return hash((self.text, tuple(sorted(self.style.items()))))

    def with_style(self, style: Mapping[str, Any]) -> TextRun:
        """Copy of the run with `style` layered over its own."""
        return TextRun(self.text, {**self.style, **style})


@dataclass(frozen=True)
class ParseResult:
    runs: tuple[TextRun, ...] = ()
    error: Optional[MarkupError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


# ---------------------------------------------------------------------------
# Stage 1: tokenizer
# ---------------------------------------------------------------------------
def tokenize(source: str) -> Iterator[Token]:
    """Yield the tokens of `source`, ending with EOF.

    Raises:
        MarkupError: On an unclosed ``[``, a ``[`` inside a tag, or an empty tag.
            `parse_markup` turns it into a failed ParseResult.
    """
    if not isinstance(source, str):
        raise TypeError(f"Markup source must be str, got {type(source).__name__}.")

    pos, n = 0, len(source)
    while pos < n:
        start = source.find("[", pos)
        if start < 0:
            yield Token(TokenType.TEXT, pos, text=source[pos:])
            break
        if start > pos:
            yield Token(TokenType.TEXT, pos, text=source[pos:start])

        end = source.find("]", start + 1)
        if end < 0:
            raise MarkupError("unclosed '['", start)
        nested = source.find("[", start + 1, end)
        if nested >= 0:
            raise MarkupError("unexpected '[' inside a tag", nested)

        body = source[start + 1:end].strip()
        if not body or body == "/":
            raise MarkupError("empty tag", start)
        if body.startswith("/"):
            yield Token(TokenType.CLOSE_TAG, start, name=body[1:].strip())
        else:
            name, sep, value = body.partition("=")
            yield Token(TokenType.OPEN_TAG, start, name=name.strip(),
                        value=value.strip() if sep else None)
        pos = end + 1

    yield Token(TokenType.EOF, n)


# ---------------------------------------------------------------------------
# Stage 2: tag-stack interpreter
# ---------------------------------------------------------------------------
def _stack_style(stack: list[Token]) -> dict[str, Any]:
    style: dict[str, Any] = {}
    for tag in stack:
        make_style = _TAG_STYLES.get(tag.name)
        if make_style is not None:
            style.update(make_style(tag.value))
    return style


def _interpret(source: str, linespace: Optional[str]) -> list[TextRun]:
    runs: list[TextRun] = []
    stack: list[Token] = []

    for token in tokenize(source):
        if token.type is TokenType.TEXT:
            runs.append(TextRun(token.text, _stack_style(stack)))
        elif token.type is TokenType.OPEN_TAG:
            if token.name in _VALUED_TAGS and not token.value:
                raise MarkupError(f"tag [{token.name}] needs a value", token.position)
            if token.name == LINE_BREAK_TAG:
                runs.append(TextRun("\n", {"dy": linespace} if linespace else {}))
            else:
                stack.append(token)
        elif token.type is TokenType.CLOSE_TAG:
            if not stack:
                raise MarkupError(f"closing tag [/{token.name}] without an open tag", token.position)
            if stack[-1].name != token.name:
                raise MarkupError(
                    f"closing tag [/{token.name}] does not match [{stack[-1].name}]",
                    token.position,
                )
            stack.pop()
        elif stack:
            raise MarkupError(f"unterminated tag [{stack[-1].name}]", stack[-1].position)

    return runs


def parse_markup(source: str, linespace: Optional[str] = None) -> ParseResult:
    """Parse inline-tagged `source` into styled text runs.

    Args:
        source:    Markup string.
        linespace: Optional vertical offset (e.g. "1em") attached as `dy` to
                   every line break run.

    Returns:
        ParseResult: `runs` on success; on failure `error` is set and `runs`
        is empty.
    """
    try:
        runs = _interpret(source, linespace)
    except MarkupError as err:
        logging.getLogger(LOGGER_NAME).warning(f"Markup parse failed: {err}; source={source!r}")
        return ParseResult(error=err)
    return ParseResult(runs=tuple(runs))
