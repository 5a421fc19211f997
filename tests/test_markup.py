"""
test_markup.py
--------------
Unit tests for markup.py (tokenizer + tag-stack parser).
"""

import logging

import pytest

from diagramtree.config import LOGGER_NAME
from diagramtree.errors import MarkupError
from diagramtree.markup import TextRun, TokenType, parse_markup, tokenize


# ---------------------------------------------------------------------------
# 1. Tokenizer
# ---------------------------------------------------------------------------

def test_token_sequence():
    tokens = list(tokenize("a[b]c[/b]"))
    assert [t.type for t in tokens] == [
        TokenType.TEXT, TokenType.OPEN_TAG, TokenType.TEXT,
        TokenType.CLOSE_TAG, TokenType.EOF,
    ]
    assert [t.position for t in tokens] == [0, 1, 4, 5, 9]


def test_tag_value_keeps_inner_spaces():
    open_tag = list(tokenize("[font=Times New Roman]"))[0]
    assert open_tag.name == "font"
    assert open_tag.value == "Times New Roman"


def test_tokenize_rejects_non_str():
    with pytest.raises(TypeError):
        list(tokenize(b"[b]x[/b]"))


@pytest.mark.parametrize("source, position", [
    ("abc [b", 4),
    ("a [b [i]]", 5),
    ("x[]y", 1),
    ("x[/]y", 1),
])
def test_tokenizer_errors(source, position):
    with pytest.raises(MarkupError) as excinfo:
        list(tokenize(source))
    assert excinfo.value.position == position


# ---------------------------------------------------------------------------
# 2. Parser
# ---------------------------------------------------------------------------

def test_bold_in_the_middle():
    result = parse_markup("plain [b]bold[/b] tail")
    assert result.ok
    assert result.runs == (
        TextRun("plain "),
        TextRun("bold", {"font-weight": "bold"}),
        TextRun(" tail"),
    )


def test_nested_styles_accumulate():
    result = parse_markup("[color=red]a [i]b[/i][/color]")
    assert result.runs == (
        TextRun("a ", {"fill": "red"}),
        TextRun("b", {"fill": "red", "font-style": "italic"}),
    )


def test_inner_tag_overrides_outer():
    result = parse_markup("[size=10][size=20]x[/size][/size]")
    assert result.runs[0].style == {"font-size": "20"}


def test_every_style_tag():
    source = "[size=12][font=serif][dx=1][dy=2][var][tag=v]z[/tag][/var][/dy][/dx][/font][/size]"
    (run,) = parse_markup(source).runs
    assert run.style == {
        "font-size": "12", "font-family": "serif", "dx": "1", "dy": "2",
        "textvar": True, "tag": "v",
    }


def test_line_break():
    result = parse_markup("one[br]two", linespace="1.2em")
    assert result.runs == (TextRun("one"), TextRun("\n", {"dy": "1.2em"}), TextRun("two"))
    assert parse_markup("one[br]two").runs[1] == TextRun("\n")


def test_line_break_is_not_stacked():
    result = parse_markup("[b]x[br]y[/b]")
    assert result.ok
    assert [r.text for r in result.runs] == ["x", "\n", "y"]
    assert result.runs[2].style == {"font-weight": "bold"}


def test_unknown_tag_adds_no_style():
    assert parse_markup("[u]x[/u]").runs == (TextRun("x"),)
    assert not parse_markup("[u]x").ok


def test_stray_close_bracket_is_text():
    assert parse_markup("a]b").runs == (TextRun("a]b"),)


def test_empty_source():
    result = parse_markup("")
    assert result.ok and result.runs == ()


@pytest.mark.parametrize("source, position", [
    ("[b]unterminated", 0),
    ("[b][i]x[/b][/i]", 7),
    ("x[/b]", 1),
    ("a [b [i]]", 5),
    ("[color]x[/color]", 0),
    ("a[size=]b[/size]", 1),
    ("[b][font]x[/font][/b]", 3),
])
def test_malformed_markup_yields_no_runs(source, position):
    result = parse_markup(source)
    assert not result.ok
    assert result.runs == ()
    assert isinstance(result.error, MarkupError)
    assert result.error.position == position


def test_failure_is_logged(caplog):
    with caplog.at_level(logging.WARNING, logger=LOGGER_NAME):
        parse_markup("[b]oops")
    assert any("Markup parse failed" in r.getMessage() for r in caplog.records)


def test_runs_are_read_only():
    run = parse_markup("[b]x[/b]").runs[0]
    with pytest.raises(TypeError):
        run.style["font-weight"] = "normal"
    assert run.with_style({"fill": "red"}).style == {"font-weight": "bold", "fill": "red"}


def test_runs_are_hashable():
    a = TextRun("x", {"font-weight": "bold", "fill": "red"})
    b = TextRun("x", {"fill": "red", "font-weight": "bold"})
    assert hash(a) == hash(b)
    assert len({a, b, TextRun("x")}) == 2
