"""Unit tests for ``?`` → native placeholder translation."""

from __future__ import annotations

import pytest

from querykit.adapters.placeholders import translate_placeholders

SQL = "SELECT * FROM users WHERE age > ? AND status = ?"
BINDINGS = [18, "active"]


def test_qmark_is_passthrough():
    assert translate_placeholders(SQL, BINDINGS, "qmark") == (SQL, [18, "active"])


@pytest.mark.parametrize(
    "style, expected_sql",
    [
        ("numeric", "SELECT * FROM users WHERE age > :1 AND status = :2"),
        ("numeric_dollar", "SELECT * FROM users WHERE age > $1 AND status = $2"),
        ("format", "SELECT * FROM users WHERE age > %s AND status = %s"),
        ("pyformat", "SELECT * FROM users WHERE age > %s AND status = %s"),
    ],
)
def test_positional_styles(style, expected_sql):
    sql, params = translate_placeholders(SQL, BINDINGS, style)
    assert sql == expected_sql
    assert params == [18, "active"]


def test_named_style_returns_mapping():
    sql, params = translate_placeholders(SQL, BINDINGS, "named")
    assert sql == "SELECT * FROM users WHERE age > :p1 AND status = :p2"
    assert params == {"p1": 18, "p2": "active"}


def test_question_mark_inside_string_literal_is_kept():
    sql, _ = translate_placeholders(
        "SELECT '?' AS q, 'it''s ?' AS r FROM t WHERE a = ?", [1], "numeric_dollar"
    )
    assert sql == "SELECT '?' AS q, 'it''s ?' AS r FROM t WHERE a = $1"


def test_format_style_doubles_literal_percent():
    sql, _ = translate_placeholders("SELECT * FROM t WHERE name LIKE 'A%' AND x = ? % 2", [5], "format")
    assert sql == "SELECT * FROM t WHERE name LIKE 'A%%' AND x = %s %% 2"


def test_non_format_styles_leave_percent_alone():
    sql, _ = translate_placeholders("SELECT 10 % ? FROM t", [3], "numeric")
    assert sql == "SELECT 10 % :1 FROM t"


def test_unknown_style_raises():
    with pytest.raises(ValueError):
        translate_placeholders(SQL, BINDINGS, "bogus")  # type: ignore[arg-type]


def test_numbering_is_dense_and_ordered():
    sql, params = translate_placeholders("?, ?, ?, ?", ["a", "b", "c", "d"], "numeric")
    assert sql == ":1, :2, :3, :4"
    assert params == ["a", "b", "c", "d"]
