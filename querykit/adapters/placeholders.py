"""Translation of the dialect-neutral ``?`` placeholder.

The query builders always emit ``?``.  Drivers disagree on positional
parameter syntax (PEP 249 ``paramstyle``), so each adapter translates the
rendered text right before execution:

=================  ==================  ==========================
paramstyle         placeholder         bindings passed as
=================  ==================  ==========================
``qmark``          ``?``               list (text unchanged)
``numeric``        ``:1, :2, …``       list
``numeric_dollar`` ``$1, $2, …``       list
``format``         ``%s``              list, literal ``%`` doubled
``pyformat``       ``%s``              list, literal ``%`` doubled
``named``          ``:p1, :p2, …``     dict ``{"p1": …}``
=================  ==================  ==========================

A ``?`` inside a single-quoted string literal is left alone.  Binding order
is preserved 1:1.
"""
from __future__ import annotations

import itertools
import re
from collections.abc import Sequence
from typing import Any, Literal

ParamStyle = Literal["qmark", "numeric", "numeric_dollar", "format", "pyformat", "named"]

#: String literal, placeholder, or percent sign.
_TOKEN = re.compile(r"'(?:[^']|'')*'|\?|%")

_PERCENT_STYLES = frozenset({"format", "pyformat"})


def translate_placeholders(
    sql: str,
    bindings: Sequence[Any],
    style: ParamStyle,
) -> tuple[str, list[Any] | dict[str, Any]]:
    """Rewrite ``?`` placeholders in ``sql`` for the given ``style``.

    Args:
        sql: Rendered SQL text using ``?`` placeholders.
        bindings: Values aligned with the ``?`` tokens.
        style: Target PEP 249 paramstyle.

    Returns:
        ``(native_sql, params)`` ready for ``cursor.execute``.

    Raises:
        ValueError: If ``style`` is not a known paramstyle.
    """
    if style == "qmark":
        return sql, list(bindings)

    counter = itertools.count(1)
    escape_percent = style in _PERCENT_STYLES

    if style in _PERCENT_STYLES:
        placeholder = lambda n: "%s"  # noqa: E731
    elif style == "numeric":
        placeholder = lambda n: f":{n}"  # noqa: E731
    elif style == "numeric_dollar":
        placeholder = lambda n: f"${n}"  # noqa: E731
    elif style == "named":
        placeholder = lambda n: f":p{n}"  # noqa: E731
    else:
        raise ValueError(f"Unsupported paramstyle: {style!r}")

    def _replace(match: re.Match[str]) -> str:
        token = match.group(0)
        if token == "?":
            return placeholder(next(counter))
        if token == "%":
            return "%%" if escape_percent else token
        return token.replace("%", "%%") if escape_percent else token

    native_sql = _TOKEN.sub(_replace, sql)
    if style == "named":
        return native_sql, {f"p{i}": value for i, value in enumerate(bindings, start=1)}
    return native_sql, list(bindings)
