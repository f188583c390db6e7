"""Clause-level SQL renderers.

Each class handles exactly one kind of fragment and writes its bound values
into the :class:`~querykit.query.bindings.BindingAccumulator` it is given,
in the same left-to-right order as the ``?`` tokens it emits.  Renderers
never mutate builder state.

Classes
-------
ConditionRenderer : WHERE / HAVING clause lists with boolean joining
JoinRenderer      : ``<KIND> JOIN … ON …``
OrderByRenderer   : ``ORDER BY col dir, …``
"""
from __future__ import annotations

from collections.abc import Sequence

from querykit.errors import ConfigurationError
from querykit.query.bindings import BindingAccumulator
from querykit.query.clauses import (
    BasicClause,
    BetweenClause,
    Clause,
    ExistsClause,
    InClause,
    JoinClause,
    NotExistsClause,
    NotInClause,
    NotNullClause,
    NullClause,
    OrderClause,
    RawClause,
)


def placeholders(count: int) -> str:
    """Return ``count`` comma-separated ``?`` tokens."""
    return ", ".join(["?"] * count)


class ConditionRenderer:
    """Renders an ordered list of conditions joined by their boolean markers.

    Args:
        bindings: Accumulator receiving the values of every rendered clause.
    """

    def __init__(self, bindings: BindingAccumulator) -> None:
        self._bindings = bindings

    def build(self, clauses: Sequence[Clause]) -> str:
        parts: list[str] = []
        for index, clause in enumerate(clauses):
            sql = self.build_one(clause)
            parts.append(sql if index == 0 else f"{clause.boolean} {sql}")
        return " ".join(parts)

    def build_one(self, clause: Clause) -> str:
        """Render a single clause without its boolean prefix."""
        add = self._bindings.add
        if isinstance(clause, BasicClause):
            return f"{clause.column} {clause.operator} {add(clause.value)}"
        if isinstance(clause, InClause):
            self._bindings.extend(clause.values)
            return f"{clause.column} IN ({placeholders(len(clause.values))})"
        if isinstance(clause, NotInClause):
            self._bindings.extend(clause.values)
            return f"{clause.column} NOT IN ({placeholders(len(clause.values))})"
        if isinstance(clause, NullClause):
            return f"{clause.column} IS NULL"
        if isinstance(clause, NotNullClause):
            return f"{clause.column} IS NOT NULL"
        if isinstance(clause, BetweenClause):
            return f"{clause.column} BETWEEN {add(clause.low)} AND {add(clause.high)}"
        if isinstance(clause, RawClause):
            self._bindings.extend(clause.bindings)
            return clause.sql
        if isinstance(clause, ExistsClause):
            self._bindings.extend(clause.bindings)
            return f"EXISTS ({clause.sql})"
        if isinstance(clause, NotExistsClause):
            self._bindings.extend(clause.bindings)
            return f"NOT EXISTS ({clause.sql})"
        raise ConfigurationError(
            f"Unknown clause type: {type(clause).__name__}", clause="WHERE"
        )


class JoinRenderer:
    """Renders a single JOIN entry.  Joins never bind values."""

    def build(self, join: JoinClause) -> str:
        if join.kind == "CROSS":
            return f"CROSS JOIN {join.table}"
        return f"{join.kind} JOIN {join.table} ON {join.left} {join.operator} {join.right}"


class OrderByRenderer:
    """Renders the ``ORDER BY`` list."""

    def build(self, orders: Sequence[OrderClause]) -> str:
        items = ", ".join(f"{o.column} {o.direction}" for o in orders)
        return f"ORDER BY {items}"
