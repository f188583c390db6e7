"""SELECT statement builder.

Render order is fixed::

    SELECT [DISTINCT] <list | *> FROM <table>
    [<joins>] [WHERE …] [GROUP BY …] [HAVING …] [ORDER BY …]
    [LIMIT n] [OFFSET n]
    [UNION | UNION ALL <branch>] …

UNION branches are appended after the fully rendered primary statement, so
ORDER BY / LIMIT / OFFSET belong to the primary branch only.  Bindings
follow the same textual order: CASE expressions in the select list, WHERE,
HAVING, then each UNION branch in declaration order.
"""
from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Self

from querykit.errors import ConfigurationError, MissingTableError
from querykit.query.base import MISSING, ConditionalQuery, RenderedSQL, basic_clauses
from querykit.query.bindings import BindingAccumulator
from querykit.query.case import CaseExpression
from querykit.query.clauses import (
    HavingClause,
    JoinClause,
    JoinKind,
    OrderClause,
    UnionClause,
)
from querykit.query.renderer import ConditionRenderer, JoinRenderer, OrderByRenderer

_DIRECTIONS = ("ASC", "DESC")


def _flatten(items: Iterable[Any]) -> list[Any]:
    flat: list[Any] = []
    for item in items:
        if isinstance(item, (list, tuple)):
            flat.extend(_flatten(item))
        else:
            flat.append(item)
    return flat


def _non_negative(value: int, clause: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise ConfigurationError(
            f"{clause} must be a non-negative integer, got {value!r}.", clause=clause
        )
    return value


class SelectQuery(ConditionalQuery):
    """Fluent builder for ``SELECT`` statements.

    Args:
        table: Optional table name; may also be set with :meth:`from_`.
    """

    statement = "SELECT"

    def __init__(self, table: str | None = None) -> None:
        super().__init__(table)
        self._selects: list[str | RenderedSQL] = []
        self._distinct = False
        self._joins: list[JoinClause] = []
        self._groups: list[str] = []
        self._havings: list[HavingClause] = []
        self._orders: list[OrderClause] = []
        self._limit: int | None = None
        self._offset: int | None = None
        self._unions: list[UnionClause] = []

    # ------------------------------------------------------------------
    # Read-only views of the accumulated state
    # ------------------------------------------------------------------

    @property
    def selects(self) -> tuple[str | RenderedSQL, ...]:
        return tuple(self._selects)

    @property
    def is_distinct(self) -> bool:
        return self._distinct

    @property
    def joins(self) -> tuple[JoinClause, ...]:
        return tuple(self._joins)

    @property
    def groups(self) -> tuple[str, ...]:
        return tuple(self._groups)

    @property
    def havings(self) -> tuple[HavingClause, ...]:
        return tuple(self._havings)

    @property
    def orders(self) -> tuple[OrderClause, ...]:
        return tuple(self._orders)

    @property
    def limit_value(self) -> int | None:
        return self._limit

    @property
    def offset_value(self) -> int | None:
        return self._offset

    @property
    def unions(self) -> tuple[UnionClause, ...]:
        return tuple(self._unions)

    # ------------------------------------------------------------------
    # FROM / SELECT list
    # ------------------------------------------------------------------

    def from_(self, table: str) -> Self:
        self._table = table
        return self

    def select(self, *columns: str | CaseExpression | Iterable[Any]) -> Self:
        """Append columns or expressions to the select list.

        A :class:`CaseExpression` is rendered at this point: its SQL is
        inlined and its bindings become part of this query's bindings.
        Calling ``select()`` with no arguments appends ``*``.
        """
        items = _flatten(columns) or ["*"]
        for item in items:
            if isinstance(item, CaseExpression):
                self._selects.append(item.render())
            else:
                self._selects.append(str(item))
        return self

    def select_case(self, column: str | None = None) -> CaseExpression:
        """Start a CASE expression to be passed back to :meth:`select`."""
        return CaseExpression(column)

    def distinct(self) -> Self:
        self._distinct = True
        return self

    # ------------------------------------------------------------------
    # Aggregate shortcuts
    # ------------------------------------------------------------------

    def count(self, column: str = "*") -> Self:
        return self.select(f"COUNT({column}) as count")

    def sum(self, column: str) -> Self:
        return self.select(f"SUM({column}) as sum")

    def avg(self, column: str) -> Self:
        return self.select(f"AVG({column}) as avg")

    def min(self, column: str) -> Self:
        return self.select(f"MIN({column}) as min")

    def max(self, column: str) -> Self:
        return self.select(f"MAX({column}) as max")

    # ------------------------------------------------------------------
    # JOINs
    # ------------------------------------------------------------------

    def join(
        self,
        table: str,
        first: str,
        operator: str | None = None,
        second: str | None = None,
    ) -> Self:
        """Add an ``INNER JOIN``.

        ``join("users", "orders.user_id", "users.id")`` is shorthand for
        ``join("users", "orders.user_id", "=", "users.id")``.
        """
        return self._add_join("INNER", table, first, operator, second)

    def left_join(
        self,
        table: str,
        first: str,
        operator: str | None = None,
        second: str | None = None,
    ) -> Self:
        return self._add_join("LEFT", table, first, operator, second)

    def right_join(
        self,
        table: str,
        first: str,
        operator: str | None = None,
        second: str | None = None,
    ) -> Self:
        return self._add_join("RIGHT", table, first, operator, second)

    def cross_join(self, table: str) -> Self:
        self._joins.append(JoinClause("CROSS", table))
        return self

    def _add_join(
        self,
        kind: JoinKind,
        table: str,
        first: str,
        operator: str | None,
        second: str | None,
    ) -> Self:
        if second is None:
            if operator is None:
                raise ConfigurationError(
                    f"{kind} JOIN on '{table}' needs two columns to compare.", clause="JOIN"
                )
            operator, second = "=", operator
        self._joins.append(JoinClause(kind, table, first, operator, second))
        return self

    # ------------------------------------------------------------------
    # GROUP BY / HAVING / ORDER BY
    # ------------------------------------------------------------------

    def group_by(self, *columns: str | Iterable[str]) -> Self:
        self._groups.extend(_flatten(columns))
        return self

    def having(self, column: Any, operator: Any = MISSING, value: Any = MISSING) -> Self:
        self._havings.extend(basic_clauses(column, operator, value, "AND", "HAVING"))
        return self

    def or_having(self, column: Any, operator: Any = MISSING, value: Any = MISSING) -> Self:
        self._havings.extend(basic_clauses(column, operator, value, "OR", "HAVING"))
        return self

    def order_by(self, column: str, direction: str = "ASC") -> Self:
        normalized = direction.upper()
        if normalized not in _DIRECTIONS:
            raise ConfigurationError(
                f"Invalid ORDER BY direction {direction!r}; expected ASC or DESC.",
                clause="ORDER BY",
            )
        self._orders.append(OrderClause(column, normalized))  # type: ignore[arg-type]
        return self

    def order_by_desc(self, column: str) -> Self:
        return self.order_by(column, "DESC")

    # ------------------------------------------------------------------
    # LIMIT / OFFSET / pagination
    # ------------------------------------------------------------------

    def limit(self, value: int) -> Self:
        self._limit = _non_negative(value, "LIMIT")
        return self

    def offset(self, value: int) -> Self:
        self._offset = _non_negative(value, "OFFSET")
        return self

    def take(self, value: int) -> Self:
        return self.limit(value)

    def skip(self, value: int) -> Self:
        return self.offset(value)

    def page(self, page_number: int, per_page: int = 15) -> Self:
        """Select one page: ``LIMIT per_page OFFSET (page_number - 1) * per_page``.

        Raises:
            ConfigurationError: If ``page_number`` or ``per_page`` is below 1.
        """
        if page_number < 1 or per_page < 1:
            raise ConfigurationError(
                f"page() needs page_number >= 1 and per_page >= 1, "
                f"got {page_number} and {per_page}.",
                clause="LIMIT",
            )
        return self.offset((page_number - 1) * per_page).limit(per_page)

    # ------------------------------------------------------------------
    # UNION
    # ------------------------------------------------------------------

    def union(self, query: SelectQuery | str) -> Self:
        self._unions.append(UnionClause("UNION", query))
        return self

    def union_all(self, query: SelectQuery | str) -> Self:
        self._unions.append(UnionClause("UNION ALL", query))
        return self

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self) -> RenderedSQL:
        if not self._table:
            raise MissingTableError(self.statement)

        bindings = BindingAccumulator()
        parts = ["SELECT"]
        if self._distinct:
            parts.append("DISTINCT")
        parts.append(self._render_select_list(bindings))
        parts.append(f"FROM {self._table}")

        join_renderer = JoinRenderer()
        parts.extend(join_renderer.build(j) for j in self._joins)

        where_sql = self._render_where(bindings)
        if where_sql:
            parts.append(where_sql)

        if self._groups:
            parts.append(f"GROUP BY {', '.join(self._groups)}")

        if self._havings:
            parts.append(f"HAVING {ConditionRenderer(bindings).build(self._havings)}")

        if self._orders:
            parts.append(OrderByRenderer().build(self._orders))

        if self._limit is not None:
            parts.append(f"LIMIT {self._limit}")

        if self._offset is not None:
            parts.append(f"OFFSET {self._offset}")

        parts.extend(self._render_union(u, bindings) for u in self._unions)
        return RenderedSQL(" ".join(parts), bindings.values)

    def _render_select_list(self, bindings: BindingAccumulator) -> str:
        if not self._selects:
            return "*"
        items: list[str] = []
        for item in self._selects:
            if isinstance(item, RenderedSQL):
                items.append(item.sql)
                bindings.extend(item.bindings)
            else:
                items.append(item)
        return ", ".join(items)

    @staticmethod
    def _render_union(union: UnionClause, bindings: BindingAccumulator) -> str:
        if isinstance(union.query, str):
            return f"{union.kind} {union.query}"
        branch_sql, branch_bindings = union.query.render()
        bindings.extend(branch_bindings)
        return f"{union.kind} {branch_sql}"
