"""Builder abstractions: RenderedSQL, the Renderable protocol and the
shared WHERE-clause machinery.

``QueryBuilder`` fixes the public rendering surface (``render``,
``to_sql``, ``bindings``, ``str()``); concrete builders implement
``render`` only.  ``ConditionalQuery`` adds the WHERE mutators shared by
SELECT, UPDATE and DELETE.

Every mutator mutates the builder in place and returns ``self``.  A builder
instance is meant to be driven by a single call chain; concurrent mutation
of the same instance from several threads is not guarded.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import Any, ClassVar, NamedTuple, Protocol, Self, runtime_checkable

from querykit.errors import ConfigurationError
from querykit.query.bindings import BindingAccumulator
from querykit.query.clauses import (
    BasicClause,
    BetweenClause,
    Boolean,
    Clause,
    ExistsClause,
    InClause,
    NotExistsClause,
    NotInClause,
    NotNullClause,
    NullClause,
    RawClause,
)
from querykit.query.renderer import ConditionRenderer


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


#: Sentinel for "argument not supplied" (``None`` is a legitimate value).
MISSING: Any = _Missing()


class RenderedSQL(NamedTuple):
    """The output of a render.

    Attributes:
        sql: SQL text using the dialect-neutral ``?`` placeholder.
        bindings: Values aligned 1:1 with the ``?`` tokens in ``sql``.
    """

    sql: str
    bindings: list[Any]


@runtime_checkable
class Renderable(Protocol):
    """Anything that can produce a :class:`RenderedSQL`."""

    def render(self) -> RenderedSQL: ...


def basic_clauses(
    column: str | Mapping[str, Any],
    operator: Any,
    value: Any,
    boolean: Boolean,
    clause: str,
) -> list[BasicClause]:
    """Normalise the ``(column, [operator,] value)`` call forms.

    * ``(column, value)`` means ``column = value``;
    * ``(column, operator, value)`` is taken as given;
    * ``({a: 1, b: 2})`` expands to one ``=`` clause per entry, in mapping
      order.  The first entry carries ``boolean``; the rest are AND-joined.

    Raises:
        ConfigurationError: If no value is supplied or the value is ``None``.
    """
    if isinstance(column, Mapping):
        if operator is not MISSING or value is not MISSING:
            raise ConfigurationError(
                "A mapping condition takes no operator or value.", clause=clause
            )
        result: list[BasicClause] = []
        for key, val in column.items():
            result.extend(
                basic_clauses(key, "=", val, boolean if not result else "AND", clause)
            )
        return result

    if value is MISSING:
        if operator is MISSING:
            raise ConfigurationError(
                f"Condition on '{column}' has no value.", clause=clause
            )
        operator, value = "=", operator

    if value is None:
        raise ConfigurationError(
            f"Condition on '{column}' compares against None; "
            "use the null/not-null variants instead.",
            clause=clause,
        )
    return [BasicClause(column, str(operator), value, boolean)]


def _subquery_sql(subquery: Renderable | str) -> tuple[str, tuple[Any, ...]]:
    if isinstance(subquery, str):
        return subquery, ()
    sql, bindings = subquery.render()
    return sql, tuple(bindings)


class QueryBuilder(ABC):
    """Abstract base for the four statement builders."""

    #: Statement keyword used in error messages.
    statement: ClassVar[str]

    def __init__(self, table: str | None = None) -> None:
        self._table = table

    @property
    def table_name(self) -> str | None:
        return self._table

    @abstractmethod
    def render(self) -> RenderedSQL:
        """Render the accumulated state to SQL text and bindings.

        Raises:
            ConfigurationError: If the builder cannot produce a statement.
        """

    def to_sql(self) -> str:
        return self.render().sql

    @property
    def bindings(self) -> list[Any]:
        return self.render().bindings

    def __str__(self) -> str:
        return self.to_sql()


class ConditionalQuery(QueryBuilder):
    """Base for builders with a WHERE clause list."""

    def __init__(self, table: str | None = None) -> None:
        super().__init__(table)
        self._wheres: list[Clause] = []

    @property
    def wheres(self) -> tuple[Clause, ...]:
        return tuple(self._wheres)

    # ------------------------------------------------------------------
    # Basic comparisons
    # ------------------------------------------------------------------

    def where(self, column: Any, operator: Any = MISSING, value: Any = MISSING) -> Self:
        """Add an AND-joined comparison.

        ``where("age", ">", 18)``, ``where("name", "Alice")`` and
        ``where({"name": "Alice", "age": 28})`` are all accepted.
        """
        self._wheres.extend(basic_clauses(column, operator, value, "AND", "WHERE"))
        return self

    def or_where(self, column: Any, operator: Any = MISSING, value: Any = MISSING) -> Self:
        """Add an OR-joined comparison."""
        self._wheres.extend(basic_clauses(column, operator, value, "OR", "WHERE"))
        return self

    # ------------------------------------------------------------------
    # IN / NOT IN
    # ------------------------------------------------------------------

    def where_in(self, column: str, values: Iterable[Any]) -> Self:
        self._wheres.append(InClause(column, tuple(values)))
        return self

    def or_where_in(self, column: str, values: Iterable[Any]) -> Self:
        self._wheres.append(InClause(column, tuple(values), "OR"))
        return self

    def where_not_in(self, column: str, values: Iterable[Any]) -> Self:
        self._wheres.append(NotInClause(column, tuple(values)))
        return self

    def or_where_not_in(self, column: str, values: Iterable[Any]) -> Self:
        self._wheres.append(NotInClause(column, tuple(values), "OR"))
        return self

    # ------------------------------------------------------------------
    # NULL checks
    # ------------------------------------------------------------------

    def where_null(self, column: str) -> Self:
        self._wheres.append(NullClause(column))
        return self

    def or_where_null(self, column: str) -> Self:
        self._wheres.append(NullClause(column, "OR"))
        return self

    def where_not_null(self, column: str) -> Self:
        self._wheres.append(NotNullClause(column))
        return self

    def or_where_not_null(self, column: str) -> Self:
        self._wheres.append(NotNullClause(column, "OR"))
        return self

    # ------------------------------------------------------------------
    # BETWEEN
    # ------------------------------------------------------------------

    def where_between(self, column: str, low: Any, high: Any) -> Self:
        self._wheres.append(BetweenClause(column, low, high))
        return self

    def or_where_between(self, column: str, low: Any, high: Any) -> Self:
        self._wheres.append(BetweenClause(column, low, high, "OR"))
        return self

    # ------------------------------------------------------------------
    # Raw SQL and subqueries
    # ------------------------------------------------------------------

    def where_raw(self, sql: str, *bindings: Any) -> Self:
        """Add verbatim SQL.  ``bindings`` must match its ``?`` count."""
        self._wheres.append(RawClause(sql, bindings))
        return self

    def or_where_raw(self, sql: str, *bindings: Any) -> Self:
        self._wheres.append(RawClause(sql, bindings, "OR"))
        return self

    def where_exists(self, subquery: Renderable | str) -> Self:
        """Add ``EXISTS (subquery)``.

        A builder is rendered immediately; later changes to it are not
        reflected in this query.
        """
        sql, bindings = _subquery_sql(subquery)
        self._wheres.append(ExistsClause(sql, bindings))
        return self

    def where_not_exists(self, subquery: Renderable | str) -> Self:
        sql, bindings = _subquery_sql(subquery)
        self._wheres.append(NotExistsClause(sql, bindings))
        return self

    # ------------------------------------------------------------------
    # Rendering helpers
    # ------------------------------------------------------------------

    def _render_where(self, bindings: BindingAccumulator) -> str | None:
        if not self._wheres:
            return None
        return f"WHERE {ConditionRenderer(bindings).build(self._wheres)}"
