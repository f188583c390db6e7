"""INSERT statement builder."""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Self

from querykit.errors import EmptyStatementError, MissingTableError
from querykit.query.base import QueryBuilder, RenderedSQL
from querykit.query.bindings import BindingAccumulator
from querykit.query.renderer import placeholders


class InsertQuery(QueryBuilder):
    """Fluent builder for single- and multi-row ``INSERT`` statements.

    The first row's keys fix the column list and order.  Later rows are read
    by those keys without further checks: a missing key binds ``None`` and
    extra keys are ignored, so callers must pass rows with one shared
    column set.
    """

    statement = "INSERT"

    def __init__(self, table: str | None = None) -> None:
        super().__init__(table)
        self._rows: list[Mapping[str, Any]] = []

    @property
    def rows(self) -> tuple[Mapping[str, Any], ...]:
        return tuple(self._rows)

    def into(self, table: str) -> Self:
        self._table = table
        return self

    def values(self, data: Mapping[str, Any] | Iterable[Mapping[str, Any]]) -> Self:
        """Append one row (a mapping) or several rows (an iterable of mappings)."""
        if isinstance(data, Mapping):
            self._rows.append(dict(data))
        else:
            self._rows.extend(dict(row) for row in data)
        return self

    def render(self) -> RenderedSQL:
        if not self._table:
            raise MissingTableError(self.statement)
        if not self._rows:
            raise EmptyStatementError("No values specified for INSERT.", clause="VALUES")

        columns = list(self._rows[0])
        bindings = BindingAccumulator()
        row_sql = f"({placeholders(len(columns))})"
        for row in self._rows:
            bindings.extend(row.get(col) for col in columns)

        sql = (
            f"INSERT INTO {self._table} ({', '.join(columns)}) "
            f"VALUES {', '.join([row_sql] * len(self._rows))}"
        )
        return RenderedSQL(sql, bindings.values)
