"""DELETE statement builder."""
from __future__ import annotations

from typing import Self

from querykit.errors import MissingTableError
from querykit.query.base import ConditionalQuery, RenderedSQL
from querykit.query.bindings import BindingAccumulator


class DeleteQuery(ConditionalQuery):
    """Fluent builder for ``DELETE`` statements.

    Without any WHERE condition the statement deletes every row of the
    table; there is no implicit guard.
    """

    statement = "DELETE"

    def from_(self, table: str) -> Self:
        self._table = table
        return self

    def render(self) -> RenderedSQL:
        if not self._table:
            raise MissingTableError(self.statement)

        bindings = BindingAccumulator()
        parts = [f"DELETE FROM {self._table}"]
        where_sql = self._render_where(bindings)
        if where_sql:
            parts.append(where_sql)
        return RenderedSQL(" ".join(parts), bindings.values)
