"""UPDATE statement builder."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Self

from querykit.errors import EmptyStatementError, MissingTableError
from querykit.query.base import ConditionalQuery, RenderedSQL
from querykit.query.bindings import BindingAccumulator


class UpdateQuery(ConditionalQuery):
    """Fluent builder for ``UPDATE`` statements.

    Assignment bindings always precede WHERE bindings, whatever order
    :meth:`set` and the ``where`` mutators were called in.
    """

    statement = "UPDATE"

    def __init__(self, table: str | None = None) -> None:
        super().__init__(table)
        self._assignments: dict[str, Any] = {}

    @property
    def assignments(self) -> dict[str, Any]:
        return dict(self._assignments)

    def table(self, table: str) -> Self:
        self._table = table
        return self

    def set(self, data: Mapping[str, Any] | None = None, **values: Any) -> Self:
        """Merge column assignments; a repeated column keeps its first position."""
        if data:
            self._assignments.update(data)
        self._assignments.update(values)
        return self

    def render(self) -> RenderedSQL:
        if not self._table:
            raise MissingTableError(self.statement)
        if not self._assignments:
            raise EmptyStatementError("No values to update.", clause="SET")

        bindings = BindingAccumulator()
        assignments = ", ".join(
            f"{column} = {bindings.add(value)}" for column, value in self._assignments.items()
        )
        parts = [f"UPDATE {self._table}", f"SET {assignments}"]
        where_sql = self._render_where(bindings)
        if where_sql:
            parts.append(where_sql)
        return RenderedSQL(" ".join(parts), bindings.values)
