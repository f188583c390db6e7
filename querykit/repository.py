"""Table-scoped repository base class.

Subclass :class:`Repository`, set ``table`` (and optionally ``mapper`` and
``primary_key``), and get the usual CRUD helpers::

    class UserRepository(Repository):
        table = "users"
        mapper = ConstructorMapper(User)

        def active(self) -> list[User]:
            return self.execute(self.query().where("status", "active"))

    users = UserRepository(db)
    users.find(1)
"""
from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from contextlib import contextmanager
from typing import Any, ClassVar

from querykit.connection import Connection
from querykit.errors import ConfigurationError
from querykit.mapping import RowMapper
from querykit.query import DeleteQuery, SelectQuery
from querykit.query.base import MISSING


class Repository:
    """Base class for repositories bound to one table.

    Class attributes:
        table: Table the repository reads and writes.  Required.
        mapper: Optional row mapper; rows are returned as dicts without one.
        primary_key: Column used by :meth:`find`, :meth:`update` and
            :meth:`delete`.

    Args:
        db: The connection statements run on.

    Raises:
        ConfigurationError: If the subclass does not define ``table``.
    """

    table: ClassVar[str | None] = None
    mapper: ClassVar[RowMapper | None] = None
    primary_key: ClassVar[str] = "id"

    def __init__(self, db: Connection) -> None:
        if not type(self).table:
            raise ConfigurationError(
                f"{type(self).__name__} does not define a table.", clause="FROM"
            )
        self.db = db

    @property
    def table_name(self) -> str:
        return type(self).table  # type: ignore[return-value]

    def _mapper(self) -> RowMapper | None:
        # Read through the class so plain functions are not bound as methods.
        return type(self).mapper

    def query(self) -> SelectQuery:
        """Return a fresh SELECT builder on this repository's table."""
        return self.db.table(self.table_name)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def all(self) -> list[Any]:
        return self.execute(self.query())

    def find(self, id: Any) -> Any | None:
        return self.execute_first(self.query().where(self.primary_key, id))

    def find_by(self, column: str, value: Any) -> Any | None:
        return self.execute_first(self.query().where(column, value))

    def where(self, column: Any, operator: Any = MISSING, value: Any = MISSING) -> list[Any]:
        return self.execute(self.query().where(column, operator, value))

    def where_in(self, column: str, values: Iterable[Any]) -> list[Any]:
        return self.execute(self.query().where_in(column, values))

    def where_not_in(self, column: str, values: Iterable[Any]) -> list[Any]:
        return self.execute(self.query().where_not_in(column, values))

    def first(self) -> Any | None:
        return self.execute_first(self.query())

    def count(self) -> int:
        value = self.db.execute_scalar(self.query().count())
        return int(value) if value is not None else 0

    def exists(self, id: Any = MISSING) -> bool:
        """Return whether a row with ``id`` exists, or any row when ``id`` is omitted."""
        query = self.query().select(self.primary_key)
        if id is not MISSING:
            query.where(self.primary_key, id)
        return self.db.first(query) is not None

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def insert(self, attributes: Mapping[str, Any]) -> Any:
        """Insert one row and return its generated id."""
        return self.db.execute_insert(self.db.insert(self.table_name).values(attributes))

    def create(self, attributes: Mapping[str, Any]) -> Any | None:
        """Insert one row and return it as re-read from the database."""
        return self.find(self.insert(attributes))

    def update(self, id: Any, attributes: Mapping[str, Any]) -> int:
        query = self.db.update(self.table_name).set(attributes).where(self.primary_key, id)
        return self.db.execute_update(query)

    def delete(self, id: Any) -> int:
        query = self.db.delete(self.table_name).where(self.primary_key, id)
        return self.db.execute_delete(query)

    def destroy(self, id: Any) -> int:
        return self.delete(id)

    def delete_where(self, conditions: Mapping[str, Any]) -> int:
        """Delete every row matching all ``conditions`` (column = value)."""
        query: DeleteQuery = self.db.delete(self.table_name)
        if conditions:
            query.where(conditions)
        return self.db.execute_delete(query)

    # ------------------------------------------------------------------
    # Execution helpers
    # ------------------------------------------------------------------

    def execute(self, query: SelectQuery) -> list[Any]:
        return self.db.get(query, self._mapper())

    def execute_first(self, query: SelectQuery) -> Any | None:
        return self.db.first(query, self._mapper())

    @contextmanager
    def transaction(self) -> Iterator[Repository]:
        with self.db.transaction():
            yield self
