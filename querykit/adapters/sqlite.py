"""SQLite adapter built on the standard-library ``sqlite3`` driver."""
from __future__ import annotations

import sqlite3
from typing import Any, ClassVar

from querykit.adapters.base import Adapter, Row


class SQLiteAdapter(Adapter):
    """Adapter for SQLite.

    The connection runs with ``isolation_level=None`` so every statement
    autocommits unless :meth:`begin` opened an explicit transaction.

    Args:
        database: Path to the database file, or ``":memory:"``.
        **options: Extra keyword arguments for :func:`sqlite3.connect`.
    """

    paramstyle = "qmark"
    required_options: ClassVar[tuple[str, ...]] = ("database",)

    def __init__(self, database: str, **options: Any) -> None:
        self._conn = sqlite3.connect(database, isolation_level=None, **options)
        self._conn.row_factory = sqlite3.Row
        self._rowcount = 0
        self._lastrowid: int | None = None

    @property
    def dialect_name(self) -> str:
        return "sqlite"

    @property
    def connection(self) -> sqlite3.Connection:
        """The underlying ``sqlite3`` connection."""
        return self._conn

    def _run(self, sql: str, params: list[Any] | dict[str, Any]) -> list[Row]:
        cursor = self._conn.execute(sql, params)
        try:
            rows = [dict(row) for row in cursor.fetchall()] if cursor.description else []
            self._rowcount = cursor.rowcount
            self._lastrowid = cursor.lastrowid
        finally:
            cursor.close()
        return rows

    def begin(self) -> None:
        self._conn.execute("BEGIN")

    def commit(self) -> None:
        self._conn.execute("COMMIT")

    def rollback(self) -> None:
        self._conn.execute("ROLLBACK")

    def last_insert_id(self) -> int | None:
        return self._lastrowid

    def affected_rows(self) -> int:
        return max(self._rowcount, 0)

    def close(self) -> None:
        self._conn.close()
