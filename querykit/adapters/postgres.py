"""PostgreSQL adapter built on psycopg 3.

psycopg is an optional dependency (``pip install querykit[postgres]``); it is
imported when the adapter is constructed.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog

from querykit.adapters.base import Adapter, Row
from querykit.errors import AdapterError

logger = structlog.get_logger(__name__)


class PostgresAdapter(Adapter):
    """Adapter for PostgreSQL.

    The connection runs in autocommit mode; :meth:`begin` issues an explicit
    ``BEGIN``.  Rows come back as dicts via psycopg's ``dict_row`` factory.

    Args:
        conninfo: libpq connection string (``"postgresql://..."`` or
            ``"dbname=... user=..."``).
        **options: Extra keyword arguments for ``psycopg.connect``
            (``dbname``, ``user``, ``host`` …).

    Raises:
        AdapterError: If psycopg is not installed.
    """

    paramstyle = "format"

    def __init__(self, conninfo: str = "", **options: Any) -> None:
        try:
            import psycopg
            from psycopg.rows import dict_row
        except ImportError as exc:
            raise AdapterError(
                "The postgres adapter requires psycopg. "
                "Install it with: pip install 'querykit[postgres]'"
            ) from exc

        self._psycopg = psycopg
        self._conn = psycopg.connect(conninfo, autocommit=True, row_factory=dict_row, **options)
        self._rowcount = 0

    @classmethod
    def missing_options(cls, options: Mapping[str, Any]) -> list[str]:
        if "conninfo" in options or "dbname" in options:
            return []
        return ["conninfo or dbname"]

    @property
    def dialect_name(self) -> str:
        return "postgres"

    @property
    def connection(self) -> Any:
        """The underlying ``psycopg.Connection``."""
        return self._conn

    def _run(self, sql: str, params: list[Any] | dict[str, Any]) -> list[Row]:
        with self._conn.cursor() as cursor:
            cursor.execute(sql, params or None)
            self._rowcount = cursor.rowcount
            return list(cursor.fetchall()) if cursor.description else []

    def begin(self) -> None:
        self._conn.execute("BEGIN")

    def commit(self) -> None:
        self._conn.execute("COMMIT")

    def rollback(self) -> None:
        self._conn.execute("ROLLBACK")

    def last_insert_id(self) -> int | None:
        """Return ``lastval()`` for the session, or ``None`` before any sequence use."""
        try:
            # Savepoint inside an open BEGIN; a failure must not abort it.
            with self._conn.transaction():
                row = self._conn.execute("SELECT lastval() AS lastval").fetchone()
        except self._psycopg.errors.ObjectNotInPrerequisiteState:
            logger.debug("postgres.lastval_unavailable")
            return None
        return row["lastval"] if row else None

    def affected_rows(self) -> int:
        return max(self._rowcount, 0)

    def close(self) -> None:
        self._conn.close()
