"""MySQL adapter built on PyMySQL (``pip install querykit[mysql]``)."""
from __future__ import annotations

from typing import Any, ClassVar

from querykit.adapters.base import Adapter, Row
from querykit.errors import AdapterError


class MySQLAdapter(Adapter):
    """Adapter for MySQL / MariaDB.

    Args:
        database: Schema name to connect to.
        **options: Extra keyword arguments for ``pymysql.connect``
            (``host``, ``user``, ``password``, ``port`` …).

    Raises:
        AdapterError: If PyMySQL is not installed.
    """

    paramstyle = "format"
    required_options: ClassVar[tuple[str, ...]] = ("database",)

    def __init__(self, database: str, **options: Any) -> None:
        try:
            import pymysql
            from pymysql.cursors import DictCursor
        except ImportError as exc:
            raise AdapterError(
                "The mysql adapter requires PyMySQL. "
                "Install it with: pip install 'querykit[mysql]'"
            ) from exc

        self._conn = pymysql.connect(
            database=database, cursorclass=DictCursor, autocommit=True, **options
        )
        self._rowcount = 0

    @property
    def dialect_name(self) -> str:
        return "mysql"

    @property
    def connection(self) -> Any:
        """The underlying ``pymysql.connections.Connection``."""
        return self._conn

    def _run(self, sql: str, params: list[Any] | dict[str, Any]) -> list[Row]:
        with self._conn.cursor() as cursor:
            cursor.execute(sql, tuple(params) if params else None)
            self._rowcount = cursor.rowcount
            return list(cursor.fetchall()) if cursor.description else []

    def begin(self) -> None:
        self._conn.begin()

    def commit(self) -> None:
        self._conn.commit()

    def rollback(self) -> None:
        self._conn.rollback()

    def last_insert_id(self) -> int:
        return self._conn.insert_id()

    def affected_rows(self) -> int:
        return max(self._rowcount, 0)

    def close(self) -> None:
        self._conn.close()
