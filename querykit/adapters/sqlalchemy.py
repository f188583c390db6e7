"""Adapter running querykit statements over a SQLAlchemy ``Engine``.

Statements are sent with ``Connection.exec_driver_sql`` so the rendered text
reaches the DBAPI driver untouched apart from placeholder translation.  The
paramstyle is taken from the engine's dialect.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from querykit.adapters.base import Adapter, Row
from querykit.errors import AdapterError

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


class SQLAlchemyAdapter(Adapter):
    """Adapter over a SQLAlchemy engine.

    Outside :meth:`begin`/:meth:`commit` each statement is committed as soon
    as it has run.

    Args:
        url: An existing :class:`~sqlalchemy.engine.Engine`, or a database URL
            passed to :func:`sqlalchemy.create_engine`.
        **engine_options: Extra keyword arguments for ``create_engine``;
            ignored when an engine is given.

    Raises:
        AdapterError: If SQLAlchemy is not installed.
    """

    required_options: ClassVar[tuple[str, ...]] = ("url",)

    def __init__(self, url: Engine | str, **engine_options: Any) -> None:
        try:
            from sqlalchemy import create_engine
        except ImportError as exc:
            raise AdapterError(
                "The sqlalchemy adapter requires SQLAlchemy. "
                "Install it with: pip install 'querykit[sqlalchemy]'"
            ) from exc

        self._owns_engine = isinstance(url, str)
        self._engine = create_engine(url, **engine_options) if self._owns_engine else url
        self.paramstyle = self._engine.dialect.paramstyle
        self._conn = self._engine.connect()
        self._transaction: Any = None
        self._rowcount = 0
        self._lastrowid: Any = None

    @property
    def dialect_name(self) -> str:
        return self._engine.dialect.name

    @property
    def engine(self) -> Engine:
        return self._engine

    def _run(self, sql: str, params: list[Any] | dict[str, Any]) -> list[Row]:
        driver_params = params if isinstance(params, dict) else tuple(params)
        try:
            result = self._conn.exec_driver_sql(sql, driver_params)
            if result.returns_rows:
                rows = [dict(row) for row in result.mappings().all()]
            else:
                rows = []
                self._lastrowid = result.lastrowid
        except Exception:
            # Close the autobegun transaction.
            if self._transaction is None:
                self._conn.rollback()
            raise
        self._rowcount = result.rowcount
        if self._transaction is None:
            self._conn.commit()
        return rows

    def begin(self) -> None:
        self._transaction = self._conn.begin()

    def commit(self) -> None:
        transaction, self._transaction = self._transaction, None
        if transaction is not None:
            transaction.commit()

    def rollback(self) -> None:
        transaction, self._transaction = self._transaction, None
        if transaction is not None:
            transaction.rollback()

    def last_insert_id(self) -> Any:
        return self._lastrowid

    def affected_rows(self) -> int:
        return max(self._rowcount, 0)

    def close(self) -> None:
        self._conn.close()
        if self._owns_engine:
            self._engine.dispose()
