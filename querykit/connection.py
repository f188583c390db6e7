"""Connection: builder factories plus execution through an adapter.

A :class:`Connection` hands out fresh builders (``db.table("users")``) and
executes them.  Execution renders the builder, runs the configured render
hooks, then passes ``(sql, bindings)`` to the adapter, which translates the
``?`` placeholders for its driver.

Driver errors propagate unchanged.  Inside :meth:`Connection.transaction`
any exception rolls the transaction back and is re-raised.

A connection wraps one driver connection and is not safe to share between
threads without external locking.
"""
from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any

import structlog

from querykit.adapters.base import Adapter, Row
from querykit.adapters.registry import AdapterFactory
from querykit.config import ConnectionConfig
from querykit.extensions import HookRegistry
from querykit.mapping import RowMapper, map_rows
from querykit.query import DeleteQuery, InsertQuery, SelectQuery, UpdateQuery
from querykit.query.base import Renderable, RenderedSQL

logger = structlog.get_logger(__name__)


class Connection:
    """A database handle combining an :class:`Adapter` with query builders.

    Args:
        adapter: The adapter statements are executed on.
        hooks: Names of registered render hooks, applied in order.

    Raises:
        ExtensionError: If a hook name is not registered.
    """

    def __init__(self, adapter: Adapter, hooks: Sequence[str] = ()) -> None:
        self._adapter = adapter
        self._hook_names = list(hooks)
        self._hooks = [HookRegistry.resolve(name) for name in self._hook_names]

    @classmethod
    def from_config(cls, config: ConnectionConfig) -> Connection:
        """Create the adapter named by ``config`` and wrap it."""
        adapter = AdapterFactory.create(config.adapter, **config.options)
        logger.info("connection.opened", adapter=adapter.dialect_name, hooks=config.hooks)
        return cls(adapter, hooks=config.hooks)

    @property
    def adapter(self) -> Adapter:
        return self._adapter

    # ------------------------------------------------------------------
    # Builder factories
    # ------------------------------------------------------------------

    def query(self, table: str | None = None) -> SelectQuery:
        return SelectQuery(table)

    def table(self, name: str) -> SelectQuery:
        return SelectQuery(name)

    def from_(self, name: str) -> SelectQuery:
        return SelectQuery(name)

    def insert(self, table: str | None = None) -> InsertQuery:
        return InsertQuery(table)

    def update(self, table: str | None = None) -> UpdateQuery:
        return UpdateQuery(table)

    def delete(self, table: str | None = None) -> DeleteQuery:
        return DeleteQuery(table)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def render(self, query: Renderable) -> RenderedSQL:
        """Render ``query`` and apply the configured hooks."""
        return self._apply_hooks(query.render())

    def get(self, query: Renderable, mapper: RowMapper | None = None) -> list[Any]:
        """Execute ``query`` and return all rows, mapped when ``mapper`` is given."""
        return map_rows(self._execute(self.render(query)), mapper)

    def first(self, query: SelectQuery, mapper: RowMapper | None = None) -> Any | None:
        """Execute ``query`` with ``LIMIT 1`` and return the first row or ``None``.

        The limit is applied to ``query`` itself.
        """
        rows = self.get(query.limit(1), mapper)
        return rows[0] if rows else None

    def execute_insert(self, query: InsertQuery) -> Any:
        """Execute an INSERT and return the adapter's last insert id."""
        self._execute(self.render(query))
        return self._adapter.last_insert_id()

    def execute_update(self, query: UpdateQuery) -> int:
        """Execute an UPDATE and return the number of affected rows."""
        self._execute(self.render(query))
        return self._adapter.affected_rows()

    def execute_delete(self, query: DeleteQuery) -> int:
        """Execute a DELETE and return the number of affected rows."""
        self._execute(self.render(query))
        return self._adapter.affected_rows()

    def execute_scalar(self, query: SelectQuery) -> Any | None:
        """Return the first column of the first row, or ``None`` without rows."""
        row = self.first(query)
        if not row:
            return None
        return next(iter(row.values()))

    def raw(self, sql: str, *bindings: Any, mapper: RowMapper | None = None) -> list[Any]:
        """Execute hand-written SQL with ``?`` placeholders."""
        rendered = self._apply_hooks(RenderedSQL(sql, list(bindings)))
        return map_rows(self._execute(rendered), mapper)

    def _apply_hooks(self, rendered: RenderedSQL) -> RenderedSQL:
        for hook in self._hooks:
            rendered = hook(rendered)
        return rendered

    def _execute(self, rendered: RenderedSQL) -> list[Row]:
        logger.debug(
            "connection.execute",
            adapter=self._adapter.dialect_name,
            sql=rendered.sql,
            binding_count=len(rendered.bindings),
        )
        return self._adapter.execute(rendered.sql, rendered.bindings)

    # ------------------------------------------------------------------
    # Transactions and lifecycle
    # ------------------------------------------------------------------

    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        """Run the ``with`` body inside BEGIN / COMMIT.

        Any exception raised by the body (or by COMMIT), including
        ``KeyboardInterrupt``, triggers ROLLBACK and is re-raised.

        Example::

            with db.transaction():
                db.execute_insert(db.insert("users").values({"name": "Ann"}))
        """
        self._adapter.begin()
        logger.debug("connection.transaction.begin", adapter=self._adapter.dialect_name)
        try:
            yield self
            self._adapter.commit()
        except BaseException as exc:
            logger.warning(
                "connection.transaction.rollback",
                adapter=self._adapter.dialect_name,
                error=str(exc),
            )
            self._adapter.rollback()
            raise
        logger.debug("connection.transaction.commit", adapter=self._adapter.dialect_name)

    def close(self) -> None:
        self._adapter.close()
        logger.info("connection.closed", adapter=self._adapter.dialect_name)

    def __enter__(self) -> Connection:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
