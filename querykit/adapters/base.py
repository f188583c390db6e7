"""Adapter abstraction: the contract between querykit and a database driver.

The Template Method pattern is used:

- ``Adapter.execute`` translates the ``?`` placeholders for the driver's
  paramstyle, then hands the native statement to ``_run``.
- ``SQLiteAdapter``, ``PostgresAdapter``, ``MySQLAdapter`` and
  ``SQLAlchemyAdapter`` override the driver-specific steps (running a
  statement, transaction control, last id, affected rows).

Errors raised by the driver are never wrapped; they propagate to the caller
unchanged.  Adapters do not retry.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any, ClassVar

from querykit.adapters.placeholders import ParamStyle, translate_placeholders

#: A result row: column name → value.
Row = dict[str, Any]


class Adapter(ABC):
    """Abstract base for database adapters."""

    #: PEP 249 paramstyle of the underlying driver.
    paramstyle: ParamStyle = "qmark"

    #: Connection options that must be supplied when building from config.
    required_options: ClassVar[tuple[str, ...]] = ()

    @classmethod
    def missing_options(cls, options: Mapping[str, Any]) -> list[str]:
        """Return the required option names absent from ``options``."""
        return [name for name in cls.required_options if name not in options]

    @property
    @abstractmethod
    def dialect_name(self) -> str:
        """Return the canonical adapter name (``'sqlite'``, ``'postgres'`` …)."""

    def translate(
        self, sql: str, bindings: Sequence[Any]
    ) -> tuple[str, list[Any] | dict[str, Any]]:
        """Rewrite ``?`` placeholders into this adapter's native syntax.

        Statements without bindings are passed through untouched; drivers
        using ``%s`` only interpret ``%`` when parameters are supplied.
        """
        if not bindings:
            return sql, []
        return translate_placeholders(sql, bindings, self.paramstyle)

    def execute(self, sql: str, bindings: Sequence[Any] = ()) -> list[Row]:
        """Execute ``sql`` with positional ``bindings``.

        Returns:
            Result rows as dicts; an empty list for statements without a
            result set.
        """
        native_sql, params = self.translate(sql, bindings)
        return self._run(native_sql, params)

    @abstractmethod
    def _run(self, sql: str, params: list[Any] | dict[str, Any]) -> list[Row]:
        """Run an already-translated statement on the driver."""

    @abstractmethod
    def begin(self) -> None:
        """Start a transaction."""

    @abstractmethod
    def commit(self) -> None:
        """Commit the current transaction."""

    @abstractmethod
    def rollback(self) -> None:
        """Roll back the current transaction."""

    @abstractmethod
    def last_insert_id(self) -> Any:
        """Return the identifier generated by the most recent INSERT."""

    @abstractmethod
    def affected_rows(self) -> int:
        """Return the row count reported for the most recent statement."""

    def close(self) -> None:
        """Release the underlying connection.  Override when needed."""
