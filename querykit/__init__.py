"""querykit – fluent SQL builders with a thin execution layer.

Build statements with chained method calls, render them to
``(sql, bindings)`` with ``?`` placeholders, and run them through an
adapter.

Public API
----------
``connect``
    Open a :class:`Connection` from an adapter name and options, or from a
    :class:`ConnectionConfig`.

``SelectQuery``, ``InsertQuery``, ``UpdateQuery``, ``DeleteQuery``
    Standalone builders; ``render()`` returns a :class:`RenderedSQL`.

``Repository``
    Base class for table-scoped CRUD helpers.

Example::

    import querykit

    db = querykit.connect("sqlite", database=":memory:")
    adults = db.get(db.table("users").where("age", ">=", 18).order_by("name"))

Extensibility
-------------
New adapters can be registered via::

    from querykit.adapters.registry import AdapterFactory

    @AdapterFactory.register("duckdb")
    class DuckDBAdapter(Adapter):
        ...

Render hooks are registered with
:class:`~querykit.extensions.HookRegistry` and enabled per connection
through ``ConnectionConfig(hooks=[...])``.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from querykit.adapters import (
    Adapter,
    AdapterFactory,
    MySQLAdapter,
    PostgresAdapter,
    SQLAlchemyAdapter,
    SQLiteAdapter,
)
from querykit.config import ConnectionConfig
from querykit.connection import Connection
from querykit.errors import (
    AdapterError,
    CaseExpressionError,
    ConfigurationError,
    ConnectionConfigError,
    EmptyStatementError,
    ExtensionError,
    MissingTableError,
    QueryKitError,
)
from querykit.extensions import HookRegistry, RenderHook
from querykit.mapping import ConstructorMapper, RowMapper, SetterMapper
from querykit.query import (
    CaseExpression,
    DeleteQuery,
    InsertQuery,
    Renderable,
    RenderedSQL,
    SelectQuery,
    UpdateQuery,
)
from querykit.repository import Repository

# ---------------------------------------------------------------------------
# Register built-in adapters with AdapterFactory
# ---------------------------------------------------------------------------

AdapterFactory.register_class("sqlite", SQLiteAdapter)
AdapterFactory.register_class("postgres", PostgresAdapter)
AdapterFactory.register_class("mysql", MySQLAdapter)
AdapterFactory.register_class("sqlalchemy", SQLAlchemyAdapter)

__all__ = [
    # Entry point
    "connect",
    "Connection",
    "ConnectionConfig",
    # Builders
    "SelectQuery",
    "InsertQuery",
    "UpdateQuery",
    "DeleteQuery",
    "CaseExpression",
    "Renderable",
    "RenderedSQL",
    # Adapters
    "Adapter",
    "AdapterFactory",
    "SQLiteAdapter",
    "PostgresAdapter",
    "MySQLAdapter",
    "SQLAlchemyAdapter",
    # Extensions and mapping
    "HookRegistry",
    "RenderHook",
    "RowMapper",
    "ConstructorMapper",
    "SetterMapper",
    "Repository",
    # Errors
    "QueryKitError",
    "ConfigurationError",
    "MissingTableError",
    "EmptyStatementError",
    "CaseExpressionError",
    "ConnectionConfigError",
    "AdapterError",
    "ExtensionError",
]


def connect(
    adapter: str | ConnectionConfig,
    /,
    *,
    hooks: Sequence[str] = (),
    **options: Any,
) -> Connection:
    """Open a :class:`Connection`.

    Args:
        adapter: Adapter name (``"sqlite"``, ``"postgres"``, ``"mysql"``,
            ``"sqlalchemy"`` or an alias), or a ready
            :class:`ConnectionConfig`.
        hooks: Render hook names; only used when ``adapter`` is a name.
        **options: Adapter constructor options; only used when ``adapter``
            is a name.

    Returns:
        A connection wrapping a freshly created adapter.

    Raises:
        ConnectionConfigError: If the adapter is unknown or a required
            option is missing.
        ExtensionError: If a hook name is not registered.
    """
    if isinstance(adapter, ConnectionConfig):
        config = adapter
    else:
        config = ConnectionConfig(adapter=adapter, options=options, hooks=list(hooks))
    return Connection.from_config(config)
