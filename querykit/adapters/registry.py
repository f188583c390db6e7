"""Adapter registry.

``AdapterFactory``
    Central registry for :class:`~querykit.adapters.base.Adapter`
    implementations.  Register an adapter class once; ``querykit.connect``
    and :class:`~querykit.config.ConnectionConfig` look it up by name.

Usage::

    from querykit.adapters.registry import AdapterFactory

    @AdapterFactory.register("duckdb")
    class DuckDBAdapter(Adapter):
        ...
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, ClassVar

from querykit.adapters.base import Adapter
from querykit.errors import AdapterError

#: Alternative spellings accepted for the built-in adapter names.
ALIASES: dict[str, str] = {
    "postgresql": "postgres",
    "pg": "postgres",
    "sqlite3": "sqlite",
    "pymysql": "mysql",
}


def canonical_name(name: str) -> str:
    """Lower-case ``name`` and resolve known aliases."""
    lowered = name.lower()
    return ALIASES.get(lowered, lowered)


class AdapterFactory:
    """Registry mapping adapter names to :class:`Adapter` classes.

    Example::

        AdapterFactory.register_class("sqlite", SQLiteAdapter)
        adapter = AdapterFactory.create("sqlite", database=":memory:")
    """

    _adapters: ClassVar[dict[str, type[Adapter]]] = {}

    @classmethod
    def register(cls, name: str) -> Callable[[type[Adapter]], type[Adapter]]:
        """Decorator that registers an adapter class under ``name``.

        Args:
            name: The adapter name (e.g. ``"postgres"``).

        Returns:
            A decorator that registers and returns the adapter class.
        """

        def decorator(adapter_cls: type[Adapter]) -> type[Adapter]:
            cls._adapters[canonical_name(name)] = adapter_cls
            return adapter_cls

        return decorator

    @classmethod
    def register_class(cls, name: str, adapter_cls: type[Adapter]) -> None:
        """Register an adapter class without using the decorator form."""
        cls._adapters[canonical_name(name)] = adapter_cls

    @classmethod
    def get(cls, name: str) -> type[Adapter] | None:
        """Return the adapter class for ``name``, or ``None`` if not registered."""
        return cls._adapters.get(canonical_name(name))

    @classmethod
    def create(cls, name: str, **options: Any) -> Adapter:
        """Instantiate the adapter registered for ``name``.

        Args:
            name: The adapter name or one of its aliases.
            **options: Passed through to the adapter constructor.

        Raises:
            AdapterError: If no adapter is registered for ``name``.
        """
        adapter_cls = cls.get(name)
        if adapter_cls is None:
            raise AdapterError(
                f"Unsupported adapter: '{name}'. Registered adapters: {cls.registered_adapters()}."
            )
        return adapter_cls(**options)

    @classmethod
    def registered_adapters(cls) -> list[str]:
        """Return the sorted list of registered adapter names."""
        return sorted(cls._adapters)
