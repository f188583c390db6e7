"""Render hooks.

A render hook receives the :class:`~querykit.query.base.RenderedSQL` produced
by a builder and returns a (possibly rewritten) one.  Hooks are registered
by name and attached to a connection through
:class:`~querykit.config.ConnectionConfig` ``hooks``; the connection applies
them, in order, to every statement it executes.

A hook must keep the number of ``?`` placeholders equal to the number of
bindings.

Example::

    @HookRegistry.register("tag")
    def _tag(rendered: RenderedSQL) -> RenderedSQL:
        return RenderedSQL(f"/* app */ {rendered.sql}", rendered.bindings)
"""
from __future__ import annotations

from collections.abc import Callable
from typing import ClassVar

from querykit.errors import ExtensionError
from querykit.query.base import RenderedSQL

#: Type alias for a render hook.
RenderHook = Callable[[RenderedSQL], RenderedSQL]


class HookRegistry:
    """Registry mapping hook names to :data:`RenderHook` callables."""

    _hooks: ClassVar[dict[str, RenderHook]] = {}

    @classmethod
    def register(cls, name: str) -> Callable[[RenderHook], RenderHook]:
        """Decorator that registers a hook under ``name``."""

        def decorator(hook: RenderHook) -> RenderHook:
            cls._hooks[name] = hook
            return hook

        return decorator

    @classmethod
    def register_hook(cls, name: str, hook: RenderHook) -> None:
        """Register a hook without using the decorator form."""
        cls._hooks[name] = hook

    @classmethod
    def unregister(cls, name: str) -> None:
        """Remove ``name`` from the registry if present."""
        cls._hooks.pop(name, None)

    @classmethod
    def get(cls, name: str) -> RenderHook | None:
        """Return the hook for ``name``, or ``None`` if not registered."""
        return cls._hooks.get(name)

    @classmethod
    def resolve(cls, name: str) -> RenderHook:
        """Return the hook for ``name``.

        Raises:
            ExtensionError: If no hook is registered for ``name``.
        """
        hook = cls._hooks.get(name)
        if hook is None:
            raise ExtensionError(
                f"Unknown render hook: '{name}'. Registered hooks: {cls.registered_hooks()}."
            )
        return hook

    @classmethod
    def registered_hooks(cls) -> list[str]:
        """Return the sorted list of registered hook names."""
        return sorted(cls._hooks)
