"""Connection configuration.

:class:`ConnectionConfig` names an adapter, the options passed to its
constructor, and the render hooks applied before execution.  It is checked
when constructed: an unknown adapter or a missing required option raises
:class:`~querykit.errors.ConnectionConfigError` before any driver is
touched.

Example::

    config = ConnectionConfig(adapter="sqlite", options={"database": "app.db"})
    db = querykit.connect(config)
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from querykit.adapters.registry import AdapterFactory, canonical_name
from querykit.errors import ConnectionConfigError


class ConnectionConfig(BaseModel):
    """Everything needed to open a :class:`~querykit.connection.Connection`.

    Attributes:
        adapter: Registered adapter name.  Aliases such as ``"postgresql"``
            and ``"sqlite3"`` are normalised to their canonical name.
        options: Keyword arguments for the adapter constructor.
        hooks: Names of render hooks, applied in order, registered in
            :class:`~querykit.extensions.HookRegistry`.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    adapter: str
    options: dict[str, Any] = Field(default_factory=dict)
    hooks: list[str] = Field(default_factory=list)

    @field_validator("adapter")
    @classmethod
    def _normalise_adapter(cls, value: str) -> str:
        return canonical_name(value)

    @model_validator(mode="after")
    def _check_adapter_options(self) -> ConnectionConfig:
        adapter_cls = AdapterFactory.get(self.adapter)
        if adapter_cls is None:
            raise ConnectionConfigError(
                f"Unknown adapter '{self.adapter}'. "
                f"Registered adapters: {AdapterFactory.registered_adapters()}."
            )
        missing = adapter_cls.missing_options(self.options)
        if missing:
            raise ConnectionConfigError(
                f"Adapter '{self.adapter}' requires option(s): {', '.join(missing)}.",
                missing=missing,
            )
        return self
