"""Row mappers: turn result rows (dicts) into application objects.

Any callable ``(row) -> object`` is a valid mapper.  Two ready-made ones
cover the common shapes of model classes:

``ConstructorMapper``
    Calls the factory with the row as keyword arguments
    (dataclasses, pydantic models, attrs classes).

``SetterMapper``
    Calls the factory with no arguments, then assigns each column as an
    attribute.  Columns with no matching attribute are skipped.
"""
from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")

#: Type alias for a row mapper.
RowMapper = Callable[[Mapping[str, Any]], Any]


@dataclass(frozen=True)
class ConstructorMapper(Generic[T]):
    """Build objects by calling ``factory(**row)``.

    Args:
        factory: Class or callable producing the object.
        unpack: When ``False`` the row dict is passed as a single positional
            argument instead.
    """

    factory: Callable[..., T]
    unpack: bool = True

    def __call__(self, row: Mapping[str, Any]) -> T:
        if self.unpack:
            return self.factory(**row)
        return self.factory(dict(row))


@dataclass(frozen=True)
class SetterMapper(Generic[T]):
    """Build objects by calling ``factory()`` then ``setattr`` per column.

    Args:
        factory: Zero-argument class or callable.
        fields: Restrict assignment to these columns.  When omitted, only
            columns the fresh instance already has an attribute for are set.
    """

    factory: Callable[[], T]
    fields: Iterable[str] | None = None

    def __call__(self, row: Mapping[str, Any]) -> T:
        instance = self.factory()
        allowed = set(self.fields) if self.fields is not None else None
        for column, value in row.items():
            if allowed is not None:
                if column in allowed:
                    setattr(instance, column, value)
            elif hasattr(instance, column):
                setattr(instance, column, value)
        return instance


def map_rows(rows: Iterable[Mapping[str, Any]], mapper: RowMapper | None) -> list[Any]:
    """Apply ``mapper`` to each row; rows are returned as-is when it is ``None``."""
    if mapper is None:
        return list(rows)
    return [mapper(row) for row in rows]
