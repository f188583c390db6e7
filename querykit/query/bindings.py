"""Ordered binding accumulator."""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any


@dataclass
class BindingAccumulator:
    """Accumulates positional parameter values during a single render.

    A fresh instance is created per ``render()`` call and threaded through
    every clause renderer, so the resulting list is aligned 1:1 with the
    ``?`` placeholders in the rendered text, left to right.
    """

    values: list[Any] = field(default_factory=list)

    def add(self, value: Any) -> str:
        """Append ``value`` and return the placeholder standing in for it."""
        self.values.append(value)
        return "?"

    def extend(self, values: Iterable[Any]) -> None:
        """Append every value from ``values``, preserving order."""
        self.values.extend(values)

    def __len__(self) -> int:
        return len(self.values)
