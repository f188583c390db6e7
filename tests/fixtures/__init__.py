"""Test fixtures: sample schema DDL and seed rows."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

_FIXTURES_DIR = Path(__file__).parent

USERS: list[dict[str, Any]] = [
    {"name": "Alice", "email": "alice@example.com", "age": 30, "country": "US", "status": "active"},
    {"name": "Bob", "email": "bob@example.com", "age": 17, "country": "UK", "status": "active"},
    {"name": "Carol", "email": "carol@example.com", "age": 45, "country": "US", "status": "inactive"},
    {"name": "Dave", "email": "dave@example.com", "age": 70, "country": "DE", "status": "active"},
]

POSTS: list[dict[str, Any]] = [
    {"user_id": 1, "title": "Hello", "content": "First post", "published": 1, "views": 120},
    {"user_id": 1, "title": "Again", "content": "Second post", "published": 0, "views": 5},
    {"user_id": 3, "title": "Notes", "content": "100% done", "published": 1, "views": 42},
]


def load_ddl(target: Literal["sqlite", "postgres"] = "sqlite") -> str:
    """Return the sample DDL SQL string for the given backend.

    Args:
        target: ``'sqlite'`` (default) or ``'postgres'``.

    Returns:
        DDL string ready to execute against the target backend.
    """
    filename = f"ddl_{target}.sql"
    return (_FIXTURES_DIR / filename).read_text()
