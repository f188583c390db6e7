"""Shared pytest fixtures for querykit unit and integration tests."""
from __future__ import annotations

from collections.abc import Iterator

import pytest

import querykit
from querykit.connection import Connection
from tests.fixtures import POSTS, USERS, load_ddl


@pytest.fixture()
def db() -> Iterator[Connection]:
    """In-memory SQLite connection with the sample schema and seed rows."""
    conn = querykit.connect("sqlite", database=":memory:")
    conn.adapter.connection.executescript(load_ddl("sqlite"))
    conn.execute_insert(conn.insert("users").values(USERS))
    conn.execute_insert(conn.insert("posts").values(POSTS))
    yield conn
    conn.close()


@pytest.fixture()
def empty_db() -> Iterator[Connection]:
    """In-memory SQLite connection with the sample schema and no rows."""
    conn = querykit.connect("sqlite", database=":memory:")
    conn.adapter.connection.executescript(load_ddl("sqlite"))
    yield conn
    conn.close()
