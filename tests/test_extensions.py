"""Unit tests for HookRegistry and hook application on a connection."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

import querykit
from querykit.errors import ExtensionError
from querykit.extensions import HookRegistry
from querykit.query.base import RenderedSQL


def _tag(rendered: RenderedSQL) -> RenderedSQL:
    return RenderedSQL(f"/* app */ {rendered.sql}", rendered.bindings)


def _soft_delete(rendered: RenderedSQL) -> RenderedSQL:
    if rendered.sql.startswith("SELECT") and " WHERE " not in rendered.sql:
        return RenderedSQL(f"{rendered.sql} WHERE deleted = ?", [*rendered.bindings, 0])
    return rendered


@pytest.fixture()
def hooks() -> Iterator[None]:
    HookRegistry.register_hook("test.tag", _tag)
    HookRegistry.register_hook("test.soft_delete", _soft_delete)
    yield
    HookRegistry.unregister("test.tag")
    HookRegistry.unregister("test.soft_delete")


def test_register_decorator_and_lookup():
    @HookRegistry.register("test.noop")
    def _noop(rendered: RenderedSQL) -> RenderedSQL:
        return rendered

    try:
        assert HookRegistry.get("test.noop") is _noop
        assert "test.noop" in HookRegistry.registered_hooks()
    finally:
        HookRegistry.unregister("test.noop")
    assert HookRegistry.get("test.noop") is None


def test_resolve_unknown_hook_raises():
    with pytest.raises(ExtensionError) as exc_info:
        HookRegistry.resolve("missing")
    assert "missing" in str(exc_info.value)


def test_hooks_apply_in_order(hooks):
    db = querykit.connect("sqlite", database=":memory:", hooks=["test.soft_delete", "test.tag"])
    rendered = db.render(db.table("items"))
    assert rendered == ("/* app */ SELECT * FROM items WHERE deleted = ?", [0])
    db.close()


def test_hooks_run_on_executed_statements(hooks):
    db = querykit.connect("sqlite", database=":memory:", hooks=["test.soft_delete"])
    db.raw("CREATE TABLE items (id INTEGER PRIMARY KEY, deleted INTEGER)")
    db.execute_insert(db.insert("items").values([{"deleted": 0}, {"deleted": 1}]))
    assert db.get(db.table("items")) == [{"id": 1, "deleted": 0}]
    db.close()


def test_hooks_also_apply_to_raw_sql(hooks):
    db = querykit.connect("sqlite", database=":memory:", hooks=["test.tag"])
    assert db.raw("SELECT ? AS v", 5) == [{"v": 5}]
    db.close()


def test_builder_render_is_unaffected_by_hooks(hooks):
    db = querykit.connect("sqlite", database=":memory:", hooks=["test.tag"])
    assert db.table("items").to_sql() == "SELECT * FROM items"
    db.close()
