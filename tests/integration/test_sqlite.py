"""Integration tests: build → execute against a real SQLite in-memory DB.

Covers joins, grouping with HAVING, CASE in the select list, UNION, EXISTS
subqueries, pagination, multi-row inserts and transactions, end to end
through ``querykit.connect``.
"""
from __future__ import annotations

import pytest

from querykit.query import CaseExpression

pytestmark = pytest.mark.integration


def test_join_group_having(db):
    q = (
        db.table("users")
        .select("users.name", "COUNT(posts.id) as post_count", "SUM(posts.views) as views")
        .join("posts", "users.id", "posts.user_id")
        .group_by("users.name")
        .having("post_count", ">=", 1)
        .order_by_desc("views")
    )
    assert db.get(q) == [
        {"name": "Alice", "post_count": 2, "views": 125},
        {"name": "Carol", "post_count": 1, "views": 42},
    ]


def test_left_join_keeps_users_without_posts(db):
    q = (
        db.table("users")
        .select("users.name")
        .left_join("posts", "users.id", "=", "posts.user_id")
        .where_null("posts.id")
        .order_by("users.name")
    )
    assert [r["name"] for r in db.get(q)] == ["Bob", "Dave"]


def test_case_expression_in_select_list(db):
    group = (
        CaseExpression()
        .when("age", "<", 18).then("minor")
        .when("age", "<", 65).then("adult")
        .else_("senior")
        .as_("age_group")
    )
    q = db.table("users").select("name", group).order_by("id")
    assert [(r["name"], r["age_group"]) for r in db.get(q)] == [
        ("Alice", "adult"),
        ("Bob", "minor"),
        ("Carol", "adult"),
        ("Dave", "senior"),
    ]


def test_union_and_union_all(db):
    us = db.table("users").select("country").where("country", "US")
    q = db.table("users").select("country").where("country", "US").union(us)
    assert db.get(q) == [{"country": "US"}]

    q_all = db.table("users").select("country").where("country", "US").union_all(
        db.table("users").select("country").where("country", "US")
    )
    assert len(db.get(q_all)) == 4


def test_where_exists_subquery(db):
    published = (
        db.table("posts")
        .select("1")
        .where_raw("posts.user_id = users.id")
        .where("published", 1)
    )
    q = db.table("users").select("name").where_exists(published).order_by("name")
    assert db.get(q) == [{"name": "Alice"}, {"name": "Carol"}]

    q_not = db.table("users").select("name").where_not_exists(
        db.table("posts").select("1").where_raw("posts.user_id = users.id")
    ).order_by("name")
    assert db.get(q_not) == [{"name": "Bob"}, {"name": "Dave"}]


def test_pagination(db):
    base = lambda: db.table("users").select("id").order_by("id")  # noqa: E731
    assert db.get(base().page(1, 3)) == [{"id": 1}, {"id": 2}, {"id": 3}]
    assert db.get(base().page(2, 3)) == [{"id": 4}]
    assert db.get(base().page(3, 3)) == []


def test_where_in_between_and_raw(db):
    q = (
        db.table("users")
        .select("name")
        .where_in("country", ["US", "DE"])
        .where_between("age", 18, 60)
        .or_where_raw("LOWER(name) = ?", "bob")
        .order_by("name")
    )
    assert [r["name"] for r in db.get(q)] == ["Alice", "Bob", "Carol"]


def test_multi_row_insert_then_distinct(empty_db):
    db = empty_db
    last_id = db.execute_insert(
        db.insert("users").values(
            [
                {"name": "A", "country": "FR"},
                {"name": "B", "country": "FR"},
                {"name": "C", "country": "IT"},
            ]
        )
    )
    assert last_id == 3
    q = db.table("users").select("country").distinct().order_by("country")
    assert db.get(q) == [{"country": "FR"}, {"country": "IT"}]


def test_percent_in_bound_value(db):
    q = db.table("posts").select("title").where("content", "100% done")
    assert db.get(q) == [{"title": "Notes"}]


def test_update_then_delete_in_transaction(db):
    with db.transaction():
        changed = db.execute_update(
            db.update("users").set(status="inactive").where("age", "<", 18)
        )
        authors = db.raw("SELECT DISTINCT user_id FROM posts", mapper=lambda r: r["user_id"])
        removed = db.execute_delete(
            db.delete("users").where("status", "inactive").where_not_in("id", authors)
        )
    assert (changed, removed) == (1, 1)
    assert db.execute_scalar(db.table("users").count()) == 3


def test_failure_rolls_back_every_statement(db):
    with pytest.raises(ZeroDivisionError):
        with db.transaction():
            db.execute_delete(db.delete("posts"))
            db.execute_update(db.update("users").set(age=0))
            1 / 0
    assert db.execute_scalar(db.table("posts").count()) == 3
    assert db.execute_scalar(db.table("users").min("age")) == 17
