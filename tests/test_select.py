"""Unit tests for SelectQuery rendering."""

from __future__ import annotations

import pytest

from querykit.errors import ConfigurationError, MissingTableError
from querykit.query import CaseExpression, SelectQuery


def _users() -> SelectQuery:
    return SelectQuery("users")


def test_bare_table_selects_star():
    assert _users().to_sql() == "SELECT * FROM users"
    assert _users().bindings == []


def test_from_sets_table():
    assert SelectQuery().from_("users").to_sql() == "SELECT * FROM users"


def test_select_columns_in_call_order():
    q = _users().select("id", "name").select(["email", "age"])
    assert q.to_sql() == "SELECT id, name, email, age FROM users"


def test_select_without_arguments_adds_star():
    assert _users().select().to_sql() == "SELECT * FROM users"


def test_distinct():
    q = _users().select("country").distinct()
    assert q.to_sql() == "SELECT DISTINCT country FROM users"


def test_missing_table_raises():
    with pytest.raises(MissingTableError) as exc_info:
        SelectQuery().select("id").render()
    assert exc_info.value.clause == "FROM"
    assert exc_info.value.statement == "SELECT"


def test_where_chained_with_or():
    q = _users().where("age", ">", 18).or_where("status", "active")
    sql, bindings = q.render()
    assert sql == "SELECT * FROM users WHERE age > ? OR status = ?"
    assert bindings == [18, "active"]


def test_where_in():
    sql, bindings = _users().where_in("id", [1, 2, 3]).render()
    assert sql == "SELECT * FROM users WHERE id IN (?, ?, ?)"
    assert bindings == [1, 2, 3]


def test_where_between():
    sql, bindings = SelectQuery("products").where_between("price", 10, 100).render()
    assert sql == "SELECT * FROM products WHERE price BETWEEN ? AND ?"
    assert bindings == [10, 100]


def test_limit_and_offset():
    assert _users().limit(10).offset(20).to_sql() == "SELECT * FROM users LIMIT 10 OFFSET 20"


def test_take_and_skip_alias_limit_and_offset():
    assert _users().take(5).skip(10).to_sql() == "SELECT * FROM users LIMIT 5 OFFSET 10"


def test_page_computes_offset():
    assert _users().page(3, 15).to_sql() == "SELECT * FROM users LIMIT 15 OFFSET 30"


def test_page_one_has_zero_offset():
    assert _users().page(1).to_sql() == "SELECT * FROM users LIMIT 15 OFFSET 0"


@pytest.mark.parametrize("page_number, per_page", [(0, 10), (1, 0), (-2, 5)])
def test_page_rejects_values_below_one(page_number, per_page):
    with pytest.raises(ConfigurationError):
        _users().page(page_number, per_page)


@pytest.mark.parametrize("value", [-1, 2.5, True, "10"])
def test_limit_rejects_non_natural_values(value):
    with pytest.raises(ConfigurationError) as exc_info:
        _users().limit(value)
    assert exc_info.value.clause == "LIMIT"


def test_limit_zero_is_rendered():
    assert _users().limit(0).to_sql() == "SELECT * FROM users LIMIT 0"


def test_order_by_multiple_columns():
    q = _users().order_by("name").order_by_desc("age").order_by("id", "desc")
    assert q.to_sql() == "SELECT * FROM users ORDER BY name ASC, age DESC, id DESC"


def test_order_by_invalid_direction_raises():
    with pytest.raises(ConfigurationError) as exc_info:
        _users().order_by("name", "sideways")
    assert exc_info.value.clause == "ORDER BY"


def test_cross_join():
    q = _users().cross_join("departments")
    assert q.to_sql() == "SELECT * FROM users CROSS JOIN departments"


def test_join_two_column_form_means_equality():
    q = SelectQuery("orders").join("users", "orders.user_id", "users.id")
    assert q.to_sql() == "SELECT * FROM orders INNER JOIN users ON orders.user_id = users.id"


def test_left_and_right_join_with_operator():
    q = (
        SelectQuery("a")
        .left_join("b", "a.id", "=", "b.a_id")
        .right_join("c", "b.id", "<>", "c.b_id")
    )
    assert q.to_sql() == (
        "SELECT * FROM a LEFT JOIN b ON a.id = b.a_id RIGHT JOIN c ON b.id <> c.b_id"
    )


def test_join_without_second_column_raises():
    with pytest.raises(ConfigurationError) as exc_info:
        SelectQuery("orders").join("users", "orders.user_id")
    assert exc_info.value.clause == "JOIN"


def test_count_aggregate():
    sql, bindings = _users().count().where("active", True).render()
    assert sql == "SELECT COUNT(*) as count FROM users WHERE active = ?"
    assert bindings == [True]


@pytest.mark.parametrize(
    "method, expected",
    [
        ("sum", "SUM(views) as sum"),
        ("avg", "AVG(views) as avg"),
        ("min", "MIN(views) as min"),
        ("max", "MAX(views) as max"),
    ],
)
def test_other_aggregates(method, expected):
    q = getattr(SelectQuery("posts"), method)("views")
    assert q.to_sql() == f"SELECT {expected} FROM posts"


def test_group_by_and_having():
    q = (
        SelectQuery("posts")
        .select("user_id", "COUNT(*) as total")
        .group_by("user_id")
        .having("total", ">", 1)
        .or_having("total", 0)
    )
    sql, bindings = q.render()
    assert sql == (
        "SELECT user_id, COUNT(*) as total FROM posts "
        "GROUP BY user_id HAVING total > ? OR total = ?"
    )
    assert bindings == [1, 0]


def test_complex_query_clause_order():
    q = (
        SelectQuery("orders")
        .select("orders.id", "users.name", "COUNT(items.id) as item_count")
        .join("users", "orders.user_id", "=", "users.id")
        .join("items", "orders.id", "=", "items.order_id")
        .where("orders.status", "completed")
        .where("orders.total", ">", 100)
        .group_by("orders.id", "users.name")
        .having("item_count", ">", 1)
        .order_by("orders.total", "DESC")
        .limit(50)
    )
    sql, bindings = q.render()
    assert sql == (
        "SELECT orders.id, users.name, COUNT(items.id) as item_count FROM orders "
        "INNER JOIN users ON orders.user_id = users.id "
        "INNER JOIN items ON orders.id = items.order_id "
        "WHERE orders.status = ? AND orders.total > ? "
        "GROUP BY orders.id, users.name HAVING item_count > ? "
        "ORDER BY orders.total DESC LIMIT 50"
    )
    assert bindings == ["completed", 100, 1]


def test_bindings_follow_text_order_not_call_order():
    q = _users().having("n", ">", 5).where("age", ">", 18).group_by("age")
    q.select(CaseExpression("status").when("a").then("A").as_("s"))
    sql, bindings = q.render()
    assert sql == (
        "SELECT CASE status WHEN ? THEN ? END AS s FROM users "
        "WHERE age > ? GROUP BY age HAVING n > ?"
    )
    assert bindings == ["a", "A", 18, 5]


def test_select_case_returns_case_builder():
    case = _users().select_case("status")
    assert isinstance(case, CaseExpression)
    assert case.column == "status"


def test_union_and_union_all():
    admins = SelectQuery("admins").select("name").where("level", ">", 2)
    guests = SelectQuery("guests").select("name")
    q = _users().select("name").where("status", "active").union(admins).union_all(guests)
    sql, bindings = q.render()
    assert sql == (
        "SELECT name FROM users WHERE status = ? "
        "UNION SELECT name FROM admins WHERE level > ? "
        "UNION ALL SELECT name FROM guests"
    )
    assert bindings == ["active", 2]


def test_union_with_raw_sql_string():
    q = _users().select("name").union("SELECT name FROM legacy_users")
    assert q.to_sql() == "SELECT name FROM users UNION SELECT name FROM legacy_users"


def test_union_branch_rendered_when_parent_renders():
    branch = SelectQuery("admins").select("name")
    q = _users().select("name").union(branch)
    branch.where("level", 3)
    sql, bindings = q.render()
    assert sql.endswith("UNION SELECT name FROM admins WHERE level = ?")
    assert bindings == [3]


def test_order_and_limit_belong_to_primary_branch():
    q = _users().select("name").order_by("name").limit(5).union(SelectQuery("admins").select("name"))
    assert q.to_sql() == (
        "SELECT name FROM users ORDER BY name ASC LIMIT 5 UNION SELECT name FROM admins"
    )


def test_render_is_idempotent():
    q = (
        _users()
        .where("age", ">", 18)
        .where_in("id", [1, 2])
        .union(SelectQuery("admins").where("level", 1))
    )
    assert q.render() == q.render()
    assert q.bindings == [18, 1, 2, 1]


def test_str_returns_sql_text():
    assert str(_users().where("id", 1)) == "SELECT * FROM users WHERE id = ?"


def test_state_views_are_read_only_copies():
    q = _users().select("id").group_by("age").order_by("id")
    assert q.selects == ("id",)
    assert q.groups == ("age",)
    assert q.orders[0].direction == "ASC"
    assert q.limit_value is None and q.offset_value is None
    assert not q.is_distinct
