"""querykit query layer: fluent builders → (SQL text, bindings)."""
from querykit.query.base import ConditionalQuery, QueryBuilder, Renderable, RenderedSQL
from querykit.query.bindings import BindingAccumulator
from querykit.query.case import CaseExpression
from querykit.query.delete import DeleteQuery
from querykit.query.insert import InsertQuery
from querykit.query.select import SelectQuery
from querykit.query.update import UpdateQuery

__all__ = [
    "BindingAccumulator",
    "CaseExpression",
    "ConditionalQuery",
    "DeleteQuery",
    "InsertQuery",
    "QueryBuilder",
    "Renderable",
    "RenderedSQL",
    "SelectQuery",
    "UpdateQuery",
]
