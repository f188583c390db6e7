"""Database adapters: the execution seam between builders and drivers."""
from querykit.adapters.base import Adapter, Row
from querykit.adapters.mysql import MySQLAdapter
from querykit.adapters.placeholders import ParamStyle, translate_placeholders
from querykit.adapters.postgres import PostgresAdapter
from querykit.adapters.registry import AdapterFactory, canonical_name
from querykit.adapters.sqlalchemy import SQLAlchemyAdapter
from querykit.adapters.sqlite import SQLiteAdapter

__all__ = [
    "Adapter",
    "AdapterFactory",
    "MySQLAdapter",
    "ParamStyle",
    "PostgresAdapter",
    "Row",
    "SQLAlchemyAdapter",
    "SQLiteAdapter",
    "canonical_name",
    "translate_placeholders",
]
