"""
I/O module: statement execution against a database.

``Database`` renders statements for a dialect and drives a ``SqlExecutor``;
``create_database`` wires both from settings.
"""

from .database import Database, TypedQuery
from .executor import SqlAlchemyExecutor, SqlExecutor, to_driver_sql
from .factory import create_database

__all__ = [
    "Database",
    "TypedQuery",
    "SqlAlchemyExecutor",
    "SqlExecutor",
    "to_driver_sql",
    "create_database",
]
