"""
fluent_dml: fluent, dialect-aware INSERT / UPDATE / DELETE statements.

Builders collect column bindings, render parameterised SQL for the target
dialect (MySQL, PostgreSQL, SQL Server, SQLite) and hand it to an executor.
Positional ``?`` placeholders bound to a collection expand in place, so
``id IN (?)`` with ``[5, 6, 7]`` becomes ``id IN (?, ?, ?)``.
"""

__version__ = "0.1.0"

from fluent_dml.io import Database, SqlAlchemyExecutor, TypedQuery, create_database
from fluent_dml.sql import flatten, flatten_named, get_dialect

__all__ = [
    "Database",
    "SqlAlchemyExecutor",
    "TypedQuery",
    "create_database",
    "flatten",
    "flatten_named",
    "get_dialect",
]
