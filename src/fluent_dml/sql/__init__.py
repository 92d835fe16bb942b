"""
SQL module: parameter flattening, statement models, dialects and builders.

This module turns fluent column bindings into dialect-correct SQL text plus
an ordered parameter list. Execution is delegated to ``fluent_dml.io``.
"""

from .core.identifier import quote_identifier
from .core.parameters import (
    Container,
    ParameterizedClause,
    Scalar,
    flatten,
    flatten_named,
)
from .core.partition import explicit_batch_size, partition
from .dialects import (
    GeneratedKeyStrategy,
    MySQLDialect,
    PostgreSQLDialect,
    SQLiteDialect,
    SQLServerDialect,
    get_dialect,
)
from .models import BatchInsert, BatchUpdate, DeleteFrom, RowInsert, RowUpdate

__all__ = [
    "quote_identifier",
    "Container",
    "ParameterizedClause",
    "Scalar",
    "flatten",
    "flatten_named",
    "explicit_batch_size",
    "partition",
    "GeneratedKeyStrategy",
    "MySQLDialect",
    "PostgreSQLDialect",
    "SQLiteDialect",
    "SQLServerDialect",
    "get_dialect",
    "BatchInsert",
    "BatchUpdate",
    "DeleteFrom",
    "RowInsert",
    "RowUpdate",
]
