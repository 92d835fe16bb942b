"""Fluent builders for inserts, updates and deletes."""

from .delete import DeleteFromBuilder
from .insert import BatchInsertBuilder, RowInsertBuilder
from .update import BatchUpdateBuilder, RowUpdateBuilder

__all__ = [
    "BatchInsertBuilder",
    "BatchUpdateBuilder",
    "DeleteFromBuilder",
    "RowInsertBuilder",
    "RowUpdateBuilder",
]
