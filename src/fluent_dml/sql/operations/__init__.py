"""SQL statement renderers for inserts, updates and deletes."""

from .delete import build_delete_sql
from .insert import (
    build_batch_insert_sql,
    build_insert_head,
    build_multi_row_insert_returning_sql,
    build_row_insert_returning_all_sql,
    build_row_insert_returning_sql,
    build_row_insert_sql,
    build_values_tuple,
)
from .update import (
    build_batch_update_params,
    build_batch_update_sql,
    build_row_update_sql,
    build_set_clause,
)

__all__ = [
    "build_delete_sql",
    "build_batch_insert_sql",
    "build_insert_head",
    "build_multi_row_insert_returning_sql",
    "build_row_insert_returning_all_sql",
    "build_row_insert_returning_sql",
    "build_row_insert_sql",
    "build_values_tuple",
    "build_batch_update_params",
    "build_batch_update_sql",
    "build_row_update_sql",
    "build_set_clause",
]
