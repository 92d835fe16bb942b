"""
SQL DELETE statement builder.
"""

from ..core.parameters import ParameterizedClause
from ..dialects.base import Dialect
from ..models import DeleteFrom


def build_delete_sql(dialect: Dialect, delete_from: DeleteFrom) -> ParameterizedClause:
    """
    Build ``DELETE FROM <table> WHERE <clause>``.

    Example:
        >>> from fluent_dml.sql.dialects import MySQLDialect
        >>> build_delete_sql(MySQLDialect(), DeleteFrom("users", "id = ?", (1,))).sql
        'DELETE FROM `users` WHERE id = ?'
    """
    sql = f"DELETE FROM {dialect.quote(delete_from.table)} WHERE {delete_from.where_clause}"
    return ParameterizedClause(sql, delete_from.where_params)
