"""
SQL UPDATE statement builders.
"""

from typing import Any, Iterable, List, Mapping

from ..core.parameters import ParameterizedClause
from ..dialects.base import Dialect
from ..models import BatchUpdate, RowUpdate


def build_set_clause(
    dialect: Dialect,
    escaped_columns: Iterable[str],
    unescaped: Mapping[str, Any],
) -> str:
    """
    Build the SET list: ``col = ?`` for escaped columns, then ``col = <raw>``.

    Example:
        >>> from fluent_dml.sql.dialects import MySQLDialect
        >>> build_set_clause(MySQLDialect(), ["name"], {"updated_at": "NOW()"})
        '`name` = ?, `updated_at` = NOW()'
    """
    setters: List[str] = [f"{dialect.quote(col)} = ?" for col in escaped_columns]
    setters.extend(f"{dialect.quote(col)} = {raw}" for col, raw in unescaped.items())
    return ", ".join(setters)


def build_row_update_sql(dialect: Dialect, row_update: RowUpdate) -> ParameterizedClause:
    """
    Build a parameterized UPDATE for a single WHERE clause.

    Parameters are the escaped update values in binding order followed by the
    WHERE parameters.
    """
    setters = build_set_clause(
        dialect, row_update.escaped_updates.keys(), row_update.unescaped_updates
    )
    sql = (
        f"UPDATE {dialect.quote(row_update.table)} SET {setters} "
        f"WHERE {row_update.where_clause}"
    )
    return ParameterizedClause(sql, row_update.parameters)


def build_batch_update_sql(dialect: Dialect, batch: BatchUpdate) -> str:
    """Build the UPDATE template executed once per row of a batch update."""
    setters = build_set_clause(
        dialect,
        [*batch.escaped_mappings.keys(), *batch.escaped_constants.keys()],
        batch.unescaped_constants,
    )
    return f"UPDATE {dialect.quote(batch.table)} SET {setters} WHERE {batch.where_clause}"


def build_batch_update_params(batch: BatchUpdate) -> List[List[Any]]:
    """One parameter list per row, in row order."""
    return [batch.row_parameters(row) for row in batch.rows]
