"""
SQL INSERT statement builders.

Column order is always: escaped columns (mapped, then constant) followed by
unescaped columns. Escaped columns render a ``?`` placeholder; unescaped
columns inline their raw SQL text verbatim. Raw fragments are trusted caller
input and are never sanitised.
"""

from typing import Any, Iterable, List, Sequence

from ..core.parameters import ParameterizedClause
from ..dialects.base import Dialect
from ..models import BatchInsert, RowInsert


def build_insert_head(dialect: Dialect, table: str, columns: Iterable[str]) -> str:
    """
    Build ``INSERT INTO <table> (<columns>)`` with dialect quoting.

    Example:
        >>> from fluent_dml.sql.dialects import MySQLDialect
        >>> build_insert_head(MySQLDialect(), "users", ["a", "b"])
        'INSERT INTO `users` (`a`, `b`)'
    """
    quoted_cols = ", ".join(dialect.quote(col) for col in columns)
    return f"INSERT INTO {dialect.quote(table)} ({quoted_cols})"


def build_values_tuple(param_count: int, raw_fragments: Iterable[Any]) -> str:
    """
    Build one VALUES tuple: ``param_count`` placeholders then raw fragments.

    Example:
        >>> build_values_tuple(2, ["NOW()"])
        '(?, ?, NOW())'
    """
    values: List[str] = ["?"] * param_count
    values.extend(str(fragment) for fragment in raw_fragments)
    return "(" + ", ".join(values) + ")"


def _row_insert_parts(dialect: Dialect, row_insert: RowInsert):
    head = build_insert_head(
        dialect,
        row_insert.table,
        [*row_insert.escaped_values.keys(), *row_insert.unescaped_values.keys()],
    )
    values = build_values_tuple(
        len(row_insert.escaped_values), row_insert.unescaped_values.values()
    )
    return head, values


def build_row_insert_sql(dialect: Dialect, row_insert: RowInsert) -> ParameterizedClause:
    """
    Build a parameterized single row INSERT.

    Example:
        >>> from fluent_dml.sql.dialects import SQLServerDialect
        >>> clause = build_row_insert_sql(
        ...     SQLServerDialect(), RowInsert("users", {"a": 1, "b": 2})
        ... )
        >>> clause.sql
        'INSERT INTO [users] ([a], [b]) VALUES (?, ?)'
        >>> clause.parameters
        (1, 2)
    """
    head, values = _row_insert_parts(dialect, row_insert)
    return ParameterizedClause(f"{head} VALUES {values}", row_insert.parameters)


def build_row_insert_returning_sql(
    dialect: Dialect, row_insert: RowInsert, column: str
) -> ParameterizedClause:
    """Single row INSERT carrying the dialect's returning clause for ``column``."""
    head, values = _row_insert_parts(dialect, row_insert)
    return ParameterizedClause(
        dialect.build_insert_returning(head, values, column), row_insert.parameters
    )


def build_row_insert_returning_all_sql(
    dialect: Dialect, row_insert: RowInsert
) -> ParameterizedClause:
    """Single row INSERT returning every column of the inserted row."""
    head, values = _row_insert_parts(dialect, row_insert)
    return ParameterizedClause(
        dialect.build_insert_returning_all(head, values), row_insert.parameters
    )


def build_batch_insert_head(dialect: Dialect, batch: BatchInsert) -> str:
    return build_insert_head(dialect, batch.table, batch.columns)


def build_batch_values_tuple(batch: BatchInsert) -> str:
    return build_values_tuple(batch.params_per_row, batch.unescaped_constants.values())


def build_batch_insert_sql(dialect: Dialect, batch: BatchInsert) -> str:
    """
    Build the INSERT template executed once per row of a batch.

    Returns:
        INSERT SQL with one VALUES tuple
    """
    head = build_batch_insert_head(dialect, batch)
    return f"{head} VALUES {build_batch_values_tuple(batch)}"


def build_multi_row_insert_returning_sql(
    dialect: Dialect, batch: BatchInsert, rows: Sequence[Any], column: str
) -> ParameterizedClause:
    """
    Build one multi-row INSERT returning ``column`` for every row in ``rows``.

    Parameters are flattened in row-major order, matching the repeated VALUES
    tuples.
    """
    values_tuple = build_batch_values_tuple(batch)
    values = ", ".join([values_tuple] * len(rows))
    params: List[Any] = []
    for row in rows:
        params.extend(batch.row_parameters(row))

    expected = len(rows) * batch.params_per_row
    if len(params) != expected:
        raise AssertionError(f"Expected {expected} parameters, built {len(params)}")

    head = build_batch_insert_head(dialect, batch)
    return ParameterizedClause(
        dialect.build_insert_returning(head, values, column), params
    )
