"""
Dialect-aware statement execution facade.

``Database`` pairs a dialect with a ``SqlExecutor``. It opens the fluent
builders, renders statement models into SQL for its dialect and drives the
executor. All failures are raised synchronously from the calling method;
errors raised by the executor propagate unchanged.
"""

from numbers import Number
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    List,
    Mapping,
    Optional,
    Sequence,
    TypeVar,
    Union,
)

from fluent_dml.sql.builders import (
    BatchInsertBuilder,
    BatchUpdateBuilder,
    DeleteFromBuilder,
    RowInsertBuilder,
    RowUpdateBuilder,
)
from fluent_dml.sql.core.parameters import ParameterizedClause, flatten, flatten_named
from fluent_dml.sql.core.partition import explicit_batch_size, partition
from fluent_dml.sql.dialects.base import Dialect, GeneratedKeyStrategy
from fluent_dml.sql.errors import (
    InvalidGeneratedKeyTypeError,
    MissingGeneratedKeyError,
    TooManyRowsError,
)
from fluent_dml.sql.models import BatchInsert, BatchUpdate, DeleteFrom, RowInsert, RowUpdate
from fluent_dml.sql.operations import (
    build_batch_insert_sql,
    build_batch_update_params,
    build_batch_update_sql,
    build_delete_sql,
    build_multi_row_insert_returning_sql,
    build_row_insert_returning_all_sql,
    build_row_insert_returning_sql,
    build_row_insert_sql,
    build_row_update_sql,
)
from fluent_dml.utils.logging import get_logger, redact_bound_parameters

from .executor import SqlExecutor

T = TypeVar("T")
R = TypeVar("R")

structured_logger = get_logger(__name__)


def _first_column(row: Any) -> Any:
    return row[0]


def _scalar(convert: Callable[[Any], T]) -> Callable[[Any], Optional[T]]:
    def mapper(row: Any) -> Optional[T]:
        value = row[0]
        return None if value is None else convert(value)

    return mapper


def _escaped_columns(batch: Union[BatchInsert, BatchUpdate]) -> List[str]:
    """Columns bound through placeholders, in parameter order."""
    return [*batch.escaped_mappings.keys(), *batch.escaped_constants.keys()]


def _single_result(results: Sequence[T]) -> Optional[T]:
    size = len(results)
    if size == 0:
        return None
    if size == 1:
        return results[0]
    raise TooManyRowsError(1, size)


def _require_number(value: Any, row_index: Optional[int] = None) -> Number:
    if value is None:
        raise MissingGeneratedKeyError(row_index)
    if isinstance(value, bool) or not isinstance(value, Number):
        raise InvalidGeneratedKeyTypeError(value)
    return value


class Database:
    """
    Entry point for fluent and direct insert, update, delete and query calls.

    Example:
        >>> db = Database(SqlAlchemyExecutor(engine), PostgreSQLDialect())
        >>> db.delete_from("users").where("id IN (?)", [5, 6, 7])
        3
    """

    def __init__(
        self,
        executor: SqlExecutor,
        dialect: Dialect,
        log_parameters: bool = False,
    ):
        self._executor = executor
        self._dialect = dialect
        self._log_parameters = log_parameters
        self._logger = structured_logger.bind(dialect=dialect.name)

    @property
    def dialect(self) -> Dialect:
        return self._dialect

    @property
    def executor(self) -> SqlExecutor:
        return self._executor

    def _log_statement(
        self,
        event: str,
        sql: str,
        params: Sequence[Any],
        columns: Sequence[str] = (),
        **extra: Any,
    ) -> None:
        fields = dict(extra, sql=sql, param_count=len(params))
        if self._log_parameters:
            fields["parameters"] = redact_bound_parameters(columns, params)
        self._logger.debug(event, **fields)

    def _log_batch(
        self,
        event: str,
        sql: str,
        param_sets: Sequence[Sequence[Any]],
        columns: Sequence[str],
    ) -> None:
        # param_count is per execution; each row runs the same statement.
        fields: Dict[str, Any] = dict(
            sql=sql, param_count=len(param_sets[0]), row_count=len(param_sets)
        )
        if self._log_parameters:
            fields["parameters"] = [
                redact_bound_parameters(columns, params) for params in param_sets
            ]
        self._logger.debug(event, **fields)

    def _bind(
        self, sql: str, args: Sequence[Any], named: Optional[Mapping[str, Any]]
    ) -> ParameterizedClause:
        if named is not None:
            if args:
                raise ValueError("Pass positional arguments or named=..., not both")
            return flatten_named(sql, named)
        return flatten(sql, args)

    # ------------------------------------------------------------------
    # Raw statements
    # ------------------------------------------------------------------

    def execute(self, sql: str) -> None:
        """Execute a statement that takes no parameters and returns nothing."""
        self._log_statement("sql.execute", sql, ())
        self._executor.execute(sql)

    def update(
        self, sql: str, *args: Any, named: Optional[Mapping[str, Any]] = None
    ) -> int:
        """Execute a data-changing statement and return the affected row count."""
        clause = self._bind(sql, args, named)
        self._log_statement("sql.update", clause.sql, clause.parameters)
        return self._executor.execute_update(clause.sql, clause.to_list())

    def query(
        self,
        sql: str,
        row_mapper: Callable[[Any], T],
        *args: Any,
        named: Optional[Mapping[str, Any]] = None,
    ) -> List[T]:
        """Run a query and map every row with ``row_mapper``."""
        clause = self._bind(sql, args, named)
        self._log_statement("sql.query", clause.sql, clause.parameters)
        return self._executor.execute_query(clause.sql, clause.to_list(), row_mapper)

    def query_one(
        self,
        sql: str,
        row_mapper: Callable[[Any], T],
        *args: Any,
        named: Optional[Mapping[str, Any]] = None,
    ) -> Optional[T]:
        """
        Run a query expected to return at most one row.

        Returns:
            The mapped row, or None when the query returns no rows

        Raises:
            TooManyRowsError: If more than one row is returned
        """
        return _single_result(self.query(sql, row_mapper, *args, named=named))

    def query_ints(
        self, sql: str, *args: Any, named: Optional[Mapping[str, Any]] = None
    ) -> List[Optional[int]]:
        return self.query(sql, _scalar(int), *args, named=named)

    def query_floats(
        self, sql: str, *args: Any, named: Optional[Mapping[str, Any]] = None
    ) -> List[Optional[float]]:
        return self.query(sql, _scalar(float), *args, named=named)

    def query_strings(
        self, sql: str, *args: Any, named: Optional[Mapping[str, Any]] = None
    ) -> List[Optional[str]]:
        return self.query(sql, _scalar(str), *args, named=named)

    def query_int(
        self, sql: str, *args: Any, named: Optional[Mapping[str, Any]] = None
    ) -> Optional[int]:
        return _single_result(self.query_ints(sql, *args, named=named))

    def query_float(
        self, sql: str, *args: Any, named: Optional[Mapping[str, Any]] = None
    ) -> Optional[float]:
        return _single_result(self.query_floats(sql, *args, named=named))

    def query_string(
        self, sql: str, *args: Any, named: Optional[Mapping[str, Any]] = None
    ) -> Optional[str]:
        return _single_result(self.query_strings(sql, *args, named=named))

    # ------------------------------------------------------------------
    # Fluent builders
    # ------------------------------------------------------------------

    def insert_into(self, table: str) -> RowInsertBuilder:
        self._logger.debug("sql.builder.opened", api="insert_into", table=table)
        return RowInsertBuilder(self, table)

    def batch_insert_into(self, table: str, rows: Sequence[T]) -> BatchInsertBuilder[T]:
        self._logger.debug(
            "sql.builder.opened",
            api="batch_insert_into",
            table=table,
            strategy=self._dialect.generated_key_strategy.value,
        )
        return BatchInsertBuilder(self, table, rows)

    def update_table(self, table: str) -> RowUpdateBuilder:
        self._logger.debug("sql.builder.opened", api="update_table", table=table)
        return RowUpdateBuilder(self, table)

    def batch_update(self, table: str, rows: Sequence[T]) -> BatchUpdateBuilder[T]:
        self._logger.debug("sql.builder.opened", api="batch_update", table=table)
        return BatchUpdateBuilder(self, table, rows)

    def delete_from(self, table: str) -> DeleteFromBuilder:
        self._logger.debug("sql.builder.opened", api="delete_from", table=table)
        return DeleteFromBuilder(self, table)

    # ------------------------------------------------------------------
    # Statement models
    # ------------------------------------------------------------------

    def insert_row(self, row_insert: RowInsert) -> int:
        clause = build_row_insert_sql(self._dialect, row_insert)
        self._log_statement(
            "sql.insert", clause.sql, clause.parameters, list(row_insert.escaped_values)
        )
        return self._executor.execute_update(clause.sql, clause.to_list())

    def insert_row_returning_key(
        self, row_insert: RowInsert, generated_column: Optional[str] = None
    ) -> Number:
        """
        Insert one row and return its database generated key.

        Implicit-strategy dialects read the key the driver reports; explicit
        ones append a returning clause for ``generated_column`` and run the
        insert as a query.

        Raises:
            ValueError: If ``generated_column`` is missing for an explicit dialect
            MissingGeneratedKeyError: If no key comes back
            InvalidGeneratedKeyTypeError: If the key is not numeric
        """
        if self._dialect.generated_key_strategy is GeneratedKeyStrategy.IMPLICIT:
            clause = build_row_insert_sql(self._dialect, row_insert)
            self._log_statement(
                "sql.insert_returning_key",
                clause.sql,
                clause.parameters,
                list(row_insert.escaped_values),
            )
            key = self._executor.execute_update_returning_generated_key(
                clause.sql, clause.to_list()
            )
            return _require_number(key)

        column = self._require_generated_column(generated_column)
        clause = build_row_insert_returning_sql(self._dialect, row_insert, column)
        self._log_statement(
            "sql.insert_returning_key",
            clause.sql,
            clause.parameters,
            list(row_insert.escaped_values),
        )
        keys = self._executor.execute_query(clause.sql, clause.to_list(), _first_column)
        return _require_number(_single_result(keys))

    def insert_row_returning(
        self, row_insert: RowInsert, row_mapper: Callable[[Any], R]
    ) -> Optional[R]:
        """Insert one row and map the full inserted row (explicit dialects only)."""
        if self._dialect.generated_key_strategy is GeneratedKeyStrategy.IMPLICIT:
            raise NotImplementedError(
                f"{self._dialect.name} cannot return inserted rows; "
                "use insert_returning_key instead"
            )
        clause = build_row_insert_returning_all_sql(self._dialect, row_insert)
        self._log_statement(
            "sql.insert_returning",
            clause.sql,
            clause.parameters,
            list(row_insert.escaped_values),
        )
        return _single_result(
            self._executor.execute_query(clause.sql, clause.to_list(), row_mapper)
        )

    def insert_batch(self, batch: BatchInsert[T]) -> List[int]:
        """Insert every row of the batch; returns one affected count per row."""
        if batch.is_empty():
            self._logger.debug(
                "sql.batch_insert.skipped", reason="empty_rows", table=batch.table
            )
            return []
        sql = build_batch_insert_sql(self._dialect, batch)
        param_sets = [batch.row_parameters(row) for row in batch.rows]
        self._log_batch("sql.batch_insert", sql, param_sets, _escaped_columns(batch))
        return list(self._executor.execute_batch_update(sql, param_sets))

    def insert_batch_returning_keys(
        self, batch: BatchInsert[T], generated_column: Optional[str] = None
    ) -> List[Number]:
        """
        Insert every row of the batch and return generated keys in row order.

        Implicit-strategy dialects batch through the driver and collect one
        reported key per row. Explicit ones issue multi-row VALUES statements
        with a returning clause, split so that no statement exceeds the
        dialect's parameter or row limit.
        """
        if batch.is_empty():
            self._logger.debug(
                "sql.batch_insert.skipped", reason="empty_rows", table=batch.table
            )
            return []
        if self._dialect.generated_key_strategy is GeneratedKeyStrategy.IMPLICIT:
            return self._insert_batch_implicit_keys(batch)
        return self._insert_batch_explicit_keys(
            batch, self._require_generated_column(generated_column)
        )

    def _insert_batch_implicit_keys(self, batch: BatchInsert[T]) -> List[Number]:
        sql = build_batch_insert_sql(self._dialect, batch)
        param_sets = [batch.row_parameters(row) for row in batch.rows]
        self._log_batch(
            "sql.batch_insert_returning_keys", sql, param_sets, _escaped_columns(batch)
        )
        key_rows = list(
            self._executor.execute_batch_update_returning_generated_keys(sql, param_sets)
        )

        keys: List[Number] = []
        for index in range(len(param_sets)):
            if index >= len(key_rows) or not key_rows[index]:
                raise MissingGeneratedKeyError(index)
            first_key = next(iter(key_rows[index].values()))
            keys.append(_require_number(first_key, index))
        return keys

    def _insert_batch_explicit_keys(
        self, batch: BatchInsert[T], column: str
    ) -> List[Number]:
        rows = batch.rows
        batch_size = explicit_batch_size(
            len(rows),
            batch.params_per_row,
            self._dialect.max_parameters_per_query,
            self._dialect.max_rows_per_query,
        )
        partitions = partition(rows, batch_size)
        self._logger.debug(
            "sql.batch_insert.partitioned",
            table=batch.table,
            row_count=len(rows),
            batch_count=len(partitions),
            batch_size=batch_size,
        )

        keys: List[Number] = []
        for part in partitions:
            clause = build_multi_row_insert_returning_sql(
                self._dialect, batch, part, column
            )
            self._log_statement(
                "sql.batch_insert_returning_keys",
                clause.sql,
                clause.parameters,
                _escaped_columns(batch) * len(part),
                row_count=len(part),
            )
            part_keys = self._executor.execute_query(
                clause.sql, clause.to_list(), _first_column
            )
            keys.extend(_require_number(key) for key in part_keys)
        return keys

    def _require_generated_column(self, generated_column: Optional[str]) -> str:
        if not generated_column:
            raise ValueError(
                f"{self._dialect.name} returns generated keys through a returning "
                "clause; pass the generated column name"
            )
        return generated_column

    def update_row(self, row_update: RowUpdate) -> int:
        clause = build_row_update_sql(self._dialect, row_update)
        self._log_statement(
            "sql.update",
            clause.sql,
            clause.parameters,
            list(row_update.escaped_updates),
        )
        return self._executor.execute_update(clause.sql, clause.to_list())

    def update_batch(self, batch: BatchUpdate[T]) -> List[int]:
        """
        Run the UPDATE once per row; returns one affected count per row.

        Not transactional by itself: wrap the call in a transaction when
        partial effects must be rolled back.
        """
        if batch.is_empty():
            self._logger.debug(
                "sql.batch_update.skipped", reason="empty_rows", table=batch.table
            )
            return []
        sql = build_batch_update_sql(self._dialect, batch)
        param_sets = build_batch_update_params(batch)
        self._log_batch("sql.batch_update", sql, param_sets, _escaped_columns(batch))
        return list(self._executor.execute_batch_update(sql, param_sets))

    def delete(self, delete_from: DeleteFrom) -> int:
        clause = build_delete_sql(self._dialect, delete_from)
        self._log_statement("sql.delete", clause.sql, clause.parameters)
        return self._executor.execute_update(clause.sql, clause.to_list())


class TypedQuery(Generic[T]):
    """Queries that always map rows with the same ``row_mapper``."""

    def __init__(self, database: Database, row_mapper: Callable[[Any], T]):
        self.database = database
        self.row_mapper = row_mapper

    def query(
        self, sql: str, *args: Any, named: Optional[Mapping[str, Any]] = None
    ) -> List[T]:
        return self.database.query(sql, self.row_mapper, *args, named=named)

    def query_one(
        self, sql: str, *args: Any, named: Optional[Mapping[str, Any]] = None
    ) -> Optional[T]:
        return self.database.query_one(sql, self.row_mapper, *args, named=named)
