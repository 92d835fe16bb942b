"""
Statement execution capability.

``SqlExecutor`` is the narrow interface the SQL layer drives: every call takes
SQL text using ``?`` placeholders and a positional parameter sequence.
``SqlAlchemyExecutor`` implements it on top of a SQLAlchemy ``Engine`` or
``Connection``, translating ``?`` into the DBAPI driver's paramstyle.
"""

from contextlib import contextmanager
from typing import (
    Any,
    Callable,
    Dict,
    Iterator,
    List,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    Tuple,
    TypeVar,
    Union,
)

from sqlalchemy.engine import Connection, CursorResult, Engine

from fluent_dml.sql.core.parameters import split_on_placeholders
from fluent_dml.sql.errors import ParameterBindingError
from fluent_dml.utils.logging import get_logger

T = TypeVar("T")

logger = get_logger(__name__)

LASTROWID_KEY = "lastrowid"


class SqlExecutor(Protocol):
    """Executes rendered statements; implementations own connections and transactions."""

    def execute(self, sql: str) -> None: ...

    def execute_update(self, sql: str, params: Sequence[Any]) -> int: ...

    def execute_query(
        self, sql: str, params: Sequence[Any], row_mapper: Callable[[Any], T]
    ) -> List[T]: ...

    def execute_batch_update(
        self, sql: str, param_sets: Sequence[Sequence[Any]]
    ) -> List[int]: ...

    def execute_update_returning_generated_key(
        self, sql: str, params: Sequence[Any]
    ) -> Optional[Any]: ...

    def execute_batch_update_returning_generated_keys(
        self, sql: str, param_sets: Sequence[Sequence[Any]]
    ) -> List[Mapping[str, Any]]: ...


def to_driver_sql(
    sql: str, params: Sequence[Any], paramstyle: str
) -> Tuple[str, Union[Tuple[Any, ...], Dict[str, Any]]]:
    """
    Rewrite ``?`` placeholders into a DBAPI paramstyle.

    A ``?`` inside a quoted literal is text, not a placeholder. For the
    ``format`` styles every literal ``%`` is doubled, including in statements
    without parameters, because the driver still applies ``%`` formatting.

    Args:
        sql: SQL text using ``?`` placeholders
        params: Positional parameters
        paramstyle: DBAPI paramstyle reported by the driver

    Returns:
        Tuple of (driver_sql, driver_parameters)

    Raises:
        ParameterBindingError: If placeholders and parameters differ in number
        ValueError: If the paramstyle is unknown

    Examples:
        >>> to_driver_sql("a = ? AND b LIKE 'x%'", [1], "format")
        ("a = %s AND b LIKE 'x%%'", (1,))
        >>> to_driver_sql("a = ? AND b = 'why?'", [1], "numeric")
        ("a = :1 AND b = 'why?'", (1,))
    """
    values = tuple(params)
    chunks = split_on_placeholders(sql)
    if len(chunks) - 1 != len(values):
        raise ParameterBindingError(
            f"Statement has {len(chunks) - 1} placeholders "
            f"but received {len(values)} parameters"
        )

    numbers = range(1, len(values) + 1)
    driver_params: Union[Tuple[Any, ...], Dict[str, Any]] = values
    if paramstyle == "qmark":
        return sql, values
    if paramstyle in ("format", "pyformat"):
        chunks = [chunk.replace("%", "%%") for chunk in chunks]
        markers = ["%s" for _ in numbers]
    elif paramstyle == "numeric":
        markers = [f":{i}" for i in numbers]
    elif paramstyle == "numeric_dollar":
        markers = [f"${i}" for i in numbers]
    elif paramstyle == "named":
        markers = [f":p{i}" for i in numbers]
        driver_params = {f"p{i}": value for i, value in zip(numbers, values)}
    else:
        raise ValueError(f"Unsupported DBAPI paramstyle: {paramstyle}")

    parts = [chunks[0]]
    for marker, chunk in zip(markers, chunks[1:]):
        parts.append(marker)
        parts.append(chunk)
    return "".join(parts), driver_params


class SqlAlchemyExecutor:
    """
    ``SqlExecutor`` backed by SQLAlchemy.

    Given an ``Engine`` every call runs in its own ``engine.begin()`` block
    and commits on success. Given a ``Connection`` statements run on it
    directly and the caller owns the transaction.
    """

    def __init__(self, bind: Union[Engine, Connection]):
        self._bind = bind
        self.paramstyle = bind.dialect.paramstyle
        logger.debug(
            "sql.executor.initialized",
            driver=bind.dialect.driver,
            paramstyle=self.paramstyle,
        )

    @contextmanager
    def _connection(self) -> Iterator[Connection]:
        if isinstance(self._bind, Connection):
            yield self._bind
        else:
            with self._bind.begin() as conn:
                yield conn

    def _run(self, conn: Connection, sql: str, params: Sequence[Any]) -> CursorResult:
        # Always translated: drivers format the statement even with no parameters.
        driver_sql, driver_params = to_driver_sql(sql, params, self.paramstyle)
        return conn.exec_driver_sql(driver_sql, driver_params)

    def execute(self, sql: str) -> None:
        with self._connection() as conn:
            self._run(conn, sql, ())

    def execute_update(self, sql: str, params: Sequence[Any]) -> int:
        with self._connection() as conn:
            return self._run(conn, sql, params).rowcount

    def execute_query(
        self, sql: str, params: Sequence[Any], row_mapper: Callable[[Any], T]
    ) -> List[T]:
        with self._connection() as conn:
            rows = self._run(conn, sql, params).fetchall()
        return [row_mapper(row) for row in rows]

    def execute_batch_update(
        self, sql: str, param_sets: Sequence[Sequence[Any]]
    ) -> List[int]:
        # One execution per row keeps an exact affected count for each row.
        with self._connection() as conn:
            return [self._run(conn, sql, params).rowcount for params in param_sets]

    def execute_update_returning_generated_key(
        self, sql: str, params: Sequence[Any]
    ) -> Optional[Any]:
        with self._connection() as conn:
            return self._run(conn, sql, params).lastrowid

    def execute_batch_update_returning_generated_keys(
        self, sql: str, param_sets: Sequence[Sequence[Any]]
    ) -> List[Mapping[str, Any]]:
        keys: List[Mapping[str, Any]] = []
        with self._connection() as conn:
            for params in param_sets:
                lastrowid = self._run(conn, sql, params).lastrowid
                keys.append({} if lastrowid is None else {LASTROWID_KEY: lastrowid})
        return keys
