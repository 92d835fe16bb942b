"""
Fluent builders for single row and batch inserts.

Example:
    >>> new_id = (
    ...     db.insert_into("users")
    ...     .value("name", "Ada")
    ...     .value_unescaped("created_at", "CURRENT_TIMESTAMP")
    ...     .insert_returning_int("id")
    ... )
"""

from numbers import Number
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Dict,
    Generic,
    List,
    Optional,
    Sequence,
    TypeVar,
)

from ..models import BatchInsert, RowInsert
from .base import SingleUseBuilder

if TYPE_CHECKING:
    from fluent_dml.io.database import Database

T = TypeVar("T")
R = TypeVar("R")


class RowInsertBuilder(SingleUseBuilder):
    """Builds and executes a single row INSERT."""

    def __init__(self, database: "Database", table: str):
        super().__init__(database, table)
        self._escaped_values: Dict[str, Any] = {}
        self._unescaped_values: Dict[str, Any] = {}

    def _binding_maps(self):
        return (self._escaped_values, self._unescaped_values)

    def value(self, column: str, value: Any) -> "RowInsertBuilder":
        """Bind ``column`` to a parameterized value."""
        self._bind(self._escaped_values, column, value)
        return self

    def value_unescaped(self, column: str, fragment: Any) -> "RowInsertBuilder":
        """Bind ``column`` to raw SQL text, inlined verbatim."""
        self._bind(self._unescaped_values, column, fragment)
        return self

    def build(self) -> RowInsert:
        return RowInsert(self._table, self._escaped_values, self._unescaped_values)

    def insert(self) -> int:
        """Execute the INSERT and return the affected row count."""
        model = self.build()
        self._consume()
        return self._database.insert_row(model)

    def insert_returning_key(self, generated_column: Optional[str] = None) -> Number:
        """
        Execute the INSERT and return the generated key.

        ``generated_column`` is required by dialects that read keys through a
        returning clause and ignored by dialects whose driver reports them.
        """
        model = self.build()
        self._consume()
        return self._database.insert_row_returning_key(model, generated_column)

    def insert_returning_int(self, generated_column: Optional[str] = None) -> int:
        return int(self.insert_returning_key(generated_column))

    def insert_returning(self, row_mapper: Callable[[Any], R]) -> Optional[R]:
        """Execute the INSERT and map the full inserted row."""
        model = self.build()
        self._consume()
        return self._database.insert_row_returning(model, row_mapper)


class BatchInsertBuilder(SingleUseBuilder, Generic[T]):
    """Builds and executes an INSERT for every element of ``rows``."""

    def __init__(self, database: "Database", table: str, rows: Sequence[T]):
        super().__init__(database, table)
        self._rows = rows
        self._escaped_mappings: Dict[str, Callable[[T], Any]] = {}
        self._escaped_constants: Dict[str, Any] = {}
        self._unescaped_constants: Dict[str, Any] = {}

    def _binding_maps(self):
        return (
            self._escaped_mappings,
            self._escaped_constants,
            self._unescaped_constants,
        )

    def value(self, column: str, constant: Any) -> "BatchInsertBuilder[T]":
        """Bind ``column`` to the same parameterized value for every row."""
        self._bind(self._escaped_constants, column, constant)
        return self

    def value_mapped(
        self, column: str, mapper: Callable[[T], Any]
    ) -> "BatchInsertBuilder[T]":
        """Bind ``column`` to a value derived from each row."""
        self._bind(self._escaped_mappings, column, mapper)
        return self

    def value_unescaped(self, column: str, fragment: Any) -> "BatchInsertBuilder[T]":
        """Bind ``column`` to raw SQL text, inlined verbatim for every row."""
        self._bind(self._unescaped_constants, column, fragment)
        return self

    def build(self) -> BatchInsert[T]:
        return BatchInsert(
            self._table,
            self._rows,
            self._escaped_mappings,
            self._escaped_constants,
            self._unescaped_constants,
        )

    def insert(self) -> List[int]:
        """Execute the batch and return the affected count of each row."""
        model = self.build()
        self._consume()
        return self._database.insert_batch(model)

    def insert_returning_keys(
        self, generated_column: Optional[str] = None
    ) -> List[Number]:
        """Execute the batch and return one generated key per row, in row order."""
        model = self.build()
        self._consume()
        return self._database.insert_batch_returning_keys(model, generated_column)

    def insert_returning_ints(self, generated_column: Optional[str] = None) -> List[int]:
        return [int(key) for key in self.insert_returning_keys(generated_column)]
