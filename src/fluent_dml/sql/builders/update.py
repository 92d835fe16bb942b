"""
Fluent builders for row updates and batch updates.
"""

from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Dict,
    Generic,
    List,
    Mapping,
    Sequence,
    TypeVar,
)

from ..core.parameters import flatten
from ..models import BatchUpdate, RowUpdate
from .base import ID_COLUMN, SingleUseBuilder

if TYPE_CHECKING:
    from fluent_dml.io.database import Database

T = TypeVar("T")


class RowUpdateBuilder(SingleUseBuilder):
    """
    Builds and executes ``UPDATE <table> SET ... WHERE ...``.

    The WHERE clause runs through the placeholder flattener, so a collection
    bound to a single ``?`` expands into one placeholder per element.
    """

    def __init__(self, database: "Database", table: str):
        super().__init__(database, table)
        self._escaped_updates: Dict[str, Any] = {}
        self._unescaped_updates: Dict[str, Any] = {}

    def _binding_maps(self):
        return (self._escaped_updates, self._unescaped_updates)

    def set(self, column: str, value: Any) -> "RowUpdateBuilder":
        self._bind(self._escaped_updates, column, value)
        return self

    def set_many(self, changes: Mapping[str, Any]) -> "RowUpdateBuilder":
        for column, value in changes.items():
            self.set(column, value)
        return self

    def set_unescaped(self, column: str, fragment: Any) -> "RowUpdateBuilder":
        self._bind(self._unescaped_updates, column, fragment)
        return self

    def set_unescaped_many(self, changes: Mapping[str, Any]) -> "RowUpdateBuilder":
        for column, fragment in changes.items():
            self.set_unescaped(column, fragment)
        return self

    def build(self, where_clause: str, *where_params: Any) -> RowUpdate:
        where = flatten(where_clause, where_params)
        return RowUpdate(
            self._table,
            self._escaped_updates,
            self._unescaped_updates,
            where.sql,
            where.parameters,
        )

    def where(self, where_clause: str, *where_params: Any) -> int:
        """Execute the UPDATE and return the affected row count."""
        model = self.build(where_clause, *where_params)
        self._consume()
        return self._database.update_row(model)

    def where_id_equals(self, row_id: Any) -> int:
        return self.where(f"{ID_COLUMN} = ?", row_id)

    def where_id_in(self, ids: Sequence[Any]) -> int:
        return self.where(f"{ID_COLUMN} IN (?)", ids)


class BatchUpdateBuilder(SingleUseBuilder, Generic[T]):
    """
    Builds and executes one UPDATE per element of ``rows``.

    The WHERE clause is a per-row template: each ``?`` is fed by the matching
    mapper and is not flattened.
    """

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

    def set(self, column: str, constant: Any) -> "BatchUpdateBuilder[T]":
        self._bind(self._escaped_constants, column, constant)
        return self

    def set_mapped(
        self, column: str, mapper: Callable[[T], Any]
    ) -> "BatchUpdateBuilder[T]":
        self._bind(self._escaped_mappings, column, mapper)
        return self

    def set_unescaped(self, column: str, fragment: Any) -> "BatchUpdateBuilder[T]":
        self._bind(self._unescaped_constants, column, fragment)
        return self

    def build(
        self, where_clause: str, *where_mappers: Callable[[T], Any]
    ) -> BatchUpdate[T]:
        return BatchUpdate(
            self._table,
            self._rows,
            self._escaped_mappings,
            self._escaped_constants,
            self._unescaped_constants,
            where_clause,
            where_mappers,
        )

    def where(self, where_clause: str, *where_mappers: Callable[[T], Any]) -> List[int]:
        """Execute the batch and return the affected count of each row."""
        model = self.build(where_clause, *where_mappers)
        self._consume()
        return self._database.update_batch(model)

    def where_id_equals(self, id_mapper: Callable[[T], Any]) -> List[int]:
        return self.where(f"{ID_COLUMN} = ?", id_mapper)
