"""
Statement parameter models.

Immutable value objects holding the fully resolved intent of one insert,
update or delete. Column mappings keep insertion order because that order
decides the placeholder order of the rendered SQL.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Generic, List, Mapping, Sequence, Tuple, TypeVar

from .errors import EmptyColumnSetError

T = TypeVar("T")


def _require_table(table: str) -> None:
    if not table or not isinstance(table, str):
        raise ValueError("Table name is required")


def _require_where(where_clause: str) -> None:
    if not isinstance(where_clause, str) or not where_clause.strip():
        raise ValueError(
            "WHERE clause is required; pass an always-true predicate such as '1 = 1'"
        )


def _freeze(mapping: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class RowInsert:
    """A single row insert."""

    table: str
    escaped_values: Mapping[str, Any] = field(default_factory=dict)
    unescaped_values: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _require_table(self.table)
        object.__setattr__(self, "escaped_values", _freeze(self.escaped_values))
        object.__setattr__(self, "unescaped_values", _freeze(self.unescaped_values))
        if not self.escaped_values and not self.unescaped_values:
            raise EmptyColumnSetError("Row insertion must have at least one value")

    @property
    def parameters(self) -> List[Any]:
        return list(self.escaped_values.values())


@dataclass(frozen=True)
class BatchInsert(Generic[T]):
    """
    Insert of many rows sharing one column layout.

    Mapped columns derive their value from each row, escaped constants bind
    the same value for every row, and unescaped constants are inlined as raw
    SQL. An empty ``rows`` sequence is valid and means nothing is inserted.
    """

    table: str
    rows: Sequence[T]
    escaped_mappings: Mapping[str, Callable[[T], Any]] = field(default_factory=dict)
    escaped_constants: Mapping[str, Any] = field(default_factory=dict)
    unescaped_constants: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _require_table(self.table)
        if self.rows is None:
            raise ValueError("Rows are required (use an empty list for no rows)")
        object.__setattr__(self, "rows", tuple(self.rows))
        object.__setattr__(self, "escaped_mappings", _freeze(self.escaped_mappings))
        object.__setattr__(self, "escaped_constants", _freeze(self.escaped_constants))
        object.__setattr__(
            self, "unescaped_constants", _freeze(self.unescaped_constants)
        )
        if not (
            self.escaped_mappings or self.escaped_constants or self.unescaped_constants
        ):
            raise EmptyColumnSetError("Must insert at least one column")

    @property
    def columns(self) -> List[str]:
        return [
            *self.escaped_mappings.keys(),
            *self.escaped_constants.keys(),
            *self.unescaped_constants.keys(),
        ]

    @property
    def params_per_row(self) -> int:
        return len(self.escaped_mappings) + len(self.escaped_constants)

    def is_empty(self) -> bool:
        return not self.rows

    def row_parameters(self, row: T) -> List[Any]:
        """Mapped values (binding order) followed by escaped constants."""
        params = [mapper(row) for mapper in self.escaped_mappings.values()]
        params.extend(self.escaped_constants.values())
        return params


@dataclass(frozen=True)
class RowUpdate:
    """An update of the rows matched by one WHERE clause."""

    table: str
    escaped_updates: Mapping[str, Any]
    unescaped_updates: Mapping[str, Any]
    where_clause: str
    where_params: Tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        _require_table(self.table)
        _require_where(self.where_clause)
        object.__setattr__(self, "escaped_updates", _freeze(self.escaped_updates))
        object.__setattr__(self, "unescaped_updates", _freeze(self.unescaped_updates))
        object.__setattr__(self, "where_params", tuple(self.where_params))
        if not self.escaped_updates and not self.unescaped_updates:
            raise EmptyColumnSetError("At least one column update must be provided")

    @property
    def parameters(self) -> List[Any]:
        """Escaped update values followed by the WHERE parameters."""
        return [*self.escaped_updates.values(), *self.where_params]


@dataclass(frozen=True)
class BatchUpdate(Generic[T]):
    """
    One UPDATE statement executed once per row.

    The WHERE clause is a shared template; ``where_mappers`` extract its
    parameters from each row.
    """

    table: str
    rows: Sequence[T]
    escaped_mappings: Mapping[str, Callable[[T], Any]]
    escaped_constants: Mapping[str, Any]
    unescaped_constants: Mapping[str, Any]
    where_clause: str
    where_mappers: Tuple[Callable[[T], Any], ...] = ()

    def __post_init__(self) -> None:
        _require_table(self.table)
        _require_where(self.where_clause)
        if self.rows is None:
            raise ValueError("Rows are required (use an empty list for no rows)")
        object.__setattr__(self, "rows", tuple(self.rows))
        object.__setattr__(self, "escaped_mappings", _freeze(self.escaped_mappings))
        object.__setattr__(self, "escaped_constants", _freeze(self.escaped_constants))
        object.__setattr__(
            self, "unescaped_constants", _freeze(self.unescaped_constants)
        )
        object.__setattr__(self, "where_mappers", tuple(self.where_mappers))
        if not (
            self.escaped_mappings or self.escaped_constants or self.unescaped_constants
        ):
            raise EmptyColumnSetError("Must update at least one column")

    @property
    def param_count(self) -> int:
        return (
            len(self.escaped_mappings)
            + len(self.escaped_constants)
            + len(self.where_mappers)
        )

    def is_empty(self) -> bool:
        return not self.rows

    def row_parameters(self, row: T) -> List[Any]:
        """Mapped values, then escaped constants, then WHERE values for one row."""
        params = [mapper(row) for mapper in self.escaped_mappings.values()]
        params.extend(self.escaped_constants.values())
        params.extend(mapper(row) for mapper in self.where_mappers)
        return params


@dataclass(frozen=True)
class DeleteFrom:
    """A delete of the rows matched by one WHERE clause."""

    table: str
    where_clause: str
    where_params: Tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        _require_table(self.table)
        _require_where(self.where_clause)
        object.__setattr__(self, "where_params", tuple(self.where_params))
