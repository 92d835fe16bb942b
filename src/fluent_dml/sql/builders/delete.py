"""
Fluent builder for DELETE statements.
"""

from typing import TYPE_CHECKING, Any, Sequence

from ..core.parameters import flatten
from ..models import DeleteFrom
from .base import ID_COLUMN, SingleUseBuilder

if TYPE_CHECKING:
    from fluent_dml.io.database import Database


class DeleteFromBuilder(SingleUseBuilder):
    """Builds and executes ``DELETE FROM <table> WHERE ...``."""

    def __init__(self, database: "Database", table: str):
        super().__init__(database, table)

    def build(self, where_clause: str, *where_params: Any) -> DeleteFrom:
        where = flatten(where_clause, where_params)
        return DeleteFrom(self._table, where.sql, where.parameters)

    def where(self, where_clause: str, *where_params: Any) -> int:
        """Execute the DELETE and return the affected row count."""
        model = self.build(where_clause, *where_params)
        self._consume()
        return self._database.delete(model)

    def where_id_equals(self, row_id: Any) -> int:
        return self.where(f"{ID_COLUMN} = ?", row_id)

    def where_id_in(self, ids: Sequence[Any]) -> int:
        return self.where(f"{ID_COLUMN} IN (?)", ids)
