"""
Shared plumbing for the fluent builders.
"""

from typing import TYPE_CHECKING, Any, Dict

from ..errors import BuilderConsumedError

if TYPE_CHECKING:
    from fluent_dml.io.database import Database

ID_COLUMN = "id"


class SingleUseBuilder:
    """
    Accumulates column bindings and executes exactly once.

    Binding a column that is already bound replaces the earlier binding, even
    when the earlier binding was of a different kind (constant, mapped or
    unescaped). A terminal call rejected while building the statement model
    leaves the builder usable.
    """

    def __init__(self, database: "Database", table: str):
        self._database = database
        self._table = table
        self._consumed = False

    @property
    def table(self) -> str:
        return self._table

    def _bind(self, target: Dict[str, Any], column: str, value: Any) -> None:
        for bindings in self._binding_maps():
            if bindings is not target:
                bindings.pop(column, None)
        target[column] = value

    def _binding_maps(self):
        return ()

    def _consume(self) -> None:
        if self._consumed:
            raise BuilderConsumedError(
                f"{type(self).__name__} for table '{self._table}' was already executed"
            )
        self._consumed = True
