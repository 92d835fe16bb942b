"""
SQL Server dialect: bracket quoting and ``OUTPUT INSERTED`` key retrieval.
"""

from dataclasses import dataclass
from typing import ClassVar, Optional

from ..core.identifier import quote_identifier
from .base import GeneratedKeyStrategy


@dataclass(frozen=True)
class SQLServerDialect:
    """Microsoft SQL Server dialect implementation."""

    name: ClassVar[str] = "sqlserver"
    generated_key_strategy: ClassVar[GeneratedKeyStrategy] = GeneratedKeyStrategy.EXPLICIT

    # The server accepts 2100 parameters; two are kept in reserve for the driver.
    max_parameters_per_query: Optional[int] = 2_098
    # A table value constructor allows at most 1000 rows.
    max_rows_per_query: Optional[int] = 999

    def quote(self, identifier: str) -> str:
        """Quote an identifier using SQL Server syntax (square brackets)."""
        return quote_identifier(identifier, "[", "]")

    def build_insert_returning(self, head: str, values: str, column: str) -> str:
        """The OUTPUT clause sits between the column list and VALUES."""
        return f"{head} OUTPUT INSERTED.{self.quote(column)} VALUES {values}"

    def build_insert_returning_all(self, head: str, values: str) -> str:
        return f"{head} OUTPUT INSERTED.* VALUES {values}"
