"""
PostgreSQL-specific SQL dialect implementation.

Provides PostgreSQL identifier quoting, statement limits and the
``RETURNING`` clause used to read back generated values.
"""

from dataclasses import dataclass
from typing import ClassVar, Optional

from ..core.identifier import quote_identifier
from .base import GeneratedKeyStrategy


@dataclass(frozen=True)
class PostgreSQLDialect:
    """PostgreSQL SQL dialect implementation."""

    name: ClassVar[str] = "postgresql"
    generated_key_strategy: ClassVar[GeneratedKeyStrategy] = GeneratedKeyStrategy.EXPLICIT

    # Bind parameters are numbered with a 16-bit counter on the wire.
    max_parameters_per_query: Optional[int] = 65_535
    max_rows_per_query: Optional[int] = 10_000

    def quote(self, identifier: str) -> str:
        """Quote an identifier using PostgreSQL syntax (double quotes)."""
        return quote_identifier(identifier, '"', '"')

    def build_insert_returning(self, head: str, values: str, column: str) -> str:
        """
        Build an INSERT that returns one generated column per inserted row.

        Args:
            head: ``INSERT INTO <table> (<columns>)``
            values: One or more comma separated value tuples
            column: Generated column to return

        Returns:
            INSERT ... VALUES ... RETURNING statement
        """
        return f"{head} VALUES {values} RETURNING {self.quote(column)}"

    def build_insert_returning_all(self, head: str, values: str) -> str:
        """Build an INSERT that returns every column of the inserted row."""
        return f"{head} VALUES {values} RETURNING *"
