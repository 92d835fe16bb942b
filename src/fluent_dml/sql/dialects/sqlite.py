"""
SQLite dialect: double-quote identifiers, keys read from ``lastrowid``.
"""

from dataclasses import dataclass
from typing import ClassVar, Optional

from ..core.identifier import quote_identifier
from .base import GeneratedKeyStrategy


@dataclass(frozen=True)
class SQLiteDialect:
    """SQLite dialect implementation."""

    name: ClassVar[str] = "sqlite"
    generated_key_strategy: ClassVar[GeneratedKeyStrategy] = GeneratedKeyStrategy.IMPLICIT

    # SQLITE_MAX_VARIABLE_NUMBER default since 3.32.
    max_parameters_per_query: Optional[int] = 32_766
    max_rows_per_query: Optional[int] = None

    def quote(self, identifier: str) -> str:
        return quote_identifier(identifier, '"', '"')

    def build_insert_returning(self, head: str, values: str, column: str) -> str:
        raise NotImplementedError(
            "SQLite keys are read from the cursor's lastrowid; no RETURNING clause"
        )

    def build_insert_returning_all(self, head: str, values: str) -> str:
        raise NotImplementedError("SQLite rows are not returned by this dialect")
