"""
MySQL dialect: backtick quoting, keys reported by the driver.
"""

from dataclasses import dataclass
from typing import ClassVar, Optional

from ..core.identifier import quote_identifier
from .base import GeneratedKeyStrategy


@dataclass(frozen=True)
class MySQLDialect:
    """MySQL / MariaDB dialect implementation."""

    name: ClassVar[str] = "mysql"
    generated_key_strategy: ClassVar[GeneratedKeyStrategy] = GeneratedKeyStrategy.IMPLICIT

    max_parameters_per_query: Optional[int] = 65_535
    max_rows_per_query: Optional[int] = None

    def quote(self, identifier: str) -> str:
        """Quote an identifier using MySQL syntax (backticks)."""
        return quote_identifier(identifier, "`", "`")

    def build_insert_returning(self, head: str, values: str, column: str) -> str:
        raise NotImplementedError(
            "MySQL reports generated keys through the driver; no RETURNING clause"
        )

    def build_insert_returning_all(self, head: str, values: str) -> str:
        raise NotImplementedError("MySQL cannot return inserted rows")
