"""
Dialect capability protocol.

A dialect is a small set of capabilities selected once and handed to the
executing facade: identifier quoting, per-statement limits and the strategy
used to read back generated keys.
"""

from enum import Enum
from typing import Optional, Protocol


class GeneratedKeyStrategy(str, Enum):
    """How a dialect reads back database generated values after an insert."""

    # The driver reports generated keys for a plain INSERT.
    IMPLICIT = "implicit"
    # The INSERT carries a returning/output clause and is run as a query.
    EXPLICIT = "explicit"


class Dialect(Protocol):
    """Protocol for SQL dialects."""

    name: str
    generated_key_strategy: GeneratedKeyStrategy
    max_parameters_per_query: Optional[int]
    max_rows_per_query: Optional[int]

    def quote(self, identifier: str) -> str: ...

    def build_insert_returning(self, head: str, values: str, column: str) -> str: ...

    def build_insert_returning_all(self, head: str, values: str) -> str: ...
