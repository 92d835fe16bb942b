"""SQL dialects and the name registry used by configuration."""

from dataclasses import replace
from typing import Dict, Optional, Type

from ..errors import UnsupportedDialectError
from .base import Dialect, GeneratedKeyStrategy
from .mysql import MySQLDialect
from .postgresql import PostgreSQLDialect
from .sqlite import SQLiteDialect
from .sqlserver import SQLServerDialect

DIALECTS: Dict[str, Type] = {
    MySQLDialect.name: MySQLDialect,
    PostgreSQLDialect.name: PostgreSQLDialect,
    SQLServerDialect.name: SQLServerDialect,
    SQLiteDialect.name: SQLiteDialect,
}

# SQLAlchemy dialect names and common spellings
ALIASES: Dict[str, str] = {
    "mariadb": "mysql",
    "mssql": "sqlserver",
    "postgres": "postgresql",
    "sqlite3": "sqlite",
}


def resolve_dialect_name(name: str) -> str:
    """
    Normalise a dialect name to a registry key.

    Raises:
        UnsupportedDialectError: If the name is not registered
    """
    key = (name or "").strip().lower()
    key = ALIASES.get(key, key)
    if key not in DIALECTS:
        raise UnsupportedDialectError(
            f"Unsupported dialect '{name}'; expected one of {sorted(DIALECTS)}"
        )
    return key


def get_dialect(
    name: str,
    max_parameters_per_query: Optional[int] = None,
    max_rows_per_query: Optional[int] = None,
) -> Dialect:
    """
    Instantiate a dialect by name, optionally overriding its limits.

    Examples:
        >>> get_dialect("mssql").quote("dbo.users")
        '[dbo].[users]'
        >>> get_dialect("postgresql", max_rows_per_query=500).max_rows_per_query
        500
    """
    dialect = DIALECTS[resolve_dialect_name(name)]()
    overrides = {}
    if max_parameters_per_query is not None:
        overrides["max_parameters_per_query"] = max_parameters_per_query
    if max_rows_per_query is not None:
        overrides["max_rows_per_query"] = max_rows_per_query
    return replace(dialect, **overrides) if overrides else dialect


__all__ = [
    "DIALECTS",
    "Dialect",
    "GeneratedKeyStrategy",
    "MySQLDialect",
    "PostgreSQLDialect",
    "SQLServerDialect",
    "SQLiteDialect",
    "get_dialect",
    "resolve_dialect_name",
]
