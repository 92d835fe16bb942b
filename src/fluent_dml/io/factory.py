"""
Wiring of a ``Database`` from settings.

``create_database`` picks the SQL dialect, applies statement limit overrides
and wraps a SQLAlchemy engine (or an open connection) in a
``SqlAlchemyExecutor``.
"""

from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Connection, Engine

from fluent_dml.config import Settings, get_settings
from fluent_dml.sql.dialects import get_dialect
from fluent_dml.utils.logging import get_logger

from .database import Database
from .executor import SqlAlchemyExecutor

logger = get_logger(__name__)


def create_database(
    settings: Optional[Settings] = None,
    engine: Optional[Engine] = None,
    connection: Optional[Connection] = None,
) -> Database:
    """
    Build a ``Database`` for the configured (or detected) dialect.

    Args:
        settings: Settings to use; defaults to ``get_settings()``
        engine: Engine to execute on; built from ``settings.database_url``
            when neither engine nor connection is given
        connection: Open connection whose transaction the caller owns

    Returns:
        Database wired to a SqlAlchemyExecutor

    Raises:
        ValueError: If no engine, connection or database_url is available
        UnsupportedDialectError: If the dialect is not supported

    Example:
        >>> db = create_database(engine=create_engine("sqlite://"))
        >>> db.dialect.name
        'sqlite'
    """
    settings = settings or get_settings()

    if engine is not None and connection is not None:
        raise ValueError("Pass either engine or connection, not both")

    bind = connection if connection is not None else engine
    if bind is None:
        if not settings.database_url:
            raise ValueError(
                "No engine given and FDML_DATABASE_URL is not configured"
            )
        bind = create_engine(settings.database_url)

    dialect_name = settings.dialect or bind.dialect.name
    dialect = get_dialect(
        dialect_name,
        max_parameters_per_query=settings.max_parameters_per_query,
        max_rows_per_query=settings.max_rows_per_query,
    )
    logger.info(
        "sql.database.created",
        dialect=dialect.name,
        max_parameters_per_query=dialect.max_parameters_per_query,
        max_rows_per_query=dialect.max_rows_per_query,
    )
    return Database(
        SqlAlchemyExecutor(bind),
        dialect,
        log_parameters=settings.log_sql_parameters,
    )
