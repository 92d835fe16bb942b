"""Shared pytest fixtures for the fluent_dml test suite."""

from unittest.mock import MagicMock

import pytest

from fluent_dml.config import get_settings
from fluent_dml.io.database import Database
from fluent_dml.sql.dialects import MySQLDialect, PostgreSQLDialect, SQLServerDialect


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Every test sees settings built from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def executor():
    """Stand-in for the SqlExecutor capability."""
    return MagicMock()


@pytest.fixture
def mysql_db(executor):
    return Database(executor, MySQLDialect())


@pytest.fixture
def postgres_db(executor):
    return Database(executor, PostgreSQLDialect())


@pytest.fixture
def sqlserver_db(executor):
    return Database(executor, SQLServerDialect())
