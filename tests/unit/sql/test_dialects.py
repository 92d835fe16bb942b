"""
Unit tests for the dialect registry and per-dialect capabilities.
"""

import pytest

from fluent_dml.sql.dialects import (
    GeneratedKeyStrategy,
    MySQLDialect,
    PostgreSQLDialect,
    SQLiteDialect,
    SQLServerDialect,
    get_dialect,
    resolve_dialect_name,
)
from fluent_dml.sql.errors import UnsupportedDialectError

HEAD = "INSERT INTO t (a)"


class TestRegistry:
    """Tests for get_dialect and resolve_dialect_name."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("mysql", "mysql"),
            ("mariadb", "mysql"),
            ("postgres", "postgresql"),
            ("PostgreSQL", "postgresql"),
            ("mssql", "sqlserver"),
            (" sqlite ", "sqlite"),
        ],
    )
    def test_aliases(self, name, expected):
        assert resolve_dialect_name(name) == expected
        assert get_dialect(name).name == expected

    def test_unknown_dialect_raises(self):
        with pytest.raises(UnsupportedDialectError, match="oracle"):
            get_dialect("oracle")

    def test_limit_overrides(self):
        dialect = get_dialect("sqlserver", max_parameters_per_query=100, max_rows_per_query=10)
        assert dialect.max_parameters_per_query == 100
        assert dialect.max_rows_per_query == 10
        assert SQLServerDialect().max_parameters_per_query == 2098


class TestCapabilities:
    """Limits and generated key strategies."""

    def test_postgresql(self):
        dialect = PostgreSQLDialect()
        assert dialect.generated_key_strategy is GeneratedKeyStrategy.EXPLICIT
        assert dialect.max_parameters_per_query == 65_535
        assert dialect.max_rows_per_query == 10_000

    def test_sqlserver(self):
        dialect = SQLServerDialect()
        assert dialect.generated_key_strategy is GeneratedKeyStrategy.EXPLICIT
        assert dialect.max_parameters_per_query == 2098
        assert dialect.max_rows_per_query == 999

    @pytest.mark.parametrize("dialect", [MySQLDialect(), SQLiteDialect()])
    def test_implicit_dialects(self, dialect):
        assert dialect.generated_key_strategy is GeneratedKeyStrategy.IMPLICIT
        assert dialect.max_rows_per_query is None


class TestReturningClauses:
    """Returning clauses for explicit-strategy dialects."""

    def test_postgresql_returning(self):
        sql = PostgreSQLDialect().build_insert_returning(HEAD, "(?)", "id")
        assert sql == 'INSERT INTO t (a) VALUES (?) RETURNING "id"'

    def test_postgresql_returning_all(self):
        sql = PostgreSQLDialect().build_insert_returning_all(HEAD, "(?)")
        assert sql == "INSERT INTO t (a) VALUES (?) RETURNING *"

    def test_sqlserver_output_precedes_values(self):
        sql = SQLServerDialect().build_insert_returning(HEAD, "(?), (?)", "id")
        assert sql == "INSERT INTO t (a) OUTPUT INSERTED.[id] VALUES (?), (?)"

    def test_sqlserver_output_all(self):
        sql = SQLServerDialect().build_insert_returning_all(HEAD, "(?)")
        assert sql == "INSERT INTO t (a) OUTPUT INSERTED.* VALUES (?)"

    @pytest.mark.parametrize("dialect", [MySQLDialect(), SQLiteDialect()])
    def test_implicit_dialects_have_no_returning_clause(self, dialect):
        with pytest.raises(NotImplementedError):
            dialect.build_insert_returning(HEAD, "(?)", "id")
