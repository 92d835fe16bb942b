"""
Unit tests for INSERT / UPDATE / DELETE rendering.
"""

from fluent_dml.sql.dialects import MySQLDialect, PostgreSQLDialect, SQLServerDialect
from fluent_dml.sql.models import BatchInsert, BatchUpdate, DeleteFrom, RowInsert, RowUpdate
from fluent_dml.sql.operations import (
    build_batch_insert_sql,
    build_batch_update_params,
    build_batch_update_sql,
    build_delete_sql,
    build_multi_row_insert_returning_sql,
    build_row_insert_returning_sql,
    build_row_insert_sql,
    build_row_update_sql,
)

MYSQL = MySQLDialect()
POSTGRES = PostgreSQLDialect()
SQLSERVER = SQLServerDialect()


class TestInsertRendering:
    """Tests for INSERT rendering."""

    def test_row_insert(self):
        """A row INSERT renders one placeholder per escaped value."""
        clause = build_row_insert_sql(MYSQL, RowInsert("t", {"a": 1, "b": 2}))
        assert clause.sql == "INSERT INTO `t` (`a`, `b`) VALUES (?, ?)"
        assert clause.to_list() == [1, 2]

    def test_unescaped_values_follow_escaped(self):
        """Unescaped fragments are rendered after the escaped columns."""
        clause = build_row_insert_sql(
            POSTGRES, RowInsert("t", {"a": 1}, {"created_at": "NOW()"})
        )
        assert clause.sql == 'INSERT INTO "t" ("a", "created_at") VALUES (?, NOW())'
        assert clause.parameters == (1,)

    def test_row_insert_returning_sqlserver(self):
        """SQL Server reads the generated key through an OUTPUT clause."""
        clause = build_row_insert_returning_sql(
            SQLSERVER, RowInsert("dbo.users", {"name": "Ada"}), "id"
        )
        assert clause.sql == (
            "INSERT INTO [dbo].[users] ([name]) OUTPUT INSERTED.[id] VALUES (?)"
        )

    def test_batch_insert_template(self):
        """The batch template holds placeholders for escaped columns only."""
        batch = BatchInsert(
            "t",
            [1],
            escaped_mappings={"a": lambda r: r},
            escaped_constants={"b": "k"},
            unescaped_constants={"c": "NOW()"},
        )
        assert build_batch_insert_sql(MYSQL, batch) == (
            "INSERT INTO `t` (`a`, `b`, `c`) VALUES (?, ?, NOW())"
        )

    def test_multi_row_returning(self):
        """A multi-row INSERT repeats the value tuple and appends RETURNING."""
        rows = [{"n": "a"}, {"n": "b"}]
        batch = BatchInsert(
            "users",
            rows,
            escaped_mappings={"name": lambda r: r["n"]},
            escaped_constants={"kind": "x"},
        )
        clause = build_multi_row_insert_returning_sql(POSTGRES, batch, rows, "id")
        assert clause.sql == (
            'INSERT INTO "users" ("name", "kind") VALUES (?, ?), (?, ?) RETURNING "id"'
        )
        assert clause.to_list() == ["a", "x", "b", "x"]


class TestUpdateRendering:
    """Tests for UPDATE rendering."""

    def test_row_update(self):
        """SET placeholders precede the WHERE clause and its parameters."""
        update = RowUpdate(
            "users", {"name": "Ada", "age": 3}, {"updated_at": "NOW()"}, "id = ?", (7,)
        )
        clause = build_row_update_sql(MYSQL, update)
        assert clause.sql == (
            "UPDATE `users` SET `name` = ?, `age` = ?, `updated_at` = NOW() WHERE id = ?"
        )
        assert clause.to_list() == ["Ada", 3, 7]

    def test_batch_update(self):
        """A batch UPDATE renders one template and one parameter set per row."""
        rows = [{"id": 1, "n": "a"}, {"id": 2, "n": "b"}]
        batch = BatchUpdate(
            "users",
            rows,
            {"name": lambda r: r["n"]},
            {"kind": "x"},
            {},
            "id = ?",
            (lambda r: r["id"],),
        )
        assert build_batch_update_sql(SQLSERVER, batch) == (
            "UPDATE [users] SET [name] = ?, [kind] = ? WHERE id = ?"
        )
        assert build_batch_update_params(batch) == [["a", "x", 1], ["b", "x", 2]]


class TestDeleteRendering:
    """Tests for DELETE rendering."""

    def test_delete(self):
        """DELETE keeps the WHERE clause and its parameters."""
        clause = build_delete_sql(POSTGRES, DeleteFrom("users", "id IN (?, ?)", (1, 2)))
        assert clause.sql == 'DELETE FROM "users" WHERE id IN (?, ?)'
        assert clause.parameters == (1, 2)
