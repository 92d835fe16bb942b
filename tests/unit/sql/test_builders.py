"""
Unit tests for the fluent builders, driven through a Database whose executor
is a MagicMock.
"""

import pytest

from fluent_dml.sql.errors import (
    ArgumentUnderflowError,
    BuilderConsumedError,
    EmptyColumnSetError,
)


class TestRowInsertBuilder:
    """Tests for insert_into()."""

    def test_insert_renders_columns_and_parameters(self, mysql_db, executor):
        """Each escaped value becomes one placeholder and one parameter."""
        executor.execute_update.return_value = 1

        count = mysql_db.insert_into("t").value("a", 1).value("b", 2).insert()

        assert count == 1
        executor.execute_update.assert_called_once_with(
            "INSERT INTO `t` (`a`, `b`) VALUES (?, ?)", [1, 2]
        )

    def test_unescaped_value_is_inlined(self, mysql_db, executor):
        """Unescaped fragments are written into the VALUES list verbatim."""
        mysql_db.insert_into("t").value("a", 1).value_unescaped("b", "NOW()").insert()

        executor.execute_update.assert_called_once_with(
            "INSERT INTO `t` (`a`, `b`) VALUES (?, NOW())", [1]
        )

    def test_rebinding_same_kind_keeps_position(self, mysql_db, executor):
        """Rebinding a column replaces its value without moving it."""
        mysql_db.insert_into("t").value("a", 1).value("b", 2).value("a", 3).insert()

        executor.execute_update.assert_called_once_with(
            "INSERT INTO `t` (`a`, `b`) VALUES (?, ?)", [3, 2]
        )

    def test_rebinding_other_kind_replaces_binding(self, mysql_db, executor):
        """The last binding of a column wins, whatever its kind."""
        mysql_db.insert_into("t").value("a", 1).value_unescaped("a", "NOW()").insert()

        executor.execute_update.assert_called_once_with(
            "INSERT INTO `t` (`a`) VALUES (NOW())", []
        )

    def test_no_columns_fails_before_execution(self, mysql_db, executor):
        """An INSERT without columns is rejected before reaching the executor."""
        with pytest.raises(EmptyColumnSetError):
            mysql_db.insert_into("t").insert()
        executor.execute_update.assert_not_called()

    def test_builder_is_single_use(self, mysql_db, executor):
        """A second terminal call raises and issues no statement."""
        builder = mysql_db.insert_into("t").value("a", 1)
        builder.insert()

        with pytest.raises(BuilderConsumedError):
            builder.insert()
        assert executor.execute_update.call_count == 1

    def test_rejected_insert_leaves_builder_usable(self, mysql_db, executor):
        """A terminal call rejected for missing columns does not consume the builder."""
        builder = mysql_db.insert_into("t")
        with pytest.raises(EmptyColumnSetError):
            builder.insert()

        builder.value("a", 1).insert()

        executor.execute_update.assert_called_once_with(
            "INSERT INTO `t` (`a`) VALUES (?)", [1]
        )

    def test_build_returns_model_without_executing(self, mysql_db, executor):
        """build() produces the statement model and touches no executor."""
        model = mysql_db.insert_into("t").value("a", 1).build()

        assert model.table == "t"
        assert dict(model.escaped_values) == {"a": 1}
        assert executor.method_calls == []


class TestBatchInsertBuilder:
    """Tests for batch_insert_into()."""

    def test_one_parameter_set_per_row(self, mysql_db, executor):
        """Mapped values vary per row while constants repeat."""
        executor.execute_batch_update.return_value = [1, 1]
        rows = [{"a": 1}, {"a": 2}]

        counts = (
            mysql_db.batch_insert_into("t", rows)
            .value_mapped("a", lambda r: r["a"])
            .value("b", "k")
            .value_unescaped("c", "NOW()")
            .insert()
        )

        assert counts == [1, 1]
        executor.execute_batch_update.assert_called_once_with(
            "INSERT INTO `t` (`a`, `b`, `c`) VALUES (?, ?, NOW())",
            [[1, "k"], [2, "k"]],
        )

    def test_empty_rows_issue_no_statement(self, mysql_db, executor):
        """A batch over no rows returns an empty result without executing."""
        result = mysql_db.batch_insert_into("t", []).value_mapped("a", lambda r: r).insert()

        assert result == []
        assert executor.method_calls == []

    def test_empty_rows_with_keys_issue_no_statement(self, postgres_db, executor):
        """Requesting keys for no rows returns an empty list without executing."""
        result = (
            postgres_db.batch_insert_into("t", [])
            .value_mapped("a", lambda r: r)
            .insert_returning_keys("id")
        )

        assert result == []
        assert executor.method_calls == []

    def test_no_columns_fails_before_execution(self, mysql_db, executor):
        """A batch INSERT without columns is rejected before executing."""
        with pytest.raises(EmptyColumnSetError):
            mysql_db.batch_insert_into("t", [1]).insert()
        assert executor.method_calls == []


class TestRowUpdateBuilder:
    """Tests for update_table()."""

    def test_where_is_flattened(self, mysql_db, executor):
        """Collection arguments in the WHERE clause expand into placeholders."""
        executor.execute_update.return_value = 2

        count = (
            mysql_db.update_table("users")
            .set("name", "Ada")
            .set_unescaped("updated_at", "NOW()")
            .where("id IN (?) AND kind = ?", [1, 2], "x")
        )

        assert count == 2
        executor.execute_update.assert_called_once_with(
            "UPDATE `users` SET `name` = ?, `updated_at` = NOW() "
            "WHERE id IN (?, ?) AND kind = ?",
            ["Ada", 1, 2, "x"],
        )

    def test_set_many_preserves_order(self, postgres_db, executor):
        """set_many() binds columns in mapping order."""
        postgres_db.update_table("users").set_many({"b": 2, "a": 1}).where_id_equals(9)

        executor.execute_update.assert_called_once_with(
            'UPDATE "users" SET "b" = ?, "a" = ? WHERE id = ?', [2, 1, 9]
        )

    def test_set_unescaped_many(self, postgres_db, executor):
        """set_unescaped_many() inlines every fragment."""
        postgres_db.update_table("users").set_unescaped_many(
            {"a": "a + 1", "b": "NULL"}
        ).where("1 = 1")

        executor.execute_update.assert_called_once_with(
            'UPDATE "users" SET "a" = a + 1, "b" = NULL WHERE 1 = 1', []
        )

    def test_where_id_in(self, sqlserver_db, executor):
        """where_id_in() expands the ids into an IN list."""
        sqlserver_db.update_table("users").set("active", False).where_id_in([3, 4])

        executor.execute_update.assert_called_once_with(
            "UPDATE [users] SET [active] = ? WHERE id IN (?, ?)", [False, 3, 4]
        )

    def test_no_columns_fails_before_execution(self, mysql_db, executor):
        """An UPDATE without SET columns is rejected before executing."""
        with pytest.raises(EmptyColumnSetError):
            mysql_db.update_table("users").where_id_equals(1)
        executor.execute_update.assert_not_called()

    def test_missing_where_argument_fails_before_execution(self, mysql_db, executor):
        """A WHERE placeholder without an argument is rejected before executing."""
        with pytest.raises(ArgumentUnderflowError):
            mysql_db.update_table("users").set("a", 1).where("id = ?")
        executor.execute_update.assert_not_called()

    def test_rejected_where_leaves_builder_usable(self, mysql_db, executor):
        """A WHERE clause missing an argument can be retried on the same builder."""
        builder = mysql_db.update_table("users").set("a", 1)
        with pytest.raises(ArgumentUnderflowError):
            builder.where("id = ?")

        builder.where("id = ?", 5)

        executor.execute_update.assert_called_once_with(
            "UPDATE `users` SET `a` = ? WHERE id = ?", [1, 5]
        )


class TestBatchUpdateBuilder:
    """Tests for batch_update()."""

    def test_per_row_parameters(self, mysql_db, executor):
        """SET and WHERE parameters are gathered row by row."""
        executor.execute_batch_update.return_value = [1, 0]
        rows = [{"id": 1, "n": "a"}, {"id": 2, "n": "b"}]

        counts = (
            mysql_db.batch_update("users", rows)
            .set_mapped("name", lambda r: r["n"])
            .set("kind", "x")
            .where_id_equals(lambda r: r["id"])
        )

        assert counts == [1, 0]
        executor.execute_batch_update.assert_called_once_with(
            "UPDATE `users` SET `name` = ?, `kind` = ? WHERE id = ?",
            [["a", "x", 1], ["b", "x", 2]],
        )

    def test_where_clause_is_not_flattened(self, mysql_db, executor):
        """A list produced by a WHERE mapper stays one parameter."""
        rows = [{"tags": [1, 2]}]

        mysql_db.batch_update("t", rows).set("a", 0).where("tags = ?", lambda r: r["tags"])

        executor.execute_batch_update.assert_called_once_with(
            "UPDATE `t` SET `a` = ? WHERE tags = ?", [[0, [1, 2]]]
        )

    def test_empty_rows_issue_no_statement(self, mysql_db, executor):
        """A batch UPDATE over no rows returns an empty result without executing."""
        result = mysql_db.batch_update("t", []).set("a", 1).where_id_equals(lambda r: r)

        assert result == []
        assert executor.method_calls == []


class TestDeleteFromBuilder:
    """Tests for delete_from()."""

    def test_where_in_expands(self, postgres_db, executor):
        """A list bound to IN (?) expands into one placeholder per id."""
        executor.execute_update.return_value = 3

        count = postgres_db.delete_from("users").where("id IN (?)", [5, 6, 7])

        assert count == 3
        executor.execute_update.assert_called_once_with(
            'DELETE FROM "users" WHERE id IN (?, ?, ?)', [5, 6, 7]
        )

    def test_where_id_equals(self, mysql_db, executor):
        """where_id_equals() filters on the id column."""
        mysql_db.delete_from("users").where_id_equals(4)

        executor.execute_update.assert_called_once_with(
            "DELETE FROM `users` WHERE id = ?", [4]
        )

    def test_builder_is_single_use(self, mysql_db):
        """A DELETE builder cannot be executed twice."""
        builder = mysql_db.delete_from("users")
        builder.where_id_in([1])

        with pytest.raises(BuilderConsumedError):
            builder.where_id_in([1])

    def test_rejected_delete_leaves_builder_usable(self, mysql_db, executor):
        """A DELETE rejected while flattening its WHERE clause is not consumed."""
        builder = mysql_db.delete_from("users")
        with pytest.raises(ArgumentUnderflowError):
            builder.where("id = ? OR id = ?", 1)

        builder.where("id = ? OR id = ?", 1, 2)

        executor.execute_update.assert_called_once_with(
            "DELETE FROM `users` WHERE id = ? OR id = ?", [1, 2]
        )
