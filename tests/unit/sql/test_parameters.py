"""
Unit tests for positional and named placeholder flattening.
"""

import pytest

from fluent_dml.sql.core.parameters import (
    Container,
    ParameterizedClause,
    Scalar,
    bind_value,
    flatten,
    flatten_named,
    placeholders,
    split_on_placeholders,
)
from fluent_dml.sql.errors import (
    ArgumentOverflowError,
    ArgumentUnderflowError,
    MissingNamedParameterError,
    ParameterBindingError,
)


class TestBindValue:
    """Tests for classifying bind values."""

    def test_list_is_container(self):
        assert bind_value([1, 2]) == Container([1, 2])

    def test_tuple_and_set_are_containers(self):
        assert isinstance(bind_value((1, 2)), Container)
        assert isinstance(bind_value({1}), Container)

    def test_string_is_scalar(self):
        """Strings are iterable but must never expand."""
        assert bind_value("abc") == Scalar("abc")

    def test_bytes_are_scalar(self):
        assert bind_value(b"\x00\x01") == Scalar(b"\x00\x01")

    def test_mapping_is_scalar(self):
        assert bind_value({"a": 1}) == Scalar({"a": 1})

    def test_none_and_numbers_are_scalar(self):
        assert bind_value(None) == Scalar(None)
        assert bind_value(3.5) == Scalar(3.5)

    def test_explicit_wrappers_pass_through(self):
        wrapped = Scalar([1, 2])
        assert bind_value(wrapped) is wrapped


class TestPlaceholders:
    """Tests for placeholders()."""

    def test_run_of_three(self):
        assert placeholders(3) == "?, ?, ?"

    def test_single(self):
        assert placeholders(1) == "?"

    def test_zero(self):
        assert placeholders(0) == ""


class TestFlatten:
    """Tests for flatten()."""

    def test_no_placeholders_no_args_is_identity(self):
        clause = flatten("SELECT 1")
        assert clause == ParameterizedClause("SELECT 1", ())

    def test_scalars_only_is_identity(self):
        """SQL is unchanged when every argument is a scalar."""
        clause = flatten("a = ? AND b = ?", [1, "x"])
        assert clause.sql == "a = ? AND b = ?"
        assert clause.parameters == (1, "x")

    def test_container_expands(self):
        clause = flatten("id IN (?)", [[5, 6, 7]])
        assert clause.sql == "id IN (?, ?, ?)"
        assert clause.to_list() == [5, 6, 7]

    def test_mixed_scalars_and_containers_keep_order(self):
        clause = flatten(
            "kind = ? AND id IN (?) AND tag IN (?) AND ts > ?",
            ["a", (1, 2), ["x"], 10],
        )
        assert clause.sql == "kind = ? AND id IN (?, ?) AND tag IN (?) AND ts > ?"
        assert clause.parameters == ("a", 1, 2, "x", 10)

    def test_empty_container_yields_empty_run(self):
        clause = flatten("id IN (?)", [[]])
        assert clause.sql == "id IN ()"
        assert clause.parameters == ()

    def test_string_argument_is_not_expanded(self):
        clause = flatten("name = ?", ["abc"])
        assert clause.sql == "name = ?"
        assert clause.parameters == ("abc",)

    def test_scalar_wrapper_keeps_list_as_one_value(self):
        """Array-typed columns can bind a list to one placeholder."""
        clause = flatten("tags = ?", [Scalar(["a", "b"])])
        assert clause.sql == "tags = ?"
        assert clause.parameters == (["a", "b"],)

    def test_placeholder_count_matches_parameter_count(self):
        clause = flatten("a IN (?) OR b = ? OR c IN (?)", [[1, 2, 3], 4, {5, 6}])
        assert clause.sql.count("?") == len(clause.parameters)

    def test_flattening_is_idempotent(self):
        first = flatten("id IN (?) AND x = ?", [[1, 2], 3])
        second = flatten(first.sql, first.parameters)
        assert second == first

    def test_too_few_arguments_raises_underflow(self):
        with pytest.raises(ArgumentUnderflowError) as exc_info:
            flatten("a = ? AND b = ?", [1])
        assert exc_info.value.placeholder_index == 1
        assert exc_info.value.supplied == 1

    def test_too_many_arguments_raises_overflow(self):
        with pytest.raises(ArgumentOverflowError, match="Found 1 parameters but received 2"):
            flatten("a = ?", [1, 2])

    def test_binding_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            flatten("a = ?")
        assert issubclass(ArgumentOverflowError, ParameterBindingError)


class TestFlattenNamed:
    """Tests for flatten_named()."""

    def test_scalar_name(self):
        clause = flatten_named("id = :id", {"id": 5})
        assert clause == ParameterizedClause("id = ?", (5,))

    def test_container_name_expands(self):
        clause = flatten_named("id IN (:ids) AND kind = :kind", {"ids": [1, 2], "kind": "a"})
        assert clause.sql == "id IN (?, ?) AND kind = ?"
        assert clause.parameters == (1, 2, "a")

    def test_repeated_name_binds_every_occurrence(self):
        clause = flatten_named("a = :v OR b = :v", {"v": 9})
        assert clause.sql == "a = ? OR b = ?"
        assert clause.parameters == (9, 9)

    def test_postgres_cast_is_left_alone(self):
        clause = flatten_named("created::date = :day", {"day": "2024-01-01"})
        assert clause.sql == "created::date = ?"

    def test_quoted_text_is_left_alone(self):
        clause = flatten_named(
            "note = ':not_a_param' AND \"col:x\" = :v", {"v": 1}
        )
        assert clause.sql == "note = ':not_a_param' AND \"col:x\" = ?"
        assert clause.parameters == (1,)

    def test_unused_names_are_ignored(self):
        clause = flatten_named("a = :a", {"a": 1, "b": 2})
        assert clause.parameters == (1,)

    def test_missing_name_raises(self):
        with pytest.raises(MissingNamedParameterError) as exc_info:
            flatten_named("a = :a AND b = :b", {"a": 1})
        assert exc_info.value.name == "b"


class TestSplitOnPlaceholders:
    """Tests for split_on_placeholders function."""

    def test_splits_around_each_placeholder(self):
        """n placeholders give n + 1 chunks."""
        assert split_on_placeholders("a = ? AND b = ?") == ["a = ", " AND b = ", ""]

    def test_quoted_question_marks_are_text(self):
        """Question marks inside single or double quotes are not placeholders."""
        assert split_on_placeholders("""a = '?' AND "b?" = ?""") == [
            """a = '?' AND "b?" = """,
            "",
        ]

    def test_no_placeholders(self):
        """Text without placeholders is a single chunk."""
        assert split_on_placeholders("SELECT 'why?'") == ["SELECT 'why?'"]
