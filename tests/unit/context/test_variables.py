"""Unit tests for variable parsing."""

import pytest

from render.context import (
    MalformedVariableError,
    MergeConflictError,
    Variable,
    parse_variable,
    parse_variables,
)


class TestParseVariable:
    def test_parses_simple_variable(self) -> None:
        result = parse_variable("first=value1")

        assert result == Variable(path=("first",), value="value1", raw="first=value1")

    def test_splits_dotted_path_into_segments(self) -> None:
        result = parse_variable("resourceQuota.hard.cpu=10")

        assert result.path == ("resourceQuota", "hard", "cpu")
        assert result.key_path == "resourceQuota.hard.cpu"

    def test_strips_double_quotes(self) -> None:
        assert parse_variable('second="value 2"').value == "value 2"

    def test_strips_single_quotes(self) -> None:
        assert parse_variable("third.nested='and value 3'").value == "and value 3"

    def test_strips_only_one_layer_of_quotes(self) -> None:
        assert parse_variable("k=\"'inner'\"").value == "'inner'"

    def test_keeps_mismatched_quotes(self) -> None:
        assert parse_variable("k=\"value'").value == "\"value'"

    def test_keeps_lone_quote(self) -> None:
        assert parse_variable('k="').value == '"'

    def test_splits_on_first_equals_sign(self) -> None:
        assert parse_variable("query=a=b").value == "a=b"

    def test_allows_empty_value(self) -> None:
        assert parse_variable("key=").value == ""

    def test_preserves_value_whitespace(self) -> None:
        assert parse_variable("key=  padded ").value == "  padded "

    def test_strips_whitespace_around_path(self) -> None:
        assert parse_variable(" key =value").path == ("key",)

    def test_raises_without_equals_sign(self) -> None:
        with pytest.raises(MalformedVariableError, match="expected the form key=value"):
            _ = parse_variable("novalue")

    def test_raises_for_empty_key(self) -> None:
        with pytest.raises(MalformedVariableError, match="key must not be empty") as exc_info:
            _ = parse_variable("=value")

        assert exc_info.value.variable == "=value"

    @pytest.mark.parametrize("text", ["a..b=1", ".a=1", "a.=1", "a b=1", "a.b c=1"])
    def test_raises_for_malformed_path(self, text: str) -> None:
        with pytest.raises(MalformedVariableError, match="malformed key path"):
            _ = parse_variable(text)


class TestParseVariables:
    def test_builds_nested_tree(self) -> None:
        result = parse_variables(
            ["first=value1", 'second="value 2"', "third.nested='and value 3'"]
        )

        assert result == {
            "first": "value1",
            "second": "value 2",
            "third": {"nested": "and value 3"},
        }

    def test_returns_empty_tree_for_no_variables(self) -> None:
        assert parse_variables([]) == {}

    def test_later_variable_wins(self) -> None:
        assert parse_variables(["a=1", "a=2"]) == {"a": "2"}

    def test_sibling_paths_share_parent(self) -> None:
        result = parse_variables(["db.host=localhost", "db.port=5432"])

        assert result == {"db": {"host": "localhost", "port": "5432"}}

    def test_values_are_strings(self) -> None:
        result = parse_variables(["replicas=3", "enabled=true"])

        assert result == {"replicas": "3", "enabled": "true"}

    def test_raises_when_path_runs_through_scalar(self) -> None:
        with pytest.raises(MergeConflictError) as exc_info:
            _ = parse_variables(["a=1", "a.b=2"])

        assert exc_info.value.path == "a.b"
        assert "'a' already holds a str value" in str(exc_info.value)

    def test_scalar_replaces_earlier_mapping(self) -> None:
        assert parse_variables(["a.b=1", "a=2"]) == {"a": "2"}
