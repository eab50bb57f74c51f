"""Unit tests for evaluation context construction."""

import pytest

from render.context import MalformedVariableError, build_context, build_nested_context


class TestBuildContext:
    def test_returns_empty_context_without_inputs(self) -> None:
        assert build_context() == {}

    def test_copies_config(self) -> None:
        config = {"name": "render", "labels": {"app": "web"}}

        context = build_context(config)
        context["labels"]["app"] = "changed"

        assert context["name"] == "render"
        assert config == {"name": "render", "labels": {"app": "web"}}

    def test_variables_override_config(self) -> None:
        config = {"replicas": 1, "image": {"tag": "1.0", "name": "web"}}

        context = build_context(config, ["image.tag=2.0"])

        assert context == {"replicas": 1, "image": {"tag": "2.0", "name": "web"}}

    def test_variable_replaces_config_mapping(self) -> None:
        context = build_context({"image": {"tag": "1.0"}}, ["image=web:2.0"])

        assert context == {"image": "web:2.0"}

    def test_variable_nests_under_config_scalar(self) -> None:
        context = build_context({"image": "web"}, ["image.tag=2.0"])

        assert context == {"image": {"tag": "2.0"}}

    def test_variables_applied_in_order(self) -> None:
        context = build_context(None, ["a=1", "b=2", "a=3"])

        assert context == {"a": "3", "b": "2"}

    def test_propagates_malformed_variable(self) -> None:
        with pytest.raises(MalformedVariableError):
            _ = build_context({}, ["missing-equals"])


class TestBuildNestedContext:
    def test_override_wins(self) -> None:
        parent = {"x": "outer", "y": "kept"}

        context = build_nested_context(parent, {"x": "other"})

        assert context == {"x": "other", "y": "kept"}

    def test_parent_is_not_modified(self) -> None:
        parent = {"x": "outer", "nested": {"a": 1}}

        context = build_nested_context(parent, {"nested": {"b": 2}})
        context["nested"]["a"] = 99

        assert parent == {"x": "outer", "nested": {"a": 1}}

    def test_without_override_copies_parent(self) -> None:
        parent = {"x": {"a": 1}}

        context = build_nested_context(parent)

        assert context == parent
        assert context["x"] is not parent["x"]

    def test_override_merges_deeply(self) -> None:
        parent = {"db": {"host": "localhost", "port": 5432}}

        context = build_nested_context(parent, {"db": {"port": 6543}})

        assert context == {"db": {"host": "localhost", "port": 6543}}
