"""Unit tests for the template helper functions."""

import uuid

import pytest
from jinja2 import Undefined

from render.engine import evaluate
from render.engine._functions import (
    FILTERS,
    GLOBALS,
    b64dec,
    b64enc,
    cidr_host,
    from_json,
    from_yaml,
    gzip,
    nindent,
    quote,
    regex_match,
    regex_replace_all,
    required,
    sha1sum,
    sha256sum,
    split_list,
    squote,
    ternary,
    to_json,
    to_pretty_json,
    to_yaml,
    trim_prefix,
    trim_suffix,
    ungzip,
    uuidv4,
)


class TestRegistry:
    def test_registers_filters(self) -> None:
        assert {"toYaml", "toJson", "b64enc", "nindent", "required", "quote"} <= set(FILTERS)

    def test_registers_globals(self) -> None:
        assert set(GLOBALS) == {"cidrHost", "uuidv4"}


class TestSerialization:
    def test_to_yaml_is_block_style_without_trailing_newline(self) -> None:
        assert to_yaml({"name": "web", "ports": [80, 443]}) == "name: web\nports:\n- 80\n- 443"

    def test_to_yaml_keeps_key_order(self) -> None:
        assert to_yaml({"b": 1, "a": 2}) == "b: 1\na: 2"

    def test_from_yaml(self) -> None:
        assert from_yaml("a:\n  b: [1, 2]\n") == {"a": {"b": [1, 2]}}

    def test_to_json_is_compact(self) -> None:
        assert to_json({"a": [1, 2], "b": None}) == '{"a":[1,2],"b":null}'

    def test_to_pretty_json(self) -> None:
        assert to_pretty_json({"a": 1}) == '{\n  "a": 1\n}'

    def test_from_json(self) -> None:
        assert from_json('{"a": [true]}') == {"a": [True]}


class TestEncoding:
    def test_b64enc(self) -> None:
        assert b64enc("hello") == "aGVsbG8="

    def test_b64dec(self) -> None:
        assert b64dec("aGVsbG8=") == "hello"

    def test_gzip_is_deterministic(self) -> None:
        assert gzip("payload") == gzip("payload")

    def test_ungzip_reverses_gzip(self) -> None:
        assert ungzip(gzip("payload\nwith lines")) == "payload\nwith lines"

    def test_sha1sum(self) -> None:
        assert sha1sum("hello") == "aaf4c61ddcc5e8a2dabede0f3b482cd9aea9434d"

    def test_sha256sum(self) -> None:
        assert sha256sum("hello") == (
            "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"
        )


class TestStrings:
    def test_quote_escapes(self) -> None:
        assert quote('say "hi" \\o/') == '"say \\"hi\\" \\\\o/"'

    def test_quote_stringifies(self) -> None:
        assert quote(3) == '"3"'

    def test_squote(self) -> None:
        assert squote("a") == "'a'"

    def test_nindent(self) -> None:
        assert nindent("a: 1\nb: 2", 2) == "\n  a: 1\n  b: 2"

    def test_nindent_leaves_blank_lines_empty(self) -> None:
        assert nindent("a\n\nb", 4) == "\n    a\n\n    b"

    def test_trim_prefix(self) -> None:
        assert trim_prefix("v1.2.3", "v") == "1.2.3"

    def test_trim_suffix(self) -> None:
        assert trim_suffix("app.yaml", ".yaml") == "app"

    def test_split_list(self) -> None:
        assert split_list("a,b,c", ",") == ["a", "b", "c"]

    def test_regex_match(self) -> None:
        assert regex_match("abc123", r"\d+") is True
        assert regex_match("abc", r"\d+") is False

    def test_regex_replace_all(self) -> None:
        assert regex_replace_all("a1b2", r"\d", "_") == "a_b_"


class TestLogic:
    def test_required_returns_value(self) -> None:
        assert required("x") == "x"

    def test_required_accepts_falsy_non_empty_values(self) -> None:
        assert required(0) == 0

    @pytest.mark.parametrize("value", [None, "", Undefined(name="x")])
    def test_required_rejects_missing(self, value: object) -> None:
        with pytest.raises(ValueError, match="required value is missing"):
            _ = required(value)

    def test_required_custom_message(self) -> None:
        with pytest.raises(ValueError, match="image is required"):
            _ = required(None, "image is required")

    def test_ternary(self) -> None:
        assert ternary(True, "a", "b") == "a"
        assert ternary("", "a", "b") == "b"


class TestNetwork:
    def test_cidr_host(self) -> None:
        assert cidr_host("10.12.0.0/16", 5) == "10.12.0.5"

    def test_cidr_host_negative_counts_from_end(self) -> None:
        assert cidr_host("10.12.0.0/16", -1) == "10.12.255.255"

    def test_cidr_host_ipv6(self) -> None:
        assert cidr_host("fd00::/64", 1) == "fd00::1"

    def test_cidr_host_out_of_range(self) -> None:
        with pytest.raises(ValueError, match="out of range"):
            _ = cidr_host("10.0.0.0/30", 4)

    def test_uuidv4(self) -> None:
        assert uuid.UUID(uuidv4()).version == 4


class TestInTemplates:
    def test_to_yaml_with_nindent(self) -> None:
        template = "spec:{{ resources | toYaml | nindent(2) }}"
        context = {"resources": {"limits": {"cpu": "500m"}}}

        assert evaluate(template, context) == "spec:\n  limits:\n    cpu: 500m"

    def test_b64enc_pipeline(self) -> None:
        assert evaluate("{{ password | b64enc }}", {"password": "hello"}) == "aGVsbG8="

    def test_quote_pipeline(self) -> None:
        assert evaluate("name: {{ name | quote }}", {"name": "web"}) == 'name: "web"'

    def test_cidr_host_function(self) -> None:
        assert evaluate("{{ cidrHost(subnet, 10) }}", {"subnet": "10.0.0.0/24"}) == "10.0.0.10"

    def test_cidr_host_filter(self) -> None:
        assert evaluate("{{ subnet | cidrHost(10) }}", {"subnet": "10.0.0.0/24"}) == "10.0.0.10"

    def test_builtin_filters_available(self) -> None:
        assert evaluate("{{ name | upper }}-{{ missing | default('d') }}", {"name": "a"}) == "A-d"
