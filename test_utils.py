"""
Tests for URL, query string and JSON parameter helpers.

Tests:
1. Base URL normalization
2. Query string serialization
3. Lenient JSON object parameters
4. Strict Tools parameter
"""

import pytest

from portai.errors import ValidationError
from portai.utils import (
    build_query_string,
    encode_uri_component,
    normalize_base_url,
    parse_json_parameter,
    parse_tools_parameter,
)


@pytest.mark.parametrize("raw, expected", [
    ("https://x.com/v1/", "https://x.com"),
    ("https://x.com/v1", "https://x.com"),
    ("https://x.com/", "https://x.com"),
    ("https://x.com", "https://x.com"),
    ("  https://api.us.getport.io/v1/  ", "https://api.us.getport.io"),
    ("https://x.com/api", "https://x.com/api"),
    ("", ""),
])
def test_normalize_base_url(raw, expected):
    assert normalize_base_url(raw) == expected


@pytest.mark.parametrize("raw", ["https://x.com", "https://x.com/v1/", "https://x.com/"])
def test_normalize_base_url_is_idempotent(raw):
    once = normalize_base_url(raw)
    assert normalize_base_url(once) == once


def test_normalize_base_url_strips_only_one_slash():
    assert normalize_base_url("https://x.com//") == "https://x.com/"


def test_query_string_skips_false_and_empty():
    assert build_query_string({"a": "1", "b": False, "c": ""}) == "?a=1"


def test_query_string_keeps_caller_order():
    params = {"invocation_identifier": "inv-1", "stream": True, "use_mcp": True}
    assert build_query_string(params) == "?invocation_identifier=inv-1&stream=true&use_mcp=true"
    assert build_query_string({"z": "last", "a": True}) == "?z=last&a=true"


def test_query_string_empty():
    assert build_query_string({}) == ""
    assert build_query_string({"stream": False, "invocation_identifier": "", "x": None}) == ""


def test_query_string_encodes_values():
    assert build_query_string({"q": "a b/c&d"}) == "?q=a%20b%2Fc%26d"


def test_encode_uri_component_matches_javascript():
    assert encode_uri_component("agent-1_x.y!~*'()") == "agent-1_x.y!~*'()"
    assert encode_uri_component("my agent/1") == "my%20agent%2F1"
    assert encode_uri_component("é") == "%C3%A9"


@pytest.mark.parametrize("value", [
    None,
    "",
    "   ",
    "{}",
    "{ }",
    "not json",
    "[1, 2]",
    '"text"',
    "null",
    "42",
    {},
])
def test_lenient_json_parameter_absent(value):
    assert parse_json_parameter(value) is None


def test_lenient_json_parameter_object():
    assert parse_json_parameter('{"team": "platform", "env": "prod"}') == {"team": "platform", "env": "prod"}
    assert parse_json_parameter({"already": "decoded"}) == {"already": "decoded"}


def test_tools_parameter_accepts_arrays():
    assert parse_tools_parameter('["tool1", "tool2"]') == ["tool1", "tool2"]
    assert parse_tools_parameter("[]") == []
    assert parse_tools_parameter(["list_entities"]) == ["list_entities"]


@pytest.mark.parametrize("value", ["not json", "", None, "[1,"])
def test_tools_parameter_invalid_json(value):
    with pytest.raises(ValidationError) as exc:
        parse_tools_parameter(value)
    assert exc.value.message == "Invalid JSON format for Tools field"
    assert "JSON array" in exc.value.description


@pytest.mark.parametrize("value", ['{"tool": "x"}', '"tool1"', "7", {"tool": "x"}])
def test_tools_parameter_not_an_array(value):
    with pytest.raises(ValidationError) as exc:
        parse_tools_parameter(value)
    assert exc.value.message == "Tools must be a valid JSON array"
