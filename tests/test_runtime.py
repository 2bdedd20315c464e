"""
Tests for the runtime primitives used by generated code.
"""

from types import SimpleNamespace

import pytest

from stache.runtime import (
    HELPERS,
    compare,
    deep_get,
    escape_html,
    is_array_like,
    is_composite,
    member,
    resolve_name,
    strict_equal,
    stringify,
)


class TestEscaping:

    def test_escape_all_sensitive_characters(self):
        assert escape_html("<a href=\"x\">Tom & Jerry's</a>") == (
            "&lt;a href=&quot;x&quot;&gt;Tom &amp; Jerry&#39;s&lt;/a&gt;"
        )

    def test_ampersand_escaped_once(self):
        """Entities produced by escaping are not escaped again."""
        assert escape_html("&lt;") == "&amp;lt;"

    def test_non_strings(self):
        assert escape_html(None) == ""
        assert escape_html(42) == "42"
        assert escape_html(True) == "True"

    def test_stringify(self):
        assert stringify(None) == ""
        assert stringify("<b>") == "<b>"
        assert stringify(1.5) == "1.5"

    def test_integral_floats_drop_fraction(self):
        """Whole floats print like ints; other floats keep their digits."""
        assert stringify(2.0) == "2"
        assert stringify(-0.0) == "0"
        assert stringify(0.25) == "0.25"
        assert stringify(float("inf")) == "inf"


class TestDeepGet:

    def test_nested_mapping(self):
        data = {"user": {"address": {"city": "Oslo"}}}

        assert deep_get(data, "user.address.city") == "Oslo"

    def test_missing_segments(self):
        data = {"user": {"name": "Ann"}}

        assert deep_get(data, "user.address.city") is None
        assert deep_get(data, "nobody") is None

    def test_scalar_intermediate(self):
        """Walking into a scalar gives None instead of an error."""
        assert deep_get({"a": 5}, "a.b") is None
        assert deep_get({"s": "text"}, "s.length") is None

    def test_non_composite_root(self):
        assert deep_get(None, "a") is None
        assert deep_get("text", "a") is None
        assert deep_get(3, "a") is None

    def test_empty_path(self):
        data = {"a": 1}

        assert deep_get(data, "") is data

    def test_sequence_index(self):
        data = {"rows": [10, 20]}

        assert deep_get(data, "rows.1") == 20
        assert deep_get(data, "rows.5") is None
        assert deep_get(data, "rows.x") is None

    def test_object_attributes(self):
        data = {"user": SimpleNamespace(name="Ann")}

        assert deep_get(data, "user.name") == "Ann"
        assert deep_get(data, "user.age") is None

    def test_falsy_values_are_returned(self):
        data = {"n": 0, "s": "", "f": False}

        assert deep_get(data, "n") == 0
        assert deep_get(data, "s") == ""
        assert deep_get(data, "f") is False


class TestPredicates:

    def test_is_array_like(self):
        assert is_array_like([1])
        assert is_array_like(())
        assert not is_array_like("abc")
        assert not is_array_like(b"abc")
        assert not is_array_like({"a": 1})
        assert not is_array_like(None)

    def test_is_composite(self):
        assert is_composite({})
        assert is_composite([])
        assert is_composite(SimpleNamespace())
        assert not is_composite(None)
        assert not is_composite("x")
        assert not is_composite(1)


class TestMember:

    def test_mapping_key(self):
        assert member({"name": "Ann"}, "name") == "Ann"

    def test_missing_mapping_key(self):
        assert member({"name": "Ann"}, "age") is None

    def test_mapping_methods_are_not_members(self):
        """A missing key named like a dict method is still just missing."""
        assert member({}, "items") is None
        assert member({"a": 1}, "keys") is None
        assert member({"get": 5}, "get") == 5

    def test_string_members(self):
        assert member("abc", "length") == 3
        assert member("abc", "toUpperCase")() == "ABC"

    def test_sequence_members(self):
        assert member([1, 2, 3], "length") == 3
        assert member(["a", "b"], "join")() == "a,b"

    def test_host_attribute(self):
        assert member("a-b", "upper")() == "A-B"

    def test_unknown_attribute(self):
        with pytest.raises(AttributeError):
            member(5, "nope")

    def test_none_value(self):
        with pytest.raises(TypeError, match="Cannot read property 'name' of None"):
            member(None, "name")


class TestResolveName:

    def test_context_key(self):
        assert resolve_name({"x": 1}, "x") == 1

    def test_context_shadows_builtins(self):
        assert resolve_name({"len": "mine"}, "len") == "mine"

    def test_js_literals(self):
        assert resolve_name({}, "true") is True
        assert resolve_name({}, "false") is False
        assert resolve_name({}, "null") is None
        assert resolve_name({}, "undefined") is None

    def test_builtins(self):
        assert resolve_name({}, "len") is len

    def test_unknown(self):
        assert resolve_name({}, "missing") is None


class TestStrictEqual:

    def test_booleans_never_equal_numbers(self):
        assert strict_equal(True, 1) is False
        assert strict_equal(0, False) is False
        assert strict_equal(True, 1.0) is False

    def test_same_kind_values(self):
        assert strict_equal(True, True)
        assert strict_equal(1, 1.0)
        assert strict_equal("a", "a")
        assert strict_equal(None, None)
        assert not strict_equal("1", 1)
        assert not strict_equal(None, 0)


class TestCompare:

    def test_ordering(self):
        assert compare("gt", 2, 1)
        assert compare("gte", 2, 2)
        assert compare("lt", "a", "b")
        assert not compare("lte", 3, 2)

    def test_unorderable_operands(self):
        assert compare("gt", "x", 1) is False
        assert compare("lt", None, 1) is False


def test_helpers_table():
    """Generated code sees every primitive under its helper name."""
    assert HELPERS["_escape"] is escape_html
    assert HELPERS["_lookup"] is deep_get
    assert set(HELPERS) == {
        "_escape", "_stringify", "_lookup", "_is_array", "_member", "_resolve",
        "_strict_equal", "_compare",
    }
