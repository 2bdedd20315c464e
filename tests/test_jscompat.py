"""
Tests for JavaScript-style members of strings and sequences.
"""

from stache.jscompat import SEQUENCE_MEMBERS, STRING_MEMBERS


def s(value, name):
    return STRING_MEMBERS[name](value)


def seq(value, name):
    return SEQUENCE_MEMBERS[name](value)


class TestStringMembers:

    def test_case_and_trim(self):
        assert s("Ann", "toUpperCase")() == "ANN"
        assert s("Ann", "toLowerCase")() == "ann"
        assert s("  x ", "trim")() == "x"

    def test_split(self):
        assert s("a,b,c", "split")(",") == ["a", "b", "c"]
        assert s("a,b,c", "split")(",", 2) == ["a", "b"]
        assert s("abc", "split")("") == ["a", "b", "c"]
        assert s("abc", "split")() == ["abc"]

    def test_slice_and_substring(self):
        assert s("hello", "slice")(1, 3) == "el"
        assert s("hello", "slice")(-3) == "llo"
        assert s("hello", "substring")(3, 1) == "el"
        assert s("hello", "substring")(-2, 2) == "he"

    def test_char_at(self):
        assert s("abc", "charAt")(1) == "b"
        assert s("abc", "charAt")(10) == ""
        assert s("abc", "charAt")() == "a"

    def test_search(self):
        assert s("hello", "includes")("ell")
        assert s("hello", "indexOf")("l") == 2
        assert s("hello", "indexOf")("z") == -1


class TestSequenceMembers:

    def test_join(self):
        assert seq([1, None, "x"], "join")() == "1,,x"
        assert seq(["a", "b"], "join")(" / ") == "a / b"

    def test_filter_and_map(self):
        assert seq([1, 2, 3, 4], "filter")(lambda n: n % 2 == 0) == [2, 4]
        assert seq([1, 2], "map")(lambda n: n * 10) == [10, 20]

    def test_search(self):
        assert seq(["a", "b"], "includes")("b")
        assert seq(["a", "b"], "indexOf")("b") == 1
        assert seq(["a", "b"], "indexOf")("z") == -1

    def test_length_and_slice(self):
        assert seq((1, 2, 3), "length") == 3
        assert seq([1, 2, 3], "slice")(1) == [2, 3]
