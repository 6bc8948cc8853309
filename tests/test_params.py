"""Tests for submount.routing.params — decoding and merging captures."""

from submount.routing.params import merge_params, safe_unquote


class TestSafeUnquote:
    def test_decodes_escapes(self) -> None:
        assert safe_unquote("hello%20world") == "hello world"

    def test_decodes_utf8(self) -> None:
        assert safe_unquote("caf%C3%A9") == "café"

    def test_plain_value_unchanged(self) -> None:
        assert safe_unquote("abc") == "abc"

    def test_plus_is_not_a_space(self) -> None:
        assert safe_unquote("a+b") == "a+b"

    def test_stray_percent_returns_raw(self) -> None:
        assert safe_unquote("100%") == "100%"

    def test_mixed_valid_and_malformed_returns_raw(self) -> None:
        assert safe_unquote("a%20b%zz") == "a%20b%zz"

    def test_truncated_escape_returns_raw(self) -> None:
        assert safe_unquote("%E0%A4%A") == "%E0%A4%A"

    def test_invalid_utf8_returns_raw(self) -> None:
        assert safe_unquote("%FF") == "%FF"


class TestMergeParams:
    def test_new_keys_win(self) -> None:
        assert merge_params({"id": "a"}, {"id": "b"}) == {"id": "b"}

    def test_previous_only_keys_survive(self) -> None:
        merged = merge_params({"id": "foo"}, {"id2": "bar"})
        assert merged == {"id": "foo", "id2": "bar"}

    def test_order_is_previous_then_new(self) -> None:
        merged = merge_params({"a": "1", "b": "2"}, {"c": "3", "a": "4"})
        assert list(merged) == ["a", "b", "c"]
        assert merged["a"] == "4"

    def test_positional_keys(self) -> None:
        assert merge_params({0: "x"}, {0: "y", 1: "z"}) == {0: "y", 1: "z"}

    def test_does_not_mutate_arguments(self) -> None:
        previous = {"id": "foo"}
        captured = {"id2": "bar"}
        merge_params(previous, captured)
        assert previous == {"id": "foo"}
        assert captured == {"id2": "bar"}

    def test_nothing_to_merge_returns_copy(self) -> None:
        previous = {"id": "foo"}
        for captured in ({}, None):
            merged = merge_params(previous, captured)
            assert merged == previous
            assert merged is not previous

    def test_writes_to_result_do_not_reach_previous(self) -> None:
        previous = {"id": "foo"}
        merge_params(previous, {})["extra"] = "x"
        assert previous == {"id": "foo"}
