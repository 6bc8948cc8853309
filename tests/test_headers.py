"""Tests for submount.http.headers — immutable case-insensitive headers."""

import pytest

from submount.http.headers import Headers


class TestHeaders:
    def test_case_insensitive(self) -> None:
        headers = Headers([(b"Content-Type", b"text/html")])
        assert headers["content-type"] == "text/html"
        assert headers["CONTENT-TYPE"] == "text/html"
        assert "Content-Type" in headers

    def test_first_value_wins(self) -> None:
        headers = Headers([(b"accept", b"a"), (b"accept", b"b")])
        assert headers["accept"] == "a"
        assert headers.get_list("Accept") == ["a", "b"]

    def test_iteration_dedupes(self) -> None:
        headers = Headers([(b"a", b"1"), (b"B", b"2"), (b"a", b"3")])
        assert list(headers) == ["a", "b"]
        assert len(headers) == 2

    def test_missing(self) -> None:
        headers = Headers()
        assert headers.get("x") is None
        assert "x" not in headers
        assert 1 not in headers
        with pytest.raises(KeyError):
            headers["x"]

    def test_read_only(self) -> None:
        headers = Headers()
        with pytest.raises(AttributeError):
            headers.extra = "x"  # type: ignore[attr-defined]

    def test_repr(self) -> None:
        assert repr(Headers([(b"a", b"1")])) == "Headers({'a': '1'})"
