"""Tests for submount.http.response — immutable response snapshots."""

import pytest

from submount.http.response import Response


class TestResponse:
    def test_defaults(self) -> None:
        response = Response()
        assert response.status == 200
        assert response.body == ""
        assert response.content_type == "text/plain; charset=utf-8"

    def test_with_methods_return_new_instances(self) -> None:
        original = Response("hi")
        changed = original.with_status(201).with_header("X-A", "1").with_content_type("text/html")
        assert original.status == 200
        assert original.headers == ()
        assert changed.status == 201
        assert changed.headers == (("X-A", "1"),)
        assert changed.content_type == "text/html"

    def test_text_and_bytes(self) -> None:
        assert Response("café").body_bytes == "café".encode()
        assert Response(b"caf\xc3\xa9").text == "café"

    def test_header_lookup(self) -> None:
        response = Response(headers=(("X-Thing", "1"),))
        assert response.header("x-thing") == "1"
        assert response.header("missing", "default") == "default"

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            Response().status = 500  # type: ignore[misc]
