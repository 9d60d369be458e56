"""Tests for roost.http.response — immutable Response transformations."""

from roost.http.response import Response


class TestResponse:
    def test_defaults(self) -> None:
        response = Response()
        assert response.body == ""
        assert response.status == 200
        assert response.content_type == "text/plain; charset=utf-8"
        assert response.headers == ()

    def test_with_methods_return_new_instances(self) -> None:
        original = Response("hi")
        changed = original.with_status(404)
        assert original.status == 200
        assert changed.status == 404
        assert changed.body == "hi"

    def test_headers_accumulate(self) -> None:
        response = Response().with_header("Allow", "GET").with_header("X-A", "1")
        assert response.headers == (("Allow", "GET"), ("X-A", "1"))

    def test_body_conversions(self) -> None:
        assert Response("é").body_bytes == "é".encode()
        assert Response(b"abc").body_bytes == b"abc"
        assert Response(b"abc").text == "abc"
        assert Response("abc").text == "abc"
