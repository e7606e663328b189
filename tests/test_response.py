"""Tests for pluto.http.response and the wire conversion."""

from pluto.config import AppConfig
from pluto.http.response import HttpResponse, encode_body
from pluto.http.wire import RawHttpRequest, RawHttpResponse


class TestHttpResponse:
    def test_defaults(self) -> None:
        r = HttpResponse()
        assert r.status_code == 200
        assert dict(r.headers) == {}
        assert r.body == ""

    def test_with_status(self) -> None:
        assert HttpResponse().with_status(201).status_code == 201

    def test_with_header(self) -> None:
        r = HttpResponse().with_header("X-Custom", "value")
        assert dict(r.headers) == {"X-Custom": "value"}

    def test_with_header_replaces_case_insensitively(self) -> None:
        r = HttpResponse(headers={"content-type": "text/plain"}).with_header("Content-Type", "text/html")
        assert dict(r.headers) == {"Content-Type": "text/html"}

    def test_with_headers(self) -> None:
        r = HttpResponse().with_headers({"A": "1", "B": "2"})
        assert r.header("a") == "1"
        assert r.header("B") == "2"

    def test_without_header(self) -> None:
        r = HttpResponse(headers={"X-Foo": "bar"}).without_header("x-foo")
        assert not r.has_header("X-Foo")

    def test_chaining_returns_new_objects(self) -> None:
        r1 = HttpResponse(body="hello")
        r2 = r1.with_status(201)
        r3 = r2.with_header("X-Foo", "bar")

        assert r1.status_code == 200
        assert r2.status_code == 201
        assert dict(r2.headers) == {}
        assert dict(r3.headers) == {"X-Foo": "bar"}

    def test_json_shortcut(self) -> None:
        r = HttpResponse.json({"ok": True}, status_code=202)
        assert r.status_code == 202
        assert r.body_bytes == b'{"ok":true}'

    def test_text_shortcut(self) -> None:
        r = HttpResponse.text("hi")
        assert r.header("Content-Type") == "text/plain"
        assert r.body_bytes == b"hi"


class TestEncodeBody:
    def test_bytes_pass_through(self) -> None:
        assert encode_body(b"\x00\xff") == b"\x00\xff"

    def test_text_is_utf8(self) -> None:
        assert encode_body("héllo") == "héllo".encode()

    def test_json_is_compact(self) -> None:
        assert encode_body({"statusCode": 200, "message": "Hello"}) == b'{"statusCode":200,"message":"Hello"}'

    def test_json_scalars(self) -> None:
        assert encode_body(None) == b"null"
        assert encode_body([1, 2]) == b"[1,2]"
        assert encode_body(False) == b"false"


class TestRawHttpResponse:
    def test_default_content_type_added(self) -> None:
        raw = RawHttpResponse.from_response(HttpResponse(body={"a": 1}))
        assert raw.headers["Content-Type"] == "application/json"
        assert raw.body == b'{"a":1}'

    def test_existing_content_type_kept(self) -> None:
        raw = RawHttpResponse.from_response(HttpResponse(headers={"content-type": "text/html"}, body="<p>"))
        assert raw.headers == {"content-type": "text/html", "X-Powered-By": "Pluto"}

    def test_powered_by_always_set(self) -> None:
        raw = RawHttpResponse.from_response(HttpResponse(headers={"X-Powered-By": "other"}))
        assert raw.headers["X-Powered-By"] == "Pluto"

    def test_config_overrides(self) -> None:
        cfg = AppConfig(powered_by="Test", default_content_type="text/plain")
        raw = RawHttpResponse.from_response(HttpResponse(body="x"), cfg)
        assert raw.headers == {"Content-Type": "text/plain", "X-Powered-By": "Test"}

    def test_upgrade_defaults_false(self) -> None:
        raw = RawHttpResponse.from_response(HttpResponse())
        assert raw.upgrade is False
        assert raw.with_upgrade(True).upgrade is True

    def test_to_dict(self) -> None:
        raw = RawHttpResponse.from_response(HttpResponse(status_code=204, body=b""))
        assert raw.to_dict() == {
            "status_code": 204,
            "headers": {"Content-Type": "application/json", "X-Powered-By": "Pluto"},
            "body": b"",
            "upgrade": False,
        }


class TestRawHttpRequest:
    def test_from_dict_with_pairs(self) -> None:
        raw = RawHttpRequest.from_dict(
            {"method": "GET", "url": "/?a=1", "headers": [["Host", "x"]], "body": [104, 105]}
        )
        assert raw.headers == (("Host", "x"),)
        assert raw.body == b"hi"

    def test_from_dict_with_mapping_and_text_body(self) -> None:
        raw = RawHttpRequest.from_dict({"method": "POST", "url": "/", "headers": {"A": "1"}, "body": "{}"})
        assert raw.headers == (("A", "1"),)
        assert raw.body == b"{}"

    def test_from_dict_defaults(self) -> None:
        raw = RawHttpRequest.from_dict({"method": "GET", "url": "/"})
        assert raw.headers == ()
        assert raw.body == b""
