"""Tests for bitform.http.request — the immutable Request."""

from typing import Any

import pytest

from bitform.http.cookies import sign_value
from bitform.http.headers import Headers
from bitform.http.query import QueryParams
from bitform.http.request import Request


def make_request(headers: dict[str, str] | None = None, **kwargs: Any) -> Request:
    kwargs.setdefault("method", "GET")
    kwargs.setdefault("path", "/")
    return Request(headers=Headers.of(headers or {}), **kwargs)


def make_scope(**overrides: Any) -> dict[str, Any]:
    scope: dict[str, Any] = {
        "type": "http",
        "method": "get",
        "path": "/users",
        "query_string": b"page=2",
        "headers": [(b"host", b"example.com")],
        "scheme": "http",
        "http_version": "1.1",
        "server": ("example.com", 80),
        "client": ("10.0.0.1", 5000),
    }
    scope.update(overrides)
    return scope


class TestRequestBasics:
    def test_frozen(self) -> None:
        request = make_request()
        with pytest.raises(AttributeError):
            request.method = "POST"  # type: ignore[misc]

    def test_url_with_query(self) -> None:
        request = make_request(path="/search", query=QueryParams(b"q=cats"))
        assert request.url == "/search?q=cats"

    def test_url_without_query(self) -> None:
        assert make_request(path="/search").url == "/search"

    def test_secure(self) -> None:
        assert make_request(protocol="https").secure is True
        assert make_request().secure is False

    def test_ip(self) -> None:
        assert make_request(client=("10.0.0.1", 5000)).ip == "10.0.0.1"
        assert make_request().ip == ""

    def test_xhr(self) -> None:
        assert make_request({"X-Requested-With": "XMLHttpRequest"}).xhr is True
        assert make_request().xhr is False

    def test_get_header_case_insensitive(self) -> None:
        assert make_request({"Content-Type": "text/plain"}).get("CONTENT-TYPE") == "text/plain"

    def test_referrer_alias(self) -> None:
        request = make_request({"Referer": "https://example.com/"})
        assert request.get("Referrer") == "https://example.com/"
        assert request.get("referer") == "https://example.com/"

    def test_with_params(self) -> None:
        request = make_request()
        bound = request.with_params({"id": 7})
        assert bound.params == {"id": 7}
        assert request.params == {}


class TestHostname:
    def test_strips_port(self) -> None:
        assert make_request({"Host": "example.com:8080"}).hostname == "example.com"

    def test_ipv6(self) -> None:
        assert make_request({"Host": "[::1]:8080"}).hostname == "[::1]"

    def test_unterminated_ipv6_kept_whole(self) -> None:
        request = make_request({"Host": "[::1"})
        assert request.hostname == "[::1"
        assert request.subdomains == []

    def test_falls_back_to_server(self) -> None:
        assert make_request(server=("internal", 80)).hostname == "internal"

    def test_subdomains(self) -> None:
        request = make_request({"Host": "tobi.ferrets.example.com"})
        assert request.subdomains == ["ferrets", "tobi"]

    def test_no_subdomains_for_ip(self) -> None:
        assert make_request({"Host": "192.168.0.1"}).subdomains == []

    def test_no_subdomains_for_base_domain(self) -> None:
        assert make_request({"Host": "example.com"}).subdomains == []


class TestBody:
    def test_text(self) -> None:
        assert make_request(body=b"hello").text() == "hello"
        assert make_request().text() == ""

    def test_json(self) -> None:
        assert make_request(body=b'{"a": 1}').json() == {"a": 1}

    def test_is_type_without_body(self) -> None:
        request = make_request({"Content-Type": "application/json"})
        assert request.is_type("json") is None

    def test_is_type_match(self) -> None:
        request = make_request({"Content-Type": "application/json"}, body=b"{}")
        assert request.is_type("html", "json") == "json"

    def test_is_type_mismatch(self) -> None:
        request = make_request({"Content-Type": "text/html"}, body=b"<p>")
        assert request.is_type("json") is False

    def test_empty_body_still_counts(self) -> None:
        request = make_request({"Content-Type": "text/plain"}, body=b"")
        assert request.has_body is True
        assert request.is_type("text/*") == "text/plain"


class TestAccepts:
    def test_accepts_best(self) -> None:
        request = make_request({"Accept": "text/html, application/json;q=0.5"})
        assert request.accepts("json", "html") == "html"

    def test_accepts_without_header(self) -> None:
        assert make_request().accepts("json", "html") == "json"

    def test_accepts_no_arguments_lists_types(self) -> None:
        request = make_request({"Accept": "application/json;q=0.5, text/html"})
        assert request.accepts() == ["text/html", "application/json"]

    def test_accepts_none_acceptable(self) -> None:
        assert make_request({"Accept": "image/png"}).accepts("json") is None

    def test_accepts_languages(self) -> None:
        request = make_request({"Accept-Language": "fr;q=0.5, en"})
        assert request.accepts_languages("fr", "en") == "en"

    def test_accepts_encodings(self) -> None:
        request = make_request({"Accept-Encoding": "gzip, br;q=0.5"})
        assert request.accepts_encodings("br", "gzip") == "gzip"

    def test_accepts_charsets(self) -> None:
        request = make_request({"Accept-Charset": "utf-8"})
        assert request.accepts_charsets("latin-1", "utf-8") == "utf-8"


class TestFromAsgi:
    def test_basic_fields(self) -> None:
        request = Request.from_asgi(make_scope())
        assert request.method == "GET"
        assert request.path == "/users"
        assert request.query.get("page") == "2"
        assert request.hostname == "example.com"
        assert request.ip == "10.0.0.1"
        assert request.server == ("example.com", 80)

    def test_scheme(self) -> None:
        assert Request.from_asgi(make_scope(scheme="https")).secure is True

    def test_empty_body_without_length_is_absent(self) -> None:
        assert Request.from_asgi(make_scope(), b"").body is None

    def test_declared_empty_body_is_present(self) -> None:
        scope = make_scope(headers=[(b"content-length", b"0")])
        assert Request.from_asgi(scope, b"").body == b""

    def test_body(self) -> None:
        assert Request.from_asgi(make_scope(), b"data").body == b"data"

    def test_cookies(self) -> None:
        scope = make_scope(headers=[(b"cookie", b"theme=dark; lang=en")])
        assert Request.from_asgi(scope).cookies == {"theme": "dark", "lang": "en"}

    def test_signed_cookies(self) -> None:
        cookie = f"sid={sign_value('user-1', 'k')}; forged=s:nope.bad"
        scope = make_scope(headers=[(b"cookie", cookie.encode("latin-1"))])
        request = Request.from_asgi(scope, secret="k")
        assert request.signed_cookies == {"sid": "user-1"}
        assert "sid" in request.cookies

    def test_signed_cookies_without_secret(self) -> None:
        cookie = f"sid={sign_value('user-1', 'k')}"
        scope = make_scope(headers=[(b"cookie", cookie.encode("latin-1"))])
        assert Request.from_asgi(scope).signed_cookies == {}
