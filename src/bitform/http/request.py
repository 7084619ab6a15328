"""Immutable HTTP request.

Frozen metadata plus the already-received body. Providers build one
Request per inbound message; handlers only ever read from it.
"""

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from bitform._internal.asgi import Scope
from bitform.http import negotiation
from bitform.http.cookies import parse_cookies, unsign_cookies
from bitform.http.headers import Headers
from bitform.http.query import QueryParams

# Number of dot-separated host parts that form the base domain.
SUBDOMAIN_OFFSET = 2


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``body`` is ``None`` when the client sent no body at all, which is
    what lets ``is_type()`` tell "no body" apart from "wrong type".
    ``params`` holds the converted path parameters of the matched route.
    """

    method: str
    path: str
    headers: Headers = field(default_factory=Headers)
    query: QueryParams = field(default_factory=QueryParams)
    params: Mapping[str, Any] = field(default_factory=dict)
    cookies: Mapping[str, str] = field(default_factory=dict)
    signed_cookies: Mapping[str, str] = field(default_factory=dict)
    body: bytes | None = None
    protocol: str = "http"
    http_version: str = "1.1"
    server: tuple[str, int] | None = None
    client: tuple[str, int] | None = None

    # -- Computed properties --

    @property
    def secure(self) -> bool:
        """True when the request arrived over HTTPS."""
        return self.protocol == "https"

    @property
    def hostname(self) -> str:
        """Host name from the ``Host`` header, without the port."""
        host = self.headers.get("host")
        if not host:
            return self.server[0] if self.server else ""
        if host.startswith("["):
            # IPv6 literal: keep the brackets, drop the port
            end = host.find("]")
            return host if end == -1 else host[: end + 1]
        return host.split(":", 1)[0]

    @property
    def ip(self) -> str:
        """Remote address of the client, or ``""`` when unknown."""
        return self.client[0] if self.client else ""

    @property
    def subdomains(self) -> list[str]:
        """Subdomains of ``hostname``, most significant first.

        ``tobi.ferrets.example.com`` -> ``["ferrets", "tobi"]``.
        IP addresses have no subdomains.
        """
        hostname = self.hostname
        if not hostname or hostname.startswith("[") or hostname.replace(".", "").isdigit():
            return []
        parts = hostname.split(".")
        return list(reversed(parts))[SUBDOMAIN_OFFSET:]

    @property
    def xhr(self) -> bool:
        """True if the request was sent by ``XMLHttpRequest``."""
        return (self.headers.get("x-requested-with") or "").lower() == "xmlhttprequest"

    @property
    def url(self) -> str:
        """Request path plus query string."""
        if self.query.raw:
            return f"{self.path}?{self.query.raw}"
        return self.path

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def has_body(self) -> bool:
        return self.body is not None

    # -- Header access --

    def get(self, name: str) -> str | None:
        """Return a request header, case-insensitively.

        ``Referer`` and ``Referrer`` are interchangeable.
        """
        lowered = name.lower()
        if lowered in ("referer", "referrer"):
            return self.headers.get("referer") or self.headers.get("referrer")
        return self.headers.get(lowered)

    # -- Body access --

    def text(self) -> str:
        """Body decoded as UTF-8 (empty string when there is no body)."""
        return (self.body or b"").decode("utf-8")

    def json(self) -> Any:
        """Body parsed as JSON."""
        return json_module.loads(self.body or b"null")

    # -- Negotiation --

    def accepts(self, *types: str) -> str | list[str] | None:
        """Best of *types* for the ``Accept`` header, or ``None``.

        Types may be MIME types or extensions (``"json"``, ``"html"``).
        With no arguments, returns the accepted types in preference order.
        """
        return negotiation.best_type(self.headers.joined("accept"), types)

    def accepts_charsets(self, *charsets: str) -> str | list[str] | None:
        return negotiation.best_charset(self.headers.joined("accept-charset"), charsets)

    def accepts_encodings(self, *encodings: str) -> str | list[str] | None:
        return negotiation.best_encoding(self.headers.joined("accept-encoding"), encodings)

    def accepts_languages(self, *languages: str) -> str | list[str] | None:
        return negotiation.best_language(self.headers.joined("accept-language"), languages)

    def is_type(self, *types: str) -> str | bool | None:
        """Check the request's ``Content-Type`` against *types*.

        Three outcomes:

        - ``None`` — the request carries no body
        - the matching type string — the body has an acceptable type
        - ``False`` — there is a body, but its type does not match
        """
        if not self.has_body:
            return None
        return negotiation.match_type(self.content_type, types)

    # -- Factories --

    def with_params(self, params: Mapping[str, Any]) -> "Request":
        """Return a copy carrying the matched route's path parameters."""
        return replace(self, params=dict(params))

    @classmethod
    def from_asgi(
        cls,
        scope: Scope,
        body: bytes = b"",
        *,
        secret: str | None = None,
    ) -> "Request":
        """Create a Request from an ASGI scope and the received body.

        The body counts as absent when it is empty and the client sent
        neither ``Content-Length`` nor ``Transfer-Encoding``.
        """
        headers = Headers(scope.get("headers", ()))
        server = scope.get("server")
        client = scope.get("client")
        cookies = parse_cookies(headers.get("cookie", ""))
        declared = "content-length" in headers or "transfer-encoding" in headers
        return cls(
            method=scope["method"].upper(),
            path=scope["path"],
            headers=headers,
            query=QueryParams(scope.get("query_string", b"")),
            cookies=cookies,
            signed_cookies=unsign_cookies(cookies, secret),
            body=body if body or declared else None,
            protocol=scope.get("scheme", "http"),
            http_version=scope.get("http_version", "1.1"),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
        )
