"""Mutable HTTP response builder.

One Response exists per in-flight request. Handlers receive it and
mutate it through chainable methods; every mutator returns the same
instance::

    response.set_status(201).set_header("X-Id", "42").json({"ok": True})

Chained calls apply in evaluation order. Nothing is sent until the
handler returns and the provider serializes the response.
"""

import json as json_module
import mimetypes
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from http import HTTPStatus
from pathlib import Path
from typing import Any
from urllib.parse import quote

from bitform.errors import ConfigurationError, NotFound
from bitform.http.cookies import Cookie, sign_value
from bitform.http.negotiation import normalize_type

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _phrase(status: int) -> str:
    """Reason phrase for *status*, or the bare code when it has none."""
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return str(status)


class Response:
    """A chainable builder for the outbound message.

    Attributes:
        status: HTTP status code (default 200).
        body: Body bytes, or ``None`` when nothing was sent.
        cookies: ``Set-Cookie`` directives, in the order they were set.
        file: File to stream instead of ``body``, set by ``send_file()``.
    """

    __slots__ = ("_headers", "_secret", "body", "cookies", "file", "status")

    def __init__(self, *, status: int = 200, secret: str | None = None) -> None:
        self.status = status
        self.body: bytes | None = None
        self.cookies: list[Cookie] = []
        self.file: Path | None = None
        self._headers: list[tuple[str, str]] = []
        self._secret = secret

    def __repr__(self) -> str:
        return f"Response(status={self.status}, content_type={self.content_type!r})"

    # -- Read access --

    @property
    def headers(self) -> tuple[tuple[str, str], ...]:
        """Header pairs in the order they were set."""
        return tuple(self._headers)

    @property
    def content_type(self) -> str | None:
        return self.get_header("content-type")

    @property
    def body_bytes(self) -> bytes:
        return self.body or b""

    @property
    def text(self) -> str:
        return self.body_bytes.decode("utf-8")

    def get_header(self, name: str) -> str | None:
        """First value of header *name*, case-insensitively."""
        lowered = name.lower()
        for key, value in self._headers:
            if key.lower() == lowered:
                return value
        return None

    def get_headers(self, name: str) -> list[str]:
        lowered = name.lower()
        return [value for key, value in self._headers if key.lower() == lowered]

    # -- Status --

    def set_status(self, status: int) -> "Response":
        self.status = status
        return self

    def send_status(self, status: int) -> "Response":
        """Set the status and use its reason phrase as a plain-text body."""
        return self.set_status(status).set_type("text/plain; charset=utf-8").send(_phrase(status))

    # -- Headers --

    def set_header(self, name: str, value: str | Sequence[str]) -> "Response":
        """Set header *name*, replacing every existing value.

        A list of values produces one header line per value.
        """
        self.remove_header(name)
        values = [value] if isinstance(value, str) else list(value)
        self._headers.extend((name, str(v)) for v in values)
        return self

    def set_headers(self, headers: Mapping[str, str | Sequence[str]]) -> "Response":
        for name, value in headers.items():
            self.set_header(name, value)
        return self

    def append(self, name: str, value: str | Sequence[str]) -> "Response":
        """Add values to header *name*, keeping the existing ones."""
        values = [value] if isinstance(value, str) else list(value)
        self._headers.extend((name, str(v)) for v in values)
        return self

    def remove_header(self, name: str) -> "Response":
        lowered = name.lower()
        self._headers = [(k, v) for k, v in self._headers if k.lower() != lowered]
        return self

    def set_type(self, content_type: str) -> "Response":
        """Set ``Content-Type``; extensions like ``"json"`` are expanded."""
        if "/" not in content_type:
            content_type = normalize_type(content_type)
        return self.set_header("Content-Type", content_type)

    def vary(self, field: str) -> "Response":
        """Add *field* to the ``Vary`` header unless it is already listed."""
        current = [v.strip() for v in ", ".join(self.get_headers("vary")).split(",") if v.strip()]
        if "*" in current:
            return self
        if field == "*":
            return self.set_header("Vary", "*")
        if field.lower() not in (v.lower() for v in current):
            current.append(field)
        return self.set_header("Vary", ", ".join(current))

    def location(self, url: str) -> "Response":
        return self.set_header("Location", quote(url, safe=":/?#[]@!$&'()*+,;=%~"))

    def redirect(self, url: str, status: int = 302) -> "Response":
        """Redirect to *url* with a short plain-text body."""
        self.set_status(status).location(url)
        self.set_type("text/plain; charset=utf-8")
        self.body = f"{_phrase(status)}. Redirecting to {url}".encode()
        return self

    # -- Cookies --

    def cookie(self, name: str, value: str, **options: Any) -> "Response":
        """Set a cookie. *options* are ``CookieOptions`` fields.

        ``signed=True`` signs the value with the provider's secret key.
        Raises ``ConfigurationError`` when no secret key is configured.
        """
        if options.get("signed"):
            if not self._secret:
                msg = "Signed cookies require a secret key on the provider."
                raise ConfigurationError(msg)
            value = sign_value(value, self._secret)
        self.cookies.append(Cookie(name=name, value=value, **options))
        return self

    def clear_cookie(self, name: str, **options: Any) -> "Response":
        """Expire cookie *name* on the client.

        Pass the same ``path`` / ``domain`` the cookie was set with.
        """
        options = {**options, "max_age": 0, "expires": _EPOCH, "signed": False}
        self.cookies.append(Cookie(name=name, value="", **options))
        return self

    # -- Body --

    def send(self, body: str | bytes | Any = None) -> "Response":
        """Set the body.

        Strings default to ``text/html``, bytes to
        ``application/octet-stream``, anything else is sent as JSON.
        An explicit ``Content-Type`` is never overridden.
        """
        match body:
            case None:
                self.body = b""
            case str():
                if self.content_type is None:
                    self.set_type("text/html; charset=utf-8")
                self.body = body.encode("utf-8")
            case bytes() | bytearray():
                if self.content_type is None:
                    self.set_type("application/octet-stream")
                self.body = bytes(body)
            case _:
                return self.json(body)
        return self

    def json(self, data: Any) -> "Response":
        if self.content_type is None:
            self.set_type("application/json")
        self.body = json_module.dumps(data).encode("utf-8")
        return self

    def send_file(self, path: str | Path, *, content_type: str | None = None) -> "Response":
        """Transfer the file at *path* as the body.

        Raises ``NotFound`` when *path* is not a regular file.
        """
        file_path = Path(path)
        if not file_path.is_file():
            raise NotFound(f"File not found: {file_path.name}")
        if content_type is not None:
            self.set_type(content_type)
        elif self.content_type is None:
            guessed, _ = mimetypes.guess_type(file_path.name)
            self.set_type(guessed or "application/octet-stream")
        self.file = file_path
        self.body = None
        return self

    def attachment(self, filename: str | None = None) -> "Response":
        """Mark the body as a download via ``Content-Disposition``."""
        if filename is None:
            return self.set_header("Content-Disposition", "attachment")
        guessed, _ = mimetypes.guess_type(filename)
        if guessed and self.content_type is None:
            self.set_type(guessed)
        return self.set_header(
            "Content-Disposition",
            f"attachment; filename=\"{filename}\"; filename*=UTF-8''{quote(filename)}",
        )

    def download(self, path: str | Path, filename: str | None = None) -> "Response":
        file_path = Path(path)
        return self.attachment(filename or file_path.name).send_file(file_path)
