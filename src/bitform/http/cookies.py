"""Cookie options, Set-Cookie serialization, and cookie parsing.

Consolidates the read side (``parse_cookies`` and ``unsign_cookies``,
used by Request) and the write side (``Cookie``, used by Response).

Signed cookies carry an ``s:`` prefix followed by an ``itsdangerous``
signature of the value, so a tampered value is detected on the way in.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from email.utils import format_datetime
from urllib.parse import quote, unquote

from itsdangerous import BadSignature, Signer

SIGNED_PREFIX = "s:"


@dataclass(frozen=True, slots=True, kw_only=True)
class CookieOptions:
    """Attributes shared by every ``Set-Cookie`` directive.

    ``max_age`` is in seconds. ``encode`` turns the value into its wire
    form and defaults to percent-encoding.
    """

    domain: str | None = None
    expires: datetime | None = None
    http_only: bool = True
    max_age: int | None = None
    path: str = "/"
    secure: bool = False
    signed: bool = False
    same_site: str | None = "lax"
    encode: Callable[[str], str] = quote


@dataclass(frozen=True, slots=True, kw_only=True)
class Cookie(CookieOptions):
    """A named cookie value plus its options."""

    name: str
    value: str

    def to_header_value(self) -> str:
        """Serialize to a ``Set-Cookie`` header value string."""
        parts = [f"{self.name}={self.encode(self.value)}"]
        if self.max_age is not None:
            parts.append(f"Max-Age={self.max_age}")
        if self.domain:
            parts.append(f"Domain={self.domain}")
        if self.path:
            parts.append(f"Path={self.path}")
        if self.expires is not None:
            expires = self.expires
            if expires.tzinfo is None:
                expires = expires.replace(tzinfo=timezone.utc)
            parts.append(f"Expires={format_datetime(expires.astimezone(timezone.utc), usegmt=True)}")
        if self.http_only:
            parts.append("HttpOnly")
        if self.secure:
            parts.append("Secure")
        if self.same_site:
            parts.append(f"SameSite={self.same_site.capitalize()}")
        return "; ".join(parts)


def parse_cookies(header: str) -> dict[str, str]:
    """Parse a ``Cookie`` header value into a name-value dict.

    Values are percent-decoded. Pairs without ``=`` are skipped and a
    repeated name keeps its last value.
    """
    if not header:
        return {}
    cookies: dict[str, str] = {}
    for pair in header.split(";"):
        key, sep, value = pair.strip().partition("=")
        if sep:
            cookies[key.strip()] = unquote(value.strip())
    return cookies


def sign_value(value: str, secret: str) -> str:
    """Return the signed wire form of *value* (``s:<value>.<signature>``)."""
    return SIGNED_PREFIX + Signer(secret).sign(value).decode("utf-8")


def unsign_value(value: str, secret: str) -> str | None:
    """Verify a signed cookie value and return the original.

    Returns ``None`` when the value is not signed or the signature
    does not match.
    """
    if not value.startswith(SIGNED_PREFIX):
        return None
    try:
        return Signer(secret).unsign(value[len(SIGNED_PREFIX) :]).decode("utf-8")
    except BadSignature:
        return None


def unsign_cookies(cookies: Mapping[str, str], secret: str | None) -> dict[str, str]:
    """Pick the signed cookies out of *cookies* and verify them.

    Cookies whose signature does not verify are left out.
    """
    if not secret:
        return {}
    verified: dict[str, str] = {}
    for name, value in cookies.items():
        original = unsign_value(value, secret)
        if original is not None:
            verified[name] = original
    return verified
