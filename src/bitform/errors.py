"""Bitform exception hierarchy.

Shared across the application, routing layer, and providers so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class BitformError(Exception):
    """Base for all bitform-specific errors."""


class ConfigurationError(BitformError):
    """Raised when the application or a provider is misconfigured.

    Typically raised by ``Application.run()`` when no provider was set,
    before any storage, module, or page is touched.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(BitformError):
    """An error that maps directly to an HTTP status code.

    Raised by the route table or by handlers. Providers catch these and
    turn them into responses; the routing core never does.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405 — a route exists for the path but not for this method.

    Includes an ``Allow`` header listing the methods bound on the route.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )


class NotAcceptable(HTTPError):  # noqa: N818
    """406 — none of the offered representations is acceptable.

    Never raised by the core itself. Handlers raise it after an
    ``accepts*()`` call returns ``None``.
    """

    def __init__(self, detail: str = "Not Acceptable") -> None:
        super().__init__(status=406, detail=detail)
