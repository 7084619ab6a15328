"""HTTP verbs a route can bind."""

from collections.abc import Iterable
from enum import StrEnum


class RouteMethod(StrEnum):
    """The closed set of HTTP methods a route can handle."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"
    CONNECT = "CONNECT"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"
    PATCH = "PATCH"


# ``Router.all()`` binds exactly these four. HEAD, CONNECT, OPTIONS,
# TRACE and PATCH are left out on purpose.
ALL_METHODS: tuple[RouteMethod, ...] = (
    RouteMethod.GET,
    RouteMethod.POST,
    RouteMethod.PUT,
    RouteMethod.DELETE,
)


def coerce_method(method: RouteMethod | str) -> RouteMethod:
    """Return *method* as a ``RouteMethod``, accepting any letter case.

    Raises ``ValueError`` for anything outside the nine known verbs.
    """
    if isinstance(method, RouteMethod):
        return method
    try:
        return RouteMethod(method.upper())
    except ValueError:
        msg = f"Unknown HTTP method {method!r}"
        raise ValueError(msg) from None


def coerce_methods(
    methods: RouteMethod | str | Iterable[RouteMethod | str],
) -> tuple[RouteMethod, ...]:
    """Normalize a single method or an iterable of methods to a tuple.

    Order is preserved and duplicates are dropped.
    """
    if isinstance(methods, str):
        return (coerce_method(methods),)
    return tuple(dict.fromkeys(coerce_method(m) for m in methods))
