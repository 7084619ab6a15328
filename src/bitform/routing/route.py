"""Route — one path bound to a per-method callback mapping."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from bitform._internal.types import RouteCallback
from bitform.routing.methods import RouteMethod, coerce_method

if TYPE_CHECKING:
    from bitform.http.request import Request
    from bitform.http.response import Response


class Route:
    """A path and the callbacks bound to it, one per HTTP method.

    The path is fixed at construction. Callbacks can be added later with
    ``handle()``; ``methods`` is always derived from the callback mapping,
    never stored on its own.

    Usage::

        route = Route("/users", {RouteMethod.GET: list_users})
        route.handle(RouteMethod.POST, create_user)
        route.methods  # frozenset({GET, POST})
    """

    __slots__ = ("_callbacks", "_path")

    def __init__(
        self,
        path: str,
        callbacks: Mapping[RouteMethod | str, RouteCallback] | None = None,
    ) -> None:
        self._path = path
        self._callbacks: dict[RouteMethod, RouteCallback] = {}
        for method, callback in (callbacks or {}).items():
            self.handle(method, callback)

    def __repr__(self) -> str:
        methods = ", ".join(sorted(self._callbacks))
        return f"Route({self._path!r}, methods=[{methods}])"

    @property
    def path(self) -> str:
        return self._path

    @property
    def callbacks(self) -> Mapping[RouteMethod, RouteCallback]:
        """Read-only view of the bound callbacks."""
        return dict(self._callbacks)

    @property
    def methods(self) -> frozenset[RouteMethod]:
        """Methods that currently have a callback bound."""
        return frozenset(self._callbacks)

    def handle(self, method: RouteMethod | str, callback: RouteCallback) -> "Route":
        """Bind *callback* to *method*, replacing any existing callback.

        Returns the route so calls can be chained.
        """
        self._callbacks[coerce_method(method)] = callback
        return self

    def call(self, method: RouteMethod | str, request: "Request", response: "Response") -> Any:
        """Dispatch to the callback bound to *method*.

        Returns the callback's result unchanged (a coroutine for async
        callbacks). When no callback is bound, returns ``None``; turning
        that into a 404/405 is the provider's job.
        """
        try:
            callback = self._callbacks[coerce_method(method)]
        except (KeyError, ValueError):
            return None
        return callback(request, response)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route lookup."""

    route: Route
    params: dict[str, Any]
