"""The Router capability — register, scope, and group routes.

A ``Router`` knows how to bind callbacks to paths. Every convenience
verb funnels into ``route()``, and ``route()`` funnels into a single
``_add_route()`` hook that concrete routers implement. Providers are
routers; ``group()`` hands out scoped routers that prefix paths and
forward to their parent.
"""

import posixpath
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from typing import Any

from bitform._internal.types import RouteCallback
from bitform.routing.methods import ALL_METHODS, RouteMethod, coerce_methods
from bitform.routing.route import Route

Methods = RouteMethod | str | Iterable[RouteMethod | str]


def normalize_path(path: str) -> str:
    """Canonical form of a route path.

    Leading slash ensured, repeated slashes collapsed, trailing slash
    dropped (except for the root)::

        normalize_path("users//42/")  -> "/users/42"
        normalize_path("")            -> "/"
    """
    parts = [part for part in path.split("/") if part]
    return "/" + "/".join(parts)


def join_paths(prefix: str, path: str) -> str:
    """Join a group prefix and a route path, POSIX style.

    Both sides are treated as relative to each other regardless of
    leading slashes, and the result is normalized::

        join_paths("/a", "/b")   -> "/a/b"
        join_paths("/a/", "b/")  -> "/a/b"
        join_paths("/", "/")     -> "/"
    """
    return normalize_path(posixpath.join("/", prefix.strip("/"), path.strip("/")))


class Router(ABC):
    """Anything routes can be registered on.

    Verbs may be used directly or as decorators::

        router.get("/", index)

        @router.post("/users")
        def create_user(request, response): ...
    """

    __slots__ = ()

    @abstractmethod
    def _add_route(
        self,
        methods: tuple[RouteMethod, ...],
        path: str,
        callback: RouteCallback,
    ) -> Route:
        """Bind *callback* to every method in *methods* on *path*."""

    def route(
        self,
        methods: Methods,
        path: str,
        callback: RouteCallback | None = None,
    ) -> Any:
        """Bind *callback* to one or more methods on *path*.

        When a route for *path* already exists its callbacks are merged,
        method by method, with the last registration winning. Returns the
        ``Route`` so more methods can be chained with ``handle()``.

        Without *callback*, returns a decorator that registers the
        decorated function and hands it back unchanged.
        """
        resolved = coerce_methods(methods)
        if callback is None:

            def decorator(func: RouteCallback) -> RouteCallback:
                self._add_route(resolved, path, func)
                return func

            return decorator
        return self._add_route(resolved, path, callback)

    # -- Convenience verbs --

    def get(self, path: str, callback: RouteCallback | None = None) -> Any:
        return self.route(RouteMethod.GET, path, callback)

    def post(self, path: str, callback: RouteCallback | None = None) -> Any:
        return self.route(RouteMethod.POST, path, callback)

    def put(self, path: str, callback: RouteCallback | None = None) -> Any:
        return self.route(RouteMethod.PUT, path, callback)

    def delete(self, path: str, callback: RouteCallback | None = None) -> Any:
        return self.route(RouteMethod.DELETE, path, callback)

    def head(self, path: str, callback: RouteCallback | None = None) -> Any:
        return self.route(RouteMethod.HEAD, path, callback)

    def connect(self, path: str, callback: RouteCallback | None = None) -> Any:
        return self.route(RouteMethod.CONNECT, path, callback)

    def options(self, path: str, callback: RouteCallback | None = None) -> Any:
        return self.route(RouteMethod.OPTIONS, path, callback)

    def trace(self, path: str, callback: RouteCallback | None = None) -> Any:
        return self.route(RouteMethod.TRACE, path, callback)

    def patch(self, path: str, callback: RouteCallback | None = None) -> Any:
        return self.route(RouteMethod.PATCH, path, callback)

    def all(self, path: str, callback: RouteCallback | None = None) -> Any:
        """Bind *callback* to GET, POST, PUT and DELETE.

        HEAD, CONNECT, OPTIONS, TRACE and PATCH are not included.
        """
        return self.route(ALL_METHODS, path, callback)

    # -- Scoping --

    def group(self, path: str, callback: Callable[["Router"], Any]) -> "ScopedRouter":
        """Register routes under a path prefix.

        *callback* receives a scoped router and runs before ``group()``
        returns. Groups nest; the outer prefix always comes first::

            def api(r):
                r.group("/v1", lambda v1: v1.get("/users", list_users))

            provider.group("/api", api)  # GET /api/v1/users
        """
        scoped = ScopedRouter(self, path)
        callback(scoped)
        return scoped


class ScopedRouter(Router):
    """A router that prefixes every path and forwards to its parent."""

    __slots__ = ("_parent", "_prefix")

    def __init__(self, parent: Router, prefix: str) -> None:
        self._parent = parent
        self._prefix = prefix

    def __repr__(self) -> str:
        return f"ScopedRouter(prefix={self.prefix!r})"

    @property
    def prefix(self) -> str:
        """Full prefix, including every enclosing group."""
        if isinstance(self._parent, ScopedRouter):
            return join_paths(self._parent.prefix, self._prefix)
        return normalize_path(self._prefix)

    def _add_route(
        self,
        methods: tuple[RouteMethod, ...],
        path: str,
        callback: RouteCallback,
    ) -> Route:
        return self._parent._add_route(methods, join_paths(self._prefix, path), callback)
