"""Provider — the serving backend an application runs on.

A provider is a ``Router`` that owns the live route table, knows where
it listens, and blocks in ``start()`` while serving. Concrete providers
decide how requests reach ``resolve()``; see ``bitform.providers.asgi``.
"""

import logging
from abc import abstractmethod

from bitform._internal.types import RouteCallback
from bitform.config import ProviderConfig, merge_with_defaults
from bitform.routing.methods import RouteMethod
from bitform.routing.route import Route, RouteMatch
from bitform.routing.router import Router, normalize_path
from bitform.routing.table import RouteTable

logger = logging.getLogger("bitform.routing")


class Provider(Router):
    """A backend that registers routes and serves them.

    Lifecycle: constructed, then routes are registered while the
    application prepares, then ``start()`` serves until the process
    ends. Registering routes after ``start()`` is not supported.

    Subclasses implement ``start()``::

        class MyProvider(Provider):
            def start(self) -> None:
                serve_forever(self.host, self.port, self.resolve)
    """

    def __init__(self, config: ProviderConfig | None = None) -> None:
        self._config = merge_with_defaults(config)
        self._table = RouteTable()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(host={self.host!r}, port={self.port!r}, routes={len(self._table)})"

    @property
    def config(self) -> ProviderConfig:
        return self._config

    @property
    def host(self) -> str:
        return self._config.host or ""

    @property
    def port(self) -> int:
        return self._config.port or 0

    @property
    def routes(self) -> list[Route]:
        """Registered routes, in the order their paths were first seen."""
        return self._table.routes

    def resolve(self, method: RouteMethod | str, path: str) -> RouteMatch:
        """Find the route serving *method* on *path*.

        Raises ``NotFound`` / ``MethodNotAllowed`` as ``RouteTable.resolve``.
        """
        return self._table.resolve(method, path)

    def _add_route(
        self,
        methods: tuple[RouteMethod, ...],
        path: str,
        callback: RouteCallback,
    ) -> Route:
        normalized = normalize_path(path)
        route = self._table.get(normalized)
        if route is None:
            route = Route(normalized)
            self._table.add(route)
        for method in methods:
            route.handle(method, callback)
        logger.debug(
            "Registered %s %s -> %s",
            ",".join(methods),
            normalized,
            getattr(callback, "__qualname__", repr(callback)),
        )
        return route

    @abstractmethod
    def start(self) -> None:
        """Begin serving. Does not return under normal operation."""
