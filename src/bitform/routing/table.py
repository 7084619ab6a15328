"""Route table with trie-based path resolution.

Providers keep one ``RouteTable``. Routes are indexed by their
normalized path so repeated registrations merge into the same ``Route``;
the trie answers "which route serves this request path".
"""

from dataclasses import dataclass, field
from typing import Any

from bitform.errors import MethodNotAllowed, NotFound
from bitform.routing.methods import RouteMethod, coerce_method
from bitform.routing.params import PathSegment, convert_param, parse_path
from bitform.routing.route import Route, RouteMatch


@dataclass(slots=True)
class _TrieNode:
    """A node in the route trie."""

    # Static segment children: "users" -> node
    children: dict[str, "_TrieNode"] = field(default_factory=dict)
    # Parameter edges, tried in registration order
    params: list[tuple[PathSegment, "_TrieNode"]] = field(default_factory=list)
    # Catch-all ({name:path}) edges, tried in registration order
    catch_alls: list[tuple[PathSegment, Route]] = field(default_factory=list)
    route: Route | None = None


class RouteTable:
    """Registered routes, indexed for lookup and resolution.

    Usage::

        table = RouteTable()
        table.add(Route("/users/{id:int}", {RouteMethod.GET: show_user}))
        match = table.resolve("GET", "/users/42")
        match.params  # {"id": 42}
    """

    __slots__ = ("_by_path", "_root")

    def __init__(self) -> None:
        self._root = _TrieNode()
        self._by_path: dict[str, Route] = {}

    def __len__(self) -> int:
        return len(self._by_path)

    def __contains__(self, path: object) -> bool:
        return path in self._by_path

    @property
    def routes(self) -> list[Route]:
        """All routes, in the order they were first registered."""
        return list(self._by_path.values())

    def get(self, path: str) -> Route | None:
        """Return the route registered for exactly *path*, if any."""
        return self._by_path.get(path)

    def add(self, route: Route) -> None:
        """Insert *route* into the table.

        Raises ``ValueError`` if a route with the same path exists;
        callers merge into the existing route instead.
        """
        if route.path in self._by_path:
            msg = f"A route for {route.path!r} is already registered."
            raise ValueError(msg)

        node = self._root
        for seg in parse_path(route.path):
            if seg.is_catch_all:
                node.catch_alls.append((seg, route))
                break
            if seg.is_param:
                node = self._param_child(node, seg)
            else:
                node = node.children.setdefault(seg.value, _TrieNode())
        else:
            node.route = route

        self._by_path[route.path] = route

    def resolve(self, method: RouteMethod | str, path: str) -> RouteMatch:
        """Find the route serving *method* on *path*.

        Static segments win over parameters, parameters over catch-alls.
        A route that matches the path but has no callback for *method* is
        skipped in favor of the next matching route. Raises ``NotFound`` if
        no route matches the path and ``MethodNotAllowed`` if routes match
        but none binds *method*; ``Allow`` lists the methods of all of them.
        """
        try:
            verb: RouteMethod | None = coerce_method(method)
        except ValueError:
            verb = None

        parts = [p for p in path.split("/") if p]
        allowed: set[RouteMethod] = set()
        result = self._match_node(self._root, parts, 0, {}, verb, allowed)
        if result is not None:
            route, params = result
            return RouteMatch(route=route, params=params)
        if allowed:
            raise MethodNotAllowed(frozenset(allowed))
        raise NotFound(f"No route matches {method} {path!r}")

    def _param_child(self, node: _TrieNode, seg: PathSegment) -> _TrieNode:
        for existing, child in node.params:
            if existing.param_name == seg.param_name and existing.param_type == seg.param_type:
                return child
        child = _TrieNode()
        node.params.append((seg, child))
        return child

    @staticmethod
    def _accept(
        route: Route,
        verb: RouteMethod | None,
        allowed: set[RouteMethod],
    ) -> bool:
        """Record *route*'s methods and report whether it serves *verb*."""
        methods = route.methods
        allowed.update(methods)
        return verb is not None and verb in methods

    def _match_node(
        self,
        node: _TrieNode,
        parts: list[str],
        index: int,
        params: dict[str, Any],
        verb: RouteMethod | None,
        allowed: set[RouteMethod],
    ) -> tuple[Route, dict[str, Any]] | None:
        """Recursively match path parts against the trie.

        Backtracks through every path-matching route until one binds
        *verb*, collecting the methods of the rest into *allowed*.
        """
        if index == len(parts):
            if node.route is not None and self._accept(node.route, verb, allowed):
                return node.route, params
        else:
            part = parts[index]

            if part in node.children:
                result = self._match_node(
                    node.children[part], parts, index + 1, params, verb, allowed
                )
                if result is not None:
                    return result

            for seg, child in node.params:
                if seg.pattern.match(part):
                    value = convert_param(part, seg.param_type)
                    result = self._match_node(
                        child, parts, index + 1, {**params, seg.param_name: value}, verb, allowed
                    )
                    if result is not None:
                        return result

        if index < len(parts):
            rest = "/".join(parts[index:])
            for seg, route in node.catch_alls:
                if self._accept(route, verb, allowed):
                    return route, {**params, seg.param_name: rest}

        return None
