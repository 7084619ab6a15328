"""Tests for bitform.routing.table — trie-based route resolution."""

import pytest

from bitform.errors import MethodNotAllowed, NotFound
from bitform.routing.methods import RouteMethod
from bitform.routing.route import Route
from bitform.routing.table import RouteTable


def handler(request: object, response: object) -> str:
    return "ok"


def _table(*paths: str, method: RouteMethod = RouteMethod.GET) -> RouteTable:
    table = RouteTable()
    for path in paths:
        table.add(Route(path, {method: handler}))
    return table


class TestRouteTableRegistry:
    def test_routes_in_registration_order(self) -> None:
        table = _table("/b", "/a", "/c")
        assert [r.path for r in table.routes] == ["/b", "/a", "/c"]

    def test_get_and_contains(self) -> None:
        table = _table("/users")
        assert "/users" in table
        assert table.get("/users") is table.routes[0]
        assert table.get("/missing") is None

    def test_duplicate_path_rejected(self) -> None:
        table = _table("/users")
        with pytest.raises(ValueError, match="already registered"):
            table.add(Route("/users"))


class TestResolveStatic:
    def test_root(self) -> None:
        match = _table("/").resolve("GET", "/")
        assert match.route.path == "/"
        assert match.params == {}

    def test_nested(self) -> None:
        match = _table("/api/v2/users").resolve("GET", "/api/v2/users")
        assert match.route.path == "/api/v2/users"

    def test_trailing_slash_ignored(self) -> None:
        assert _table("/users").resolve("GET", "/users/").route.path == "/users"

    def test_not_found(self) -> None:
        with pytest.raises(NotFound):
            _table("/users").resolve("GET", "/posts")

    def test_prefix_is_not_a_match(self) -> None:
        with pytest.raises(NotFound):
            _table("/users/list").resolve("GET", "/users")


class TestResolveParams:
    def test_string_param(self) -> None:
        match = _table("/users/{name}").resolve("GET", "/users/alice")
        assert match.params == {"name": "alice"}

    def test_int_param_converted(self) -> None:
        match = _table("/users/{id:int}").resolve("GET", "/users/42")
        assert match.params == {"id": 42}

    def test_int_param_rejects_non_digit(self) -> None:
        with pytest.raises(NotFound):
            _table("/users/{id:int}").resolve("GET", "/users/alice")

    def test_static_beats_param(self) -> None:
        table = RouteTable()
        table.add(Route("/users/{name}", {RouteMethod.GET: handler}))
        table.add(Route("/users/me", {RouteMethod.GET: handler}))
        assert table.resolve("GET", "/users/me").route.path == "/users/me"
        assert table.resolve("GET", "/users/bob").route.path == "/users/{name}"

    def test_differently_named_params_coexist(self) -> None:
        table = _table("/users/{id:int}/posts", "/users/{name}/profile")
        assert table.resolve("GET", "/users/7/posts").params == {"id": 7}
        assert table.resolve("GET", "/users/ada/profile").params == {"name": "ada"}

    def test_catch_all(self) -> None:
        match = _table("/files/{rest:path}").resolve("GET", "/files/a/b/c.txt")
        assert match.params == {"rest": "a/b/c.txt"}

    def test_param_beats_catch_all(self) -> None:
        table = _table("/files/{name}", "/files/{rest:path}")
        assert table.resolve("GET", "/files/x").route.path == "/files/{name}"
        assert table.resolve("GET", "/files/x/y").route.path == "/files/{rest:path}"


class TestResolveMethods:
    def test_method_not_allowed(self) -> None:
        with pytest.raises(MethodNotAllowed) as exc_info:
            _table("/users").resolve("POST", "/users")
        assert exc_info.value.status == 405
        assert ("Allow", "GET") in exc_info.value.headers

    def test_allow_reflects_live_methods(self) -> None:
        table = _table("/users")
        table.get("/users").handle(RouteMethod.PUT, handler)  # type: ignore[union-attr]
        with pytest.raises(MethodNotAllowed) as exc_info:
            table.resolve("DELETE", "/users")
        assert ("Allow", "GET, PUT") in exc_info.value.headers

    def test_unknown_method_not_allowed(self) -> None:
        with pytest.raises(MethodNotAllowed):
            _table("/users").resolve("BREW", "/users")

    def test_route_without_callbacks_is_not_found(self) -> None:
        table = RouteTable()
        table.add(Route("/empty"))
        with pytest.raises(NotFound):
            table.resolve("GET", "/empty")

    def test_lowercase_method(self) -> None:
        assert _table("/users").resolve("get", "/users").route.path == "/users"


class TestResolveFallsThroughOnMethod:
    def test_param_route_serves_method_static_lacks(self) -> None:
        table = RouteTable()
        table.add(Route("/users/me", {RouteMethod.GET: handler}))
        table.add(Route("/users/{id}", {RouteMethod.DELETE: handler}))

        match = table.resolve("DELETE", "/users/me")
        assert match.route.path == "/users/{id}"
        assert match.params == {"id": "me"}
        assert table.resolve("GET", "/users/me").route.path == "/users/me"

    def test_catch_all_serves_method_param_lacks(self) -> None:
        table = RouteTable()
        table.add(Route("/files/{name}", {RouteMethod.GET: handler}))
        table.add(Route("/files/{rest:path}", {RouteMethod.PUT: handler}))

        match = table.resolve("PUT", "/files/report.txt")
        assert match.route.path == "/files/{rest:path}"
        assert match.params == {"rest": "report.txt"}

    def test_allow_is_union_of_matching_routes(self) -> None:
        table = RouteTable()
        table.add(Route("/users/me", {RouteMethod.GET: handler}))
        table.add(Route("/users/{id}", {RouteMethod.DELETE: handler}))
        table.add(Route("/users/{rest:path}", {RouteMethod.PUT: handler}))

        with pytest.raises(MethodNotAllowed) as exc_info:
            table.resolve("POST", "/users/me")
        assert ("Allow", "DELETE, GET, PUT") in exc_info.value.headers

    def test_non_matching_routes_not_in_allow(self) -> None:
        table = RouteTable()
        table.add(Route("/users/me", {RouteMethod.GET: handler}))
        table.add(Route("/users/{id:int}", {RouteMethod.DELETE: handler}))

        with pytest.raises(MethodNotAllowed) as exc_info:
            table.resolve("DELETE", "/users/me")
        assert ("Allow", "GET") in exc_info.value.headers


class TestSharedCatchAll:
    def test_each_catch_all_stays_reachable(self) -> None:
        table = RouteTable()
        table.add(Route("/files/{a:path}", {RouteMethod.GET: handler}))
        table.add(Route("/files/{b:path}", {RouteMethod.POST: handler}))

        assert len(table) == 2
        get = table.resolve("GET", "/files/x/y")
        post = table.resolve("POST", "/files/x/y")
        assert (get.route.path, get.params) == ("/files/{a:path}", {"a": "x/y"})
        assert (post.route.path, post.params) == ("/files/{b:path}", {"b": "x/y"})

    def test_first_registered_wins_for_shared_method(self) -> None:
        table = RouteTable()
        table.add(Route("/files/{a:path}", {RouteMethod.GET: handler}))
        table.add(Route("/files/{b:path}", {RouteMethod.GET: handler}))
        assert table.resolve("GET", "/files/x").route.path == "/files/{a:path}"

    def test_shared_catch_all_allow(self) -> None:
        table = RouteTable()
        table.add(Route("/files/{a:path}", {RouteMethod.GET: handler}))
        table.add(Route("/files/{b:path}", {RouteMethod.POST: handler}))
        with pytest.raises(MethodNotAllowed) as exc_info:
            table.resolve("DELETE", "/files/x")
        assert ("Allow", "GET, POST") in exc_info.value.headers
