"""Tests for bitform.routing.methods — RouteMethod and method coercion."""

import pytest

from bitform.routing.methods import ALL_METHODS, RouteMethod, coerce_method, coerce_methods


class TestRouteMethod:
    def test_nine_verbs(self) -> None:
        assert {m.value for m in RouteMethod} == {
            "GET",
            "POST",
            "PUT",
            "DELETE",
            "HEAD",
            "CONNECT",
            "OPTIONS",
            "TRACE",
            "PATCH",
        }

    def test_compares_equal_to_string(self) -> None:
        assert RouteMethod.GET == "GET"

    def test_all_methods_is_four_verb_subset(self) -> None:
        assert set(ALL_METHODS) == {
            RouteMethod.GET,
            RouteMethod.POST,
            RouteMethod.PUT,
            RouteMethod.DELETE,
        }


class TestCoerce:
    def test_lowercase_string(self) -> None:
        assert coerce_method("patch") is RouteMethod.PATCH

    def test_enum_passthrough(self) -> None:
        assert coerce_method(RouteMethod.HEAD) is RouteMethod.HEAD

    def test_unknown_method(self) -> None:
        with pytest.raises(ValueError, match="BREW"):
            coerce_method("BREW")

    def test_single_method_becomes_tuple(self) -> None:
        assert coerce_methods(RouteMethod.GET) == (RouteMethod.GET,)
        assert coerce_methods("post") == (RouteMethod.POST,)

    def test_iterable_keeps_order_and_dedupes(self) -> None:
        result = coerce_methods(["put", RouteMethod.GET, "PUT"])
        assert result == (RouteMethod.PUT, RouteMethod.GET)
