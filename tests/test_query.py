"""Tests for bitform.http.query — QueryParams."""

from bitform.http.query import QueryParams


class TestQueryParams:
    def test_empty(self) -> None:
        query = QueryParams()
        assert len(query) == 0
        assert query.raw == ""

    def test_first_value(self) -> None:
        query = QueryParams(b"tag=a&tag=b&page=2")
        assert query["tag"] == "a"
        assert query.get_list("tag") == ["a", "b"]

    def test_str_input(self) -> None:
        assert QueryParams("q=hello")["q"] == "hello"

    def test_blank_values_kept(self) -> None:
        assert QueryParams(b"flag=")["flag"] == ""

    def test_get_default(self) -> None:
        assert QueryParams(b"").get("q", "none") == "none"

    def test_get_int(self) -> None:
        query = QueryParams(b"page=3&bad=x")
        assert query.get_int("page") == 3
        assert query.get_int("bad", 1) == 1
        assert query.get_int("missing") is None

    def test_percent_decoding(self) -> None:
        assert QueryParams(b"q=hello%20world")["q"] == "hello world"
