"""Tests for looseuri.query."""

from looseuri import add_query, parse, parse_query_string, set_query


class TestParseQueryString:
    """Query strings decode into ordered multimaps."""

    def test_repeated_keys(self):
        query = parse_query_string("a=1&b=&a=2")
        assert query.getall("a") == ["1", "2"]
        assert query["b"] == ""
        assert list(query.items()) == [("a", "1"), ("b", ""), ("a", "2")]

    def test_plus_is_space(self):
        assert parse_query_string("q=hello+world%21")["q"] == "hello world!"

    def test_key_without_value(self):
        assert parse_query_string("flag")["flag"] == ""

    def test_empty(self):
        assert len(parse_query_string("")) == 0

    def test_is_read_only(self):
        query = parse_query_string("a=1")
        assert not hasattr(query, "add")


class TestSetQuery:
    def test_replaces(self):
        assert str(set_query("http://example.org/?a=1#top", "b=2")) == "http://example.org/?b=2#top"

    def test_empty_removes(self):
        assert parse(str(set_query("http://example.org/?a=1", ""))).query is None


class TestAddQuery:
    """add_query() appends and never replaces."""

    def test_appends_to_existing(self):
        data = add_query("http://example.org/?a=1", {"a": "2", "b": ["3", "4"]})
        assert data.query == "a=1&a=2&b=3&b=4"

    def test_none_is_skipped(self):
        data = add_query("http://example.org/", {"a": None, "b": "1"})
        assert data.query == "b=1"

    def test_values_are_encoded(self):
        data = add_query("http://example.org/", {"q": "hello world&more"})
        assert data.query == "q=hello+world%26more"

    def test_tilde_is_encoded(self):
        assert add_query("http://example.org/", {"home": "~user", "glob": "*"}).query == "home=%7Euser&glob=*"

    def test_nothing_to_add(self):
        assert add_query("http://example.org/", {}).query is None

    def test_input_is_not_mutated(self):
        data = parse("http://example.org/?a=1")
        add_query(data, {"b": "2"})
        assert data.query == "a=1"
