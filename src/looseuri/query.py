"""Query strings as ordered multimaps (application/x-www-form-urlencoded)."""

import dataclasses

from typing import Iterable, Mapping
from urllib.parse import parse_qsl, urlencode

from multidict import MultiDict, MultiDictProxy

from .parse import UriData, as_uri_data


def query_pairs(query: str) -> list[tuple[str, str]]:
    return parse_qsl(query, keep_blank_values=True)


def encode_query(pairs: Iterable[tuple[str, str]]) -> str:
    # "~" is percent-encoded like every other character outside the form-urlencoded safe set.
    return urlencode(list(pairs), safe="*").replace("~", "%7E")


def parse_query_string(query: str) -> "MultiDictProxy[str]":
    """Decodes a query string, keeping key order and repeated keys.
    e.g. parse_query_string("a=1&b=&a=2").getall("a") == ["1", "2"]
    """
    return MultiDictProxy(MultiDict(query_pairs(query)))


def set_query(data: UriData | str, query: str) -> UriData:
    return dataclasses.replace(as_uri_data(data), query=query or None)


def add_query(data: UriData | str, query: Mapping[str, str | Iterable[str] | None]) -> UriData:
    """Appends parameters to the query. Iterable values add one parameter each; None values are skipped."""
    data = as_uri_data(data)
    params: MultiDict[str] = MultiDict(query_pairs(data.query or ""))
    for key, value in query.items():
        if value is None:
            continue
        if isinstance(value, str):
            params.add(key, value)
        else:
            params.extend([(key, v) for v in value])
    return dataclasses.replace(data, query=encode_query(params.items()) or None)
