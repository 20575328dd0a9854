"""URI: a fluent wrapper around one UriData."""

from typing import Iterable, Mapping, Self

from multidict import MultiDictProxy

from . import accessors
from .normalize import normalize
from .parse import UriData, as_uri_data, parse
from .query import add_query, set_query
from .resolve import absolute_to, relative_to


class URI:
    """Read-only view of a URI reference. Every setter returns a new URI.

    >>> uri = URI("https://www.example.com.tw/path/file.json?a=1")
    >>> uri.subdomain, uri.domain, uri.tld
    ('www', 'example.com.tw', 'com.tw')
    >>> str(uri.set_subdomain("api"))
    'https://api.example.com.tw/path/file.json?a=1'
    """

    __slots__ = ("_data",)

    def __init__(self: Self, value: "URI | UriData | str") -> None:
        self._data: UriData = value.data if isinstance(value, URI) else as_uri_data(value)

    @classmethod
    def parse(cls, uri: str) -> Self:
        return cls(parse(uri))

    @property
    def data(self: Self) -> UriData:
        return self._data

    @property
    def scheme(self: Self) -> str:
        return accessors.get_scheme(self._data)

    @property
    def username(self: Self) -> str:
        return accessors.get_username(self._data)

    @property
    def password(self: Self) -> str:
        return accessors.get_password(self._data)

    @property
    def user_info(self: Self) -> str:
        return accessors.get_user_info(self._data)

    @property
    def hostname(self: Self) -> str:
        return accessors.get_hostname(self._data)

    @property
    def port(self: Self) -> str:
        return accessors.get_port(self._data)

    @property
    def host(self: Self) -> str:
        return accessors.get_host(self._data)

    @property
    def authority(self: Self) -> str:
        return accessors.get_authority(self._data)

    @property
    def origin(self: Self) -> str:
        return accessors.get_origin(self._data)

    @property
    def pathname(self: Self) -> str:
        return accessors.get_pathname(self._data)

    @property
    def segments(self: Self) -> list[str]:
        return accessors.get_segments(self._data)

    @property
    def filename(self: Self) -> str:
        return accessors.get_filename(self._data)

    @property
    def suffix(self: Self) -> str:
        return accessors.get_suffix(self._data)

    @property
    def query(self: Self) -> "MultiDictProxy[str]":
        return accessors.get_query(self._data)

    @property
    def query_string(self: Self) -> str:
        return accessors.get_query_string(self._data)

    @property
    def fragment(self: Self) -> str:
        return accessors.get_fragment(self._data)

    @property
    def tld(self: Self) -> str:
        return accessors.get_tld(self._data)

    @property
    def domain(self: Self) -> str:
        return accessors.get_domain(self._data)

    @property
    def subdomain(self: Self) -> str:
        return accessors.get_subdomain(self._data)

    def is_urn(self: Self) -> bool:
        return self._data.urn

    def is_ipv4(self: Self) -> bool:
        return accessors.is_ipv4(self._data)

    def is_ipv6(self: Self) -> bool:
        return accessors.is_ipv6(self._data)

    def is_ip(self: Self) -> bool:
        return accessors.is_ip(self._data)

    def is_absolute(self: Self) -> bool:
        return accessors.is_absolute(self._data)

    def set_authority(self: Self, value: str) -> "URI":
        return URI(accessors.set_authority(self._data, value))

    def set_user_info(self: Self, value: str) -> "URI":
        return URI(accessors.set_user_info(self._data, value))

    def set_host(self: Self, value: str) -> "URI":
        return URI(accessors.set_host(self._data, value))

    def set_pathname(self: Self, value: str) -> "URI":
        return URI(accessors.set_pathname(self._data, value))

    def set_filename(self: Self, value: str) -> "URI":
        return URI(accessors.set_filename(self._data, value))

    def set_subdomain(self: Self, value: str) -> "URI":
        return URI(accessors.set_subdomain(self._data, value))

    def set_query(self: Self, value: str) -> "URI":
        return URI(set_query(self._data, value))

    def add_query(self: Self, value: Mapping[str, str | Iterable[str] | None]) -> "URI":
        return URI(add_query(self._data, value))

    def absolute_to(self: Self, base: "URI | UriData | str") -> "URI":
        return URI(absolute_to(self._data, URI(base).data))

    def relative_to(self: Self, base: "URI | UriData | str") -> "URI":
        return URI(relative_to(self._data, URI(base).data))

    def normalize(self: Self) -> "URI":
        return URI(normalize(self._data))

    def __str__(self: Self) -> str:
        return self._data.serialize()

    def __repr__(self: Self) -> str:
        return f"{self.__class__.__name__}({str(self)!r})"

    def __eq__(self: Self, other: object) -> bool:
        if isinstance(other, URI):
            return self._data == other._data
        if isinstance(other, str):
            return str(self) == other
        return NotImplemented

    def __hash__(self: Self) -> int:
        return hash(self._data)
