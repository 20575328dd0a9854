"""Getters and setters for individual components.
Every getter accepts a UriData or a string (parsed first) and returns "" for an absent component.
Every setter returns a new UriData.
"""

import dataclasses
import re

from multidict import MultiDictProxy

from .errors import ArgumentError
from .parse import (
    UriData,
    as_uri_data,
    is_ipv4_literal,
    is_ipv6_literal,
    match_authority,
    match_host,
    match_user_info,
    serialize,
)
from .paths import segment_path
from .query import parse_query_string
from .suffix import effective_tld

# suffix = 1*( ALPHA / DIGIT / "%" )
_SUFFIX_PAT: re.Pattern[str] = re.compile(r"\A[a-z0-9%]+\Z", re.IGNORECASE | re.ASCII)


def get_scheme(data: UriData | str) -> str:
    return as_uri_data(data).scheme or ""


def get_username(data: UriData | str) -> str:
    return as_uri_data(data).username or ""


def get_password(data: UriData | str) -> str:
    return as_uri_data(data).password or ""


def get_user_info(data: UriData | str) -> str:
    return as_uri_data(data).user_info


def get_hostname(data: UriData | str) -> str:
    return as_uri_data(data).hostname or ""


def get_port(data: UriData | str) -> str:
    return as_uri_data(data).port or ""


def get_host(data: UriData | str) -> str:
    return as_uri_data(data).host


def get_authority(data: UriData | str) -> str:
    return as_uri_data(data).authority


def get_origin(data: UriData | str) -> str:
    """scheme://authority, or "" when there is no authority"""
    data = as_uri_data(data)
    authority: str = data.authority
    if len(authority) == 0:
        return ""
    return f"{data.scheme}://{authority}" if data.scheme else authority


def get_pathname(data: UriData | str) -> str:
    return as_uri_data(data).path or ""


def get_segments(data: UriData | str) -> list[str]:
    return segment_path(get_pathname(data))


def get_filename(data: UriData | str) -> str:
    data = as_uri_data(data)
    if data.urn:
        return ""
    return get_segments(data)[-1]


def get_suffix(data: UriData | str) -> str:
    """The filename extension, if it consists only of letters, digits and percent signs"""
    parts: list[str] = get_filename(data).split(".")
    if len(parts) < 2:
        return ""
    return parts[-1] if _SUFFIX_PAT.match(parts[-1]) else ""


def get_query_string(data: UriData | str) -> str:
    return as_uri_data(data).query or ""


def get_query(data: UriData | str) -> "MultiDictProxy[str]":
    return parse_query_string(get_query_string(data))


def get_fragment(data: UriData | str) -> str:
    return as_uri_data(data).fragment or ""


def is_ipv4(data: UriData | str) -> bool:
    return is_ipv4_literal(get_hostname(data))


def is_ipv6(data: UriData | str) -> bool:
    return is_ipv6_literal(get_hostname(data))


def is_ip(data: UriData | str) -> bool:
    data = as_uri_data(data)
    return is_ipv6(data) or is_ipv4(data)


def is_absolute(data: UriData | str) -> bool:
    return as_uri_data(data).is_absolute()


def is_urn(data: UriData | str) -> bool:
    return as_uri_data(data).urn


def _labels(data: UriData) -> list[str]:
    return get_hostname(data).split(".")


def _domain_label_count(data: UriData) -> int:
    return 3 if "." in get_tld(data) else 2


def get_tld(data: UriData | str) -> str:
    """The effective top-level domain, e.g. "com.tw" for www.example.com.tw"""
    data = as_uri_data(data)
    if is_ip(data):
        return ""
    return effective_tld(_labels(data))


def get_domain(data: UriData | str) -> str:
    """The registrable domain, e.g. "example.com.tw" for www.example.com.tw"""
    data = as_uri_data(data)
    if is_ip(data):
        return ""
    return ".".join(_labels(data)[-_domain_label_count(data) :])


def get_subdomain(data: UriData | str) -> str:
    """Everything left of the domain, e.g. "www" for www.example.com.tw"""
    data = as_uri_data(data)
    if is_ip(data):
        return ""
    return ".".join(_labels(data)[: -_domain_label_count(data)])


def _with_authority_fields(data: UriData, fields: dict[str, str | None]) -> UriData:
    hostname: str | None = fields.get("hostname", data.hostname)
    username: str | None = fields.get("username", data.username)
    password: str | None = fields.get("password", data.password)
    if (username or password) and not hostname:
        raise ArgumentError(f"credentials need a host: {serialize(data)!r}")
    if not hostname:
        return dataclasses.replace(data, **fields)

    # An opaque reference stops being opaque once it names a host, and its path must then start at the root.
    path: str = data.path or ""
    if not path.startswith("/"):
        path = f"/{path}"
    return dataclasses.replace(data, urn=False, path=path, **fields)


def set_authority(data: UriData | str, value: str) -> UriData:
    return _with_authority_fields(as_uri_data(data), match_authority(value))


def set_user_info(data: UriData | str, value: str) -> UriData:
    return _with_authority_fields(as_uri_data(data), match_user_info(value))


def set_host(data: UriData | str, value: str) -> UriData:
    return _with_authority_fields(as_uri_data(data), match_host(value))


def set_pathname(data: UriData | str, pathname: str) -> UriData:
    return dataclasses.replace(as_uri_data(data), path=pathname)


def set_filename(data: UriData | str, filename: str) -> UriData:
    data = as_uri_data(data)
    segments: list[str] = get_segments(data)
    segments[-1] = filename
    return set_pathname(data, "/".join(segments))


def set_subdomain(data: UriData | str, subdomain: str) -> UriData:
    data = as_uri_data(data)
    domain: str = get_domain(data)
    return dataclasses.replace(data, hostname=f"{subdomain}.{domain}" if subdomain else domain)
