"""looseuri.parse
A permissive URI-reference grammar.
Every string parses; ambiguous inputs are classified by a fixed alternative priority.
"""

import dataclasses
import logging
import re
import unicodedata

from typing import Self
from urllib.parse import quote, unquote

from .errors import ArgumentError, ParseError

_logger: logging.Logger = logging.getLogger(__name__)

# Schemes whose authority marker is optional and whose default port is elided by normalize().
DEFAULT_PORTS: dict[str, int] = {
    "http": 80,
    "https": 443,
    "ftp": 21,
    "gopher": 70,
    "ws": 80,
    "wss": 443,
}

# Each of these rules describes one piece of the permissive grammar.
# "any" means any code point left after control characters are stripped.

# slash = "/" / "\"
_SLASH: str = r"[\\/]"

# scheme-token = 1*( ALPHA / DIGIT )
_SCHEME_TOKEN: str = r"[a-zA-Z0-9]+"

# known-scheme = "http" / "https" / "ftp" / "gopher" / "ws" / "wss"
_KNOWN_SCHEME: str = "|".join(DEFAULT_PORTS)

# known-prefix = known-scheme 1*":" *slash
_KNOWN_PREFIX: str = rf"(?P<known_scheme>{_KNOWN_SCHEME}):+(?P<known_slash>{_SLASH}*)"

# scheme-prefix = scheme-token ":" 2slash
_SCHEME_PREFIX: str = rf"(?P<scheme>{_SCHEME_TOKEN}):(?P<slash>{_SLASH}{{2}})"

# relative-prefix = [ scheme-token ":" ] *":" 2*slash
_RELATIVE_PREFIX: str = rf"(?:(?P<relative_scheme>{_SCHEME_TOKEN}):)?:*(?P<relative_slash>{_SLASH}{{2,}})"

# credentials = *( any except \ / ? # : ) [ ":" *( any except / ? # ) ]
_CREDENTIALS: str = r"(?P<username>[^\\/?#:]*)(?::(?P<password>[^/?#]*))?"

# userinfo = credentials "@"
_USERINFO: str = rf"(?:{_CREDENTIALS}@)"

# ip-literal = "[" *( any except "]" ) "]" [ ":" *( any except / ? # : ) ]
_IP_LITERAL: str = r"\[(?P<bracketed_host>[^\]]*)\](?::(?P<bracketed_port>[^/?#:]*))?"

# multi-colon-host = 1*( any except \ / ? # ) 2*( ":" 1*( any except \ / ? # ) )
_MULTI_COLON_HOST: str = r"(?P<multi_colon_host>[^\\/?#]+(?::[^\\/?#]+){2,})"

# plain-host = *( any except \ / ? # : ) [ ":" *( any except / ? # ) ]
_PLAIN_HOST: str = r"(?P<plain_host>[^\\/?#:]*)(?::(?P<plain_port>[^/?#]*))?"

# host = ip-literal / multi-colon-host / plain-host
# (a bare multi-colon string is a host literal, never host:port:extra)
_HOST: str = rf"(?:{_IP_LITERAL}|{_MULTI_COLON_HOST}|{_PLAIN_HOST})"

# authority = [ userinfo ] [ host ]
_AUTHORITY: str = rf"{_USERINFO}?{_HOST}?"

# hier-prefix = ( known-prefix / scheme-prefix / relative-prefix ) authority
_HIER_PREFIX: str = rf"(?:{_KNOWN_PREFIX}|{_SCHEME_PREFIX}|{_RELATIVE_PREFIX}){_AUTHORITY}"

# opaque-prefix = scheme-token ":"
_OPAQUE_PREFIX: str = rf"(?P<opaque_scheme>{_SCHEME_TOKEN}):"

# path = *( any except ? # )
_PATH: str = r"(?P<path>[^?#]*)"

# query = *( any except # )
_QUERY: str = r"(?P<query>[^#]*)"

# fragment = *any
_FRAGMENT: str = r"(?P<fragment>.*)"

# uri = [ hier-prefix / opaque-prefix ] path [ "?" query ] [ "#" fragment ]
_URI: str = rf"\A(?:{_HIER_PREFIX}|{_OPAQUE_PREFIX})?{_PATH}(?:\?{_QUERY})?(?:#{_FRAGMENT})?\Z"
_URI_PAT: re.Pattern[str] = re.compile(_URI, re.IGNORECASE | re.DOTALL)

# Partial authorities accepted by the mutators.
_AUTHORITY_PAT: re.Pattern[str] = re.compile(rf"\A{_AUTHORITY}\Z", re.DOTALL)
_CREDENTIALS_PAT: re.Pattern[str] = re.compile(rf"\A{_CREDENTIALS}\Z", re.DOTALL)
_HOST_PAT: re.Pattern[str] = re.compile(rf"\A{_HOST}\Z", re.DOTALL)

# These host recognizers follow RFC 3986.

# HEXDIG = DIGIT / "A" / "B" / "C" / "D" / "E" / "F"
_HEXDIG: str = r"[0-9A-Fa-f]"

# dec-octet = DIGIT / %x31-39 DIGIT / "1" 2DIGIT / "2" %x30-34 DIGIT / "25" %x30-35
_DEC_OCTET: str = r"(?:[0-9]|[1-9][0-9]|1[0-9]{2}|2[0-4][0-9]|25[0-5])"

# IPv4address = dec-octet "." dec-octet "." dec-octet "." dec-octet
_IPV4ADDRESS: str = rf"{_DEC_OCTET}\.{_DEC_OCTET}\.{_DEC_OCTET}\.{_DEC_OCTET}"

# h16 = 1*4HEXDIG
_H16: str = rf"(?:{_HEXDIG}{{1,4}})"

# ls32 = ( h16 ":" h16 ) / IPv4address
_LS32: str = rf"(?:{_H16}:{_H16}|{_IPV4ADDRESS})"

# IPv6address =                                      6( h16 ":" ) ls32
#                       /                       "::" 5( h16 ":" ) ls32
#                       / [               h16 ] "::" 4( h16 ":" ) ls32
#                       / [ *1( h16 ":" ) h16 ] "::" 3( h16 ":" ) ls32
#                       / [ *2( h16 ":" ) h16 ] "::" 2( h16 ":" ) ls32
#                       / [ *3( h16 ":" ) h16 ] "::"    h16 ":"   ls32
#                       / [ *4( h16 ":" ) h16 ] "::"              ls32
#                       / [ *5( h16 ":" ) h16 ] "::"              h16
#                       / [ *6( h16 ":" ) h16 ] "::"
_IPV6ADDRESS: str = (
    "(?:"
    + r"|".join(
        (
                                           rf"(?:{_H16}:){{6}}{_LS32}",
                                         rf"::(?:{_H16}:){{5}}{_LS32}",
                              rf"(?:{_H16})?::(?:{_H16}:){{4}}{_LS32}",
            rf"(?:(?:{_H16}:){{0,1}}{_H16})?::(?:{_H16}:){{3}}{_LS32}",
            rf"(?:(?:{_H16}:){{0,2}}{_H16})?::(?:{_H16}:){{2}}{_LS32}",
            rf"(?:(?:{_H16}:){{0,3}}{_H16})?::(?:{_H16}:){_LS32}",
            rf"(?:(?:{_H16}:){{0,4}}{_H16})?::{_LS32}",
            rf"(?:(?:{_H16}:){{0,5}}{_H16})?::{_H16}",
            rf"(?:(?:{_H16}:){{0,6}}{_H16})?::",
        )
    )
    + ")"
)

# ipv6-host = IPv6address [ "%" 1*any ]
_IPV6_HOST_PAT: re.Pattern[str] = re.compile(rf"\A{_IPV6ADDRESS}(?:%.+)?\Z", re.DOTALL)

# ipv4-host = 1*3DIGIT "." 1*3DIGIT "." 1*3DIGIT "." 1*3DIGIT
# (looser than IPv4address; out-of-range octets are caught by normalize())
_IPV4_HOST_PAT: re.Pattern[str] = re.compile(r"\A[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\Z")

# Characters encodeURIComponent() leaves alone, beyond the ones quote() always keeps.
_USERINFO_SAFE: str = "!*'()"


def is_ipv4_literal(host: str) -> bool:
    return _IPV4_HOST_PAT.match(host) is not None


def is_ipv6_literal(host: str) -> bool:
    return _IPV6_HOST_PAT.match(host) is not None


@dataclasses.dataclass(frozen=True)
class UriData:
    """The components of a URI reference. Absent components are None. Use parse() to build one from a string."""

    scheme: str | None = None
    username: str | None = None
    password: str | None = None
    hostname: str | None = None
    port: str | None = None
    path: str | None = None
    query: str | None = None
    fragment: str | None = None
    urn: bool = False

    @property
    def user_info(self: Self) -> str:
        """username[:password], percent-encoded"""
        result: str = quote(self.username or "", safe=_USERINFO_SAFE)
        if self.password:
            result += f":{quote(self.password, safe=_USERINFO_SAFE)}"
        return result

    @property
    def host(self: Self) -> str:
        """hostname[:port], with IPv6 literals bracketed"""
        hostname: str = self.hostname or ""
        result: str = f"[{hostname}]" if is_ipv6_literal(hostname) else hostname
        if self.port:
            result += f":{self.port}"
        return result

    @property
    def authority(self: Self) -> str:
        """userinfo@host:port"""
        user_info: str = self.user_info
        if len(user_info) > 0:
            return f"{user_info}@{self.host}"
        return self.host

    def is_absolute(self: Self) -> bool:
        return self.urn or bool(self.hostname)

    def serialize(self: Self) -> str:
        result: str = ""
        if self.scheme:
            result += f"{self.scheme}:"
        if self.urn:
            result += self.path or ""
        else:
            if self.is_absolute() or self.scheme:
                result += "//"
            result += self.authority + (self.path or "")
        if self.query:
            result += f"?{self.query}"
        if self.fragment:
            result += f"#{self.fragment}"
        return result

    def __str__(self: Self) -> str:
        return self.serialize()


def strip_control_characters(data: str) -> str:
    """Drops every code point in a Unicode "C" category (Cc, Cf, Cs, Co, Cn)."""
    return "".join(c for c in data if unicodedata.category(c)[0] != "C")


def _credentials(m: re.Match[str]) -> tuple[str | None, str | None]:
    username: str | None = m["username"]
    password: str | None = m["password"]
    return (unquote(username) if username else None, unquote(password) if password else None)


def _host_and_port(m: re.Match[str]) -> tuple[str | None, str | None]:
    hostname: str | None = m["bracketed_host"] or m["multi_colon_host"] or m["plain_host"] or None
    if hostname is None:
        # A port is only meaningful inside an authority that names a host.
        return None, None
    return hostname, m["bracketed_port"] or m["plain_port"] or None


def parse(uri: str) -> UriData:
    """Splits a string into its components.
    Backslashes in the slash run and the path count as forward slashes; username and password are percent-decoded.
    """
    data: str = strip_control_characters(uri)
    if len(data) != len(uri):
        _logger.debug("stripped %d control characters from %r", len(uri) - len(data), data)

    m: re.Match[str] | None = _URI_PAT.match(data)
    if m is None:
        raise ParseError(f"failed to parse {data!r}")

    scheme: str | None = m["known_scheme"] or m["scheme"] or m["relative_scheme"] or m["opaque_scheme"] or None
    slash: str | None = m["known_slash"] or m["slash"] or m["relative_slash"] or None
    username, password = _credentials(m)
    hostname, port = _host_and_port(m)
    urn: bool = scheme is not None and scheme.lower() not in DEFAULT_PORTS and hostname is None and slash is None

    return UriData(
        scheme=scheme,
        username=username,
        password=password,
        hostname=hostname,
        port=port,
        path=m["path"].replace("\\", "/") or ("" if urn else "/"),
        query=m["query"] or None,
        fragment=m["fragment"] or None,
        urn=urn,
    )


def serialize(data: UriData) -> str:
    return data.serialize()


def as_uri_data(data: UriData | str) -> UriData:
    if isinstance(data, str):
        return parse(data)
    return data


def match_authority(value: str) -> dict[str, str | None]:
    """Parses "[userinfo@]host[:port]" into UriData field values."""
    m: re.Match[str] | None = _AUTHORITY_PAT.match(strip_control_characters(value))
    if m is None:
        raise ArgumentError(f"not an authority: {value!r}")
    username, password = _credentials(m)
    hostname, port = _host_and_port(m)
    return {"username": username, "password": password, "hostname": hostname, "port": port}


def match_user_info(value: str) -> dict[str, str | None]:
    """Parses "username[:password]" into UriData field values."""
    m: re.Match[str] | None = _CREDENTIALS_PAT.match(strip_control_characters(value))
    if m is None:
        raise ArgumentError(f"not a userinfo: {value!r}")
    username, password = _credentials(m)
    return {"username": username, "password": password}


def match_host(value: str) -> dict[str, str | None]:
    """Parses "host[:port]" into UriData field values."""
    m: re.Match[str] | None = _HOST_PAT.match(strip_control_characters(value))
    if m is None:
        raise ArgumentError(f"not a host: {value!r}")
    hostname, port = _host_and_port(m)
    return {"hostname": hostname, "port": port}
