"""Component-wise canonicalization of UriData."""

import dataclasses
import ipaddress
import logging
import re

from urllib.parse import unquote

import idna

from .errors import ParseError
from .parse import DEFAULT_PORTS, UriData, is_ipv6_literal
from .paths import remove_dot_segments
from .query import encode_query, query_pairs

_logger: logging.Logger = logging.getLogger(__name__)

# Code points that may not appear in a (percent-decoded) domain name.
_FORBIDDEN_HOST_CHAR_PAT: re.Pattern[str] = re.compile(r"[\x00-\x20#%/:<>?@\[\\\]^|\x7f]")

_PORT_PAT: re.Pattern[str] = re.compile(r"\A[0-9]+\Z")

# ipv4-number = "0x" *HEXDIG / "0" 1*( %x30-37 ) / 1*DIGIT
_IPV4_HEX_PAT: re.Pattern[str] = re.compile(r"\A0x[0-9a-f]*\Z", re.IGNORECASE)
_IPV4_OCTAL_PAT: re.Pattern[str] = re.compile(r"\A0[0-7]+\Z")
_IPV4_DECIMAL_PAT: re.Pattern[str] = re.compile(r"\A[0-9]+\Z")

_MAX_PORT: int = 65535

# Query keys that are always dropped.
_BANNED_QUERY_KEYS: frozenset[str] = frozenset({"__proto__"})


def _reject(message: str) -> ParseError:
    _logger.debug(message)
    return ParseError(message)


def _canonicalize_ipv6(hostname: str) -> str:
    try:
        return ipaddress.IPv6Address(hostname).compressed
    except ValueError as e:
        raise _reject(f"invalid IPv6 literal {hostname!r}") from e


def _ipv4_parts(host: str) -> list[str]:
    parts: list[str] = host.split(".")
    # A single trailing dot is allowed.
    if parts[-1] == "" and len(parts) > 1:
        parts.pop()
    return parts


def _parse_ipv4_number(part: str) -> int | None:
    """Reads one dotted part: "0x" prefix for hex, a leading "0" for octal, decimal otherwise.
    Returns None for anything else.
    """
    if _IPV4_HEX_PAT.match(part):
        return int(part[2:] or "0", 16)
    if len(part) > 1 and part.startswith("0"):
        return int(part, 8) if _IPV4_OCTAL_PAT.match(part) else None
    if _IPV4_DECIMAL_PAT.match(part):
        return int(part)
    return None


def _ends_in_a_number(host: str) -> bool:
    last: str = _ipv4_parts(host)[-1]
    return _IPV4_DECIMAL_PAT.match(last) is not None or _IPV4_HEX_PAT.match(last) is not None


def _canonicalize_ipv4(host: str) -> str:
    """Reads a host the way browsers do: 1 to 4 dotted numbers, the last one filling the remaining bytes.
    e.g. "127.1", "0x7f.0.0.1" and "2130706433" all become "127.0.0.1"
    """
    parts: list[str] = _ipv4_parts(host)
    if len(parts) > 4:
        raise _reject(f"too many parts in IPv4 host {host!r}")
    numbers: list[int] = []
    for part in parts:
        number: int | None = _parse_ipv4_number(part)
        if number is None:
            raise _reject(f"invalid IPv4 part {part!r} in host {host!r}")
        numbers.append(number)
    if any(number > 255 for number in numbers[:-1]) or numbers[-1] >= 256 ** (5 - len(numbers)):
        raise _reject(f"IPv4 host {host!r} is out of range")

    address: int = numbers[-1]
    for i, number in enumerate(numbers[:-1]):
        address += number * 256 ** (3 - i)
    return str(ipaddress.IPv4Address(address))


def _idna_encode(host: str) -> str:
    try:
        return idna.encode(host, uts46=True).decode("ascii")
    except UnicodeError:
        pass
    try:
        return host.encode("idna").decode("ascii")
    except UnicodeError as e:
        raise _reject(f"cannot IDNA-encode host {host!r}") from e


def canonicalize_host(hostname: str) -> str:
    """Returns the canonical form of a host: compressed IP literals without brackets, lower-case ASCII or punycode domain names.
    Raises ParseError for hosts that cannot appear in an authority.
    """
    if is_ipv6_literal(hostname):
        return _canonicalize_ipv6(hostname)

    host: str = unquote(hostname)
    if len(host) == 0:
        raise _reject(f"empty host {hostname!r}")
    if not host.isascii():
        host = _idna_encode(host)
    host = host.lower()

    m: re.Match[str] | None = _FORBIDDEN_HOST_CHAR_PAT.search(host)
    if m is not None:
        raise _reject(f"host {hostname!r} cannot contain {m.group()!r} (at position {m.start()})")
    if _ends_in_a_number(host):
        return _canonicalize_ipv4(host)
    return host


def canonicalize_port(port: str) -> int:
    if _PORT_PAT.match(port) is None or int(port) > _MAX_PORT:
        raise _reject(f"invalid port {port!r}")
    return int(port)


def normalize_path(path: str, urn: bool) -> str:
    path = path.replace('"', "%22").replace(" ", "%20")
    if urn:
        # Opaque paths have no segments.
        return path.replace("/", "%2F")
    return remove_dot_segments(path)


def normalize_query(query: str) -> str | None:
    pairs: list[tuple[str, str]] = [(k, v) for k, v in query_pairs(query) if k not in _BANNED_QUERY_KEYS]
    return encode_query(pairs) or None


def normalize(data: UriData) -> UriData:
    """Returns data with a lower-case scheme, a canonical host, no default port,
    dot-segment-free path and a re-encoded query. normalize(normalize(x)) == normalize(x).
    """
    scheme: str | None = data.scheme.lower() if data.scheme else data.scheme

    hostname: str | None = data.hostname
    if hostname:
        hostname = canonicalize_host(hostname)

    port: str | None = data.port
    if port:
        number: int = canonicalize_port(port)
        if scheme and DEFAULT_PORTS.get(scheme) == number:
            port = None
        else:
            port = str(number)

    path: str | None = data.path
    if path:
        path = normalize_path(path, data.urn)

    query: str | None = data.query
    if query:
        query = normalize_query(query)

    return dataclasses.replace(data, scheme=scheme, hostname=hostname, port=port, path=path, query=query)
