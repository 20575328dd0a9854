__version__ = "0.1"

from .accessors import get_authority, get_domain, get_filename, get_fragment, get_host, get_hostname, get_origin, get_password, get_pathname, get_port, get_query, get_query_string, get_scheme, get_segments, get_subdomain, get_suffix, get_tld, get_user_info, get_username, is_absolute, is_ip, is_ipv4, is_ipv6, is_urn, set_authority, set_filename, set_host, set_pathname, set_subdomain, set_user_info
from .errors import ArgumentError, ParseError
from .headers import AcceptLanguage, MimeType, best_accept, parse_accept, parse_accept_language
from .normalize import canonicalize_host, normalize
from .parse import DEFAULT_PORTS, UriData, parse, serialize
from .paths import join_paths, remove_dot_segments, segment_path
from .query import add_query, parse_query_string, set_query
from .resolve import absolute_to, relative_to
from .suffix import SECOND_LEVEL_DOMAINS
from .uri import URI
