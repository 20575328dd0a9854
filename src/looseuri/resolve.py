"""Reference resolution: absolute_to() merges a reference into a base, relative_to() goes the other way."""

from .parse import UriData, as_uri_data
from .paths import join_paths, remove_dot_segments, segment_path


def _greatest_common_index(a: list[str], b: list[str]) -> int:
    i: int = 0
    while i < min(len(a), len(b)) and a[i] == b[i]:
        i += 1
    return i


def absolute_to(ref: UriData | str, base: UriData | str) -> UriData:
    """Resolves ref against base.
    The authority (userinfo, host, port) comes from ref when ref has one that differs from base's, otherwise from base.
    A ref path without a leading slash replaces the last segment of base's path.
    """
    ref = as_uri_data(ref)
    base = as_uri_data(base)

    ref_authority: str = ref.authority
    use_ref_authority: bool = len(ref_authority) > 0 and ref_authority != base.authority
    authority_source: UriData = ref if use_ref_authority else base

    ref_path: str | None = remove_dot_segments(ref.path) if ref.path else None
    base_path: str | None = remove_dot_segments(base.path) if base.path else None
    path: str | None
    if ref_path is not None and ref_path.startswith("/"):
        path = ref_path
    elif base_path and ref_path:
        path = join_paths(base_path, ref_path)
    else:
        path = ref_path

    return UriData(
        scheme=ref.scheme if ref.scheme and ref.scheme != base.scheme else base.scheme,
        username=authority_source.username,
        password=authority_source.password,
        hostname=authority_source.hostname,
        port=authority_source.port,
        path=remove_dot_segments(path) if path else None,
        query=ref.query,
        fragment=ref.fragment,
        urn=ref.urn,
    )


def relative_to(ref: UriData | str, base: UriData | str) -> UriData:
    """Returns the shortest reference that resolves to ref from base's directory.
    Scheme and authority are kept only when they differ from base's; a path that then has no leading slash gets one.
    """
    ref = as_uri_data(ref)
    base = as_uri_data(base)

    ref_segments: list[str] = segment_path(remove_dot_segments(ref.path)) if ref.path else []
    # The last segment of base is its filename, not a directory.
    base_segments: list[str] = segment_path(remove_dot_segments(base.path))[:-1] if base.path else []
    start: int = _greatest_common_index(ref_segments, base_segments)
    pathname: str = remove_dot_segments("/".join([".."] * len(base_segments[start:]) + ref_segments[start:]))

    same_scheme: bool = ref.scheme == base.scheme
    same_base: bool = same_scheme and ref.authority == base.authority
    if not same_base:
        return UriData(
            scheme=None if same_scheme else ref.scheme,
            username=ref.username,
            password=ref.password,
            hostname=ref.hostname,
            port=ref.port,
            path=pathname if pathname.startswith("/") else f"/{pathname}",
            query=ref.query,
            fragment=ref.fragment,
            urn=ref.urn,
        )
    return UriData(path=pathname, query=ref.query, fragment=ref.fragment, urn=ref.urn)
