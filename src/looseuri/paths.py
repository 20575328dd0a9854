"""Path segment helpers shared by the normalizer and the resolver."""


def segment_path(path: str) -> list[str]:
    return path.split("/")


def _encode_pipe(segment: str) -> str:
    return segment.replace("|", "%7C")


def remove_dot_segments(path: str) -> str:
    """Collapses "." and ".." segments and repeated slashes.
    A leading slash and a trailing slash are kept.
    A ".." with nothing left to pop is kept in a relative path and dropped in an absolute one,
    e.g. remove_dot_segments("/a/../../b/") == "/b/" and remove_dot_segments("a/../../b") == "../b"
    """
    segments: list[str] = segment_path(path)
    leading_slash: bool = path.startswith("/")
    result: list[str] = []
    for i, segment in enumerate(segments):
        if segment == "":
            if i == len(segments) - 1:
                result.append("")
        elif segment == ".":
            continue
        elif segment == "..":
            if len(result) > 0 and result[-1] != "..":
                result.pop()
            elif not leading_slash:
                result.append("..")
        else:
            result.append(_encode_pipe(segment))
    return ("/" if leading_slash else "") + "/".join(result)


def join_paths(base: str, ref: str) -> str:
    """Replaces the last segment of base with the segments of ref."""
    return "/".join(segment_path(base)[:-1] + segment_path(ref))
