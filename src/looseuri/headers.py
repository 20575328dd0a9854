"""Decomposition of the Accept and Accept-Language request headers."""

import dataclasses

from typing import Iterable


@dataclasses.dataclass(frozen=True)
class MimeType:
    """One media range of an Accept header, e.g. text/html;q=0.9"""

    type: str
    subtype: str
    parameters: dict[str, str] = dataclasses.field(default_factory=dict)


@dataclasses.dataclass(frozen=True)
class AcceptLanguage:
    """One entry of an Accept-Language header, e.g. zh-TW;q=0.8"""

    locale: str
    language: str
    region: str
    parameters: dict[str, str] = dataclasses.field(default_factory=dict)


def _parameters(options: Iterable[str]) -> dict[str, str]:
    result: dict[str, str] = {}
    for option in options:
        key, _, value = option.partition("=")
        if len(key.strip()) > 0:
            result[key.strip()] = value.strip()
    return result


def _entries(header: str | None) -> Iterable[tuple[str, list[str]]]:
    if not header:
        return
    for entry in header.split(","):
        head, *options = entry.split(";")
        if len(head.strip()) > 0:
            yield head.strip(), options


def parse_accept(header: str | None) -> list[MimeType]:
    result: list[MimeType] = []
    for media_range, options in _entries(header):
        type_, _, subtype = media_range.partition("/")
        result.append(MimeType(type=type_.strip(), subtype=subtype.strip(), parameters=_parameters(options)))
    return result


def best_accept(header: str | None, type_: str, subtypes: Iterable[str]) -> MimeType | None:
    """The first accepted media range with the given type and one of the given subtypes."""
    wanted: frozenset[str] = frozenset(subtypes)
    for mime_type in parse_accept(header):
        if mime_type.type == type_ and mime_type.subtype in wanted:
            return mime_type
    return None


def parse_accept_language(header: str | None) -> list[AcceptLanguage]:
    result: list[AcceptLanguage] = []
    for locale, options in _entries(header):
        language, _, region = locale.partition("-")
        result.append(AcceptLanguage(locale=locale, language=language, region=region, parameters=_parameters(options)))
    return result
