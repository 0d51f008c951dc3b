"""String value heuristics keyed on declared format and the field's own name.

See https://json-schema.org/understanding-json-schema/reference/string.html#built-in-formats
"""

import re
from dataclasses import dataclass
from typing import Callable

DATE_TIME = "2020-01-01T00:00:00.000Z"
TIME = "00:00"
DATE = "2020-01-01"
IDENTIFIER = "abcd-abcd-abcd"
EMAIL = "email@example.com"
HOSTNAME = "example.com"
IPV4 = "127.0.0.1"
IPV6 = "::1"
URL = "https://example.com"
IMAGE_URL = "https://example.com/image.png"
FULL_NAME = "John Doe"
STREET = "123 Main Street"
CITY = "New-York"
STATE = "USA"
ZIP = "12345"
PATTERN = "pattern"
FILLER = "lorem ipsum dolor"

URI_FORMATS = {"uri", "uri-reference", "iri", "iri-reference", "uri-template"}
IMAGE_WORDS = ("photo", "image", "picture")


@dataclass(frozen=True)
class StringHints:
    """Inputs to string resolution; ``key`` is already lower-cased."""

    format: str | None
    key: str
    min_length: int | None
    max_length: int | None
    pattern: str | None


def _is_valid_regex(pattern: str) -> bool:
    try:
        re.compile(pattern)
    except re.error:
        return False
    return True


def _bound(value) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return max(value, 0)


def _url(h: StringHints) -> str:
    if any(word in h.key for word in IMAGE_WORDS):
        return IMAGE_URL
    return URL


def _filler(h: StringHints) -> str:
    length = h.min_length if h.min_length is not None else min(h.max_length, 10)
    return "a" * length


# Ordered (predicate, producer) pairs; the first matching predicate wins.
RULES: list[tuple[Callable[[StringHints], bool], Callable[[StringHints], str]]] = [
    (lambda h: h.format == "date-time" or h.key.endswith("_at"), lambda h: DATE_TIME),
    (lambda h: h.format == "time", lambda h: TIME),
    (lambda h: h.format == "date", lambda h: DATE),
    (lambda h: h.format == "uuid" or h.key.endswith("id"), lambda h: IDENTIFIER),
    (lambda h: h.format in ("idn-email", "email") or "email" in h.key, lambda h: EMAIL),
    (lambda h: h.format in ("hostname", "idn-hostname"), lambda h: HOSTNAME),
    (lambda h: h.format == "ipv4", lambda h: IPV4),
    (lambda h: h.format == "ipv6", lambda h: IPV6),
    (lambda h: h.format in URI_FORMATS or "url" in h.key, _url),
    (lambda h: h.key.endswith("name"), lambda h: FULL_NAME),
    (lambda h: "street" in h.key, lambda h: STREET),
    (lambda h: "city" in h.key, lambda h: CITY),
    (lambda h: "state" in h.key, lambda h: STATE),
    (lambda h: "zip" in h.key, lambda h: ZIP),
    (lambda h: h.min_length is not None or h.max_length is not None, _filler),
    (lambda h: h.pattern is not None and _is_valid_regex(h.pattern), lambda h: PATTERN),
]


def resolve_string_value(
    format: str | None = None,
    key: str | None = None,
    min_length: int | None = None,
    max_length: int | None = None,
    pattern: str | None = None,
) -> str:
    """Return a fixed example string for a string schema.

    Always returns a value. ``key`` is the name of the property being
    synthesized (never an ancestor's) and is compared case-insensitively.
    """
    hints = StringHints(
        format=format if isinstance(format, str) else None,
        key=str(key).lower() if key is not None else "",
        min_length=_bound(min_length),
        max_length=_bound(max_length),
        pattern=pattern if isinstance(pattern, str) else None,
    )
    for predicate, produce in RULES:
        if predicate(hints):
            return produce(hints)
    return FILLER
