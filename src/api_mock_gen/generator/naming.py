"""Identifier helpers for generated value producers."""

import re

from api_mock_gen.parser.base import ResponseMap

# Runs of letters and digits in any script; everything else separates words.
RUN_RE = re.compile(r"[^\W_]+")


def _split_run(run: str) -> list[str]:
    """Split one alphanumeric run on case changes and digit boundaries."""
    words = []
    current = ""
    for i, ch in enumerate(run):
        if current:
            prev = current[-1]
            nxt = run[i + 1] if i + 1 < len(run) else ""
            if (
                ch.isdigit() != prev.isdigit()
                or (prev.islower() and ch.isupper())
                or (prev.isupper() and ch.isupper() and nxt.islower())
            ):
                words.append(current)
                current = ""
        current += ch
    if current:
        words.append(current)
    return words


def camel_case(text: str) -> str:
    """Convert arbitrary text to a camelCase identifier.

    Words are split on case changes, digit runs and any non-alphanumeric
    character: ``"get getUser_by-id200"`` -> ``"getGetUserById200"``.
    Letters outside ASCII are kept.
    """
    words = [word for run in RUN_RE.findall(text) for word in _split_run(run)]
    if not words:
        return ""
    head, *tail = words
    return head.lower() + "".join(w[:1].upper() + w[1:].lower() for w in tail)


def producer_name(response: ResponseMap) -> str:
    """Name of the value producer for a response, empty when it has no id."""
    if not response.id:
        return ""
    return camel_case(f"get {response.id}{response.code}Response")
