"""Structural merge used to resolve ``allOf`` compositions."""

from collections.abc import Mapping
from typing import Any


def merge_schemas(*schemas: Mapping[str, Any]) -> dict[str, Any]:
    """Merge schema mappings left to right into a new dict.

    Later mappings win on key collisions. When both sides hold a mapping
    they are merged key by key; any other pair (arrays included) is
    replaced by the right-hand value. Inputs are never mutated.
    """
    merged: dict[str, Any] = {}
    for schema in schemas:
        if isinstance(schema, Mapping):
            merged = _merge_pair(merged, schema, set())
    return merged


def _merge_pair(left: Mapping[str, Any], right: Mapping[str, Any], active: set) -> dict[str, Any]:
    pair = (id(left), id(right))
    if pair in active:
        # Both sides recurse into each other; stop at the right-hand node.
        return dict(right)
    active.add(pair)

    result = dict(left)
    for key, value in right.items():
        current = result.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            result[key] = _merge_pair(current, value, active)
        else:
            result[key] = value

    active.discard(pair)
    return result
