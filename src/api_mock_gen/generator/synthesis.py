"""Value synthesis engine — converts schema nodes into fixed example values.

Output is deterministic: the same schema and field key always produce
the same value, so generated mocks stay stable across runs.
"""

import copy
import logging
from collections.abc import Mapping
from typing import Any

from api_mock_gen.generator.heuristics import resolve_string_value
from api_mock_gen.generator.merge import merge_schemas

logger = logging.getLogger(__name__)

ADDITIONAL_PROPERTY_KEY = "key"


def _number(value: Any) -> int | float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def _length(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return max(value, 0)


class ValueSynthesizer:
    """Recursively synthesizes literal values from schema nodes.

    Schema nodes currently on the traversal stack are tracked by identity.
    Re-entering one yields ``None`` instead of recursing; every such
    substitution is logged and recorded in ``cycles`` as the field key
    where it happened.
    """

    def __init__(self):
        self.cycles: list[str | None] = []
        self._visiting: set[int] = set()

    def synthesize(self, schema: Mapping[str, Any] | None = None, key: str | None = None) -> Any:
        """Return an example value for ``schema``; ``key`` is the property name."""
        if not isinstance(schema, Mapping):
            return None

        node_id = id(schema)
        if node_id in self._visiting:
            logger.warning("Recursive schema at field %r; substituting null", key)
            self.cycles.append(key)
            return None

        self._visiting.add(node_id)
        try:
            return self._synthesize_node(schema, key)
        finally:
            self._visiting.discard(node_id)

    def _synthesize_node(self, schema: Mapping[str, Any], key: str | None) -> Any:
        if "example" in schema:
            return schema["example"]

        schema_type = schema.get("type")
        if isinstance(schema_type, list):
            first = schema_type[0] if schema_type else None
            return self.synthesize({**schema, "type": first}, key)

        enum = schema.get("enum")
        if isinstance(enum, list) and enum:
            return enum[0]

        if schema.get("allOf"):
            rest = {k: v for k, v in schema.items() if k != "allOf"}
            return self.synthesize(merge_schemas(*schema["allOf"], rest), key)

        for keyword in ("oneOf", "anyOf"):
            branches = schema.get(keyword)
            if isinstance(branches, list):
                return self.synthesize(branches[0] if branches else None, key)

        if schema_type == "string":
            return resolve_string_value(
                format=schema.get("format"),
                key=key,
                min_length=schema.get("minLength"),
                max_length=schema.get("maxLength"),
                pattern=schema.get("pattern"),
            )

        if schema_type in ("number", "integer"):
            for bound in ("minimum", "maximum"):
                value = _number(schema.get(bound))
                if value is not None:
                    return value
            return 1

        if schema_type == "boolean":
            return True

        if schema_type == "object":
            return self._synthesize_object(schema)

        if schema_type == "array":
            return self._synthesize_array(schema)

        return None

    def _synthesize_object(self, schema: Mapping[str, Any]) -> dict[str, Any]:
        properties = schema.get("properties")
        additional = schema.get("additionalProperties")
        if properties is None and isinstance(additional, Mapping):
            return {ADDITIONAL_PROPERTY_KEY: self.synthesize(additional)}

        if not isinstance(properties, Mapping):
            return {}
        return {name: self.synthesize(prop, name) for name, prop in properties.items()}

    def _synthesize_array(self, schema: Mapping[str, Any]) -> list[Any]:
        length = _length(schema.get("minItems"))
        if length is None:
            length = 1
        item = self.synthesize(schema.get("items"))
        return [copy.deepcopy(item) for _ in range(length)]


def synthesize(schema: Mapping[str, Any] | None = None, key: str | None = None) -> Any:
    """Synthesize a value with a fresh ValueSynthesizer."""
    return ValueSynthesizer().synthesize(schema, key)
