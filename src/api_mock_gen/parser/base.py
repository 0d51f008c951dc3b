"""Unified data models for collected API operations.

The OpenAPI collector converts its input into these models; the
generator consumes them to synthesize mock responses.
"""

from typing import Any

from pydantic import BaseModel, Field

JSON_CONTENT_PREFIX = "application/json"


class ResponseMap(BaseModel):
    """One declared response of an operation."""

    code: str  # "200", "204", ...
    id: str = ""  # operationId, may be empty
    responses: dict[str, Any] | None = None  # {content_type: schema}

    def json_schema(self) -> dict | None:
        """Return the schema of the first application/json content entry."""
        if not self.responses:
            return None
        for content_type, schema in self.responses.items():
            if content_type.startswith(JSON_CONTENT_PREFIX):
                return schema
        return None


class Operation(BaseModel):
    """A single HTTP verb + path template with its responses in declared order."""

    verb: str  # get / post / put / delete / patch ...
    path: str  # /users/{id}
    response: list[ResponseMap]


class MockOptions(BaseModel):
    """Generation options shared by the collector and the handler renderer."""

    base_url: str = ""
    typescript: bool = False
    includes: list[str] = Field(default_factory=list)
    excludes: list[str] = Field(default_factory=list)
    codes: list[str] = Field(default_factory=list)
