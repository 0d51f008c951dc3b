"""OpenAPI / Swagger document collector.

Loads OpenAPI 3.x and Swagger 2.0 documents, resolves local ``$ref``
pointers and groups the declared responses into Operation models.
"""

import logging
import re
from pathlib import Path
from typing import Any
from urllib.parse import unquote

import yaml

from .base import JSON_CONTENT_PREFIX, MockOptions, Operation, ResponseMap

logger = logging.getLogger(__name__)

# Verbs with a matching msw `http.<verb>` handler
HTTP_VERBS = ("get", "put", "post", "delete", "options", "head", "patch")

STATUS_CODE_RE = re.compile(r"^\d{3}$")


class DocumentError(Exception):
    """Raised when an API document cannot be loaded or resolved."""


def parse_openapi(file_path: Path, options: MockOptions | None = None) -> list[Operation]:
    """Parse an OpenAPI/Swagger file into a filtered list of Operation."""
    document = dereference(load_document(file_path))
    return collect_operations(document, options or MockOptions())


def load_document(file_path: Path) -> dict:
    """Read a YAML or JSON API document."""
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise DocumentError(f"Cannot read {file_path}: {e}") from e

    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DocumentError(f"Invalid YAML/JSON in {file_path}: {e}") from e

    if not isinstance(doc, dict) or not ("openapi" in doc or "swagger" in doc):
        raise DocumentError(f"{file_path} is not an OpenAPI or Swagger document")
    return doc


def dereference(document: dict) -> dict:
    """Return a copy of the document with local $ref pointers replaced.

    Each pointer resolves to one shared object, so recursive references
    produce a cyclic graph instead of an infinite copy.
    """
    cache: dict[str, Any] = {}
    return _resolve(document, document, cache)


def _resolve(node: Any, root: dict, cache: dict[str, Any]) -> Any:
    if isinstance(node, list):
        return [_resolve(item, root, cache) for item in node]
    if not isinstance(node, dict):
        return node

    ref = node.get("$ref")
    if not isinstance(ref, str):
        return {key: _resolve(value, root, cache) for key, value in node.items()}

    if ref in cache:
        return cache[ref]

    target = _lookup_pointer(root, ref)
    if not isinstance(target, dict):
        cache[ref] = _resolve(target, root, cache)
        return cache[ref]

    # Registered before recursing so self references land on the same object.
    resolved: dict[str, Any] = {}
    cache[ref] = resolved
    result = _resolve(target, root, cache)
    if result is not resolved:
        resolved.update(result)
    return resolved


def _lookup_pointer(root: dict, ref: str) -> Any:
    if not ref.startswith("#"):
        raise DocumentError(f"External reference not supported: {ref}")

    current: Any = root
    for part in ref[1:].split("/")[1:]:
        token = unquote(part).replace("~1", "/").replace("~0", "~")
        if isinstance(current, dict) and token in current:
            current = current[token]
        elif isinstance(current, list) and token.isdigit() and int(token) < len(current):
            current = current[int(token)]
        else:
            raise DocumentError(f"Unresolvable reference: {ref}")
    return current


def collect_operations(document: dict, options: MockOptions) -> list[Operation]:
    """Group each path's responses into Operations, honouring the option filters."""
    operations = []
    paths = document.get("paths") or {}

    for path, methods in paths.items():
        if not isinstance(methods, dict):
            continue
        for verb, operation in methods.items():
            if verb.lower() not in HTTP_VERBS or not isinstance(operation, dict):
                continue
            verb = verb.lower()

            if not _matches_keywords(verb, path, options):
                logger.debug("Skipping %s %s: filtered by includes/excludes", verb.upper(), path)
                continue

            responses = _parse_responses(
                operation.get("responses") or {},
                operation_id=operation.get("operationId") or "",
                codes=options.codes,
            )
            if not responses:
                logger.debug("Skipping %s %s: no usable responses", verb.upper(), path)
                continue

            operations.append(Operation(verb=verb, path=path, response=responses))

    return operations


def _matches_keywords(verb: str, path: str, options: MockOptions) -> bool:
    target = f"{verb} {path}".lower()
    if options.includes and not any(k.lower() in target for k in options.includes):
        return False
    if options.excludes and any(k.lower() in target for k in options.excludes):
        return False
    return True


def _parse_responses(responses: dict, operation_id: str, codes: list[str]) -> list[ResponseMap]:
    result = []
    for status_code, resp in responses.items():
        code = str(status_code)
        if not STATUS_CODE_RE.match(code):
            logger.debug("Skipping response %r of %r: not a concrete status code", code, operation_id)
            continue
        if codes and code not in codes:
            continue

        result.append(
            ResponseMap(
                code=code,
                id=operation_id,
                responses=_parse_content(resp if isinstance(resp, dict) else {}),
            )
        )
    return result


def _parse_content(resp: dict) -> dict | None:
    content = resp.get("content")
    if isinstance(content, dict):
        schemas = {
            content_type: (media or {}).get("schema")
            for content_type, media in content.items()
            if isinstance(media, dict) or media is None
        }
        return schemas or None
    # Swagger 2.0 declares the body schema directly on the response
    if "schema" in resp:
        return {JSON_CONTENT_PREFIX: resp["schema"]}
    return None


def server_url(document: dict) -> str:
    """Return the document's first server URL, or an empty string."""
    servers = document.get("servers")
    if isinstance(servers, list) and servers and isinstance(servers[0], dict):
        return str(servers[0].get("url", "")).rstrip("/")

    host = document.get("host")
    if host:
        schemes = document.get("schemes") or ["https"]
        base_path = document.get("basePath", "")
        return f"{schemes[0]}://{host}{base_path}".rstrip("/")
    return ""
