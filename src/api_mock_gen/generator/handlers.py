"""Handler assembly — turns operations into msw value producers and handlers.

Assembly happens in two steps: ``build_mock_plan`` synthesizes every
value into a MockPlan, then the ``render_*`` functions turn the plan
into JavaScript/TypeScript source text.
"""

import datetime
import json
import logging
from typing import Any

from pydantic import BaseModel

from api_mock_gen.generator.naming import producer_name
from api_mock_gen.generator.synthesis import ValueSynthesizer
from api_mock_gen.parser.base import MockOptions, Operation

logger = logging.getLogger(__name__)

NO_CONTENT = 204

CANDIDATE_TYPE = "[any, { status: number }][]"

BANNER = """/**
 * This file is AUTO GENERATED by api-mock-gen.
 * Edit the resultArray of a handler to return a different response.
 */"""


class ValueProducer(BaseModel):
    """A zero-argument function returning one precomputed value."""

    name: str
    value: Any


class Candidate(BaseModel):
    """One (value, status) entry of a handler's candidate list."""

    producer: str | None  # None renders as undefined
    status: int


class MockHandler(BaseModel):
    verb: str
    path: str
    candidates: list[Candidate]


class MockPlan(BaseModel):
    """Language independent description of everything to render."""

    producers: list[ValueProducer]
    handlers: list[MockHandler]


def build_mock_plan(operations: list[Operation], synthesizer: ValueSynthesizer | None = None) -> MockPlan:
    """Synthesize producer values and candidate lists for all operations."""
    synthesizer = synthesizer or ValueSynthesizer()
    producers: list[ValueProducer] = []
    declared: set[str] = set()
    handlers = []

    for op in operations:
        candidates = []
        for response in op.response:
            name = producer_name(response)
            status = int(response.code)

            if name and name in declared:
                logger.warning("Duplicate value producer %s for %s %s; keeping the first", name, op.verb.upper(), op.path)
            elif name:
                value = synthesizer.synthesize(response.json_schema())
                producers.append(ValueProducer(name=name, value=value))
                declared.add(name)

            producer = name if name and status != NO_CONTENT else None
            candidates.append(Candidate(producer=producer, status=status))

        handlers.append(MockHandler(verb=op.verb, path=op.path, candidates=candidates))

    return MockPlan(producers=producers, handlers=handlers)


def to_literal(value: Any) -> str:
    """Encode a value as a compact JSON literal, valid in JS and TS."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=_json_default)


def _json_default(value: Any) -> Any:
    # YAML loads unquoted dates in examples as date/datetime objects
    if isinstance(value, (datetime.date, datetime.datetime, datetime.time)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _template_path(path: str) -> str:
    return path.replace("\\", "\\\\").replace("`", "\\`").replace("${", "\\${")


def render_producers(plan: MockPlan) -> str:
    """Render one exported function per value producer."""
    blocks = [
        f"export function {p.name}() {{\n  return {to_literal(p.value)};\n}}\n"
        for p in plan.producers
    ]
    return "\n".join(blocks)


def render_handler(handler: MockHandler, options: MockOptions) -> str:
    entries = ", ".join(
        f"[{c.producer + '()' if c.producer else 'undefined'}, {{ status: {c.status} }}]"
        for c in handler.candidates
    )
    annotation = f" as {CANDIDATE_TYPE}" if options.typescript else ""
    return "\n".join([
        f"http.{handler.verb}(`${{baseURL}}{_template_path(handler.path)}`, async () => {{",
        f"    const resultArray = [{entries}]{annotation};",
        "",
        "    return HttpResponse.json(...resultArray[0]);",
        "  }),",
    ])


def render_handlers(plan: MockPlan, options: MockOptions) -> str:
    """Render the handler registrations, one per operation."""
    return "\n  ".join(render_handler(h, options) for h in plan.handlers)


def assemble_handlers(operations: list[Operation], options: MockOptions) -> str:
    """Build the plan for ``operations`` and render its handler registrations."""
    return render_handlers(build_mock_plan(operations), options)


def render_module(plan: MockPlan, options: MockOptions) -> str:
    """Render a complete msw mock module."""
    handlers = render_handlers(plan, options)
    parts = [
        BANNER,
        'import { http, HttpResponse } from "msw";',
        f"const baseURL = {to_literal(options.base_url)};",
        f"export const handlers = [\n  {handlers}\n];" if handlers else "export const handlers = [];",
    ]
    producers = render_producers(plan)
    if producers:
        parts.append(producers.rstrip("\n"))
    return "\n\n".join(parts) + "\n"
