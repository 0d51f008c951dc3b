"""End-to-end tests: OpenAPI document -> operations -> rendered mock module."""

from pathlib import Path

from api_mock_gen.generator.handlers import build_mock_plan, render_module
from api_mock_gen.generator.synthesis import ValueSynthesizer
from api_mock_gen.parser.base import MockOptions, Operation, ResponseMap
from api_mock_gen.parser.swagger import parse_openapi

FIXTURES = Path(__file__).parent / "fixtures"

EXPECTED_USER_MODULE = '''/**
 * This file is AUTO GENERATED by api-mock-gen.
 * Edit the resultArray of a handler to return a different response.
 */

import { http, HttpResponse } from "msw";

const baseURL = "http://x";

export const handlers = [
  http.get(`${baseURL}/users/{id}`, async () => {
    const resultArray = [[getGetUser200Response(), { status: 200 }]];

    return HttpResponse.json(...resultArray[0]);
  }),
];

export function getGetUser200Response() {
  return {"id":"abcd-abcd-abcd","name":"John Doe"};
}
'''


class TestEndToEnd:
    def test_get_user_module(self):
        op = Operation(
            verb="get",
            path="/users/{id}",
            response=[
                ResponseMap(
                    code="200",
                    id="getUser",
                    responses={
                        "application/json": {
                            "type": "object",
                            "properties": {"id": {"type": "string"}, "name": {"type": "string"}},
                        }
                    },
                )
            ],
        )
        source = render_module(build_mock_plan([op]), MockOptions(base_url="http://x"))
        assert source == EXPECTED_USER_MODULE

    def test_petstore_values(self):
        plan = build_mock_plan(parse_openapi(FIXTURES / "petstore.yaml"))
        values = {p.name: p.value for p in plan.producers}

        pet = {"name": "John Doe", "tag": "dog", "photoUrl": "https://example.com/image.png"}
        assert values["getListPets200Response"] == [pet, pet]
        assert values["getCreatePets201Response"] is None
        assert values["getCreatePets400Response"] == {"code": 1, "message": "Something went wrong"}
        assert values["getShowPetById200Response"] == {
            **pet,
            "id": 1,
            "created_at": "2020-01-01T00:00:00.000Z",
        }
        assert values["getShowPetById404Response"] is None
        assert values["getGetCategory200Response"] == {"name": "John Doe", "children": [None]}

    def test_petstore_handlers(self):
        plan = build_mock_plan(parse_openapi(FIXTURES / "petstore.yaml"))
        delete = [h for h in plan.handlers if h.verb == "delete"][0]
        assert [(c.producer, c.status) for c in delete.candidates] == [(None, 204)]

        create = [h for h in plan.handlers if h.verb == "post"][0]
        assert [(c.producer, c.status) for c in create.candidates] == [
            ("getCreatePets201Response", 201),
            ("getCreatePets400Response", 400),
        ]

    def test_recursive_schema_reported_once(self):
        synthesizer = ValueSynthesizer()
        build_mock_plan(parse_openapi(FIXTURES / "petstore.yaml"), synthesizer)
        assert len(synthesizer.cycles) == 1

    def test_generation_is_stable(self):
        options = MockOptions(base_url="http://x", typescript=True)
        first = render_module(build_mock_plan(parse_openapi(FIXTURES / "petstore.yaml")), options)
        second = render_module(build_mock_plan(parse_openapi(FIXTURES / "petstore.yaml")), options)
        assert first == second
