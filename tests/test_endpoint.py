"""Tests for routeguard.endpoint — the boundary that always yields a Response."""

import json
import logging

import pytest

from routeguard.config import PipelineConfig
from routeguard.contract import (
    RESPONSE_500,
    ErrorMessage,
    ResponseSpec,
    RouteDefinition,
    error_responses,
)
from routeguard.endpoint import Endpoint
from routeguard.errors import HTTPError, NotFound, UnsupportedMediaType
from routeguard.http.media import JSON
from routeguard.http.request import Request
from routeguard.http.response import Response, json_response, text_response
from routeguard.pipeline import text_error_response


class TestThingScenario:
    """POST /things/{thingId} end to end."""

    async def test_200_echo(self, thing_endpoint, thing_request, good_thing) -> None:
        response = await thing_endpoint(thing_request("1", json.dumps(good_thing)))
        assert response.status == 200
        assert response.json() == good_thing

    async def test_404_bad_params(self, thing_endpoint, thing_request, good_thing) -> None:
        response = await thing_endpoint(thing_request("xyz", json.dumps(good_thing)))
        assert response.status == 404
        assert response.json()["message"].startswith("Error validating params")

    async def test_415_csv(self, thing_endpoint, thing_request) -> None:
        response = await thing_endpoint(thing_request("1", "a,b", content_type="text/csv"))
        assert response.status == 415

    async def test_422_bad_body(self, thing_endpoint, thing_request, bad_thing) -> None:
        response = await thing_endpoint(thing_request("1", json.dumps(bad_thing)))
        assert response.status == 422
        assert response.json()["message"].startswith("Error validating requestBody")

    async def test_500_bad_response(self, thing_endpoint, thing_request, good_thing) -> None:
        response = await thing_endpoint(thing_request("2", json.dumps(good_thing)))
        assert response.status == 500
        assert response.json()["message"].startswith("Error validating responseBody")

    async def test_explicit_raw_params(self, thing_endpoint, thing_request, good_thing) -> None:
        request = thing_request("1", json.dumps(good_thing))
        response = await thing_endpoint(request, {"thingId": "xyz"})
        assert response.status == 404

    async def test_mount_prefix(self, thing_endpoint, good_thing) -> None:
        request = Request.build(
            "POST",
            "http://host.com/api/things/1",
            headers={"content-type": "application/json"},
            body=json.dumps(good_thing),
        )
        response = await thing_endpoint(request)
        assert response.status == 200

    def test_exposes_method_and_path(self, thing_endpoint) -> None:
        assert thing_endpoint.method == "POST"
        assert thing_endpoint.path == "/things/{thingId}"


def _ping_route(extra: dict[int, ResponseSpec] | None = None) -> RouteDefinition:
    return RouteDefinition(
        method="GET",
        responses={
            200: ResponseSpec("Pong", {"application/json": dict[str, str]}),
            **(extra or {}),
            **error_responses(),
        },
    )


def _get(path: str = "/ping") -> Request:
    return Request.build("GET", f"http://h{path}")


class TestHandlerResults:
    async def test_async_handler(self) -> None:
        async def ping(ctx):
            return ctx.respond({"pong": "yes"})

        response = await Endpoint(_ping_route().at("/ping"), ping)(_get())
        assert response.json() == {"pong": "yes"}

    async def test_respond_result_returned_as_is(self) -> None:
        built: list[Response] = []

        def ping(ctx):
            built.append(ctx.respond({"pong": "yes"}))
            return built[-1]

        response = await Endpoint(_ping_route().at("/ping"), ping)(_get())
        assert response is built[0]

    async def test_plain_response_validated(self) -> None:
        def ping(ctx):
            return json_response({"pong": 1})

        response = await Endpoint(_ping_route().at("/ping"), ping)(_get())
        assert response.status == 500
        assert "Error validating responseBody" in response.json()["message"]

    async def test_plain_valid_response_passes(self) -> None:
        def ping(ctx):
            return json_response({"pong": "yes"})

        response = await Endpoint(_ping_route().at("/ping"), ping)(_get())
        assert response.status == 200

    async def test_declared_non_json_response_passes(self) -> None:
        def ping(ctx):
            return text_response("pong", 201)

        route = _ping_route({201: ResponseSpec("Pong", {"text/plain": int})})
        response = await Endpoint(route.at("/ping"), ping)(_get())
        assert response.status == 201
        assert response.text == "pong"

    async def test_undeclared_media_type_is_500(self) -> None:
        def ping(ctx):
            return text_response("not json at all")

        response = await Endpoint(_ping_route().at("/ping"), ping)(_get())
        assert response.status == 500
        assert response.json()["message"].startswith("No response schema for status 200")

    async def test_non_response_return_is_500(self) -> None:
        def ping(ctx):
            return {"pong": "yes"}

        response = await Endpoint(_ping_route().at("/ping"), ping)(_get())
        assert response.status == 500
        assert response.json()["message"] == (
            "Handler for GET /ping returned dict, expected Response"
        )

    async def test_undeclared_status_is_500(self) -> None:
        def ping(ctx):
            return Response("", 204)

        response = await Endpoint(_ping_route().at("/ping"), ping)(_get())
        assert response.status == 500


class TestHandlerErrors:
    async def test_taxonomy_error_keeps_status(self) -> None:
        def ping(ctx):
            raise NotFound("No such ping")

        response = await Endpoint(_ping_route().at("/ping"), ping)(_get())
        assert response.status == 404
        assert response.json() == {"message": "No such ping"}

    async def test_declared_status_kept(self) -> None:
        def ping(ctx):
            raise HTTPError(409, "Conflict")

        route = _ping_route({409: ResponseSpec("Conflict", {JSON: ErrorMessage})})
        response = await Endpoint(route.at("/ping"), ping)(_get())
        assert response.status == 409
        assert response.json() == {"message": "Conflict"}

    async def test_declared_status_with_other_schema_is_500(self) -> None:
        def ping(ctx):
            raise HTTPError(409, "Conflict")

        route = _ping_route({409: ResponseSpec("Conflict", {JSON: dict[str, int]})})
        response = await Endpoint(route.at("/ping"), ping)(_get())
        assert response.status == 500
        assert response.json()["message"].startswith("Error validating responseBody")

    async def test_declared_status_without_content_is_500(self) -> None:
        def ping(ctx):
            raise HTTPError(409, "Conflict")

        route = _ping_route({409: ResponseSpec("Conflict")})
        response = await Endpoint(route.at("/ping"), ping)(_get())
        assert response.status == 500
        assert response.json() == {"message": "No response config content for status 409"}

    async def test_undeclared_taxonomy_status_becomes_500(self) -> None:
        def ping(ctx):
            raise UnsupportedMediaType("nope")

        route = RouteDefinition(
            method="GET",
            responses={
                200: ResponseSpec("Pong", {JSON: dict[str, str]}),
                500: RESPONSE_500,
            },
        )
        response = await Endpoint(route.at("/ping"), ping)(_get())
        assert response.status == 500
        assert response.json()["message"] == "Handler raised undeclared status 415: nope"

    async def test_undeclared_status_becomes_500(self) -> None:
        def ping(ctx):
            raise HTTPError(409, "Conflict")

        response = await Endpoint(_ping_route().at("/ping"), ping)(_get())
        assert response.status == 500
        assert response.json()["message"] == "Handler raised undeclared status 409: Conflict"

    async def test_respond_violation_is_500(self) -> None:
        def ping(ctx):
            return ctx.respond({"pong": 1})

        response = await Endpoint(_ping_route().at("/ping"), ping)(_get())
        assert response.status == 500

    async def test_unexpected_exception_masked(self, caplog: pytest.LogCaptureFixture) -> None:
        def ping(ctx):
            raise KeyError("secret")

        with caplog.at_level(logging.ERROR, logger="routeguard.pipeline"):
            response = await Endpoint(_ping_route().at("/ping"), ping)(_get())
        assert response.status == 500
        assert response.json() == {"message": "Internal Server Error"}
        assert "secret" not in response.text
        assert any(record.exc_info for record in caplog.records)

    async def test_unexpected_exception_debug(self) -> None:
        def ping(ctx):
            raise ValueError("details")

        endpoint = Endpoint(_ping_route().at("/ping"), ping, PipelineConfig(debug=True))
        response = await endpoint(_get())
        assert response.json() == {"message": "ValueError: details"}


class TestRendering:
    async def test_text_renderer(self, thing_contract, thing_handler, thing_request) -> None:
        endpoint = Endpoint(thing_contract, thing_handler, render=text_error_response)
        response = await endpoint(thing_request("xyz", b"{}"))
        assert response.status == 404
        assert response.media_type == "text/plain"
        assert response.text.startswith("Error validating params")

    async def test_rendered_errors_not_revalidated(self) -> None:
        def teapot(error):
            return text_response("short and stout", error.status)

        route = RouteDefinition(method="GET", responses={500: RESPONSE_500})

        def ping(ctx):
            raise RuntimeError("boom")

        response = await Endpoint(route.at("/ping"), ping, render=teapot)(_get())
        assert response.status == 500
        assert response.text == "short and stout"
