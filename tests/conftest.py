"""Shared fixtures — the ``POST /things/{thingId}`` contract and its handler."""

from typing import Annotated

import pytest
from pydantic import BaseModel, Field

from routeguard.contract import ResponseSpec, RouteContract, RouteDefinition, error_responses
from routeguard.endpoint import Endpoint
from routeguard.http.media import FORM_URLENCODED, JSON, MULTIPART
from routeguard.http.request import Request

GOOD_THING = {"name": "mything", "description": "besthingever"}
BAD_THING = {"name": "MYTHING", "description": "WORSTTHINGEVER"}


class ThingParams(BaseModel):
    thingId: str = Field(pattern=r"\d+")


class ThingQuery(BaseModel):
    thingId: Annotated[str, Field(pattern=r"\d+")] | None = None


class ThingBody(BaseModel):
    name: str = Field(pattern=r"[a-z]+")
    description: str = Field(pattern=r"[a-z]+")


THING_ROUTE = RouteDefinition(
    method="POST",
    params=ThingParams,
    query=ThingQuery,
    body={JSON: ThingBody, FORM_URLENCODED: ThingBody, MULTIPART: ThingBody},
    responses={
        200: ResponseSpec("Create a thing", {JSON: ThingBody}),
        **error_responses(),
    },
)


def create_thing(ctx):
    if ctx.params.thingId == "2":
        return ctx.respond({"foo": "bar"}, 200)
    return ctx.respond(ctx.body, 200)


def _thing_request(
    thing_id: str,
    body: bytes | str = b"",
    *,
    content_type: str | None = "application/json",
    query: str = "",
) -> Request:
    """Build ``POST http://host.com/things/{thing_id}``."""
    url = f"http://host.com/things/{thing_id}"
    if query:
        url = f"{url}?{query}"
    headers = {"content-type": content_type} if content_type is not None else {}
    return Request.build("POST", url, headers=headers, body=body)


@pytest.fixture
def thing_route() -> RouteDefinition:
    return THING_ROUTE


@pytest.fixture
def thing_contract() -> RouteContract:
    return THING_ROUTE.at("/things/{thingId}")


@pytest.fixture
def thing_endpoint(thing_contract: RouteContract) -> Endpoint:
    return Endpoint(thing_contract, create_thing)


@pytest.fixture
def thing_request():
    """Factory for ``POST http://host.com/things/{thing_id}`` requests."""
    return _thing_request


@pytest.fixture
def good_thing() -> dict[str, str]:
    return dict(GOOD_THING)


@pytest.fixture
def bad_thing() -> dict[str, str]:
    return dict(BAD_THING)


@pytest.fixture
def thing_handler():
    return create_thing
