"""Route contracts — the declared shape of one route's input and output.

Built in two phases so nothing shared is ever mutated:

1. ``RouteDefinition`` — everything except the path. Usually declared at
   module level next to the handler.
2. ``RouteDefinition.at(path)`` — combines it with the path pattern
   (declared, or discovered from the filesystem) into an immutable
   ``RouteContract``.

Usage::

    route = RouteDefinition(
        method="POST",
        params=ThingParams,
        body={"application/json": ThingBody},
        responses={
            200: ResponseSpec("Create a thing", {"application/json": ThingBody}),
            **error_responses(),
        },
    )
    contract = route.at("/things/{thingId}")

Authoring defects (unknown verb, missing error statuses, a body on GET)
raise ``ConfigurationError`` when the contract is built, never per request.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel

from routeguard.errors import ConfigurationError
from routeguard.http.media import JSON
from routeguard.routing.pattern import PathPattern, compile_pattern
from routeguard.schema.base import Schema, as_schema

HTTP_METHODS: frozenset[str] = frozenset(
    {"GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE"}
)

# Methods that may not declare a request body
BODYLESS_METHODS: frozenset[str] = frozenset({"GET", "HEAD", "TRACE"})


class ErrorMessage(BaseModel):
    """Body of every error response rendered by the default renderer."""

    message: str


def _freeze_schemas(content: Mapping[str, Any]) -> Mapping[str, Schema]:
    """Normalize media type keys and schema values into a read-only mapping."""
    return MappingProxyType(
        {media.strip().lower(): as_schema(schema) for media, schema in content.items()}
    )


@dataclass(frozen=True, slots=True)
class ResponseSpec:
    """One declared response: a description plus a schema per media type.

    ``content`` may be empty for statuses that carry no body (``204``).
    Values are ``Schema`` objects or anything pydantic can validate.
    """

    description: str
    content: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "content", _freeze_schemas(self.content))


RESPONSE_404 = ResponseSpec("Not Found", {JSON: ErrorMessage})
RESPONSE_415 = ResponseSpec("Unsupported Media Type", {JSON: ErrorMessage})
RESPONSE_422 = ResponseSpec("Unprocessable Entity", {JSON: ErrorMessage})
RESPONSE_500 = ResponseSpec("Internal Server Error", {JSON: ErrorMessage})


def error_responses() -> dict[int, ResponseSpec]:
    """The shared error statuses every contract declares."""
    return {404: RESPONSE_404, 415: RESPONSE_415, 422: RESPONSE_422, 500: RESPONSE_500}


@dataclass(frozen=True, slots=True)
class RouteDefinition:
    """A route contract without its path.

    Attributes:
        method: HTTP verb (any case; stored upper-case in the contract).
        params: Schema for path parameters. Required when the path has
            placeholders.
        query: Optional schema for the query string.
        body: Media type -> schema for the request body. Empty for
            bodyless routes.
        responses: Status code -> ``ResponseSpec``. Every status the
            handler may emit, including the shared error statuses.
        summary: Short description (for generated documentation).
        description: Long description (for generated documentation).
    """

    method: str
    responses: Mapping[int, ResponseSpec]
    params: Any = None
    query: Any = None
    body: Mapping[str, Any] = field(default_factory=dict)
    summary: str = ""
    description: str = ""

    def at(self, path: str) -> RouteContract:
        """Bind this definition to *path*, producing an immutable contract."""
        return RouteContract.create(path, self)


@dataclass(frozen=True, slots=True)
class RouteContract:
    """The immutable contract for one route.

    Read concurrently by every in-flight request; nothing in it changes
    after ``RouteDefinition.at()`` returns.
    """

    method: str
    path: str
    pattern: PathPattern
    params: Schema | None
    query: Schema | None
    body: Mapping[str, Schema]
    responses: Mapping[int, ResponseSpec]
    summary: str = ""
    description: str = ""

    @classmethod
    def create(cls, path: str, definition: RouteDefinition) -> RouteContract:
        """Validate *definition* against *path* and build the contract."""
        method = definition.method.upper()
        where = f"{method} {path}"

        if method not in HTTP_METHODS:
            msg = f"{where}: unknown HTTP method {definition.method!r}"
            raise ConfigurationError(msg)

        pattern = compile_pattern(path)

        if pattern.names and definition.params is None:
            names = ", ".join(pattern.names)
            msg = f"{where}: path has placeholders ({names}) but no params schema"
            raise ConfigurationError(msg)

        if definition.body and method in BODYLESS_METHODS:
            msg = f"{where}: {method} routes cannot declare a request body"
            raise ConfigurationError(msg)

        responses = {int(status): spec for status, spec in definition.responses.items()}
        missing = sorted(_required_statuses(definition) - set(responses))
        if missing:
            listed = ", ".join(str(status) for status in missing)
            msg = f"{where}: responses must declare status {listed}"
            raise ConfigurationError(msg)

        return cls(
            method=method,
            path=path,
            pattern=pattern,
            params=as_schema(definition.params) if definition.params is not None else None,
            query=as_schema(definition.query) if definition.query is not None else None,
            body=_freeze_schemas(definition.body),
            responses=MappingProxyType(responses),
            summary=definition.summary,
            description=definition.description,
        )

    @property
    def key(self) -> tuple[str, str]:
        """``(method, path)`` — unique within a registry."""
        return self.method, self.path


def _required_statuses(definition: RouteDefinition) -> set[int]:
    """Error statuses this definition can produce, hence must declare."""
    statuses = {500}
    if definition.params is not None or definition.query is not None:
        statuses.add(404)
    if definition.body:
        statuses.update((415, 422))
    return statuses

