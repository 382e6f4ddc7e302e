"""Routeguard — contract-driven request and response validation for HTTP routes.

Declare what a route accepts and returns; routeguard rejects anything
else with a precise 404, 415, 422 or 500 before (or after) your handler
runs.

Basic usage::

    from pydantic import BaseModel
    from routeguard import ContractRegistry, RouteDefinition, ResponseSpec, error_responses
    from routeguard.adapters.asgi import ASGIRouter

    class Thing(BaseModel):
        name: str

    route = RouteDefinition(
        method="POST",
        body={"application/json": Thing},
        responses={200: ResponseSpec("Created", {"application/json": Thing}), **error_responses()},
    )

    def create_thing(ctx):
        return ctx.respond(ctx.body, 200)

    registry = ContractRegistry()
    registry.register("/things", route, create_thing)
    app = ASGIRouter(registry)
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "ContractRegistry",
    "Endpoint",
    "Err",
    "HTTPError",
    "InternalError",
    "NotFound",
    "Ok",
    "PipelineConfig",
    "Rejected",
    "Request",
    "Response",
    "ResponseSpec",
    "ResponseValidation",
    "RouteContract",
    "RouteDefinition",
    "RouteguardError",
    "UnprocessableEntity",
    "UnsupportedMediaType",
    "Validated",
    "error_responses",
    "json_response",
    "register_routes",
    "text_response",
    "validate_request",
    "validate_response",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import routeguard`` fast while providing a clean top-level API.
    """
    if name in ("RouteContract", "RouteDefinition", "ResponseSpec", "error_responses"):
        from routeguard import contract as _contract

        return getattr(_contract, name)

    if name in ("PipelineConfig", "ResponseValidation"):
        from routeguard import config as _config

        return getattr(_config, name)

    if name == "Endpoint":
        from routeguard.endpoint import Endpoint

        return Endpoint

    if name == "ContractRegistry":
        from routeguard.routing.registry import ContractRegistry

        return ContractRegistry

    if name == "register_routes":
        from routeguard.routing.discovery import register_routes

        return register_routes

    if name == "Request":
        from routeguard.http.request import Request

        return Request

    if name in ("Response", "json_response", "text_response"):
        from routeguard.http import response as _resp

        return getattr(_resp, name)

    if name in ("validate_request", "validate_response"):
        from routeguard.pipeline import core as _core

        return getattr(_core, name)

    if name in ("Validated", "Rejected"):
        from routeguard.pipeline import outcome as _outcome

        return getattr(_outcome, name)

    if name in ("Ok", "Err"):
        from routeguard import result as _result

        return getattr(_result, name)

    if name in (
        "RouteguardError",
        "ConfigurationError",
        "HTTPError",
        "NotFound",
        "UnsupportedMediaType",
        "UnprocessableEntity",
        "InternalError",
    ):
        from routeguard import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
