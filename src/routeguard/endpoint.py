"""Endpoints — a contract plus the handler it guards.

The endpoint is the outermost boundary: whatever happens inside, calling
it yields a ``Response``. Adapters translate their native request into a
``Request``, await the endpoint, and translate the ``Response`` back.

Usage::

    async def create_thing(ctx: Validated) -> Response:
        return ctx.respond(ctx.body, 200)

    endpoint = Endpoint(route.at("/things/{thingId}"), create_thing)
    response = await endpoint(request)
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from routeguard._internal.invoke import invoke
from routeguard._internal.types import ErrorRenderer, Handler
from routeguard.config import DEFAULT_CONFIG, PipelineConfig
from routeguard.contract import RouteContract
from routeguard.errors import ERROR_STATUSES, HTTPError, InternalError
from routeguard.http.request import Request
from routeguard.http.response import Response
from routeguard.pipeline.core import log_http_error, validate_request, validate_response
from routeguard.pipeline.errors import coerce_error, json_error_response, render_error
from routeguard.pipeline.outcome import Rejected

logger = logging.getLogger("routeguard.pipeline")


@dataclass(frozen=True, slots=True)
class Endpoint:
    """A route contract bound to its handler.

    The handler receives the ``Validated`` context and returns a
    ``Response`` — usually via ``ctx.respond(body, status)``. It may be
    ``def`` or ``async def``.

    Calling the endpoint never raises:

    - request validation failures are rendered (404, 415, 422)
    - ``HTTPError`` raised by the handler is rendered with its status if
      the contract declares it; statuses outside 404/415/422/500 are
      then checked against their response spec like any other response
    - any other exception, a non-``Response`` return value, or a
      response that breaks the contract becomes a rendered 500
    """

    contract: RouteContract
    handler: Handler
    config: PipelineConfig = DEFAULT_CONFIG
    render: ErrorRenderer = json_error_response

    @property
    def method(self) -> str:
        return self.contract.method

    @property
    def path(self) -> str:
        return self.contract.path

    async def __call__(
        self,
        request: Request,
        raw_params: Mapping[str, str] | None = None,
    ) -> Response:
        """Validate *request*, run the handler, validate its response.

        Args:
            request: The inbound request.
            raw_params: Path parameters extracted by the adapter. When
                omitted they are extracted from ``request.path`` using the
                contract's path pattern.
        """
        if raw_params is None:
            raw_params = self.contract.pattern.extract(request.path)

        outcome = await validate_request(
            self.contract,
            raw_params,
            request,
            config=self.config,
            render=self.render,
        )
        if isinstance(outcome, Rejected):
            return outcome.response

        try:
            result = await invoke(self.handler, outcome)
        except HTTPError as exc:
            error = self._handler_error(exc)
            log_http_error(error, request)
            response = render_error(error, self.render)
            if error.status in ERROR_STATUSES:
                return response
            return validate_response(
                self.contract, response, config=self.config, render=self.render
            )
        except Exception as exc:
            logger.exception("500 %s %s", request.method, request.path)
            return render_error(coerce_error(exc, debug=self.config.debug), self.render)

        if not isinstance(result, Response):
            error = InternalError(
                f"Handler for {self.method} {self.path} returned "
                f"{type(result).__name__}, expected Response"
            )
            log_http_error(error, request)
            return render_error(error, self.render)

        # Already checked by ctx.respond()
        if result is outcome.respond.last:
            return result

        return validate_response(self.contract, result, config=self.config, render=self.render)

    def _handler_error(self, exc: HTTPError) -> HTTPError:
        """Keep a handler's HTTPError only if the contract declares its status."""
        if exc.status in self.contract.responses:
            return exc
        return InternalError(
            f"Handler raised undeclared status {exc.status}: {exc.detail}",
            cause=exc,
        )
