"""Validation outcomes and the ``respond`` capability.

``validate_request`` returns exactly one of:

- ``Validated`` — params, query and body passed; carries a ``respond``
  callable bound to the contract.
- ``Rejected`` — the first failing stage's error, already rendered.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from routeguard.errors import HTTPError
from routeguard.http.media import JSON, media_type
from routeguard.http.request import Request
from routeguard.http.response import Response, json_response
from routeguard.pipeline.validator import ContractValidator
from routeguard.result import Err


class Responder:
    """Builds a response and checks it against the contract in one call.

    ``respond(body, status)`` serializes *body* (JSON by default) and runs
    the same response validation the pipeline applies to handler output.
    A body that breaks the contract raises ``InternalError``; the endpoint
    boundary turns that into a 500.

    ``last`` is the most recent response produced, so the boundary can
    skip validating it a second time.
    """

    __slots__ = ("_validator", "last")

    def __init__(self, validator: ContractValidator) -> None:
        self._validator = validator
        self.last: Response | None = None

    def __call__(
        self,
        body: Any = None,
        status: int = 200,
        *,
        content_type: str = JSON,
        headers: Mapping[str, str] | None = None,
    ) -> Response:
        response = _build_response(body, status, content_type, headers)
        result = self._validator.validate_response(response)
        if isinstance(result, Err):
            raise result.error
        self.last = response
        return response


def _build_response(
    body: Any,
    status: int,
    content_type: str,
    headers: Mapping[str, str] | None,
) -> Response:
    extra = tuple((headers or {}).items())
    if body is None:
        return Response(body=b"", status=status, content_type=content_type, headers=extra)
    if media_type(content_type) == JSON:
        return json_response(body, status, headers=headers).with_content_type(content_type)
    if isinstance(body, str | bytes):
        return Response(body=body, status=status, content_type=content_type, headers=extra)
    msg = f"Cannot serialize {type(body).__name__} as {content_type}"
    raise TypeError(msg)


@dataclass(frozen=True, slots=True)
class Validated:
    """The request passed every stage. Handed to the route handler.

    Attributes:
        request: The original request.
        params: Validated (coerced) path parameters.
        query: Validated query parameters (flattened mapping if undeclared).
        body: Validated body, or ``None`` for bodyless routes.
        respond: Contract-bound response builder.
    """

    request: Request
    params: Any
    query: Any
    body: Any
    respond: Responder

    @property
    def success(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Rejected:
    """The request failed a stage; ``response`` is ready to send."""

    error: HTTPError
    response: Response

    @property
    def success(self) -> bool:
        return False


type ValidationOutcome = Validated | Rejected
