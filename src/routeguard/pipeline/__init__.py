"""Contract-driven validation pipeline.

Usage::

    from routeguard.pipeline import Rejected, validate_request, validate_response

    outcome = await validate_request(contract, raw_params, request)
    if isinstance(outcome, Rejected):
        return outcome.response
    response = outcome.respond(outcome.body, 200)
    return validate_response(contract, response)

Most callers use ``routeguard.Endpoint``, which runs these steps around a
handler and catches everything the handler throws.
"""

from routeguard.pipeline.core import log_http_error, validate_request, validate_response
from routeguard.pipeline.errors import (
    coerce_error,
    json_error_response,
    render_error,
    text_error_response,
)
from routeguard.pipeline.outcome import Rejected, Responder, Validated, ValidationOutcome
from routeguard.pipeline.validator import DECODABLE_MEDIA_TYPES, ContractValidator

__all__ = [
    "DECODABLE_MEDIA_TYPES",
    "ContractValidator",
    "Rejected",
    "Responder",
    "Validated",
    "ValidationOutcome",
    "coerce_error",
    "json_error_response",
    "log_http_error",
    "render_error",
    "text_error_response",
    "validate_request",
    "validate_response",
]
