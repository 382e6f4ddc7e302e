"""Request/response validation pipeline.

Stages run in a fixed order and stop at the first failure::

    params -> query -> body -> [handler] -> response

Params come before the body so a malformed path never triggers body
parsing. Within the body stage the media type is resolved before the
payload is validated, so 415 and 422 stay distinct failure classes.

Neither entry point raises: failures come back as rendered responses.
"""

import logging
from collections.abc import Mapping

from routeguard._internal.types import ErrorRenderer
from routeguard.config import DEFAULT_CONFIG, PipelineConfig
from routeguard.contract import RouteContract
from routeguard.errors import HTTPError
from routeguard.http.request import Request
from routeguard.http.response import Response
from routeguard.pipeline.errors import coerce_error, json_error_response, render_error
from routeguard.pipeline.outcome import Rejected, Responder, Validated, ValidationOutcome
from routeguard.pipeline.validator import ContractValidator
from routeguard.result import Err, Ok, Result

logger = logging.getLogger("routeguard.pipeline")


async def validate_request(
    contract: RouteContract,
    raw_params: Mapping[str, str],
    request: Request,
    *,
    config: PipelineConfig = DEFAULT_CONFIG,
    render: ErrorRenderer = json_error_response,
) -> ValidationOutcome:
    """Validate *request* against *contract*.

    Args:
        contract: The route contract.
        raw_params: Path parameter strings as extracted by the adapter.
        request: The inbound request.
        config: Pipeline configuration.
        render: Error renderer for rejected requests.

    Returns:
        ``Validated`` with typed params, query, body and a ``respond``
        callable, or ``Rejected`` with the rendered error response.
    """
    validator = ContractValidator(contract, config)
    try:
        result = await _run_request_stages(validator, raw_params, request)
    except Exception as exc:
        logger.exception("500 %s %s — request validation crashed", request.method, request.path)
        error = coerce_error(exc, debug=config.debug)
        return Rejected(error, render_error(error, render))

    if isinstance(result, Err):
        log_http_error(result.error, request)
        return Rejected(result.error, render_error(result.error, render))
    return result.value


def validate_response(
    contract: RouteContract,
    response: Response,
    *,
    config: PipelineConfig = DEFAULT_CONFIG,
    render: ErrorRenderer = json_error_response,
) -> Response:
    """Return *response* if it honors *contract*, else the rendered 500."""
    result = ContractValidator(contract, config).validate_response(response)
    if isinstance(result, Err):
        logger.error(
            "Response for %s %s broke its contract: %s",
            contract.method,
            contract.path,
            result.error.detail,
        )
        return render_error(result.error, render)
    return result.value


async def _run_request_stages(
    validator: ContractValidator,
    raw_params: Mapping[str, str],
    request: Request,
) -> Result[Validated]:
    params = validator.validate_params(raw_params)
    if isinstance(params, Err):
        return params

    query = validator.validate_query(request)
    if isinstance(query, Err):
        return query

    body = await validator.validate_body(request)
    if isinstance(body, Err):
        return body

    return Ok(
        Validated(
            request=request,
            params=params.value,
            query=query.value,
            body=body.value,
            respond=Responder(validator),
        )
    )


def log_http_error(error: HTTPError, request: Request) -> None:
    """Log a client-facing error: DEBUG for 4xx, ERROR for 5xx."""
    summary = error.detail.split("\n", 1)[0]
    if error.status >= 500:
        logger.error("%d %s %s — %s", error.status, request.method, request.path, summary)
    else:
        logger.debug("%d %s %s — %s", error.status, request.method, request.path, summary)
