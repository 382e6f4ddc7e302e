"""Error-to-response mapping.

An ``ErrorRenderer`` turns an ``HTTPError`` into the wire ``Response``.
The validation logic never formats responses itself, so adapters can
share one pipeline and still present different error formats::

    endpoint = Endpoint(contract, handler, render=text_error_response)
"""

import logging

from routeguard._internal.types import ErrorRenderer
from routeguard.errors import HTTPError, InternalError
from routeguard.http.response import Response, json_response, text_response

logger = logging.getLogger("routeguard.pipeline")


def json_error_response(error: HTTPError) -> Response:
    """Render ``{"message": detail}`` with the error's status and headers."""
    detail = error.detail or f"Error {error.status}"
    response = json_response({"message": detail}, error.status)
    for name, value in error.headers:
        response = response.with_header(name, value)
    return response


def text_error_response(error: HTTPError) -> Response:
    """Render the detail as ``text/plain`` with the error's status and headers."""
    detail = error.detail or f"Error {error.status}"
    response = text_response(detail, error.status)
    for name, value in error.headers:
        response = response.with_header(name, value)
    return response


def coerce_error(exc: Exception, *, debug: bool) -> HTTPError:
    """Turn an exception caught at a boundary into an ``HTTPError``.

    ``HTTPError`` passes through. Anything else becomes ``InternalError``
    with the original exception as its cause; its text is only exposed
    when *debug* is on.
    """
    if isinstance(exc, HTTPError):
        return exc
    detail = f"{type(exc).__name__}: {exc}" if debug else "Internal Server Error"
    return InternalError(detail, cause=exc)


def render_error(error: HTTPError, renderer: ErrorRenderer) -> Response:
    """Render *error*, falling back to JSON if a custom renderer fails."""
    if renderer is json_error_response:
        return json_error_response(error)
    try:
        return renderer(error)
    except Exception:
        logger.exception("Error renderer %r failed for %d", renderer, error.status)
        return json_error_response(error)
