"""Contract-scoped validation stages.

Each stage validates one part of the exchange against the contract and
returns ``Ok(value)`` or ``Err(HTTPError)``:

=====================  ===========================================
Stage                  Failure
=====================  ===========================================
``validate_params``    ``NotFound``
``validate_query``     ``NotFound``
``validate_body``      ``UnsupportedMediaType`` / ``UnprocessableEntity``
``validate_response``  ``InternalError``
=====================  ===========================================

Failure messages embed the offending value and the schema's description
so a bad request can be diagnosed from the response alone.
"""

import json
from collections.abc import Mapping
from typing import Any
from urllib.parse import parse_qs

from pydantic_core import to_jsonable_python

from routeguard.config import DEFAULT_CONFIG, PipelineConfig, ResponseValidation
from routeguard.contract import RouteContract
from routeguard.errors import (
    HTTPError,
    InternalError,
    NotFound,
    UnprocessableEntity,
    UnsupportedMediaType,
)
from routeguard.http.forms import UploadFile
from routeguard.http.media import FORM_URLENCODED, JSON, MULTIPART, media_type
from routeguard.http.request import Request
from routeguard.http.response import Response
from routeguard.result import Err, Ok, Result
from routeguard.schema.base import Schema

# Request encodings the pipeline can decode before validation
DECODABLE_MEDIA_TYPES: frozenset[str] = frozenset({JSON, FORM_URLENCODED, MULTIPART})


class ContractValidator:
    """Validates requests and responses against one ``RouteContract``.

    Holds no per-request state: the same validator may serve any number
    of concurrent requests.
    """

    __slots__ = ("config", "contract")

    def __init__(self, contract: RouteContract, config: PipelineConfig = DEFAULT_CONFIG) -> None:
        self.contract = contract
        self.config = config

    # -- Request stages --

    def validate_params(self, raw_params: Mapping[str, str]) -> Result[Any]:
        """Validate raw path parameter strings; the schema coerces types."""
        schema = self.contract.params
        if schema is None:
            return Ok({})
        return self._check(schema, dict(raw_params), "params", NotFound)

    def validate_query(self, request: Request) -> Result[Any]:
        """Validate the query string, flattened last-value-wins."""
        query = request.query.to_dict()
        schema = self.contract.query
        if schema is None:
            return Ok(query)
        return self._check(schema, query, "query", NotFound)

    async def validate_body(self, request: Request) -> Result[Any]:
        """Resolve the body schema by Content-Type, decode, and validate.

        Contracts without a request body skip this stage (``Ok(None)``).
        """
        content = self.contract.body
        if not content:
            return Ok(None)

        header = request.content_type
        if not header or not header.strip():
            return Err(UnsupportedMediaType("No Content-Type header"))

        key = media_type(header, strip_parameters=self.config.strip_media_type_parameters)
        schema = content.get(key) if key is not None else None
        if schema is None:
            allowed = ", ".join(content)
            return Err(
                UnsupportedMediaType(
                    f"No schema for Content-Type: {header}. Supported: {allowed}"
                )
            )

        base = media_type(header)
        if base not in DECODABLE_MEDIA_TYPES:
            return Err(UnsupportedMediaType(f"Unsupported Content-Type: {header}"))

        try:
            value = await _decode_request_body(request, base)
        except ValueError as exc:
            return Err(UnprocessableEntity(f"Error decoding requestBody as {base}: {exc}"))

        return self._check(schema, value, "requestBody", UnprocessableEntity)

    # -- Response stage --

    def validate_response(self, response: Response) -> Result[Response]:
        """Check an outbound response against the declared responses.

        The status and the media type must always be declared. Which
        bodies are decoded and validated depends on
        ``PipelineConfig.response_validation``.
        """
        status = response.status
        spec = self.contract.responses.get(status)
        if spec is None:
            statuses = ", ".join(str(s) for s in sorted(self.contract.responses))
            return Err(
                InternalError(
                    f"No response config for status {status}. Allowed statuses: {statuses}"
                )
            )

        if not spec.content:
            if not response.body_bytes:
                return Ok(response)
            return Err(InternalError(f"No response config content for status {status}"))

        json_only = self.config.response_validation is ResponseValidation.JSON
        key = media_type(
            response.content_type,
            strip_parameters=self.config.strip_media_type_parameters,
        )
        schema = spec.content.get(key) if key is not None else None
        if schema is None:
            if json_only and not response.body_bytes:
                return Ok(response)
            declared = ", ".join(spec.content)
            return Err(
                InternalError(
                    f"No response schema for status {status} and Content-Type "
                    f"{response.content_type}. Declared: {declared}"
                )
            )

        base = response.media_type
        if json_only and base != JSON:
            return Ok(response)

        try:
            value = _decode_response_body(response, base)
        except ValueError as exc:
            return Err(InternalError(f"Error decoding responseBody as {base}: {exc}"))

        result = self._check(schema, value, "responseBody", InternalError)
        if isinstance(result, Err):
            return result
        return Ok(response)

    # -- Helpers --

    def _check(
        self,
        schema: Schema,
        value: Any,
        kind: str,
        error_cls: type[HTTPError],
    ) -> Result[Any]:
        result = schema.validate(value)
        if result:
            return Ok(result.value)
        return Err(error_cls(self._failure_message(schema, value, kind, result.errors)))

    def _failure_message(
        self,
        schema: Schema,
        value: Any,
        kind: str,
        errors: tuple[str, ...],
    ) -> str:
        indent = self.config.message_indent
        value_json = json.dumps(value, indent=indent, default=_jsonable)
        schema_json = json.dumps(schema.describe(), indent=indent, default=_jsonable)
        message = f"Error validating {kind}: {value_json}\n\nSchema: {schema_json}"
        if errors:
            listed = "\n".join(f"- {error}" for error in errors)
            message = f"{message}\n\nErrors:\n{listed}"
        return message


def _jsonable(value: Any) -> Any:
    if isinstance(value, (bytes, UploadFile)):
        return repr(value)
    return to_jsonable_python(value, fallback=repr)


async def _decode_request_body(request: Request, base: str | None) -> Any:
    """Decode a request body of a decodable media type.

    Raises ``ValueError`` (including ``json.JSONDecodeError`` and
    ``UnicodeDecodeError``) for malformed payloads.
    """
    if base == JSON:
        return await request.json()
    form = await request.form()
    return form.to_dict()


def _decode_response_body(response: Response, base: str | None) -> Any:
    """Decode a response body for validation by its media type."""
    if base == JSON:
        return response.json()
    if base == FORM_URLENCODED:
        parsed = parse_qs(response.text, keep_blank_values=True)
        return {key: values[-1] for key, values in parsed.items()}
    if base is not None and base.startswith("text/"):
        return response.text
    return response.body_bytes
