"""Immutable HTTP request.

Frozen metadata with async body access. The request is honest about
what it is: received data that doesn't change.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any
from urllib.parse import unquote, urlsplit

from routeguard._internal.asgi import Receive
from routeguard.http.headers import Headers
from routeguard.http.media import media_type
from routeguard.http.query import QueryParams

if TYPE_CHECKING:
    from routeguard.http.forms import FormData


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Metadata (method, URL, headers, etc.) is frozen at creation.
    Body is accessed asynchronously via ``.body()``, ``.json()``, ``.form()``.

    ``url`` is the full URL as the client saw it, reconstructed from
    ``X-Forwarded-Proto`` / ``X-Forwarded-Host`` / ``Host`` when built from
    ASGI. ``path`` is the percent-decoded path used for parameter
    extraction.
    """

    method: str
    url: str
    path: str
    headers: Headers
    query: QueryParams
    http_version: str
    client: tuple[str, int] | None

    # Private: ASGI receive callable for body streaming
    _receive: Receive

    # Private: mutable cache for body and parsed form data
    # (dict contents are mutable even though the field reference is frozen)
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    # -- Computed properties --

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def media_type(self) -> str | None:
        """The Content-Type without parameters, lower-cased."""
        return media_type(self.content_type)

    @property
    def content_length(self) -> int | None:
        """The Content-Length header as int."""
        value = self.headers.get("content-length")
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            return None

    # -- Async body access --

    async def body(self) -> bytes:
        """Read the full request body.

        Result is cached — the ASGI receive is consumed once, then
        the same bytes are returned on subsequent calls.
        """
        if "_body" in self._cache:
            return self._cache["_body"]
        chunks = [chunk async for chunk in self.stream()]
        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    async def stream(self) -> AsyncGenerator[bytes]:
        """Stream the request body in chunks."""
        while True:
            message = await self._receive()
            if message.get("type") == "http.disconnect":
                break
            body = message.get("body", b"")
            if body:
                yield body
            if not message.get("more_body", False):
                break

    async def json(self) -> Any:
        """Parse the body as JSON."""
        import json as json_module

        raw = await self.body()
        return json_module.loads(raw)

    async def text(self) -> str:
        """Read the body as text (UTF-8)."""
        raw = await self.body()
        return raw.decode("utf-8")

    async def form(self) -> FormData:
        """Parse the body as form data (URL-encoded or multipart).

        Result is cached — the body is read and parsed once, then
        the same ``FormData`` is returned on subsequent calls.

        Raises:
            ValueError: If Content-Type is not a form encoding.
            ConfigurationError: If multipart is needed but
                ``python-multipart`` is not installed.
        """
        if "_form" in self._cache:
            return self._cache["_form"]

        from routeguard.http.forms import parse_form_data

        ct = self.content_type or "application/x-www-form-urlencoded"
        raw = await self.body()
        result = await parse_form_data(raw, ct)
        self._cache["_form"] = result
        return result

    # -- Factories --

    @classmethod
    def from_asgi(cls, scope: Mapping[str, Any], receive: Receive) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        headers = Headers(tuple(scope.get("headers", ())))
        client = scope.get("client")
        query_string = scope.get("query_string", b"")
        path = scope["path"]
        return cls(
            method=scope["method"].upper(),
            url=_reconstruct_url(scope, headers, path, query_string),
            path=path,
            headers=headers,
            query=QueryParams(query_string),
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
            _receive=receive,
        )

    @classmethod
    def build(
        cls,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: bytes | str = b"",
    ) -> Request:
        """Create a Request directly from a URL and an in-memory body.

        Used by adapters that already hold the whole body, and by tests::

            request = Request.build(
                "POST",
                "http://host.com/things/1",
                headers={"content-type": "application/json"},
                body=b'{"name": "mything"}',
            )
        """
        parts = urlsplit(url)
        payload = body.encode("utf-8") if isinstance(body, str) else body
        sent = False

        async def receive() -> dict[str, Any]:
            nonlocal sent
            if sent:
                return {"type": "http.disconnect"}
            sent = True
            return {"type": "http.request", "body": payload, "more_body": False}

        return cls(
            method=method.upper(),
            url=url,
            path=unquote(parts.path) or "/",
            headers=Headers.from_mapping(headers or {}),
            query=QueryParams(parts.query.encode("latin-1")),
            http_version="1.1",
            client=None,
            _receive=receive,
        )


def _reconstruct_url(
    scope: Mapping[str, Any],
    headers: Headers,
    path: str,
    query_string: bytes,
) -> str:
    """Rebuild the client-facing URL, honoring proxy forwarding headers."""
    forwarded_proto = headers.get("x-forwarded-proto")
    scheme = (
        forwarded_proto.split(",")[0].strip()
        if forwarded_proto
        else scope.get("scheme", "http")
    )

    forwarded_host = headers.get("x-forwarded-host")
    host = forwarded_host.split(",")[0].strip() if forwarded_host else headers.get("host")
    if not host:
        server = scope.get("server")
        host = f"{server[0]}:{server[1]}" if server else "localhost"

    root_path = scope.get("root_path", "")
    if root_path and path.startswith(root_path):
        root_path = ""
    url = f"{scheme}://{host}{root_path}{path}"
    if query_string:
        url = f"{url}?{query_string.decode('latin-1')}"
    return url
