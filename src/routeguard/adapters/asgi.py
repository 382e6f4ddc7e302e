"""ASGI adapter.

``ASGIEndpoint`` serves a single endpoint; ``ASGIRouter`` serves every
endpoint of a ``ContractRegistry``. Both speak ASGI 3 and work with any
ASGI server::

    registry = ContractRegistry()
    register_routes(registry, "routes/")
    app = ASGIRouter(registry)

    # uvicorn module:app
"""

import inspect
import logging
from collections.abc import Callable, Mapping
from typing import Any

from routeguard._internal.asgi import Receive, Scope, Send
from routeguard.endpoint import Endpoint
from routeguard.errors import HTTPError, NotFound
from routeguard.http.request import Request
from routeguard.http.response import Response
from routeguard.pipeline.errors import render_error
from routeguard.routing.registry import ContractRegistry

logger = logging.getLogger("routeguard.asgi")


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


async def send_response(response: Response, send: Send) -> None:
    """Translate a ``Response`` into ASGI send() calls."""
    raw_headers: list[tuple[bytes, bytes]] = [
        (b"content-type", response.content_type.encode("latin-1")),
    ]
    for name, value in response.headers:
        raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))

    body = response.body_bytes if _body_allowed(response.status) else b""
    raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": body,
        }
    )


async def handle_lifespan(
    receive: Receive,
    send: Send,
    *,
    on_startup: Callable[[], Any] | None = None,
) -> None:
    """Run the ASGI lifespan protocol, acknowledging startup and shutdown."""
    while True:
        message = await receive()
        msg_type = message["type"]

        if msg_type == "lifespan.startup":
            try:
                if on_startup is not None:
                    result = on_startup()
                    if inspect.isawaitable(result):
                        await result
            except Exception as exc:
                logger.exception("Startup failed")
                await send({"type": "lifespan.startup.failed", "message": str(exc)})
                return
            await send({"type": "lifespan.startup.complete"})

        elif msg_type == "lifespan.shutdown":
            await send({"type": "lifespan.shutdown.complete"})
            return


def _route_path(scope: Scope) -> str:
    """The request path with the mount prefix (``root_path``) removed."""
    path: str = scope["path"]
    root_path: str = scope.get("root_path", "")
    if root_path and path.startswith(root_path):
        return path[len(root_path) :] or "/"
    return path


class ASGIEndpoint:
    """ASGI 3 application serving one ``Endpoint``.

    Path parameters are extracted from the request path with the
    endpoint's pattern; a path that does not fit the pattern reaches the
    params schema with its placeholders missing.
    """

    __slots__ = ("endpoint",)

    def __init__(self, endpoint: Endpoint) -> None:
        self.endpoint = endpoint

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await handle_lifespan(receive, send)
            return
        if scope["type"] != "http":
            logger.debug("Ignoring unsupported scope type %r", scope["type"])
            return

        request = Request.from_asgi(scope, receive)
        raw_params = self.endpoint.contract.pattern.extract(_route_path(scope))
        response = await self.endpoint(request, raw_params)
        await send_response(response, send)


class ASGIRouter:
    """ASGI 3 application dispatching to the endpoints of a registry.

    The registry is frozen on lifespan startup, or on the first request
    when the server does not run the lifespan protocol. Requests matching
    no pattern get 404; a pattern registered under other methods gets 405
    with an ``Allow`` header.
    """

    __slots__ = ("registry",)

    def __init__(self, registry: ContractRegistry) -> None:
        self.registry = registry

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await handle_lifespan(receive, send, on_startup=self.registry.freeze)
            return
        if scope["type"] != "http":
            logger.debug("Ignoring unsupported scope type %r", scope["type"])
            return

        self.registry.freeze()
        request = Request.from_asgi(scope, receive)
        path = _route_path(scope)

        endpoint = self.registry.find(request.method, path)
        if endpoint is None:
            error = self._no_route(request.method, path)
            logger.debug("%d %s %s", error.status, request.method, path)
            await send_response(render_error(error, self.registry.render), send)
            return

        raw_params: Mapping[str, str] = endpoint.contract.pattern.extract(path)
        response = await endpoint(request, raw_params)
        await send_response(response, send)

    def _no_route(self, method: str, path: str) -> HTTPError:
        allowed = sorted(
            candidate.method
            for candidate in self.registry.endpoints.values()
            if candidate.method != method and candidate.contract.pattern.regex.fullmatch(path)
        )
        if allowed:
            return HTTPError(
                status=405,
                detail=f"Method {method} not allowed for {path}",
                headers=(("Allow", ", ".join(allowed)),),
            )
        return NotFound(f"No route for {method} {path}")
