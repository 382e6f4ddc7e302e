"""Filesystem route discovery.

Walks a routes directory tree where directories form the URL path and
each route file is named after its HTTP verb::

    routes/
        things/
            {thingId}/
                GET.py      -> GET  /things/{thingId}
                POST.py     -> POST /things/{thingId}

Directory names wrapped in ``{braces}`` become path placeholders. A route
file defines two module attributes:

- ``route`` — a ``RouteDefinition``
- ``handler`` — the function serving it

Files and directories starting with ``_`` or ``.`` are skipped.
"""

from __future__ import annotations

import importlib.util
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from routeguard._internal.types import Handler
from routeguard.contract import HTTP_METHODS, RouteDefinition
from routeguard.errors import ConfigurationError

if TYPE_CHECKING:
    from routeguard.routing.registry import ContractRegistry

logger = logging.getLogger("routeguard.routing")

# Regex matching {param} directory names
_PARAM_DIR_RE = re.compile(r"^\{(\w+)\}$")


@dataclass(frozen=True, slots=True)
class DiscoveredRoute:
    """A route file found on disk."""

    path: str
    method: str
    definition: RouteDefinition
    handler: Handler
    source: Path


def discover_routes(routes_dir: str | Path) -> list[DiscoveredRoute]:
    """Walk a routes directory and load every route file.

    Args:
        routes_dir: Path to the routes directory.

    Returns:
        Discovered routes, ordered by path then method.

    Raises:
        FileNotFoundError: *routes_dir* is not a directory.
        ConfigurationError: A route file is missing ``route`` or
            ``handler``, or its verb disagrees with its definition.
    """
    root = Path(routes_dir).resolve()
    if not root.is_dir():
        raise FileNotFoundError(f"Routes directory not found: {root}")

    routes: list[DiscoveredRoute] = []
    _walk_directory(root, url_parts=[], routes=routes)
    logger.debug("Discovered %d route(s) under %s", len(routes), root)
    return routes


def register_routes(registry: ContractRegistry, routes_dir: str | Path) -> list[DiscoveredRoute]:
    """Discover the routes under *routes_dir* and register each of them."""
    routes = discover_routes(routes_dir)
    for route in routes:
        registry.register(route.path, route.definition, route.handler)
    return routes


def _walk_directory(directory: Path, *, url_parts: list[str], routes: list[DiscoveredRoute]) -> None:
    url_path = "/" + "/".join(url_parts)

    for item in sorted(directory.iterdir()):
        if not item.is_file() or item.suffix != ".py":
            continue
        if item.name.startswith(("_", ".")):
            continue
        if item.stem.upper() not in HTTP_METHODS:
            logger.debug("Skipping %s: not named after an HTTP method", item)
            continue
        routes.append(_load_route_file(item, url_path))

    for item in sorted(directory.iterdir()):
        if not item.is_dir():
            continue
        if item.name.startswith(("_", ".")):
            continue

        param_match = _PARAM_DIR_RE.match(item.name)
        segment = "{" + param_match.group(1) + "}" if param_match else item.name
        _walk_directory(item, url_parts=[*url_parts, segment], routes=routes)


def _load_route_file(file: Path, url_path: str) -> DiscoveredRoute:
    """Import a route file and read its ``route`` and ``handler``."""
    module_name = f"_route_{file.stem}_{id(file)}"
    spec = importlib.util.spec_from_file_location(module_name, file)
    if spec is None or spec.loader is None:
        msg = f"Cannot load route file {file}"
        raise ConfigurationError(msg)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    definition = getattr(module, "route", None)
    if not isinstance(definition, RouteDefinition):
        msg = f"{file}: expected a module attribute 'route' of type RouteDefinition"
        raise ConfigurationError(msg)

    handler = getattr(module, "handler", None)
    if handler is None or not callable(handler):
        msg = f"{file}: expected a callable module attribute 'handler'"
        raise ConfigurationError(msg)

    method = file.stem.upper()
    if definition.method.upper() != method:
        msg = (
            f"{file}: file is named for {method} but its route declares "
            f"{definition.method.upper()}"
        )
        raise ConfigurationError(msg)

    return DiscoveredRoute(
        path=url_path,
        method=method,
        definition=definition,
        handler=handler,
        source=file,
    )
