"""Contract registry — built during startup, frozen before serving.

Registration validates each contract eagerly, so an authoring mistake
fails at import time rather than on the first request. Once frozen the
registry is read-only and safe to share across threads.
"""

import logging
import threading
from collections.abc import Mapping

from routeguard._internal.types import ErrorRenderer, Handler
from routeguard.config import DEFAULT_CONFIG, PipelineConfig
from routeguard.contract import RouteDefinition
from routeguard.endpoint import Endpoint
from routeguard.errors import ConfigurationError
from routeguard.pipeline.errors import json_error_response

logger = logging.getLogger("routeguard.routing")


class ContractRegistry:
    """Holds every endpoint of an application, keyed by ``(method, path)``.

    Usage::

        registry = ContractRegistry()
        registry.register("/things/{thingId}", create_thing_route, create_thing)
        registry.freeze()

        endpoint = registry.find("POST", "/things/42")
    """

    __slots__ = ("_config", "_endpoints", "_freeze_lock", "_frozen", "_render")

    def __init__(
        self,
        config: PipelineConfig = DEFAULT_CONFIG,
        render: ErrorRenderer = json_error_response,
    ) -> None:
        self._config = config
        self._render = render
        self._endpoints: dict[tuple[str, str], Endpoint] = {}
        self._frozen = False
        self._freeze_lock = threading.Lock()

    @property
    def config(self) -> PipelineConfig:
        return self._config

    @property
    def render(self) -> ErrorRenderer:
        return self._render

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, path: str, definition: RouteDefinition, handler: Handler) -> Endpoint:
        """Bind *definition* to *path* and *handler*.

        Raises:
            ConfigurationError: The contract is invalid, ``(method, path)``
                is already registered, or the registry is frozen.
        """
        self._check_not_frozen()
        contract = definition.at(path)
        if contract.key in self._endpoints:
            msg = f"Duplicate route: {contract.method} {contract.path}"
            raise ConfigurationError(msg)

        endpoint = Endpoint(contract, handler, self._config, self._render)
        self._endpoints[contract.key] = endpoint
        logger.debug("Registered %s %s", contract.method, contract.path)
        return endpoint

    def freeze(self) -> None:
        """Make the registry read-only. Idempotent and thread-safe."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._endpoints = dict(self._endpoints)
            self._frozen = True
            logger.info("Frozen contract registry with %d route(s)", len(self._endpoints))

    @property
    def endpoints(self) -> Mapping[tuple[str, str], Endpoint]:
        """Registered endpoints keyed by ``(method, path pattern)``."""
        return dict(self._endpoints)

    def find(self, method: str, path: str) -> Endpoint | None:
        """Return the endpoint whose pattern matches a concrete *path*.

        Exact pattern keys win over placeholder matches. The first
        registered pattern matching the whole path wins otherwise.
        """
        method = method.upper()
        endpoint = self._endpoints.get((method, path))
        if endpoint is not None:
            return endpoint
        for (candidate_method, _), candidate in self._endpoints.items():
            if candidate_method != method:
                continue
            if candidate.contract.pattern.regex.fullmatch(path):
                return candidate
        return None

    def __len__(self) -> int:
        return len(self._endpoints)

    def __contains__(self, key: object) -> bool:
        return key in self._endpoints

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot register routes after the registry is frozen. "
                "Register every route during startup."
            )
            raise ConfigurationError(msg)
