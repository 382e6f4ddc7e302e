"""Routeguard exception hierarchy.

Shared across the contract model, the pipeline, endpoints, and adapters
so every module raises and catches the same types.
"""

from dataclasses import dataclass


class RouteguardError(Exception):
    """Base for all routeguard-specific errors."""


class ConfigurationError(RouteguardError):
    """Raised when a contract, registry, or route file is invalid.

    Always an authoring defect. Surfaces at startup (contract creation,
    registration, discovery), never while serving a request.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(RouteguardError):
    """An error that maps directly to an HTTP status code.

    Produced by the validation pipeline and optionally raised by handlers.
    The endpoint boundary renders these through an ``ErrorRenderer``.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):
    """404 — path parameters or query string failed their schema."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class UnsupportedMediaType(HTTPError):
    """415 — request ``Content-Type`` missing, undeclared, or undecodable."""

    def __init__(self, detail: str = "Unsupported Media Type") -> None:
        super().__init__(status=415, detail=detail)


class UnprocessableEntity(HTTPError):
    """422 — request body of a supported type failed to decode or validate."""

    def __init__(self, detail: str = "Unprocessable Entity") -> None:
        super().__init__(status=422, detail=detail)


class InternalError(HTTPError):
    """500 — the server broke its own contract, or a handler blew up.

    When built from an unexpected exception, that exception is kept as
    ``__cause__`` for diagnostics.
    """

    def __init__(
        self,
        detail: str = "Internal Server Error",
        *,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(status=500, detail=detail)
        if cause is not None:
            object.__setattr__(self, "__cause__", cause)


# Statuses the pipeline itself can produce
ERROR_STATUSES: frozenset[int] = frozenset({404, 415, 422, 500})
