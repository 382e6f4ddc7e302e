"""Shared type aliases used across routeguard modules."""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from routeguard.errors import HTTPError
    from routeguard.http.response import Response

# Route handler — receives the validated context, returns a Response
Handler: TypeAlias = Callable[..., Any]

# Error renderer — turns an HTTPError into the wire response
ErrorRenderer: TypeAlias = Callable[["HTTPError"], "Response"]
