"""Stage results — ``Ok(value)`` or ``Err(error)``.

Every pipeline stage returns one of these instead of raising, so the
orchestration reads top to bottom::

    result = validator.validate_params(raw)
    if isinstance(result, Err):
        return reject(result.error)
    params = result.value
"""

from dataclasses import dataclass

from routeguard.errors import HTTPError


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """A stage succeeded with ``value``."""

    value: T

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Err:
    """A stage failed with a typed ``HTTPError``."""

    error: HTTPError

    def __bool__(self) -> bool:
        """Falsy — enables ``if not result:`` pattern."""
        return False


type Result[T] = Ok[T] | Err
