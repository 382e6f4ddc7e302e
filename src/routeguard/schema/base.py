"""The Schema capability — validate and describe.

Contracts are polymorphic over anything with two methods:

- ``validate(value) -> SchemaResult`` — check (and coerce) a value
- ``describe() -> dict`` — a machine-readable rendering of the shape

The pipeline depends only on this protocol, never on a concrete
validation library.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class SchemaResult:
    """The outcome of validating a value against a schema.

    ``is_valid`` is True when there are no errors.
    The result is falsy when invalid, so you can write::

        result = schema.validate(value)
        if not result:
            log(result.errors)

    ``value`` holds the validated (and possibly coerced) value — only
    meaningful when valid.

    ``errors`` is a tuple of human-readable messages, each prefixed with
    the location that failed::

        ("name: String should match pattern '^[a-z]+$'",)
    """

    value: Any = None
    errors: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        """True if validation passed with no errors."""
        return not self.errors

    def __bool__(self) -> bool:
        """Falsy when invalid — enables ``if not result:`` pattern."""
        return self.is_valid


@runtime_checkable
class Schema(Protocol):
    """Anything that can validate a value and describe its shape."""

    def validate(self, value: Any) -> SchemaResult: ...
    def describe(self) -> dict[str, Any]: ...


def as_schema(obj: Any) -> Schema:
    """Normalize a contract value into a ``Schema``.

    ``Schema`` implementations pass through. A non-empty mapping of
    ``Field`` objects becomes a ``FieldsSchema``. Anything else — a
    pydantic model class, a ``TypedDict``, ``dict[str, int]`` — is wrapped
    in a ``ModelSchema``.
    """
    if isinstance(obj, Schema) and not isinstance(obj, type):
        return obj

    from routeguard.schema.fields import Field, FieldsSchema
    from routeguard.schema.models import ModelSchema

    if isinstance(obj, Mapping) and obj and all(isinstance(v, Field) for v in obj.values()):
        return FieldsSchema(obj)

    return ModelSchema(obj)
