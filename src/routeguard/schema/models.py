"""Pydantic-backed schemas.

``ModelSchema`` wraps any type pydantic can validate in a ``TypeAdapter``.
Validation runs in pydantic's lax mode, so ``"42"`` coerces to ``42`` for
an ``int`` field — coercion is part of validation, not a separate step.

Usage::

    class ThingBody(BaseModel):
        name: str = Field(pattern=r"^[a-z]+$")
        description: str = Field(pattern=r"^[a-z]+$")

    schema = ModelSchema(ThingBody)
    result = schema.validate({"name": "mything", "description": "best"})
    result.value  # ThingBody(name='mything', description='best')
"""

from typing import Any

from pydantic import TypeAdapter, ValidationError

from routeguard.schema.base import SchemaResult


class ModelSchema:
    """A ``Schema`` backed by a pydantic ``TypeAdapter``."""

    __slots__ = ("_adapter", "annotation")

    def __init__(self, annotation: Any) -> None:
        self.annotation = annotation
        self._adapter: TypeAdapter[Any] = TypeAdapter(annotation)

    def __repr__(self) -> str:
        name = getattr(self.annotation, "__name__", repr(self.annotation))
        return f"ModelSchema({name})"

    def validate(self, value: Any) -> SchemaResult:
        """Validate and coerce *value*; errors are ``"loc: message"`` strings."""
        try:
            validated = self._adapter.validate_python(value)
        except ValidationError as exc:
            return SchemaResult(errors=tuple(_format_error(err) for err in exc.errors()))
        return SchemaResult(value=validated)

    def describe(self) -> dict[str, Any]:
        """The JSON schema of the wrapped type."""
        return self._adapter.json_schema()


def _format_error(err: Any) -> str:
    loc = ".".join(str(part) for part in err.get("loc", ()))
    message = err.get("msg", "Invalid value")
    return f"{loc}: {message}" if loc else message
