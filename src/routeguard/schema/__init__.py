"""Schemas — validate a value and describe its shape.

Usage::

    from routeguard.schema import Field, FieldsSchema, ModelSchema, matches

    params = FieldsSchema({"thingId": Field(int, rules=(matches(r"^\\d+$"),))})
    body = ModelSchema(ThingBody)

Any object with ``validate(value) -> SchemaResult`` and
``describe() -> dict`` works wherever a schema is expected.
"""

from routeguard.schema.base import Schema, SchemaResult, as_schema
from routeguard.schema.fields import Field, FieldsSchema
from routeguard.schema.models import ModelSchema
from routeguard.schema.rules import (
    Validator,
    describes,
    email,
    integer,
    matches,
    max_length,
    min_length,
    number,
    one_of,
    required,
    url,
)

__all__ = [
    "Field",
    "FieldsSchema",
    "ModelSchema",
    "Schema",
    "SchemaResult",
    "Validator",
    "as_schema",
    "describes",
    "email",
    "integer",
    "matches",
    "max_length",
    "min_length",
    "number",
    "one_of",
    "required",
    "url",
]
