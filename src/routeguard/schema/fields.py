"""Flat field schemas — composable rules plus scalar coercion.

Suited to the string-valued mappings HTTP hands over: path parameters,
query strings, and URL-encoded forms. No pydantic model needed::

    from routeguard.schema import Field, FieldsSchema, matches

    ThingParams = FieldsSchema({
        "thingId": Field(int, rules=(matches(r"^\\d+$"),)),
    })

    ThingParams.validate({"thingId": "42"}).value   # {"thingId": 42}
    ThingParams.validate({"thingId": "xyz"}).errors # ("thingId: Must match pattern: ...",)

Rules run against the raw string first; the value is then coerced to the
field type. Keys not declared are dropped.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from routeguard.schema.base import SchemaResult
from routeguard.schema.rules import Validator, describe_rule, required


def _to_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("true", "1", "yes", "on"):
        return True
    if lowered in ("false", "0", "no", "off"):
        return False
    msg = f"not a boolean: {value!r}"
    raise ValueError(msg)


# Type coercion map: type -> (converter, JSON type name)
_COERCIONS: dict[type, tuple[Any, str]] = {
    str: (str, "string"),
    int: (int, "integer"),
    float: (float, "number"),
    bool: (_to_bool, "boolean"),
}


@dataclass(frozen=True, slots=True)
class Field:
    """One declared field.

    Attributes:
        type: Target type after coercion — ``str``, ``int``, ``float`` or ``bool``.
        rules: Validators run against the raw string value.
        required: Missing fields fail unless False.
        default: Value used when an optional field is missing.
    """

    type: type = str
    rules: tuple[Validator, ...] = ()
    required: bool = True
    default: Any = None

    def __post_init__(self) -> None:
        if self.type not in _COERCIONS:
            msg = f"Unsupported field type: {self.type!r}"
            raise TypeError(msg)


class FieldsSchema:
    """A ``Schema`` over a flat mapping of named fields."""

    __slots__ = ("fields",)

    def __init__(self, fields: Mapping[str, Field]) -> None:
        self.fields = dict(fields)

    def __repr__(self) -> str:
        return f"FieldsSchema({', '.join(self.fields)})"

    def validate(self, value: Any) -> SchemaResult:
        """Validate a mapping of strings, coercing each declared field."""
        if not isinstance(value, Mapping):
            return SchemaResult(errors=(f"Expected an object, got {type(value).__name__}",))

        errors: list[str] = []
        cleaned: dict[str, Any] = {}

        for name, field in self.fields.items():
            raw = value.get(name)

            if raw is None:
                if field.required:
                    errors.append(f"{name}: This field is required")
                else:
                    cleaned[name] = field.default
                continue

            text = raw if isinstance(raw, str) else str(raw)
            field_errors: list[str] = []
            for rule in field.rules:
                error = rule(text)
                if error is not None:
                    field_errors.append(f"{name}: {error}")
                    # No point running max_length on an empty string
                    if rule is required:
                        break
            if field_errors:
                errors.extend(field_errors)
                continue

            convert, type_name = _COERCIONS[field.type]
            try:
                cleaned[name] = convert(text)
            except (ValueError, TypeError):
                errors.append(f"{name}: Must be a valid {type_name}")

        if errors:
            return SchemaResult(errors=tuple(errors))
        return SchemaResult(value=cleaned)

    def describe(self) -> dict[str, Any]:
        """A JSON-schema-like rendering of the declared fields."""
        properties: dict[str, Any] = {}
        for name, field in self.fields.items():
            prop: dict[str, Any] = {"type": _COERCIONS[field.type][1]}
            for rule in field.rules:
                prop.update(describe_rule(rule))
            if not field.required and field.default is not None:
                prop["default"] = field.default
            properties[name] = prop
        return {
            "type": "object",
            "properties": properties,
            "required": [name for name, field in self.fields.items() if field.required],
        }
