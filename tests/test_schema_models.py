"""Tests for routeguard.schema.models and as_schema — pydantic-backed schemas."""

from typing import TypedDict

from pydantic import BaseModel
from pydantic import Field as PydanticField

from routeguard.schema import Field, FieldsSchema, ModelSchema, Schema, as_schema


class ThingBody(BaseModel):
    name: str = PydanticField(pattern=r"[a-z]+")
    count: int = 0


class Point(TypedDict):
    x: int
    y: int


class TestModelSchema:
    def test_is_a_schema(self) -> None:
        assert isinstance(ModelSchema(ThingBody), Schema)

    def test_valid_model(self) -> None:
        result = ModelSchema(ThingBody).validate({"name": "mything", "count": "3"})
        assert result.is_valid
        assert result.value == ThingBody(name="mything", count=3)

    def test_invalid_errors_carry_location(self) -> None:
        result = ModelSchema(ThingBody).validate({"name": "MYTHING"})
        assert not result
        assert len(result.errors) == 1
        assert result.errors[0].startswith("name: String should match pattern")

    def test_missing_field(self) -> None:
        result = ModelSchema(ThingBody).validate({})
        assert result.errors == ("name: Field required",)

    def test_nested_location_joined(self) -> None:
        result = ModelSchema(list[Point]).validate([{"x": 1, "y": "nope"}])
        assert result.errors[0].startswith("0.y: ")

    def test_scalar_without_location(self) -> None:
        result = ModelSchema(int).validate("abc")
        assert not result
        assert not result.errors[0].startswith(":")

    def test_typed_dict(self) -> None:
        result = ModelSchema(Point).validate({"x": "1", "y": 2})
        assert result.value == {"x": 1, "y": 2}

    def test_describe_is_json_schema(self) -> None:
        described = ModelSchema(ThingBody).describe()
        assert described["type"] == "object"
        assert described["properties"]["name"]["pattern"] == "[a-z]+"
        assert described["required"] == ["name"]

    def test_repr(self) -> None:
        assert repr(ModelSchema(ThingBody)) == "ModelSchema(ThingBody)"


class TestAsSchema:
    def test_model_class_wrapped(self) -> None:
        schema = as_schema(ThingBody)
        assert isinstance(schema, ModelSchema)
        assert schema.annotation is ThingBody

    def test_generic_alias_wrapped(self) -> None:
        assert isinstance(as_schema(dict[str, int]), ModelSchema)

    def test_schema_instance_passes_through(self) -> None:
        fields = FieldsSchema({})
        assert as_schema(fields) is fields

    def test_field_mapping_wrapped(self) -> None:
        schema = as_schema({"id": Field(int)})
        assert isinstance(schema, FieldsSchema)
        assert schema.validate({"id": "3"}).value == {"id": 3}
        assert not schema.validate({"id": "x"})
