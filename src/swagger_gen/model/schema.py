"""Swagger 2.0 schema models.

A ``Schema`` is either a reference (only ``ref`` set) or an inline fragment.
Field names are snake_case in Python and camelCase on the wire.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_serializer
from pydantic.alias_generators import to_camel

DEFINITIONS_PREFIX = "#/definitions/"


class SwaggerModel(BaseModel):
    """Base for every document node; ``extensions`` are emitted as vendor keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    extensions: dict[str, Any] = Field(default_factory=dict, exclude=True)

    @model_serializer(mode="wrap")
    def _merge_extensions(self, handler):
        data = handler(self)
        if self.extensions:
            data.update(self.extensions)
        return data


class Schema(SwaggerModel):
    ref: str | None = Field(default=None, alias="$ref")
    type: str | None = None
    format: str | None = None
    title: str | None = None
    description: str | None = None
    default: Any = None
    multiple_of: int | float | None = None
    maximum: int | float | None = None
    exclusive_maximum: bool | None = None
    minimum: int | float | None = None
    exclusive_minimum: bool | None = None
    max_length: int | None = None
    min_length: int | None = None
    pattern: str | None = None
    max_items: int | None = None
    min_items: int | None = None
    unique_items: bool | None = None
    max_properties: int | None = None
    min_properties: int | None = None
    required: list[str] | None = None
    enum: list[Any] | None = None
    items: "Schema | None" = None
    all_of: "list[Schema] | None" = None
    properties: "dict[str, Schema] | None" = None
    additional_properties: "Schema | None" = None
    discriminator: str | None = None
    read_only: bool | None = None
    example: Any = None

    @classmethod
    def reference(cls, schema_id: str) -> "Schema":
        return cls(ref=DEFINITIONS_PREFIX + schema_id)

    @property
    def is_reference(self) -> bool:
        return self.ref is not None

    @property
    def schema_id(self) -> str | None:
        """The definitions key this fragment points at, if it is a reference."""
        if self.ref is None or not self.ref.startswith(DEFINITIONS_PREFIX):
            return None
        return self.ref[len(DEFINITIONS_PREFIX):]


class PartialSchema(SwaggerModel):
    """The subset of a schema allowed on non-body parameters, headers and their items."""

    type: str | None = None
    format: str | None = None
    items: "PartialSchema | None" = None
    collection_format: str | None = None
    default: Any = None
    maximum: int | float | None = None
    exclusive_maximum: bool | None = None
    minimum: int | float | None = None
    exclusive_minimum: bool | None = None
    max_length: int | None = None
    min_length: int | None = None
    pattern: str | None = None
    max_items: int | None = None
    min_items: int | None = None
    unique_items: bool | None = None
    enum: list[Any] | None = None
    multiple_of: int | float | None = None

    @classmethod
    def from_schema(cls, schema: Schema) -> "PartialSchema":
        partial = cls()
        partial.populate_from(schema)
        return partial

    def populate_from(self, schema: Schema) -> None:
        """Copy the parameter-compatible keywords of ``schema`` onto this node."""
        self.type = schema.type
        self.format = schema.format
        self.items = PartialSchema.from_schema(schema.items) if schema.items is not None else None
        self.default = schema.default
        self.maximum = schema.maximum
        self.exclusive_maximum = schema.exclusive_maximum
        self.minimum = schema.minimum
        self.exclusive_minimum = schema.exclusive_minimum
        self.max_length = schema.max_length
        self.min_length = schema.min_length
        self.pattern = schema.pattern
        self.max_items = schema.max_items
        self.min_items = schema.min_items
        self.unique_items = schema.unique_items
        self.enum = schema.enum
        self.multiple_of = schema.multiple_of
