"""External documentation comments, loaded from YAML.

Example::

    operations:
      app.items.get_item:        # handler qualified name, or the operation id
        summary: Fetch one item
        parameters:
          id: The item id
        responses:
          404: No such item
    schemas:
      app.models.Item:           # qualified type name, or the schema id
        description: A catalogue item
        properties:
          name: Display name
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, field_validator

from swagger_gen.generator.extensions import type_friendly_id, type_full_name
from swagger_gen.model.api_description import ApiDescription


class OperationComments(BaseModel):
    summary: str | None = None
    description: str | None = None
    parameters: dict[str, str] = {}
    responses: dict[str, str] = {}

    @field_validator("responses", mode="before")
    @classmethod
    def _status_codes_as_strings(cls, value: Any) -> Any:
        # YAML reads bare status codes as ints
        if isinstance(value, dict):
            return {str(key): text for key, text in value.items()}
        return value


class SchemaComments(BaseModel):
    description: str | None = None
    properties: dict[str, str] = {}


class CommentsDocument(BaseModel):
    operations: dict[str, OperationComments] = {}
    schemas: dict[str, SchemaComments] = {}

    @classmethod
    def load(cls, file_path: Path) -> "CommentsDocument":
        text = Path(file_path).read_text(encoding="utf-8")
        data = yaml.safe_load(text) or {}
        return cls.model_validate(data)

    def for_operation(self, api_description: ApiDescription, operation_id: str | None) -> OperationComments | None:
        handler = api_description.handler
        if handler is not None:
            key = f"{handler.__module__}.{handler.__qualname__}"
            if key in self.operations:
                return self.operations[key]
        if operation_id is not None:
            return self.operations.get(operation_id)
        return None

    def for_schema(self, system_type: Any) -> SchemaComments | None:
        for key in (type_full_name(system_type), type_friendly_id(system_type)):
            if key in self.schemas:
                return self.schemas[key]
        return None
