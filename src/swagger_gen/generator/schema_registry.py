"""Convenience view pairing a schema provider with one definitions dict."""

from typing import Any

from swagger_gen.model.schema import Schema


class SchemaRegistry:
    def __init__(self, schema_provider, definitions: dict[str, Schema]):
        self._schema_provider = schema_provider
        self.definitions = definitions

    def get_or_register(self, system_type: Any) -> Schema:
        return self._schema_provider.get_schema(system_type, self.definitions)
