"""Settings consumed by the schema and document generators at construction."""

from typing import Any, Callable

from pydantic import BaseModel, ConfigDict

from swagger_gen.generator.extensions import type_friendly_id
from swagger_gen.model.api_description import ApiDescription
from swagger_gen.model.document import Info, SecurityScheme
from swagger_gen.model.schema import Schema


def default_doc_inclusion_predicate(document_name: str, api_description: ApiDescription) -> bool:
    return api_description.group_name is None or api_description.group_name == document_name


def default_tag_selector(api_description: ApiDescription) -> str | None:
    return api_description.controller_name


def default_sort_key_selector(api_description: ApiDescription) -> str:
    return api_description.controller_name or ""


class SchemaRegistrySettings(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    custom_type_mappings: dict[Any, Callable[[], Schema]] = {}
    describe_all_enums_as_strings: bool = False
    describe_string_enums_in_camel_case: bool = False
    schema_id_selector: Callable[[Any], str] = type_friendly_id
    ignore_obsolete_properties: bool = False
    schema_filters: list[Any] = []

    def clone(self) -> "SchemaRegistrySettings":
        return self.model_copy(update={
            "custom_type_mappings": dict(self.custom_type_mappings),
            "schema_filters": list(self.schema_filters),
        })


class SwaggerGeneratorSettings(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    swagger_docs: dict[str, Info] = {}
    doc_inclusion_predicate: Callable[[str, ApiDescription], bool] = default_doc_inclusion_predicate
    ignore_obsolete_actions: bool = False
    tag_selector: Callable[[ApiDescription], str | None] = default_tag_selector
    sort_key_selector: Callable[[ApiDescription], Any] = default_sort_key_selector
    describe_all_parameters_in_camel_case: bool = False
    security_definitions: dict[str, SecurityScheme] = {}
    operation_filters: list[Any] = []
    document_filters: list[Any] = []

    def clone(self) -> "SwaggerGeneratorSettings":
        return self.model_copy(update={
            "swagger_docs": dict(self.swagger_docs),
            "security_definitions": dict(self.security_definitions),
            "operation_filters": list(self.operation_filters),
            "document_filters": list(self.document_filters),
        })
