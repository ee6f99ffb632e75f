"""Fluent configuration for building a SwaggerGenerator.

Filters are registered as factories and only instantiated in
``create_swagger_provider``, so they can be built by any dependency
injection mechanism through the ``activator`` argument.
"""

import logging
from pathlib import Path
from typing import Any, Callable

from swagger_gen.annotations.filters import (
    SwaggerAttributesOperationFilter,
    SwaggerAttributesSchemaFilter,
    SwaggerResponseAttributeFilter,
)
from swagger_gen.comments.document import CommentsDocument
from swagger_gen.comments.filters import (
    CommentsOperationFilter,
    CommentsSchemaFilter,
    DocstringOperationFilter,
    DocstringSchemaFilter,
)
from swagger_gen.generator.contracts import ContractResolver
from swagger_gen.generator.extensions import type_full_name
from swagger_gen.generator.filters import Activator, FilterDescriptor
from swagger_gen.generator.schema_generator import SchemaGenerator
from swagger_gen.generator.settings import SchemaRegistrySettings, SwaggerGeneratorSettings
from swagger_gen.generator.swagger_generator import SwaggerGenerator
from swagger_gen.model.api_description import ApiDescription
from swagger_gen.model.document import Info, SecurityScheme
from swagger_gen.model.schema import Schema

logger = logging.getLogger(__name__)


class SwaggerGenOptions:
    def __init__(self):
        self._generator_settings = SwaggerGeneratorSettings()
        self._schema_settings = SchemaRegistrySettings()

        self._comments_factories: list[Callable[[], CommentsDocument]] = []
        self._include_docstrings = False
        self._operation_filter_descriptors: list[FilterDescriptor] = []
        self._document_filter_descriptors: list[FilterDescriptor] = []
        self._schema_filter_descriptors: list[FilterDescriptor] = []

        # Enable annotations
        self.operation_filter(SwaggerAttributesOperationFilter)
        self.operation_filter(SwaggerResponseAttributeFilter)
        self.schema_filter(SwaggerAttributesSchemaFilter)

    def swagger_doc(self, name: str, info: Info) -> "SwaggerGenOptions":
        """Define a document; ``name`` is the URI-friendly key it is requested by."""
        self._generator_settings.swagger_docs[name] = info
        return self

    def doc_inclusion_predicate(self, predicate: Callable[[str, ApiDescription], bool]) -> "SwaggerGenOptions":
        self._generator_settings.doc_inclusion_predicate = predicate
        return self

    def ignore_obsolete_actions(self) -> "SwaggerGenOptions":
        self._generator_settings.ignore_obsolete_actions = True
        return self

    def tag_actions_by(self, tag_selector: Callable[[ApiDescription], str | None]) -> "SwaggerGenOptions":
        self._generator_settings.tag_selector = tag_selector
        return self

    def order_actions_by(self, sort_key_selector: Callable[[ApiDescription], Any]) -> "SwaggerGenOptions":
        self._generator_settings.sort_key_selector = sort_key_selector
        return self

    def describe_all_parameters_in_camel_case(self) -> "SwaggerGenOptions":
        self._generator_settings.describe_all_parameters_in_camel_case = True
        return self

    def add_security_definition(self, name: str, security_scheme: SecurityScheme) -> "SwaggerGenOptions":
        self._generator_settings.security_definitions[name] = security_scheme
        return self

    def map_type(self, system_type: Any, schema_factory: Callable[[], Schema]) -> "SwaggerGenOptions":
        """Describe ``system_type`` with whatever ``schema_factory`` returns."""
        self._schema_settings.custom_type_mappings[system_type] = schema_factory
        return self

    def describe_all_enums_as_strings(self) -> "SwaggerGenOptions":
        self._schema_settings.describe_all_enums_as_strings = True
        return self

    def describe_string_enums_in_camel_case(self) -> "SwaggerGenOptions":
        self._schema_settings.describe_string_enums_in_camel_case = True
        return self

    def custom_schema_ids(self, schema_id_selector: Callable[[Any], str]) -> "SwaggerGenOptions":
        self._schema_settings.schema_id_selector = schema_id_selector
        return self

    def use_full_type_names_in_schema_ids(self) -> "SwaggerGenOptions":
        return self.custom_schema_ids(type_full_name)

    def ignore_obsolete_properties(self) -> "SwaggerGenOptions":
        self._schema_settings.ignore_obsolete_properties = True
        return self

    def operation_filter(self, factory: Callable[..., Any], *args, **kwargs) -> "SwaggerGenOptions":
        self._operation_filter_descriptors.append(FilterDescriptor(factory=factory, args=args, kwargs=kwargs))
        return self

    def document_filter(self, factory: Callable[..., Any], *args, **kwargs) -> "SwaggerGenOptions":
        self._document_filter_descriptors.append(FilterDescriptor(factory=factory, args=args, kwargs=kwargs))
        return self

    def schema_filter(self, factory: Callable[..., Any], *args, **kwargs) -> "SwaggerGenOptions":
        self._schema_filter_descriptors.append(FilterDescriptor(factory=factory, args=args, kwargs=kwargs))
        return self

    def include_comments(self, source: str | Path | Callable[[], CommentsDocument]) -> "SwaggerGenOptions":
        """Merge descriptions from a comments YAML file (or a factory returning one)."""
        if callable(source):
            self._comments_factories.append(source)
        else:
            self._comments_factories.append(lambda: CommentsDocument.load(Path(source)))
        return self

    def include_docstrings(self) -> "SwaggerGenOptions":
        self._include_docstrings = True
        return self

    def create_swagger_provider(
        self,
        api_descriptions_provider,
        contract_resolver: ContractResolver | None = None,
        activator: Activator | None = None,
    ) -> SwaggerGenerator:
        generator_settings = self._generator_settings.clone()
        schema_settings = self._schema_settings.clone()

        generator_settings.operation_filters.extend(
            descriptor.create(activator) for descriptor in self._operation_filter_descriptors
        )
        generator_settings.document_filters.extend(
            descriptor.create(activator) for descriptor in self._document_filter_descriptors
        )
        schema_settings.schema_filters.extend(
            descriptor.create(activator) for descriptor in self._schema_filter_descriptors
        )

        # Comment filters run before any custom filters and share one loaded document
        for index, comments_factory in enumerate(self._comments_factories):
            comments = comments_factory()
            generator_settings.operation_filters.insert(index, CommentsOperationFilter(comments))
            schema_settings.schema_filters.insert(index, CommentsSchemaFilter(comments))

        if self._include_docstrings:
            generator_settings.operation_filters.insert(0, DocstringOperationFilter())
            schema_settings.schema_filters.insert(0, DocstringSchemaFilter())

        logger.debug(
            "Created %d operation, %d document and %d schema filters",
            len(generator_settings.operation_filters),
            len(generator_settings.document_filters),
            len(schema_settings.schema_filters),
        )

        schema_provider = SchemaGenerator(contract_resolver or ContractResolver(), schema_settings)
        return SwaggerGenerator(api_descriptions_provider, schema_provider, generator_settings)
