from unittest.mock import MagicMock

from pydantic import BaseModel

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
from swagger_gen.generator.filters import DocumentFilter, OperationFilter, SchemaFilter
from swagger_gen.model.api_description import ApiDescription
from swagger_gen.model.document import BasicAuthScheme, Info
from swagger_gen.model.schema import Schema
from swagger_gen.options import SwaggerGenOptions


class Money(BaseModel):
    amount: int
    currency: str


class TagFilter(OperationFilter):
    def __init__(self, tag: str, suffix: str = ""):
        self.tag = tag + suffix

    def apply(self, operation, context):
        operation.tags = [self.tag]


class NoopDocumentFilter(DocumentFilter):
    def apply(self, swagger_doc, context):
        pass


class NoopSchemaFilter(SchemaFilter):
    def apply(self, schema, context):
        pass


def _make_options() -> SwaggerGenOptions:
    return SwaggerGenOptions().swagger_doc("v1", Info(version="v1", title="API V1"))


def _make_api_description(**kwargs) -> ApiDescription:
    kwargs.setdefault("http_method", "GET")
    kwargs.setdefault("relative_path", "collection")
    return ApiDescription(**kwargs)


def _filter_types(filters) -> list[type]:
    return [type(f) for f in filters]


class TestFluentConfiguration:
    def test_methods_return_options(self):
        options = _make_options()
        assert options.ignore_obsolete_actions() is options
        assert options.describe_all_enums_as_strings() is options
        assert options.operation_filter(TagFilter, "x") is options

    def test_settings_reach_generators(self):
        options = (
            _make_options()
            .ignore_obsolete_actions()
            .describe_all_parameters_in_camel_case()
            .describe_all_enums_as_strings()
            .describe_string_enums_in_camel_case()
            .ignore_obsolete_properties()
            .add_security_definition("basic", BasicAuthScheme())
        )
        generator = options.create_swagger_provider([])

        assert generator.settings.ignore_obsolete_actions
        assert generator.settings.describe_all_parameters_in_camel_case
        assert "basic" in generator.settings.security_definitions
        assert generator.schema_provider.settings.describe_all_enums_as_strings
        assert generator.schema_provider.settings.describe_string_enums_in_camel_case
        assert generator.schema_provider.settings.ignore_obsolete_properties

    def test_selectors(self):
        def predicate(name, api_desc):
            return True

        def tag_selector(api_desc):
            return "tag"

        def sort_key(api_desc):
            return api_desc.relative_path

        generator = (
            _make_options()
            .doc_inclusion_predicate(predicate)
            .tag_actions_by(tag_selector)
            .order_actions_by(sort_key)
            .create_swagger_provider([])
        )
        assert generator.settings.doc_inclusion_predicate is predicate
        assert generator.settings.tag_selector is tag_selector
        assert generator.settings.sort_key_selector is sort_key

    def test_full_type_names_in_schema_ids(self):
        generator = _make_options().use_full_type_names_in_schema_ids().create_swagger_provider([])
        assert generator.schema_provider.settings.schema_id_selector is type_full_name

    def test_map_type(self):
        generator = (
            _make_options()
            .map_type(Money, lambda: Schema(type="string", format="money"))
            .create_swagger_provider([])
        )
        schema = generator.schema_provider.get_schema(Money, {})
        assert schema.format == "money"

    def test_custom_contract_resolver(self):
        resolver = ContractResolver()
        generator = _make_options().create_swagger_provider([], contract_resolver=resolver)
        assert generator.schema_provider.contract_resolver is resolver

    def test_providers_do_not_share_settings(self):
        options = _make_options()
        first = options.create_swagger_provider([])
        options.swagger_doc("v2", Info(version="v2", title="API V2")).operation_filter(TagFilter, "late")
        second = options.create_swagger_provider([])

        assert list(first.settings.swagger_docs) == ["v1"]
        assert list(second.settings.swagger_docs) == ["v1", "v2"]
        assert len(second.settings.operation_filters) == len(first.settings.operation_filters) + 1


class TestFilterRegistration:
    def test_annotation_filters_registered_by_default(self):
        generator = _make_options().create_swagger_provider([])
        assert _filter_types(generator.settings.operation_filters) == [
            SwaggerAttributesOperationFilter,
            SwaggerResponseAttributeFilter,
        ]
        assert _filter_types(generator.schema_provider.settings.schema_filters) == [SwaggerAttributesSchemaFilter]

    def test_filters_created_with_arguments(self):
        generator = (
            _make_options()
            .operation_filter(TagFilter, "items", suffix="!")
            .create_swagger_provider([_make_api_description()])
        )
        operation = generator.get_swagger("v1").paths["/collection"].get
        assert operation.tags == ["items!"]

    def test_filters_created_lazily(self):
        factory = MagicMock(return_value=NoopDocumentFilter())
        options = _make_options().document_filter(factory, 1, key="value")
        factory.assert_not_called()

        generator = options.create_swagger_provider([])
        factory.assert_called_once_with(1, key="value")
        assert generator.settings.document_filters == [factory.return_value]

    def test_activator_builds_every_filter(self):
        created = []

        def activator(factory, args, kwargs):
            created.append(factory)
            return factory(*args, **kwargs)

        _make_options().schema_filter(NoopSchemaFilter).create_swagger_provider([], activator=activator)
        assert created == [
            SwaggerAttributesOperationFilter,
            SwaggerResponseAttributeFilter,
            SwaggerAttributesSchemaFilter,
            NoopSchemaFilter,
        ]

    def test_comment_filters_run_before_custom_filters(self):
        generator = (
            _make_options()
            .operation_filter(TagFilter, "x")
            .schema_filter(NoopSchemaFilter)
            .include_comments(CommentsDocument)
            .include_docstrings()
            .create_swagger_provider([])
        )
        assert _filter_types(generator.settings.operation_filters) == [
            DocstringOperationFilter,
            CommentsOperationFilter,
            SwaggerAttributesOperationFilter,
            SwaggerResponseAttributeFilter,
            TagFilter,
        ]
        assert _filter_types(generator.schema_provider.settings.schema_filters) == [
            DocstringSchemaFilter,
            CommentsSchemaFilter,
            SwaggerAttributesSchemaFilter,
            NoopSchemaFilter,
        ]

    def test_comment_sources_keep_registration_order(self, tmp_path):
        first_file = tmp_path / "first.yaml"
        first_file.write_text("operations:\n  CollectionGet:\n    summary: First\n", encoding="utf-8")
        second_file = tmp_path / "second.yaml"
        second_file.write_text("operations:\n  CollectionGet:\n    summary: Second\n", encoding="utf-8")

        generator = (
            _make_options()
            .include_comments(first_file)
            .include_comments(second_file)
            .create_swagger_provider([_make_api_description()])
        )
        comment_filters = generator.settings.operation_filters[:2]
        assert _filter_types(comment_filters) == [CommentsOperationFilter, CommentsOperationFilter]
        # later sources run later and win
        assert generator.get_swagger("v1").paths["/collection"].get.summary == "Second"

    def test_comments_loaded_from_path(self, tmp_path):
        comments_file = tmp_path / "comments.yaml"
        comments_file.write_text("operations:\n  CollectionGet:\n    summary: List the collection\n", encoding="utf-8")

        generator = _make_options().include_comments(comments_file).create_swagger_provider([_make_api_description()])
        operation = generator.get_swagger("v1").paths["/collection"].get
        assert operation.summary == "List the collection"
