from pydantic import TypeAdapter

from swagger_gen.model.api_description import (
    ApiDescription,
    BindingSource,
    StaticApiDescriptionsProvider,
)
from swagger_gen.model.document import (
    ApiKeyScheme,
    BodyParameter,
    Info,
    NonBodyParameter,
    OAuth2Scheme,
    SecurityScheme,
    SwaggerDocument,
)
from swagger_gen.model.schema import PartialSchema, Schema


class TestSchema:
    def test_reference_schema(self):
        schema = Schema.reference("Item")
        assert schema.ref == "#/definitions/Item"
        assert schema.is_reference
        assert schema.schema_id == "Item"

    def test_inline_schema_is_not_reference(self):
        schema = Schema(type="string")
        assert not schema.is_reference
        assert schema.schema_id is None

    def test_external_ref_has_no_schema_id(self):
        schema = Schema(ref="other.json#/Item")
        assert schema.is_reference
        assert schema.schema_id is None

    def test_dump_uses_wire_names(self):
        schema = Schema(
            type="object",
            additional_properties=Schema(type="integer", format="int32"),
            read_only=True,
        )
        data = schema.model_dump(by_alias=True, exclude_none=True)
        assert data == {
            "type": "object",
            "additionalProperties": {"type": "integer", "format": "int32"},
            "readOnly": True,
        }

    def test_dump_reference(self):
        data = Schema.reference("Item").model_dump(by_alias=True, exclude_none=True)
        assert data == {"$ref": "#/definitions/Item"}

    def test_extensions_merged_into_output(self):
        schema = Schema(type="string", extensions={"x-nullable": True})
        data = schema.model_dump(by_alias=True, exclude_none=True)
        assert data == {"type": "string", "x-nullable": True}
        assert "extensions" not in data

    def test_populate_by_field_name_or_alias(self):
        assert Schema(**{"$ref": "#/definitions/A"}).ref == "#/definitions/A"
        assert Schema.model_validate({"maxLength": 3}).max_length == 3


class TestPartialSchema:
    def test_populate_from_copies_parameter_keywords(self):
        schema = Schema(
            type="array",
            items=Schema(type="integer", format="int64", enum=[1, 2]),
            min_items=1,
            max_items=5,
            default=None,
            title="ignored",
        )
        partial = PartialSchema.from_schema(schema)
        assert partial.type == "array"
        assert partial.min_items == 1
        assert partial.max_items == 5
        assert isinstance(partial.items, PartialSchema)
        assert partial.items.format == "int64"
        assert partial.items.enum == [1, 2]
        assert not hasattr(partial, "title")


class TestParameters:
    def test_body_parameter_wire_form(self):
        param = BodyParameter(name="item", schema_=Schema.reference("Item"))
        data = param.model_dump(by_alias=True, exclude_none=True)
        assert data == {"name": "item", "in": "body", "schema": {"$ref": "#/definitions/Item"}}

    def test_non_body_parameter_wire_form(self):
        param = NonBodyParameter(name="tags", in_="query", required=False)
        param.populate_from(Schema(type="array", items=Schema(type="string")))
        param.collection_format = "multi"
        data = param.model_dump(by_alias=True, exclude_none=True)
        assert data == {
            "name": "tags",
            "in": "query",
            "required": False,
            "type": "array",
            "items": {"type": "string"},
            "collectionFormat": "multi",
        }


class TestSecuritySchemes:
    def test_discriminated_by_type(self):
        adapter = TypeAdapter(SecurityScheme)
        scheme = adapter.validate_python({"type": "apiKey", "name": "api_key", "in": "header"})
        assert isinstance(scheme, ApiKeyScheme)
        assert scheme.in_ == "header"

    def test_oauth2_wire_form(self):
        scheme = OAuth2Scheme(flow="implicit", authorization_url="https://auth.example.com", scopes={"read": "Read"})
        data = scheme.model_dump(by_alias=True, exclude_none=True)
        assert data == {
            "type": "oauth2",
            "flow": "implicit",
            "authorizationUrl": "https://auth.example.com",
            "scopes": {"read": "Read"},
        }


class TestSwaggerDocument:
    def test_defaults(self):
        doc = SwaggerDocument(info=Info(version="v1", title="API"))
        data = doc.model_dump(by_alias=True, exclude_none=True)
        assert data == {
            "swagger": "2.0",
            "info": {"version": "v1", "title": "API"},
            "paths": {},
            "definitions": {},
        }

    def test_info_camel_case_keys(self):
        info = Info(version="v1", title="API", terms_of_service="https://example.com/tos")
        assert info.model_dump(by_alias=True, exclude_none=True)["termsOfService"] == "https://example.com/tos"


class TestApiDescriptions:
    def test_binding_sources_from_request(self):
        assert BindingSource.QUERY.is_from_request
        assert BindingSource.MODEL_BINDING.is_from_request
        assert not BindingSource.SERVICES.is_from_request
        assert not BindingSource.SPECIAL.is_from_request

    def test_static_provider_groups_by_group_name(self):
        descriptions = [
            ApiDescription(http_method="GET", relative_path="a", group_name="v1"),
            ApiDescription(http_method="GET", relative_path="b"),
            ApiDescription(http_method="GET", relative_path="c", group_name="v1"),
        ]
        groups = StaticApiDescriptionsProvider(descriptions).api_description_groups
        assert [group.group_name for group in groups.items] == ["v1", None]
        assert [desc.relative_path for desc in groups.items[0].items] == ["a", "c"]
        assert len(groups.all_descriptions()) == 3
