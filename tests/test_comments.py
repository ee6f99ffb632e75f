import dataclasses
from enum import Enum
from pathlib import Path

from pydantic import BaseModel

from swagger_gen.comments.document import CommentsDocument
from swagger_gen.comments.filters import split_docstring
from swagger_gen.model.api_description import (
    ApiDescription,
    ApiParameterDescription,
    ApiResponseType,
    BindingSource,
)
from swagger_gen.model.document import Info
from swagger_gen.options import SwaggerGenOptions

FIXTURES = Path(__file__).parent / "fixtures"


class Owner(BaseModel):
    name: str


class Item(BaseModel):
    """A stored item.

    Items belong to exactly one owner.
    """

    id: int
    name: str | None = None
    owner: Owner | None = None


class Status(Enum):
    """Lifecycle state of an item."""

    ACTIVE = 1
    RETIRED = 2


@dataclasses.dataclass
class Undocumented:
    value: int


def get_item(id: int):
    """Fetch one item.

    Looks the item up by id and returns
    404 when it does not exist.
    """


def _make_api_description(handler=None) -> ApiDescription:
    return ApiDescription(
        http_method="GET",
        relative_path="items/{id}",
        handler=handler,
        parameter_descriptions=[ApiParameterDescription(name="id", source=BindingSource.PATH, type=int)],
        supported_response_types=[ApiResponseType(status_code=200, type=Item)],
    )


def _make_options() -> SwaggerGenOptions:
    return SwaggerGenOptions().swagger_doc("v1", Info(version="v1", title="API V1"))


def _generate(options: SwaggerGenOptions, handler=None):
    return options.create_swagger_provider([_make_api_description(handler)]).get_swagger("v1")


class TestCommentsDocument:
    def test_load(self):
        comments = CommentsDocument.load(FIXTURES / "comments.yaml")
        operation = comments.operations["ItemsByIdGet"]
        assert operation.summary == "Fetch one item"
        assert operation.parameters == {"id": "The item id"}
        # bare YAML status codes are read as strings
        assert operation.responses == {"200": "The item", "404": "No such item"}
        assert comments.schemas["Item"].properties["name"] == "Display name"

    def test_load_empty_file(self, tmp_path):
        comments_file = tmp_path / "empty.yaml"
        comments_file.write_text("", encoding="utf-8")
        comments = CommentsDocument.load(comments_file)
        assert comments.operations == {}
        assert comments.schemas == {}

    def test_operation_lookup_prefers_handler_name(self):
        comments = CommentsDocument.model_validate({
            "operations": {
                f"{get_item.__module__}.{get_item.__qualname__}": {"summary": "By handler"},
                "ItemsByIdGet": {"summary": "By operation id"},
            },
        })
        assert comments.for_operation(_make_api_description(get_item), "ItemsByIdGet").summary == "By handler"
        assert comments.for_operation(_make_api_description(), "ItemsByIdGet").summary == "By operation id"
        assert comments.for_operation(_make_api_description(), None) is None

    def test_schema_lookup(self):
        comments = CommentsDocument.model_validate({
            "schemas": {f"{Owner.__module__}.Owner": {"description": "By full name"}, "Item": {"description": "By id"}},
        })
        assert comments.for_schema(Owner).description == "By full name"
        assert comments.for_schema(Item).description == "By id"
        assert comments.for_schema(Status) is None


class TestCommentsFilters:
    def test_operation_comments(self):
        swagger = _generate(_make_options().include_comments(FIXTURES / "comments.yaml"))
        operation = swagger.paths["/items/{id}"].get

        assert operation.summary == "Fetch one item"
        assert operation.description == "Returns the item with the given id."
        assert operation.parameters[0].description == "The item id"
        assert operation.responses["200"].description == "The item"
        assert "404" not in operation.responses

    def test_schema_comments(self):
        swagger = _generate(_make_options().include_comments(FIXTURES / "comments.yaml"))
        item = swagger.definitions["Item"]

        assert item.description == "A catalogue item"
        assert item.properties["name"].description == "Display name"
        assert item.properties["owner"].description is None

    def test_custom_filters_see_comments(self):
        seen = []

        class RecordSummary:
            def apply(self, operation, context):
                seen.append(operation.summary)

        options = _make_options().include_comments(FIXTURES / "comments.yaml").operation_filter(RecordSummary)
        _generate(options)
        assert seen == ["Fetch one item"]


class TestDocstrings:
    def test_split_docstring(self):
        assert split_docstring("One line.") == ("One line.", None)
        assert split_docstring("Summary\n    wraps.\n\n    Body text.\n") == ("Summary wraps.", "Body text.")

    def test_operation_docstring(self):
        swagger = _generate(_make_options().include_docstrings(), handler=get_item)
        operation = swagger.paths["/items/{id}"].get
        assert operation.summary == "Fetch one item."
        assert operation.description == "Looks the item up by id and returns\n404 when it does not exist."

    def test_schema_docstrings(self):
        generator = _make_options().include_docstrings().create_swagger_provider([])
        definitions = {}
        generator.schema_provider.get_schema(Item, definitions)
        generator.schema_provider.get_schema(Undocumented, definitions)

        assert definitions["Item"].description == "A stored item.\n\nItems belong to exactly one owner."
        assert definitions["Owner"].description is None
        assert definitions["Undocumented"].description is None
        assert generator.schema_provider.get_schema(Status, definitions).description == "Lifecycle state of an item."

    def test_comments_override_docstrings(self):
        options = _make_options().include_docstrings().include_comments(FIXTURES / "comments.yaml")
        swagger = _generate(options, handler=get_item)
        assert swagger.paths["/items/{id}"].get.summary == "Fetch one item"
        assert swagger.definitions["Item"].description == "A catalogue item"
