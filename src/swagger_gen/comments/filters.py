"""Filters that merge human-written descriptions into the generated output.

Registered ahead of every other filter, so custom filters see (and can
override) the descriptions.
"""

import dataclasses
import inspect
from enum import Enum

from swagger_gen.comments.document import CommentsDocument
from swagger_gen.generator.contracts import ObjectContract
from swagger_gen.generator.filters import (
    OperationFilter,
    OperationFilterContext,
    SchemaFilter,
    SchemaFilterContext,
)
from swagger_gen.model.document import Operation
from swagger_gen.model.schema import Schema


def split_docstring(doc: str) -> tuple[str, str | None]:
    """First paragraph becomes the summary, the rest the description."""
    summary, _, rest = inspect.cleandoc(doc).partition("\n\n")
    summary = " ".join(summary.split())
    return summary, rest.strip() or None


class CommentsOperationFilter(OperationFilter):
    def __init__(self, comments: CommentsDocument):
        self._comments = comments

    def apply(self, operation: Operation, context: OperationFilterContext) -> None:
        comments = self._comments.for_operation(context.api_description, operation.operation_id)
        if comments is None:
            return

        if comments.summary:
            operation.summary = comments.summary
        if comments.description:
            operation.description = comments.description

        for parameter in operation.parameters or []:
            text = comments.parameters.get(parameter.name)
            if text:
                parameter.description = text

        for status_code, text in comments.responses.items():
            response = operation.responses.get(status_code)
            if response is not None:
                response.description = text


class CommentsSchemaFilter(SchemaFilter):
    def __init__(self, comments: CommentsDocument):
        self._comments = comments

    def apply(self, schema: Schema, context: SchemaFilterContext) -> None:
        comments = self._comments.for_schema(context.system_type)
        if comments is None:
            return

        if comments.description:
            schema.description = comments.description
        for name, property_schema in (schema.properties or {}).items():
            text = comments.properties.get(name)
            if text and not property_schema.is_reference:
                property_schema.description = text


class DocstringOperationFilter(OperationFilter):
    def apply(self, operation: Operation, context: OperationFilterContext) -> None:
        handler = context.api_description.handler
        doc = inspect.getdoc(handler) if handler is not None else None
        if not doc:
            return

        operation.summary, description = split_docstring(doc)
        if description:
            operation.description = description


class DocstringSchemaFilter(SchemaFilter):
    def apply(self, schema: Schema, context: SchemaFilterContext) -> None:
        system_type = context.system_type
        is_enum = isinstance(system_type, type) and issubclass(system_type, Enum)
        if not (isinstance(context.json_contract, ObjectContract) or is_enum):
            return

        # class docstrings are not inherited, read the class's own
        doc = system_type.__dict__.get("__doc__")
        if not doc or _is_generated_dataclass_doc(system_type, doc):
            return
        schema.description = inspect.cleandoc(doc)


def _is_generated_dataclass_doc(cls: type, doc: str) -> bool:
    return dataclasses.is_dataclass(cls) and doc.startswith(f"{cls.__name__}(")
