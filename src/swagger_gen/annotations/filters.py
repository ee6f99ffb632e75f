"""Filters that apply decorator metadata, registered by default."""

from swagger_gen.annotations.attributes import (
    SWAGGER_OPERATION_ATTR,
    SWAGGER_OPERATION_FILTERS_ATTR,
    SWAGGER_REMOVE_DEFAULT_RESPONSES_ATTR,
    SWAGGER_RESPONSES_ATTR,
    SWAGGER_SCHEMA_FILTERS_ATTR,
)
from swagger_gen.generator.filters import (
    OperationFilter,
    OperationFilterContext,
    SchemaFilter,
    SchemaFilterContext,
)
from swagger_gen.generator.swagger_generator import response_description
from swagger_gen.model.document import Operation, Response
from swagger_gen.model.schema import Schema

_OPERATION_FIELDS = ("operation_id", "tags", "schemes", "consumes", "produces", "summary", "description")


class SwaggerAttributesOperationFilter(OperationFilter):
    def apply(self, operation: Operation, context: OperationFilterContext) -> None:
        handler = context.api_description.handler
        if handler is None:
            return

        attribute = getattr(handler, SWAGGER_OPERATION_ATTR, None)
        if attribute is not None:
            for field in _OPERATION_FIELDS:
                value = getattr(attribute, field)
                if value is not None:
                    setattr(operation, field, value)

        for descriptor in getattr(handler, SWAGGER_OPERATION_FILTERS_ATTR, []):
            descriptor.create().apply(operation, context)


class SwaggerResponseAttributeFilter(OperationFilter):
    def apply(self, operation: Operation, context: OperationFilterContext) -> None:
        handler = context.api_description.handler
        if handler is None:
            return

        if getattr(handler, SWAGGER_REMOVE_DEFAULT_RESPONSES_ATTR, False):
            operation.responses = {}

        for attribute in getattr(handler, SWAGGER_RESPONSES_ATTR, []):
            status_code = str(attribute.status_code)
            response = operation.responses.get(status_code) or Response()

            if attribute.description is not None:
                response.description = attribute.description
            elif response.description is None:
                response.description = response_description(attribute.status_code)

            if attribute.type is not None:
                response.schema_ = context.schema_registry.get_or_register(attribute.type)

            operation.responses[status_code] = response


class SwaggerAttributesSchemaFilter(SchemaFilter):
    def apply(self, schema: Schema, context: SchemaFilterContext) -> None:
        system_type = context.system_type
        if not isinstance(system_type, type):
            return

        for klass in reversed(system_type.__mro__):
            for descriptor in klass.__dict__.get(SWAGGER_SCHEMA_FILTERS_ATTR, []):
                descriptor.create().apply(schema, context)
