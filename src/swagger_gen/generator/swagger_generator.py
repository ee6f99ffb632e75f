"""Assembles Swagger documents from route metadata.

Descriptions are filtered for the requested document, sorted, grouped by
path and then by HTTP method. Every (path, method) pair must be unique.
"""

import logging
import re

from swagger_gen.errors import AmbiguousHttpMethodError, ConflictingActionsError, UnknownSwaggerDocument
from swagger_gen.generator.extensions import (
    api_description_friendly_id,
    camel_case,
    relative_path_sans_query_string,
)
from swagger_gen.generator.filters import DocumentFilterContext, OperationFilterContext
from swagger_gen.generator.settings import SwaggerGeneratorSettings
from swagger_gen.model.api_description import (
    ApiDescription,
    ApiParameterDescription,
    ApiResponseType,
    BindingSource,
    StaticApiDescriptionsProvider,
)
from swagger_gen.model.document import (
    BodyParameter,
    NonBodyParameter,
    Operation,
    Parameter,
    PathItem,
    Response,
    SwaggerDocument,
)
from swagger_gen.model.schema import Schema

logger = logging.getLogger(__name__)

HTTP_METHODS = ("GET", "PUT", "POST", "DELETE", "OPTIONS", "HEAD", "PATCH")

PARAMETER_LOCATIONS = {
    BindingSource.FORM: "formData",
    BindingSource.BODY: "body",
    BindingSource.HEADER: "header",
    BindingSource.PATH: "path",
    BindingSource.QUERY: "query",
}

# First match wins, so exact 4xx codes come before the 4xx class.
RESPONSE_DESCRIPTION_MAP = (
    (re.compile(r"1\d{2}"), "Information"),
    (re.compile(r"2\d{2}"), "Success"),
    (re.compile(r"3\d{2}"), "Redirect"),
    (re.compile(r"400"), "Bad Request"),
    (re.compile(r"401"), "Unauthorized"),
    (re.compile(r"403"), "Forbidden"),
    (re.compile(r"404"), "Not Found"),
    (re.compile(r"405"), "Method Not Allowed"),
    (re.compile(r"406"), "Not Acceptable"),
    (re.compile(r"408"), "Request Timeout"),
    (re.compile(r"409"), "Conflict"),
    (re.compile(r"4\d{2}"), "Client Error"),
    (re.compile(r"5\d{2}"), "Server Error"),
)


def response_description(status_code: int | str) -> str | None:
    code = str(status_code)
    for pattern, description in RESPONSE_DESCRIPTION_MAP:
        if pattern.fullmatch(code):
            return description
    return None


def parameter_location(parameter: ApiParameterDescription) -> str:
    # Unbound parameters default to "query", even for PUT/POST: complex
    # parameters may already be flattened into several non-body ones.
    return PARAMETER_LOCATIONS.get(parameter.source, "query")


class SwaggerGenerator:
    """Swagger provider: ``get_swagger(document_name, ...) -> SwaggerDocument``."""

    def __init__(self, api_descriptions_provider, schema_provider, settings: SwaggerGeneratorSettings | None = None):
        if isinstance(api_descriptions_provider, list):
            api_descriptions_provider = StaticApiDescriptionsProvider(api_descriptions_provider)
        self.api_descriptions_provider = api_descriptions_provider
        self.schema_provider = schema_provider
        self.settings = settings or SwaggerGeneratorSettings()

    def get_swagger(
        self,
        document_name: str,
        host: str | None = None,
        base_path: str | None = None,
        schemes: list[str] | None = None,
    ) -> SwaggerDocument:
        # Schema definitions are scoped to this document
        definitions: dict[str, Schema] = {}

        info = self.settings.swagger_docs.get(document_name)
        if info is None:
            raise UnknownSwaggerDocument(document_name)

        groups = self.api_descriptions_provider.api_description_groups
        api_descriptions = [
            api_desc for api_desc in groups.all_descriptions()
            if self.settings.doc_inclusion_predicate(document_name, api_desc)
            and not (self.settings.ignore_obsolete_actions and api_desc.is_obsolete)
        ]
        api_descriptions = sorted(api_descriptions, key=self.settings.sort_key_selector)

        path_groups: dict[str, list[ApiDescription]] = {}
        for api_desc in api_descriptions:
            path_groups.setdefault(relative_path_sans_query_string(api_desc), []).append(api_desc)

        swagger_doc = SwaggerDocument(
            info=info,
            host=host,
            base_path=base_path,
            schemes=schemes,
            security_definitions=dict(self.settings.security_definitions),
        )
        # assigned after construction so filters and the document share the same dicts
        swagger_doc.paths = {
            "/" + path: self._create_path_item(path, group, definitions)
            for path, group in path_groups.items()
        }
        swagger_doc.definitions = definitions

        filter_context = DocumentFilterContext(
            api_description_groups=groups,
            schema_provider=self.schema_provider,
            definitions=definitions,
        )
        for document_filter in self.settings.document_filters:
            document_filter.apply(swagger_doc, filter_context)

        logger.info(
            "Generated document %s: %d paths, %d definitions",
            document_name, len(swagger_doc.paths), len(definitions),
        )
        return swagger_doc

    def _create_path_item(
        self,
        path: str,
        api_descriptions: list[ApiDescription],
        definitions: dict[str, Schema],
    ) -> PathItem:
        path_item = PathItem()

        # Group further by http method
        per_method: dict[str | None, list[ApiDescription]] = {}
        for api_desc in api_descriptions:
            http_method = api_desc.http_method.upper() if api_desc.http_method else None
            per_method.setdefault(http_method, []).append(api_desc)

        for http_method, group in per_method.items():
            if http_method is None:
                raise AmbiguousHttpMethodError(group[0].display_name)
            if len(group) > 1:
                raise ConflictingActionsError(http_method, path, [api_desc.display_name for api_desc in group])
            if http_method not in HTTP_METHODS:
                logger.debug("Skipping %s %s, method not supported by Swagger 2.0", http_method, path)
                continue

            setattr(path_item, http_method.lower(), self._create_operation(group[0], definitions))

        return path_item

    def _create_operation(self, api_description: ApiDescription, definitions: dict[str, Schema]) -> Operation:
        parameters = [
            self._create_parameter(param_desc, definitions)
            for param_desc in api_description.parameter_descriptions
            if param_desc.source is None or param_desc.source.is_from_request
        ]

        response_types = api_description.supported_response_types or [ApiResponseType(status_code=200)]
        responses = {
            str(response_type.status_code): self._create_response(response_type, definitions)
            for response_type in response_types
        }

        tag = self.settings.tag_selector(api_description)
        operation = Operation(
            tags=[tag] if tag else None,
            operation_id=api_description_friendly_id(api_description),
            consumes=list(api_description.supported_request_media_types),
            produces=list(api_description.supported_response_media_types),
            parameters=parameters or None,  # parameters can be null but not empty
            responses=responses,
            deprecated=True if api_description.is_obsolete else None,
        )

        filter_context = OperationFilterContext(
            api_description=api_description,
            schema_provider=self.schema_provider,
            definitions=definitions,
        )
        for operation_filter in self.settings.operation_filters:
            operation_filter.apply(operation, filter_context)

        return operation

    def _create_parameter(self, param_desc: ApiParameterDescription, definitions: dict[str, Schema]) -> Parameter:
        location = parameter_location(param_desc)

        name = camel_case(param_desc.name) if self.settings.describe_all_parameters_in_camel_case else param_desc.name

        schema = None if param_desc.type is None else self.schema_provider.get_schema(param_desc.type, definitions)

        if location == "body":
            return BodyParameter(name=name, schema_=schema)

        non_body_param = NonBodyParameter(name=name, in_=location, required=location == "path")
        if schema is not None:
            non_body_param.populate_from(schema)
        if non_body_param.type is None:
            non_body_param.type = "string"
        if non_body_param.type == "array":
            non_body_param.collection_format = "multi"
        return non_body_param

    def _create_response(self, response_type: ApiResponseType, definitions: dict[str, Schema]) -> Response:
        schema = None
        if response_type.type is not None and response_type.type is not type(None):
            schema = self.schema_provider.get_schema(response_type.type, definitions)

        return Response(
            description=response_description(response_type.status_code),
            schema_=schema,
        )
