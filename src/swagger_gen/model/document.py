"""Swagger 2.0 document models produced by the generator."""

from typing import Annotated, Any, Literal

from pydantic import Field

from swagger_gen.model.schema import PartialSchema, Schema, SwaggerModel


class Contact(SwaggerModel):
    name: str | None = None
    url: str | None = None
    email: str | None = None


class License(SwaggerModel):
    name: str
    url: str | None = None


class Info(SwaggerModel):
    """Static metadata registered per document name."""

    version: str
    title: str
    description: str | None = None
    terms_of_service: str | None = None
    contact: Contact | None = None
    license: License | None = None


class ExternalDocs(SwaggerModel):
    url: str
    description: str | None = None


class Tag(SwaggerModel):
    name: str
    description: str | None = None
    external_docs: ExternalDocs | None = None


class Header(PartialSchema):
    description: str | None = None


class BodyParameter(SwaggerModel):
    name: str
    in_: Literal["body"] = Field(default="body", alias="in")
    description: str | None = None
    required: bool | None = None
    schema_: Schema | None = Field(default=None, alias="schema")


class NonBodyParameter(PartialSchema):
    name: str
    in_: str = Field(alias="in")  # query / header / path / formData
    description: str | None = None
    required: bool | None = None


Parameter = BodyParameter | NonBodyParameter


class Response(SwaggerModel):
    description: str | None = None
    schema_: Schema | None = Field(default=None, alias="schema")
    headers: dict[str, Header] | None = None
    examples: dict[str, Any] | None = None


class Operation(SwaggerModel):
    tags: list[str] | None = None
    summary: str | None = None
    description: str | None = None
    external_docs: ExternalDocs | None = None
    operation_id: str | None = None
    consumes: list[str] | None = None
    produces: list[str] | None = None
    parameters: list[Parameter] | None = None
    responses: dict[str, Response] = {}
    schemes: list[str] | None = None
    deprecated: bool | None = None
    security: list[dict[str, list[str]]] | None = None


class PathItem(SwaggerModel):
    get: Operation | None = None
    put: Operation | None = None
    post: Operation | None = None
    delete: Operation | None = None
    options: Operation | None = None
    head: Operation | None = None
    patch: Operation | None = None
    parameters: list[Parameter] | None = None


class BasicAuthScheme(SwaggerModel):
    type: Literal["basic"] = "basic"
    description: str | None = None


class ApiKeyScheme(SwaggerModel):
    type: Literal["apiKey"] = "apiKey"
    description: str | None = None
    name: str
    in_: str = Field(alias="in")  # query / header


class OAuth2Scheme(SwaggerModel):
    type: Literal["oauth2"] = "oauth2"
    description: str | None = None
    flow: str  # implicit / password / application / accessCode
    authorization_url: str | None = None
    token_url: str | None = None
    scopes: dict[str, str] = {}


SecurityScheme = Annotated[BasicAuthScheme | ApiKeyScheme | OAuth2Scheme, Field(discriminator="type")]


class SwaggerDocument(SwaggerModel):
    swagger: str = "2.0"
    info: Info
    host: str | None = None
    base_path: str | None = None
    schemes: list[str] | None = None
    consumes: list[str] | None = None
    produces: list[str] | None = None
    paths: dict[str, PathItem] = {}
    definitions: dict[str, Schema] = {}
    parameters: dict[str, Parameter] | None = None
    responses: dict[str, Response] | None = None
    security_definitions: dict[str, SecurityScheme] | None = None
    security: list[dict[str, list[str]]] | None = None
    tags: list[Tag] | None = None
    external_docs: ExternalDocs | None = None
