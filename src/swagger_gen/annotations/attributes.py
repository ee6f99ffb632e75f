"""Decorators that attach Swagger metadata to handlers and model classes.

The metadata is only stored here. The filters in
``swagger_gen.annotations.filters`` read it back during generation.
"""

from typing import Any, Callable

from pydantic import BaseModel, ConfigDict

from swagger_gen.generator.filters import FilterDescriptor

SWAGGER_OPERATION_ATTR = "__swagger_operation__"
SWAGGER_RESPONSES_ATTR = "__swagger_responses__"
SWAGGER_REMOVE_DEFAULT_RESPONSES_ATTR = "__swagger_remove_default_responses__"
SWAGGER_OPERATION_FILTERS_ATTR = "__swagger_operation_filters__"
SWAGGER_SCHEMA_FILTERS_ATTR = "__swagger_schema_filters__"


class SwaggerOperationAttribute(BaseModel):
    operation_id: str | None = None
    tags: list[str] | None = None
    schemes: list[str] | None = None
    consumes: list[str] | None = None
    produces: list[str] | None = None
    summary: str | None = None
    description: str | None = None


class SwaggerResponseAttribute(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    status_code: int
    type: Any = None
    description: str | None = None


def swagger_operation(
    operation_id: str | None = None,
    tags: list[str] | None = None,
    schemes: list[str] | None = None,
    consumes: list[str] | None = None,
    produces: list[str] | None = None,
    summary: str | None = None,
    description: str | None = None,
) -> Callable:
    attribute = SwaggerOperationAttribute(
        operation_id=operation_id,
        tags=tags,
        schemes=schemes,
        consumes=consumes,
        produces=produces,
        summary=summary,
        description=description,
    )

    def decorator(func):
        setattr(func, SWAGGER_OPERATION_ATTR, attribute)
        return func

    return decorator


def swagger_response(status_code: int, type: Any = None, description: str | None = None) -> Callable:
    """Declare a response; stack several to describe more than one status code."""
    attribute = SwaggerResponseAttribute(status_code=status_code, type=type, description=description)

    def decorator(func):
        # decorators apply bottom-up, prepend to keep source order
        responses = [attribute, *getattr(func, SWAGGER_RESPONSES_ATTR, [])]
        setattr(func, SWAGGER_RESPONSES_ATTR, responses)
        return func

    return decorator


def swagger_response_remove_defaults(func):
    """Drop the generated responses before applying the declared ones."""
    setattr(func, SWAGGER_REMOVE_DEFAULT_RESPONSES_ATTR, True)
    return func


def swagger_operation_filter(factory: Callable[..., Any], *args, **kwargs) -> Callable:
    descriptor = FilterDescriptor(factory=factory, args=args, kwargs=kwargs)

    def decorator(func):
        setattr(func, SWAGGER_OPERATION_FILTERS_ATTR, [descriptor, *getattr(func, SWAGGER_OPERATION_FILTERS_ATTR, [])])
        return func

    return decorator


def swagger_schema_filter(factory: Callable[..., Any], *args, **kwargs) -> Callable:
    descriptor = FilterDescriptor(factory=factory, args=args, kwargs=kwargs)

    def decorator(cls):
        # per-class list, SwaggerAttributesSchemaFilter walks the MRO
        setattr(cls, SWAGGER_SCHEMA_FILTERS_ATTR, [descriptor, *cls.__dict__.get(SWAGGER_SCHEMA_FILTERS_ATTR, [])])
        return cls

    return decorator
