"""Extension points for post-processing generated schemas, operations and documents.

Each filter mutates its target in place. Contexts are read-only; a filter
that needs more schemas asks ``context.schema_registry`` for them, which
writes into the same definitions as the running generation.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict

from swagger_gen.generator.schema_registry import SchemaRegistry
from swagger_gen.model.document import Operation, SwaggerDocument
from swagger_gen.model.schema import Schema


class _FilterContext(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    schema_provider: Any
    definitions: Any  # dict[str, Schema], shared with the generator, never copied

    @property
    def schema_registry(self) -> SchemaRegistry:
        return SchemaRegistry(self.schema_provider, self.definitions)


class SchemaFilterContext(_FilterContext):
    system_type: Any
    json_contract: Any


class OperationFilterContext(_FilterContext):
    api_description: Any


class DocumentFilterContext(_FilterContext):
    api_description_groups: Any


class SchemaFilter(ABC):
    @abstractmethod
    def apply(self, schema: Schema, context: SchemaFilterContext) -> None:
        ...


class OperationFilter(ABC):
    @abstractmethod
    def apply(self, operation: Operation, context: OperationFilterContext) -> None:
        ...


class DocumentFilter(ABC):
    @abstractmethod
    def apply(self, swagger_doc: SwaggerDocument, context: DocumentFilterContext) -> None:
        ...


Activator = Callable[[Callable[..., Any], tuple, dict], Any]


def default_activator(factory: Callable[..., Any], args: tuple, kwargs: dict) -> Any:
    return factory(*args, **kwargs)


class FilterDescriptor(BaseModel):
    """A filter registration, instantiated only when a generator is built."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    factory: Callable[..., Any]
    args: tuple = ()
    kwargs: dict[str, Any] = {}

    def create(self, activator: Activator | None = None) -> Any:
        return (activator or default_activator)(self.factory, self.args, self.kwargs)
