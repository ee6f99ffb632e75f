"""Route/action metadata consumed by the generator.

These models are the boundary with whatever discovers the routes of a
running service. The generator never inspects the web framework itself,
it only reads ApiDescription instances.
"""

from enum import Enum
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict


class BindingSource(str, Enum):
    """Where a parameter value is bound from."""

    BODY = "body"
    FORM = "form"
    HEADER = "header"
    PATH = "path"
    QUERY = "query"
    MODEL_BINDING = "model_binding"
    CUSTOM = "custom"
    SERVICES = "services"  # injected by the framework, e.g. a db session
    SPECIAL = "special"  # e.g. cancellation tokens

    @property
    def is_from_request(self) -> bool:
        return self not in (BindingSource.SERVICES, BindingSource.SPECIAL)


class ApiParameterDescription(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    source: BindingSource | None = None
    type: Any = None


class ApiResponseType(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    status_code: int
    type: Any = None


class ApiDescription(BaseModel):
    """One route + HTTP method + contract triple."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    http_method: str | None
    relative_path: str  # items/{id}?verbose=true, no leading slash
    parameter_descriptions: list[ApiParameterDescription] = []
    supported_response_types: list[ApiResponseType] = []
    supported_request_media_types: list[str] = []
    supported_response_media_types: list[str] = []
    is_obsolete: bool = False
    display_name: str = ""
    controller_name: str | None = None
    action_name: str | None = None
    group_name: str | None = None
    handler: Callable[..., Any] | None = None


class ApiDescriptionGroup(BaseModel):
    group_name: str | None = None
    items: list[ApiDescription] = []


class ApiDescriptionGroupCollection(BaseModel):
    items: list[ApiDescriptionGroup] = []
    version: int = 1

    def all_descriptions(self) -> list[ApiDescription]:
        return [api_desc for group in self.items for api_desc in group.items]


class StaticApiDescriptionsProvider:
    """Serves a fixed, already-discovered list of ApiDescription."""

    def __init__(self, descriptions: list[ApiDescription]):
        groups: dict[str | None, list[ApiDescription]] = {}
        for api_desc in descriptions:
            groups.setdefault(api_desc.group_name, []).append(api_desc)
        self._groups = ApiDescriptionGroupCollection(
            items=[ApiDescriptionGroup(group_name=name, items=items) for name, items in groups.items()]
        )

    @property
    def api_description_groups(self) -> ApiDescriptionGroupCollection:
        return self._groups
