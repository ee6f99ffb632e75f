"""Naming helpers shared by the schema and document generators."""

import re
from typing import Any, get_args, get_origin

from swagger_gen.model.api_description import ApiDescription
from swagger_gen.model.schema import Schema

_NON_WORD = re.compile(r"[^0-9A-Za-z]+")

# constraint keys that switch name when applied to an array schema
_ARRAY_KEYWORDS = {"min_length": "min_items", "max_length": "max_items"}


def camel_case(name: str) -> str:
    if not name:
        return name
    return name[0].lower() + name[1:]


def title_case(name: str) -> str:
    if not name:
        return name
    return name[0].upper() + name[1:]


def type_friendly_id(system_type: Any, fully_qualified: bool = False) -> str:
    """Readable identifier for a type: ``Item``, ``ListOfInt``, ``PageOfItem``."""
    origin = get_origin(system_type)
    if origin is not None:
        args = [arg for arg in get_args(system_type) if arg is not Ellipsis]
        base = _type_name(origin, fully_qualified)
        if not args:
            return base
        return base + "Of" + "And".join(type_friendly_id(arg, fully_qualified) for arg in args)
    return _type_name(system_type, fully_qualified)


def type_full_name(system_type: Any) -> str:
    return type_friendly_id(system_type, fully_qualified=True)


def _type_name(system_type: Any, fully_qualified: bool) -> str:
    if isinstance(system_type, (str, int, float, bool)):
        return title_case(str(system_type))

    name = (
        getattr(system_type, "__name__", None)
        or getattr(system_type, "_name", None)
        or str(system_type)
    )
    if fully_qualified:
        qualname = getattr(system_type, "__qualname__", name).replace("<locals>.", "")
        module = getattr(system_type, "__module__", None)
        name = f"{module}.{qualname}" if module else qualname

    # parametrized pydantic generics are real classes named like "Page[Item]"
    if "[" in name:
        name = name.replace("[", "Of").replace("]", "").replace(", ", "And").replace(",", "And")
    return title_case(name) if not fully_qualified else name


def relative_path_sans_query_string(api_description: ApiDescription) -> str:
    return api_description.relative_path.split("?")[0]


def api_description_friendly_id(api_description: ApiDescription) -> str:
    """Build an operation id from the route: ``items/{id}`` + GET -> ``ItemsByIdGet``."""
    path = relative_path_sans_query_string(api_description)
    method = (api_description.http_method or "").lower()
    parts = (path + "/" + method).split("/")

    result = []
    for part in parts:
        if not part:
            continue
        is_parameter = part.startswith("{")
        # drop route constraints and optional markers, e.g. {id:int?}
        trimmed = part.strip("{}").split(":")[0].rstrip("?")
        words = "".join(title_case(word) for word in _NON_WORD.split(trimmed))
        result.append(("By" if is_parameter else "") + words)
    return "".join(result)


def assign_validation_properties(schema: Schema, contract_property) -> Schema:
    """Decorate an inline property schema with its member's constraint metadata."""
    if schema.is_reference:
        return schema

    for key, value in contract_property.constraints.items():
        if schema.type == "array":
            key = _ARRAY_KEYWORDS.get(key, key)
        setattr(schema, key, value)

    if contract_property.description:
        schema.description = contract_property.description
    return schema
