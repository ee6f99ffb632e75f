"""Resolves Python annotations into serialization contracts.

A contract says how a type is shaped on the wire (primitive, array,
dictionary, object or "anything") and, for objects, which members it has.
The schema generator only ever looks at contracts, never at the classes
themselves.
"""

import dataclasses
import datetime
import enum
import logging
import pathlib
import types
import typing
import uuid
from collections import abc
from decimal import Decimal
from typing import Annotated, Any, Callable, ClassVar, ForwardRef, Literal, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict
from pydantic.fields import FieldInfo

from swagger_gen.model.primitives import PRIMITIVE_TYPE_MAP

logger = logging.getLogger(__name__)

# leaf types that serialize to a plain string
_STRING_LIKE = (str, pathlib.PurePath, datetime.time, datetime.timedelta, uuid.UUID)
_CONSTRAINT_ATTRS = {
    "ge": "minimum",
    "le": "maximum",
    "multiple_of": "multiple_of",
    "min_length": "min_length",
    "max_length": "max_length",
    "pattern": "pattern",
}


def _identity(name: str) -> str:
    return name


class JsonContract(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    underlying_type: Any


class PrimitiveContract(JsonContract):
    pass


class AnyContract(JsonContract):
    """Fallback for anything without a recognisable shape."""


class ArrayContract(JsonContract):
    collection_item_type: Any = object

    def is_self_referencing(self) -> bool:
        return _reaches(self.collection_item_type, self.underlying_type)


class DictionaryContract(JsonContract):
    dictionary_key_type: Any = object
    dictionary_value_type: Any = object
    dictionary_key_resolver: Callable[[str], str] = _identity

    def is_self_referencing(self) -> bool:
        return _reaches(self.dictionary_value_type, self.underlying_type)


class ContractProperty(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    property_name: str
    property_type: Any
    required: bool = False
    ignored: bool = False
    obsolete: bool = False
    description: str | None = None
    constraints: dict[str, Any] = {}  # keyed by Schema attribute name


class ObjectContract(JsonContract):
    properties: list[ContractProperty] = []


def unwrap_type(system_type: Any) -> Any:
    """Strip ``Annotated[...]`` and ``Optional[...]`` down to the underlying type."""
    while True:
        origin = get_origin(system_type)
        if origin is Annotated:
            system_type = get_args(system_type)[0]
            continue
        if origin is Union or origin is types.UnionType:
            args = get_args(system_type)
            non_null = [arg for arg in args if arg is not type(None)]
            if len(non_null) == 1 and len(non_null) < len(args):
                system_type = non_null[0]
                continue
        return system_type


def _reaches(candidate: Any, target: Any) -> bool:
    """True if ``target`` is ``candidate`` or is wrapped inside it by arrays/maps."""
    candidate = unwrap_type(candidate)
    if candidate == target:
        return True
    origin = get_origin(candidate)
    if not isinstance(origin, type):
        return False
    args = get_args(candidate)
    if issubclass(origin, abc.Mapping):
        return len(args) == 2 and _reaches(args[1], target)
    if issubclass(origin, abc.Iterable):
        return any(_reaches(arg, target) for arg in args if arg is not Ellipsis)
    return False


def _resolve_forward_ref(ref: Any, owner: type) -> Any:
    """Resolve a string/ForwardRef generic argument in the owner's module."""
    if not isinstance(ref, (str, ForwardRef)):
        return ref
    name = ref.__forward_arg__ if isinstance(ref, ForwardRef) else ref
    # get_type_hints resolves class annotations against the class's module
    holder = type("_ForwardRefHolder", (), {"__module__": owner.__module__, "__annotations__": {"ref": name}})
    try:
        return typing.get_type_hints(holder, localns={owner.__name__: owner})["ref"]
    except (NameError, AttributeError, SyntaxError, TypeError) as e:
        logger.debug("Could not resolve %r on %s (%s), treating it as 'any'", name, owner, e)
        return object


def _generic_base_args(cls: type, base: type) -> tuple:
    """Type arguments ``cls`` supplied to a generic ``base``, e.g. ``class Tree(list["Tree"])``."""
    for klass in cls.__mro__:
        for orig_base in klass.__dict__.get("__orig_bases__", ()):
            origin = get_origin(orig_base)
            if isinstance(origin, type) and issubclass(origin, base):
                return tuple(_resolve_forward_ref(arg, klass) for arg in get_args(orig_base))
    return ()


def _collection_item_type(args: tuple, origin: type) -> Any:
    if not args:
        return object
    if issubclass(origin, tuple):
        if len(args) == 2 and args[1] is Ellipsis:
            return args[0]
        return args[0] if all(arg == args[0] for arg in args) else object
    return args[0]


def _scalar_default(value: Any) -> Any:
    if isinstance(value, enum.Enum):
        value = value.value
    if isinstance(value, (str, int, float, bool)):
        return value
    return None


def _flatten_metadata(metadata: list[Any]):
    # Annotated[float, Field(gt=0)] on a non-pydantic class
    for item in metadata:
        if isinstance(item, FieldInfo):
            yield from item.metadata
        else:
            yield item


def _constraints(metadata: list[Any], default: Any = None) -> dict[str, Any]:
    constraints = {}
    for item in _flatten_metadata(metadata):
        for attr, key in _CONSTRAINT_ATTRS.items():
            value = getattr(item, attr, None)
            if value is not None:
                # compiled patterns
                constraints[key] = getattr(value, "pattern", value)
        if getattr(item, "gt", None) is not None:
            constraints["minimum"] = item.gt
            constraints["exclusive_minimum"] = True
        if getattr(item, "lt", None) is not None:
            constraints["maximum"] = item.lt
            constraints["exclusive_maximum"] = True

    default = _scalar_default(default)
    if default is not None:
        constraints["default"] = default
    return constraints


def _split_annotated(annotation: Any) -> tuple[Any, list[Any]]:
    if get_origin(annotation) is Annotated:
        base, *metadata = get_args(annotation)
        return base, metadata
    return annotation, []


class ContractResolver:
    """Maps Python annotations to contracts, caching each resolution."""

    def __init__(self, property_naming: Callable[[str], str] | None = None):
        self.property_naming = property_naming
        self._contracts: dict[Any, JsonContract] = {}

    def resolve_contract(self, system_type: Any) -> JsonContract:
        system_type = unwrap_type(system_type)
        try:
            contract = self._contracts.get(system_type)
        except TypeError:  # unhashable annotation, resolve without caching
            return self._create_contract(system_type)
        if contract is None:
            contract = self._create_contract(system_type)
            self._contracts[system_type] = contract
        return contract

    def _create_contract(self, system_type: Any) -> JsonContract:
        if system_type is Any or system_type is object or system_type is type(None):
            return AnyContract(underlying_type=system_type)

        if isinstance(system_type, typing.NewType):
            if system_type in PRIMITIVE_TYPE_MAP:
                return PrimitiveContract(underlying_type=system_type)
            return self._create_contract(unwrap_type(system_type.__supertype__))

        origin = get_origin(system_type)
        if origin is Literal:
            return PrimitiveContract(underlying_type=system_type)
        if origin is not None:
            return self._create_generic_contract(system_type, origin)

        if not isinstance(system_type, type):
            return AnyContract(underlying_type=system_type)

        if issubclass(system_type, enum.Enum) or self._is_primitive(system_type):
            return PrimitiveContract(underlying_type=system_type)
        if issubclass(system_type, BaseModel):
            return ObjectContract(underlying_type=system_type, properties=self._model_properties(system_type))
        if dataclasses.is_dataclass(system_type):
            return ObjectContract(underlying_type=system_type, properties=self._dataclass_properties(system_type))
        if issubclass(system_type, abc.Mapping):
            key_type, value_type = _generic_base_args(system_type, abc.Mapping) or (object, object)
            return self._dictionary_contract(system_type, key_type, value_type)
        if issubclass(system_type, abc.Iterable):
            args = _generic_base_args(system_type, abc.Iterable)
            return ArrayContract(
                underlying_type=system_type,
                collection_item_type=_collection_item_type(args, system_type),
            )

        properties = self._class_properties(system_type)
        if properties:
            return ObjectContract(underlying_type=system_type, properties=properties)
        return AnyContract(underlying_type=system_type)

    def _create_generic_contract(self, system_type: Any, origin: Any) -> JsonContract:
        if not isinstance(origin, type):
            # non-optional unions and other special forms
            return AnyContract(underlying_type=system_type)

        args = get_args(system_type)
        if issubclass(origin, abc.Mapping):
            key_type, value_type = args if len(args) == 2 else (object, object)
            return self._dictionary_contract(system_type, key_type, value_type)
        if issubclass(origin, (str, bytes, bytearray)):
            return PrimitiveContract(underlying_type=origin)
        if issubclass(origin, abc.Iterable):
            return ArrayContract(
                underlying_type=system_type,
                collection_item_type=_collection_item_type(args, origin),
            )
        return self.resolve_contract(origin)

    def _dictionary_contract(self, system_type: Any, key_type: Any, value_type: Any) -> DictionaryContract:
        return DictionaryContract(
            underlying_type=system_type,
            dictionary_key_type=key_type,
            dictionary_value_type=value_type,
            dictionary_key_resolver=self.property_naming or _identity,
        )

    def _is_primitive(self, system_type: type) -> bool:
        if issubclass(system_type, (*_STRING_LIKE, Decimal, bytes, bytearray, datetime.date)):
            return True
        return any(klass in PRIMITIVE_TYPE_MAP for klass in system_type.__mro__)

    def _property_name(self, name: str, alias: str | None = None) -> str:
        if alias:
            return alias
        return self.property_naming(name) if self.property_naming else name

    def _model_properties(self, model: type[BaseModel]) -> list[ContractProperty]:
        if not model.__pydantic_complete__:
            model.model_rebuild()

        properties = []
        for name, field in model.model_fields.items():
            required = field.is_required()
            default = None if required else field.default  # undefined when a default_factory is used
            properties.append(ContractProperty(
                property_name=self._property_name(name, field.serialization_alias or field.alias),
                property_type=field.annotation,
                required=required,
                ignored=bool(field.exclude),
                obsolete=bool(getattr(field, "deprecated", None)),
                description=field.description,
                constraints=_constraints(field.metadata, default),
            ))
        return properties

    def _dataclass_properties(self, cls: type) -> list[ContractProperty]:
        hints = self._type_hints(cls)
        properties = []
        for field in dataclasses.fields(cls):
            annotation, metadata = _split_annotated(hints.get(field.name, Any))
            required = field.default is dataclasses.MISSING and field.default_factory is dataclasses.MISSING
            properties.append(ContractProperty(
                property_name=self._property_name(field.name, field.metadata.get("alias")),
                property_type=annotation,
                required=required,
                ignored=bool(field.metadata.get("ignore", False)),
                obsolete=bool(field.metadata.get("obsolete", False)),
                description=field.metadata.get("description"),
                constraints=_constraints(metadata, None if required else field.default),
            ))
        return properties

    def _class_properties(self, cls: type) -> list[ContractProperty]:
        properties = []
        for name, hint in self._type_hints(cls).items():
            if name.startswith("_") or get_origin(hint) is ClassVar or hint is ClassVar:
                continue
            annotation, metadata = _split_annotated(hint)
            has_default = any(name in vars(klass) for klass in cls.__mro__)
            properties.append(ContractProperty(
                property_name=self._property_name(name),
                property_type=annotation,
                required=not has_default,
                constraints=_constraints(metadata, getattr(cls, name, None) if has_default else None),
            ))
        return properties

    def _type_hints(self, cls: type) -> dict[str, Any]:
        try:
            return typing.get_type_hints(cls, include_extras=True)
        except (NameError, TypeError) as e:
            logger.debug("Could not resolve annotations of %s (%s), falling back to raw annotations", cls, e)
            return {
                name: (Any if isinstance(hint, (str, ForwardRef)) else hint)
                for klass in reversed(cls.__mro__)
                for name, hint in vars(klass).get("__annotations__", {}).items()
            }
