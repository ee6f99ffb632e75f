"""Translates Python types into Swagger schemas.

Object types (and arrays/maps that contain themselves) are emitted as
``$ref`` fragments. Their bodies are produced afterwards by draining a
FIFO queue of referenced types into the definitions dict, so self and
mutually recursive types terminate: a type's body is generated once per
schema id, not on the call stack of whoever referenced it.
"""

import logging
from collections import deque
from enum import Enum
from typing import Any, Literal, get_args, get_origin

from swagger_gen.errors import SchemaIdConflictError
from swagger_gen.generator.contracts import (
    ArrayContract,
    ContractResolver,
    DictionaryContract,
    JsonContract,
    ObjectContract,
    PrimitiveContract,
    unwrap_type,
)
from swagger_gen.generator.extensions import (
    assign_validation_properties,
    camel_case,
    type_friendly_id,
    type_full_name,
)
from swagger_gen.generator.filters import SchemaFilterContext
from swagger_gen.generator.settings import SchemaRegistrySettings
from swagger_gen.model.primitives import lookup_primitive
from swagger_gen.model.schema import Schema

logger = logging.getLogger(__name__)


class _Generation:
    """Queue state for one definitions dict, shared by re-entrant calls."""

    def __init__(self, definitions: dict[str, Schema]):
        self.definitions = definitions
        self.queue: deque = deque()
        self.in_progress: set[str] = set()


class SchemaGenerator:
    """Schema provider: ``get_schema(type, definitions) -> Schema``.

    The type -> schema id map lives as long as the generator so ids stay
    stable across calls. One instance must not serve overlapping calls from
    different threads.
    """

    def __init__(
        self,
        contract_resolver: ContractResolver | None = None,
        settings: SchemaRegistrySettings | None = None,
    ):
        self.contract_resolver = contract_resolver or ContractResolver()
        self.settings = settings or SchemaRegistrySettings()
        self._type_schema_id_map: dict[Any, str] = {}
        self._generation: _Generation | None = None

    def get_schema(self, system_type: Any, definitions: dict[str, Schema]) -> Schema:
        generation = self._generation
        if generation is None or generation.definitions is not definitions:
            generation = _Generation(definitions)

        outer, self._generation = self._generation, generation
        try:
            schema = self._create_schema(system_type, generation)
            # Ensure all referenced types have a corresponding definition
            self._drain(generation)
        finally:
            self._generation = outer
        return schema

    def _drain(self, generation: _Generation) -> None:
        while generation.queue:
            referenced_type = generation.queue.popleft()
            schema_id = self._type_schema_id_map[referenced_type]
            if schema_id in generation.definitions or schema_id in generation.in_progress:
                continue

            generation.in_progress.add(schema_id)
            try:
                generation.definitions[schema_id] = self._create_inline_schema(referenced_type, generation)
            finally:
                generation.in_progress.discard(schema_id)
            logger.debug("Defined schema %s", schema_id)

    def _create_schema(self, system_type: Any, generation: _Generation) -> Schema:
        system_type = unwrap_type(system_type)
        contract = self.contract_resolver.resolve_contract(system_type)

        create_reference = system_type not in self.settings.custom_type_mappings and (
            isinstance(contract, ObjectContract)
            or (isinstance(contract, (ArrayContract, DictionaryContract)) and contract.is_self_referencing())
        )
        if create_reference:
            return self._create_reference_schema(system_type, generation)
        return self._create_inline_schema(system_type, generation)

    def _create_reference_schema(self, system_type: Any, generation: _Generation) -> Schema:
        schema_id = self._type_schema_id_map.get(system_type)
        if schema_id is None:
            schema_id = self.settings.schema_id_selector(system_type)
            for existing_type, existing_id in self._type_schema_id_map.items():
                if existing_id == schema_id:
                    raise SchemaIdConflictError(schema_id, type_full_name(system_type), type_full_name(existing_type))
            self._type_schema_id_map[system_type] = schema_id
            logger.debug("Assigned schema id %s to %s", schema_id, type_full_name(system_type))

        if system_type not in generation.queue:
            generation.queue.append(system_type)

        return Schema.reference(schema_id)

    def _create_inline_schema(self, system_type: Any, generation: _Generation) -> Schema:
        contract = self.contract_resolver.resolve_contract(system_type)

        custom_mapping = self.settings.custom_type_mappings.get(system_type)
        if custom_mapping is not None:
            schema = custom_mapping()
        elif isinstance(contract, PrimitiveContract):
            schema = self._create_primitive_schema(contract)
        elif isinstance(contract, DictionaryContract):
            schema = self._create_dictionary_schema(contract, generation)
        elif isinstance(contract, ArrayContract):
            schema = self._create_array_schema(contract, generation)
        elif isinstance(contract, ObjectContract):
            schema = self._create_object_schema(contract, generation)
        else:
            # None of the above, fallback to abstract "object"
            schema = Schema(type="object")

        self._apply_filters(schema, system_type, contract, generation)
        return schema

    def _apply_filters(
        self,
        schema: Schema,
        system_type: Any,
        contract: JsonContract,
        generation: _Generation,
    ) -> None:
        context = SchemaFilterContext(
            system_type=system_type,
            json_contract=contract,
            schema_provider=self,
            definitions=generation.definitions,
        )
        for schema_filter in self.settings.schema_filters:
            schema_filter.apply(schema, context)

    def _create_primitive_schema(self, contract: PrimitiveContract) -> Schema:
        system_type = contract.underlying_type

        if get_origin(system_type) is Literal:
            return self._create_literal_schema(system_type)
        if isinstance(system_type, type) and issubclass(system_type, Enum):
            return self._create_enum_schema(system_type)

        mapped = lookup_primitive(system_type)
        if mapped is not None:
            type_, format_ = mapped
            return Schema(type=type_, format=format_)

        # None of the above, fallback to string
        return Schema(type="string")

    def _create_enum_schema(self, enum_type: type[Enum]) -> Schema:
        members = list(enum_type)

        if self.settings.describe_all_enums_as_strings:
            names = [member.name for member in members]
            if self.settings.describe_string_enums_in_camel_case:
                names = [camel_case(name) for name in names]
            return Schema(type="string", enum=names)

        values = [member.value for member in members]
        if issubclass(enum_type, str):
            return Schema(type="string", enum=values)
        return Schema(type="integer", format="int32", enum=values)

    def _create_literal_schema(self, literal_type: Any) -> Schema:
        values = list(get_args(literal_type))
        mapped = lookup_primitive(type(values[0])) if values else None
        return Schema(type=mapped[0] if mapped else "string", enum=values)

    def _create_dictionary_schema(self, contract: DictionaryContract, generation: _Generation) -> Schema:
        key_type = unwrap_type(contract.dictionary_key_type)
        value_type = contract.dictionary_value_type

        if isinstance(key_type, type) and issubclass(key_type, Enum):
            # enum keys give a fixed, known set of properties
            return Schema(
                type="object",
                properties={
                    contract.dictionary_key_resolver(member.name): self._create_schema(value_type, generation)
                    for member in key_type
                },
            )

        return Schema(
            type="object",
            additional_properties=self._create_schema(value_type, generation),
        )

    def _create_array_schema(self, contract: ArrayContract, generation: _Generation) -> Schema:
        return Schema(
            type="array",
            items=self._create_schema(contract.collection_item_type, generation),
        )

    def _create_object_schema(self, contract: ObjectContract, generation: _Generation) -> Schema:
        properties = {}
        required = []
        for prop in contract.properties:
            if prop.ignored:
                continue
            if self.settings.ignore_obsolete_properties and prop.obsolete:
                continue

            schema = self._create_schema(prop.property_type, generation)
            properties[prop.property_name] = assign_validation_properties(schema, prop)
            if prop.required:
                required.append(prop.property_name)

        return Schema(
            type="object",
            properties=properties,
            required=required or None,  # required can be null but not empty
            title=type_friendly_id(contract.underlying_type),
        )
