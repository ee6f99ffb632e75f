"""Width-tagged aliases and the static primitive type table.

Python's ``int`` and ``float`` carry no width, so annotate with the aliases
when the generated schema should advertise a specific format.
"""

from datetime import date, datetime
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Mapping, NewType
from uuid import UUID

Int16 = NewType("Int16", int)
UInt16 = NewType("UInt16", int)
Int32 = NewType("Int32", int)
UInt32 = NewType("UInt32", int)
Int64 = NewType("Int64", int)
UInt64 = NewType("UInt64", int)
Float32 = NewType("Float32", float)
Byte = NewType("Byte", int)
SByte = NewType("SByte", int)
DateTimeOffset = NewType("DateTimeOffset", datetime)


PRIMITIVE_TYPE_MAP: Mapping[Any, tuple[str, str | None]] = MappingProxyType({
    Int16: ("integer", "int32"),
    UInt16: ("integer", "int32"),
    Int32: ("integer", "int32"),
    UInt32: ("integer", "int32"),
    int: ("integer", "int32"),
    Int64: ("integer", "int64"),
    UInt64: ("integer", "int64"),
    Float32: ("number", "float"),
    float: ("number", "double"),
    Decimal: ("number", "double"),
    Byte: ("string", "byte"),
    SByte: ("string", "byte"),
    bytes: ("string", "byte"),
    bytearray: ("string", "byte"),
    bool: ("boolean", None),
    datetime: ("string", "date-time"),
    DateTimeOffset: ("string", "date-time"),
    date: ("string", "date"),
    UUID: ("string", "uuid"),
})


def lookup_primitive(system_type: Any) -> tuple[str, str | None] | None:
    """Find the (type, format) pair for a primitive, following NewType and subclassing."""
    while isinstance(system_type, NewType):
        if system_type in PRIMITIVE_TYPE_MAP:
            return PRIMITIVE_TYPE_MAP[system_type]
        system_type = system_type.__supertype__

    if not isinstance(system_type, type):
        return None
    for klass in system_type.__mro__:
        if klass in PRIMITIVE_TYPE_MAP:
            return PRIMITIVE_TYPE_MAP[klass]
    return None
