"""Pass-by-value parameters carried through callback argument lists."""

from __future__ import annotations

import struct
from enum import IntEnum
from typing import Any


class ParamType(IntEnum):
    """Kind of value a :class:`Parameter` holds."""

    UNKNOWN = 0
    STRING = 1
    STRING_BUFFER = 2
    INTEGER = 3
    LONG = 4
    VOID_PTR = 5
    FLOAT = 6
    DOUBLE = 7
    BOOLEAN = 8
    SHORT = 9


_NUMERIC = {
    ParamType.INTEGER,
    ParamType.LONG,
    ParamType.FLOAT,
    ParamType.DOUBLE,
    ParamType.BOOLEAN,
    ParamType.SHORT,
}


def _wrap_int(value: int, bits: int) -> int:
    mask = (1 << bits) - 1
    value &= mask
    if value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def _to_float32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _infer_kind(value: Any) -> ParamType:
    if value is None:
        return ParamType.UNKNOWN
    if isinstance(value, bool):
        return ParamType.BOOLEAN
    if isinstance(value, int):
        return ParamType.LONG
    if isinstance(value, float):
        return ParamType.DOUBLE
    if isinstance(value, str):
        return ParamType.STRING
    if isinstance(value, (bytes, bytearray)):
        return ParamType.STRING_BUFFER
    return ParamType.VOID_PTR


def _coerce(value: Any, kind: ParamType) -> Any:
    if kind is ParamType.UNKNOWN:
        return None
    if kind is ParamType.BOOLEAN:
        return bool(value)
    if kind is ParamType.SHORT:
        return _wrap_int(int(value), 16)
    if kind in (ParamType.INTEGER, ParamType.LONG):
        return _wrap_int(int(value), 32)
    if kind is ParamType.FLOAT:
        return _to_float32(float(value))
    if kind is ParamType.DOUBLE:
        return float(value)
    if kind is ParamType.STRING:
        return None if value is None else str(value)
    if kind is ParamType.STRING_BUFFER:
        return None if value is None else bytes(value)
    return value


class Parameter:
    """A typed value; numbers are stored with the width of their kind."""

    __slots__ = ("type", "value")

    def __init__(self, value: Any = None, kind: ParamType | None = None) -> None:
        self.type = ParamType.UNKNOWN
        self.value: Any = None
        self.set(value, kind)

    def set(self, value: Any, kind: ParamType | None = None) -> None:
        """Store ``value``; the kind is inferred from it unless given."""
        kind = _infer_kind(value) if kind is None else ParamType(kind)
        self.type = kind
        self.value = _coerce(value, kind)

    def clear(self) -> None:
        """Drop the held value and mark the parameter as unknown."""
        self.type = ParamType.UNKNOWN
        self.value = None

    def copy(self) -> Parameter:
        """Return an independent copy; buffers are duplicated."""
        return Parameter(self.value, self.type)

    def __float__(self) -> float:
        if self.type not in _NUMERIC:
            raise TypeError(f"parameter of kind {self.type.name} is not numeric")
        return float(self.value)

    def __int__(self) -> int:
        if self.type not in _NUMERIC:
            raise TypeError(f"parameter of kind {self.type.name} is not numeric")
        return int(self.value)

    def __str__(self) -> str:
        if self.value is None:
            return ""
        if isinstance(self.value, bytes):
            return self.value.split(b"\0", 1)[0].decode("latin-1")
        return str(self.value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Parameter):
            return NotImplemented
        return self.type == other.type and self.value == other.value

    def __repr__(self) -> str:
        return f"Parameter({self.value!r}, ParamType.{self.type.name})"