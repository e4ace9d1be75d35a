"""Numbers that notify their watchers whenever their value changes."""

from __future__ import annotations

import re
import struct
from typing import Any, ClassVar

from observa.msgcb import MessageCallbacks


class DivByZero(ZeroDivisionError):
    """Raised when an observable number is divided by zero."""


def _wrap(value: int, bits: int) -> int:
    value &= (1 << bits) - 1
    if value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def _single(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


_DEC_RE = re.compile(r"\s*([+-]?\d+)")
_HEX_RE = re.compile(r"\s*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]+)")
_FLOAT_RE = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


class ObservableNumber:
    """A number whose changes are delivered to ``value_cb`` watchers.

    Watchers receive ``(new_value, old_value, number)``. The base class
    holds a double; subclasses fix the width and text format.
    """

    _bits: ClassVar[int | None] = None
    _single_precision: ClassVar[bool] = False
    _hex: ClassVar[bool] = False

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, value: Any = 0) -> None:
        self.value_cb = MessageCallbacks(self)
        self._x = self._coerce(_raw(value))

    @classmethod
    def _coerce(cls, value: Any) -> Any:
        if cls._bits is not None:
            return _wrap(int(value), cls._bits)
        if cls._single_precision:
            return _single(float(value))
        return float(value)

    def _update(self, new: Any) -> None:
        if self.is_watched():
            old = self._x
            self._x = new
            self.value_cb.invoke((new, old, self))
        else:
            self._x = new

    def is_watched(self) -> bool:
        """Whether any watcher is installed."""
        return self.value_cb.n_watchers() > 0

    def value(self) -> Any:
        """The current value."""
        return self._x

    def assign(self, value: Any) -> ObservableNumber:
        """Set the value, notifying watchers only if it changes."""
        new = self._coerce(_raw(value))
        if new != self._x:
            self._update(new)
        return self

    def interpret(self, text: str | None) -> bool:
        """Parse a leading number from ``text`` and assign it if found."""
        if text is None:
            return False
        if self._bits is not None:
            if self._hex:
                match = _HEX_RE.match(text)
                if match:
                    sign = -1 if match.group(1) == "-" else 1
                    self.assign(sign * int(match.group(2), 16))
            else:
                match = _DEC_RE.match(text)
                if match:
                    self.assign(int(match.group(1)))
        else:
            match = _FLOAT_RE.match(text)
            if match:
                self.assign(float(match.group(1)))
        return True

    def represent(self) -> str:
        """The value formatted as text."""
        if self._bits is not None:
            if self._hex:
                return format(self._x & ((1 << self._bits) - 1), "X")
            return str(self._x)
        return f"{self._x:6.2f}"

    def increment(self) -> ObservableNumber:
        """Add one."""
        return self.__iadd__(1)

    def decrement(self) -> ObservableNumber:
        """Subtract one."""
        return self.__isub__(1)

    def __iadd__(self, other: Any) -> ObservableNumber:
        x = _raw(other)
        if x != 0:
            self._update(self._coerce(self._x + x))
        return self

    def __isub__(self, other: Any) -> ObservableNumber:
        x = _raw(other)
        if x != 0:
            self._update(self._coerce(self._x - x))
        return self

    def __imul__(self, other: Any) -> ObservableNumber:
        x = _raw(other)
        if x != 1:
            self._update(self._coerce(self._x * x))
        return self

    def __itruediv__(self, other: Any) -> ObservableNumber:
        x = _raw(other)
        if x == 0:
            raise DivByZero("division by zero")
        if x != 1:
            self._update(self._divide(self._x, x))
        return self

    def _divide(self, a: Any, b: Any) -> Any:
        if self._bits is not None:
            return self._coerce(_trunc_div(int(a), int(b)))
        return self._coerce(a / b)

    def __add__(self, other: Any) -> Any:
        return self._coerce(self._x + _raw(other))

    def __sub__(self, other: Any) -> Any:
        return self._coerce(self._x - _raw(other))

    def __mul__(self, other: Any) -> Any:
        return self._coerce(self._x * _raw(other))

    def __truediv__(self, other: Any) -> Any:
        x = _raw(other)
        if x == 0:
            raise DivByZero("division by zero")
        return self._divide(self._x, x)

    def __eq__(self, other: object) -> bool:
        return self._x == _raw(other)

    def __lt__(self, other: Any) -> bool:
        return self._x < _raw(other)

    def __le__(self, other: Any) -> bool:
        return self._x <= _raw(other)

    def __gt__(self, other: Any) -> bool:
        return self._x > _raw(other)

    def __ge__(self, other: Any) -> bool:
        return self._x >= _raw(other)

    def __float__(self) -> float:
        return float(self._x)

    def __int__(self) -> int:
        return int(self._x)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._x!r})"


def _raw(value: Any) -> Any:
    return value._x if isinstance(value, ObservableNumber) else value


class Integer(ObservableNumber):
    """32-bit signed integer shown in decimal."""

    _bits = 32


class Short(ObservableNumber):
    """16-bit signed integer shown in decimal."""

    _bits = 16


class Long(ObservableNumber):
    """32-bit signed integer shown in decimal."""

    _bits = 32


class HexLong(ObservableNumber):
    """32-bit integer shown in upper-case hexadecimal."""

    _bits = 32
    _hex = True


class Double(ObservableNumber):
    """Double-precision number shown with two decimals."""


class Float(ObservableNumber):
    """Single-precision number shown with two decimals."""

    _single_precision = True


class Int64(ObservableNumber):
    """64-bit signed integer shown in decimal."""

    _bits = 64