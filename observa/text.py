"""Observable strings and case-insensitive string comparison."""

from __future__ import annotations

from typing import Any

from observa.msgcb import MessageCallbacks


def _compare_lowered(a: str, b: str) -> int:
    for ca, cb in zip(a, b):
        if ca != cb:
            return ord(ca) - ord(cb)
    if len(a) == len(b):
        return 0
    if len(a) > len(b):
        return ord(a[len(b)])
    return -ord(b[len(a)])


def stricmp(s1: str, s2: str) -> int:
    """Compare ignoring case: negative, zero or positive like ``strcmp``."""
    return _compare_lowered(s1.lower(), s2.lower())


def strnicmp(s1: str, s2: str, n: int) -> int:
    """Compare at most ``n`` characters ignoring case."""
    if n <= 0:
        return 0
    return _compare_lowered(s1[:n].lower(), s2[:n].lower())


def _hex_text(n: int) -> str:
    if -(1 << 31) <= n < (1 << 32):
        return format(n & 0xFFFFFFFF, "x")
    return format(n & 0xFFFFFFFFFFFFFFFF, "x")


class ObservableString:
    """A string that may be null and that notifies watchers on change.

    Watchers on ``value_cb`` receive ``(text, text, string)``.
    Equality ignores case; ordering does not.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, value: Any = None, use_hex: bool = False) -> None:
        self.value_cb = MessageCallbacks(self)
        self.use_hex = use_hex
        self._str: str | None = None
        self._set(self._convert(value))

    def _convert(self, value: Any) -> str | None:
        if value is None:
            return None
        if isinstance(value, ObservableString):
            return value._str
        if isinstance(value, bool):
            return "T" if value else "F"
        if isinstance(value, int):
            return _hex_text(value) if self.use_hex else str(value)
        if isinstance(value, float):
            return f"{value:5.4f}"
        if isinstance(value, str):
            return value
        raise TypeError(f"cannot assign {type(value).__name__} to a string")

    def _set(self, text: str | None) -> None:
        self._str = text
        self._trigger()

    def _trigger(self) -> None:
        if self.value_cb.n_watchers() > 0:
            self.value_cb.invoke((self._str, self._str, self))

    @property
    def text(self) -> str | None:
        """The held text, or None when the string is null."""
        return self._str

    def assign(self, value: Any) -> ObservableString:
        """Replace the contents; numbers and booleans are formatted."""
        if value is self:
            return self
        self._set(self._convert(value))
        return self

    def chop(self, p1: int = -1, p2: int = -1) -> None:
        """Cut characters out.

        ``(-1, -1)`` drops the last character, ``(n, -1)`` keeps the
        first ``n``, ``(-1, n)`` drops the first ``n`` and ``(a, b)``
        removes the characters from ``a`` up to ``b``.
        """
        if not self._str:
            return
        size = len(self._str)
        if p1 < -1 or p2 < -1 or p1 > size or p2 > size:
            return
        s = self._str
        if p1 == -1 and p2 == -1:
            s = s[:-1]
        elif p2 == -1:
            s = s[:p1]
        elif p1 == -1:
            s = s[p2:]
        else:
            s = s[:p1] + s[p2:]
        self._set(s)

    def insert(self, pos: int, text: str) -> None:
        """Insert ``text`` before ``pos``; 0 prepends and -1 appends."""
        current = self._str or ""
        if pos < -1 or pos > len(current) or not text:
            return
        if pos == -1:
            s = current + text
        else:
            s = current[:pos] + text + current[pos:]
        self._set(s)

    def interpret(self, text: str | None) -> bool:
        """Take ``text`` as the new contents; False if there is none."""
        if text is None:
            return False
        self.assign(text)
        return True

    def represent(self, max_len: int) -> str:
        """The contents cut to fit a buffer of ``max_len`` characters."""
        if self._str is None:
            return ""
        return self._str[: max(max_len - 1, 0)]

    def shift(self, count: int) -> None:
        """Drop ``count`` characters from the front."""
        if count < 0:
            raise ValueError("shift count must not be negative")
        current = self._str or ""
        if count > len(current):
            self._str = ""
            return
        self._set(current[count:])

    def sprint(self, fmt: str, *args: Any) -> str:
        """Replace the contents with printf-style formatted text."""
        self._set(fmt % args if args else fmt)
        return self._str or ""

    def empty(self) -> None:
        """Make the string null without notifying watchers."""
        self._str = None

    def is_empty(self) -> bool:
        """Whether the string is null or has no characters."""
        return not self._str

    def is_null(self) -> bool:
        """Whether the string is null."""
        return self._str is None

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ObservableString):
            other_text = other._str
        elif other is None or isinstance(other, str):
            other_text = other
        else:
            return NotImplemented
        if other_text is None or self._str is None:
            return other_text is self._str
        return stricmp(other_text, self._str) == 0

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __lt__(self, other: Any) -> bool:
        other_text = other._str if isinstance(other, ObservableString) else other
        if not other_text:
            return not self.is_empty()
        if self.is_empty():
            return True
        return self._str < other_text

    def __add__(self, other: Any) -> ObservableString:
        result = ObservableString(self._str, self.use_hex)
        result += other
        return result

    def __iadd__(self, other: Any) -> ObservableString:
        text = other._str if isinstance(other, ObservableString) else other
        if not text:
            return self
        if not isinstance(text, str):
            raise TypeError(f"cannot append {type(text).__name__} to a string")
        self._set((self._str or "") + text)
        return self

    def __lshift__(self, other: Any) -> ObservableString:
        return self.__iadd__(other)

    def __getitem__(self, index: Any) -> str:
        if self._str is None:
            raise IndexError("string is null")
        return self._str[index]

    def __len__(self) -> int:
        return len(self._str) if self._str is not None else 0

    def __str__(self) -> str:
        return self._str or ""

    def __repr__(self) -> str:
        return f"ObservableString({self._str!r})"