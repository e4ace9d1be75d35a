"""Callback nodes that can be installed on an observable's callback list."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar, Sequence


class InvalidArguments(ValueError):
    """Raised when a callback is built without a target or a function."""


class Callback(ABC):
    """Base of every callback node; a node in a coma is not called."""

    n_invokes: ClassVar[int] = 0
    usage_meter: ClassVar[int] = 0

    def __init__(self) -> None:
        self._in_coma = False
        self.src_obj: Any = None
        Callback.usage_meter += 1

    @abstractmethod
    def invoke(self, args: Sequence[Any] | None = None) -> int:
        """Run the callback; a non-zero result stops further delivery."""

    def comatose(self) -> None:
        """Suspend the callback so that invoking it does nothing."""
        self._in_coma = True

    def revive(self) -> None:
        """Resume a suspended callback."""
        self._in_coma = False

    def in_coma(self) -> bool:
        """Whether the callback is suspended."""
        return self._in_coma

    def dest_obj(self) -> Any:
        """The object the callback delivers to, if any."""
        return None


def _require(value: Any) -> None:
    if value is None:
        raise InvalidArguments("callback target must not be None")


def _require_callable(func: Any) -> None:
    if func is None or not callable(func):
        raise InvalidArguments("callback function must be callable")


class Observer(Callback):
    """Calls ``func(obj, args)`` and passes its result back."""

    def __init__(self, obj: Any, func: Callable[[Any, Any], int | None]) -> None:
        super().__init__()
        _require_callable(func)
        _require(obj)
        self._obj = obj
        self._func = func

    def invoke(self, args: Sequence[Any] | None = None) -> int:
        if self._in_coma:
            return 0
        result = self._func(self._obj, args)
        return 0 if result is None else result

    def dest_obj(self) -> Any:
        return self._obj


class PokeObserver(Callback):
    """Calls ``func(obj)`` ignoring any arguments; always yields 0."""

    def __init__(self, obj: Any, func: Callable[[Any], Any]) -> None:
        super().__init__()
        _require_callable(func)
        _require(obj)
        self._obj = obj
        self._func = func

    def invoke(self, args: Sequence[Any] | None = None) -> int:
        if not self._in_coma:
            self._func(self._obj)
        return 0

    def dest_obj(self) -> Any:
        return self._obj


class MessageNode(Callback):
    """Calls ``func(src_obj, dest_obj, args)``; always yields 0."""

    def __init__(
        self, src_obj: Any, dest_obj: Any, func: Callable[[Any, Any, Any], Any]
    ) -> None:
        super().__init__()
        _require_callable(func)
        self.src_obj = src_obj
        self._dest_obj = dest_obj
        self._func = func

    def invoke(self, args: Sequence[Any] | None = None) -> int:
        if not self._in_coma:
            self._func(self.src_obj, self._dest_obj, args)
        return 0

    def dest_obj(self) -> Any:
        return self._dest_obj


class PokeNode(Callback):
    """Calls a plain ``func()`` ignoring any arguments; always yields 0."""

    def __init__(self, func: Callable[[], Any]) -> None:
        super().__init__()
        _require_callable(func)
        self._func = func

    def invoke(self, args: Sequence[Any] | None = None) -> int:
        if not self._in_coma:
            self._func()
        return 0