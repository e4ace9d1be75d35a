"""Ordered lists of callbacks that an observable object notifies."""

from __future__ import annotations

from typing import Any, Callable, Sequence

from observa.callback import (
    Callback,
    InvalidArguments,
    MessageNode,
    PokeNode,
)


class MessageCallbacks:
    """Callbacks called in install order until one returns non-zero.

    While blocked, invocations are remembered and a single delivery
    happens when the last block is lifted.
    """

    def __init__(self, src_obj: Any = None) -> None:
        self.src_obj = src_obj
        self._callbacks: list[Callback] = []
        self._block = 0
        self._need_to_invoke = False

    def n_watchers(self) -> int:
        """Number of installed callbacks."""
        return len(self._callbacks)

    def enabled(self) -> bool:
        """Whether invocations are delivered immediately."""
        return self._block == 0

    def block(self) -> None:
        """Hold back deliveries until a matching :meth:`unblock`."""
        self._block += 1
        self._need_to_invoke = False

    def unblock(self, args: Sequence[Any] | None = None) -> int:
        """Lift one block; deliver once if something was held back."""
        if self.enabled():
            return 0
        self._block -= 1
        if self._need_to_invoke and self._block == 0:
            return self.invoke(args)
        return 0

    def get(self, dest_obj: Any) -> Callback | None:
        """First callback delivering to ``dest_obj``, or None."""
        return next(
            (cb for cb in self._callbacks if cb.dest_obj() is dest_obj), None
        )

    def install(self, callback: Callback) -> Callback:
        """Append ``callback``, stamping it with this list's source object."""
        if callback is None:
            raise InvalidArguments("callback must not be None")
        callback.src_obj = self.src_obj
        self._callbacks.append(callback)
        return callback

    def install_function(
        self, dest_obj: Any, func: Callable[[Any, Any, Any], Any]
    ) -> Callback:
        """Install ``func(src_obj, dest_obj, args)`` as a callback."""
        node = MessageNode(self.src_obj, dest_obj, func)
        self._callbacks.append(node)
        return node

    def invoke(self, args: Sequence[Any] | None = None) -> int:
        """Deliver ``args`` to each callback; return the stopping result."""
        if not self._callbacks:
            return 0
        if self._block:
            self._need_to_invoke = True
            return 0
        rc = 0
        for cb in list(self._callbacks):
            Callback.n_invokes += 1
            rc = cb.invoke(args)
            if rc != 0:
                break
        self._need_to_invoke = False
        return rc

    def remove(self, dest_obj: Any) -> Callback | None:
        """Detach and return the first callback delivering to ``dest_obj``."""
        for index, cb in enumerate(self._callbacks):
            if cb.dest_obj() is dest_obj:
                return self._callbacks.pop(index)
        return None

    def remove_pair(self, src_obj: Any, dest_obj: Any) -> Callback | None:
        """Detach the first callback matching both source and destination."""
        for index, cb in enumerate(self._callbacks):
            if cb.dest_obj() is dest_obj and cb.src_obj is src_obj:
                return self._callbacks.pop(index)
        return None

    def trigger(self, target: Any) -> Callback:
        """Install a callback built from ``target``.

        ``target`` may be a :class:`Callback`, another
        :class:`MessageCallbacks` (whose delivery is chained), or a
        plain function taking no arguments.
        """
        if target is None:
            raise InvalidArguments("trigger target must not be None")
        if isinstance(target, Callback):
            return self.install(target)
        if isinstance(target, MessageCallbacks):
            return self.install(TriggerNode(target))
        node = PokeNode(target)
        self._callbacks.append(node)
        return node

    def clear(self) -> None:
        """Remove every callback."""
        self._callbacks.clear()

    def copy(self) -> MessageCallbacks:
        """A new list holding the same callbacks and block state."""
        other = MessageCallbacks(self.src_obj)
        other._callbacks = list(self._callbacks)
        other._block = self._block
        other._need_to_invoke = self._need_to_invoke
        return other

    def __len__(self) -> int:
        return len(self._callbacks)

    def __iter__(self):
        return iter(list(self._callbacks))


class TriggerNode(Callback):
    """Forwards an invocation to another :class:`MessageCallbacks`."""

    def __init__(self, target: MessageCallbacks) -> None:
        super().__init__()
        if target is None:
            raise InvalidArguments("trigger target must not be None")
        self._target = target

    def invoke(self, args: Sequence[Any] | None = None) -> int:
        return self._target.invoke(args)