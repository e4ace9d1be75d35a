"""A counting semaphore with millisecond timeouts and a recursive mutex gate."""

from __future__ import annotations

import threading
from typing import Any, ClassVar


class Semaphore:
    """Counting semaphore: :meth:`post` releases one :meth:`wait`."""

    def __init__(self, count: int = 0) -> None:
        if count < 0:
            raise ValueError("semaphore count must not be negative")
        self._count = count
        self._cond = threading.Condition()

    def count(self) -> int:
        """The number of pending posts."""
        return self._count

    def clear(self) -> None:
        """Forget every pending post."""
        with self._cond:
            self._count = 0

    def post(self) -> None:
        """Add one to the count and wake a single waiter."""
        with self._cond:
            self._count += 1
            self._cond.notify()

    def wait(self, timeout_ms: int | None = None) -> bool:
        """Take one post, waiting at most ``timeout_ms`` milliseconds.

        Without a timeout this blocks until a post arrives. Returns
        False if the timeout ran out first.
        """
        timeout = None if timeout_ms is None else max(timeout_ms, 0) / 1000
        with self._cond:
            if not self._cond.wait_for(lambda: self._count > 0, timeout):
                return False
            self._count -= 1
            return True


class MutexGate:
    """A recursive mutex usable as a context manager.

    The owning thread may enter again; it must exit as many times.
    """

    n_used: ClassVar[int] = 0

    def __init__(self) -> None:
        self._lock = threading.RLock()
        MutexGate.n_used += 1

    def enter(self) -> None:
        """Acquire the gate, blocking while another thread holds it."""
        self._lock.acquire()

    def exit(self) -> None:
        """Release one level of ownership.

        Raises RuntimeError when the calling thread does not hold the gate.
        """
        self._lock.release()

    def __enter__(self) -> MutexGate:
        self.enter()
        return self

    def __exit__(self, *args: Any) -> None:
        self.exit()