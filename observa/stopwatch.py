"""A stopwatch whose text reading follows the elapsed time."""

from __future__ import annotations

import time
from typing import Any

from observa.callback import Observer
from observa.text import ObservableString
from observa.timer import Timer

_REFRESH_MS = 1000 // 10


def _now_ms() -> int:
    return time.monotonic_ns() // 1_000_000


class StopWatch(ObservableString):
    """Elapsed time shown as ``MMM:SS.mmm``, refreshed by a :class:`Timer`.

    Without a timer the stopwatch cannot be started.
    """

    _FORMAT = "%3d:%02d.%03d"

    def __init__(self, timer: Timer | None = None) -> None:
        super().__init__("00:00.000")
        self._timer = timer
        self._is_running = False
        self._diff = 0
        self._start_ts: int | None = None
        self._handle: int | None = None

    def on_timer(self, args: Any) -> int:
        """Timer tick: refresh the text, or ask to be unscheduled if stopped."""
        if not self._is_running:
            if args is not None:
                args[2] = True
            return 0
        self.render()
        return 0

    def render(self) -> None:
        """Refresh the text from the elapsed time."""
        dt = self._diff
        if self._is_running and self._start_ts is not None:
            dt += _now_ms() - self._start_ts
        self.render_string(dt)

    def render_string(self, dt: int) -> None:
        """Set the text to ``dt`` milliseconds as minutes, seconds and ms."""
        seconds, millis = divmod(dt, 1000)
        minutes, secs = divmod(seconds, 60)
        self.assign(self._FORMAT % (minutes, secs, millis))

    def reset(self) -> None:
        """Stop counting and return to zero."""
        self._is_running = False
        self._diff = 0
        self._start_ts = None
        self.render()

    def start(self) -> None:
        """Start counting; does nothing if running or without a timer."""
        if self._is_running or self._timer is None:
            return
        self._handle = self._timer.notify(_REFRESH_MS, Observer(self, StopWatch.on_timer))
        self._timer.start()
        self._is_running = True
        self._start_ts = _now_ms()
        self.render()

    def stop(self) -> None:
        """Stop counting, keeping the time accumulated so far."""
        if not self._is_running:
            return
        self._is_running = False
        if self._handle is not None and self._timer is not None:
            self._timer.unnotify(self._handle)
            self._handle = None
        if self._start_ts is not None:
            self._diff += _now_ms() - self._start_ts
        self._start_ts = None

    def is_running(self) -> bool:
        """Whether the stopwatch is counting."""
        return self._is_running