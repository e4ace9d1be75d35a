"""A threaded timer that fires callbacks after delays or at intervals."""

from __future__ import annotations

import bisect
import itertools
import logging
import threading
from enum import IntEnum
from typing import Any, ClassVar

from observa.callback import Callback, InvalidArguments
from observa.timeutil import time_get_time

MAX_TIMER_DELAY = 7 * 24 * 60 * 60 * 1000
MIN_TIMER_DELAY = 2
AVG_TIMER_WAIT = 100

_log = logging.getLogger(__name__)


class TriggerResult(IntEnum):
    """Outcome of :meth:`TimedEvent.trigger`."""

    OK = 0
    STOPPED = -1
    NOT_READY = -2
    ONESHOT_EXPIRED = -3
    EXCEPTION = -4


class TimedEvent:
    """A callback scheduled every ``delay_ms`` milliseconds.

    A ``next_tm`` of 0 means not yet scheduled: the first trigger sets
    the due time one interval ahead without firing. Intervals shorter
    than the timer's resolution are raised to it.
    """

    n_used: ClassVar[int] = 0

    def __init__(
        self,
        timer_id: int = 0,
        callback: Callback | None = None,
        delay_ms: int = 0,
        next_tm: int = 0,
        oneshot: bool = False,
    ) -> None:
        self.timer_id = timer_id
        self.callback = callback
        self.delay = delay_ms
        self.next_tm = next_tm
        self.oneshot = oneshot
        self._active = True
        TimedEvent.n_used += 1

    @property
    def active(self) -> bool:
        """Whether the event will still fire."""
        return self._active

    def _interval(self) -> int:
        return max(self.delay, MIN_TIMER_DELAY)

    def start(self) -> None:
        """Allow the event to fire."""
        self._active = True

    def stop(self) -> None:
        """Prevent the event from firing again."""
        self._active = False

    def trigger(self, args: Any, now: int, threshold: int = 1) -> TriggerResult:
        """Fire the callback with ``args`` if the event is due at ``now``."""
        if not self._active or self.callback is None:
            return TriggerResult.STOPPED
        if self.next_tm == 0:
            self.next_tm = now + self._interval()
            return TriggerResult.OK
        if self.next_tm - now > threshold:
            return TriggerResult.NOT_READY
        try:
            self.callback.invoke(args)
        except Exception:
            _log.exception("timer callback %d failed", self.timer_id)
            self._active = False
            return TriggerResult.EXCEPTION
        if self.oneshot:
            self._active = False
            return TriggerResult.ONESHOT_EXPIRED
        self.next_tm += self._interval()
        if self.next_tm <= now:
            self.next_tm = now + self._interval()
        return TriggerResult.OK

    def __lt__(self, other: TimedEvent) -> bool:
        return self.next_tm < other.next_tm

    def __repr__(self) -> str:
        return (
            f"TimedEvent(id={self.timer_id}, delay={self.delay}, "
            f"next_tm={self.next_tm}, oneshot={self.oneshot})"
        )


class Timer:
    """Runs scheduled callbacks on a background thread.

    Callbacks receive ``[now, timer_id, stop_requested]``; setting the
    third item to True unschedules the event after that call.
    """

    n_tripped: ClassVar[int] = 0
    n_used: ClassVar[int] = 0
    _ids: ClassVar[itertools.count] = itertools.count(100)

    def __init__(self) -> None:
        self._gate = threading.RLock()
        self._events: list[TimedEvent] = []
        self._done = False
        self._delay = 0
        self._drift = 0
        self._dead: list[int] = []
        self._dead_lock = threading.Lock()
        self._thread: threading.Thread | None = None
        self._wake = threading.Event()
        Timer.n_used += 1

    def __enter__(self) -> Timer:
        self.start()
        return self

    def __exit__(self, *args: Any) -> None:
        self.stop()
        self.clear()

    def clear(self) -> None:
        """Drop every scheduled event."""
        with self._gate:
            self._events.clear()

    def report(self) -> str:
        """A readable summary of the timer and its events."""
        with self._gate:
            running = self._thread is not None and self._thread.is_alive()
            lines = [
                f"[timer.report] nEvents({len(self._events)}) delay({self._delay}) "
                f"drift({self._drift}) active:{'T' if running else 'F'} "
                f"done({'T' if self._done else 'F'}) nTripped({Timer.n_tripped})"
            ]
            lines.extend(
                f"[timer.report] cb({evt.callback!r}) delay({evt.delay}) "
                f"one-shot({'T' if evt.oneshot else 'F'}) id({evt.timer_id})"
                for evt in self._events
            )
        return "\n".join(lines)

    def n_watchers(self) -> int:
        """Number of scheduled events."""
        return len(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def start(self) -> None:
        """Start the background thread if it is not running."""
        self._done = False
        self._wake.clear()
        if self._thread is None or not self._thread.is_alive():
            self._thread = threading.Thread(
                target=self._run, name="observa-timer", daemon=True
            )
            self._thread.start()

    def stop(self) -> None:
        """Stop the background thread and wait for it to finish."""
        self._done = True
        self._wake.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()
        self._thread = None

    def _run(self) -> None:
        self._delay = 0
        while not self._done:
            self._delay = self.action(time_get_time())
            if not self._done:
                dt = min(1000, int((self._delay * 1000 + self._drift) / 1000))
                self._wake.wait(max(1, dt) / 1000)

    def _remove_the_dead(self) -> bool:
        with self._dead_lock:
            if not self._dead:
                return False
            dead, self._dead = self._dead, []
        for timer_id in dead:
            index = next(
                (i for i, evt in enumerate(self._events) if evt.timer_id == timer_id),
                None,
            )
            if index is not None:
                del self._events[index]
        return True

    def action(self, now: int) -> int:
        """Fire every due event; return how many ms to wait before the next call."""
        Timer.n_tripped += 1
        if not self._events:
            return AVG_TIMER_WAIT
        with self._gate:
            if self._events:
                first = self._events[0].next_tm
                if abs(now - first) < 10:
                    self._drift = int(1000 * (first - now) / 2) - 400
            while self._events and not self._done:
                if self._remove_the_dead():
                    continue
                evt = self._events[0]
                now = time_get_time()
                if evt.next_tm > 0 and evt.next_tm - now > MIN_TIMER_DELAY:
                    return max(MIN_TIMER_DELAY, min(evt.next_tm - now, AVG_TIMER_WAIT))
                self._events.pop(0)
                args = [now, evt.timer_id, False]
                result = evt.trigger(args, now)
                if args[2]:
                    continue
                if result is TriggerResult.OK:
                    bisect.insort(self._events, evt)
                elif result is TriggerResult.NOT_READY:
                    bisect.insort(self._events, evt)
                    wait = self._events[0].next_tm - now
                    return max(MIN_TIMER_DELAY, min(wait, AVG_TIMER_WAIT))
        return AVG_TIMER_WAIT

    def notify(
        self, delay_ms: int, callback: Callback, oneshot: bool = False
    ) -> int:
        """Schedule ``callback`` every ``delay_ms`` ms and return its id."""
        if callback is None:
            raise InvalidArguments("timer callback must not be None")
        if delay_ms < 0 or delay_ms > MAX_TIMER_DELAY:
            raise ValueError(f"timer delay {delay_ms} ms is out of range")
        with self._gate:
            timer_id = next(Timer._ids)
            bisect.insort(
                self._events, TimedEvent(timer_id, callback, delay_ms, 0, oneshot)
            )
        return timer_id

    def unnotify(self, timer_id: int) -> None:
        """Unschedule the event ``timer_id``; it goes at the next action."""
        if timer_id < 0:
            raise ValueError(f"invalid timer id {timer_id}")
        with self._dead_lock:
            self._dead.append(timer_id)

    def unnotify_dest(self, dest: Any) -> None:
        """Stop every event whose callback delivers to ``dest``."""
        with self._gate:
            for evt in self._events:
                if evt.callback is not None and evt.callback.dest_obj() is dest:
                    evt.stop()