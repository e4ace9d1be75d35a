"""Clock readings and compact text forms of durations and dates."""

from __future__ import annotations

import threading
import time

_lock = threading.Lock()
_base_us = 0


def now() -> int:
    """Microseconds since the Unix epoch."""
    return time.time_ns() // 1000


def now_timet() -> int:
    """Whole seconds since the Unix epoch."""
    return time.time_ns() // 1_000_000_000


def time_get_time64() -> int:
    """Microseconds since the first clock reading of this process."""
    global _base_us
    t = now()
    with _lock:
        if _base_us == 0:
            _base_us = t
        base = _base_us
    return t - base


def time_get_time() -> int:
    """Milliseconds since the first clock reading, as an unsigned 32-bit value."""
    return (time_get_time64() // 1000) & 0xFFFFFFFF


def time2str_sec(t: int) -> str:
    """A duration in seconds as ``[Ny DDDd ]HH:MM:SS``."""
    t &= 0xFFFFFFFF
    t, sec = divmod(t, 60)
    t, mins = divmod(t, 60)
    t, hrs = divmod(t, 24)
    yrs, days = divmod(t, 365)
    if yrs:
        prefix = f"{yrs}y {days:03d}d "
    elif days:
        prefix = f"{days:03d}d "
    else:
        prefix = ""
    return f"{prefix}{hrs:02d}:{mins:02d}:{sec:02d}"


def time2str_msec(t: int) -> str:
    """A duration in milliseconds; the fraction is not zero-padded."""
    return f"{time2str_sec(t // 1000)}.{t % 1000}"


def time2str_usec(t: int) -> str:
    """A duration in microseconds; the fraction is not zero-padded."""
    return f"{time2str_sec(t // 1_000_000)}.{t % 1_000_000}"


def time2datestr(t: int, fmt: str | None = None) -> str:
    """Format a local date.

    With ``fmt`` the value is in seconds and is passed to ``strftime``;
    without it the value is in microseconds and the result reads like
    ``28Jul2024 00:08:19.656495``.
    """
    if fmt is not None:
        return time.strftime(fmt, time.localtime(t & 0xFFFFFFFF))
    seconds, micros = divmod(t, 1_000_000)
    return time2datestr(seconds, "%d%b%Y %H:%M:%S.") + str(micros)