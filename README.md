# observa

A library of observable objects. These are values that notify callbacks
when they change. The library also includes tools built on top of them:
running statistics, a threaded timer, a stopwatch and a small INI file
database.

## Modules

- `observa.callback`: callback nodes.
  - `Observer` calls `func(obj, args)` and passes its result back.
  - `PokeObserver` calls `func(obj)`.
  - `MessageNode` calls `func(src_obj, dest_obj, args)`.
  - `PokeNode` calls `func()`.
  - A node in a coma (`comatose()`) does nothing until `revive()`.
  - Building a node without a callable, or `Observer`/`PokeObserver` without
    a target, raises `InvalidArguments`.
- `observa.msgcb`: `MessageCallbacks`, an ordered list of callbacks.
  - `invoke(args)` calls each callback in install order and stops at the
    first non-zero result.
  - `block()` holds deliveries back. The matching `unblock(args)` delivers
    once if anything was held back.
  - Callbacks can be looked up and removed by destination object with
    `get`, `remove` and `remove_pair`.
  - `trigger()` accepts a `Callback`, a plain function, or another
    `MessageCallbacks`. In the last case it installs a `TriggerNode` that
    chains delivery to that list.
- `observa.parameter`: `Parameter`, a typed value.
  - The kind comes from `ParamType`. Integers are wrapped to 16 or 32 bits
    and `FLOAT` is held at single precision.
  - `int()` and `float()` raise `TypeError` for non-numeric kinds.
- `observa.numeric`: observable numbers `Integer`, `Short`, `Long`,
  `HexLong`, `Double`, `Float` and `Int64`.
  - Watchers on `value_cb` receive `(new_value, old_value, number)`.
  - `assign`, `+=`, `-=`, `*=`, `/=`, `increment` and `decrement` notify
    watchers.
  - Integer division truncates toward zero. Dividing by zero raises
    `DivByZero`.
  - `interpret(text)` parses a leading number. `represent()` formats the
    value: decimal, upper-case hex for `HexLong`, `%6.2f` for
    floating-point kinds.
- `observa.text`: `ObservableString` and case-insensitive comparison.
  - The string may be null and notifies watchers on change.
  - It has `chop`, `insert`, `shift`, `sprint` and `represent`.
  - Equality ignores case; ordering does not.
  - `stricmp` and `strnicmp` compare like `strcmp`, ignoring case.
- `observa.stats`: `NumberSeries` and three statistics, `Mean`, `Variance`
  (sample) and `StdDev` (sample).
  - Each statistic is a `Double` that stays up to date as the series has
    elements appended or removed, or as an element's value changes.
  - `detach()` stops following the series.
- `observa.timer`: `Timer`, which runs `TimedEvent`s on a background thread.
  - Events are repeating, or one-shot when `oneshot=True`.
  - Callbacks receive `[now, timer_id, stop_requested]`. Setting the third
    item to `True` unschedules the event.
  - `unnotify(timer_id)` removes an event at the next pass.
  - `unnotify_dest(dest)` stops every event delivering to `dest`.
  - `report()` returns a text summary.
  - `Timer` is a context manager that starts on entry, and stops and clears
    on exit.
- `observa.stopwatch`: `StopWatch`, an `ObservableString`.
  - It shows elapsed time as minutes, seconds and milliseconds
    (`"%3d:%02d.%03d"`, starting at `00:00.000`).
  - A `Timer` refreshes the text about ten times a second.
  - It cannot be started without a timer.
- `observa.locks`: `Semaphore` and `MutexGate`.
  - `Semaphore.wait(timeout_ms)` returns `False` on timeout.
  - `MutexGate` is a re-entrant mutex and is usable with `with`.
- `observa.timeutil`: clock readings and duration text.
  - `now`, `now_timet`, `time_get_time` and `time_get_time64` read the
    clock.
  - `time2str_sec`, `time2str_msec` and `time2str_usec` give text like
    `54y 222d 00:08:19.656`.
  - `time2datestr` formats a local date.
- `observa.ini`: `IniFileDB`, `IniSection` and `IniField`.
  - They read, edit and write INI files.
  - Section and field names are matched ignoring case.
  - `get` stores and returns the default when a field is missing.
- `observa.keys`: keyboard key codes as the `Key` enum, and
  `is_extended(code)`.

## Install

```
pip install .
```

## Examples

```python
from observa.numeric import Integer

n = Integer(1)
n.value_cb.install_function(None, lambda src, dest, args: print(args[0], args[1]))
n.assign(5)  # prints: 5 1
```

```python
from observa.stats import NumberSeries, Mean, StdDev

series = NumberSeries([1.0, 2.0, 3.0])
mean = Mean(series)
spread = StdDev(series)

series.append(5.0)
series[0].assign(4.0)
print(float(mean), float(spread))
```

```python
import time
from observa.callback import PokeNode
from observa.timer import Timer

with Timer() as timer:
    timer.notify(100, PokeNode(lambda: print("tick")))
    time.sleep(0.5)
```

```python
from observa.ini import IniFileDB

db = IniFileDB()
db.set("server", "port", "8080")
print(db.get("server", "host", "localhost"))  # also stores the default
db.save_as("settings.ini")
```

## What it does not do

This is a library only; it has no command-line program. Callbacks are
plain Python callables. There are no observers tied to a windowing system's
messages or painting.

## Tests

```
pip install .[test]
pytest
```