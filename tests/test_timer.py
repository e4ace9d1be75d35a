import threading
import time

import pytest

from observa.callback import InvalidArguments, Observer, PokeNode
from observa.timer import (
    AVG_TIMER_WAIT,
    MAX_TIMER_DELAY,
    MIN_TIMER_DELAY,
    TimedEvent,
    Timer,
    TriggerResult,
)
from observa.timeutil import time_get_time


class Recorder:
    def __init__(self, stop=False, fail=False):
        self.calls = []
        self.stop = stop
        self.fail = fail

    def record(self, args):
        self.calls.append(list(args) if args is not None else None)
        if self.fail:
            raise RuntimeError("boom")
        if self.stop:
            args[2] = True
        return 0


def _observer(rec):
    return Observer(rec, Recorder.record)


def test_first_trigger_schedules_without_firing():
    rec = Recorder()
    delay = 50
    ev = TimedEvent(7, _observer(rec), delay)
    assert ev.trigger([1000, 7, False], 1000) is TriggerResult.OK
    assert rec.calls == []
    assert ev.next_tm - 1000 == delay


def test_not_ready_then_fires():
    rec = Recorder()
    delay = 50
    ev = TimedEvent(7, _observer(rec), delay)
    ev.trigger([1000, 7, False], 1000)
    assert ev.trigger([1020, 7, False], 1020) is TriggerResult.NOT_READY
    assert rec.calls == []
    due = ev.next_tm
    assert ev.trigger([due, 7, False], due) is TriggerResult.OK
    assert rec.calls == [[due, 7, False]]
    assert ev.next_tm - due == delay


def test_threshold_allows_early_fire():
    rec = Recorder()
    ev = TimedEvent(1, _observer(rec), 50, next_tm=1050)
    assert ev.trigger([1047, 1, False], 1047) is TriggerResult.NOT_READY
    assert ev.trigger([1047, 1, False], 1047, threshold=5) is TriggerResult.OK
    assert len(rec.calls) == 1


def test_late_fire_reschedules_from_now():
    rec = Recorder()
    delay = 50
    ev = TimedEvent(1, _observer(rec), delay, next_tm=1050)
    assert ev.trigger([1300, 1, False], 1300) is TriggerResult.OK
    assert ev.next_tm - 1300 == delay


def test_short_delay_is_raised_to_minimum():
    ev = TimedEvent(1, PokeNode(lambda: None), 0)
    ev.trigger(None, 10)
    assert ev.next_tm - 10 == MIN_TIMER_DELAY


def test_oneshot_expires_after_firing():
    rec = Recorder()
    ev = TimedEvent(1, _observer(rec), 10, next_tm=100, oneshot=True)
    assert ev.trigger([100, 1, False], 100) is TriggerResult.ONESHOT_EXPIRED
    assert len(rec.calls) == 1
    assert ev.trigger([200, 1, False], 200) is TriggerResult.STOPPED


def test_stopped_event_does_not_fire():
    rec = Recorder()
    ev = TimedEvent(1, _observer(rec), 10, next_tm=100)
    ev.stop()
    assert ev.trigger([100, 1, False], 100) is TriggerResult.STOPPED
    ev.start()
    assert ev.trigger([100, 1, False], 100) is TriggerResult.OK
    assert len(rec.calls) == 1


def test_missing_callback_is_stopped():
    assert TimedEvent(1, None, 10).trigger(None, 0) is TriggerResult.STOPPED


def test_failing_callback_reports_exception():
    rec = Recorder(fail=True)
    ev = TimedEvent(1, _observer(rec), 10, next_tm=100)
    assert ev.trigger([100, 1, False], 100) is TriggerResult.EXCEPTION
    assert ev.active is False


def test_events_order_by_due_time():
    early = TimedEvent(1, None, 10, next_tm=5)
    late = TimedEvent(2, None, 10, next_tm=50)
    assert early < late
    assert not late < early
    assert sorted([late, early]) == [early, late]


def test_notify_returns_distinct_increasing_ids():
    timer = Timer()
    first = timer.notify(10, PokeNode(lambda: None))
    second = timer.notify(10, PokeNode(lambda: None))
    assert second > first
    assert len(timer) == 2
    assert timer.n_watchers() == 2


def test_notify_rejects_bad_arguments():
    timer = Timer()
    with pytest.raises(InvalidArguments):
        timer.notify(10, None)
    with pytest.raises(ValueError):
        timer.notify(MAX_TIMER_DELAY + 1, PokeNode(lambda: None))
    assert len(timer) == 0


def test_action_on_empty_timer_returns_default_wait():
    assert Timer().action(time_get_time()) == AVG_TIMER_WAIT


def test_action_fires_after_delay():
    rec = Recorder()
    timer = Timer()
    timer.notify(5, _observer(rec))
    timer.action(time_get_time())
    assert rec.calls == []
    time.sleep(0.03)
    timer.action(time_get_time())
    assert len(rec.calls) == 1
    assert len(timer) == 1


def test_action_wait_is_within_bounds():
    timer = Timer()
    timer.notify(50, PokeNode(lambda: None))
    wait = timer.action(time_get_time())
    assert MIN_TIMER_DELAY <= wait <= AVG_TIMER_WAIT


def test_oneshot_removed_after_firing():
    rec = Recorder()
    timer = Timer()
    timer.notify(5, _observer(rec), oneshot=True)
    timer.action(time_get_time())
    time.sleep(0.03)
    timer.action(time_get_time())
    assert len(rec.calls) == 1
    assert len(timer) == 0


def test_stop_request_unschedules():
    rec = Recorder(stop=True)
    timer = Timer()
    timer.notify(5, _observer(rec))
    timer.action(time_get_time())
    time.sleep(0.03)
    timer.action(time_get_time())
    assert len(rec.calls) == 1
    assert len(timer) == 0


def test_unnotify_takes_effect_on_next_action():
    timer = Timer()
    keep = timer.notify(10, PokeNode(lambda: None))
    gone = timer.notify(10, PokeNode(lambda: None))
    timer.unnotify(gone)
    assert len(timer) == 2
    timer.action(time_get_time())
    assert len(timer) == 1
    assert keep != gone


def test_unnotify_rejects_negative_id():
    with pytest.raises(ValueError):
        Timer().unnotify(-1)


def test_unnotify_dest_stops_matching_events():
    target = Recorder()
    other = Recorder()
    timer = Timer()
    timer.notify(10, _observer(target))
    timer.notify(10, _observer(other))
    timer.unnotify_dest(target)
    timer.action(time_get_time())
    assert len(timer) == 1


def test_clear_and_report():
    timer = Timer()
    timer.notify(10, PokeNode(lambda: None))
    timer.notify(20, PokeNode(lambda: None), oneshot=True)
    lines = timer.report().splitlines()
    assert len(lines) == 1 + len(timer)
    assert "one-shot(T)" in lines[-1] or "one-shot(T)" in lines[-2]
    timer.clear()
    assert len(timer) == 0


def test_background_thread_fires_callbacks():
    fired = threading.Event()
    timer = Timer()
    timer.notify(10, PokeNode(fired.set))
    timer.start()
    try:
        assert fired.wait(2) is True
    finally:
        timer.stop()
    assert Timer.n_tripped > 0