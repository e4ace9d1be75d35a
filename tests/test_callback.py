import pytest

from observa.callback import (
    Callback,
    InvalidArguments,
    MessageNode,
    Observer,
    PokeNode,
    PokeObserver,
)


class Target:
    def __init__(self):
        self.seen = []

    def on_data(self, args):
        self.seen.append(args)
        return len(self.seen)

    def poke(self):
        self.seen.append("poke")


def test_callback_is_abstract():
    with pytest.raises(TypeError):
        Callback()


def test_observer_passes_args_and_result():
    t = Target()
    cb = Observer(t, Target.on_data)
    assert cb.invoke(["a"]) == 1
    assert cb.invoke() == 2
    assert t.seen == [["a"], None]
    assert cb.dest_obj() is t


def test_observer_none_result_is_zero():
    cb = Observer(Target(), lambda obj, args: None)
    assert cb.invoke() == 0


def test_observer_coma_and_revive():
    t = Target()
    cb = Observer(t, Target.on_data)
    cb.comatose()
    assert cb.in_coma()
    assert cb.invoke([1]) == 0
    assert t.seen == []
    cb.revive()
    assert not cb.in_coma()
    assert cb.invoke([1]) == 1


def test_observer_rejects_missing_parts():
    with pytest.raises(InvalidArguments):
        Observer(None, Target.on_data)
    with pytest.raises(InvalidArguments):
        Observer(Target(), None)


def test_poke_observer_ignores_args():
    t = Target()
    cb = PokeObserver(t, Target.poke)
    assert cb.invoke(["ignored"]) == 0
    assert t.seen == ["poke"]
    assert cb.dest_obj() is t
    cb.comatose()
    cb.invoke()
    assert t.seen == ["poke"]


def test_poke_observer_rejects_none():
    with pytest.raises(InvalidArguments):
        PokeObserver(None, Target.poke)


def test_message_node_delivers_triple():
    calls = []
    src, dest = object(), object()
    node = MessageNode(src, dest, lambda s, d, a: calls.append((s, d, a)))
    assert node.invoke(("x",)) == 0
    assert calls == [(src, dest, ("x",))]
    assert node.dest_obj() is dest
    assert node.src_obj is src


def test_message_node_requires_function():
    with pytest.raises(InvalidArguments):
        MessageNode(None, None, None)


def test_poke_node():
    calls = []
    node = PokeNode(lambda: calls.append(1))
    assert node.invoke() == 0
    assert node.dest_obj() is None
    node.comatose()
    node.invoke()
    assert calls == [1]
    with pytest.raises(InvalidArguments):
        PokeNode(None)


def test_usage_meter_counts_creations():
    before = Callback.usage_meter
    calls = []
    first = PokeNode(lambda: calls.append("first"))
    second = PokeNode(lambda: calls.append("second"))
    assert Callback.usage_meter == before + 2
    assert first.invoke() == 0
    assert second.invoke() == 0
    assert calls == ["first", "second"]