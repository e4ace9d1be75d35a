import pytest

from observa.callback import Observer
from observa.numeric import (
    Double,
    DivByZero,
    Float,
    HexLong,
    Int64,
    Integer,
    Long,
    Short,
)


class Watcher:
    def __init__(self):
        self.events = []

    def on_change(self, args):
        self.events.append(args)
        return 0


def watched(number):
    w = Watcher()
    number.value_cb.install(Observer(w, Watcher.on_change))
    return w


def test_assign_notifies_new_old_and_self():
    n = Integer(3)
    w = watched(n)
    n.assign(10)
    assert n.value() == 10
    assert w.events == [(10, 3, n)]


def test_assign_same_value_is_silent():
    n = Long(4)
    w = watched(n)
    n.assign(4)
    assert w.events == []


def test_is_watched():
    n = Double(1.0)
    assert not n.is_watched()
    watched(n)
    assert n.is_watched()


def test_add_zero_and_multiply_one_are_silent():
    n = Integer(5)
    w = watched(n)
    n += 0
    n *= 1
    n /= 1
    assert w.events == []
    assert n == 5


def test_inplace_ops_notify_with_new_value():
    n = Integer(6)
    w = watched(n)
    n += 4
    n -= 2
    n *= 3
    assert [e[0] for e in w.events] == [10, 8, 24]
    assert [e[1] for e in w.events] == [6, 10, 8]
    assert n.value() == 24


def test_increment_decrement_round_trip():
    n = Short(7)
    n.increment()
    n.decrement()
    assert n == 7


def test_divide_by_zero_raises():
    n = Integer(8)
    with pytest.raises(DivByZero):
        n /= 0
    with pytest.raises(DivByZero):
        n / 0
    with pytest.raises(ZeroDivisionError):
        Double(1.0) / Double(0.0)


def test_integer_division_truncates_toward_zero():
    assert Integer(-7) / 2 == -3
    n = Integer(7)
    n /= 2
    assert n.value() == 3


def test_double_division_is_exact():
    assert Double(1.0) / 4 == 0.25


def test_short_wraps_at_16_bits():
    n = Short(32767)
    n += 1
    assert n.value() == -32768


def test_int64_holds_large_values():
    n = Int64(2**40)
    assert n * 2 == 2**41


def test_pass_through_ops_with_numbers_and_objects():
    a, b = Integer(10), Integer(4)
    assert a + b == 14
    assert a - b == 6
    assert a * b == 40
    assert a.value() == 10


def test_comparisons():
    a, b = Double(1.5), Double(2.5)
    assert a < b and a <= b and b > a and b >= a
    assert a == 1.5
    assert a != b


def test_represent_formats():
    assert Double(3.14159).represent() == "  3.14"
    assert HexLong(255).represent() == "FF"
    assert HexLong(-1).represent() == "FFFFFFFF"
    assert Integer(-12).represent() == "-12"


def test_interpret_round_trip():
    for cls, value in ((Integer, 123), (HexLong, 0xABC), (Short, -5)):
        src = cls(value)
        dst = cls()
        assert dst.interpret(src.represent())
        assert dst == src


def test_interpret_float():
    n = Double()
    assert n.interpret(" 2.5 units")
    assert n.value() == 2.5


def test_interpret_garbage_leaves_value():
    n = Integer(9)
    assert n.interpret("abc") is True
    assert n.value() == 9


def test_interpret_none_is_false():
    assert Integer().interpret(None) is False


def test_float_is_single_precision():
    n = Float(0.1)
    assert n.value() != 0.1
    assert abs(n.value() - 0.1) < 1e-7


def test_conversions():
    n = Double(2.75)
    assert int(n) == 2
    assert float(Integer(3)) == 3.0