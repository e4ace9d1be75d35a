import pytest

from observa.callback import Observer
from observa.text import ObservableString, stricmp, strnicmp


def _watch(s):
    seen = []

    def record(log, args):
        log.append(args[0])
        return 0

    s.value_cb.install(Observer(seen, record))
    return seen


def test_stricmp_equal_ignoring_case():
    assert stricmp("Hello", "hELLO") == 0


def test_stricmp_ordering():
    assert stricmp("apple", "Banana") < 0
    assert stricmp("Banana", "apple") > 0
    assert stricmp("abc", "ab") > 0
    assert stricmp("ab", "abc") < 0


def test_strnicmp_prefix():
    assert strnicmp("HelloWorld", "helloThere", 5) == 0
    assert strnicmp("HelloWorld", "helloThere", 6) > 0
    assert strnicmp("x", "y", 0) == 0


def test_chop_examples():
    s = ObservableString("hello")
    s.chop(1, 4)
    assert str(s) == "ho"
    t = ObservableString("hello")
    t.chop(0, 3)
    assert str(t) == "lo"


def test_chop_variants():
    s = ObservableString("hello")
    s.chop()
    assert str(s) == "hell"
    s.chop(2, -1)
    assert str(s) == "he"
    u = ObservableString("hello")
    u.chop(-1, 2)
    assert str(u) == "llo"


def test_chop_invalid_range_is_ignored():
    s = ObservableString("abc")
    s.chop(10, -1)
    assert str(s) == "abc"


def test_insert_examples():
    s = ObservableString("hello")
    s.insert(3, "s")
    assert str(s) == "helslo"
    t = ObservableString("hello")
    t.insert(2, "cat")
    assert str(t) == "hecatllo"


def test_insert_prepend_append():
    s = ObservableString("mid")
    s.insert(0, "<")
    s.insert(-1, ">")
    assert str(s) == "<mid>"
    s.insert(99, "x")
    assert str(s) == "<mid>"


def test_bool_and_number_assignment():
    assert str(ObservableString(True)) == "T"
    assert str(ObservableString(False)) == "F"
    assert str(ObservableString(42)) == "42"
    assert str(ObservableString(255, use_hex=True)) == "ff"


def test_double_format():
    assert str(ObservableString(1.5)) == "1.5000"


def test_equality_ignores_case_and_null():
    s = ObservableString("Hello")
    assert s == "hello"
    assert s != "world"
    assert ObservableString() == ObservableString(None)
    assert not (ObservableString() == "")


def test_concatenation_does_not_modify_source():
    a = ObservableString("foo")
    b = a + "bar"
    assert str(b) == "foobar"
    assert str(a) == "foo"
    a += ObservableString("baz")
    assert str(a) == "foobaz"
    a << "!"
    assert str(a) == "foobaz!"


def test_shift():
    s = ObservableString("abcdef")
    s.shift(2)
    assert str(s) == "cdef"
    s.shift(100)
    assert s.is_empty()
    with pytest.raises(ValueError):
        s.shift(-1)


def test_sprint_and_represent():
    s = ObservableString()
    result = s.sprint("%s-%d", "id", 7)
    assert result == "id-7"
    assert s.represent(3) == "id"
    assert s.represent(100) == "id-7"


def test_empty_and_null():
    s = ObservableString("x")
    s.empty()
    assert s.is_null()
    assert s.is_empty()
    assert len(s) == 0
    with pytest.raises(IndexError):
        s[0]


def test_interpret():
    s = ObservableString()
    assert s.interpret(None) is False
    assert s.interpret("value") is True
    assert s[0] == "v"
    assert len(s) == 5


def test_watchers_notified_on_change():
    s = ObservableString("a")
    seen = _watch(s)
    s += "b"
    s.assign("zz")
    s.chop()
    assert seen == ["ab", "zz", "z"]