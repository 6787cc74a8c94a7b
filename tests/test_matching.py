"""Tests for Matches and PanicMatches."""

import enum

import pytest

from checkers.host import FailNow, T
from checkers.matching import Matches, Panic, PanicMatches, anchor, is_stringer


class AStringer:
    def __init__(self, v):
        self.v = v

    def __str__(self):
        return self.v


class Mode(enum.Enum):
    FAST = "fast"


class Plain:
    pass


# --- Matches ---


@pytest.mark.parametrize(
    "description, obtained, expected, err",
    [
        (
            "not a string or stringer",
            42,
            "something",
            "int(42) is neither a string nor defines a '__str__' method",
        ),
        (
            "expected not a string",
            "foo",
            42,
            "expected value must be a string containing a regexp pattern",
        ),
        ("string matches", "testing", "test.*", None),
        ("stringer matches", AStringer("testing"), "test.*", None),
        ("pattern matches entire string", "testing", "est", '"testing" did not match pattern "^est$"'),
        ("pattern handles full definition", "testing", "^test.*$", None),
        ("trailing newline is not ignored", "testing\n", "testing", '"testing\\n" did not match pattern "^testing$"'),
    ],
)
def test_matches(description, obtained, expected, err):
    failure = Matches.check(obtained, expected)
    if err is None:
        assert failure is None, description
    else:
        assert failure is not None, description
        assert failure.message == err


def test_matches_bad_pattern():
    failure = Matches.check("x", "(")
    assert failure.message.startswith("unable to compile regexp: ")


def test_matches_missing_expected():
    assert Matches.check("x").message == "missing 'expected' value"


def test_anchor_only_adds_what_is_missing():
    assert anchor("abc") == "^abc$"
    assert anchor("^abc") == "^abc$"
    assert anchor("abc$") == "^abc$"
    assert anchor("^abc$") == "^abc$"


def test_is_stringer():
    assert is_stringer(AStringer("x"))
    assert is_stringer(Mode.FAST)
    assert not is_stringer(Plain())
    assert not is_stringer(42)
    assert not is_stringer([1, 2])


def test_matches_enum_member():
    assert Matches.check(Mode.FAST, r"Mode\.FAST") is None


# --- PanicMatches ---


def _raise(exc):
    def f():
        raise exc

    return f


@pytest.mark.parametrize(
    "description, obtained, expected, err",
    [
        ("not a function", 42, "something", "first arg must be a function that takes no args"),
        ("takes an arg", lambda x: None, "something", "first arg must be a function that takes no args"),
        ("a class is not a function", ValueError, "something", "first arg must be a function that takes no args"),
        ("expected not a string", lambda: None, 42, "expected value must be a string containing a regexp pattern"),
        ("no panic", lambda: None, "oops", "no panic"),
        ("panic with an int", _raise(Panic(42)), "oops", "recovered panic value int(42) is not a string nor an error"),
        ("panic with a string", _raise(Panic("oopsy")), "oops.*", None),
        ("panic with an error", _raise(Panic(ValueError("oopsy"))), "oops.*", None),
        ("raised error", _raise(RuntimeError("oopsy")), "oops.*", None),
        ("raised error mismatch", _raise(RuntimeError("boom")), "oops", '"boom" did not match pattern "^oops$"'),
        (
            "raised system exit",
            _raise(SystemExit(3)),
            "oops",
            "recovered panic value SystemExit(3) is not a string nor an error",
        ),
    ],
)
def test_panic_matches(description, obtained, expected, err):
    failure = PanicMatches.check(obtained, expected)
    if err is None:
        assert failure is None, description
    else:
        assert failure is not None, description
        assert failure.message == err


def test_panic_matches_accepts_defaulted_args():
    def f(x=1, *args, **kwargs):
        raise Panic("called")

    assert PanicMatches.check(f, "called") is None


def test_panic_matches_does_not_absorb_keyboard_interrupt():
    with pytest.raises(KeyboardInterrupt):
        PanicMatches.check(_raise(KeyboardInterrupt()), "x")


def test_panic_carries_value():
    p = Panic({"k": 1})
    assert p.value == {"k": 1}


def test_panic_matches_does_not_absorb_fail_now():
    t = T("root")
    with pytest.raises(FailNow):
        PanicMatches.check(lambda: t.fatal("stop"), "stop")
    assert t.errors == ["stop"]
