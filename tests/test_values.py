"""Tests for the scalar value checkers."""

import asyncio
import enum
import queue
from dataclasses import dataclass

import pytest

from checkers.base import CheckFailure
from checkers.values import Equals, HasLen, IsFalse, IsNone, IsTrue


class Color(enum.IntEnum):
    RED = 1
    GREEN = 2


@dataclass
class Point:
    x: int
    y: int


# --- IsNone ---


def test_is_none_passes_for_none():
    assert IsNone.check(None) is None


@pytest.mark.parametrize("value", [0, "", False, [], Point(1, 2), object()])
def test_is_none_fails_for_anything_else(value):
    failure = IsNone.check(value)
    assert failure == CheckFailure("obtained value is non-nil")


# --- Equals ---


@pytest.mark.parametrize(
    "description, obtained, expected, err",
    [
        ("bool, both true", True, True, None),
        ("bool, both false", False, False, None),
        ("bool, unequal", True, False, "expected bool value False, got True"),
        ("bool, different type", "true", False, "obtained type str does not match expected type bool"),
        ("bool vs int", True, 1, "obtained type bool does not match expected type int"),
        ("string, both empty", "", "", None),
        ("string, both same", "something", "something", None),
        ("string, different", "something", "different", "expected str value different, got something"),
        ("int, same", 1234, 1234, None),
        ("int, different", 1234, 4321, "expected int value 4321, got 1234"),
        ("int vs float", 1234, 1234.0, "obtained type int does not match expected type float"),
        ("int enum has int kind", Color.GREEN, 2, None),
        ("float, same", 1.5, 1.5, None),
        ("float, different", 1.5, 2.5, "expected float value 2.5, got 1.5"),
        ("float, nan", float("nan"), float("nan"), "expected float value nan, got nan"),
        ("unsupported", [1], [1], "Equals checker does not support type list"),
        ("none", None, None, "Equals checker does not support type NoneType"),
    ],
)
def test_equals(description, obtained, expected, err):
    failure = Equals.check(obtained, expected)
    if err is None:
        assert failure is None, description
    else:
        assert failure is not None, description
        assert failure.message == err


def test_equals_missing_expected():
    assert Equals.check(1).message == "missing 'expected' value"


def test_equals_ignores_trailing_extras():
    assert Equals.check(1, 1, "ignored") is None


@pytest.mark.parametrize("a", [True, False])
@pytest.mark.parametrize("b", [True, False])
def test_equals_bool_pairs(a, b):
    failure = Equals.check(a, b)
    if a == b:
        assert failure is None
    else:
        assert str(failure) == f"expected bool value {b}, got {a}"


# --- IsTrue / IsFalse ---


def test_is_true():
    assert IsTrue.check(True) is None
    assert IsTrue.check(False).message == "obtained value is False"
    assert IsTrue.check(1).message == "IsTrue checker expected bool, obtained was type int"


def test_is_false():
    assert IsFalse.check(False) is None
    assert IsFalse.check(True).message == "obtained value is True"
    assert IsFalse.check("").message == "IsFalse checker expected bool, obtained was type str"


# --- HasLen ---


@pytest.mark.parametrize(
    "obtained, size",
    [
        ("abc", 3),
        ([1, 2], 2),
        ((), 0),
        ({"a": 1}, 1),
        ({1, 2, 3}, 3),
        (b"xy", 2),
        (range(5), 5),
    ],
)
def test_has_len_matches(obtained, size):
    assert HasLen.check(obtained, size) is None


def test_has_len_mismatch():
    assert HasLen.check([1, 2, 3], 2).message == "expected length 2, obtained 3"


def test_has_len_queue_depth():
    q = queue.Queue()
    q.put(1)
    q.put(2)
    assert HasLen.check(q, 2) is None

    aq = asyncio.Queue()
    aq.put_nowait("x")
    assert HasLen.check(aq, 0).message == "expected length 0, obtained 1"


def test_has_len_unsized():
    failure = HasLen.check(42, 1)
    assert failure.message == (
        "HasLen checker expected array, channel, map, slice or string, obtained was type int"
    )


def test_has_len_bad_expected():
    assert HasLen.check("abc", "3").message == "HasLen checker expected an int length, got type str"
    assert HasLen.check("abc", True).message == "HasLen checker expected an int length, got type bool"
    assert HasLen.check("abc").message == "missing 'expected' value"


def test_checkers_are_named():
    assert [repr(c) for c in (IsNone, Equals, IsTrue, IsFalse, HasLen)] == [
        "IsNone",
        "Equals",
        "IsTrue",
        "IsFalse",
        "HasLen",
    ]
