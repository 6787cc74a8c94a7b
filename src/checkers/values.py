"""Scalar value checkers (None, equality, booleans, length)."""

from __future__ import annotations

import asyncio
import queue
from collections.abc import Sized
from typing import Any

from checkers.base import MISSING_EXPECTED, Checker, CheckFailure, type_name

# Ordered: bool is a subclass of int and must be tried first.
_SCALAR_KINDS: tuple[type, ...] = (bool, int, float, str)


def _kind(value: Any) -> type:
    for kind in _SCALAR_KINDS:
        if isinstance(value, kind):
            return kind
    return type(value)


class _IsNone(Checker):
    name = "IsNone"

    def check(self, obtained: Any, *extras: Any) -> CheckFailure | None:
        if obtained is None:
            return None
        return self.fail("obtained value is non-nil")


class _Equals(Checker):
    name = "Equals"

    def check(self, obtained: Any, *extras: Any) -> CheckFailure | None:
        if not extras:
            return self.fail(MISSING_EXPECTED)
        expected = extras[0]

        kind = _kind(obtained)
        if kind is not _kind(expected):
            return self.fail(
                f"obtained type {type_name(obtained)} does not match expected type {type_name(expected)}"
            )
        if kind not in _SCALAR_KINDS:
            return self.fail(f"Equals checker does not support type {type_name(obtained)}")

        if kind(obtained) == kind(expected):
            return None
        return self.fail(f"expected {type_name(expected)} value {expected}, got {obtained}")


class _BoolChecker(Checker):
    polarity: bool

    def check(self, obtained: Any, *extras: Any) -> CheckFailure | None:
        if not isinstance(obtained, bool):
            return self.fail(
                f"{self.name} checker expected bool, obtained was type {type_name(obtained)}"
            )
        if obtained is self.polarity:
            return None
        return self.fail(f"obtained value is {obtained}")


class _IsTrue(_BoolChecker):
    name = "IsTrue"
    polarity = True


class _IsFalse(_BoolChecker):
    name = "IsFalse"
    polarity = False


def _length(value: Any) -> int | None:
    """Return the length of *value*, or None when it has no well-defined one.

    Queues report their current depth, the number of items waiting in them.
    """
    if isinstance(value, (queue.Queue, asyncio.Queue)):
        return value.qsize()
    if isinstance(value, Sized):
        return len(value)
    return None


class _HasLen(Checker):
    name = "HasLen"

    def check(self, obtained: Any, *extras: Any) -> CheckFailure | None:
        if not extras:
            return self.fail(MISSING_EXPECTED)
        size = extras[0]
        if isinstance(size, bool) or not isinstance(size, int):
            return self.fail(f"HasLen checker expected an int length, got type {type_name(size)}")

        length = _length(obtained)
        if length is None:
            return self.fail(
                "HasLen checker expected array, channel, map, slice or string, "
                f"obtained was type {type_name(obtained)}"
            )
        if length != size:
            return self.fail(f"expected length {size}, obtained {length}")
        return None


IsNone: Checker = _IsNone()
"""Fails unless the obtained value is None."""

Equals: Checker = _Equals()
"""Compares bool, int, float and str values of the same kind."""

IsTrue: Checker = _IsTrue()
"""Fails unless the obtained value is the bool True."""

IsFalse: Checker = _IsFalse()
"""Fails unless the obtained value is the bool False."""

HasLen: Checker = _HasLen()
"""Fails unless the obtained container, queue or string has the expected length."""
