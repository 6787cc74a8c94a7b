"""Regular-expression checkers for strings, stringers and raised values."""

from __future__ import annotations

import inspect
import re
from types import TracebackType
from typing import Any, Callable

from checkers.base import MISSING_EXPECTED, Checker, CheckFailure, quote, type_name
from checkers.host import FailNow

PATTERN_NOT_STRING = "expected value must be a string containing a regexp pattern"


class Panic(Exception):
    """Raise to abort with an arbitrary value, which PanicMatches inspects."""

    def __init__(self, value: Any):
        super().__init__(value)
        self.value = value


def anchor(pattern: str) -> str:
    if not pattern.startswith("^"):
        pattern = "^" + pattern
    if not pattern.endswith("$"):
        pattern = pattern + "$"
    return pattern


def check_match(obtained: str, pattern: str) -> CheckFailure | None:
    """Match *obtained* against *pattern* as a whole string."""
    pattern = anchor(pattern)
    try:
        matched = re.fullmatch(pattern, obtained) is not None
    except re.error as e:
        return CheckFailure(f"unable to compile regexp: {e}")
    if matched:
        return None
    return CheckFailure(f"{quote(obtained)} did not match pattern {quote(pattern)}")


def is_stringer(value: Any) -> bool:
    """True when a non-builtin class in the MRO defines its own ``__str__``."""
    for klass in type(value).__mro__:
        if klass.__module__ == "builtins":
            continue
        if "__str__" in vars(klass):
            return True
    return False


class _Matches(Checker):
    name = "Matches"

    def check(self, obtained: Any, *extras: Any) -> CheckFailure | None:
        if not extras:
            return self.fail(MISSING_EXPECTED)
        pattern = extras[0]
        if not isinstance(pattern, str):
            return self.fail(PATTERN_NOT_STRING)

        if isinstance(obtained, str):
            value = obtained
        elif is_stringer(obtained):
            value = str(obtained)
        else:
            return self.fail(
                f"{type_name(obtained)}({obtained!r}) is neither a string nor defines a '__str__' method"
            )
        return check_match(value, pattern)


def _takes_no_args(func: Any) -> bool:
    if not callable(func) or inspect.isclass(func):
        return False
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return False
    for param in signature.parameters.values():
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue
        if param.default is param.empty:
            return False
    return True


class _Recovery:
    """Context manager that absorbs whatever the body raises.

    ``__exit__`` runs on normal and abnormal exit alike; afterwards
    ``raised`` says whether the body raised and ``value`` holds what it
    raised (the payload for :class:`Panic`). ``FailNow`` and
    ``KeyboardInterrupt`` pass through untouched.
    """

    def __init__(self) -> None:
        self.raised = False
        self.value: Any = None

    def __enter__(self) -> _Recovery:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        if exc is None:
            return False
        if isinstance(exc, (KeyboardInterrupt, FailNow)):
            return False
        self.raised = True
        self.value = exc.value if isinstance(exc, Panic) else exc
        return True


class _PanicMatches(Checker):
    name = "PanicMatches"

    def check(self, obtained: Any, *extras: Any) -> CheckFailure | None:
        if not extras:
            return self.fail(MISSING_EXPECTED)
        pattern = extras[0]
        if not isinstance(pattern, str):
            return self.fail(PATTERN_NOT_STRING)
        if not _takes_no_args(obtained):
            return self.fail("first arg must be a function that takes no args")

        func: Callable[[], Any] = obtained
        with _Recovery() as recovered:
            func()

        if not recovered.raised:
            return self.fail("no panic")
        value = recovered.value
        if isinstance(value, Exception):
            return check_match(str(value), pattern)
        if isinstance(value, str):
            return check_match(value, pattern)
        if isinstance(value, BaseException):
            shown = repr(value)
        else:
            shown = f"{type_name(value)}({value!r})"
        return self.fail(f"recovered panic value {shown} is not a string nor an error")


Matches: Checker = _Matches()
"""Matches a string or stringer against an anchored regular expression."""

PanicMatches: Checker = _PanicMatches()
"""Calls a no-argument function and matches what it raises against a pattern."""
