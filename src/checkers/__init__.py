"""Reusable value checkers and reflective test suites."""

from checkers.assertions import Test
from checkers.base import CheckFailure, Checker
from checkers.deepequal import DeepEquals, deep_equal
from checkers.host import T, TestingT
from checkers.matching import Matches, Panic, PanicMatches
from checkers.suite import run_suite
from checkers.values import Equals, HasLen, IsFalse, IsNone, IsTrue

__all__ = [
    "CheckFailure",
    "Checker",
    "DeepEquals",
    "Equals",
    "HasLen",
    "IsFalse",
    "IsNone",
    "IsTrue",
    "Matches",
    "Panic",
    "PanicMatches",
    "T",
    "Test",
    "TestingT",
    "deep_equal",
    "run_suite",
]
