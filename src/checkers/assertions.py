"""Check (fail and continue) and Assert (fail now) on top of a test handle."""

from __future__ import annotations

from typing import Any

from checkers.base import Checker
from checkers.host import TestingT


class Test:
    """Wraps a test-run handle with ``check`` and ``assert_``.

    Suites usually inherit from (or hold) a ``Test`` and let
    :func:`checkers.suite.run_suite` inject the handle into ``t``.
    """

    __test__ = False

    t: TestingT | None = None

    def __init__(self, t: TestingT | None = None):
        self.t = t

    def _handle(self) -> TestingT:
        if self.t is None:
            raise RuntimeError(f"no test-run handle set on {type(self).__name__}")
        return self.t

    def check(self, obtained: Any, checker: Checker, *extras: Any) -> bool:
        """Report a failure to the handle and return False; the test continues."""
        handle = self._handle()
        failure = checker.check(obtained, *extras)
        if failure is None:
            return True
        handle.error(f"{checker.name}: {failure.message}")
        return False

    def assert_(self, obtained: Any, checker: Checker, *extras: Any) -> None:
        """Like :meth:`check`, but ends the current test on failure."""
        if not self.check(obtained, checker, *extras):
            self._handle().fail_now()
