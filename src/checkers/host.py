"""Test-run handles: the reporting, abort and subtest primitives."""

from __future__ import annotations

import logging
import time
import traceback
from typing import Callable, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


class FailNow(BaseException):
    """Unwinds a (sub)test. Caught only by the ``run`` that started its handle."""

    def __init__(self, handle: T | None = None):
        super().__init__()
        self.handle = handle


@runtime_checkable
class TestingT(Protocol):
    """The narrow handle contract suites and assertions depend on."""

    name: str

    @property
    def failed(self) -> bool: ...

    def error(self, message: str) -> None: ...

    def fatal(self, message: str) -> None: ...

    def fail_now(self) -> None: ...

    def log(self, message: str) -> None: ...

    def run(self, name: str, fn: Callable[[TestingT], None]) -> bool: ...


class T:
    """Per-test handle that records failures and nests subtests."""

    # Not a test class, despite the name.
    __test__ = False

    def __init__(self, name: str = "", parent: T | None = None):
        self.name = name
        self.parent = parent
        self.children: list[T] = []
        self.errors: list[str] = []
        self.logs: list[str] = []
        self.duration = 0.0
        self._failed = False

    @property
    def failed(self) -> bool:
        return self._failed

    def fail(self) -> None:
        """Mark this handle, and every ancestor, as failed."""
        node: T | None = self
        while node is not None:
            node._failed = True
            node = node.parent

    def error(self, message: str) -> None:
        self.errors.append(message)
        self.fail()
        logger.error(f"{self.name or '<root>'}: {message}")

    def fail_now(self) -> None:
        self.fail()
        raise FailNow(self)

    def fatal(self, message: str) -> None:
        self.error(message)
        self.fail_now()

    def log(self, message: str) -> None:
        self.logs.append(message)
        logger.debug(f"{self.name or '<root>'}: {message}")

    def run(self, name: str, fn: Callable[[T], None]) -> bool:
        """Run *fn* as a named subtest. Returns True when it passed.

        A ``fail_now`` on the subtest (or one of its descendants) ends only this
        subtest, while one on an ancestor keeps unwinding to that ancestor.
        Any other exception is recorded as an error of the subtest.
        """
        full_name = f"{self.name}/{name}" if self.name else name
        child = T(full_name, parent=self)
        self.children.append(child)

        logger.debug(f"Running subtest {full_name}")
        start = time.monotonic()
        try:
            fn(child)
        except FailNow as e:
            if not child._owns(e.handle):
                raise
        except Exception:
            child.error(f"unhandled exception:\n{traceback.format_exc().rstrip()}")
        finally:
            child.duration = time.monotonic() - start

        logger.debug(f"Subtest {full_name} passed={not child.failed}")
        return not child.failed

    def _owns(self, handle: T | None) -> bool:
        node = handle
        while node is not None:
            if node is self:
                return True
            node = node.parent
        return handle is None

    def walk(self):
        """Yield this handle and all of its descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def report(self) -> str:
        lines: list[str] = []
        for node in self.walk():
            for message in node.errors:
                lines.append(f"--- FAIL: {node.name or '<root>'}")
                lines.extend(f"    {line}" for line in message.splitlines())
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"T({self.name!r}, failed={self.failed})"
