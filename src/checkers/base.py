"""Base data structures for the checker system."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

MISSING_EXPECTED = "missing 'expected' value"


@dataclass(frozen=True)
class CheckFailure:
    """Description of a failed check.

    Attributes:
        message: Human-readable reason the check failed.
        path: Accessor chain from the comparison root to the mismatch, for
            failures found inside nested structures (e.g. ``["bar"][0]``).
    """

    message: str
    path: str | None = None

    def __str__(self) -> str:
        return self.message


class Checker:
    """A stateless comparison strategy.

    Subclasses implement :meth:`check`. When a checker needs an expected value
    it is the first extra argument; any remaining extras are ignored.
    """

    name: str = "Checker"

    def check(self, obtained: Any, *extras: Any) -> CheckFailure | None:
        raise NotImplementedError

    def fail(self, message: str, path: str | None = None) -> CheckFailure:
        return CheckFailure(message=message, path=path)

    def __repr__(self) -> str:
        return self.name


def quote(value: Any) -> str:
    """Render strings double-quoted and escaped, anything else with repr()."""
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    return repr(value)


def type_name(value: Any) -> str:
    return type(value).__name__
