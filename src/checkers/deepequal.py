"""Structural equality with path-qualified mismatch reports."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any

from checkers.base import MISSING_EXPECTED, Checker, CheckFailure, quote, type_name


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _mismatch(path: str, what: str, obtained: Any, expected: Any) -> CheckFailure:
    where = path or "top level"
    return CheckFailure(
        f"mismatch at {where}: {what}; obtained {quote(obtained)}; expected {quote(expected)}",
        path=where,
    )


def _fields(value: Any) -> dict[str, Any]:
    if dataclasses.is_dataclass(value):
        return {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
    return vars(value)


def _compares_by_fields(value: Any) -> bool:
    if isinstance(value, type):
        return False
    if dataclasses.is_dataclass(value):
        return True
    return hasattr(value, "__dict__") and type(value).__eq__ is object.__eq__


def _compare(
    obtained: Any, expected: Any, path: str, visited: set[tuple[int, int]]
) -> CheckFailure | None:
    if obtained is expected and not isinstance(obtained, float):
        return None
    if _is_number(obtained) and _is_number(expected):
        if obtained == expected:
            return None
        return _mismatch(path, "unequal", obtained, expected)
    if type(obtained) is not type(expected):
        return _mismatch(
            path,
            f"type mismatch {type_name(obtained)} vs {type_name(expected)}",
            obtained,
            expected,
        )

    pair = (id(obtained), id(expected))
    if pair in visited:
        return None

    if isinstance(obtained, Mapping):
        visited.add(pair)
        if len(obtained) != len(expected):
            return _mismatch(
                path, f"length mismatch, {len(obtained)} vs {len(expected)}", obtained, expected
            )
        for key, value in expected.items():
            step = f"{path}[{quote(key)}]"
            if key not in obtained:
                return CheckFailure(
                    f"mismatch at {step}: key missing from obtained; expected {quote(value)}",
                    path=step,
                )
            failure = _compare(obtained[key], value, step, visited)
            if failure is not None:
                return failure
        return None

    if isinstance(obtained, (list, tuple)):
        visited.add(pair)
        if len(obtained) != len(expected):
            return _mismatch(
                path, f"length mismatch, {len(obtained)} vs {len(expected)}", obtained, expected
            )
        for index, (left, right) in enumerate(zip(obtained, expected)):
            failure = _compare(left, right, f"{path}[{index}]", visited)
            if failure is not None:
                return failure
        return None

    if isinstance(obtained, BaseException):
        visited.add(pair)
        return _compare(obtained.args, expected.args, f"{path}.args", visited)

    if _compares_by_fields(obtained):
        visited.add(pair)
        left_fields = _fields(obtained)
        right_fields = _fields(expected)
        for name, value in right_fields.items():
            step = f"{path}.{name}"
            if name not in left_fields:
                return CheckFailure(
                    f"mismatch at {step}: field missing from obtained; expected {quote(value)}",
                    path=step,
                )
            failure = _compare(left_fields[name], value, step, visited)
            if failure is not None:
                return failure
        for name in left_fields:
            if name not in right_fields:
                step = f"{path}.{name}"
                return CheckFailure(
                    f"mismatch at {step}: unexpected field; obtained {quote(left_fields[name])}",
                    path=step,
                )
        return None

    if obtained == expected:
        return None
    return _mismatch(path, "unequal", obtained, expected)


def deep_equal(obtained: Any, expected: Any) -> tuple[bool, CheckFailure | None]:
    """Compare two values recursively.

    Mappings are compared key by key, lists and tuples index by index, and
    dataclasses or plain objects attribute by attribute. Anything else falls
    back to ``==``. Returns ``(True, None)`` when equal, otherwise ``False``
    and a failure naming the first mismatching path, e.g.
    ``mismatch at ["bar"]: unequal; obtained "result"; expected "something"``.
    """
    failure = _compare(obtained, expected, "", set())
    return failure is None, failure


class _DeepEquals(Checker):
    name = "DeepEquals"

    def check(self, obtained: Any, *extras: Any) -> CheckFailure | None:
        if not extras:
            return self.fail(MISSING_EXPECTED)
        ok, failure = deep_equal(obtained, extras[0])
        if not ok:
            return failure
        return None


DeepEquals: Checker = _DeepEquals()
"""Compares nested mappings, sequences and objects by structure."""
