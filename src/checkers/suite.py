"""Run the ``Test*`` methods of a suite object as subtests."""

from __future__ import annotations

import dataclasses
import inspect
import logging
import re
import types
import typing
from dataclasses import dataclass
from typing import Any

from checkers.base import quote
from checkers.config import DEFAULT_TEST_METHOD_PATTERN, SuiteConfig
from checkers.host import TestingT

logger = logging.getLogger(__name__)

_NOT_STRUCTS = (
    type,
    types.ModuleType,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
)


@dataclass(frozen=True)
class TestMethod:
    """A discovered test method: its full name and the subtest name."""

    __test__ = False

    name: str
    short_name: str


def run_suite(t: TestingT, suite: Any, config: SuiteConfig | None = None) -> None:
    """Run every test method of *suite* as a subtest of *t*.

    The suite must be an instance. The handle is injected into the first
    matching attribute found (see :func:`set_testing_t`), and again into each
    subtest so that a failing ``assert_`` ends only that subtest. A
    ``SetUpTest`` method, when present, runs before each test method.
    """
    config = config or SuiteConfig()

    if inspect.isclass(suite):
        t.fatal("suite must be passed in as an instance, not a class")
        return

    if not set_testing_t(t, suite):
        t.fatal("unable to initialize the suite handle")
        return

    setup = getattr(suite, config.setup_method, None)
    if setup is not None:
        logger.debug(f"Found {config.setup_method} on {type(suite).__name__}")
        if not callable(setup) or _parameter_count(setup) != 0:
            t.fatal(f"{config.setup_method} should take no arguments")
            return

    for method in find_test_methods(suite, config.test_method_pattern):
        t.run(method.short_name, _subtest(suite, method, setup))


def _subtest(suite: Any, method: TestMethod, setup: Any):
    def run(sub: TestingT) -> None:
        set_testing_t(sub, suite)
        if setup is not None:
            setup()

        func = getattr(suite, method.name)
        count = _parameter_count(func)
        if count != 0:
            sub.fatal(f"Test method {quote(method.name)} takes {count} args, should take none")
            return
        returns = _declared_return(func)
        if returns is not None:
            sub.fatal(
                f"Test method {quote(method.name)} is annotated to return {returns}, should return None"
            )
            return

        result = func()
        if inspect.iscoroutine(result):
            result.close()
        if result is not None:
            sub.fatal(f"Test method {quote(method.name)} returned a value, should return none")

    return run


def find_test_methods(suite: Any, pattern: str = DEFAULT_TEST_METHOD_PATTERN) -> list[TestMethod]:
    """Return the suite's methods whose names match *pattern*, sorted by name.

    The pattern's first group becomes the subtest name.
    """
    matcher = re.compile(pattern)
    suite_type = suite if inspect.isclass(suite) else type(suite)
    names = dir(suite_type)
    logger.debug(f"Suite type {suite_type.__name__} has {len(names)} attributes")

    result = []
    for name in names:
        match = matcher.fullmatch(name)
        if match is None:
            continue
        attr = getattr(suite_type, name, None)
        if not (inspect.isfunction(attr) or inspect.ismethod(attr)):
            continue
        logger.debug(f"Found test method {name!r}")
        result.append(TestMethod(name=name, short_name=match.group(1)))
    return result


def set_testing_t(t: TestingT, value: Any) -> bool:
    """Assign *t* to the first handle attribute found inside *value*.

    Attributes are searched in declaration order. One matches when its
    annotation names the handle type (optionally as ``X | None``) or when its
    current value is a handle of the same type. The search descends into
    nested objects and dataclasses. An attribute that is ``None`` cannot be
    descended into and is skipped. Returns False when no attribute was set.
    """
    return _set_testing_t(t, value, set())


def _set_testing_t(t: TestingT, value: Any, visited: set[int]) -> bool:
    if not _is_struct(value, t) or id(value) in visited:
        return False
    visited.add(id(value))

    annotations = _annotations(type(value))
    names = list(annotations)
    names.extend(name for name in _instance_fields(value) if name not in annotations)

    for name in names:
        if name.startswith("__"):
            continue
        field = getattr(value, name, None)
        if _names_handle(annotations.get(name), t) or type(field) is type(t):
            try:
                setattr(value, name, t)
            except AttributeError:
                logger.debug(f"Cannot assign handle to {type(value).__name__}.{name}")
            else:
                logger.debug(f"Injected handle into {type(value).__name__}.{name}")
                return True
        if _set_testing_t(t, field, visited):
            return True
    return False


def _is_struct(value: Any, t: TestingT) -> bool:
    if value is None or isinstance(value, _NOT_STRUCTS) or type(value) is type(t):
        return False
    if dataclasses.is_dataclass(value):
        return True
    return hasattr(value, "__dict__")


def _instance_fields(value: Any) -> list[str]:
    try:
        return list(vars(value))
    except TypeError:
        return []


def _annotations(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError):
        # Unresolvable forward references; keep them as strings.
        merged: dict[str, Any] = {}
        for klass in reversed(cls.__mro__):
            merged.update(vars(klass).get("__annotations__", {}))
        return merged


def _names_handle(annotation: Any, t: TestingT) -> bool:
    if annotation is None:
        return False
    handle_names = {type(t).__name__, TestingT.__name__}
    if isinstance(annotation, str):
        parts = re.split(r"[\s|\[\],]+", annotation)
        return any(part in handle_names for part in parts if part not in ("Optional", "None"))

    if typing.get_origin(annotation) in (typing.Union, types.UnionType):
        candidates = typing.get_args(annotation)
    else:
        candidates = (annotation,)
    return any(c is type(t) or c is TestingT for c in candidates)


def _parameter_count(func: Any) -> int:
    try:
        return len(inspect.signature(func).parameters)
    except (TypeError, ValueError):
        return 0


def _declared_return(func: Any) -> str | None:
    """The declared return annotation, unless it is absent or None."""
    try:
        annotation = inspect.signature(func).return_annotation
    except (TypeError, ValueError):
        return None
    if annotation in (inspect.Signature.empty, None, type(None), "None"):
        return None
    if isinstance(annotation, str):
        return annotation
    return inspect.formatannotation(annotation)
