from __future__ import annotations

from pathlib import Path
from typing import Any

from junitparser import Error, Failure, JUnitXml, TestCase, TestSuite

from checkers.host import T


def _case(node: T, classname: str) -> TestCase:
    case = TestCase(node.name)
    case.classname = classname
    if node.failed:
        message = "\n".join(node.errors) or "subtest failed"
        failure = Failure(message.splitlines()[0])
        failure.text = message
        case.result = failure
    case.time = round(node.duration, 6)
    return case


def write_junit(path: Path, t: T, suite_name: str | None = None) -> Path:
    """Write junit.xml for a finished run rooted at *t*, return path.

    Every leaf subtest becomes a test case. Failures recorded on the root
    itself (a suite that could not start) become one extra case named after
    the suite.
    """
    name = suite_name or t.name or "suite"
    suite = TestSuite(name)

    if t.errors:
        root_case = TestCase(name)
        root_case.classname = name
        failure = Failure(t.errors[0].splitlines()[0])
        failure.text = "\n".join(t.errors)
        root_case.result = failure
        suite.add_testcase(root_case)

    for node in t.walk():
        if node is t or node.children:
            continue
        suite.add_testcase(_case(node, name))

    # Set time after add_testcase (add_testcase resets it via update_statistics)
    suite.time = round(sum(child.duration for child in t.children), 6)

    xml = JUnitXml()
    # Use append (not +=) to preserve properties and time
    xml.append(suite)

    path.parent.mkdir(parents=True, exist_ok=True)
    xml.write(str(path), pretty=True)
    return path


def summarize(path: Path) -> dict[str, Any]:
    """Read a junit.xml back and return totals plus the failing case names."""
    xml = JUnitXml.fromfile(str(path))
    if isinstance(xml, TestSuite):
        suites = [xml]
    else:
        suites = list(xml)

    failed: list[str] = []
    tests = 0
    for suite in suites:
        for case in suite:
            tests += 1
            if any(isinstance(r, (Failure, Error)) for r in case.result):
                failed.append(case.name)
    return {"tests": tests, "failures": len(failed), "failed": failed}
