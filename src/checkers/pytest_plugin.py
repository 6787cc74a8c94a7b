"""pytest binding: a ``t`` fixture backed by :class:`checkers.host.T`."""

from __future__ import annotations

import pytest

from checkers.host import FailNow, T


@pytest.fixture
def t(request) -> T:
    """Root test-run handle for the current test.

    Failures recorded on it (or on any subtest it ran) fail the test once
    the test function returns.
    """
    return T(request.node.name)


@pytest.hookimpl(wrapper=True)
def pytest_pyfunc_call(pyfuncitem):
    try:
        result = yield
    except FailNow:
        result = True

    handle = pyfuncitem.funcargs.get("t")
    if isinstance(handle, T) and handle.failed:
        pytest.fail(handle.report() or f"{handle.name} failed", pytrace=False)
    return result
