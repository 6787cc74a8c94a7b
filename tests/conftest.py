"""Pytest configuration and fixtures."""

import logging

import pytest

pytest_plugins = ["pytester"]


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Reset handlers on checkers loggers after each test."""
    yield

    for name in list(logging.Logger.manager.loggerDict.keys()):
        if not name.startswith("checkers"):
            continue
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)
