"""Pytest configuration and fixtures."""

import logging

import pytest

from unitrun.host import session
from unitrun.registry import TestRegistry


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Clean up unitrun loggers after each test so handlers never leak."""
    yield

    loggers_to_remove = [
        name
        for name in logging.Logger.manager.loggerDict.keys()
        if name.startswith("unitrun")
    ]

    for name in loggers_to_remove:
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()
        del logging.Logger.manager.loggerDict[name]


@pytest.fixture
def registry():
    """Empty registry, independent of the global session."""
    return TestRegistry()


@pytest.fixture
def fresh_session():
    """Fresh global session for tests that use TEST/DEATH_TEST/RUN_ALL_TESTS."""
    with session() as current:
        yield current
