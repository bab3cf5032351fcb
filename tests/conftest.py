"""Pytest configuration and fixtures."""

import io
import logging

import pytest

from mtest.environment import TestEnvironment


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Clean up mtest loggers after each test so handlers don't leak between tests."""
    yield

    loggers_to_remove = [
        name
        for name in logging.Logger.manager.loggerDict.keys()
        if name.startswith("mtest")
    ]

    for name in loggers_to_remove:
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        del logging.Logger.manager.loggerDict[name]


@pytest.fixture
def stream():
    return io.StringIO()


@pytest.fixture
def env(stream):
    """Environment that reports into an in-memory stream without colors."""
    return TestEnvironment(stream=stream, color=False)


@pytest.fixture
def run_single(env):
    """Run one test body and return its records."""

    def _run(body):
        test = env.register(("single", body))
        env.run_all(report=False)
        return env.records_for(test.id)

    return _run
