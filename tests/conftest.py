"""Pytest configuration and shared fixtures for ttlint tests.

This module provides auto-use fixtures that ensure test isolation,
particularly from TTLINT_* environment variables set in the caller's shell.
"""

import io
import logging

import pytest


TTLINT_ENV_VARS = ('TTLINT_PATTERNS', 'TTLINT_MAX_WORKERS', 'TTLINT_LOG_LEVEL')


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Auto-use fixture that removes ttlint configuration from the environment.

    Tests that need a variable set it themselves with monkeypatch.setenv.
    """
    for name in TTLINT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield
    logging.getLogger('ttlint').setLevel(logging.NOTSET)


@pytest.fixture
def sink():
    """In-memory text stream collecting diagnostic lines."""
    return io.StringIO()
