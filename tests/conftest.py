"""
Pytest configuration and shared fixtures for FlagKit tests.
"""

import logging

import pytest

# Import test fixtures to make them available to all tests
# ruff: noqa: F401
from tests.fixtures.toolchains import (
    linux_facts,
    windows_vs2010_facts,
    gcc48_probe,
    clang_probe,
    msvc_probe,
)


@pytest.fixture(autouse=True)
def clean_flag_environment(monkeypatch):
    """Keep CFLAGS/CXXFLAGS from the developer's shell out of the defaults."""
    monkeypatch.delenv("CFLAGS", raising=False)
    monkeypatch.delenv("CXXFLAGS", raising=False)


@pytest.fixture
def debug_logging(caplog):
    """Capture FlagKit debug logging."""
    caplog.set_level(logging.DEBUG, logger="flagkit")
    return caplog
