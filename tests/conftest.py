"""Pytest configuration and shared fixtures for all tests."""

import os

import pytest

from wiregraph.config import reset_settings
from wiregraph.utils import reset_logging


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Isolate every test from WIREGRAPH_* variables, cached settings and log sinks."""
    for key in list(os.environ):
        if key.startswith("WIREGRAPH_"):
            monkeypatch.delenv(key)
    reset_settings()
    yield
    reset_settings()
    reset_logging()
