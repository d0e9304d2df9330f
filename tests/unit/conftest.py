"""Shared fixtures for stringring unit tests."""

import pytest

from stringring.const import GRANULARITY_ENV_VAR, MAX_SIZE_ENV_VAR


@pytest.fixture(autouse=True)
def clean_ring_env(monkeypatch):
    """Keep ambient configuration variables out of every test."""
    monkeypatch.delenv(MAX_SIZE_ENV_VAR, raising=False)
    monkeypatch.delenv(GRANULARITY_ENV_VAR, raising=False)
