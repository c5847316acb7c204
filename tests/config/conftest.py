"""
Config test fixtures: clean environment via monkeypatch.
"""

import os

import pytest


@pytest.fixture
def clean_env(monkeypatch):
    """Remove all env vars that config modules might read, for isolation."""
    env_vars_to_clear = [
        "ENVIRONMENT", "DEBUG_LOGGING", "LOG_LEVEL",
        "DEFAULT_STORAGE_CONNECTION",
    ]
    env_vars_to_clear.extend(
        var for var in os.environ if var.startswith("STORAGE_CONNECTION_")
    )
    for var in env_vars_to_clear:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch
