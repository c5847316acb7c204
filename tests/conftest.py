"""
Root conftest.py: sys.path, env vars, shared fixtures.

Sets up the test environment so all production code can be imported
without Azure credentials or a storage account.
"""

import os
import sys

import pytest

# Add project root to sys.path so 'core', 'config', 'infrastructure', etc. are importable
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


@pytest.fixture(autouse=True, scope="session")
def set_minimal_env_vars():
    """
    Set minimal environment variables to prevent import crashes.

    function_app.py validates the environment at import time. We provide
    safe defaults so imports succeed without Azure infrastructure.
    """
    defaults = {
        "ENVIRONMENT": "dev",
        "DEFAULT_STORAGE_CONNECTION": "default",
    }
    for key, value in defaults.items():
        os.environ.setdefault(key, value)


@pytest.fixture(autouse=True)
def reset_singletons():
    """Drop cached config and connection registry around every test."""
    from config import reset_config
    from infrastructure.connections import reset_connection_registry

    reset_config()
    yield
    reset_config()
    reset_connection_registry()


@pytest.fixture
def storage_env(monkeypatch):
    """
    Factory fixture: set STORAGE_CONNECTION_<NAME>_* variables for one connection.

    Usage:
        storage_env("default", AUTH_MODE="account_key", ACCOUNT_NAME="acct", ACCOUNT_KEY="k")
    """
    from config.storage_config import storage_env_prefix

    def _set(connection_name: str, **fields):
        prefix = storage_env_prefix(connection_name)
        for field, value in fields.items():
            monkeypatch.setenv(f"{prefix}{field}", value)
        return prefix
    return _set
