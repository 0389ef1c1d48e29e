"""Pytest configuration and fixtures for polyfact tests.

CRITICAL: Protects the user's configuration and token from test runs.
"""

import pytest

from polyfact.config import ENV_VARS, reset_config


@pytest.fixture(autouse=True)
def isolate_polyfact_config(tmp_path, monkeypatch):
    """Point the config file at tmp_path and clear POLYFACT_* variables.

    Tests must never read or modify ~/.polyfact/config.toml, and a token
    exported in the developer's shell must not leak into tests that check
    the missing-token path.
    """
    for env_var in ENV_VARS:
        monkeypatch.delenv(env_var, raising=False)
    monkeypatch.setenv("POLYFACT_CONFIG", str(tmp_path / ".polyfact" / "config.toml"))
    reset_config()

    yield

    reset_config()
