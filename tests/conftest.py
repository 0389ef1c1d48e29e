"""
Shared test fixtures for polyfact tests.

This module provides common fixtures used across the test suite:
- A small project folder to generate docs from
- A captured rich console
- Canned HTTP responses
- time.sleep patched out of the pollers
"""

import io
from unittest.mock import Mock, patch

import pytest
from rich.console import Console

from polyfact.config import PolyfactConfig

# ============================================================================
# DIRECTORY FIXTURES
# ============================================================================


@pytest.fixture
def project_dir(tmp_path):
    """Small source tree with a nested folder, a hidden dir and a binary file."""
    root = tmp_path / "project"
    (root / "src" / "utils").mkdir(parents=True)
    (root / ".git").mkdir()
    (root / "node_modules" / "left-pad").mkdir(parents=True)

    (root / "README.md").write_text("# Project\n")
    (root / "src" / "main.py").write_text("print('hello')\n")
    (root / "src" / "utils" / "helpers.py").write_text("def add(a, b):\n    return a + b\n")
    (root / ".git" / "HEAD").write_text("ref: refs/heads/main\n")
    (root / "node_modules" / "left-pad" / "index.js").write_text("module.exports = 1;\n")
    (root / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n\xff\xfe\x00\x00")
    return root


# ============================================================================
# OUTPUT / CONFIG FIXTURES
# ============================================================================


@pytest.fixture
def console():
    """Rich console writing to an in-memory buffer."""
    return Console(file=io.StringIO(), width=100)


@pytest.fixture
def fast_config():
    """Config with zero poll intervals and a generous wait budget."""
    return PolyfactConfig(
        token="pk_test_token_123",  # noqa: S106 - test fixture, not a real credential
        progress_poll_interval=0,
        status_poll_interval=0,
        poll_timeout=60,
    )


@pytest.fixture
def no_sleep():
    """Patch time.sleep in the pollers."""
    with patch("polyfact.docs.waiters.time.sleep") as mock_sleep:
        yield mock_sleep


# ============================================================================
# HTTP MOCKING FIXTURES
# ============================================================================


def make_response(status_code=200, json_data=None, text=None):
    """Build a fake requests.Response."""
    response = Mock()
    response.status_code = status_code
    if json_data is None and text is None:
        response.content = b""
        response.json.side_effect = ValueError("No JSON")
        response.text = ""
    elif json_data is None:
        response.content = text.encode()
        response.json.side_effect = ValueError("No JSON")
        response.text = text
    else:
        response.content = b"{...}"
        response.json.return_value = json_data
        response.text = str(json_data)
    return response


@pytest.fixture
def mock_request():
    """Patch requests.request as used by the API client."""
    with patch("polyfact.api_client.requests.request") as mock:
        yield mock


@pytest.fixture
def response_factory():
    """Factory for fake requests.Response objects."""
    return make_response
