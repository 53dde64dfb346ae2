"""
Test configuration and fixtures for ray-dashboard-sdk tests.

Provides shared fixtures for:
- Sample package directories
- Mocked dashboard transport
- Environment variable management
"""

from pathlib import Path
from typing import Any, Callable, Dict
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from ray_dashboard_sdk.core.api.dashboard import DashboardRestClient

TEST_DASHBOARD_URL = "http://dashboard.test:8265"
TEST_USER_AGENT = "test-agent/1.0"


@pytest.fixture
def package_dir(tmp_path: Path) -> Path:
    """Provide a directory with two small files.

    Returns:
        Path to the package source directory.
    """
    source = tmp_path / "project"
    source.mkdir()
    (source / "file1.txt").write_text("content1")
    (source / "file2.txt").write_text("content2")
    return source


@pytest.fixture
def make_response() -> Callable[..., MagicMock]:
    """Provide a factory for mocked httpx responses."""

    def _make(status_code: int = 200, json_data: Any = None, text: str = "") -> MagicMock:
        response = MagicMock()
        response.status_code = status_code
        response.json.return_value = json_data
        response.text = text
        return response

    return _make


@pytest.fixture
def rest_client() -> DashboardRestClient:
    """Provide a REST client pointed at a fake dashboard address."""
    return DashboardRestClient(base_url=TEST_DASHBOARD_URL, user_agent=TEST_USER_AGENT)


@pytest.fixture
def mock_http_client(rest_client: DashboardRestClient):
    """Replace the REST client's httpx client with an AsyncMock.

    Tests set ``mock_http_client.request.return_value`` (or ``side_effect``)
    to script the dashboard's answers.
    """
    http_client = AsyncMock()
    http_client.is_closed = False

    with patch.object(rest_client, "_get_client", return_value=http_client):
        yield http_client


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> Dict[str, str]:
    """Provide patched environment variables for tests.

    Returns:
        Dictionary of environment variables set.
    """
    env_vars = {
        "RAY_DASHBOARD_URL": TEST_DASHBOARD_URL,
        "LOG_LEVEL": "ERROR",  # Suppress logs during tests
    }

    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)

    return env_vars
