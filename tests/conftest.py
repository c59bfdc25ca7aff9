"""Shared fixtures and configuration for tests."""

from __future__ import annotations

from typing import Any

import pytest
import respx

from stackr.models import App, AppStats

# ==================== MOCK DATA ====================


def make_app_dict(
    app_id: str = "app_abc123",
    name: str = "my-api",
    status: str = "running",
    created_at: str = "2026-01-01T00:00:00Z",
    updated_at: str = "2026-01-02T12:30:00Z",
    **extra: Any,
) -> dict[str, Any]:
    """Create a mock app dictionary."""
    return {
        "id": app_id,
        "name": name,
        "status": status,
        "createdAt": created_at,
        "updatedAt": updated_at,
        **extra,
    }


def make_stats_dict(
    cpu: float = 12.5,
    memory: float = 256,
    network_in: float = 1024,
    network_out: float = 2048,
    uptime: float | None = 3600,
    **extra: Any,
) -> dict[str, Any]:
    """Create a mock stats dictionary."""
    data: dict[str, Any] = {
        "cpu": cpu,
        "memory": memory,
        "network": {"in": network_in, "out": network_out},
        **extra,
    }
    if uptime is not None:
        data["uptime"] = uptime
    return data


# ==================== FIXTURES ====================


@pytest.fixture
def api_base_url() -> str:
    """Base URL for API mocks."""
    return "https://api.stackr.lat/v1"


@pytest.fixture
def mock_token() -> str:
    """Mock API token for testing."""
    return "sk_live_test_1234567890"


@pytest.fixture
def mock_app_data() -> dict[str, Any]:
    """Fixture for a mock app dictionary."""
    return make_app_dict()


@pytest.fixture
def mock_app(mock_app_data: dict[str, Any]) -> App:
    """Fixture for a mock App object."""
    return App.model_validate(mock_app_data)


@pytest.fixture
def mock_stats() -> AppStats:
    """Fixture for a mock AppStats object."""
    return AppStats.model_validate(make_stats_dict())


@pytest.fixture
def respx_mock():
    """Fixture for respx mocking."""
    with respx.mock(assert_all_called=False) as mock:
        yield mock


@pytest.fixture
def archive_file(tmp_path):
    """Create a small zip-like archive on disk."""
    path = tmp_path / "my-app.zip"
    path.write_bytes(b"PK\x03\x04fake-archive")
    return path
