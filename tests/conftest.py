"""Shared pytest fixtures and configuration."""

from datetime import UTC, datetime

import pytest


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")
    config.addinivalue_line("markers", "real: calls the real GitHub API (local only)")


@pytest.fixture
def cutoff() -> datetime:
    """A fixed cutoff instant."""
    return datetime(2024, 3, 15, 12, 0, tzinfo=UTC)
