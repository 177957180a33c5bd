# tests/conftest.py
"""
Main pytest configuration and shared fixtures for all tests.

This module provides:
- Settings override for the test environment
- SQLite in-memory database for integration tests
- Redis mock
"""

from typing import Generator
from unittest.mock import MagicMock

import pytest

from solid_agent.config.settings import Settings, get_settings
from solid_agent.infrastructure.broadcast.broadcaster import get_broadcaster
from solid_agent.infrastructure.database import DatabaseManager, db


# ============================================================================
# Pytest Configuration
# ============================================================================

pytest_plugins = ["tests.factories.fixtures"]


# ============================================================================
# Settings and Configuration
# ============================================================================

@pytest.fixture(autouse=True)
def test_settings(monkeypatch, tmp_path) -> Generator[Settings, None, None]:
    """
    Test settings with overrides for the test environment.

    Every test gets fresh settings (and a fresh process-wide broadcaster)
    with no Redis or database configured and templates under tmp_path.
    """
    monkeypatch.setenv("SOLID_AGENT_ENVIRONMENT", "local")
    monkeypatch.setenv("SOLID_AGENT_LOG_LEVEL", "40")
    monkeypatch.setenv("SOLID_AGENT_TEMPLATES_PATH", str(tmp_path / "templates"))
    monkeypatch.delenv("SOLID_AGENT_REDIS_URL", raising=False)
    monkeypatch.delenv("SOLID_AGENT_DATABASE_URL", raising=False)

    get_settings.cache_clear()
    get_broadcaster.cache_clear()

    yield get_settings()

    get_settings.cache_clear()
    get_broadcaster.cache_clear()


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture
def database() -> Generator[DatabaseManager, None, None]:
    """
    Connect the global database manager to a fresh in-memory SQLite database.

    Tables are created before the test and dropped afterwards.

    Usage:
        def test_something(database):
            context = AgentContext.create(agent_name="ChatAgent")
    """
    db.connect("sqlite://")
    db.create_all()

    yield db

    db.remove_session()
    db.drop_all()
    db.disconnect()


# ============================================================================
# Redis Fixtures
# ============================================================================

@pytest.fixture
def mock_redis() -> MagicMock:
    """
    Mock redis-py client for tests that don't need real Redis.

    Usage:
        def test_publish(mock_redis):
            broadcaster = RedisBroadcaster(mock_redis)
            broadcaster.publish("s1", {"a": 1})
            mock_redis.publish.assert_called_once()
    """
    redis = MagicMock()
    redis.publish.return_value = 1
    return redis
