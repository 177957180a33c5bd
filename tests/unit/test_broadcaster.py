# tests/unit/test_broadcaster.py
"""Unit tests for broadcaster implementations."""

import json
from unittest.mock import patch

import pytest

from solid_agent.infrastructure.broadcast import (
    InMemoryBroadcaster,
    NullBroadcaster,
    RedisBroadcaster,
    create_broadcaster,
    get_broadcaster,
)
from solid_agent.config.settings import get_settings


@pytest.mark.unit
class TestInMemoryBroadcaster:

    def test_records_publishes_in_order(self):
        broadcaster = InMemoryBroadcaster()

        broadcaster.publish("s1", {"n": 1})
        broadcaster.publish("s2", {"n": 2})
        broadcaster.publish("s1", {"n": 3})

        assert broadcaster.broadcasts == [
            {"channel": "s1", "data": {"n": 1}},
            {"channel": "s2", "data": {"n": 2}},
            {"channel": "s1", "data": {"n": 3}},
        ]
        assert broadcaster.for_channel("s1") == [{"n": 1}, {"n": 3}]

    def test_clear(self):
        broadcaster = InMemoryBroadcaster()
        broadcaster.publish("s1", {"n": 1})

        broadcaster.clear()

        assert broadcaster.broadcasts == []


@pytest.mark.unit
class TestNullBroadcaster:

    def test_publish_is_noop(self):
        assert NullBroadcaster().publish("s1", {"n": 1}) is None


@pytest.mark.unit
class TestRedisBroadcaster:

    def test_publishes_json(self, mock_redis):
        broadcaster = RedisBroadcaster(mock_redis)

        broadcaster.publish("s1", {"tool_status": {"name": "navigate"}})

        mock_redis.publish.assert_called_once()
        channel, message = mock_redis.publish.call_args.args
        assert channel == "s1"
        assert json.loads(message) == {"tool_status": {"name": "navigate"}}

    def test_channel_prefix(self, mock_redis):
        broadcaster = RedisBroadcaster(mock_redis, channel_prefix="agents")

        broadcaster.publish("s1", {})

        assert mock_redis.publish.call_args.args[0] == "agents:s1"

    def test_unserializable_payload_raises(self, mock_redis):
        broadcaster = RedisBroadcaster(mock_redis)

        with pytest.raises(TypeError):
            broadcaster.publish("s1", {"value": object()})

        mock_redis.publish.assert_not_called()

    def test_connection_errors_propagate(self, mock_redis):
        mock_redis.publish.side_effect = ConnectionError("redis down")
        broadcaster = RedisBroadcaster(mock_redis)

        with pytest.raises(ConnectionError):
            broadcaster.publish("s1", {})

    def test_close(self, mock_redis):
        RedisBroadcaster(mock_redis).close()

        mock_redis.close.assert_called_once()

    def test_from_url(self, mock_redis):
        with patch("solid_agent.infrastructure.broadcast.broadcaster.Redis.from_url", return_value=mock_redis) as from_url:
            broadcaster = RedisBroadcaster.from_url("redis://localhost:6379/0")

        from_url.assert_called_once_with("redis://localhost:6379/0")
        broadcaster.publish("s1", {})
        mock_redis.publish.assert_called_once()


@pytest.mark.unit
class TestFactory:

    def test_without_url_is_in_memory(self):
        assert isinstance(create_broadcaster(None), InMemoryBroadcaster)

    def test_with_url_is_redis(self, mock_redis):
        with patch("solid_agent.infrastructure.broadcast.broadcaster.Redis.from_url", return_value=mock_redis):
            assert isinstance(create_broadcaster("redis://localhost:6379/0"), RedisBroadcaster)

    def test_get_broadcaster_is_cached(self):
        assert get_broadcaster() is get_broadcaster()
        assert isinstance(get_broadcaster(), InMemoryBroadcaster)

    def test_get_broadcaster_uses_settings(self, monkeypatch, mock_redis):
        monkeypatch.setenv("SOLID_AGENT_REDIS_URL", "redis://cache:6379/1")
        get_settings.cache_clear()
        get_broadcaster.cache_clear()

        with patch("solid_agent.infrastructure.broadcast.broadcaster.Redis.from_url", return_value=mock_redis) as from_url:
            broadcaster = get_broadcaster()

        assert isinstance(broadcaster, RedisBroadcaster)
        from_url.assert_called_once_with("redis://cache:6379/1")
