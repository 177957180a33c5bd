# src/solid_agent/infrastructure/broadcast/broadcaster.py
"""
Broadcaster implementations for live tool status updates.

Publishing is fire-and-forget. Subscribers that are not listening when a
status is published simply miss it.
"""
import json
from functools import lru_cache
from typing import Any, Dict, List, Optional

from redis import Redis

from solid_agent.config.settings import get_settings
from solid_agent.infrastructure.observability.logging import get_logger
from solid_agent.interfaces.broadcast import IBroadcaster

logger = get_logger(__name__)


class InMemoryBroadcaster(IBroadcaster):
    """
    Broadcaster that records every publish in a list.

    Useful in development and tests where there is no Redis server.

    Example:
        >>> broadcaster = InMemoryBroadcaster()
        >>> broadcaster.publish("stream-1", {"tool_status": {...}})
        >>> broadcaster.broadcasts
        [{'channel': 'stream-1', 'data': {'tool_status': {...}}}]
    """

    def __init__(self):
        self.broadcasts: List[Dict[str, Any]] = []

    def publish(self, channel: str, payload: Dict[str, Any]) -> None:
        self.broadcasts.append({"channel": channel, "data": payload})

    def for_channel(self, channel: str) -> List[Dict[str, Any]]:
        """Return payloads published to one channel, oldest first."""
        return [entry["data"] for entry in self.broadcasts if entry["channel"] == channel]

    def clear(self) -> None:
        self.broadcasts.clear()


class NullBroadcaster(IBroadcaster):
    """Broadcaster that drops everything."""

    def publish(self, channel: str, payload: Dict[str, Any]) -> None:
        return None


class RedisBroadcaster(IBroadcaster):
    """
    Redis pub/sub broadcaster.

    Payloads are serialized to JSON and published on the channel named after
    the stream id.

    Example:
        >>> broadcaster = RedisBroadcaster.from_url("redis://localhost:6379/0")
        >>> broadcaster.publish("stream-1", {"tool_status": {...}})
    """

    def __init__(self, client: Redis, channel_prefix: str = ""):
        """
        Initialize Redis broadcaster.

        Args:
            client: redis-py client
            channel_prefix: Prefix prepended to every channel name
        """
        self._client = client
        self.channel_prefix = channel_prefix

    @classmethod
    def from_url(cls, url: str, channel_prefix: str = "") -> "RedisBroadcaster":
        return cls(Redis.from_url(url), channel_prefix=channel_prefix)

    def _make_channel(self, channel: str) -> str:
        if self.channel_prefix:
            return f"{self.channel_prefix}:{channel}"
        return channel

    def _serialize(self, payload: Dict[str, Any]) -> str:
        try:
            return json.dumps(payload)
        except (TypeError, ValueError) as e:
            logger.error("broadcast_serialize_failed", error=str(e))
            raise

    def publish(self, channel: str, payload: Dict[str, Any]) -> None:
        receivers = self._client.publish(self._make_channel(channel), self._serialize(payload))
        logger.debug("broadcast_published", channel=channel, receivers=receivers)

    def close(self) -> None:
        self._client.close()


def create_broadcaster(redis_url: Optional[str] = None) -> IBroadcaster:
    """
    Build a broadcaster for the given Redis URL.

    Returns a RedisBroadcaster when a URL is given, otherwise an
    InMemoryBroadcaster.
    """
    if redis_url:
        logger.debug("using_redis_broadcaster")
        return RedisBroadcaster.from_url(redis_url)
    logger.debug("using_in_memory_broadcaster")
    return InMemoryBroadcaster()


@lru_cache
def get_broadcaster() -> IBroadcaster:
    """
    Get the process-wide broadcaster configured by settings.

    Uses Redis when ``redis_url`` is set, in-memory otherwise.
    """
    settings = get_settings()
    redis_url = settings.redis_url.get_secret_value() if settings.redis_url else None
    return create_broadcaster(redis_url)
