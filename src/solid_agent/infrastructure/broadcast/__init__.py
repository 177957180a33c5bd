"""Broadcaster implementations."""

from solid_agent.infrastructure.broadcast.broadcaster import (
    InMemoryBroadcaster,
    NullBroadcaster,
    RedisBroadcaster,
    create_broadcaster,
    get_broadcaster,
)

__all__ = [
    "InMemoryBroadcaster",
    "NullBroadcaster",
    "RedisBroadcaster",
    "create_broadcaster",
    "get_broadcaster",
]
