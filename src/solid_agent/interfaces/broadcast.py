# src/solid_agent/interfaces/broadcast.py
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any


class IBroadcaster(ABC):
    """
    Interface for a live pub/sub channel.

    Publishing is fire-and-forget: no acknowledgement is consumed.

    Example:
        class WebSocketBroadcaster(IBroadcaster):
            def publish(self, channel: str, payload: dict[str, Any]) -> None:
                manager.send(channel, payload)
    """

    @abstractmethod
    def publish(self, channel: str, payload: dict[str, Any]) -> None:
        """
        Publish a payload to a channel.

        Args:
            channel: Channel identifier (a stream id)
            payload: JSON-serializable mapping
        """
        pass
