"""
Live status updates for tool calls.

Tools given a description are wrapped so that each call first publishes a
status line to the stream named by ``params["stream_id"]``, then runs.

Example:
    >>> @tool_description("navigate", lambda args: f"Visiting {args.get('url') or 'page'}...")
    ... @tool_description("extract_text", "Reading page content...")
    ... class ResearchAgent(StreamsToolUpdates, Agent):
    ...     def navigate(self, url): ...
    ...     def extract_text(self, selector="body"): ...
    >>>
    >>> agent = ResearchAgent(params={"stream_id": "s1"})
    >>> agent.navigate(url="https://example.com")
    # published to "s1":
    # {"tool_status": {"name": "navigate", "description": "Visiting https://example.com...",
    #                  "timestamp": "2024-01-01T12:00:00Z"}}
"""

from __future__ import annotations
from functools import wraps
from typing import Any, Callable, Mapping, Union

from solid_agent.config.settings import get_settings
from solid_agent.infrastructure.observability.logging import get_logger
from solid_agent.streaming.descriptions import default_tool_description
from solid_agent.streaming.events import ToolStatusEvent

logger = get_logger(__name__)

Description = Union[str, Callable[[dict[str, Any]], str]]


class StreamsToolUpdates:
    """
    Mixin broadcasting a status line before each described tool runs.

    The host must provide ``params`` and ``broadcaster``.
    """

    _tool_descriptions: dict[str, Description] = {}
    _wrapped_tools: tuple[str, ...] = ()

    @classmethod
    def declare_tool_description(cls, tool_name: str, description: Description) -> None:
        """
        Set the status line of a tool (last one wins).

        Args:
            tool_name: Name of a method on this class
            description: Static string, or a callable receiving the call's
                keyword arguments as a dict

        Raises:
            AttributeError: If the class has no such method
        """
        name = str(tool_name)
        cls._tool_descriptions = {**cls._tool_descriptions, name: description}

        if name not in cls._wrapped_tools:
            cls._wrap_tool(name)
            cls._wrapped_tools = cls._wrapped_tools + (name,)

    @classmethod
    def _wrap_tool(cls, name: str) -> None:
        original = getattr(cls, name, None)
        if not callable(original):
            raise AttributeError(f"{cls.__name__} has no tool method {name!r}")

        @wraps(original)
        def wrapper(self: StreamsToolUpdates, *args: Any, **kwargs: Any) -> Any:
            self.broadcast_tool_status(name, kwargs)
            return original(self, *args, **kwargs)

        setattr(cls, name, wrapper)

    def tool_description_for(self, tool_name: str, args: Mapping[str, Any] | None = None) -> str:
        """Status line for a call: configured description first, defaults otherwise."""
        args = dict(args or {})
        description = type(self)._tool_descriptions.get(tool_name)
        if callable(description):
            return description(args)
        if isinstance(description, str):
            return description
        return default_tool_description(
            tool_name,
            args,
            max_length=get_settings().tool_status_url_max_length,
        )

    def broadcast_tool_status(self, tool_name: str, args: Mapping[str, Any] | None = None) -> str:
        """
        Publish the status of a tool call when the request has a stream id.

        Returns:
            The status line, whether or not it was published
        """
        status = self.tool_description_for(tool_name, args)
        stream_id = self.params.get("stream_id")
        if stream_id:
            event = ToolStatusEvent.for_tool(tool_name, status)
            self.broadcaster.publish(stream_id, event.to_payload())
            logger.debug("tool_status_broadcast", tool=tool_name, stream_id=stream_id)
        return status


def tool_description(tool_name: str, description: Description) -> Callable[[type], type]:
    """Class decorator form of ``declare_tool_description``."""

    def decorator(cls: type) -> type:
        cls.declare_tool_description(tool_name, description)
        return cls

    return decorator
