"""
Log context for agent actions.

Usage:
    from solid_agent.infrastructure.observability.context import log_context

    with log_context(agent="ChatAgent", action="chat"):
        logger.info("context_created")  # Includes agent and action
"""
from contextlib import contextmanager
from typing import Any, Iterator

import structlog


@contextmanager
def log_context(**kwargs: Any) -> Iterator[None]:
    """
    Bind key/value pairs to every log event emitted inside the block.

    Example:
        >>> with log_context(agent="ChatAgent", action="chat"):
        ...     logger.info("tool_status_broadcast", tool="search")
        >>> logger.info("outside")  # No agent or action
    """
    structlog.contextvars.bind_contextvars(**kwargs)
    try:
        yield
    finally:
        structlog.contextvars.unbind_contextvars(*kwargs.keys())
