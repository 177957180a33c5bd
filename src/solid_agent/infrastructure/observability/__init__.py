"""Observability: structured logging."""

from solid_agent.infrastructure.observability.logging import configure_logging, get_logger
from solid_agent.infrastructure.observability.context import log_context

__all__ = ["configure_logging", "get_logger", "log_context"]
