"""
Structured logging configuration.

Use ``get_logger(__name__)`` from this module, not print() or logging.getLogger().
"""
from typing import Optional
import structlog
from solid_agent.config.settings import get_settings


def console_renderer_with_colors():
    """
    Create a console renderer with colors for development.

    Returns:
        Configured ConsoleRenderer instance
    """
    return structlog.dev.ConsoleRenderer(
        colors=True,
        pad_event=25,
        exception_formatter=structlog.dev.plain_traceback,
    )


def json_renderer():
    """
    Create a JSON renderer for production.

    Returns:
        Configured JSONRenderer instance
    """
    return structlog.processors.JSONRenderer()


def configure_logging() -> None:
    """
    Configure structured logging for the host application.

    This sets up the logging system with:
    - Context variable merging (bind agent/action once, see it on every event)
    - Log level and ISO timestamp on each event
    - Exception formatting for persistence failures
    - JSON formatting for production or colored console for development
    """
    settings = get_settings()

    if settings.log_format == "json":
        renderer = json_renderer()
    else:
        renderer = console_renderer_with_colors()

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(settings.log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.BoundLogger:
    """
    Get a logger instance with structured logging support.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        BoundLogger instance with all configured processors

    Usage:
        >>> from solid_agent.infrastructure.observability.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("context_created", context="conversation", agent="ChatAgent")
    """
    return structlog.get_logger(name)
