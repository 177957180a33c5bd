"""Reference agent host."""

from solid_agent.agent.base import Agent

__all__ = ["Agent"]
