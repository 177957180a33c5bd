"""
Function-calling tool schemas for agents.

Schemas come from two places:

- inline definitions built with ``tool()``
- JSON templates at ``<agent_name>/tools/<tool>.json`` rendered by the host,
  for every registered tool name without an inline definition

Example:
    >>> @has_tools("navigate", "click")
    ... class ResearchAgent(HasTools, Agent):
    ...     pass
    >>>
    >>> with ResearchAgent.tool("summarize") as t:
    ...     t.description("Summarize the current page")
    ...     t.parameter("max_words", type="integer", default=100)
    >>>
    >>> agent = ResearchAgent()
    >>> agent.prompt(tools=agent.tools(), tool_choice="auto")
"""

from __future__ import annotations
import copy
import json
from typing import Any, Callable

from solid_agent.infrastructure.observability.logging import get_logger
from solid_agent.interfaces.tool import ToolSchema
from solid_agent.tools.builder import ToolBuilder

logger = get_logger(__name__)


class HasTools:
    """
    Mixin exposing an ordered, memoized list of tool schemas.

    The host must provide ``agent_name``, ``render_to_string(template=...)``
    and, for auto-discovery, ``list_templates(prefix)``.
    """

    _tool_names: tuple[str, ...] = ()
    _tools_auto_discover: bool = False
    _inline_tools: dict[str, dict[str, Any]] = {}
    _pending_tools: tuple[str, ...] = ()

    @classmethod
    def declare_tools(cls, *names: str) -> None:
        """
        Register template-backed tools.

        With no names, every template under ``<agent_name>/tools`` is used.
        """
        if not names:
            cls._tools_auto_discover = True
            return

        cls._tool_names = tuple(dict.fromkeys(str(name) for name in names))
        cls._tools_auto_discover = False

    @classmethod
    def tool(cls, name: str, build: Callable[[ToolBuilder], Any] | None = None) -> ToolBuilder:
        """
        Define an inline tool schema.

        Pass ``build`` to configure the builder immediately. Otherwise the
        returned builder is only registered when used as a context manager or
        when ``register()`` is called on it; ``tools()`` logs a warning for
        builders that were never registered.

        Example:
            >>> Agent.tool("search", lambda t: t.description("Search").parameter("query", required=True))
            >>> Agent.tool("ping").description("Check the service").register()
        """
        builder = ToolBuilder(name, on_complete=cls._register_inline_tool)
        if build is not None:
            build(builder)
            cls._register_inline_tool(builder)
        else:
            cls._pending_tools = cls._pending_tools + (builder.name,)
        return builder

    @classmethod
    def _register_inline_tool(cls, builder: ToolBuilder) -> None:
        cls._inline_tools = {**cls._inline_tools, builder.name: builder.to_schema()}
        cls._pending_tools = tuple(name for name in cls._pending_tools if name != builder.name)

    def tools(self) -> list[dict[str, Any]]:
        """
        Inline schemas in declaration order, then template schemas for the
        remaining registered names. Memoized per instance.
        """
        cached = self.__dict__.get("_tools_cache")
        if cached is None:
            cached = self._build_tools()
            self.__dict__["_tools_cache"] = cached
        return cached

    def reload_tools(self) -> None:
        self.__dict__.pop("_tools_cache", None)

    def registered_tool_names(self) -> list[str]:
        if type(self)._tools_auto_discover:
            return self.list_templates(f"{self.agent_name}/tools")
        return list(type(self)._tool_names)

    def _build_tools(self) -> list[dict[str, Any]]:
        inline = type(self)._inline_tools
        for name in type(self)._pending_tools:
            logger.warning("tool_builder_not_registered", tool=name, agent=self.agent_name)
        schemas = [copy.deepcopy(schema) for schema in inline.values()]
        for name in self.registered_tool_names():
            if name not in inline:
                schemas.append(self.load_tool_schema(name))
        return schemas

    def load_tool_schema(self, name: str) -> dict[str, Any]:
        """
        Render and parse the JSON template of a tool.

        Raises:
            json.JSONDecodeError: If the template is not valid JSON
            pydantic.ValidationError: If the JSON is not a tool schema
        """
        raw = self.render_to_string(template=f"{self.agent_name}/tools/{name}")
        schema = ToolSchema.model_validate(json.loads(raw)).model_dump()
        logger.debug("tool_schema_loaded", tool=name, agent=self.agent_name)
        return schema


def has_tools(*names: str) -> Callable[[type], type]:
    """Class decorator form of ``declare_tools``."""

    def decorator(cls: type) -> type:
        cls.declare_tools(*names)
        return cls

    return decorator
