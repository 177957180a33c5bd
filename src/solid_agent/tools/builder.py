"""
Builder for inline function-calling tool schemas.
"""

from __future__ import annotations
from typing import Any, Callable

from solid_agent.interfaces.tool import ToolSchema

_PYTHON_TYPES: dict[type, str] = {
    str: "string",
    int: "integer",
    float: "number",
    bool: "boolean",
    dict: "object",
    list: "array",
}


def json_schema_type(value: str | type) -> str:
    """
    Map a parameter type to its JSON Schema name.

    Example:
        >>> json_schema_type(int)
        'integer'
        >>> json_schema_type("array")
        'array'
    """
    if isinstance(value, type):
        return _PYTHON_TYPES.get(value, "object")
    return str(value)


class ToolBuilder:
    """
    Collects a tool's description and parameters and produces its schema.

    Use it directly, as a context manager (the schema is registered when the
    block exits without error), with an explicit ``register()`` call, or
    through ``HasTools.tool``.

    Example:
        >>> with ResearchAgent.tool("navigate") as t:
        ...     t.description("Navigate to a URL")
        ...     t.parameter("url", required=True, description="URL to visit")
        ...     t.parameter("timeout", type="integer", default=30)
        >>>
        >>> ToolBuilder("search").description("Search").to_schema()
        {'type': 'function', 'name': 'search', 'description': 'Search', 'parameters': {...}}
    """

    def __init__(self, name: str, on_complete: Callable[[ToolBuilder], None] | None = None):
        self.name = str(name)
        self._description = ""
        self._properties: dict[str, dict[str, Any]] = {}
        self._required: list[str] = []
        self._on_complete = on_complete

    def description(self, text: str) -> ToolBuilder:
        self._description = text
        return self

    def parameter(
        self,
        name: str,
        type: str | type = "string",
        required: bool = False,
        default: Any = None,
        description: str | None = None,
        enum: list[Any] | None = None,
        items: dict[str, Any] | None = None,
    ) -> ToolBuilder:
        """
        Declare a parameter. Properties keep declaration order.

        Only the optional keys that are not None end up in the schema.
        """
        name = str(name)
        prop: dict[str, Any] = {"type": json_schema_type(type)}
        extras = {"description": description, "enum": enum, "items": items, "default": default}
        prop.update({key: value for key, value in extras.items() if value is not None})

        self._properties[name] = prop
        if required and name not in self._required:
            self._required.append(name)
        return self

    def register(self) -> ToolBuilder:
        """Hand the finished schema to the owner, for builders not used in a ``with`` block."""
        if self._on_complete is not None:
            self._on_complete(self)
        return self

    def to_schema(self) -> dict[str, Any]:
        return ToolSchema(
            name=self.name,
            description=self._description,
            parameters={
                "type": "object",
                "properties": dict(self._properties),
                "required": list(self._required),
            },
        ).model_dump()

    def __enter__(self) -> ToolBuilder:
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            self.register()
        return False
