# src/solid_agent/interfaces/store.py
from __future__ import annotations
from typing import Any, Callable, Protocol, Sequence, runtime_checkable


@runtime_checkable
class MessageRecord(Protocol):
    """A persisted message that belongs to exactly one context."""

    role: str
    content: str

    def to_message_dict(self) -> dict[str, Any]:
        """Return the ``{"role", "content"}`` pair sent to a prompt."""
        ...


@runtime_checkable
class ContextRecord(Protocol):
    """
    A persisted context as seen by HasContext.

    Implement this (together with ContextModel on the class) to back
    contexts with something other than the bundled SQLModel tables.

    Optional attributes read when present: ``instructions``, ``options``,
    ``trace_id``, ``total_tokens``, ``contextable``.
    """

    id: Any
    agent_name: str
    action_name: str | None

    @property
    def messages(self) -> Sequence[MessageRecord]:
        """Messages in the store's natural order."""
        ...

    @property
    def generations(self) -> Sequence[Any]:
        """Recorded generations in creation order."""
        ...

    def add_message(self, role: str, content: str, **attributes: Any) -> MessageRecord:
        """Append a message to this context and return it."""
        ...

    def record_generation(self, response: Any) -> Any:
        """Persist one model response for audit and analytics."""
        ...


class ContextModel(Protocol):
    """
    Class-level store operations used by HasContext.

    Example:
        class AgentContext(BaseModel, ActiveRecordMixin, table=True):
            ...

        AgentContext.find(context_id)
        AgentContext.find_or_create_by(contextable=user, agent_name="ChatAgent")
        AgentContext.create(agent_name="ChatAgent", action_name="chat")
    """

    def find(self, id: Any) -> ContextRecord:
        """Fetch by identifier; raise RecordNotFound when absent."""
        ...

    def find_or_create_by(
        self,
        on_create: Callable[[ContextRecord], None] | None = None,
        **attributes: Any,
    ) -> ContextRecord:
        """Return the first record matching attributes, creating it when missing."""
        ...

    def create(self, **attributes: Any) -> ContextRecord:
        """Unconditionally create a record."""
        ...
