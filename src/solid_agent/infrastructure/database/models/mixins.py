"""
Behaviour shared by context, message and generation tables.

The bundled ``AgentContext``/``AgentMessage``/``AgentGeneration`` tables and
the tables written by ``scripts/generate_context.py`` declare their own
columns and relationships and take their behaviour from these mixins. A
context finds its message and generation classes through its ``messages``
and ``generations`` relationships.

Example:
    class Conversation(BaseModel, ContextRecordMixin, table=True):
        __tablename__ = "conversations"
        ...
        messages: List["ConversationMessage"] = Relationship(back_populates="context")
        generations: List["ConversationGeneration"] = Relationship(back_populates="context")
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any, Dict, NamedTuple, Optional

from sqlalchemy import inspect

from solid_agent.infrastructure.database.base_model import ActiveRecordMixin, utcnow
from solid_agent.infrastructure.database.connection import db
from solid_agent.interfaces.generation import read_field, response_content

# Set by add_message itself
RESERVED_MESSAGE_KEYS = ("role", "content", "position")


class MessageRole(str, Enum):
    """Roles a persisted message can carry."""
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"
    TOOL = "tool"


class ContextableRef(NamedTuple):
    """
    Polymorphic reference to the domain entity owning a context.

    Example:
        >>> ContextableRef.of(user)
        ContextableRef(type_name='User', id='42')
    """
    type_name: str
    id: str

    @classmethod
    def of(cls, owner: Any) -> "ContextableRef":
        """
        Build a reference from an entity exposing ``id``.

        Raises:
            TypeError: If owner has no ``id``
        """
        if isinstance(owner, ContextableRef):
            return owner
        owner_id = getattr(owner, "id", None)
        if owner_id is None:
            raise TypeError(
                f"Contextable {owner!r} must expose an 'id' attribute"
            )
        return cls(type(owner).__name__, str(owner_id))


class MessageRecordMixin:
    """Building and serializing message rows."""

    @classmethod
    def build(cls, role: Any, content: str, position: int = 0, **attributes: Any):
        """
        Build an unsaved message.

        Args:
            role: A MessageRole or its string value
            content: Message text
            position: Index within the context
            **attributes: Column values; unknown keys land in ``extra``

        Raises:
            ValueError: If role is not a known MessageRole
        """
        reserved = {"id", "context_id", "context", "role", "content", "position", "extra"}
        columns = {k: v for k, v in attributes.items() if k in cls.model_fields and k not in reserved}
        extra = {k: v for k, v in attributes.items() if k not in columns}
        return cls(
            role=MessageRole(role).value,
            content=content,
            position=position,
            extra=extra,
            **columns,
        )

    def to_message_dict(self) -> Dict[str, Any]:
        return {"role": self.role, "content": self.content}


class GenerationRecordMixin:
    """Building generation rows from model responses."""

    @classmethod
    def from_response(cls, response: Any):
        """
        Build an unsaved generation from a response object or mapping.

        Usage is read from ``usage.input_tokens``/``usage.output_tokens``,
        falling back to the ``prompt_tokens``/``completion_tokens`` spelling.
        """
        usage = read_field(response, "usage")
        raw = read_field(response, "raw_response")

        return cls(
            model=read_field(response, "model"),
            content=response_content(response),
            finish_reason=read_field(response, "finish_reason"),
            input_tokens=read_field(usage, "input_tokens") or read_field(usage, "prompt_tokens") or 0,
            output_tokens=read_field(usage, "output_tokens") or read_field(usage, "completion_tokens") or 0,
            raw_response=dict(raw) if isinstance(raw, Mapping) else {},
        )

    @property
    def total_tokens(self) -> int:
        return (self.input_tokens or 0) + (self.output_tokens or 0)


class ContextRecordMixin(ActiveRecordMixin):
    """
    Store contract of a context table.

    Requires the columns ``contextable_type``, ``contextable_id``, ``options``,
    ``total_input_tokens``, ``total_output_tokens`` and ``updated_at``, and the
    ``messages``/``generations`` relationships.
    """

    @classmethod
    def normalize_attributes(cls, attributes: Dict[str, Any]) -> Dict[str, Any]:
        attributes = dict(attributes)
        if "contextable" in attributes:
            owner = attributes.pop("contextable")
            ref = ContextableRef.of(owner) if owner is not None else None
            attributes["contextable_type"] = ref.type_name if ref else None
            attributes["contextable_id"] = ref.id if ref else None
        return attributes

    @classmethod
    def message_model(cls) -> type:
        return inspect(cls).relationships["messages"].mapper.class_

    @classmethod
    def generation_model(cls) -> type:
        return inspect(cls).relationships["generations"].mapper.class_

    @property
    def contextable(self) -> Optional[ContextableRef]:
        if self.contextable_type is None:
            return None
        return ContextableRef(self.contextable_type, self.contextable_id)

    @property
    def input_params(self) -> Optional[Dict[str, Any]]:
        return (self.options or {}).get("input_params")

    @property
    def total_tokens(self) -> int:
        return (self.total_input_tokens or 0) + (self.total_output_tokens or 0)

    def add_message(self, role: Any, content: str, **attributes: Any):
        """
        Append a message and save it.

        The position is always the current message count; ``role``,
        ``content`` and ``position`` passed in ``attributes`` are ignored.

        Args:
            role: user, assistant, system or tool
            content: Message text
            **attributes: Extra message attributes

        Returns:
            The saved message
        """
        attributes = {k: v for k, v in attributes.items() if k not in RESERVED_MESSAGE_KEYS}
        message = self.message_model().build(role, content, position=len(self.messages), **attributes)
        with db.transaction() as session:
            session.add(self)
            self.messages.append(message)
            self.updated_at = utcnow()
        return message

    def record_generation(self, response: Any):
        """
        Record one model response.

        Creates a generation row, appends the returned content as an assistant
        message and adds the reported usage to the context totals.

        Returns:
            The saved generation
        """
        generation = self.generation_model().from_response(response)
        with db.transaction() as session:
            session.add(self)
            self.generations.append(generation)
            if generation.content:
                self.messages.append(
                    self.message_model().build(
                        MessageRole.ASSISTANT,
                        generation.content,
                        position=len(self.messages),
                    )
                )
            self.total_input_tokens = (self.total_input_tokens or 0) + generation.input_tokens
            self.total_output_tokens = (self.total_output_tokens or 0) + generation.output_tokens
            self.updated_at = utcnow()
        return generation
