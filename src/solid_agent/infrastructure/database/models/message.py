"""
SQLModel table for messages that belong to an agent context.
"""

from typing import Any, Dict, Optional, TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Column, Text, Index
from sqlmodel import Field, Relationship

from solid_agent.infrastructure.database.base_model import BaseModel
from solid_agent.infrastructure.database.models.mixins import MessageRecordMixin, MessageRole
from solid_agent.infrastructure.database.types import JSONType

if TYPE_CHECKING:
    from solid_agent.infrastructure.database.models.context import AgentContext

__all__ = ["AgentMessage", "MessageRole"]


class AgentMessage(BaseModel, MessageRecordMixin, table=True):
    """
    One message of a context's conversation.

    Messages are immutable once created and are ordered by ``position``
    within their context.

    Attributes:
        context_id: Owning context
        role: user, assistant, system or tool
        content: Message text
        position: Zero-based index within the context
        extra: Attributes passed to add_message that have no column
    """

    __tablename__ = "agent_messages"

    context_id: UUID = Field(
        foreign_key="agent_contexts.id",
        nullable=False,
        index=True,
    )

    role: str = Field(nullable=False, max_length=32)

    content: str = Field(default="", sa_column=Column(Text, nullable=False))

    position: int = Field(default=0, nullable=False)

    tool_call_id: Optional[str] = Field(default=None, max_length=255)

    extra: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSONType))

    context: Optional["AgentContext"] = Relationship(back_populates="messages")

    __table_args__ = (
        Index("ix_agent_messages_context_id_position", "context_id", "position"),
    )

    def __repr__(self) -> str:
        return (
            f"AgentMessage(id={self.id}, "
            f"context_id={self.context_id}, "
            f"role={self.role!r}, "
            f"position={self.position})"
        )
