"""
SQLModel table for agent contexts.

A context is one persisted agent interaction: who owns it (a polymorphic
"contextable" reference), which agent and action produced it, the prompt
configuration it was created with, and its messages and generations.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import Column, Text, Index
from sqlmodel import Field, Relationship

from solid_agent.infrastructure.database.base_model import BaseModel
from solid_agent.infrastructure.database.models.generation import AgentGeneration
from solid_agent.infrastructure.database.models.message import AgentMessage
from solid_agent.infrastructure.database.models.mixins import ContextableRef, ContextRecordMixin
from solid_agent.infrastructure.database.types import JSONType

__all__ = ["AgentContext", "ContextableRef"]


class AgentContext(BaseModel, ContextRecordMixin, table=True):
    """
    Persisted context of one agent interaction.

    Attributes:
        contextable_type: Class name of the owning entity (None when anonymous)
        contextable_id: Identifier of the owning entity (None when anonymous)
        agent_name: Agent class name
        action_name: Agent action that created the context
        instructions: Prompt instructions at creation time
        options: Free-form options bag (``input_params`` lives here)
        trace_id: Trace identifier of the prompt
        total_input_tokens: Sum of recorded generation input tokens
        total_output_tokens: Sum of recorded generation output tokens
        messages: Messages ordered by position
        generations: Generations ordered by creation time

    Example:
        >>> context = AgentContext.create(
        ...     contextable=document,
        ...     agent_name="WritingAssistantAgent",
        ...     action_name="improve",
        ...     options={"input_params": {"task": "improve"}},
        ... )
        >>> context.add_message("user", "Improve this text")
        >>> context.input_params
        {'task': 'improve'}
    """

    __tablename__ = "agent_contexts"

    contextable_type: Optional[str] = Field(default=None, max_length=255)

    contextable_id: Optional[str] = Field(default=None, max_length=255)

    agent_name: str = Field(nullable=False, max_length=255, index=True)

    action_name: Optional[str] = Field(default=None, max_length=255)

    instructions: Optional[str] = Field(default=None, sa_column=Column(Text))

    options: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSONType))

    trace_id: Optional[str] = Field(default=None, max_length=255, index=True)

    total_input_tokens: int = Field(default=0, nullable=False)

    total_output_tokens: int = Field(default=0, nullable=False)

    messages: List[AgentMessage] = Relationship(
        back_populates="context",
        sa_relationship_kwargs={
            "order_by": "AgentMessage.position",
            "lazy": "selectin",
            "cascade": "all, delete-orphan",
        },
    )

    generations: List[AgentGeneration] = Relationship(
        back_populates="context",
        sa_relationship_kwargs={
            "order_by": "AgentGeneration.created_at",
            "lazy": "selectin",
            "cascade": "all, delete-orphan",
        },
    )

    __table_args__ = (
        Index(
            "ix_agent_contexts_owner_agent_action",
            "contextable_type", "contextable_id", "agent_name", "action_name",
        ),
    )

    def __repr__(self) -> str:
        return (
            f"AgentContext(id={self.id}, "
            f"agent_name={self.agent_name!r}, "
            f"action_name={self.action_name!r}, "
            f"contextable={self.contextable!r})"
        )
