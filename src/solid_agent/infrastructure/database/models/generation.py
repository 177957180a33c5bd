"""
SQLModel table capturing raw model responses for audit and analytics.
"""

from typing import Any, Dict, Optional, TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Column, Text
from sqlmodel import Field, Relationship

from solid_agent.infrastructure.database.base_model import BaseModel
from solid_agent.infrastructure.database.models.mixins import GenerationRecordMixin
from solid_agent.infrastructure.database.types import JSONType

if TYPE_CHECKING:
    from solid_agent.infrastructure.database.models.context import AgentContext


class AgentGeneration(BaseModel, GenerationRecordMixin, table=True):
    """
    One model invocation recorded against a context.

    Attributes:
        context_id: Owning context
        model: Model identifier reported by the response
        content: Text of the returned message
        finish_reason: Why the model stopped
        input_tokens: Prompt tokens used
        output_tokens: Completion tokens used
        raw_response: Provider payload, when the response carries one
    """

    __tablename__ = "agent_generations"

    context_id: UUID = Field(
        foreign_key="agent_contexts.id",
        nullable=False,
        index=True,
    )

    model: Optional[str] = Field(default=None, max_length=255)

    content: Optional[str] = Field(default=None, sa_column=Column(Text))

    finish_reason: Optional[str] = Field(default=None, max_length=64)

    input_tokens: int = Field(default=0, nullable=False)

    output_tokens: int = Field(default=0, nullable=False)

    raw_response: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSONType))

    context: Optional["AgentContext"] = Relationship(back_populates="generations")
