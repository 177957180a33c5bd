# src/solid_agent/infrastructure/database/base_model.py
from datetime import datetime, timezone
from typing import Any, Callable, Optional
from uuid import UUID, uuid4
from sqlalchemy import DateTime, text
from sqlmodel import SQLModel, Field, select

from solid_agent.domain.exceptions import RecordNotFound
from solid_agent.infrastructure.database.connection import db


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseModel(SQLModel):
    """
    Base for all database models.

    Example:
        class AgentMessage(BaseModel, table=True):
            __tablename__ = "agent_messages"
            role: str
            content: str = Field(default="", sa_column=Column(Text))
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")}
    )
    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"onupdate": utcnow}
    )


def _coerce_id(value: Any) -> Optional[UUID]:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        return None


class ActiveRecordMixin:
    """
    Class-level finders backed by the request-scoped session.

    Gives SQLModel tables the store contract HasContext relies on
    (``find``, ``find_or_create_by``, ``create``).

    Example:
        context = AgentContext.find_or_create_by(
            contextable=user,
            agent_name="ChatAgent",
            action_name="chat",
            on_create=lambda record: setattr(record, "trace_id", "t-1"),
        )
    """

    @classmethod
    def normalize_attributes(cls, attributes: dict[str, Any]) -> dict[str, Any]:
        """Translate virtual attributes into column values. Override per model."""
        return dict(attributes)

    @classmethod
    def find(cls, id: Any):
        """
        Get a record by ID.

        Raises:
            RecordNotFound: If no record has that ID
        """
        key = _coerce_id(id)
        record = db.session().get(cls, key) if key is not None else None
        if record is None:
            raise RecordNotFound(
                f"Couldn't find {cls.__name__} with id={id}",
                details={"model": cls.__name__, "id": str(id)},
            )
        return record

    @classmethod
    def find_by(cls, **attributes: Any):
        """Return the first record matching all attributes, or None."""
        query = select(cls).filter_by(**cls.normalize_attributes(attributes))
        return db.session().exec(query).first()

    @classmethod
    def create(cls, **attributes: Any):
        """Build, save and return a new record."""
        record = cls(**cls.normalize_attributes(attributes))
        return record.save()

    @classmethod
    def find_or_create_by(
        cls,
        on_create: Optional[Callable[[Any], None]] = None,
        **attributes: Any,
    ):
        """
        Return the record matching attributes, creating it when missing.

        ``on_create`` runs only for a new record, before it is saved.
        """
        record = cls.find_by(**attributes)
        if record is not None:
            return record

        record = cls(**cls.normalize_attributes(attributes))
        if on_create is not None:
            on_create(record)
        return record.save()

    def save(self):
        with db.transaction() as session:
            session.add(self)
        return self
