"""
Context table scaffolding.

Writes a models module with ``<Name>``, ``<Name>Message`` and
``<Name>Generation`` SQLModel tables for a named context, plus an alembic
revision creating them. The class names match what ``has_context("<name>")``
infers, and the module registers them on ``default_model_registry``.

Example:
    >>> names = ContextNames.from_name("conversations")
    >>> names.class_name, names.message_class, names.table_name
    ('Conversation', 'ConversationMessage', 'conversations')
    >>> write_context_models(Path("app/models"), names)
    PosixPath('app/models/conversation.py')
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from string import Template

from solid_agent.concerns.naming import (
    CANONICAL_CONTEXT_NAME,
    ModelNames,
    infer_class_names,
    normalize_context_name,
    pluralize,
    underscore,
)
from solid_agent.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)

_REVISION_RE = re.compile(r"""^revision\s*=\s*['"]([^'"]+)['"]""", re.MULTILINE)
_DOWN_REVISION_RE = re.compile(r"""^down_revision\s*=\s*['"]([^'"]+)['"]""", re.MULTILINE)


@dataclass(frozen=True)
class ContextNames:
    """Class and table names of one context's three tables."""
    context_name: str
    class_name: str
    table_name: str
    message_class: str
    message_table: str
    generation_class: str
    generation_table: str

    @classmethod
    def from_name(cls, name: str) -> "ContextNames":
        """
        Derive names from a context name or class name.

        Raises:
            ValueError: For the canonical "context" name, served by AgentContext
        """
        context_name = normalize_context_name(underscore(str(name)))
        if context_name == CANONICAL_CONTEXT_NAME:
            raise ValueError(
                "The 'context' name uses the bundled AgentContext tables; pick another name"
            )
        models = infer_class_names(context_name, None, ModelNames("", "", ""))
        return cls(
            context_name=context_name,
            class_name=models.context,
            table_name=pluralize(context_name),
            message_class=models.message,
            message_table=f"{context_name}_messages",
            generation_class=models.generation,
            generation_table=f"{context_name}_generations",
        )

    @property
    def module_name(self) -> str:
        return self.context_name

    def substitutions(self) -> dict[str, str]:
        return {
            "context_name": self.context_name,
            "class_name": self.class_name,
            "table_name": self.table_name,
            "message_class": self.message_class,
            "message_table": self.message_table,
            "generation_class": self.generation_class,
            "generation_table": self.generation_table,
        }


MODELS_TEMPLATE = Template('''"""
SQLModel tables for the "$context_name" context.

Used by agents declaring ``@has_context("$context_name")``.
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import Column, Index, Text
from sqlmodel import Field, Relationship

from solid_agent.infrastructure.database import (
    BaseModel,
    ContextRecordMixin,
    GenerationRecordMixin,
    MessageRecordMixin,
    default_model_registry,
)
from solid_agent.infrastructure.database.types import JSONType


@default_model_registry.register
class $message_class(BaseModel, MessageRecordMixin, table=True):
    """One message of a $context_name."""

    __tablename__ = "$message_table"

    context_id: UUID = Field(foreign_key="$table_name.id", nullable=False, index=True)

    role: str = Field(nullable=False, max_length=32)

    content: str = Field(default="", sa_column=Column(Text, nullable=False))

    position: int = Field(default=0, nullable=False)

    tool_call_id: Optional[str] = Field(default=None, max_length=255)

    extra: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSONType))

    context: Optional["$class_name"] = Relationship(back_populates="messages")

    __table_args__ = (
        Index("ix_${message_table}_context_id_position", "context_id", "position"),
    )


@default_model_registry.register
class $generation_class(BaseModel, GenerationRecordMixin, table=True):
    """One model response recorded against a $context_name."""

    __tablename__ = "$generation_table"

    context_id: UUID = Field(foreign_key="$table_name.id", nullable=False, index=True)

    model: Optional[str] = Field(default=None, max_length=255)

    content: Optional[str] = Field(default=None, sa_column=Column(Text))

    finish_reason: Optional[str] = Field(default=None, max_length=64)

    input_tokens: int = Field(default=0, nullable=False)

    output_tokens: int = Field(default=0, nullable=False)

    raw_response: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSONType))

    context: Optional["$class_name"] = Relationship(back_populates="generations")


@default_model_registry.register
class $class_name(BaseModel, ContextRecordMixin, table=True):
    """Persisted $context_name of one agent interaction."""

    __tablename__ = "$table_name"

    contextable_type: Optional[str] = Field(default=None, max_length=255)

    contextable_id: Optional[str] = Field(default=None, max_length=255)

    agent_name: str = Field(nullable=False, max_length=255, index=True)

    action_name: Optional[str] = Field(default=None, max_length=255)

    instructions: Optional[str] = Field(default=None, sa_column=Column(Text))

    options: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSONType))

    trace_id: Optional[str] = Field(default=None, max_length=255, index=True)

    total_input_tokens: int = Field(default=0, nullable=False)

    total_output_tokens: int = Field(default=0, nullable=False)

    messages: List[$message_class] = Relationship(
        back_populates="context",
        sa_relationship_kwargs={
            "order_by": "$message_class.position",
            "lazy": "selectin",
            "cascade": "all, delete-orphan",
        },
    )

    generations: List[$generation_class] = Relationship(
        back_populates="context",
        sa_relationship_kwargs={
            "order_by": "$generation_class.created_at",
            "lazy": "selectin",
            "cascade": "all, delete-orphan",
        },
    )

    __table_args__ = (
        Index(
            "ix_${table_name}_owner_agent_action",
            "contextable_type", "contextable_id", "agent_name", "action_name",
        ),
    )
''')


MIGRATION_TEMPLATE = Template('''"""create $table_name tables

Revision ID: $revision
Revises: $down_revision_doc
Create Date: $create_date

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB


# revision identifiers, used by Alembic.
revision = '$revision'
down_revision = $down_revision
branch_labels = None
depends_on = None

JSONType = sa.JSON().with_variant(JSONB(), 'postgresql')


def _base_columns():
    """Primary key and timestamps (from BaseModel)."""
    return [
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text('CURRENT_TIMESTAMP'),
        ),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Create $table_name, $message_table and $generation_table."""

    op.create_table(
        '$table_name',
        *_base_columns(),
        sa.Column('contextable_type', sa.String(length=255), nullable=True),
        sa.Column('contextable_id', sa.String(length=255), nullable=True),
        sa.Column('agent_name', sa.String(length=255), nullable=False),
        sa.Column('action_name', sa.String(length=255), nullable=True),
        sa.Column('instructions', sa.Text(), nullable=True),
        sa.Column('options', JSONType, nullable=True),
        sa.Column('trace_id', sa.String(length=255), nullable=True),
        sa.Column('total_input_tokens', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_output_tokens', sa.Integer(), nullable=False, server_default='0'),
    )
    op.create_index('ix_${table_name}_agent_name', '$table_name', ['agent_name'], unique=False)
    op.create_index('ix_${table_name}_trace_id', '$table_name', ['trace_id'], unique=False)
    op.create_index(
        'ix_${table_name}_owner_agent_action',
        '$table_name',
        ['contextable_type', 'contextable_id', 'agent_name', 'action_name'],
        unique=False
    )

    op.create_table(
        '$message_table',
        *_base_columns(),
        sa.Column(
            'context_id',
            sa.Uuid(),
            sa.ForeignKey('${table_name}.id', ondelete='CASCADE'),
            nullable=False
        ),
        sa.Column('role', sa.String(length=32), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('tool_call_id', sa.String(length=255), nullable=True),
        sa.Column('extra', JSONType, nullable=True),
    )
    op.create_index('ix_${message_table}_context_id', '$message_table', ['context_id'], unique=False)
    op.create_index(
        'ix_${message_table}_context_id_position',
        '$message_table',
        ['context_id', 'position'],
        unique=False
    )

    op.create_table(
        '$generation_table',
        *_base_columns(),
        sa.Column(
            'context_id',
            sa.Uuid(),
            sa.ForeignKey('${table_name}.id', ondelete='CASCADE'),
            nullable=False
        ),
        sa.Column('model', sa.String(length=255), nullable=True),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column('finish_reason', sa.String(length=64), nullable=True),
        sa.Column('input_tokens', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('output_tokens', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('raw_response', JSONType, nullable=True),
    )
    op.create_index('ix_${generation_table}_context_id', '$generation_table', ['context_id'], unique=False)


def downgrade() -> None:
    """Drop the $context_name tables and their indexes."""

    op.drop_index('ix_${generation_table}_context_id', table_name='$generation_table')
    op.drop_table('$generation_table')

    op.drop_index('ix_${message_table}_context_id_position', table_name='$message_table')
    op.drop_index('ix_${message_table}_context_id', table_name='$message_table')
    op.drop_table('$message_table')

    op.drop_index('ix_${table_name}_owner_agent_action', table_name='$table_name')
    op.drop_index('ix_${table_name}_trace_id', table_name='$table_name')
    op.drop_index('ix_${table_name}_agent_name', table_name='$table_name')
    op.drop_table('$table_name')
''')


def render_context_models(names: ContextNames) -> str:
    return MODELS_TEMPLATE.substitute(names.substitutions())


def render_context_migration(
    names: ContextNames,
    revision: str,
    down_revision: str | None = None,
    create_date: datetime | None = None,
) -> str:
    create_date = create_date or datetime.now(timezone.utc)
    return MIGRATION_TEMPLATE.substitute(
        names.substitutions(),
        revision=revision,
        down_revision=repr(down_revision),
        down_revision_doc=down_revision or "",
        create_date=create_date.strftime("%Y-%m-%d %H:%M:%S.%f"),
    )


def find_head_revision(versions_path: Path) -> str | None:
    """
    Return the single head revision among the migration files, or None when empty.

    Raises:
        ValueError: If the revisions have more than one head
    """
    revisions: set[str] = set()
    parents: set[str] = set()
    for path in sorted(Path(versions_path).glob("*.py")):
        source = path.read_text(encoding="utf-8")
        revision = _REVISION_RE.search(source)
        if revision is None:
            continue
        revisions.add(revision.group(1))
        parents.update(_DOWN_REVISION_RE.findall(source))

    heads = sorted(revisions - parents)
    if len(heads) > 1:
        raise ValueError(f"Multiple alembic heads: {', '.join(heads)}")
    return heads[0] if heads else None


def next_revision_id(versions_path: Path, today: datetime | None = None) -> str:
    """``YYYYMMDD_NNNN``, numbered after the revisions already written that day."""
    prefix = (today or datetime.now(timezone.utc)).strftime("%Y%m%d")
    taken = len(list(Path(versions_path).glob(f"{prefix}_*.py")))
    return f"{prefix}_{taken + 1:04d}"


def write_context_models(models_path: Path, names: ContextNames, overwrite: bool = False) -> Path:
    """
    Write ``<models_path>/<context_name>.py``.

    Raises:
        FileExistsError: If the module exists and ``overwrite`` is False
    """
    path = Path(models_path) / f"{names.module_name}.py"
    if path.exists() and not overwrite:
        raise FileExistsError(f"Context models already exist: {path}")

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_context_models(names), encoding="utf-8")

    logger.info("context_models_written", context=names.context_name, path=str(path))
    return path


def write_context_migration(
    versions_path: Path,
    names: ContextNames,
    down_revision: str | None = None,
    now: datetime | None = None,
) -> Path:
    """
    Write an alembic revision creating the three tables.

    The revision follows the current head unless ``down_revision`` is given.
    """
    versions_path = Path(versions_path)
    versions_path.mkdir(parents=True, exist_ok=True)
    now = now or datetime.now(timezone.utc)

    if down_revision is None:
        down_revision = find_head_revision(versions_path)
    revision = next_revision_id(versions_path, now)

    path = versions_path / f"{revision}_create_{names.table_name}.py"
    path.write_text(
        render_context_migration(names, revision, down_revision, create_date=now),
        encoding="utf-8",
    )

    logger.info("context_migration_written", context=names.context_name, revision=revision, path=str(path))
    return path


def render_context_usage(names: ContextNames, agent_class_name: str = "MyAgent") -> str:
    """Snippet showing an agent using the generated context."""
    return (
        f'@has_context("{names.context_name}")\n'
        f"class {agent_class_name}(HasContext, Agent):\n"
        f"    def perform(self):\n"
        f'        self.context_for("{names.context_name}").create(contextable=self.params["user"])\n'
        f"        self.prompt()\n"
    )
