"""create agent context tables

Revision ID: 20250301_0001
Revises:
Create Date: 2025-03-01 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB


# revision identifiers, used by Alembic.
revision = '20250301_0001'
down_revision = None
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
            comment='When the record was created'
        ),
        sa.Column(
            'updated_at',
            sa.DateTime(timezone=True),
            nullable=False,
            comment='When the record was last updated'
        ),
    ]


def upgrade() -> None:
    """Create agent_contexts, agent_messages and agent_generations."""

    op.create_table(
        'agent_contexts',
        *_base_columns(),

        # Polymorphic owner
        sa.Column(
            'contextable_type',
            sa.String(length=255),
            nullable=True,
            comment='Class name of the owning entity'
        ),
        sa.Column(
            'contextable_id',
            sa.String(length=255),
            nullable=True,
            comment='Identifier of the owning entity'
        ),

        # Agent identification
        sa.Column('agent_name', sa.String(length=255), nullable=False),
        sa.Column('action_name', sa.String(length=255), nullable=True),

        # Prompt configuration
        sa.Column('instructions', sa.Text(), nullable=True),
        sa.Column(
            'options',
            JSONType,
            nullable=True,
            comment='Options bag; input_params lives here'
        ),
        sa.Column('trace_id', sa.String(length=255), nullable=True),

        # Usage statistics
        sa.Column('total_input_tokens', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_output_tokens', sa.Integer(), nullable=False, server_default='0'),
    )

    op.create_index('ix_agent_contexts_agent_name', 'agent_contexts', ['agent_name'], unique=False)
    op.create_index('ix_agent_contexts_trace_id', 'agent_contexts', ['trace_id'], unique=False)
    op.create_index(
        'ix_agent_contexts_owner_agent_action',
        'agent_contexts',
        ['contextable_type', 'contextable_id', 'agent_name', 'action_name'],
        unique=False
    )

    op.create_table(
        'agent_messages',
        *_base_columns(),
        sa.Column(
            'context_id',
            sa.Uuid(),
            sa.ForeignKey('agent_contexts.id', ondelete='CASCADE'),
            nullable=False
        ),
        sa.Column(
            'role',
            sa.String(length=32),
            nullable=False,
            comment='Message role: user, assistant, system, tool'
        ),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column(
            'position',
            sa.Integer(),
            nullable=False,
            comment='Zero-based index within the context'
        ),
        sa.Column('tool_call_id', sa.String(length=255), nullable=True),
        sa.Column('extra', JSONType, nullable=True),
    )

    op.create_index('ix_agent_messages_context_id', 'agent_messages', ['context_id'], unique=False)
    op.create_index(
        'ix_agent_messages_context_id_position',
        'agent_messages',
        ['context_id', 'position'],
        unique=False
    )

    op.create_table(
        'agent_generations',
        *_base_columns(),
        sa.Column(
            'context_id',
            sa.Uuid(),
            sa.ForeignKey('agent_contexts.id', ondelete='CASCADE'),
            nullable=False
        ),
        sa.Column('model', sa.String(length=255), nullable=True),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column('finish_reason', sa.String(length=64), nullable=True),
        sa.Column('input_tokens', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('output_tokens', sa.Integer(), nullable=False, server_default='0'),
        sa.Column(
            'raw_response',
            JSONType,
            nullable=True,
            comment='Provider payload kept for audit'
        ),
    )

    op.create_index('ix_agent_generations_context_id', 'agent_generations', ['context_id'], unique=False)


def downgrade() -> None:
    """Drop the agent context tables and their indexes."""

    op.drop_index('ix_agent_generations_context_id', table_name='agent_generations')
    op.drop_table('agent_generations')

    op.drop_index('ix_agent_messages_context_id_position', table_name='agent_messages')
    op.drop_index('ix_agent_messages_context_id', table_name='agent_messages')
    op.drop_table('agent_messages')

    op.drop_index('ix_agent_contexts_owner_agent_action', table_name='agent_contexts')
    op.drop_index('ix_agent_contexts_trace_id', table_name='agent_contexts')
    op.drop_index('ix_agent_contexts_agent_name', table_name='agent_contexts')
    op.drop_table('agent_contexts')
