"""create_todo_table

Revision ID: 0001_create_todo_table
Revises:
Create Date: 2026-10-18

Create the todo table.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '0001_create_todo_table'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'todo',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('priority', sa.String(length=10), nullable=False, server_default='medium'),
        sa.Column('category', sa.String(length=50), nullable=False, server_default='General'),
        sa.Column('due_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('tags', postgresql.JSONB(astext_type=sa.Text()), nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("priority IN ('low', 'medium', 'high')", name='ck_todo_priority'),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_index('ix_todo_completed', 'todo', ['completed'])
    op.create_index('ix_todo_created_at', 'todo', ['created_at'])


def downgrade() -> None:
    op.drop_index('ix_todo_created_at', table_name='todo')
    op.drop_index('ix_todo_completed', table_name='todo')
    op.drop_table('todo')
