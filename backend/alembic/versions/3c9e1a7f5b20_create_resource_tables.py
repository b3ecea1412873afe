"""create resource tables

Revision ID: 3c9e1a7f5b20
Revises: 
Create Date: 2025-08-11 20:14:03.512907

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c9e1a7f5b20'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        'events',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('start', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end', sa.DateTime(timezone=True), nullable=True),
        sa.Column('all_day', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index('ix_events_id', 'events', ['id'])

    op.create_table(
        'goals',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('due_date', sa.Date(), nullable=True),
        sa.Column('completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('target', sa.Float(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_goals_id', 'goals', ['id'])

    op.create_table(
        'jobs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('company', sa.String(), nullable=True),
        sa.Column('link', sa.String(), nullable=True),
        sa.Column('notes', sa.String(), nullable=True),
        sa.Column('applied_date', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('responded', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('follow_up_sent', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('rejected', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index('ix_jobs_id', 'jobs', ['id'])

    op.create_table(
        'journal_entries',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(), nullable=True),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('entry_date', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        *_timestamps(),
    )
    op.create_index('ix_journal_entries_id', 'journal_entries', ['id'])

    op.create_table(
        'notes',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('pinned', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('section', sa.String(), nullable=False, server_default=''),
        sa.Column('color', sa.String(length=16), nullable=False, server_default='#FEF3C7'),
        *_timestamps(),
    )
    op.create_index('ix_notes_id', 'notes', ['id'])


def downgrade() -> None:
    for table in ('notes', 'journal_entries', 'jobs', 'goals', 'events'):
        op.drop_index(f'ix_{table}_id', table_name=table)
        op.drop_table(table)
