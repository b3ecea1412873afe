"""add weekly features and photo blob

Revision ID: 8d4f2b6c1e93
Revises: 3c9e1a7f5b20
Create Date: 2025-08-16 09:02:41.207715

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8d4f2b6c1e93'
down_revision: Union[str, Sequence[str], None] = '3c9e1a7f5b20'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'weekly_features',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('kind', sa.String(length=20), nullable=False),
        sa.Column('week', sa.String(length=8), nullable=False),
        sa.Column('payload', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        # One document per kind per ISO week
        sa.UniqueConstraint('kind', 'week', name='uq_weekly_features_kind_week'),
    )
    op.create_index('ix_weekly_features_id', 'weekly_features', ['id'])
    op.create_index('ix_weekly_features_kind', 'weekly_features', ['kind'])

    op.create_table(
        'feature_photos',
        sa.Column('id', sa.String(length=16), primary_key=True),
        sa.Column('data', sa.LargeBinary(), nullable=False),
        sa.Column('content_type', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.execute('DROP TABLE IF EXISTS feature_photos')
    op.drop_index('ix_weekly_features_kind', table_name='weekly_features')
    op.drop_index('ix_weekly_features_id', table_name='weekly_features')
    op.drop_table('weekly_features')
