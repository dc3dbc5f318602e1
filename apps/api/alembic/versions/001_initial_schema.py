"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Spatial features table (sampling points and contour lines)
    op.create_table(
        'spatial_features',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('layer_type', sa.String(50), nullable=False, index=True),
        sa.Column('geometry', postgresql.JSON(), nullable=False),
        sa.Column('metadata', postgresql.JSON(), default={}),
        sa.Column('survey_id', sa.String(100), index=True),
        sa.Column('user_id', sa.String(100), nullable=False, index=True),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
    )
    op.create_index(
        'ix_spatial_features_layer_survey',
        'spatial_features',
        ['layer_type', 'survey_id', 'user_id'],
    )


def downgrade() -> None:
    op.drop_index('ix_spatial_features_layer_survey', table_name='spatial_features')
    op.drop_table('spatial_features')
