"""Create profiles table

Revision ID: b7e1c2d3a4f5
Revises:
Create Date: 2026-09-28 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = 'b7e1c2d3a4f5'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'profiles',
        sa.Column('id', postgresql.UUID(as_uuid=False), primary_key=True),
        sa.Column('username', sa.String(30), nullable=False, unique=True),
        sa.Column('van_name', sa.String(50), nullable=True),
        sa.Column('van_photo_url', sa.String(500), nullable=True),
        sa.Column('city', sa.String(100), nullable=True),
        sa.Column('main_specialty', sa.String(20), nullable=True),
        sa.Column('skills', sa.JSON(), nullable=False, server_default=sa.text("'[]'")),
        sa.Column('days_on_road', sa.Integer(), nullable=False, server_default=sa.text('0')),
        sa.Column('connections_count', sa.Integer(), nullable=False, server_default=sa.text('0')),
        sa.Column('is_visible', sa.Boolean(), nullable=False, server_default=sa.text('TRUE')),
        sa.Column('latitude', sa.Double(), nullable=True),
        sa.Column('longitude', sa.Double(), nullable=True),
        sa.Column('last_location_update', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            '(latitude IS NULL) = (longitude IS NULL)',
            name='ck_profiles_location_pair',
        ),
        sa.CheckConstraint(
            'latitude IS NULL OR (latitude BETWEEN -90 AND 90 AND longitude BETWEEN -180 AND 180)',
            name='ck_profiles_location_range',
        ),
    )
    op.create_index('ix_profiles_is_visible', 'profiles', ['is_visible'])
    op.create_index('ix_profiles_latitude', 'profiles', ['latitude'])


def downgrade() -> None:
    op.drop_index('ix_profiles_latitude', table_name='profiles')
    op.drop_index('ix_profiles_is_visible', table_name='profiles')
    op.drop_table('profiles')
