"""create_profiles_and_settings

Revision ID: 4b7e21c9d3a0
Revises:
Create Date: 2026-10-16 09:12:44.318207

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '4b7e21c9d3a0'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create profiles and settings tables, one row of each per user."""
    op.create_table('profiles',
        sa.Column('id', sa.String(length=128), nullable=False),
        sa.Column('user_id', sa.String(length=128), nullable=False),
        sa.Column('first_name', sa.Text(), nullable=False),
        sa.Column('last_name', sa.Text(), nullable=False),
        sa.Column('role', sa.Text(), nullable=False),
        sa.Column('business_name', sa.Text(), nullable=True),
        sa.Column('work_area', sa.Text(), nullable=True),
        sa.Column('skills', postgresql.JSONB(astext_type=sa.Text()), server_default='[]', nullable=False),
        sa.Column('background_text', sa.Text(), nullable=True),
        sa.Column('about_text', sa.Text(), nullable=True),
        sa.Column('summary', sa.Text(), nullable=True),
        sa.Column('avatar_url', sa.Text(), nullable=True),
        sa.Column('initials', sa.String(length=8), nullable=False),
        sa.Column('is_public', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id'),
    )
    op.create_index('ix_profiles_is_public', 'profiles', ['is_public'], unique=False)
    op.create_index('ix_profiles_created_at', 'profiles', ['created_at'], unique=False)

    op.create_table('settings',
        sa.Column('id', sa.String(length=128), nullable=False),
        sa.Column('user_id', sa.String(length=128), nullable=False),
        sa.Column('profile_style', sa.String(length=20), server_default='simple', nullable=False),
        sa.Column('show_in_public_search', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('email_on_profile_view', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('email_profile_tips', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint("profile_style IN ('simple', 'detailed')", name='ck_settings_profile_style'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id'),
    )


def downgrade() -> None:
    """Drop settings and profiles tables."""
    op.drop_table('settings')
    op.drop_index('ix_profiles_created_at', table_name='profiles')
    op.drop_index('ix_profiles_is_public', table_name='profiles')
    op.drop_table('profiles')
