"""Initial schema

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect

# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """
    Create initial database schema:
    - clips table: Stores clip content, access settings and view counts
    - api_keys table: Stores issued API keys
    """
    bind = op.get_bind()
    existing_tables = inspect(bind).get_table_names()

    if 'clips' not in existing_tables:
        op.create_table(
            'clips',
            sa.Column('clip_id', sa.String(length=36), nullable=False),
            sa.Column('shortcode', sa.String(length=64), nullable=False),
            sa.Column('content', sa.Text(), nullable=False),
            sa.Column('title', sa.Text(), nullable=True),
            sa.Column('posted', sa.DateTime(timezone=True), nullable=False),
            sa.Column('expires', sa.DateTime(timezone=True), nullable=True),
            sa.Column('password', sa.Text(), nullable=True),
            sa.Column('hits', sa.Integer(), nullable=False, server_default='0'),
            sa.PrimaryKeyConstraint('clip_id')
        )

        op.create_index(
            'ix_clips_shortcode',
            'clips',
            ['shortcode'],
            unique=True
        )

        op.create_index(
            'ix_clips_posted',
            'clips',
            ['posted']
        )

    if 'api_keys' not in existing_tables:
        op.create_table(
            'api_keys',
            sa.Column('api_key', sa.LargeBinary(), nullable=False),
            sa.PrimaryKeyConstraint('api_key')
        )


def downgrade() -> None:
    """Drop all tables and indexes."""
    op.drop_table('api_keys')
    op.drop_index('ix_clips_posted', table_name='clips')
    op.drop_index('ix_clips_shortcode', table_name='clips')
    op.drop_table('clips')
