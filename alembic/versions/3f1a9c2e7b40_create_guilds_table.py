"""create_guilds_table

Revision ID: 3f1a9c2e7b40
Revises:
Create Date: 2026-10-17 10:12:31.508214

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1a9c2e7b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the guilds table for per-guild Notion settings."""
    op.create_table(
        'guilds',
        sa.Column('guild_id', sa.String(length=32), nullable=False),
        sa.Column('guild_name', sa.String(length=100), nullable=False, server_default='Unknown Guild'),
        sa.Column('bot_client_id', sa.String(length=32), nullable=True),
        sa.Column('discord_user_id', sa.String(length=32), nullable=True),
        # Stored via the secret provider
        sa.Column('notion_api_key', sa.Text(), nullable=True),
        sa.Column('notion_database_id', sa.String(length=64), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('guild_id'),
    )
    op.create_index('ix_guilds_updated_at', 'guilds', ['updated_at'])


def downgrade() -> None:
    """Drop the guilds table."""
    op.drop_index('ix_guilds_updated_at', table_name='guilds')
    op.drop_table('guilds')
