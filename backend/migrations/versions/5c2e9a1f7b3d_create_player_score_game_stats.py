"""create player, score and game_stats tables

Revision ID: 5c2e9a1f7b3d
Revises:
Create Date: 2026-10-19 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5c2e9a1f7b3d'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    existing_tables = set(insp.get_table_names())

    if 'player' not in existing_tables:
        op.create_table(
            'player',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('name', sa.String(length=64), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        )
        op.create_index('ix_player_name', 'player', ['name'], unique=True)

    if 'score' not in existing_tables:
        op.create_table(
            'score',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('value', sa.Integer(), nullable=False),
            sa.Column('max_tile', sa.Integer(), nullable=False),
            sa.Column('moves', sa.Integer(), nullable=False),
            sa.Column('duration', sa.Integer(), nullable=False),
            sa.Column('won', sa.Boolean(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
            sa.Column('player_id', sa.Integer(), sa.ForeignKey('player.id', ondelete='CASCADE'), nullable=False),
            sqlite_autoincrement=True,
        )
        op.create_index('ix_score_value', 'score', ['value'])
        # One best score per player
        op.create_index('ix_score_player_id', 'score', ['player_id'], unique=True)

    if 'game_stats' not in existing_tables:
        op.create_table(
            'game_stats',
            sa.Column('id', sa.String(length=16), primary_key=True),
            sa.Column('games_counted', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('cumulative_score', sa.BigInteger(), nullable=False, server_default='0'),
            sa.Column('highest_score', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('highest_tile', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('total_wins', sa.Integer(), nullable=False, server_default='0'),
        )


def downgrade():
    op.drop_table('game_stats')
    op.drop_index('ix_score_player_id', table_name='score')
    op.drop_index('ix_score_value', table_name='score')
    op.drop_table('score')
    op.drop_index('ix_player_name', table_name='player')
    op.drop_table('player')
