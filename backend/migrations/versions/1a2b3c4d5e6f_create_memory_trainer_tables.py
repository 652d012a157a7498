"""create user and memory trainer tables

Revision ID: 1a2b3c4d5e6f
Revises:
Create Date: 2026-10-18 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '1a2b3c4d5e6f'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('username', sa.String(length=64), nullable=False),
        sa.Column('password_hash', sa.String(length=256), nullable=False),
    )
    op.create_index('ix_user_username', 'user', ['username'], unique=True)

    op.create_table(
        'memory_game',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('owner_id', sa.Integer(), sa.ForeignKey('user.id'), nullable=True),
        sa.Column('name', sa.String(length=128), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('game_type', sa.String(length=64), nullable=False),
        sa.Column('difficulty_levels', sa.JSON(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_memory_game_owner_id', 'memory_game', ['owner_id'])

    op.create_table(
        'memory_session',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('game_id', sa.Integer(), sa.ForeignKey('memory_game.id'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('user.id'), nullable=False),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='in_progress'),
        sa.Column('total_score', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('difficulty', sa.String(length=64), nullable=True),
        sa.Column('started_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('ended_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('meta', sa.JSON(), nullable=True),
    )
    op.create_index('ix_memory_session_game_id', 'memory_session', ['game_id'])
    op.create_index('ix_memory_session_user_id', 'memory_session', ['user_id'])

    op.create_table(
        'memory_round',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('session_id', sa.Integer(), sa.ForeignKey('memory_session.id'), nullable=False),
        sa.Column('round_number', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('prompt', sa.JSON(), nullable=False),
        sa.Column('response', sa.JSON(), nullable=True),
        sa.Column('is_correct', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('score', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_memory_round_session_id', 'memory_round', ['session_id'])

    op.create_table(
        'memory_performance',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('user.id'), nullable=False),
        sa.Column('game_id', sa.Integer(), sa.ForeignKey('memory_game.id'), nullable=False),
        sa.Column('total_sessions', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('average_score', sa.Float(), nullable=False, server_default='0'),
        sa.Column('best_score', sa.Float(), nullable=False, server_default='0'),
        sa.Column('difficulty_preference', sa.String(length=64), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_memory_performance_user_id', 'memory_performance', ['user_id'])
    op.create_index('ix_memory_performance_game_id', 'memory_performance', ['game_id'])


def downgrade():
    op.drop_table('memory_performance')
    op.drop_table('memory_round')
    op.drop_table('memory_session')
    op.drop_table('memory_game')
    op.drop_index('ix_user_username', table_name='user')
    op.drop_table('user')
