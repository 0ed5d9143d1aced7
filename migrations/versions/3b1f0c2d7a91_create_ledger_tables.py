"""create ledger tables

Revision ID: 3b1f0c2d7a91
Revises: 
Create Date: 2026-10-17 18:04:12.481203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3b1f0c2d7a91'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False, unique=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_users_id', 'users', ['id'])

    op.create_table(
        'bets',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('opponent_id', sa.Integer(), nullable=False),
        sa.Column('wager_type', sa.String(), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('bet_date', sa.Date(), nullable=False),
        sa.Column('outcome', sa.String(), nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),

        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['opponent_id'], ['users.id'], ondelete='CASCADE'),

        sa.CheckConstraint('user_id <> opponent_id', name='ck_bets_distinct_users'),
        sa.CheckConstraint('amount > 0', name='ck_bets_positive_amount'),
        sa.CheckConstraint("outcome IN ('won', 'lost', 'pending')", name='ck_bets_outcome'),
    )
    op.create_index('ix_bets_id', 'bets', ['id'])
    op.create_index('ix_bets_bet_date', 'bets', ['bet_date'])

    op.create_table(
        'poker_sessions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('session_name', sa.String(), nullable=False),
        sa.Column('session_date', sa.Date(), nullable=False, server_default=sa.func.current_date()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_poker_sessions_id', 'poker_sessions', ['id'])

    op.create_table(
        'poker_players',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('session_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('buy_in_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('final_chips', sa.Numeric(12, 2), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),

        sa.ForeignKeyConstraint(['session_id'], ['poker_sessions.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),

        sa.UniqueConstraint('session_id', 'user_id', name='uq_poker_player_session_user'),
    )
    op.create_index('ix_poker_players_id', 'poker_players', ['id'])

def downgrade() -> None:
    op.drop_table('poker_players')
    op.drop_table('poker_sessions')
    op.drop_table('bets')
    op.drop_table('users')
