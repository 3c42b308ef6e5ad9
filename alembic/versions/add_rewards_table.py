"""add rewards table

Revision ID: add_rewards_table
Revises: create_ledger_tables
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'add_rewards_table'
down_revision = 'create_ledger_tables'
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        'rewards',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('user_id', sa.Uuid(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('reward_type', sa.String(length=32), nullable=False),
        sa.Column('reward_name', sa.String(length=255), nullable=False),
        sa.Column('reward_description', sa.String(length=1000), nullable=True),
        sa.Column('earned_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_rewards_user_id', 'rewards', ['user_id'])
    op.create_index('ix_rewards_reward_type', 'rewards', ['reward_type'])

def downgrade():
    op.drop_index('ix_rewards_reward_type', table_name='rewards')
    op.drop_index('ix_rewards_user_id', table_name='rewards')
    op.drop_table('rewards')
