"""create ledger tables

Revision ID: create_ledger_tables
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'create_ledger_tables'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column('hashed_password', sa.String(length=1024), nullable=False),
        sa.Column('is_active', sa.Boolean, nullable=False),
        sa.Column('is_superuser', sa.Boolean, nullable=False),
        sa.Column('is_verified', sa.Boolean, nullable=False),
        sa.Column('full_name', sa.String, nullable=True),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'wallets',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('user_id', sa.Uuid(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('balance', sa.BigInteger, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('balance >= 0', name='ck_wallets_balance_non_negative'),
    )
    op.create_index('ix_wallets_user_id', 'wallets', ['user_id'], unique=True)

    op.create_table(
        'locked_savings',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('user_id', sa.Uuid(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('amount', sa.BigInteger, nullable=False),
        sa.Column('lock_days', sa.Integer, nullable=False),
        sa.Column('locked_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('unlock_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('status', sa.String(length=32), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint('amount > 0', name='ck_locked_savings_amount_positive'),
    )
    op.create_index('ix_locked_savings_user_id', 'locked_savings', ['user_id'])
    op.create_index('ix_locked_savings_status', 'locked_savings', ['status'])

    op.create_table(
        'products',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('category', sa.String(length=100), nullable=False),
        sa.Column('price', sa.BigInteger, nullable=False),
        sa.Column('image_url', sa.String, nullable=True),
        sa.Column('description', sa.String, nullable=True),
        sa.Column('available', sa.Boolean, nullable=False),
    )

    op.create_table(
        'goals',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('user_id', sa.Uuid(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('product_id', sa.Uuid(as_uuid=True), sa.ForeignKey('products.id'), nullable=False),
        sa.Column('target_amount', sa.BigInteger, nullable=False),
        sa.Column('current_amount', sa.BigInteger, nullable=False),
        sa.Column('status', sa.String(length=32), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('cancelled_at', sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint('target_amount > 0', name='ck_goals_target_positive'),
        sa.CheckConstraint('current_amount >= 0', name='ck_goals_current_non_negative'),
    )
    op.create_index('ix_goals_user_id', 'goals', ['user_id'])
    op.create_index('ix_goals_status', 'goals', ['status'])

    op.create_table(
        'goal_contributions',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('goal_id', sa.Uuid(as_uuid=True), sa.ForeignKey('goals.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Uuid(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('amount', sa.BigInteger, nullable=False),
        sa.Column('contribution_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('notes', sa.String(length=500), nullable=True),
        sa.CheckConstraint('amount > 0', name='ck_goal_contributions_amount_positive'),
    )
    op.create_index('ix_goal_contributions_goal_id', 'goal_contributions', ['goal_id'])

    op.create_table(
        'transactions',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('user_id', sa.Uuid(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('type', sa.String(length=32), nullable=False),
        sa.Column('amount', sa.BigInteger, nullable=False),
        sa.Column('penalty', sa.BigInteger, nullable=True),
        sa.Column('balance_after', sa.BigInteger, nullable=False),
        sa.Column('reference_id', sa.Uuid(as_uuid=True), nullable=True),
        sa.Column('reference_type', sa.String(length=32), nullable=True),
        sa.Column('description', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_transactions_user_id', 'transactions', ['user_id'])
    op.create_index('ix_transactions_type', 'transactions', ['type'])
    op.create_index('ix_transactions_created_at', 'transactions', ['created_at'])

def downgrade():
    op.drop_table('transactions')
    op.drop_table('goal_contributions')
    op.drop_table('goals')
    op.drop_table('products')
    op.drop_table('locked_savings')
    op.drop_table('wallets')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
