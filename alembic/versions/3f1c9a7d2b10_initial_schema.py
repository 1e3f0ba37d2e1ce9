"""initial schema

Revision ID: 3f1c9a7d2b10
Revises: 
Create Date: 2026-10-18 10:12:41.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a7d2b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('username', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('role', sa.String(), nullable=False, server_default='employee'),
        sa.Column('poc', sa.String(), nullable=True),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('department', sa.String(), nullable=True),
        sa.Column('branch', sa.String(), nullable=True),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_username', 'users', ['username'], unique=True)
    op.create_index('ix_users_poc', 'users', ['poc'])

    op.create_table(
        'performance_records',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('date', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('poc', sa.String(), nullable=False),
        sa.Column('potential', sa.Float(), nullable=False),
        sa.Column('last_30_days', sa.Float(), nullable=False),
        sa.Column('pro_rated_ach', sa.Float(), nullable=False),
        sa.Column('short_fall', sa.Float(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_performance_records_id', 'performance_records', ['id'])
    op.create_index('ix_performance_records_user_id', 'performance_records', ['user_id'])
    op.create_index('ix_performance_records_poc', 'performance_records', ['poc'])

    op.create_table(
        'call_records',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=False),
        sa.Column('complaint_tag', sa.String(), nullable=True),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint('user_id', name='uq_call_records_user'),
    )
    op.create_index('ix_call_records_id', 'call_records', ['id'])
    op.create_index('ix_call_records_user_id', 'call_records', ['user_id'])

    op.create_table(
        'user_queries',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('user_name', sa.String(), nullable=False),
        sa.Column('complaint_tag', sa.String(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=False),
        sa.Column('status', sa.String(), nullable=False, server_default='open'),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_user_queries_id', 'user_queries', ['id'])
    op.create_index('ix_user_queries_user_id', 'user_queries', ['user_id'])

    op.create_table(
        'retailer_tags',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('user_name', sa.String(), nullable=False),
        sa.Column('retailers', sa.JSON(), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint('user_id', name='uq_retailer_tags_user'),
    )
    op.create_index('ix_retailer_tags_id', 'retailer_tags', ['id'])
    op.create_index('ix_retailer_tags_user_id', 'retailer_tags', ['user_id'])

    op.create_table(
        'complaint_tags',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('tag_name', sa.String(), nullable=False, unique=True),
        sa.Column('created_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_complaint_tags_id', 'complaint_tags', ['id'])


def downgrade() -> None:
    op.drop_table('complaint_tags')
    op.drop_table('retailer_tags')
    op.drop_table('user_queries')
    op.drop_table('call_records')
    op.drop_table('performance_records')
    op.drop_table('users')
