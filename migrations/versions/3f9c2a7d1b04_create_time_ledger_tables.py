"""create time ledger tables

Revision ID: 3f9c2a7d1b04
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9c2a7d1b04'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        'project_codes',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('code', sa.String(64), nullable=False, unique=True),
        sa.Column('allotted_hours', sa.Float(), nullable=False, server_default='0'),
    )

    op.create_table(
        'project_month_allotments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('project_code_id', sa.Integer(),
                  sa.ForeignKey('project_codes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('month', sa.String(7), nullable=False),
        sa.Column('allotted_hours', sa.Float(), nullable=False, server_default='0'),
        sa.UniqueConstraint('project_code_id', 'month', name='uq_project_month_allotment'),
    )
    op.create_index('ix_project_month_allotments_project_code_id', 'project_month_allotments', ['project_code_id'])

    op.create_table(
        'time_entries',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('project_code_id', sa.Integer(),
                  sa.ForeignKey('project_codes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('entry_date', sa.String(10), nullable=False),
        sa.Column('hours', sa.Float(), nullable=False),
        sa.UniqueConstraint('project_code_id', 'entry_date', name='uq_time_entry_project_date'),
    )
    op.create_index('ix_time_entries_project_code_id', 'time_entries', ['project_code_id'])
    op.create_index('ix_time_entries_entry_date', 'time_entries', ['entry_date'])


def downgrade() -> None:
    op.drop_index('ix_time_entries_entry_date', table_name='time_entries')
    op.drop_index('ix_time_entries_project_code_id', table_name='time_entries')
    op.drop_table('time_entries')
    op.drop_index('ix_project_month_allotments_project_code_id', table_name='project_month_allotments')
    op.drop_table('project_month_allotments')
    op.drop_table('project_codes')
    op.drop_table('users')
