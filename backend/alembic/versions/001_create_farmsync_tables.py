"""create farmsync tables

Revision ID: 001_create_farmsync_tables
Revises:
Create Date: 2026-10-19
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = '001_create_farmsync_tables'
down_revision: Union[str, Sequence[str], None] = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # --- Farms ---
    op.create_table(
        'farms',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('size', sa.Float(), nullable=False),
        sa.Column('size_unit', sa.String(), nullable=False),
        sa.Column('location', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_farms_created_at', 'farms', ['created_at'])

    # --- Crops ---
    op.create_table(
        'crops',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('farm_id', sa.String(36), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('variety', sa.String(), nullable=True),
        sa.Column('field', sa.Text(), nullable=True),
        sa.Column('planting_date', sa.Date(), nullable=False),
        sa.Column('expected_harvest_date', sa.Date(), nullable=True),
        sa.Column('growth_stage', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_crops_farm_id', 'crops', ['farm_id'])
    op.create_index('ix_crops_created_at', 'crops', ['created_at'])

    # --- Tasks ---
    op.create_table(
        'tasks',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('farm_id', sa.String(36), nullable=False),
        sa.Column('crop_id', sa.String(36), nullable=True),
        sa.Column('type', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('due_date', sa.DateTime(), nullable=True),
        sa.Column('priority', sa.String(), nullable=True),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_tasks_farm_id', 'tasks', ['farm_id'])
    op.create_index('ix_tasks_crop_id', 'tasks', ['crop_id'])
    op.create_index('ix_tasks_created_at', 'tasks', ['created_at'])

    # --- Expenses ---
    op.create_table(
        'expenses',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('farm_id', sa.String(36), nullable=False),
        sa.Column('category', sa.String(), nullable=False),
        sa.Column('amount', sa.Float(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_expenses_farm_id', 'expenses', ['farm_id'])
    op.create_index('ix_expenses_date', 'expenses', ['date'])
    op.create_index('ix_expenses_created_at', 'expenses', ['created_at'])

    # --- Income ---
    op.create_table(
        'income',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('amount', sa.Float(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('source', sa.String(), nullable=False),
        sa.Column('crop_id', sa.String(36), nullable=True),
        sa.Column('farm_id', sa.String(36), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_income_crop_id', 'income', ['crop_id'])
    op.create_index('ix_income_farm_id', 'income', ['farm_id'])
    op.create_index('ix_income_date', 'income', ['date'])
    op.create_index('ix_income_created_at', 'income', ['created_at'])


def downgrade() -> None:
    op.drop_table('income')
    op.drop_table('expenses')
    op.drop_table('tasks')
    op.drop_table('crops')
    op.drop_table('farms')
