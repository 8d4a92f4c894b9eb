"""add users.scope_config (per-user data scope override)

Revision ID: 0002_user_scope_config
Revises: 0001_initial_schema
Create Date: 2026-10-18
"""
from __future__ import annotations
from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect

revision = '0002_user_scope_config'
down_revision = '0001_initial_schema'
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind(); insp = inspect(bind)
    cols = [c['name'] for c in insp.get_columns('users')]
    if 'scope_config' not in cols:
        # {"dataScope", "productLines", "departments", "canApprove"}
        op.add_column('users', sa.Column('scope_config', sa.JSON(), nullable=True))


def downgrade():
    with op.batch_alter_table('users') as batch_op:
        batch_op.drop_column('scope_config')
