"""organizations, users, device passports, service requests

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-18
"""
from __future__ import annotations
from alembic import op
import sqlalchemy as sa

revision = '0001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def _updated_at():
    return sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'))


def upgrade():
    op.create_table('organizations',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('name', sa.String(length=128), nullable=False),
        sa.Column('code', sa.String(length=8), nullable=False, unique=True),
        sa.Column('type', sa.String(length=32), nullable=False, server_default='SUPPLIER'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('1')),
        _updated_at(),
    )
    op.create_index('ix_organizations_code', 'organizations', ['code'])

    op.create_table('users',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('name', sa.String(length=128), nullable=False),
        sa.Column('email', sa.String(length=128), nullable=False, unique=True),
        sa.Column('role', sa.String(length=32), nullable=False, server_default='CUSTOMER'),
        sa.Column('organization_id', sa.String(length=36), sa.ForeignKey('organizations.id'), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('1')),
        _updated_at(),
    )
    op.create_index('ix_users_email', 'users', ['email'])
    op.create_index('ix_users_role', 'users', ['role'])
    op.create_index('ix_users_organization_id', 'users', ['organization_id'])

    op.create_table('device_passports',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('passport_code', sa.String(length=64), nullable=False, unique=True),
        sa.Column('product_line', sa.String(length=8), nullable=False),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='CREATED'),
        sa.Column('supplier_id', sa.String(length=36), sa.ForeignKey('organizations.id'), nullable=True),
        sa.Column('customer_id', sa.String(length=36), sa.ForeignKey('organizations.id'), nullable=True),
        sa.Column('department_id', sa.String(length=64), nullable=True),
        sa.Column('created_by_id', sa.String(length=36), sa.ForeignKey('users.id'), nullable=True),
        _updated_at(),
    )
    for col in ['passport_code', 'product_line', 'status', 'supplier_id', 'customer_id', 'department_id', 'created_by_id']:
        op.create_index(f'ix_device_passports_{col}', 'device_passports', [col])

    op.create_table('service_requests',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('organization_id', sa.String(length=36), sa.ForeignKey('organizations.id'), nullable=True),
        sa.Column('product_line', sa.String(length=8), nullable=True),
        sa.Column('department_id', sa.String(length=64), nullable=True),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='OPEN'),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_by_id', sa.String(length=36), sa.ForeignKey('users.id'), nullable=True),
        _updated_at(),
    )
    for col in ['organization_id', 'product_line', 'department_id', 'status', 'created_by_id']:
        op.create_index(f'ix_service_requests_{col}', 'service_requests', [col])


def downgrade():
    op.drop_table('service_requests')
    op.drop_table('device_passports')
    op.drop_table('users')
    op.drop_table('organizations')
