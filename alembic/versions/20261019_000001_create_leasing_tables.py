"""Create leasing tables

Revision ID: 20261019_000001
Revises: None
Create Date: 2026-10-19

Creates users, listings, applications, the lease hierarchy (leases,
standard_leases, custom_leases), lease invites, maintenance requests,
payments and invoices.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


lease_type = sa.Enum('STANDARD', 'CUSTOM', name='lease_type')


def upgrade() -> None:
    """Create all leasing tables."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('address', sa.String(length=500), nullable=True),
        sa.Column('role', sa.Enum('LANDLORD', 'TENANT', 'ADMIN', name='user_role'), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'listings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('landlord_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', sa.String(length=50), nullable=True),
        sa.Column('street_address', sa.String(length=255), nullable=True),
        sa.Column('unit_number', sa.String(length=50), nullable=True),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('state', sa.String(length=100), nullable=True),
        sa.Column('country', sa.String(length=100), nullable=True),
        sa.Column('zip_code', sa.String(length=20), nullable=True),
        sa.Column('rent_amount', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('security_deposit', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('rent_cycle', sa.String(length=20), nullable=False),
        sa.Column(
            'status',
            sa.Enum('ACTIVE', 'RENTED', 'INACTIVE', name='listing_status'),
            nullable=False
        ),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id', name='pk_listings'),
        sa.ForeignKeyConstraint(['landlord_id'], ['users.id'], name='fk_listings_landlord_id'),
    )
    op.create_index('ix_listings_landlord_id', 'listings', ['landlord_id'])
    op.create_index('ix_listings_status', 'listings', ['status'])

    op.create_table(
        'leases',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('lease_type', lease_type, nullable=False),
        sa.Column('listing_id', sa.Integer(), nullable=True),
        sa.Column('landlord_id', sa.Integer(), nullable=False),
        sa.Column('tenant_id', sa.Integer(), nullable=True),
        sa.Column(
            'status',
            sa.Enum('DRAFT', 'ACTIVE', 'EXPIRED', 'TERMINATED', name='lease_status'),
            nullable=False
        ),
        sa.Column('start_date', sa.DateTime(), nullable=True),
        sa.Column('end_date', sa.DateTime(), nullable=True),
        sa.Column('rent_amount', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('security_deposit', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('payment_frequency', sa.String(length=20), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('termination_date', sa.DateTime(), nullable=True),
        sa.Column('termination_reason', sa.String(length=255), nullable=True),
        sa.Column('termination_notes', sa.Text(), nullable=True),
        sa.Column('terminated_by', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id', name='pk_leases'),
        sa.ForeignKeyConstraint(['listing_id'], ['listings.id'], name='fk_leases_listing_id'),
        sa.ForeignKeyConstraint(['landlord_id'], ['users.id'], name='fk_leases_landlord_id'),
        sa.ForeignKeyConstraint(['tenant_id'], ['users.id'], name='fk_leases_tenant_id'),
        sa.ForeignKeyConstraint(['terminated_by'], ['users.id'], name='fk_leases_terminated_by'),
    )
    op.create_index('ix_leases_lease_type', 'leases', ['lease_type'])
    op.create_index('ix_leases_listing_id', 'leases', ['listing_id'])
    op.create_index('ix_leases_landlord_id', 'leases', ['landlord_id'])
    op.create_index('ix_leases_tenant_id', 'leases', ['tenant_id'])
    op.create_index('ix_leases_status', 'leases', ['status'])
    op.create_index('ix_leases_end_date', 'leases', ['end_date'])

    op.create_table(
        'standard_leases',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('lease_term_type', sa.String(length=50), nullable=True),
        sa.Column('payment_day', sa.Integer(), nullable=True),
        sa.Column('document_snapshot', sa.JSON(), nullable=True),
        sa.Column('contract_url', sa.String(length=1000), nullable=True),
        sa.PrimaryKeyConstraint('id', name='pk_standard_leases'),
        sa.ForeignKeyConstraint(['id'], ['leases.id'], name='fk_standard_leases_id', ondelete='CASCADE'),
    )

    op.create_table(
        'custom_leases',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('lease_name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('property_type', sa.String(length=50), nullable=True),
        sa.Column('file_url', sa.String(length=1000), nullable=True),
        sa.PrimaryKeyConstraint('id', name='pk_custom_leases'),
        sa.ForeignKeyConstraint(['id'], ['leases.id'], name='fk_custom_leases_id', ondelete='CASCADE'),
    )

    op.create_table(
        'applications',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('public_id', sa.String(length=64), nullable=False),
        sa.Column('listing_id', sa.Integer(), nullable=False),
        sa.Column('landlord_id', sa.Integer(), nullable=False),
        sa.Column('tenant_id', sa.Integer(), nullable=True),
        sa.Column('full_name', sa.String(length=200), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('date_of_birth', sa.DateTime(), nullable=True),
        sa.Column('monthly_income', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('current_address', sa.String(length=500), nullable=True),
        sa.Column('move_in_date', sa.DateTime(), nullable=True),
        sa.Column('occupants', sa.JSON(), nullable=True),
        sa.Column('pets', sa.JSON(), nullable=True),
        sa.Column('documents', sa.JSON(), nullable=True),
        sa.Column('references', sa.JSON(), nullable=True),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column(
            'status',
            sa.Enum('NEW', 'APPROVED', 'REJECTED', 'CANCELLED', name='application_status'),
            nullable=False
        ),
        sa.Column('expiration_date', sa.DateTime(), nullable=True),
        sa.Column('reviewed_by', sa.Integer(), nullable=True),
        sa.Column('reviewed_at', sa.DateTime(), nullable=True),
        sa.Column('decision_notes', sa.Text(), nullable=True),
        sa.Column('lease_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id', name='pk_applications'),
        sa.ForeignKeyConstraint(
            ['listing_id'], ['listings.id'], name='fk_applications_listing_id', ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(['landlord_id'], ['users.id'], name='fk_applications_landlord_id'),
        sa.ForeignKeyConstraint(['tenant_id'], ['users.id'], name='fk_applications_tenant_id'),
        sa.ForeignKeyConstraint(['reviewed_by'], ['users.id'], name='fk_applications_reviewed_by'),
        sa.ForeignKeyConstraint(['lease_id'], ['leases.id'], name='fk_applications_lease_id'),
        sa.UniqueConstraint('lease_id', name='uq_applications_lease_id'),
    )
    op.create_index('ix_applications_public_id', 'applications', ['public_id'], unique=True)
    op.create_index('ix_applications_listing_id', 'applications', ['listing_id'])
    op.create_index('ix_applications_landlord_id', 'applications', ['landlord_id'])
    op.create_index('ix_applications_tenant_id', 'applications', ['tenant_id'])
    op.create_index('ix_applications_status', 'applications', ['status'])

    op.create_table(
        'employment_info',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('application_id', sa.Integer(), nullable=False),
        sa.Column('employer_name', sa.String(length=255), nullable=False),
        sa.Column('job_title', sa.String(length=255), nullable=True),
        sa.Column('income', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('duration', sa.String(length=100), nullable=True),
        sa.Column('address', sa.String(length=500), nullable=True),
        sa.Column('proof_document', sa.String(length=1000), nullable=True),
        sa.PrimaryKeyConstraint('id', name='pk_employment_info'),
        sa.ForeignKeyConstraint(
            ['application_id'], ['applications.id'],
            name='fk_employment_info_application_id',
            ondelete='CASCADE'
        ),
    )
    op.create_index('ix_employment_info_application_id', 'employment_info', ['application_id'])

    op.create_table(
        'lease_invites',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('token', sa.String(length=64), nullable=False),
        sa.Column('url', sa.String(length=1000), nullable=False),
        sa.Column('lease_id', sa.Integer(), nullable=False),
        sa.Column('lease_type', lease_type, nullable=False),
        sa.Column('tenant_id', sa.Integer(), nullable=True),
        sa.Column('signed', sa.Boolean(), nullable=False),
        sa.Column('signed_at', sa.DateTime(), nullable=True),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_lease_invites'),
        sa.ForeignKeyConstraint(
            ['lease_id'], ['leases.id'], name='fk_lease_invites_lease_id', ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(['tenant_id'], ['users.id'], name='fk_lease_invites_tenant_id'),
    )
    op.create_index('ix_lease_invites_token', 'lease_invites', ['token'], unique=True)
    op.create_index('ix_lease_invites_lease_id', 'lease_invites', ['lease_id'])

    op.create_table(
        'maintenance_requests',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('listing_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=50), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_maintenance_requests'),
        sa.ForeignKeyConstraint(
            ['listing_id'], ['listings.id'], name='fk_maintenance_requests_listing_id', ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_maintenance_requests_user_id'),
    )
    op.create_index('ix_maintenance_requests_listing_id', 'maintenance_requests', ['listing_id'])
    op.create_index('ix_maintenance_requests_user_id', 'maintenance_requests', ['user_id'])

    op.create_table(
        'payments',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            'type',
            sa.Enum('RENT', 'DEPOSIT', 'MAINTENANCE', 'OTHER', name='payment_type'),
            nullable=False
        ),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column(
            'status',
            sa.Enum('PENDING', 'PAID', 'CANCELLED', name='payment_status'),
            nullable=False
        ),
        sa.Column('due_date', sa.DateTime(), nullable=True),
        sa.Column('paid_date', sa.DateTime(), nullable=True),
        sa.Column('landlord_id', sa.Integer(), nullable=False),
        sa.Column('tenant_id', sa.Integer(), nullable=True),
        sa.Column('lease_id', sa.Integer(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id', name='pk_payments'),
        sa.ForeignKeyConstraint(['landlord_id'], ['users.id'], name='fk_payments_landlord_id'),
        sa.ForeignKeyConstraint(['tenant_id'], ['users.id'], name='fk_payments_tenant_id'),
        sa.ForeignKeyConstraint(['lease_id'], ['leases.id'], name='fk_payments_lease_id'),
    )
    op.create_index('ix_payments_type', 'payments', ['type'])
    op.create_index('ix_payments_status', 'payments', ['status'])
    op.create_index('ix_payments_landlord_id', 'payments', ['landlord_id'])
    op.create_index('ix_payments_tenant_id', 'payments', ['tenant_id'])
    op.create_index('ix_payments_lease_id', 'payments', ['lease_id'])

    op.create_table(
        'invoices',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('maintenance_request_id', sa.Integer(), nullable=False),
        sa.Column('payment_id', sa.Integer(), nullable=False),
        sa.Column('created_by_id', sa.Integer(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column(
            'status',
            sa.Enum(
                'PENDING', 'SENT', 'PAID', 'OVERDUE', 'CANCELLED',
                name='invoice_status',
                create_constraint=True
            ),
            nullable=False,
            server_default='PENDING'
        ),
        sa.Column('shared_with_tenant', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id', name='pk_invoices'),
        sa.ForeignKeyConstraint(
            ['maintenance_request_id'], ['maintenance_requests.id'],
            name='fk_invoices_maintenance_request_id',
            ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(['payment_id'], ['payments.id'], name='fk_invoices_payment_id'),
        sa.ForeignKeyConstraint(['created_by_id'], ['users.id'], name='fk_invoices_created_by_id'),
        sa.UniqueConstraint('payment_id', name='uq_invoices_payment_id'),
    )
    op.create_index('ix_invoices_maintenance_request_id', 'invoices', ['maintenance_request_id'])
    op.create_index('ix_invoices_status', 'invoices', ['status'])


def downgrade() -> None:
    """Drop all leasing tables."""
    op.drop_table('invoices')
    op.drop_table('payments')
    op.drop_table('maintenance_requests')
    op.drop_table('lease_invites')
    op.drop_table('employment_info')
    op.drop_table('applications')
    op.drop_table('custom_leases')
    op.drop_table('standard_leases')
    op.drop_table('leases')
    op.drop_table('listings')
    op.drop_table('users')
