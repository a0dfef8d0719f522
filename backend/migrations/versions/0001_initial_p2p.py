"""initial procurement tables

Revision ID: 0001_initial_p2p
Revises:
Create Date: 2026-10-19
"""
from __future__ import annotations
from alembic import op
import sqlalchemy as sa

revision = '0001_initial_p2p'
down_revision = None
branch_labels = None
depends_on = None


def _audit_columns(approvable: bool = False):
    cols = [
        sa.Column('added_by', sa.String(length=32), sa.ForeignKey('staff.code'), nullable=False),
        sa.Column('added_date', sa.DateTime(), nullable=False, index=True),
    ]
    if approvable:
        cols += [
            sa.Column('approved_by', sa.String(length=32), sa.ForeignKey('staff.code')),
            sa.Column('approved_date', sa.DateTime()),
        ]
    return cols


def upgrade():
    # --- staff & permissions ---
    op.create_table('staff',
        sa.Column('code', sa.String(length=32), primary_key=True),
        sa.Column('full_name', sa.String(length=128), nullable=False),
        sa.Column('email', sa.String(length=128), nullable=False, unique=True),
        sa.Column('department', sa.String(length=64)),
        sa.Column('is_active', sa.Boolean(), server_default=sa.text('1')),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'))
    )
    op.create_index('ix_staff_email', 'staff', ['email'])

    op.create_table('permissions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('type', sa.String(length=32), nullable=False),
        sa.Column('name', sa.String(length=64), nullable=False),
        sa.UniqueConstraint('type', 'name', name='uq_permission_type_name')
    )
    op.create_index('ix_permissions_name', 'permissions', ['name'])

    op.create_table('staff_permissions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('staff_code', sa.String(length=32), sa.ForeignKey('staff.code', ondelete='CASCADE'), nullable=False),
        sa.Column('permission_id', sa.Integer(), sa.ForeignKey('permissions.id', ondelete='CASCADE'), nullable=False),
        sa.UniqueConstraint('staff_code', 'permission_id', name='uq_staff_permission')
    )

    op.create_table('items',
        sa.Column('code', sa.String(length=32), primary_key=True),
        sa.Column('name', sa.String(length=128), nullable=False, index=True)
    )

    op.create_table('vendors',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=150), nullable=False, unique=True),
        sa.Column('contact_email', sa.String(length=150), index=True),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='ACTIVE', index=True)
    )

    # --- requisitions & quotations ---
    op.create_table('purchase_requisitions',
        sa.Column('code', sa.String(length=32), primary_key=True),
        sa.Column('description', sa.Text()),
        sa.Column('required_date', sa.Date()),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='Pending', index=True),
        sa.Column('priority', sa.String(length=32)),
        *_audit_columns(approvable=True)
    )
    op.create_table('requisition_items',
        sa.Column('code', sa.String(length=32), primary_key=True),
        sa.Column('pr_code', sa.String(length=32), sa.ForeignKey('purchase_requisitions.code', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('item_code', sa.String(length=32), sa.ForeignKey('items.code'), nullable=False),
        sa.Column('required_quantity', sa.Integer(), nullable=False, server_default='0')
    )
    op.create_table('quotation_requests',
        sa.Column('code', sa.String(length=32), primary_key=True),
        sa.Column('pr_code', sa.String(length=32), sa.ForeignKey('purchase_requisitions.code'), nullable=False, index=True),
        sa.Column('description', sa.Text()),
        sa.Column('expected_date', sa.Date()),
        sa.Column('delivery_address', sa.String(length=255)),
        sa.Column('accountant_code', sa.String(length=32), sa.ForeignKey('staff.code')),
        *_audit_columns()
    )
    op.create_table('quotation_request_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('rfq_code', sa.String(length=32), sa.ForeignKey('quotation_requests.code', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('pr_item_code', sa.String(length=32), sa.ForeignKey('requisition_items.code'), nullable=False)
    )
    op.create_table('registered_quotations',
        sa.Column('code', sa.String(length=32), primary_key=True),
        sa.Column('rfq_code', sa.String(length=32), sa.ForeignKey('quotation_requests.code'), nullable=False, index=True),
        sa.Column('vendor_id', sa.Integer(), sa.ForeignKey('vendors.id'), nullable=False),
        sa.Column('delivery_date', sa.Date()),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='Pending', index=True),
        sa.Column('shipping_charges', sa.Numeric(12, 2), nullable=False, server_default='0'),
        *_audit_columns(approvable=True)
    )
    op.create_table('quotation_items',
        sa.Column('code', sa.String(length=32), primary_key=True),
        sa.Column('rq_code', sa.String(length=32), sa.ForeignKey('registered_quotations.code', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('item_code', sa.String(length=32), sa.ForeignKey('items.code'), nullable=False),
        sa.Column('cost_per_unit', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='0')
    )

    # --- orders ---
    op.create_table('purchase_orders',
        sa.Column('code', sa.String(length=32), primary_key=True),
        sa.Column('vendor_id', sa.Integer(), sa.ForeignKey('vendors.id'), nullable=False, index=True),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='Pending', index=True),
        sa.Column('total_amount', sa.Numeric(14, 2), nullable=False, server_default='0'),
        sa.Column('shipping_charges', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('billing_address', sa.String(length=255)),
        sa.Column('accountant_code', sa.String(length=32), sa.ForeignKey('staff.code')),
        *_audit_columns(approvable=True)
    )
    op.create_table('purchase_order_items',
        sa.Column('code', sa.String(length=32), primary_key=True),
        sa.Column('po_code', sa.String(length=32), sa.ForeignKey('purchase_orders.code', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('rq_item_code', sa.String(length=32), sa.ForeignKey('quotation_items.code')),
        sa.Column('item_code', sa.String(length=32), sa.ForeignKey('items.code'), nullable=False),
        sa.Column('cost_per_unit', sa.Numeric(12, 2)),
        sa.Column('discount', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('quantity', sa.Integer()),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='Pending')
    )
    op.create_table('purchase_order_terms',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('po_code', sa.String(length=32), sa.ForeignKey('purchase_orders.code', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('name', sa.String(length=255), nullable=False)
    )

    # --- receipts, returns, quality checks ---
    op.create_table('goods_receipts',
        sa.Column('code', sa.String(length=32), primary_key=True),
        sa.Column('po_code', sa.String(length=32), sa.ForeignKey('purchase_orders.code'), nullable=False, index=True),
        sa.Column('invoice_no', sa.String(length=64)),
        sa.Column('invoice_date', sa.Date()),
        sa.Column('company_address', sa.String(length=255)),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='Received', index=True),
        sa.Column('total_amount', sa.Numeric(14, 2), nullable=False, server_default='0'),
        sa.Column('shipping_charges', sa.Numeric(12, 2), nullable=False, server_default='0'),
        *_audit_columns()
    )
    op.create_table('goods_receipt_items',
        sa.Column('code', sa.String(length=32), primary_key=True),
        sa.Column('grn_code', sa.String(length=32), sa.ForeignKey('goods_receipts.code', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('item_code', sa.String(length=32), sa.ForeignKey('items.code'), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('cost_per_unit', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('discount', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('tax_rate', sa.String(length=16)),
        sa.Column('final_amount', sa.Numeric(14, 2), nullable=False, server_default='0')
    )
    op.create_table('goods_returns',
        sa.Column('code', sa.String(length=32), primary_key=True),
        sa.Column('grn_code', sa.String(length=32), sa.ForeignKey('goods_receipts.code'), nullable=False, index=True),
        sa.Column('transporter_name', sa.String(length=128)),
        sa.Column('transport_contact_no', sa.String(length=32)),
        sa.Column('vehicle_no', sa.String(length=32)),
        sa.Column('vehicle_type', sa.String(length=64)),
        sa.Column('reason', sa.Text()),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='Pending', index=True),
        *_audit_columns()
    )
    op.create_table('goods_return_items',
        sa.Column('code', sa.String(length=32), primary_key=True),
        sa.Column('return_code', sa.String(length=32), sa.ForeignKey('goods_returns.code', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('item_code', sa.String(length=32), sa.ForeignKey('items.code'), nullable=False),
        sa.Column('reason', sa.Text())
    )
    op.create_table('quality_checks',
        sa.Column('code', sa.String(length=32), primary_key=True),
        sa.Column('grn_item_code', sa.String(length=32), sa.ForeignKey('goods_receipt_items.code'), nullable=False, index=True),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='Confirmed', index=True),
        sa.Column('inspection_frequency', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('sample_checked', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('sample_failed', sa.Integer(), nullable=False, server_default='0'),
        *_audit_columns(),
        sa.Column('failed_by', sa.String(length=32), sa.ForeignKey('staff.code')),
        sa.Column('failed_date', sa.DateTime()),
        sa.Column('reason', sa.Text())
    )

    # --- stock planning ---
    op.create_table('stock_requests',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('kind', sa.String(length=8), nullable=False, index=True),
        sa.Column('item_code', sa.String(length=32), sa.ForeignKey('items.code'), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('required_date', sa.Date()),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='Pending'),
        *_audit_columns()
    )
    op.create_table('material_plans',
        sa.Column('code', sa.String(length=32), primary_key=True),
        sa.Column('plan_name', sa.String(length=128), nullable=False),
        sa.Column('year', sa.Integer()),
        sa.Column('from_date', sa.Date()),
        sa.Column('to_date', sa.Date()),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='Pending', index=True),
        sa.Column('reason', sa.Text()),
        *_audit_columns(approvable=True)
    )
    op.create_table('material_plan_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('plan_code', sa.String(length=32), sa.ForeignKey('material_plans.code', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('item_code', sa.String(length=32), sa.ForeignKey('items.code'), nullable=False),
        sa.Column('quantity', sa.Integer())
    )

    # --- notifications ---
    op.create_table('notifications',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('staff_code', sa.String(length=32), sa.ForeignKey('staff.code', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('message', sa.String(length=500), nullable=False),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.text('0'), index=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False)
    )


def downgrade():
    for table in (
        'notifications', 'material_plan_items', 'material_plans', 'stock_requests',
        'quality_checks', 'goods_return_items', 'goods_returns', 'goods_receipt_items', 'goods_receipts',
        'purchase_order_terms', 'purchase_order_items', 'purchase_orders',
        'quotation_items', 'registered_quotations', 'quotation_request_items', 'quotation_requests',
        'requisition_items', 'purchase_requisitions',
        'vendors', 'items', 'staff_permissions', 'permissions', 'staff',
    ):
        op.drop_table(table)
