"""Initial schema: inventory_items, inventory_item_maintenance, item_acquisitions

Revision ID: 001_initial
Revises: 
Create Date: 2026-10-19 09:00:00

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_initial'
down_revision = None
branch_labels = None
depends_on = None

CATEGORIES = ('Audio', 'Video', 'Lighting', 'Instruments', 'Cables', 'Consumables', 'Furniture', 'Other')
STATUSES = ('Available', 'In Use', 'Under Repair', 'Out of Stock', 'Missing')
CONDITIONS = ('New', 'Good', 'Fair', 'Needs Repair', 'Broken')
PRIORITIES = ('Low', 'Medium', 'High', 'Critical')


def upgrade():
    # Create inventory_items table
    op.create_table(
        'inventory_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('category', sa.Enum(*CATEGORIES, name='itemcategory'), nullable=False, server_default='Other'),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('status', sa.Enum(*STATUSES, name='itemstatus'), nullable=False, server_default='Available'),
        sa.Column('condition', sa.Enum(*CONDITIONS, name='itemcondition'), nullable=False, server_default='Good'),
        sa.Column('brand', sa.String(length=100), nullable=True),
        sa.Column('model', sa.String(length=100), nullable=True),
        sa.Column('brand_model', sa.String(length=200), nullable=True),
        sa.Column('serial_number', sa.String(length=100), nullable=True),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('photo_url', sa.String(length=1024), nullable=True),
        sa.Column('date_purchased', sa.Date(), nullable=True),
        sa.Column('last_checked', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.CheckConstraint('quantity >= 0', name='ck_inventory_items_quantity_non_negative'),
        sa.PrimaryKeyConstraint('id')
    )

    # Create indexes for inventory_items
    op.create_index('ix_inventory_items_name', 'inventory_items', ['name'])
    op.create_index('ix_inventory_items_category', 'inventory_items', ['category'])
    op.create_index('ix_inventory_items_status', 'inventory_items', ['status'])
    op.create_index('ix_inventory_items_condition', 'inventory_items', ['condition'])

    # Create inventory_item_maintenance table
    op.create_table(
        'inventory_item_maintenance',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('item_id', sa.Integer(), nullable=False),
        sa.Column('maintenance_type', sa.String(length=100), nullable=False),
        sa.Column('priority', sa.Enum(*PRIORITIES, name='maintenancepriority'), nullable=False, server_default='Medium'),
        sa.Column('maintenance_date', sa.Date(), nullable=False),
        sa.Column('performed_by', sa.String(length=255), nullable=True),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('cost', sa.Numeric(precision=10, scale=2), nullable=False, server_default='0'),
        sa.Column('next_maintenance_date', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.CheckConstraint('cost >= 0', name='ck_inventory_item_maintenance_cost_non_negative'),
        sa.ForeignKeyConstraint(['item_id'], ['inventory_items.id']),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_index('ix_inventory_item_maintenance_item_id', 'inventory_item_maintenance', ['item_id'])
    op.create_index('ix_inventory_item_maintenance_maintenance_date', 'inventory_item_maintenance', ['maintenance_date'])

    # Create item_acquisitions table
    op.create_table(
        'item_acquisitions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('item_id', sa.Integer(), nullable=False),
        sa.Column('price', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('acquired_on', sa.Date(), nullable=True),
        sa.Column('supplier', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.CheckConstraint('price >= 0', name='ck_item_acquisitions_price_non_negative'),
        sa.ForeignKeyConstraint(['item_id'], ['inventory_items.id']),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_index('ix_item_acquisitions_item_id', 'item_acquisitions', ['item_id'])


def downgrade():
    # Drop tables in reverse order (respecting foreign keys)
    op.drop_index('ix_item_acquisitions_item_id', table_name='item_acquisitions')
    op.drop_table('item_acquisitions')

    op.drop_index('ix_inventory_item_maintenance_maintenance_date', table_name='inventory_item_maintenance')
    op.drop_index('ix_inventory_item_maintenance_item_id', table_name='inventory_item_maintenance')
    op.drop_table('inventory_item_maintenance')

    op.drop_index('ix_inventory_items_condition', table_name='inventory_items')
    op.drop_index('ix_inventory_items_status', table_name='inventory_items')
    op.drop_index('ix_inventory_items_category', table_name='inventory_items')
    op.drop_index('ix_inventory_items_name', table_name='inventory_items')
    op.drop_table('inventory_items')

    # Drop enums
    sa.Enum(name='maintenancepriority').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='itemcondition').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='itemstatus').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='itemcategory').drop(op.get_bind(), checkfirst=True)
