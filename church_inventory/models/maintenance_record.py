"""
Maintenance Record Model
"""

from church_inventory.database import db
from datetime import datetime, date
from decimal import Decimal
from .enums import Priority


class MaintenanceRecord(db.Model):
    """Maintenance history entry for an inventory item; immutable once logged"""
    __tablename__ = 'inventory_item_maintenance'
    __table_args__ = (
        db.CheckConstraint('cost >= 0', name='ck_inventory_item_maintenance_cost_non_negative'),
    )

    id = db.Column(db.Integer, primary_key=True)
    item_id = db.Column(db.Integer, db.ForeignKey('inventory_items.id'), nullable=False, index=True)
    maintenance_type = db.Column(db.String(100), nullable=False)
    priority = db.Column(
        db.Enum(Priority, name='maintenancepriority', values_callable=lambda e: [m.value for m in e]),
        default=Priority.MEDIUM, nullable=False
    )
    maintenance_date = db.Column(db.Date, default=date.today, nullable=False, index=True)
    performed_by = db.Column(db.String(255), nullable=True)
    description = db.Column(db.Text, nullable=False)
    cost = db.Column(db.Numeric(10, 2), default=Decimal('0'), nullable=False)
    next_maintenance_date = db.Column(db.Date, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f'<MaintenanceRecord {self.id} item={self.item_id} {self.maintenance_type}>'

    def to_dict(self):
        """Convert to dictionary"""
        return {
            'id': self.id,
            'item_id': self.item_id,
            'maintenance_type': self.maintenance_type,
            'priority': self.priority.value if self.priority else None,
            'maintenance_date': self.maintenance_date.isoformat() if self.maintenance_date else None,
            'performed_by': self.performed_by,
            'description': self.description,
            'cost': float(self.cost) if self.cost is not None else 0.0,
            'next_maintenance_date': self.next_maintenance_date.isoformat() if self.next_maintenance_date else None,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }
