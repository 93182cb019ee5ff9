"""
Inventory Item Model
"""

from church_inventory.database import db
from datetime import datetime
from .enums import ItemCategory, ItemStatus, ItemCondition, DAMAGED_CONDITIONS


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class InventoryItem(db.Model):
    """A tracked piece of church equipment"""
    __tablename__ = 'inventory_items'
    __table_args__ = (
        db.CheckConstraint('quantity >= 0', name='ck_inventory_items_quantity_non_negative'),
    )

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False, index=True)
    category = db.Column(
        db.Enum(ItemCategory, name='itemcategory', values_callable=_enum_values),
        default=ItemCategory.OTHER, nullable=False, index=True
    )
    quantity = db.Column(db.Integer, default=1, nullable=False)
    status = db.Column(
        db.Enum(ItemStatus, name='itemstatus', values_callable=_enum_values),
        default=ItemStatus.AVAILABLE, nullable=False, index=True
    )
    condition = db.Column(
        db.Enum(ItemCondition, name='itemcondition', values_callable=_enum_values),
        default=ItemCondition.GOOD, nullable=False, index=True
    )
    brand = db.Column(db.String(100), nullable=True)
    model = db.Column(db.String(100), nullable=True)
    brand_model = db.Column(db.String(200), nullable=True)  # Legacy combined label
    serial_number = db.Column(db.String(100), nullable=True)
    location = db.Column(db.String(255), nullable=True)
    notes = db.Column(db.Text, nullable=True)
    photo_url = db.Column(db.String(1024), nullable=True)
    date_purchased = db.Column(db.Date, nullable=True)
    last_checked = db.Column(db.Date, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    maintenance_records = db.relationship('MaintenanceRecord', backref='item', lazy=True)
    acquisitions = db.relationship('AcquisitionRecord', backref='item', lazy=True)

    def __repr__(self):
        return f'<InventoryItem {self.id} {self.name}>'

    @property
    def needs_maintenance(self):
        """Under repair, or physically damaged regardless of usage status"""
        return self.status == ItemStatus.UNDER_REPAIR or self.condition in DAMAGED_CONDITIONS

    @property
    def needs_replacement(self):
        return self.condition == ItemCondition.BROKEN

    def to_dict(self):
        """Convert to dictionary"""
        return {
            'id': self.id,
            'name': self.name,
            'category': self.category.value if self.category else None,
            'quantity': self.quantity,
            'status': self.status.value if self.status else None,
            'condition': self.condition.value if self.condition else None,
            'brand': self.brand,
            'model': self.model,
            'brand_model': self.brand_model,
            'serial_number': self.serial_number,
            'location': self.location,
            'notes': self.notes,
            'photo_url': self.photo_url,
            'date_purchased': self.date_purchased.isoformat() if self.date_purchased else None,
            'last_checked': self.last_checked.isoformat() if self.last_checked else None,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None
        }
