"""
Acquisition Record Model
"""

from church_inventory.database import db
from datetime import datetime


class AcquisitionRecord(db.Model):
    """Purchase record backing the total asset value"""
    __tablename__ = 'item_acquisitions'
    __table_args__ = (
        db.CheckConstraint('price >= 0', name='ck_item_acquisitions_price_non_negative'),
    )

    id = db.Column(db.Integer, primary_key=True)
    item_id = db.Column(db.Integer, db.ForeignKey('inventory_items.id'), nullable=False, index=True)
    price = db.Column(db.Numeric(12, 2), nullable=False)
    acquired_on = db.Column(db.Date, nullable=True)
    supplier = db.Column(db.String(255), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f'<AcquisitionRecord {self.id} item={self.item_id} {self.price}>'

    def to_dict(self):
        return {
            'id': self.id,
            'item_id': self.item_id,
            'price': float(self.price) if self.price is not None else 0.0,
            'acquired_on': self.acquired_on.isoformat() if self.acquired_on else None,
            'supplier': self.supplier,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }
