"""
Maintenance Repository Implementation
"""

from datetime import date
from typing import List
from sqlalchemy import func
from church_inventory.database import db
from church_inventory.models import MaintenanceRecord
from .base import MaintenanceRepositoryInterface


class MaintenanceRepository(MaintenanceRepositoryInterface):
    """Concrete implementation of maintenance record repository"""

    @staticmethod
    def _newest_first(query):
        # Same-day records keep insertion order, newest insertion first
        return query.order_by(MaintenanceRecord.maintenance_date.desc(), MaintenanceRecord.id.desc())

    def get_for_item(self, item_id: int) -> List[MaintenanceRecord]:
        """Get maintenance history for an item, most recent first"""
        return self._newest_first(MaintenanceRecord.query.filter_by(item_id=item_id)).all()

    def get_all(self) -> List[MaintenanceRecord]:
        return self._newest_first(MaintenanceRecord.query).all()

    def stage(self, record: MaintenanceRecord) -> MaintenanceRecord:
        """Add to the current transaction without committing"""
        db.session.add(record)
        db.session.flush()
        return record

    def sum_cost_between(self, start: date, end: date) -> float:
        """Sum maintenance cost for records dated in [start, end)"""
        result = db.session.query(func.sum(MaintenanceRecord.cost)).filter(
            MaintenanceRecord.maintenance_date >= start,
            MaintenanceRecord.maintenance_date < end
        ).scalar()
        return float(result) if result else 0.0
