"""
Acquisition Repository Implementation
"""

from typing import List
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, DataError
from church_inventory.database import db
from church_inventory.models import AcquisitionRecord
from .base import AcquisitionRepositoryInterface


class AcquisitionRepository(AcquisitionRepositoryInterface):
    """Concrete implementation of acquisition record repository"""

    def get_all(self) -> List[AcquisitionRecord]:
        return AcquisitionRecord.query.order_by(AcquisitionRecord.id.asc()).all()

    def create(self, record: AcquisitionRecord) -> AcquisitionRecord:
        try:
            db.session.add(record)
            db.session.commit()
            return record
        except (IntegrityError, DataError) as e:
            db.session.rollback()
            raise ValueError(f"Acquisition for item {record.item_id} was rejected by the store") from e

    def stage(self, record: AcquisitionRecord) -> AcquisitionRecord:
        db.session.add(record)
        db.session.flush()
        return record

    def calculate_total_value(self) -> float:
        """Sum of all acquisition prices"""
        result = db.session.query(func.sum(AcquisitionRecord.price)).scalar()
        return float(result) if result else 0.0
