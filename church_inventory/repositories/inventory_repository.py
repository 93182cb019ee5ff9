"""
Inventory Repository Implementation
"""

from typing import Iterable, List, Optional
from church_inventory.database import db
from church_inventory.models import (
    InventoryItem, ItemStatus, ItemCondition, ItemCategory, DAMAGED_CONDITIONS
)
from datetime import datetime
from sqlalchemy.exc import IntegrityError, DataError
from sqlalchemy import or_, func
from .base import InventoryRepositoryInterface

ORDERABLE_COLUMNS = ('created_at', 'updated_at', 'name', 'quantity', 'last_checked', 'date_purchased')


class InventoryRepository(InventoryRepositoryInterface):
    """Concrete implementation of inventory repository"""

    def get_by_id(self, item_id: int) -> Optional[InventoryItem]:
        """Get inventory item by ID"""
        return db.session.get(InventoryItem, item_id)

    def find(self, statuses: Optional[Iterable[ItemStatus]] = None,
             conditions: Optional[Iterable[ItemCondition]] = None,
             category: Optional[ItemCategory] = None,
             order_by: str = 'created_at', ascending: bool = False) -> List[InventoryItem]:
        """
        Find items matching every supplied filter.

        Statuses and conditions are each "any of"; the two sets combine with AND.
        Ties on the sort column fall back to id in the same direction.
        """
        if order_by not in ORDERABLE_COLUMNS:
            raise ValueError(f"Cannot order inventory by '{order_by}'")

        query = InventoryItem.query

        if statuses:
            query = query.filter(InventoryItem.status.in_(list(statuses)))

        if conditions:
            query = query.filter(InventoryItem.condition.in_(list(conditions)))

        if category:
            query = query.filter(InventoryItem.category == category)

        column = getattr(InventoryItem, order_by)
        if ascending:
            query = query.order_by(column.asc(), InventoryItem.id.asc())
        else:
            query = query.order_by(column.desc(), InventoryItem.id.desc())

        return query.all()

    def get_all(self) -> List[InventoryItem]:
        return self.find()

    def update(self, item: InventoryItem) -> InventoryItem:
        """Update inventory item"""
        try:
            item.updated_at = datetime.utcnow()
            db.session.commit()
            return item
        except (IntegrityError, DataError) as e:
            db.session.rollback()
            raise ValueError(f"Inventory item {item.id} was rejected by the store") from e

    def stage(self, item: InventoryItem) -> InventoryItem:
        """Add to the current transaction without committing; assigns the id"""
        item.updated_at = datetime.utcnow()
        db.session.add(item)
        db.session.flush()
        return item

    def count_total(self) -> int:
        """Count total inventory items"""
        return InventoryItem.query.count()

    def calculate_total_quantity(self) -> int:
        """Sum of quantities across all items"""
        result = db.session.query(func.sum(InventoryItem.quantity)).scalar()
        return int(result) if result else 0

    def count_needs_maintenance(self) -> int:
        """Count items under repair or in a damaged condition"""
        return InventoryItem.query.filter(
            or_(
                InventoryItem.status == ItemStatus.UNDER_REPAIR,
                InventoryItem.condition.in_(DAMAGED_CONDITIONS)
            )
        ).count()

    def count_needs_replacement(self) -> int:
        """Count broken items"""
        return InventoryItem.query.filter(
            InventoryItem.condition == ItemCondition.BROKEN
        ).count()
