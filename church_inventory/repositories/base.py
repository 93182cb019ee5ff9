"""
Base Repository Interface - Abstract base classes
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Iterable, List, Optional
from church_inventory.models import (
    InventoryItem, MaintenanceRecord, AcquisitionRecord, ItemStatus, ItemCondition, ItemCategory
)


class InventoryRepositoryInterface(ABC):
    """Abstract base class for inventory item repository"""

    @abstractmethod
    def get_by_id(self, item_id: int) -> Optional[InventoryItem]:
        pass

    @abstractmethod
    def find(self, statuses: Optional[Iterable[ItemStatus]] = None,
             conditions: Optional[Iterable[ItemCondition]] = None,
             category: Optional[ItemCategory] = None,
             order_by: str = 'created_at', ascending: bool = False) -> List[InventoryItem]:
        pass

    @abstractmethod
    def update(self, item: InventoryItem) -> InventoryItem:
        pass

    @abstractmethod
    def stage(self, item: InventoryItem) -> InventoryItem:
        pass


class MaintenanceRepositoryInterface(ABC):
    """Abstract base class for maintenance record repository"""

    @abstractmethod
    def get_for_item(self, item_id: int) -> List[MaintenanceRecord]:
        pass

    @abstractmethod
    def get_all(self) -> List[MaintenanceRecord]:
        pass

    @abstractmethod
    def stage(self, record: MaintenanceRecord) -> MaintenanceRecord:
        pass

    @abstractmethod
    def sum_cost_between(self, start: date, end: date) -> float:
        pass


class AcquisitionRepositoryInterface(ABC):
    """Abstract base class for acquisition record repository"""

    @abstractmethod
    def get_all(self) -> List[AcquisitionRecord]:
        pass

    @abstractmethod
    def create(self, record: AcquisitionRecord) -> AcquisitionRecord:
        pass

    @abstractmethod
    def stage(self, record: AcquisitionRecord) -> AcquisitionRecord:
        pass
