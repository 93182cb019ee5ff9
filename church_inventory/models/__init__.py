"""
Models package - Database models for the church inventory tracker
"""

# Import database instance
from church_inventory.database import db

# Import enums first
from .enums import (
    ItemCategory, ItemStatus, ItemCondition, MaintenanceType, Priority,
    STATUS_ALIASES, DAMAGED_CONDITIONS
)

# Import models
from .inventory_item import InventoryItem
from .maintenance_record import MaintenanceRecord
from .acquisition_record import AcquisitionRecord

# Export all models and enums
__all__ = [
    'db',
    'ItemCategory',
    'ItemStatus',
    'ItemCondition',
    'MaintenanceType',
    'Priority',
    'STATUS_ALIASES',
    'DAMAGED_CONDITIONS',
    'InventoryItem',
    'MaintenanceRecord',
    'AcquisitionRecord'
]
