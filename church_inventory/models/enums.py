"""
Model Enums
"""

from enum import Enum


class ItemCategory(Enum):
    AUDIO = "Audio"
    VIDEO = "Video"
    LIGHTING = "Lighting"
    INSTRUMENTS = "Instruments"
    CABLES = "Cables"
    CONSUMABLES = "Consumables"
    FURNITURE = "Furniture"
    OTHER = "Other"


class ItemStatus(Enum):
    AVAILABLE = "Available"
    IN_USE = "In Use"
    UNDER_REPAIR = "Under Repair"
    OUT_OF_STOCK = "Out of Stock"
    MISSING = "Missing"


class ItemCondition(Enum):
    NEW = "New"
    GOOD = "Good"
    FAIR = "Fair"
    NEEDS_REPAIR = "Needs Repair"
    BROKEN = "Broken"


class MaintenanceType(Enum):
    REPAIR_NEEDED = "Repair Needed"
    BROKEN = "Broken"
    MISSING = "Missing"
    ROUTINE_CHECK = "Routine Check"
    MAINTENANCE_DUE = "Maintenance Due"
    OTHER = "Other"


class Priority(Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


# Older dashboards labelled repairs as "Maintenance"
STATUS_ALIASES = {
    'Maintenance': ItemStatus.UNDER_REPAIR.value,
}

DAMAGED_CONDITIONS = (ItemCondition.NEEDS_REPAIR, ItemCondition.BROKEN)
