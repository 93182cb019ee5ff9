"""
Repositories package - Data access layer for the church inventory tracker
"""

# Import interfaces
from .base import (
    InventoryRepositoryInterface,
    MaintenanceRepositoryInterface,
    AcquisitionRepositoryInterface
)

# Import concrete implementations
from .inventory_repository import InventoryRepository
from .maintenance_repository import MaintenanceRepository
from .acquisition_repository import AcquisitionRepository

# Export all interfaces and implementations
__all__ = [
    'InventoryRepositoryInterface',
    'MaintenanceRepositoryInterface',
    'AcquisitionRepositoryInterface',
    'InventoryRepository',
    'MaintenanceRepository',
    'AcquisitionRepository'
]
