"""
Services package - view-model assembly and business rules
"""

from .inventory_view_service import InventoryViewService, InventoryFilter, PhotoUpload, coerce_enum
from .state_machine import ItemState, apply_maintenance_event, resolve, is_damage_event
from .normalization import normalize_item, normalize_maintenance_record
from .reports import compute_report_snapshot
from .listing import filter_items, paginate, Page

__all__ = [
    'InventoryViewService',
    'InventoryFilter',
    'PhotoUpload',
    'coerce_enum',
    'ItemState',
    'apply_maintenance_event',
    'resolve',
    'is_damage_event',
    'normalize_item',
    'normalize_maintenance_record',
    'compute_report_snapshot',
    'filter_items',
    'paginate',
    'Page'
]
