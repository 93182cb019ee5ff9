"""
Inventory View Service - assembles the display-ready view-model

Fetches items, joins them with their maintenance history, applies the
maintenance state transitions and hands out report aggregates.
"""

import time
import logging
from contextlib import contextmanager
from datetime import date
from typing import Any, Dict, List, NamedTuple, Optional

from sqlalchemy.exc import DataError, IntegrityError, OperationalError, SQLAlchemyError

from church_inventory.database import db, transaction
from church_inventory.models import (
    InventoryItem, MaintenanceRecord, AcquisitionRecord,
    ItemCategory, ItemStatus, ItemCondition, Priority, STATUS_ALIASES
)
from church_inventory.repositories import InventoryRepository, MaintenanceRepository, AcquisitionRepository
from church_inventory.clients import PhotoStorageClient
from church_inventory.services.normalization import normalize_item, normalize_maintenance_record
from church_inventory.services.state_machine import ItemState, apply_maintenance_event, resolve
from church_inventory.services.reports import compute_report_snapshot, needs_maintenance
from church_inventory.utils.exceptions import ItemNotFoundError, StoreUnavailableError, StorageError
from church_inventory.utils.parsing import parse_cost

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    'name', 'category', 'quantity', 'status', 'condition', 'brand', 'model',
    'serial_number', 'location', 'notes', 'date_purchased', 'last_checked'
)

ENUM_FIELDS = {
    'category': ItemCategory,
    'status': ItemStatus,
    'condition': ItemCondition,
}


class InventoryFilter(NamedTuple):
    """Store-side query for fetch_inventory"""
    statuses: tuple = ()
    conditions: tuple = ()
    category: Optional[ItemCategory] = None
    order_by: str = 'created_at'
    ascending: bool = False


class PhotoUpload(NamedTuple):
    content: bytes
    filename: Optional[str] = None
    content_type: str = 'application/octet-stream'


def coerce_enum(enum_cls, value):
    """Accept an enum member or its label (status aliases included)"""
    if value is None or isinstance(value, enum_cls):
        return value
    label = str(value).strip()
    if enum_cls is ItemStatus:
        label = STATUS_ALIASES.get(label, label)
    try:
        return enum_cls(label)
    except ValueError:
        allowed = ', '.join(member.value for member in enum_cls)
        raise ValueError(f"'{value}' is not a valid {enum_cls.__name__}; expected one of: {allowed}")


@contextmanager
def store_errors(action: str):
    """Map SQLAlchemy failures onto the domain error taxonomy"""
    try:
        yield
    except (IntegrityError, DataError) as e:
        # Constraint or value-range rejection of the submitted data
        db.session.rollback()
        raise ValueError(f"{action} rejected by the store: {e.orig}") from e
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"{action} failed: {e}")
        raise StoreUnavailableError(f"{action} failed: data store unavailable") from e


class InventoryViewService:
    """Business logic behind the inventory, maintenance and report views"""

    def __init__(self, inventory_repo=None, maintenance_repo=None, acquisition_repo=None,
                 storage_client=None, read_retries: int = 2, retry_delay: float = 0.2):
        self.inventory_repo = inventory_repo or InventoryRepository()
        self.maintenance_repo = maintenance_repo or MaintenanceRepository()
        self.acquisition_repo = acquisition_repo or AcquisitionRepository()
        self.storage_client = storage_client or PhotoStorageClient()
        self.read_retries = read_retries
        self.retry_delay = retry_delay

    @classmethod
    def from_config(cls, config, **overrides):
        """Build a service using the app's retry settings"""
        overrides.setdefault('read_retries', config.get('STORE_READ_RETRIES', 2))
        overrides.setdefault('retry_delay', config.get('STORE_RETRY_DELAY_SECONDS', 0.2))
        return cls(**overrides)

    def _read(self, action: str, query):
        """Run a read, retrying transient connection failures"""
        attempt = 0
        while True:
            try:
                return query()
            except OperationalError as e:
                db.session.rollback()
                if attempt >= self.read_retries:
                    logger.error(f"{action} failed after {attempt + 1} attempts: {e}")
                    raise StoreUnavailableError(f"{action} failed: data store unavailable") from e
                attempt += 1
                logger.warning(f"{action} failed, retrying ({attempt}/{self.read_retries}): {e}")
                time.sleep(self.retry_delay)
            except SQLAlchemyError as e:
                db.session.rollback()
                logger.error(f"{action} failed: {e}")
                raise StoreUnavailableError(f"{action} failed: data store unavailable") from e

    def _get_item(self, item_id: int) -> InventoryItem:
        item = self._read(f"Loading item {item_id}", lambda: self.inventory_repo.get_by_id(item_id))
        if item is None:
            raise ItemNotFoundError(item_id)
        return item

    # =========================================================================
    # Reads
    # =========================================================================

    def fetch_inventory(self, inventory_filter: Optional[InventoryFilter] = None) -> List[Dict[str, Any]]:
        """
        Fetch items matching the filter, newest first by default

        Returns:
            List of normalized item dicts; empty when nothing matches

        Raises:
            StoreUnavailableError: the store could not be queried
        """
        inventory_filter = inventory_filter or InventoryFilter()
        items = self._read('Fetching inventory', lambda: self.inventory_repo.find(
            statuses=inventory_filter.statuses,
            conditions=inventory_filter.conditions,
            category=inventory_filter.category,
            order_by=inventory_filter.order_by,
            ascending=inventory_filter.ascending
        ))
        return [normalize_item(item) for item in items]

    def attach_maintenance_history(self, item: Dict[str, Any]) -> Dict[str, Any]:
        """
        Return a copy of ``item`` carrying its maintenance history

        A failed history lookup degrades to an empty history instead of failing
        the item.
        """
        enriched = dict(item)
        try:
            records = self.maintenance_repo.get_for_item(item['id'])
            history = [normalize_maintenance_record(record) for record in records]
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.warning(f"Error fetching maintenance history for item {item.get('id')}: {e}")
            history = []

        enriched['maintenance_history'] = history
        enriched['latest_maintenance'] = history[0] if history else None
        return enriched

    def get_item_details(self, item_id: int) -> Dict[str, Any]:
        """Single item with maintenance history"""
        item = self._get_item(item_id)
        return self.attach_maintenance_history(normalize_item(item))

    def get_maintenance_view(self, include_all: bool = False) -> List[Dict[str, Any]]:
        """Items that need attention, each with its history"""
        items = self.fetch_inventory()
        if not include_all:
            items = [item for item in items if needs_maintenance(item)]
        return [self.attach_maintenance_history(item) for item in items]

    def get_report_snapshot(self, as_of: Optional[date] = None, recent_limit: int = 5) -> Dict[str, Any]:
        """Load everything the report needs and aggregate it"""
        items = self._read('Loading items for report', self.inventory_repo.get_all)
        records = self._read('Loading maintenance for report', self.maintenance_repo.get_all)
        acquisitions = self._read('Loading acquisitions for report', self.acquisition_repo.get_all)
        return compute_report_snapshot(
            [normalize_item(item) for item in items],
            records,
            acquisitions,
            as_of=as_of,
            recent_limit=recent_limit
        )

    def get_dashboard_stats(self, as_of: Optional[date] = None) -> Dict[str, Any]:
        """Headline counters for the dashboard grid, aggregated in the store"""
        as_of = as_of or date.today()
        year_start = date(as_of.year, 1, 1)
        next_year = date(as_of.year + 1, 1, 1)
        return {
            'total_items': self._read('Counting items', self.inventory_repo.count_total),
            'total_tracked_quantity': self._read('Summing quantities', self.inventory_repo.calculate_total_quantity),
            'needs_maintenance_count': self._read('Counting maintenance', self.inventory_repo.count_needs_maintenance),
            'needs_replacement_count': self._read('Counting replacements', self.inventory_repo.count_needs_replacement),
            'total_asset_value': round(self._read('Summing asset value', self.acquisition_repo.calculate_total_value), 2),
            'maintenance_cost_ytd': round(self._read(
                'Summing maintenance cost',
                lambda: self.maintenance_repo.sum_cost_between(year_start, next_year)
            ), 2),
        }

    # =========================================================================
    # Writes
    # =========================================================================

    def log_maintenance_issue(self, item_id: int, record: Dict[str, Any]) -> Dict[str, Any]:
        """
        Log a maintenance record and apply the resulting state transition

        The record insert and the item update commit together.

        Args:
            item_id: item the record belongs to
            record: maintenance_type, description, priority, performed_by,
                maintenance_date, cost (raw user input), next_maintenance_date

        Returns:
            Dict with the stored record, the item afterwards and whether it moved
        """
        maintenance_type = (record.get('maintenance_type') or '').strip()
        if not maintenance_type:
            raise ValueError("maintenance_type is required")
        description = (record.get('description') or '').strip()
        if not description:
            raise ValueError("description is required")

        item = self._get_item(item_id)

        entry = MaintenanceRecord(
            item_id=item.id,
            maintenance_type=maintenance_type,
            priority=coerce_enum(Priority, record.get('priority')) or Priority.MEDIUM,
            maintenance_date=record.get('maintenance_date') or date.today(),
            performed_by=record.get('performed_by') or None,
            description=description,
            cost=parse_cost(record.get('cost')),
            next_maintenance_date=record.get('next_maintenance_date') or None
        )

        before = ItemState(item.status, item.condition)
        after = apply_maintenance_event(before, maintenance_type)

        with store_errors(f"Logging maintenance for item {item_id}"):
            with transaction():
                self.maintenance_repo.stage(entry)
                if after != before:
                    item.status, item.condition = after
                    self.inventory_repo.stage(item)

        if after != before:
            logger.info(
                f"Item {item.id} moved from {before.status.value}/{before.condition.value} "
                f"to {after.status.value}/{after.condition.value} after '{maintenance_type}'"
            )

        return {
            'record': normalize_maintenance_record(entry),
            'item': normalize_item(item),
            'transitioned': after != before,
        }

    def resolve_item(self, item_id: int, condition=ItemCondition.GOOD) -> Dict[str, Any]:
        """Return an item to service"""
        item = self._get_item(item_id)
        after = resolve(ItemState(item.status, item.condition), coerce_enum(ItemCondition, condition))

        item.status, item.condition = after
        item.last_checked = date.today()
        with store_errors(f"Resolving item {item_id}"):
            self.inventory_repo.update(item)

        logger.info(f"Item {item.id} returned to service as {after.condition.value}")
        return normalize_item(item)

    def add_item(self, data: Dict[str, Any], photo: Optional[PhotoUpload] = None) -> Dict[str, Any]:
        """
        Create an item, uploading its photo first

        If the row cannot be written the uploaded photo is deleted again.
        """
        fields = self._item_fields(data, partial=False)
        purchase_price = data.get('purchase_price')

        uploaded = None
        if photo is not None:
            uploaded = self.storage_client.upload(photo.content, photo.filename, photo.content_type)
            fields['photo_url'] = uploaded.public_url

        item = InventoryItem(**fields)
        try:
            with store_errors(f"Creating item '{fields.get('name')}'"):
                with transaction():
                    self.inventory_repo.stage(item)
                    if purchase_price is not None:
                        self.acquisition_repo.stage(AcquisitionRecord(
                            item_id=item.id,
                            price=parse_cost(purchase_price),
                            acquired_on=fields.get('date_purchased'),
                            supplier=data.get('supplier') or None
                        ))
        except Exception:
            if uploaded is not None:
                self._discard_photo(uploaded.name)
            raise

        logger.info(f"Created inventory item {item.id} ({item.name})")
        return normalize_item(item)

    def _discard_photo(self, name: str) -> None:
        try:
            self.storage_client.delete(name)
            logger.info(f"Removed photo {name} after failed item insert")
        except (StorageError, RuntimeError) as e:
            logger.error(f"reconcile: orphaned photo {name} could not be removed: {e}")

    def update_item(self, item_id: int, changes: Dict[str, Any]) -> Dict[str, Any]:
        """Persist edits to an item's descriptive and state fields"""
        item = self._get_item(item_id)
        fields = self._item_fields(changes, partial=True)
        if not fields:
            raise ValueError("No editable fields supplied")

        for key, value in fields.items():
            setattr(item, key, value)

        with store_errors(f"Updating item {item_id}"):
            self.inventory_repo.update(item)
        return normalize_item(item)

    def record_acquisition(self, item_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
        item = self._get_item(item_id)
        if data.get('price') is None:
            raise ValueError("price is required")
        acquisition = AcquisitionRecord(
            item_id=item.id,
            price=parse_cost(data['price']),
            acquired_on=data.get('acquired_on'),
            supplier=data.get('supplier') or None
        )
        with store_errors(f"Recording acquisition for item {item_id}"):
            self.acquisition_repo.create(acquisition)
        return acquisition.to_dict()

    @staticmethod
    def _item_fields(data: Dict[str, Any], partial: bool) -> Dict[str, Any]:
        """Pick and coerce the editable item columns out of ``data``"""
        unknown = set(data) - set(EDITABLE_FIELDS) - {'purchase_price', 'supplier', 'brand_model'}
        if partial and unknown:
            raise ValueError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")

        fields = {}
        for key in EDITABLE_FIELDS + ('brand_model',):
            if key not in data:
                continue
            value = data[key]
            if key in ENUM_FIELDS:
                value = coerce_enum(ENUM_FIELDS[key], value)
            elif isinstance(value, str):
                value = value.strip() or None
            fields[key] = value

        if not partial and not fields.get('name'):
            raise ValueError("name is required")
        if partial and 'name' in fields and not fields['name']:
            raise ValueError("name cannot be blank")

        if 'quantity' in fields:
            if fields['quantity'] is None:
                raise ValueError("quantity is required")
            quantity = int(fields['quantity'])
            if quantity < 0:
                raise ValueError("quantity cannot be negative")
            fields['quantity'] = quantity

        for key in ('category', 'status', 'condition'):
            if key in fields and fields[key] is None:
                raise ValueError(f"{key} cannot be empty")

        return fields
