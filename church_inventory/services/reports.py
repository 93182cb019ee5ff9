"""
Aggregate report computation.

Everything here is pure: callers fetch the rows, these functions only count
and sum. Inputs may be model instances or their dict form.
"""

from collections import Counter
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from church_inventory.models import ItemStatus, ItemCondition, DAMAGED_CONDITIONS
from church_inventory.services.normalization import normalize_status

RECENT_MAINTENANCE_LIMIT = 5

_DAMAGED_LABELS = tuple(condition.value for condition in DAMAGED_CONDITIONS)


def _as_dict(row: Any) -> Dict[str, Any]:
    return row.to_dict() if hasattr(row, 'to_dict') else dict(row)


def _as_date(value) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value:
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            return None
    return None


def _money(value) -> Decimal:
    if value is None:
        return Decimal('0')
    return Decimal(str(value))


def _label(value):
    return getattr(value, 'value', value)


def needs_maintenance(item: Dict[str, Any]) -> bool:
    return (normalize_status(item.get('status')) == ItemStatus.UNDER_REPAIR.value
            or _label(item.get('condition')) in _DAMAGED_LABELS)


def needs_replacement(item: Dict[str, Any]) -> bool:
    return _label(item.get('condition')) == ItemCondition.BROKEN.value


def category_breakdown(items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Share of item count per category, largest first; empty for no items"""
    total = len(items)
    if total == 0:
        return []

    counts = Counter(_label(item.get('category')) or 'Other' for item in items)
    ordered = sorted(counts.items(), key=lambda pair: (-pair[1], pair[0]))
    return [
        {
            'category': category,
            'count': count,
            'percentage': round(count * 100.0 / total, 2),
        }
        for category, count in ordered
    ]


def maintenance_cost_for_year(records: List[Dict[str, Any]], year: int) -> Decimal:
    """Sum of record costs dated within calendar ``year``"""
    total = Decimal('0')
    for record in records:
        performed = _as_date(record.get('maintenance_date'))
        if performed is not None and performed.year == year:
            total += _money(record.get('cost'))
    return total


def recent_maintenance(records: List[Dict[str, Any]], item_names: Dict[Any, str],
                       limit: int = RECENT_MAINTENANCE_LIMIT) -> List[Dict[str, Any]]:
    """Latest ``limit`` records across all items, newest first"""
    ordered = sorted(
        records,
        key=lambda r: (_as_date(r.get('maintenance_date')) or date.min, r.get('id') or 0),
        reverse=True,
    )
    return [
        {
            'id': record.get('id'),
            'item_id': record.get('item_id'),
            'item': item_names.get(record.get('item_id'), ''),
            'date': record.get('maintenance_date'),
            'cost': float(_money(record.get('cost'))),
            'type': record.get('maintenance_type'),
        }
        for record in ordered[:max(limit, 0)]
    ]


def end_of_life_items(items: List[Dict[str, Any]], acquisitions: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Broken items with their latest purchase price as a replacement estimate"""
    latest_price = {}
    latest_key = {}
    for acquisition in acquisitions:
        item_id = acquisition.get('item_id')
        key = (_as_date(acquisition.get('acquired_on')) or date.min, acquisition.get('id') or 0)
        if item_id not in latest_key or key > latest_key[item_id]:
            latest_key[item_id] = key
            latest_price[item_id] = float(_money(acquisition.get('price')))

    return [
        {
            'id': item.get('id'),
            'name': item.get('name'),
            'reason': item.get('notes') or ItemCondition.BROKEN.value,
            'replacement_cost': latest_price.get(item.get('id')),
        }
        for item in items
        if needs_replacement(item)
    ]


def compute_report_snapshot(items: Iterable[Any], maintenance_records: Iterable[Any],
                            acquisition_records: Iterable[Any], as_of: Optional[date] = None,
                            recent_limit: int = RECENT_MAINTENANCE_LIMIT) -> Dict[str, Any]:
    """
    Aggregate the report view.

    Args:
        items: inventory items
        maintenance_records: maintenance history rows for any items
        acquisition_records: acquisition rows for any items
        as_of: reference day for the year-to-date window (defaults to today)
        recent_limit: number of entries in the recent maintenance log

    Returns:
        Dict snapshot; zero items gives zero counts and an empty breakdown
    """
    as_of = as_of or date.today()
    items = [_as_dict(item) for item in items]
    records = [_as_dict(record) for record in maintenance_records]
    acquisitions = [_as_dict(acquisition) for acquisition in acquisition_records]

    total_asset_value = sum((_money(a.get('price')) for a in acquisitions), Decimal('0'))
    item_names = {item.get('id'): item.get('name') for item in items}

    return {
        'total_items': len(items),
        'total_tracked_quantity': sum(int(item.get('quantity') or 0) for item in items),
        'needs_maintenance_count': sum(1 for item in items if needs_maintenance(item)),
        'needs_replacement_count': sum(1 for item in items if needs_replacement(item)),
        'total_asset_value': float(total_asset_value),
        'maintenance_cost_ytd': float(maintenance_cost_for_year(records, as_of.year)),
        'category_breakdown': category_breakdown(items),
        'recent_maintenance': recent_maintenance(records, item_names, recent_limit),
        'end_of_life_items': end_of_life_items(items, acquisitions),
        'generated_at': datetime.utcnow().isoformat(),
        'as_of': as_of.isoformat(),
    }
