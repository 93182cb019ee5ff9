"""
Normalization of raw store rows into the display-ready view-model shape.

Every optional field is coalesced here so consumers never need fallbacks.
"""

from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional

from church_inventory.models import STATUS_ALIASES

TEXT_FIELDS = ('name', 'category', 'serial_number', 'location', 'notes')


def _text(value) -> str:
    return value.strip() if isinstance(value, str) else ''


def _iso(value) -> Optional[str]:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value or None


def _enum_label(value) -> Optional[str]:
    return getattr(value, 'value', value)


def split_brand_model(brand: Optional[str], model: Optional[str], brand_model: Optional[str]):
    """
    Resolve brand and model, falling back to the legacy combined label.

    "Shure SM58" -> ("Shure", "SM58"). Explicit values always win.
    """
    brand = _text(brand)
    model = _text(model)
    combined = _text(brand_model)

    if not brand and combined:
        brand = combined.split()[0]
    if not model and combined:
        # Only a leading brand word is stripped from the label
        leading_brand = brand and (combined == brand or combined.startswith(brand + ' '))
        model = combined[len(brand):].strip() if leading_brand else combined
    return brand, model


def category_initials(category: Optional[str]) -> str:
    """Two-letter badge for items without a photo, e.g. 'Audio Gear' -> 'AG'"""
    words = _text(category).split()
    return ''.join(word[0] for word in words)[:2].upper()


def normalize_status(status) -> Optional[str]:
    label = _enum_label(status)
    return STATUS_ALIASES.get(label, label)


def normalize_item(item: Any) -> Dict[str, Any]:
    """
    Build the fully populated item shape from a model instance or a dict.

    Keeps any extra keys already on a dict (e.g. maintenance history).
    """
    raw: Mapping[str, Any] = item.to_dict() if hasattr(item, 'to_dict') else dict(item)
    result = dict(raw)

    for field in TEXT_FIELDS:
        result[field] = _text(raw.get(field))

    brand, model = split_brand_model(raw.get('brand'), raw.get('model'), raw.get('brand_model'))
    result['brand'] = brand
    result['model'] = model
    result['brand_model'] = ' '.join(part for part in (brand, model) if part)

    result['status'] = normalize_status(raw.get('status'))
    result['condition'] = _enum_label(raw.get('condition'))
    result['category'] = _text(_enum_label(raw.get('category')))
    result['quantity'] = int(raw.get('quantity') or 0)
    result['photo_url'] = raw.get('photo_url') or raw.get('image_url') or None
    result.pop('image_url', None)
    result['display_name'] = result['name']
    result['initials'] = category_initials(result['category'])

    for field in ('date_purchased', 'last_checked', 'created_at', 'updated_at'):
        result[field] = _iso(raw.get(field))

    return result


def normalize_maintenance_record(record: Any) -> Dict[str, Any]:
    """Display shape for one maintenance history entry"""
    raw = record.to_dict() if hasattr(record, 'to_dict') else dict(record)
    return {
        'id': raw.get('id'),
        'item_id': raw.get('item_id'),
        'type': _text(raw.get('maintenance_type')),
        'priority': _enum_label(raw.get('priority')),
        'date': _iso(raw.get('maintenance_date')),
        'performed_by': _text(raw.get('performed_by')),
        'description': _text(raw.get('description')),
        'cost': float(raw.get('cost') or 0),
        'next_scheduled_date': _iso(raw.get('next_maintenance_date')),
    }
