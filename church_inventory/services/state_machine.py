"""
Status/condition transitions driven by maintenance events.

Status (usage) and condition (physical state) are independent axes, so an
item's state is the pair of both. Only damage events move an item; every
other event type leaves it where it is. Returning an item to service is an
explicit ``resolve``.
"""

from typing import NamedTuple, Union

from church_inventory.models import ItemStatus, ItemCondition, MaintenanceType, DAMAGED_CONDITIONS


class ItemState(NamedTuple):
    status: ItemStatus
    condition: ItemCondition


# event type -> (status, condition) after the event
TRANSITIONS = {
    MaintenanceType.BROKEN.value: (ItemStatus.UNDER_REPAIR, ItemCondition.BROKEN),
    MaintenanceType.REPAIR_NEEDED.value: (ItemStatus.UNDER_REPAIR, ItemCondition.NEEDS_REPAIR),
}


def _event_label(event_type: Union[MaintenanceType, str, None]) -> str:
    if isinstance(event_type, MaintenanceType):
        return event_type.value
    return (event_type or '').strip()


def is_damage_event(event_type: Union[MaintenanceType, str, None]) -> bool:
    return _event_label(event_type) in TRANSITIONS


def apply_maintenance_event(state: ItemState, event_type: Union[MaintenanceType, str, None]) -> ItemState:
    """Return the item state after logging a maintenance event of ``event_type``"""
    target = TRANSITIONS.get(_event_label(event_type))
    if target is None:
        return state
    return ItemState(*target)


def resolve(state: ItemState, condition: ItemCondition = ItemCondition.GOOD) -> ItemState:
    """Return an item to service in a serviceable condition"""
    if condition in DAMAGED_CONDITIONS:
        raise ValueError(f"Cannot return an item to service in condition '{condition.value}'")
    return ItemState(ItemStatus.AVAILABLE, condition)
