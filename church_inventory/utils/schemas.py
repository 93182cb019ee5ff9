from marshmallow import Schema, fields, validate, pre_load, validates, ValidationError, RAISE, EXCLUDE
from church_inventory.models import (
    ItemCategory, ItemStatus, ItemCondition, Priority, STATUS_ALIASES, DAMAGED_CONDITIONS
)
from church_inventory.repositories.inventory_repository import ORDERABLE_COLUMNS

ALL = 'All'


class FormInputSchema(Schema):
    """
    Base for schemas fed by HTML forms: blank strings mean "not given".

    Fields listed in clearable_fields treat a blank string as an explicit null instead.
    """

    clearable_fields = ()

    @pre_load
    def drop_blank_values(self, data, **kwargs):
        if not isinstance(data, dict):
            return data
        cleaned = {}
        for key, value in data.items():
            if isinstance(value, str) and not value.strip():
                if key in self.clearable_fields:
                    cleaned[key] = None
                continue
            cleaned[key] = value
        if 'status' in cleaned and isinstance(cleaned['status'], str):
            cleaned['status'] = STATUS_ALIASES.get(cleaned['status'], cleaned['status'])
        return cleaned


class InventoryItemRequestSchema(FormInputSchema):
    """Schema for creating inventory items"""

    class Meta:
        unknown = EXCLUDE

    name = fields.Str(required=True, validate=validate.Length(min=1, max=255))
    category = fields.Enum(ItemCategory, by_value=True, load_default=ItemCategory.OTHER)
    quantity = fields.Int(validate=validate.Range(min=0), load_default=1)
    status = fields.Enum(ItemStatus, by_value=True, load_default=ItemStatus.AVAILABLE)
    condition = fields.Enum(ItemCondition, by_value=True, load_default=ItemCondition.GOOD)
    brand = fields.Str(validate=validate.Length(max=100), allow_none=True)
    model = fields.Str(validate=validate.Length(max=100), allow_none=True)
    brand_model = fields.Str(validate=validate.Length(max=200), allow_none=True)
    serial_number = fields.Str(validate=validate.Length(max=100), allow_none=True)
    location = fields.Str(validate=validate.Length(max=255), allow_none=True)
    notes = fields.Str(allow_none=True)
    date_purchased = fields.Date(allow_none=True)
    last_checked = fields.Date(allow_none=True)
    purchase_price = fields.Decimal(validate=validate.Range(min=0), allow_none=True, places=2)
    supplier = fields.Str(validate=validate.Length(max=255), allow_none=True)


class InventoryItemUpdateSchema(FormInputSchema):
    """Schema for editing inventory items; only editable fields are accepted"""

    class Meta:
        unknown = RAISE

    clearable_fields = ('brand', 'model', 'serial_number', 'location', 'notes', 'date_purchased', 'last_checked')

    name = fields.Str(validate=validate.Length(min=1, max=255))
    category = fields.Enum(ItemCategory, by_value=True)
    quantity = fields.Int(validate=validate.Range(min=0))
    status = fields.Enum(ItemStatus, by_value=True)
    condition = fields.Enum(ItemCondition, by_value=True)
    brand = fields.Str(validate=validate.Length(max=100), allow_none=True)
    model = fields.Str(validate=validate.Length(max=100), allow_none=True)
    serial_number = fields.Str(validate=validate.Length(max=100), allow_none=True)
    location = fields.Str(validate=validate.Length(max=255), allow_none=True)
    notes = fields.Str(allow_none=True)
    date_purchased = fields.Date(allow_none=True)
    last_checked = fields.Date(allow_none=True)


class InventoryQuerySchema(Schema):
    """Schema for inventory list query parameters"""

    class Meta:
        unknown = EXCLUDE

    status = fields.List(fields.Enum(ItemStatus, by_value=True), load_default=list)
    condition = fields.List(fields.Enum(ItemCondition, by_value=True), load_default=list)
    category = fields.Str(load_default=ALL)
    search = fields.Str(load_default='')
    order_by = fields.Str(validate=validate.OneOf(ORDERABLE_COLUMNS), load_default='created_at')
    ascending = fields.Bool(load_default=False)
    page = fields.Int(validate=validate.Range(min=1), load_default=1)
    per_page = fields.Int(validate=validate.Range(min=1, max=100), load_default=None)

    @pre_load
    def map_status_aliases(self, data, **kwargs):
        statuses = data.get('status')
        if statuses:
            data = dict(data)
            data['status'] = [STATUS_ALIASES.get(s, s) for s in statuses]
        return data

    @validates('category')
    def validate_category(self, value, **kwargs):
        allowed = [ALL] + [category.value for category in ItemCategory]
        if value not in allowed:
            raise ValidationError(f"Must be one of: {', '.join(allowed)}.")


class MaintenanceQuerySchema(Schema):
    """Schema for maintenance list query parameters"""

    class Meta:
        unknown = EXCLUDE

    search = fields.Str(load_default='')
    condition = fields.Str(
        validate=validate.OneOf([ALL] + [condition.value for condition in ItemCondition]),
        load_default=ALL
    )
    scope = fields.Str(validate=validate.OneOf(['attention', 'all']), load_default='attention')
    page = fields.Int(validate=validate.Range(min=1), load_default=1)
    per_page = fields.Int(validate=validate.Range(min=1, max=100), load_default=None)


class MaintenanceRequestSchema(FormInputSchema):
    """Schema for logging a maintenance issue"""

    class Meta:
        unknown = EXCLUDE

    item_id = fields.Int(required=True, validate=validate.Range(min=1))
    maintenance_type = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    priority = fields.Enum(Priority, by_value=True, load_default=Priority.MEDIUM)
    description = fields.Str(required=True, validate=validate.Length(min=1))
    performed_by = fields.Str(validate=validate.Length(max=255), allow_none=True)
    maintenance_date = fields.Date(allow_none=True)
    # Raw user input; unparseable amounts become zero downstream
    cost = fields.Raw(allow_none=True)
    next_maintenance_date = fields.Date(allow_none=True)


class ResolveRequestSchema(FormInputSchema):
    """Schema for returning an item to service"""

    class Meta:
        unknown = EXCLUDE

    condition = fields.Enum(ItemCondition, by_value=True, load_default=ItemCondition.GOOD)

    @validates('condition')
    def validate_serviceable(self, value, **kwargs):
        if value in DAMAGED_CONDITIONS:
            raise ValidationError('An item returned to service must be in a serviceable condition.')


class AcquisitionRequestSchema(FormInputSchema):
    """Schema for recording an acquisition"""

    class Meta:
        unknown = EXCLUDE

    price = fields.Decimal(required=True, validate=validate.Range(min=0), places=2)
    acquired_on = fields.Date(allow_none=True)
    supplier = fields.Str(validate=validate.Length(max=255), allow_none=True)


class MaintenanceRecordResponseSchema(Schema):
    """Schema for maintenance history entries"""
    id = fields.Int()
    item_id = fields.Int()
    type = fields.Str()
    priority = fields.Str(allow_none=True)
    date = fields.Str(allow_none=True)  # Already converted to ISO string
    performed_by = fields.Str()
    description = fields.Str()
    cost = fields.Float()
    next_scheduled_date = fields.Str(allow_none=True)


class InventoryItemResponseSchema(Schema):
    """Schema for inventory item responses"""
    id = fields.Int(dump_only=True)
    name = fields.Str()
    display_name = fields.Str()
    category = fields.Str()
    initials = fields.Str()
    quantity = fields.Int()
    status = fields.Str()
    condition = fields.Str()
    brand = fields.Str()
    model = fields.Str()
    brand_model = fields.Str()
    serial_number = fields.Str()
    location = fields.Str()
    notes = fields.Str()
    photo_url = fields.Str(allow_none=True)
    date_purchased = fields.Str(allow_none=True)
    last_checked = fields.Str(allow_none=True)
    created_at = fields.Str(dump_only=True)
    updated_at = fields.Str(dump_only=True)
    maintenance_history = fields.List(fields.Nested(MaintenanceRecordResponseSchema))
    latest_maintenance = fields.Nested(MaintenanceRecordResponseSchema, allow_none=True)
