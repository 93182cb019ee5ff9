"""
Inventory Controller - item listing, creation, edits and details
"""

from flask import Blueprint, request, current_app
from flask_restx import Api, Resource, fields
from church_inventory.api.dependencies import get_view_service
from church_inventory.api.responses import error_response
from church_inventory.models import ItemCategory
from church_inventory.services import InventoryFilter, PhotoUpload, filter_items, paginate
from church_inventory.utils.schemas import (
    ALL, InventoryItemRequestSchema, InventoryItemUpdateSchema, InventoryItemResponseSchema,
    InventoryQuerySchema, ResolveRequestSchema, AcquisitionRequestSchema
)
import logging

logger = logging.getLogger(__name__)

# Create blueprint
inventory_bp = Blueprint('inventory', __name__)
api = Api(inventory_bp, version='1.0', title='Church Inventory API',
          description='Equipment inventory and maintenance endpoints', doc='/docs/')

# Create namespace
inventory_ns = api.namespace('inventory', description='Inventory operations')

# Initialize schemas
item_request_schema = InventoryItemRequestSchema()
item_update_schema = InventoryItemUpdateSchema()
item_response_schema = InventoryItemResponseSchema()
query_schema = InventoryQuerySchema()
resolve_schema = ResolveRequestSchema()
acquisition_schema = AcquisitionRequestSchema()


def get_inventory_models(api):
    """Define API models for inventory operations"""
    inventory_item_model = api.model('InventoryItem', {
        'name': fields.String(required=True, description='Item name'),
        'category': fields.String(description='Category', enum=[c.value for c in ItemCategory]),
        'quantity': fields.Integer(description='Quantity on hand', min=0),
        'status': fields.String(description='Usage status'),
        'condition': fields.String(description='Physical condition'),
        'brand': fields.String(description='Brand'),
        'model': fields.String(description='Model'),
        'serial_number': fields.String(description='Serial number'),
        'location': fields.String(description='Storage location'),
        'notes': fields.String(description='Free-form notes'),
        'date_purchased': fields.Date(description='Purchase date'),
        'purchase_price': fields.Float(description='Purchase price, recorded as an acquisition')
    })

    resolve_model = api.model('ResolveItem', {
        'condition': fields.String(description='Condition after service', default='Good')
    })

    acquisition_model = api.model('Acquisition', {
        'price': fields.Float(required=True, description='Purchase price'),
        'acquired_on': fields.Date(description='Acquisition date'),
        'supplier': fields.String(description='Supplier')
    })

    return inventory_item_model, resolve_model, acquisition_model


# Define models
inventory_item_model, resolve_model, acquisition_model = get_inventory_models(api)


def _page_size(requested):
    default = current_app.config.get('DEFAULT_PAGE_SIZE', 8)
    maximum = current_app.config.get('MAX_PAGE_SIZE', 100)
    return min(requested or default, maximum)


def _query_args():
    args = request.args.to_dict()
    args['status'] = request.args.getlist('status')
    args['condition'] = request.args.getlist('condition')
    return args


def _photo_upload():
    photo = request.files.get('photo')
    if photo is None or not photo.filename:
        return None
    return PhotoUpload(
        content=photo.read(),
        filename=photo.filename,
        content_type=photo.mimetype or 'application/octet-stream'
    )


# Register routes
@inventory_ns.route('/')
class InventoryList(Resource):
        @api.doc('list_inventory', params={
            'status': 'Usage status, repeatable',
            'condition': 'Condition, repeatable',
            'category': 'Category or All',
            'search': 'Search in name, category and notes',
            'order_by': 'Sort column',
            'ascending': 'Sort ascending',
            'page': 'Page number',
            'per_page': 'Page size'
        })
        def get(self):
            """Fetch inventory items, filtered and paginated"""
            try:
                params = query_schema.load(_query_args())

                category = params['category']
                inventory_filter = InventoryFilter(
                    statuses=tuple(params['status']),
                    conditions=tuple(params['condition']),
                    category=None if category == ALL else ItemCategory(category),
                    order_by=params['order_by'],
                    ascending=params['ascending']
                )

                items = get_view_service().fetch_inventory(inventory_filter)
                page = paginate(
                    filter_items(items, search=params['search']),
                    page=params['page'],
                    per_page=_page_size(params['per_page'])
                )

                return {
                    'items': item_response_schema.dump(page.items, many=True),
                    'pagination': page.to_dict()
                }, 200

            except Exception as e:
                return error_response(e, 'listing inventory')

        @api.doc('create_inventory')
        @api.expect(inventory_item_model)
        def post(self):
            """Create an inventory item; multipart requests may carry a photo"""
            try:
                if request.mimetype == 'multipart/form-data':
                    payload = request.form.to_dict()
                    photo = _photo_upload()
                else:
                    payload = request.get_json(silent=True) or {}
                    photo = None

                data = item_request_schema.load(payload)
                item = get_view_service().add_item(data, photo=photo)
                return item_response_schema.dump(item), 201

            except Exception as e:
                return error_response(e, 'creating inventory item')


@inventory_ns.route('/<int:item_id>')
class InventoryItemResource(Resource):
        @api.doc('get_inventory_item')
        def get(self, item_id):
            """Get an item with its maintenance history"""
            try:
                item = get_view_service().get_item_details(item_id)
                return item_response_schema.dump(item), 200
            except Exception as e:
                return error_response(e, f'getting inventory item {item_id}')

        @api.doc('update_inventory_item')
        @api.expect(inventory_item_model)
        def put(self, item_id):
            """Edit an item"""
            try:
                changes = item_update_schema.load(request.get_json(silent=True) or {})
                item = get_view_service().update_item(item_id, changes)
                return item_response_schema.dump(item), 200
            except Exception as e:
                return error_response(e, f'updating inventory item {item_id}')


@inventory_ns.route('/<int:item_id>/resolve')
class InventoryItemResolve(Resource):
        @api.doc('resolve_inventory_item')
        @api.expect(resolve_model)
        def post(self, item_id):
            """Return an item to service"""
            try:
                data = resolve_schema.load(request.get_json(silent=True) or {})
                item = get_view_service().resolve_item(item_id, data['condition'])
                return item_response_schema.dump(item), 200
            except Exception as e:
                return error_response(e, f'resolving inventory item {item_id}')


@inventory_ns.route('/<int:item_id>/acquisitions')
class InventoryItemAcquisitions(Resource):
        @api.doc('record_acquisition')
        @api.expect(acquisition_model)
        def post(self, item_id):
            """Record a purchase for an item"""
            try:
                data = acquisition_schema.load(request.get_json(silent=True) or {})
                acquisition = get_view_service().record_acquisition(item_id, data)
                return acquisition, 201
            except Exception as e:
                return error_response(e, f'recording acquisition for item {item_id}')
