"""
Maintenance Controller - maintenance log view and issue logging
"""

from flask import request, current_app
from flask_restx import Resource, fields
from church_inventory.api.controllers.inventory import api, item_response_schema
from church_inventory.api.dependencies import get_view_service
from church_inventory.api.responses import error_response
from church_inventory.services import filter_items, paginate
from church_inventory.utils.schemas import (
    MaintenanceQuerySchema, MaintenanceRequestSchema, MaintenanceRecordResponseSchema
)
import logging

logger = logging.getLogger(__name__)

maintenance_ns = api.namespace('maintenance', description='Maintenance log operations')

query_schema = MaintenanceQuerySchema()
request_schema = MaintenanceRequestSchema()
record_response_schema = MaintenanceRecordResponseSchema()

maintenance_issue_model = api.model('MaintenanceIssue', {
    'item_id': fields.Integer(required=True, description='Inventory item ID'),
    'maintenance_type': fields.String(required=True, description='Repair Needed, Broken, Routine Check, ...'),
    'priority': fields.String(description='Low, Medium, High or Critical', default='Medium'),
    'description': fields.String(required=True, description='What is wrong or what was done'),
    'performed_by': fields.String(description='Who did the work'),
    'maintenance_date': fields.Date(description='When it happened'),
    'cost': fields.String(description='Cost as entered, e.g. "12.50"'),
    'next_maintenance_date': fields.Date(description='Next scheduled maintenance')
})


@maintenance_ns.route('/')
class MaintenanceList(Resource):
        @api.doc('list_maintenance', params={
            'search': 'Search in name, category and notes',
            'condition': 'Condition or All',
            'scope': 'attention (default) or all',
            'page': 'Page number',
            'per_page': 'Page size'
        })
        def get(self):
            """Items needing attention with their latest maintenance"""
            try:
                params = query_schema.load(request.args.to_dict())

                items = get_view_service().get_maintenance_view(include_all=params['scope'] == 'all')
                per_page = min(
                    params['per_page'] or current_app.config.get('DEFAULT_PAGE_SIZE', 8),
                    current_app.config.get('MAX_PAGE_SIZE', 100)
                )
                page = paginate(
                    filter_items(items, search=params['search'], condition=params['condition']),
                    page=params['page'],
                    per_page=per_page
                )

                return {
                    'items': item_response_schema.dump(page.items, many=True),
                    'pagination': page.to_dict()
                }, 200

            except Exception as e:
                return error_response(e, 'listing maintenance')

        @api.doc('log_maintenance_issue')
        @api.expect(maintenance_issue_model)
        def post(self):
            """Log a maintenance issue against an item"""
            try:
                data = request_schema.load(request.get_json(silent=True) or {})
                item_id = data.pop('item_id')

                result = get_view_service().log_maintenance_issue(item_id, data)

                return {
                    'record': record_response_schema.dump(result['record']),
                    'item': item_response_schema.dump(result['item']),
                    'transitioned': result['transitioned']
                }, 201

            except Exception as e:
                return error_response(e, 'logging maintenance issue')
