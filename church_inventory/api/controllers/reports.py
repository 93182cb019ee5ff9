"""
Reports Controller - report snapshot and dashboard statistics
"""

from flask import Blueprint, jsonify, current_app
from church_inventory.api.dependencies import get_view_service
from church_inventory.utils.exceptions import StoreUnavailableError
import logging

logger = logging.getLogger(__name__)

# Create blueprint
reports_bp = Blueprint('reports', __name__)


@reports_bp.route('/api/reports', methods=['GET'])
def get_report():
    """
    Get the aggregate report

    Returns:
        JSON with:
        - total_asset_value: sum of acquisition prices
        - maintenance_cost_ytd: maintenance spend this calendar year
        - needs_replacement_count: broken items
        - total_items / total_tracked_quantity
        - category_breakdown: share of items per category
        - recent_maintenance: latest maintenance entries
        - end_of_life_items: broken items with replacement estimates
    """
    try:
        snapshot = get_view_service().get_report_snapshot(
            recent_limit=current_app.config.get('RECENT_MAINTENANCE_LIMIT', 5)
        )
        logger.info(
            f"Report generated: {snapshot['total_items']} items, "
            f"{len(snapshot['category_breakdown'])} categories"
        )
        return jsonify(snapshot), 200

    except StoreUnavailableError as e:
        return jsonify({'error': str(e)}), 503
    except Exception as e:
        logger.error(f"Error generating report: {e}", exc_info=True)
        return jsonify({
            "error": "Failed to generate report",
            "details": str(e)
        }), 500


@reports_bp.route('/api/stats', methods=['GET'])
def get_dashboard_stats():
    """
    Get the dashboard stats grid

    Returns:
        JSON with total_tracked_quantity, needs_maintenance_count,
        needs_replacement_count, total_items, total_asset_value and
        maintenance_cost_ytd
    """
    try:
        stats = get_view_service().get_dashboard_stats()
        logger.info(f"Stats retrieved: {stats}")
        return jsonify(stats), 200

    except StoreUnavailableError as e:
        return jsonify({'error': str(e)}), 503
    except Exception as e:
        logger.error(f"Error retrieving dashboard stats: {e}", exc_info=True)
        return jsonify({
            "error": "Failed to retrieve dashboard statistics",
            "details": str(e)
        }), 500
