"""
Health check endpoints
"""

from flask import Blueprint, jsonify
from datetime import datetime
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from church_inventory.database import db
import os
import logging

logger = logging.getLogger(__name__)

# Create blueprint for health endpoints
health_bp = Blueprint('health', __name__)

SERVICE_NAME = 'church-inventory'


@health_bp.route('/health', methods=['GET'])
def health():
    """Main health check endpoint"""
    return jsonify({
        'status': 'healthy',
        'service': os.environ.get('NAME', SERVICE_NAME),
        'timestamp': datetime.utcnow().isoformat() + 'Z',
        'version': os.environ.get('VERSION', '1.0.0'),
        'environment': os.environ.get('FLASK_ENV', 'development'),
    }), 200


@health_bp.route('/health/ready', methods=['GET'])
def readiness():
    """Readiness check: the data store is reachable"""
    try:
        db.session.execute(text('SELECT 1'))
        return jsonify({
            'status': 'ready',
            'service': SERVICE_NAME,
            'timestamp': datetime.utcnow().isoformat() + 'Z',
            'checks': {'database': 'connected'},
        }), 200

    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error('Readiness check failed', extra={'error': str(e)})
        return jsonify({
            'status': 'not ready',
            'service': SERVICE_NAME,
            'timestamp': datetime.utcnow().isoformat() + 'Z',
            'error': 'Readiness check failed',
            'details': str(e),
        }), 503
