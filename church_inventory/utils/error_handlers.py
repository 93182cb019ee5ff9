from flask import jsonify
from werkzeug.exceptions import HTTPException
from marshmallow import ValidationError
import logging

from church_inventory.utils.exceptions import (
    ItemNotFoundError, StoreUnavailableError, AuthServiceError, StorageError
)

logger = logging.getLogger(__name__)


def register_error_handlers(app):
    """Register application error handlers"""

    @app.errorhandler(ValidationError)
    def validation_error(error):
        return jsonify({
            'error': 'Validation Error',
            'message': 'Request data validation failed',
            'details': error.messages,
            'status_code': 400
        }), 400

    @app.errorhandler(ValueError)
    def value_error(error):
        return jsonify({
            'error': 'Invalid Value',
            'message': str(error),
            'status_code': 400
        }), 400

    @app.errorhandler(ItemNotFoundError)
    def item_not_found(error):
        return jsonify({
            'error': 'Not Found',
            'message': str(error),
            'status_code': 404
        }), 404

    @app.errorhandler(StoreUnavailableError)
    def store_unavailable(error):
        logger.error(f"Data store unavailable: {error}")
        return jsonify({
            'error': 'Service Unavailable',
            'message': str(error),
            'status_code': 503
        }), 503

    @app.errorhandler(StorageError)
    def storage_error(error):
        return jsonify({
            'error': 'Bad Gateway',
            'message': error.message,
            'status_code': 502
        }), 502

    @app.errorhandler(AuthServiceError)
    def auth_error(error):
        return jsonify({'error': error.message}), 401

    @app.errorhandler(HTTPException)
    def http_exception(error):
        return jsonify({
            'error': error.name,
            'message': error.description,
            'status_code': error.code
        }), error.code

    @app.errorhandler(Exception)
    def internal_error(error):
        logger.error(f"Internal server error: {error}", exc_info=error)
        return jsonify({
            'error': 'Internal Server Error',
            'message': 'An unexpected error occurred',
            'status_code': 500
        }), 500
