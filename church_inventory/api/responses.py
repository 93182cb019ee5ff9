"""
Mapping of service exceptions onto JSON error responses for resource methods
"""

import logging
from marshmallow import ValidationError

from church_inventory.utils.exceptions import ItemNotFoundError, StoreUnavailableError, StorageError

logger = logging.getLogger(__name__)


def error_response(error: Exception, action: str):
    """Return a (body, status) tuple for ``error`` raised while ``action``"""
    if isinstance(error, ValidationError):
        return {'error': 'Validation failed', 'details': error.messages}, 400
    if isinstance(error, ItemNotFoundError):
        return {'error': str(error)}, 404
    if isinstance(error, ValueError):
        return {'error': str(error)}, 400
    if isinstance(error, StoreUnavailableError):
        return {'error': str(error)}, 503
    if isinstance(error, StorageError):
        return {'error': error.message}, 502

    logger.error(f"Error {action}: {error}", exc_info=error)
    return {'error': 'Internal server error'}, 500
