"""
Domain exceptions raised by services and clients and mapped to HTTP responses
by the controllers and error handlers.
"""


class ItemNotFoundError(LookupError):
    """Referenced inventory item does not exist"""

    def __init__(self, item_id):
        self.item_id = item_id
        super().__init__(f"Inventory item {item_id} not found")


class StoreUnavailableError(Exception):
    """The relational store could not be reached or returned garbage"""


class AuthServiceError(Exception):
    """The auth collaborator rejected the request; message is passed through verbatim"""

    def __init__(self, message, status_code=None, payload=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload or {}


class StorageError(Exception):
    """The blob store rejected an upload or delete"""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
