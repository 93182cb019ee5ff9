"""
Per-app collaborators shared by the controllers.

Instances live in ``app.extensions`` so tests can swap them for fakes.
"""

from flask import current_app

from church_inventory.clients import AuthServiceClient, PhotoStorageClient
from church_inventory.services import InventoryViewService


def get_auth_client() -> AuthServiceClient:
    client = current_app.extensions.get('auth_client')
    if client is None:
        client = AuthServiceClient()
        current_app.extensions['auth_client'] = client
    return client


def get_storage_client() -> PhotoStorageClient:
    client = current_app.extensions.get('photo_storage')
    if client is None:
        client = PhotoStorageClient()
        current_app.extensions['photo_storage'] = client
    return client


def get_view_service() -> InventoryViewService:
    return InventoryViewService.from_config(current_app.config, storage_client=get_storage_client())
