"""
Clients package - outbound collaborators (auth provider, photo store)
"""

from .auth_client import AuthServiceClient
from .storage_client import PhotoStorageClient, StoredPhoto
from .session import SessionContext, SIGNED_IN, SIGNED_OUT, TOKEN_REFRESHED

__all__ = [
    'AuthServiceClient',
    'PhotoStorageClient',
    'StoredPhoto',
    'SessionContext',
    'SIGNED_IN',
    'SIGNED_OUT',
    'TOKEN_REFRESHED'
]
