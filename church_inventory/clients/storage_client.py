"""
Photo Storage Client - REST client for the blob store holding item photos
"""

import os
import uuid
import requests
from typing import Optional, NamedTuple
from flask import current_app, has_app_context
import logging

from church_inventory.utils.exceptions import StorageError

logger = logging.getLogger(__name__)


class StoredPhoto(NamedTuple):
    name: str
    public_url: str


class PhotoStorageClient:
    """Uploads item photos under random names and hands back public URLs"""

    def __init__(self, base_url: str = None, api_key: str = None, bucket: str = None, timeout: int = None):
        self._base_url = base_url
        self._api_key = api_key
        self._bucket = bucket
        self._timeout = timeout

    def _config(self, key: str, default=None):
        if has_app_context():
            return current_app.config.get(key, default)
        return default

    @property
    def base_url(self) -> str:
        if self._base_url is None:
            self._base_url = self._config('SUPABASE_URL')
        if not self._base_url:
            raise RuntimeError("SUPABASE_URL is not configured")
        return self._base_url.rstrip('/')

    @property
    def api_key(self) -> str:
        if self._api_key is None:
            self._api_key = self._config('SUPABASE_SERVICE_ROLE_KEY')
        if not self._api_key:
            raise RuntimeError("SUPABASE_SERVICE_ROLE_KEY is not configured")
        return self._api_key

    @property
    def bucket(self) -> str:
        if self._bucket is None:
            self._bucket = self._config('PHOTO_BUCKET', 'item-photos')
        return self._bucket

    @property
    def timeout(self) -> int:
        if self._timeout is None:
            self._timeout = self._config('EXTERNAL_TIMEOUT_SECONDS', 5)
        return self._timeout

    def _object_url(self, name: str) -> str:
        return f"{self.base_url}/storage/v1/object/{self.bucket}/{name}"

    def public_url(self, name: str) -> str:
        return f"{self.base_url}/storage/v1/object/public/{self.bucket}/{name}"

    @staticmethod
    def random_name(filename: Optional[str]) -> str:
        """Random object name that keeps the original extension"""
        extension = os.path.splitext(filename or '')[1].lower()
        return f"{uuid.uuid4().hex}{extension}"

    def upload(self, content: bytes, filename: Optional[str] = None,
               content_type: str = 'application/octet-stream') -> StoredPhoto:
        """
        Upload a photo

        Raises:
            StorageError: the store rejected the upload
        """
        name = self.random_name(filename)
        try:
            response = requests.post(
                self._object_url(name),
                data=content,
                headers={
                    'apikey': self.api_key,
                    'Authorization': f"Bearer {self.api_key}",
                    'Content-Type': content_type,
                    'x-upsert': 'false',
                },
                timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Connection error uploading photo {name}: {e}")
            raise StorageError(f"Photo upload failed: {e}") from e

        if response.status_code >= 400:
            logger.error(f"Photo store rejected upload {name}: {response.status_code}")
            raise StorageError(f"Photo upload rejected ({response.status_code})", response.status_code)

        logger.info(f"Uploaded photo {name} to bucket {self.bucket}")
        return StoredPhoto(name=name, public_url=self.public_url(name))

    def delete(self, name: str) -> None:
        """Remove a previously uploaded photo"""
        try:
            response = requests.delete(
                self._object_url(name),
                headers={'apikey': self.api_key, 'Authorization': f"Bearer {self.api_key}"},
                timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            raise StorageError(f"Photo delete failed: {e}") from e

        if response.status_code >= 400 and response.status_code != 404:
            raise StorageError(f"Photo delete rejected ({response.status_code})", response.status_code)
