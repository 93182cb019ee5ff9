"""
Auth Service Client - REST client for the hosted auth provider
"""

import requests
from typing import Optional, Dict, Any
from flask import current_app, has_app_context
import logging

from church_inventory.utils.exceptions import AuthServiceError

logger = logging.getLogger(__name__)


def _error_message(response: requests.Response) -> str:
    """Pull the provider's human readable message out of an error response"""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"Auth service returned {response.status_code}"

    if isinstance(body, dict):
        for key in ('error_description', 'msg', 'message', 'error'):
            if body.get(key):
                return str(body[key])
    return f"Auth service returned {response.status_code}"


class AuthServiceClient:
    """Client for the auth provider: password sign-in, magic links, sessions"""

    def __init__(self, base_url: str = None, api_key: str = None, timeout: int = None):
        self._base_url = base_url
        self._api_key = api_key
        self._timeout = timeout

    def _config(self, key: str, default=None):
        if has_app_context():
            return current_app.config.get(key, default)
        return default

    @property
    def base_url(self) -> str:
        """Get base URL, using Flask config if not provided during init"""
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
    def timeout(self) -> int:
        if self._timeout is None:
            self._timeout = self._config('EXTERNAL_TIMEOUT_SECONDS', 5)
        return self._timeout

    def _headers(self, access_token: Optional[str] = None) -> Dict[str, str]:
        headers = {
            'apikey': self.api_key,
            'Authorization': f"Bearer {access_token or self.api_key}",
            'Content-Type': 'application/json',
        }
        if has_app_context():
            from church_inventory.api.middlewares.correlation_id import get_correlation_id
            headers['X-Correlation-ID'] = get_correlation_id()
        return headers

    def _request(self, method: str, path: str, access_token: Optional[str] = None, **kwargs) -> requests.Response:
        url = f"{self.base_url}/auth/v1/{path}"
        response = requests.request(
            method, url, headers=self._headers(access_token), timeout=self.timeout, **kwargs
        )
        if response.status_code >= 400:
            message = _error_message(response)
            logger.info(f"Auth service rejected {method} /{path}: {response.status_code} {message}")
            raise AuthServiceError(message, status_code=response.status_code)
        return response

    @staticmethod
    def _json(response: requests.Response) -> Dict[str, Any]:
        if not response.content:
            return {}
        return response.json()

    def sign_in_with_password(self, email: str, password: str) -> Dict[str, Any]:
        """
        Exchange email and password for a session

        Returns:
            Provider payload with access/refresh tokens and the user

        Raises:
            AuthServiceError: credentials rejected
            requests.RequestException: transport failure
        """
        response = self._request(
            'POST', 'token', params={'grant_type': 'password'},
            json={'email': email, 'password': password}
        )
        return self._json(response)

    def sign_in_with_otp(self, email: str) -> Dict[str, Any]:
        """Ask the provider to email a magic link"""
        response = self._request('POST', 'otp', json={'email': email, 'create_user': True})
        return self._json(response)

    def refresh_session(self, refresh_token: str) -> Dict[str, Any]:
        response = self._request(
            'POST', 'token', params={'grant_type': 'refresh_token'},
            json={'refresh_token': refresh_token}
        )
        return self._json(response)

    def get_user(self, access_token: str) -> Dict[str, Any]:
        """Resolve the user behind an access token"""
        response = self._request('GET', 'user', access_token=access_token)
        return self._json(response)

    def sign_out(self, access_token: str) -> None:
        """Revoke the session behind an access token"""
        self._request('POST', 'logout', access_token=access_token)
