"""
Explicit auth session holder for API consumers.

One ``SessionContext`` is created at startup and handed to whatever needs the
current session; listeners subscribe for changes and get back an unsubscribe
callable. ``close()`` at teardown drops the session and all listeners.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from church_inventory.utils.exceptions import AuthServiceError

logger = logging.getLogger(__name__)

SIGNED_IN = 'SIGNED_IN'
SIGNED_OUT = 'SIGNED_OUT'
TOKEN_REFRESHED = 'TOKEN_REFRESHED'

Listener = Callable[[str, Optional[Dict[str, Any]]], None]


class SessionContext:
    """Current auth session plus change notifications"""

    def __init__(self, auth_client):
        self._auth_client = auth_client
        self._session: Optional[Dict[str, Any]] = None
        self._listeners: List[Listener] = []
        self._started = False

    @property
    def session(self) -> Optional[Dict[str, Any]]:
        return self._session

    @property
    def access_token(self) -> Optional[str]:
        return self._session.get('access_token') if self._session else None

    @property
    def user(self) -> Optional[Dict[str, Any]]:
        return self._session.get('user') if self._session else None

    @property
    def is_authenticated(self) -> bool:
        return self.access_token is not None

    def start(self, session: Optional[Dict[str, Any]] = None) -> 'SessionContext':
        """Begin the lifecycle, optionally restoring a persisted session"""
        self._started = True
        if session:
            self.restore(session)
        return self

    def close(self) -> None:
        """End the lifecycle; listeners are dropped without being notified"""
        self._listeners.clear()
        self._session = None
        self._started = False

    def __enter__(self):
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register for session changes; call the returned function to stop"""
        if not self._started:
            raise RuntimeError("SessionContext.start() must be called before subscribing")
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, event: str) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, self._session)
            except Exception:
                logger.exception(f"Session listener failed on {event}")

    def restore(self, session: Dict[str, Any]) -> None:
        self._session = session
        self._publish(SIGNED_IN)

    def sign_in(self, email: str, password: str) -> Dict[str, Any]:
        """
        Sign in with email and password

        Raises:
            AuthServiceError: credentials rejected; current session is untouched
        """
        self._session = self._auth_client.sign_in_with_password(email, password)
        self._publish(SIGNED_IN)
        return self._session

    def refresh(self) -> Dict[str, Any]:
        if not self._session or not self._session.get('refresh_token'):
            raise AuthServiceError("No session to refresh")
        self._session = self._auth_client.refresh_session(self._session['refresh_token'])
        self._publish(TOKEN_REFRESHED)
        return self._session

    def sign_out(self) -> None:
        """Revoke the session remotely, then clear it locally even if revocation fails"""
        token = self.access_token
        try:
            if token:
                self._auth_client.sign_out(token)
        finally:
            self._session = None
            self._publish(SIGNED_OUT)
