"""EverMind backend adapter - HTTP client for session identity and snapshots."""

import logging

import requests

from evermind.config import Config
from evermind.ports.identity import User
from evermind.ports.remote_store import SyncError

logger = logging.getLogger(__name__)

SESSION_COOKIE_NAME = "connect.sid"


class EverMindAPIAdapter:
    """
    EverMind backend adapter.

    Implements the IdentityProvider and RemoteStore protocols. The backend
    scopes documents by the session's user, so `user_id` only identifies
    which session the caller believes it is talking for. No business
    logic - just I/O.
    """

    def __init__(
        self,
        base_url: str,
        session_cookie: str = "",
        session: requests.Session | None = None,
        timeout: int = 30,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        if session_cookie:
            self._session.cookies.set(SESSION_COOKIE_NAME, session_cookie)

    @classmethod
    def from_config(cls, config: Config) -> "EverMindAPIAdapter":
        return cls(config.api_base_url, config.session_cookie)

    def current_user(self) -> User | None:
        """Ask the backend who is signed in. Any failure means nobody."""
        try:
            resp = self._session.get(f"{self.base_url}/api/user", timeout=self.timeout)
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.debug(f"Session check failed: {e}")
            return None

        if not isinstance(data, dict) or not data.get("id"):
            logger.debug(f"Not signed in: {data}")
            return None

        return User(
            id=str(data["id"]),
            name=data.get("name") or "",
            email=data.get("email") or "",
            avatar=data.get("avatar"),
        )

    def load(self, user_id: str) -> dict | None:
        """Fetch the stored document, or None if the backend has none."""
        try:
            resp = self._session.get(f"{self.base_url}/api/userdata", timeout=self.timeout)
        except requests.RequestException as e:
            raise SyncError(f"Failed to load events: {e}") from e

        if resp.status_code == 404:
            return None
        if not resp.ok:
            raise SyncError(f"Failed to load events: {resp.status_code} {resp.reason}")

        try:
            return resp.json()
        except ValueError as e:
            raise SyncError(f"Failed to load events: invalid JSON ({e})") from e

    def save(self, user_id: str, document: dict) -> None:
        """Push a full snapshot, replacing whatever the backend holds."""
        logger.debug(f"Sending {len(document.get('events', []))} events for user {user_id}")
        try:
            resp = self._session.post(f"{self.base_url}/api/events", json=document, timeout=self.timeout)
        except requests.RequestException as e:
            raise SyncError(f"Error syncing events: {e}") from e

        if not resp.ok:
            try:
                detail = resp.json().get("error") or resp.reason
            except (ValueError, AttributeError):
                detail = resp.reason
            raise SyncError(f"Failed to sync events: {detail}")
