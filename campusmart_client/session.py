"""
Session context: the bearer token and cached user of the signed-in account.

Lifecycle: ``load()`` on start, ``begin()`` after login or registration,
``invalidate()`` when the server answers 401 and ``clear()`` on logout.
"""

import json
import logging
import os
from typing import Callable, Dict, List, Optional


logger = logging.getLogger(__name__)


class MemorySessionStore:
    def __init__(self):
        self._data: Optional[Dict] = None

    def read(self) -> Optional[Dict]:
        return dict(self._data) if self._data else None

    def write(self, data: Dict):
        self._data = dict(data)

    def clear(self):
        self._data = None


class FileSessionStore:
    """Keeps the session in a JSON file so it survives restarts."""

    def __init__(self, path: str):
        self.path = path

    def read(self) -> Optional[Dict]:
        if not os.path.exists(self.path):
            return None
        try:
            with open(self.path, encoding="utf-8") as fh:
                return json.load(fh)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable session file {self.path}: {e}")
            return None

    def write(self, data: Dict):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as fh:
            json.dump(data, fh)

    def clear(self):
        if os.path.exists(self.path):
            os.remove(self.path)


class SessionContext:
    def __init__(self, store=None):
        self.store = store if store is not None else MemorySessionStore()
        self.token: Optional[str] = None
        self.refresh_token: Optional[str] = None
        self.user: Optional[Dict] = None
        self._listeners: List[Callable[[], None]] = []

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @property
    def user_id(self) -> Optional[str]:
        return self.user.get("id") if self.user else None

    def on_invalidated(self, listener: Callable[[], None]):
        """Register a callback run whenever the session is dropped by a 401."""
        self._listeners.append(listener)

    def load(self) -> bool:
        data = self.store.read() or {}
        self.token = data.get("token")
        self.refresh_token = data.get("refresh")
        self.user = data.get("user")
        return self.is_authenticated

    def begin(self, token: str, user: Dict, refresh_token: Optional[str] = None):
        self.token = token
        self.refresh_token = refresh_token
        self.user = user
        self._persist()

    def update_user(self, user: Dict):
        self.user = user
        if self.is_authenticated:
            self._persist()

    def invalidate(self):
        logger.info("Session invalidated by the server")
        self.clear()
        for listener in list(self._listeners):
            listener()

    def clear(self):
        self.token = None
        self.refresh_token = None
        self.user = None
        self.store.clear()

    def _persist(self):
        self.store.write({"token": self.token, "refresh": self.refresh_token, "user": self.user})
