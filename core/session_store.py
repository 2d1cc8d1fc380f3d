# core/session_store.py

"""
Server-side key-value store for tenant sessions.

Each session token maps to the same keys the dashboard used to keep in
browser storage (user_email, user_name, user_id, user_room). The store is
in-memory with a TTL; swap in another SessionStore for multi-process
deployments.
"""

import secrets
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from threading import Lock
from typing import Optional

from core.config import settings


SESSION_KEYS = ("user_email", "user_name", "user_id", "user_room")


class SessionStore(ABC):
    """Minimal key-value interface used by the auth flow."""

    @abstractmethod
    def get(self, token: str) -> Optional[dict]:
        ...

    @abstractmethod
    def set(self, token: str, values: dict, ttl_seconds: int):
        ...

    @abstractmethod
    def delete(self, token: str):
        ...

    @abstractmethod
    def clear(self):
        ...

    def create(self, values: dict, ttl_seconds: Optional[int] = None) -> str:
        """Store `values` under a fresh token and return the token."""
        token = secrets.token_urlsafe(32)
        self.set(
            token,
            {k: values.get(k) for k in SESSION_KEYS},
            ttl_seconds or settings.TENANT_SESSION_TTL_SECONDS,
        )
        return token


class SessionEntry:
    """Stored session values with expiration time."""

    def __init__(self, values: dict, ttl_seconds: int):
        self.values = dict(values)
        self.expires_at = datetime.now() + timedelta(seconds=ttl_seconds)

    def is_expired(self) -> bool:
        return datetime.now() >= self.expires_at


class InMemorySessionStore(SessionStore):
    """
    In-memory session store with TTL support.

    Thread-safe for concurrent access.
    """

    def __init__(self):
        self._sessions: dict[str, SessionEntry] = {}
        self._lock = Lock()

    def get(self, token: str) -> Optional[dict]:
        with self._lock:
            entry = self._sessions.get(token)
            if entry is None:
                return None

            if entry.is_expired():
                del self._sessions[token]
                return None

            return dict(entry.values)

    def set(self, token: str, values: dict, ttl_seconds: int):
        with self._lock:
            self._sessions[token] = SessionEntry(values, ttl_seconds)

    def delete(self, token: str):
        with self._lock:
            self._sessions.pop(token, None)

    def clear(self):
        with self._lock:
            self._sessions.clear()

    def size(self) -> int:
        with self._lock:
            return len(self._sessions)


# Global store instance
_store = InMemorySessionStore()


def get_session_store() -> SessionStore:
    """FastAPI dependency returning the global session store."""
    return _store
