"""
Session store strategies using Strategy Pattern.
Server-side session state keyed by an opaque session id (Redis, In-Memory).
"""

import json
import logging
import secrets
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

logger = logging.getLogger(__name__)


class SessionStore(ABC):
    """
    Abstract base class for session stores.

    Handlers never talk to a global session map: they get a store through
    dependency injection and address it by session id.

    All methods are async because session operations involve I/O (network for Redis).
    """

    key_prefix = "session:"

    def new_session_id(self) -> str:
        """Return a fresh, unguessable session id"""
        return secrets.token_urlsafe(32)

    @abstractmethod
    async def load(self, session_id: str) -> Optional[Dict[str, Any]]:
        """
        Get session data.

        Returns:
            Session data, or None if the session does not exist or expired
        """
        pass

    @abstractmethod
    async def save(self, session_id: str, data: Dict[str, Any], ttl: int) -> None:
        """
        Create or replace session data with a TTL in seconds.
        """
        pass

    @abstractmethod
    async def delete(self, session_id: str) -> bool:
        """
        Destroy a session.

        Returns:
            True if deleted, False if it didn't exist
        """
        pass


class RedisSessionStore(SessionStore):
    """
    Redis session store.

    Sessions are JSON strings stored with SETEX, so Redis enforces expiry
    and several app servers can share them.

    Unlike a cache, errors are not swallowed here: losing a write would
    silently log the user out.
    """

    def __init__(self, redis_client):
        """
        Args:
            redis_client: Redis client instance (redis.Redis)
        """
        self.redis = redis_client

    async def load(self, session_id: str) -> Optional[Dict[str, Any]]:
        value = self.redis.get(self.key_prefix + session_id)
        if value is None:
            return None
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            logger.warning("Discarding corrupt session %s", session_id[:8])
            return None

    async def save(self, session_id: str, data: Dict[str, Any], ttl: int) -> None:
        self.redis.setex(self.key_prefix + session_id, ttl, json.dumps(data))

    async def delete(self, session_id: str) -> bool:
        return bool(self.redis.delete(self.key_prefix + session_id))


class InMemorySessionStore(SessionStore):
    """
    In-memory session store using a Python dict.

    Pros:
    - No external dependencies
    - Good for development and testing

    Cons:
    - Not shared between processes
    - Lost on restart

    Expired entries are dropped when they are next read, and swept from the
    whole dict on save at most once every ``sweep_interval`` seconds. Ids of
    abandoned sessions are never read again, so without the sweep they would
    stay forever.
    """

    def __init__(self, clock=time.monotonic, sweep_interval: float = 60.0):
        self._sessions: Dict[str, Tuple[float, str]] = {}
        self._clock = clock
        self.sweep_interval = sweep_interval
        self._next_sweep = clock() + sweep_interval

    async def load(self, session_id: str) -> Optional[Dict[str, Any]]:
        entry = self._sessions.get(session_id)
        if entry is None:
            return None

        expires_at, payload = entry
        if expires_at <= self._clock():
            del self._sessions[session_id]
            return None

        return json.loads(payload)

    async def save(self, session_id: str, data: Dict[str, Any], ttl: int) -> None:
        now = self._clock()
        if now >= self._next_sweep:
            self.purge_expired()

        # Stored as JSON so callers can't mutate stored state by reference
        self._sessions[session_id] = (now + ttl, json.dumps(data))

    async def delete(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def purge_expired(self) -> int:
        """Drop every expired session; returns how many were removed"""
        now = self._clock()
        expired = [sid for sid, (expires_at, _) in self._sessions.items() if expires_at <= now]
        for session_id in expired:
            del self._sessions[session_id]
        self._next_sweep = now + self.sweep_interval
        return len(expired)

    def __len__(self):
        return len(self._sessions)
