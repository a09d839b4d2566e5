"""
Factory for creating session store instances.
"""

import logging
from enum import Enum

from .strategies import SessionStore, RedisSessionStore, InMemorySessionStore
from shorturl_app.config import settings

logger = logging.getLogger(__name__)


class SessionBackend(Enum):
    """Available session backends"""
    REDIS = "redis"
    MEMORY = "memory"


class SessionStoreFactory:
    """
    Simple factory for creating session stores.

    Gets configuration from settings (not passed as parameters). The caller
    decides where the instance lives; main.py keeps it on app.state.
    """

    @classmethod
    def create(cls, backend: SessionBackend) -> SessionStore:
        """
        Create a session store for the given backend.

        Falls back to the in-memory store when Redis can't be reached, so
        a development machine without Redis still works.
        """
        if backend == SessionBackend.REDIS:
            import redis

            try:
                redis_client = redis.from_url(
                    settings.redis_url,
                    decode_responses=True,
                    socket_connect_timeout=2,
                    socket_timeout=2,
                )

                # Test connection immediately
                redis_client.ping()

                logger.info("✅ Redis session store initialized")
                return RedisSessionStore(redis_client)

            except redis.exceptions.RedisError as e:
                logger.warning("⚠️  Redis connection failed: %s", e)
                logger.warning("⚠️  Falling back to in-memory session store")
                return InMemorySessionStore()

        elif backend == SessionBackend.MEMORY:
            logger.info("✅ In-memory session store initialized")
            return InMemorySessionStore()

        raise ValueError(f"Unknown session backend: {backend}")
