"""
Session module for the short URL app.
Implements Strategy Pattern for flexible session store backends.
"""

from .strategies import SessionStore, RedisSessionStore, InMemorySessionStore
from .factory import SessionStoreFactory, SessionBackend
from .middleware import ServerSessionMiddleware, UserSession

__all__ = [
    "SessionStore",
    "RedisSessionStore",
    "InMemorySessionStore",
    "SessionStoreFactory",
    "SessionBackend",
    "ServerSessionMiddleware",
    "UserSession",
]
