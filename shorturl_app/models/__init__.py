"""
Database models for the short URL app.

Both tables live in the same database so that a link and its place in the
owner's link list are written in one transaction.
"""

from .user import User
from .short_url import ShortURL

__all__ = ["User", "ShortURL"]
