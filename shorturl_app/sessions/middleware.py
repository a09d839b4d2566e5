"""
Server-side session middleware.

The cookie only carries an opaque session id; the data lives in the
SessionStore found on ``app.state.session_store``.
"""

import logging
from typing import Any, Dict, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from shorturl_app.sessions.strategies import SessionStore

logger = logging.getLogger(__name__)


class UserSession:
    """Session state for one request."""

    def __init__(self, session_id: str, data: Optional[Dict[str, Any]] = None,
                 is_new: bool = False):
        self.session_id = session_id
        self.data = data or {}
        self.is_new = is_new
        self.modified = False
        self.destroyed = False
        self.previous_id: Optional[str] = None

    @property
    def user_id(self) -> Optional[int]:
        return self.data.get("user_id")

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    def login(self, user_id: int, new_session_id: Optional[str] = None) -> None:
        """Bind ``user_id``; if a new id is given the old one is retired"""
        self.data["user_id"] = user_id
        if new_session_id and not self.is_new:
            self.previous_id = self.session_id
            self.session_id = new_session_id
        self.modified = True

    def destroy(self) -> None:
        self.data = {}
        self.destroyed = True


class ServerSessionMiddleware(BaseHTTPMiddleware):
    """
    Loads the session before the route runs and persists it afterwards.

    - unknown or expired cookie -> a new session (and cookie)
    - session.destroy() -> cookie cleared; the route deletes the stored data
    - session.login() with a new id -> old id removed from the store
    - logged-in sessions -> saved again on each request (rolling expiry)
    - store errors -> logged, plain 500 response
    """

    def __init__(self, app, cookie_name: str = "session_id", max_age: int = 86400,
                 https_only: bool = False, save_uninitialized: bool = True):
        super().__init__(app)
        self.cookie_name = cookie_name
        self.max_age = max_age
        self.https_only = https_only
        self.save_uninitialized = save_uninitialized

    async def dispatch(self, request: Request, call_next):
        store: SessionStore = request.app.state.session_store

        # This middleware sits outside the app's exception handlers, so store
        # failures are turned into the generic 500 here
        try:
            session = await self._load_session(store, request)
        except Exception as exc:
            return self._store_failure(request, exc)
        request.state.session = session

        response = await call_next(request)

        if session.destroyed:
            response.delete_cookie(self.cookie_name)
            return response

        try:
            await self._persist_session(store, session, response)
        except Exception as exc:
            return self._store_failure(request, exc)

        return response

    async def _load_session(self, store: SessionStore, request: Request) -> UserSession:
        session_id = request.cookies.get(self.cookie_name)
        data = await store.load(session_id) if session_id else None
        if data is None:
            return UserSession(store.new_session_id(), is_new=True)
        return UserSession(session_id, data)

    async def _persist_session(self, store: SessionStore, session: UserSession, response):
        if session.previous_id:
            await store.delete(session.previous_id)

        # Logged-in sessions are re-saved on every request so the TTL counts
        # from the last request, not from login
        should_save = (
            session.modified
            or session.is_authenticated
            or (session.is_new and self.save_uninitialized)
        )
        if not should_save:
            return

        await store.save(session.session_id, session.data, ttl=self.max_age)
        response.set_cookie(
            self.cookie_name,
            session.session_id,
            max_age=self.max_age,
            httponly=True,
            samesite="lax",
            secure=self.https_only,
        )

    def _store_failure(self, request: Request, exc: Exception) -> PlainTextResponse:
        logger.error(
            "Session store failure on %s %s", request.method, request.url.path,
            exc_info=exc
        )
        return PlainTextResponse("Internal Server Error", status_code=500)
