"""
FastAPI dependencies for dependency injection.

Services, the session store and the auth gate are all handed to routes
through ``Depends`` so tests can swap any of them.
"""

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from shorturl_app.config import settings
from shorturl_app.database.connection import get_db
from shorturl_app.models.short_url import ShortURL
from shorturl_app.models.user import User
from shorturl_app.services.exceptions import NotAuthenticatedError
from shorturl_app.services.short_code_factory import create_short_code_strategy
from shorturl_app.services.short_code_strategies import ShortCodeStrategy
from shorturl_app.services.short_url_service import ShortURLService
from shorturl_app.services.user_service import UserService
from shorturl_app.sessions.middleware import UserSession
from shorturl_app.sessions.strategies import SessionStore


def get_session_store(request: Request) -> SessionStore:
    """The session store created in the app lifespan"""
    return request.app.state.session_store


def get_session(request: Request) -> UserSession:
    """Session loaded by ServerSessionMiddleware for this request"""
    return request.state.session


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db=db)


def get_short_code_strategy() -> ShortCodeStrategy:
    """Strategy named by SHORT_CODE_STRATEGY; override in tests for fixed codes"""
    return create_short_code_strategy(settings)


def get_short_url_service(
    db: Session = Depends(get_db),
    short_code_strategy: ShortCodeStrategy = Depends(get_short_code_strategy)
) -> ShortURLService:
    return ShortURLService(db=db, short_code_strategy=short_code_strategy)


def get_current_user(
    session: UserSession = Depends(get_session),
    user_service: UserService = Depends(get_user_service)
):
    """Logged-in user, or None for anonymous visitors"""
    if not session.is_authenticated:
        return None
    return user_service.get_by_id(session.user_id)


def require_authenticated(user=Depends(get_current_user)) -> User:
    """
    Auth gate for browser routes.

    A session whose user no longer exists counts as anonymous. Raises
    NotAuthenticatedError, which main.py turns into a redirect to /login.
    """
    if user is None:
        raise NotAuthenticatedError()
    return user


def require_link_owner(
    id: int,
    user: User = Depends(require_authenticated),
    short_url_service: ShortURLService = Depends(get_short_url_service)
) -> ShortURL:
    """
    Ownership gate for link mutations.

    A missing link and someone else's link fail the same way (403).
    """
    short_url = short_url_service.get_by_id(id)
    if not short_url or short_url.owner_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User is not authorized to delete this link"
        )
    return short_url
