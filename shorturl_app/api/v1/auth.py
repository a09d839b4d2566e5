import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Form, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from shorturl_app.dependencies import get_session, get_session_store, get_user_service
from shorturl_app.schemas.user import LoginForm, RegisterForm
from shorturl_app.services.exceptions import UsernameAlreadyExistsError
from shorturl_app.services.user_service import UserService
from shorturl_app.sessions.middleware import UserSession
from shorturl_app.sessions.strategies import SessionStore
from shorturl_app.templating import templates

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.get("/login", response_class=HTMLResponse)
async def login_form(request: Request):
    return templates.TemplateResponse(request, "login.html", {})


@router.post("/login")
async def login(
    form: Annotated[LoginForm, Form()],
    session: UserSession = Depends(get_session),
    store: SessionStore = Depends(get_session_store),
    user_service: UserService = Depends(get_user_service)
):
    """Bind the user to the session; one error for every credential failure"""
    user = user_service.authenticate(form.username, form.password)
    if not user:
        logger.warning("Failed login for username %r", form.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password"
        )

    session.login(user.id, new_session_id=store.new_session_id())
    return RedirectResponse(url="/", status_code=status.HTTP_302_FOUND)


@router.get("/logout")
async def logout(
    session: UserSession = Depends(get_session),
    store: SessionStore = Depends(get_session_store)
):
    """Destroy the session; the client is redirected even if that fails"""
    try:
        await store.delete(session.session_id)
    except Exception:
        logger.exception("Failed to destroy session")
    session.destroy()
    return RedirectResponse(url="/login", status_code=status.HTTP_302_FOUND)


@router.get("/register", response_class=HTMLResponse)
async def register_form(request: Request):
    return templates.TemplateResponse(request, "register.html", {})


@router.post("/register")
async def register(
    form: Annotated[RegisterForm, Form()],
    session: UserSession = Depends(get_session),
    store: SessionStore = Depends(get_session_store),
    user_service: UserService = Depends(get_user_service)
):
    """Create the account, log it in and send the browser to the login page"""
    try:
        user = user_service.register(form.username, form.password)
    except UsernameAlreadyExistsError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already exists"
        )

    session.login(user.id, new_session_id=store.new_session_id())
    return RedirectResponse(url="/login", status_code=status.HTTP_302_FOUND)
