import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import PlainTextResponse, RedirectResponse
from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError

from shorturl_app.config import settings
from shorturl_app.database.connection import engine, Base
from shorturl_app.logging_config import configure_logging
from shorturl_app.api.v1 import pages, auth, short_urls, redirect
from shorturl_app.services.exceptions import NotAuthenticatedError, ShortCodeGenerationError
from shorturl_app.sessions import ServerSessionMiddleware, SessionStoreFactory, SessionBackend

# Import models to ensure they're registered with Base
from shorturl_app.models import User, ShortURL

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create database tables
    Base.metadata.create_all(bind=engine)
    app.state.session_store = SessionStoreFactory.create(
        SessionBackend(settings.session_backend)
    )
    logger.info(
        "%s %s started (environment=%s, session backend=%s)",
        settings.app_name, settings.app_version,
        settings.environment, settings.session_backend
    )
    yield


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="A URL shortener with user accounts, built with FastAPI",
    debug=settings.debug,
    lifespan=lifespan,
)

app.add_middleware(
    ServerSessionMiddleware,
    cookie_name=settings.session_cookie_name,
    max_age=settings.session_ttl,
    https_only=settings.session_cookie_secure,
    save_uninitialized=settings.session_save_uninitialized,
)


@app.exception_handler(NotAuthenticatedError)
async def not_authenticated_handler(request: Request, exc: NotAuthenticatedError):
    return RedirectResponse(url="/login", status_code=status.HTTP_302_FOUND)


# The Exception entry is used by Starlette's ServerErrorMiddleware for
# anything else, so clients never get its traceback page
@app.exception_handler(SQLAlchemyError)
@app.exception_handler(RedisError)
@app.exception_handler(ShortCodeGenerationError)
@app.exception_handler(Exception)
async def internal_error_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled error on %s %s", request.method, request.url.path,
        exc_info=exc
    )
    return PlainTextResponse(
        "Internal Server Error",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
    )


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "environment": settings.environment}


######## Include routers
app.include_router(pages.router)
app.include_router(auth.router)
app.include_router(short_urls.router)
# Catch-all /{short_code} goes last
app.include_router(redirect.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
