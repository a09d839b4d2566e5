from typing import Annotated

from fastapi import APIRouter, Depends, Form, HTTPException, status
from fastapi.responses import JSONResponse, RedirectResponse

from shorturl_app.dependencies import (
    get_short_url_service,
    require_authenticated,
    require_link_owner,
)
from shorturl_app.models.short_url import ShortURL
from shorturl_app.models.user import User
from shorturl_app.schemas.short_url import ShortURLCreate, ShortURLDecoded, ShortURLResponse
from shorturl_app.services.short_url_service import ShortURLService

router = APIRouter(tags=["short_urls"])


@router.post("/shortUrls", response_model=ShortURLResponse, status_code=status.HTTP_200_OK)
async def create_short_url(
    form: Annotated[ShortURLCreate, Form()],
    user: User = Depends(require_authenticated),
    short_url_service: ShortURLService = Depends(get_short_url_service)
):
    """Create a short URL owned by the logged-in user"""
    return short_url_service.create_short_url(form.full_url, owner=user)


@router.get("/decode/{short_code}", response_model=ShortURLDecoded)
async def decode_short_url(
    short_code: str,
    short_url_service: ShortURLService = Depends(get_short_url_service)
):
    """Details of a short URL (does not count as a click)"""
    short_url = short_url_service.get_by_short_code(short_code)
    if not short_url:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Short URL not found"
        )
    return ShortURLDecoded(
        full=short_url.target_url,
        short=short_url.short_code,
        clicks=short_url.clicks,
        date=short_url.created_at
    )


@router.delete("/shortUrls/{id}/delete")
async def delete_short_url(
    short_url: ShortURL = Depends(require_link_owner),
    user: User = Depends(require_authenticated),
    short_url_service: ShortURLService = Depends(get_short_url_service)
):
    """Delete one of the logged-in user's links"""
    # Re-checked with the owner in the WHERE clause
    deleted = short_url_service.delete_short_url(short_url.id, owner_id=user.id)
    if not deleted:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": "Short URL not found"}
        )
    return RedirectResponse(url="/", status_code=status.HTTP_302_FOUND)
