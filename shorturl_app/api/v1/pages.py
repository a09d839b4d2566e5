from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from shorturl_app.dependencies import get_current_user, get_short_url_service
from shorturl_app.services.short_url_service import ShortURLService
from shorturl_app.templating import templates

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse)
async def home(
    request: Request,
    user=Depends(get_current_user),
    short_url_service: ShortURLService = Depends(get_short_url_service)
):
    """List every short URL; the current user, if any, sees their delete buttons"""
    short_urls = short_url_service.list_all()
    return templates.TemplateResponse(
        request,
        "index.html",
        {"short_urls": short_urls, "user": user}
    )
