from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import RedirectResponse

from shorturl_app.dependencies import get_short_url_service
from shorturl_app.services.short_url_service import ShortURLService

router = APIRouter(tags=["redirect"])


@router.get("/{short_code}")
async def redirect_to_target_url(
    short_code: str,
    short_url_service: ShortURLService = Depends(get_short_url_service)
):
    """
    Redirect to the original URL.

    The click is counted before redirecting. Concurrent hits on the same
    code each run their own UPDATE, so none are lost in the database.
    """
    target_url = short_url_service.resolve(short_code)

    if not target_url:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Short URL not found"
        )

    return RedirectResponse(url=target_url, status_code=status.HTTP_302_FOUND)
