"""Public redirect route."""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import RedirectResponse

from shortener.service import URLShortenerService, NOT_FOUND
from shortener.shortcode import ShortCodeGenerator
from ..api.errors import raise_for_failure
from ..dependencies import get_service

router = APIRouter()


@router.get("/{short_code}", include_in_schema=False)
async def redirect_to_url(
    short_code: str,
    service: URLShortenerService = Depends(get_service),
):
    """Redirect to the original URL and count the visit."""
    # Malformed codes never reach the store
    if not ShortCodeGenerator.is_valid_format(short_code):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)

    result = await service.resolve(short_code)
    raise_for_failure(result)

    return RedirectResponse(url=result.value.original_url, status_code=status.HTTP_302_FOUND)
