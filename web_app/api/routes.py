"""API routes implementation."""

from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Request, Response, status

from shortener.service import URLShortenerService
from .errors import raise_for_failure
from .schemas import (
    ShortenRequest,
    ShortenResponse,
    URLUpdateRequest,
    URLResponse,
    HealthResponse,
    ErrorResponse,
)
from ..dependencies import get_service, get_current_user_id, get_optional_user_id

# Largest id a BIGINT primary key can hold
MAX_URL_ID = 2**63 - 1

router = APIRouter()


@router.post(
    "/urls",
    response_model=ShortenResponse,
    responses={
        400: {"description": "Invalid request"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Create short URL",
    description="Shorten a URL. With a bearer token the URL is owned by the caller; without one it is anonymous.",
)
async def create_short_url(
    body: ShortenRequest,
    service: URLShortenerService = Depends(get_service),
    owner_id: Optional[int] = Depends(get_optional_user_id),
):
    """Create a shortened URL."""
    result = await service.create_short_url(body.original_url, owner_id=owner_id)
    raise_for_failure(result)

    url = result.value
    return ShortenResponse(
        original_url=url.original_url,
        short_url=url.short_url,
        short_code=url.short_code,
    )


@router.get(
    "/urls",
    response_model=List[URLResponse],
    responses={401: {"model": ErrorResponse, "description": "Missing or invalid token"}},
    summary="List my URLs",
    description="List the caller's short URLs, most recent first.",
)
async def list_urls(
    service: URLShortenerService = Depends(get_service),
    owner_id: int = Depends(get_current_user_id),
):
    result = await service.list_owned(owner_id)
    raise_for_failure(result)
    return [URLResponse.from_short_url(url) for url in result.value]


@router.put(
    "/urls/{url_id}",
    response_model=URLResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Missing or invalid token"},
        404: {"model": ErrorResponse, "description": "URL not found"},
    },
    summary="Update a URL",
    description="Change the original URL behind one of the caller's short URLs. The short code is kept.",
)
async def update_url(
    body: URLUpdateRequest,
    url_id: int = Path(..., le=MAX_URL_ID),
    service: URLShortenerService = Depends(get_service),
    owner_id: int = Depends(get_current_user_id),
):
    result = await service.update_short_url(url_id, owner_id, body.original_url)
    raise_for_failure(result)
    return URLResponse.from_short_url(result.value)


@router.delete(
    "/urls/{url_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        401: {"model": ErrorResponse, "description": "Missing or invalid token"},
        404: {"model": ErrorResponse, "description": "URL not found"},
    },
    summary="Delete a URL",
    description="Soft-delete one of the caller's short URLs. Its code stops redirecting and is never reused.",
)
async def delete_url(
    url_id: int = Path(..., le=MAX_URL_ID),
    service: URLShortenerService = Depends(get_service),
    owner_id: int = Depends(get_current_user_id),
):
    result = await service.delete_short_url(url_id, owner_id)
    raise_for_failure(result)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse, "description": "Database unavailable"}},
    summary="Health check",
    description="Check if the service is healthy.",
)
async def health_check(request: Request, response: Response):
    """Health check endpoint for load balancers and monitoring."""
    service = request.app.state.service

    health = await service.health_check()
    if not health["overall"]:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        database="healthy" if health["database"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
