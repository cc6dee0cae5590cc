"""FastAPI dependencies: services from app state and caller identity."""

from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from shortener.auth import AuthService
from shortener.service import URLShortenerService


def get_service(request: Request) -> URLShortenerService:
    return request.app.state.service


def get_auth(request: Request) -> AuthService:
    return request.app.state.auth


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user_id(
    request: Request,
    auth: AuthService = Depends(get_auth),
) -> int:
    """Identity of the caller; 401 without a valid bearer token."""
    header = request.headers.get("authorization")
    if not header:
        raise _unauthorized("No token provided")

    parts = header.split(" ")
    if len(parts) != 2:
        raise _unauthorized("Token error")

    scheme, token = parts
    if scheme.lower() != "bearer":
        raise _unauthorized("Token malformatted")

    user_id = auth.verify_token(token)
    if user_id is None:
        raise _unauthorized("Token invalid")
    return user_id


def get_optional_user_id(
    request: Request,
    auth: AuthService = Depends(get_auth),
) -> Optional[int]:
    """Identity of the caller, or None for anonymous or unusable tokens."""
    header = request.headers.get("authorization")
    if not header:
        return None

    parts = header.split(" ")
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return auth.verify_token(parts[1])
