"""Registration and login routes."""

from fastapi import APIRouter, Depends, status

from shortener.auth import AuthService, AuthSession
from .errors import raise_for_failure
from .schemas import CredentialsRequest, AuthResponse, UserResponse, ErrorResponse
from ..dependencies import get_auth

router = APIRouter(prefix="/auth")


def _auth_response(session: AuthSession) -> AuthResponse:
    return AuthResponse(token=session.token, user=UserResponse.from_user(session.user))


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid email or password"},
        409: {"model": ErrorResponse, "description": "Email already in use"},
    },
    summary="Register",
)
async def register(body: CredentialsRequest, auth: AuthService = Depends(get_auth)):
    result = await auth.register(body.email, body.password)
    raise_for_failure(result)
    return _auth_response(result.value)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={401: {"model": ErrorResponse, "description": "Invalid credentials"}},
    summary="Log in",
)
async def login(body: CredentialsRequest, auth: AuthService = Depends(get_auth)):
    result = await auth.login(body.email, body.password)
    raise_for_failure(result)
    return _auth_response(result.value)
