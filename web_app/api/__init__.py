"""JSON API: URL management, auth and health."""

from fastapi import APIRouter

from .routes import router as urls_router
from .auth_routes import router as auth_router

api_router = APIRouter()
api_router.include_router(auth_router, tags=["Auth"])
api_router.include_router(urls_router, tags=["URLs"])

__all__ = ["api_router"]
