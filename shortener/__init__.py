"""Core business logic for URL shortener."""

from .shortcode import ShortCodeGenerator
from .service import URLShortenerService
from .auth import AuthService, AuthSession
from .results import ErrorKind, Failure, Result

__all__ = [
    "ShortCodeGenerator",
    "URLShortenerService",
    "AuthService",
    "AuthSession",
    "ErrorKind",
    "Failure",
    "Result",
]
