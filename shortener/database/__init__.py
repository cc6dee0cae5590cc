"""Database layer for URL shortener."""

import logging
from typing import Optional
from urllib.parse import urlparse

from .base import (
    URLShortenerDBBase,
    StoreError,
    DuplicateShortCodeError,
    DuplicateEmailError,
)
from .memory import URLShortenerMemoryDB
from .models import ShortURL, User
from .postgres import URLShortenerPostgres


def create_database(
    database_url: str,
    pool_max_size: int = 10,
    logger: Optional[logging.Logger] = None,
) -> URLShortenerDBBase:
    """Build the store implementation selected by the URL scheme.

    Args:
        database_url: ``postgresql://...`` / ``postgres://...`` or ``memory://``
        pool_max_size: Connection pool size for PostgreSQL
        logger: Optional logger instance

    Returns:
        Store instance (not yet connected)
    """
    scheme = urlparse(database_url).scheme
    if scheme == "memory":
        return URLShortenerMemoryDB(database_url, logger=logger)
    if scheme in ("postgresql", "postgres"):
        return URLShortenerPostgres(
            database_url,
            pool_max_size=pool_max_size,
            logger=logger,
        )
    raise ValueError(f"Unsupported database URL scheme: {scheme!r}")


__all__ = [
    "URLShortenerDBBase",
    "URLShortenerMemoryDB",
    "URLShortenerPostgres",
    "StoreError",
    "DuplicateShortCodeError",
    "DuplicateEmailError",
    "ShortURL",
    "User",
    "create_database",
]
