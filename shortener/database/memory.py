"""In-process implementation for URL shortener.

Used for local development (``DATABASE_URL=memory://``), the CLI and tests.
Rows live for the lifetime of the process.
"""

import asyncio
import itertools
import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional, List, Dict

from .base import (
    URLShortenerDBBase,
    StoreError,
    DuplicateShortCodeError,
    DuplicateEmailError,
)
from .models import ShortURL, User


def _now() -> datetime:
    return datetime.now(timezone.utc)


class URLShortenerMemoryDB(URLShortenerDBBase):
    """Memory-backed store with the same constraints as the SQL schema."""

    def __init__(
        self,
        db_config: str = "memory://",
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(db_config)
        self.logger = logger or logging.getLogger(__name__)

        self._urls: Dict[int, ShortURL] = {}
        self._ids_by_code: Dict[str, int] = {}
        self._users: Dict[int, User] = {}
        self._ids_by_email: Dict[str, int] = {}
        self._url_ids = itertools.count(1)
        self._user_ids = itertools.count(1)
        self._lock = asyncio.Lock()
        self._closed = False

    def _check_open(self) -> None:
        if self._closed:
            raise StoreError("memory store is closed")

    async def init_schema(self) -> None:
        self._check_open()
        self.logger.debug("Memory store needs no schema")

    def _live_url(self, url_id: int, owner_id: int) -> Optional[ShortURL]:
        url = self._urls.get(url_id)
        if url is None or url.is_deleted or url.owner_id is None:
            return None
        if url.owner_id != owner_id:
            return None
        return url

    async def create_short_url(
        self,
        original_url: str,
        short_code: str,
        short_url: str,
        owner_id: Optional[int] = None,
    ) -> ShortURL:
        self._check_open()
        async with self._lock:
            # Unique over every row, deleted ones included
            if short_code in self._ids_by_code:
                raise DuplicateShortCodeError("short code already exists")
            if owner_id is not None and owner_id not in self._users:
                raise StoreError(f"owner {owner_id} does not exist")

            now = _now()
            url = ShortURL(
                id=next(self._url_ids),
                original_url=original_url,
                short_code=short_code,
                short_url=short_url,
                owner_id=owner_id,
                click_count=0,
                created_at=now,
                updated_at=now,
            )
            self._urls[url.id] = url
            self._ids_by_code[short_code] = url.id

        self.logger.info(f"Created short URL: {short_code} -> {original_url}")
        return replace(url)

    async def increment_click_count(self, short_code: str) -> Optional[ShortURL]:
        self._check_open()
        async with self._lock:
            url_id = self._ids_by_code.get(short_code)
            url = self._urls.get(url_id) if url_id is not None else None
            if url is None or url.is_deleted:
                return None
            before = replace(url)
            url.click_count += 1
        return before

    async def list_by_owner(self, owner_id: int) -> List[ShortURL]:
        self._check_open()
        urls = [
            replace(url)
            for url in self._urls.values()
            if url.owner_id == owner_id and not url.is_deleted
        ]
        urls.sort(key=lambda url: (url.created_at, url.id), reverse=True)
        return urls

    async def update_original_url(
        self,
        url_id: int,
        owner_id: int,
        original_url: str,
    ) -> Optional[ShortURL]:
        self._check_open()
        async with self._lock:
            url = self._live_url(url_id, owner_id)
            if url is None:
                return None
            url.original_url = original_url
            url.updated_at = _now()
            updated = replace(url)

        self.logger.info(f"Updated short URL {url_id} -> {original_url}")
        return updated

    async def soft_delete(self, url_id: int, owner_id: int) -> Optional[ShortURL]:
        self._check_open()
        async with self._lock:
            url = self._live_url(url_id, owner_id)
            if url is None:
                return None
            url.deleted_at = url.updated_at = _now()
            deleted = replace(url)

        self.logger.info(f"Deleted short URL {url_id} ({deleted.short_code})")
        return deleted

    async def create_user(self, email: str, password_hash: str) -> User:
        self._check_open()
        async with self._lock:
            if email in self._ids_by_email:
                raise DuplicateEmailError("email already registered")

            now = _now()
            user = User(
                id=next(self._user_ids),
                email=email,
                password=password_hash,
                created_at=now,
                updated_at=now,
            )
            self._users[user.id] = user
            self._ids_by_email[email] = user.id
        return replace(user)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        self._check_open()
        user_id = self._ids_by_email.get(email)
        if user_id is None:
            return None
        return await self.get_user_by_id(user_id)

    async def get_user_by_id(self, user_id: int) -> Optional[User]:
        self._check_open()
        user = self._users.get(user_id)
        if user is None or user.deleted_at is not None:
            return None
        return replace(user)

    async def delete_user(self, user_id: int) -> bool:
        self._check_open()
        async with self._lock:
            user = self._users.get(user_id)
            if user is None or user.deleted_at is not None:
                return False
            user.deleted_at = user.updated_at = _now()
        return True

    async def health_check(self) -> bool:
        return not self._closed

    async def close(self) -> None:
        self._closed = True
