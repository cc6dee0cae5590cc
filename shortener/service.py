"""Business logic service for URL shortener."""

import logging
from typing import Optional, Dict, List

from .shortcode import ShortCodeGenerator
from .results import ErrorKind, Result
from .database.base import URLShortenerDBBase, StoreError, DuplicateShortCodeError
from .database.models import ShortURL


CREATE_FAILED = "Failed to create short URL"
LOOKUP_FAILED = "Failed to look up short URL"
LIST_FAILED = "Failed to list URLs"
UPDATE_FAILED = "Failed to update short URL"
DELETE_FAILED = "Failed to delete short URL"
NOT_FOUND = "URL not found"


class URLShortenerService:
    """Short URL lifecycle: create, resolve, list, update and soft-delete.

    Holds no per-request state; the store and generator are injected and all
    uniqueness and atomicity guarantees come from the store.
    """

    def __init__(
        self,
        db: URLShortenerDBBase,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        base_url: str = "http://localhost:3000",
        logger: Optional[logging.Logger] = None,
        max_collision_retries: int = 5,
    ):
        """Initialize URL shortener service.

        Args:
            db: Database instance
            short_code_generator: Optional short code generator
            base_url: Public base address used to compose short URLs
            logger: Optional logger
            max_collision_retries: Extra attempts after a short code collision
        """
        self.db = db
        self.generator = short_code_generator or ShortCodeGenerator()
        self.base_url = base_url
        self.logger = logger or logging.getLogger(__name__)
        self.max_collision_retries = max_collision_retries

    def build_short_url(self, short_code: str) -> str:
        """Compose the public short URL for a code."""
        return f"{self.base_url.rstrip('/')}/{short_code}"

    async def create_short_url(
        self,
        original_url: str,
        owner_id: Optional[int] = None,
    ) -> Result[ShortURL]:
        """Create a new short URL.

        The URL is expected to be validated by the caller. A short code that
        collides with an existing row is replaced by a fresh one, at most
        ``max_collision_retries`` times.

        Args:
            original_url: The original long URL
            owner_id: Optional owning user id; None creates an anonymous URL

        Returns:
            Result holding the persisted row
        """
        attempts = self.max_collision_retries + 1
        for attempt in range(1, attempts + 1):
            short_code = self.generator.generate()
            try:
                url = await self.db.create_short_url(
                    original_url=original_url,
                    short_code=short_code,
                    short_url=self.build_short_url(short_code),
                    owner_id=owner_id,
                )
            except DuplicateShortCodeError:
                self.logger.warning(
                    f"Short code collision on {short_code} (attempt {attempt}/{attempts})"
                )
                continue
            except StoreError as e:
                self.logger.error(f"Error creating short URL: {e}")
                return Result.failure(ErrorKind.STORE_FAILURE, CREATE_FAILED)

            self.logger.info(f"Created short URL: {url.short_code} -> {original_url}")
            return Result.success(url)

        self.logger.error(f"No free short code after {attempts} attempts")
        return Result.failure(ErrorKind.STORE_FAILURE, CREATE_FAILED)

    async def resolve(self, short_code: str) -> Result[ShortURL]:
        """Resolve a short code and record the visit.

        Lookup and increment are one atomic store operation, so concurrent
        resolutions of the same code never lose a click.

        Args:
            short_code: The short code to lookup

        Returns:
            Result holding the row as it was before this visit was counted
        """
        try:
            url = await self.db.increment_click_count(short_code)
        except StoreError as e:
            self.logger.error(f"Error resolving {short_code}: {e}")
            return Result.failure(ErrorKind.STORE_FAILURE, LOOKUP_FAILED)

        if url is None:
            self.logger.debug(f"Short code not found: {short_code}")
            return Result.failure(ErrorKind.NOT_FOUND, NOT_FOUND)

        self.logger.debug(f"Resolved {short_code} -> {url.original_url}")
        return Result.success(url)

    async def list_owned(self, owner_id: int) -> Result[List[ShortURL]]:
        """List live URLs of an owner, most recent first."""
        try:
            urls = await self.db.list_by_owner(owner_id)
        except StoreError as e:
            self.logger.error(f"Error listing URLs for owner {owner_id}: {e}")
            return Result.failure(ErrorKind.STORE_FAILURE, LIST_FAILED)
        return Result.success(urls)

    async def update_short_url(
        self,
        url_id: int,
        owner_id: int,
        original_url: str,
    ) -> Result[ShortURL]:
        """Point an owned short URL at a new original URL.

        A missing id, another owner's id and a deleted row all produce the
        same NOT_FOUND failure.
        """
        try:
            url = await self.db.update_original_url(url_id, owner_id, original_url)
        except StoreError as e:
            self.logger.error(f"Error updating short URL {url_id}: {e}")
            return Result.failure(ErrorKind.STORE_FAILURE, UPDATE_FAILED)

        if url is None:
            return Result.failure(ErrorKind.NOT_FOUND, NOT_FOUND)
        return Result.success(url)

    async def delete_short_url(self, url_id: int, owner_id: int) -> Result[ShortURL]:
        """Soft-delete an owned short URL.

        The row and its code are kept; repeated deletes report NOT_FOUND.
        """
        try:
            url = await self.db.soft_delete(url_id, owner_id)
        except StoreError as e:
            self.logger.error(f"Error deleting short URL {url_id}: {e}")
            return Result.failure(ErrorKind.STORE_FAILURE, DELETE_FAILED)

        if url is None:
            return Result.failure(ErrorKind.NOT_FOUND, NOT_FOUND)
        return Result.success(url)

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        db_healthy = await self.db.health_check()
        return {
            "database": db_healthy,
            "overall": db_healthy,
        }

    async def close(self) -> None:
        """Close service connections."""
        await self.db.close()
