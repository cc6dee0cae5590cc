"""Abstract base class for URL shortener database implementations."""

from abc import ABC, abstractmethod
from typing import Optional, List

from .models import ShortURL, User


class StoreError(Exception):
    """Any persistence failure raised by a store implementation."""


class DuplicateShortCodeError(StoreError):
    """The short code violates the unique constraint."""


class DuplicateEmailError(StoreError):
    """The email violates the unique constraint on users."""


class URLShortenerDBBase(ABC):
    """Abstract base class for URL shortener database operations.

    Every read and write ignores soft-deleted rows. Implementations raise
    ``StoreError`` (or a subclass) for any failure of the underlying storage.
    """

    def __init__(self, db_config: str):
        """Initialize database connection.

        Args:
            db_config: Database connection string
        """
        self.db_config = db_config

    @abstractmethod
    async def init_schema(self) -> None:
        """Create tables and indexes if they don't exist."""
        pass

    @abstractmethod
    async def create_short_url(
        self,
        original_url: str,
        short_code: str,
        short_url: str,
        owner_id: Optional[int] = None,
    ) -> ShortURL:
        """Insert a new short URL row with a zero click count.

        Args:
            original_url: The original long URL
            short_code: The short code to use
            short_url: Display URL composed from the public base address
            owner_id: Optional owning user id

        Returns:
            The persisted row, including the store-assigned id and timestamps

        Raises:
            DuplicateShortCodeError: If short_code already exists (live or deleted)
        """
        pass

    @abstractmethod
    async def increment_click_count(self, short_code: str) -> Optional[ShortURL]:
        """Atomically add one to the click count of a live row.

        Args:
            short_code: The short code to resolve

        Returns:
            The row as it was before the increment, or None if no live row matches
        """
        pass

    @abstractmethod
    async def list_by_owner(self, owner_id: int) -> List[ShortURL]:
        """List live rows owned by a user, newest first.

        Args:
            owner_id: The owning user id

        Returns:
            List of rows ordered by created_at descending
        """
        pass

    @abstractmethod
    async def update_original_url(
        self,
        url_id: int,
        owner_id: int,
        original_url: str,
    ) -> Optional[ShortURL]:
        """Change the original URL of a live row owned by owner_id.

        Returns:
            The updated row, or None if id/owner do not match a live row
        """
        pass

    @abstractmethod
    async def soft_delete(self, url_id: int, owner_id: int) -> Optional[ShortURL]:
        """Mark a live row owned by owner_id as deleted.

        Returns:
            The deleted row, or None if id/owner do not match a live row
        """
        pass

    @abstractmethod
    async def create_user(self, email: str, password_hash: str) -> User:
        """Insert a new user.

        Raises:
            DuplicateEmailError: If the email is already registered
        """
        pass

    @abstractmethod
    async def get_user_by_email(self, email: str) -> Optional[User]:
        """Get a live user by email."""
        pass

    @abstractmethod
    async def get_user_by_id(self, user_id: int) -> Optional[User]:
        """Get a live user by id."""
        pass

    @abstractmethod
    async def delete_user(self, user_id: int) -> bool:
        """Soft-delete a user so it can no longer log in.

        Returns:
            True if a live user was deleted
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close database connections."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if database is healthy.

        Returns:
            True if healthy, False otherwise
        """
        pass
