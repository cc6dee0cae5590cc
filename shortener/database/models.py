"""Data models for URL shortener."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass
class ShortURL:
    """Represents a short URL row in the database."""

    id: int
    original_url: str
    short_code: str
    short_url: str
    created_at: datetime
    updated_at: datetime
    owner_id: Optional[int] = None
    click_count: int = 0
    deleted_at: Optional[datetime] = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "original_url": self.original_url,
            "short_code": self.short_code,
            "short_url": self.short_url,
            "owner_id": self.owner_id,
            "click_count": self.click_count,
            "created_at": _isoformat(self.created_at),
            "updated_at": _isoformat(self.updated_at),
            "deleted_at": _isoformat(self.deleted_at),
        }

    @classmethod
    def from_record(cls, record) -> "ShortURL":
        """Create from a database record (asyncpg.Record or dict)."""
        return cls(
            id=record["id"],
            original_url=record["original_url"],
            short_code=record["short_code"],
            short_url=record["short_url"],
            owner_id=record["owner_id"],
            click_count=record["click_count"],
            created_at=record["created_at"],
            updated_at=record["updated_at"],
            deleted_at=record["deleted_at"],
        )


@dataclass
class User:
    """Represents a registered user. ``password`` holds the bcrypt hash."""

    id: int
    email: str
    password: str
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None

    def to_public_dict(self) -> dict:
        return {"id": self.id, "email": self.email}

    @classmethod
    def from_record(cls, record) -> "User":
        return cls(
            id=record["id"],
            email=record["email"],
            password=record["password"],
            created_at=record["created_at"],
            updated_at=record["updated_at"],
            deleted_at=record["deleted_at"],
        )
