"""Pydantic schemas for API requests and responses.

JSON field names are camelCase (``originalUrl``); snake_case names are
accepted on input as well.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime

from shortener.common.validators import is_valid_url, is_valid_email, is_valid_password
from shortener.database.models import ShortURL, User


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ShortenRequest(CamelModel):
    """Request to shorten a URL."""

    original_url: str = Field(..., description="The URL to shorten", min_length=1, max_length=2048)

    @field_validator("original_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate URL format."""
        valid, error = is_valid_url(v.strip())
        if not valid:
            raise ValueError(error)
        return v.strip()

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"originalUrl": "https://example.com/very/long/path/to/resource"},
            ]
        }
    )


class URLUpdateRequest(ShortenRequest):
    """Request to point an existing short URL at a new original URL."""


class ShortenResponse(CamelModel):
    """Response after shortening a URL."""

    original_url: str = Field(..., description="The original long URL")
    short_url: str = Field(..., description="The complete short URL")
    short_code: str = Field(..., description="The generated short code")

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "originalUrl": "https://example.com/very/long/path",
                    "shortUrl": "http://localhost:3000/abc123",
                    "shortCode": "abc123",
                }
            ]
        }
    )


class URLResponse(CamelModel):
    """A short URL as seen by its owner."""

    id: int
    original_url: str
    short_code: str
    short_url: str
    owner_id: Optional[int] = None
    click_count: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_short_url(cls, url: ShortURL) -> "URLResponse":
        return cls(
            id=url.id,
            original_url=url.original_url,
            short_code=url.short_code,
            short_url=url.short_url,
            owner_id=url.owner_id,
            click_count=url.click_count,
            created_at=url.created_at,
            updated_at=url.updated_at,
        )


class CredentialsRequest(CamelModel):
    """Email and password, for both registration and login."""

    email: str = Field(..., max_length=320)
    password: str = Field(...)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        valid, error = is_valid_email(v)
        if not valid:
            raise ValueError(error)
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        valid, error = is_valid_password(v)
        if not valid:
            raise ValueError(error)
        return v


class UserResponse(CamelModel):
    id: int
    email: str

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(id=user.id, email=user.email)


class AuthResponse(CamelModel):
    """Issued bearer token with the authenticated user."""

    token: str
    user: UserResponse


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Database status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    detail: str = Field(..., description="Error message")
