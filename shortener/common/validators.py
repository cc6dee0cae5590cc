"""Validation utilities for URL shortener."""

import re
from urllib.parse import urlparse
from typing import Tuple


MAX_URL_LENGTH = 2048
MIN_PASSWORD_LENGTH = 6
# bcrypt only reads the first 72 bytes
MAX_PASSWORD_BYTES = 72

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate an absolute http(s) URL.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"

    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"

    try:
        result = urlparse(url)
    except ValueError as e:
        return False, f"Invalid URL format: {e}"

    if result.scheme not in ("http", "https"):
        return False, "URL must use http or https protocol"

    if not result.netloc or not result.hostname:
        return False, "URL must have a valid domain"

    return True, ""


def is_valid_email(email: str) -> Tuple[bool, str]:
    """Validate an email address (shape only)."""
    if not email or not isinstance(email, str):
        return False, "Email is required"
    if not EMAIL_RE.match(email):
        return False, "Invalid email"
    return True, ""


def is_valid_password(password: str, min_length: int = MIN_PASSWORD_LENGTH) -> Tuple[bool, str]:
    """Validate a password."""
    if not password or not isinstance(password, str):
        return False, "Password is required"
    if len(password) < min_length:
        return False, f"Password must be at least {min_length} characters"
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return False, f"Password must be at most {MAX_PASSWORD_BYTES} bytes"
    return True, ""
