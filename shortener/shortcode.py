"""Short code generation utilities."""

import secrets
import string
from typing import Optional


# Route segments served by the app itself; a code equal to one would be shadowed.
RESERVED_CODES = frozenset({
    "api", "auth", "docs", "redoc", "health", "urls", "login", "logout",
    "register", "static", "favicon.ico", "robots.txt", "openapi.json",
})


class ShortCodeGenerator:
    """Generate random short codes for URLs."""

    # URL-safe alphabet (64 symbols): a-zA-Z0-9 plus '_' and '-'
    ALPHABET = string.ascii_letters + string.digits + "_-"

    def __init__(self, default_length: int = 6):
        """Initialize short code generator.

        Args:
            default_length: Default length for generated codes
        """
        if default_length < 1:
            raise ValueError("default_length must be positive")
        self.default_length = default_length

    def generate(self, length: Optional[int] = None) -> str:
        """Generate a random short code from the OS CSPRNG.

        Uniqueness is not checked here; the store's unique constraint is the
        authority.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Random short code
        """
        length = length or self.default_length
        while True:
            code = "".join(secrets.choice(self.ALPHABET) for _ in range(length))
            if code.lower() not in RESERVED_CODES:
                return code

    @staticmethod
    def is_valid_format(code: str, max_length: int = 64) -> bool:
        """Check if code could have been produced by the generator.

        Args:
            code: Code to validate
            max_length: Longest accepted code

        Returns:
            True if valid format
        """
        if not code or len(code) > max_length:
            return False
        return all(c in ShortCodeGenerator.ALPHABET for c in code)
