"""User registration, login and bearer tokens."""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt

from .results import ErrorKind, Result
from .common.validators import is_valid_email, is_valid_password, MAX_PASSWORD_BYTES
from .database.base import URLShortenerDBBase, StoreError, DuplicateEmailError
from .database.models import User


INVALID_CREDENTIALS = "Invalid credentials"


@dataclass(frozen=True)
class AuthSession:
    """A freshly issued token and the user it belongs to."""

    token: str
    user: User


class AuthService:
    """Identity provider backed by the URL shortener store."""

    def __init__(
        self,
        db: URLShortenerDBBase,
        secret: str,
        algorithm: str = "HS256",
        expires_seconds: int = 86400,
        bcrypt_rounds: int = 10,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize auth service.

        Args:
            db: Database instance holding users
            secret: Key used to sign tokens
            algorithm: JWT signing algorithm
            expires_seconds: Token lifetime
            bcrypt_rounds: bcrypt cost factor for new password hashes
            logger: Optional logger
        """
        self.db = db
        self.secret = secret
        self.algorithm = algorithm
        self.expires_seconds = expires_seconds
        self.bcrypt_rounds = bcrypt_rounds
        self.logger = logger or logging.getLogger(__name__)

    async def hash_password(self, password: str) -> str:
        # bcrypt is CPU bound; keep it off the event loop
        salt = bcrypt.gensalt(rounds=self.bcrypt_rounds)
        hashed = await asyncio.to_thread(bcrypt.hashpw, password.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    async def check_password(self, password: str, password_hash: str) -> bool:
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            return False
        return await asyncio.to_thread(
            bcrypt.checkpw,
            password.encode("utf-8"),
            password_hash.encode("utf-8"),
        )

    def issue_token(self, user_id: int) -> str:
        """Sign a token whose subject is the user id."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "iat": now,
            "exp": now + timedelta(seconds=self.expires_seconds),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify_token(self, token: str) -> Optional[int]:
        """Return the user id carried by a valid token, else None."""
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.InvalidTokenError as e:
            self.logger.debug(f"Rejected token: {e}")
            return None

        try:
            return int(payload["sub"])
        except (KeyError, TypeError, ValueError):
            return None

    async def register(self, email: str, password: str) -> Result[AuthSession]:
        """Create a user and log them in.

        Returns:
            Result holding the new session; CONFLICT if the email is taken
        """
        for valid, error in (is_valid_email(email), is_valid_password(password)):
            if not valid:
                return Result.failure(ErrorKind.VALIDATION, error)

        password_hash = await self.hash_password(password)
        try:
            user = await self.db.create_user(email, password_hash)
        except DuplicateEmailError:
            return Result.failure(ErrorKind.CONFLICT, "Email already in use")
        except StoreError as e:
            self.logger.error(f"Error registering user: {e}")
            return Result.failure(ErrorKind.STORE_FAILURE, "Failed to register user")

        self.logger.info(f"Registered user {user.id}")
        return Result.success(AuthSession(token=self.issue_token(user.id), user=user))

    async def login(self, email: str, password: str) -> Result[AuthSession]:
        """Check credentials of a live user and issue a token.

        Unknown email, wrong password and deleted user are the same failure.
        """
        try:
            user = await self.db.get_user_by_email(email)
        except StoreError as e:
            self.logger.error(f"Error loading user for login: {e}")
            return Result.failure(ErrorKind.STORE_FAILURE, "Failed to log in")

        if user is None or not await self.check_password(password, user.password):
            return Result.failure(ErrorKind.UNAUTHORIZED, INVALID_CREDENTIALS)

        return Result.success(AuthSession(token=self.issue_token(user.id), user=user))
