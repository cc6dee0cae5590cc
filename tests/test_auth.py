"""Tests for registration, login and tokens."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from shortener.auth import AuthService, INVALID_CREDENTIALS
from shortener.database.base import StoreError
from shortener.database.memory import URLShortenerMemoryDB
from shortener.results import ErrorKind

from conftest import TEST_PASSWORD, TEST_SECRET


class TestRegister:
    """Test user registration."""

    async def test_register_issues_token(self, auth):
        result = await auth.register("new@example.com", TEST_PASSWORD)

        assert result.ok
        session = result.value
        assert session.user.email == "new@example.com"
        assert auth.verify_token(session.token) == session.user.id

    async def test_password_is_hashed(self, auth, test_db):
        session = (await auth.register("new@example.com", TEST_PASSWORD)).unwrap()
        stored = await test_db.get_user_by_id(session.user.id)

        assert stored.password != TEST_PASSWORD
        assert stored.password.startswith("$2")
        assert await auth.check_password(TEST_PASSWORD, stored.password)

    async def test_duplicate_email(self, auth, user):
        result = await auth.register(user.user.email, "another-password")

        assert result.error.kind == ErrorKind.CONFLICT

    @pytest.mark.parametrize(
        "email,password",
        [
            ("not-an-email", TEST_PASSWORD),
            ("new@example.com", "short"),
            ("new@example.com", "x" * 100),
        ],
    )
    async def test_invalid_input(self, auth, email, password):
        result = await auth.register(email, password)

        assert result.error.kind == ErrorKind.VALIDATION

    async def test_store_failure(self, logger):
        class BrokenUsers(URLShortenerMemoryDB):
            async def create_user(self, email, password_hash):
                raise StoreError("disk full")

        auth = AuthService(BrokenUsers(logger=logger), secret=TEST_SECRET, bcrypt_rounds=4)
        result = await auth.register("new@example.com", TEST_PASSWORD)

        assert result.error.kind == ErrorKind.STORE_FAILURE
        assert "disk full" not in result.error.message


class TestLogin:
    """Test login."""

    async def test_login(self, auth, user):
        result = await auth.login(user.user.email, TEST_PASSWORD)

        assert result.ok
        assert auth.verify_token(result.value.token) == user.user.id

    async def test_wrong_password(self, auth, user):
        result = await auth.login(user.user.email, "wrong-password")

        assert result.error.kind == ErrorKind.UNAUTHORIZED
        assert result.error.message == INVALID_CREDENTIALS

    async def test_unknown_email(self, auth):
        result = await auth.login("ghost@example.com", TEST_PASSWORD)

        assert result.error.kind == ErrorKind.UNAUTHORIZED
        assert result.error.message == INVALID_CREDENTIALS

    async def test_deleted_user_cannot_log_in(self, auth, user, test_db):
        assert await test_db.delete_user(user.user.id)

        result = await auth.login(user.user.email, TEST_PASSWORD)

        assert result.error.kind == ErrorKind.UNAUTHORIZED

    async def test_overlong_password_is_rejected(self, auth, user):
        assert not await auth.check_password("x" * 100, "irrelevant")


class TestTokens:
    """Test token verification."""

    def test_round_trip(self, auth):
        assert auth.verify_token(auth.issue_token(42)) == 42

    def test_garbage(self, auth):
        assert auth.verify_token("not.a.token") is None

    def test_wrong_secret(self, auth, logger):
        other = AuthService(auth.db, secret="someone-else", logger=logger)

        assert auth.verify_token(other.issue_token(1)) is None

    def test_expired(self, auth):
        past = datetime.now(timezone.utc) - timedelta(hours=2)
        token = jwt.encode(
            {"sub": "1", "iat": past, "exp": past + timedelta(hours=1)},
            TEST_SECRET,
            algorithm="HS256",
        )

        assert auth.verify_token(token) is None

    def test_missing_subject(self, auth):
        token = jwt.encode(
            {"exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            TEST_SECRET,
            algorithm="HS256",
        )

        assert auth.verify_token(token) is None
