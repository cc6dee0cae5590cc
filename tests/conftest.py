"""Pytest configuration and fixtures."""

import pytest
from typing import AsyncGenerator

from httpx import ASGITransport, AsyncClient

from config import Config
from shortener.auth import AuthService
from shortener.database.memory import URLShortenerMemoryDB
from shortener.service import URLShortenerService
from shortener.shortcode import ShortCodeGenerator
from shortener.common.logging_config import setup_logging
from web_app import create_app


TEST_SECRET = "test-secret"
TEST_PASSWORD = "correct-horse"


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
async def test_db(logger) -> AsyncGenerator[URLShortenerMemoryDB, None]:
    """Create test database instance."""
    db = URLShortenerMemoryDB(logger=logger)

    yield db

    await db.close()


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(default_length=6)


@pytest.fixture
def service(test_db, short_code_generator, logger) -> URLShortenerService:
    """Create service instance."""
    return URLShortenerService(
        db=test_db,
        short_code_generator=short_code_generator,
        base_url="http://testserver",
        logger=logger,
    )


@pytest.fixture
def auth(test_db, logger) -> AuthService:
    """Create auth service with a cheap bcrypt cost."""
    return AuthService(
        db=test_db,
        secret=TEST_SECRET,
        bcrypt_rounds=4,
        logger=logger,
    )


@pytest.fixture
def app(test_db, service, auth, logger):
    """Create test FastAPI app."""
    config = Config(
        database_url="memory://",
        base_url="http://testserver",
        jwt_secret=TEST_SECRET,
    )

    return create_app(
        db_instance=test_db,
        service_instance=service,
        auth_instance=auth,
        config=config,
        logger=logger,
    )


@pytest.fixture
async def client(app):
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
async def user(auth):
    """A registered user session (token and user)."""
    result = await auth.register("owner@example.com", TEST_PASSWORD)
    return result.unwrap()


@pytest.fixture
async def other_user(auth):
    """A second registered user session."""
    result = await auth.register("other@example.com", TEST_PASSWORD)
    return result.unwrap()


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
