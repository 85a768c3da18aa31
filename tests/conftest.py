"""
Shared pytest fixtures and configuration for all tests.
"""

import os
from collections.abc import AsyncGenerator, Generator
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from alembic import command
from alembic.config import Config

PROJECT_DIR = Path(__file__).parent.parent

TEST_JWT_SECRET = "test-secret-key-for-testing-only"


class RecordingEmailService:
    """Stand-in for the Mailgun client that remembers every verification it was asked to send."""

    def __init__(self, deliver: bool = True):
        self.deliver = deliver
        self.sent: list[tuple[str, str]] = []

    async def send_verification_email(self, email: str, code: str) -> bool:
        self.sent.append((email, code))
        return self.deliver

    def last_code_for(self, email: str) -> str:
        codes = [code for to, code in self.sent if to == email]
        assert codes, f"no verification email sent to {email}"
        return codes[-1]


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    os.environ["EATS_JWT_SECRET"] = TEST_JWT_SECRET
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def test_database(tmp_path: Path) -> str:
    """A throwaway SQLite database file for one test."""
    return f"sqlite:///{tmp_path / 'eats-test.db'}"


@pytest.fixture
def alembic_migrate(test_database: str) -> Generator[None, None, None]:
    """Run Alembic upgrade to head against the test database."""
    os.environ["EATS_DATABASE_URL"] = test_database
    cfg = Config(str(PROJECT_DIR / "alembic.ini"))
    command.upgrade(cfg, "head")
    yield
    command.downgrade(cfg, "base")


@pytest_asyncio.fixture
async def shared_db(alembic_migrate: None, test_database: str) -> AsyncGenerator[None, None]:
    """Point the shared connection pool at the migrated test database."""
    from eats.database.connection import close_database, init_database

    init_database(test_database, force_reinit=True)
    yield
    await close_database()


@pytest_asyncio.fixture
async def db_session(shared_db: None) -> Any:
    """Provide an async SQLAlchemy session for testing."""
    from eats.database.connection import get_async_session

    async with get_async_session() as session:
        yield session


@pytest.fixture
def email_service() -> RecordingEmailService:
    return RecordingEmailService()


@pytest.fixture
def failing_email_service() -> RecordingEmailService:
    """Records sends but reports every delivery as failed."""
    return RecordingEmailService(deliver=False)


@pytest.fixture
def jwt_adapter() -> Any:
    from eats.auth.factory import get_auth_adapter

    return get_auth_adapter()


@pytest_asyncio.fixture
async def client(shared_db: None, email_service: RecordingEmailService) -> Any:
    """HTTP client bound to a fresh app instance over ASGI."""
    from eats.api.app import create_app

    app = create_app(email_service=email_service)  # type: ignore[arg-type]
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http:
        yield http


# Test markers
def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line(  # type: ignore[reportUnknownMemberType]
        "markers", "requires_db: mark test as requiring database connection"
    )
