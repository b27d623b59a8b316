"""Pytest configuration shared by all test suites.

Settings are loaded (and mandatory secrets checked) when ``src.core.config``
is first imported, so the test environment is set up here before any
``src`` import happens.
"""

import os
import tempfile
from datetime import UTC, datetime
from uuid import UUID

from uuid_extensions import uuid7

_TEST_DB_DIR = tempfile.mkdtemp(prefix="auth-session-tests-")

os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("ACCESS_TOKEN_SECRET", "test-access-secret-0123456789abcdefghij")
os.environ.setdefault("REFRESH_TOKEN_SECRET", "test-refresh-secret-0123456789abcdefghi")
os.environ.setdefault(
    "DATABASE_URL", f"sqlite+aiosqlite:///{_TEST_DB_DIR}/auth_sessions_test.db"
)
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402

from src.domain.entities.user import User  # noqa: E402
from src.domain.enums import Role  # noqa: E402
from src.infrastructure.persistence.database import Database  # noqa: E402
from src.infrastructure.persistence.repositories import (  # noqa: E402
    UserRepository as SqlUserRepository,
)
from src.infrastructure.security import BcryptPasswordService  # noqa: E402

TEST_ACCESS_SECRET = os.environ["ACCESS_TOKEN_SECRET"]
TEST_REFRESH_SECRET = os.environ["REFRESH_TOKEN_SECRET"]


def make_user(
    *,
    user_id: UUID | None = None,
    email: str = "user@example.com",
    password_hash: str = "hashed_password",
    role: Role | int = Role.MEMBER,
    is_active: bool = True,
) -> User:
    """Build a User entity for tests."""
    now = datetime.now(UTC)
    return User(
        id=user_id or uuid7(),
        email=email,
        password_hash=password_hash,
        name="Test User",
        role_id=int(role),
        is_active=is_active,
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def user_factory():
    """Factory fixture returning ``make_user``."""
    return make_user


@pytest_asyncio.fixture
async def test_database(tmp_path):
    """Fresh SQLite database (tables created) per test."""
    database = Database(f"sqlite+aiosqlite:///{tmp_path}/test.db")
    await database.create_all()
    yield database
    await database.close()


@pytest_asyncio.fixture
async def seeded_user(test_database):
    """Active MEMBER with password ``CorrectHorse1`` saved to test_database."""
    user = make_user(
        email="seeded@example.com",
        password_hash=BcryptPasswordService(cost_factor=4).hash_password("CorrectHorse1"),
    )
    async with test_database.get_session() as session:
        await SqlUserRepository(session).save(user)
    return user
