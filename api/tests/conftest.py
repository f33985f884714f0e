"""Shared test fixtures.

Tests run against a throwaway SQLite database; the URL must be in the
environment before anything imports ``courthub.core.config``.
"""

import os
import tempfile
from pathlib import Path

os.environ.setdefault("CH_DATABASE_URL", f"sqlite+aiosqlite:///{Path(tempfile.gettempdir()) / 'courthub-test.db'}")
os.environ.setdefault("CH_NOTIFICATIONS_ENABLED", "false")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from courthub.core.auth import create_access_token  # noqa: E402
from courthub.core.database import database  # noqa: E402
from courthub.main import app  # noqa: E402
from courthub.models import User, UserRole  # noqa: E402


@pytest.fixture(autouse=True)
async def _fresh_database():
    """Rebuild every table before each test.

    The engine is created at import time. pytest-asyncio gives each test a new
    event loop, so stale pooled connections are disposed first.
    """
    await database.dispose()
    await database.drop_all()
    await database.create_all()
    yield
    await database.dispose()


@pytest.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


async def make_user(email: str, role: UserRole = UserRole.USER, name: str = "Test Player") -> User:
    async with database.session_factory() as db:
        user = User(email=email, name=name, role=role)
        db.add(user)
        await db.commit()
        return user


def auth_headers(email: str) -> dict:
    return {"Authorization": f"Bearer {create_access_token(email)}"}


@pytest.fixture
async def admin_headers():
    await make_user("admin@example.com", role=UserRole.ADMIN, name="Admin")
    return auth_headers("admin@example.com")


@pytest.fixture
async def player_headers():
    await make_user("player@example.com", name="Pat Player")
    return auth_headers("player@example.com")
