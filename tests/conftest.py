"""
Shared fixtures: a throwaway SQLite database per test, a fast bcrypt cost
and an httpx client bound to the ASGI app.
"""

import os

os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import TokenIssuer
from auth.dependencies import token_issuer
from database.session import build_engine, build_session_factory, get_db_session, init_db

TEST_SECRET = "test-secret-key-with-enough-length-for-hs256"


@pytest.fixture
def issuer() -> TokenIssuer:
    return TokenIssuer(
        TEST_SECRET,
        issuer="LibraryAPI",
        audience="LibraryClient",
        lifetime_minutes=60,
    )


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'library.db'}")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest_asyncio.fixture
async def session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(session_factory, issuer) -> AsyncGenerator[AsyncClient, None]:
    from main import create_app

    app = create_app()

    async def _session_override():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = _session_override
    app.dependency_overrides[token_issuer] = lambda: issuer

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """POST /api/auth/register with a default email and password."""

    async def _register(username: str, email: str | None = None, password: str = "secret123"):
        return await client.post(
            "/api/auth/register",
            json={
                "username": username,
                "email": email or f"{username}@example.com",
                "password": password,
            },
        )

    return _register


@pytest.fixture
def auth_headers(register):
    """Register a user and return a ready-to-use Authorization header."""

    async def _headers(username: str) -> dict:
        resp = await register(username)
        assert resp.status_code == 200, resp.text
        return {"Authorization": f"Bearer {resp.json()['token']}"}

    return _headers
