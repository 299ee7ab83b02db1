from __future__ import annotations

from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from suarasekolah.core import config
from suarasekolah.core.dependencies import get_auth_provider
from suarasekolah.core.exceptions import AuthProviderError
from suarasekolah.db.session import get_db
from suarasekolah.main import app, functions_app
from suarasekolah.models import Base, UserProfile
from suarasekolah.services.auth_provider import AuthProvider, AuthUser


class FakeAuthProvider(AuthProvider):
    """In-memory stand-in for the hosted auth provider."""

    def __init__(self):
        self.tokens: dict[str, AuthUser] = {}
        self.accounts: dict[str, AuthUser] = {}
        self.created: list[dict[str, Any]] = []
        self.deleted: list[str] = []
        self.create_error: AuthProviderError | None = None
        self.delete_errors: list[AuthProviderError] = []
        self.next_ids: list[str] = []
        self._counter = 0

    def add_token(self, token: str, user_id: str) -> None:
        self.tokens[token] = AuthUser(id=user_id)

    async def get_user(self, access_token: str) -> AuthUser | None:
        return self.tokens.get(access_token)

    async def create_user(self, email, password, user_metadata) -> AuthUser:
        if self.create_error is not None:
            raise self.create_error
        self._counter += 1
        user_id = self.next_ids.pop(0) if self.next_ids else f"user-{self._counter}"
        account = AuthUser(id=user_id, email=email, user_metadata=user_metadata)
        self.accounts[user_id] = account
        self.created.append({"email": email, "password": password, "user_metadata": user_metadata})
        return account

    async def delete_user(self, user_id: str) -> None:
        if self.delete_errors:
            raise self.delete_errors.pop(0)
        if user_id not in self.accounts:
            raise AuthProviderError("User not found", 404)
        del self.accounts[user_id]
        self.deleted.append(user_id)


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def auth_provider():
    return FakeAuthProvider()


@pytest_asyncio.fixture
async def client(session_factory, auth_provider, monkeypatch):
    monkeypatch.setattr(config, "CHAT_REPLY_DELAY", 0)
    monkeypatch.setattr(config, "COUNSELOR_BACKEND", "keyword")

    async def _get_db():
        async with session_factory() as session:
            yield session

    # The mounted functions app resolves its dependencies on its own
    for target in (app, functions_app):
        target.dependency_overrides[get_db] = _get_db
        target.dependency_overrides[get_auth_provider] = lambda: auth_provider
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    for target in (app, functions_app):
        target.dependency_overrides.clear()


@pytest_asyncio.fixture
async def admin_headers(db_session, auth_provider):
    db_session.add(
        UserProfile(id="admin-1", nik_nis="ADM001", display_id="ADMIN001", name="Admin", role="admin")
    )
    await db_session.commit()
    auth_provider.add_token("admin-token", "admin-1")
    return {"Authorization": "Bearer admin-token"}
