"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Callable
from pathlib import Path
from typing import Any

# Disable rate limiting and enable locally-minted tokens in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["AUTH_DEV_SECRET"] = "test-secret"
os.environ["APP_ENV"] = "test"

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.exceptions import ProfileGenerationError
from domain.entities.profile import GeneratedProfile, ProfileDraft
from domain.entities.settings import ProfileStyle
from infrastructure.auth.firebase_provider import FirebaseAuthProvider
from infrastructure.auth.provider import TokenUser
from infrastructure.database.models import Base
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


# Compile JSONB as JSON for SQLite (used in tests)
@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(type_: Any, compiler: Any, **kw: Any) -> str:
    return "JSON"


# Test database URL (SQLite in memory, one shared connection)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_SECRET = "test-secret"


class FakeProfileGenerator:
    """Stands in for the language model; records every draft it sees."""

    def __init__(self) -> None:
        self.result = GeneratedProfile(
            about_text="I am a licensed electrician with twelve years of experience.",
            summary="Licensed electrician in Tel Aviv",
            skills=["Wiring", "Lighting", "Panel upgrades", "Smart home"],
        )
        self.error: Exception | None = None
        self.calls: list[tuple[ProfileDraft, ProfileStyle]] = []

    async def generate(self, draft: ProfileDraft, style: ProfileStyle) -> GeneratedProfile:
        self.calls.append((draft, style))
        if self.error is not None:
            raise self.error
        return self.result

    def fail_with(self, reason: str = "No response from AI") -> None:
        self.error = ProfileGenerationError(reason)


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for repository tests."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def uow_factory(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[], SQLAlchemyUnitOfWork]:
    """UoW factory bound to the test database."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    return factory


@pytest.fixture
def test_user() -> TokenUser:
    """The caller used by most API tests."""
    return TokenUser(
        id="firebase-uid-sara",
        email="sara@example.com",
        display_name="Sara Cohen",
        avatar_url="https://example.com/sara.png",
    )


@pytest.fixture
def other_user() -> TokenUser:
    """A second caller, for ownership checks."""
    return TokenUser(id="firebase-uid-marcus", email="marcus@example.com", display_name="Marcus Johnson")


@pytest.fixture
def auth_provider() -> FirebaseAuthProvider:
    """Auth provider accepting HS256 tokens signed with the test secret."""
    return FirebaseAuthProvider(
        project_id="",
        secret_key=TEST_SECRET,
        algorithm="HS256",
        expire_minutes=30,
    )


def bearer(provider: FirebaseAuthProvider, user: TokenUser) -> dict[str, str]:
    """Authorization headers carrying a token for ``user``."""
    return {"Authorization": f"Bearer {provider.create_token(user)}"}


@pytest.fixture
def auth_headers(auth_provider: FirebaseAuthProvider, test_user: TokenUser) -> dict[str, str]:
    """Create authorization headers for the test user."""
    return bearer(auth_provider, test_user)


@pytest.fixture
def other_auth_headers(
    auth_provider: FirebaseAuthProvider, other_user: TokenUser
) -> dict[str, str]:
    """Create authorization headers for the second user."""
    return bearer(auth_provider, other_user)


@pytest.fixture
def fake_generator() -> FakeProfileGenerator:
    return FakeProfileGenerator()


@pytest.fixture
def app(
    session_factory: async_sessionmaker[AsyncSession],
    uow_factory: Callable[[], SQLAlchemyUnitOfWork],
    auth_provider: FirebaseAuthProvider,
    fake_generator: FakeProfileGenerator,
) -> FastAPI:
    """
    Application wired to the test database, auth provider and generator.

    Tokens are verified for real by the provider; only the process-wide
    singletons are swapped out.
    """
    from api.dependencies.auth import get_auth_provider
    from api.dependencies.services import get_profile_service, get_settings_service
    from domain.services.profile_service import ProfileService
    from domain.services.settings_service import SettingsService
    from infrastructure.database.session import get_async_session
    from main import create_app

    app = create_app()

    async def override_get_async_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_profile_service] = lambda: ProfileService(
        uow_factory,
        generator=fake_generator,
        settings_service=SettingsService(uow_factory),
    )
    app.dependency_overrides[get_settings_service] = lambda: SettingsService(uow_factory)
    app.dependency_overrides[get_async_session] = override_get_async_session
    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client (no auth headers by default)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def profile_payload() -> dict[str, Any]:
    """A valid create body in wire format."""
    return {
        "firstName": "Sara",
        "lastName": "Cohen",
        "role": "Electrician",
        "businessName": "Cohen Electric",
        "workArea": "Tel Aviv",
        "skills": ["Wiring", "Lighting"],
        "backgroundText": "Twelve years in residential work",
    }


@pytest.fixture
def bearer_for(auth_provider: FirebaseAuthProvider) -> Callable[[TokenUser], dict[str, str]]:
    """Build authorization headers for any user."""
    return lambda user: bearer(auth_provider, user)
