import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Keep tests away from any developer .env database and secrets
os.environ["ENVIRONMENT"] = "local"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret"

from libs.common.config import get_settings  # noqa: E402

get_settings.cache_clear()

from libs.auth.dependencies import get_current_user  # noqa: E402
from libs.auth.models import AuthUser, UserRole  # noqa: E402
from libs.db.base import Base  # noqa: E402
from libs.db.session import get_async_db  # noqa: E402
from services.gateway_service.app.main import app  # noqa: E402

# Import all models so metadata includes every collection
from libs.auth import users as _users  # noqa: F401,E402
from services.attendance_service import models as _attendance_models  # noqa: F401,E402
from services.classes_service import models as _class_models  # noqa: F401,E402
from services.members_service import models as _member_models  # noqa: F401,E402
from services.packages_service import models as _package_models  # noqa: F401,E402
from services.payments_service import models as _payment_models  # noqa: F401,E402
from services.trainers_service import models as _trainer_models  # noqa: F401,E402

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture
async def test_engine():
    """A fresh in-memory store per test; StaticPool keeps one shared connection."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    session_factory = async_sessionmaker(
        bind=test_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )
    async with session_factory() as session:
        yield session


@pytest.fixture
def admin_user() -> AuthUser:
    return AuthUser(user_id="admin-user", email="admin@example.com", role=UserRole.ADMIN)


@pytest.fixture
def trainer_user() -> AuthUser:
    return AuthUser(
        user_id="trainer-user", email="trainer@example.com", role=UserRole.TRAINER
    )


def _client_for(db_session: AsyncSession, user: AuthUser) -> AsyncClient:
    app.dependency_overrides[get_async_db] = lambda: db_session
    app.dependency_overrides[get_current_user] = lambda: user
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest_asyncio.fixture
async def client(db_session, admin_user) -> AsyncGenerator[AsyncClient, None]:
    """API client authenticated as an admin, with the DB dependency overridden."""
    async with _client_for(db_session, admin_user) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def trainer_client(db_session, trainer_user) -> AsyncGenerator[AsyncClient, None]:
    """API client authenticated as a trainer."""
    async with _client_for(db_session, trainer_user) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def token_client(db_session) -> AsyncGenerator[AsyncClient, None]:
    """API client that goes through real bearer-token auth against the test store."""
    app.dependency_overrides[get_async_db] = lambda: db_session
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac
    app.dependency_overrides.clear()
