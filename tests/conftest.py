"""
Shared test fixtures for all tests.
Provides an in-memory database, the test client and seed data.
"""

import os

# Settings are read at import time
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-drivelog")
os.environ.setdefault("COOKIE_SECURE", "false")

from collections.abc import AsyncGenerator  # noqa: E402

import httpx  # noqa: E402
import pytest_asyncio  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from db_models import Company, User, UserProfile, Vehicle  # noqa: E402
from db_models.base_uuid_model import Base  # noqa: E402
from db_models.enums import RoleEnum  # noqa: E402
from drivelog_api.api.deps import get_storage  # noqa: E402
from drivelog_api.app import app  # noqa: E402
from drivelog_api.db.session import get_db  # noqa: E402
from tests.factories import (  # noqa: E402
    CompanyFactory,
    UserFactory,
    UserProfileFactory,
    VehicleFactory,
)
from tests.test_drivelog_api.utils import FakeStorage  # noqa: E402

TEST_DB_URI = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    Create a fresh in-memory database for each test.
    """
    engine = create_async_engine(
        TEST_DB_URI,
        echo=False,  # Set to True for SQL debugging
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """
    Session shared by the fixtures and the application under test.
    """
    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    async with async_session() as session:
        yield session


@pytest_asyncio.fixture
async def storage() -> FakeStorage:
    return FakeStorage()


@pytest_asyncio.fixture
async def app_client(
    db_session: AsyncSession, storage: FakeStorage
) -> AsyncGenerator[httpx.AsyncClient, None]:
    """
    Create an async HTTP client with the database session and storage overridden.
    """

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage

    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client

    app.dependency_overrides.clear()


# ============================================================================
# Seed Data Fixtures - Minimal test data
# ============================================================================


@pytest_asyncio.fixture
async def foo_company(db_session: AsyncSession) -> Company:
    return await CompanyFactory.create_async(session=db_session, name="Foo Company")


@pytest_asyncio.fixture
async def foo_user(db_session: AsyncSession) -> User:
    """
    Identity without any profile.
    Password: 'testpassword123'
    """
    return await UserFactory.create_async(
        session=db_session, email="foo-user@example.com", name="Foo User"
    )


@pytest_asyncio.fixture
async def foo_admin(
    db_session: AsyncSession, foo_user: User, foo_company: Company
) -> UserProfile:
    """Admin profile of foo_user in foo_company"""
    return await UserProfileFactory.create_async(
        session=db_session,
        user_id=foo_user.id,
        company_id=foo_company.id,
        role=RoleEnum.admin,
        name=foo_user.name,
        email=foo_user.email,
    )


@pytest_asyncio.fixture
async def foo_vehicle(db_session: AsyncSession, foo_company: Company) -> Vehicle:
    return await VehicleFactory.create_async(
        session=db_session,
        company_id=foo_company.id,
        brand="Volkswagen",
        model="Golf",
        license_plate="B-DL-1001",
        mileage=12000,
    )
