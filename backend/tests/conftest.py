"""
Pytest configuration and fixtures for SiteHub tests.
"""
import uuid
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.database import get_db
from app.models.base import Base
from app.models.site import DeliveryType, Site

# Use SQLite for testing (in-memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create a test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture(scope="function")
async def db_session_with_data(db_session: AsyncSession, site_id: uuid.UUID) -> AsyncSession:
    """Database session with a configured site pre-loaded."""
    site = Site(
        id=site_id,
        base_url="https://www.example.com",
        name="Example",
        delivery_type=DeliveryType.AEM_EDGE,
        is_live=True,
        config={
            "slack": {"channel": "C123", "workspace": "external"},
            "handlers": {"404": {"mentions": {"slack": ["U1"]}}},
            "imports": [
                {
                    "type": "organic-traffic",
                    "destinations": ["default"],
                    "sources": ["ahrefs"],
                    "enabled": True,
                },
            ],
        },
    )
    db_session.add(site)
    await db_session.commit()

    return db_session


# ============================================================================
# FastAPI App Fixtures
# ============================================================================

@pytest.fixture(scope="function")
def app(db_session: AsyncSession) -> FastAPI:
    """Create test FastAPI application."""
    from app.main import app as main_app

    async def override_get_db():
        yield db_session

    main_app.dependency_overrides[get_db] = override_get_db

    yield main_app

    main_app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ============================================================================
# Sample Data Fixtures
# ============================================================================

@pytest.fixture
def full_config() -> dict:
    """Configuration document exercising every known facet."""
    return {
        "slack": {
            "channel": "test-channel",
            "workspace": "test-workspace",
            "invitedUserCount": 5,
        },
        "handlers": {
            "404": {
                "mentions": {"slack": ["user1", "user2"]},
                "excludedURLs": ["https://example.com/excluded"],
                "manualOverwrites": [{"brokenTargetURL": "old", "targetURL": "new"}],
                "fixedURLs": [{"brokenTargetURL": "broken", "targetURL": "fixed"}],
                "includedURLs": ["https://example.com/included"],
                "groupedURLs": [{"name": "group1", "pattern": "/pattern/"}],
                "latestMetrics": {
                    "pageViewsChange": 10,
                    "ctrChange": 5,
                    "projectedTrafficValue": 1000,
                },
            },
        },
        "imports": [
            {
                "type": "organic-keywords",
                "destinations": ["default"],
                "sources": ["ahrefs"],
                "pageUrl": "https://example.com",
                "enabled": False,
                "geo": "us",
                "limit": 5,
            },
            {
                "type": "organic-traffic",
                "destinations": ["default"],
                "sources": ["ahrefs", "google"],
                "enabled": True,
            },
            {
                "type": "all-traffic",
                "destinations": ["default"],
                "sources": ["rum"],
                "enabled": True,
            },
            {
                "type": "top-pages",
                "destinations": ["default"],
                "sources": ["ahrefs"],
                "enabled": True,
                "geo": "us",
                "limit": 100,
            },
        ],
        "fetchConfig": {
            "headers": {"User-Agent": "test-agent"},
            "overrideBaseURL": "https://example.com",
        },
        "brandConfig": {"brandId": "test-brand"},
    }


@pytest.fixture
def organic_keywords_import() -> dict:
    """An enabled organic-keywords import job."""
    return {
        "type": "organic-keywords",
        "destinations": ["default"],
        "sources": ["ahrefs"],
        "enabled": True,
    }


@pytest.fixture
def site_id() -> uuid.UUID:
    """Default test site ID."""
    return uuid.UUID("00000000-0000-0000-0000-000000000003")
