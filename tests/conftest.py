"""
Test infrastructure for the Product Catalog API.

Strategy
--------
- SQLite in-memory via aiosqlite, so no database server is needed.
- StaticPool forces every session onto the same connection, which is
  required because an in-memory SQLite database is connection-scoped.
- The app's get_db dependency is overridden so every request uses the test
  session factory rather than the production one.
- All tables are created before each test and dropped after, giving each
  test a clean store.
- The HTTP clients go through the real middleware stack, so
  authentication is exercised on every request.
"""
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from catalog.database import Base, get_db
from catalog.main import app
from catalog.middleware import install_query_counter

USER_AUTH = ("user", "password")
ADMIN_AUTH = ("admin", "adminpass")

# ---------------------------------------------------------------------------
# Test database engine: SQLite in-memory with aiosqlite
# ---------------------------------------------------------------------------

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine_test = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

install_query_counter(engine_test)

async_session_test = async_sessionmaker(
    engine_test,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ---------------------------------------------------------------------------
# Dependency override
# ---------------------------------------------------------------------------

async def override_get_db():
    async with async_session_test() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


app.dependency_overrides[get_db] = override_get_db


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """Create all tables before each test, drop after to guarantee isolation."""
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def db_session() -> AsyncSession:
    """A live session for tests that call the service layer directly."""
    async with async_session_test() as session:
        yield session


@pytest_asyncio.fixture
async def anon_client() -> AsyncClient:
    """Client without credentials."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def async_client() -> AsyncClient:
    """Client authenticated as the plain ``user`` principal."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", auth=USER_AUTH) as client:
        yield client


@pytest_asyncio.fixture
async def admin_client() -> AsyncClient:
    """Client authenticated as the ``admin`` principal."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", auth=ADMIN_AUTH) as client:
        yield client


@pytest_asyncio.fixture
async def session_factory() -> async_sessionmaker[AsyncSession]:
    """The test session factory, for code that manages its own transactions."""
    return async_session_test


@pytest_asyncio.fixture
async def test_engine():
    """The in-memory test engine behind ``session_factory``."""
    return engine_test
