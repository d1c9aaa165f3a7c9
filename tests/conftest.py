"""Shared test configuration and fixtures.

Each test runs against its own in-memory SQLite database (aiosqlite) and a
session wrapped in a transaction that rolls back after the test. Settings
are pointed at throwaway values before ``kasupe`` is imported.
"""

import os
import tempfile
import uuid
from collections.abc import AsyncGenerator

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-kasupe-backend-0123456789")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="kasupe-uploads-"))
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import kasupe.models  # noqa: E402,F401
from kasupe.auth.jwt import create_token_pair  # noqa: E402
from kasupe.auth.passwords import hash_password  # noqa: E402
from kasupe.database import Base, get_db  # noqa: E402
from kasupe.main import app  # noqa: E402
from kasupe.models.car import Car  # noqa: E402
from kasupe.models.user import ADMIN_ROLE, CUSTOMER_ROLE, AdminUser, Customer  # noqa: E402

ADMIN_PASSWORD = "admin-pass-123"
CUSTOMER_PASSWORD = "customer-pass-123"


# ---------------------------------------------------------------------------
# Per-test database
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh in-memory database with every table."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Yield an async session wrapped in a transaction that always rolls back."""
    async with test_engine.connect() as connection:
        transaction = await connection.begin()
        session = AsyncSession(bind=connection, expire_on_commit=False)

        try:
            yield session
        finally:
            await session.close()
            await transaction.rollback()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient wired to use the test DB session."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Convenience fixtures: accounts
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def test_admin(db_session: AsyncSession) -> AdminUser:
    """Create and return an admin directly in the DB."""
    unique = uuid.uuid4().hex[:8]
    admin = AdminUser(
        email=f"admin-{unique}@kasupe.co.zm",
        name="Test Admin",
        hashed_password=hash_password(ADMIN_PASSWORD),
        role=ADMIN_ROLE,
    )
    db_session.add(admin)
    await db_session.flush()
    await db_session.refresh(admin)
    return admin


@pytest_asyncio.fixture
async def admin_headers(test_admin: AdminUser) -> dict[str, str]:
    tokens = create_token_pair(str(test_admin.id), test_admin.email, test_admin.role)
    return {"Authorization": f"Bearer {tokens['access_token']}"}


@pytest_asyncio.fixture
async def test_customer(db_session: AsyncSession) -> Customer:
    """Create and return an active customer directly in the DB."""
    unique = uuid.uuid4().hex[:8]
    customer = Customer(
        full_name="Mwila Banda",
        email=f"mwila-{unique}@example.com",
        phone="+260977000000",
        hashed_password=hash_password(CUSTOMER_PASSWORD),
        role=CUSTOMER_ROLE,
        is_active=True,
    )
    db_session.add(customer)
    await db_session.flush()
    await db_session.refresh(customer)
    return customer


@pytest_asyncio.fixture
async def customer_headers(test_customer: Customer) -> dict[str, str]:
    tokens = create_token_pair(str(test_customer.id), test_customer.email, test_customer.role)
    return {"Authorization": f"Bearer {tokens['access_token']}"}


# ---------------------------------------------------------------------------
# Convenience fixtures: fleet
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def test_car(db_session: AsyncSession) -> Car:
    """Create and return an available car directly in the DB."""
    car = Car(
        brand="Toyota",
        model="Corolla",
        year=2019,
        category="Sedan",
        transmission="Automatic",
        fuel_type="Petrol",
        seating_capacity=5,
        location="Lusaka",
        price_per_day=650.0,
        image="cars/corolla.jpg",
        is_available=True,
    )
    db_session.add(car)
    await db_session.flush()
    await db_session.refresh(car)
    return car
