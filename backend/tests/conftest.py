"""Shared test fixtures."""

import os

os.environ.setdefault("LEDGER_DATABASE_URL", "sqlite:///:memory:")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient
from datetime import date

from ledger.database import Base, get_db
from ledger.main import app
from ledger.services.ledger_service import LedgerService
from ledger.store import build_sql_store

USER_ID = "user-1"
HORIZON = date(2026, 12, 31)


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test using in-memory SQLite."""
    # Use StaticPool to ensure all connections use the same in-memory database
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    Base.metadata.create_all(bind=engine)

    # Create session
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database override, acting as USER_ID."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app, headers={"X-User-Id": USER_ID}) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def store(db_session):
    """Store scoped to USER_ID."""
    return build_sql_store(db_session, USER_ID)


@pytest.fixture
def ledger(store):
    """Ledger service with a fixed projection horizon."""
    return LedgerService(store, horizon=HORIZON)


@pytest.fixture
def rent_series(ledger):
    """Monthly rent, 12 occurrences from 2024-01-01. Returns the config id."""
    result = ledger.create_recurring_entry(
        name="Rent",
        entry_type="expense",
        amount="1200",
        start_date=date(2024, 1, 1),
        frequency="month",
        interval=12,
        currency_code="USD",
    )
    assert result.success
    return result.id


@pytest.fixture
def sample_group(ledger):
    """Create a sample group."""
    result = ledger.create_group("Home", icon="home")
    return ledger.store.groups.get(result.id)


@pytest.fixture
def sample_tag(ledger):
    """Create a sample tag."""
    result = ledger.create_tag("Rent", color="lime", suggest_id="rent")
    return ledger.store.tags.get(result.id)
