"""Pytest configuration and fixtures."""

import os
from datetime import UTC, datetime

import pytest
from fastapi.testclient import TestClient

from ledger.config import Settings
from ledger.database import Base, create_db_engine, create_session_factory, get_db
from ledger.main import create_app
from ledger.models import Product, Role, Transaction, User


class AuthHeaders(dict):
    """Dict subclass that also stores the signed in user's id and email."""

    def __init__(self, *args, user_id: str | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/ledger", "/ledger_test")
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = create_db_engine(SQLALCHEMY_DATABASE_URL)
TestingSessionLocal = create_session_factory(engine)

# Cheap Argon2 parameters keep the suite fast
TEST_SETTINGS = Settings(
    database_url=SQLALCHEMY_DATABASE_URL,
    environment="test",
    jwt_secret="test-secret",
    argon_time_cost=2,
    argon_memory_cost=1024,
    log_disabled=True,
)

PRODUCT_IDS = {
    "Appel": "7f28c5f9-d711-4cd6-ac15-d13d71abff84",
    "Asperge": "7f28c5f9-d711-4cd6-ac15-d13d71abff83",
    "Tomaat": "7f28c5f9-d711-4cd6-ac15-d13d71abff85",
}


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        # For PostgreSQL, create the test database
        from sqlalchemy_utils import create_database, database_exists

        # Create test database if it doesn't exist
        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield
    # Don't drop database - just leave it for next run (each test cleans up after itself)


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="session")
def settings():
    return TEST_SETTINGS


@pytest.fixture(scope="session")
def app(settings):
    return create_app(settings)


@pytest.fixture
def credentials(app):
    return app.state.context.credentials


@pytest.fixture
def logger(app):
    return app.state.context.child_logger("tests")


@pytest.fixture(scope="function")
def client(app, db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def register(client, name: str, email: str, password: str = "testpass123") -> AuthHeaders:
    """Register a user through the API and return its auth headers."""
    response = client.post(
        "/api/users/register",
        json={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 201
    data = response.json()

    return AuthHeaders(
        {"Authorization": f"Bearer {data['token']}"},
        user_id=data["user"]["id"],
        email=email,
    )


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return register(client, "Test User", "test@example.com")


@pytest.fixture
def admin_headers(db, credentials):
    """Create an admin directly in the database and sign it in."""
    admin = User(
        id="7f28c5f9-d711-4cd6-ac15-d13d71abff70",
        name="Admin User",
        email="admin@example.com",
        password_hash=credentials.hash_password("adminpass123"),
        role=Role.ADMIN.value,
    )
    db.add(admin)
    db.commit()

    token = credentials.issue_session(admin.id, Role.ADMIN)
    return AuthHeaders(
        {"Authorization": f"Bearer {token}"},
        user_id="7f28c5f9-d711-4cd6-ac15-d13d71abff70",
        email="admin@example.com",
    )


@pytest.fixture
def products(db):
    """Seed the three catalog products."""
    db.add_all(
        [
            Product(id=PRODUCT_IDS["Asperge"], name="Asperge", price=5),
            Product(id=PRODUCT_IDS["Appel"], name="Appel", price=3),
            Product(id=PRODUCT_IDS["Tomaat"], name="Tomaat", price=4),
        ]
    )
    db.commit()
    return PRODUCT_IDS


@pytest.fixture
def ledger_user(db):
    """A user owning transactions, inserted directly."""
    user = User(
        id="7f28c5f9-d711-4cd6-ac15-d13d71abff80",
        name="Test User",
        email="ledger@example.com",
        password_hash="not-a-real-hash",
        role=Role.USER.value,
    )
    db.add(user)
    db.commit()
    return "7f28c5f9-d711-4cd6-ac15-d13d71abff80"


@pytest.fixture
def transactions(db, products, ledger_user):
    """Three transactions on Appel, inserted out of date order."""
    rows = [
        ("7f28c5f9-d711-4cd6-ac15-d13d71abff86", 3500, datetime(2021, 5, 25, 19, 40, tzinfo=UTC)),
        ("7f28c5f9-d711-4cd6-ac15-d13d71abff87", -220, datetime(2021, 5, 8, 20, 0, tzinfo=UTC)),
        ("7f28c5f9-d711-4cd6-ac15-d13d71abff88", -74, datetime(2021, 5, 21, 14, 30, tzinfo=UTC)),
    ]
    db.add_all(
        [
            Transaction(
                id=transaction_id,
                amount=amount,
                date=date,
                user_id=ledger_user,
                product_id=products["Appel"],
            )
            for transaction_id, amount, date in rows
        ]
    )
    db.commit()
    return [transaction_id for transaction_id, _, _ in rows]
