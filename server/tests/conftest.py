"""
Shared pytest fixtures for the account server tests.

- In-memory SQLite engine/session with the users table created
- A CredentialManager with a low bcrypt cost so tests stay fast
- A FastAPI TestClient wired to those through dependency overrides
"""

import os
import sys

import pytest

# Add server directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from core.accounts import AccountService  # noqa: E402
from core.security import CredentialManager  # noqa: E402
from core.store import UserStore  # noqa: E402
from models import Base  # noqa: E402

TEST_SECRET = "unit-test-secret"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def credentials():
    return CredentialManager(TEST_SECRET, rounds=4)


@pytest.fixture
def store(db):
    return UserStore(db)


@pytest.fixture
def service(store, credentials):
    return AccountService(store, credentials)


@pytest.fixture
def client(db, credentials, tmp_path):
    from api.users import get_credentials, get_images_dir
    from database import get_db
    from main import app

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_credentials] = lambda: credentials
    app.dependency_overrides[get_images_dir] = lambda: tmp_path

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def ana(service):
    """Registers the reference user and returns the AuthResult."""
    return service.register("Ana", "ana@x.com", "123", "secret1", "secret1")
