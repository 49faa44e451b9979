"""Pytest fixtures for the API tests."""
import base64
import os
from collections import Counter

# Must be set before the app's settings are first imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_gateway, get_hasher
from app.database import Base, get_db
from app.main import app
from app.models import User
from app.persistence.sqlalchemy_gateway import SqlAlchemyGateway
from app.utils.hashing import SecretHasher

API_PREFIX = "/api"

# Cheapest work factor bcrypt accepts
TEST_HASHER = SecretHasher(rounds=4)


class CountingGateway(SqlAlchemyGateway):
    """SQLAlchemy gateway that records how often each lookup is made."""

    def __init__(self, db: Session, calls: Counter):
        super().__init__(db)
        self.calls = calls

    def find_user_by_email(self, email_address):
        self.calls["find_user_by_email"] += 1
        return super().find_user_by_email(email_address)

    def create_user(self, first_name, last_name, email_address, password_hash):
        self.calls["create_user"] += 1
        return super().create_user(first_name, last_name, email_address, password_hash)


def basic_auth(email: str, password: str) -> dict:
    """Build an Authorization header for HTTP Basic credentials."""
    token = base64.b64encode(f"{email}:{password}".encode("utf-8")).decode("ascii")
    return {"Authorization": f"Basic {token}"}


@pytest.fixture
def api_prefix() -> str:
    return API_PREFIX


@pytest.fixture
def test_db_engine():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(test_db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=test_db_engine)


@pytest.fixture
def db_session(session_factory):
    """A database session for direct assertions against stored rows."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def gateway_calls() -> Counter:
    return Counter()


@pytest.fixture
def test_client(session_factory, gateway_calls) -> TestClient:
    """Create a test client backed by the in-memory database."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    def override_get_gateway(db: Session = Depends(get_db)):
        return CountingGateway(db, gateway_calls)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_gateway] = override_get_gateway
    app.dependency_overrides[get_hasher] = lambda: TEST_HASHER

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def user_data() -> dict:
    return {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "emailAddress": "ada@lovelace.io",
        "password": "analytical-engine",
    }


@pytest.fixture
def registered_user(test_client, api_prefix, user_data) -> dict:
    """Register ``user_data`` through the API and return it."""
    response = test_client.post(f"{api_prefix}/users", json=user_data)
    assert response.status_code == 201
    return user_data


@pytest.fixture
def auth_headers(registered_user) -> dict:
    return basic_auth(registered_user["emailAddress"], registered_user["password"])


@pytest.fixture
def other_user(test_client, api_prefix) -> dict:
    """A second, unrelated account."""
    data = {
        "firstName": "Charles",
        "lastName": "Babbage",
        "emailAddress": "charles@babbage.io",
        "password": "difference-engine",
    }
    response = test_client.post(f"{api_prefix}/users", json=data)
    assert response.status_code == 201
    return data


@pytest.fixture
def other_auth_headers(other_user) -> dict:
    return basic_auth(other_user["emailAddress"], other_user["password"])


@pytest.fixture
def count_users(db_session):
    """Return a callable giving the current number of stored users."""

    def _count() -> int:
        db_session.expire_all()
        return db_session.query(User).count()

    return _count
