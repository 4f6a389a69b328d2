"""Pytest fixtures for the art gallery tests."""

import os
import tempfile

# Settings are read at import time, so the environment is fixed before any app import
_DB_DIR = tempfile.mkdtemp(prefix="art-gallery-tests-")
_DB_PATH = os.path.join(_DB_DIR, "test.db")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_PATH}"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["MOCK_MODE"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from main import app  # noqa: E402
from services.catalog_service.fixtures import CANNED_ARTISTS, CANNED_ARTWORKS  # noqa: E402
from services.catalog_service.models import Artist, Artwork  # noqa: E402
from shared.config.database import Base  # noqa: E402
from shared.security import ROLE_ADMIN, ROLE_USER, create_access_token  # noqa: E402

sync_engine = create_engine(f"sqlite:///{_DB_PATH}")


def auth_headers(user_id: str, role: str = ROLE_USER) -> dict:
    token = create_access_token(user_id, role)
    return {"Authorization": f"Bearer {token}"}


def shipping_address(**overrides) -> dict:
    address = {
        "name": "Ada Lovelace",
        "street": "12 St James's Square",
        "city": "London",
        "state": "Greater London",
        "zipCode": "SW1Y 4JH",
        "country": "UK",
    }
    address.update(overrides)
    return address


def order_payload(*items, **overrides) -> dict:
    """`items` are (artwork_id, quantity) pairs."""
    payload = {
        "items": [{"artwork": artwork, "quantity": quantity} for artwork, quantity in items],
        "shippingAddress": shipping_address(),
    }
    payload.update(overrides)
    return payload


@pytest.fixture(autouse=True)
def reset_db():
    """Every test starts from empty tables."""
    Base.metadata.drop_all(sync_engine)
    Base.metadata.create_all(sync_engine)
    yield


@pytest.fixture
def catalog():
    """Insert the canned artists and artworks with their fixture ids."""
    with Session(sync_engine) as session:
        session.add_all(Artist(**artist) for artist in CANNED_ARTISTS)
        session.flush()
        session.add_all(Artwork(**artwork) for artwork in CANNED_ARTWORKS)
        session.commit()


@pytest.fixture
def db_session():
    with Session(sync_engine) as session:
        yield session


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def user_headers():
    return auth_headers("user-1")


@pytest.fixture
def other_user_headers():
    return auth_headers("user-2")


@pytest.fixture
def admin_headers():
    return auth_headers("admin-1", ROLE_ADMIN)
