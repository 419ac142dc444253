import os
import tempfile
from datetime import date, timedelta

# Settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["LOG_DIR"] = tempfile.mkdtemp(prefix="turf-logs-")
os.environ.pop("REDIS_URL", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.dependencies import get_db
from app.core.policy import Identity
from app.core.security import hash_password
from app.db.session import Base
from app.main import app
from app.models.enums import Role
from app.services.store import DirectoryStore
from app.utils.slots import hourly_windows

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

PASSWORD = "secret123"


@pytest.fixture()
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def store(db_session):
    return DirectoryStore(db_session)


@pytest.fixture()
def client(db_session):
    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def future_date():
    return date.today() + timedelta(days=7)


# ---------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------
def make_identity(user):
    return Identity(id=user.id, email=user.email, role=Role(user.role))


@pytest.fixture()
def make_player(store):
    def _make(email="player@example.com", full_name="Pat Player"):
        user = store.create_user(email, hash_password(PASSWORD), full_name, Role.PLAYER)
        return make_identity(user)
    return _make


@pytest.fixture()
def make_vendor(store):
    def _make(email="vendor@example.com", business_name="Arena Sports", approved=False):
        user = store.create_user(email, hash_password(PASSWORD), business_name, Role.VENDOR)
        vendor = store.create_vendor(user, business_name)
        if approved:
            store.set_vendor_approval(vendor, True)
        return make_identity(user), vendor
    return _make


@pytest.fixture()
def make_admin(store):
    def _make(email="admin@example.com"):
        user = store.create_user(email, hash_password(PASSWORD), "Ada Admin", Role.ADMIN)
        return make_identity(user)
    return _make


@pytest.fixture()
def make_venue(store):
    def _make(vendor, name="Arena1", price=500.0, city="Indore", game_type="Football",
              windows=None, **extra):
        fields = {
            "name": name,
            "description": f"{name} turf",
            "address": "12 Stadium Road",
            "city": city,
            "game_type": game_type,
            "price_per_hour": price,
            "facilities": ["Parking", "Floodlights"],
            "images": [],
        }
        fields.update(extra)
        return store.create_venue(vendor.id, fields, hourly_windows() if windows is None else windows)
    return _make


@pytest.fixture()
def venue(make_vendor, make_venue):
    _, vendor = make_vendor()
    return make_venue(vendor)
