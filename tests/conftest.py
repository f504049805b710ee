# tests/conftest.py
"""
Shared fixtures: an in-memory SQLite database per test, a temporary file
store, a TestClient wired to both, and small factories for users, vehicles
and bearer tokens.
"""

import sys
import os
import tempfile
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# Point settings at throwaway locations BEFORE any fleet import
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["LOG_DIR"] = tempfile.mkdtemp(prefix="fleet_logs_")
os.environ["STORAGE_ROOT"] = tempfile.mkdtemp(prefix="fleet_storage_")

import itertools
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from fleet.database import Base, create_tables, get_db
from fleet.main import app
from fleet.models.user import User
from fleet.models.vehicle import Vehicle
from fleet.services import auth_service
from fleet.services.file_storage import FileStorage, get_storage


_seq = itertools.count(1)


@pytest.fixture
def engine():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    create_tables(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def storage(tmp_path):
    return FileStorage(str(tmp_path / "storage"))


@pytest.fixture
def client(session_factory, storage):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()


# ── Factories ────────────────────────────────────────────────────────────────
@pytest.fixture
def make_user(db):
    def _make(role="chauffeur", name=None, email=None, password="password123", vehicle=None):
        n = next(_seq)
        now = datetime.utcnow()
        user = User(
            name=name or f"User {n}",
            email=email or f"user{n}@example.com",
            password=auth_service.hash_password(password),
            role=role,
            vehicle_id=vehicle.id if vehicle else None,
            created_at=now,
            updated_at=now,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make


@pytest.fixture
def make_vehicle(db):
    def _make(registration_number=None, model="Renault Clio", year=2020, status="active"):
        now = datetime.utcnow()
        vehicle = Vehicle(
            registration_number=registration_number or f"REG-{next(_seq)}",
            model=model,
            year=year,
            status=status,
            archived_at=now if status == "archived" else None,
            created_at=now,
            updated_at=now,
        )
        db.add(vehicle)
        db.commit()
        db.refresh(vehicle)
        return vehicle
    return _make


@pytest.fixture
def headers_for(db):
    def _headers(user):
        token = auth_service.issue_token(db, user)
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def admin(make_user):
    return make_user(role="admin", name="Alice Admin")


@pytest.fixture
def admin_headers(admin, headers_for):
    return headers_for(admin)
