"""
Pytest configuration and fixtures for the asset tracking API tests.
"""

import os
import sys
from pathlib import Path

import pytest

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

# Settings are read at import time: point them at an in-memory database first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "development"
os.environ["DEBUG"] = "true"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["DB_CONNECT_DELAY_SECONDS"] = "0"


@pytest.fixture
def db():
    """Fresh schema and a session on it."""
    from app.database import SessionLocal, engine
    from app.models import Base

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db):
    """HTTP client against the application, on the same fresh schema."""
    from fastapi.testclient import TestClient
    from app.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def user(db):
    from app.services import assets
    return assets.create_user(db, {"name": "Tech", "email": "tech@x.com", "role": "technician"})


@pytest.fixture
def zone(db):
    from app.services import assets
    return assets.create_zone(db, {"name": "Zona A", "is_active": True})


@pytest.fixture
def sensor(db):
    from app.services import assets
    return assets.create_sensor(db, {"type": "temperature", "unit": "C", "is_active": True})


@pytest.fixture
def inactive_sensor(db):
    from app.services import assets
    return assets.create_sensor(db, {"type": "humidity", "unit": "%", "is_active": False})


@pytest.fixture
def device(db, user, zone, sensor):
    from app.services import assets
    return assets.create_device(db, {
        "serial_number": "DEV-1",
        "model": "D-X",
        "status": "active",
        "owner_id": user.id,
        "zone_id": zone.id,
        "sensors": [sensor.id],
    })
