"""
Database initialization script
Waits for the database, creates tables and optionally seeds demo records
"""
import logging
import time
from datetime import timedelta

from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from app.database import SessionLocal, engine, settings, get_utc_datetime
from app.models import Base
from app.services import assets

logger = logging.getLogger(__name__)


def wait_for_database(retries: int = None, delay: float = None):
    """Try to connect, backing off linearly between attempts"""
    retries = settings.db_connect_retries if retries is None else retries
    retries = max(retries, 1)  # always try at least once
    delay = settings.db_connect_delay_seconds if delay is None else delay

    for attempt in range(1, retries + 1):
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.info(f"Database reachable: {engine.url.render_as_string(hide_password=True)}")
            return
        except OperationalError as e:
            logger.error(f"Attempt {attempt}/{retries} - cannot connect to database: {str(e)}")
            if attempt >= retries:
                raise
            time.sleep(delay * attempt)


def seed_demo_data(db):
    """Insert demo users, zones, sensors, devices and readings"""
    admin = assets.create_user(db, {"name": "Admin", "email": "admin@example.com", "password": "secret", "role": "admin"})
    tech = assets.create_user(db, {"name": "Tech", "email": "tech@example.com", "password": "secret", "role": "technician"})
    assets.create_user(db, {"name": "Viewer", "email": "viewer@example.com", "password": "secret", "role": "viewer"})

    zone_a = assets.create_zone(db, {"name": "Zona A", "description": "Primer sector", "is_active": True})
    zone_b = assets.create_zone(db, {"name": "Zona B", "description": "Segundo sector", "is_active": True})

    temperature = assets.create_sensor(db, {"type": "temperature", "unit": "°C", "model": "T1000", "location": "Sala 1", "is_active": True})
    humidity = assets.create_sensor(db, {"type": "humidity", "unit": "%", "model": "H2000", "location": "Sala 2", "is_active": True})
    co2 = assets.create_sensor(db, {"type": "co2", "unit": "ppm", "model": "C3000", "location": "Sala 3", "is_active": True})

    now = get_utc_datetime()
    assets.create_device(db, {
        "serial_number": "DEV-0001",
        "model": "D-X",
        "status": "active",
        "installed_at": now,
        "owner_id": tech.id,
        "zone_id": zone_a.id,
        "sensors": [temperature.id, humidity.id],
    })
    assets.create_device(db, {
        "serial_number": "DEV-0002",
        "model": "D-Y",
        "status": "maintenance",
        "installed_at": now,
        "owner_id": admin.id,
        "zone_id": zone_b.id,
        "sensors": [co2.id],
    })

    assets.create_reading(db, {"sensor_id": temperature.id, "time": now - timedelta(minutes=10), "value": 22.5})
    assets.create_reading(db, {"sensor_id": temperature.id, "time": now - timedelta(minutes=5), "value": 22.8})
    assets.create_reading(db, {"sensor_id": humidity.id, "time": now, "value": 45.2})
    assets.create_reading(db, {"sensor_id": co2.id, "time": now, "value": 600})


def init_database(seed: bool = None):
    """Initialize database, seeding demo data only into an empty database"""
    seed = settings.seed_demo_data if seed is None else seed

    wait_for_database()
    Base.metadata.create_all(bind=engine)

    if not seed:
        return

    db = SessionLocal()
    try:
        if assets.users(db).count() > 0:
            logger.info("Database already initialized")
            return
        seed_demo_data(db)
        logger.info(f"Demo data seeded: {assets.collection_counts(db)}")
    except Exception as e:
        db.rollback()
        logger.error(f"Error initializing database: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=settings.log_level.upper())
    init_database(seed=True)
