"""
Tests for the HTTP endpoints and the error-to-status mapping.
"""

import uuid

from app.database import settings
from app.services.errors import StorageError
from app.services.store import EntityStore


def _create(client, path, payload):
    response = client.post(path, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestHealthEndpoints:
    """Tests for /healthz and /api/v1/health."""

    def test_healthz(self, client):
        response = client.get("/healthz")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_api_health(self, client):
        assert client.get("/api/v1/health").json() == {"status": "ok", "api_version": "v1"}

    def test_debug_collections(self, client):
        _create(client, "/api/v1/zones/", {"name": "Zona A"})

        counts = client.get("/api/v1/debug/collections").json()
        assert counts == {"users": 0, "zones": 1, "sensors": 0, "devices": 0, "readings": 0}

    def test_debug_collections_hidden_without_debug(self, client, monkeypatch):
        monkeypatch.setattr(settings, "debug", False)
        assert client.get("/api/v1/debug/collections").status_code == 404


class TestCrudEndpoints:
    """Tests for list / get / create / patch / delete."""

    def test_user_crud(self, client):
        user = _create(client, "/api/v1/users/", {
            "name": "Tech", "email": "tech@x.com", "password": "secret", "role": "technician",
        })
        assert "password" not in user
        assert "password_hash" not in user

        assert client.get(f"/api/v1/users/{user['id']}").json()["email"] == "tech@x.com"
        assert [u["id"] for u in client.get("/api/v1/users/").json()] == [user["id"]]

        patched = client.patch(f"/api/v1/users/{user['id']}", json={"role": "admin"}).json()
        assert patched["role"] == "admin"
        assert patched["name"] == "Tech"

        assert client.delete(f"/api/v1/users/{user['id']}").json() == {"id": user["id"]}
        assert client.get(f"/api/v1/users/{user['id']}").status_code == 404

    def test_sensor_readings_endpoint(self, client):
        sensor = _create(client, "/api/v1/sensors/", {"type": "co2", "unit": "ppm", "is_active": True})
        _create(client, "/api/v1/readings/", {"sensor_id": sensor["id"], "time": "2025-01-01T10:00:00Z", "value": 410})
        _create(client, "/api/v1/readings/", {"sensor_id": sensor["id"], "time": "2025-01-01T11:00:00Z", "value": 420})

        response = client.get(f"/api/v1/sensors/{sensor['id']}/readings", params={"limit": 1})
        assert response.status_code == 200
        assert [r["value"] for r in response.json()] == [420]

    def test_sensor_readings_unknown_sensor(self, client):
        assert client.get(f"/api/v1/sensors/{uuid.uuid4()}/readings").status_code == 404

    def test_device_with_null_sensors(self, client):
        device = _create(client, "/api/v1/devices/", {"serial_number": "DEV-1", "sensors": None})

        assert device["sensors"] == []
        assert client.get(f"/api/v1/devices/{device['id']}").json()["sensors"] == []

    def test_password_patch_to_null_rejected(self, client):
        user = _create(client, "/api/v1/users/", {"name": "A", "email": "a@x.com", "password": "secret"})

        response = client.patch(f"/api/v1/users/{user['id']}", json={"password": None})
        assert response.status_code == 400
        assert response.json()["field"] == "password"

    def test_reading_patch_value_only(self, client):
        sensor = _create(client, "/api/v1/sensors/", {"type": "noise", "is_active": True})
        reading = _create(client, "/api/v1/readings/", {"sensor_id": sensor["id"], "value": 55})

        patched = client.patch(f"/api/v1/readings/{reading['id']}", json={"value": 60}).json()
        assert patched["value"] == 60
        assert patched["sensor_id"] == sensor["id"]


class TestErrorMapping:
    """Tests for error kinds mapped to HTTP status codes."""

    def test_malformed_id_is_bad_request(self, client):
        response = client.get("/api/v1/zones/not-a-uuid")

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_identifier"

    def test_missing_id_is_not_found(self, client):
        response = client.get(f"/api/v1/devices/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    def test_enum_violation_rejected_by_request_schema(self, client):
        response = client.post("/api/v1/users/", json={"name": "A", "email": "a@x.com", "role": "root"})

        assert response.status_code == 422
        assert response.json()["detail"][0]["loc"] == ["body", "role"]
        assert client.get("/api/v1/users/").json() == []

    def test_blank_required_field_rejected(self, client):
        response = client.post("/api/v1/zones/", json={"name": "   "})
        assert response.status_code == 422

    def test_string_flag_rejected(self, client):
        response = client.post("/api/v1/sensors/", json={"type": "co2", "is_active": "yes"})
        assert response.status_code == 422

    def test_missing_required_field_rejected(self, client):
        assert client.post("/api/v1/devices/", json={"model": "D-X"}).status_code == 422

    def test_null_required_field_on_patch(self, client):
        zone = _create(client, "/api/v1/zones/", {"name": "Zona A"})

        response = client.patch(f"/api/v1/zones/{zone['id']}", json={"name": None})
        assert response.status_code == 400
        assert response.json()["field"] == "name"

    def test_duplicate_email_is_conflict(self, client):
        _create(client, "/api/v1/users/", {"name": "A", "email": "a@x.com"})

        response = client.post("/api/v1/users/", json={"name": "B", "email": "a@x.com"})
        assert response.status_code == 409
        assert response.json()["error"] == "conflict"
        assert len(client.get("/api/v1/users/").json()) == 1

    def test_dangling_owner_is_bad_request(self, client):
        response = client.post("/api/v1/devices/", json={"serial_number": "DEV-1", "owner_id": str(uuid.uuid4())})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "dangling_reference"
        assert body["field"] == "owner_id"
        assert client.get("/api/v1/devices/").json() == []

    def test_inactive_sensor_is_bad_request(self, client):
        sensor = _create(client, "/api/v1/sensors/", {"type": "humidity", "is_active": False})

        response = client.post("/api/v1/readings/", json={"sensor_id": sensor["id"], "value": 40})
        assert response.status_code == 400
        assert response.json()["error"] == "inactive_reference"

    def test_storage_error_hides_internals_in_production(self, client, monkeypatch):
        def broken_list(self, *args, **kwargs):
            raise StorageError("Storage failure while listing zone")

        monkeypatch.setattr(EntityStore, "list", broken_list)
        monkeypatch.setattr(settings, "environment", "production")

        response = client.get("/api/v1/zones/")
        assert response.status_code == 500
        assert response.json() == {"error": "storage_error", "detail": "Internal server error"}

    def test_storage_error_shows_details_in_development(self, client, monkeypatch):
        def broken_list(self, *args, **kwargs):
            raise StorageError("Storage failure while listing zone")

        monkeypatch.setattr(EntityStore, "list", broken_list)

        body = client.get("/api/v1/zones/").json()
        assert body["cause"] == "Storage failure while listing zone"
        assert body["stack"]


class TestEndToEnd:
    """Zone, user, sensor and device lifecycle with guarded deletes."""

    def test_guarded_zone_delete_scenario(self, client):
        zone = _create(client, "/api/v1/zones/", {"name": "Zona A"})
        user = _create(client, "/api/v1/users/", {"name": "Tech", "email": "tech@x.com", "role": "technician"})
        sensor = _create(client, "/api/v1/sensors/", {"type": "temperature", "unit": "C", "is_active": True})

        device = _create(client, "/api/v1/devices/", {
            "serial_number": "DEV-1",
            "owner_id": user["id"],
            "zone_id": zone["id"],
            "sensors": [sensor["id"]],
        })
        assert device["serial_number"] == "DEV-1"
        assert device["owner_id"] == user["id"]
        assert device["zone_id"] == zone["id"]
        assert device["sensors"] == [sensor["id"]]

        blocked = client.delete(f"/api/v1/zones/{zone['id']}")
        assert blocked.status_code == 409
        assert blocked.json()["error"] == "has_dependents"
        assert blocked.json()["count"] == 1

        assert client.delete(f"/api/v1/devices/{device['id']}").status_code == 200
        assert client.delete(f"/api/v1/zones/{zone['id']}").status_code == 200
        assert client.get(f"/api/v1/zones/{zone['id']}").status_code == 404

    def test_patch_device_leaves_other_fields(self, client):
        user = _create(client, "/api/v1/users/", {"name": "Tech", "email": "tech@x.com"})
        device = _create(client, "/api/v1/devices/", {
            "serial_number": "DEV-1", "model": "D-X", "status": "active", "owner_id": user["id"],
        })

        patched = client.patch(f"/api/v1/devices/{device['id']}", json={"status": "offline"}).json()

        assert patched["status"] == "offline"
        for key in ("serial_number", "model", "owner_id", "zone_id", "sensors"):
            assert patched[key] == device[key]
