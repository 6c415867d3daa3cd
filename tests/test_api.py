"""API tests — routers wired to an in-memory ledger via dependency overrides."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from fastapi.testclient import TestClient

from parking_ledger.dependencies import get_ledger, get_price_service, get_storage
from parking_ledger.main import app
from parking_ledger.services.ledger_store import LedgerStore
from parking_ledger.services.price_config_service import PriceConfigService


@pytest.fixture
def client(storage, clock):
    price_service = PriceConfigService(storage, admin_password="1234")
    ledger = LedgerStore(storage, lambda: price_service.current, clock=clock)
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_price_service] = lambda: price_service
    app.dependency_overrides[get_ledger] = lambda: ledger
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestPlatesApi:
    def test_normalize_keystroke(self, client):
        resp = client.post("/api/v1/plates/normalize", json={"previous": "AB", "text": "ABc"})
        assert resp.status_code == 200
        assert resp.json() == {"plate": "ABC-", "is_complete": False, "vehicle_type": None}

    def test_complete_plate_reports_type(self, client):
        resp = client.post("/api/v1/plates/normalize", json={"text": "abc12d"})
        assert resp.json()["vehicle_type"] == "motorcycle"


class TestHourlyApi:
    def test_entry_and_exit(self, client, clock):
        resp = client.post("/api/v1/hourly", json={"plate": "abc123"})
        assert resp.status_code == 201
        assert resp.json()["plate"] == "ABC-123"
        assert resp.json()["type"] == "car"

        assert client.get("/api/v1/hourly/actions", params={"plate": "ABC-123"}).json()["can_bill"] is True

        clock.advance(hours=2, minutes=10)
        resp = client.post("/api/v1/hourly/ABC-123/bill")
        assert resp.status_code == 200
        assert resp.json()["elapsed_hours"] == 3
        assert resp.json()["charge"] == 15000
        assert client.get("/api/v1/revenue").json()["total"] == 15000
        assert client.get("/api/v1/hourly").json() == []

    def test_duplicate_entry_is_400(self, client):
        client.post("/api/v1/hourly", json={"plate": "ABC-123"})
        resp = client.post("/api/v1/hourly", json={"plate": "ABC-123"})
        assert resp.status_code == 400
        assert resp.json()["error"] == "ValidationError"

    def test_bill_unknown_is_404(self, client):
        assert client.post("/api/v1/hourly/ZZZ-999/bill").status_code == 404

    def test_list_filter(self, client):
        client.post("/api/v1/hourly", json={"plate": "ABC-123"})
        client.post("/api/v1/hourly", json={"plate": "XYZ-789"})
        plates = [v["plate"] for v in client.get("/api/v1/hourly", params={"q": "xy"}).json()]
        assert plates == ["XYZ-789"]

    def test_capacity_after_price_edit(self, client):
        resp = client.put("/api/v1/config/prices", json={"password": "1234", "max_cars": "1"})
        assert resp.status_code == 200
        assert resp.json()["max_cars"] == 1

        assert client.post("/api/v1/hourly", json={"plate": "AAA-111"}).status_code == 201
        resp = client.post("/api/v1/hourly", json={"plate": "BBB-222"})
        assert resp.status_code == 409
        assert resp.json()["current_count"] == 1
        assert resp.json()["limit"] == 1
        assert resp.json()["vehicle_type"] == "car"


class TestSubscriptionsApi:
    def test_lifecycle(self, client):
        body = {"plate": "ABC-12D", "holder_name": "ana", "duration": 1, "unit": "months"}
        resp = client.post("/api/v1/subscriptions", json=body)
        assert resp.status_code == 201
        assert resp.json()["amount_due"] == 40000
        assert resp.json()["holder_name"] == "Ana"

        resp = client.put("/api/v1/subscriptions/ABC-12D/renew",
                          json={"duration": 2, "unit": "weeks", "paid": False})
        assert resp.status_code == 200
        assert resp.json()["amount_due"] == 40000 + 2 * 10000
        assert resp.json()["duration"] == 3

        occupancy = {row["vehicle_type"]: row for row in client.get("/api/v1/occupancy").json()}
        assert occupancy["motorcycle"]["current_count"] == 1

        resp = client.delete("/api/v1/subscriptions/ABC-12D")
        assert resp.status_code == 200
        assert client.get("/api/v1/revenue").json()["total"] == 60000
        assert client.get("/api/v1/subscriptions").json() == []

    def test_long_name_and_formatted_id_are_normalized(self, client):
        body = {"plate": "ABC-123", "holder_name": "maria Fernanda Gutierrez",
                "national_id": "102-030-4050", "duration": 1}
        resp = client.post("/api/v1/subscriptions", json=body)
        assert resp.status_code == 201
        assert resp.json()["holder_name"] == "Maria Fernanda Gutie"
        assert resp.json()["national_id"] == "1020304050"

    def test_zero_duration_rejected(self, client):
        body = {"plate": "ABC-123", "holder_name": "Ana", "duration": 0}
        assert client.post("/api/v1/subscriptions", json=body).status_code == 422

    def test_actions(self, client):
        params = {"plate": "abc123", "holder_name": "Ana", "duration": 1}
        assert client.get("/api/v1/subscriptions/actions", params=params).json() == {
            "plate": "ABC-123", "can_register": True, "can_remove": False, "can_renew": False,
        }

    def test_remove_unknown_is_404(self, client):
        assert client.delete("/api/v1/subscriptions/ABC-123").status_code == 404


class TestConfigApi:
    def test_wrong_password_is_401(self, client):
        resp = client.put("/api/v1/config/prices", json={"password": "9999", "max_cars": 5})
        assert resp.status_code == 401
        assert client.get("/api/v1/config/prices").json()["max_cars"] == 30

    def test_invalid_value_is_400(self, client):
        resp = client.put("/api/v1/config/prices", json={"password": "1234", "hourly_car_rate": "abc"})
        assert resp.status_code == 400


class TestHealthApi:
    def test_health(self, client):
        body = client.get("/api/v1/health").json()
        assert body["status"] == "ok"
        assert body["storage"] == "ok"
