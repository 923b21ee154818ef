"""
HTTP API Tests

Drives the FastAPI app with injected, seeded in-memory stores:
1. Read endpoints return presentational models
2. Form errors are a 422 with a field -> message map and reach no repository
3. Remote failures are a 502 carrying the failure message
4. Unknown ids are a 404
"""

import pytest
from fastapi.testclient import TestClient

from api.server import create_app
from connectors.memory import build_memory_repositories
from stores import FarmStores


@pytest.fixture
def repos():
    return build_memory_repositories(seed=True)


@pytest.fixture
def stores(repos):
    return FarmStores.from_repositories(repos)


@pytest.fixture
def client(stores):
    return TestClient(create_app(stores=stores))


# =============================================================================
# Health
# =============================================================================

def test_health_endpoints(client):
    body = client.get("/health").json()
    assert body["status"] == "healthy"
    assert body["services"]["store"] == "injected"
    assert client.get("/ready").json() == {"status": "ready"}
    assert client.get("/live").json() == {"status": "alive"}


def test_request_id_is_echoed(client):
    response = client.get("/live", headers={"x-request-id": "req-42"})
    assert response.headers["x-request-id"] == "req-42"


# =============================================================================
# Tasks
# =============================================================================

class TestTaskRoutes:

    def test_list_with_filters(self, client):
        body = client.get("/tasks", params={"status": "pending", "priority": "high", "today": "2023-11-18"}).json()
        assert [t["id"] for t in body["tasks"]] == ["T001", "T002"]
        assert body["tasks"][0]["past_due"] is True
        assert body["summary"]["total"] == 5

    def test_bad_filter_is_422(self, client):
        response = client.get("/tasks", params={"status": "someday"})
        assert response.status_code == 422
        assert "status" in response.json()["detail"]["errors"]

    def test_create_validation_error(self, client, repos):
        response = client.post("/tasks", json={"title": "x"})
        assert response.status_code == 422
        body = response.json()
        assert body["errors"]["title"] == "Title must be at least 3 characters."
        assert body["errors"]["due_date"] == "A due date is required."
        assert "create" not in repos["tasks"].calls

    def test_create_and_notification(self, client):
        response = client.post("/tasks", json={
            "title": "Order feed", "category": "feeding", "priority": "high", "due_date": "2023-12-02",
        })
        assert response.status_code == 201
        card = response.json()
        assert card["category_label"] == "Feeding"
        assert card["completed"] is False

        notes = client.get("/notifications").json()
        assert notes[-1]["title"] == "Task created"

    def test_patch_merges_with_current(self, client):
        response = client.patch("/tasks/T003", json={"priority": "high"})
        assert response.status_code == 200
        card = response.json()
        assert card["priority"] == "high"
        assert card["title"] == "Monitor heat cycles"
        assert card["animal_name"] == "Daisy"

    def test_toggle(self, client):
        assert client.post("/tasks/T001/toggle").json()["completed"] is True
        assert client.post("/tasks/T001/toggle").json()["completed"] is False

    def test_unknown_id_is_404(self, client):
        assert client.post("/tasks/NOPE/toggle").status_code == 404
        assert client.delete("/tasks/NOPE").status_code == 404

    def test_remote_failure_is_502(self, client, repos):
        repos["tasks"].fail_next("list", "upstream timeout")
        response = client.get("/tasks")
        assert response.status_code == 502
        assert response.json()["detail"] == "upstream timeout"

    def test_delete(self, client):
        assert client.delete("/tasks/T002").status_code == 204
        ids = [t["id"] for t in client.get("/tasks").json()["tasks"]]
        assert "T002" not in ids


# =============================================================================
# Livestock, finances, records, dashboard
# =============================================================================

class TestLivestockRoutes:

    def test_list_and_detail(self, client):
        body = client.get("/livestock", params={"health_status": "attention", "view": "table"}).json()
        assert body["view"] == "table"
        assert [a["name"] for a in body["animals"]] == ["Daisy"]
        detail = client.get("/livestock/LV1003").json()
        assert detail["health_label"] == "Needs Attention"
        assert client.get("/livestock/LV0000").status_code == 404

    def test_stats(self, client):
        stats = client.get("/livestock/stats").json()
        assert stats["total"] == 6
        assert {s["name"] for s in stats["health"]} == {"Healthy", "Needs Attention", "Sick"}

    def test_export_stub(self, client, repos):
        body = client.post("/livestock/export", params={"animal_id": "LV1001"}).json()
        assert body["variant"] == "info"
        assert repos["livestock"].calls == []

    def test_create_update_delete(self, client):
        created = client.post("/livestock", json={
            "name": "Clover", "breed": "Jersey", "gender": "Female",
        }).json()
        updated = client.patch(f"/livestock/{created['id']}", json={"health_status": "sick"}).json()
        assert updated["health_status"] == "sick"
        assert updated["name"] == "Clover"
        assert client.delete(f"/livestock/{created['id']}").status_code == 204


class TestFinanceRoutes:

    def test_transactions(self, client):
        rows = client.get("/finances/transactions", params={"status": "pending"}).json()
        assert [r["id"] for r in rows] == ["F007"]
        assert rows[0]["amount"] == -1800.0
        assert rows[0]["display_amount"] == "-$1,800.00"

    def test_create_is_signed(self, client):
        response = client.post("/finances/transactions", json={
            "description": "Calf sale", "amount": 900, "category": "Sales", "date": "2023-12-03",
        })
        assert response.status_code == 201
        assert response.json()["amount"] == 900.0
        assert response.json()["is_income"] is True

    def test_summary_and_analytics(self, client):
        summary = client.get("/finances/summary").json()
        assert summary["net_profit"] == 3430.0
        analytics = client.get("/finances/analytics").json()
        assert len(analytics["monthly"]) == 12
        assert analytics["monthly"][11]["expenses"] == 1800.0

    def test_delete(self, client):
        assert client.delete("/finances/transactions/F001").status_code == 204
        assert client.delete("/finances/transactions/F001").status_code == 404


def test_records_routes(client):
    health = client.get("/records/health").json()
    assert health[0]["animal_name"] == "Rosie"
    vaccinations = client.get("/records/vaccinations", params={"today": "2023-11-20"}).json()
    assert [v["id"] for v in vaccinations["overdue"]] == ["VS003"]
    feeding = client.get("/records/feeding", params={"search": "calves"}).json()
    assert [s["id"] for s in feeding["schedules"]] == ["FS004"]
    inventory = client.get("/records/inventory").json()
    assert len(inventory["items"]) == 5


def test_dashboard(client):
    body = client.get("/dashboard", params={"today": "2023-11-18"}).json()
    metrics = {m["title"]: m["value"] for m in body["metrics"]}
    assert metrics["Total Livestock"] == 6
    assert metrics["Health Alerts"] == 2
    assert len(body["breeds"]) == 6


def test_dismiss_notification(client, stores):
    note = stores.notifier.push("Hello")
    assert client.delete(f"/notifications/{note.id}").status_code == 204
    assert client.delete(f"/notifications/{note.id}").status_code == 404
    assert client.get("/notifications").json() == []
