"""Tests for the metrics HTTP API."""

import pytest
from datetime import date

import httpx
from fastapi.testclient import TestClient

from agencyhub.api.dependencies import get_today, get_upstream_client
from agencyhub.main import app
from agencyhub.services.upstream import AgencyHubClient, NullResponseCache

client = TestClient(app)

TODAY = date(2025, 3, 15)

UPSTREAM_DATA = {
    "/api/financial": [
        {"id": 1, "clientId": 1, "type": "invoice", "amount": "1000", "status": "paid",
         "dueDate": "2025-03-01", "paidDate": "2025-03-05T10:00:00.000Z"},
        {"id": 2, "clientId": 2, "type": "invoice", "amount": "500", "status": "paid", "paidDate": "2025-02-10"},
        {"id": 3, "clientId": 2, "type": "invoice", "amount": "200", "status": "overdue", "dueDate": "2025-03-01"},
        {"id": 4, "clientId": 3, "type": "invoice", "amount": "300", "status": "pending", "dueDate": "2025-04-01"},
    ],
    "/api/clients": [
        {"id": 1, "name": "Acme", "status": "active", "createdAt": "2024-11-20T09:00:00.000Z"},
        {"id": 2, "name": "Globex", "status": "active", "createdAt": "2025-01-01"},
        {"id": 3, "name": "Initech", "status": "prospect", "createdAt": "2025-03-10"},
    ],
    "/api/opportunities": [
        {"id": 1, "title": "Rebrand", "stage": "proposal", "value": "1000", "probability": 50,
         "expectedCloseDate": "2025-03-20"},
        {"id": 2, "title": "Campaign", "stage": "negotiation", "value": "500", "probability": 80,
         "expectedCloseDate": "2025-04-02"},
        {"id": 3, "title": "Retainer", "stage": "closed_won", "value": "4000", "probability": 100},
    ],
    "/api/tasks": [
        {"id": 1, "title": "Send report", "status": "pending", "dueDate": "2025-03-10"},
        {"id": 2, "title": "Client call", "status": "in_progress", "dueDate": "2025-03-15"},
        {"id": 3, "title": "Archive", "status": "completed", "dueDate": "2025-03-01"},
        {"id": 4, "title": "Plan Q2", "status": "pending", "dueDate": "2025-04-10"},
    ],
    "/api/products": [
        {"id": 1, "name": "Logo"},
        {"id": 2, "name": "Website"},
    ],
    "/api/product-sales": [
        {"id": 1, "productId": 2, "amount": "100.00"},
    ],
}


def upstream_handler(routes):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path not in routes:
            return httpx.Response(500, json={"message": "Internal error"})
        return httpx.Response(200, json=routes[request.url.path])
    return handler


def override_upstream(routes):
    def get_test_client():
        return AgencyHubClient(
            base_url="http://agencyhub.test",
            cache=NullResponseCache(),
            http_client=httpx.Client(transport=httpx.MockTransport(upstream_handler(routes))),
        )
    app.dependency_overrides[get_upstream_client] = get_test_client


@pytest.fixture(autouse=True)
def upstream():
    """Serve canned upstream data and pin today's date."""
    override_upstream(UPSTREAM_DATA)
    app.dependency_overrides[get_today] = lambda: TODAY
    yield
    app.dependency_overrides.clear()


class TestDashboardEndpoints:
    """Tests for /dashboard endpoints."""

    def test_metrics(self):
        response = client.get("/api/v1/dashboard/metrics", params={"period": "current_month"})

        assert response.status_code == 200
        data = response.json()
        metrics = data["metrics"]
        assert metrics["period"] == "current_month"
        assert metrics["dateFrom"] == "2025-03-01"
        assert metrics["monthlyRevenue"] == "1000.00"
        assert metrics["previousMonthRevenue"] == "500.00"
        assert metrics["revenueChange"] == "100.0"
        assert metrics["activeClients"] == 2
        assert metrics["newClientsThisMonth"] == 1
        assert metrics["pendingTasks"] == 3
        assert metrics["pipelineValue"] == "1500.00"
        assert metrics["weightedPipelineValue"] == "900.00"
        assert metrics["overduePayments"] == 1
        assert [card["key"] for card in data["kpis"]] == ["revenue", "active_clients", "pending_tasks", "pipeline"]

    def test_unknown_period_falls_back(self):
        response = client.get("/api/v1/dashboard/metrics", params={"period": "fortnight"})

        assert response.status_code == 200
        assert response.json()["metrics"]["period"] == "current_month"

    def test_revenue_series(self):
        response = client.get("/api/v1/dashboard/revenue", params={"period": "6months"})

        assert response.status_code == 200
        data = response.json()
        assert data["labels"] == ["Out", "Nov", "Dez", "Jan", "Fev", "Mar"]
        assert [bucket["total"] for bucket in data["buckets"]][-2:] == ["500.00", "1000.00"]
        assert data["total"] == "1500.00"

    def test_client_status(self):
        response = client.get("/api/v1/dashboard/client-status")

        data = response.json()
        assert data["total"] == 3
        assert {s["key"]: s["count"] for s in data["slices"]} == {"active": 2, "prospect": 1}

    def test_client_growth(self):
        response = client.get("/api/v1/dashboard/client-growth")

        data = response.json()
        assert data["period"] == "6months"
        assert data["counts"] == [0, 0, 1, 2, 2, 2]

    def test_pipeline_unknown_period_is_all(self):
        response = client.get("/api/v1/dashboard/pipeline", params={"period": "bogus"})

        data = response.json()
        assert data["period"] == "all"
        assert sum(stage["count"] for stage in data["stages"]) == 3
        assert data["totalValue"] == "5500.00"

    def test_pipeline_current_month(self):
        response = client.get("/api/v1/dashboard/pipeline", params={"period": "current_month"})

        data = response.json()
        assert [(s["key"], s["count"]) for s in data["stages"]] == [("proposal", 1)]
        assert data["totalValue"] == "1000.00"

    def test_urgent_tasks(self):
        response = client.get("/api/v1/dashboard/urgent-tasks")

        data = response.json()
        assert data["totalUrgent"] == 2
        assert [(t["id"], t["urgency"]) for t in data["tasks"]] == [(1, "overdue"), (2, "due_today")]
        assert data["tasks"][0]["dueDate"] == "2025-03-10"

    def test_urgent_tasks_limit(self):
        response = client.get("/api/v1/dashboard/urgent-tasks", params={"limit": 1})

        data = response.json()
        assert len(data["tasks"]) == 1
        assert data["totalUrgent"] == 2

    def test_upstream_failure_returns_502(self):
        routes = dict(UPSTREAM_DATA)
        del routes["/api/tasks"]
        override_upstream(routes)

        response = client.get("/api/v1/dashboard/metrics")

        assert response.status_code == 502
        assert "/api/tasks" in response.json()["detail"]


class TestFinancialEndpoints:

    def test_summary(self):
        response = client.get("/api/v1/financial/summary")

        assert response.status_code == 200
        data = response.json()
        assert data["periodRevenue"] == "1000.00"
        assert data["summary"]["paidTotal"] == "1500.00"
        assert data["summary"]["overdueCount"] == 1
        assert data["summary"]["pendingTotal"] == "300.00"


class TestProductEndpoints:

    def test_heat_map(self):
        response = client.get("/api/v1/products/heat-map")

        assert response.status_code == 200
        cells = response.json()["cells"]
        assert [cell["productName"] for cell in cells] == ["Logo", "Website"]
        assert [cell["intensity"] for cell in cells] == [0.0, 100.0]
        assert [cell["performanceBand"] for cell in cells] == ["down", "up"]


class TestHealth:

    def test_healthy(self):
        response = client.get("/api/v1/health")
        assert response.json() == {"status": "healthy", "upstream": "healthy"}

    def test_degraded(self):
        override_upstream({})
        response = client.get("/api/v1/health")
        assert response.json() == {"status": "degraded", "upstream": "unreachable"}
