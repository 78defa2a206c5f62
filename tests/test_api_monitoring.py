"""Monitoring ingestion, status, request metrics and health endpoints."""

import time

from crystal_calendar.domain.health.checker import SystemHealthChecker, check_result
from crystal_calendar.domain.health.router import get_health_checker
from crystal_calendar.domain.monitoring.collector import monitoring
from crystal_calendar.main import app
from crystal_calendar.models import MonitoringReport


def report(**overrides):
    body = {
        "sessionId": "session-abc",
        "userId": None,
        "timestamp": int(time.time() * 1000),
        "metrics": [{"url": "/calendar", "loadTime": 812}],
        "errors": [{"message": "TypeError: x is undefined", "severity": "high"}],
        "events": [{"type": "click", "action": "open_day"}, {"type": "custom", "action": "x"}],
        "systemStatus": {"networkStatus": {"online": True}},
    }
    body.update(overrides)
    return body


class TestIngestion:
    def test_report_persisted(self, client, db):
        response = client.post("/api/monitoring", json=report())
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert (body["errorCount"], body["eventCount"]) == (1, 2)

        stored = db.query(MonitoringReport).one()
        assert stored.session_id == "session-abc"
        assert stored.metrics[0]["loadTime"] == 812

    def test_invalid_report(self, client):
        assert client.post("/api/monitoring", json={"sessionId": ""}).status_code == 422

    def test_timestamp_out_of_range(self, client):
        assert client.post("/api/monitoring", json=report(timestamp=10**18)).status_code == 422
        assert client.post("/api/monitoring", json=report(timestamp=-1)).status_code == 422

    def test_client_ip_stored(self, client, db):
        headers = {"X-Forwarded-For": "203.0.113.7, 10.0.0.1"}
        assert client.post("/api/monitoring", json=report(), headers=headers).status_code == 200
        assert db.query(MonitoringReport).one().client_ip == "203.0.113.7"

    def test_rate_limited(self, client):
        statuses = [client.post("/api/monitoring", json=report()).status_code for _ in range(31)]
        assert statuses[:30] == [200] * 30
        assert statuses[30] == 429


class TestServerMonitoring:
    def test_status(self, client):
        data = client.get("/api/monitoring/status").json()
        assert {"timestamp", "memoryUsage", "errorRate"} <= set(data)

    def test_requests_are_recorded(self, client):
        client.get("/health")
        metric = monitoring.metrics[-1]
        assert metric["url"] == "/health"
        assert metric["method"] == "GET"
        assert metric["statusCode"] == 200


class TestHealthEndpoints:
    def test_liveness(self, client):
        assert client.get("/health").json() == {"status": "healthy"}

    def test_redis_down(self, client):
        assert client.get("/health/redis").json()["status"] == "unhealthy"

    def test_security_headers(self, client):
        response = client.get("/api/energy/prediction")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert "no-store" in response.headers["Cache-Control"]
        assert "X-Frame-Options" not in client.get("/health").headers

    def test_system_health(self, client):
        checker = SystemHealthChecker(register_defaults=False)

        async def ok():
            return check_result("Custom", "healthy", "fine")

        checker.add_check(ok)
        app.dependency_overrides[get_health_checker] = lambda: checker
        response = client.get("/api/system-health")
        assert response.status_code == 200
        assert response.json()["summary"]["overall"] == "healthy"
        assert response.json()["results"][0]["component"] == "Custom"

    def test_latest_without_cache(self, client):
        assert client.get("/api/system-health/latest").status_code == 404
