"""/api/database-migration endpoints."""

from crystal_calendar.domain.provisioning import router as router_module
from crystal_calendar.domain.provisioning.relationships import REQUIRED_RELATIONSHIPS

from conftest import make_token

URL = "/api/database-migration"


class TestAccess:
    def test_requires_token(self, client):
        assert client.get(URL).status_code in (401, 403)

    def test_regular_user_forbidden(self, client, user_headers):
        assert client.get(URL, headers=user_headers).status_code == 403

    def test_expired_token(self, client):
        headers = {"Authorization": f"Bearer {make_token(role='service_role', expires_in=-60)}"}
        response = client.get(URL, headers=headers)
        assert response.status_code == 401
        assert response.headers["X-Token-Expired"] == "true"

    def test_wrong_audience(self, client):
        token = make_token(aud="someone-else")
        assert client.get(URL, headers={"Authorization": f"Bearer {token}"}).status_code == 401


class TestDiagnosis:
    def test_combined_report(self, client, service_headers, fake_executor):
        fake_executor.tables.discard("usage_stats")
        response = client.get(URL, headers=service_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["tableStatus"]["usage_stats"] is False
        assert data["diagnosis"]["issues"] == ["Missing tables: usage_stats"]
        assert data["relationshipReport"]["summary"]["total"] == len(REQUIRED_RELATIONSHIPS)
        assert "timestamp" in data


class TestActions:
    def test_complete_setup(self, client, service_headers, fake_executor):
        response = client.post(URL, json={"action": "completeSetup"}, headers=service_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["action"] == "completeSetup"
        assert len(data["result"]["results"]) == 6

    def test_run_migration_partial_failure(self, client, service_headers, fake_executor):
        fake_executor.failing_steps = {"Create indexes"}
        data = client.post(URL, json={"action": "runMigration"}, headers=service_headers).json()
        assert data["success"] is True
        assert data["result"]["success"] is False
        assert len(data["result"]["results"]) == 14

    def test_repair_relationships(self, client, service_headers, fake_executor):
        data = client.post(URL, json={"action": "repairRelationships"}, headers=service_headers).json()
        assert data["result"]["success"] is True
        assert len(fake_executor.foreign_keys) == len(REQUIRED_RELATIONSHIPS)

    def test_insert_basic_crystals(self, client, service_headers, fake_executor):
        data = client.post(URL, json={"action": "insertBasicCrystals"}, headers=service_headers).json()
        assert data["result"] == {"success": True}
        assert len(fake_executor.crystals) == 4

    def test_unknown_action(self, client, service_headers):
        response = client.post(URL, json={"action": "dropEverything"}, headers=service_headers)
        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Unknown action: dropEverything"}

    def test_unexpected_failure(self, client, service_headers, fake_executor):
        def exploding_step(sql, description, probe=None):
            raise RuntimeError("connection reset")

        fake_executor.run_step = exploding_step
        response = client.post(URL, json={"action": "runMigration"}, headers=service_headers)
        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "connection reset"}


class TestRepair:
    def test_patch_repairs_profiles(self, client, service_headers, fake_executor):
        fake_executor.columns.clear()
        response = client.patch(URL, headers=service_headers)
        assert response.status_code == 200
        assert response.json() == {"success": True, "results": {"rls_fixed": True, "column_fixed": True}}


class TestLatestDiagnosis:
    def test_not_available_without_cache(self, client, service_headers):
        assert client.get(f"{URL}/latest", headers=service_headers).status_code == 404

    def test_served_from_cache(self, client, service_headers, monkeypatch):
        stored = {"diagnosis": {"issues": []}, "timestamp": "2026-01-01T03:00:00+00:00"}
        monkeypatch.setattr(router_module, "get_cached_diagnosis", lambda: stored)
        response = client.get(f"{URL}/latest", headers=service_headers)
        assert response.status_code == 200
        assert response.json() == stored

    def test_requires_service_role(self, client, user_headers):
        assert client.get(f"{URL}/latest", headers=user_headers).status_code == 403


class TestActionRequest:
    def test_only_action_is_read(self, client, service_headers, fake_executor):
        assert list(router_module.MigrationActionRequest.model_fields) == ["action"]
        body = {"action": "checkTables", "options": {"force": True}}
        response = client.post(URL, json=body, headers=service_headers)
        assert response.status_code == 200
        assert response.json()["result"]["tableStatus"]["profiles"] is True
