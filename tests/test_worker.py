"""Scheduled worker jobs."""

from datetime import datetime, timedelta, timezone

import pytest

from crystal_calendar import worker
from crystal_calendar.domain.health.checker import SystemHealthChecker, check_result
from crystal_calendar.models import MonitoringReport


class TestScheduledJobs:
    @pytest.mark.asyncio
    async def test_health_check_task(self, monkeypatch):
        def checker_factory(engine):
            checker = SystemHealthChecker(engine, register_defaults=False)

            async def degraded():
                return check_result("AI text service", "warning", "responded with 503")

            checker.add_check(degraded)
            return checker

        monkeypatch.setattr(worker, "SystemHealthChecker", checker_factory)
        result = await worker.system_health_check_task({})
        assert result == {"overall": "warning", "errors": 0, "warnings": 1}

    @pytest.mark.asyncio
    async def test_database_diagnosis_task(self, db):
        result = await worker.database_diagnosis_task({})
        assert result["issues"] == 0
        assert 0 <= result["healthScore"] <= 100

    @pytest.mark.asyncio
    async def test_cleanup_monitoring_reports(self, db):
        now = datetime.now(timezone.utc)
        db.add_all(
            [
                MonitoringReport(session_id="old", reported_at=now - timedelta(days=90)),
                MonitoringReport(session_id="recent", reported_at=now - timedelta(days=1)),
            ]
        )
        db.commit()

        assert await worker.cleanup_monitoring_reports_task({}) == {"deleted": 1}
        db.expire_all()
        assert [r.session_id for r in db.query(MonitoringReport)] == ["recent"]

    def test_cron_schedule(self):
        assert len(worker.WorkerSettings.cron_jobs) == 3
        assert worker.system_health_check_task in worker.WorkerSettings.functions
