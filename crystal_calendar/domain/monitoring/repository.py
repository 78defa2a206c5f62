"""Monitoring repository - Database operations for uploaded reports"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from ...models import MonitoringReport
from .schemas import MonitoringReportIn


class MonitoringReportRepository:
    """Repository for monitoring report database operations"""

    @staticmethod
    def create_report(
        db: Session, report: MonitoringReportIn, client_ip: Optional[str] = None
    ) -> MonitoringReport:
        row = MonitoringReport(
            session_id=report.sessionId,
            user_id=report.userId,
            reported_at=datetime.fromtimestamp(report.timestamp / 1000, tz=timezone.utc),
            metrics=report.metrics,
            errors=report.errors,
            events=report.events,
            system_status=report.systemStatus,
            error_count=len(report.errors),
            event_count=len(report.events),
            client_ip=client_ip,
        )
        db.add(row)
        db.commit()
        db.refresh(row)
        return row
