"""Monitoring router - client report ingestion and server collector status"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...database import get_db
from ...rate_limiter import create_rate_limiter, get_client_ip
from .collector import monitoring
from .repository import MonitoringReportRepository
from .schemas import MonitoringReportAccepted, MonitoringReportIn

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/monitoring", tags=["Monitoring"])

# 30 reports per minute per client IP
rate_limit_reports = create_rate_limiter(limit=30, window_seconds=60, key_prefix="monitoring")


@router.post("", response_model=MonitoringReportAccepted)
async def ingest_report(
    report: MonitoringReportIn,
    request: Request,
    _: None = Depends(rate_limit_reports),
    db: Session = Depends(get_db),
):
    """Persist a report uploaded by a client-side collector"""
    try:
        row = MonitoringReportRepository.create_report(db, report, client_ip=get_client_ip(request))
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"❌ Failed to store monitoring report for session {report.sessionId}: {e}")
        raise HTTPException(status_code=500, detail="Failed to store monitoring report")

    if row.error_count:
        logger.warning(
            f"⚠️ Monitoring report {row.id} from session {report.sessionId} "
            f"carries {row.error_count} errors"
        )
    return MonitoringReportAccepted(
        id=str(row.id), errorCount=row.error_count, eventCount=row.event_count
    )


@router.get("/status")
async def get_status():
    """Status of this process's collector"""
    return monitoring.get_system_status()
