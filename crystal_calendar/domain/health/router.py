"""System health router"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from ...cache import get_cached_health_report, set_cached_health_report
from .checker import SystemHealthChecker, system_health_checker

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/system-health", tags=["System Health"])


def get_health_checker() -> SystemHealthChecker:
    """Dependency injection for the health checker"""
    return system_health_checker


@router.get("")
async def system_health(checker: SystemHealthChecker = Depends(get_health_checker)):
    """Run every registered check now"""
    report = await checker.run_health_check()
    set_cached_health_report(report)
    return report


@router.get("/latest")
async def latest_system_health():
    """Last report stored by the web process or the scheduled worker check"""
    report = get_cached_health_report()
    if report is None:
        raise HTTPException(status_code=404, detail="No health report available yet")
    return report
