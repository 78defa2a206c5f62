"""Monitoring domain schemas - Pydantic models for client reports"""

from typing import Optional

from pydantic import BaseModel, Field

from ...config import MONITORING_MAX_STORED_ITEMS

# 9999-12-31T23:59:59.999Z, the last instant a datetime can hold
MAX_TIMESTAMP_MS = 253_402_300_799_999


class MonitoringReportIn(BaseModel):
    """Report uploaded by a client-side collector"""

    sessionId: str = Field(min_length=1, max_length=100)
    userId: Optional[str] = None
    timestamp: int = Field(ge=0, le=MAX_TIMESTAMP_MS)  # milliseconds since epoch
    metrics: list[dict] = Field(default_factory=list, max_length=MONITORING_MAX_STORED_ITEMS)
    errors: list[dict] = Field(default_factory=list, max_length=MONITORING_MAX_STORED_ITEMS)
    events: list[dict] = Field(default_factory=list, max_length=MONITORING_MAX_STORED_ITEMS)
    systemStatus: dict = Field(default_factory=dict)


class MonitoringReportAccepted(BaseModel):
    success: bool = True
    id: str
    errorCount: int
    eventCount: int
