"""
In-process monitoring collector.

Request metrics, errors and events are appended to bounded lists (oldest
entries dropped past the cap) and periodically POSTed as one JSON report.
Delivery is best effort: a failed upload is logged and the data stays in
memory until it ages out.
"""

import asyncio
import functools
import inspect
import logging
import threading
import time
import traceback
import uuid
from typing import Any, Optional

import httpx
import psutil

from ...config import (
    MONITORING_MAX_STORED_ITEMS,
    MONITORING_REPORT_INTERVAL,
    MONITORING_REPORTING_ENDPOINT,
)

logger = logging.getLogger(__name__)

MAX_BREADCRUMBS = 50
ERROR_RATE_WINDOW_MS = 60_000
REPORT_TIMEOUT = 10.0

ERROR_TYPES = ("javascript", "network", "resource", "api", "user")
SEVERITIES = ("low", "medium", "high", "critical")
EVENT_TYPES = ("click", "scroll", "navigation", "form_submit", "ai_request", "custom", "request")


def now_ms() -> int:
    return int(time.time() * 1000)


def _trim(items: list, max_length: int) -> None:
    if len(items) > max_length:
        del items[: len(items) - max_length]


class MonitoringCollector:
    def __init__(
        self,
        user_id: Optional[str] = None,
        max_stored_items: int = MONITORING_MAX_STORED_ITEMS,
        reporting_endpoint: Optional[str] = MONITORING_REPORTING_ENDPOINT,
    ):
        self.session_id = uuid.uuid4().hex
        self.user_id = user_id
        self.max_stored_items = max_stored_items or MONITORING_MAX_STORED_ITEMS
        self.reporting_endpoint = reporting_endpoint
        self.is_enabled = True
        self.metrics: list[dict] = []
        self.errors: list[dict] = []
        self.events: list[dict] = []
        self.breadcrumbs: list[dict] = []
        self._lock = threading.Lock()
        self._process = psutil.Process()

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    def _add_breadcrumb(self, category: str, message: str, data: Optional[dict] = None) -> None:
        self.breadcrumbs.append(
            {"timestamp": now_ms(), "category": category, "message": message, "data": data}
        )
        _trim(self.breadcrumbs, MAX_BREADCRUMBS)

    def record_request_metric(
        self, url: str, method: str, status_code: int, duration_ms: float
    ) -> None:
        metric = {
            "timestamp": now_ms(),
            "url": url,
            "method": method,
            "statusCode": status_code,
            "durationMs": round(duration_ms, 2),
            "userId": self.user_id,
            "sessionId": self.session_id,
            "memoryUsage": self.get_memory_usage(),
        }
        with self._lock:
            self.metrics.append(metric)
            _trim(self.metrics, self.max_stored_items)

    def record_error(
        self,
        message: str,
        type: str = "javascript",
        severity: str = "medium",
        url: Optional[str] = None,
        stack: Optional[str] = None,
        component: Optional[str] = None,
        action: Optional[str] = None,
    ) -> dict:
        with self._lock:
            error = {
                "timestamp": now_ms(),
                "url": url,
                "userId": self.user_id,
                "sessionId": self.session_id,
                "type": type if type in ERROR_TYPES else "javascript",
                "severity": severity if severity in SEVERITIES else "medium",
                "message": message or "Unknown error",
                "stack": stack,
                "component": component,
                "action": action,
                "breadcrumbs": list(self.breadcrumbs),
            }
            self.errors.append(error)
            _trim(self.errors, self.max_stored_items)
            self._add_breadcrumb(
                "error", error["message"], {"type": error["type"], "severity": error["severity"]}
            )
        return error

    def record_event(
        self,
        action: str,
        type: str = "custom",
        url: Optional[str] = None,
        element: Optional[str] = None,
        duration: Optional[float] = None,
        success: Optional[bool] = None,
        metadata: Optional[dict] = None,
    ) -> dict:
        with self._lock:
            event = {
                "timestamp": now_ms(),
                "url": url,
                "userId": self.user_id,
                "sessionId": self.session_id,
                "type": type if type in EVENT_TYPES else "custom",
                "element": element,
                "action": action or "unknown",
                "duration": duration,
                "success": success,
                "metadata": metadata,
            }
            self.events.append(event)
            _trim(self.events, self.max_stored_items)
            self._add_breadcrumb("user_action", event["action"], {"type": event["type"], "element": element})
        return event

    def track_event(self, type: str, action: str, metadata: Optional[dict] = None) -> dict:
        return self.record_event(action=f"{type}_{action}", type="custom", metadata=metadata)

    def track_ai_request(
        self, request_type: str, duration: float, success: bool, metadata: Optional[dict] = None
    ) -> dict:
        return self.record_event(
            action=request_type,
            type="ai_request",
            duration=duration,
            success=success,
            metadata=metadata,
        )

    def track_error(
        self, message: str, component: Optional[str] = None, severity: str = "medium"
    ) -> dict:
        return self.record_error(message=message, type="user", severity=severity, component=component)

    # ------------------------------------------------------------------
    # Status and reporting
    # ------------------------------------------------------------------

    def get_memory_usage(self) -> float:
        """Resident memory of this process in MB"""
        return round(self._process.memory_info().rss / 1024 / 1024, 2)

    def get_system_status(self) -> dict:
        now = now_ms()
        with self._lock:
            recent_errors = [e for e in self.errors if now - e["timestamp"] < ERROR_RATE_WINDOW_MS]

        return {
            "timestamp": now,
            "memoryUsage": {
                "used": self.get_memory_usage(),
                "total": round(psutil.virtual_memory().total / 1024 / 1024, 2),
                "percentage": round(self._process.memory_percent(), 2),
            },
            "cpuPercent": psutil.cpu_percent(interval=None),
            "errorRate": {
                "total": len(recent_errors),
                "rate": len(recent_errors) / 60,  # errors per second
                "trend": "stable",
            },
        }

    def generate_report(self) -> dict:
        with self._lock:
            metrics, errors, events = list(self.metrics), list(self.errors), list(self.events)
        return {
            "sessionId": self.session_id,
            "userId": self.user_id,
            "timestamp": now_ms(),
            "metrics": metrics,
            "errors": errors,
            "events": events,
            "systemStatus": self.get_system_status(),
        }

    async def send_report(self) -> bool:
        """POST the current report; never raises"""
        if not self.is_enabled or not self.reporting_endpoint:
            return False

        try:
            async with httpx.AsyncClient(timeout=REPORT_TIMEOUT) as client:
                response = await client.post(self.reporting_endpoint, json=self.generate_report())
                response.raise_for_status()
            logger.debug(f"📡 Monitoring report sent to {self.reporting_endpoint}")
            return True
        except Exception as e:
            logger.error(f"❌ Failed to send monitoring report: {e}")
            return False

    def set_user_id(self, user_id: Optional[str]) -> None:
        self.user_id = user_id

    def enable(self) -> None:
        self.is_enabled = True

    def disable(self) -> None:
        self.is_enabled = False

    def clear(self) -> None:
        with self._lock:
            self.metrics = []
            self.errors = []
            self.events = []
            self.breadcrumbs = []


# Global collector for the web process
monitoring = MonitoringCollector()


async def auto_report_loop(
    collector: MonitoringCollector = monitoring, interval: float = MONITORING_REPORT_INTERVAL
):
    """Upload the report every interval seconds until cancelled"""
    logger.info(f"📊 Monitoring auto-reporting every {interval}s to {collector.reporting_endpoint}")
    try:
        while True:
            await asyncio.sleep(interval)
            await collector.send_report()
    except asyncio.CancelledError:
        await collector.send_report()
        raise


def with_monitoring(component: str, action: str, collector: Optional[MonitoringCollector] = None):
    """
    Record a success event (with duration) or an error plus failure event for
    every call. Works for plain and async callables; exceptions are re-raised.

    Example:
        @with_monitoring("provisioning", "run_migration")
        def run_migration(...):
            ...
    """

    def decorator(func):
        def _collector() -> MonitoringCollector:
            return collector or monitoring

        def _succeeded(started: float) -> None:
            _collector().track_event(
                component,
                action,
                {"duration": round((time.perf_counter() - started) * 1000, 2), "success": True},
            )

        def _failed(started: float, exc: BaseException) -> None:
            target = _collector()
            target.record_error(
                message=f"{component}.{action}: {exc}",
                type="user",
                severity="high",
                stack="".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
                component=component,
                action=action,
            )
            target.track_event(
                component,
                action,
                {
                    "duration": round((time.perf_counter() - started) * 1000, 2),
                    "success": False,
                    "error": str(exc),
                },
            )

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs) -> Any:
                started = time.perf_counter()
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    _failed(started, e)
                    raise
                _succeeded(started)
                return result

            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                _failed(started, e)
                raise
            _succeeded(started)
            return result

        return wrapper

    return decorator
