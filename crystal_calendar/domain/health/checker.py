"""
System health checker.

Each registered check is an async callable returning one result dict
{component, status, message, details, timestamp}; status is one of
healthy / warning / error. A check that raises is reported as an error for
the component "Unknown" and the remaining checks still run.
"""

import asyncio
import logging
import os
import platform
import time
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional

import httpx
import psutil
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DBAPIError

from ...config import AI_IMAGE_SERVICE_URL, AI_TEXT_SERVICE_URL, HEALTH_MEMORY_WARNING_MB
from ...database import engine as default_engine
from ..provisioning.executor import get_sqlstate

logger = logging.getLogger(__name__)

HealthCheck = Callable[[], Awaitable[dict]]

HEALTHY = "healthy"
WARNING = "warning"
ERROR = "error"

REQUIRED_ENV_VARS = ["DATABASE_URL", "SUPABASE_URL", "SUPABASE_ANON_KEY"]
CHECKED_TABLES = ["profiles", "design_works", "user_energy_records", "meditation_sessions"]
SERVICE_TIMEOUT = 10.0

ENV_COMPONENT = "Environment variables"
DATABASE_COMPONENT = "Database connection"
TABLE_COMPONENT_PREFIX = "Database table: "
AI_TEXT_COMPONENT = "AI text service"
AI_IMAGE_COMPONENT = "Image generation service"
RESOURCES_COMPONENT = "System resources"
UNKNOWN_COMPONENT = "Unknown"


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def check_result(component: str, status: str, message: str, details=None) -> dict:
    return {
        "component": component,
        "status": status,
        "message": message,
        "details": details,
        "timestamp": _timestamp(),
    }


def generate_recommendations(results: list[dict]) -> list[str]:
    def failing(component: str, statuses=(ERROR,)) -> bool:
        return any(r["component"] == component and r["status"] in statuses for r in results)

    table_results = [r for r in results if r["component"].startswith(TABLE_COMPONENT_PREFIX)]
    recommendations = []

    if failing(ENV_COMPONENT):
        recommendations.append("Check the Supabase and database settings in .env")
    if failing(DATABASE_COMPONENT):
        recommendations.append("Check DATABASE_URL and that the database server is reachable")
    if any(r["status"] == ERROR for r in table_results):
        recommendations.append("Create the missing database tables or fix their permissions")
    if any(r["status"] == WARNING for r in table_results):
        recommendations.append("Review the row level security (RLS) policies of the database tables")
    if failing(AI_TEXT_COMPONENT, (WARNING, ERROR)):
        recommendations.append("The AI service may be temporarily unavailable, some features may be affected")
    if failing(AI_IMAGE_COMPONENT, (WARNING, ERROR)):
        recommendations.append("Image generation may be temporarily unavailable")
    if failing(RESOURCES_COMPONENT, (WARNING,)):
        recommendations.append("Memory usage is high, consider restarting the server")
    if failing(UNKNOWN_COMPONENT):
        recommendations.append("A health check failed unexpectedly, see the server logs")

    if not recommendations:
        recommendations.append("System is running normally, all components are healthy")
    return recommendations


class SystemHealthChecker:
    def __init__(
        self,
        engine: Optional[Engine] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        register_defaults: bool = True,
    ):
        self.engine = engine or default_engine
        self.transport = transport
        self.checks: list[HealthCheck] = []
        if register_defaults:
            self.register_default_checks()

    def add_check(self, check: HealthCheck) -> None:
        self.checks.append(check)

    def register_default_checks(self) -> None:
        self.add_check(self.check_environment)
        self.add_check(self.check_database)
        for table in CHECKED_TABLES:
            self.add_check(self._table_check(table))
        self.add_check(self.check_ai_text_service)
        self.add_check(self.check_ai_image_service)
        self.add_check(self.check_resources)

    def _http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=SERVICE_TIMEOUT, transport=self.transport)

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------

    async def check_environment(self) -> dict:
        present = {name: bool(os.getenv(name)) for name in REQUIRED_ENV_VARS}
        missing = [name for name, ok in present.items() if not ok]
        if missing:
            return check_result(
                ENV_COMPONENT,
                ERROR,
                f"Missing required environment variables: {', '.join(missing)}",
                {"missing": missing},
            )
        return check_result(ENV_COMPONENT, HEALTHY, "All required environment variables are set", present)

    def _ping_database(self) -> None:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    async def check_database(self) -> dict:
        started = time.perf_counter()
        try:
            await asyncio.to_thread(self._ping_database)
        except Exception as e:
            logger.error(f"❌ Database connectivity check failed: {e}")
            return check_result(DATABASE_COMPONENT, ERROR, "Database connection failed", {"error": str(e)})

        latency_ms = round((time.perf_counter() - started) * 1000, 2)
        return check_result(
            DATABASE_COMPONENT,
            HEALTHY,
            f"Connected to {self.engine.dialect.name}",
            {"latencyMs": latency_ms},
        )

    def _table_check(self, table: str) -> HealthCheck:
        async def check_table() -> dict:
            return await asyncio.to_thread(self.check_table, table)

        check_table.__name__ = f"check_table_{table}"
        return check_table

    def check_table(self, table: str) -> dict:
        component = f"{TABLE_COMPONENT_PREFIX}{table}"
        try:
            with self.engine.connect() as conn:
                conn.execute(text(f"SELECT 1 FROM {table} LIMIT 1"))
        except DBAPIError as e:
            code = get_sqlstate(e)
            details = {"code": code, "error": str(e.orig)}
            if code == "42P01" or "no such table" in str(e).lower():
                return check_result(component, ERROR, f"Table {table} does not exist", details)
            if code == "42501":
                return check_result(
                    component, WARNING, f"Table {table} exists but access is restricted", details
                )
            return check_result(component, ERROR, f"Table {table} could not be accessed", details)
        return check_result(component, HEALTHY, f"Table {table} is accessible")

    async def check_ai_text_service(self) -> dict:
        payload = {
            "messages": [{"role": "user", "content": "connection test"}],
            "model": "openai",
            "temperature": 0.1,
        }
        try:
            async with self._http_client() as client:
                response = await client.post(AI_TEXT_SERVICE_URL, json=payload)
        except httpx.HTTPError as e:
            logger.warning(f"⚠️ AI text service unreachable: {e}")
            return check_result(AI_TEXT_COMPONENT, ERROR, "AI service connection failed", {"error": str(e)})

        if response.is_success:
            return check_result(AI_TEXT_COMPONENT, HEALTHY, "AI service is reachable")
        return check_result(
            AI_TEXT_COMPONENT,
            WARNING,
            f"AI service responded with {response.status_code}",
            {"status": response.status_code},
        )

    async def check_ai_image_service(self) -> dict:
        try:
            async with self._http_client() as client:
                response = await client.head(AI_IMAGE_SERVICE_URL)
        except httpx.HTTPError as e:
            logger.warning(f"⚠️ Image generation service unreachable: {e}")
            return check_result(
                AI_IMAGE_COMPONENT, ERROR, "Image generation service connection failed", {"error": str(e)}
            )

        if response.is_success:
            return check_result(AI_IMAGE_COMPONENT, HEALTHY, "Image generation service is reachable")
        return check_result(
            AI_IMAGE_COMPONENT,
            WARNING,
            f"Image generation service responded with {response.status_code}",
            {"status": response.status_code},
        )

    async def check_resources(self) -> dict:
        process = psutil.Process()
        used_mb = round(process.memory_info().rss / 1024 / 1024)
        uptime = round(time.time() - process.create_time())
        status = HEALTHY if used_mb < HEALTH_MEMORY_WARNING_MB else WARNING
        return check_result(
            RESOURCES_COMPONENT,
            status,
            f"Memory usage: {used_mb}MB, uptime: {uptime}s",
            {
                "memory": {
                    "used": used_mb,
                    "total": round(psutil.virtual_memory().total / 1024 / 1024),
                    "percentage": round(process.memory_percent(), 2),
                },
                "uptime": uptime,
                "pythonVersion": platform.python_version(),
            },
        )

    # ------------------------------------------------------------------
    # Aggregation
    # ------------------------------------------------------------------

    async def run_health_check(self) -> dict:
        logger.info("🔍 Running system health check...")
        results = []

        for check in self.checks:
            try:
                results.append(await check())
            except Exception as e:
                logger.error(f"❌ Health check {getattr(check, '__name__', check)} failed: {e}")
                results.append(
                    check_result(
                        UNKNOWN_COMPONENT, ERROR, f"Health check failed: {e}", {"error": str(e)}
                    )
                )

        errors = sum(1 for r in results if r["status"] == ERROR)
        warnings = sum(1 for r in results if r["status"] == WARNING)
        healthy = sum(1 for r in results if r["status"] == HEALTHY)
        overall = ERROR if errors else WARNING if warnings else HEALTHY

        summary = {
            "overall": overall,
            "total": len(results),
            "healthy": healthy,
            "warning": warnings,
            "error": errors,
            "timestamp": _timestamp(),
            "recommendations": generate_recommendations(results),
        }

        if overall == HEALTHY:
            logger.info("✅ System health check: all systems healthy")
        else:
            logger.warning(f"⚠️ System health check: {overall} ({errors} errors, {warnings} warnings)")
        return {"summary": summary, "results": results}


system_health_checker = SystemHealthChecker()
