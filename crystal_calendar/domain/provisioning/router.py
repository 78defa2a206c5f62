"""Database migration router - diagnosis, provisioning actions and profile repair"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ...auth import AuthenticatedUser, require_service_role
from ...cache import get_cached_diagnosis
from ...database import engine
from .executor import SQLExecutor
from .migration import DatabaseMigration
from .relationships import DatabaseRelationshipManager
from .repair import repair_profiles

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/database-migration", tags=["Database Migration"])


class MigrationActionRequest(BaseModel):
    action: str


def get_executor() -> SQLExecutor:
    """Dependency injection for the provisioning executor"""
    return SQLExecutor(engine)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _failure(error: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"success": False, "error": str(error)})


ACTIONS = {
    "completeSetup": lambda migration, relationships: migration.complete_setup(),
    "runMigration": lambda migration, relationships: migration.run_migration(),
    "quickFix": lambda migration, relationships: migration.quick_fix(),
    "diagnose": lambda migration, relationships: migration.diagnose_problem(),
    "checkTables": lambda migration, relationships: {"tableStatus": migration.check_tables_exist()},
    "repairRelationships": lambda migration, relationships: relationships.repair_table_relationships(),
    "checkRelationships": lambda migration, relationships: relationships.check_relationships(),
    "insertBasicCrystals": lambda migration, relationships: {
        "success": migration.insert_basic_crystals()
    },
}


@router.get("")
def diagnose_database(
    _: AuthenticatedUser = Depends(require_service_role),
    executor: SQLExecutor = Depends(get_executor),
):
    """Combined diagnosis: table status, known problems, relationship report"""
    logger.info("🔍 Starting combined database diagnosis...")
    try:
        migration = DatabaseMigration(executor)
        return {
            "success": True,
            "tableStatus": migration.check_tables_exist(),
            "diagnosis": migration.diagnose_problem(),
            "relationshipReport": DatabaseRelationshipManager(executor).get_relationship_report(),
            "timestamp": _timestamp(),
        }
    except Exception as e:
        logger.error(f"❌ Database diagnosis failed: {e}")
        return _failure(e)


@router.post("")
def run_database_action(
    data: MigrationActionRequest,
    _: AuthenticatedUser = Depends(require_service_role),
    executor: SQLExecutor = Depends(get_executor),
):
    logger.info(f"🔧 Running database action: {data.action}")

    handler = ACTIONS.get(data.action)
    if handler is None:
        return JSONResponse(
            status_code=400, content={"success": False, "error": f"Unknown action: {data.action}"}
        )

    try:
        result = handler(DatabaseMigration(executor), DatabaseRelationshipManager(executor))
    except Exception as e:
        logger.error(f"❌ Database action {data.action} failed: {e}")
        return _failure(e)

    return {"success": True, "action": data.action, "result": result, "timestamp": _timestamp()}


@router.patch("")
def repair_database(
    _: AuthenticatedUser = Depends(require_service_role),
    executor: SQLExecutor = Depends(get_executor),
):
    """Repair profiles RLS policies and ensure the enhanced_assessment column"""
    try:
        return {"success": True, "results": repair_profiles(executor)}
    except Exception as e:
        logger.error(f"❌ Database repair failed: {e}")
        return _failure(e)


@router.get("/latest")
def latest_database_diagnosis(_: AuthenticatedUser = Depends(require_service_role)):
    """Diagnosis stored by the daily worker job"""
    diagnosis = get_cached_diagnosis()
    if diagnosis is None:
        raise HTTPException(status_code=404, detail="No database diagnosis available yet")
    return diagnosis
