"""
Database provisioning runner script
Usage: python run_migration.py <command> [rpc|direct]

Commands:
    run                     Create tables, indexes, triggers and RLS policies
    complete-setup          Functions, tables, columns, indexes, permissions and seed data
    quick-fix               Run the quick-fix script and verify the usual suspects
    diagnose                Report missing tables, columns and blocking RLS policies
    repair-relationships    Create missing foreign key constraints
    repair-profiles         Recreate profiles RLS policies and the enhanced_assessment column
    seed-crystals           Insert or update the basic crystal catalogue
"""
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from crystal_calendar.config import PROVISIONING_MODE
from crystal_calendar.database import engine
from crystal_calendar.domain.provisioning.executor import SQLExecutor
from crystal_calendar.domain.provisioning.migration import DatabaseMigration
from crystal_calendar.domain.provisioning.relationships import DatabaseRelationshipManager
from crystal_calendar.domain.provisioning.repair import repair_profiles

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger(__name__)

COMMANDS = {
    "run": lambda executor: DatabaseMigration(executor).run_migration(),
    "complete-setup": lambda executor: DatabaseMigration(executor).complete_setup(),
    "quick-fix": lambda executor: DatabaseMigration(executor).quick_fix(),
    "diagnose": lambda executor: DatabaseMigration(executor).diagnose_problem(),
    "repair-relationships": lambda executor: DatabaseRelationshipManager(executor).repair_table_relationships(),
    "repair-profiles": repair_profiles,
    "seed-crystals": lambda executor: {"success": DatabaseMigration(executor).insert_basic_crystals()},
}


def run_command(command: str, mode: str = PROVISIONING_MODE) -> dict:
    executor = SQLExecutor(engine, mode=mode)
    logger.info(f"🚀 Running '{command}' ({mode} mode, {engine.dialect.name})")
    return COMMANDS[command](executor)


if __name__ == "__main__":
    if len(sys.argv) < 2 or sys.argv[1] not in COMMANDS:
        logger.error(f"Usage: python run_migration.py <{'|'.join(COMMANDS)}> [rpc|direct]")
        sys.exit(1)

    try:
        result = run_command(sys.argv[1], *sys.argv[2:3])
    except Exception as e:
        logger.error(f"❌ Command failed: {e}")
        sys.exit(1)

    print(json.dumps(result, indent=2, ensure_ascii=False, default=str))
    if result.get("success") is False:
        logger.error("❌ Some steps failed, see the results above")
        sys.exit(1)
    logger.info("✅ Done")
