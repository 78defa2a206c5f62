"""
Database migration service - idempotent provisioning, diagnosis and quick fixes.

There is no schema version table: every script is re-runnable and steps are
executed in source order. A failed step is reported and the run continues;
nothing is rolled back.
"""

import logging
import time
from typing import Optional

from ...config import MIGRATION_STEP_DELAY
from . import sql_scripts
from .executor import SQLExecutor, step_result

logger = logging.getLogger(__name__)

ENHANCED_ASSESSMENT_COLUMN = ("profiles", "enhanced_assessment")


class DatabaseMigration:
    """Provisioning operations over one SQL executor"""

    def __init__(self, executor: SQLExecutor, step_delay: float = MIGRATION_STEP_DELAY):
        self.executor = executor
        self.step_delay = step_delay

    def migration_steps(self) -> list[tuple[str, str]]:
        """(description, script) for a full migration, in execution order"""
        steps = [(description, sql) for _, description, sql in sql_scripts.TABLE_SCRIPTS]
        steps.extend(
            [
                ("Create indexes", sql_scripts.CREATE_INDEXES),
                ("Create trigger functions", sql_scripts.CREATE_TRIGGER_FUNCTIONS),
                ("Set up row level security policies", sql_scripts.SETUP_RLS_POLICIES),
            ]
        )
        return steps

    def run_migration(self) -> dict:
        logger.info("🚀 Starting database migration...")
        results = []

        for description, sql in self.migration_steps():
            result = self.executor.run_step(sql, description)
            results.append(result)
            if not result["success"]:
                logger.warning(f"⚠️ {description} failed, continuing with next step...")
            if self.step_delay:
                time.sleep(self.step_delay)

        success_count = sum(1 for r in results if r["success"])
        logger.info(f"📊 Migration finished: {success_count}/{len(results)} steps succeeded")
        return {"success": success_count == len(results), "results": results}

    def check_tables_exist(self) -> dict[str, bool]:
        status = {}
        for table in sql_scripts.REQUIRED_TABLES:
            try:
                status[table] = self.executor.table_exists(table)
            except Exception as e:
                logger.error(f"❌ Table check for {table} failed: {e}")
                status[table] = False

            if status[table]:
                logger.info(f"✅ Table {table} exists")
            else:
                logger.info(f"❌ Table {table} does not exist")
        return status

    def insert_basic_crystals(self, crystals: Optional[list[dict]] = None) -> bool:
        logger.info("🔮 Inserting basic crystal data...")
        try:
            self.executor.upsert_crystals(crystals or sql_scripts.BASIC_CRYSTALS)
        except Exception as e:
            logger.error(f"❌ Failed to insert basic crystal data: {e}")
            return False
        logger.info("✅ Basic crystal data inserted")
        return True

    def quick_fix(self) -> dict:
        """Run the quick-fix script, then verify the two usual suspects"""
        logger.info("🔧 Running quick fix...")
        results = []

        try:
            self.executor.exec_sql(sql_scripts.QUICK_FIX)
            results.append(step_result("Run SQL repair script", True))
            logger.info("✅ SQL repair script executed")
        except Exception as e:
            results.append(step_result("Run SQL repair script", False, e))
            logger.warning("⚠️ SQL repair script failed, checking state directly...")

        try:
            if self.executor.column_exists(*ENHANCED_ASSESSMENT_COLUMN):
                results.append(step_result("Check enhanced_assessment column", True))
                logger.info("✅ enhanced_assessment column exists")
            else:
                results.append(
                    step_result("Check enhanced_assessment column", False, "Column does not exist")
                )
                logger.info("❌ enhanced_assessment column does not exist")
        except Exception as e:
            results.append(step_result("Check enhanced_assessment column", False, e))

        try:
            if self.executor.rls_blocks_access("profiles"):
                results.append(
                    step_result("Check RLS permissions", False, "Row level security blocks access")
                )
                logger.info("❌ Row level security blocks access")
            else:
                results.append(step_result("Check RLS permissions", True))
                logger.info("✅ RLS permissions OK")
        except Exception as e:
            results.append(step_result("Check RLS permissions", False, e))

        success_count = sum(1 for r in results if r["success"])
        logger.info(f"📊 Quick fix finished: {success_count}/{len(results)} checks passed")
        return {"success": success_count > 0, "results": results}

    def diagnose_problem(self) -> dict:
        logger.info("🔍 Diagnosing database problems...")
        issues = []
        recommendations = []

        table_status = self.check_tables_exist()
        missing_tables = [table for table, exists in table_status.items() if not exists]
        if missing_tables:
            issues.append(f"Missing tables: {', '.join(missing_tables)}")
            recommendations.append("Run the database migration to create the missing tables")

        try:
            if not self.executor.column_exists(*ENHANCED_ASSESSMENT_COLUMN):
                issues.append("profiles table is missing the enhanced_assessment column")
                recommendations.append(
                    "Run in the SQL editor: ALTER TABLE profiles ADD COLUMN enhanced_assessment JSONB;"
                )
        except Exception as e:
            logger.error(f"❌ enhanced_assessment check failed: {e}")
            issues.append("Unable to check the enhanced_assessment column")

        try:
            if self.executor.rls_blocks_access("profiles"):
                issues.append("Row level security (RLS) is blocking data access")
                recommendations.append(
                    "Temporary workaround, run in the SQL editor: "
                    "ALTER TABLE profiles DISABLE ROW LEVEL SECURITY;"
                )
        except Exception as e:
            logger.error(f"❌ RLS check failed: {e}")
            issues.append("Unable to check RLS permissions")

        logger.info(f"📊 Found {len(issues)} issues, {len(recommendations)} recommendations")
        return {"issues": issues, "recommendations": recommendations}

    def create_all_tables(self) -> dict:
        failures = []
        for _, description, sql in sql_scripts.TABLE_SCRIPTS:
            result = self.executor.run_step(sql, description)
            if not result["success"]:
                failures.append(result["error"])

        created = len(sql_scripts.TABLE_SCRIPTS) - len(failures)
        logger.info(f"📊 Tables ready: {created}/{len(sql_scripts.TABLE_SCRIPTS)}")
        return step_result("Create all tables", not failures, failures or None)

    def complete_setup(self) -> dict:
        """Everything a fresh project needs before going live, as six reported steps"""
        logger.info("🚀 Starting complete database setup...")
        results = [
            self.executor.run_step(
                sql_scripts.CREATE_DATABASE_FUNCTIONS, "Create database functions"
            ),
            self.create_all_tables(),
        ]

        for description, sql in [
            ("Add missing columns", sql_scripts.ADD_MISSING_COLUMNS),
            ("Create indexes", sql_scripts.CREATE_INDEXES),
            ("Set up permissions", sql_scripts.SETUP_PERMISSIONS),
        ]:
            results.append(self.executor.run_step(sql, description))

        seeded = self.insert_basic_crystals(sql_scripts.EXTENDED_CRYSTALS)
        results.append(
            step_result(
                "Insert basic data", seeded, None if seeded else "Crystal seed data upsert failed"
            )
        )

        success_count = sum(1 for r in results if r["success"])
        logger.info(f"📊 Complete setup finished: {success_count}/{len(results)} steps succeeded")
        return {"success": success_count == len(results), "results": results}
