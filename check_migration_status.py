#!/usr/bin/env python3
"""
Script to check the provisioning status of the database
Usage: python check_migration_status.py
"""

from crystal_calendar.database import engine
from crystal_calendar.domain.provisioning.executor import SQLExecutor
from crystal_calendar.domain.provisioning.migration import DatabaseMigration
from crystal_calendar.domain.provisioning.relationships import DatabaseRelationshipManager


def check_migration_status():
    """Print table status, known problems and relationship integrity"""
    executor = SQLExecutor(engine)
    migration = DatabaseMigration(executor)

    try:
        print("🔍 Checking database provisioning status...\n")

        print("1️⃣ Checking required tables...")
        table_status = migration.check_tables_exist()
        for table, exists in table_status.items():
            print(f"   {'✅' if exists else '❌'} {table}")
        missing = [table for table, exists in table_status.items() if not exists]
        if missing:
            print(f"   💡 Run: python run_migration.py run")

        print(f"\n2️⃣ Diagnosing known problems...")
        diagnosis = migration.diagnose_problem()
        if diagnosis["issues"]:
            for issue in diagnosis["issues"]:
                print(f"   ⚠️  {issue}")
            for recommendation in diagnosis["recommendations"]:
                print(f"   💡 {recommendation}")
        else:
            print(f"   ✅ No problems found!")

        print(f"\n3️⃣ Checking foreign key relationships...")
        report = DatabaseRelationshipManager(executor).get_relationship_report()
        summary = report["summary"]
        print(f"   📊 Statistics:")
        print(f"   - Total: {summary['total']}")
        print(f"   - Existing: {summary['existing']}")
        print(f"   - Missing: {summary['missing']}")
        print(f"   - Health score: {summary['healthScore']}")
        for relationship in report["details"]["missing"]:
            print(f"   ✗ {relationship['constraint_name']} ({relationship['child_table']}.{relationship['child_column']})")
        for recommendation in report["recommendations"]:
            print(f"   💡 {recommendation}")

        print(f"\n{'='*80}")
        print(f"✅ Migration check complete!")
        print(f"{'='*80}\n")

    except Exception as e:
        print(f"\n❌ Error during migration check: {e}")
        import traceback
        traceback.print_exc()


if __name__ == "__main__":
    check_migration_status()
