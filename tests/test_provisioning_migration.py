"""DatabaseMigration over a fake executor."""

from crystal_calendar.domain.provisioning import sql_scripts
from crystal_calendar.domain.provisioning.migration import DatabaseMigration


def migration(executor):
    return DatabaseMigration(executor, step_delay=0)


class TestRunMigration:
    def test_fourteen_steps_in_source_order(self, fake_executor):
        steps = [description for description, _ in migration(fake_executor).migration_steps()]
        assert len(steps) == 14
        assert steps[0] == "Create profiles table"
        assert steps[10] == "Create monitoring_reports table"
        assert steps[-3:] == [
            "Create indexes",
            "Create trigger functions",
            "Set up row level security policies",
        ]

    def test_all_steps_succeed(self, fake_executor):
        result = migration(fake_executor).run_migration()
        assert result["success"]
        assert len(result["results"]) == 14
        assert fake_executor.steps == [d for d, _ in migration(fake_executor).migration_steps()]

    def test_failure_does_not_stop_the_run(self, fake_executor):
        fake_executor.failing_steps = {"Create indexes"}
        result = migration(fake_executor).run_migration()
        assert not result["success"]
        assert len(result["results"]) == 14
        failed = [r["step"] for r in result["results"] if not r["success"]]
        assert failed == ["Create indexes"]
        assert result["results"][-1]["success"]


class TestTablesAndSeeds:
    def test_check_tables_exist(self, fake_executor):
        fake_executor.tables.discard("crystals")
        status = migration(fake_executor).check_tables_exist()
        assert list(status) == sql_scripts.REQUIRED_TABLES
        assert status["crystals"] is False
        assert status["profiles"] is True

    def test_insert_basic_crystals(self, fake_executor):
        assert migration(fake_executor).insert_basic_crystals()
        assert [c["name"] for c in fake_executor.crystals] == [c["name"] for c in sql_scripts.BASIC_CRYSTALS]

    def test_insert_basic_crystals_failure(self, fake_executor):
        fake_executor.sql_fails = True
        assert migration(fake_executor).insert_basic_crystals() is False

    def test_create_all_tables_collects_failures(self, fake_executor):
        fake_executor.failing_steps = {"Create crystals table"}
        result = migration(fake_executor).create_all_tables()
        assert not result["success"]
        assert len(result["error"]) == 1


class TestQuickFix:
    def test_healthy_database(self, fake_executor):
        result = migration(fake_executor).quick_fix()
        assert result["success"]
        assert [r["success"] for r in result["results"]] == [True, True, True]

    def test_script_fails_but_state_is_fine(self, fake_executor):
        fake_executor.sql_fails = True
        result = migration(fake_executor).quick_fix()
        assert result["success"]
        assert [r["success"] for r in result["results"]] == [False, True, True]

    def test_everything_broken(self, fake_executor):
        fake_executor.sql_fails = True
        fake_executor.columns.clear()
        fake_executor.rls_blocked = True
        result = migration(fake_executor).quick_fix()
        assert not result["success"]
        assert result["results"][2]["error"] == "Row level security blocks access"


class TestDiagnose:
    def test_no_issues(self, fake_executor):
        assert migration(fake_executor).diagnose_problem() == {"issues": [], "recommendations": []}

    def test_all_known_problems(self, fake_executor):
        fake_executor.tables -= {"crystals", "usage_stats"}
        fake_executor.columns.clear()
        fake_executor.rls_blocked = True
        diagnosis = migration(fake_executor).diagnose_problem()
        assert len(diagnosis["issues"]) == 3
        assert "usage_stats" in diagnosis["issues"][0] and "crystals" in diagnosis["issues"][0]
        assert any("enhanced_assessment" in r for r in diagnosis["recommendations"])
        assert any("DISABLE ROW LEVEL SECURITY" in r for r in diagnosis["recommendations"])


class TestCompleteSetup:
    def test_six_steps_and_extended_seed(self, fake_executor):
        result = migration(fake_executor).complete_setup()
        assert result["success"]
        assert [r["step"] for r in result["results"]] == [
            "Create database functions",
            "Create all tables",
            "Add missing columns",
            "Create indexes",
            "Set up permissions",
            "Insert basic data",
        ]
        assert len(fake_executor.crystals) == len(sql_scripts.EXTENDED_CRYSTALS)

    def test_partial_failure_reported(self, fake_executor):
        fake_executor.failing_steps = {"Set up permissions"}
        result = migration(fake_executor).complete_setup()
        assert not result["success"]
        assert sum(1 for r in result["results"] if not r["success"]) == 1
