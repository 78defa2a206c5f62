"""SQLExecutor against the in-memory SQLite database."""

from types import SimpleNamespace

import pytest
from sqlalchemy import text

from crystal_calendar.database import engine
from crystal_calendar.domain.provisioning import sql_scripts
from crystal_calendar.domain.provisioning.exceptions import ProvisioningError, SQLExecutionError
from crystal_calendar.domain.provisioning.executor import SQLExecutor, get_sqlstate, step_result
from crystal_calendar.models import Crystal


@pytest.fixture
def direct(db):
    return SQLExecutor(engine, mode="direct")


class TestHelpers:
    def test_step_result_stringifies_exceptions(self):
        result = step_result("Create indexes", False, ValueError("boom"))
        assert result == {"step": "Create indexes", "success": False, "error": "boom"}

    def test_step_result_without_error(self):
        assert step_result("Create indexes", True) == {"step": "Create indexes", "success": True}

    def test_sqlstate_from_driver_error(self):
        exc = SimpleNamespace(orig=SimpleNamespace(pgcode="42P01"))
        assert get_sqlstate(exc) == "42P01"

    def test_unknown_mode(self):
        with pytest.raises(ProvisioningError):
            SQLExecutor(engine, mode="ftp")


class TestProbes:
    def test_table_exists(self, direct):
        assert direct.table_exists("profiles")
        assert not direct.table_exists("ghost_table")

    def test_column_exists(self, direct):
        assert direct.column_exists("profiles", "enhanced_assessment")
        assert not direct.column_exists("profiles", "favourite_colour")

    def test_identifier_injection_rejected(self, direct):
        with pytest.raises(ProvisioningError):
            direct.table_exists("profiles; DROP TABLE profiles")

    def test_rls_does_not_block_sqlite(self, direct):
        assert not direct.rls_blocks_access("profiles")

    def test_derive_probe_for_table_script(self, direct):
        probe = direct.derive_probe(sql_scripts.CREATE_PROFILES_TABLE)
        assert probe is not None and probe()

    def test_derive_probe_for_missing_columns(self, direct):
        probe = direct.derive_probe("ALTER TABLE profiles ADD COLUMN IF NOT EXISTS mood_score INTEGER;")
        assert probe is not None and not probe()

    def test_no_probe_for_plain_statement(self, direct):
        assert direct.derive_probe("GRANT USAGE ON SCHEMA public TO anon;") is None


class TestRunStep:
    def test_successful_script(self, direct):
        result = direct.run_step("CREATE TABLE IF NOT EXISTS scratch_notes (id INTEGER PRIMARY KEY)", "Create scratch")
        try:
            assert result == {"step": "Create scratch", "success": True}
            assert direct.table_exists("scratch_notes")
        finally:
            direct.exec_sql("DROP TABLE scratch_notes")

    def test_failed_script_without_end_state(self, direct):
        sql = "CREATE TABLE ghosts (id INTEGER"
        result = direct.run_step(sql, "Create ghosts")
        assert not result["success"]
        assert result["error"].startswith("Manual execution required in the SQL editor: CREATE TABLE ghosts")

    def test_failed_script_with_end_state_in_place(self, direct):
        result = direct.run_step("SELECT * FROM", "Broken", probe=lambda: True)
        assert result["success"]

    def test_probe_errors_are_reported_not_raised(self, direct):
        def exploding_probe():
            raise RuntimeError("probe failed")

        result = direct.run_step("SELECT * FROM", "Broken", probe=exploding_probe)
        assert not result["success"]

    def test_direct_mode_raises_execution_error(self, direct):
        with pytest.raises(SQLExecutionError):
            direct.exec_sql("SELECT * FROM")

    def test_rpc_mode_without_exec_sql(self, db):
        with pytest.raises(SQLExecutionError):
            SQLExecutor(engine, mode="rpc").exec_sql("SELECT 1")


class TestUpsertCrystals:
    def test_insert_then_update(self, direct, db):
        direct.upsert_crystals(sql_scripts.BASIC_CRYSTALS)
        assert db.query(Crystal).count() == len(sql_scripts.BASIC_CRYSTALS)

        changed = [dict(row, description="updated") for row in sql_scripts.BASIC_CRYSTALS]
        direct.upsert_crystals(changed)
        db.expire_all()
        assert db.query(Crystal).count() == len(sql_scripts.BASIC_CRYSTALS)
        assert {c.description for c in db.query(Crystal)} == {"updated"}

    def test_empty_rows(self, direct, db):
        direct.upsert_crystals([])
        with engine.connect() as conn:
            assert conn.execute(text("SELECT COUNT(*) FROM crystals")).scalar() == 0
