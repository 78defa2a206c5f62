"""
SQL executor for provisioning scripts.

Scripts run through the public.exec_sql remote procedure ("rpc" mode, the way a
Supabase project exposes DDL to the service role) or straight on the driver
connection ("direct" mode). When a script cannot be executed, an existence
probe decides whether the desired end state is already in place.
"""

import logging
import re
from typing import Callable, Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DBAPIError

from ...config import PROVISIONING_MODE
from ...models import Crystal
from .exceptions import ProvisioningError, RPCUnavailableError, SQLExecutionError

logger = logging.getLogger(__name__)

UNDEFINED_TABLE = "42P01"
UNDEFINED_FUNCTION = "42883"
INSUFFICIENT_PRIVILEGE = "42501"

IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")
CREATE_TABLE_PATTERN = re.compile(r"CREATE TABLE (?:IF NOT EXISTS )?([\w.]+)", re.IGNORECASE)
ADD_COLUMN_PATTERN = re.compile(
    r"ALTER TABLE\s+([\w.]+)\s+ADD COLUMN\s+(?:IF NOT EXISTS\s+)?(\w+)", re.IGNORECASE
)
CREATE_FUNCTION_PATTERN = re.compile(
    r"CREATE (?:OR REPLACE )?FUNCTION\s+([\w.]+)\s*\(", re.IGNORECASE
)

MANUAL_SQL_PREVIEW = 100


def get_sqlstate(exc: DBAPIError) -> Optional[str]:
    """SQLSTATE of the driver error (psycopg2 pgcode / psycopg sqlstate)"""
    orig = getattr(exc, "orig", None)
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def _check_identifier(name: str) -> str:
    if not IDENTIFIER.match(name):
        raise ProvisioningError(f"Invalid SQL identifier: {name!r}")
    return name


def step_result(step: str, success: bool, error=None) -> dict:
    result = {"step": step, "success": success}
    if error is not None:
        result["error"] = error if isinstance(error, (str, list, dict)) else str(error)
    return result


class SQLExecutor:
    """Runs provisioning scripts and existence probes against one engine"""

    def __init__(self, engine: Engine, mode: str = PROVISIONING_MODE):
        if mode not in ("rpc", "direct"):
            raise ProvisioningError(f"Unknown provisioning mode: {mode}")
        self.engine = engine
        self.mode = mode

    # ------------------------------------------------------------------
    # Script execution
    # ------------------------------------------------------------------

    def exec_sql(self, sql: str) -> None:
        """Execute one script; raises RPCUnavailableError or SQLExecutionError"""
        if self.mode == "direct":
            try:
                with self.engine.begin() as conn:
                    conn.exec_driver_sql(sql)
            except DBAPIError as e:
                raise SQLExecutionError(str(e.orig)) from e
            return

        try:
            with self.engine.begin() as conn:
                outcome = conn.execute(text("SELECT public.exec_sql(:sql)"), {"sql": sql}).scalar()
        except DBAPIError as e:
            if get_sqlstate(e) == UNDEFINED_FUNCTION:
                raise RPCUnavailableError("public.exec_sql is not installed") from e
            raise SQLExecutionError(str(e.orig)) from e

        if isinstance(outcome, str) and outcome.startswith("ERROR"):
            raise SQLExecutionError(outcome)

    def run_step(
        self, sql: str, description: str, probe: Optional[Callable[[], bool]] = None
    ) -> dict:
        """
        Execute a script as one reported step.

        Never raises: on failure the probe (given, or derived from the script)
        decides whether the end state already exists, otherwise the step is
        reported as needing manual execution.
        """
        logger.info(f"🔄 {description}...")
        try:
            self.exec_sql(sql)
            logger.info(f"✅ {description} succeeded")
            return step_result(description, True)
        except RPCUnavailableError:
            logger.warning("⚠️ exec_sql function not available, falling back to probes")
        except SQLExecutionError as e:
            logger.warning(f"⚠️ {description} failed, falling back to probes: {e}")

        probe = probe or self.derive_probe(sql)
        if probe is not None:
            try:
                if probe():
                    logger.info(f"✅ {description} succeeded (already in place)")
                    return step_result(description, True)
            except Exception as e:
                logger.warning(f"⚠️ Probe for '{description}' failed: {e}")

        logger.warning(f"⚠️ {description} requires manual execution")
        return step_result(
            description,
            False,
            f"Manual execution required in the SQL editor: {sql.strip()[:MANUAL_SQL_PREVIEW]}...",
        )

    def derive_probe(self, sql: str) -> Optional[Callable[[], bool]]:
        """Existence check implied by a script (table, added columns, or functions)"""
        table_match = CREATE_TABLE_PATTERN.search(sql)
        if table_match:
            table = table_match.group(1)
            return lambda: self.table_exists(table)

        columns = ADD_COLUMN_PATTERN.findall(sql)
        if columns:
            return lambda: all(self.column_exists(table, column) for table, column in columns)

        functions = CREATE_FUNCTION_PATTERN.findall(sql)
        if functions:
            return lambda: all(self.function_exists(name) for name in functions)

        return None

    # ------------------------------------------------------------------
    # Probes
    # ------------------------------------------------------------------

    def table_exists(self, table: str) -> bool:
        """Only an undefined-table error means the table is missing"""
        table = _check_identifier(table)
        try:
            with self.engine.connect() as conn:
                conn.execute(text(f"SELECT id FROM {table} LIMIT 1"))
            return True
        except DBAPIError as e:
            if get_sqlstate(e) == UNDEFINED_TABLE or "no such table" in str(e.orig):
                return False
            logger.debug(f"🔍 Table {table} probe error treated as present: {e.orig}")
            return True

    def column_exists(self, table: str, column: str) -> bool:
        table = _check_identifier(table)
        column = _check_identifier(column)
        try:
            with self.engine.connect() as conn:
                conn.execute(text(f"SELECT {column} FROM {table} LIMIT 1"))
            return True
        except DBAPIError as e:
            logger.debug(f"🔍 Column {table}.{column} probe failed: {e.orig}")
            return False

    def function_exists(self, name: str) -> bool:
        name = _check_identifier(name)
        try:
            with self.engine.connect() as conn:
                found = conn.execute(
                    text("SELECT EXISTS (SELECT 1 FROM pg_proc WHERE proname = :name)"),
                    {"name": name.split(".")[-1]},
                ).scalar()
            return bool(found)
        except DBAPIError as e:
            logger.debug(f"🔍 Function {name} probe failed: {e.orig}")
            return False

    def rls_blocks_access(self, table: str = "profiles") -> bool:
        """True when row-level security rejects a plain read"""
        table = _check_identifier(table)
        try:
            with self.engine.connect() as conn:
                conn.execute(text(f"SELECT id FROM {table} LIMIT 1"))
            return False
        except DBAPIError as e:
            return (
                get_sqlstate(e) == INSUFFICIENT_PRIVILEGE
                or "row-level security" in str(e.orig)
            )

    def foreign_key_exists(self, constraint_name: str, table: str) -> bool:
        """Uses check_foreign_key_exists in rpc mode, information_schema otherwise"""
        params = {"constraint_name": constraint_name, "table_name": table}
        if self.mode == "rpc":
            try:
                with self.engine.connect() as conn:
                    return bool(
                        conn.execute(
                            text("SELECT public.check_foreign_key_exists(:constraint_name, :table_name)"),
                            params,
                        ).scalar()
                    )
            except DBAPIError as e:
                logger.debug(f"🔍 check_foreign_key_exists unavailable: {e.orig}")

        with self.engine.connect() as conn:
            count = conn.execute(
                text(
                    "SELECT COUNT(*) FROM information_schema.table_constraints "
                    "WHERE constraint_type = 'FOREIGN KEY' "
                    "AND constraint_name = :constraint_name AND table_name = :table_name"
                ),
                params,
            ).scalar()
        return bool(count)

    # ------------------------------------------------------------------
    # Data
    # ------------------------------------------------------------------

    def upsert_crystals(self, rows: list[dict]) -> None:
        """Insert or update crystals keyed on their unique name"""
        if not rows:
            return
        dialect = self.engine.dialect.name
        if dialect == "postgresql":
            from sqlalchemy.dialects.postgresql import insert
        elif dialect == "sqlite":
            from sqlalchemy.dialects.sqlite import insert
        else:
            raise ProvisioningError(f"Upsert not supported on {dialect}")

        stmt = insert(Crystal.__table__)
        updates = {key: stmt.excluded[key] for key in rows[0] if key != "name"}
        stmt = stmt.on_conflict_do_update(index_elements=["name"], set_=updates)
        with self.engine.begin() as conn:
            conn.execute(stmt, rows)
