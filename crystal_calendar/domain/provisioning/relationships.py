"""
Foreign key relationship management.

The table scripts declare no inline foreign keys; the constraints below are
checked and created under fixed names so they can be verified later.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Optional

from .executor import SQLExecutor, step_result

logger = logging.getLogger(__name__)

HEALTHY_SCORE = 80


@dataclass(frozen=True)
class DatabaseRelationship:
    child_table: str
    child_column: str
    parent_table: str
    parent_column: str
    constraint_name: str
    on_delete: Optional[str] = "CASCADE"  # CASCADE | SET NULL | RESTRICT
    on_update: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


def _owned_by_user(table: str, prefix: str) -> DatabaseRelationship:
    return DatabaseRelationship(table, "user_id", "auth.users", "id", f"fk_{prefix}_user_id")


def _owned_by_profile(table: str, prefix: str) -> DatabaseRelationship:
    return DatabaseRelationship(table, "profile_id", "profiles", "id", f"fk_{prefix}_profile_id")


REQUIRED_RELATIONSHIPS = [
    _owned_by_user("profiles", "profiles"),
    _owned_by_user("design_works", "design_works"),
    _owned_by_profile("design_works", "design_works"),
    _owned_by_user("user_energy_records", "energy_records"),
    _owned_by_profile("user_energy_records", "energy_records"),
    _owned_by_user("meditation_sessions", "meditation_sessions"),
    _owned_by_profile("meditation_sessions", "meditation_sessions"),
    _owned_by_user("membership_info", "membership_info"),
    _owned_by_profile("membership_info", "membership_info"),
    _owned_by_user("user_favorite_crystals", "favorite_crystals"),
    DatabaseRelationship(
        "user_favorite_crystals",
        "crystal_id",
        "crystals",
        "id",
        "fk_favorite_crystals_crystal_id",
    ),
]


def generate_foreign_key_sql(relationship: DatabaseRelationship) -> str:
    sql = (
        f"ALTER TABLE {relationship.child_table} ADD CONSTRAINT {relationship.constraint_name} "
        f"FOREIGN KEY ({relationship.child_column}) "
        f"REFERENCES {relationship.parent_table}({relationship.parent_column})"
    )
    if relationship.on_delete:
        sql += f" ON DELETE {relationship.on_delete}"
    if relationship.on_update:
        sql += f" ON UPDATE {relationship.on_update}"
    return sql + ";"


class DatabaseRelationshipManager:
    def __init__(
        self,
        executor: SQLExecutor,
        relationships: Optional[list[DatabaseRelationship]] = None,
    ):
        self.executor = executor
        self.relationships = relationships or REQUIRED_RELATIONSHIPS

    def check_relationships(self) -> dict:
        existing = []
        missing = []

        for relationship in self.relationships:
            try:
                found = self.executor.foreign_key_exists(
                    relationship.constraint_name, relationship.child_table
                )
            except Exception as e:
                logger.warning(f"⚠️ Relationship check failed: {relationship.constraint_name} ({e})")
                found = False
            (existing if found else missing).append(relationship)

        return {"existing": existing, "missing": missing, "total": len(self.relationships)}

    def create_missing_relationships(self) -> dict:
        created = []
        failed = []

        missing = self.check_relationships()["missing"]
        logger.info(f"🔗 Found {len(missing)} missing relationships")

        for relationship in missing:
            logger.info(f"🔧 Creating relationship: {relationship.constraint_name}")
            try:
                self.executor.exec_sql(generate_foreign_key_sql(relationship))
            except Exception as e:
                logger.error(f"❌ Failed to create relationship {relationship.constraint_name}: {e}")
                failed.append({"relationship": relationship.to_dict(), "error": str(e)})
                continue
            logger.info(f"✅ Created relationship: {relationship.constraint_name}")
            created.append(relationship)

        return {"success": not failed, "created": created, "failed": failed}

    def repair_table_relationships(self) -> dict:
        """Check, create what is missing, verify: three reported steps"""
        results = []
        try:
            logger.info("🔍 Checking database relationships...")
            status = self.check_relationships()
            results.append(
                step_result(
                    f"Check relationships ({len(status['existing'])}/{status['total']} present)",
                    True,
                )
            )

            if status["missing"]:
                logger.info("🔧 Creating missing relationships...")
                created = self.create_missing_relationships()
                results.append(
                    step_result(
                        f"Create relationships ({len(created['created'])}/{len(status['missing'])} succeeded)",
                        created["success"],
                        created["failed"] or None,
                    )
                )
            else:
                results.append(step_result("All relationships already exist", True))

            logger.info("🔍 Verifying relationship integrity...")
            final = self.check_relationships()
            results.append(
                step_result(
                    f"Verify integrity ({len(final['existing'])}/{final['total']} valid)",
                    not final["missing"],
                )
            )
        except Exception as e:
            logger.error(f"❌ Relationship repair failed: {e}")
            results.append(step_result("Repair relationships", False, e))
            return {"success": False, "results": results}

        overall = all(r["success"] for r in results)
        logger.info(f"📊 Relationship repair {'succeeded' if overall else 'partially succeeded'}")
        return {"success": overall, "results": results}

    def get_relationship_report(self) -> dict:
        status = self.check_relationships()
        existing, missing, total = status["existing"], status["missing"], status["total"]
        health_score = round(len(existing) / total * 100) if total else 0

        recommendations = []
        if missing:
            recommendations.append(f"{len(missing)} missing relationships need to be created")
            recommendations.append("Run 'repair relationships' to create them automatically")
        if health_score < HEALTHY_SCORE:
            recommendations.append("Relationship integrity is low, repair as soon as possible")
        if any(r.child_table == "profiles" for r in missing):
            recommendations.append("profiles relationship problems may affect user data access")

        return {
            "summary": {
                "total": total,
                "existing": len(existing),
                "missing": len(missing),
                "healthScore": health_score,
            },
            "details": {
                "existing": [r.to_dict() for r in existing],
                "missing": [r.to_dict() for r in missing],
            },
            "recommendations": recommendations,
        }
