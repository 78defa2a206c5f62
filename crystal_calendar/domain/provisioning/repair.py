"""Targeted repairs for the profiles table (RLS policies, enhanced_assessment column)"""

import logging

from . import sql_scripts
from .executor import SQLExecutor

logger = logging.getLogger(__name__)


def fix_profiles_rls(executor: SQLExecutor) -> bool:
    """Recreate the profiles policies: service role, owner, public read"""
    logger.info("🔧 Repairing profiles RLS policies...")
    try:
        executor.exec_sql(sql_scripts.FIX_PROFILES_RLS)
    except Exception as e:
        logger.error(f"❌ Failed to repair RLS policies: {e}")
        return False
    logger.info("✅ RLS policies repaired")
    return True


def ensure_enhanced_assessment_column(executor: SQLExecutor) -> bool:
    logger.info("🔧 Checking profiles.enhanced_assessment...")
    if executor.column_exists("profiles", "enhanced_assessment"):
        logger.info("✅ enhanced_assessment column already exists")
        return True

    logger.info("🔨 Adding enhanced_assessment column to profiles...")
    try:
        executor.exec_sql(sql_scripts.ADD_ENHANCED_ASSESSMENT_COLUMN)
    except Exception as e:
        logger.warning(
            f"⚠️ Could not add the column automatically, run manually: "
            f"{sql_scripts.ADD_ENHANCED_ASSESSMENT_COLUMN.strip()} ({e})"
        )
        return False
    logger.info("✅ enhanced_assessment column added")
    return True


def repair_profiles(executor: SQLExecutor) -> dict:
    logger.info("🚀 Starting profiles repair...")
    rls_fixed = fix_profiles_rls(executor)
    column_fixed = ensure_enhanced_assessment_column(executor)
    logger.info(f"📊 Profiles repair: rls_fixed={rls_fixed}, column_fixed={column_fixed}")
    return {"rls_fixed": rls_fixed, "column_fixed": column_fixed}
