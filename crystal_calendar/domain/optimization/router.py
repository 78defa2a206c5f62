"""System optimization router - database and collector metrics for operators"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...auth import AuthenticatedUser, require_service_role
from ...database import get_db
from ..monitoring.collector import monitoring
from .service import build_optimization_report

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/system-optimization", tags=["System Optimization"])


@router.get("")
async def get_system_optimization(
    _: AuthenticatedUser = Depends(require_service_role),
    db: Session = Depends(get_db),
):
    try:
        return await build_optimization_report(db, monitoring)
    except SQLAlchemyError as e:
        logger.error(f"❌ Failed to collect optimization metrics: {e}")
        return JSONResponse(status_code=500, content={"success": False, "error": str(e)})
