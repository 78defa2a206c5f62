"""Design router - FastAPI endpoints for design works"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...auth import AuthenticatedUser, get_current_user
from ...database import get_db
from .schemas import DesignWorkResponse, SaveDesignRequest
from .service import DesignService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Designs"])


def get_design_service(db: Session = Depends(get_db)) -> DesignService:
    """Dependency injection for DesignService"""
    return DesignService(db)


@router.post("/save-design")
async def save_design(
    data: SaveDesignRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    service: DesignService = Depends(get_design_service),
):
    try:
        design = service.save_design(data, current_user)
    except SQLAlchemyError as e:
        service.db.rollback()
        logger.error(f"❌ Failed to save design: {e}")
        return JSONResponse(status_code=500, content={"success": False, "error": str(e)})

    row = DesignWorkResponse.model_validate(design).model_dump(mode="json")
    return {"success": True, "data": [row]}


@router.get("/designs", response_model=list[DesignWorkResponse])
async def get_designs(
    current_user: AuthenticatedUser = Depends(get_current_user),
    service: DesignService = Depends(get_design_service),
):
    """Designs saved by the current user, newest first"""
    return service.get_designs(current_user)
