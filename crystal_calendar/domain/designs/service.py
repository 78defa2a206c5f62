"""Design service - Business logic for saving and listing design works"""

import json
import logging
from uuid import UUID

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...auth import AuthenticatedUser
from ...models import DesignWork
from .repository import DesignRepository
from .schemas import SaveDesignRequest

logger = logging.getLogger(__name__)


def _user_uuid(user: AuthenticatedUser) -> UUID:
    try:
        return UUID(str(user.id))
    except ValueError:
        raise HTTPException(status_code=401, detail="Token subject is not a valid user id")


class DesignService:
    """Service layer for design works"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = DesignRepository()

    def save_design(self, data: SaveDesignRequest, user: AuthenticatedUser) -> DesignWork:
        logger.info(f"📥 Saving design for user_id: {user.id}")

        description = data.description
        if description is not None and not isinstance(description, str):
            description = json.dumps(description, ensure_ascii=False)

        design = self.repo.create_design(
            self.db,
            _user_uuid(user),
            title=data.title,
            description=description,
            main_stone=data.mainStone,
            auxiliary_stones=data.auxiliaryStones,
            style=data.style,
            occasion=data.occasion,
            preferences=data.preferences,
            image_url=data.imageUrl,
            ai_analysis=data.aiAnalysis,
            is_public=data.isPublic,
        )
        logger.info(f"✅ Design {design.id} saved (public={design.is_public})")
        return design

    def get_designs(self, user: AuthenticatedUser) -> list[DesignWork]:
        return self.repo.get_designs(self.db, _user_uuid(user))
