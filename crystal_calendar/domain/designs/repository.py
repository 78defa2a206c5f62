"""Design repository - Database operations for design works"""

from uuid import UUID

from sqlalchemy.orm import Session

from ...models import DesignWork


class DesignRepository:
    """Repository for design_works database operations"""

    @staticmethod
    def create_design(db: Session, user_id: UUID, **design_data) -> DesignWork:
        design = DesignWork(user_id=user_id, **design_data)
        db.add(design)
        db.commit()
        db.refresh(design)
        return design

    @staticmethod
    def get_designs(db: Session, user_id: UUID) -> list[DesignWork]:
        """All designs owned by a user, newest first"""
        return (
            db.query(DesignWork)
            .filter(DesignWork.user_id == user_id)
            .order_by(DesignWork.created_at.desc())
            .all()
        )
