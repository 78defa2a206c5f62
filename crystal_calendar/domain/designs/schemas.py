"""Design domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class SaveDesignRequest(BaseModel):
    """Schema for saving a generated design"""

    title: Optional[str] = Field(None, max_length=200)
    description: Any = None  # free text or the structured design description
    mainStone: Optional[str] = Field(None, max_length=100)
    auxiliaryStones: list[str] = Field(default_factory=list)
    style: Optional[str] = Field(None, max_length=100)
    occasion: Optional[str] = Field(None, max_length=100)
    preferences: dict = Field(default_factory=dict)
    imageUrl: str = Field(min_length=1)
    aiAnalysis: Optional[dict] = None
    isPublic: bool = False


class DesignWorkResponse(BaseModel):
    """A design_works row as stored"""

    id: UUID
    user_id: Optional[UUID] = None
    title: Optional[str] = None
    description: Optional[str] = None
    main_stone: Optional[str] = None
    auxiliary_stones: Optional[list] = None
    style: Optional[str] = None
    occasion: Optional[str] = None
    preferences: Optional[dict] = None
    image_url: str
    ai_analysis: Optional[dict] = None
    is_public: bool = False
    is_favorite: bool = False
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
