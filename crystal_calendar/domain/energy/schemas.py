"""Energy domain schemas - Pydantic models for predictions, schedules and MBTI scoring"""

from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, Field


class UserProfile(BaseModel):
    """Subset of the assessed profile used by the daily heuristics"""

    mbti_like_type: Optional[str] = None  # free text, e.g. "INFJ - The Advocate"
    inferred_element: Optional[str] = None
    inferred_zodiac: Optional[str] = None
    mbti: Optional[str] = None
    element: Optional[str] = None


class DailyEnergyState(BaseModel):
    date: date
    energy_level: int = Field(ge=1, le=5)
    dominant_chakra: str
    recommended_crystal: str
    energy_color: str
    mbti_mood: str
    element_balance: str


class EnergyCalendarResponse(BaseModel):
    center: date
    span: int
    days: list[DailyEnergyState]


BlockCategory = Literal["work", "rest", "personal", "energy", "social", "other"]
EnergyImpact = Literal["high", "medium", "low", "neutral", "restorative"]


class TimeBlock(BaseModel):
    id: str
    time: str
    activity: str
    category: BlockCategory
    energy_impact: EnergyImpact
    completed: bool = False


class EnergyForecast(BaseModel):
    morning: int
    afternoon: int
    evening: int
    overall: int


class DaySchedule(BaseModel):
    date: date
    energy_forecast: EnergyForecast
    blocks: list[TimeBlock]
    notes: str


Answer = Optional[Literal["A", "B"]]


class MBTIAnswers(BaseModel):
    """Seven forced-choice answers per dimension; None marks an unanswered question"""

    ei: list[Answer] = Field(default_factory=list)
    sn: list[Answer] = Field(default_factory=list)
    tf: list[Answer] = Field(default_factory=list)
    jp: list[Answer] = Field(default_factory=list)


class DimensionScore(BaseModel):
    scoreA: int
    scoreB: int
    tendency: str


class MBTIResult(BaseModel):
    type: str
    scores: dict[str, DimensionScore]
    isComplete: bool = True
