"""Energy router - daily prediction, calendar, schedule suggestion and MBTI scoring"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from .mbti import calculate_mbti_type
from .prediction import generate_energy_calendar, generate_energy_prediction
from .schedule import generate_personalized_schedule, toggle_block
from .schemas import (
    DailyEnergyState,
    DaySchedule,
    EnergyCalendarResponse,
    MBTIAnswers,
    MBTIResult,
    UserProfile,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Energy"])


class ToggleBlockRequest(BaseModel):
    schedule: DaySchedule
    blockId: str


def _profile_from_query(
    mbti: Optional[str], element: Optional[str], zodiac: Optional[str]
) -> Optional[UserProfile]:
    if not (mbti or element or zodiac):
        return None
    return UserProfile(
        mbti_like_type=mbti,
        inferred_element=element,
        inferred_zodiac=zodiac,
        mbti=mbti,
        element=element,
    )


@router.get("/energy/prediction", response_model=DailyEnergyState)
async def get_energy_prediction(
    day: Optional[date] = Query(None, alias="date"),
    mbti: Optional[str] = Query(None),
    element: Optional[str] = Query(None),
    zodiac: Optional[str] = Query(None),
):
    """Energy state for one day (today by default)"""
    return generate_energy_prediction(day or date.today(), _profile_from_query(mbti, element, zodiac))


@router.get("/energy/calendar", response_model=EnergyCalendarResponse)
async def get_energy_calendar(
    center: Optional[date] = Query(None),
    span: int = Query(15, ge=1, le=31),
    mbti: Optional[str] = Query(None),
    element: Optional[str] = Query(None),
    zodiac: Optional[str] = Query(None),
):
    """Energy forecast for the days around center (±span)"""
    center = center or date.today()
    days = generate_energy_calendar(center, _profile_from_query(mbti, element, zodiac), span)
    return EnergyCalendarResponse(center=center, span=span, days=days)


@router.get("/schedule/suggestion", response_model=DaySchedule)
async def get_schedule_suggestion(
    day: Optional[date] = Query(None, alias="date"),
    mbti: Optional[str] = Query(None),
    element: Optional[str] = Query(None),
):
    return generate_personalized_schedule(day or date.today(), _profile_from_query(mbti, element, None))


@router.post("/schedule/toggle", response_model=DaySchedule)
async def toggle_schedule_block(data: ToggleBlockRequest):
    return toggle_block(data.schedule, data.blockId)


@router.post("/mbti/calculate", response_model=MBTIResult)
async def calculate_mbti(answers: MBTIAnswers):
    result = calculate_mbti_type(answers)
    if result is None:
        logger.warning("⚠️ MBTI calculation requested with incomplete answers")
        raise HTTPException(
            status_code=422, detail="All 28 questions must be answered (7 per dimension)"
        )
    logger.info(f"✅ MBTI type calculated: {result.type}")
    return result
