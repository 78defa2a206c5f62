"""Personalised day schedule suggestions"""

from datetime import date
from typing import Optional

from fastapi import HTTPException

from .prediction import day_of_week
from .schemas import DaySchedule, EnergyForecast, TimeBlock, UserProfile

DEFAULT_ENERGY_FORECAST = {"morning": 7, "afternoon": 6, "evening": 5, "overall": 6}

DEFAULT_NOTES = "A schedule suggestion based on your energy state and personal preferences."
INTROVERT_NOTES = (
    "Adjusted for your introverted nature: more time for solitude and self-recovery."
)

# (time, activity, category, energy impact)
WEEKDAY_TEMPLATE = [
    ("07:00 - 07:30", "Morning meditation and energy activation", "energy", "restorative"),
    ("07:30 - 08:30", "Breakfast and preparation", "personal", "neutral"),
    ("09:00 - 12:00", "High-focus work session", "work", "high"),
    ("12:00 - 13:00", "Lunch and short break", "rest", "restorative"),
    ("13:00 - 16:00", "Creative work and meetings", "work", "medium"),
    ("16:00 - 16:30", "Energy recovery break", "energy", "restorative"),
    ("16:30 - 18:00", "Email and wrap-up", "work", "low"),
    ("18:30 - 19:30", "Dinner and relaxation", "personal", "neutral"),
    ("20:00 - 21:30", "Personal time / hobbies", "personal", "medium"),
    ("21:30 - 22:00", "Bedtime meditation and energy balancing", "energy", "restorative"),
]

WEEKEND_TEMPLATE = [
    ("08:00 - 08:30", "Morning meditation and energy activation", "energy", "restorative"),
    ("08:30 - 09:30", "Leisurely breakfast", "personal", "neutral"),
    ("10:00 - 12:00", "Outdoor activity / exercise", "personal", "high"),
    ("12:30 - 14:00", "Lunch and rest", "rest", "restorative"),
    ("14:00 - 16:00", "Creative time / hobbies", "personal", "medium"),
    ("16:00 - 18:00", "Social activities / family time", "social", "medium"),
    ("18:30 - 20:00", "Dinner and relaxation", "personal", "neutral"),
    ("20:00 - 21:30", "Light entertainment", "rest", "low"),
    ("21:30 - 22:00", "Bedtime meditation and energy balancing", "energy", "restorative"),
]

SOCIAL_ACTIVITY = "Social activities"
QUIET_ACTIVITY = "Quiet personal time"

# English and Chinese element names
ELEMENT_ACTIVITIES = {
    "fire": "Energetic exercise or creative activity",
    "火": "Energetic exercise or creative activity",
    "water": "Meditation or emotional exploration",
    "水": "Meditation or emotional exploration",
    "earth": "Grounding practice or tidying your space",
    "土": "Grounding practice or tidying your space",
    "air": "Reflection or learning something new",
    "风": "Reflection or learning something new",
    "气": "Reflection or learning something new",
    "wood": "Nature walk or growth activity",
    "木": "Nature walk or growth activity",
    "metal": "Structured activity or precise tasks",
    "金": "Structured activity or precise tasks",
}


def is_weekend(day: date) -> bool:
    return day_of_week(day) in (0, 6)


def generate_default_schedule(day: date) -> DaySchedule:
    template = WEEKEND_TEMPLATE if is_weekend(day) else WEEKDAY_TEMPLATE
    iso = day.isoformat()
    blocks = [
        TimeBlock(
            id=f"{iso}-{index}",
            time=time_range,
            activity=activity,
            category=category,
            energy_impact=impact,
        )
        for index, (time_range, activity, category, impact) in enumerate(template, start=1)
    ]
    return DaySchedule(
        date=day,
        energy_forecast=EnergyForecast(**DEFAULT_ENERGY_FORECAST),
        blocks=blocks,
        notes=DEFAULT_NOTES,
    )


def generate_personalized_schedule(
    day: date, profile: Optional[UserProfile] = None
) -> DaySchedule:
    """
    Default schedule adjusted for the profile:
    introverts get social blocks turned into personal time,
    a known element adds an element-balance block in the middle of the day.
    """
    schedule = generate_default_schedule(day)
    if not profile:
        return schedule

    if profile.mbti and "I" in profile.mbti:
        for block in schedule.blocks:
            if block.category == "social":
                block.activity = block.activity.replace(SOCIAL_ACTIVITY, QUIET_ACTIVITY)
                block.category = "personal"
        schedule.notes = INTROVERT_NOTES

    if profile.element:
        element_activity = ELEMENT_ACTIVITIES.get(profile.element.lower())
        if element_activity:
            middle_index = len(schedule.blocks) // 2
            schedule.blocks.insert(
                middle_index,
                TimeBlock(
                    id=f"{day.isoformat()}-element",
                    time="15:00 - 16:00",
                    activity=f"Element balance: {element_activity}",
                    category="energy",
                    energy_impact="restorative",
                ),
            )

    return schedule


def toggle_block(schedule: DaySchedule, block_id: str) -> DaySchedule:
    """Flip the completion state of one block"""
    for block in schedule.blocks:
        if block.id == block_id:
            block.completed = not block.completed
            return schedule
    raise HTTPException(status_code=404, detail=f"Time block {block_id} not found")
