"""Daily energy prediction - pure lookup-table heuristic over date and profile"""

import logging
import re
from datetime import date, timedelta
from typing import Optional

from .schemas import DailyEnergyState, UserProfile

logger = logging.getLogger(__name__)

DEFAULT_MBTI_TYPE = "ENFP"
DEFAULT_ELEMENT = "fire"
DEFAULT_ZODIAC = "aries"

MBTI_PATTERN = re.compile(r"\b([IE][NS][TF][JP])\b", re.ASCII)

CHAKRAS = ["root", "sacral", "solarPlexus", "heart", "throat", "thirdEye", "crown"]

CRYSTAL_MAP = {
    "root": ["Red Jasper", "Obsidian", "Hematite"],
    "sacral": ["Orange Agate", "Sunstone", "Carnelian"],
    "solarPlexus": ["Citrine", "Tiger's Eye", "Amber"],
    "heart": ["Green Phantom", "Rose Quartz", "Aventurine"],
    "throat": ["Kyanite", "Lapis Lazuli", "Aquamarine"],
    "thirdEye": ["Amethyst", "Fluorite", "Labradorite"],
    "crown": ["Clear Quartz", "Moonstone", "Kunzite"],
}
FALLBACK_CRYSTAL = "Clear Quartz"

# Red → blue as the level rises
ENERGY_COLORS = ["#ef4444", "#f97316", "#eab308", "#22c55e", "#3b82f6"]

MBTI_MOODS = {
    "E": ["Socially active", "Eager to express", "Seeking stimulation"],
    "I": ["Reflective", "Recharging alone", "Inward focus"],
    "S": ["Detail oriented", "Practical", "Present moment"],
    "N": ["Inspired", "Future thinking", "Exploring ideas"],
    "T": ["Analytical", "Objective", "Efficiency first"],
    "F": ["Emotionally rich", "Harmonious", "Value driven"],
    "J": ["Clear plans", "Orderly", "Decisive"],
    "P": ["Adaptable", "Curious", "Open to change"],
}
FALLBACK_MOOD = "Balanced"

ELEMENT_BALANCE = {
    "fire": "Full of vitality",
    "water": "Flowing and calm",
    "earth": "Grounded and steady",
    "air": "Light and nimble",
}
FALLBACK_ELEMENT_BALANCE = "Harmonious balance"


def day_of_week(day: date) -> int:
    """Sunday = 0 ... Saturday = 6"""
    return (day.weekday() + 1) % 7


def extract_mbti_type(profile: Optional[UserProfile]) -> str:
    if profile and profile.mbti_like_type:
        match = MBTI_PATTERN.search(profile.mbti_like_type)
        if match:
            return match.group(1)
    return DEFAULT_MBTI_TYPE


def calculate_energy_level(mbti_type: str, weekday: int) -> int:
    energy_level = 3
    if mbti_type.startswith("E"):
        # Extraverts peak at the start and end of the work week
        energy_level += 1 if weekday in (1, 5) else 0
    else:
        energy_level += 1 if weekday in (0, 6) else 0
    return max(1, min(5, energy_level))


def generate_energy_prediction(
    day: date, profile: Optional[UserProfile] = None
) -> DailyEnergyState:
    """
    Predict the energy state for one day.

    Deterministic: the same date and profile always give the same state.
    """
    weekday = day_of_week(day)
    day_of_month = day.day

    mbti_type = extract_mbti_type(profile)
    element = ((profile.inferred_element if profile else None) or DEFAULT_ELEMENT).lower()

    energy_level = calculate_energy_level(mbti_type, weekday)

    dominant_chakra = CHAKRAS[day_of_month % 7]
    crystals = CRYSTAL_MAP.get(dominant_chakra) or []
    recommended_crystal = crystals[day_of_month % 3] if crystals else FALLBACK_CRYSTAL

    energy_color = ENERGY_COLORS[min(energy_level - 1, 4)]

    moods = MBTI_MOODS.get(mbti_type[day_of_month % 4])
    mbti_mood = moods[day_of_month % 3] if moods else FALLBACK_MOOD

    return DailyEnergyState(
        date=day,
        energy_level=energy_level,
        dominant_chakra=dominant_chakra,
        recommended_crystal=recommended_crystal,
        energy_color=energy_color,
        mbti_mood=mbti_mood,
        element_balance=ELEMENT_BALANCE.get(element, FALLBACK_ELEMENT_BALANCE),
    )


def generate_energy_calendar(
    center: date, profile: Optional[UserProfile] = None, span: int = 15
) -> list[DailyEnergyState]:
    """Predictions for center - span ... center + span, oldest first"""
    logger.debug(f"🔍 Building energy calendar around {center.isoformat()} (±{span} days)")
    return [
        generate_energy_prediction(center + timedelta(days=offset), profile)
        for offset in range(-span, span + 1)
    ]
