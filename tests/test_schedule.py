"""Personalised day schedules."""

from datetime import date

import pytest
from fastapi import HTTPException

from crystal_calendar.domain.energy.schedule import (
    INTROVERT_NOTES,
    WEEKDAY_TEMPLATE,
    WEEKEND_TEMPLATE,
    generate_default_schedule,
    generate_personalized_schedule,
    is_weekend,
    toggle_block,
)
from crystal_calendar.domain.energy.schemas import UserProfile

MONDAY = date(2024, 1, 1)
SATURDAY = date(2024, 1, 6)


class TestDefaultSchedule:
    def test_weekend_detection(self):
        assert is_weekend(SATURDAY)
        assert is_weekend(date(2024, 1, 7))
        assert not is_weekend(MONDAY)

    def test_weekday_template(self):
        schedule = generate_default_schedule(MONDAY)
        assert len(schedule.blocks) == len(WEEKDAY_TEMPLATE)
        assert schedule.blocks[0].id == "2024-01-01-1"
        assert schedule.blocks[-1].id == f"2024-01-01-{len(WEEKDAY_TEMPLATE)}"
        assert all(not block.completed for block in schedule.blocks)

    def test_weekend_template(self):
        schedule = generate_default_schedule(SATURDAY)
        assert len(schedule.blocks) == len(WEEKEND_TEMPLATE)
        assert any(block.category == "social" for block in schedule.blocks)

    def test_forecast_defaults(self):
        forecast = generate_default_schedule(MONDAY).energy_forecast
        assert (forecast.morning, forecast.afternoon, forecast.evening, forecast.overall) == (7, 6, 5, 6)


class TestPersonalizedSchedule:
    def test_without_profile_matches_default(self):
        assert generate_personalized_schedule(MONDAY) == generate_default_schedule(MONDAY)

    def test_introvert_gets_quiet_time(self):
        schedule = generate_personalized_schedule(SATURDAY, UserProfile(mbti="INTJ"))
        assert not any(block.category == "social" for block in schedule.blocks)
        assert schedule.blocks[5].activity == "Quiet personal time / family time"
        assert schedule.blocks[5].category == "personal"
        assert schedule.notes == INTROVERT_NOTES

    def test_extravert_keeps_social_block(self):
        schedule = generate_personalized_schedule(SATURDAY, UserProfile(mbti="ENFP"))
        assert schedule.blocks[5].category == "social"

    def test_element_block_inserted_mid_day(self):
        schedule = generate_personalized_schedule(MONDAY, UserProfile(element="Fire"))
        assert len(schedule.blocks) == len(WEEKDAY_TEMPLATE) + 1
        block = schedule.blocks[len(WEEKDAY_TEMPLATE) // 2]
        assert block.id == "2024-01-01-element"
        assert block.time == "15:00 - 16:00"
        assert block.activity.startswith("Element balance: ")
        assert block.category == "energy"

    def test_chinese_element_name(self):
        schedule = generate_personalized_schedule(MONDAY, UserProfile(element="水"))
        assert any(block.id.endswith("-element") for block in schedule.blocks)

    def test_unknown_element_adds_nothing(self):
        schedule = generate_personalized_schedule(MONDAY, UserProfile(element="plasma"))
        assert len(schedule.blocks) == len(WEEKDAY_TEMPLATE)


class TestToggleBlock:
    def test_toggle_flips_completion(self):
        schedule = generate_default_schedule(MONDAY)
        toggle_block(schedule, "2024-01-01-3")
        assert schedule.blocks[2].completed
        toggle_block(schedule, "2024-01-01-3")
        assert not schedule.blocks[2].completed

    def test_unknown_block(self):
        with pytest.raises(HTTPException) as exc_info:
            toggle_block(generate_default_schedule(MONDAY), "missing")
        assert exc_info.value.status_code == 404
