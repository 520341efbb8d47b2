"""Root conftest for all tests.

This file makes shared fixtures available across all test modules.
"""

from datetime import datetime, timezone

import pytest

from app.core.logger import setup_logger
from app.planning.schema.inputs import ExerciseCatalogEntry, PlanGenerationRequest, UserProfile
from app.planning.schema.week_schedule import DAYS_OF_WEEK, DaySchedule, ExerciseSlot, WeekSchedule


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """Console logging at DEBUG so structured context shows up in failures."""
    setup_logger(level="DEBUG", log_file="")
    yield


@pytest.fixture
def now() -> datetime:
    return datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def profile() -> UserProfile:
    return UserProfile(
        age=32,
        gender="female",
        current_weight=68.0,
        height=170.0,
        goal="Build muscle",
        days_per_week=3,
        equipment_access=["Barbell", "Dumbbells", "Pull-up Bar"],
        experience_level="1-2 years",
    )


@pytest.fixture
def catalog() -> list[ExerciseCatalogEntry]:
    return [
        ExerciseCatalogEntry(name="Barbell Back Squat", equipment_needed=["Barbell"]),
        ExerciseCatalogEntry(name="Bench Press", equipment_needed=["Barbell"]),
        ExerciseCatalogEntry(name="Romanian Deadlift", equipment_needed=["Barbell"]),
        ExerciseCatalogEntry(name="Pull-up", equipment_needed=["Pull-up Bar"]),
        ExerciseCatalogEntry(name="Plank", is_timed=True, default_duration_sec=45),
        ExerciseCatalogEntry(name="Dumbbell Curl", equipment_needed=["Dumbbells"]),
    ]


@pytest.fixture
def plan_request(profile: UserProfile, catalog: list[ExerciseCatalogEntry]) -> PlanGenerationRequest:
    return PlanGenerationRequest(profile=profile, catalog_exercises=catalog)


def _make_slot(name: str, sets: int = 3, reps: int | str = 10, rest: int = 60, **kwargs) -> ExerciseSlot:
    return ExerciseSlot(name=name, target_sets=sets, target_reps=reps, rest_time_sec=rest, **kwargs)


def _make_week(**days: list[ExerciseSlot]) -> WeekSchedule:
    return WeekSchedule(days={day: DaySchedule(exercises=days.get(day, [])) for day in DAYS_OF_WEEK})


@pytest.fixture
def make_slot():
    """Factory for ExerciseSlot with sensible defaults."""
    return _make_slot


@pytest.fixture
def make_week():
    """Factory for WeekSchedule from day keyword arguments; other days are empty."""
    return _make_week
