"""Shared fixtures for fitplan tests."""

from datetime import datetime

import pytest

from fitplan.core.catalog.loader import load_exercises_from_yaml
from fitplan.core.catalog.registry import ExerciseCatalog
from fitplan.core.models import GeneratorOptions


class FakeClock:
    """Callable clock whose current time tests can move."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture(scope="session")
def bundled_catalog() -> ExerciseCatalog:
    """The catalog shipped in src/fitplan/exercises (no user overrides)."""
    return ExerciseCatalog(load_exercises_from_yaml())


@pytest.fixture
def clock() -> FakeClock:
    # 2026-10-19 is a Monday
    return FakeClock(datetime(2026, 10, 19, 9, 0, 0))


@pytest.fixture
def monday_options() -> GeneratorOptions:
    """4 workouts/week on Mon, Wed, Fri and Sun, starting Monday 2026-10-19."""
    return GeneratorOptions(
        user_id="u1",
        user_name="Alex",
        days_per_week=4,
        workout_days=[1, 3, 5, 0],
        fitness_level="beginner",
        primary_goal="build_muscle",
        workout_duration=45,
        equipment=["dumbbells"],
        start_date="2026-10-19",
    )
