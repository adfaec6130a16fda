"""
Periodization phase schedule.

Maps program days and weeks onto the static phase table and derives the
per-phase prescription: difficulty ceiling, working sets, rep range and
rest interval.  Every lookup has a documented fallback, so none of these
functions raise.
"""

import math

from .config import (
    BASE_DIFFICULTY_BY_LEVEL,
    BASE_SETS_BY_GOAL,
    DEFAULT_BASE_DIFFICULTY,
    DEFAULT_BASE_SETS,
    DEFAULT_REPS,
    DEFAULT_REST_SECONDS,
    DIFFICULTY_MAX,
    DIFFICULTY_MIN,
    MIN_SETS,
    PHASE_MODIFIER,
    PROGRAM_PHASES,
    REPS_BY_GOAL_AND_PHASE,
    REST_SECONDS_BY_GOAL,
)
from .models import PhaseInfo


def week_for_day(day_number: int) -> int:
    """Return the 1-based program week containing ``day_number``."""
    return math.ceil(day_number / 7)


def phase_for_week(week_number: int) -> PhaseInfo:
    """
    Return the first phase whose week set contains ``week_number``.

    Falls back to the first phase (FOUNDATION) when no entry matches.
    """
    for info in PROGRAM_PHASES:
        if week_number in info.week_numbers:
            return info
    return PROGRAM_PHASES[0]


def phase_for_day(day_number: int) -> PhaseInfo:
    """Return the phase for an absolute program day (1-based)."""
    return phase_for_week(week_for_day(day_number))


def phase_week_for(info: PhaseInfo, week_number: int) -> int:
    """
    Position (1-based) of ``week_number`` within the phase's week span.

    Returns 0 when the week is not part of the phase, which only happens
    for weeks that fell back to the default phase.
    """
    if week_number in info.week_numbers:
        return info.week_numbers.index(week_number) + 1
    return 0


def difficulty_for(phase: str, fitness_level: str) -> int:
    """
    Difficulty ceiling for exercise selection.

        difficulty = clamp(1, 5, base[fitness_level] + modifier[phase])
    """
    base = BASE_DIFFICULTY_BY_LEVEL.get(fitness_level, DEFAULT_BASE_DIFFICULTY)
    modifier = PHASE_MODIFIER.get(phase, 0)
    return min(DIFFICULTY_MAX, max(DIFFICULTY_MIN, base + modifier))


def sets_for(phase: str, goal: str) -> int:
    """
    Working sets per main exercise.

        sets = max(2, base[goal] + modifier[phase])
    """
    base = BASE_SETS_BY_GOAL.get(goal, DEFAULT_BASE_SETS)
    return max(MIN_SETS, base + PHASE_MODIFIER.get(phase, 0))


def reps_for(goal: str, phase: str) -> str:
    """Rep range for a goal/phase pair; "10-12" when the pair is unknown."""
    return REPS_BY_GOAL_AND_PHASE.get(goal, {}).get(phase, DEFAULT_REPS)


def rest_seconds_for(goal: str) -> int:
    """Rest between sets in seconds; 60 when the goal is unknown."""
    return REST_SECONDS_BY_GOAL.get(goal, DEFAULT_REST_SECONDS)


def phase_weeks_label(info: PhaseInfo) -> str:
    """Human label for a phase's span, e.g. "Week 1-2"."""
    first = info.week_numbers[0]
    if len(info.week_numbers) > 1:
        return f"Week {first}-{info.week_numbers[-1]}"
    return f"Week {first}"
