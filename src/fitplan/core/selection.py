"""
Exercise selection for a single workout day.

Chooses concrete catalog exercises for a list of target muscles under a
difficulty ceiling, the user's equipment and a weekly exclusion set.
Selection is random but the random source is always passed in, and the
caller's exclusion set is never modified: the updated set is returned.
"""

import math
import random

from .catalog.registry import matches_equipment, matches_muscle
from .models import ExerciseRecord


def eligible_exercises(
    exercises: list[ExerciseRecord],
    equipment: list[str],
    difficulty_ceiling: int,
) -> list[ExerciseRecord]:
    """Exercises at or under the difficulty ceiling that the equipment allows."""
    return [
        ex
        for ex in exercises
        if ex.difficulty_level <= difficulty_ceiling and matches_equipment(ex, equipment)
    ]


def select_for_muscles(
    exercises: list[ExerciseRecord],
    muscles: list[str] | tuple[str, ...],
    count: int,
    equipment: list[str],
    difficulty_ceiling: int,
    excluded_ids: set[str] | frozenset[str],
    rng: random.Random,
) -> tuple[list[ExerciseRecord], set[str]]:
    """
    Choose up to ``count`` exercises targeting ``muscles``.

    For each muscle in order, draw ceil(count / len(muscles)) exercises from
    the eligible, non-excluded pool that trains it, preferring exercises
    where it is a primary muscle.  Remaining slots are filled from any
    eligible, non-excluded exercise.  Fewer than ``count`` exercises are
    returned when the pool runs dry.

    Args:
        exercises: Catalog records to choose from
        muscles: Target muscles, in priority order
        count: Desired number of exercises
        equipment: User's available equipment
        difficulty_ceiling: Maximum difficulty_level allowed
        excluded_ids: Ids already used this week (not modified)
        rng: Random source

    Returns:
        (selected exercises, excluded_ids plus the selected ids)
    """
    used = set(excluded_ids)
    selected: list[ExerciseRecord] = []
    if count <= 0:
        return selected, used

    eligible = eligible_exercises(exercises, equipment, difficulty_ceiling)

    if muscles:
        per_muscle = math.ceil(count / len(muscles))
        for muscle in muscles:
            muscle_pool = [
                ex for ex in eligible if ex.id not in used and matches_muscle(ex, muscle)
            ]
            primary_pool = [ex for ex in muscle_pool if matches_muscle(ex, muscle, primary_only=True)]
            pool = primary_pool or muscle_pool

            for _ in range(per_muscle):
                if len(selected) >= count:
                    break
                available = [ex for ex in pool if ex.id not in used]
                if not available:
                    break
                pick = available[rng.randrange(len(available))]
                selected.append(pick)
                used.add(pick.id)

    # Fill remaining slots with anything still eligible
    while len(selected) < count:
        remaining = [ex for ex in eligible if ex.id not in used]
        if not remaining:
            break
        pick = remaining[rng.randrange(len(remaining))]
        selected.append(pick)
        used.add(pick.id)

    return selected, used
