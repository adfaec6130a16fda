"""
Progress metrics: pure functions over a Program.

Duration/calorie estimates used at generation time, plus everything the
tracker derives from day flags: completion counts, streaks, per-week and
per-phase statistics.  Nothing here mutates its inputs.
"""

import math
from datetime import date, datetime

from .config import (
    AVG_MINUTES_PER_SET,
    CALORIES_PER_MINUTE,
    DURATION_BUFFER_MINUTES,
    PHASE_COLORS,
    PROGRAM_LENGTH_DAYS,
)
from .models import (
    PhaseProgress,
    Program,
    ProgramDay,
    ProgramStats,
    WeeklyStats,
)
from .phases import phase_for_day


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values (2.5 → 3, not 2)."""
    return int(math.floor(value + 0.5))


def raw_duration_minutes(total_exercises: int, sets: int, rest_seconds: int) -> int:
    """
    Uncapped session length estimate.

        minutes = round(N * sets * 1.5 + N * rest_seconds / 60)
    """
    return round_half_up(
        total_exercises * sets * AVG_MINUTES_PER_SET
        + total_exercises * (rest_seconds / 60)
    )


def cap_duration(minutes: int, workout_duration: int) -> int:
    """Cap an estimate at the user's preferred duration plus a 10 min buffer."""
    return min(minutes, workout_duration + DURATION_BUFFER_MINUTES)


def estimate_calories(minutes: int) -> int:
    return round_half_up(minutes * CALORIES_PER_MINUTE)


# ---------------------------------------------------------------------------
# Counts and streaks
# ---------------------------------------------------------------------------


def count_completed_days(days: list[ProgramDay]) -> int:
    return sum(1 for d in days if d.is_completed)


def count_completed_workouts(days: list[ProgramDay]) -> int:
    return sum(1 for d in days if d.is_completed and not d.is_rest_day)


def streak_ending_at(days: list[ProgramDay], day_number: int) -> int:
    """
    Count contiguous completed-or-rest days scanning backward from ``day_number``.

    Rest days extend a streak even when they are not marked completed; the
    first pending workout day stops the scan.
    """
    streak = 0
    for i in range(min(day_number, len(days)) - 1, -1, -1):
        day = days[i]
        if day.is_completed or day.is_rest_day:
            streak += 1
        else:
            break
    return streak


def day_index_for(start_date: str, today: date | datetime) -> int:
    """
    Day number of ``today`` within a program starting on ``start_date``.

    Clamped to 1..28, so dates before the start map to day 1 and dates after
    the end map to day 28.
    """
    if isinstance(today, datetime):
        today = today.date()
    start = datetime.strptime(start_date, "%Y-%m-%d").date()
    diff_days = (today - start).days
    return min(PROGRAM_LENGTH_DAYS, max(1, diff_days + 1))


def day_progress(day: ProgramDay) -> int:
    """Percentage of a day that is done: 100 for rest or completed days."""
    if day.is_rest_day or day.is_completed:
        return 100
    if not day.exercises:
        return 0
    done = sum(1 for ex in day.exercises if ex.is_completed)
    return round_half_up(done / len(day.exercises) * 100)


def program_progress(program: Program) -> int:
    """Percentage of the 28 days that count as completed."""
    return round_half_up(program.completed_days / PROGRAM_LENGTH_DAYS * 100)


# ---------------------------------------------------------------------------
# Aggregate statistics
# ---------------------------------------------------------------------------


def _minutes(day: ProgramDay) -> int:
    return day.actual_duration or day.estimated_duration


def is_skipped_workout(day: ProgramDay) -> bool:
    """A workout day with at least one skipped and no completed exercise."""
    return (
        not day.is_rest_day
        and any(ex.is_skipped for ex in day.exercises)
        and not any(ex.is_completed for ex in day.exercises)
    )


def weekly_stats(program: Program, weeks: int = 4) -> list[WeeklyStats]:
    """Per-week workout completion, minutes and calories for weeks 1..weeks."""
    result: list[WeeklyStats] = []
    for week in range(1, weeks + 1):
        workouts = [d for d in program.days if d.week_number == week and not d.is_rest_day]
        done = [d for d in workouts if d.is_completed]
        result.append(
            WeeklyStats(
                week_number=week,
                completed_workouts=len(done),
                total_workouts=len(workouts),
                total_minutes=sum(_minutes(d) for d in done),
                total_calories=sum(d.estimated_calories for d in done),
            )
        )
    return result


def compute_stats(program: Program | None, today_day_number: int) -> ProgramStats:
    """
    Aggregate statistics for a program as of ``today_day_number``.

    Args:
        program: Program to summarise (None → all-zero stats)
        today_day_number: Day the current streak is scanned back from

    Returns:
        ProgramStats
    """
    if program is None:
        return ProgramStats(total_days=PROGRAM_LENGTH_DAYS)

    completed_workout_days = [d for d in program.days if d.is_completed and not d.is_rest_day]
    skipped = [d for d in program.days if is_skipped_workout(d)]

    total_minutes = sum(_minutes(d) for d in completed_workout_days)
    total_calories = sum(d.estimated_calories for d in completed_workout_days)
    current_streak = streak_ending_at(program.days, today_day_number)

    average = (
        round_half_up(total_minutes / len(completed_workout_days))
        if completed_workout_days
        else 0
    )

    return ProgramStats(
        total_days=PROGRAM_LENGTH_DAYS,
        completed_days=program.completed_days,
        completed_workouts=program.completed_workouts,
        skipped_workouts=len(skipped),
        total_minutes=total_minutes,
        total_calories=total_calories,
        current_streak=current_streak,
        longest_streak=max(program.streak_days, current_streak),
        average_workout_duration=average,
        completion_percentage=program_progress(program),
        weekly_stats=weekly_stats(program),
    )


def compute_phase_progress(program: Program | None, today_day_number: int) -> PhaseProgress:
    """Completion percentage of the days that belong to today's phase."""
    info = phase_for_day(today_day_number)
    if program is None:
        first = phase_for_day(1)
        return PhaseProgress(phase=first.name, color=PHASE_COLORS[first.phase], progress=0)

    phase_days = [d for d in program.days if d.week_number in info.week_numbers]
    done = sum(1 for d in phase_days if d.is_completed)
    progress = round_half_up(done / len(phase_days) * 100) if phase_days else 0
    return PhaseProgress(phase=info.name, color=PHASE_COLORS[info.phase], progress=progress)
