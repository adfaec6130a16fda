"""
Program generation for fitplan.

Builds a deterministic, periodized 28-day calendar from a GeneratorOptions
request.  Each workout day is stamped from the split template rotation,
prescribed from its phase, and filled by the selection engine; rest days
are emitted empty.  The only non-deterministic input is the random source,
which callers may pass in to make generation reproducible.
"""

import random
from datetime import date, datetime, timedelta

from .catalog.registry import ExerciseCatalog
from .config import (
    PROGRAM_LENGTH_DAYS,
    PROGRAM_PHASES,
    WARMUP_EXERCISE_IDS,
    WARMUP_REPS_CARDIO,
    WARMUP_REPS_DEFAULT,
    WARMUP_REST_SECONDS,
    WARMUP_SETS,
    WEEKDAY_NAMES,
)
from .metrics import cap_duration, estimate_calories, raw_duration_minutes
from .models import (
    ExerciseRecord,
    GeneratorOptions,
    PhaseInfo,
    PreviewDay,
    PreviewPhase,
    Program,
    ProgramDay,
    ProgramDayExercise,
    ProgramPreview,
    WorkoutTemplate,
)
from .phases import (
    difficulty_for,
    phase_for_day,
    phase_week_for,
    phase_weeks_label,
    reps_for,
    rest_seconds_for,
    sets_for,
    week_for_day,
)
from .selection import select_for_muscles
from .splits import clamp_days_per_week, resolve_split_templates

REST_DAY_TITLE = "Rest Day"
REST_DAY_SUBTITLE = "Recovery & Growth"


class CatalogMissingError(RuntimeError):
    """Raised when generation is attempted without an exercise catalog."""

    pass


def weekday_index(d: date) -> int:
    """Weekday with Sunday=0 ... Saturday=6."""
    return (d.weekday() + 1) % 7


def _parse_start_date(start_date: str | date | None, now: datetime) -> date:
    if start_date is None:
        return now.date()
    if isinstance(start_date, datetime):
        return start_date.date()
    if isinstance(start_date, date):
        return start_date
    return datetime.strptime(start_date, "%Y-%m-%d").date()


def _rest_day(day_number: int, day_date: date, phase_info: PhaseInfo) -> ProgramDay:
    week = week_for_day(day_number)
    return ProgramDay(
        day_number=day_number,
        week_number=week,
        day_of_week=weekday_index(day_date),
        date=day_date.isoformat(),
        is_rest_day=True,
        title=REST_DAY_TITLE,
        subtitle=REST_DAY_SUBTITLE,
        phase=phase_info.phase,
        phase_week=phase_week_for(phase_info, week),
    )


def build_day_exercises(
    warmups: list[ExerciseRecord],
    main: list[ExerciseRecord],
    sets: int,
    reps: str,
    rest_seconds: int,
) -> list[ProgramDayExercise]:
    """
    Assemble the ordered exercise rows for one workout day.

    Warm-ups come first with a fixed light prescription; main exercises use
    the phase prescription.  ``order`` runs 0..N-1 across both.
    """
    rows: list[ProgramDayExercise] = []
    for ex in warmups:
        rows.append(
            ProgramDayExercise(
                exercise_id=ex.id,
                name=ex.name,
                sets=WARMUP_SETS,
                reps=WARMUP_REPS_CARDIO if ex.category == "CARDIO" else WARMUP_REPS_DEFAULT,
                rest_seconds=WARMUP_REST_SECONDS,
                order=len(rows),
                exercise_details=ex,
            )
        )
    for ex in main:
        rows.append(
            ProgramDayExercise(
                exercise_id=ex.id,
                name=ex.name,
                sets=sets,
                reps=reps,
                rest_seconds=rest_seconds,
                order=len(rows),
                exercise_details=ex,
            )
        )
    return rows


def _workout_day(
    day_number: int,
    day_date: date,
    phase_info: PhaseInfo,
    template: WorkoutTemplate,
    options: GeneratorOptions,
    catalog: ExerciseCatalog,
    excluded_ids: set[str],
    rng: random.Random,
) -> tuple[ProgramDay, set[str]]:
    """Build one workout day; returns the day and the updated exclusion set."""
    week = week_for_day(day_number)
    difficulty = difficulty_for(phase_info.phase, options.fitness_level)
    sets = sets_for(phase_info.phase, options.primary_goal)
    reps = reps_for(options.primary_goal, phase_info.phase)
    rest = rest_seconds_for(options.primary_goal)

    warmups = catalog.warmups()
    # Warm-up ids are blocked for main selection so no id repeats within a day
    main, used = select_for_muscles(
        catalog.all(),
        template.focus_muscles,
        template.exercise_count,
        options.equipment,
        difficulty,
        excluded_ids | set(WARMUP_EXERCISE_IDS),
        rng,
    )
    used -= set(WARMUP_EXERCISE_IDS)

    exercises = build_day_exercises(warmups, main, sets, reps, rest)
    raw_minutes = raw_duration_minutes(len(exercises), sets, rest)

    day = ProgramDay(
        day_number=day_number,
        week_number=week,
        day_of_week=weekday_index(day_date),
        date=day_date.isoformat(),
        is_rest_day=False,
        title=template.title,
        subtitle=f"{phase_info.name} Phase",
        phase=phase_info.phase,
        phase_week=phase_week_for(phase_info, week),
        split_type=template.split_type,
        focus_muscles=list(template.focus_muscles),
        exercises=exercises,
        estimated_duration=cap_duration(raw_minutes, options.workout_duration),
        estimated_calories=estimate_calories(raw_minutes),
    )
    return day, used


def generate_program(
    options: GeneratorOptions,
    catalog: ExerciseCatalog | None,
    rng: random.Random | None = None,
    now: datetime | None = None,
) -> Program:
    """
    Generate a complete 28-day program.

    Args:
        options: User preferences (frequency, weekdays, level, goal, ...)
        catalog: Exercise catalog to select from
        rng: Random source for exercise selection (default: fresh Random())
        now: Generation timestamp (default: datetime.now())

    Returns:
        Program with 28 days and zeroed progress counters

    Raises:
        CatalogMissingError: If catalog is None
    """
    if catalog is None:
        raise CatalogMissingError("generate_program() requires an exercise catalog")
    if rng is None:
        rng = random.Random()
    if now is None:
        now = datetime.now()

    effective_days = clamp_days_per_week(options.days_per_week)
    templates = resolve_split_templates(effective_days)
    workout_days = set(options.workout_days)
    start = _parse_start_date(options.start_date, now)
    end = start + timedelta(days=PROGRAM_LENGTH_DAYS - 1)

    days: list[ProgramDay] = []
    excluded_ids: set[str] = set()
    workout_index = 0

    for day_number in range(1, PROGRAM_LENGTH_DAYS + 1):
        day_date = start + timedelta(days=day_number - 1)
        phase_info = phase_for_day(day_number)

        # New calendar week: allow exercises from last week again
        if day_number % 7 == 1:
            excluded_ids = set()

        if weekday_index(day_date) not in workout_days:
            days.append(_rest_day(day_number, day_date, phase_info))
            continue

        template = templates[workout_index % len(templates)]
        day, excluded_ids = _workout_day(
            day_number, day_date, phase_info, template, options, catalog, excluded_ids, rng
        )
        days.append(day)
        workout_index += 1

    total_workouts = sum(1 for d in days if not d.is_rest_day)
    total_rest_days = sum(1 for d in days if d.is_rest_day)
    stamp = now.isoformat()

    return Program(
        id=f"program_{options.user_id}_{int(now.timestamp() * 1000)}",
        user_id=options.user_id,
        name=f"{options.user_name}'s 28-Day Program",
        description=(
            f"A personalized {effective_days}-day per week program designed for "
            f"{options.fitness_level} fitness level with focus on "
            f"{options.primary_goal.replace('_', ' ')}."
        ),
        start_date=start.isoformat(),
        end_date=end.isoformat(),
        days_per_week=effective_days,
        workout_days=list(options.workout_days),
        days=days,
        total_workouts=total_workouts,
        total_rest_days=total_rest_days,
        generated_at=stamp,
        updated_at=stamp,
    )


def generate_program_preview(days_per_week: int, workout_days: list[int]) -> ProgramPreview:
    """
    Summarise the weekly rotation without selecting exercises.

    The weekly schedule runs Sunday..Saturday; each workout weekday shows the
    template it would receive in the first week of a program that starts on
    a Sunday.
    """
    effective_days = clamp_days_per_week(days_per_week)
    templates = resolve_split_templates(effective_days)
    chosen = set(workout_days)

    schedule: list[PreviewDay] = []
    for index, day_name in enumerate(WEEKDAY_NAMES):
        if index not in chosen:
            schedule.append(PreviewDay(day_name=day_name, is_workout=False))
            continue
        workout_index = sum(1 for d in chosen if d < index)
        template = templates[workout_index % len(templates)]
        schedule.append(
            PreviewDay(
                day_name=day_name,
                is_workout=True,
                title=template.title,
                focus_muscles=list(template.focus_muscles),
            )
        )

    weekly_workouts = sum(1 for d in schedule if d.is_workout)
    total_workouts = weekly_workouts * (PROGRAM_LENGTH_DAYS // 7)
    return ProgramPreview(
        total_days=PROGRAM_LENGTH_DAYS,
        total_workouts=total_workouts,
        total_rest_days=PROGRAM_LENGTH_DAYS - total_workouts,
        weekly_schedule=schedule,
        phases=[
            PreviewPhase(name=p.name, weeks=phase_weeks_label(p), focus=p.focus)
            for p in PROGRAM_PHASES
        ],
    )
