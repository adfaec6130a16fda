"""Program commands: generate, preview, show, day, today, reset."""

import json
import random
from dataclasses import asdict
from typing import Annotated, Optional

import typer

from ...core.config import (
    BASE_DIFFICULTY_BY_LEVEL,
    BASE_SETS_BY_GOAL,
    DAYS_PER_WEEK_MAX,
    DAYS_PER_WEEK_MIN,
    DEFAULT_WORKOUT_DAYS,
)
from ...core.generator import generate_program_preview
from ...core.models import GeneratorOptions
from ...core.splits import clamp_days_per_week
from ...io.serializers import (
    ValidationError,
    parse_weekdays,
    program_day_to_dict,
    program_to_dict,
    program_to_json,
    validate_date,
)
from .. import views
from ..app import DEFAULT_USER, DataDirOption, JsonOption, UserOption, app, get_tracker, require_program

DaysPerWeekOption = Annotated[
    int,
    typer.Option("--days", "-n", help=f"Workouts per week ({DAYS_PER_WEEK_MIN}-{DAYS_PER_WEEK_MAX})"),
]

WorkoutDaysOption = Annotated[
    Optional[str],
    typer.Option(
        "--workout-days",
        "-w",
        help="Training weekdays, e.g. 'mon,wed,fri' or '1,3,5' (Sunday=0)",
    ),
]


def _resolve_workout_days(workout_days: str | None, days_per_week: int) -> list[int]:
    """Parse --workout-days, falling back to the default weekdays for the frequency."""
    if workout_days is None:
        return list(DEFAULT_WORKOUT_DAYS[clamp_days_per_week(days_per_week)])
    try:
        return parse_weekdays(workout_days)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)


@app.command()
def generate(
    days_per_week: DaysPerWeekOption = 4,
    workout_days: WorkoutDaysOption = None,
    level: Annotated[
        str,
        typer.Option("--level", "-l", help="Fitness level: beginner, intermediate, advanced"),
    ] = "beginner",
    goal: Annotated[
        str,
        typer.Option("--goal", "-g", help="Primary goal: lose_weight, build_muscle, get_fitter, maintain"),
    ] = "get_fitter",
    duration: Annotated[
        int,
        typer.Option("--duration", help="Preferred workout length in minutes"),
    ] = 45,
    equipment: Annotated[
        Optional[list[str]],
        typer.Option("--equipment", "-q", help="Available equipment (repeatable), e.g. -q dumbbells -q bench"),
    ] = None,
    start: Annotated[
        Optional[str],
        typer.Option("--start", "-s", help="Start date YYYY-MM-DD (default: today)"),
    ] = None,
    name: Annotated[
        Optional[str],
        typer.Option("--name", help="Name shown in the program title (default: user ID)"),
    ] = None,
    seed: Annotated[
        Optional[int],
        typer.Option("--seed", help="Random seed for reproducible exercise selection"),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Replace an existing program without asking"),
    ] = False,
    user: UserOption = DEFAULT_USER,
    data_dir: DataDirOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Generate a new 28-day program and save it.

    Bodyweight exercises are always available; list any other equipment
    with --equipment.
    """
    if level not in BASE_DIFFICULTY_BY_LEVEL:
        views.print_error(f"Unknown level '{level}'. Use one of: {', '.join(BASE_DIFFICULTY_BY_LEVEL)}")
        raise typer.Exit(1)
    if goal not in BASE_SETS_BY_GOAL:
        views.print_error(f"Unknown goal '{goal}'. Use one of: {', '.join(BASE_SETS_BY_GOAL)}")
        raise typer.Exit(1)
    if duration <= 0:
        views.print_error("Duration must be a positive number of minutes")
        raise typer.Exit(1)
    if start is not None:
        try:
            validate_date(start)
        except ValidationError as e:
            views.print_error(str(e))
            raise typer.Exit(1)

    effective_days = clamp_days_per_week(days_per_week)
    if effective_days != days_per_week and not json_out:
        views.print_warning(
            f"{days_per_week} workouts per week is not supported; using {effective_days}."
        )
    weekdays = _resolve_workout_days(workout_days, days_per_week)
    if not weekdays and not json_out:
        views.print_warning("No workout days selected; every day will be a rest day.")

    tracker = get_tracker(user, data_dir, with_catalog=True)
    if tracker.program is not None and not force:
        if not views.confirm_action(f"Replace the current program '{tracker.program.name}'?"):
            views.print_info("Cancelled.")
            raise typer.Exit(0)
    if seed is not None:
        tracker.rng = random.Random(seed)

    options = GeneratorOptions(
        user_id=user,
        user_name=name or user,
        days_per_week=days_per_week,
        workout_days=weekdays,
        fitness_level=level,
        primary_goal=goal,
        workout_duration=duration,
        equipment=list(equipment or []),
        start_date=start,
    )
    program = tracker.generate(options)

    if json_out:
        print(program_to_json(program))
        return

    views.print_success(f"Generated {program.name}")
    views.print_program(program, tracker.today_day_number())


@app.command()
def preview(
    days_per_week: DaysPerWeekOption = 4,
    workout_days: WorkoutDaysOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show the weekly rotation a program would use, without generating it.
    """
    weekdays = _resolve_workout_days(workout_days, days_per_week)
    result = generate_program_preview(days_per_week, weekdays)

    if json_out:
        print(json.dumps(asdict(result), indent=2))
        return

    views.print_preview(result)


@app.command()
def show(
    week: Annotated[
        Optional[int],
        typer.Option("--week", "-k", min=1, max=4, help="Show only this week (1-4)"),
    ] = None,
    user: UserOption = DEFAULT_USER,
    data_dir: DataDirOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Display the 28-day calendar with per-day status.
    """
    tracker = get_tracker(user, data_dir)
    require_program(tracker)

    if json_out:
        data = program_to_dict(tracker.program)
        if week is not None:
            data["days"] = [d for d in data["days"] if d["week_number"] == week]
        print(json.dumps(data, indent=2))
        return

    views.print_program(tracker.program, tracker.today_day_number(), week)


@app.command()
def day(
    day_number: Annotated[int, typer.Argument(help="Day of the program (1-28)")],
    user: UserOption = DEFAULT_USER,
    data_dir: DataDirOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show the exercises of one program day.
    """
    tracker = get_tracker(user, data_dir)
    require_program(tracker)

    program_day = tracker.day_by_number(day_number)
    if program_day is None:
        views.print_error(f"Day must be between 1 and {len(tracker.program.days)}")
        raise typer.Exit(1)
    tracker.set_selected_day(day_number)

    if json_out:
        print(json.dumps(program_day_to_dict(program_day), indent=2))
        return

    views.print_day(program_day, tracker.today_day_number())


@app.command()
def today(
    user: UserOption = DEFAULT_USER,
    data_dir: DataDirOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show today's workout (day 1 before the start, day 28 after the end).
    """
    tracker = get_tracker(user, data_dir)
    require_program(tracker)

    tracker.go_to_today()
    program_day = tracker.selected_program_day()

    if json_out:
        print(json.dumps(program_day_to_dict(program_day), indent=2))
        return

    views.print_day(program_day, tracker.today_day_number())


@app.command()
def reset(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Skip confirmation prompt"),
    ] = False,
    user: UserOption = DEFAULT_USER,
    data_dir: DataDirOption = None,
) -> None:
    """
    Erase the stored program for a user.
    """
    tracker = get_tracker(user, data_dir)
    if tracker.program is None:
        views.print_info("Nothing to reset.")
        return

    if not force and not views.confirm_action(f"Erase '{tracker.program.name}' and all progress?"):
        views.print_info("Cancelled.")
        raise typer.Exit(0)

    tracker.reset()
    views.print_success("Program erased.")
