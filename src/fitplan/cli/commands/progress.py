"""Progress commands: complete, skip, uncomplete, complete-exercise, skip-exercise, stats."""

import json
from dataclasses import asdict
from typing import Annotated, Callable

import typer

from ...core.models import Program
from ...core.tracker import ProgramTracker
from .. import views
from ..app import DEFAULT_USER, DataDirOption, JsonOption, UserOption, app, get_tracker, require_program

DayArgument = Annotated[int, typer.Argument(help="Day of the program (1-28)")]
ExerciseArgument = Annotated[str, typer.Argument(help="Exercise ID (see the ID column of 'day')")]


def _apply(
    user: str,
    data_dir,
    update: Callable[[ProgramTracker], Program | None],
) -> ProgramTracker:
    """Load the tracker, run one mutation, and exit on bad input."""
    tracker = get_tracker(user, data_dir)
    require_program(tracker)
    try:
        update(tracker)
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)
    return tracker


@app.command()
def complete(
    day_number: DayArgument,
    user: UserOption = DEFAULT_USER,
    data_dir: DataDirOption = None,
) -> None:
    """
    Mark a day and all of its exercises as completed.
    """
    tracker = _apply(user, data_dir, lambda t: t.complete_day(day_number))
    program = tracker.program
    views.print_success(f"Day {day_number} completed.")
    views.print_info(
        f"Progress: {program.completed_days}/28 days, streak {program.streak_days} days"
    )


@app.command()
def skip(
    day_number: DayArgument,
    user: UserOption = DEFAULT_USER,
    data_dir: DataDirOption = None,
) -> None:
    """
    Skip a day: it counts as done, but the streak resets to zero.
    """
    tracker = _apply(user, data_dir, lambda t: t.skip_day(day_number))
    views.print_warning(f"Day {day_number} skipped. Streak reset.")
    views.print_info(f"Progress: {tracker.program.completed_days}/28 days")


@app.command()
def uncomplete(
    day_number: DayArgument,
    user: UserOption = DEFAULT_USER,
    data_dir: DataDirOption = None,
) -> None:
    """
    Revert a completed or skipped day back to pending.
    """
    tracker = _apply(user, data_dir, lambda t: t.uncomplete_day(day_number))
    views.print_success(f"Day {day_number} reverted.")
    views.print_info(f"Progress: {tracker.program.completed_days}/28 days")


def _exercise_found(tracker: ProgramTracker, day_number: int, exercise_id: str) -> bool:
    program_day = tracker.day_by_number(day_number)
    if program_day is not None and program_day.find_exercise(exercise_id) is None:
        views.print_warning(f"Day {day_number} has no exercise '{exercise_id}'.")
        return False
    return True


@app.command("complete-exercise")
def complete_exercise(
    day_number: DayArgument,
    exercise_id: ExerciseArgument,
    user: UserOption = DEFAULT_USER,
    data_dir: DataDirOption = None,
) -> None:
    """
    Mark one exercise of a day as completed.
    """
    tracker = _apply(user, data_dir, lambda t: t.complete_exercise(day_number, exercise_id))
    if not _exercise_found(tracker, day_number, exercise_id):
        return
    views.print_success(f"Marked {exercise_id} done on day {day_number}.")


@app.command("skip-exercise")
def skip_exercise(
    day_number: DayArgument,
    exercise_id: ExerciseArgument,
    user: UserOption = DEFAULT_USER,
    data_dir: DataDirOption = None,
) -> None:
    """
    Mark one exercise of a day as skipped.
    """
    tracker = _apply(user, data_dir, lambda t: t.skip_exercise(day_number, exercise_id))
    if not _exercise_found(tracker, day_number, exercise_id):
        return
    views.print_success(f"Marked {exercise_id} skipped on day {day_number}.")


@app.command()
def stats(
    user: UserOption = DEFAULT_USER,
    data_dir: DataDirOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Display progress statistics: completion, streaks, time and calories.
    """
    tracker = get_tracker(user, data_dir)
    require_program(tracker)

    program_stats = tracker.stats()
    phase = tracker.phase_progress()
    streak = tracker.streak_info()

    if json_out:
        print(json.dumps({
            "stats": asdict(program_stats),
            "phase_progress": asdict(phase),
            "streak": asdict(streak),
            "today": tracker.today_day_number(),
        }, indent=2))
        return

    views.print_stats(program_stats, phase, streak)
