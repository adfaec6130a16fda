"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of programs, days and statistics.
"""

from rich.console import Console
from rich.table import Table

from ..core.config import PHASE_COLORS, SPLIT_TYPE_LABELS, WEEKDAY_NAMES
from ..core.metrics import day_progress, program_progress
from ..core.models import (
    PhaseProgress,
    Program,
    ProgramDay,
    ProgramPreview,
    ProgramStats,
    StreakInfo,
)

console = Console()


def _phase_cell(phase: str) -> str:
    color = PHASE_COLORS.get(phase, "white")
    return f"[{color}]{phase.title()}[/]"


def _status_cell(day: ProgramDay, today_number: int) -> str:
    """Short status marker for a day in the calendar table."""
    if day.is_rest_day:
        return "[dim]rest[/dim]"
    if day.is_completed:
        if day.exercises and all(ex.is_skipped for ex in day.exercises):
            return "[yellow]skipped[/yellow]"
        return "[green]done[/green]"
    if day.day_number == today_number:
        return "[bold cyan]today[/bold cyan]"
    if day.day_number < today_number:
        return "[red]missed[/red]"
    progress = day_progress(day)
    return f"{progress}%" if progress else "planned"


def format_program_table(program: Program, today_number: int, week: int | None = None) -> Table:
    """
    Create a Rich table with one row per program day.

    Args:
        program: Program to display
        today_number: Day number of today (highlighted)
        week: Restrict rows to one week (1-4), or None for all 28 days

    Returns:
        Rich Table object
    """
    title = "28-Day Program" if week is None else f"Week {week}"
    table = Table(title=title)

    table.add_column("Day", justify="right", style="dim", width=3)
    table.add_column("Date", style="cyan")
    table.add_column("Weekday")
    table.add_column("Workout", style="bold")
    table.add_column("Phase")
    table.add_column("Ex.", justify="right")
    table.add_column("Min", justify="right")
    table.add_column("kcal", justify="right")
    table.add_column("Status")

    for day in program.days:
        if week is not None and day.week_number != week:
            continue
        table.add_row(
            str(day.day_number),
            day.date,
            WEEKDAY_NAMES[day.day_of_week][:3],
            day.title,
            _phase_cell(day.phase),
            str(len(day.exercises)) if not day.is_rest_day else "-",
            str(day.estimated_duration) if not day.is_rest_day else "-",
            str(day.estimated_calories) if not day.is_rest_day else "-",
            _status_cell(day, today_number),
        )

    return table


def print_program(program: Program, today_number: int, week: int | None = None) -> None:
    """Print program header and day calendar."""
    console.print()
    console.print(f"[bold cyan]{program.name}[/bold cyan]")
    console.print(f"[dim]{program.description}[/dim]")
    console.print(
        f"{program.start_date} to {program.end_date}  |  "
        f"{program.total_workouts} workouts, {program.total_rest_days} rest days  |  "
        f"{program.completed_days}/28 days done ({program_progress(program)}%)"
    )
    console.print()
    console.print(format_program_table(program, today_number, week))


def format_day_table(day: ProgramDay) -> Table:
    """
    Create a Rich table with the exercises of one day.

    Args:
        day: Workout day to display

    Returns:
        Rich Table object
    """
    table = Table(show_header=True, header_style="dim")
    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Exercise", style="bold")
    table.add_column("ID", style="dim")
    table.add_column("Sets", justify="right")
    table.add_column("Reps", justify="right")
    table.add_column("Rest(s)", justify="right")
    table.add_column("Status")

    for ex in day.exercises:
        if ex.is_completed:
            status = "[green]done[/green]"
        elif ex.is_skipped:
            status = "[yellow]skipped[/yellow]"
        else:
            status = ""
        table.add_row(
            str(ex.order + 1),
            ex.name,
            ex.exercise_id,
            str(ex.sets),
            ex.reps,
            str(ex.rest_seconds),
            status,
        )

    return table


def print_day(day: ProgramDay, today_number: int) -> None:
    """
    Print a single program day.

    Args:
        day: Day to display
        today_number: Day number of today (used for the status marker)
    """
    console.print()
    header = f"[bold]Day {day.day_number}[/bold]  {WEEKDAY_NAMES[day.day_of_week]} {day.date}"
    console.print(f"{header}  ({_status_cell(day, today_number)})")
    console.print(f"[bold cyan]{day.title}[/bold cyan]  {day.subtitle}")

    if day.is_rest_day:
        console.print("[dim]No workout today. Rest and recover.[/dim]")
        return

    split = SPLIT_TYPE_LABELS.get(day.split_type or "", day.split_type or "")
    console.print(
        f"{split}: {', '.join(day.focus_muscles)}  |  "
        f"Week {day.week_number}, {_phase_cell(day.phase)} week {day.phase_week}  |  "
        f"~{day.estimated_duration} min, ~{day.estimated_calories} kcal"
    )
    console.print(format_day_table(day))


def format_stats_display(
    stats: ProgramStats,
    phase: PhaseProgress,
    streak: StreakInfo,
) -> str:
    """
    Format program statistics as text block.

    Args:
        stats: ProgramStats to display
        phase: Progress through the current phase
        streak: Current and longest streak

    Returns:
        Formatted string
    """
    lines = [
        "Program progress",
        f"- Completed: {stats.completed_days}/{stats.total_days} days ({stats.completion_percentage}%)",
        f"- Workouts: {stats.completed_workouts} done, {stats.skipped_workouts} skipped",
        f"- Time: {stats.total_minutes} min (avg {stats.average_workout_duration} min/workout)",
        f"- Calories: {stats.total_calories} kcal",
        f"- Streak: {streak.current} days (longest {streak.longest})",
        f"- Phase: {phase.phase} ({phase.progress}%)",
    ]
    for week in stats.weekly_stats:
        lines.append(
            f"- Week {week.week_number}: {week.completed_workouts}/{week.total_workouts} workouts, "
            f"{week.total_minutes} min, {week.total_calories} kcal"
        )
    return "\n".join(lines)


def print_stats(stats: ProgramStats, phase: PhaseProgress, streak: StreakInfo) -> None:
    console.print(format_stats_display(stats, phase, streak))


def print_preview(preview: ProgramPreview) -> None:
    """Print the weekly rotation and phase summary of a program preview."""
    table = Table(title="Weekly Schedule")
    table.add_column("Day", style="cyan")
    table.add_column("Workout", style="bold")
    table.add_column("Focus")

    for row in preview.weekly_schedule:
        if row.is_workout:
            table.add_row(row.day_name, row.title or "", ", ".join(row.focus_muscles or []))
        else:
            table.add_row(row.day_name, "[dim]Rest[/dim]", "")

    console.print(table)
    console.print(
        f"{preview.total_workouts} workouts and {preview.total_rest_days} rest days "
        f"over {preview.total_days} days"
    )
    for phase in preview.phases:
        console.print(f"- {phase.name} ({phase.weeks}): {phase.focus}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")


def confirm_action(message: str) -> bool:
    """
    Prompt user for confirmation.

    Args:
        message: Confirmation message

    Returns:
        True if confirmed, False otherwise
    """
    response = console.input(f"{message} [y/N]: ")
    return response.lower() in ("y", "yes")
