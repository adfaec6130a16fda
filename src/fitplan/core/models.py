"""
Data models for fitplan.

All core dataclasses representing the exercise catalog, the generated
28-day program, and the statistics derived from it.  Dates are stored as
ISO strings (YYYY-MM-DD) and timestamps as ISO datetimes so a Program maps
directly onto JSON.
"""

from dataclasses import dataclass, field
from typing import Literal

ProgramPhase = Literal["FOUNDATION", "BUILD", "INTENSITY", "DELOAD"]
FitnessLevel = Literal["beginner", "intermediate", "advanced"]
PrimaryGoal = Literal["lose_weight", "build_muscle", "get_fitter", "maintain"]
SplitType = str  # "FULL_BODY", "PUSH", ... (see config.SPLIT_TYPE_LABELS)


@dataclass(frozen=True)
class IntRange:
    """Inclusive min/max pair used for recommended sets, reps and rest."""

    low: int
    high: int

    def __post_init__(self) -> None:
        if self.low > self.high:
            raise ValueError(f"IntRange low ({self.low}) must not exceed high ({self.high})")


@dataclass(frozen=True)
class ExerciseRecord:
    """
    A single exercise in the catalog.

    Records are read-only; a ProgramDayExercise keeps a reference to the
    record it was built from.
    """

    id: str
    name: str
    category: str  # STRENGTH | CARDIO | FLEXIBILITY | BALANCE | PLYOMETRIC | CALISTHENICS
    primary_muscles: tuple[str, ...]
    secondary_muscles: tuple[str, ...] = ()
    difficulty_level: int = 1  # 1-5
    equipment_required: tuple[str, ...] = ()
    description: str = ""
    setup_instructions: str = ""
    execution_steps: tuple[str, ...] = ()
    form_cues: tuple[str, ...] = ()
    common_mistakes: tuple[str, ...] = ()
    tips: tuple[str, ...] = ()
    recommended_sets: IntRange = IntRange(2, 4)
    recommended_reps: IntRange = IntRange(8, 12)
    rest_seconds: IntRange = IntRange(30, 90)
    calories_per_minute: float = 5.0

    def __post_init__(self) -> None:
        """Validate catalog data."""
        if not self.id:
            raise ValueError("exercise id must be non-empty")
        if not 1 <= self.difficulty_level <= 5:
            raise ValueError(
                f"difficulty_level must be 1-5, got {self.difficulty_level} ({self.id})"
            )


@dataclass(frozen=True)
class WorkoutTemplate:
    """Static stamp for a workout day before exercise selection."""

    split_type: SplitType
    title: str
    focus_muscles: tuple[str, ...]
    exercise_count: int


@dataclass(frozen=True)
class PhaseInfo:
    """One entry of the static periodization table."""

    phase: ProgramPhase
    name: str
    description: str
    week_numbers: tuple[int, ...]
    intensity: int  # 1-10
    volume: int  # 1-10
    focus: str


@dataclass
class GeneratorOptions:
    """
    Preferences a program is generated from.

    ``workout_days`` uses Sunday=0 ... Saturday=6.  ``start_date`` is an ISO
    date string; None means today.
    """

    user_id: str
    user_name: str
    days_per_week: int
    workout_days: list[int]
    fitness_level: str = "beginner"
    primary_goal: str = "get_fitter"
    workout_duration: int = 45  # minutes
    equipment: list[str] = field(default_factory=list)
    start_date: str | None = None


@dataclass
class ProgramDayExercise:
    """
    One exercise instance inside a program day.

    Rows are never shared between days, even when the same catalog
    exercise is repeated.  is_completed and is_skipped are mutually
    exclusive; the setters in the tracker always clear the other flag.
    """

    exercise_id: str
    name: str
    sets: int
    reps: str  # textual range, e.g. "8-10" or "30-60 sec"
    rest_seconds: int
    order: int
    exercise_details: ExerciseRecord | None = None
    is_completed: bool = False
    is_skipped: bool = False
    notes: str | None = None


@dataclass
class ProgramDay:
    """One of the 28 days of a program."""

    day_number: int  # 1-28
    week_number: int  # 1-4
    day_of_week: int  # 0-6, Sunday=0
    date: str  # ISO format: YYYY-MM-DD
    is_rest_day: bool
    title: str
    subtitle: str
    phase: ProgramPhase
    phase_week: int  # 1 or 2
    is_completed: bool = False
    split_type: SplitType | None = None
    focus_muscles: list[str] = field(default_factory=list)
    exercises: list[ProgramDayExercise] = field(default_factory=list)
    estimated_duration: int = 0  # minutes
    estimated_calories: int = 0
    completed_at: str | None = None
    actual_duration: int | None = None

    def __post_init__(self) -> None:
        """Validate day data."""
        if not 1 <= self.day_number <= 28:
            raise ValueError(f"day_number must be 1-28, got {self.day_number}")
        if not 0 <= self.day_of_week <= 6:
            raise ValueError(f"day_of_week must be 0-6, got {self.day_of_week}")
        if self.is_rest_day and (self.exercises or self.estimated_duration):
            raise ValueError(f"Rest day {self.day_number} cannot carry exercises or duration")

    def find_exercise(self, exercise_id: str) -> ProgramDayExercise | None:
        """Return the first exercise row with the given catalog id, or None."""
        for ex in self.exercises:
            if ex.exercise_id == exercise_id:
                return ex
        return None


@dataclass
class Program:
    """
    A generated 28-day program plus its progress counters.

    ``days[i].day_number == i + 1`` always holds.
    """

    id: str
    user_id: str
    name: str
    description: str
    start_date: str
    end_date: str
    days_per_week: int
    workout_days: list[int]
    days: list[ProgramDay]
    total_workouts: int
    total_rest_days: int
    generated_at: str
    updated_at: str
    current_day: int = 1
    completed_days: int = 0
    completed_workouts: int = 0
    streak_days: int = 0
    is_active: bool = True

    def __post_init__(self) -> None:
        """Validate program structure."""
        numbers = [d.day_number for d in self.days]
        if numbers != list(range(1, len(self.days) + 1)):
            raise ValueError("Program days must be numbered 1..N in order")
        if self.total_workouts + self.total_rest_days != len(self.days):
            raise ValueError(
                f"total_workouts ({self.total_workouts}) + total_rest_days "
                f"({self.total_rest_days}) must equal {len(self.days)}"
            )

    def day(self, day_number: int) -> ProgramDay | None:
        """Return the day with the given number, or None if out of range."""
        if 1 <= day_number <= len(self.days):
            return self.days[day_number - 1]
        return None


@dataclass
class WeeklyStats:
    """Completion summary for one calendar week of the program."""

    week_number: int
    completed_workouts: int
    total_workouts: int
    total_minutes: int
    total_calories: int


@dataclass
class ProgramStats:
    """Aggregate statistics derived from a Program at a point in time."""

    total_days: int = 28
    completed_days: int = 0
    completed_workouts: int = 0
    skipped_workouts: int = 0
    total_minutes: int = 0
    total_calories: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    average_workout_duration: int = 0
    completion_percentage: int = 0
    weekly_stats: list[WeeklyStats] = field(default_factory=list)


@dataclass
class PhaseProgress:
    """Progress through the phase that contains today."""

    phase: str  # display name
    color: str
    progress: int  # percentage 0-100


@dataclass
class StreakInfo:
    current: int
    longest: int


@dataclass
class PreviewDay:
    """One weekday row of a program preview."""

    day_name: str
    is_workout: bool
    title: str | None = None
    focus_muscles: list[str] | None = None


@dataclass
class PreviewPhase:
    name: str
    weeks: str  # e.g. "Week 1-2"
    focus: str


@dataclass
class ProgramPreview:
    """Lightweight summary shown before a program is generated."""

    total_days: int
    total_workouts: int
    total_rest_days: int
    weekly_schedule: list[PreviewDay]
    phases: list[PreviewPhase]
