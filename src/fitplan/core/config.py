"""
Configuration constants for the 28-day program engine.

All adjustable parameters are centralized here for easy tuning: split
templates, the periodization phase table, per-phase prescription tables,
and the duration/calorie estimation constants.
"""

from typing import Final

from .models import PhaseInfo, WorkoutTemplate

# =============================================================================
# PROGRAM SHAPE
# =============================================================================

PROGRAM_LENGTH_DAYS: Final[int] = 28
DAYS_PER_WEEK_MIN: Final[int] = 3
DAYS_PER_WEEK_MAX: Final[int] = 6
FALLBACK_DAYS_PER_WEEK: Final[int] = 4  # used if a clamped value has no split

# Weekday index convention used throughout: Sunday=0 ... Saturday=6
WEEKDAY_NAMES: Final[list[str]] = [
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
]

# Weekdays used by the CLI when --workout-days is omitted
DEFAULT_WORKOUT_DAYS: Final[dict[int, list[int]]] = {
    3: [1, 3, 5],
    4: [1, 2, 4, 5],
    5: [1, 2, 3, 4, 5],
    6: [1, 2, 3, 4, 5, 6],
}

# =============================================================================
# SPLIT TEMPLATES (keyed by workouts per week)
# =============================================================================

SPLIT_CONFIGS: Final[dict[int, list[WorkoutTemplate]]] = {
    3: [
        WorkoutTemplate("FULL_BODY", "Full Body A", ("Chest", "Back", "Quadriceps"), 6),
        WorkoutTemplate("FULL_BODY", "Full Body B", ("Shoulders", "Hamstrings", "Core"), 6),
        WorkoutTemplate("FULL_BODY", "Full Body C", ("Back", "Glutes", "Biceps"), 6),
    ],
    4: [
        WorkoutTemplate("UPPER_BODY", "Upper Body A", ("Chest", "Shoulders", "Triceps"), 6),
        WorkoutTemplate("LOWER_BODY", "Lower Body A", ("Quadriceps", "Hamstrings", "Glutes"), 6),
        WorkoutTemplate("UPPER_BODY", "Upper Body B", ("Back", "Biceps", "Shoulders"), 6),
        WorkoutTemplate("LOWER_BODY", "Lower Body B", ("Glutes", "Hamstrings", "Calves"), 6),
    ],
    5: [
        WorkoutTemplate("PUSH", "Push Day", ("Chest", "Shoulders", "Triceps"), 6),
        WorkoutTemplate("PULL", "Pull Day", ("Back", "Biceps"), 6),
        WorkoutTemplate("LEGS", "Leg Day", ("Quadriceps", "Hamstrings", "Glutes"), 6),
        WorkoutTemplate("UPPER_BODY", "Upper Strength", ("Chest", "Back", "Shoulders"), 5),
        WorkoutTemplate("CORE", "Core & Conditioning", ("Core",), 5),
    ],
    6: [
        WorkoutTemplate("PUSH", "Push A", ("Chest", "Shoulders", "Triceps"), 6),
        WorkoutTemplate("PULL", "Pull A", ("Back", "Biceps"), 6),
        WorkoutTemplate("LEGS", "Legs A", ("Quadriceps", "Hamstrings", "Glutes"), 6),
        WorkoutTemplate("PUSH", "Push B", ("Shoulders", "Chest", "Triceps"), 5),
        WorkoutTemplate("PULL", "Pull B", ("Back", "Biceps", "Core"), 5),
        WorkoutTemplate("LEGS", "Legs B", ("Glutes", "Calves", "Core"), 5),
    ],
}

SPLIT_TYPE_LABELS: Final[dict[str, str]] = {
    "FULL_BODY": "Full Body",
    "UPPER_BODY": "Upper Body",
    "LOWER_BODY": "Lower Body",
    "PUSH": "Push",
    "PULL": "Pull",
    "LEGS": "Legs",
    "CORE": "Core",
}

# =============================================================================
# PERIODIZATION PHASES
# =============================================================================

# Week ranges span 8 weeks while a program only has 4, so INTENSITY and
# DELOAD are never selected by phase_for_day() for days 1-28.
PROGRAM_PHASES: Final[list[PhaseInfo]] = [
    PhaseInfo(
        phase="FOUNDATION",
        name="Foundation",
        description="Build proper form and establish training habits",
        week_numbers=(1, 2),
        intensity=6,
        volume=7,
        focus="Form & Consistency",
    ),
    PhaseInfo(
        phase="BUILD",
        name="Build",
        description="Progressive strength and muscle development",
        week_numbers=(3, 4),
        intensity=7,
        volume=8,
        focus="Strength & Size",
    ),
    PhaseInfo(
        phase="INTENSITY",
        name="Intensity",
        description="Push your limits with challenging workouts",
        week_numbers=(5, 6),
        intensity=9,
        volume=8,
        focus="Peak Performance",
    ),
    PhaseInfo(
        phase="DELOAD",
        name="Deload",
        description="Active recovery to consolidate gains",
        week_numbers=(7, 8),
        intensity=5,
        volume=5,
        focus="Recovery & Growth",
    ),
]

PHASE_COLORS: Final[dict[str, str]] = {
    "FOUNDATION": "#10B981",
    "BUILD": "#3B82F6",
    "INTENSITY": "#F97316",
    "DELOAD": "#8B5CF6",
}

# =============================================================================
# PRESCRIPTION TABLES
# =============================================================================

BASE_DIFFICULTY_BY_LEVEL: Final[dict[str, int]] = {
    "beginner": 2,
    "intermediate": 3,
    "advanced": 4,
}
DEFAULT_BASE_DIFFICULTY: Final[int] = 2
DIFFICULTY_MIN: Final[int] = 1
DIFFICULTY_MAX: Final[int] = 5

PHASE_MODIFIER: Final[dict[str, int]] = {
    "FOUNDATION": 0,
    "BUILD": 1,
    "INTENSITY": 1,
    "DELOAD": -1,
}

BASE_SETS_BY_GOAL: Final[dict[str, int]] = {
    "lose_weight": 3,
    "build_muscle": 4,
    "get_fitter": 3,
    "maintain": 3,
}
DEFAULT_BASE_SETS: Final[int] = 3
MIN_SETS: Final[int] = 2

REPS_BY_GOAL_AND_PHASE: Final[dict[str, dict[str, str]]] = {
    "lose_weight": {
        "FOUNDATION": "12-15",
        "BUILD": "10-12",
        "INTENSITY": "15-20",
        "DELOAD": "12-15",
    },
    "build_muscle": {
        "FOUNDATION": "10-12",
        "BUILD": "8-10",
        "INTENSITY": "6-8",
        "DELOAD": "12-15",
    },
    "get_fitter": {
        "FOUNDATION": "12-15",
        "BUILD": "10-12",
        "INTENSITY": "8-10",
        "DELOAD": "12-15",
    },
    "maintain": {
        "FOUNDATION": "10-12",
        "BUILD": "10-12",
        "INTENSITY": "10-12",
        "DELOAD": "12-15",
    },
}
DEFAULT_REPS: Final[str] = "10-12"

REST_SECONDS_BY_GOAL: Final[dict[str, int]] = {
    "lose_weight": 45,
    "build_muscle": 90,
    "get_fitter": 60,
    "maintain": 60,
}
DEFAULT_REST_SECONDS: Final[int] = 60

# =============================================================================
# WARM-UP
# =============================================================================

WARMUP_EXERCISE_IDS: Final[tuple[str, ...]] = (
    "ex_jumping_jacks",
    "ex_high_knees",
    "ex_dynamic_stretching",
)
MAX_WARMUP_EXERCISES: Final[int] = 2
WARMUP_SETS: Final[int] = 1
WARMUP_REST_SECONDS: Final[int] = 30
WARMUP_REPS_CARDIO: Final[str] = "30-60 sec"
WARMUP_REPS_DEFAULT: Final[str] = "10-15"

# =============================================================================
# ESTIMATES
# =============================================================================

AVG_MINUTES_PER_SET: Final[float] = 1.5
CALORIES_PER_MINUTE: Final[float] = 7.0
DURATION_BUFFER_MINUTES: Final[int] = 10  # cap = workout_duration + buffer

# =============================================================================
# STORAGE
# =============================================================================

PROGRAM_STORAGE_KEY: Final[str] = "user_program_28day"
DATA_DIR_ENV_VAR: Final[str] = "FITPLAN_HOME"
DEFAULT_DATA_DIR_NAME: Final[str] = ".fitplan"
