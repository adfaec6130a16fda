"""
Split template resolution.

Maps a weekly workout frequency to the ordered list of day templates the
assembler cycles through.
"""

from .config import (
    DAYS_PER_WEEK_MAX,
    DAYS_PER_WEEK_MIN,
    FALLBACK_DAYS_PER_WEEK,
    SPLIT_CONFIGS,
)
from .models import WorkoutTemplate


def clamp_days_per_week(days_per_week: int) -> int:
    """Clamp a requested frequency to the supported 3-6 range."""
    return min(DAYS_PER_WEEK_MAX, max(DAYS_PER_WEEK_MIN, int(days_per_week)))


def resolve_split_templates(days_per_week: int) -> list[WorkoutTemplate]:
    """
    Get the ordered workout templates for a weekly frequency.

    Args:
        days_per_week: Requested workouts per week (clamped to 3-6)

    Returns:
        New list of templates; the templates themselves are shared constants
    """
    effective = clamp_days_per_week(days_per_week)
    templates = SPLIT_CONFIGS.get(effective) or SPLIT_CONFIGS[FALLBACK_DAYS_PER_WEEK]
    return list(templates)
