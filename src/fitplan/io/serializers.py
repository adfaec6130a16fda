"""
JSON serialization for program data models.

Handles conversion between the Program dataclasses and JSON-compatible
dicts, validating stored data on the way back in.
"""

import json
import re
from datetime import datetime
from typing import Any

from ..core.catalog.loader import exercise_from_dict
from ..core.config import PROGRAM_LENGTH_DAYS
from ..core.models import (
    ExerciseRecord,
    Program,
    ProgramDay,
    ProgramDayExercise,
)


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def validate_date(date_str: str) -> str:
    """
    Validate and normalize date string to ISO format.

    Args:
        date_str: Date string to validate

    Returns:
        Normalized YYYY-MM-DD string

    Raises:
        ValidationError: If date format is invalid
    """
    if not isinstance(date_str, str) or not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValidationError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")

    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise ValidationError(f"Invalid date: {date_str}") from e

    return date_str


def validate_weekdays(days: list[int]) -> list[int]:
    """
    Validate a list of weekday indices (Sunday=0 ... Saturday=6).

    Raises:
        ValidationError: If any entry is not an integer in 0-6
    """
    result = []
    for d in days:
        if isinstance(d, bool) or not isinstance(d, int) or not 0 <= d <= 6:
            raise ValidationError(f"Invalid weekday: {d!r}. Must be 0 (Sun) - 6 (Sat)")
        result.append(d)
    return result


def parse_weekdays(text: str) -> list[int]:
    """
    Parse a comma-separated weekday string.

    Accepts numbers (Sunday=0) and three-letter names, e.g. "1,3,5" or
    "mon,wed,fri".

    Raises:
        ValidationError: On unknown tokens
    """
    names = ["sun", "mon", "tue", "wed", "thu", "fri", "sat"]
    result: list[int] = []
    for token in text.split(","):
        token = token.strip().lower()
        if not token:
            continue
        if token.isdigit():
            result.append(int(token))
        elif token[:3] in names:
            result.append(names.index(token[:3]))
        else:
            raise ValidationError(f"Unknown weekday: {token!r}")
    return validate_weekdays(result)


def exercise_record_to_dict(record: ExerciseRecord) -> dict[str, Any]:
    """Convert an ExerciseRecord to the same shape the YAML catalog uses."""
    return {
        "id": record.id,
        "name": record.name,
        "category": record.category,
        "primary_muscles": list(record.primary_muscles),
        "secondary_muscles": list(record.secondary_muscles),
        "difficulty_level": record.difficulty_level,
        "equipment_required": list(record.equipment_required),
        "description": record.description,
        "setup_instructions": record.setup_instructions,
        "execution_steps": list(record.execution_steps),
        "form_cues": list(record.form_cues),
        "common_mistakes": list(record.common_mistakes),
        "tips": list(record.tips),
        "recommended_sets": {"min": record.recommended_sets.low, "max": record.recommended_sets.high},
        "recommended_reps": {"min": record.recommended_reps.low, "max": record.recommended_reps.high},
        "rest_seconds": {"min": record.rest_seconds.low, "max": record.rest_seconds.high},
        "calories_per_minute": record.calories_per_minute,
    }


def day_exercise_to_dict(ex: ProgramDayExercise) -> dict[str, Any]:
    return {
        "exercise_id": ex.exercise_id,
        "name": ex.name,
        "sets": ex.sets,
        "reps": ex.reps,
        "rest_seconds": ex.rest_seconds,
        "order": ex.order,
        "exercise_details": (
            exercise_record_to_dict(ex.exercise_details) if ex.exercise_details else None
        ),
        "is_completed": ex.is_completed,
        "is_skipped": ex.is_skipped,
        "notes": ex.notes,
    }


def dict_to_day_exercise(data: dict[str, Any]) -> ProgramDayExercise:
    """
    Convert dict to ProgramDayExercise.

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError("Exercise entry must be a JSON object")
    details = data.get("exercise_details")
    try:
        record = exercise_from_dict(details) if details else None
        return ProgramDayExercise(
            exercise_id=str(data["exercise_id"]),
            name=str(data["name"]),
            sets=int(data["sets"]),
            reps=str(data["reps"]),
            rest_seconds=int(data["rest_seconds"]),
            order=int(data["order"]),
            exercise_details=record,
            is_completed=bool(data.get("is_completed", False)),
            is_skipped=bool(data.get("is_skipped", False)),
            notes=data.get("notes"),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid exercise entry: {e}") from e


def program_day_to_dict(day: ProgramDay) -> dict[str, Any]:
    return {
        "day_number": day.day_number,
        "week_number": day.week_number,
        "day_of_week": day.day_of_week,
        "date": day.date,
        "is_rest_day": day.is_rest_day,
        "is_completed": day.is_completed,
        "split_type": day.split_type,
        "title": day.title,
        "subtitle": day.subtitle,
        "focus_muscles": list(day.focus_muscles),
        "exercises": [day_exercise_to_dict(ex) for ex in day.exercises],
        "estimated_duration": day.estimated_duration,
        "estimated_calories": day.estimated_calories,
        "phase": day.phase,
        "phase_week": day.phase_week,
        "completed_at": day.completed_at,
        "actual_duration": day.actual_duration,
    }


def dict_to_program_day(data: dict[str, Any]) -> ProgramDay:
    """
    Convert dict to ProgramDay.

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError("Program day must be a JSON object")
    validate_date(data.get("date", ""))
    raw_exercises = data.get("exercises", [])
    if not isinstance(raw_exercises, list):
        raise ValidationError(f"Exercises of day {data.get('day_number')} must be a list")
    exercises = [dict_to_day_exercise(e) for e in raw_exercises]
    orders = [e.order for e in exercises]
    if orders != sorted(set(orders)):
        raise ValidationError(f"Exercise order must be strictly increasing on day {data.get('day_number')}")
    try:
        return ProgramDay(
            day_number=int(data["day_number"]),
            week_number=int(data["week_number"]),
            day_of_week=int(data["day_of_week"]),
            date=data["date"],
            is_rest_day=bool(data["is_rest_day"]),
            is_completed=bool(data.get("is_completed", False)),
            split_type=data.get("split_type"),
            title=str(data.get("title", "")),
            subtitle=str(data.get("subtitle", "")),
            focus_muscles=list(data.get("focus_muscles", [])),
            exercises=exercises,
            estimated_duration=int(data.get("estimated_duration", 0)),
            estimated_calories=int(data.get("estimated_calories", 0)),
            phase=data["phase"],
            phase_week=int(data.get("phase_week", 1)),
            completed_at=data.get("completed_at"),
            actual_duration=(
                int(data["actual_duration"]) if data.get("actual_duration") is not None else None
            ),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid program day: {e}") from e


def program_to_dict(program: Program) -> dict[str, Any]:
    """
    Convert Program to JSON-compatible dict.

    Args:
        program: Program to convert

    Returns:
        Dict representation
    """
    return {
        "id": program.id,
        "user_id": program.user_id,
        "name": program.name,
        "description": program.description,
        "start_date": program.start_date,
        "end_date": program.end_date,
        "days_per_week": program.days_per_week,
        "workout_days": list(program.workout_days),
        "days": [program_day_to_dict(d) for d in program.days],
        "total_workouts": program.total_workouts,
        "total_rest_days": program.total_rest_days,
        "current_day": program.current_day,
        "completed_days": program.completed_days,
        "completed_workouts": program.completed_workouts,
        "streak_days": program.streak_days,
        "generated_at": program.generated_at,
        "updated_at": program.updated_at,
        "is_active": program.is_active,
    }


def dict_to_program(data: dict[str, Any]) -> Program:
    """
    Convert dict to Program.

    Args:
        data: Dict representation

    Returns:
        Program instance

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError("Program data must be a JSON object")

    validate_date(data.get("start_date", ""))
    validate_date(data.get("end_date", ""))
    raw_days = data.get("days")
    if not isinstance(raw_days, list) or len(raw_days) != PROGRAM_LENGTH_DAYS:
        raise ValidationError(f"Program must have a list of {PROGRAM_LENGTH_DAYS} days")
    days = [dict_to_program_day(d) for d in raw_days]

    try:
        return Program(
            id=str(data["id"]),
            user_id=str(data["user_id"]),
            name=str(data.get("name", "")),
            description=str(data.get("description", "")),
            start_date=data["start_date"],
            end_date=data["end_date"],
            days_per_week=int(data["days_per_week"]),
            workout_days=[int(d) for d in data.get("workout_days", [])],
            days=days,
            total_workouts=int(data["total_workouts"]),
            total_rest_days=int(data["total_rest_days"]),
            current_day=int(data.get("current_day", 1)),
            completed_days=int(data.get("completed_days", 0)),
            completed_workouts=int(data.get("completed_workouts", 0)),
            streak_days=int(data.get("streak_days", 0)),
            generated_at=str(data.get("generated_at", "")),
            updated_at=str(data.get("updated_at", "")),
            is_active=bool(data.get("is_active", True)),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid program: {e}") from e


def program_to_json(program: Program) -> str:
    return json.dumps(program_to_dict(program), indent=2)

