"""
Exercise catalog registry.

ExerciseCatalog wraps the loaded records and answers the queries the
program engine needs: by id, by muscle, by available equipment and by
difficulty ceiling.  Use get_default_catalog() for the bundled catalog
merged with the user's overrides.
"""

import os
from pathlib import Path

from ..config import (
    DATA_DIR_ENV_VAR,
    DEFAULT_DATA_DIR_NAME,
    MAX_WARMUP_EXERCISES,
    WARMUP_EXERCISE_IDS,
)
from ..models import ExerciseRecord

BODYWEIGHT_MARKER = "body weight"


class CatalogError(Exception):
    """Raised when no exercise records can be loaded."""

    pass


def matches_equipment(record: ExerciseRecord, equipment: list[str]) -> bool:
    """
    Return True if the user's equipment covers everything the exercise needs.

    An exercise with no requirements always passes.  Otherwise every
    required item must be the bodyweight marker or appear (case-insensitive
    substring) in one of the user's items, so "dumbbell" matches
    "Adjustable Dumbbells".
    """
    if not record.equipment_required:
        return True
    owned = [item.lower() for item in equipment]
    for req in record.equipment_required:
        needed = req.lower()
        if needed == BODYWEIGHT_MARKER:
            continue
        if not any(needed in item for item in owned):
            return False
    return True


def matches_muscle(record: ExerciseRecord, muscle: str, primary_only: bool = False) -> bool:
    """Case-insensitive substring match against the record's muscle lists."""
    target = muscle.lower()
    muscles = record.primary_muscles
    if not primary_only:
        muscles = muscles + record.secondary_muscles
    return any(target in m.lower() for m in muscles)


class ExerciseCatalog:
    """Read-only lookup over a fixed set of ExerciseRecord objects."""

    def __init__(self, records: dict[str, ExerciseRecord] | list[ExerciseRecord]):
        if isinstance(records, dict):
            records = list(records.values())
        self._records: dict[str, ExerciseRecord] = {r.id: r for r in records}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, exercise_id: object) -> bool:
        return exercise_id in self._records

    def all(self) -> list[ExerciseRecord]:
        """All records in catalog order."""
        return list(self._records.values())

    def by_id(self, exercise_id: str) -> ExerciseRecord | None:
        return self._records.get(exercise_id)

    def by_muscle(self, muscle: str) -> list[ExerciseRecord]:
        """Records that train ``muscle`` as a primary or secondary mover."""
        return [r for r in self._records.values() if matches_muscle(r, muscle)]

    def by_equipment(self, equipment: list[str]) -> list[ExerciseRecord]:
        """Records the user can perform with the given equipment."""
        return [r for r in self._records.values() if matches_equipment(r, equipment)]

    def by_max_difficulty(self, level: int) -> list[ExerciseRecord]:
        """Records with ``difficulty_level <= level``."""
        return [r for r in self._records.values() if r.difficulty_level <= level]

    def warmups(self) -> list[ExerciseRecord]:
        """The fixed warm-up exercises that exist in this catalog (at most 2)."""
        found = [self._records[i] for i in WARMUP_EXERCISE_IDS if i in self._records]
        return found[:MAX_WARMUP_EXERCISES]


def get_data_dir() -> Path:
    """
    Return the fitplan data directory.

    ``$FITPLAN_HOME`` wins when set; otherwise ``~/.fitplan``.
    """
    override = os.environ.get(DATA_DIR_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / DEFAULT_DATA_DIR_NAME


def get_default_catalog(data_dir: Path | None = None) -> ExerciseCatalog:
    """
    Build the catalog from bundled YAML plus ``<data dir>/exercises`` overrides.

    Raises:
        CatalogError: If no records could be loaded at all
    """
    from .loader import load_exercises_from_yaml

    base = data_dir if data_dir is not None else get_data_dir()
    loaded = load_exercises_from_yaml(user_dir=base / "exercises")
    if not loaded:
        raise CatalogError(
            "fitplan: no exercise records could be loaded. "
            "Check that src/fitplan/exercises/*.yaml files are present and valid."
        )
    return ExerciseCatalog(loaded)
