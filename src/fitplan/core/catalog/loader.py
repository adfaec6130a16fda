"""
YAML → ExerciseRecord loader.

Loads exercise records from the YAML files bundled in
``src/fitplan/exercises/``.  Each file holds a top-level ``exercises`` list;
records are keyed by their ``id``.

User overrides: place YAML files in ``<data dir>/exercises/`` (by default
``~/.fitplan/exercises/``).  A user record whose id matches a bundled record
is deep-merged over it, so only changed keys need to be listed.  A user
record with a new id is added to the catalog.

Usage (internal, called by registry.py):
    from .loader import load_exercises_from_yaml
    exercises = load_exercises_from_yaml()   # dict, possibly empty
"""

from __future__ import annotations

import warnings
from pathlib import Path

import yaml

from ..models import ExerciseRecord, IntRange

_REQUIRED_FIELDS: frozenset[str] = frozenset(
    {
        "id",
        "name",
        "category",
        "primary_muscles",
        "difficulty_level",
    }
)

_RANGE_FIELDS: tuple[str, ...] = ("recommended_sets", "recommended_reps", "rest_seconds")


def _range_from_dict(raw: dict, name: str) -> IntRange:
    """Convert ``{min: a, max: b}`` to an IntRange."""
    if not isinstance(raw, dict) or "min" not in raw or "max" not in raw:
        raise ValueError(f"{name} must be a mapping with 'min' and 'max'")
    return IntRange(int(raw["min"]), int(raw["max"]))


def _str_tuple(raw) -> tuple[str, ...]:
    if raw is None:
        return ()
    if isinstance(raw, str):
        return (raw,)
    return tuple(str(v) for v in raw)


def exercise_from_dict(d: dict) -> ExerciseRecord:
    """Convert a raw dict (from YAML or storage) to an ExerciseRecord.

    Raises ValueError if any required field is absent or malformed.
    """
    missing = _REQUIRED_FIELDS - set(d)
    if missing:
        raise ValueError(f"ExerciseRecord missing fields: {sorted(missing)}")

    ranges = {
        name: _range_from_dict(d[name], name) for name in _RANGE_FIELDS if name in d
    }

    return ExerciseRecord(
        id=str(d["id"]),
        name=str(d["name"]),
        category=str(d["category"]).upper(),
        primary_muscles=_str_tuple(d["primary_muscles"]),
        secondary_muscles=_str_tuple(d.get("secondary_muscles")),
        difficulty_level=int(d["difficulty_level"]),
        equipment_required=_str_tuple(d.get("equipment_required")),
        description=str(d.get("description", "")),
        setup_instructions=str(d.get("setup_instructions", "")),
        execution_steps=_str_tuple(d.get("execution_steps")),
        form_cues=_str_tuple(d.get("form_cues")),
        common_mistakes=_str_tuple(d.get("common_mistakes")),
        tips=_str_tuple(d.get("tips")),
        calories_per_minute=float(d.get("calories_per_minute", 5.0)),
        **ranges,
    )


def _load_yaml_file(path: Path) -> list[dict]:
    """Load the ``exercises`` list from a YAML file; [] (with a warning) on error."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(f"fitplan: cannot read {path} ({exc})", stacklevel=3)
        return []
    if not isinstance(data, dict):
        return []
    entries = data.get("exercises") or []
    return [e for e in entries if isinstance(e, dict)]


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def get_bundled_exercises_dir() -> Path | None:
    """Return path to the bundled exercises/ data directory, or None if not found."""
    # loader.py lives at src/fitplan/core/catalog/loader.py
    # three levels up → src/fitplan/
    candidate = Path(__file__).parent.parent.parent / "exercises"
    return candidate if candidate.is_dir() else None


def _collect(directory: Path) -> dict[str, dict]:
    """Return {id: raw dict} for every record in every *.yaml file of a directory."""
    raw: dict[str, dict] = {}
    for path in sorted(directory.glob("*.yaml")):
        for entry in _load_yaml_file(path):
            ex_id = entry.get("id")
            if not ex_id:
                warnings.warn(f"fitplan: record without id in {path.name}", stacklevel=2)
                continue
            raw[str(ex_id)] = entry
    return raw


def load_exercises_from_yaml(
    bundled_dir: Path | None = None,
    user_dir: Path | None = None,
) -> dict[str, ExerciseRecord]:
    """Return {exercise_id: ExerciseRecord} loaded from the YAML catalog.

    Bundled records are loaded first, then user records are deep-merged over
    them (or added, for new ids).  Invalid records are skipped with a warning.

    Args:
        bundled_dir: Directory with bundled YAML files (default: package data)
        user_dir: Optional directory with user override files
    """
    if bundled_dir is None:
        bundled_dir = get_bundled_exercises_dir()

    raw: dict[str, dict] = {}
    if bundled_dir is not None and bundled_dir.is_dir():
        raw = _collect(bundled_dir)

    if user_dir is not None and user_dir.is_dir():
        for ex_id, entry in _collect(user_dir).items():
            raw[ex_id] = _deep_merge(raw[ex_id], entry) if ex_id in raw else entry

    result: dict[str, ExerciseRecord] = {}
    for ex_id, entry in raw.items():
        try:
            result[ex_id] = exercise_from_dict(entry)
        except (ValueError, TypeError) as exc:
            warnings.warn(f"fitplan: skipping exercise '{ex_id}': {exc}", stacklevel=2)
    return result
