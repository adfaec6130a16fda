"""
Exercise catalog for fitplan.

The catalog is a static, read-only lookup of ExerciseRecord objects keyed by
id and queryable by muscle, equipment and difficulty ceiling.
"""

from .loader import exercise_from_dict, load_exercises_from_yaml
from .registry import CatalogError, ExerciseCatalog, get_default_catalog

__all__ = [
    "CatalogError",
    "ExerciseCatalog",
    "exercise_from_dict",
    "get_default_catalog",
    "load_exercises_from_yaml",
]
