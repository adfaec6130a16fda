"""
JSON file storage for generated programs.

Each user gets a directory under the data dir; every logical key is one
JSON file inside it (``<data dir>/users/<user_id>/<key>.json``).
"""

import json
import os
import re
import tempfile
from pathlib import Path
from typing import Any

from ..core.catalog.registry import get_data_dir
from ..core.config import PROGRAM_STORAGE_KEY
from ..core.models import Program
from .serializers import ValidationError, dict_to_program, program_to_dict

_SAFE_NAME = re.compile(r"[^A-Za-z0-9_.-]")


class ProgramStore:
    """
    Per-user key/value store backed by JSON files.

    ``get``/``set``/``delete`` work with JSON-compatible values; the
    ``*_program`` helpers add (de)serialization of the Program record kept
    under the ``user_program_28day`` key.
    """

    def __init__(self, base_dir: str | Path, user_id: str):
        """
        Initialize the store.

        Args:
            base_dir: Data directory (e.g. ~/.fitplan)
            user_id: Signed-in user the keys are scoped to
        """
        if not user_id:
            raise ValueError("user_id must be non-empty")
        self.base_dir = Path(base_dir)
        self.user_id = user_id
        self.user_dir = self.base_dir / "users" / _SAFE_NAME.sub("_", user_id)

    def path_for(self, key: str) -> Path:
        """Return the file backing a logical key."""
        return self.user_dir / f"{_SAFE_NAME.sub('_', key)}.json"

    @property
    def program_path(self) -> Path:
        return self.path_for(PROGRAM_STORAGE_KEY)

    def get(self, key: str) -> Any | None:
        """
        Load the value stored under ``key``.

        Returns:
            Decoded JSON value, or None if nothing is stored

        Raises:
            ValidationError: If the file exists but is not valid UTF-8 JSON
        """
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ValidationError(f"Error parsing {path}: {e}") from e

    def set(self, key: str, value: Any) -> None:
        """
        Store ``value`` under ``key``.

        Writes to a temporary file in the same directory and renames it over
        the target, so a crash never leaves a half-written file.
        """
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(value, f, indent=2)
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def delete(self, key: str) -> None:
        """Remove ``key``; missing keys are ignored."""
        path = self.path_for(key)
        if path.exists():
            path.unlink()

    def load_program(self) -> Program | None:
        """
        Load the stored program.

        Returns:
            Program, or None if none is stored

        Raises:
            ValidationError: If stored data is malformed
        """
        data = self.get(PROGRAM_STORAGE_KEY)
        if data is None:
            return None
        return dict_to_program(data)

    def save_program(self, program: Program) -> None:
        """Persist the full program, replacing any previous one."""
        self.set(PROGRAM_STORAGE_KEY, program_to_dict(program))

    def delete_program(self) -> None:
        self.delete(PROGRAM_STORAGE_KEY)


def get_default_store(user_id: str, data_dir: Path | None = None) -> ProgramStore:
    """
    Get a ProgramStore in the default data directory.

    Args:
        user_id: User the store is scoped to
        data_dir: Override for the data directory ($FITPLAN_HOME or ~/.fitplan)

    Returns:
        ProgramStore instance
    """
    return ProgramStore(data_dir if data_dir is not None else get_data_dir(), user_id)
