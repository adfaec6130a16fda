"""
Tests for JSON persistence, serializers and the YAML exercise catalog.
"""

import json
import random
from datetime import datetime

import pytest

from fitplan.core.catalog.loader import exercise_from_dict, load_exercises_from_yaml
from fitplan.core.catalog.registry import CatalogError, get_data_dir, get_default_catalog
from fitplan.core.config import WARMUP_EXERCISE_IDS
from fitplan.core.generator import generate_program
from fitplan.io.program_store import ProgramStore, get_default_store
from fitplan.io.serializers import (
    ValidationError,
    dict_to_program,
    parse_weekdays,
    program_to_dict,
    validate_date,
)


@pytest.fixture
def program(monday_options, bundled_catalog):
    return generate_program(
        monday_options, bundled_catalog, rng=random.Random(1), now=datetime(2026, 10, 19, 8, 0)
    )


class TestProgramStore:
    """Per-user key/value files."""

    def test_get_set_delete(self, tmp_path):
        store = ProgramStore(tmp_path, "u1")
        assert store.get("prefs") is None
        store.set("prefs", {"units": "metric"})
        assert store.get("prefs") == {"units": "metric"}
        assert store.path_for("prefs").exists()
        store.delete("prefs")
        assert store.get("prefs") is None
        store.delete("prefs")  # missing keys are ignored

    def test_keys_scoped_by_user(self, tmp_path):
        ProgramStore(tmp_path, "alice").set("k", 1)
        assert ProgramStore(tmp_path, "bob").get("k") is None

    def test_user_id_sanitized(self, tmp_path):
        store = ProgramStore(tmp_path, "../evil/user")
        assert store.user_dir.parent == tmp_path / "users"
        assert "/" not in store.user_dir.name

    def test_empty_user_rejected(self, tmp_path):
        with pytest.raises(ValueError):
            ProgramStore(tmp_path, "")

    def test_no_temp_files_left(self, tmp_path):
        store = ProgramStore(tmp_path, "u1")
        store.set("a", [1, 2, 3])
        assert [p.name for p in store.user_dir.iterdir()] == ["a.json"]

    def test_program_round_trip(self, tmp_path, program):
        store = ProgramStore(tmp_path, "u1")
        store.save_program(program)
        loaded = store.load_program()
        assert program_to_dict(loaded) == program_to_dict(program)
        assert loaded.days[0].exercises[0].exercise_details == program.days[0].exercises[0].exercise_details

    def test_delete_program(self, tmp_path, program):
        store = ProgramStore(tmp_path, "u1")
        store.save_program(program)
        store.delete_program()
        assert store.load_program() is None

    def test_corrupt_json_raises(self, tmp_path):
        store = ProgramStore(tmp_path, "u1")
        store.user_dir.mkdir(parents=True)
        store.program_path.write_text("[1, 2", encoding="utf-8")
        with pytest.raises(ValidationError):
            store.load_program()

    def test_default_store_uses_data_dir(self, tmp_path, monkeypatch):
        monkeypatch.setenv("FITPLAN_HOME", str(tmp_path / "home"))
        store = get_default_store("u1")
        assert store.base_dir == tmp_path / "home"
        assert get_default_store("u1", tmp_path).base_dir == tmp_path


class TestSerializers:
    def test_missing_fields_raise(self, program):
        data = program_to_dict(program)
        del data["total_workouts"]
        with pytest.raises(ValidationError):
            dict_to_program(data)

    def test_bad_date_raises(self, program):
        data = program_to_dict(program)
        data["days"][3]["date"] = "2026/10/22"
        with pytest.raises(ValidationError):
            dict_to_program(data)

    def test_exercise_order_must_increase(self, program):
        data = program_to_dict(program)
        exercises = data["days"][0]["exercises"]
        exercises[0]["order"], exercises[1]["order"] = exercises[1]["order"], exercises[0]["order"]
        with pytest.raises(ValidationError):
            dict_to_program(data)

    def test_not_an_object(self):
        with pytest.raises(ValidationError):
            dict_to_program([])

    @pytest.mark.parametrize("days", [None, "days", [], ["not a day"]])
    def test_days_must_be_list_of_objects(self, program, days):
        data = program_to_dict(program)
        data["days"] = days
        with pytest.raises(ValidationError):
            dict_to_program(data)

    def test_short_program_rejected(self, program):
        data = program_to_dict(program)
        data["days"] = data["days"][:27]
        with pytest.raises(ValidationError):
            dict_to_program(data)

    @pytest.mark.parametrize("exercises", [None, {"id": "x"}, [42]])
    def test_day_exercises_must_be_list_of_objects(self, program, exercises):
        data = program_to_dict(program)
        data["days"][0]["exercises"] = exercises
        with pytest.raises(ValidationError):
            dict_to_program(data)

    def test_invalid_workout_days_survive_round_trip(self, monday_options, bundled_catalog):
        monday_options.workout_days = [7, 9]
        program = generate_program(monday_options, bundled_catalog, rng=random.Random(1))
        restored = dict_to_program(json.loads(json.dumps(program_to_dict(program))))
        assert restored.workout_days == [7, 9]
        assert restored.total_rest_days == 28

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("1,3,5", [1, 3, 5]),
            ("mon, wed,fri", [1, 3, 5]),
            ("Sunday,Saturday", [0, 6]),
            ("0", [0]),
            ("", []),
        ],
    )
    def test_parse_weekdays(self, text, expected):
        assert parse_weekdays(text) == expected

    @pytest.mark.parametrize("text", ["funday", "7", "1,x"])
    def test_parse_weekdays_invalid(self, text):
        with pytest.raises(ValidationError):
            parse_weekdays(text)

    def test_validate_date(self):
        assert validate_date("2026-10-19") == "2026-10-19"
        with pytest.raises(ValidationError):
            validate_date("2026-02-30")
        with pytest.raises(ValidationError):
            validate_date("19.10.2026")


class TestExerciseCatalog:
    """Bundled YAML catalog and user overrides."""

    def test_bundled_catalog_loads(self, bundled_catalog):
        assert len(bundled_catalog) >= 40
        for ex in bundled_catalog.all():
            assert 1 <= ex.difficulty_level <= 5
            assert ex.primary_muscles

    def test_warmups_present(self, bundled_catalog):
        assert all(i in bundled_catalog for i in WARMUP_EXERCISE_IDS)
        assert [ex.id for ex in bundled_catalog.warmups()] == ["ex_jumping_jacks", "ex_high_knees"]

    def test_every_split_muscle_has_exercises(self, bundled_catalog):
        muscles = [
            "Chest", "Back", "Quadriceps", "Shoulders", "Hamstrings",
            "Core", "Glutes", "Biceps", "Triceps", "Calves",
        ]
        for muscle in muscles:
            assert bundled_catalog.by_muscle(muscle), muscle

    def test_exercise_from_dict(self):
        record = exercise_from_dict(
            {
                "id": "ex_test",
                "name": "Test",
                "category": "strength",
                "primary_muscles": "Chest",
                "difficulty_level": 2,
                "recommended_sets": {"min": 2, "max": 3},
            }
        )
        assert record.category == "STRENGTH"
        assert record.primary_muscles == ("Chest",)
        assert record.recommended_sets.high == 3

    def test_exercise_from_dict_missing_fields(self):
        with pytest.raises(ValueError):
            exercise_from_dict({"id": "x", "name": "X"})

    def test_user_override_merges(self, tmp_path):
        user_dir = tmp_path / "exercises"
        user_dir.mkdir()
        (user_dir / "mine.yaml").write_text(
            "exercises:\n"
            "  - id: ex_push_up\n"
            "    difficulty_level: 3\n"
            "    recommended_reps: {max: 25}\n"
            "  - id: ex_wall_sit\n"
            "    name: Wall Sit\n"
            "    category: strength\n"
            "    primary_muscles: [Quadriceps]\n"
            "    difficulty_level: 1\n",
            encoding="utf-8",
        )
        records = load_exercises_from_yaml(user_dir=user_dir)
        push_up = records["ex_push_up"]
        assert push_up.difficulty_level == 3
        assert push_up.name == "Push-Up"
        assert push_up.recommended_reps.low == 8
        assert push_up.recommended_reps.high == 25
        assert records["ex_wall_sit"].primary_muscles == ("Quadriceps",)

    def test_invalid_user_record_skipped_with_warning(self, tmp_path):
        user_dir = tmp_path / "exercises"
        user_dir.mkdir()
        (user_dir / "bad.yaml").write_text(
            "exercises:\n  - id: ex_broken\n    name: Broken\n",
            encoding="utf-8",
        )
        with pytest.warns(UserWarning, match="ex_broken"):
            records = load_exercises_from_yaml(user_dir=user_dir)
        assert "ex_broken" not in records
        assert "ex_push_up" in records

    def test_default_catalog_reads_data_dir(self, tmp_path):
        catalog = get_default_catalog(tmp_path)
        assert "ex_push_up" in catalog

    def test_empty_catalog_raises(self, tmp_path, monkeypatch):
        import fitplan.core.catalog.loader as loader

        monkeypatch.setattr(loader, "get_bundled_exercises_dir", lambda: None)
        with pytest.raises(CatalogError):
            get_default_catalog(tmp_path)

    def test_data_dir_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("FITPLAN_HOME", str(tmp_path))
        assert get_data_dir() == tmp_path
        monkeypatch.delenv("FITPLAN_HOME")
        assert get_data_dir().name == ".fitplan"
