"""
Tests for the exercise selection engine.

A small hand-built catalog keeps the pools predictable; randomness is
pinned with seeded random.Random and assertions check structural
properties rather than specific picks.
"""

import random

from fitplan.core.catalog.registry import ExerciseCatalog, matches_equipment, matches_muscle
from fitplan.core.models import ExerciseRecord
from fitplan.core.selection import eligible_exercises, select_for_muscles


def _rec(
    ex_id: str,
    primary: tuple[str, ...],
    difficulty: int = 1,
    equipment: tuple[str, ...] = (),
    secondary: tuple[str, ...] = (),
) -> ExerciseRecord:
    return ExerciseRecord(
        id=ex_id,
        name=ex_id.replace("_", " ").title(),
        category="STRENGTH",
        primary_muscles=primary,
        secondary_muscles=secondary,
        difficulty_level=difficulty,
        equipment_required=equipment,
    )


POOL = [
    _rec("chest_1", ("Chest",)),
    _rec("chest_2", ("Chest",), difficulty=2),
    _rec("chest_3", ("Chest",), difficulty=4),
    _rec("chest_bb", ("Chest",), equipment=("barbell", "bench")),
    _rec("back_1", ("Back",)),
    _rec("back_2", ("Back",), equipment=("dumbbell",)),
    _rec("back_bar", ("Back",), equipment=("pull-up bar",)),
    _rec("quad_1", ("Quadriceps",)),
    _rec("quad_2", ("Quadriceps",), equipment=("body weight",)),
    _rec("dip", ("Triceps",), secondary=("Chest",)),
    _rec("core_1", ("Core",)),
]


def _select(muscles, count, equipment=None, ceiling=5, excluded=None, seed=1):
    return select_for_muscles(
        POOL,
        muscles,
        count,
        equipment or [],
        ceiling,
        excluded if excluded is not None else set(),
        random.Random(seed),
    )


class TestMatching:
    """Equipment and muscle matching helpers."""

    def test_no_equipment_needed_always_matches(self):
        assert matches_equipment(_rec("a", ("Chest",)), [])

    def test_bodyweight_marker_matches_without_equipment(self):
        assert matches_equipment(_rec("a", ("Chest",), equipment=("body weight",)), [])
        assert matches_equipment(_rec("a", ("Chest",), equipment=("Body Weight",)), ["dumbbells"])

    def test_substring_case_insensitive(self):
        rec = _rec("a", ("Back",), equipment=("dumbbell",))
        assert matches_equipment(rec, ["Adjustable Dumbbells"])
        assert not matches_equipment(rec, ["kettlebell"])

    def test_every_requirement_must_be_covered(self):
        rec = _rec("a", ("Chest",), equipment=("barbell", "bench"))
        assert not matches_equipment(rec, ["barbell"])
        assert matches_equipment(rec, ["Olympic barbell", "flat bench"])

    def test_muscle_primary_and_secondary(self):
        rec = _rec("dip", ("Triceps",), secondary=("Chest",))
        assert matches_muscle(rec, "chest")
        assert not matches_muscle(rec, "chest", primary_only=True)
        assert matches_muscle(rec, "Triceps", primary_only=True)


class TestEligibility:
    def test_difficulty_ceiling_and_equipment(self):
        ids = {ex.id for ex in eligible_exercises(POOL, [], 2)}
        assert "chest_3" not in ids
        assert "chest_bb" not in ids
        assert "back_2" not in ids
        assert {"chest_1", "chest_2", "quad_2"} <= ids


class TestSelectForMuscles:
    """Selection bounds, exclusion handling and preferences."""

    def test_returns_requested_count_without_duplicates(self):
        selected, _ = _select(["Chest", "Back", "Quadriceps"], 6)
        ids = [ex.id for ex in selected]
        assert len(ids) == 6
        assert len(set(ids)) == 6

    def test_respects_difficulty_and_equipment(self):
        selected, _ = _select(["Chest", "Back"], 10, equipment=["dumbbells"], ceiling=2)
        for ex in selected:
            assert ex.difficulty_level <= 2
            assert matches_equipment(ex, ["dumbbells"])

    def test_excluded_ids_never_selected(self):
        excluded = {"chest_1", "chest_2", "back_1"}
        selected, _ = _select(["Chest", "Back"], 4, excluded=excluded)
        assert not excluded & {ex.id for ex in selected}

    def test_caller_exclusion_set_not_mutated(self):
        excluded = {"quad_1"}
        selected, used = _select(["Chest"], 2, excluded=excluded)
        assert excluded == {"quad_1"}
        assert used == excluded | {ex.id for ex in selected}

    def test_primary_muscle_preferred(self):
        """'dip' trains Chest only as a secondary muscle, so it is not picked first."""
        for seed in range(20):
            selected, _ = _select(["Chest"], 2, ceiling=2, seed=seed)
            assert {ex.id for ex in selected} <= {"chest_1", "chest_2"}

    def test_secondary_pool_used_when_no_primary(self):
        selected, _ = _select(["Chest"], 1, excluded={"chest_1", "chest_2", "chest_3", "chest_bb"})
        assert [ex.id for ex in selected] == ["dip"]

    def test_fills_from_any_eligible_exercise(self):
        selected, _ = _select(["Calves"], 3)
        assert len(selected) == 3

    def test_stops_when_pool_exhausted(self):
        selected, used = _select(["Chest"], 10, ceiling=1, excluded={"back_1", "quad_1", "quad_2", "core_1"})
        assert {ex.id for ex in selected} == {"chest_1", "dip"}
        assert len(used) == 6

    def test_zero_count(self):
        selected, used = _select(["Chest"], 0, excluded={"x"})
        assert selected == []
        assert used == {"x"}

    def test_same_seed_same_selection(self):
        first, _ = _select(["Chest", "Back", "Quadriceps"], 6, seed=42)
        second, _ = _select(["Chest", "Back", "Quadriceps"], 6, seed=42)
        assert [ex.id for ex in first] == [ex.id for ex in second]


class TestCatalogQueries:
    def test_lookups(self):
        catalog = ExerciseCatalog(POOL)
        assert len(catalog) == len(POOL)
        assert "dip" in catalog
        assert catalog.by_id("missing") is None
        assert {ex.id for ex in catalog.by_muscle("Chest")} == {
            "chest_1",
            "chest_2",
            "chest_3",
            "chest_bb",
            "dip",
        }
        assert all(ex.difficulty_level <= 1 for ex in catalog.by_max_difficulty(1))
        assert "back_bar" not in {ex.id for ex in catalog.by_equipment(["dumbbells"])}

    def test_warmups_absent_from_small_catalog(self):
        assert ExerciseCatalog(POOL).warmups() == []
