"""
Unit tests for the phase schedule and split template tables.

Values are read straight off the prescription tables in core/config.py.
"""

import pytest

from fitplan.core.config import PROGRAM_PHASES, SPLIT_CONFIGS
from fitplan.core.phases import (
    difficulty_for,
    phase_for_day,
    phase_for_week,
    phase_week_for,
    phase_weeks_label,
    reps_for,
    rest_seconds_for,
    sets_for,
    week_for_day,
)
from fitplan.core.splits import clamp_days_per_week, resolve_split_templates


class TestWeekAndPhaseLookup:
    """Day → week → phase mapping."""

    @pytest.mark.parametrize(
        "day, week",
        [(1, 1), (7, 1), (8, 2), (14, 2), (15, 3), (21, 3), (22, 4), (28, 4)],
    )
    def test_week_for_day(self, day, week):
        assert week_for_day(day) == week

    def test_first_and_last_day_phases(self):
        """Day 1 is Foundation, day 28 is Build."""
        assert phase_for_day(1).phase == "FOUNDATION"
        assert phase_for_day(28).phase == "BUILD"

    def test_intensity_and_deload_unreachable_in_28_days(self):
        """Only weeks 1-4 exist, so only Foundation and Build are ever used."""
        phases = {phase_for_day(d).phase for d in range(1, 29)}
        assert phases == {"FOUNDATION", "BUILD"}

    def test_later_weeks_still_map_to_table(self):
        assert phase_for_week(5).phase == "INTENSITY"
        assert phase_for_week(8).phase == "DELOAD"

    def test_unknown_week_falls_back_to_foundation(self):
        assert phase_for_week(9).phase == "FOUNDATION"
        assert phase_for_week(0).phase == "FOUNDATION"

    def test_phase_week_position(self):
        foundation, build = PROGRAM_PHASES[0], PROGRAM_PHASES[1]
        assert phase_week_for(foundation, 1) == 1
        assert phase_week_for(foundation, 2) == 2
        assert phase_week_for(build, 3) == 1
        assert phase_week_for(build, 4) == 2
        assert phase_week_for(foundation, 3) == 0

    def test_phase_weeks_label(self):
        assert [phase_weeks_label(p) for p in PROGRAM_PHASES] == [
            "Week 1-2",
            "Week 3-4",
            "Week 5-6",
            "Week 7-8",
        ]


class TestPrescriptionTables:
    """difficulty / sets / reps / rest formulas."""

    @pytest.mark.parametrize(
        "phase, level, expected",
        [
            ("FOUNDATION", "beginner", 2),
            ("BUILD", "beginner", 3),
            ("INTENSITY", "intermediate", 4),
            ("DELOAD", "intermediate", 2),
            ("BUILD", "advanced", 5),
            ("DELOAD", "advanced", 3),
        ],
    )
    def test_difficulty(self, phase, level, expected):
        assert difficulty_for(phase, level) == expected

    def test_difficulty_clamped_to_1_5(self):
        assert 1 <= difficulty_for("DELOAD", "beginner") <= 5
        assert difficulty_for("INTENSITY", "advanced") == 5

    def test_difficulty_unknown_level_uses_default_base(self):
        assert difficulty_for("FOUNDATION", "elite") == 2
        assert difficulty_for("UNKNOWN", "advanced") == 4

    @pytest.mark.parametrize(
        "phase, goal, expected",
        [
            ("FOUNDATION", "build_muscle", 4),
            ("BUILD", "build_muscle", 5),
            ("FOUNDATION", "get_fitter", 3),
            ("BUILD", "lose_weight", 4),
            ("DELOAD", "maintain", 2),
        ],
    )
    def test_sets(self, phase, goal, expected):
        assert sets_for(phase, goal) == expected

    def test_sets_never_below_two(self):
        for goal in ("lose_weight", "build_muscle", "get_fitter", "maintain", "unknown"):
            for phase in ("FOUNDATION", "BUILD", "INTENSITY", "DELOAD"):
                assert sets_for(phase, goal) >= 2

    def test_reps(self):
        assert reps_for("build_muscle", "FOUNDATION") == "10-12"
        assert reps_for("build_muscle", "BUILD") == "8-10"
        assert reps_for("lose_weight", "INTENSITY") == "15-20"
        assert reps_for("get_fitter", "FOUNDATION") == "12-15"

    def test_reps_default(self):
        assert reps_for("unknown", "FOUNDATION") == "10-12"
        assert reps_for("build_muscle", "UNKNOWN") == "10-12"

    def test_rest(self):
        assert rest_seconds_for("lose_weight") == 45
        assert rest_seconds_for("build_muscle") == 90
        assert rest_seconds_for("get_fitter") == 60
        assert rest_seconds_for("maintain") == 60
        assert rest_seconds_for("unknown") == 60


class TestSplitTemplates:
    """Frequency → template rotation."""

    @pytest.mark.parametrize("n, expected", [(1, 3), (3, 3), (4, 4), (6, 6), (9, 6), (-2, 3)])
    def test_clamp(self, n, expected):
        assert clamp_days_per_week(n) == expected

    def test_template_counts_match_frequency(self):
        for n in (3, 4, 5, 6):
            assert len(resolve_split_templates(n)) == n

    def test_out_of_range_uses_clamped_split(self):
        assert resolve_split_templates(2) == SPLIT_CONFIGS[3]
        assert resolve_split_templates(7) == SPLIT_CONFIGS[6]

    def test_three_day_full_body(self):
        titles = [t.title for t in resolve_split_templates(3)]
        assert titles == ["Full Body A", "Full Body B", "Full Body C"]
        assert all(t.exercise_count == 6 for t in resolve_split_templates(3))

    def test_five_day_core_template(self):
        last = resolve_split_templates(5)[-1]
        assert last.split_type == "CORE"
        assert last.focus_muscles == ("Core",)
        assert last.exercise_count == 5

    def test_returns_new_list(self):
        first = resolve_split_templates(4)
        first.clear()
        assert len(resolve_split_templates(4)) == 4
