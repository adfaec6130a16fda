"""
Program progress tracking.

ProgramTracker owns at most one Program and is the only component that
mutates it.  Every mutation updates the in-memory program first and then
writes the whole program to the store.  Writes are best-effort: a failed
write is logged and the in-memory state is kept, so memory can run ahead
of disk until the next successful write.
"""

import logging
import random
from datetime import datetime
from typing import Callable

from ..io.program_store import ProgramStore
from ..io.serializers import ValidationError
from .catalog.registry import ExerciseCatalog
from .config import PROGRAM_LENGTH_DAYS
from .generator import generate_program
from .metrics import (
    compute_phase_progress,
    compute_stats,
    count_completed_days,
    count_completed_workouts,
    day_index_for,
    streak_ending_at,
)
from .models import (
    GeneratorOptions,
    PhaseProgress,
    Program,
    ProgramDay,
    ProgramStats,
    StreakInfo,
)

logger = logging.getLogger(__name__)


class ProgramTracker:
    """
    Stateful owner of a user's 28-day program.

    Dependencies are injected: the per-user store, the exercise catalog, the
    random source used for generation and a clock returning "now".
    """

    def __init__(
        self,
        store: ProgramStore,
        catalog: ExerciseCatalog | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.store = store
        self.catalog = catalog
        self.rng = rng if rng is not None else random.Random()
        self.clock = clock
        self.program: Program | None = None
        self.selected_day: int = 1

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def generate(self, options: GeneratorOptions) -> Program:
        """Generate a new program, replacing the current one, and persist it."""
        program = generate_program(options, self.catalog, rng=self.rng, now=self.clock())
        self.program = program
        self.selected_day = self.today_day_number()
        logger.info(
            "Generated program %s for user %s (%d workouts, %d rest days)",
            program.id,
            program.user_id,
            program.total_workouts,
            program.total_rest_days,
        )
        self._persist()
        return program

    def load(self) -> Program | None:
        """
        Load the stored program, if any.

        Unreadable data is logged and treated as "no program".
        """
        try:
            program = self.store.load_program()
        except (ValidationError, OSError) as e:
            logger.error("Failed to load program for user %s: %s", self.store.user_id, e)
            return None
        self.program = program
        if program is not None:
            self.selected_day = self.today_day_number()
        return program

    def clear(self) -> None:
        """Erase the stored program and forget the in-memory one."""
        self.program = None
        self.selected_day = 1
        try:
            self.store.delete_program()
        except OSError as e:
            logger.warning("Failed to delete stored program for user %s: %s", self.store.user_id, e)

    def reset(self) -> None:
        """Return the tracker to its initial state, erasing stored data."""
        self.clear()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def set_selected_day(self, day_number: int) -> int:
        self.selected_day = min(PROGRAM_LENGTH_DAYS, max(1, day_number))
        return self.selected_day

    def go_to_today(self) -> int:
        if self.program is not None:
            self.selected_day = self.today_day_number()
        return self.selected_day

    # ------------------------------------------------------------------
    # Day mutations
    # ------------------------------------------------------------------

    def complete_day(self, day_number: int) -> Program | None:
        """
        Mark a day and all of its exercises completed.

        streak_days only grows here: it becomes the larger of its previous
        value and the streak ending at ``day_number``.
        """
        program, day = self._require_day(day_number)
        if program is None:
            return None

        day.is_completed = True
        day.completed_at = self._now_iso()
        for ex in day.exercises:
            ex.is_completed = True
            ex.is_skipped = False

        self._recount(program)
        streak = streak_ending_at(program.days, day_number)
        program.streak_days = max(program.streak_days, streak)
        program.current_day = max(program.current_day, day_number)
        logger.debug("Completed day %d (streak %d)", day_number, program.streak_days)
        return self._touch_and_persist(program)

    def skip_day(self, day_number: int) -> Program | None:
        """
        Mark a day done with every exercise skipped.

        The day counts toward completed_days/completed_workouts, but the
        streak is reset to zero.
        """
        program, day = self._require_day(day_number)
        if program is None:
            return None

        day.is_completed = True
        for ex in day.exercises:
            ex.is_skipped = True
            ex.is_completed = False

        self._recount(program)
        program.streak_days = 0
        program.current_day = max(program.current_day, day_number)
        logger.debug("Skipped day %d", day_number)
        return self._touch_and_persist(program)

    def uncomplete_day(self, day_number: int) -> Program | None:
        """Revert a completed or skipped day.  streak_days is left unchanged."""
        program, day = self._require_day(day_number)
        if program is None:
            return None

        day.is_completed = False
        day.completed_at = None
        for ex in day.exercises:
            ex.is_completed = False
            ex.is_skipped = False

        self._recount(program)
        logger.debug("Reverted day %d", day_number)
        return self._touch_and_persist(program)

    # ------------------------------------------------------------------
    # Exercise mutations
    # ------------------------------------------------------------------

    def complete_exercise(self, day_number: int, exercise_id: str) -> Program | None:
        """Mark one exercise completed; day completion and streak are untouched."""
        return self._set_exercise_flags(day_number, exercise_id, completed=True)

    def skip_exercise(self, day_number: int, exercise_id: str) -> Program | None:
        """Mark one exercise skipped; day completion and streak are untouched."""
        return self._set_exercise_flags(day_number, exercise_id, completed=False)

    def _set_exercise_flags(self, day_number: int, exercise_id: str, completed: bool) -> Program | None:
        program, day = self._require_day(day_number)
        if program is None:
            return None

        matched = False
        for ex in day.exercises:
            if ex.exercise_id == exercise_id:
                ex.is_completed = completed
                ex.is_skipped = not completed
                matched = True
        if not matched:
            logger.debug("Day %d has no exercise %r", day_number, exercise_id)
        return self._touch_and_persist(program)

    # ------------------------------------------------------------------
    # Selectors
    # ------------------------------------------------------------------

    def today_day_number(self) -> int:
        """Day number for the clock's current date, clamped to 1..28 (1 without a program)."""
        if self.program is None:
            return 1
        return day_index_for(self.program.start_date, self.clock())

    def current_program_day(self) -> ProgramDay | None:
        if self.program is None:
            return None
        return self.program.day(self.today_day_number())

    def selected_program_day(self) -> ProgramDay | None:
        if self.program is None:
            return None
        return self.program.day(self.selected_day)

    def day_by_number(self, day_number: int) -> ProgramDay | None:
        if self.program is None:
            return None
        return self.program.day(day_number)

    def week_days(self, week_number: int) -> list[ProgramDay]:
        if self.program is None:
            return []
        return [d for d in self.program.days if d.week_number == week_number]

    def stats(self) -> ProgramStats:
        return compute_stats(self.program, self.today_day_number())

    def phase_progress(self) -> PhaseProgress:
        return compute_phase_progress(self.program, self.today_day_number())

    def streak_info(self) -> StreakInfo:
        stats = self.stats()
        return StreakInfo(current=stats.current_streak, longest=stats.longest_streak)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_day(self, day_number: int) -> tuple[Program | None, ProgramDay | None]:
        """
        Resolve ``day_number`` against the loaded program.

        Returns (None, None) when no program is loaded.

        Raises:
            ValueError: If day_number is outside 1..28
        """
        if not 1 <= day_number <= PROGRAM_LENGTH_DAYS:
            raise ValueError(f"day_number must be 1-{PROGRAM_LENGTH_DAYS}, got {day_number}")
        if self.program is None:
            logger.debug("No program loaded; ignoring update to day %d", day_number)
            return None, None
        return self.program, self.program.days[day_number - 1]

    @staticmethod
    def _recount(program: Program) -> None:
        program.completed_days = count_completed_days(program.days)
        program.completed_workouts = count_completed_workouts(program.days)

    def _now_iso(self) -> str:
        return self.clock().isoformat()

    def _touch_and_persist(self, program: Program) -> Program:
        program.updated_at = self._now_iso()
        self._persist()
        return program

    def _persist(self) -> bool:
        """
        Write the current program to the store.

        Returns:
            True if the write succeeded, False if it failed (already logged)
        """
        if self.program is None:
            return False
        try:
            self.store.save_program(self.program)
        except (OSError, TypeError, ValueError) as e:
            logger.warning(
                "Failed to persist program %s for user %s: %s",
                self.program.id,
                self.store.user_id,
                e,
            )
            return False
        return True