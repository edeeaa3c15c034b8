"""Workout flow: templates, the active session, history and summaries."""

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from gemini_fitness.exceptions import (
    NoActiveWorkoutError,
    SnapshotError,
    TemplateNotFoundError,
    WorkoutAlreadyFinishedError,
)
from gemini_fitness.models.workout_session import SetStatus, WorkoutSession
from gemini_fitness.models.workout_template import WorkoutTemplate
from gemini_fitness.storage.google_sheets import SheetIds
from gemini_fitness.storage.snapshot import LocalSnapshotStore
from gemini_fitness.utils import session_helpers
from gemini_fitness.utils.history_sync import HistorySyncQueue, SyncFailure
from gemini_fitness.utils.sheet_serializers import fetch_templates
from gemini_fitness.utils.summary import fetch_workout_summary

logger = logging.getLogger(__name__)


class FinishResult(BaseModel):
    """A finished session plus any local or remote save errors to show the user."""

    session: WorkoutSession
    sync_failures: List[SyncFailure] = Field(default_factory=list)
    snapshot_error: Optional[str] = Field(
        default=None, description="Why the local history snapshot could not be written"
    )

    @property
    def problems(self) -> List[str]:
        """User-facing messages for every save that did not go through."""
        problems = []
        if self.snapshot_error:
            problems.append("Could not save workout history on this device.")
        if self.sync_failures:
            problems.append("Could not save workout to Google Sheets. Check connection.")
        return problems


class WorkoutTracker:
    """Drives one user's workouts against an injected store and generator."""

    def __init__(
        self,
        store: Any,
        snapshot: LocalSnapshotStore,
        generator: Any,
        sheet_ids: SheetIds,
    ) -> None:
        """
        Initialize the tracker.

        Args:
            store: Connected tabular store
            snapshot: Local snapshot for history
            generator: Summary text generator with ``generate_text(prompt)``
            sheet_ids: Spreadsheet IDs for templates and history
        """
        self.store = store
        self.snapshot = snapshot
        self.generator = generator
        self.sheet_ids = sheet_ids
        self.sync_queue = HistorySyncQueue(store, sheet_ids.history_sheet_id)
        self.templates: List[WorkoutTemplate] = []
        self.history: List[WorkoutSession] = snapshot.load_history()
        self.current: Optional[WorkoutSession] = None
        self.last_result: Optional[FinishResult] = None

    def load_templates(self) -> List[WorkoutTemplate]:
        self.templates = fetch_templates(self.store, self.sheet_ids.templates_sheet_id)
        invalid = [t.id for t in self.templates if not t.is_valid]
        if invalid:
            logger.warning(f"Templates with unparseable sets: {', '.join(invalid)}")
        logger.info(f"Loaded {len(self.templates)} workout templates")
        return self.templates

    def start_workout(self, template_id: str, today: Optional[date] = None) -> WorkoutSession:
        template = next((t for t in self.templates if t.id == template_id), None)
        if template is None:
            raise TemplateNotFoundError(f"Unknown workout template: {template_id}")
        self.current = session_helpers.create_session_from_template(template, today=today)
        logger.info(f"Started workout {self.current.id}")
        return self.current

    def _active(self) -> WorkoutSession:
        if self.current is None:
            raise NoActiveWorkoutError("No workout in progress")
        if self.current.is_completed:
            raise WorkoutAlreadyFinishedError(f"Workout {self.current.id} is already finished")
        return self.current

    def apply(self, action: session_helpers.SessionAction) -> WorkoutSession:
        if isinstance(action, session_helpers.FinishWorkout):
            return self.finish_workout().session
        self.current = session_helpers.apply_action(self._active(), action)
        return self.current

    def complete_set(self, exercise_index: int, set_index: int, weight: float, reps: int) -> WorkoutSession:
        return self.apply(session_helpers.CompleteSet(
            exercise_index=exercise_index, set_index=set_index, weight=weight, reps=reps
        ))

    def skip_set(self, exercise_index: int, set_index: int) -> WorkoutSession:
        return self.apply(session_helpers.SkipSet(exercise_index=exercise_index, set_index=set_index))

    def reopen_set(self, exercise_index: int, set_index: int) -> WorkoutSession:
        return self.apply(session_helpers.ReopenSet(exercise_index=exercise_index, set_index=set_index))

    def update_set(
        self,
        exercise_index: int,
        set_index: int,
        weight: Optional[float],
        reps: Optional[int],
        status: SetStatus,
    ) -> WorkoutSession:
        return self.apply(session_helpers.UpdateSet(
            exercise_index=exercise_index,
            set_index=set_index,
            weight=weight,
            reps=reps,
            status=status,
        ))

    def finish_workout(self) -> FinishResult:
        """
        Finish the active workout.

        The session is committed to in-memory history first. Writing the local
        snapshot and uploading to the history sheet are both best-effort: their
        failures are returned, not raised, and the upload is attempted either way.

        Returns:
            FinishResult with the completed session, any sync failures and any
            snapshot error
        """
        finished = session_helpers.finish_session(self._active())
        self.current = finished
        self.history.append(finished)
        logger.info(f"Finished workout {finished.id}")

        snapshot_error = None
        try:
            self.snapshot.save_history(self.history)
        except SnapshotError as e:
            logger.error(f"Failed to save history snapshot: {e}", exc_info=True)
            snapshot_error = str(e)

        self.sync_queue.enqueue(finished)
        self.last_result = FinishResult(
            session=finished,
            sync_failures=self.sync_queue.flush(),
            snapshot_error=snapshot_error,
        )
        return self.last_result

    def retry_sync(self) -> List[SyncFailure]:
        failures = self.sync_queue.flush()
        if self.last_result is not None:
            self.last_result = self.last_result.model_copy(update={"sync_failures": failures})
        return failures

    def summarize(self) -> str:
        if self.current is None or not self.current.is_completed:
            raise NoActiveWorkoutError("No finished workout to summarize")
        return fetch_workout_summary(self.current, self.generator)

    def go_home(self) -> None:
        self.current = None
        self.last_result = None

    def history_newest_first(self) -> List[WorkoutSession]:
        # Same-day workouts keep newest first.
        return sorted(reversed(self.history), key=lambda s: s.date, reverse=True)

    def workouts_this_week(self, today: Optional[date] = None) -> int:
        today = today or datetime.now(timezone.utc).date()
        week_ago = today - timedelta(days=7)
        return sum(1 for s in self.history if s.date > week_ago)
