"""Best-effort upload of finished workouts to the history sheet."""

import logging
from typing import Any, List

from pydantic import BaseModel

from gemini_fitness.models.workout_session import WorkoutSession
from gemini_fitness.utils.sheet_serializers import save_workout_to_sheet

logger = logging.getLogger(__name__)


class SyncFailure(BaseModel):
    """A queued workout that could not be uploaded."""

    session_id: str
    error: str


class HistorySyncQueue:
    """Pending uploads of workouts already committed to local history.

    A failed upload stays queued so a later flush can try it again; the local
    history is never rolled back.
    """

    def __init__(self, store: Any, spreadsheet_id: str) -> None:
        self.store = store
        self.spreadsheet_id = spreadsheet_id
        self._pending: List[WorkoutSession] = []

    @property
    def pending(self) -> List[WorkoutSession]:
        return list(self._pending)

    def enqueue(self, session: WorkoutSession) -> None:
        self._pending.append(session)

    def flush(self) -> List[SyncFailure]:
        """
        Attempt every pending upload once, in order.

        Returns:
            Failures for the uploads that are still pending
        """
        failures = []
        remaining = []
        for session in self._pending:
            try:
                save_workout_to_sheet(self.store, session, self.spreadsheet_id)
            except Exception as e:
                logger.error(f"Failed to save workout {session.id} to Google Sheets: {e}", exc_info=True)
                failures.append(SyncFailure(session_id=session.id, error=str(e)))
                remaining.append(session)
        self._pending = remaining
        return failures
