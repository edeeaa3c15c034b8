"""Local snapshot of each user's history and sheet IDs between runs."""

import hashlib
import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Union

from cryptography.fernet import Fernet, InvalidToken
from pydantic import ValidationError

from gemini_fitness.exceptions import SnapshotError
from gemini_fitness.models.workout_session import WorkoutSession
from gemini_fitness.storage.google_sheets import SheetIds

logger = logging.getLogger(__name__)

HISTORY_KEY = "workoutHistory"
SHEET_IDS_KEY = "googleSheetIds"


class LocalSnapshotStore:
    """JSON values stored as one file per fixed key.

    With an encryption key every value is Fernet-encrypted on disk.
    """

    def __init__(self, directory: Union[str, Path], encryption_key: Optional[str] = None) -> None:
        """
        Initialize the snapshot store.

        Args:
            directory: Directory holding the snapshot files
            encryption_key: Optional Fernet key; values are stored in plain JSON without it
        """
        self.directory = Path(directory).expanduser()
        self._encryption_key = encryption_key
        self._cipher: Optional[Fernet] = None
        if encryption_key:
            key = encryption_key.encode() if isinstance(encryption_key, str) else encryption_key
            self._cipher = Fernet(key)

    def for_user(self, email: str) -> "LocalSnapshotStore":
        """
        Snapshot store scoped to one Google account.

        Args:
            email: Signed-in user's email address

        Returns:
            Store rooted at a subdirectory named from the hashed email
        """
        if not email:
            raise SnapshotError("Cannot scope snapshot without a user email")
        digest = hashlib.sha256(email.strip().lower().encode("utf-8")).hexdigest()
        return LocalSnapshotStore(self.directory / digest[:32], self._encryption_key)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def save(self, key: str, value: Any) -> None:
        data = json.dumps(value).encode("utf-8")
        if self._cipher:
            data = self._cipher.encrypt(data)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            self._path(key).write_bytes(data)
        except OSError as e:
            raise SnapshotError(f"Failed to write snapshot '{key}': {e}") from e

    def load(self, key: str) -> Optional[Any]:
        """
        Load a stored value.

        Returns:
            The stored value, or None when missing or unreadable
        """
        path = self._path(key)
        if not path.exists():
            return None
        try:
            data = path.read_bytes()
            if self._cipher:
                data = self._cipher.decrypt(data)
            return json.loads(data.decode("utf-8"))
        except (OSError, InvalidToken, ValueError) as e:
            logger.warning(f"Failed to load snapshot '{key}': {e}")
            return None

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)

    def save_history(self, history: List[WorkoutSession]) -> None:
        self.save(HISTORY_KEY, [session.model_dump(mode="json") for session in history])

    def load_history(self) -> List[WorkoutSession]:
        data = self.load(HISTORY_KEY)
        if not isinstance(data, list):
            return []
        try:
            return [WorkoutSession(**item) for item in data]
        except (TypeError, ValidationError) as e:
            logger.warning(f"Failed to parse workout history snapshot: {e}")
            return []

    def save_sheet_ids(self, sheet_ids: SheetIds) -> None:
        self.save(SHEET_IDS_KEY, sheet_ids.model_dump(by_alias=True))

    def load_sheet_ids(self) -> Optional[SheetIds]:
        data = self.load(SHEET_IDS_KEY)
        if not isinstance(data, dict):
            return None
        try:
            return SheetIds(**data)
        except ValidationError as e:
            logger.warning(f"Failed to parse sheet IDs snapshot: {e}")
            return None

    def clear_sheet_ids(self) -> None:
        self.delete(SHEET_IDS_KEY)
