"""Gemini Fitness exceptions."""


class GeminiFitnessError(Exception):
    """Base exception for Gemini Fitness errors."""
    pass


class ConfigurationError(GeminiFitnessError):
    """Raised when a required setting is missing from secrets."""
    pass


class StoreError(GeminiFitnessError):
    """Base exception for the remote tabular store."""
    pass


class StoreNotConnectedError(StoreError):
    """Raised when the store is used before connect() or after close()."""
    pass


class SheetsStoreError(StoreError):
    """Raised when a Drive or Sheets API call fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class SnapshotError(GeminiFitnessError):
    """Raised when the local snapshot cannot be written."""
    pass


class WorkoutError(GeminiFitnessError):
    """Base exception for workout flow errors."""
    pass


class TemplateNotFoundError(WorkoutError):
    """Raised when starting a workout from an unknown template id."""
    pass


class NoActiveWorkoutError(WorkoutError):
    """Raised when a session action is attempted with no workout running."""
    pass


class WorkoutAlreadyFinishedError(WorkoutError):
    """Raised when finishing a workout that is already completed."""
    pass
