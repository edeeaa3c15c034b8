"""Workout session data models."""

from datetime import date as Date
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, Field


class SetStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    SKIPPED = "skipped"


class ExerciseStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    # Not produced by the set transitions, kept for stored data.
    SKIPPED = "skipped"


class WorkoutStatus(str, Enum):
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class SessionSet(BaseModel):
    """One set as performed during a session."""

    suggested_reps: Optional[int] = Field(..., description="Reps prescribed by the template")
    suggested_weight: Optional[int] = Field(..., description="Weight prescribed by the template")
    completed_weight: Optional[Union[int, float]] = Field(
        ..., description="Weight lifted; live edit buffer until the set is done"
    )
    completed_reps: Optional[int] = Field(
        ..., description="Reps performed; live edit buffer until the set is done"
    )
    status: SetStatus = Field(default=SetStatus.PENDING)

    @property
    def is_done(self) -> bool:
        return self.status in (SetStatus.COMPLETED, SetStatus.SKIPPED)


class SessionExercise(BaseModel):
    """Exercise being performed, copied from its template exercise."""

    id: str = Field(..., description="Template exercise id")
    name: str = Field(..., description="Exercise name")
    muscle_group: str = Field(default="", description="Primary muscle group")
    sets: List[SessionSet] = Field(default_factory=list)
    status: ExerciseStatus = Field(default=ExerciseStatus.PENDING)


class WorkoutSession(BaseModel):
    """A single run through a workout template on a given day."""

    id: str = Field(..., description="'<templateId>-<YYYY-MM-DD>-<epoch ms>'")
    template_id: str = Field(..., description="Template the session was started from")
    template_name: str = Field(..., description="Template name at start time")
    date: Date = Field(..., description="Workout date, YYYY-MM-DD")
    exercises: List[SessionExercise] = Field(default_factory=list)
    status: WorkoutStatus = Field(default=WorkoutStatus.IN_PROGRESS)

    @property
    def is_completed(self) -> bool:
        return self.status == WorkoutStatus.COMPLETED

    class Config:
        json_schema_extra = {
            "example": {
                "id": "push-day-2025-01-15-1736960400000",
                "template_id": "push-day",
                "template_name": "Push Day",
                "date": "2025-01-15",
                "exercises": [
                    {
                        "id": "bench-press",
                        "name": "Barbell Bench Press",
                        "muscle_group": "Chest",
                        "sets": [
                            {
                                "suggested_reps": 8,
                                "suggested_weight": 135,
                                "completed_weight": 135,
                                "completed_reps": 8,
                                "status": "completed",
                            }
                        ],
                        "status": "completed",
                    }
                ],
                "status": "completed",
            }
        }
