"""Workout template data models."""

from typing import List, Optional

from pydantic import BaseModel, Field


class PrescribedSet(BaseModel):
    """Suggested load for one set of a template exercise.

    ``None`` marks a value that could not be parsed from the sheet.
    """

    suggested_reps: Optional[int] = Field(..., description="Suggested reps")
    suggested_weight: Optional[int] = Field(..., description="Suggested weight in lbs")

    @property
    def is_valid(self) -> bool:
        return all(
            value is not None and value >= 0
            for value in (self.suggested_reps, self.suggested_weight)
        )

    class Config:
        frozen = True
        json_schema_extra = {"example": {"suggested_reps": 8, "suggested_weight": 135}}


class ExerciseTemplate(BaseModel):
    """Exercise inside a workout template with its prescribed sets."""

    id: str = Field(..., description="Exercise id, unique within a template")
    name: str = Field(..., description="Display name")
    muscle_group: str = Field(default="", description="Primary muscle group")
    sets: List[PrescribedSet] = Field(
        default_factory=list, description="Prescribed sets, in set-number order"
    )

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "id": "bench-press",
                "name": "Barbell Bench Press",
                "muscle_group": "Chest",
                "sets": [{"suggested_reps": 8, "suggested_weight": 135}],
            }
        }


class WorkoutTemplate(BaseModel):
    """Reusable workout routine a session is started from."""

    id: str = Field(..., description="Template id, e.g. 'push-day'")
    name: str = Field(..., description="Display name")
    description: str = Field(default="", description="Short description of the routine")
    muscle_groups: List[str] = Field(
        default_factory=list, description="Targeted muscle groups in display order"
    )
    exercises: List[ExerciseTemplate] = Field(
        default_factory=list, description="Exercises in the order they are performed"
    )

    @property
    def is_valid(self) -> bool:
        """True when every prescribed set carries parseable numbers."""
        return all(s.is_valid for exercise in self.exercises for s in exercise.sets)

    @property
    def set_count(self) -> int:
        return sum(len(exercise.sets) for exercise in self.exercises)

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "id": "push-day",
                "name": "Push Day",
                "description": "Chest, shoulders and triceps.",
                "muscle_groups": ["Chest", "Shoulders", "Triceps"],
                "exercises": [],
            }
        }
