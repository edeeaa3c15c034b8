"""Session builder and the set/exercise/session transition rules.

Every function here is pure: it takes a ``WorkoutSession`` and returns a new
one, leaving the input untouched.
"""

import time
from datetime import date, datetime, timezone
from typing import Optional, Union

from pydantic import BaseModel

from gemini_fitness.models.workout_session import (
    ExerciseStatus,
    SessionExercise,
    SessionSet,
    SetStatus,
    WorkoutSession,
    WorkoutStatus,
)
from gemini_fitness.models.workout_template import WorkoutTemplate

Number = Union[int, float]


def create_session_from_template(
    template: WorkoutTemplate,
    today: Optional[date] = None,
    now_ms: Optional[int] = None,
) -> WorkoutSession:
    """
    Start a new in-progress session from a template snapshot.

    Args:
        template: Template to copy exercises and sets from
        today: Workout date (default: current UTC date)
        now_ms: Creation instant in epoch milliseconds, used to keep ids unique

    Returns:
        WorkoutSession with every exercise and set pending
    """
    today = today or datetime.now(timezone.utc).date()
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000

    exercises = [
        SessionExercise(
            id=exercise.id,
            name=exercise.name,
            muscle_group=exercise.muscle_group,
            status=ExerciseStatus.PENDING,
            sets=[
                SessionSet(
                    suggested_reps=prescribed.suggested_reps,
                    suggested_weight=prescribed.suggested_weight,
                    completed_weight=prescribed.suggested_weight,
                    completed_reps=prescribed.suggested_reps,
                    status=SetStatus.PENDING,
                )
                for prescribed in exercise.sets
            ],
        )
        for exercise in template.exercises
    ]

    return WorkoutSession(
        id=f"{template.id}-{today.isoformat()}-{now_ms}",
        template_id=template.id,
        template_name=template.name,
        date=today,
        exercises=exercises,
        status=WorkoutStatus.IN_PROGRESS,
    )


def derive_exercise_status(exercise: SessionExercise) -> ExerciseStatus:
    """Completed once every set is done; pending only until a set is first touched."""
    if all(s.is_done for s in exercise.sets):
        return ExerciseStatus.COMPLETED
    if exercise.status == ExerciseStatus.PENDING and all(
        s.status == SetStatus.PENDING for s in exercise.sets
    ):
        return ExerciseStatus.PENDING
    return ExerciseStatus.IN_PROGRESS


def update_set(
    session: WorkoutSession,
    exercise_index: int,
    set_index: int,
    weight: Optional[Number],
    reps: Optional[int],
    status: SetStatus,
) -> WorkoutSession:
    """Overwrite one set and recompute the status of its exercise."""
    if exercise_index < 0 or set_index < 0:
        raise IndexError(f"Negative set position: ({exercise_index}, {set_index})")

    updated = session.model_copy(deep=True)
    exercise = updated.exercises[exercise_index]
    target = exercise.sets[set_index]

    target.completed_weight = weight
    target.completed_reps = reps
    target.status = SetStatus(status)
    exercise.status = derive_exercise_status(exercise)
    return updated


def complete_set(
    session: WorkoutSession, exercise_index: int, set_index: int, weight: Number, reps: int
) -> WorkoutSession:
    """
    Record a set as completed with the performed weight and reps.

    Args:
        session: Session to update
        exercise_index: Position of the exercise
        set_index: Position of the set within the exercise
        weight: Performed weight
        reps: Performed reps

    Returns:
        New session with the set completed
    """
    return update_set(session, exercise_index, set_index, weight, reps, SetStatus.COMPLETED)


def skip_set(session: WorkoutSession, exercise_index: int, set_index: int) -> WorkoutSession:
    """
    Record a set as skipped. Skipping always zeroes the performed values.

    Args:
        session: Session to update
        exercise_index: Position of the exercise
        set_index: Position of the set within the exercise

    Returns:
        New session with the set skipped
    """
    return update_set(session, exercise_index, set_index, 0, 0, SetStatus.SKIPPED)


def reopen_set(session: WorkoutSession, exercise_index: int, set_index: int) -> WorkoutSession:
    """Move a completed or skipped set back to pending, keeping its values as the edit buffer."""
    current = session.exercises[exercise_index].sets[set_index]
    return update_set(
        session,
        exercise_index,
        set_index,
        current.completed_weight,
        current.completed_reps,
        SetStatus.PENDING,
    )


def finish_session(session: WorkoutSession) -> WorkoutSession:
    """Mark the session completed. Callers must not finish a session twice."""
    return session.model_copy(update={"status": WorkoutStatus.COMPLETED}, deep=True)


class CompleteSet(BaseModel):
    exercise_index: int
    set_index: int
    weight: Number
    reps: int


class SkipSet(BaseModel):
    exercise_index: int
    set_index: int


class ReopenSet(BaseModel):
    exercise_index: int
    set_index: int


class UpdateSet(BaseModel):
    exercise_index: int
    set_index: int
    weight: Optional[Number] = None
    reps: Optional[int] = None
    status: SetStatus


class FinishWorkout(BaseModel):
    pass


SessionAction = Union[CompleteSet, SkipSet, ReopenSet, UpdateSet, FinishWorkout]


def apply_action(session: WorkoutSession, action: SessionAction) -> WorkoutSession:
    """Reduce one user action over the session."""
    if isinstance(action, CompleteSet):
        return complete_set(
            session, action.exercise_index, action.set_index, action.weight, action.reps
        )
    if isinstance(action, SkipSet):
        return skip_set(session, action.exercise_index, action.set_index)
    if isinstance(action, ReopenSet):
        return reopen_set(session, action.exercise_index, action.set_index)
    if isinstance(action, UpdateSet):
        return update_set(
            session,
            action.exercise_index,
            action.set_index,
            action.weight,
            action.reps,
            action.status,
        )
    if isinstance(action, FinishWorkout):
        return finish_session(session)
    raise TypeError(f"Unknown session action: {type(action).__name__}")
