import re
from datetime import date

import pytest

from gemini_fitness.models.workout_session import ExerciseStatus, SetStatus, WorkoutStatus
from gemini_fitness.utils import session_helpers
from gemini_fitness.utils.session_helpers import (
    CompleteSet,
    FinishWorkout,
    ReopenSet,
    SkipSet,
    UpdateSet,
    apply_action,
)


def test_session_mirrors_template(two_exercise_template, workout_date):
    session = session_helpers.create_session_from_template(two_exercise_template, today=workout_date)

    assert session.status == WorkoutStatus.IN_PROGRESS
    assert session.template_id == "upper"
    assert session.template_name == "Upper Body"
    assert session.date == workout_date
    assert len(session.exercises) == len(two_exercise_template.exercises)
    for exercise, template_exercise in zip(session.exercises, two_exercise_template.exercises):
        assert exercise.id == template_exercise.id
        assert exercise.status == ExerciseStatus.PENDING
        assert len(exercise.sets) == len(template_exercise.sets)
        for performed in exercise.sets:
            assert performed.status == SetStatus.PENDING
            assert performed.completed_weight == performed.suggested_weight
            assert performed.completed_reps == performed.suggested_reps


def test_session_id_combines_template_date_and_instant(push_day):
    session = session_helpers.create_session_from_template(
        push_day, today=date(2025, 3, 1), now_ms=1740787200000
    )

    assert session.id == "push-day-2025-03-01-1740787200000"


def test_session_ids_are_unique_without_fixed_instant(push_day, workout_date):
    first = session_helpers.create_session_from_template(push_day, today=workout_date)

    assert re.fullmatch(r"push-day-2025-01-15-\d+", first.id)


def test_derived_exercise_status(three_set_template):
    session = session_helpers.create_session_from_template(three_set_template)

    session = session_helpers.complete_set(session, 0, 0, 185, 8)
    assert session.exercises[0].status == ExerciseStatus.IN_PROGRESS

    session = session_helpers.skip_set(session, 0, 1)
    assert session.exercises[0].status == ExerciseStatus.IN_PROGRESS

    completed = session_helpers.complete_set(session, 0, 2, 185, 7)
    skipped = session_helpers.skip_set(session, 0, 2)
    assert completed.exercises[0].status == ExerciseStatus.COMPLETED
    assert skipped.exercises[0].status == ExerciseStatus.COMPLETED


def test_skip_zeroes_performed_values_after_edits(three_set_template):
    session = session_helpers.create_session_from_template(three_set_template)
    session = session_helpers.complete_set(session, 0, 0, 200, 10)

    session = session_helpers.skip_set(session, 0, 0)

    skipped = session.exercises[0].sets[0]
    assert skipped.status == SetStatus.SKIPPED
    assert skipped.completed_weight == 0
    assert skipped.completed_reps == 0


def test_reopen_returns_set_to_pending_and_keeps_values(three_set_template):
    session = session_helpers.create_session_from_template(three_set_template)
    session = session_helpers.complete_set(session, 0, 0, 190, 6)

    session = session_helpers.reopen_set(session, 0, 0)

    reopened = session.exercises[0].sets[0]
    assert reopened.status == SetStatus.PENDING
    assert (reopened.completed_weight, reopened.completed_reps) == (190, 6)
    # Only pending sets left, so the exercise keeps its previous status.
    assert session.exercises[0].status == ExerciseStatus.IN_PROGRESS


def test_reopen_completed_exercise_drops_back_to_in_progress(push_day):
    session = session_helpers.create_session_from_template(push_day)
    session = session_helpers.complete_set(session, 0, 0, 135, 8)
    assert session.exercises[0].status == ExerciseStatus.COMPLETED

    session = session_helpers.reopen_set(session, 0, 0)

    assert session.exercises[0].status == ExerciseStatus.IN_PROGRESS


def test_updates_do_not_mutate_input(push_day):
    original = session_helpers.create_session_from_template(push_day)

    updated = session_helpers.complete_set(original, 0, 0, 140, 8)

    assert original.exercises[0].sets[0].status == SetStatus.PENDING
    assert updated.exercises[0].sets[0].completed_weight == 140


def test_only_touched_exercise_changes(two_exercise_template):
    session = session_helpers.create_session_from_template(two_exercise_template)

    session = session_helpers.complete_set(session, 1, 0, 65, 10)

    assert session.exercises[0].status == ExerciseStatus.PENDING
    assert session.exercises[1].status == ExerciseStatus.COMPLETED


def test_finish_allows_pending_exercises(two_exercise_template):
    session = session_helpers.create_session_from_template(two_exercise_template)

    finished = session_helpers.finish_session(session)

    assert finished.status == WorkoutStatus.COMPLETED
    assert finished.is_completed
    assert not session.is_completed
    assert finished.exercises[0].status == ExerciseStatus.PENDING


def test_out_of_range_positions_raise(push_day):
    session = session_helpers.create_session_from_template(push_day)

    with pytest.raises(IndexError):
        session_helpers.complete_set(session, 1, 0, 100, 5)
    with pytest.raises(IndexError):
        session_helpers.skip_set(session, 0, 3)
    with pytest.raises(IndexError):
        session_helpers.skip_set(session, -1, 0)


def test_apply_action_reduces_a_sequence(three_set_template):
    session = session_helpers.create_session_from_template(three_set_template)
    actions = [
        CompleteSet(exercise_index=0, set_index=0, weight=185, reps=8),
        SkipSet(exercise_index=0, set_index=1),
        UpdateSet(exercise_index=0, set_index=2, weight=175, reps=9, status=SetStatus.COMPLETED),
        ReopenSet(exercise_index=0, set_index=2),
        CompleteSet(exercise_index=0, set_index=2, weight=180, reps=8),
        FinishWorkout(),
    ]

    for action in actions:
        session = apply_action(session, action)

    sets = session.exercises[0].sets
    assert [s.status for s in sets] == [SetStatus.COMPLETED, SetStatus.SKIPPED, SetStatus.COMPLETED]
    assert sets[2].completed_weight == 180
    assert session.exercises[0].status == ExerciseStatus.COMPLETED
    assert session.status == WorkoutStatus.COMPLETED


def test_apply_action_rejects_unknown_actions(push_day):
    session = session_helpers.create_session_from_template(push_day)

    with pytest.raises(TypeError):
        apply_action(session, "finish")
