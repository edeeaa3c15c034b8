"""Conversion between workout models and sheet rows."""

import logging
from typing import Any, Dict, List, Sequence, Tuple

from gemini_fitness.models.sheet_rows import HistoryRow, TemplateRow
from gemini_fitness.models.workout_session import WorkoutSession
from gemini_fitness.models.workout_template import (
    ExerciseTemplate,
    PrescribedSet,
    WorkoutTemplate,
)

logger = logging.getLogger(__name__)

TEMPLATES_SHEET_NAME = "Workout Templates"
HISTORY_SHEET_NAME = "Workout History"


def parse_templates_from_sheet(values: Sequence[Sequence[Any]]) -> List[WorkoutTemplate]:
    """
    Rebuild workout templates from the rows of the templates sheet.

    Sets are kept in row order; the setNumber column is informational and
    never used to reorder them.

    Args:
        values: Sheet values including the header row

    Returns:
        Templates in order of first appearance
    """
    templates: Dict[str, Dict[str, Any]] = {}
    exercises: Dict[Tuple[str, str], Dict[str, Any]] = {}

    for line_number, values_row in enumerate(values[1:], start=2):
        result = TemplateRow.parse(values_row)
        row = result.row
        if row is None:
            continue
        if result.errors:
            logger.warning(
                f"Template row {line_number} has invalid values: {'; '.join(result.errors)}"
            )

        if row.template_id not in templates:
            templates[row.template_id] = {
                "id": row.template_id,
                "name": row.template_name,
                "description": row.template_description,
                "muscle_groups": row.muscle_groups,
                "exercises": [],
            }

        key = (row.template_id, row.exercise_id)
        if key not in exercises:
            exercises[key] = {
                "id": row.exercise_id,
                "name": row.exercise_name,
                "muscle_group": row.muscle_group,
                "sets": [],
            }
            templates[row.template_id]["exercises"].append(exercises[key])

        exercises[key]["sets"].append(
            PrescribedSet(
                suggested_reps=row.suggested_reps,
                suggested_weight=row.suggested_weight,
            )
        )

    return [
        WorkoutTemplate(
            id=data["id"],
            name=data["name"],
            description=data["description"],
            muscle_groups=data["muscle_groups"],
            exercises=[ExerciseTemplate(**exercise) for exercise in data["exercises"]],
        )
        for data in templates.values()
    ]


def template_to_rows(template: WorkoutTemplate) -> List[TemplateRow]:
    """Flatten a template into one row per prescribed set."""
    rows = []
    for exercise in template.exercises:
        for set_number, prescribed in enumerate(exercise.sets, start=1):
            rows.append(
                TemplateRow(
                    template_id=template.id,
                    template_name=template.name,
                    template_description=template.description,
                    muscle_groups=template.muscle_groups,
                    exercise_id=exercise.id,
                    exercise_name=exercise.name,
                    muscle_group=exercise.muscle_group,
                    set_number=set_number,
                    suggested_reps=prescribed.suggested_reps,
                    suggested_weight=prescribed.suggested_weight,
                )
            )
    return rows


def session_to_history_rows(session: WorkoutSession) -> List[HistoryRow]:
    """Flatten a finished session into one history row per set."""
    rows = []
    for exercise in session.exercises:
        for set_number, performed in enumerate(exercise.sets, start=1):
            rows.append(
                HistoryRow(
                    workout_id=session.id,
                    template_id=session.template_id,
                    template_name=session.template_name,
                    date=session.date.isoformat(),
                    exercise_id=exercise.id,
                    exercise_name=exercise.name,
                    set_number=set_number,
                    completed_weight=performed.completed_weight,
                    completed_reps=performed.completed_reps,
                    status=performed.status.value,
                )
            )
    return rows


def fetch_templates(store: Any, spreadsheet_id: str) -> List[WorkoutTemplate]:
    """
    Read and parse all templates from the templates spreadsheet.

    Args:
        store: Connected tabular store
        spreadsheet_id: Templates spreadsheet ID

    Returns:
        Parsed templates, empty when the sheet holds only its header
    """
    logger.info("Fetching workout templates from Google Sheets")
    values = store.read_values(spreadsheet_id, TEMPLATES_SHEET_NAME)
    if not values or len(values) <= 1:
        return []
    return parse_templates_from_sheet(values)


def save_workout_to_sheet(store: Any, session: WorkoutSession, spreadsheet_id: str) -> int:
    """
    Append a finished session to the history spreadsheet.

    Args:
        store: Connected tabular store
        session: Completed workout session
        spreadsheet_id: History spreadsheet ID

    Returns:
        Number of rows appended
    """
    rows = [row.to_values() for row in session_to_history_rows(session)]
    logger.info(f"Saving workout {session.id} to Google Sheets ({len(rows)} rows)")
    store.append_values(spreadsheet_id, HISTORY_SHEET_NAME, rows)
    return len(rows)
