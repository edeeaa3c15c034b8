from datetime import date
from typing import Any, Dict, List

import pytest

from gemini_fitness.models.sheet_rows import HISTORY_SHEET_HEADERS, TEMPLATES_SHEET_HEADERS
from gemini_fitness.models.workout_template import (
    ExerciseTemplate,
    PrescribedSet,
    WorkoutTemplate,
)
from gemini_fitness.storage.google_sheets import SheetIds
from gemini_fitness.storage.snapshot import LocalSnapshotStore
from gemini_fitness.utils.sheet_serializers import template_to_rows


class InMemoryStore:
    """Tabular store keeping each spreadsheet as a list of rows."""

    def __init__(self) -> None:
        self.sheets: Dict[str, List[List[Any]]] = {}
        self.fail_appends = False
        self.append_calls = 0

    def read_values(self, spreadsheet_id: str, range_: str) -> List[List[Any]]:
        return [list(row) for row in self.sheets.get(spreadsheet_id, [])]

    def append_values(self, spreadsheet_id: str, range_: str, rows) -> None:
        self.append_calls += 1
        if self.fail_appends:
            raise ConnectionError("network unreachable")
        self.sheets.setdefault(spreadsheet_id, []).extend([list(row) for row in rows])


class RecordingGenerator:
    def __init__(self, reply: Any = "## Nice work!") -> None:
        self.reply = reply
        self.prompts: List[str] = []

    def generate_text(self, prompt: str) -> Any:
        self.prompts.append(prompt)
        if isinstance(self.reply, Exception):
            raise self.reply
        return self.reply


@pytest.fixture
def push_day() -> WorkoutTemplate:
    return WorkoutTemplate(
        id="push-day",
        name="Push Day",
        description="Chest, shoulders and triceps.",
        muscle_groups=["Chest", "Shoulders", "Triceps"],
        exercises=[
            ExerciseTemplate(
                id="bench-press",
                name="Barbell Bench Press",
                muscle_group="Chest",
                sets=[PrescribedSet(suggested_reps=8, suggested_weight=135)],
            )
        ],
    )


@pytest.fixture
def two_exercise_template() -> WorkoutTemplate:
    return WorkoutTemplate(
        id="upper",
        name="Upper Body",
        description="",
        muscle_groups=["Back", "Chest"],
        exercises=[
            ExerciseTemplate(
                id="row",
                name="Barbell Row",
                muscle_group="Back",
                sets=[
                    PrescribedSet(suggested_reps=8, suggested_weight=115),
                    PrescribedSet(suggested_reps=6, suggested_weight=125),
                ],
            ),
            ExerciseTemplate(
                id="press",
                name="Overhead Press",
                muscle_group="Shoulders",
                sets=[PrescribedSet(suggested_reps=10, suggested_weight=65)],
            ),
        ],
    )


@pytest.fixture
def three_set_template() -> WorkoutTemplate:
    return WorkoutTemplate(
        id="legs",
        name="Leg Day",
        exercises=[
            ExerciseTemplate(
                id="squats",
                name="Barbell Squats",
                muscle_group="Quads",
                sets=[PrescribedSet(suggested_reps=8, suggested_weight=185)] * 3,
            )
        ],
    )


@pytest.fixture
def workout_date() -> date:
    return date(2025, 1, 15)


@pytest.fixture
def sheet_ids() -> SheetIds:
    return SheetIds(templates_sheet_id="templates-sheet", history_sheet_id="history-sheet")


@pytest.fixture
def store(push_day, two_exercise_template, sheet_ids) -> InMemoryStore:
    store = InMemoryStore()
    rows = [TEMPLATES_SHEET_HEADERS]
    for template in (push_day, two_exercise_template):
        rows.extend(row.to_values() for row in template_to_rows(template))
    store.sheets[sheet_ids.templates_sheet_id] = rows
    store.sheets[sheet_ids.history_sheet_id] = [HISTORY_SHEET_HEADERS]
    return store


@pytest.fixture
def generator() -> RecordingGenerator:
    return RecordingGenerator()


@pytest.fixture
def failing_generator() -> RecordingGenerator:
    return RecordingGenerator(reply=RuntimeError("quota exceeded"))


@pytest.fixture
def snapshot(tmp_path) -> LocalSnapshotStore:
    return LocalSnapshotStore(tmp_path / "snapshot")
