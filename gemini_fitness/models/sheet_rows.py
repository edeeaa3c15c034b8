"""Fixed-width row records for the templates and history sheets."""

import re
from typing import Any, List, Optional, Sequence, Union

from pydantic import BaseModel, Field

TEMPLATES_SHEET_HEADERS = [
    "templateId", "templateName", "templateDescription", "muscleGroups",
    "exerciseId", "exerciseName", "muscleGroup",
    "setNumber", "suggestedReps", "suggestedWeight",
]

HISTORY_SHEET_HEADERS = [
    "workoutId", "templateId", "templateName", "date",
    "exerciseId", "exerciseName",
    "setNumber", "completedWeight", "completedReps", "status",
]

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

Cell = Union[str, int, float]


def parse_int_cell(value: Any) -> Optional[int]:
    """Parse a sheet cell the lenient way: leading sign and digits only.

    ``"135.5"`` gives 135 and ``"abc"`` gives None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value == value else None
    match = _LEADING_INT.match(str(value or ""))
    return int(match.group(1)) if match else None


def parse_number_cell(value: Any) -> Optional[Union[int, float]]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    text = str(value or "").strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return None


def _pad(values: Sequence[Any], width: int) -> List[Any]:
    cells = list(values[:width])
    cells.extend([""] * (width - len(cells)))
    return cells


class RowParseResult(BaseModel):
    """Outcome of a strict row parse.

    ``row`` is None when the row cannot be placed at all. ``errors`` lists
    every problem found, including ones that still leave a usable row.
    """

    row: Optional[Any] = None
    errors: List[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.row is not None and not self.errors


class TemplateRow(BaseModel):
    """One prescribed set on the templates sheet."""

    template_id: str
    template_name: str = ""
    template_description: str = ""
    muscle_groups: List[str] = Field(default_factory=list)
    exercise_id: str
    exercise_name: str = ""
    muscle_group: str = ""
    set_number: Optional[int] = None
    suggested_reps: Optional[int] = None
    suggested_weight: Optional[int] = None

    @classmethod
    def parse(cls, values: Sequence[Any]) -> RowParseResult:
        (
            template_id, template_name, template_description, muscle_groups,
            exercise_id, exercise_name, muscle_group,
            set_number, suggested_reps, suggested_weight,
        ) = _pad(values, len(TEMPLATES_SHEET_HEADERS))

        if not template_id or not exercise_id:
            return RowParseResult(errors=["missing templateId or exerciseId"])

        errors = []
        numbers = {}
        for name, raw in (
            ("setNumber", set_number),
            ("suggestedReps", suggested_reps),
            ("suggestedWeight", suggested_weight),
        ):
            numbers[name] = parse_int_cell(raw)
            if numbers[name] is None:
                errors.append(f"{name} is not a number: {raw!r}")

        row = cls(
            template_id=str(template_id),
            template_name=str(template_name),
            template_description=str(template_description),
            muscle_groups=str(muscle_groups).split(","),
            exercise_id=str(exercise_id),
            exercise_name=str(exercise_name),
            muscle_group=str(muscle_group),
            set_number=numbers["setNumber"],
            suggested_reps=numbers["suggestedReps"],
            suggested_weight=numbers["suggestedWeight"],
        )
        return RowParseResult(row=row, errors=errors)

    def to_values(self) -> List[Cell]:
        return [
            self.template_id, self.template_name, self.template_description,
            ",".join(self.muscle_groups),
            self.exercise_id, self.exercise_name, self.muscle_group,
            self.set_number, self.suggested_reps, self.suggested_weight,
        ]


class HistoryRow(BaseModel):
    """One performed set on the history sheet."""

    workout_id: str
    template_id: str
    template_name: str
    date: str = Field(..., description="YYYY-MM-DD")
    exercise_id: str
    exercise_name: str
    set_number: int
    completed_weight: Optional[Union[int, float]] = None
    completed_reps: Optional[int] = None
    status: str

    @classmethod
    def parse(cls, values: Sequence[Any]) -> RowParseResult:
        (
            workout_id, template_id, template_name, date,
            exercise_id, exercise_name,
            set_number, completed_weight, completed_reps, status,
        ) = _pad(values, len(HISTORY_SHEET_HEADERS))

        if not workout_id or not exercise_id:
            return RowParseResult(errors=["missing workoutId or exerciseId"])

        errors = []
        parsed_set_number = parse_int_cell(set_number)
        if parsed_set_number is None:
            return RowParseResult(errors=[f"setNumber is not a number: {set_number!r}"])
        weight = parse_number_cell(completed_weight)
        if weight is None:
            errors.append(f"completedWeight is not a number: {completed_weight!r}")
        reps = parse_int_cell(completed_reps)
        if reps is None:
            errors.append(f"completedReps is not a number: {completed_reps!r}")

        row = cls(
            workout_id=str(workout_id),
            template_id=str(template_id),
            template_name=str(template_name),
            date=str(date),
            exercise_id=str(exercise_id),
            exercise_name=str(exercise_name),
            set_number=parsed_set_number,
            completed_weight=weight,
            completed_reps=reps,
            status=str(status),
        )
        return RowParseResult(row=row, errors=errors)

    def to_values(self) -> List[Cell]:
        return [
            self.workout_id, self.template_id, self.template_name, self.date,
            self.exercise_id, self.exercise_name,
            self.set_number, self.completed_weight, self.completed_reps, self.status,
        ]
