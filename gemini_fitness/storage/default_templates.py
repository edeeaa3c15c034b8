"""Templates written to a freshly created templates sheet."""

from typing import List

from gemini_fitness.models.workout_template import (
    ExerciseTemplate,
    PrescribedSet,
    WorkoutTemplate,
)


def _exercise(id: str, name: str, muscle_group: str, *sets: tuple) -> ExerciseTemplate:
    return ExerciseTemplate(
        id=id,
        name=name,
        muscle_group=muscle_group,
        sets=[PrescribedSet(suggested_reps=reps, suggested_weight=weight) for reps, weight in sets],
    )


DEFAULT_TEMPLATES: List[WorkoutTemplate] = [
    WorkoutTemplate(
        id="push-day",
        name="Push Day",
        description="Focuses on upper body pushing muscles: chest, shoulders, and triceps.",
        muscle_groups=["Chest", "Shoulders", "Triceps"],
        exercises=[
            _exercise("bench-press", "Barbell Bench Press", "Chest", (8, 135), (8, 135), (8, 135)),
            _exercise("overhead-press", "Overhead Press", "Shoulders", (10, 65), (10, 65), (10, 65)),
            _exercise("lateral-raises", "Dumbbell Lateral Raises", "Shoulders", (12, 15), (12, 15), (12, 15)),
            _exercise("tricep-pushdown", "Tricep Pushdown", "Triceps", (12, 40), (12, 40), (12, 40)),
        ],
    ),
    WorkoutTemplate(
        id="pull-day",
        name="Pull Day",
        description="Targets upper body pulling muscles: back and biceps.",
        muscle_groups=["Back", "Biceps"],
        exercises=[
            _exercise("pull-ups", "Pull Ups", "Back", (8, 0), (8, 0), (6, 0)),
            _exercise("barbell-row", "Barbell Row", "Back", (8, 115), (8, 115), (8, 115)),
            _exercise("lat-pulldown", "Lat Pulldown", "Back", (10, 100), (10, 100), (10, 100)),
            _exercise("bicep-curls", "Dumbbell Bicep Curls", "Biceps", (12, 25), (12, 25), (12, 25)),
        ],
    ),
    WorkoutTemplate(
        id="leg-day",
        name="Leg Day",
        description="A comprehensive leg workout for quads, hamstrings, glutes, and calves.",
        muscle_groups=["Quads", "Hamstrings", "Glutes", "Calves"],
        exercises=[
            _exercise("squats", "Barbell Squats", "Quads", (8, 185), (8, 185), (8, 185)),
            _exercise("romanian-deadlift", "Romanian Deadlift", "Hamstrings", (10, 155), (10, 155), (10, 155)),
            _exercise("leg-press", "Leg Press", "Quads", (12, 250), (12, 250), (12, 250)),
            _exercise("calf-raises", "Calf Raises", "Calves", (15, 100), (15, 100), (15, 100)),
        ],
    ),
]
