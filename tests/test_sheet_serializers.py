from gemini_fitness.models.sheet_rows import HISTORY_SHEET_HEADERS, TEMPLATES_SHEET_HEADERS
from gemini_fitness.utils import session_helpers
from gemini_fitness.utils.sheet_serializers import (
    fetch_templates,
    parse_templates_from_sheet,
    save_workout_to_sheet,
    session_to_history_rows,
    template_to_rows,
)


def _sheet(*templates):
    rows = [TEMPLATES_SHEET_HEADERS]
    for template in templates:
        rows.extend(row.to_values() for row in template_to_rows(template))
    return rows


def test_round_trip_preserves_exercises_and_sets(push_day, two_exercise_template):
    parsed = parse_templates_from_sheet(_sheet(push_day, two_exercise_template))

    assert parsed == [push_day, two_exercise_template]


def test_header_only_or_empty_table_yields_no_templates():
    assert parse_templates_from_sheet([TEMPLATES_SHEET_HEADERS]) == []
    assert parse_templates_from_sheet([]) == []


def test_templates_and_exercises_keep_first_appearance_order():
    values = [
        TEMPLATES_SHEET_HEADERS,
        ["b", "B", "", "Back", "row", "Row", "Back", "1", "8", "100"],
        ["a", "A", "", "Chest", "bench", "Bench", "Chest", "1", "8", "135"],
        ["b", "B", "", "Back", "curl", "Curl", "Biceps", "1", "12", "25"],
        ["b", "B", "", "Back", "row", "Row", "Back", "2", "8", "100"],
    ]

    parsed = parse_templates_from_sheet(values)

    assert [t.id for t in parsed] == ["b", "a"]
    assert [e.id for e in parsed[0].exercises] == ["row", "curl"]
    assert len(parsed[0].exercises[0].sets) == 2


def test_set_order_follows_rows_not_set_number():
    values = [
        TEMPLATES_SHEET_HEADERS,
        ["t", "T", "", "Legs", "squat", "Squat", "Quads", "3", "5", "225"],
        ["t", "T", "", "Legs", "squat", "Squat", "Quads", "1", "8", "185"],
        ["t", "T", "", "Legs", "squat", "Squat", "Quads", "2", "6", "205"],
    ]

    sets = parse_templates_from_sheet(values)[0].exercises[0].sets

    assert [s.suggested_weight for s in sets] == [225, 185, 205]


def test_first_occurrence_defines_names():
    values = [
        TEMPLATES_SHEET_HEADERS,
        ["t", "First", "one", "A,B", "e", "Exercise", "Chest", "1", "8", "100"],
        ["t", "Second", "two", "C", "e", "Renamed", "Back", "2", "8", "100"],
    ]

    template = parse_templates_from_sheet(values)[0]

    assert (template.name, template.description, template.muscle_groups) == ("First", "one", ["A", "B"])
    assert (template.exercises[0].name, template.exercises[0].muscle_group) == ("Exercise", "Chest")


def test_rows_without_identifiers_are_skipped():
    values = [
        TEMPLATES_SHEET_HEADERS,
        ["", "Orphan", "", "", "e", "E", "", "1", "8", "100"],
        ["t", "T", "", "", "", "E", "", "1", "8", "100"],
        ["t", "T", "", "", "e", "E", "", "1", "8", "100"],
        [],
    ]

    parsed = parse_templates_from_sheet(values)

    assert len(parsed) == 1
    assert parsed[0].set_count == 1


def test_unparseable_numbers_flow_through_as_invalid():
    values = [
        TEMPLATES_SHEET_HEADERS,
        ["t", "T", "", "", "e", "E", "", "1", "ten", "100"],
        ["t", "T", "", "", "e", "E", "", "2", "10", "100"],
    ]

    template = parse_templates_from_sheet(values)[0]

    assert template.set_count == 2
    assert template.exercises[0].sets[0].suggested_reps is None
    assert not template.exercises[0].sets[0].is_valid
    assert not template.is_valid


def test_history_rows_are_flattened_in_exercise_then_set_order(two_exercise_template, workout_date):
    session = session_helpers.create_session_from_template(two_exercise_template, today=workout_date)
    session = session_helpers.complete_set(session, 0, 0, 115, 8)
    session = session_helpers.skip_set(session, 0, 1)
    session = session_helpers.finish_session(session)

    rows = session_to_history_rows(session)

    assert [(r.exercise_id, r.set_number) for r in rows] == [("row", 1), ("row", 2), ("press", 1)]
    assert [r.status for r in rows] == ["completed", "skipped", "pending"]
    assert rows[1].completed_weight == 0 and rows[1].completed_reps == 0
    assert all(r.workout_id == session.id and r.date == "2025-01-15" for r in rows)


def test_push_day_end_to_end(push_day, workout_date):
    session = session_helpers.create_session_from_template(push_day, today=workout_date)
    session = session_helpers.complete_set(session, 0, 0, 135, 8)
    session = session_helpers.finish_session(session)

    rows = [row.to_values() for row in session_to_history_rows(session)]

    assert rows == [[
        session.id, "push-day", "Push Day", "2025-01-15",
        "bench-press", "Barbell Bench Press", 1, 135, 8, "completed",
    ]]


def test_fetch_templates_reads_the_templates_sheet(store, sheet_ids, push_day):
    templates = fetch_templates(store, sheet_ids.templates_sheet_id)

    assert [t.id for t in templates] == ["push-day", "upper"]
    assert templates[0] == push_day


def test_fetch_templates_with_header_only_sheet(store):
    store.sheets["empty"] = [TEMPLATES_SHEET_HEADERS]

    assert fetch_templates(store, "empty") == []
    assert fetch_templates(store, "missing") == []


def test_save_workout_to_sheet_appends_rows(store, sheet_ids, two_exercise_template):
    session = session_helpers.finish_session(
        session_helpers.create_session_from_template(two_exercise_template)
    )

    appended = save_workout_to_sheet(store, session, sheet_ids.history_sheet_id)

    history = store.sheets[sheet_ids.history_sheet_id]
    assert appended == 3
    assert history[0] == HISTORY_SHEET_HEADERS
    assert [row[6] for row in history[1:]] == [1, 2, 1]
