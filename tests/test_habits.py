"""Tests for dayscore/habits.py — CRUD, validation, completion logs, stats."""

from datetime import date

from dayscore.habits import (
    completed_count,
    completion_rate,
    create_habit,
    delete_habit,
    find_habit,
    habits_by_category,
    habits_for,
    log_for,
    record_value,
    set_habit_active,
    streak,
    toggle_completion,
    update_habit,
    validate_habit,
    weekly_completion_count,
    weekly_target_met,
)
from dayscore.models import HabitDefinition, HabitFrequency
from dayscore.store import load_habit_logs, load_habits

MONDAY = date(2026, 1, 5)


def test_validate_habit_valid():
    assert validate_habit({"id": "h", "title": "Habit", "category": "Health"}) == []


def test_validate_habit_missing_title():
    errors = validate_habit({"id": "h"})
    assert any("title" in e for e in errors)


def test_validate_habit_bad_category():
    errors = validate_habit({"id": "h", "title": "H", "category": "Hobbies"})
    assert any("category" in e for e in errors)


def test_validate_habit_weekly_range():
    errors = validate_habit({"id": "h", "title": "H", "frequency": {"kind": "weekly", "days_per_week": 9}})
    assert any("days_per_week" in e for e in errors)


def test_validate_habit_specific_days_range():
    errors = validate_habit({"id": "h", "title": "H", "frequency": {"kind": "specific_days", "days": [0, 3]}})
    assert any("weekday" in e for e in errors)


def test_create_and_duplicate():
    habits = []
    habit, errors = create_habit(habits, {"id": "stretch", "title": "Stretch", "category": "Fitness"})
    assert errors == []
    assert find_habit(habits, "stretch") is habit
    _, errors = create_habit(habits, {"id": "stretch", "title": "Again"})
    assert any("already exists" in e for e in errors)


def test_update_habit():
    habits = [HabitDefinition(id="h", title="Old")]
    updated, errors = update_habit(habits, "h", {"title": "New", "frequency": {"kind": "weekly", "days_per_week": 4}})
    assert errors == []
    assert updated.title == "New"
    assert habits[0].frequency.days_per_week == 4


def test_update_missing_habit():
    updated, errors = update_habit([], "nope", {"title": "x"})
    assert updated is None
    assert errors


def test_core_habits_cannot_be_deleted():
    habits = [HabitDefinition(id="core", title="Core", is_core=True), HabitDefinition(id="mine", title="Mine")]
    assert delete_habit(habits, "core") is False
    assert delete_habit(habits, "mine") is True
    assert [h.id for h in habits] == ["core"]


def test_archived_habits_are_hidden():
    habits = [HabitDefinition(id="a", title="A", category="Work")]
    set_habit_active(habits, "a", False)
    assert habits_by_category(habits, "Work") == []
    assert habits_for(habits, MONDAY) == []


def test_habits_for_respects_specific_days(workspace):
    habits = load_habits(workspace)
    monday_ids = {h.id for h in habits_for(habits, MONDAY)}
    tuesday_ids = {h.id for h in habits_for(habits, date(2026, 1, 6))}
    assert monday_ids == {"workout", "mobility", "gym-mwf", "protein"}
    assert "gym-mwf" not in tuesday_ids


def test_toggle_completion_creates_then_flips():
    logs = []
    record = toggle_completion(logs, "h", MONDAY)
    assert record.completed is True
    assert len(logs) == 1
    toggle_completion(logs, "h", MONDAY)
    assert log_for(logs, "h", MONDAY).completed is False
    assert len(logs) == 1


def test_record_value_completes_at_target():
    habit = HabitDefinition(id="protein", title="Protein", input_type="numeric", target_value=145)
    logs = []
    r = record_value(logs, habit, MONDAY, value=100)
    assert r.completed is False
    r = record_value(logs, habit, MONDAY, value=150, note="steak")
    assert r.completed is True
    assert r.note == "steak"
    assert len(logs) == 1


def test_completed_count_and_rate(workspace):
    habits = load_habits(workspace)
    logs = load_habit_logs(workspace)
    assert completed_count(habits, logs, MONDAY) == 2
    assert completion_rate(habits, logs, MONDAY) == 0.5


def test_streak(workspace):
    logs = load_habit_logs(workspace)
    assert streak(logs, "workout", MONDAY) == 3
    assert streak(logs, "protein", MONDAY) == 1
    assert streak(logs, "mobility", MONDAY) == 0


def test_weekly_target(workspace):
    habits = load_habits(workspace)
    logs = load_habit_logs(workspace)
    mobility = find_habit(habits, "mobility")
    assert weekly_completion_count(logs, "mobility", MONDAY) == 1
    assert weekly_target_met(mobility, logs, MONDAY) is False
    for d in (date(2026, 1, 6), date(2026, 1, 7)):
        toggle_completion(logs, "mobility", d)
    assert weekly_target_met(mobility, logs, MONDAY) is True


def test_weekly_target_only_for_weekly_habits():
    habit = HabitDefinition(id="h", frequency=HabitFrequency.daily())
    assert weekly_target_met(habit, [], MONDAY) is False
