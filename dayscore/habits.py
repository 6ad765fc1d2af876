"""Habit CRUD, validation, completion logging and stats for Dayscore."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from dayscore.models import (
    HABIT_CATEGORIES,
    HABIT_FREQUENCY_KINDS,
    HABIT_INPUT_TYPES,
    HabitCompletionRecord,
    HabitDefinition,
    HabitFrequency,
)
from dayscore.recurrence import add_days, is_active_on, week_start_for
from dayscore.scoring import habit_completion_rate
from dayscore.store import new_id

logger = logging.getLogger(__name__)


# ── Validation ────────────────────────────────────────────────


def validate_habit(habit: dict[str, Any]) -> list[str]:
    """Validate habit schema and return list of errors (empty if valid)."""
    errors = []
    if not habit.get("id"):
        errors.append("Missing required field: id")
    if not habit.get("title"):
        errors.append("Missing required field: title")
    if "category" in habit and habit["category"] not in HABIT_CATEGORIES:
        errors.append(f"Invalid category: {habit['category']}")
    if "input_type" in habit and habit["input_type"] not in HABIT_INPUT_TYPES:
        errors.append(f"Invalid input type: {habit['input_type']}")
    if "target_value" in habit and habit["target_value"] is not None:
        if not isinstance(habit["target_value"], (int, float)) or habit["target_value"] < 0:
            errors.append("target_value must be a non-negative number")

    freq = HabitFrequency.from_dict(habit.get("frequency", "daily"))
    if freq.kind not in HABIT_FREQUENCY_KINDS:
        errors.append(f"Invalid frequency: {freq.kind}")
    elif freq.kind == "weekly" and not 1 <= freq.days_per_week <= 7:
        errors.append("days_per_week must be 1-7")
    elif freq.kind == "specific_days" and any(not 1 <= d <= 7 for d in freq.days):
        errors.append("specific days must be weekday numbers 1-7 (1 = Sunday)")
    return errors


# ── CRUD ──────────────────────────────────────────────────────


def find_habit(habits: list[HabitDefinition], habit_id: str) -> HabitDefinition | None:
    for h in habits:
        if h.id == habit_id:
            return h
    return None


def create_habit(habits: list[HabitDefinition], data: dict[str, Any]) -> tuple[HabitDefinition, list[str]]:
    """Create and add a new habit. Returns (habit, errors)."""
    errors = validate_habit(data)
    if errors:
        return HabitDefinition(), errors
    if find_habit(habits, data["id"]):
        return HabitDefinition(), [f"Habit ID already exists: {data['id']}"]

    habit = HabitDefinition.from_dict(data)
    habits.append(habit)
    logger.info("Created habit %s", habit.id)
    return habit, []


def update_habit(
    habits: list[HabitDefinition], habit_id: str, updates: dict[str, Any]
) -> tuple[HabitDefinition | None, list[str]]:
    """Update a habit by ID. Returns (updated_habit, errors)."""
    habit = find_habit(habits, habit_id)
    if not habit:
        return None, [f"Habit not found: {habit_id}"]

    merged = habit.to_dict()
    merged.update(updates)
    merged["id"] = habit_id
    errors = validate_habit(merged)
    if errors:
        return None, errors

    updated = HabitDefinition.from_dict(merged)
    habits[habits.index(habit)] = updated
    return updated, []


def set_habit_active(habits: list[HabitDefinition], habit_id: str, active: bool) -> bool:
    """Activate or archive a habit. Returns False if not found."""
    habit = find_habit(habits, habit_id)
    if not habit:
        return False
    habit.is_active = active
    return True


def toggle_habit_active(habits: list[HabitDefinition], habit_id: str) -> bool:
    habit = find_habit(habits, habit_id)
    if not habit:
        return False
    habit.is_active = not habit.is_active
    return True


def delete_habit(habits: list[HabitDefinition], habit_id: str) -> bool:
    """Hard-delete a custom habit. Core habits can only be archived."""
    habit = find_habit(habits, habit_id)
    if not habit or habit.is_core:
        return False
    habits.remove(habit)
    logger.info("Deleted habit %s", habit_id)
    return True


def habits_by_category(habits: list[HabitDefinition], category: str) -> list[HabitDefinition]:
    return [h for h in habits if h.is_active and h.category == category]


def habits_for(habits: list[HabitDefinition] | tuple[HabitDefinition, ...], day: date) -> list[HabitDefinition]:
    """Active habits whose frequency allows logging on ``day``."""
    return [h for h in habits if h.is_active and is_active_on(h.frequency, day)]


# ── Completion logs ───────────────────────────────────────────


def log_for(
    logs: list[HabitCompletionRecord] | tuple[HabitCompletionRecord, ...], habit_id: str, day: date
) -> HabitCompletionRecord | None:
    """The single record for (habit, day), if any."""
    for r in logs:
        if r.habit_id == habit_id and r.day == day:
            return r
    return None


def toggle_completion(logs: list[HabitCompletionRecord], habit_id: str, day: date) -> HabitCompletionRecord:
    """Flip completion for (habit, day); a missing record becomes completed."""
    record = log_for(logs, habit_id, day)
    if record:
        record.completed = not record.completed
        return record
    record = HabitCompletionRecord(id=new_id(), habit_id=habit_id, day=day, completed=True)
    logs.append(record)
    return record


def record_value(
    logs: list[HabitCompletionRecord],
    habit: HabitDefinition,
    day: date,
    value: float | None = None,
    duration_minutes: int | None = None,
    note: str | None = None,
) -> HabitCompletionRecord:
    """Store a numeric/duration/note entry. Meeting the target completes the habit."""
    record = log_for(logs, habit.id, day)
    if record is None:
        record = HabitCompletionRecord(id=new_id(), habit_id=habit.id, day=day)
        logs.append(record)
    if value is not None:
        record.numeric_value = value
        if habit.target_value is not None and value >= habit.target_value:
            record.completed = True
    if duration_minutes is not None:
        record.duration_minutes = duration_minutes
    if note is not None:
        record.note = note
    return record


# ── Stats ─────────────────────────────────────────────────────


def completed_count(habits, logs, day: date) -> int:
    """Number of habits due on ``day`` that were completed."""
    count = 0
    for h in habits_for(habits, day):
        r = log_for(logs, h.id, day)
        if r and r.completed:
            count += 1
    return count


def completion_rate(habits, logs, day: date) -> float:
    return habit_completion_rate(completed_count(habits, logs, day), len(habits_for(habits, day)))


def streak(logs, habit_id: str, today: date) -> int:
    """Consecutive completed days ending on ``today``."""
    count = 0
    day = today
    while True:
        r = log_for(logs, habit_id, day)
        if not r or not r.completed:
            return count
        count += 1
        prev = add_days(day, -1)
        if prev == day:
            return count
        day = prev


def weekly_completion_count(logs, habit_id: str, day: date, week_start: str = "sun") -> int:
    """Completed days in the week containing ``day``."""
    start = week_start_for(day, week_start)
    count = 0
    for offset in range(7):
        r = log_for(logs, habit_id, add_days(start, offset))
        if r and r.completed:
            count += 1
    return count


def weekly_target_met(habit: HabitDefinition, logs, day: date, week_start: str = "sun") -> bool:
    """For weekly habits: has the days-per-week target been reached this week."""
    if habit.frequency.kind != "weekly":
        return False
    return weekly_completion_count(logs, habit.id, day, week_start) >= habit.frequency.days_per_week
