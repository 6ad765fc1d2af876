"""Cleaning task CRUD, rotation and completion for Dayscore.

Due dates are never stored: they are derived from the recurrence and the
last completion each time they are needed (see recurrence.task_next_due).
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from dayscore.models import (
    CLEANING_RECURRENCE_KINDS,
    CleaningCompletionRecord,
    CleaningRecurrence,
    CleaningTaskDefinition,
)
from dayscore.recurrence import add_days, is_due_on, is_overdue, task_next_due
from dayscore.store import new_id

logger = logging.getLogger(__name__)

DEFAULT_MAX_DAILY_TASKS = 3


# ── Validation ────────────────────────────────────────────────


def validate_cleaning_task(task: dict[str, Any]) -> list[str]:
    errors = []
    if not task.get("id"):
        errors.append("Missing required field: id")
    if not task.get("title"):
        errors.append("Missing required field: title")
    rule = CleaningRecurrence.from_dict(task.get("recurrence", "weekly"))
    if rule.kind not in CLEANING_RECURRENCE_KINDS:
        errors.append(f"Invalid recurrence: {rule.kind}")
    elif rule.kind == "custom" and rule.days < 1:
        errors.append("custom recurrence needs days >= 1")
    minutes = task.get("estimated_minutes")
    if minutes is not None and (not isinstance(minutes, int) or minutes < 0):
        errors.append("estimated_minutes must be a non-negative integer")
    return errors


# ── CRUD ──────────────────────────────────────────────────────


def find_cleaning_task(tasks: list[CleaningTaskDefinition], task_id: str) -> CleaningTaskDefinition | None:
    for t in tasks:
        if t.id == task_id:
            return t
    return None


def create_cleaning_task(
    tasks: list[CleaningTaskDefinition], data: dict[str, Any], today: date
) -> tuple[CleaningTaskDefinition, list[str]]:
    """Create and add a task, due from ``today``. Returns (task, errors)."""
    errors = validate_cleaning_task(data)
    if errors:
        return CleaningTaskDefinition(), errors
    if find_cleaning_task(tasks, data["id"]):
        return CleaningTaskDefinition(), [f"Task ID already exists: {data['id']}"]

    task = CleaningTaskDefinition.from_dict(data)
    if task.created_on is None:
        task.created_on = today
    tasks.append(task)
    logger.info("Created cleaning task %s", task.id)
    return task, []


def update_cleaning_task(
    tasks: list[CleaningTaskDefinition], task_id: str, updates: dict[str, Any]
) -> tuple[CleaningTaskDefinition | None, list[str]]:
    task = find_cleaning_task(tasks, task_id)
    if not task:
        return None, [f"Task not found: {task_id}"]

    merged = task.to_dict()
    merged.update(updates)
    merged["id"] = task_id
    errors = validate_cleaning_task(merged)
    if errors:
        return None, errors

    updated = CleaningTaskDefinition.from_dict(merged)
    tasks[tasks.index(task)] = updated
    return updated, []


def archive_cleaning_task(tasks: list[CleaningTaskDefinition], task_id: str) -> bool:
    task = find_cleaning_task(tasks, task_id)
    if not task:
        return False
    task.is_active = False
    return True


def restore_cleaning_task(tasks: list[CleaningTaskDefinition], task_id: str) -> bool:
    task = find_cleaning_task(tasks, task_id)
    if not task:
        return False
    task.is_active = True
    return True


def delete_cleaning_task(tasks: list[CleaningTaskDefinition], task_id: str) -> bool:
    task = find_cleaning_task(tasks, task_id)
    if not task:
        return False
    tasks.remove(task)
    logger.info("Deleted cleaning task %s", task_id)
    return True


# ── Rotation ──────────────────────────────────────────────────


def tasks_for(
    tasks: list[CleaningTaskDefinition] | tuple[CleaningTaskDefinition, ...],
    day: date,
    limit: int = DEFAULT_MAX_DAILY_TASKS,
) -> list[CleaningTaskDefinition]:
    """Tasks to work on ``day``: overdue first, then by due date, capped at ``limit``."""
    due = [t for t in tasks if is_due_on(t, day)]
    due.sort(key=lambda t: (not is_overdue(t, day), task_next_due(t, day), t.title))
    return due[: max(limit, 0)]


def day_checklist(
    tasks, logs, day: date, limit: int = DEFAULT_MAX_DAILY_TASKS
) -> list[tuple[CleaningTaskDefinition, bool]]:
    """(task, done) pairs for ``day``.

    Tasks completed that day come first; pending ones fill the remaining
    room up to ``limit``.
    """
    done = [t for t in tasks if is_completed_on(logs, t.id, day)]
    done_ids = {t.id for t in done}
    room = max(limit - len(done), 0)
    pending = [t for t in tasks_for(tasks, day, limit=len(tasks)) if t.id not in done_ids][:room]
    return [(t, True) for t in done] + [(t, False) for t in pending]


def overdue_tasks(tasks, day: date) -> list[CleaningTaskDefinition]:
    return [t for t in tasks if is_due_on(t, day) and is_overdue(t, day)]


# ── Completion ────────────────────────────────────────────────


def complete_task(
    tasks: list[CleaningTaskDefinition],
    logs: list[CleaningCompletionRecord],
    task_id: str,
    day: date,
    duration_minutes: int | None = None,
    note: str | None = None,
) -> CleaningCompletionRecord | None:
    """Log a completion, move the task's last-completed date and clear any snooze."""
    task = find_cleaning_task(tasks, task_id)
    if not task:
        return None
    record = CleaningCompletionRecord(
        id=new_id(),
        task_id=task_id,
        completed_on=day,
        duration_minutes=duration_minutes,
        note=note,
    )
    logs.append(record)
    if task.last_completed is None or day >= task.last_completed:
        task.last_completed = day
    task.snoozed_until = None
    logger.info("Completed cleaning task %s on %s", task_id, day.isoformat())
    return record


def uncomplete_task(
    tasks: list[CleaningTaskDefinition],
    logs: list[CleaningCompletionRecord],
    task_id: str,
    day: date,
) -> bool:
    """Drop the task's completions on ``day`` and roll last-completed back."""
    task = find_cleaning_task(tasks, task_id)
    if not task or not is_completed_on(logs, task_id, day):
        return False
    logs[:] = [r for r in logs if not (r.task_id == task_id and r.completed_on == day)]
    remaining = logs_for_task(logs, task_id)
    task.last_completed = remaining[0].completed_on if remaining else None
    return True


def snooze_task(tasks: list[CleaningTaskDefinition], task_id: str, until: date) -> bool:
    task = find_cleaning_task(tasks, task_id)
    if not task:
        return False
    task.snoozed_until = until
    return True


def snooze_for_one_day(tasks: list[CleaningTaskDefinition], task_id: str, today: date) -> bool:
    return snooze_task(tasks, task_id, add_days(today, 1))


def clear_snooze(tasks: list[CleaningTaskDefinition], task_id: str) -> bool:
    task = find_cleaning_task(tasks, task_id)
    if not task:
        return False
    task.snoozed_until = None
    return True


def is_completed_on(logs, task_id: str, day: date) -> bool:
    return any(r.task_id == task_id and r.completed_on == day for r in logs)


def completed_count(logs, day: date) -> int:
    """Completion records logged on ``day``."""
    return sum(1 for r in logs if r.completed_on == day)


def logs_for_task(logs, task_id: str) -> list[CleaningCompletionRecord]:
    """Completions of one task, newest first."""
    found = [r for r in logs if r.task_id == task_id and r.completed_on is not None]
    return sorted(found, key=lambda r: r.completed_on, reverse=True)
