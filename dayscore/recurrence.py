"""Recurrence engine: is a habit active on a day, when is a cleaning task due.

Weekday numbers follow a fixed convention, 1 = Sunday ... 7 = Saturday,
independent of locale.

Monthly cadence adds one calendar month and clamps the day of month to the
last day of the target month (Jan 31 -> Feb 28, or Feb 29 in leap years).
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta

from dayscore.models import CleaningRecurrence, CleaningTaskDefinition, HabitFrequency


WEEKDAY_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
WEEK_START_NUMBERS = {"sun": 1, "mon": 2, "tue": 3, "wed": 4, "thu": 5, "fri": 6, "sat": 7}


# ── Calendar helpers ──────────────────────────────────────────


def start_of_day(value: date | datetime) -> date:
    """Normalize a datetime to its calendar date; dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def same_day(a: date | datetime, b: date | datetime) -> bool:
    return start_of_day(a) == start_of_day(b)


def weekday_number(value: date | datetime) -> int:
    """Weekday of a date, 1 = Sunday ... 7 = Saturday."""
    return start_of_day(value).isoweekday() % 7 + 1


def add_days(day: date, n: int) -> date:
    try:
        return day + timedelta(days=n)
    except OverflowError:
        return day


def add_months(day: date, n: int) -> date:
    """Add calendar months, clamping the day to the target month's length."""
    month_index = day.month - 1 + n
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    if year < 1 or year > 9999:
        return day
    last = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last))


def week_start_for(day: date, week_start: str = "sun") -> date:
    """First day of the week containing ``day``."""
    first = WEEK_START_NUMBERS.get(week_start.lower()[:3], 1)
    offset = (weekday_number(day) - first) % 7
    return add_days(day, -offset)


# ── Habits ────────────────────────────────────────────────────


def is_active_on(rule: HabitFrequency, day: date | datetime) -> bool:
    """Whether a habit with this frequency can be logged on ``day``.

    Weekly habits are available every day; their count only matters for the
    weekly target. An empty specific_days set is never active.
    """
    if rule.kind == "specific_days":
        return weekday_number(day) in set(rule.days)
    return True


def display_text(rule: HabitFrequency) -> str:
    if rule.kind == "weekly":
        return f"{rule.days_per_week}x/week"
    if rule.kind == "specific_days":
        return ", ".join(WEEKDAY_NAMES[n - 1] for n in sorted(set(rule.days)) if 1 <= n <= 7)
    if rule.kind == "custom":
        return rule.description
    return "Daily"


# ── Cleaning tasks ────────────────────────────────────────────


def next_due_date(rule: CleaningRecurrence, completion_date: date | datetime) -> date:
    """Due date following a completion on ``completion_date``.

    Falls back to the completion date itself if the arithmetic overflows.
    """
    day = start_of_day(completion_date)
    if rule.kind == "monthly":
        return add_months(day, 1)
    return add_days(day, rule.interval_days)


def recurrence_text(rule: CleaningRecurrence) -> str:
    return {
        "daily": "Daily",
        "weekly": "Weekly",
        "biweekly": "Every 2 weeks",
        "monthly": "Monthly",
    }.get(rule.kind, f"Every {max(0, rule.days)} days")


def task_next_due(task: CleaningTaskDefinition, today: date) -> date:
    """Derived due date: never-completed tasks are due on their creation day."""
    if task.last_completed is None:
        return task.created_on or today
    return next_due_date(task.recurrence, task.last_completed)


def is_snoozed(task: CleaningTaskDefinition, day: date) -> bool:
    return task.snoozed_until is not None and task.snoozed_until > day


def is_overdue(task: CleaningTaskDefinition, day: date) -> bool:
    return task_next_due(task, day) < day


def is_due_on(task: CleaningTaskDefinition, day: date) -> bool:
    """Active, not snoozed, and due on or before ``day``."""
    if not task.is_active or is_snoozed(task, day):
        return False
    return task_next_due(task, day) <= day


def days_until_due(task: CleaningTaskDefinition, day: date) -> int:
    return (task_next_due(task, day) - day).days
