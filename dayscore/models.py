"""Typed dataclasses for the Dayscore data model.

All models use from_dict/to_dict for JSON/YAML serialization.
Definitions kept in YAML (habits, cleaning tasks, goals, profile) use
snake_case keys; logs kept in JSON use camelCase keys.
Unknown keys are ignored; missing keys use defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any


# ── Primitives ────────────────────────────────────────────────


def parse_day(value: Any) -> date | None:
    """Parse an ISO date (or the date part of an ISO datetime)."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def parse_timestamp(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        return None


def _day_str(d: date | None) -> str | None:
    return d.isoformat() if d else None


def _opt_float(value: Any) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _opt_int(value: Any) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


# ── Recurrence rules ──────────────────────────────────────────


HABIT_FREQUENCY_KINDS = {"daily", "weekly", "specific_days", "custom"}


@dataclass
class HabitFrequency:
    """How often a habit is expected.

    kind is one of daily, weekly, specific_days, custom. Weekday numbers in
    ``days`` run 1 = Sunday ... 7 = Saturday.
    """

    kind: str = "daily"
    days_per_week: int = 0
    days: list[int] = field(default_factory=list)
    description: str = ""

    @classmethod
    def daily(cls) -> HabitFrequency:
        return cls(kind="daily")

    @classmethod
    def weekly(cls, days_per_week: int) -> HabitFrequency:
        return cls(kind="weekly", days_per_week=days_per_week)

    @classmethod
    def specific_days(cls, days: list[int] | set[int]) -> HabitFrequency:
        return cls(kind="specific_days", days=sorted(set(days)))

    @classmethod
    def custom(cls, description: str) -> HabitFrequency:
        return cls(kind="custom", description=description)

    @classmethod
    def from_dict(cls, d: Any) -> HabitFrequency:
        if isinstance(d, str):
            return cls(kind=d.strip().lower() or "daily")
        if not d or not isinstance(d, dict):
            return cls()
        return cls(
            kind=str(d.get("kind", "daily")).strip().lower() or "daily",
            days_per_week=int(d.get("days_per_week", 0) or 0),
            days=[int(x) for x in (d.get("days") or [])],
            description=str(d.get("description", "")),
        )

    def to_dict(self) -> dict[str, Any] | str:
        if self.kind == "daily":
            return "daily"
        d: dict[str, Any] = {"kind": self.kind}
        if self.kind == "weekly":
            d["days_per_week"] = self.days_per_week
        elif self.kind == "specific_days":
            d["days"] = list(self.days)
        elif self.kind == "custom":
            d["description"] = self.description
        return d


CLEANING_RECURRENCE_KINDS = {"daily", "weekly", "biweekly", "monthly", "custom"}


@dataclass
class CleaningRecurrence:
    """Cleaning cadence. ``days`` is only meaningful for kind == custom."""

    kind: str = "weekly"
    days: int = 0

    @classmethod
    def custom(cls, days: int) -> CleaningRecurrence:
        return cls(kind="custom", days=days)

    @property
    def interval_days(self) -> int:
        """Nominal interval length; monthly is approximated as 30 days."""
        return {
            "daily": 1,
            "weekly": 7,
            "biweekly": 14,
            "monthly": 30,
        }.get(self.kind, max(0, self.days))

    @classmethod
    def from_dict(cls, d: Any) -> CleaningRecurrence:
        if isinstance(d, str):
            return cls(kind=d.strip().lower() or "weekly")
        if not d or not isinstance(d, dict):
            return cls()
        return cls(
            kind=str(d.get("kind", "weekly")).strip().lower() or "weekly",
            days=int(d.get("days", 0) or 0),
        )

    def to_dict(self) -> dict[str, Any] | str:
        if self.kind == "custom":
            return {"kind": "custom", "days": self.days}
        return self.kind


# ── Habits ────────────────────────────────────────────────────


HABIT_CATEGORIES = (
    "Life",
    "Fitness",
    "Nutrition",
    "Health",
    "Work",
    "Supplements & Recovery",
    "Custom",
)
HABIT_INPUT_TYPES = {"boolean", "numeric", "duration", "note"}


@dataclass
class HabitDefinition:
    id: str = ""
    title: str = ""
    category: str = "Custom"
    frequency: HabitFrequency = field(default_factory=HabitFrequency)
    input_type: str = "boolean"  # boolean, numeric, duration, note
    target_value: float | None = None
    unit: str | None = None
    is_core: bool = False
    is_active: bool = True

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> HabitDefinition:
        return cls(
            id=str(d.get("id", "")),
            title=str(d.get("title", "")),
            category=str(d.get("category", "Custom")),
            frequency=HabitFrequency.from_dict(d.get("frequency", "daily")),
            input_type=str(d.get("input_type", "boolean")),
            target_value=_opt_float(d.get("target_value")),
            unit=d.get("unit"),
            is_core=bool(d.get("is_core", False)),
            is_active=bool(d.get("is_active", True)),
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "category": self.category,
            "frequency": self.frequency.to_dict(),
            "input_type": self.input_type,
        }
        if self.target_value is not None:
            d["target_value"] = self.target_value
        if self.unit:
            d["unit"] = self.unit
        d["is_core"] = self.is_core
        d["is_active"] = self.is_active
        return d


@dataclass
class HabitCompletionRecord:
    id: str = ""
    habit_id: str = ""
    day: date | None = None
    completed: bool = False
    numeric_value: float | None = None
    duration_minutes: int | None = None
    note: str | None = None

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> HabitCompletionRecord:
        return cls(
            id=str(d.get("id", "")),
            habit_id=str(d.get("habitId", "")),
            day=parse_day(d.get("date")),
            completed=bool(d.get("completed", False)),
            numeric_value=_opt_float(d.get("numericValue")),
            duration_minutes=_opt_int(d.get("durationMinutes")),
            note=d.get("note"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "habitId": self.habit_id,
            "date": _day_str(self.day),
            "completed": self.completed,
            "numericValue": self.numeric_value,
            "durationMinutes": self.duration_minutes,
            "note": self.note,
        }


# ── Cleaning ──────────────────────────────────────────────────


@dataclass
class CleaningTaskDefinition:
    id: str = ""
    title: str = ""
    area: str = ""
    recurrence: CleaningRecurrence = field(default_factory=CleaningRecurrence)
    estimated_minutes: int | None = None
    is_active: bool = True
    created_on: date | None = None
    last_completed: date | None = None
    snoozed_until: date | None = None

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> CleaningTaskDefinition:
        return cls(
            id=str(d.get("id", "")),
            title=str(d.get("title", "")),
            area=str(d.get("area", "")),
            recurrence=CleaningRecurrence.from_dict(d.get("recurrence", "weekly")),
            estimated_minutes=_opt_int(d.get("estimated_minutes")),
            is_active=bool(d.get("is_active", True)),
            created_on=parse_day(d.get("created_on")),
            last_completed=parse_day(d.get("last_completed")),
            snoozed_until=parse_day(d.get("snoozed_until")),
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "recurrence": self.recurrence.to_dict(),
        }
        if self.area:
            d["area"] = self.area
        if self.estimated_minutes is not None:
            d["estimated_minutes"] = self.estimated_minutes
        d["is_active"] = self.is_active
        if self.created_on:
            d["created_on"] = self.created_on.isoformat()
        if self.last_completed:
            d["last_completed"] = self.last_completed.isoformat()
        if self.snoozed_until:
            d["snoozed_until"] = self.snoozed_until.isoformat()
        return d


@dataclass
class CleaningCompletionRecord:
    id: str = ""
    task_id: str = ""
    completed_on: date | None = None
    duration_minutes: int | None = None
    note: str | None = None

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> CleaningCompletionRecord:
        return cls(
            id=str(d.get("id", "")),
            task_id=str(d.get("taskId", "")),
            completed_on=parse_day(d.get("completedDate")),
            duration_minutes=_opt_int(d.get("durationMinutes")),
            note=d.get("note"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "taskId": self.task_id,
            "completedDate": _day_str(self.completed_on),
            "durationMinutes": self.duration_minutes,
            "note": self.note,
        }


# ── Water ─────────────────────────────────────────────────────


WATER_QUICK_ADD = (8, 12, 16, 24, 32)


@dataclass
class WaterEntry:
    ounces: float = 0.0
    timestamp: datetime | None = None

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> WaterEntry:
        return cls(
            ounces=float(d.get("ounces", 0.0) or 0.0),
            timestamp=parse_timestamp(d.get("timestamp")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "ounces": self.ounces,
            "timestamp": self.timestamp.isoformat(timespec="seconds") if self.timestamp else None,
        }


@dataclass
class WaterLog:
    day: date | None = None
    entries: list[WaterEntry] = field(default_factory=list)
    target_ounces: float = 100.0

    @property
    def total_ounces(self) -> float:
        return sum(e.ounces for e in self.entries)

    @property
    def progress(self) -> float:
        from dayscore.scoring import water_completion_rate

        return water_completion_rate(self.total_ounces, self.target_ounces)

    @property
    def remaining_ounces(self) -> float:
        return max(self.target_ounces - self.total_ounces, 0.0)

    @property
    def is_complete(self) -> bool:
        return self.total_ounces >= self.target_ounces

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> WaterLog:
        return cls(
            day=parse_day(d.get("date")),
            entries=[WaterEntry.from_dict(e) for e in (d.get("entries") or [])],
            target_ounces=float(d.get("targetOunces", 100.0)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": _day_str(self.day),
            "entries": [e.to_dict() for e in self.entries],
            "targetOunces": self.target_ounces,
        }


# ── Reading ───────────────────────────────────────────────────


BOOK_STATUSES = {"want_to_read", "currently_reading", "finished", "abandoned"}


@dataclass
class Book:
    id: str = ""
    title: str = ""
    author: str = ""
    total_pages: int = 0
    pages_read: int = 0
    status: str = "want_to_read"  # want_to_read, currently_reading, finished, abandoned
    started_on: date | None = None
    finished_on: date | None = None

    @property
    def progress(self) -> float:
        if self.total_pages <= 0:
            return 0.0
        return min(max(self.pages_read, 0) / self.total_pages, 1.0)

    @property
    def progress_percentage(self) -> int:
        return int(self.progress * 100)

    @property
    def pages_remaining(self) -> int:
        return max(self.total_pages - self.pages_read, 0)

    @property
    def is_complete(self) -> bool:
        return self.total_pages > 0 and self.pages_read >= self.total_pages

    @property
    def is_currently_reading(self) -> bool:
        if self.status in ("finished", "abandoned") or self.is_complete:
            return False
        return self.status == "currently_reading" or self.pages_read > 0

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Book:
        return cls(
            id=str(d.get("id", "")),
            title=str(d.get("title", "")),
            author=str(d.get("author", "")),
            total_pages=int(d.get("totalPages", 0) or 0),
            pages_read=int(d.get("pagesRead", 0) or 0),
            status=str(d.get("status", "want_to_read")),
            started_on=parse_day(d.get("startedDate")),
            finished_on=parse_day(d.get("finishedDate")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "totalPages": self.total_pages,
            "pagesRead": self.pages_read,
            "status": self.status,
            "startedDate": _day_str(self.started_on),
            "finishedDate": _day_str(self.finished_on),
        }


@dataclass
class ReadingSession:
    id: str = ""
    book_id: str = ""
    day: date | None = None
    pages_read: int = 0
    minutes: int | None = None
    note: str | None = None
    start_page: int = 0
    end_page: int = 0

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ReadingSession:
        return cls(
            id=str(d.get("id", "")),
            book_id=str(d.get("bookId", "")),
            day=parse_day(d.get("date")),
            pages_read=int(d.get("pagesRead", 0) or 0),
            minutes=_opt_int(d.get("minutes")),
            note=d.get("note"),
            start_page=int(d.get("startPage", 0) or 0),
            end_page=int(d.get("endPage", 0) or 0),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "bookId": self.book_id,
            "date": _day_str(self.day),
            "pagesRead": self.pages_read,
            "minutes": self.minutes,
            "note": self.note,
            "startPage": self.start_page,
            "endPage": self.end_page,
        }


@dataclass
class GoodreadsAccount:
    user_id: str | None = None
    access_token: str | None = None
    last_sync: datetime | None = None

    @property
    def is_connected(self) -> bool:
        return bool(self.user_id) and bool(self.access_token)

    @classmethod
    def from_dict(cls, d: Any) -> GoodreadsAccount:
        if not d or not isinstance(d, dict):
            return cls()
        return cls(
            user_id=d.get("userId"),
            access_token=d.get("accessToken"),
            last_sync=parse_timestamp(d.get("lastSyncDate")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "userId": self.user_id,
            "accessToken": self.access_token,
            "lastSyncDate": self.last_sync.isoformat(timespec="seconds") if self.last_sync else None,
        }


# ── Goals ─────────────────────────────────────────────────────


GOAL_CATEGORIES = ("Presence", "Health", "Outdoors", "Fitness", "Phone")


@dataclass
class Goal:
    """A vision statement (is_high_level) or a measurable KPI."""

    id: str = ""
    title: str = ""
    category: str = "Health"
    is_high_level: bool = True
    target_value: float | None = None
    current_value: float | None = None
    unit: str | None = None
    is_active: bool = True

    @property
    def progress(self) -> float | None:
        if self.target_value is None or self.current_value is None or self.target_value <= 0:
            return None
        return min(self.current_value / self.target_value, 1.0)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Goal:
        return cls(
            id=str(d.get("id", "")),
            title=str(d.get("title", "")),
            category=str(d.get("category", "Health")),
            is_high_level=bool(d.get("is_high_level", True)),
            target_value=_opt_float(d.get("target_value")),
            current_value=_opt_float(d.get("current_value")),
            unit=d.get("unit"),
            is_active=bool(d.get("is_active", True)),
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "category": self.category,
            "is_high_level": self.is_high_level,
        }
        if self.target_value is not None:
            d["target_value"] = self.target_value
        if self.current_value is not None:
            d["current_value"] = self.current_value
        if self.unit:
            d["unit"] = self.unit
        d["is_active"] = self.is_active
        return d


# ── Profile ───────────────────────────────────────────────────


@dataclass
class UserProfile:
    name: str = "User"
    timezone: str = "UTC"
    daily_water_target: float = 100.0
    daily_protein_target: float = 145.0
    wake_time: str = "05:30"
    lights_out_time: str = "22:00"
    work_start_time: str = "09:00"
    work_end_time: str = "17:30"
    week_start: str = "sun"
    max_daily_cleaning_tasks: int = 3

    @classmethod
    def from_dict(cls, d: Any) -> UserProfile:
        if not d or not isinstance(d, dict):
            return cls()
        return cls(
            name=str(d.get("name", "User")),
            timezone=str(d.get("timezone", "UTC")),
            daily_water_target=float(d.get("daily_water_target", 100.0)),
            daily_protein_target=float(d.get("daily_protein_target", 145.0)),
            wake_time=str(d.get("wake_time", "05:30")),
            lights_out_time=str(d.get("lights_out_time", "22:00")),
            work_start_time=str(d.get("work_start_time", "09:00")),
            work_end_time=str(d.get("work_end_time", "17:30")),
            week_start=str(d.get("week_start", "sun")).lower(),
            max_daily_cleaning_tasks=int(d.get("max_daily_cleaning_tasks", 3)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "timezone": self.timezone,
            "daily_water_target": self.daily_water_target,
            "daily_protein_target": self.daily_protein_target,
            "wake_time": self.wake_time,
            "lights_out_time": self.lights_out_time,
            "work_start_time": self.work_start_time,
            "work_end_time": self.work_end_time,
            "week_start": self.week_start,
            "max_daily_cleaning_tasks": self.max_daily_cleaning_tasks,
        }


# ── Summaries ─────────────────────────────────────────────────


@dataclass
class DaySummary:
    """Everything measured on one day plus the score derived from it.

    Build instances with scoring.build_day_summary so the score always
    matches the counts.
    """

    day: date | None = None
    habits_completed: int = 0
    habits_total: int = 0
    cleaning_completed: int = 0
    cleaning_total: int = 0
    water_ounces: float = 0.0
    water_target: float = 100.0
    pages_read: int = 0
    minutes_read: int = 0
    score: float = 0.0
    reflection_note: str | None = None

    @property
    def habit_completion_rate(self) -> float:
        from dayscore.scoring import habit_completion_rate

        return habit_completion_rate(self.habits_completed, self.habits_total)

    @property
    def cleaning_completion_rate(self) -> float:
        from dayscore.scoring import cleaning_completion_rate

        return cleaning_completion_rate(self.cleaning_completed, self.cleaning_total)

    @property
    def water_completion_rate(self) -> float:
        from dayscore.scoring import water_completion_rate

        return water_completion_rate(self.water_ounces, self.water_target)

    @property
    def did_read(self) -> bool:
        return self.pages_read > 0

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> DaySummary:
        return cls(
            day=parse_day(d.get("date")),
            habits_completed=int(d.get("habitsCompleted", 0) or 0),
            habits_total=int(d.get("habitsTotal", 0) or 0),
            cleaning_completed=int(d.get("cleaningCompleted", 0) or 0),
            cleaning_total=int(d.get("cleaningTotal", 0) or 0),
            water_ounces=float(d.get("waterOunces", 0.0) or 0.0),
            water_target=float(d.get("waterTarget", 100.0)),
            pages_read=int(d.get("pagesRead", 0) or 0),
            minutes_read=int(d.get("minutesRead", 0) or 0),
            score=float(d.get("score", 0.0) or 0.0),
            reflection_note=d.get("reflectionNote"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": _day_str(self.day),
            "habitsCompleted": self.habits_completed,
            "habitsTotal": self.habits_total,
            "cleaningCompleted": self.cleaning_completed,
            "cleaningTotal": self.cleaning_total,
            "waterOunces": self.water_ounces,
            "waterTarget": self.water_target,
            "pagesRead": self.pages_read,
            "minutesRead": self.minutes_read,
            "score": round(self.score, 2),
            "reflectionNote": self.reflection_note,
        }


@dataclass
class WeeklySummary:
    start_date: date | None = None
    end_date: date | None = None
    days: list[DaySummary] = field(default_factory=list)

    @property
    def average_score(self) -> float:
        if not self.days:
            return 0.0
        return sum(d.score for d in self.days) / len(self.days)

    @property
    def total_habits_completed(self) -> int:
        return sum(max(d.habits_completed, 0) for d in self.days)

    @property
    def total_habits_total(self) -> int:
        return sum(max(d.habits_total, 0) for d in self.days)

    @property
    def habit_compliance_rate(self) -> float:
        from dayscore.scoring import habit_completion_rate

        return habit_completion_rate(self.total_habits_completed, self.total_habits_total)

    @property
    def cleaning_compliance_rate(self) -> float:
        from dayscore.scoring import cleaning_completion_rate

        completed = sum(max(d.cleaning_completed, 0) for d in self.days)
        total = sum(max(d.cleaning_total, 0) for d in self.days)
        return cleaning_completion_rate(completed, total)

    @property
    def average_water_ounces(self) -> float:
        if not self.days:
            return 0.0
        return sum(d.water_ounces for d in self.days) / len(self.days)

    @property
    def days_with_reading(self) -> int:
        return sum(1 for d in self.days if d.did_read)

    @property
    def total_pages_read(self) -> int:
        return sum(max(d.pages_read, 0) for d in self.days)

    def to_dict(self) -> dict[str, Any]:
        return {
            "startDate": _day_str(self.start_date),
            "endDate": _day_str(self.end_date),
            "days": [d.to_dict() for d in self.days],
            "averageScore": round(self.average_score, 2),
            "habitComplianceRate": round(self.habit_compliance_rate, 3),
            "cleaningComplianceRate": round(self.cleaning_compliance_rate, 3),
            "averageWaterOunces": round(self.average_water_ounces, 1),
            "daysWithReading": self.days_with_reading,
            "totalPagesRead": self.total_pages_read,
        }
