"""File-backed storage for Dayscore collections.

Each collection lives in its own file under <root>/data/. Definitions are
YAML so they can be edited by hand; logs are JSON. Missing definition files
are seeded with the defaults on first load.

Engines never touch this module: callers read a Snapshot and pass plain
values into recurrence/scoring.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from dayscore.defaults import core_habits, default_cleaning_tasks, default_goals
from dayscore.fileio import read_json, read_yaml, write_json_atomic, write_yaml_atomic
from dayscore.models import (
    Book,
    CleaningCompletionRecord,
    CleaningTaskDefinition,
    DaySummary,
    Goal,
    GoodreadsAccount,
    HabitCompletionRecord,
    HabitDefinition,
    ReadingSession,
    UserProfile,
    WaterLog,
)
from dayscore.scoring import score_summary
from dayscore.workspace import (
    cleaning_logs_path,
    cleaning_path,
    goals_path,
    goodreads_path,
    habit_logs_path,
    habits_path,
    profile_path,
    reading_path,
    summaries_path,
    today,
    water_path,
)

logger = logging.getLogger(__name__)


def new_id() -> str:
    return uuid.uuid4().hex[:12]


def _list(data: Any, key: str) -> list[dict[str, Any]]:
    if not isinstance(data, dict):
        return []
    return [x for x in (data.get(key) or []) if isinstance(x, dict)]


# ── Profile ───────────────────────────────────────────────────


def load_profile(root: Path | None = None) -> UserProfile:
    return UserProfile.from_dict(read_yaml(profile_path(root)))


def save_profile(profile: UserProfile, root: Path | None = None) -> None:
    write_yaml_atomic(profile_path(root), profile.to_dict())


# ── Habits ────────────────────────────────────────────────────


def load_habits(root: Path | None = None) -> list[HabitDefinition]:
    path = habits_path(root)
    if not path.exists():
        habits = core_habits()
        logger.info("Seeding %d core habits into %s", len(habits), path)
        save_habits(habits, root)
        return habits
    return [HabitDefinition.from_dict(h) for h in _list(read_yaml(path), "habits")]


def save_habits(habits: list[HabitDefinition], root: Path | None = None) -> None:
    write_yaml_atomic(habits_path(root), {"habits": [h.to_dict() for h in habits]})


def load_habit_logs(root: Path | None = None) -> list[HabitCompletionRecord]:
    return [HabitCompletionRecord.from_dict(r) for r in _list(read_json(habit_logs_path(root)), "logs")]


def save_habit_logs(logs: list[HabitCompletionRecord], root: Path | None = None) -> None:
    write_json_atomic(habit_logs_path(root), {"logs": [r.to_dict() for r in logs]})


# ── Cleaning ──────────────────────────────────────────────────


def load_cleaning_tasks(root: Path | None = None) -> list[CleaningTaskDefinition]:
    path = cleaning_path(root)
    if not path.exists():
        tasks = default_cleaning_tasks()
        created = today(root)
        for t in tasks:
            t.created_on = created
        logger.info("Seeding %d cleaning tasks into %s", len(tasks), path)
        save_cleaning_tasks(tasks, root)
        return tasks
    return [CleaningTaskDefinition.from_dict(t) for t in _list(read_yaml(path), "tasks")]


def save_cleaning_tasks(tasks: list[CleaningTaskDefinition], root: Path | None = None) -> None:
    write_yaml_atomic(cleaning_path(root), {"tasks": [t.to_dict() for t in tasks]})


def load_cleaning_logs(root: Path | None = None) -> list[CleaningCompletionRecord]:
    return [
        CleaningCompletionRecord.from_dict(r)
        for r in _list(read_json(cleaning_logs_path(root)), "logs")
    ]


def save_cleaning_logs(logs: list[CleaningCompletionRecord], root: Path | None = None) -> None:
    write_json_atomic(cleaning_logs_path(root), {"logs": [r.to_dict() for r in logs]})


# ── Goals ─────────────────────────────────────────────────────


def load_goals(root: Path | None = None) -> list[Goal]:
    path = goals_path(root)
    if not path.exists():
        goals = default_goals()
        save_goals(goals, root)
        return goals
    return [Goal.from_dict(g) for g in _list(read_yaml(path), "goals")]


def save_goals(goals: list[Goal], root: Path | None = None) -> None:
    write_yaml_atomic(goals_path(root), {"goals": [g.to_dict() for g in goals]})


# ── Water / Reading / Summaries ───────────────────────────────


def load_water_logs(root: Path | None = None) -> list[WaterLog]:
    return [WaterLog.from_dict(w) for w in _list(read_json(water_path(root)), "logs")]


def save_water_logs(logs: list[WaterLog], root: Path | None = None) -> None:
    write_json_atomic(water_path(root), {"logs": [w.to_dict() for w in logs]})


def load_reading(root: Path | None = None) -> tuple[list[Book], list[ReadingSession]]:
    data = read_json(reading_path(root))
    books = [Book.from_dict(b) for b in _list(data, "books")]
    sessions = [ReadingSession.from_dict(s) for s in _list(data, "sessions")]
    return books, sessions


def save_reading(books: list[Book], sessions: list[ReadingSession], root: Path | None = None) -> None:
    write_json_atomic(reading_path(root), {
        "books": [b.to_dict() for b in books],
        "sessions": [s.to_dict() for s in sessions],
    })


def load_summaries(root: Path | None = None) -> list[DaySummary]:
    """Stored summaries with each score recomputed from its counts."""
    summaries = [DaySummary.from_dict(s) for s in _list(read_json(summaries_path(root)), "summaries")]
    for s in summaries:
        s.score = score_summary(s)
    return summaries


def save_summaries(summaries: list[DaySummary], root: Path | None = None) -> None:
    ordered = sorted(summaries, key=lambda s: s.day.isoformat() if s.day else "")
    write_json_atomic(summaries_path(root), {"summaries": [s.to_dict() for s in ordered]})


def load_goodreads(root: Path | None = None) -> GoodreadsAccount:
    return GoodreadsAccount.from_dict(read_json(goodreads_path(root)))


def save_goodreads(account: GoodreadsAccount | None, root: Path | None = None) -> None:
    path = goodreads_path(root)
    if account is None:
        if path.exists():
            path.unlink()
        return
    write_json_atomic(path, account.to_dict())


# ── Snapshot ──────────────────────────────────────────────────


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of every collection at one point in time."""

    profile: UserProfile = field(default_factory=UserProfile)
    habits: tuple[HabitDefinition, ...] = ()
    habit_logs: tuple[HabitCompletionRecord, ...] = ()
    cleaning_tasks: tuple[CleaningTaskDefinition, ...] = ()
    cleaning_logs: tuple[CleaningCompletionRecord, ...] = ()
    water_logs: tuple[WaterLog, ...] = ()
    books: tuple[Book, ...] = ()
    sessions: tuple[ReadingSession, ...] = ()


def load_snapshot(root: Path | None = None) -> Snapshot:
    books, sessions = load_reading(root)
    return Snapshot(
        profile=load_profile(root),
        habits=tuple(load_habits(root)),
        habit_logs=tuple(load_habit_logs(root)),
        cleaning_tasks=tuple(load_cleaning_tasks(root)),
        cleaning_logs=tuple(load_cleaning_logs(root)),
        water_logs=tuple(load_water_logs(root)),
        books=tuple(books),
        sessions=tuple(sessions),
    )
