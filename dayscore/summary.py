"""Day summaries: gather counts from the store, score them, persist them."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

from dayscore import cleaning, habits, reading, water
from dayscore.models import DaySummary, WeeklySummary
from dayscore.recurrence import add_days, week_start_for
from dayscore.scoring import DayCounts, aggregate_week, build_day_summary
from dayscore.store import Snapshot, load_profile, load_snapshot, load_summaries, save_summaries

logger = logging.getLogger(__name__)


def collect_day_counts(snapshot: Snapshot, day: date) -> DayCounts:
    """Raw tallies for ``day`` from a read-only snapshot.

    Cleaning counts come from the day's checklist: tasks completed that day
    plus pending ones, within the profile's daily task limit.
    """
    profile = snapshot.profile

    due_habits = habits.habits_for(snapshot.habits, day)
    habits_done = habits.completed_count(snapshot.habits, snapshot.habit_logs, day)

    checklist = cleaning.day_checklist(
        snapshot.cleaning_tasks, snapshot.cleaning_logs, day, profile.max_daily_cleaning_tasks
    )

    log = water.log_for_day(snapshot.water_logs, day)
    target = log.target_ounces if log else profile.daily_water_target

    return DayCounts(
        day=day,
        habits_completed=habits_done,
        habits_total=len(due_habits),
        cleaning_completed=sum(1 for _, done in checklist if done),
        cleaning_total=len(checklist),
        water_ounces=log.total_ounces if log else 0.0,
        water_target=target,
        pages_read=reading.pages_read_on(snapshot.sessions, day),
        minutes_read=reading.minutes_read_on(snapshot.sessions, day),
    )


def find_summary(summaries: list[DaySummary], day: date) -> DaySummary | None:
    for s in summaries:
        if s.day == day:
            return s
    return None


def summarize_day(day: date, reflection: str | None = None, root: Path | None = None) -> DaySummary:
    """Compute the summary for ``day`` and upsert it into summaries.json.

    An existing reflection note is kept unless a new one is given.
    """
    counts = collect_day_counts(load_snapshot(root), day)
    summaries = load_summaries(root)
    existing = find_summary(summaries, day)
    if reflection is not None:
        counts.reflection_note = reflection
    elif existing is not None:
        counts.reflection_note = existing.reflection_note

    summary = build_day_summary(counts)
    if existing is not None:
        summaries[summaries.index(existing)] = summary
    else:
        summaries.append(summary)
    save_summaries(summaries, root)
    logger.info("Saved summary for %s (score %.1f)", day.isoformat(), summary.score)
    return summary


def summaries_between(summaries, start: date, end: date) -> list[DaySummary]:
    """Stored summaries with start <= day <= end, oldest first."""
    found = [s for s in summaries if s.day is not None and start <= s.day <= end]
    return sorted(found, key=lambda s: s.day)


def week_summary(day: date, root: Path | None = None) -> WeeklySummary:
    """Aggregate the stored summaries of the week containing ``day``."""
    start = week_start_for(day, load_profile(root).week_start)
    end = add_days(start, 6)
    days = summaries_between(load_summaries(root), start, end)
    return aggregate_week(days, start, end)


def reflection_notes(summaries) -> list[tuple[date, str]]:
    return [(s.day, s.reflection_note) for s in summaries if s.day and s.reflection_note]
