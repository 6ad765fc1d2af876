"""Daily score computation and weekly aggregation for Dayscore.

A day's score (0-100) weights four completion rates:

    habits 50%, cleaning 20%, water 15%, reading 15%

Every function here is pure and total: zero denominators are handled by
explicit rules rather than exceptions, and negative inputs count as zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from dayscore.models import DaySummary, WeeklySummary


HABIT_WEIGHT = 0.50
CLEANING_WEIGHT = 0.20
WATER_WEIGHT = 0.15
READING_WEIGHT = 0.15


def _clamp_unit(x: float) -> float:
    return min(max(float(x), 0.0), 1.0)


# ── Completion rates ──────────────────────────────────────────


def habit_completion_rate(completed: int, total: int) -> float:
    """Share of due habits completed; 0 when nothing is due."""
    if total <= 0:
        return 0.0
    return _clamp_unit(max(completed, 0) / total)


def cleaning_completion_rate(completed: int, total: int) -> float:
    """Share of due cleaning tasks completed; full credit when nothing is due."""
    if total <= 0:
        return 1.0
    return _clamp_unit(max(completed, 0) / total)


def water_completion_rate(consumed: float, target: float) -> float:
    """Water intake against target, capped at 1.0; 0 when there is no target."""
    if target <= 0:
        return 0.0
    return _clamp_unit(max(consumed, 0.0) / target)


def reading_completion(pages_read: int) -> float:
    """Binary: any pages read counts as a full reading day."""
    return 1.0 if pages_read > 0 else 0.0


# ── Day score ─────────────────────────────────────────────────


def compute_day_score(
    habit_completion: float,
    cleaning_completion: float,
    water_completion: float,
    did_read: bool,
) -> float:
    """Weighted composite of the four sub-scores, in [0, 100]."""
    score = (
        _clamp_unit(habit_completion) * HABIT_WEIGHT
        + _clamp_unit(cleaning_completion) * CLEANING_WEIGHT
        + _clamp_unit(water_completion) * WATER_WEIGHT
        + (1.0 if did_read else 0.0) * READING_WEIGHT
    )
    return score * 100


@dataclass
class DayCounts:
    """Raw per-day tallies handed to build_day_summary."""

    day: date | None = None
    habits_completed: int = 0
    habits_total: int = 0
    cleaning_completed: int = 0
    cleaning_total: int = 0
    water_ounces: float = 0.0
    water_target: float = 100.0
    pages_read: int = 0
    minutes_read: int = 0
    reflection_note: str | None = None


def build_day_summary(counts: DayCounts) -> DaySummary:
    """Turn raw counts into a DaySummary with its score computed."""
    habits_total = max(counts.habits_total, 0)
    cleaning_total = max(counts.cleaning_total, 0)
    water_target = max(counts.water_target, 0.0)
    summary = DaySummary(
        day=counts.day,
        habits_completed=min(max(counts.habits_completed, 0), habits_total),
        habits_total=habits_total,
        cleaning_completed=min(max(counts.cleaning_completed, 0), cleaning_total),
        cleaning_total=cleaning_total,
        water_ounces=max(counts.water_ounces, 0.0),
        water_target=water_target,
        pages_read=max(counts.pages_read, 0),
        minutes_read=max(counts.minutes_read, 0),
        reflection_note=counts.reflection_note,
    )
    summary.score = score_summary(summary)
    return summary


def score_summary(summary: DaySummary) -> float:
    """Recompute the score of an existing summary from its fields."""
    return compute_day_score(
        summary.habit_completion_rate,
        summary.cleaning_completion_rate,
        summary.water_completion_rate,
        summary.did_read,
    )


# ── Weekly aggregation ────────────────────────────────────────


def aggregate_week(
    days: list[DaySummary],
    start_date: date | None = None,
    end_date: date | None = None,
) -> WeeklySummary:
    """Aggregate day summaries, ordered by date.

    When no bounds are given they default to the earliest and latest day
    present (both None for an empty list).
    """
    dated = sorted((d for d in days if d.day is not None), key=lambda d: d.day)
    undated = [d for d in days if d.day is None]
    ordered = dated + undated
    if start_date is None and dated:
        start_date = dated[0].day
    if end_date is None and dated:
        end_date = dated[-1].day
    return WeeklySummary(start_date=start_date, end_date=end_date, days=ordered)
