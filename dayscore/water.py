"""Water intake logging for Dayscore."""

from __future__ import annotations

import logging
from datetime import date, datetime

from dayscore.models import WaterEntry, WaterLog
from dayscore.recurrence import add_days

logger = logging.getLogger(__name__)


def log_for_day(logs: list[WaterLog] | tuple[WaterLog, ...], day: date) -> WaterLog | None:
    for log in logs:
        if log.day == day:
            return log
    return None


def get_or_create_log(logs: list[WaterLog], day: date, target: float = 100.0) -> WaterLog:
    log = log_for_day(logs, day)
    if log is None:
        log = WaterLog(day=day, target_ounces=target)
        logs.append(log)
    return log


def total_for(logs, day: date) -> float:
    log = log_for_day(logs, day)
    return log.total_ounces if log else 0.0


def add_water(
    logs: list[WaterLog],
    day: date,
    ounces: float,
    target: float = 100.0,
    at: datetime | None = None,
) -> WaterLog:
    """Append an entry to the day's log. Non-positive amounts are rejected."""
    if ounces <= 0:
        raise ValueError("ounces must be positive")
    log = get_or_create_log(logs, day, target)
    log.entries.append(WaterEntry(ounces=float(ounces), timestamp=at or datetime.now()))
    logger.info("Added %soz of water on %s", ounces, day.isoformat())
    return log


def remove_last_entry(logs: list[WaterLog], day: date) -> WaterEntry | None:
    log = log_for_day(logs, day)
    if not log or not log.entries:
        return None
    entry = log.entries.pop()
    logger.info("Removed %soz of water on %s", entry.ounces, day.isoformat())
    return entry


def set_manual_total(
    logs: list[WaterLog],
    day: date,
    ounces: float,
    target: float = 100.0,
    at: datetime | None = None,
) -> WaterLog:
    """Replace the day's entries with a single entry of ``ounces``."""
    log = get_or_create_log(logs, day, target)
    log.entries.clear()
    if ounces > 0:
        log.entries.append(WaterEntry(ounces=float(ounces), timestamp=at or datetime.now()))
    logger.info("Set water total to %soz on %s", ounces, day.isoformat())
    return log


def update_daily_target(logs: list[WaterLog], day: date, target: float) -> WaterLog:
    if target <= 0:
        raise ValueError("target must be positive")
    log = get_or_create_log(logs, day, target)
    log.target_ounces = float(target)
    logger.info("Water target for %s set to %soz", day.isoformat(), target)
    return log


# ── History ───────────────────────────────────────────────────


def weekly_data(logs, today: date) -> list[tuple[date, float]]:
    """(day, total ounces) for the seven days ending on ``today``, oldest first."""
    return [(d, total_for(logs, d)) for d in (add_days(today, -i) for i in range(6, -1, -1))]


def weekly_average(logs, today: date) -> float:
    """Average over the last seven days that have a log; 0 when none do."""
    found = (log_for_day(logs, add_days(today, -i)) for i in range(7))
    totals = [log.total_ounces for log in found if log is not None]
    if not totals:
        return 0.0
    return sum(totals) / len(totals)
