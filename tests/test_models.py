"""Tests for dayscore/models.py — parsing defaults and derived properties."""

from datetime import date

from dayscore.models import (
    Book,
    CleaningRecurrence,
    CleaningTaskDefinition,
    DaySummary,
    Goal,
    GoodreadsAccount,
    HabitCompletionRecord,
    HabitDefinition,
    HabitFrequency,
    UserProfile,
    WaterEntry,
    WaterLog,
    parse_day,
)


def test_parse_day():
    assert parse_day("2026-01-05") == date(2026, 1, 5)
    assert parse_day("2026-01-05T10:30:00") == date(2026, 1, 5)
    assert parse_day("") is None
    assert parse_day("not a date") is None


def test_habit_frequency_from_string_and_dict():
    assert HabitFrequency.from_dict("daily").kind == "daily"
    weekly = HabitFrequency.from_dict({"kind": "weekly", "days_per_week": 6})
    assert weekly.days_per_week == 6
    days = HabitFrequency.from_dict({"kind": "specific_days", "days": [2, 4]})
    assert days.days == [2, 4]
    assert HabitFrequency.from_dict(None).kind == "daily"


def test_habit_frequency_serializes_daily_as_string():
    assert HabitFrequency.daily().to_dict() == "daily"
    assert HabitFrequency.specific_days({6, 2}).to_dict() == {"kind": "specific_days", "days": [2, 6]}


def test_cleaning_recurrence_intervals():
    assert CleaningRecurrence(kind="daily").interval_days == 1
    assert CleaningRecurrence(kind="monthly").interval_days == 30
    assert CleaningRecurrence.custom(-3).interval_days == 0
    assert CleaningRecurrence.from_dict({"kind": "custom", "days": 9}).days == 9


def test_habit_definition_defaults():
    h = HabitDefinition.from_dict({"id": "x", "title": "X"})
    assert h.category == "Custom"
    assert h.input_type == "boolean"
    assert h.is_active is True
    assert h.target_value is None
    assert "target_value" not in h.to_dict()


def test_habit_record_uses_camel_case_keys():
    r = HabitCompletionRecord(id="1", habit_id="h", day=date(2026, 1, 5), completed=True, numeric_value=3)
    d = r.to_dict()
    assert d["habitId"] == "h"
    assert d["date"] == "2026-01-05"
    assert HabitCompletionRecord.from_dict(d).numeric_value == 3.0


def test_cleaning_task_omits_empty_dates():
    d = CleaningTaskDefinition(id="t", title="T").to_dict()
    assert "last_completed" not in d
    assert d["recurrence"] == "weekly"


def test_water_log_totals():
    log = WaterLog(day=date(2026, 1, 5), entries=[WaterEntry(16), WaterEntry(32)], target_ounces=100)
    assert log.total_ounces == 48
    assert log.remaining_ounces == 52
    assert log.progress == 0.48
    assert log.is_complete is False
    log.entries.append(WaterEntry(60))
    assert log.progress == 1.0
    assert log.remaining_ounces == 0


def test_book_progress():
    book = Book(title="B", total_pages=200, pages_read=50)
    assert book.progress == 0.25
    assert book.progress_percentage == 25
    assert book.pages_remaining == 150
    assert book.is_currently_reading is True
    assert Book(total_pages=0, pages_read=10).progress == 0.0


def test_book_complete_is_not_currently_reading():
    book = Book(total_pages=100, pages_read=100, status="currently_reading")
    assert book.is_complete is True
    assert book.is_currently_reading is False


def test_goal_progress():
    assert Goal(target_value=50, current_value=10).progress == 0.2
    assert Goal(target_value=50, current_value=80).progress == 1.0
    assert Goal(target_value=None, current_value=5).progress is None
    assert Goal(target_value=0, current_value=5).progress is None


def test_goodreads_account_connected():
    assert GoodreadsAccount().is_connected is False
    assert GoodreadsAccount(user_id="u").is_connected is False
    assert GoodreadsAccount(user_id="u", access_token="t").is_connected is True


def test_profile_defaults():
    p = UserProfile.from_dict({})
    assert p.daily_water_target == 100.0
    assert p.max_daily_cleaning_tasks == 3
    assert UserProfile.from_dict({"week_start": "MON"}).week_start == "mon"


def test_day_summary_rates():
    s = DaySummary(habits_completed=3, habits_total=4, water_ounces=200, water_target=100, pages_read=0)
    assert s.habit_completion_rate == 0.75
    assert s.cleaning_completion_rate == 1.0
    assert s.water_completion_rate == 1.0
    assert s.did_read is False


def test_day_summary_rounds_score():
    d = DaySummary(day=date(2026, 1, 5), score=49.6000001).to_dict()
    assert d["score"] == 49.6
    assert DaySummary.from_dict(d).day == date(2026, 1, 5)
