"""Tests for dayscore/scoring.py — weights, rates, day summaries, weekly aggregation."""

from datetime import date

import pytest

from dayscore.models import DaySummary
from dayscore.scoring import (
    DayCounts,
    aggregate_week,
    build_day_summary,
    cleaning_completion_rate,
    compute_day_score,
    habit_completion_rate,
    reading_completion,
    score_summary,
    water_completion_rate,
)


def test_perfect_day_scores_100():
    assert compute_day_score(1, 1, 1, True) == pytest.approx(100.0, abs=0.1)


def test_empty_day_scores_zero():
    assert compute_day_score(0, 0, 0, False) == 0.0


@pytest.mark.parametrize(
    "args, expected",
    [
        ((1, 0, 0, False), 50.0),
        ((0, 1, 0, False), 20.0),
        ((0, 0, 1, False), 15.0),
        ((0, 0, 0, True), 15.0),
    ],
)
def test_component_weights(args, expected):
    assert compute_day_score(*args) == pytest.approx(expected)


def test_half_day():
    assert compute_day_score(0.5, 0.5, 0.5, False) == pytest.approx(42.5)


def test_score_clamps_out_of_range_rates():
    assert compute_day_score(2.0, 1.5, 3.0, True) == pytest.approx(100.0)
    assert compute_day_score(-1.0, -0.5, -2.0, False) == 0.0


def test_score_is_pure():
    assert compute_day_score(0.3, 0.7, 0.2, True) == compute_day_score(0.3, 0.7, 0.2, True)


def test_habit_completion_rate():
    assert habit_completion_rate(0, 0) == 0.0
    assert habit_completion_rate(8, 10) == pytest.approx(0.8)
    assert habit_completion_rate(-2, 10) == 0.0
    assert habit_completion_rate(12, 10) == 1.0


def test_cleaning_completion_rate_full_credit_when_nothing_due():
    assert cleaning_completion_rate(0, 0) == 1.0
    assert cleaning_completion_rate(1, 4) == pytest.approx(0.25)


def test_water_completion_rate_caps_at_one():
    assert water_completion_rate(150, 100) == 1.0
    assert water_completion_rate(50, 100) == pytest.approx(0.5)
    assert water_completion_rate(50, 0) == 0.0


def test_reading_completion_is_binary():
    assert reading_completion(0) == 0.0
    assert reading_completion(1) == 1.0
    assert reading_completion(300) == 1.0


def test_build_day_summary_computes_score():
    summary = build_day_summary(DayCounts(
        day=date(2026, 1, 5),
        habits_completed=8,
        habits_total=10,
        cleaning_completed=0,
        cleaning_total=0,
        water_ounces=50,
        water_target=100,
        pages_read=10,
    ))
    # 0.8*50 + 1.0*20 + 0.5*15 + 15
    assert summary.score == pytest.approx(82.5)
    assert summary.did_read is True


def test_build_day_summary_clamps_counts():
    summary = build_day_summary(DayCounts(habits_completed=5, habits_total=3, water_ounces=-10, pages_read=-4))
    assert summary.habits_completed == 3
    assert summary.water_ounces == 0.0
    assert summary.pages_read == 0


def test_score_summary_matches_build():
    summary = DaySummary(habits_completed=1, habits_total=2, water_ounces=100, water_target=100)
    assert score_summary(summary) == pytest.approx(25 + 20 + 15)


# ── Weekly aggregation ────────────────────────────────────────


def _day(n: int, **kw) -> DaySummary:
    return DaySummary(day=date(2026, 1, n), **kw)


def test_weekly_average_score():
    week = aggregate_week([_day(5, score=80), _day(6, score=90), _day(7, score=70)])
    assert week.average_score == pytest.approx(80.0, abs=0.1)


def test_weekly_habit_compliance():
    week = aggregate_week([
        _day(5, habits_completed=8, habits_total=10),
        _day(6, habits_completed=9, habits_total=10),
        _day(7, habits_completed=10, habits_total=10),
    ])
    assert week.habit_compliance_rate == pytest.approx(0.9, abs=0.01)
    assert week.total_habits_completed == 27


def test_weekly_reading():
    week = aggregate_week([_day(4 + i, pages_read=p) for i, p in enumerate([20, 0, 15, 30])])
    assert week.days_with_reading == 3
    assert week.total_pages_read == 65


def test_weekly_cleaning_without_tasks_is_full():
    week = aggregate_week([_day(5), _day(6)])
    assert week.cleaning_compliance_rate == 1.0


def test_empty_week():
    week = aggregate_week([])
    assert week.average_score == 0.0
    assert week.average_water_ounces == 0.0
    assert week.start_date is None and week.end_date is None


def test_aggregate_week_orders_days_and_sets_bounds():
    week = aggregate_week([_day(7, score=1), _day(5, score=2), _day(6, score=3)])
    assert [d.day.day for d in week.days] == [5, 6, 7]
    assert week.start_date == date(2026, 1, 5)
    assert week.end_date == date(2026, 1, 7)


def test_aggregate_week_keeps_explicit_bounds():
    week = aggregate_week([_day(6)], date(2026, 1, 4), date(2026, 1, 10))
    assert week.start_date == date(2026, 1, 4)
    assert week.end_date == date(2026, 1, 10)
