"""Tests for dayscore/store.py and dayscore/fileio.py — persistence and seeding."""

import dataclasses
from datetime import date
from unittest.mock import patch

import pytest

from dayscore.fileio import read_json, read_yaml, write_json_atomic
from dayscore.models import DaySummary, HabitDefinition
from dayscore.store import (
    load_cleaning_tasks,
    load_goals,
    load_habits,
    load_profile,
    load_snapshot,
    load_summaries,
    save_habits,
    save_summaries,
)
from dayscore.workspace import cleaning_path, habits_path, today


def test_read_missing_files(tmp_path):
    assert read_json(tmp_path / "missing.json") is None
    assert read_yaml(tmp_path / "missing.yaml") is None


def test_atomic_write_leaves_no_temp_files(tmp_path):
    path = tmp_path / "nested" / "data.json"
    write_json_atomic(path, {"a": 1})
    assert read_json(path) == {"a": 1}
    assert [p.name for p in path.parent.iterdir()] == ["data.json"]


def test_load_profile(workspace):
    profile = load_profile(workspace)
    assert profile.name == "Test"
    assert profile.week_start == "sun"


def test_habits_round_trip_through_yaml(workspace):
    habits = load_habits(workspace)
    habits.append(HabitDefinition(id="new", title="New habit"))
    save_habits(habits, workspace)
    data = read_yaml(habits_path(workspace))
    assert data["habits"][-1]["id"] == "new"
    assert data["habits"][2]["frequency"] == {"kind": "specific_days", "days": [2, 4, 6]}
    assert len(load_habits(workspace)) == 6


def test_missing_habits_are_seeded(tmp_path):
    root = tmp_path / "fresh"
    habits = load_habits(root)
    assert len(habits) == 20
    assert all(h.is_core for h in habits)
    assert habits_path(root).exists()
    workout = next(h for h in habits if h.id == "workout")
    assert workout.frequency.days_per_week == 6


def test_missing_cleaning_tasks_are_seeded_due_today(tmp_path):
    root = tmp_path / "fresh"
    with patch("dayscore.store.today", return_value=date(2026, 1, 5)):
        tasks = load_cleaning_tasks(root)
    assert {t.created_on for t in tasks} == {date(2026, 1, 5)}
    assert cleaning_path(root).exists()


def test_missing_goals_are_seeded(tmp_path):
    goals = load_goals(tmp_path / "fresh")
    assert any(g.is_high_level for g in goals)
    assert any(not g.is_high_level for g in goals)


def test_summaries_saved_in_date_order(workspace):
    summaries = load_summaries(workspace)
    summaries.insert(0, DaySummary(day=date(2026, 1, 6), score=10))
    save_summaries(summaries, workspace)
    assert [s.day for s in load_summaries(workspace)] == [date(2026, 1, 4), date(2026, 1, 6)]


def test_snapshot_is_read_only(workspace):
    snapshot = load_snapshot(workspace)
    assert len(snapshot.habits) == 5
    assert isinstance(snapshot.habits, tuple)
    with pytest.raises(dataclasses.FrozenInstanceError):
        snapshot.habits = ()


def test_today_uses_profile_timezone(workspace):
    (workspace / "profile.yaml").write_text("timezone: Not/AZone\n", encoding="utf-8")
    assert isinstance(today(workspace), date)
