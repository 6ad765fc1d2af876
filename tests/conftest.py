"""Shared test fixtures for Dayscore tests."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest
import yaml


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create a temporary workspace with standard structure.

    The data describes Monday 2026-01-05 (weekday 2 with 1 = Sunday).
    """
    root = tmp_path / "workspace"
    (root / "data").mkdir(parents=True)

    # Profile
    profile = {
        "name": "Test",
        "timezone": "UTC",
        "daily_water_target": 100,
        "week_start": "sun",
        "max_daily_cleaning_tasks": 3,
    }
    (root / "profile.yaml").write_text(
        yaml.dump(profile, default_flow_style=False), encoding="utf-8"
    )

    # Habits
    habits = {
        "habits": [
            {"id": "workout", "title": "Workout", "category": "Fitness", "frequency": "daily", "is_core": True},
            {"id": "mobility", "title": "Mobility", "category": "Fitness",
             "frequency": {"kind": "weekly", "days_per_week": 3}},
            {"id": "gym-mwf", "title": "Gym", "category": "Fitness",
             "frequency": {"kind": "specific_days", "days": [2, 4, 6]}},
            {"id": "protein", "title": "Hit 145g of protein", "category": "Nutrition",
             "input_type": "numeric", "target_value": 145, "unit": "g", "is_core": True},
            {"id": "old-habit", "title": "Old habit", "category": "Custom", "is_active": False},
        ],
    }
    (root / "data" / "habits.yaml").write_text(
        yaml.dump(habits, default_flow_style=False, sort_keys=False), encoding="utf-8"
    )

    habit_logs = {
        "logs": [
            {"id": "h1", "habitId": "workout", "date": "2026-01-03", "completed": True},
            {"id": "h2", "habitId": "workout", "date": "2026-01-04", "completed": True},
            {"id": "h3", "habitId": "workout", "date": "2026-01-05", "completed": True},
            {"id": "h4", "habitId": "protein", "date": "2026-01-05", "completed": True, "numericValue": 150},
            {"id": "h5", "habitId": "mobility", "date": "2026-01-04", "completed": True},
        ],
    }
    (root / "data" / "habit_logs.json").write_text(
        json.dumps(habit_logs, indent=2), encoding="utf-8"
    )

    # Cleaning
    cleaning = {
        "tasks": [
            {"id": "kitchen", "title": "Kitchen reset", "area": "Kitchen", "recurrence": "daily",
             "created_on": "2026-01-01", "last_completed": "2026-01-04"},
            {"id": "floors", "title": "Floors", "recurrence": "weekly",
             "created_on": "2025-12-01", "last_completed": "2025-12-20"},
            {"id": "bedding", "title": "Bedding", "recurrence": "biweekly",
             "created_on": "2025-12-01", "last_completed": "2026-01-01"},
            {"id": "car", "title": "Car clean", "recurrence": "monthly",
             "created_on": "2025-12-01", "last_completed": "2025-12-31"},
            {"id": "garage", "title": "Garage tidy", "recurrence": "monthly",
             "created_on": "2026-01-05"},
            {"id": "windows", "title": "Windows", "recurrence": {"kind": "custom", "days": 90},
             "created_on": "2025-01-01", "is_active": False},
        ],
    }
    (root / "data" / "cleaning.yaml").write_text(
        yaml.dump(cleaning, default_flow_style=False, sort_keys=False), encoding="utf-8"
    )
    (root / "data" / "cleaning_logs.json").write_text(
        json.dumps({"logs": [
            {"id": "c1", "taskId": "kitchen", "completedDate": "2026-01-04"},
        ]}, indent=2),
        encoding="utf-8",
    )

    # Water
    water = {
        "logs": [
            {"date": "2026-01-05", "targetOunces": 100, "entries": [
                {"ounces": 16, "timestamp": "2026-01-05T08:00:00"},
                {"ounces": 16, "timestamp": "2026-01-05T11:00:00"},
                {"ounces": 32, "timestamp": "2026-01-05T15:00:00"},
            ]},
            {"date": "2026-01-04", "targetOunces": 100, "entries": [
                {"ounces": 120, "timestamp": "2026-01-04T12:00:00"},
            ]},
        ],
    }
    (root / "data" / "water.json").write_text(json.dumps(water, indent=2), encoding="utf-8")

    # Reading
    reading = {
        "books": [
            {"id": "dune", "title": "Dune", "author": "Frank Herbert", "totalPages": 400,
             "pagesRead": 120, "status": "currently_reading", "startedDate": "2025-12-20"},
        ],
        "sessions": [
            {"id": "s1", "bookId": "dune", "date": "2026-01-05", "pagesRead": 20, "minutes": 30,
             "startPage": 100, "endPage": 120},
        ],
    }
    (root / "data" / "reading.json").write_text(json.dumps(reading, indent=2), encoding="utf-8")

    # Summaries
    summaries = {
        "summaries": [
            {"date": "2026-01-04", "habitsCompleted": 2, "habitsTotal": 3, "cleaningCompleted": 1,
             "cleaningTotal": 1, "waterOunces": 120, "waterTarget": 100, "pagesRead": 0,
             "minutesRead": 0, "score": 68.33, "reflectionNote": "Solid Sunday."},
        ],
    }
    (root / "data" / "summaries.json").write_text(json.dumps(summaries, indent=2), encoding="utf-8")

    # Goals
    goals = {
        "goals": [
            {"id": "healthy-life", "title": "Live a healthy life", "category": "Health", "is_high_level": True},
            {"id": "ski-days", "title": "Ski 50 days", "category": "Outdoors", "is_high_level": False,
             "target_value": 50, "current_value": 10, "unit": "days"},
        ],
    }
    (root / "data" / "goals.yaml").write_text(
        yaml.dump(goals, default_flow_style=False, sort_keys=False), encoding="utf-8"
    )

    # Set env var
    os.environ["DAYSCORE_ROOT"] = str(root)
    yield root
    # Cleanup
    if "DAYSCORE_ROOT" in os.environ:
        del os.environ["DAYSCORE_ROOT"]
