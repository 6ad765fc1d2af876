"""Seed habits, cleaning tasks and goals for a fresh workspace."""

from __future__ import annotations

from dayscore.models import (
    CleaningRecurrence,
    CleaningTaskDefinition,
    Goal,
    HabitDefinition,
    HabitFrequency,
)


def _core(id: str, title: str, category: str, **kw) -> HabitDefinition:
    return HabitDefinition(id=id, title=title, category=category, is_core=True, **kw)


def core_habits() -> list[HabitDefinition]:
    return [
        # Life
        _core("brick-phone", "Brick phone 5-8pm", "Life"),
        _core("read-chapter", "Read a chapter a day", "Life"),
        # Fitness
        _core("workout", "Workout", "Fitness", frequency=HabitFrequency.weekly(6)),
        _core("mobility", "Mobility", "Fitness", frequency=HabitFrequency.weekly(6)),
        # Nutrition
        _core("water-100oz", "Drink 100oz of water", "Nutrition",
              input_type="numeric", target_value=100, unit="oz"),
        _core("minimize-processed", "Minimize processed foods", "Nutrition"),
        _core("no-liquid-calories", "No liquid calories", "Nutrition"),
        _core("coffee-limit", "Only 2 cups of coffee", "Nutrition",
              input_type="numeric", target_value=2, unit="cups"),
        _core("protein", "Hit 145g of protein", "Nutrition",
              input_type="numeric", target_value=145, unit="g"),
        # Health
        _core("lights-out", "Lights out by 10pm", "Health"),
        _core("track-hrv", "Track HRV daily", "Health"),
        _core("meditate", "Meditate daily", "Health", input_type="duration"),
        # Work
        _core("work-hours", "Work 9-5:30", "Work"),
        _core("social-media-limit", "Limit social media to 15 min", "Work",
              input_type="duration", target_value=15, unit="min"),
        # Supplements & Recovery
        _core("wake-530", "Wake up 5:30am", "Supplements & Recovery"),
        _core("multivitamin", "Multivitamin", "Supplements & Recovery"),
        _core("recovery-vitamin", "Recovery vitamin", "Supplements & Recovery"),
        _core("anti-sickness-vitamin", "Anti-sickness vitamin", "Supplements & Recovery"),
        _core("hot-tub", "10 min in hot tub", "Supplements & Recovery",
              input_type="duration", target_value=10, unit="min"),
        _core("daily-mobility", "Daily mobility", "Supplements & Recovery"),
    ]


def default_cleaning_tasks() -> list[CleaningTaskDefinition]:
    rows = [
        ("kitchen-reset", "Kitchen reset", "Kitchen", "daily", 15),
        ("floors", "Floors", "Whole house", "weekly", 30),
        ("bathrooms", "Bathrooms", "Bathroom", "weekly", 20),
        ("laundry", "Laundry", "Laundry room", "weekly", 60),
        ("fridge", "Fridge clean-out", "Kitchen", "weekly", 15),
        ("bedding", "Bedding", "Bedroom", "biweekly", 30),
        ("car", "Car clean", "Garage", "monthly", 45),
        ("garage", "Garage/Gear tidy", "Garage", "monthly", 60),
    ]
    return [
        CleaningTaskDefinition(
            id=id,
            title=title,
            area=area,
            recurrence=CleaningRecurrence(kind=kind),
            estimated_minutes=minutes,
        )
        for id, title, area, kind, minutes in rows
    ]


def default_goals() -> list[Goal]:
    return [
        Goal(id="be-present", title="Be more present and enjoy the time I have", category="Presence"),
        Goal(id="healthy-life", title="Live a healthy life", category="Health"),
        Goal(id="outdoors", title="Enjoy the outdoors more", category="Outdoors"),
        Goal(id="ftp-250", title="Reach 250 FTP", category="Fitness", is_high_level=False,
             target_value=250, current_value=0, unit="FTP"),
        Goal(id="ski-resorts", title="Ski every local resort", category="Outdoors", is_high_level=False,
             target_value=7, current_value=0, unit="resorts"),
        Goal(id="ski-days", title="Ski 50 days", category="Outdoors", is_high_level=False,
             target_value=50, current_value=0, unit="days"),
        Goal(id="phone-time", title="Phone under 1 hour/day", category="Phone", is_high_level=False,
             target_value=60, current_value=0, unit="min/day avg"),
    ]
