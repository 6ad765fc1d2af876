"""Goals and KPIs."""

from __future__ import annotations

from typing import Any

from dayscore.models import GOAL_CATEGORIES, Goal


def validate_goal(goal: dict[str, Any]) -> list[str]:
    errors = []
    if not goal.get("id"):
        errors.append("Missing required field: id")
    if not goal.get("title"):
        errors.append("Missing required field: title")
    if "category" in goal and goal["category"] not in GOAL_CATEGORIES:
        errors.append(f"Invalid category: {goal['category']}")
    if not goal.get("is_high_level", True) and goal.get("target_value") is None:
        errors.append("KPIs need a target_value")
    return errors


def high_level_goals(goals) -> list[Goal]:
    return [g for g in goals if g.is_active and g.is_high_level]


def kpis(goals) -> list[Goal]:
    return [g for g in goals if g.is_active and not g.is_high_level]


def find_goal(goals, goal_id: str) -> Goal | None:
    for g in goals:
        if g.id == goal_id:
            return g
    return None


def add_goal(goals: list[Goal], data: dict[str, Any]) -> tuple[Goal, list[str]]:
    errors = validate_goal(data)
    if errors:
        return Goal(), errors
    if find_goal(goals, data["id"]):
        return Goal(), [f"Goal ID already exists: {data['id']}"]
    goal = Goal.from_dict(data)
    goals.append(goal)
    return goal, []


def update_kpi_value(goals: list[Goal], goal_id: str, value: float) -> Goal | None:
    goal = find_goal(goals, goal_id)
    if not goal or goal.is_high_level:
        return None
    goal.current_value = float(value)
    return goal
