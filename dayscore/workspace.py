"""Workspace root, timezone, path helpers for Dayscore."""

from __future__ import annotations

import os
from datetime import date, datetime
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dayscore.fileio import read_yaml


def workspace_root() -> Path:
    """Get the workspace root directory (contains profile.yaml and data/)."""
    return Path(
        os.environ.get("DAYSCORE_ROOT", str(Path.home() / "dayscore"))
    ).expanduser().resolve()


def get_user_timezone(root: Path | None = None) -> ZoneInfo:
    """Get user's timezone from profile.yaml, defaulting to UTC."""
    if root is None:
        root = workspace_root()
    profile = read_yaml(profile_path(root))
    if isinstance(profile, dict) and profile.get("timezone"):
        try:
            return ZoneInfo(str(profile["timezone"]))
        except (ZoneInfoNotFoundError, ValueError):
            pass
    return ZoneInfo("UTC")


def today(root: Path | None = None) -> date:
    """Today's calendar date in the user's timezone."""
    return datetime.now(get_user_timezone(root)).date()


def now_local(root: Path | None = None) -> datetime:
    return datetime.now(get_user_timezone(root))


# ── Path helpers ──────────────────────────────────────────────

def profile_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "profile.yaml"


def data_dir(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "data"


def habits_path(root: Path | None = None) -> Path:
    return data_dir(root) / "habits.yaml"


def habit_logs_path(root: Path | None = None) -> Path:
    return data_dir(root) / "habit_logs.json"


def cleaning_path(root: Path | None = None) -> Path:
    return data_dir(root) / "cleaning.yaml"


def cleaning_logs_path(root: Path | None = None) -> Path:
    return data_dir(root) / "cleaning_logs.json"


def goals_path(root: Path | None = None) -> Path:
    return data_dir(root) / "goals.yaml"


def water_path(root: Path | None = None) -> Path:
    return data_dir(root) / "water.json"


def reading_path(root: Path | None = None) -> Path:
    return data_dir(root) / "reading.json"


def summaries_path(root: Path | None = None) -> Path:
    return data_dir(root) / "summaries.json"


def goodreads_path(root: Path | None = None) -> Path:
    return data_dir(root) / "goodreads.json"
