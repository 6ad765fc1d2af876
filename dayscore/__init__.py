"""Dayscore core library: habit, cleaning, water and reading tracking.

Public API re-exports for convenient imports:
    from dayscore import compute_day_score, is_active_on, next_due_date, ...
"""

# Workspace & paths
from dayscore.workspace import (
    workspace_root,
    get_user_timezone,
    today,
    now_local,
    profile_path,
    data_dir,
)

# File I/O
from dayscore.fileio import (
    read_text,
    read_json,
    read_yaml,
    write_json_atomic,
    write_yaml_atomic,
)

# Scoring
from dayscore.scoring import (
    HABIT_WEIGHT,
    CLEANING_WEIGHT,
    WATER_WEIGHT,
    READING_WEIGHT,
    DayCounts,
    habit_completion_rate,
    cleaning_completion_rate,
    water_completion_rate,
    reading_completion,
    compute_day_score,
    build_day_summary,
    score_summary,
    aggregate_week,
)

# Recurrence
from dayscore.recurrence import (
    weekday_number,
    add_days,
    add_months,
    week_start_for,
    is_active_on,
    display_text,
    next_due_date,
    recurrence_text,
    task_next_due,
    is_overdue,
    is_due_on,
)

# Storage
from dayscore.store import (
    Snapshot,
    load_snapshot,
    load_profile,
    save_profile,
)

# Summaries & export
from dayscore.summary import (
    collect_day_counts,
    summarize_day,
    summaries_between,
    week_summary,
)
from dayscore.export import weekly_review, daily_export
from dayscore.goodreads import GoodreadsError

# Models
from dayscore.models import (
    HabitFrequency,
    CleaningRecurrence,
    HabitDefinition,
    HabitCompletionRecord,
    CleaningTaskDefinition,
    CleaningCompletionRecord,
    WaterEntry,
    WaterLog,
    Book,
    ReadingSession,
    GoodreadsAccount,
    Goal,
    UserProfile,
    DaySummary,
    WeeklySummary,
)
