"""Markdown exports for weekly and daily review."""

from __future__ import annotations

from datetime import date

from dayscore.goals import high_level_goals, kpis
from dayscore.models import (
    Book,
    CleaningTaskDefinition,
    DaySummary,
    Goal,
    HabitCompletionRecord,
    HabitDefinition,
    WeeklySummary,
)
from dayscore.recurrence import WEEKDAY_NAMES, weekday_number


def _fmt_day(d: date | None) -> str:
    return f"{d:%b} {d.day}, {d.year}" if d else "?"


def _fmt_num(x: float) -> str:
    return str(int(x)) if float(x).is_integer() else f"{x:g}"


def _kpi_line(kpi: Goal) -> str:
    line = f"- {kpi.title}"
    progress = kpi.progress
    if progress is not None and kpi.unit:
        line += (
            f": {_fmt_num(kpi.current_value)}/{_fmt_num(kpi.target_value)} {kpi.unit}"
            f" ({int(progress * 100)}%)"
        )
    return line


def weekly_review(
    goals: list[Goal],
    week: WeeklySummary,
    current_books: list[Book],
    reflection_notes: list[str],
) -> str:
    """Render a week of summaries as a review document."""
    lines = [
        "# Dayscore Weekly Review",
        "",
        "## Period",
        f"{_fmt_day(week.start_date)} - {_fmt_day(week.end_date)}",
        "",
        "---",
        "",
        "## High-Level Goals",
    ]
    for g in high_level_goals(goals):
        lines.append(f"- {g.title}")
    lines += ["", "## KPIs"]
    for k in kpis(goals):
        lines.append(_kpi_line(k))

    lines += [
        "",
        "---",
        "",
        "## Weekly Performance",
        "",
        "### Overall",
        f"- **Average Daily Score:** {week.average_score:.1f}%",
        f"- **Days Tracked:** {len(week.days)}/7",
        "",
        "### Habits",
        f"- **Completion Rate:** {week.habit_compliance_rate * 100:.1f}%",
        f"- **Habits Completed:** {week.total_habits_completed}/{week.total_habits_total}",
        "",
        "### Cleaning",
        f"- **Completion Rate:** {week.cleaning_compliance_rate * 100:.1f}%",
        "",
        "### Hydration",
        f"- **Daily Average:** {week.average_water_ounces:.0f}oz",
        "",
        "### Reading",
        f"- **Days Read:** {week.days_with_reading}/7",
        f"- **Pages Read:** {week.total_pages_read}",
    ]

    if current_books:
        lines += ["", "### Currently Reading"]
        for b in current_books:
            lines.append(
                f"- **{b.title}** by {b.author} - {b.progress_percentage}% complete "
                f"({b.pages_read}/{b.total_pages} pages)"
            )

    lines += [
        "",
        "---",
        "",
        "## Daily Breakdown",
        "",
        "| Day | Score | Habits | Cleaning | Water | Read |",
        "|-----|-------|--------|----------|-------|------|",
    ]
    for d in week.days:
        name = WEEKDAY_NAMES[weekday_number(d.day) - 1] if d.day else "?"
        lines.append(
            f"| {name} | {d.score:.0f}% | {d.habits_completed}/{d.habits_total} "
            f"| {d.cleaning_completed}/{d.cleaning_total} | {int(d.water_ounces)}oz "
            f"| {'✓' if d.did_read else '✗'} |"
        )

    notes = [n.strip() for n in reflection_notes if n and n.strip()]
    if notes:
        lines += ["", "---", "", "## Reflections"]
        for n in notes:
            lines += ["", f"> {n}"]

    lines += [
        "",
        "---",
        "",
        "## Questions for Review",
        "",
        "1. What patterns show up in this week's scores?",
        "2. Which areas need the most attention?",
        "3. What should change next week?",
        "4. Are the KPIs on track for the year?",
        "",
    ]
    return "\n".join(lines)


def daily_export(
    summary: DaySummary,
    habits_with_logs: list[tuple[HabitDefinition, HabitCompletionRecord | None]],
    cleaning_with_status: list[tuple[CleaningTaskDefinition, bool]],
    current_book: Book | None = None,
) -> str:
    lines = [
        f"# Daily Summary - {_fmt_day(summary.day)}",
        "",
        f"## Score: {summary.score:.0f}%",
        "",
        "---",
        "",
        f"## Habits ({summary.habits_completed}/{summary.habits_total})",
        "",
    ]
    for habit, log in habits_with_logs:
        line = f"{'✓' if log and log.completed else '○'} {habit.title}"
        if log and log.numeric_value is not None and habit.unit:
            line += f" - {_fmt_num(log.numeric_value)}{habit.unit}"
        if log and log.duration_minutes is not None:
            line += f" - {log.duration_minutes} min"
        lines.append(line)

    lines += ["", f"## Cleaning ({summary.cleaning_completed}/{summary.cleaning_total})", ""]
    for task, done in cleaning_with_status:
        lines.append(f"{'✓' if done else '○'} {task.title}")

    lines += [
        "",
        f"## Water: {int(summary.water_ounces)}/{int(summary.water_target)}oz "
        f"({summary.water_completion_rate * 100:.0f}%)",
        "",
        "## Reading",
        f"- Pages Read: {summary.pages_read}",
    ]
    if current_book:
        lines.append(f"- Currently Reading: {current_book.title} ({current_book.progress_percentage}%)")

    if summary.reflection_note:
        lines += ["", "## Reflection", summary.reflection_note]
    return "\n".join(lines)
