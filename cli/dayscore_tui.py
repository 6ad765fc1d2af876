#!/usr/bin/env python3
"""Dayscore TUI: today's habits, cleaning, water and score, powered by Textual."""

from __future__ import annotations

import logging
import sys
import threading
from datetime import date

from textual import on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.reactive import reactive
from textual.widgets import Checkbox, DataTable, Footer, Header, Label, Static

from dayscore import cleaning, habits, reading, water
from dayscore.models import WATER_QUICK_ADD
from dayscore.recurrence import WEEKDAY_NAMES, display_text, weekday_number
from dayscore.store import (
    load_cleaning_logs,
    load_cleaning_tasks,
    load_habit_logs,
    load_habits,
    load_profile,
    load_reading,
    load_water_logs,
    save_cleaning_logs,
    save_cleaning_tasks,
    save_habit_logs,
    save_water_logs,
)
from dayscore.summary import summarize_day, week_summary
from dayscore.workspace import today, workspace_root

logger = logging.getLogger(__name__)

# Held across every load-change-save of a log file from a worker thread.
_store_lock = threading.Lock()


# ── Store updates ──────────────────────────────────────────────


def set_habit_done(habit_id: str, day: date, done: bool) -> bool:
    """Mark a habit done or not done on ``day``. Returns True when saved."""
    with _store_lock:
        logs = load_habit_logs()
        record = habits.log_for(logs, habit_id, day)
        if bool(record and record.completed) == done:
            return False
        habits.toggle_completion(logs, habit_id, day)
        save_habit_logs(logs)
        return True


def set_task_done(task_id: str, day: date, done: bool) -> bool:
    with _store_lock:
        tasks = load_cleaning_tasks()
        logs = load_cleaning_logs()
        if done:
            changed = cleaning.complete_task(tasks, logs, task_id, day) is not None
        else:
            changed = cleaning.uncomplete_task(tasks, logs, task_id, day)
        if changed:
            save_cleaning_tasks(tasks)
            save_cleaning_logs(logs)
        return changed


def change_water(day: date, ounces: int | None) -> bool:
    """Add ``ounces`` to the day's log, or undo the last entry when None."""
    with _store_lock:
        logs = load_water_logs()
        if ounces is None:
            if water.remove_last_entry(logs, day) is None:
                return False
        else:
            water.add_water(logs, day, ounces, target=load_profile().daily_water_target)
        save_water_logs(logs)
        return True


CSS = """
Screen {
    background: $surface;
}

#main-layout {
    height: 1fr;
}

#left-pane {
    width: 1fr;
    min-width: 30;
    border-right: tall $primary-background-darken-2;
    padding: 0 1;
}

#right-pane {
    width: 1fr;
    min-width: 30;
    padding: 0 1;
}

.section-title {
    text-style: bold;
    color: $text;
    margin: 1 0 0 0;
    padding: 0 1;
}

.item-done {
    color: $text-muted;
}

#water-info, #reading-info {
    padding: 0 1;
}

#week-table {
    height: 1fr;
}
"""


# ── Screens ────────────────────────────────────────────────────


class WeekScreen(Vertical):
    """Week view: one row per summarized day."""

    def compose(self) -> ComposeResult:
        yield Label("This week", classes="section-title")
        yield Static(id="week-info")
        yield DataTable(id="week-table")

    def on_mount(self) -> None:
        week = week_summary(today())
        self.query_one("#week-info", Static).update(
            f"Average score: {week.average_score:.0f}%   "
            f"Habits: {week.habit_compliance_rate * 100:.0f}%   "
            f"Days read: {week.days_with_reading}/7"
        )
        table: DataTable = self.query_one("#week-table", DataTable)
        table.add_columns("Date", "Day", "Score", "Habits", "Cleaning", "Water", "Pages")
        for d in week.days:
            table.add_row(
                d.day.isoformat() if d.day else "?",
                WEEKDAY_NAMES[weekday_number(d.day) - 1] if d.day else "?",
                f"{d.score:.0f}%",
                f"{d.habits_completed}/{d.habits_total}",
                f"{d.cleaning_completed}/{d.cleaning_total}",
                f"{int(d.water_ounces)}oz",
                str(d.pages_read),
            )


# ── Main app ───────────────────────────────────────────────────


class DayscoreApp(App):
    """Dayscore: today's checklist and score."""

    TITLE = "Dayscore"
    CSS = CSS
    AUTO_FOCUS = None

    BINDINGS = [
        Binding("1", "add_water(0)", f"+{WATER_QUICK_ADD[0]}oz"),
        Binding("2", "add_water(1)", f"+{WATER_QUICK_ADD[1]}oz"),
        Binding("3", "add_water(2)", f"+{WATER_QUICK_ADD[2]}oz"),
        Binding("4", "add_water(3)", f"+{WATER_QUICK_ADD[3]}oz"),
        Binding("5", "add_water(4)", f"+{WATER_QUICK_ADD[4]}oz"),
        Binding("u", "undo_water", "Undo water"),
        Binding("w", "show_week", "Week"),
        Binding("g", "refresh", "Refresh"),
        Binding("q", "quit", "Quit"),
    ]

    current_view: reactive[str] = reactive("today")

    def compose(self) -> ComposeResult:
        yield Header()
        yield Horizontal(
            VerticalScroll(
                Label("Habits", classes="section-title"),
                Vertical(id="habit-list"),
                id="left-pane",
                can_focus=False,
            ),
            Vertical(
                Label("Cleaning", classes="section-title"),
                Vertical(id="cleaning-list"),
                Label("Water", classes="section-title"),
                Static(id="water-info"),
                Label("Reading", classes="section-title"),
                Static(id="reading-info"),
                id="right-pane",
            ),
            id="main-layout",
        )
        yield Footer()

    def on_mount(self) -> None:
        self._load_data()

    def _load_data(self) -> None:
        """Reload every collection for today and rebuild the panes."""
        day = today()
        profile = load_profile()

        habit_list = self.query_one("#habit-list", Vertical)
        habit_list.remove_children()
        all_habits = load_habits()
        logs = load_habit_logs()
        for h in habits.habits_for(all_habits, day):
            record = habits.log_for(logs, h.id, day)
            done = bool(record and record.completed)
            label = h.title if h.frequency.kind == "daily" else f"{h.title} ({display_text(h.frequency)})"
            cb = Checkbox(label, value=done, name=f"habit-{h.id}")
            if done:
                cb.add_class("item-done")
            habit_list.mount(cb)

        cleaning_list = self.query_one("#cleaning-list", Vertical)
        cleaning_list.remove_children()
        tasks = load_cleaning_tasks()
        cleaning_logs = load_cleaning_logs()
        checklist = cleaning.day_checklist(tasks, cleaning_logs, day, profile.max_daily_cleaning_tasks)
        for t, done in checklist:
            label = t.title
            if not done and cleaning.is_overdue(t, day):
                label += " (overdue)"
            cleaning_list.mount(Checkbox(label, value=done, name=f"task-{t.id}"))
        if not checklist:
            cleaning_list.mount(Static("Nothing due today."))

        log = water.log_for_day(load_water_logs(), day)
        total = log.total_ounces if log else 0.0
        target = log.target_ounces if log else profile.daily_water_target
        self.query_one("#water-info", Static).update(f"{int(total)} / {int(target)} oz")

        books, sessions = load_reading()
        book = reading.primary_book(books)
        pages = reading.pages_read_on(sessions, day)
        reading_line = f"Pages today: {pages}"
        if book:
            reading_line += f"\n{book.title}: {book.progress_percentage}%"
        self.query_one("#reading-info", Static).update(reading_line)

        self._recompute_score()

    @work(thread=True)
    def _recompute_score(self) -> None:
        try:
            summary = summarize_day(today())
        except Exception:
            logger.exception("Could not summarize today")
            return
        self.call_from_thread(self._show_score, summary.score)

    def _show_score(self, score: float) -> None:
        self.sub_title = f"{today().isoformat()}  Score {score:.0f}%"

    # ── Toggles ────────────────────────────────────────────────

    @on(Checkbox.Changed)
    def _on_checkbox_toggle(self, event: Checkbox.Changed) -> None:
        widget_name = event.checkbox.name or ""
        if event.value:
            event.checkbox.add_class("item-done")
        else:
            event.checkbox.remove_class("item-done")
        if widget_name.startswith("habit-"):
            self._save_habit(widget_name.removeprefix("habit-"), event.value)
        elif widget_name.startswith("task-"):
            self._save_cleaning(widget_name.removeprefix("task-"), event.value)

    @work(thread=True, exclusive=False, group="store")
    def _save_habit(self, habit_id: str, done: bool) -> None:
        set_habit_done(habit_id, today(), done)
        self.call_from_thread(self._recompute_score)

    @work(thread=True, exclusive=False, group="store")
    def _save_cleaning(self, task_id: str, done: bool) -> None:
        set_task_done(task_id, today(), done)
        self.call_from_thread(self._recompute_score)

    # ── Water ──────────────────────────────────────────────────

    def action_add_water(self, index: int) -> None:
        self._change_water(WATER_QUICK_ADD[index])

    def action_undo_water(self) -> None:
        self._change_water(None)

    @work(thread=True, exclusive=False, group="store")
    def _change_water(self, ounces: int | None) -> None:
        if not change_water(today(), ounces):
            self.call_from_thread(self.notify, "No water logged today", severity="warning")
            return
        self.call_from_thread(self._load_data)

    # ── Views ──────────────────────────────────────────────────

    def action_refresh(self) -> None:
        self._load_data()

    def action_show_week(self) -> None:
        main = self.query_one("#main-layout", Horizontal)
        for old in self.query(".overlay-screen"):
            old.remove()
        showing_week = self.current_view == "week"
        self.query_one("#left-pane").display = showing_week
        self.query_one("#right-pane").display = showing_week
        if showing_week:
            self.current_view = "today"
            self._load_data()
        else:
            main.mount(WeekScreen(classes="overlay-screen"))
            self.current_view = "week"


# ── Entry point ────────────────────────────────────────────────


def main() -> None:
    root = workspace_root()
    if not root.exists():
        print(f"Workspace not found: {root}")
        print("Set DAYSCORE_ROOT or create the directory first.")
        sys.exit(1)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        filename=str(root / "dayscore.log"),
    )

    app = DayscoreApp()
    app.run()


if __name__ == "__main__":
    main()
