from __future__ import annotations

import logging
import os
import secrets
from datetime import date
from typing import Any

from fastapi import Body, Depends, FastAPI, HTTPException, status
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from dayscore import cleaning, goals as goals_lib, goodreads, habits, reading, water
from dayscore.export import daily_export, weekly_review
from dayscore.models import parse_day
from dayscore.recurrence import display_text, recurrence_text, task_next_due
from dayscore.scoring import build_day_summary
from dayscore.store import (
    load_cleaning_logs,
    load_cleaning_tasks,
    load_goals,
    load_habit_logs,
    load_habits,
    load_profile,
    load_reading,
    load_snapshot,
    load_summaries,
    load_water_logs,
    save_cleaning_logs,
    save_cleaning_tasks,
    save_goals,
    save_habit_logs,
    save_habits,
    save_reading,
    save_water_logs,
)
from dayscore.summary import (
    collect_day_counts,
    find_summary,
    reflection_notes,
    summarize_day,
    week_summary,
)
from dayscore.workspace import now_local, today

logger = logging.getLogger(__name__)


def _escape(s: str) -> str:
    return (
        s.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def _day(value: Any) -> date:
    """Request date (ISO string) or today when absent."""
    if value in (None, ""):
        return today()
    d = parse_day(value)
    if d is None:
        raise HTTPException(status_code=400, detail=f"Invalid date: {value}")
    return d


def _opt_number(payload: dict[str, Any], key: str) -> float | None:
    value = payload.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise HTTPException(status_code=400, detail=f"{key} must be a number")
    return value


def _opt_minutes(payload: dict[str, Any], key: str) -> int | None:
    value = payload.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise HTTPException(status_code=400, detail=f"{key} must be a non-negative integer")
    return value


def _habit_done(logs, habit_id: str, day: date) -> bool:
    record = habits.log_for(logs, habit_id, day)
    return bool(record and record.completed)


def _refresh_summary(day: date) -> None:
    """Recompute the stored summary after a change; failures are logged only."""
    try:
        summarize_day(day)
    except Exception:
        logger.exception("Could not refresh summary for %s", day.isoformat())


# ── Auth ──────────────────────────────────────────────────────

app = FastAPI(title="Dayscore", version="0.1.0")

security = HTTPBasic(auto_error=False)


def get_current_user(credentials: HTTPBasicCredentials | None = Depends(security)) -> str:
    expected_username = os.environ.get("DAYSCORE_USERNAME", "")
    expected_password = os.environ.get("DAYSCORE_PASSWORD", "")

    if not expected_username or not expected_password:
        return "guest"

    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Basic"},
        )

    correct_username = secrets.compare_digest(credentials.username.encode("utf-8"), expected_username.encode("utf-8"))
    correct_password = secrets.compare_digest(credentials.password.encode("utf-8"), expected_password.encode("utf-8"))

    if not (correct_username and correct_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )

    return credentials.username


@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"ok": "true"}


# ── Today ─────────────────────────────────────────────────────


def _dashboard(day: date) -> dict[str, Any]:
    snapshot = load_snapshot()
    summary = build_day_summary(collect_day_counts(snapshot, day))
    limit = snapshot.profile.max_daily_cleaning_tasks
    log = water.log_for_day(snapshot.water_logs, day)
    book = reading.primary_book(snapshot.books)
    return {
        "date": day.isoformat(),
        "summary": summary.to_dict(),
        "habits": [
            {
                "id": h.id,
                "title": h.title,
                "category": h.category,
                "frequency": display_text(h.frequency),
                "done": _habit_done(snapshot.habit_logs, h.id, day),
            }
            for h in habits.habits_for(snapshot.habits, day)
        ],
        "cleaning": [
            {
                "id": t.id,
                "title": t.title,
                "done": done,
                "overdue": not done and cleaning.is_overdue(t, day),
            }
            for t, done in cleaning.day_checklist(snapshot.cleaning_tasks, snapshot.cleaning_logs, day, limit)
        ],
        "water": log.to_dict() if log else {
            "date": day.isoformat(),
            "entries": [],
            "targetOunces": snapshot.profile.daily_water_target,
        },
        "reading": {
            "pagesRead": reading.pages_read_on(snapshot.sessions, day),
            "currentBook": book.to_dict() if book else None,
        },
    }


@app.get("/", response_class=HTMLResponse)
def index(username: str = Depends(get_current_user)) -> HTMLResponse:
    data = _dashboard(today())
    s = data["summary"]

    def items(rows: list[dict[str, Any]]) -> str:
        if not rows:
            return "<li><em>(none)</em></li>"
        return "".join(
            f"<li>{'&#10003;' if r['done'] else '&#9675;'} {_escape(r['title'])}</li>" for r in rows
        )

    html = f"""<!doctype html>
<html>
<head><meta charset="utf-8"><title>Dayscore</title></head>
<body>
<h1>Dayscore &mdash; {_escape(data['date'])}</h1>
<p><strong>Score:</strong> {s['score']:.0f}%</p>
<h2>Habits ({s['habitsCompleted']}/{s['habitsTotal']})</h2>
<ul>{items(data['habits'])}</ul>
<h2>Cleaning ({s['cleaningCompleted']}/{s['cleaningTotal']})</h2>
<ul>{items(data['cleaning'])}</ul>
<h2>Water</h2>
<p>{int(s['waterOunces'])} / {int(s['waterTarget'])} oz</p>
<h2>Reading</h2>
<p>{s['pagesRead']} pages today</p>
</body>
</html>"""
    return HTMLResponse(html)


@app.get("/api/today")
def api_today(day: str | None = None, username: str = Depends(get_current_user)) -> dict[str, Any]:
    return _dashboard(_day(day))


@app.get("/api/profile")
def api_get_profile(username: str = Depends(get_current_user)) -> dict[str, Any]:
    return load_profile().to_dict()


# ── Habits ────────────────────────────────────────────────────


@app.get("/api/habits")
def api_list_habits(username: str = Depends(get_current_user)) -> dict[str, Any]:
    return {"habits": [h.to_dict() for h in load_habits()]}


@app.post("/api/habits")
def api_create_habit(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    all_habits = load_habits()
    habit, errors = habits.create_habit(all_habits, payload)
    if errors:
        raise HTTPException(status_code=400, detail="; ".join(errors))
    save_habits(all_habits)
    return {"ok": True, "habit": habit.to_dict()}


@app.put("/api/habits/{habit_id}")
def api_update_habit(habit_id: str, payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    all_habits = load_habits()
    if not habits.find_habit(all_habits, habit_id):
        raise HTTPException(status_code=404, detail=f"Habit not found: {habit_id}")
    updated, errors = habits.update_habit(all_habits, habit_id, payload)
    if errors:
        raise HTTPException(status_code=400, detail="; ".join(errors))
    save_habits(all_habits)
    return {"ok": True, "habit": updated.to_dict() if updated else None}


@app.delete("/api/habits/{habit_id}")
def api_delete_habit(habit_id: str, username: str = Depends(get_current_user)) -> dict[str, Any]:
    """Delete a custom habit; core habits are archived instead."""
    all_habits = load_habits()
    habit = habits.find_habit(all_habits, habit_id)
    if not habit:
        raise HTTPException(status_code=404, detail=f"Habit not found: {habit_id}")
    if habit.is_core:
        habits.set_habit_active(all_habits, habit_id, False)
        archived = True
    else:
        habits.delete_habit(all_habits, habit_id)
        archived = False
    save_habits(all_habits)
    return {"ok": True, "habit_id": habit_id, "archived": archived}


@app.post("/api/habits/{habit_id}/toggle")
def api_toggle_habit(habit_id: str, payload: dict[str, Any] = Body(default={}), username: str = Depends(get_current_user)) -> dict[str, Any]:
    day = _day(payload.get("date"))
    if not habits.find_habit(load_habits(), habit_id):
        raise HTTPException(status_code=404, detail=f"Habit not found: {habit_id}")
    logs = load_habit_logs()
    record = habits.toggle_completion(logs, habit_id, day)
    save_habit_logs(logs)
    _refresh_summary(day)
    return {"ok": True, "log": record.to_dict()}


@app.post("/api/habits/{habit_id}/value")
def api_record_habit_value(habit_id: str, payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    day = _day(payload.get("date"))
    value = _opt_number(payload, "value")
    duration = _opt_minutes(payload, "duration_minutes")
    habit = habits.find_habit(load_habits(), habit_id)
    if not habit:
        raise HTTPException(status_code=404, detail=f"Habit not found: {habit_id}")
    logs = load_habit_logs()
    record = habits.record_value(
        logs,
        habit,
        day,
        value=value,
        duration_minutes=duration,
        note=payload.get("note"),
    )
    save_habit_logs(logs)
    _refresh_summary(day)
    return {"ok": True, "log": record.to_dict()}


@app.get("/api/habits/{habit_id}/stats")
def api_habit_stats(habit_id: str, username: str = Depends(get_current_user)) -> dict[str, Any]:
    habit = habits.find_habit(load_habits(), habit_id)
    if not habit:
        raise HTTPException(status_code=404, detail=f"Habit not found: {habit_id}")
    logs = load_habit_logs()
    day = today()
    week_start = load_profile().week_start
    return {
        "habit_id": habit_id,
        "streak": habits.streak(logs, habit_id, day),
        "this_week": habits.weekly_completion_count(logs, habit_id, day, week_start),
        "weekly_target_met": habits.weekly_target_met(habit, logs, day, week_start),
    }


# ── Cleaning ──────────────────────────────────────────────────


@app.get("/api/cleaning")
def api_list_cleaning(username: str = Depends(get_current_user)) -> dict[str, Any]:
    """Every task with its derived due date."""
    day = today()
    return {
        "tasks": [
            {
                **t.to_dict(),
                "recurrence_text": recurrence_text(t.recurrence),
                "next_due": task_next_due(t, day).isoformat(),
                "overdue": t.is_active and cleaning.is_overdue(t, day),
            }
            for t in load_cleaning_tasks()
        ]
    }


@app.post("/api/cleaning")
def api_create_cleaning(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    tasks = load_cleaning_tasks()
    task, errors = cleaning.create_cleaning_task(tasks, payload, today())
    if errors:
        raise HTTPException(status_code=400, detail="; ".join(errors))
    save_cleaning_tasks(tasks)
    return {"ok": True, "task": task.to_dict()}


@app.post("/api/cleaning/{task_id}/complete")
def api_complete_cleaning(task_id: str, payload: dict[str, Any] = Body(default={}), username: str = Depends(get_current_user)) -> dict[str, Any]:
    day = _day(payload.get("date"))
    duration = _opt_minutes(payload, "duration_minutes")
    tasks = load_cleaning_tasks()
    logs = load_cleaning_logs()
    record = cleaning.complete_task(
        tasks, logs, task_id, day,
        duration_minutes=duration,
        note=payload.get("note"),
    )
    if record is None:
        raise HTTPException(status_code=404, detail=f"Task not found: {task_id}")
    save_cleaning_tasks(tasks)
    save_cleaning_logs(logs)
    _refresh_summary(day)
    task = cleaning.find_cleaning_task(tasks, task_id)
    return {"ok": True, "log": record.to_dict(), "next_due": task_next_due(task, day).isoformat()}


@app.post("/api/cleaning/{task_id}/snooze")
def api_snooze_cleaning(task_id: str, payload: dict[str, Any] = Body(default={}), username: str = Depends(get_current_user)) -> dict[str, Any]:
    tasks = load_cleaning_tasks()
    if payload.get("until"):
        ok = cleaning.snooze_task(tasks, task_id, _day(payload["until"]))
    else:
        ok = cleaning.snooze_for_one_day(tasks, task_id, today())
    if not ok:
        raise HTTPException(status_code=404, detail=f"Task not found: {task_id}")
    save_cleaning_tasks(tasks)
    return {"ok": True, "task": cleaning.find_cleaning_task(tasks, task_id).to_dict()}


# ── Water ─────────────────────────────────────────────────────


@app.post("/api/water")
def api_add_water(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    day = _day(payload.get("date"))
    ounces = payload.get("ounces")
    if not isinstance(ounces, (int, float)) or ounces <= 0:
        raise HTTPException(status_code=400, detail="ounces must be a positive number")
    logs = load_water_logs()
    log = water.add_water(logs, day, ounces, target=load_profile().daily_water_target, at=now_local())
    save_water_logs(logs)
    _refresh_summary(day)
    return {"ok": True, "water": log.to_dict(), "total": log.total_ounces}


@app.delete("/api/water/last")
def api_undo_water(day: str | None = None, username: str = Depends(get_current_user)) -> dict[str, Any]:
    d = _day(day)
    logs = load_water_logs()
    if water.remove_last_entry(logs, d) is None:
        raise HTTPException(status_code=404, detail="No water logged for that day")
    save_water_logs(logs)
    _refresh_summary(d)
    return {"ok": True, "total": water.total_for(logs, d)}


@app.get("/api/water/week")
def api_water_week(username: str = Depends(get_current_user)) -> dict[str, Any]:
    logs = load_water_logs()
    day = today()
    return {
        "days": [{"date": d.isoformat(), "ounces": oz} for d, oz in water.weekly_data(logs, day)],
        "average": water.weekly_average(logs, day),
    }


# ── Reading ───────────────────────────────────────────────────


@app.get("/api/books")
def api_list_books(username: str = Depends(get_current_user)) -> dict[str, Any]:
    books, _ = load_reading()
    return {"books": [b.to_dict() for b in books]}


@app.post("/api/books")
def api_add_book(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    books, sessions = load_reading()
    book, errors = reading.add_book(books, payload, today())
    if errors:
        raise HTTPException(status_code=400, detail="; ".join(errors))
    save_reading(books, sessions)
    return {"ok": True, "book": book.to_dict()}


@app.delete("/api/books/{book_id}")
def api_delete_book(book_id: str, username: str = Depends(get_current_user)) -> dict[str, Any]:
    books, sessions = load_reading()
    if not reading.delete_book(books, sessions, book_id):
        raise HTTPException(status_code=404, detail=f"Book not found: {book_id}")
    save_reading(books, sessions)
    return {"ok": True, "book_id": book_id}


@app.post("/api/books/{book_id}/sessions")
def api_log_reading(book_id: str, payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    day = _day(payload.get("date"))
    pages = payload.get("pages_read")
    if not isinstance(pages, int) or pages <= 0:
        raise HTTPException(status_code=400, detail="pages_read must be a positive integer")
    minutes = _opt_minutes(payload, "minutes")
    books, sessions = load_reading()
    session = reading.log_session(
        books, sessions, book_id, pages, day,
        minutes=minutes,
        note=payload.get("note"),
    )
    if session is None:
        raise HTTPException(status_code=404, detail=f"Book not found: {book_id}")
    save_reading(books, sessions)
    _refresh_summary(day)
    return {"ok": True, "session": session.to_dict(), "book": reading.find_book(books, book_id).to_dict()}


# ── Goals ─────────────────────────────────────────────────────


@app.get("/api/goals")
def api_list_goals(username: str = Depends(get_current_user)) -> dict[str, Any]:
    goals = load_goals()
    return {
        "goals": [g.to_dict() for g in goals_lib.high_level_goals(goals)],
        "kpis": [{**k.to_dict(), "progress": k.progress} for k in goals_lib.kpis(goals)],
    }


@app.put("/api/goals/{goal_id}")
def api_update_kpi(goal_id: str, payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    value = payload.get("current_value")
    if not isinstance(value, (int, float)):
        raise HTTPException(status_code=400, detail="current_value must be a number")
    goals = load_goals()
    goal = goals_lib.update_kpi_value(goals, goal_id, value)
    if goal is None:
        raise HTTPException(status_code=404, detail=f"KPI not found: {goal_id}")
    save_goals(goals)
    return {"ok": True, "goal": goal.to_dict(), "progress": goal.progress}


# ── Summaries & export ────────────────────────────────────────


@app.get("/api/summary/{day}")
def api_get_summary(day: str, username: str = Depends(get_current_user)) -> dict[str, Any]:
    d = _day(day)
    summary = find_summary(load_summaries(), d)
    if summary is None:
        raise HTTPException(status_code=404, detail=f"No summary for {d.isoformat()}")
    return summary.to_dict()


@app.post("/api/summary/{day}")
def api_summarize(day: str, payload: dict[str, Any] = Body(default={}), username: str = Depends(get_current_user)) -> dict[str, Any]:
    """Recompute and store the summary for a day, optionally with a reflection."""
    return summarize_day(_day(day), reflection=payload.get("reflection")).to_dict()


@app.get("/api/week")
def api_week(day: str | None = None, username: str = Depends(get_current_user)) -> dict[str, Any]:
    return week_summary(_day(day)).to_dict()


@app.get("/api/export/weekly", response_class=PlainTextResponse)
def api_export_weekly(day: str | None = None, username: str = Depends(get_current_user)) -> PlainTextResponse:
    week = week_summary(_day(day))
    books, _ = load_reading()
    notes = [note for _, note in reflection_notes(week.days)]
    return PlainTextResponse(weekly_review(load_goals(), week, reading.currently_reading(books), notes))


@app.get("/api/export/daily", response_class=PlainTextResponse)
def api_export_daily(day: str | None = None, username: str = Depends(get_current_user)) -> PlainTextResponse:
    d = _day(day)
    snapshot = load_snapshot()
    stored = find_summary(load_summaries(), d)
    summary = build_day_summary(collect_day_counts(snapshot, d))
    if stored is not None:
        summary.reflection_note = stored.reflection_note
    habit_rows = [(h, habits.log_for(snapshot.habit_logs, h.id, d)) for h in habits.habits_for(snapshot.habits, d)]
    checklist = cleaning.day_checklist(
        snapshot.cleaning_tasks, snapshot.cleaning_logs, d, snapshot.profile.max_daily_cleaning_tasks
    )
    return PlainTextResponse(daily_export(summary, habit_rows, checklist, reading.primary_book(snapshot.books)))


# ── Goodreads ─────────────────────────────────────────────────


@app.post("/api/goodreads/connect")
def api_goodreads_connect(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    try:
        account = goodreads.connect(str(payload.get("user_id", "")), str(payload.get("access_token", "")))
    except goodreads.GoodreadsError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"ok": True, "user_id": account.user_id}


@app.delete("/api/goodreads")
def api_goodreads_disconnect(username: str = Depends(get_current_user)) -> dict[str, Any]:
    goodreads.disconnect()
    return {"ok": True}


@app.post("/api/goodreads/sync")
def api_goodreads_sync(username: str = Depends(get_current_user)) -> dict[str, Any]:
    try:
        account = goodreads.sync(now=now_local())
    except goodreads.GoodreadsError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"ok": True, "last_sync": account.last_sync.isoformat(timespec="seconds")}
