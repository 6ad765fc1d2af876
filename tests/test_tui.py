"""Tests for cli/dayscore_tui.py — store updates made from worker threads."""

import threading
import time
from datetime import date
from unittest.mock import patch

from cli import dayscore_tui
from dayscore.habits import log_for
from dayscore.store import load_cleaning_logs, load_habit_logs, load_water_logs
from dayscore.water import total_for

MONDAY = date(2026, 1, 5)


def _slow_load():
    logs = load_habit_logs()
    time.sleep(0.05)
    return logs


def test_concurrent_habit_toggles_are_both_kept(workspace):
    with patch("cli.dayscore_tui.load_habit_logs", side_effect=_slow_load):
        workers = [
            threading.Thread(target=dayscore_tui.set_habit_done, args=("gym-mwf", MONDAY, True)),
            threading.Thread(target=dayscore_tui.set_habit_done, args=("mobility", MONDAY, True)),
        ]
        for w in workers:
            w.start()
        for w in workers:
            w.join()

    logs = load_habit_logs(workspace)
    assert log_for(logs, "gym-mwf", MONDAY).completed is True
    assert log_for(logs, "mobility", MONDAY).completed is True


def test_set_habit_done_is_idempotent(workspace):
    assert dayscore_tui.set_habit_done("workout", MONDAY, True) is False
    assert dayscore_tui.set_habit_done("workout", MONDAY, False) is True
    assert log_for(load_habit_logs(workspace), "workout", MONDAY).completed is False


def test_set_task_done_and_undo(workspace):
    assert dayscore_tui.set_task_done("floors", MONDAY, True) is True
    assert any(r.task_id == "floors" for r in load_cleaning_logs(workspace))
    assert dayscore_tui.set_task_done("floors", MONDAY, False) is True
    assert not any(r.task_id == "floors" for r in load_cleaning_logs(workspace))


def test_change_water(workspace):
    assert dayscore_tui.change_water(MONDAY, 8) is True
    assert total_for(load_water_logs(workspace), MONDAY) == 72
    assert dayscore_tui.change_water(MONDAY, None) is True
    assert total_for(load_water_logs(workspace), MONDAY) == 64
    assert dayscore_tui.change_water(date(2026, 2, 1), None) is False
