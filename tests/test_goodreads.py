"""Tests for dayscore/goodreads.py."""

from datetime import datetime

import pytest

from dayscore.goodreads import GoodreadsError, connect, disconnect, sync
from dayscore.store import load_goodreads
from dayscore.workspace import goodreads_path


def test_connect_and_sync(workspace):
    connect("user-1", "token", workspace)
    assert load_goodreads(workspace).is_connected is True

    account = sync(workspace, now=datetime(2026, 1, 5, 9, 0))
    assert account.last_sync == datetime(2026, 1, 5, 9, 0)
    assert load_goodreads(workspace).last_sync == datetime(2026, 1, 5, 9, 0)


def test_connect_requires_credentials(workspace):
    with pytest.raises(GoodreadsError):
        connect("", "token", workspace)


def test_sync_without_account(workspace):
    with pytest.raises(GoodreadsError):
        sync(workspace)


def test_disconnect_removes_file(workspace):
    connect("user-1", "token", workspace)
    disconnect(workspace)
    assert not goodreads_path(workspace).exists()
    assert load_goodreads(workspace).is_connected is False
    disconnect(workspace)
