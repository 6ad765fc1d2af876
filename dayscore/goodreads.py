"""Goodreads account link.

Only the account bookkeeping exists; no requests are made to Goodreads.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from dayscore.models import GoodreadsAccount
from dayscore.store import load_goodreads, save_goodreads

logger = logging.getLogger(__name__)


class GoodreadsError(ValueError):
    pass


def connect(user_id: str, access_token: str, root: Path | None = None) -> GoodreadsAccount:
    if not user_id or not access_token:
        raise GoodreadsError("user_id and access_token are required")
    account = GoodreadsAccount(user_id=user_id, access_token=access_token)
    save_goodreads(account, root)
    logger.info("Linked Goodreads user %s", user_id)
    return account


def disconnect(root: Path | None = None) -> None:
    save_goodreads(None, root)
    logger.info("Unlinked Goodreads account")


def sync(root: Path | None = None, now: datetime | None = None) -> GoodreadsAccount:
    """Stamp the last sync time. Raises GoodreadsError when no account is linked."""
    account = load_goodreads(root)
    if not account.is_connected:
        raise GoodreadsError("Goodreads account is not connected")
    account.last_sync = now or datetime.now()
    save_goodreads(account, root)
    return account
