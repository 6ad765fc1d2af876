"""Book library and reading sessions for Dayscore."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from dayscore.models import BOOK_STATUSES, Book, ReadingSession
from dayscore.store import new_id

logger = logging.getLogger(__name__)


def validate_book(book: dict[str, Any]) -> list[str]:
    errors = []
    if not book.get("title"):
        errors.append("Missing required field: title")
    total = book.get("total_pages")
    if not isinstance(total, int) or total <= 0:
        errors.append("total_pages must be a positive integer")
    pages = book.get("pages_read", 0)
    if not isinstance(pages, int) or pages < 0:
        errors.append("pages_read must be a non-negative integer")
    if book.get("status", "want_to_read") not in BOOK_STATUSES:
        errors.append(f"Invalid status: {book.get('status')}")
    return errors


def find_book(books: list[Book] | tuple[Book, ...], book_id: str) -> Book | None:
    for b in books:
        if b.id == book_id:
            return b
    return None


def add_book(books: list[Book], data: dict[str, Any], today: date) -> tuple[Book, list[str]]:
    """Add a book from snake_case fields. Returns (book, errors)."""
    errors = validate_book(data)
    if errors:
        return Book(), errors
    book = Book(
        id=data.get("id") or new_id(),
        title=data["title"],
        author=data.get("author", ""),
        total_pages=data["total_pages"],
        pages_read=data.get("pages_read", 0),
        status=data.get("status", "want_to_read"),
    )
    if find_book(books, book.id):
        return Book(), [f"Book ID already exists: {book.id}"]
    if book.status == "currently_reading":
        book.started_on = today
    books.append(book)
    logger.info("Added book %s (%s)", book.id, book.title)
    return book, []


def update_book(books: list[Book], book_id: str, updates: dict[str, Any]) -> tuple[Book | None, list[str]]:
    book = find_book(books, book_id)
    if not book:
        return None, [f"Book not found: {book_id}"]
    merged = {
        "title": book.title,
        "author": book.author,
        "total_pages": book.total_pages,
        "pages_read": book.pages_read,
        "status": book.status,
    }
    merged.update(updates)
    errors = validate_book(merged)
    if errors:
        return None, errors
    book.title = merged["title"]
    book.author = merged["author"]
    book.total_pages = merged["total_pages"]
    book.pages_read = min(merged["pages_read"], book.total_pages)
    book.status = merged["status"]
    return book, []


def delete_book(books: list[Book], sessions: list[ReadingSession], book_id: str) -> bool:
    """Remove a book and every session logged against it."""
    book = find_book(books, book_id)
    if not book:
        return False
    books.remove(book)
    sessions[:] = [s for s in sessions if s.book_id != book_id]
    logger.info("Deleted book %s", book_id)
    return True


def start_reading(books: list[Book], book_id: str, today: date) -> bool:
    book = find_book(books, book_id)
    if not book:
        return False
    book.status = "currently_reading"
    book.started_on = today
    return True


def finish_reading(books: list[Book], book_id: str, today: date) -> bool:
    book = find_book(books, book_id)
    if not book:
        return False
    book.status = "finished"
    book.finished_on = today
    book.pages_read = book.total_pages
    return True


# ── Sessions ──────────────────────────────────────────────────


def log_session(
    books: list[Book],
    sessions: list[ReadingSession],
    book_id: str,
    pages_read: int,
    day: date,
    minutes: int | None = None,
    note: str | None = None,
) -> ReadingSession | None:
    """Record pages read on ``day`` and advance the book.

    A book that reaches its last page is marked finished on ``day``.
    """
    book = find_book(books, book_id)
    if not book:
        return None
    if pages_read <= 0:
        raise ValueError("pages_read must be positive")

    start_page = book.pages_read
    end_page = min(start_page + pages_read, book.total_pages)
    session = ReadingSession(
        id=new_id(),
        book_id=book_id,
        day=day,
        pages_read=pages_read,
        minutes=minutes,
        note=note,
        start_page=start_page,
        end_page=end_page,
    )
    sessions.append(session)

    book.pages_read = end_page
    if book.status == "want_to_read":
        book.status = "currently_reading"
    if book.started_on is None:
        book.started_on = day
    if book.is_complete:
        book.status = "finished"
        book.finished_on = day
        logger.info("Finished book %s", book_id)
    return session


def sessions_on(sessions, day: date) -> list[ReadingSession]:
    return [s for s in sessions if s.day == day]


def pages_read_on(sessions, day: date) -> int:
    return sum(max(s.pages_read, 0) for s in sessions_on(sessions, day))


def minutes_read_on(sessions, day: date) -> int:
    return sum(s.minutes or 0 for s in sessions_on(sessions, day))


def did_read_on(sessions, day: date) -> bool:
    return pages_read_on(sessions, day) > 0


def sessions_for_book(sessions, book_id: str) -> list[ReadingSession]:
    found = [s for s in sessions if s.book_id == book_id and s.day is not None]
    return sorted(found, key=lambda s: s.day, reverse=True)


def currently_reading(books) -> list[Book]:
    return [b for b in books if b.is_currently_reading]


def primary_book(books) -> Book | None:
    current = currently_reading(books)
    return current[0] if current else None
