"""Book and Rental records.

Both models are frozen. Repositories hand these out directly: a caller
holding a record cannot change what the repository stores, and every
change produces a new record (``model_copy(update=...)``) that the
repository publishes in one step.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Any

from pydantic import BaseModel

LOAN_PERIOD = timedelta(days=14)

_SECONDS_PER_DAY = 86400


class Book(BaseModel):
    """A catalog entry. ``isbn`` is the identity and never changes."""

    model_config = {"frozen": True}

    isbn: str
    title: str
    author: str
    published_at: datetime

    def with_changes(self, *, title: str | None = None, author: str | None = None) -> Book:
        """Return a copy with the supplied fields replaced."""
        changes: dict[str, Any] = {}
        if title:
            changes["title"] = title
        if author:
            changes["author"] = author
        return self.model_copy(update=changes)


class Rental(BaseModel):
    """One borrowing episode. Active while ``returned_at`` is None."""

    model_config = {"frozen": True}

    book_id: str
    user_id: str
    borrowed_at: datetime
    return_deadline: datetime
    returned_at: datetime | None = None

    @classmethod
    def open(cls, book_id: str, user_id: str, now: datetime) -> Rental:
        """Start a rental at *now* with the fixed loan period."""
        return cls(
            book_id=book_id,
            user_id=user_id,
            borrowed_at=now,
            return_deadline=now + LOAN_PERIOD,
        )

    @property
    def is_active(self) -> bool:
        return self.returned_at is None

    def mark_returned(self, now: datetime) -> Rental:
        """Return the terminal copy of this rental.

        Raises:
            ValueError: If the rental was already returned.
        """
        if not self.is_active:
            msg = f"Rental of {self.book_id} by {self.user_id} is already returned"
            raise ValueError(msg)
        return self.model_copy(update={"returned_at": now})

    def is_overdue(self, now: datetime) -> bool:
        return self.is_active and now > self.return_deadline

    def days_until_due(self, now: datetime) -> int:
        """Whole days left before the deadline; negative when overdue, 0 once returned."""
        if not self.is_active:
            return 0
        remaining = (self.return_deadline - now).total_seconds()
        return math.floor(remaining / _SECONDS_PER_DAY)
