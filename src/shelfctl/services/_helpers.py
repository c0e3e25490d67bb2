"""Shared service-layer helper functions."""

from __future__ import annotations

from datetime import UTC, datetime

from shelfctl.domain.errors import ValidationError


def utc_now() -> datetime:
    """Current UTC time, timezone-aware. The default service clock."""
    return datetime.now(UTC)


def require_text(**fields: str | None) -> list[str]:
    """Names of *fields* that are None, empty, or whitespace-only.

    Examples:
        >>> require_text(title="Dune", author="  ")
        ['author']
        >>> require_text(isbn="")
        ['isbn']
    """
    return [name for name, value in fields.items() if value is None or not value.strip()]


def ensure_present(**fields: str | None) -> None:
    """Raise ValidationError naming every empty field in *fields*."""
    missing = require_text(**fields)
    if missing:
        raise ValidationError(f"{', '.join(missing)} must not be empty", fields=missing)
