"""Rich Console factory and theme for shelfctl output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

SHELF_THEME = Theme(
    {
        "shelf.ok": "bold green",
        "shelf.error": "bold red",
        "shelf.warning": "bold yellow",
        "shelf.op": "bold cyan",
        "shelf.key": "dim",
        "shelf.isbn": "bold blue",
        "shelf.user": "magenta",
        "shelf.title": "bold",
        "shelf.status.active": "green",
        "shelf.status.overdue": "bold red",
        "shelf.status.returned": "dim",
    }
)

_STATUS_STYLES: dict[str, str] = {
    "active": "shelf.status.active",
    "overdue": "shelf.status.overdue",
    "returned": "shelf.status.returned",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=SHELF_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    """Return the Rich style name for a rental status."""
    return _STATUS_STYLES.get(status, "")
