"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from shelfctl.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from shelfctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    # For list results, return ISBNs only
    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(_extract_isbn(item) for item in items if _extract_isbn(item))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _extract_isbn(item: Any) -> str:
    if isinstance(item, dict):
        for key in ("isbn", "book_id"):
            val = item.get(key)
            if val is not None:
                return str(val)
    return ""


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK/ERROR status line."""
    console.print(Text.assemble(("OK", "shelf.ok"), (f"  {result.op}", "shelf.op")))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="shelf.key")
    if key in ("isbn", "book_id"):
        v = Text(str(value), style="shelf.isbn")
    elif key in ("user_id", "current_borrower"):
        v = Text(str(value), style="shelf.user")
    elif key == "title":
        v = Text(str(value), style="shelf.title")
    elif key == "status":
        v = Text(str(value), style=style_for_status(str(value)))
    else:
        v = Text(str(value))
    console.print(Text.assemble(k, v))


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(f"    {k}: {v}")


def _book_table(items: list[dict[str, Any]], *, verbose: bool = False) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ISBN", style="shelf.isbn", no_wrap=True)
    table.add_column("Title", style="shelf.title")
    table.add_column("Author")
    if verbose:
        table.add_column("Published", style="dim")

    for item in items:
        row = [str(item.get("isbn", "")), str(item.get("title", "")), str(item.get("author", ""))]
        if verbose:
            row.append(str(item.get("published_at", "")))
        table.add_row(*row)
    return table


def _rental_table(items: list[dict[str, Any]], *, verbose: bool = False) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ISBN", style="shelf.isbn", no_wrap=True)
    table.add_column("User", style="shelf.user")
    table.add_column("Status")
    table.add_column("Due", no_wrap=True)
    table.add_column("Days Left", justify="right")
    if verbose:
        table.add_column("Borrowed", style="dim")
        table.add_column("Returned", style="dim")

    for item in items:
        status = str(item.get("status", ""))
        row: list[str | Text] = [
            str(item.get("book_id", "")),
            str(item.get("user_id", "")),
            Text(status, style=style_for_status(status)),
            str(item.get("return_deadline", "")),
            "" if status == "returned" else str(item.get("days_until_due", "")),
        ]
        if verbose:
            row.append(str(item.get("borrowed_at", "")))
            row.append(str(item.get("returned_at") or ""))
        table.add_row(*row)
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text.assemble(("ERROR", "shelf.error"), (f"  {result.op}", "shelf.op"), f" — {msg}")
    )

    if verbose and err:
        console.print(Text(f"  code: {err.code}", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Catalog renderers ─────────────────────────────────────────────────


def _render_book_mutation(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Render add/update/delete results."""
    _status_line(console, result)
    for key in ("isbn", "title", "author"):
        if key in result.data:
            _field(console, key, result.data[key])
    if "fields_changed" in result.data:
        _field(console, "fields_changed", ", ".join(result.data["fields_changed"]))
    if verbose and "published_at" in result.data:
        _field(console, "published_at", result.data["published_at"])


def _render_book(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render get_book and availability results as a panel."""
    d = result.data
    lines = [
        f"author: {escape(str(d.get('author', '')))}",
        f"published: {d.get('published_at', '')}",
    ]
    if "is_available" in d:
        if d["is_available"]:
            lines.append("[shelf.status.active]available[/shelf.status.active]")
        else:
            style = "shelf.status.overdue" if d.get("is_overdue") else "shelf.status.active"
            borrower = escape(str(d.get("current_borrower", "?")))
            lines.append(f"[{style}]on loan[/{style}] to {borrower}")
            lines.append(f"due: {d.get('due_date', '')} ({d.get('days_until_due', 0)} days)")

    title = f"{d.get('isbn', '?')} — {escape(str(d.get('title', 'Untitled')))}"
    console.print(Panel("\n".join(lines), title=title, border_style="dim", expand=False))


def _render_book_table(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    console.print(_book_table(items, verbose=verbose))
    console.print(f"\n{result.data.get('count', len(items))} books")


# ── Lending renderers ─────────────────────────────────────────────────


def _render_rental(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render borrow/return results."""
    _status_line(console, result)
    d = result.data
    for key in ("book_id", "user_id", "status", "return_deadline"):
        if key in d:
            _field(console, key, d[key])
    if d.get("returned_at"):
        _field(console, "returned_at", d["returned_at"])
    elif d.get("due_soon"):
        console.print(Text(f"  due in {d.get('days_until_due', 0)} days", style="shelf.warning"))
    if verbose:
        _field(console, "borrowed_at", d.get("borrowed_at", ""))


def _render_rental_table(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    items = result.data.get("items", [])
    console.print(_rental_table(items, verbose=verbose))
    console.print(f"\n{result.data.get('count', len(items))} rentals")
    if verbose:
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    # Catalog
    "add_book": _render_book_mutation,
    "update_book": _render_book_mutation,
    "delete_book": _render_book_mutation,
    "get_book": _render_book,
    "list_books": _render_book_table,
    # Lending
    "borrow_book": _render_rental,
    "return_book": _render_rental,
    "availability": _render_book,
    "user_rentals": _render_rental_table,
    "active_rentals": _render_rental_table,
    "book_history": _render_rental_table,
    "overdue_rentals": _render_rental_table,
}
