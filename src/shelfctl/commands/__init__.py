"""Subcommand modules for shelfctl.

Provides register_commands() which uses deferred imports to keep
``shelfctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the ``book`` and ``loan`` command groups on the root CLI group."""
    from shelfctl.commands.book import book
    from shelfctl.commands.loan import loan

    cli.add_command(book)
    cli.add_command(loan)
