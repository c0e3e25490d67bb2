"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy Library initialization, the command
dispatcher, and centralized result emission (stdout/stderr routing +
exit codes).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import click

from shelfctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from shelfctl.config.settings import ShelfSettings
    from shelfctl.infrastructure.library import Library
    from shelfctl.services.dispatcher import CommandDispatcher
    from shelfctl.services.result import ServiceResult

logger = logging.getLogger(__name__)


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  The library is lazily
    initialized on first use so ``--help`` and ``--version`` never
    trigger database access.
    """

    def __init__(self, settings: ShelfSettings) -> None:
        self.settings = settings
        self._library: Library | None = None
        self._dispatcher: CommandDispatcher | None = None

        from shelfctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def library(self) -> Library:
        """The library instance (created lazily on first access)."""
        if self._library is None:
            from shelfctl.infrastructure.library import Library

            self._library = Library.from_settings(self.settings)
        return self._library

    @property
    def dispatcher(self) -> CommandDispatcher:
        """Dispatcher with every command handler bound to :attr:`library`."""
        if self._dispatcher is None:
            from shelfctl.services.dispatcher import build_dispatcher

            self._dispatcher = build_dispatcher(self.library)
        return self._dispatcher

    def close(self) -> None:
        if self._library is not None:
            self._library.close()
            self._library = None
            self._dispatcher = None

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            if result.error is not None:
                logger.debug("%s failed with %s", result.op, result.error.code)
            click.echo(output, err=True)
            raise SystemExit(1)
