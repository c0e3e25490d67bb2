"""CommandDispatcher — route a command to its handler by ``kind``.

Routing is keyed on the closed :class:`CommandKind` enum, never on a
type's runtime name. A command arrives either as one of the models in
:mod:`shelfctl.domain.commands` or as a plain mapping (decoded JSON, CLI
input) carrying a ``kind`` tag; mappings are validated against the model
registered for their kind before the handler sees them.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

import pydantic
import structlog

from shelfctl.domain.commands import (
    COMMAND_MODELS,
    AddBook,
    BorrowBook,
    DeleteBook,
    ReturnBook,
    UpdateBook,
)
from shelfctl.domain.errors import HandlerNotFoundError, InvalidCommandError, LibraryError
from shelfctl.domain.types import CommandKind
from shelfctl.services.base import Clock, failed_result
from shelfctl.services.catalog import CatalogService
from shelfctl.services.lending import LendingService
from shelfctl.services.result import ServiceResult

if TYPE_CHECKING:
    from shelfctl.infrastructure.library import Library

logger = logging.getLogger(__name__)

Handler = Callable[[Any], ServiceResult]


class CommandDispatcher:
    """Registry of one handler per :class:`CommandKind`."""

    def __init__(self) -> None:
        self._handlers: dict[CommandKind, Handler] = {}

    @property
    def kinds(self) -> frozenset[CommandKind]:
        """Kinds that currently have a handler."""
        return frozenset(self._handlers)

    def register(self, kind: CommandKind | str, handler: Handler) -> None:
        """Bind *handler* to *kind*, replacing any earlier binding.

        Raises:
            ValueError: If *kind* is not a known command kind.
        """
        self._handlers[CommandKind(kind)] = handler

    def dispatch(self, command: pydantic.BaseModel | Mapping[str, Any]) -> ServiceResult:
        """Resolve the handler for *command* and forward the command to it.

        Fails with ``INVALID_COMMAND`` for an unknown kind or a payload whose
        shape does not match its kind, and with ``HANDLER_NOT_FOUND`` when
        the kind is valid but nothing is registered for it. Log records
        emitted while the handler runs carry a ``command`` field.
        """
        try:
            kind = self._kind_of(command)
            handler = self._handlers.get(kind)
            if handler is None:
                logger.warning("No handler registered for %s", kind)
                raise HandlerNotFoundError(f"no handler registered for {kind}", kind=str(kind))
            payload = self._validated(kind, command)
        except LibraryError as exc:
            return failed_result("dispatch", exc)

        with structlog.contextvars.bound_contextvars(command=str(kind)):
            logger.debug("Dispatching %s", kind)
            return handler(payload)

    @staticmethod
    def _kind_of(command: pydantic.BaseModel | Mapping[str, Any]) -> CommandKind:
        if isinstance(command, Mapping):
            raw = command.get("kind")
        else:
            raw = getattr(command, "kind", None)
        try:
            return CommandKind(raw)
        except ValueError:
            msg = f"unknown command kind: {raw!r}"
            raise InvalidCommandError(msg, kind=repr(raw)) from None

    @staticmethod
    def _validated(
        kind: CommandKind, command: pydantic.BaseModel | Mapping[str, Any]
    ) -> pydantic.BaseModel:
        model_cls = COMMAND_MODELS[kind]
        if isinstance(command, pydantic.BaseModel):
            if not isinstance(command, model_cls):
                msg = f"{type(command).__name__} payload dispatched as {kind}"
                raise InvalidCommandError(msg, kind=str(kind))
            return command
        try:
            return model_cls.model_validate(dict(command))
        except pydantic.ValidationError as exc:
            fields = [".".join(str(p) for p in err["loc"]) for err in exc.errors()]
            msg = f"payload does not match {kind}"
            raise InvalidCommandError(msg, kind=str(kind), fields=fields) from exc


def build_dispatcher(library: Library, *, clock: Clock | None = None) -> CommandDispatcher:
    """Dispatcher with all five command handlers bound to *library*."""
    catalog = CatalogService(library, clock=clock)
    lending = LendingService(library, clock=clock)

    def add_book(cmd: AddBook) -> ServiceResult:
        return catalog.add_book(cmd.isbn, cmd.title, cmd.author)

    def update_book(cmd: UpdateBook) -> ServiceResult:
        return catalog.update_book(cmd.isbn, title=cmd.title, author=cmd.author)

    def delete_book(cmd: DeleteBook) -> ServiceResult:
        return catalog.delete_book(cmd.isbn)

    def borrow_book(cmd: BorrowBook) -> ServiceResult:
        return lending.borrow_book(cmd.book_id, cmd.user_id)

    def return_book(cmd: ReturnBook) -> ServiceResult:
        return lending.return_book(cmd.book_id, cmd.user_id)

    dispatcher = CommandDispatcher()
    dispatcher.register(CommandKind.ADD_BOOK, add_book)
    dispatcher.register(CommandKind.UPDATE_BOOK, update_book)
    dispatcher.register(CommandKind.DELETE_BOOK, delete_book)
    dispatcher.register(CommandKind.BORROW_BOOK, borrow_book)
    dispatcher.register(CommandKind.RETURN_BOOK, return_book)
    return dispatcher
