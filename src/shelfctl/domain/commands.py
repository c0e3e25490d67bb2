"""Command payloads — one frozen model per :class:`CommandKind`.

The ``kind`` field is a literal tag, so :data:`Command` is a closed tagged
union. Payload shape is checked here; business validation (empty strings,
ISBN checksum) belongs to the handlers.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from shelfctl.domain.types import CommandKind

_COMMAND_CONFIG = ConfigDict(frozen=True, extra="forbid")


class AddBook(BaseModel):
    model_config = _COMMAND_CONFIG

    kind: Literal["add_book"] = "add_book"
    isbn: str
    title: str
    author: str


class UpdateBook(BaseModel):
    """Replace title and/or author. Omitted fields stay unchanged."""

    model_config = _COMMAND_CONFIG

    kind: Literal["update_book"] = "update_book"
    isbn: str
    title: str | None = None
    author: str | None = None


class DeleteBook(BaseModel):
    model_config = _COMMAND_CONFIG

    kind: Literal["delete_book"] = "delete_book"
    isbn: str


class BorrowBook(BaseModel):
    model_config = _COMMAND_CONFIG

    kind: Literal["borrow_book"] = "borrow_book"
    book_id: str
    user_id: str


class ReturnBook(BaseModel):
    model_config = _COMMAND_CONFIG

    kind: Literal["return_book"] = "return_book"
    book_id: str
    user_id: str


Command = Annotated[
    AddBook | UpdateBook | DeleteBook | BorrowBook | ReturnBook,
    Field(discriminator="kind"),
]

COMMAND_MODELS: dict[CommandKind, type[BaseModel]] = {
    CommandKind.ADD_BOOK: AddBook,
    CommandKind.UPDATE_BOOK: UpdateBook,
    CommandKind.DELETE_BOOK: DeleteBook,
    CommandKind.BORROW_BOOK: BorrowBook,
    CommandKind.RETURN_BOOK: ReturnBook,
}
