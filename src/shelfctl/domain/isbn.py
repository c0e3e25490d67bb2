"""ISBN normalization and checksum validation.

ISBN is the identity of a book. Two forms are accepted:

- ISBN-10: nine digits plus a check character (digit or ``X`` = 10),
  weighted ``10..1``; the weighted sum must be divisible by 11.
- ISBN-13: thirteen digits weighted ``1, 3, 1, 3, ...``; the weighted sum
  must be divisible by 10.

Hyphens and spaces are separators and are stripped before validation.
"""

from __future__ import annotations

from shelfctl.domain.errors import ValidationError

ISBN10_LENGTH = 10
ISBN13_LENGTH = 13

_SEPARATORS = str.maketrans("", "", "- ")
_DIGITS = frozenset("0123456789")


def normalize_isbn(raw: str) -> str:
    """Strip hyphens and spaces. Upper-cases a trailing ISBN-10 ``x``.

    Does not validate; use :func:`validate_isbn` for that.

    Examples:
        >>> normalize_isbn("978-3-16-148410-0")
        '9783161484100'
        >>> normalize_isbn("0 8044 2957 x")
        '080442957X'
    """
    stripped = raw.translate(_SEPARATORS)
    if len(stripped) == ISBN10_LENGTH and stripped.endswith("x"):
        stripped = stripped[:-1] + "X"
    return stripped


def validate_isbn(raw: str) -> str:
    """Return the normalized ISBN, or raise :class:`ValidationError`."""
    isbn = normalize_isbn(raw)
    if len(isbn) == ISBN10_LENGTH:
        _check_isbn10(isbn)
    elif len(isbn) == ISBN13_LENGTH:
        _check_isbn13(isbn)
    else:
        raise ValidationError("ISBN must be 10 or 13 characters", isbn=raw)
    return isbn


def is_valid_isbn(raw: str) -> bool:
    """Boolean form of :func:`validate_isbn`."""
    try:
        validate_isbn(raw)
    except ValidationError:
        return False
    return True


def _check_isbn10(isbn: str) -> None:
    body, check = isbn[:9], isbn[9]
    if not _all_digits(body):
        raise ValidationError("ISBN-10 must start with nine digits", isbn=isbn)

    if check == "X":
        check_value = 10
    elif check in _DIGITS:
        check_value = int(check)
    else:
        raise ValidationError("ISBN-10 check character must be a digit or X", isbn=isbn)

    total = sum((10 - i) * int(ch) for i, ch in enumerate(body)) + check_value
    if total % 11 != 0:
        raise ValidationError("invalid ISBN-10 checksum", isbn=isbn)


def _check_isbn13(isbn: str) -> None:
    if not _all_digits(isbn):
        raise ValidationError("ISBN-13 must contain only digits", isbn=isbn)

    total = sum(int(ch) * (3 if i % 2 else 1) for i, ch in enumerate(isbn))
    if total % 10 != 0:
        raise ValidationError("invalid ISBN-13 checksum", isbn=isbn)


def _all_digits(text: str) -> bool:
    # str.isdigit() accepts non-ASCII digits such as "٣"
    return all(ch in _DIGITS for ch in text)
