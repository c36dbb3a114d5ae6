"""Parsing of the stored ``similar_books`` field."""

import json
import logging

logger = logging.getLogger(__name__)


def _as_book_id(item: object) -> int:
    # bool is an int subclass; a stored true/false is not a book id.
    if isinstance(item, bool):
        raise TypeError(f"boolean {item!r} is not a book id")
    if isinstance(item, float):
        if not item.is_integer():
            raise ValueError(f"{item!r} is not an integral book id")
        return int(item)
    return int(item)


def parse_similar_books(raw: str | None, book_id: int | None = None) -> list[int]:
    """
    Decode a stored similarity list such as ``"['8709549','17074050']"``.

    The field is JSON written with single quotes. Anything that does not
    decode to a list of integral values yields an empty list; the failure
    is logged and never raised. Fractional numbers and booleans count as
    malformed rather than being truncated to an id.
    """
    if not raw:
        return []
    try:
        decoded = json.loads(raw.replace("'", '"'))
        if not isinstance(decoded, list):
            raise TypeError(f"expected a list, got {type(decoded).__name__}")
        return [_as_book_id(item) for item in decoded]
    except (ValueError, TypeError, OverflowError, RecursionError) as exc:
        logger.warning("Unparseable similar_books for book %s: %s", book_id, exc)
        return []
