# app/core/params.py
"""
Parse-and-clamp helpers for loosely typed input.

Query strings and JSON bodies arrive with numbers as strings, blanks,
negatives and garbage. Each helper turns one such value into a well-defined
sanitized value or raises ValidationError; nothing downstream relies on
implicit coercion.
"""
import math
import uuid
from typing import Iterable

from app.core.errors import ValidationError

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 12
MAX_PAGE_SIZE = 100
# Keeps (page - 1) * MAX_PAGE_SIZE well inside a signed 64-bit OFFSET.
MAX_PAGE = 1_000_000
MAX_QUANTITY = 10_000


def _to_int(raw: str | int | None) -> int | None:
    """Lenient integer parse: returns None for anything not integral."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    text = str(raw).strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return int(value)


def parse_page(raw: str | int | None) -> int:
    """
    1-indexed page number. Non-numeric or absent => 1; values < 1 clamp to 1
    and values above MAX_PAGE clamp to MAX_PAGE.
    """
    page = _to_int(raw)
    if page is None or page < 1:
        return DEFAULT_PAGE
    return min(page, MAX_PAGE)


def parse_limit(raw: str | int | None) -> int:
    """Page size. Non-numeric, absent or non-positive => 12; capped at 100."""
    limit = _to_int(raw)
    if limit is None or limit < 1:
        return DEFAULT_PAGE_SIZE
    return min(limit, MAX_PAGE_SIZE)


def parse_price(raw: str | float | None, field: str) -> float | None:
    """
    Optional price bound.

    Blank or absent => None (unbounded). Anything that is not a finite
    number raises ValidationError naming the offending field.
    """
    if raw is None:
        return None
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        value = float(raw)
    else:
        text = str(raw).strip()
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            raise ValidationError(f"{field} must be a number")
    if not math.isfinite(value):
        raise ValidationError(f"{field} must be a number")
    return value


def parse_categories(*raw_values: str | Iterable[str] | None) -> list[str]:
    """
    Flatten category inputs into one de-duplicated list.

    Accepts single strings, comma-separated strings and lists of either
    (repeated query parameters). Blank entries are dropped; first-seen
    order is kept.
    """
    categories: list[str] = []
    for raw in raw_values:
        if raw is None:
            continue
        values = [raw] if isinstance(raw, str) else list(raw)
        for value in values:
            for part in str(value).split(","):
                part = part.strip()
                if part and part not in categories:
                    categories.append(part)
    return categories


def coerce_quantity(raw: int | None) -> int:
    """Caller-supplied quantity: absent => 1, clamped into [1, MAX_QUANTITY]."""
    if raw is None:
        return 1
    return min(max(1, raw), MAX_QUANTITY)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0


def parse_item_id(raw: str | uuid.UUID | None) -> uuid.UUID | None:
    """Return the UUID for `raw`, or None when it is not a well-formed id."""
    if raw is None or isinstance(raw, uuid.UUID):
        return raw
    try:
        return uuid.UUID(str(raw).strip())
    except ValueError:
        return None
