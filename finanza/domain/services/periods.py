"""Helpers for YYYY-MM month keys."""

import re
from datetime import date

_MONTH_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")
_DATE_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])-(0[1-9]|[12]\d|3[01])$")


def is_valid_month(value: str) -> bool:
    """Return True for zero-padded YYYY-MM strings."""
    return bool(_MONTH_PATTERN.match(value or ""))


def is_valid_date(value: str) -> bool:
    """Return True for zero-padded YYYY-MM-DD strings."""
    return bool(_DATE_PATTERN.match(value or ""))


def month_key(day: date) -> str:
    """Return the YYYY-MM key of a date."""
    return f"{day.year:04d}-{day.month:02d}"


def current_month(today: date | None = None) -> str:
    """Return the month key for today."""
    return month_key(today or date.today())


def shift_month(month: str, offset: int) -> str:
    """Move a month key forward or backward.

    Args:
        month: Month formatted as YYYY-MM.
        offset: Number of months to move, negative to go back.

    Returns:
        str: Shifted month key.

    Raises:
        ValueError: If ``month`` is not a valid month key.
    """
    if not is_valid_month(month):
        raise ValueError(f"Invalid month: {month}")
    year, month_number = (int(part) for part in month.split("-"))
    index = year * 12 + (month_number - 1) + offset
    return f"{index // 12:04d}-{index % 12 + 1:02d}"


__all__ = [
    "is_valid_month",
    "is_valid_date",
    "month_key",
    "current_month",
    "shift_month",
]
