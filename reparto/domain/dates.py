"""Calendar-day and timestamp helpers."""
from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Callable

DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def today(clock: Clock = utc_now) -> str:
    """Server-local calendar day for the clock's current instant."""
    return clock().astimezone().date().isoformat()


def resolve_visit_date(value: Any, clock: Clock = utc_now) -> str:
    """
    Keep value when it looks like YYYY-MM-DD, otherwise fall back to today.

    Only the shape is checked: "2024-13-45" is kept as given.
    """
    if isinstance(value, str) and DATE_PATTERN.fullmatch(value):
        return value
    return today(clock)


def timestamp(clock: Clock = utc_now) -> str:
    return clock().isoformat(timespec="microseconds")
