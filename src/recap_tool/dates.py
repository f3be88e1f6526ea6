"""Utilidades de fechas: claves de día, hora local y alineación semanal."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from datetime import date, datetime, timedelta, tzinfo

import pandas as pd
from dateutil import parser as date_parser

logger = logging.getLogger(__name__)

_DAY_KEY_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def format_day_key(day: date) -> str:
    """Return the canonical ``YYYY-MM-DD`` key of a day."""
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def parse_day_key(value: object) -> date | None:
    """Parse a ``YYYY-MM-DD`` key into a date.

    Dates pass through and datetimes are truncated to their date. Anything
    that is not a real calendar day (``2024-02-30``, ``24-1-1``, None) gives
    None.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    match = _DAY_KEY_RE.match(value.strip())
    if not match:
        return None
    try:
        return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
    except ValueError:
        return None


def to_local_day(ts: object, tz: tzinfo | None = None) -> date | None:
    """Resolve a timestamp to the local calendar day it belongs to.

    Args:
        ts: datetime, pandas Timestamp, date or ISO-8601 string.
        tz: Zone for aware timestamps. Naive timestamps are already local
            wall-clock time and keep their date.

    Returns:
        Local date, or None when the value cannot be parsed.
    """
    if ts is None or ts is pd.NaT:
        return None
    if isinstance(ts, pd.Timestamp):
        ts = ts.to_pydatetime()
    if isinstance(ts, str):
        text = ts.strip()
        if not text:
            return None
        try:
            ts = date_parser.isoparse(text)
        except (ValueError, OverflowError):
            return None
    if isinstance(ts, datetime):
        if ts.tzinfo is not None and tz is not None:
            ts = ts.astimezone(tz)
        return ts.date()
    if isinstance(ts, date):
        return ts
    return None


def active_day_keys(timestamps: Iterable[object], tz: tzinfo | None = None) -> set[str]:
    """Collapse activity start times into the set of distinct day keys."""
    keys: set[str] = set()
    skipped = 0
    for ts in timestamps:
        day = to_local_day(ts, tz)
        if day is None:
            skipped += 1
            continue
        keys.add(format_day_key(day))
    if skipped:
        logger.warning("Skipped %d unparseable activity timestamp(s)", skipped)
    return keys


def parse_days(values: Iterable[object]) -> list[date]:
    """Parse day keys or dates, dropping invalid ones, sorted and unique."""
    days: set[date] = set()
    invalid: list[object] = []
    for value in values:
        day = parse_day_key(value)
        if day is None:
            invalid.append(value)
        else:
            days.add(day)
    if invalid:
        logger.warning("Skipped %d invalid day key(s): %r", len(invalid), invalid[:5])
    return sorted(days)


def monday_on_or_before(day: date) -> date:
    """Return the Monday of the week containing ``day`` (Sunday -> 6 days back)."""
    return day - timedelta(days=day.weekday())


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every day from start to end, both included."""
    cursor = start
    while cursor <= end:
        yield cursor
        cursor += timedelta(days=1)
