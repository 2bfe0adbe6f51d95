# utils.py
# Helpers: calendar-day normalization, next-event selection, day-count payloads

from __future__ import annotations
import math
from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable, List, Tuple
from zoneinfo import ZoneInfo
from models import CandidateRecord, SelectedEvent, DaysResponse, TodayResponse, ResultPayload

ONE_DAY = timedelta(days=1)
UTC = ZoneInfo("UTC")


def to_calendar_day(value: str | None, tz: tzinfo = UTC) -> date | None:
    """
    Parse an ISO-8601 date or date-time into the calendar day it falls on.

    Date-only strings ("2024-03-05") are that day as-is. Aware date-times are
    converted to ``tz`` before the time is dropped, so "2024-03-01T23:30:00Z"
    is March 2nd in Tokyo. Naive date-times are truncated directly.
    Returns None for anything unparsable.
    """
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    # fromisoformat only accepts a trailing Z on 3.11+
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(tz)
    return parsed.date()


def today_in(tz: tzinfo = UTC, now: datetime | None = None) -> date:
    """Calendar day in ``tz`` at ``now`` (an aware datetime, defaults to the current time)."""
    return (now or datetime.now(tz)).astimezone(tz).date()


def select_next_event(
    records: Iterable[CandidateRecord],
    today: date,
    tz: tzinfo = UTC,
    placeholder: str = "タイトルなし",
) -> SelectedEvent | None:
    """
    Pick the record with the earliest calendar day that is still on or after
    ``today``. Records without a parsable date or without a title are skipped.
    Input order only matters for ties on the same day (first one wins).
    """
    upcoming: List[Tuple[date, str]] = []
    for rec in records:
        if rec.title is None:
            continue
        day = to_calendar_day(rec.date_start, tz)
        if day is None or day < today:
            continue
        upcoming.append((day, rec.title.strip() or placeholder))

    if not upcoming:
        return None
    # stable sort keeps source order for same-day events
    upcoming.sort(key=lambda t: t[0])
    day, title = upcoming[0]
    return SelectedEvent(date=day, title=title)


def format_result(event: SelectedEvent, today: date) -> ResultPayload:
    """Same-day marker when the event is today, else whole days remaining."""
    diff_days = math.ceil((event.date - today) / ONE_DAY)
    if diff_days == 0:
        return TodayResponse(title=event.title)
    return DaysResponse(days=max(diff_days, 0), title=event.title)
