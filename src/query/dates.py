"""Relative date-period detection and resolution.

All periods are resolved against a single `now` captured by the caller, using calendar-day
boundaries in the timezone of `now`:
    - a naive `now`, or one carrying the fixed offset that `datetime.astimezone()` gives for the
      system zone, is read as local wall-clock time; each bound then gets its own local offset, so
      boundaries on the far side of a daylight-saving change stay at local midnight,
    - a day spans `[00:00:00.000, 23:59:59.999]`,
    - weeks start on Sunday,
    - rolling windows ("last 30 days") start at midnight N days ago and end at `now`.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone
from enum import StrEnum

from src.query.dictionaries import DEFAULT_VOCABULARY, Vocabulary
from src.query.schema import DateRange, EntityType

_END_OF_DAY = time(23, 59, 59, 999_000)
_DUE_SOON_DAYS = 7


class Period(StrEnum):
    """Relative time windows understood by the parser."""

    today = "today"
    yesterday = "yesterday"
    tomorrow = "tomorrow"
    this_week = "this_week"
    last_week = "last_week"
    next_week = "next_week"
    this_month = "this_month"
    last_month = "last_month"
    this_year = "this_year"
    last_30_days = "last_30_days"
    last_90_days = "last_90_days"


# Checked in this order; the first phrase found decides the period.
PERIOD_PATTERNS: tuple[tuple[re.Pattern[str], Period], ...] = (
    (re.compile(r"\btoday\b"), Period.today),
    (re.compile(r"\byesterday\b"), Period.yesterday),
    (re.compile(r"\btomorrow\b"), Period.tomorrow),
    (re.compile(r"\bthis week\b"), Period.this_week),
    (re.compile(r"\blast week\b"), Period.last_week),
    (re.compile(r"\bnext week\b"), Period.next_week),
    (re.compile(r"\bthis month\b"), Period.this_month),
    (re.compile(r"\blast month\b"), Period.last_month),
    (re.compile(r"\bthis year\b"), Period.this_year),
    (re.compile(r"\blast 30 days\b"), Period.last_30_days),
    (re.compile(r"\blast 90 days\b"), Period.last_90_days),
    (re.compile(r"\bpast month\b"), Period.last_30_days),
    (re.compile(r"\brecent\b"), Period.last_30_days),
)

_DUE_SOON_ENTITIES = frozenset({EntityType.invoices, EntityType.tasks})


def _follows_system_zone(now: datetime) -> bool:
    if now.tzinfo is None:
        return True
    return isinstance(now.tzinfo, timezone) and now.utcoffset() == now.astimezone().utcoffset()


def _at(day: date, clock_time: time, now: datetime) -> datetime:
    if _follows_system_zone(now):
        return datetime.combine(day, clock_time).astimezone()
    return datetime.combine(day, clock_time, tzinfo=now.tzinfo)


def _start_of(day: date, now: datetime) -> datetime:
    return _at(day, time.min, now)


def _end_of(day: date, now: datetime) -> datetime:
    return _at(day, _END_OF_DAY, now)


def _aware(now: datetime) -> datetime:
    return now.astimezone() if now.tzinfo is None else now


def _first_of_next_month(day: date) -> date:
    if day.month == 12:
        return date(day.year + 1, 1, 1)
    return date(day.year, day.month + 1, 1)


def resolve_period(period: Period, now: datetime) -> tuple[datetime, datetime]:
    """Resolve a period into an inclusive `(start, end)` pair relative to `now`."""

    today = now.date()

    if period == Period.today:
        return _start_of(today, now), _end_of(today, now)

    if period == Period.yesterday:
        day = today - timedelta(days=1)
        return _start_of(day, now), _end_of(day, now)

    if period == Period.tomorrow:
        day = today + timedelta(days=1)
        return _start_of(day, now), _end_of(day, now)

    if period in {Period.this_week, Period.last_week, Period.next_week}:
        # `isoweekday()` is Mon=1..Sun=7; `% 7` turns it into days since Sunday.
        sunday = today - timedelta(days=today.isoweekday() % 7)
        if period == Period.last_week:
            sunday -= timedelta(days=7)
        elif period == Period.next_week:
            sunday += timedelta(days=7)
        return _start_of(sunday, now), _end_of(sunday + timedelta(days=6), now)

    if period == Period.this_month:
        first = today.replace(day=1)
        last = _first_of_next_month(first) - timedelta(days=1)
        return _start_of(first, now), _end_of(last, now)

    if period == Period.last_month:
        last = today.replace(day=1) - timedelta(days=1)
        return _start_of(last.replace(day=1), now), _end_of(last, now)

    if period == Period.this_year:
        return _start_of(date(today.year, 1, 1), now), _end_of(date(today.year, 12, 31), now)

    if period == Period.last_30_days:
        return _start_of(today - timedelta(days=30), now), _aware(now)

    if period == Period.last_90_days:
        return _start_of(today - timedelta(days=90), now), _aware(now)

    raise ValueError(f"unsupported period: {period}")


def detect_period(text: str) -> Period | None:
    """Return the first relative period phrase found in lowercased text."""

    for pattern, period in PERIOD_PATTERNS:
        if pattern.search(text):
            return period
    return None


def detect_date_range(
        text: str,
        entity: EntityType,
        *,
        now: datetime,
        vocabulary: Vocabulary = DEFAULT_VOCABULARY,
) -> DateRange | None:
    """Detect a relative date window and bind it to the entity's default date field.

    "due soon" on invoices/tasks overrides any period phrase with a forward-looking 7-day window on
    `dueDate` starting at `now`.
    """

    lowered = text.lower()
    date_range = None

    period = detect_period(lowered)
    if period is not None:
        start, end = resolve_period(period, now)
        date_range = DateRange(field=vocabulary.date_field(entity), start=start, end=end)

    if entity in _DUE_SOON_ENTITIES and "due soon" in lowered:
        date_range = DateRange(
            field="dueDate",
            start=_aware(now),
            end=_aware(now) + timedelta(days=_DUE_SOON_DAYS),
        )

    return date_range
