"""
Temporal checks on a proposed trip.

Start-in-past is checked before end-before-start, so a request with both
problems reports START_IN_PAST.
"""

from __future__ import annotations

from datetime import datetime, timezone

from services.planner.errors import DateRangeReason, InvalidDateRange


def as_instant(value: datetime) -> datetime:
    """Coerce a datetime to an aware instant. Naive values are read as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def validate_trip_dates(
    starts_at: datetime,
    ends_at: datetime,
    *,
    now: datetime | None = None,
) -> tuple[datetime, datetime]:
    """
    Raise InvalidDateRange unless now <= starts_at <= ends_at.

    Returns the pair as aware instants, ready to store.
    """
    starts_at = as_instant(starts_at)
    ends_at = as_instant(ends_at)
    now = as_instant(now) if now is not None else datetime.now(timezone.utc)

    if starts_at < now:
        raise InvalidDateRange(DateRangeReason.START_IN_PAST)

    if ends_at < starts_at:
        raise InvalidDateRange(DateRangeReason.END_BEFORE_START)

    return starts_at, ends_at
