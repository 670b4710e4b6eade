"""
Itinerary bucketing -- group a trip's activities by calendar day.

One bucket per local calendar day from the trip's start date through its end
date, inclusive. Activities keep the order they arrive in (storage sorts by
occursAt ascending); nothing is re-sorted here. Activities dated outside the
trip range land in no bucket.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable
from zoneinfo import ZoneInfo

from services.planner.trips.validation import as_instant

UTC = ZoneInfo("UTC")


@dataclass(frozen=True)
class ActivityView:
    id: str
    title: str
    occurs_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "occursAt": self.occurs_at.isoformat(),
        }


@dataclass
class DayBucket:
    date: date
    activities: list[ActivityView] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "activities": [a.to_dict() for a in self.activities],
        }


def local_date(instant: datetime, tz: tzinfo = UTC) -> date:
    return as_instant(instant).astimezone(tz).date()


def day_span(starts_at: datetime, ends_at: datetime, tz: tzinfo = UTC) -> list[date]:
    """Calendar dates from start through end, inclusive."""
    first = local_date(starts_at, tz)
    last = local_date(ends_at, tz)
    return [first + timedelta(days=i) for i in range((last - first).days + 1)]


def bucket_activities_by_day(
    starts_at: datetime,
    ends_at: datetime,
    activities: Iterable[ActivityView],
    *,
    tz: tzinfo = UTC,
) -> list[DayBucket]:
    buckets = [DayBucket(date=d) for d in day_span(starts_at, ends_at, tz)]
    by_date = {b.date: b for b in buckets}

    for activity in activities:
        bucket = by_date.get(local_date(activity.occurs_at, tz))
        if bucket is not None:
            bucket.activities.append(activity)

    return buckets
