"""Long-form date rendering for email bodies ("January 5, 2025")."""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Protocol
from zoneinfo import ZoneInfo

from services.planner.trips.validation import as_instant


class DateFormatter(Protocol):
    def __call__(self, instant: datetime) -> str: ...


class LongDateFormatter:
    """Month name, day, year in the display timezone. Month names follow LC_TIME."""

    def __init__(self, tz: tzinfo | str = "UTC"):
        self.tz = ZoneInfo(tz) if isinstance(tz, str) else tz

    def __call__(self, instant: datetime) -> str:
        local = as_instant(instant).astimezone(self.tz)
        return f"{local:%B} {local.day}, {local.year}"
