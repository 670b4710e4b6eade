"""Outbound email: date formatting, message templates, Resend transport."""

from services.planner.notifications.formatting import DateFormatter, LongDateFormatter
from services.planner.notifications.mailer import Mailer
from services.planner.notifications.messages import (
    EmailMessage,
    build_trip_confirmation,
    build_trip_invitation,
)

__all__ = [
    "DateFormatter",
    "LongDateFormatter",
    "Mailer",
    "EmailMessage",
    "build_trip_confirmation",
    "build_trip_invitation",
]
