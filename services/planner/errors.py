"""
Error taxonomy for the planner service.

Every error carries a client-facing code and the HTTP status the exception
handlers in main.py translate it to:

  ValidationError   400  bad input caught before any persistence
  NotFoundError     404  reference to a trip/participant that does not exist
  PersistenceError  500  storage failure, never retried
  NotificationError 502  mail transport failure; a committed trip stays committed
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"
    NOT_FOUND = "NOT_FOUND"
    TRIP_NOT_FOUND = "TRIP_NOT_FOUND"
    PARTICIPANT_NOT_FOUND = "PARTICIPANT_NOT_FOUND"
    PERSISTENCE_ERROR = "PERSISTENCE_ERROR"
    NOTIFICATION_ERROR = "NOTIFICATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class PlannerError(Exception):
    """Base exception for all planner errors."""

    status_code: int = 500
    default_code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, code: ErrorCode | None = None):
        self.message = message
        self.code = code or self.default_code
        super().__init__(message)

    def to_error(self) -> dict:
        return {"code": self.code.value, "message": self.message}


class ValidationError(PlannerError):
    status_code = 400
    default_code = ErrorCode.VALIDATION_ERROR


class DateRangeReason(str, Enum):
    START_IN_PAST = "START_IN_PAST"
    END_BEFORE_START = "END_BEFORE_START"


_DATE_RANGE_MESSAGES = {
    DateRangeReason.START_IN_PAST: "Invalid trip start date.",
    DateRangeReason.END_BEFORE_START: "Invalid trip end date.",
}


class InvalidDateRange(ValidationError):
    """Trip start is in the past, or trip end precedes trip start."""

    def __init__(self, reason: DateRangeReason):
        self.reason = reason
        super().__init__(_DATE_RANGE_MESSAGES[reason], ErrorCode.INVALID_DATE_RANGE)

    def to_error(self) -> dict:
        return {**super().to_error(), "reason": self.reason.value}


class NotFoundError(PlannerError):
    status_code = 404
    default_code = ErrorCode.NOT_FOUND


class TripNotFound(NotFoundError):
    def __init__(self, trip_id: str):
        self.trip_id = trip_id
        super().__init__("Trip not found.", ErrorCode.TRIP_NOT_FOUND)


class ParticipantNotFound(NotFoundError):
    def __init__(self, participant_id: str):
        self.participant_id = participant_id
        super().__init__("Participant not found.", ErrorCode.PARTICIPANT_NOT_FOUND)


class PersistenceError(PlannerError):
    status_code = 500
    default_code = ErrorCode.PERSISTENCE_ERROR


class NotificationError(PlannerError):
    status_code = 502
    default_code = ErrorCode.NOTIFICATION_ERROR
