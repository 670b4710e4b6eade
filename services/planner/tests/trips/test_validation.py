"""
Trip date validation.

Validates:
- start strictly before now -> START_IN_PAST, whatever the end date
- end strictly before start -> END_BEFORE_START
- start-in-past wins when both problems are present
- equal start/end and start == now are accepted
- naive datetimes are read as UTC
"""

from datetime import datetime, timedelta, timezone

import pytest

from services.planner.errors import DateRangeReason, InvalidDateRange, ValidationError
from services.planner.trips.validation import as_instant, validate_trip_dates

NOW = datetime(2025, 5, 20, 12, 0, tzinfo=timezone.utc)


class TestStartInPast:
    @pytest.mark.parametrize("end_offset", [timedelta(days=-3), timedelta(0), timedelta(days=5)])
    def test_past_start_rejected_regardless_of_end(self, end_offset):
        start = NOW - timedelta(minutes=1)
        with pytest.raises(InvalidDateRange) as exc_info:
            validate_trip_dates(start, start + end_offset, now=NOW)
        assert exc_info.value.reason is DateRangeReason.START_IN_PAST

    def test_both_problems_report_start_in_past(self):
        start = NOW - timedelta(days=1)
        with pytest.raises(InvalidDateRange) as exc_info:
            validate_trip_dates(start, start - timedelta(days=1), now=NOW)
        assert exc_info.value.reason is DateRangeReason.START_IN_PAST

    def test_start_equal_to_now_accepted(self):
        validate_trip_dates(NOW, NOW + timedelta(days=1), now=NOW)


class TestEndBeforeStart:
    def test_end_before_start_rejected(self):
        start = NOW + timedelta(days=2)
        with pytest.raises(InvalidDateRange) as exc_info:
            validate_trip_dates(start, start - timedelta(seconds=1), now=NOW)
        assert exc_info.value.reason is DateRangeReason.END_BEFORE_START

    def test_same_instant_accepted(self):
        start = NOW + timedelta(days=2)
        validate_trip_dates(start, start, now=NOW)


class TestErrorShape:
    def test_is_a_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_trip_dates(NOW - timedelta(days=1), NOW, now=NOW)
        error = exc_info.value.to_error()
        assert exc_info.value.status_code == 400
        assert error["code"] == "INVALID_DATE_RANGE"
        assert error["reason"] == "START_IN_PAST"
        assert error["message"] == "Invalid trip start date."

    def test_end_message(self):
        with pytest.raises(InvalidDateRange) as exc_info:
            validate_trip_dates(NOW + timedelta(days=2), NOW + timedelta(days=1), now=NOW)
        assert exc_info.value.message == "Invalid trip end date."


class TestInstantCoercion:
    def test_naive_read_as_utc(self):
        naive = datetime(2025, 6, 1, 9, 0)
        assert as_instant(naive) == datetime(2025, 6, 1, 9, 0, tzinfo=timezone.utc)

    def test_aware_unchanged(self):
        aware = datetime(2025, 6, 1, 9, 0, tzinfo=timezone(timedelta(hours=-3)))
        assert as_instant(aware) is aware

    def test_naive_inputs_compared_against_aware_now(self):
        start = datetime(2025, 5, 21, 9, 0)
        validate_trip_dates(start, start + timedelta(hours=4), now=NOW)

    def test_default_now_is_current_time(self):
        future = datetime.now(timezone.utc) + timedelta(hours=1)
        validate_trip_dates(future, future + timedelta(days=1))
        with pytest.raises(InvalidDateRange):
            validate_trip_dates(future - timedelta(days=1), future)

    def test_returns_aware_pair(self):
        start, end = datetime(2025, 5, 21, 9, 0), datetime(2025, 5, 22, 9, 0)
        assert validate_trip_dates(start, end, now=NOW) == (
            datetime(2025, 5, 21, 9, 0, tzinfo=timezone.utc),
            datetime(2025, 5, 22, 9, 0, tzinfo=timezone.utc),
        )
